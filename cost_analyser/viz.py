"""Visualization utilities for Cost Analyser."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

COLORS = [
    "#8884d8",
    "#82ca9d",
    "#ffc658",
    "#ff7300",
    "#0088fe",
    "#00c49f",
    "#ffbb28",
    "#ff8042",
    "#8dd1e1",
    "#d084d0",
]


def _empty_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        showarrow=False,
        x=0.5,
        y=0.5,
        xref="paper",
        yref="paper",
        font=dict(size=14, color="#6c757d"),
    )
    fig.update_layout(margin=dict(l=0, r=0, t=20, b=20))
    return fig


def plot_category_bar(
    category_totals: Iterable[Mapping[str, object]],
    *,
    title: str = "Costs by service type",
    color: str = COLORS[0],
) -> go.Figure:
    """Return a bar chart of total cost per category, labelled with the short name."""

    data = list(category_totals)
    if not data:
        return _empty_figure("No category costs to display.")

    df = pd.DataFrame(data)
    fig = px.bar(
        df,
        x="display_label",
        y="total_cost",
        hover_data={"category": True, "count": True, "display_label": False},
        labels={"display_label": "Service type", "total_cost": "Total cost", "count": "Transactions"},
        title=title,
    )
    fig.update_traces(marker_color=color)
    fig.update_layout(margin=dict(l=0, r=0, t=40, b=100))
    fig.update_xaxes(tickangle=-45)
    return fig


def plot_daily_timeline(daily_totals: Iterable[Mapping[str, object]]) -> go.Figure:
    data = list(daily_totals)
    if not data:
        return _empty_figure("No dated transactions to chart.")

    df = pd.DataFrame(data)
    df["day"] = pd.to_datetime(df["date_key"])

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            name="Daily cost",
            x=df["day"],
            y=df["total_cost"],
            customdata=df[["display_date", "count"]],
            hovertemplate="%{customdata[0]}<br>%{y:,.2f}<br>%{customdata[1]} transactions<extra></extra>",
            mode="lines+markers",
            line=dict(color=COLORS[0], width=2),
            marker=dict(size=8),
        )
    )
    fig.update_layout(
        title="Daily cost timeline",
        xaxis_title="Date",
        yaxis_title="Total cost",
        margin=dict(l=0, r=0, t=45, b=0),
    )
    return fig


def plot_category_pie(category_totals: Iterable[Mapping[str, object]]) -> go.Figure:
    data = list(category_totals)
    if not data:
        return _empty_figure("No category costs to display.")

    df = pd.DataFrame(data)
    fig = px.pie(
        df,
        names="display_label",
        values="total_cost",
        color_discrete_sequence=COLORS,
        hover_data=["category"],
        title="Top services distribution",
    )
    fig.update_traces(textinfo="label+percent")
    fig.update_layout(margin=dict(l=0, r=0, t=40, b=0), showlegend=False)
    return fig
