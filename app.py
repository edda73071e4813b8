"""Streamlit entry point for the Cost Analyser dashboard."""

from __future__ import annotations

import pandas as pd
import streamlit as st
from cost_analyser import aggregate, config, errors, highlights, loader, utils, viz
from cost_analyser.logging_setup import configure_logging

TABS = ["Overview", "By Service Type", "Timeline", "Cost Breakdown"]


@st.cache_data(show_spinner=False)
def _aggregate(records: list[dict]) -> aggregate.CostPayload:
    return aggregate.aggregate(records)


def _reset() -> None:
    st.session_state.pop("csv_upload", None)
    st.session_state.pop("records", None)
    st.session_state.pop("file_name", None)
    st.session_state.pop("upload_error", None)


def _handle_upload() -> None:
    uploaded = st.session_state.get("csv_upload")
    if uploaded is None:
        return
    try:
        records = loader.load_records(uploaded, filename=uploaded.name)
    except errors.CostAnalyserError as exc:
        st.session_state["upload_error"] = str(exc)
        return
    st.session_state["records"] = records
    st.session_state["file_name"] = uploaded.name
    st.session_state.pop("upload_error", None)


def _render_upload() -> None:
    st.markdown("## Upload your cost data")
    st.caption("Drag and drop your CSV file or click to browse")
    st.file_uploader(
        "CSV file",
        type=["csv"],
        key="csv_upload",
        on_change=_handle_upload,
        help=f"Up to {config.MAX_UPLOAD_MB:.0f}MB. Needs id and amount columns; type and date are optional.",
    )
    error = st.session_state.get("upload_error")
    if error:
        st.error(error)


def _render_summary_cards(summary: aggregate.Summary) -> None:
    cols = st.columns(3)
    cols[0].metric("Total spending", utils.format_currency(summary["total_cost"]))
    cols[1].metric("Total transactions", f"{summary['record_count']:,}")
    cols[2].metric("Average per transaction", f"{config.CURRENCY}{summary['average_cost']:,.6f}")


def _render_overview(payload: aggregate.CostPayload) -> None:
    st.markdown("### Cost overview")
    st.plotly_chart(
        viz.plot_category_bar(highlights.top_categories(payload, 8), title="Top service types"),
        use_container_width=True,
        config={"displayModeBar": False},
    )
    cards = highlights.top_categories(payload, 6)
    for start in range(0, len(cards), 3):
        cols = st.columns(3)
        for col, entry in zip(cols, cards[start : start + 3]):
            col.metric(entry["display_label"], utils.format_currency(entry["total_cost"]), help=entry["category"])
            col.caption(f"{entry['count']:,} transactions")


def _render_by_type(payload: aggregate.CostPayload) -> None:
    st.markdown("### Costs by service type")
    st.plotly_chart(
        viz.plot_category_bar(payload["category_totals"], color=viz.COLORS[1]),
        use_container_width=True,
        config={"displayModeBar": False},
    )
    rows = highlights.category_breakdown(payload)
    if not rows:
        st.caption("No category costs available.")
        return
    table = pd.DataFrame(rows)[["category", "total_cost", "count", "average_cost", "share_pct"]]
    table["total_cost"] = table["total_cost"].apply(utils.format_currency)
    table["average_cost"] = table["average_cost"].apply(lambda value: f"{config.CURRENCY}{value:,.6f}")
    table["share_pct"] = table["share_pct"].apply(lambda value: f"{value:.1f}%")
    st.dataframe(
        table,
        hide_index=True,
        use_container_width=True,
        column_config={
            "category": "Service type",
            "total_cost": st.column_config.TextColumn("Total cost"),
            "count": "Transactions",
            "average_cost": st.column_config.TextColumn("Avg cost"),
            "share_pct": st.column_config.TextColumn("% of total"),
        },
    )


def _render_timeline(payload: aggregate.CostPayload) -> None:
    st.markdown("### Daily cost timeline")
    st.plotly_chart(
        viz.plot_daily_timeline(payload["daily_totals"]),
        use_container_width=True,
        config={"displayModeBar": False},
    )
    st.markdown("### Recent daily summary")
    days = highlights.recent_days(payload, 8)
    if not days:
        st.caption("No dated transactions in this file.")
        return
    for start in range(0, len(days), 4):
        cols = st.columns(4)
        for col, day in zip(cols, days[start : start + 4]):
            col.metric(day["display_date"], utils.format_currency(day["total_cost"]))
            col.caption(f"{day['count']} transactions")


def _render_breakdown(payload: aggregate.CostPayload) -> None:
    st.markdown("### Cost distribution")
    chart_col, callout_col = st.columns([1, 1], gap="large")
    with chart_col:
        st.plotly_chart(
            viz.plot_category_pie(highlights.top_categories(payload, 8)),
            use_container_width=True,
            config={"displayModeBar": False},
        )
    with callout_col:
        found = highlights.derive_highlights(payload)
        largest = found["largest_category"]
        if largest:
            st.metric("Largest cost category", utils.format_currency(largest["total_cost"]))
            st.caption(f"{largest['category']}: {found['largest_share_pct']:.1f}% of total costs")
        frequent = found["most_frequent_category"]
        if frequent:
            st.metric("Most frequent service", f"{frequent['count']:,} transactions")
            st.caption(frequent["category"])
        peak = found["peak_day"]
        if peak:
            st.metric("Peak day", utils.format_currency(peak["total_cost"]))
            st.caption(peak["display_date"])


def main() -> None:
    """Render the Cost Analyser Streamlit application."""

    configure_logging()
    st.set_page_config(
        page_title="Cost Analyser",
        page_icon="💸",
        layout="wide",
    )

    st.markdown(
        """
        <style>
        div[data-testid="stMetric"] {
            background: #ffffff;
            border-radius: 18px;
            border: 1px solid rgba(226, 232, 240, 0.9);
            padding: 1.15rem 1.25rem;
            box-shadow: 0 30px 60px -46px rgba(15, 23, 42, 0.6);
        }

        .stTabs [role="tab"] {
            background: rgba(148, 163, 184, 0.14);
            border-radius: 999px;
            padding: 0.45rem 1.1rem;
            border: none;
            font-weight: 600;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )

    header_col, action_col = st.columns([4, 1])
    header_col.title("Cost Dashboard")
    header_col.caption("Upload your cost spreadsheet to visualize and analyze your data")

    records = st.session_state.get("records")
    if not records:
        _render_upload()
        return

    action_col.button("Upload new file", on_click=_reset, type="primary")
    header_col.caption(
        f"File: {st.session_state.get('file_name', 'upload')} · {len(records):,} records loaded"
    )

    payload = _aggregate(records)
    _render_summary_cards(payload["summary"])

    overview_tab, by_type_tab, timeline_tab, breakdown_tab = st.tabs(TABS)
    with overview_tab:
        _render_overview(payload)
    with by_type_tab:
        _render_by_type(payload)
    with timeline_tab:
        _render_timeline(payload)
    with breakdown_tab:
        _render_breakdown(payload)


if __name__ == "__main__":
    main()
