"""
Performance Analyzer Page
Load attendance and sales exports, reconcile them by salesperson and show
conversion, revenue and hourly performance with AI insights.
"""
import logging

import streamlit as st

from config import (
    SESSION_PERFORMANCE,
    SESSION_SEEN_UPLOADS,
    SESSION_CLEAR_CONFIRMATION,
    SLOT_ATTENDANCE,
    SLOT_SALES,
    SLOT_LABELS,
)
from errors import AnalyzerError, DuplicateFileError, WrongSlotError
from extractors.summary_extractor import summarize_performance
from models import DateFilter
from utils.api_client import get_api_keys, create_groq_client_with_fallback
from utils.consolidator import (
    ALL_SALESPEOPLE,
    team_overview,
    rank_by_attendances,
    hourly_dataframe,
    records_to_dataframe,
)
from utils.excel_export import convert_df_to_excel
from utils.session_store import PerformanceSession, decode_upload

logger = logging.getLogger(__name__)

UPLOADER_VERSION = "uploader_version"


def get_session() -> PerformanceSession:
    if SESSION_PERFORMANCE not in st.session_state:
        st.session_state[SESSION_PERFORMANCE] = PerformanceSession()
    if SESSION_SEEN_UPLOADS not in st.session_state:
        st.session_state[SESSION_SEEN_UPLOADS] = set()
    if SESSION_CLEAR_CONFIRMATION not in st.session_state:
        st.session_state[SESSION_CLEAR_CONFIRMATION] = False
    if UPLOADER_VERSION not in st.session_state:
        st.session_state[UPLOADER_VERSION] = 0
    return st.session_state[SESSION_PERFORMANCE]


def upload_id(uploaded_file):
    return getattr(uploaded_file, "file_id", None) or f"{uploaded_file.name}:{uploaded_file.size}"


def ingest_uploads(session, slot, uploaded_files):
    """Parse uploads not seen before. Each file fails on its own."""
    seen = st.session_state[SESSION_SEEN_UPLOADS]

    for uploaded in uploaded_files or []:
        file_key = (slot, upload_id(uploaded))
        if file_key in seen:
            continue
        seen.add(file_key)

        try:
            loaded = session.add_file(slot, uploaded.name, decode_upload(uploaded.getvalue()))
        except DuplicateFileError as e:
            st.warning(f"⚠️ {e}")
            continue
        except WrongSlotError as e:
            st.error(f"❌ Wrong upload area for {uploaded.name}: {e}")
            continue
        except AnalyzerError as e:
            st.error(f"❌ Upload failed for {uploaded.name}: {e}")
            continue

        st.success(f"✅ {uploaded.name}: found data for {len(loaded.parsed)} salespeople")


def render_upload_area(session):
    version = st.session_state[UPLOADER_VERSION]
    col1, col2 = st.columns(2)

    with col1:
        st.markdown(f"### 📁 {SLOT_LABELS[SLOT_ATTENDANCE]}")
        attendance_uploads = st.file_uploader(
            "Upload attendance CSV files",
            type=["csv"],
            accept_multiple_files=True,
            key=f"attendance_uploader_{version}",
            help="';'-separated export: period line, hour headers, 'Vendedor;At.;Pot.' headers"
        )
        ingest_uploads(session, SLOT_ATTENDANCE, attendance_uploads)
        for f in session.attendance_files:
            st.markdown(f"- 📄 **{f.name}** ({f.date_range.start:%d/%m/%Y} - {f.date_range.end:%d/%m/%Y})")

    with col2:
        st.markdown(f"### 📁 {SLOT_LABELS[SLOT_SALES]}")
        sales_uploads = st.file_uploader(
            "Upload sales CSV files",
            type=["csv"],
            accept_multiple_files=True,
            key=f"sales_uploader_{version}",
            help="';'-separated PDV export with salesperson, sales, items per sale, revenue and average ticket"
        )
        ingest_uploads(session, SLOT_SALES, sales_uploads)
        for f in session.sales_files:
            st.markdown(f"- 📄 **{f.name}**")


def render_filters(session):
    """Date and salesperson filters. Returns the selected salesperson."""
    col1, col2 = st.columns(2)

    with col1:
        loaded_range = session.loaded_range()
        use_filter = st.checkbox("📅 Filter by period", value=session.date_filter is not None,
                                 disabled=loaded_range is None)
        if use_filter and loaded_range is not None:
            current = session.date_filter.as_range() if session.date_filter else loaded_range
            picked = st.date_input(
                "Period",
                value=(current.start.date(), current.end.date()),
                format="DD/MM/YYYY"
            )
            if isinstance(picked, (list, tuple)):
                picked = list(picked)
            else:
                picked = [picked]
            if picked:
                session.set_date_filter(DateFilter(picked[0], picked[1] if len(picked) > 1 else None))
        else:
            session.set_date_filter(None)

    with col2:
        options = [ALL_SALESPEOPLE] + session.salespeople()
        salesperson = st.selectbox(
            "👤 Filter by salesperson",
            options,
            format_func=lambda name: "All salespeople" if name == ALL_SALESPEOPLE else name
        )

    return salesperson


def render_overview(session, records):
    overview = team_overview(records)

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Total Attendances", overview.total_attendances)
    with col2:
        st.metric("Total Potentials", overview.total_potentials)
    with col3:
        st.metric("Opportunity Ratio", f"{overview.opportunity_ratio:.2f}")
    with col4:
        st.metric("Period", session.date_range_label() or "-")

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Sales", overview.total_sales)
    with col2:
        st.metric("Revenue", f"R$ {overview.total_revenue:,.2f}")
    with col3:
        st.metric("Conversion", f"{overview.conversion_rate:.1%}")
    with col4:
        st.metric("Average Ticket", f"R$ {overview.average_ticket:,.2f}")


def generate_summary(session):
    """Request AI insights for the current inputs; failures leave the numbers untouched."""
    api_keys = get_api_keys()
    if not api_keys:
        st.info("💡 Configure a Groq API key in Settings to get AI insights.")
        return

    signature = session.signature()
    try:
        with st.spinner("🤖 Analyzing your data..."):
            summary = create_groq_client_with_fallback(
                api_keys,
                summarize_performance,
                session.date_range_label(),
                attendance_csv=session.attendance_csv(),
                sales_csv=session.sales_csv() or None,
            )
    except Exception as e:
        logger.warning("AI insights failed: %s", e)
        session.mark_summary_failed(signature)
        st.warning(f"⚠️ AI analysis failed: {e}")
        return

    session.store_summary(summary, signature)


def render_insights(session):
    st.markdown("### ✨ AI-Powered Insights")

    if session.needs_summary:
        generate_summary(session)

    if st.button("🔄 Regenerate Insights", disabled=not session.active_attendance_files()):
        session.clear_summary()
        generate_summary(session)

    if not session.summary_is_current:
        return

    summary = session.summary
    st.write(summary.summary)

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("#### 📈 Highlights")
        for item in summary.highlights:
            st.markdown(f"- {item}")
    with col2:
        st.markdown("#### ✅ Recommendations")
        for item in summary.recommendations:
            st.markdown(f"- {item}")

    if summary.individual_highlights:
        with st.expander("👥 Individual Highlights"):
            for item in summary.individual_highlights:
                st.markdown(f"- **{item.salesperson}**: {item.highlight}")


def render_clear_button(session):
    if st.button("🗑️ Clear All", use_container_width=True, type="secondary"):
        st.session_state[SESSION_CLEAR_CONFIRMATION] = True

    if st.session_state[SESSION_CLEAR_CONFIRMATION]:
        st.warning("⚠️ **Are you sure you want to clear all loaded files?** This action cannot be undone.")
        col1, col2, col3 = st.columns([1, 1, 2])
        with col1:
            if st.button("✅ Yes, Clear", type="primary", use_container_width=True):
                session.reset()
                st.session_state[SESSION_SEEN_UPLOADS] = set()
                st.session_state[UPLOADER_VERSION] += 1
                st.session_state[SESSION_CLEAR_CONFIRMATION] = False
                st.rerun()
        with col2:
            if st.button("❌ Cancel", use_container_width=True):
                st.session_state[SESSION_CLEAR_CONFIRMATION] = False
                st.rerun()


def performance_analyzer_page():
    """Performance Analyzer: reconcile attendance and sales exports by salesperson."""
    st.markdown('<div class="main-header">📈 Sales Insights</div>', unsafe_allow_html=True)
    st.markdown('<div class="sub-header">Conversion, revenue and hourly performance per salesperson</div>', unsafe_allow_html=True)

    st.markdown("---")
    session = get_session()
    render_upload_area(session)

    if session.is_empty:
        st.info("📋 Upload at least one attendance or sales CSV to start.")
        return

    st.markdown("---")
    col1, col2 = st.columns([3, 1])
    with col1:
        st.info(f"📌 Attendance files: {len(session.attendance_files)} | Sales files: {len(session.sales_files)} | Data persists during session")
    with col2:
        render_clear_button(session)

    salesperson = render_filters(session)
    records = rank_by_attendances(session.consolidated(salesperson))

    if not records:
        st.warning("⚠️ No data for this selection.")
        return

    st.markdown("---")
    render_overview(session, records)

    st.markdown("---")
    render_insights(session)

    st.markdown("---")
    hourly_df = hourly_dataframe(records)
    col1, col2 = st.columns([4, 3])
    with col1:
        st.markdown("### ⏰ Hourly Performance")
        if hourly_df.empty:
            st.caption("No hourly attendance data for this selection.")
        else:
            st.bar_chart(hourly_df)
    with col2:
        st.markdown("### 🏆 Salespeople Ranking")
        table = records_to_dataframe(records)
        st.dataframe(table, use_container_width=True, hide_index=True)

    st.markdown("---")
    col1, col2, col3 = st.columns([1, 2, 1])
    with col2:
        st.download_button(
            label="📥 Download Excel File",
            data=convert_df_to_excel(table, hourly_df=hourly_df),
            file_name="sales_performance.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            type="primary",
            use_container_width=True
        )
