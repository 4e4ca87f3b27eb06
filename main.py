"""
Sales Insights - Salesperson Performance Analyzer
A Streamlit application that reconciles attendance and PDV sales exports
and summarizes performance with Groq AI

STRUCTURE:
- config.py: Configuration and constants
- models.py / errors.py: Data structures and error types
- utils/: Normalization, date ranges, merging, consolidation, API client, Excel export
- extractors/: Attendance, sales and AI summary extraction
- pages/: Streamlit page components
"""
import logging

import streamlit as st

from config import APP_TITLE, APP_ICON, APP_LAYOUT, LOG_LEVEL, LOG_FORMAT, PAGE_PERFORMANCE_ANALYZER, PAGE_SETTINGS
from pages.performance_analyzer import performance_analyzer_page
from pages.settings import settings_page

PAGES = {
    f"📈 {PAGE_PERFORMANCE_ANALYZER}": performance_analyzer_page,
    f"⚙️ {PAGE_SETTINGS}": settings_page,
}


def configure_logging():
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO), format=LOG_FORMAT)


def apply_custom_css():
    """Apply custom CSS styling to the app."""
    st.markdown("""
        <style>
        .main-header {
            font-size: 2.5rem;
            font-weight: bold;
            color: #1E88E5;
            text-align: center;
            margin-bottom: 1rem;
        }
        .sub-header {
            font-size: 1.2rem;
            color: #424242;
            text-align: center;
            margin-bottom: 2rem;
        }
        .stButton>button {
            width: 100%;
        }
        </style>
    """, unsafe_allow_html=True)


def main():
    """Main application function."""
    configure_logging()

    st.set_page_config(
        page_title=APP_TITLE,
        page_icon=APP_ICON,
        layout=APP_LAYOUT
    )

    apply_custom_css()

    with st.sidebar:
        st.title("⚙️ Navigation")
        st.markdown("---")

        page = st.radio(
            "Select Page",
            list(PAGES),
            label_visibility="collapsed"
        )

        st.markdown("---")

        st.markdown("### 📋 Quick Guide")
        st.markdown("""
        1. Configure API keys in Settings (optional)
        2. Upload attendance CSV files
        3. Upload sales CSV files
        4. Pick a period and salesperson
        5. Download the Excel file
        """)

        st.markdown("---")

        st.markdown("### 📄 Supported Exports")
        st.markdown("""
        - Attendance per hour (At. / Pot.)
        - PDV sales summary per salesperson
        - ';'-separated, Brazilian number format
        """)

    PAGES[page]()


if __name__ == "__main__":
    main()
