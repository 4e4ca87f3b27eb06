"""
Settings Page
Groq API keys for the AI insights
"""

import streamlit as st

from config import GROQ_MODEL, MAX_API_KEYS
from utils.api_client import session_api_keys, add_api_key, remove_api_key, mask_key


def render_key_list(keys):
    if not keys:
        st.warning("No API key configured. The analyzer works without one, but AI insights are skipped.")
        return

    for idx, key in enumerate(keys):
        col_label, col_remove = st.columns([5, 1])
        col_label.markdown(f"**Key {idx + 1}** `{mask_key(key)}`" + (" (primary)" if idx == 0 else " (fallback)"))
        if col_remove.button("Remove", key=f"remove_key_{idx}"):
            remove_api_key(idx)
            st.rerun()


def render_add_key_form():
    with st.form("add_api_key", clear_on_submit=True):
        new_key = st.text_input("Groq API key", type="password", placeholder="gsk_...")
        if st.form_submit_button("➕ Add key"):
            try:
                add_api_key(new_key)
            except ValueError as e:
                st.error(f"⚠️ {e}")
            else:
                st.success("✅ Key added.")
                st.rerun()


def settings_page():
    st.markdown('<div class="main-header">⚙️ Settings</div>', unsafe_allow_html=True)
    st.markdown('<div class="sub-header">API keys used for the AI insights</div>', unsafe_allow_html=True)

    keys = session_api_keys()

    st.markdown("### 🔑 Groq API keys")
    st.caption(
        f"Up to {MAX_API_KEYS} keys. When a key hits its rate limit the next one is tried. "
        "Keys from the GROQ_API_KEY environment variables are loaded automatically."
    )
    render_key_list(keys)

    if len(keys) < MAX_API_KEYS:
        render_add_key_form()

    st.markdown("---")
    st.markdown(f"Insights are generated with `{GROQ_MODEL}`. Free keys are available in the "
                "[Groq Console](https://console.groq.com/keys).")
