"""
API Client Management - Groq API with automatic key fallback for the AI insights
"""
import logging
import os

import streamlit as st
from groq import Groq

from config import ENV_API_KEY_PRIMARY, ENV_API_KEY_2, ENV_API_KEY_3, SESSION_API_KEYS, MAX_API_KEYS

logger = logging.getLogger(__name__)

RATE_LIMIT_MARKERS = ("rate_limit", "429", "quota")


def get_api_keys():
    """
    Collect Groq API keys: keys added on the Settings page first, then
    environment variables. Duplicates are dropped.
    """
    keys = []

    if SESSION_API_KEYS in st.session_state and st.session_state[SESSION_API_KEYS]:
        keys.extend(k for k in st.session_state[SESSION_API_KEYS] if k)

    for env_name in (ENV_API_KEY_PRIMARY, ENV_API_KEY_2, ENV_API_KEY_3):
        key = os.getenv(env_name)
        if key and key not in keys:
            keys.append(key)

    return keys[:MAX_API_KEYS]


def mask_key(key):
    return f"{key[:6]}…{key[-4:]}" if key and len(key) > 12 else "••••"


def session_api_keys():
    """Keys managed on the Settings page, seeded from get_api_keys() on first use."""
    if SESSION_API_KEYS not in st.session_state:
        st.session_state[SESSION_API_KEYS] = get_api_keys()
    return list(st.session_state[SESSION_API_KEYS])


def add_api_key(key):
    """
    Add a key to the session list.

    Raises:
        ValueError: the key is empty, already configured, or the list is full
    """
    key = (key or "").strip()
    if not key:
        raise ValueError("Please enter an API key.")

    keys = session_api_keys()
    if key in keys:
        raise ValueError("This key is already configured.")
    if len(keys) >= MAX_API_KEYS:
        raise ValueError(f"At most {MAX_API_KEYS} keys can be configured.")

    st.session_state[SESSION_API_KEYS] = keys + [key]
    logger.info("API key %d added", len(keys) + 1)


def remove_api_key(index):
    keys = session_api_keys()
    if 0 <= index < len(keys):
        st.session_state[SESSION_API_KEYS] = keys[:index] + keys[index + 1:]
        logger.info("API key %d removed", index + 1)



def is_rate_limit_error(error):
    message = str(error).lower()
    return any(marker in message for marker in RATE_LIMIT_MARKERS)


def create_groq_client_with_fallback(api_keys, operation_func, *args, **kwargs):
    """
    Run operation_func with a Groq client, moving to the next key on rate limits.

    Args:
        api_keys: List of API keys to try
        operation_func: Function to execute (must accept client as first argument)
        *args, **kwargs: Arguments to pass to operation_func

    Returns:
        Result from operation_func

    Raises:
        ValueError: no keys were given
        The last rate-limit error if every key is exhausted, or any other error at once
    """
    if not api_keys:
        raise ValueError("No API keys provided")

    last_error = None

    for idx, key in enumerate(api_keys):
        try:
            client = Groq(api_key=key)
            return operation_func(client, *args, **kwargs)
        except Exception as e:
            if not is_rate_limit_error(e):
                raise

            last_error = e
            logger.warning("API key %d hit rate limit: %s", idx + 1, e)
            if idx < len(api_keys) - 1:
                st.warning(f"⚠️ API Key {idx + 1} hit rate limit. Switching to fallback key {idx + 2}...")
            else:
                st.error("❌ All API keys exhausted. Rate limit reached on all keys.")

    raise last_error
