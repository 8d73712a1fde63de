import json
import logging
import os
from typing import Any

import streamlit as st

from core.config import settings

logger = logging.getLogger(__name__)

SESSION_FILE = settings.SESSION_FILE

# Only persist a curated subset of ``st.session_state`` keys. Streamlit
# widgets inject their own keys into ``session_state``; restoring those on
# the next run raises ``StreamlitAPIException`` because widget-owned keys
# disallow manual assignment.
PERSISTED_KEYS = {
    "comparison_inputs",
    "target_flat_fee",
    "branding",
}


def _serializable(value: Any) -> bool:
    return isinstance(value, (int, float, str, bool, list, dict))


def load_state() -> None:
    """Restore Streamlit session state from ``SESSION_FILE`` if it exists."""
    if not os.path.exists(SESSION_FILE):
        return
    try:
        with open(SESSION_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        logger.warning("could not read session file %s", SESSION_FILE, exc_info=True)
        return
    for key, val in data.items():
        if key in PERSISTED_KEYS:
            st.session_state.setdefault(key, val)


def save_state() -> None:
    """Persist serializable session state to ``SESSION_FILE``."""
    data = {
        k: v
        for k, v in st.session_state.items()
        if k in PERSISTED_KEYS and _serializable(v)
    }
    try:
        with open(SESSION_FILE, "w", encoding="utf-8") as f:
            json.dump(data, f)
    except (OSError, TypeError, ValueError):
        logger.warning("could not write session file %s", SESSION_FILE, exc_info=True)
