# dashboard_home.py
from __future__ import annotations

import sys
from pathlib import Path
import streamlit as st

# Ensure project root is importable no matter how Streamlit is launched
PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from lonerbox_data.config import data_location  # noqa: E402
from lonerbox_data.loader import LoadToken  # noqa: E402
from lonerbox_data.logs import configure_logging  # noqa: E402

st.set_page_config(page_title="Lonerbox Data", layout="wide")
configure_logging()

# ----------------------------
# Navigation
# ----------------------------
PAGE_HOME = "home"
PAGE_ORGANIZATIONS = "organizations"
PAGE_VERDICTS = "verdicts"
PAGE_TIMELINE = "timeline"
PAGE_AFFILIATION_LOSSES = "affiliation_losses"
PAGE_CIVILIAN_LOSSES = "civilian_losses"

PAGES = [
    (PAGE_HOME, "Home"),
    (PAGE_ORGANIZATIONS, "Organizations"),
    (PAGE_VERDICTS, "Verdicts"),
    (PAGE_TIMELINE, "Timeline"),
    (PAGE_AFFILIATION_LOSSES, "Affiliation Losses"),
    (PAGE_CIVILIAN_LOSSES, "Civilian Losses"),
]

if "lb_page" not in st.session_state:
    st.session_state.lb_page = PAGE_HOME
if "lb_token" not in st.session_state:
    st.session_state.lb_token = LoadToken(st.session_state.lb_page)


def go(page: str):
    # Loads still running for the old page must not land on the new one.
    st.session_state.lb_token.cancel()
    st.session_state.lb_token = LoadToken(page)
    st.session_state.lb_page = page
    st.rerun()


def go_home():
    go(PAGE_HOME)


with st.sidebar:
    st.header("Lonerbox Data")
    for key, title in PAGES:
        current = st.session_state.lb_page == key
        if st.button(title, key=f"nav_{key}", type="primary" if current else "secondary"):
            go(key)
    st.divider()
    st.caption(f"Reading data from:\n{data_location()}")


# ----------------------------
# Router
# ----------------------------
def render(page: str):
    # Import lazily so only the visible page runs
    token = st.session_state.lb_token
    if page == PAGE_HOME:
        from apps import records_app
        records_app.main(token=token)
    elif page == PAGE_ORGANIZATIONS:
        from apps import organizations_app
        organizations_app.main(go_home=go_home, token=token)
    elif page == PAGE_VERDICTS:
        from apps import verdicts_app
        verdicts_app.main(go_home=go_home, token=token)
    elif page == PAGE_TIMELINE:
        from apps import timeline_app
        timeline_app.main(go_home=go_home, token=token)
    elif page == PAGE_AFFILIATION_LOSSES:
        from apps import affiliation_losses_app
        affiliation_losses_app.main(go_home=go_home, token=token)
    elif page == PAGE_CIVILIAN_LOSSES:
        from apps import civilian_losses_app
        civilian_losses_app.main(go_home=go_home, token=token)
    else:
        # Fallback
        go_home()


render(st.session_state.lb_page)

st.markdown("---")
st.caption("© 2024 Lonerbox Data")
