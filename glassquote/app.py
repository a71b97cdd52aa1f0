"""Glass quoting frontend application.

Streamlit app shell: resolves the session, then routes to the login page
or the dashboard. It owns the ``AppState`` and turns component events
(login, logout, new quote, deleted quote, catalog change) into calls to
its update operations.
"""

import logging
import sys
from pathlib import Path

# Load environment variables from .env file BEFORE any other imports
# so the frozen config picks them up
from dotenv import load_dotenv
load_dotenv(Path(__file__).parent.parent / ".env")

import streamlit as st

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from glassquote.config.settings import config
from glassquote.services import User, get_api_client
from glassquote.utils import (
    AppState,
    SessionState,
    select_view,
    VIEW_CHECKING_SESSION,
    VIEW_LOGIN,
)
from glassquote.ui.pages import render_login_page, render_dashboard_page

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    """Main application entry point."""
    # Page configuration - must be first Streamlit command
    st.set_page_config(
        page_title=config.APP_NAME,
        page_icon=config.APP_ICON,
        layout="wide",
        initial_sidebar_state="collapsed",
    )

    _apply_custom_css()

    SessionState.init_defaults()
    state = SessionState.get_app_state()
    client = get_api_client()

    view = select_view(state)

    if view == VIEW_CHECKING_SESSION:
        _render_checking_session(state, client)

    elif view == VIEW_LOGIN:
        render_login_page(
            on_login_success=lambda user: handle_login(state, client, user)
        )

    else:
        render_dashboard_page(
            state,
            on_logout=lambda: handle_logout(state, client),
        )


def _render_checking_session(state: AppState, client) -> None:
    """Show the placeholder while the one who-am-I call runs."""
    placeholder = st.empty()
    with placeholder.container():
        st.info("Verificando sesión...")

    state.resolve_session(client)

    placeholder.empty()
    st.rerun()


def handle_login(state: AppState, client, user: User) -> None:
    """Login succeeded: store the user, then load the quote list."""
    state.login_succeeded(user, client)
    SessionState.clear_mode('login')


def handle_logout(state: AppState, client) -> None:
    """Logout: best-effort backend call, then drop everything session-bound."""
    state.logout(client)
    SessionState.clear_mode('dashboard')
    logger.info("Logged out")


def _apply_custom_css():
    """Apply custom CSS styling."""
    st.markdown("""
        <style>
        /* Narrower page like a card */
        .block-container {
            max-width: 1100px;
            padding-top: 1.5rem;
        }

        /* Improve button consistency */
        .stButton > button {
            font-size: 0.875rem;
        }

        /* Metric styling */
        div[data-testid="stMetricValue"] {
            font-size: 1.5rem;
        }

        /* Hide Streamlit footer only (keep menu for theme settings) */
        footer {visibility: hidden;}
        </style>
    """, unsafe_allow_html=True)


if __name__ == "__main__":
    main()
