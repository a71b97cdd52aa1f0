"""Login page: shown when there is no active session."""

import logging
from typing import Callable

import streamlit as st

from glassquote.config.settings import config
from glassquote.services import User
from glassquote.ui.components import render_login_form

logger = logging.getLogger(__name__)


def render_login_page(on_login_success: Callable[[User], None]) -> None:
    """Render the centered login card."""
    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.title(f"{config.APP_ICON} {config.APP_NAME}")
        with st.container(border=True):
            render_login_form(on_login_success)
        st.caption(f"v{config.APP_VERSION}")
