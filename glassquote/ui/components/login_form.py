"""Administrator login form.

The submit button stays disabled while the request is in flight. A failed
login shows the backend's message and keeps what the user typed.
"""

import logging
from typing import Callable, Optional

import streamlit as st

from glassquote.services import User, get_api_client
from glassquote.utils import GlassQuoteError, LoginValidator, SessionState

logger = logging.getLogger(__name__)

_USERNAME_KEY = "login_username"
_PASSWORD_KEY = "login_password"


def submit_login(
    client,
    username: str,
    password: str,
    on_login_success: Callable[[User], None]
) -> Optional[str]:
    """Send credentials to the backend.

    Returns:
        None on success, otherwise the error message to display
    """
    result = LoginValidator.validate(username, password)
    if not result.is_valid:
        return result.first_error

    try:
        user = client.login(username.strip(), password)
    except GlassQuoteError as e:
        logger.warning(f"Login failed for {username!r}: {e.message}")
        return e.message

    on_login_success(user)
    return None


def render_login_form(on_login_success: Callable[[User], None]) -> None:
    """Render the login form.

    Args:
        on_login_success: Callback receiving the authenticated user
    """
    submitting = SessionState.get('login_submitting', False)

    st.markdown("<h2 style='text-align: center;'>Ingreso administrador</h2>", unsafe_allow_html=True)

    error = SessionState.get('login_error')
    if error:
        st.error(error)

    with st.form("login_form"):
        st.text_input("Usuario", key=_USERNAME_KEY)
        st.text_input("Contraseña", type="password", key=_PASSWORD_KEY)
        clicked = st.form_submit_button(
            "Ingresando..." if submitting else "Ingresar",
            type="primary",
            disabled=submitting,
            use_container_width=True,
        )

    if clicked:
        # Re-render with the button disabled before the request goes out
        SessionState.set('login_submitting', True)
        st.rerun()

    if submitting:
        with st.spinner("Ingresando..."):
            error = submit_login(
                get_api_client(),
                st.session_state.get(_USERNAME_KEY, ""),
                st.session_state.get(_PASSWORD_KEY, ""),
                on_login_success,
            )
        SessionState.set('login_submitting', False)
        SessionState.set('login_error', error)
        st.rerun()
