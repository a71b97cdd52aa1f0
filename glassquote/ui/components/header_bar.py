"""Header bar: business name, section menu and logout.

The menu's open/closed flag is the component's own state; choosing a
section closes the menu and scrolls to it.
"""

import json
import logging
from dataclasses import dataclass
from typing import Callable, Optional

import streamlit as st
import streamlit.components.v1 as components

from glassquote.config.settings import config, DASHBOARD_SECTIONS
from glassquote.utils import SessionState

logger = logging.getLogger(__name__)

_STATE_KEY = "header_menu"


@dataclass
class HeaderMenu:
    """Collapsible navigation menu state."""
    is_open: bool = False
    scroll_target: Optional[str] = None

    def toggle(self) -> None:
        self.is_open = not self.is_open

    def navigate(self, anchor: str) -> None:
        self.scroll_target = anchor
        self.is_open = False

    def take_scroll_target(self) -> Optional[str]:
        """Return the pending section once, then forget it."""
        target, self.scroll_target = self.scroll_target, None
        return target


def get_header_menu() -> HeaderMenu:
    return SessionState.get_or_create(_STATE_KEY, HeaderMenu)


def _scroll_to(anchor: str) -> None:
    components.html(
        f"""<script>
        const el = window.parent.document.getElementById({json.dumps(anchor)});
        if (el) {{ el.scrollIntoView({{behavior: "smooth"}}); }}
        </script>""",
        height=0,
    )


def render_header_bar(on_logout: Callable[[], None], username: str = "") -> None:
    """Render the header bar.

    Args:
        on_logout: Callback run when the user clicks "Cerrar sesión"
        username: Name shown next to the brand
    """
    menu = get_header_menu()

    col1, col2 = st.columns([5, 1], vertical_alignment="center")
    with col1:
        st.markdown(f"### {config.APP_ICON} {config.BUSINESS_NAME}")
        if username:
            st.caption(f"Sesión: {username}")
    with col2:
        st.button(
            "✕ Cerrar" if menu.is_open else "☰ Menú",
            key="header_menu_toggle",
            width='stretch',
            on_click=menu.toggle,
        )

    if menu.is_open:
        with st.container(border=True):
            cols = st.columns(len(DASHBOARD_SECTIONS) + 1)
            for col, (anchor, label) in zip(cols, DASHBOARD_SECTIONS):
                col.button(
                    label,
                    key=f"header_nav_{anchor}",
                    width='stretch',
                    on_click=menu.navigate,
                    args=(anchor,),
                )
            cols[-1].button(
                "Cerrar sesión",
                key="header_logout",
                type="primary",
                width='stretch',
                on_click=on_logout,
            )

    target = menu.take_scroll_target()
    if target:
        _scroll_to(target)

    st.divider()
