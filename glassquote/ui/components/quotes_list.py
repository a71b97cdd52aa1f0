"""Saved quotes list component.

Pure display of the shell's quotes plus per-row actions (copy, WhatsApp,
delete). Deletion is reported to the shell through ``on_delete``; the list
is never re-fetched here.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import streamlit as st

from glassquote.config.settings import config
from glassquote.services import Quote, get_api_client
from glassquote.utils import GlassQuoteError, SessionState, format_money, format_number
from glassquote.utils.export import (
    format_timestamp,
    quote_clipboard_text,
    quote_whatsapp_url,
    quotes_to_csv,
)
from glassquote.ui.components.clipboard import copy_to_clipboard

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "No hay presupuestos guardados."

_STATE_KEY = "quotes_list_state"

_COLUMN_WIDTHS = [2, 2, 2, 1, 1.5, 2, 3]


@dataclass
class QuotesListState:
    """Quote list state that survives reruns."""
    pending_delete_id: Optional[str] = None
    error: Optional[str] = None

    def request_delete(self, quote_id: str) -> None:
        self.pending_delete_id = quote_id
        self.error = None

    def cancel_delete(self) -> None:
        self.pending_delete_id = None

    def confirm_delete(self, client, on_delete: Callable[[str], None]) -> bool:
        """Delete the quote awaiting confirmation and report its id upward."""
        quote_id = self.pending_delete_id
        self.pending_delete_id = None
        if quote_id is None:
            return False

        try:
            client.delete_quote(quote_id)
        except GlassQuoteError as e:
            logger.error(f"Error deleting quote {quote_id}: {e.message}")
            self.error = e.message
            return False

        logger.info(f"Deleted quote {quote_id}")
        self.error = None
        on_delete(quote_id)
        return True


def get_quotes_list_state() -> QuotesListState:
    return SessionState.get_or_create(_STATE_KEY, QuotesListState)


def _on_request_delete(quote_id: str) -> None:
    get_quotes_list_state().request_delete(quote_id)


def _on_cancel_delete() -> None:
    get_quotes_list_state().cancel_delete()


def _on_confirm_delete(on_delete: Callable[[str], None]) -> None:
    if get_quotes_list_state().confirm_delete(get_api_client(), on_delete):
        st.toast("Presupuesto eliminado")


def render_quotes_list(
    quotes: Sequence[Quote],
    on_delete: Callable[[str], None],
    load_error: Optional[str] = None
) -> None:
    """Render the saved quotes.

    Args:
        quotes: Quotes as owned by the shell, newest first (read-only)
        on_delete: Callback receiving the id of a deleted quote
        load_error: Message of a failed quote list load, if any
    """
    state = get_quotes_list_state()

    with st.container(border=True):
        st.subheader("Presupuestos guardados", anchor="quotes-list")

        if load_error:
            st.error(f"No se pudieron cargar los presupuestos: {load_error}")
        if state.error:
            st.error(state.error)

        if state.pending_delete_id is not None:
            _render_delete_confirmation(on_delete)

        header = st.columns(_COLUMN_WIDTHS)
        for col, title in zip(header, ["Fecha", "Vidrio", "Medidas", "m²", "Precio final", "Nota", ""]):
            col.markdown(f"**{title}**" if title else "")

        if not quotes:
            st.caption(EMPTY_MESSAGE)
            return

        for quote in quotes:
            _render_row(quote)

        st.download_button(
            "📥 Descargar CSV",
            data=quotes_to_csv(quotes),
            file_name=config.CSV_FILE_NAME,
            mime="text/csv",
            key="quotes_csv",
        )


def _render_row(quote: Quote) -> None:
    row = st.columns(_COLUMN_WIDTHS)
    row[0].write(format_timestamp(quote.created_at))
    glass = quote.glass_name
    if quote.glass_thickness:
        glass = f"{glass} ({quote.glass_thickness})"
    row[1].write(glass)
    row[2].write(f"{format_number(quote.height)}m x {format_number(quote.width)}m")
    row[3].write(format_number(quote.area))
    row[4].write(format_money(quote.client_price))
    row[5].write(quote.note)

    with row[6]:
        actions = st.columns(3)
        copy_clicked = actions[0].button("📋", key=f"q_copy_{quote.id}", help="Copiar")
        actions[1].link_button("💬", quote_whatsapp_url(quote), help="Enviar por WhatsApp")
        actions[2].button(
            "🗑️",
            key=f"q_delete_{quote.id}",
            help="Eliminar",
            on_click=_on_request_delete,
            args=(quote.id,),
        )

    if copy_clicked:
        copy_to_clipboard(quote_clipboard_text(quote))


def _render_delete_confirmation(on_delete: Callable[[str], None]) -> None:
    st.warning("¿Eliminar este presupuesto?")

    col1, col2 = st.columns(2)
    with col1:
        st.button("Cancelar", key="q_delete_cancel", width='stretch', on_click=_on_cancel_delete)
    with col2:
        st.button(
            "Eliminar",
            key="q_delete_confirm",
            type="primary",
            width='stretch',
            on_click=_on_confirm_delete,
            args=(on_delete,),
        )
