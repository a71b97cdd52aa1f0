"""Quote calculator component.

First thing the user sees after logging in: dimensions, glass type and
markup in, live price preview out. Saving sends the inputs to the backend,
which computes and stores the quote; the stored record is handed to the
shell through ``on_new_quote``.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

import streamlit as st

from glassquote.config.settings import config
from glassquote.services import GlassType, Quote, get_api_client
from glassquote.utils import (
    GlassQuoteError,
    QuotePreview,
    SessionState,
    derive_preview,
    format_money,
    format_number,
)
from glassquote.utils.export import preview_clipboard_text, preview_whatsapp_url
from glassquote.ui.components.clipboard import copy_to_clipboard

logger = logging.getLogger(__name__)

MISSING_DATA_MESSAGE = "Faltan datos para calcular el presupuesto."
SAVED_MESSAGE = "Presupuesto guardado con éxito"

_STATE_KEY = "calculator_state"


@dataclass
class CalculatorInputs:
    """Raw text typed in the calculator widgets."""
    height: str = ""
    width: str = ""
    markup: str = field(default_factory=lambda: config.DEFAULT_MARKUP_PERCENT)
    note: str = ""


@dataclass
class CalculatorState:
    """Calculator state that survives reruns."""
    glass_type_id: Optional[str] = None
    error: Optional[str] = None
    success: Optional[str] = None
    saving: bool = False
    # Set when the selected glass type disappeared from the catalog
    selection_lost: bool = False

    def sync_selection(self, glass_types: Sequence[GlassType]) -> None:
        """Keep the selection consistent with the current catalog.

        The first entry is selected by default while nothing has been
        selected yet. A selection whose glass type was deleted falls back
        to no selection rather than silently switching product.
        """
        ids = [g.id for g in glass_types]
        if self.glass_type_id is not None and self.glass_type_id not in ids:
            logger.info(f"Selected glass type {self.glass_type_id} no longer in catalog")
            self.glass_type_id = None
            self.selection_lost = True
            return
        if self.glass_type_id is None and ids and not self.selection_lost:
            self.glass_type_id = ids[0]

    def select(self, glass_type_id: Optional[str]) -> None:
        self.glass_type_id = glass_type_id
        if glass_type_id is not None:
            self.selection_lost = False

    def selected_glass(self, glass_types: Sequence[GlassType]) -> Optional[GlassType]:
        for glass_type in glass_types:
            if glass_type.id == self.glass_type_id:
                return glass_type
        return None

    def preview(
        self,
        inputs: CalculatorInputs,
        glass_types: Sequence[GlassType]
    ) -> Optional[QuotePreview]:
        return derive_preview(
            inputs.height,
            inputs.width,
            inputs.markup,
            self.selected_glass(glass_types),
        )

    def save(
        self,
        client,
        inputs: CalculatorInputs,
        glass_types: Sequence[GlassType],
        on_new_quote: Callable[[Quote], None]
    ) -> Optional[Quote]:
        """Persist the current quote.

        Returns:
            The stored quote, or None when validation or the backend failed
            (the reason is left in ``self.error``)
        """
        self.error = None
        self.success = None

        preview = self.preview(inputs, glass_types)
        glass_type = self.selected_glass(glass_types)
        if preview is None or glass_type is None:
            self.error = MISSING_DATA_MESSAGE
            self.saving = False
            return None

        self.saving = True
        try:
            quote = client.create_quote(
                height=preview.height,
                width=preview.width,
                glass_type_id=glass_type.id,
                markup=preview.markup,
                note=inputs.note,
            )
        except GlassQuoteError as e:
            logger.error(f"Error saving quote: {e.message}")
            self.error = e.message
            return None
        finally:
            self.saving = False

        on_new_quote(quote)
        self.success = SAVED_MESSAGE
        logger.info(f"Saved quote {quote.id}")
        return quote


def get_calculator_state() -> CalculatorState:
    return SessionState.get_or_create(_STATE_KEY, CalculatorState)


def render_calculator(
    glass_types: Sequence[GlassType],
    on_new_quote: Callable[[Quote], None]
) -> None:
    """Render the calculator.

    Args:
        glass_types: Catalog as owned by the shell (read-only)
        on_new_quote: Callback receiving the stored quote
    """
    state = get_calculator_state()
    state.sync_selection(glass_types)

    if 'calc_markup' not in st.session_state:
        st.session_state['calc_markup'] = config.DEFAULT_MARKUP_PERCENT

    with st.container(border=True):
        st.subheader("Calculadora de presupuestos", anchor="calculator")

        if state.error:
            st.error(state.error)

        col1, col2, col3, col4 = st.columns([1, 1, 2, 1])
        with col1:
            height = st.text_input("Alto (m)", key="calc_height", placeholder="Ej: 1.20")
        with col2:
            width = st.text_input("Ancho (m)", key="calc_width", placeholder="Ej: 0.80")
        with col3:
            _render_glass_select(state, glass_types)
        with col4:
            markup = st.text_input("% Ganancia", key="calc_markup")

        note = st.text_area(
            "Nota (opcional)",
            key="calc_note",
            height=68,
            placeholder="Ej: incluye colocación, seña del 50%, etc.",
        )

        inputs = CalculatorInputs(height=height, width=width, markup=markup, note=note)
        preview = state.preview(inputs, glass_types)
        glass_type = state.selected_glass(glass_types)

        if preview is not None:
            m1, m2, m3 = st.columns(3)
            m1.metric("m² totales", format_number(preview.area))
            m2.metric("Precio costo", format_money(preview.cost_price))
            m3.metric("Precio cliente", format_money(preview.client_price))

        _render_actions(state, inputs, preview, glass_type, glass_types, on_new_quote)


def _render_glass_select(state: CalculatorState, glass_types: Sequence[GlassType]) -> None:
    if not glass_types:
        st.selectbox("Tipo de vidrio", [], placeholder="No hay tipos de vidrio cargados", disabled=True)
        return

    by_id = {g.id: g for g in glass_types}
    ids = list(by_id)
    index = ids.index(state.glass_type_id) if state.glass_type_id in by_id else None
    selected = st.selectbox(
        "Tipo de vidrio",
        ids,
        index=index,
        format_func=lambda gid: _glass_option_label(by_id[gid]),
        placeholder="Elegí un tipo de vidrio",
    )
    if selected != state.glass_type_id:
        state.select(selected)


def _glass_option_label(glass_type: GlassType) -> str:
    thickness = f" ({glass_type.thickness})" if glass_type.thickness else ""
    return f"{glass_type.name}{thickness} - {format_money(glass_type.price_per_sqm)}"


def _render_actions(
    state: CalculatorState,
    inputs: CalculatorInputs,
    preview: Optional[QuotePreview],
    glass_type: Optional[GlassType],
    glass_types: Sequence[GlassType],
    on_new_quote: Callable[[Quote], None]
) -> None:
    col1, col2, col3 = st.columns(3)

    with col1:
        if st.button(
            "Guardando..." if state.saving else "Guardar presupuesto",
            type="primary",
            disabled=state.saving,
            key="calc_save",
            width='stretch',
        ):
            # Re-render with the button disabled before the request goes out
            state.saving = True
            st.rerun()

    with col2:
        copy_clicked = st.button(
            "Copiar presupuesto",
            key="calc_copy",
            disabled=preview is None,
            width='stretch',
        )

    with col3:
        url = preview_whatsapp_url(preview, glass_type) if preview is not None else config.WHATSAPP_BASE_URL
        st.link_button("Enviar por WhatsApp", url, disabled=preview is None)

    if copy_clicked and preview is not None:
        copy_to_clipboard(preview_clipboard_text(preview, glass_type))

    if state.saving:
        with st.spinner("Guardando presupuesto..."):
            quote = state.save(get_api_client(), inputs, glass_types, on_new_quote)
        if quote is not None:
            st.toast(SAVED_MESSAGE)
        st.rerun()
