"""Glass types manager component (catalog CRUD).

- Lists all glass types
- Creates, edits and deletes them
- Reports every freshly loaded list to the shell (``on_change``), which is
  the only way the calculator learns about glass types

There are no optimistic edits: every mutation is followed by a reload.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

import streamlit as st

from glassquote.services import GlassType, get_api_client
from glassquote.utils import (
    GlassQuoteError,
    GlassTypeValidator,
    SessionState,
    format_money,
    parse_decimal,
)

logger = logging.getLogger(__name__)

_STATE_KEY = "glass_types_manager_state"

# Widget keys of the create/update form
_NAME_KEY = "gt_name"
_THICKNESS_KEY = "gt_thickness"
_PRICE_KEY = "gt_price"

OnGlassTypesChange = Callable[[Sequence[GlassType]], None]


@dataclass
class GlassTypeForm:
    """Create/update form values as typed."""
    name: str = ""
    thickness: str = ""
    price: str = ""


@dataclass
class GlassTypesManagerState:
    """Catalog manager state that survives reruns."""
    glass_types: Tuple[GlassType, ...] = ()
    edit_id: Optional[str] = None
    pending_delete_id: Optional[str] = None
    error: Optional[str] = None
    loading: bool = False
    loaded: bool = False

    def load(self, client, on_change: OnGlassTypesChange) -> bool:
        """Fetch the catalog and report it to the shell.

        Returns:
            True when the list was loaded
        """
        self.loading = True
        self.error = None
        try:
            glass_types = client.list_glass_types()
        except GlassQuoteError as e:
            logger.error(f"Error loading glass types: {e.message}")
            self.error = e.message
            return False
        finally:
            self.loading = False

        self.glass_types = tuple(glass_types)
        self.loaded = True
        on_change(self.glass_types)
        return True

    def start_edit(self, glass_type: GlassType) -> GlassTypeForm:
        """Mark ``glass_type`` as edit target and return the form to show."""
        self.edit_id = glass_type.id
        return GlassTypeForm(
            name=glass_type.name,
            thickness=glass_type.thickness or "",
            price=str(glass_type.price_per_sqm),
        )

    def cancel_edit(self) -> GlassTypeForm:
        self.edit_id = None
        return GlassTypeForm()

    def submit(self, client, form: GlassTypeForm, on_change: OnGlassTypesChange) -> bool:
        """Create a glass type, or update the edit target when one is set.

        On success the edit target is cleared and the list reloaded; the
        caller clears the form widgets.

        Returns:
            True when the backend accepted the change
        """
        self.error = None

        result = GlassTypeValidator.validate(form.name, form.price)
        if not result.is_valid:
            self.error = result.first_error
            return False

        name = form.name.strip()
        thickness = form.thickness.strip() or None
        price = parse_decimal(form.price)

        try:
            if self.edit_id:
                client.update_glass_type(self.edit_id, name=name, price_per_sqm=price, thickness=thickness)
                logger.info(f"Updated glass type {self.edit_id}")
            else:
                client.create_glass_type(name=name, price_per_sqm=price, thickness=thickness)
                logger.info(f"Created glass type {name!r}")
        except GlassQuoteError as e:
            logger.error(f"Error saving glass type: {e.message}")
            self.error = e.message
            return False

        self.edit_id = None
        self.load(client, on_change)
        return True

    def request_delete(self, glass_type_id: str) -> None:
        self.pending_delete_id = glass_type_id

    def cancel_delete(self) -> None:
        self.pending_delete_id = None

    def confirm_delete(self, client, on_change: OnGlassTypesChange) -> bool:
        """Delete the glass type awaiting confirmation, then reload."""
        glass_type_id = self.pending_delete_id
        self.pending_delete_id = None
        if glass_type_id is None:
            return False

        self.error = None
        try:
            client.delete_glass_type(glass_type_id)
        except GlassQuoteError as e:
            logger.error(f"Error deleting glass type {glass_type_id}: {e.message}")
            self.error = e.message
            return False

        logger.info(f"Deleted glass type {glass_type_id}")
        if self.edit_id == glass_type_id:
            self.edit_id = None
        self.load(client, on_change)
        return True

    def find(self, glass_type_id: Optional[str]) -> Optional[GlassType]:
        for glass_type in self.glass_types:
            if glass_type.id == glass_type_id:
                return glass_type
        return None


def get_glass_types_manager_state() -> GlassTypesManagerState:
    return SessionState.get_or_create(_STATE_KEY, GlassTypesManagerState)


def _fill_form(form: GlassTypeForm) -> None:
    st.session_state[_NAME_KEY] = form.name
    st.session_state[_THICKNESS_KEY] = form.thickness
    st.session_state[_PRICE_KEY] = form.price


def _read_form() -> GlassTypeForm:
    return GlassTypeForm(
        name=st.session_state.get(_NAME_KEY, ""),
        thickness=st.session_state.get(_THICKNESS_KEY, ""),
        price=st.session_state.get(_PRICE_KEY, ""),
    )


# Widget callbacks run before the rerun, so they may rewrite form widgets.
def _on_submit(on_change: OnGlassTypesChange) -> None:
    state = get_glass_types_manager_state()
    if state.submit(get_api_client(), _read_form(), on_change):
        _fill_form(GlassTypeForm())


def _on_edit(glass_type: GlassType) -> None:
    _fill_form(get_glass_types_manager_state().start_edit(glass_type))


def _on_cancel_edit() -> None:
    _fill_form(get_glass_types_manager_state().cancel_edit())


def _on_request_delete(glass_type_id: str) -> None:
    get_glass_types_manager_state().request_delete(glass_type_id)


def _on_cancel_delete() -> None:
    get_glass_types_manager_state().cancel_delete()


def _on_confirm_delete(on_change: OnGlassTypesChange) -> None:
    state = get_glass_types_manager_state()
    if state.confirm_delete(get_api_client(), on_change):
        st.toast("Tipo de vidrio eliminado")


def ensure_glass_types_loaded(on_change: OnGlassTypesChange) -> None:
    """Run the initial catalog load once per login.

    The dashboard calls this before rendering the calculator so the
    calculator's default selection is seeded in the same run.
    """
    state = get_glass_types_manager_state()
    if not state.loaded and state.error is None:
        with st.spinner("Cargando tipos de vidrio..."):
            state.load(get_api_client(), on_change)


def render_glass_types_manager(on_change: OnGlassTypesChange) -> None:
    """Render the catalog manager.

    Args:
        on_change: Callback receiving every freshly loaded catalog
    """
    state = get_glass_types_manager_state()
    ensure_glass_types_loaded(on_change)

    with st.container(border=True):
        st.subheader("Tipos de vidrio", anchor="glass-types")

        if state.error:
            st.error(state.error)

        _render_form(state, on_change)

        if state.pending_delete_id is not None:
            _render_delete_confirmation(state, on_change)

        if state.loading:
            st.caption("Cargando tipos de vidrio...")
        else:
            _render_table(state.glass_types)

        if state.error and not state.loaded:
            st.button("Reintentar", key="gt_reload", on_click=state.load, args=(get_api_client(), on_change))


def _render_form(state: GlassTypesManagerState, on_change: OnGlassTypesChange) -> None:
    editing = state.find(state.edit_id)
    if editing is not None:
        st.caption(f"Editando: **{editing.label}**")

    with st.form("glass_type_form", border=False):
        col1, col2, col3, col4 = st.columns([4, 3, 3, 2], vertical_alignment="bottom")
        with col1:
            st.text_input("Nombre", key=_NAME_KEY, placeholder="Nombre (ej: Laminado)")
        with col2:
            st.text_input("Grosor", key=_THICKNESS_KEY, placeholder="Grosor (opcional)")
        with col3:
            st.text_input("Precio por m²", key=_PRICE_KEY, placeholder="Precio por m²")
        with col4:
            st.form_submit_button(
                "Guardar cambios" if state.edit_id else "Agregar",
                type="primary",
                on_click=_on_submit,
                args=(on_change,),
            )

    if state.edit_id:
        st.button("Cancelar edición", key="gt_cancel_edit", on_click=_on_cancel_edit)


def _render_delete_confirmation(state: GlassTypesManagerState, on_change: OnGlassTypesChange) -> None:
    target = state.find(state.pending_delete_id)
    label = target.label if target else state.pending_delete_id
    st.warning(f"¿Eliminar el tipo de vidrio **{label}**?")

    col1, col2 = st.columns(2)
    with col1:
        st.button("Cancelar", key="gt_delete_cancel", width='stretch', on_click=_on_cancel_delete)
    with col2:
        st.button(
            "Eliminar",
            key="gt_delete_confirm",
            type="primary",
            width='stretch',
            on_click=_on_confirm_delete,
            args=(on_change,),
        )


def _render_table(glass_types: Sequence[GlassType]) -> None:
    header = st.columns([4, 3, 3, 2])
    for col, title in zip(header, ["**Nombre**", "**Grosor**", "**Precio m²**", ""]):
        col.markdown(title)

    if not glass_types:
        st.caption("No hay tipos de vidrio cargados.")
        return

    for glass_type in glass_types:
        row = st.columns([4, 3, 3, 1, 1])
        row[0].write(glass_type.name)
        row[1].write(glass_type.thickness or "")
        row[2].write(format_money(glass_type.price_per_sqm))
        row[3].button(
            "✏️",
            key=f"gt_edit_{glass_type.id}",
            help="Editar",
            on_click=_on_edit,
            args=(glass_type,),
        )
        row[4].button(
            "🗑️",
            key=f"gt_delete_{glass_type.id}",
            help="Eliminar",
            on_click=_on_request_delete,
            args=(glass_type.id,),
        )
