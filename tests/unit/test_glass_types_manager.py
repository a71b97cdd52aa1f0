"""
Unit tests for the glass types manager controller.
"""
from unittest.mock import MagicMock

from glassquote.services.models import GlassType
from glassquote.ui.components.glass_types_manager import GlassTypeForm, GlassTypesManagerState
from glassquote.utils.exceptions import APIError


class TestLoad:
    """Tests for loading the catalog."""

    def test_load_reports_to_shell(self, fake_client, glass_types):
        on_change = MagicMock()
        state = GlassTypesManagerState()

        assert state.load(fake_client, on_change) is True

        assert state.loaded
        assert state.loading is False
        on_change.assert_called_once_with(tuple(glass_types))

    def test_load_failure(self, fake_client):
        """Test a failed load shows the error and keeps the shell's list."""
        fake_client.list_glass_types.side_effect = APIError("Error al obtener vidrios", status_code=500)
        on_change = MagicMock()
        state = GlassTypesManagerState()

        assert state.load(fake_client, on_change) is False

        assert state.error == "Error al obtener vidrios"
        assert not state.loaded
        on_change.assert_not_called()


class TestSubmit:
    """Tests for create/update submission."""

    def test_create_without_edit_target(self, fake_client):
        on_change = MagicMock()
        state = GlassTypesManagerState()

        ok = state.submit(fake_client, GlassTypeForm(" Laminado ", "3+3", "250,5"), on_change)

        assert ok
        fake_client.create_glass_type.assert_called_once_with(
            name="Laminado", price_per_sqm=250.5, thickness="3+3",
        )
        fake_client.update_glass_type.assert_not_called()
        fake_client.list_glass_types.assert_called_once()
        on_change.assert_called_once()

    def test_update_edit_target(self, fake_client, glass_types):
        """Test the form updates the record chosen with start_edit."""
        state = GlassTypesManagerState(glass_types=tuple(glass_types))
        form = state.start_edit(glass_types[0])
        assert form == GlassTypeForm("Float", "4mm", "100.0")

        form.price = "120"
        ok = state.submit(fake_client, form, MagicMock())

        assert ok
        fake_client.update_glass_type.assert_called_once_with(
            "g1", name="Float", price_per_sqm=120.0, thickness="4mm",
        )
        fake_client.create_glass_type.assert_not_called()
        assert state.edit_id is None

    def test_cancel_edit_returns_to_create(self, glass_types):
        state = GlassTypesManagerState()
        state.start_edit(glass_types[0])

        assert state.cancel_edit() == GlassTypeForm()
        assert state.edit_id is None

    def test_invalid_form(self, fake_client):
        state = GlassTypesManagerState()

        assert not state.submit(fake_client, GlassTypeForm("", "", "abc"), MagicMock())

        assert state.error == "El nombre es obligatorio"
        fake_client.create_glass_type.assert_not_called()

    def test_backend_rejection_keeps_edit_target(self, fake_client, glass_types):
        fake_client.update_glass_type.side_effect = APIError("Nombre duplicado", status_code=400)
        state = GlassTypesManagerState()
        form = state.start_edit(glass_types[0])

        assert not state.submit(fake_client, form, MagicMock())

        assert state.error == "Nombre duplicado"
        assert state.edit_id == "g1"
        fake_client.list_glass_types.assert_not_called()


class TestDelete:
    """Tests for the delete confirmation flow."""

    def test_confirm_deletes_and_reloads(self, fake_client, glass_types):
        fake_client.list_glass_types.return_value = glass_types[1:]
        on_change = MagicMock()
        state = GlassTypesManagerState(glass_types=tuple(glass_types))

        state.request_delete("g1")
        assert state.confirm_delete(fake_client, on_change)

        fake_client.delete_glass_type.assert_called_once_with("g1")
        on_change.assert_called_once_with(tuple(glass_types[1:]))
        assert state.pending_delete_id is None
        assert state.find("g1") is None

    def test_cancel_sends_nothing(self, fake_client):
        state = GlassTypesManagerState()
        state.request_delete("g1")
        state.cancel_delete()

        assert not state.confirm_delete(fake_client, MagicMock())
        fake_client.delete_glass_type.assert_not_called()

    def test_deleting_edit_target_clears_it(self, fake_client, glass_types):
        state = GlassTypesManagerState()
        state.start_edit(glass_types[0])
        state.request_delete("g1")

        state.confirm_delete(fake_client, MagicMock())

        assert state.edit_id is None

    def test_delete_failure(self, fake_client):
        fake_client.delete_glass_type.side_effect = APIError("En uso", status_code=409)
        on_change = MagicMock()
        state = GlassTypesManagerState()
        state.request_delete("g1")

        assert not state.confirm_delete(fake_client, on_change)

        assert state.error == "En uso"
        on_change.assert_not_called()

    def test_find(self, glass_types):
        state = GlassTypesManagerState(glass_types=tuple(glass_types))
        assert state.find("g3") == GlassType("g3", "Espejo", 180.0)
