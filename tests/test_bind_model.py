"""Tests for the bind model."""

import pytest

from model import Bind, BindKind, GroupedBindRemoval, Side, UnknownBindId


class TestBindKind:
    """Test BindKind tags."""

    def test_from_tag(self):
        assert BindKind.from_tag("keyboard") is BindKind.KEYBOARD
        assert BindKind.from_tag("socd") is BindKind.SOCD
        assert BindKind.from_tag("mash_trigger") is BindKind.MASH_TRIGGER

    def test_controller_has_no_tag(self):
        """Controller binds are written with the controller table's tags."""
        assert BindKind.from_tag("controller") is None

    def test_unknown_tag(self):
        assert BindKind.from_tag("turbo") is None

    def test_grouped_kinds(self):
        assert BindKind.SOCD.is_grouped
        assert BindKind.MASH_TRIGGER.is_grouped
        assert not BindKind.KEYBOARD.is_grouped
        assert not BindKind.CONTROLLER.is_grouped

    def test_output_is_key(self):
        assert not BindKind.CONTROLLER.output_is_key
        assert BindKind.SOCD.output_is_key


class TestBind:
    def test_sides(self):
        bind = Bind(id=0, kind=BindKind.KEYBOARD)
        bind.set_side(Side.INPUT, "Q")
        bind.set_side(Side.OUTPUT, "E")
        assert bind.get_side(Side.INPUT) == "Q"
        assert bind.get_side(Side.OUTPUT) == "E"

    def test_opposite_side(self):
        assert Side.INPUT.opposite is Side.OUTPUT
        assert Side.OUTPUT.opposite is Side.INPUT

    def test_str(self):
        assert str(Bind(id=3, kind=BindKind.KEYBOARD, input="Q", output="E")) == "[3] Keyboard: Q -> E"
        assert str(Bind(id=4)) == "[4] ?: - -> -"


class TestBindModel:
    """Test BindModel create/update/remove."""

    def test_create_is_empty(self, model):
        bind = model.create()
        assert bind.kind is None
        assert bind.input == ""
        assert bind.output == ""

    def test_ids_increase(self, model):
        ids = [model.create().id for _ in range(3)]
        assert ids == [0, 1, 2]

    def test_id_follows_highest_remaining(self, model):
        """New ids are max existing id + 1."""
        first = model.create(BindKind.KEYBOARD)
        last = model.create(BindKind.KEYBOARD)
        model.remove(first.id)
        assert model.create().id == 2
        model.remove(last.id)
        assert model.create().id == 3

    def test_id_restarts_at_zero_when_empty(self, model):
        bind = model.create(BindKind.KEYBOARD)
        model.remove(bind.id)
        assert model.create().id == 0

    def test_list_keeps_creation_order(self, model):
        first = model.create(BindKind.KEYBOARD)
        second = model.create(BindKind.CONTROLLER)
        third = model.create(BindKind.KEYBOARD)
        model.remove(second.id)
        assert [b.id for b in model.list()] == [first.id, third.id]
        assert [b.id for b in model] == [first.id, third.id]

    def test_get_unknown_id(self, model):
        with pytest.raises(UnknownBindId) as exc_info:
            model.get(42)
        assert exc_info.value.bind_id == 42

    def test_update_one_field(self, model):
        bind = model.create(BindKind.KEYBOARD)
        model.update(bind.id, "input", "Q")
        assert bind.input == "Q"
        assert bind.output == ""
        assert bind.kind is BindKind.KEYBOARD

    def test_update_kind_from_tag(self, model):
        bind = model.create()
        model.update(bind.id, "kind", "controller")
        assert bind.kind is BindKind.CONTROLLER

    def test_update_unknown_id(self, model):
        with pytest.raises(UnknownBindId):
            model.update(7, "input", "Q")

    def test_update_unknown_field(self, model):
        bind = model.create()
        with pytest.raises(ValueError, match="Cannot update"):
            model.update(bind.id, "id", 5)

    def test_remove_ungrouped(self, model):
        bind = model.create(BindKind.KEYBOARD)
        removed = model.remove(bind.id)
        assert removed is bind
        assert bind.id not in model
        assert len(model) == 0

    def test_remove_unknown_id(self, model):
        with pytest.raises(UnknownBindId):
            model.remove(0)

    @pytest.mark.parametrize("kind", [BindKind.SOCD, BindKind.MASH_TRIGGER])
    def test_bare_remove_of_grouped_bind_rejected(self, model, kind):
        """Grouped binds must be removed with their group."""
        bind = model.create(kind)
        with pytest.raises(GroupedBindRemoval):
            model.remove(bind.id)
        assert bind.id in model

    def test_of_kind(self, populated):
        model, _ = populated
        assert len(model.of_kind(BindKind.SOCD)) == 2
        assert len(model.of_kind(BindKind.MASH_TRIGGER)) == 3
        assert len(model.of_kind(BindKind.KEYBOARD)) == 1
