"""Shared fixtures for overbind tests."""

import json

import pytest

from model import BindGroups, BindKind, BindModel, PersistedRecord, Side
from session import KeymapSession
from store import BindConfigFile


@pytest.fixture
def model():
    """Empty bind model."""
    return BindModel()


@pytest.fixture
def groups(model):
    """Group manager over the empty model."""
    return BindGroups(model)


@pytest.fixture
def populated(model, groups):
    """Model with one of each kind: keyboard, controller, an SOCD pair, a mash group."""
    keyboard = model.create(BindKind.KEYBOARD)
    keyboard.input, keyboard.output = "Q", "E"

    controller = model.create(BindKind.CONTROLLER)
    controller.input, controller.output = "X", "RIGHT STICK UP"

    left, right = groups.add_socd_pair()
    groups.set_socd_side(left, Side.INPUT, "Left")
    groups.set_socd_side(right, Side.INPUT, "Right")

    for bind, key in zip(groups.add_mash_trigger_group(), ["Z", "C", "V"]):
        groups.set_mash_trigger_input(bind, key)

    return model, groups


@pytest.fixture
def sample_records():
    """Records covering every kind, as the engine would write them."""
    return [
        PersistedRecord(keycode="51", result_type="keyboard", result_value=0x45),
        PersistedRecord(keycode="58", result_type="thumb_ry", result_value=32767),
        PersistedRecord(keycode="25", result_type="socd", result_value=0x27),
        PersistedRecord(keycode="27", result_type="socd", result_value=0x25),
        PersistedRecord(keycode="5a", result_type="mash_trigger", result_value=0x5A),
        PersistedRecord(keycode="43", result_type="mash_trigger", result_value=0x43),
        PersistedRecord(keycode="56", result_type="mash_trigger", result_value=0x56),
    ]


@pytest.fixture
def config_path(tmp_path):
    """Path for a bind config file inside a temp directory."""
    return tmp_path / "overbind" / "OverBind_conf.json"


@pytest.fixture
def config_file(config_path, sample_records):
    """Bind config file pre-populated with the sample records."""
    config_path.parent.mkdir(parents=True)
    config_path.write_text(json.dumps([r.to_dict() for r in sample_records], indent=2))
    return BindConfigFile(config_path)


@pytest.fixture
def session(config_file):
    """Session over the sample config file (not yet loaded)."""
    return KeymapSession(config_file)
