# pylint: disable=missing-module-docstring,missing-function-docstring
import json

import pytest

from game.enums.mode import Mode
from game.state_dataclass import SessionState
from protocol.errors import AttributeDecodeError
from session.attributes import from_attributes, to_attributes


def bound_state() -> SessionState:
    return SessionState(
        mode=Mode.PLAY,
        device_ids=("Device ID listings", "A", "B"),
        button_count=2,
        roll_call_complete=True,
        color_choice="red",
        reference_color_shade="DC143C",
        current_handler_id="req_4",
    )


def test_record_uses_flat_json_safe_values():
    record = to_attributes(bound_state())

    assert record["state"] == "PLAY_MODE"
    assert record["DeviceIDs"] == ["Device ID listings", "A", "B"]
    assert record["buttonCount"] == 2
    assert record["RefColorShade"] == "DC143C"
    assert record["CurrentInputHandlerID"] == "req_4"
    # host round-trips it as JSON
    assert from_attributes(json.loads(json.dumps(record))) == bound_state()


@pytest.mark.parametrize("record", [None, {}])
def test_empty_record_is_a_new_session(record):
    assert from_attributes(record) == SessionState()


def test_missing_keys_take_defaults():
    state = from_attributes({"state": "ROLL_CALL_MODE", "DeviceIDs": ["Device ID listings", "A"], "buttonCount": 1})

    assert state.button_count == 1
    assert state.expecting_end_confirmation is False
    assert state.color_choice is None


@pytest.mark.parametrize(
    "record",
    [
        {"state": "DANCE_MODE"},
        {"DeviceIDs": "A,B"},
        {"DeviceIDs": ["p", "A", "B", "C"], "buttonCount": 3},
        {"DeviceIDs": ["p", "A"], "buttonCount": 2},
        {"buttonCount": True},
        {"isRollCallComplete": "yes"},
        {"RefColorShade": 12},
        {"state": "PLAY_MODE", "buttonCount": 0, "isRollCallComplete": False},
        {"state": "EXIT_MODE", "DeviceIDs": ["p", "A"], "buttonCount": 1},
    ],
)
def test_malformed_records_are_rejected(record):
    with pytest.raises(AttributeDecodeError):
        from_attributes(record)


def test_exit_mode_with_both_buttons_is_accepted():
    record = to_attributes(bound_state())
    record["state"] = "EXIT_MODE"
    record["expectingEndSkillConfirmation"] = True

    state = from_attributes(record)

    assert state.mode is Mode.EXIT_CONFIRM
    assert state.play_device_id == "B"
