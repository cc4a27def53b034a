"""
Session attribute record (de)serialization.

Responsibilities:
- Flatten SessionState into the key-value record the host round-trips
- Rebuild SessionState from that record

Non-responsibilities:
- No game decisions
- No wire encoding of the record itself (the host owns it)
"""

from __future__ import annotations

from typing import Any, Mapping

from game.enums.mode import Mode
from game.state_dataclass import SessionState
from protocol.errors import AttributeDecodeError
from settings import DEVICE_ID_PLACEHOLDER, MAX_BUTTONS

KEY_MODE = "state"
KEY_DEVICE_IDS = "DeviceIDs"
KEY_BUTTON_COUNT = "buttonCount"
KEY_ROLL_CALL_COMPLETE = "isRollCallComplete"
KEY_COLOR_CHOICE = "ColorChoice"
KEY_REFERENCE_SHADE = "RefColorShade"
KEY_HANDLER_ID = "CurrentInputHandlerID"
KEY_EXPECTING_END = "expectingEndSkillConfirmation"


def to_attributes(state: SessionState) -> dict[str, Any]:
    """Flatten state into a JSON-safe record."""
    return {
        KEY_MODE: state.mode.value,
        KEY_DEVICE_IDS: list(state.device_ids),
        KEY_BUTTON_COUNT: state.button_count,
        KEY_ROLL_CALL_COMPLETE: state.roll_call_complete,
        KEY_COLOR_CHOICE: state.color_choice,
        KEY_REFERENCE_SHADE: state.reference_color_shade,
        KEY_HANDLER_ID: state.current_handler_id,
        KEY_EXPECTING_END: state.expecting_end_confirmation,
    }


def from_attributes(record: Mapping[str, Any] | None) -> SessionState:
    """
    Rebuild state from a record; missing keys take their defaults.

    Raises:
        AttributeDecodeError if a present value has the wrong shape.
    """
    if not record:
        return SessionState()

    defaults = SessionState()

    try:
        mode = Mode(record.get(KEY_MODE, defaults.mode.value))
    except ValueError as e:
        raise AttributeDecodeError(f"unknown mode {record.get(KEY_MODE)!r}") from e

    device_ids = record.get(KEY_DEVICE_IDS, list(defaults.device_ids))
    if (
        not isinstance(device_ids, list)
        or not all(isinstance(d, str) for d in device_ids)
        or len(device_ids) > MAX_BUTTONS + 1
    ):
        raise AttributeDecodeError(f"{KEY_DEVICE_IDS} must be a list of at most three strings")
    if not device_ids:
        device_ids = [DEVICE_ID_PLACEHOLDER]

    button_count = record.get(KEY_BUTTON_COUNT, defaults.button_count)
    if not isinstance(button_count, int) or isinstance(button_count, bool):
        raise AttributeDecodeError(f"{KEY_BUTTON_COUNT} must be an integer")
    if button_count != len(device_ids) - 1:
        raise AttributeDecodeError(
            f"{KEY_BUTTON_COUNT}={button_count} does not match {len(device_ids) - 1} bound devices"
        )
    # Only roll call may run with unbound slots
    if mode is not Mode.ROLL_CALL and button_count < MAX_BUTTONS:
        raise AttributeDecodeError(
            f"{KEY_MODE}={mode.value} needs {MAX_BUTTONS} bound devices, got {button_count}"
        )

    return SessionState(
        mode=mode,
        device_ids=tuple(device_ids),
        button_count=button_count,
        roll_call_complete=_bool(record, KEY_ROLL_CALL_COMPLETE, defaults.roll_call_complete),
        color_choice=_optional_str(record, KEY_COLOR_CHOICE),
        reference_color_shade=_optional_str(record, KEY_REFERENCE_SHADE),
        current_handler_id=_optional_str(record, KEY_HANDLER_ID),
        expecting_end_confirmation=_bool(record, KEY_EXPECTING_END, defaults.expecting_end_confirmation),
    )


def _bool(record: Mapping[str, Any], key: str, default: bool) -> bool:
    value = record.get(key, default)
    if not isinstance(value, bool):
        raise AttributeDecodeError(f"{key} must be a boolean")
    return value


def _optional_str(record: Mapping[str, Any], key: str) -> str | None:
    value = record.get(key)
    if value is not None and not isinstance(value, str):
        raise AttributeDecodeError(f"{key} must be a string or null")
    return value
