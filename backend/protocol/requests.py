"""
Inbound request decoding.

Host request (one per turn):

    {
        "session_id": "sess_...",
        "request_id": "req_...",
        "ts_ms": 1700000000000,            # optional, defaults to 0
        "attributes": {...},               # optional, round-tripped record
        "request": {
            "type": "LaunchRequest"
                  | "IntentRequest"
                  | "InputHandlerEvent",
            ...
        }
    }

IntentRequest:
    {"type": "IntentRequest", "intent": {"name": "ColorIntent",
     "slots": {"color": {"value": "red"}}}}

InputHandlerEvent:
    {"type": "InputHandlerEvent", "originating_request_id": "req_...",
     "events": [{"name": "button_down_event",
                 "inputs": [{"gadget_id": "...", "color": "FF0000",
                             "action": "down"}]}]}

Usage example:

    request = decode_request(raw_json)
    new_state, outcome = reduce(
        from_attributes(request.attributes), request.event, rng=rng
    )
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from game.events import (
    ButtonPressed,
    ColorChoice,
    Event,
    EventType,
    FirstCheckIn,
    SecondCheckIn,
    SessionStarted,
    Timeout,
)
from game.recognizers import (
    BUTTON_DOWN_EVENT,
    FIRST_BUTTON_CHECKED_IN_EVENT,
    SECOND_BUTTON_CHECKED_IN_EVENT,
    TIMEOUT_EVENT,
)
from protocol.errors import RequestDecodeError

COLOR_INTENT = "ColorIntent"


@dataclass(frozen=True)
class DecodedRequest:
    """A host request reduced to what the turn engine needs."""
    session_id: str
    event: Event
    attributes: Mapping[str, Any] = field(default_factory=dict)


# -------------------------
# Low-level helpers
# -------------------------

def _require_str(obj: Mapping[str, Any], key: str) -> str:
    value = obj.get(key)
    if not isinstance(value, str) or not value:
        raise RequestDecodeError(f"missing or invalid {key!r}")
    return value


def _require_mapping(obj: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = obj.get(key)
    if not isinstance(value, Mapping):
        raise RequestDecodeError(f"{key!r} must be an object")
    return value


def _gadget_inputs(event: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    inputs = event.get("inputs")
    if not isinstance(inputs, list) or not all(isinstance(i, Mapping) for i in inputs):
        raise RequestDecodeError("'inputs' must be a list of objects")
    return inputs


# -------------------------
# Request kinds
# -------------------------

def _decode_intent(body: Mapping[str, Any], *, ts_ms: int, request_id: str) -> Event:
    intent = _require_mapping(body, "intent")
    name = _require_str(intent, "name")
    if name != COLOR_INTENT:
        raise RequestDecodeError(f"unsupported intent {name!r}")

    slots = intent.get("slots") or {}
    slot = slots.get("color") if isinstance(slots, Mapping) else None
    value = slot.get("value") if isinstance(slot, Mapping) else None
    if value is not None and not isinstance(value, str):
        raise RequestDecodeError("color slot value must be a string")

    return ColorChoice(
        event_type=EventType.COLOR_CHOICE,
        ts_ms=ts_ms,
        request_id=request_id,
        color=value,
    )


def _decode_input_handler_event(
    body: Mapping[str, Any], *, ts_ms: int, request_id: str
) -> Event:
    events = body.get("events")
    if not isinstance(events, list) or not events or not isinstance(events[0], Mapping):
        raise RequestDecodeError("'events' must be a non-empty list of objects")

    # The recognizer reports one named event per request
    first = events[0]
    name = _require_str(first, "name")
    origin = body.get("originating_request_id")
    if origin is not None and not isinstance(origin, str):
        raise RequestDecodeError("'originating_request_id' must be a string")

    common: dict[str, Any] = {
        "ts_ms": ts_ms,
        "request_id": request_id,
        "originating_request_id": origin,
    }

    if name == TIMEOUT_EVENT:
        return Timeout(event_type=EventType.TIMEOUT, **common)

    inputs = _gadget_inputs(first)
    if not inputs:
        raise RequestDecodeError(f"event {name!r} carries no inputs")
    gadget_ids = [_require_str(i, "gadget_id") for i in inputs]

    if name == FIRST_BUTTON_CHECKED_IN_EVENT:
        return FirstCheckIn(
            event_type=EventType.FIRST_CHECK_IN,
            device_id=gadget_ids[0],
            **common,
        )

    if name == SECOND_BUTTON_CHECKED_IN_EVENT:
        return SecondCheckIn(
            event_type=EventType.SECOND_CHECK_IN,
            device_id=gadget_ids[0],
            second_device_id=gadget_ids[1] if len(gadget_ids) > 1 else None,
            **common,
        )

    if name == BUTTON_DOWN_EVENT:
        return ButtonPressed(
            event_type=EventType.BUTTON_PRESSED,
            device_id=gadget_ids[0],
            reported_color=_require_str(inputs[0], "color"),
            **common,
        )

    raise RequestDecodeError(f"unknown input handler event {name!r}")


# -------------------------
# Public API
# -------------------------

def decode_request(raw: str | bytes) -> DecodedRequest:
    """
    Decode one host request.

    Raises:
        RequestDecodeError on malformed JSON or unknown request kinds.
    """
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise RequestDecodeError(f"invalid JSON: {e}") from e

    if not isinstance(payload, Mapping):
        raise RequestDecodeError("request must be a JSON object")

    session_id = _require_str(payload, "session_id")
    request_id = _require_str(payload, "request_id")
    ts_ms = payload.get("ts_ms", 0)
    if not isinstance(ts_ms, int) or isinstance(ts_ms, bool):
        raise RequestDecodeError("'ts_ms' must be an integer")

    attributes = payload.get("attributes") or {}
    if not isinstance(attributes, Mapping):
        raise RequestDecodeError("'attributes' must be an object")

    body = _require_mapping(payload, "request")
    kind = _require_str(body, "type")

    if kind == "LaunchRequest":
        event: Event = SessionStarted(
            event_type=EventType.SESSION_STARTED,
            ts_ms=ts_ms,
            request_id=request_id,
        )
    elif kind == "IntentRequest":
        event = _decode_intent(body, ts_ms=ts_ms, request_id=request_id)
    elif kind == "InputHandlerEvent":
        event = _decode_input_handler_event(body, ts_ms=ts_ms, request_id=request_id)
    else:
        raise RequestDecodeError(f"unsupported request type {kind!r}")

    return DecodedRequest(session_id=session_id, event=event, attributes=attributes)
