"""
Inbound event definitions for the turn engine.

Rules:
- Events describe facts that have occurred (one per host turn).
- Events carry data only (no behavior).
- All controller decisions are based on these events.
- No clocks, no timers, no I/O.

Recognizer events (check-ins, presses, timeouts) are reported by the
external timed-recognizer subsystem and carry the request id of the turn
that armed the window they came from.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# =============================================================================
# Event Type Enumeration
# =============================================================================

class EventType(str, Enum):
    """
    Canonical event types understood by the reducer.

    Every (mode, event_type) pair must be explicitly handled
    or explicitly ignored by the reducer.
    """

    SESSION_STARTED = "SESSION_STARTED"
    COLOR_CHOICE = "COLOR_CHOICE"
    FIRST_CHECK_IN = "FIRST_CHECK_IN"
    SECOND_CHECK_IN = "SECOND_CHECK_IN"
    BUTTON_PRESSED = "BUTTON_PRESSED"
    TIMEOUT = "TIMEOUT"


# =============================================================================
# Base Events
# =============================================================================

@dataclass(frozen=True)
class Event:
    """
    Base event type.

    All events must specify:
    - event_type: discriminant
    - ts_ms: timestamp provided by the host (or fake in tests)
    - request_id: id of the host request delivering this event
    """

    event_type: EventType
    ts_ms: int
    request_id: str


@dataclass(frozen=True)
class RecognizerEvent(Event):
    """
    Base class for events reported by a timed-recognizer window.

    originating_request_id identifies the window; the reducer compares it
    with SessionState.current_handler_id for logging only.
    """

    originating_request_id: str | None


# =============================================================================
# Speech Events
# =============================================================================

@dataclass(frozen=True)
class SessionStarted(Event):
    """Conversation opened; a fresh session must be set up."""


@dataclass(frozen=True)
class ColorChoice(Event):
    """
    Player named a color.

    color is None when the classifier matched the intent but the
    slot value was missing.
    """
    color: str | None


# =============================================================================
# Roll-call Events
# =============================================================================

@dataclass(frozen=True)
class FirstCheckIn(RecognizerEvent):
    """First anonymous button was pressed during roll call."""
    device_id: str


@dataclass(frozen=True)
class SecondCheckIn(RecognizerEvent):
    """
    Second button checked in.

    When both buttons arrived in the same report, second_device_id
    carries the other id.
    """
    device_id: str
    second_device_id: str | None = None


# =============================================================================
# Round Events
# =============================================================================

@dataclass(frozen=True)
class ButtonPressed(RecognizerEvent):
    """The play button was pressed while showing reported_color."""
    device_id: str
    reported_color: str


@dataclass(frozen=True)
class Timeout(RecognizerEvent):
    """The active window elapsed; scope is decided by the current mode."""
