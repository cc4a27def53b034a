"""
Trigger specifications handed to the timed-recognizer subsystem.

A trigger spec names the hardware patterns to watch for (recognizers)
and the events reported back when they match (named events). The
recognizer subsystem reports matches back as inbound events whose
names are the *_EVENT constants below.
"""

from __future__ import annotations

from dataclasses import dataclass

from settings import FIRST_BUTTON_PROXY, SECOND_BUTTON_PROXY


# =============================================================================
# Reported event names
# =============================================================================

FIRST_BUTTON_CHECKED_IN_EVENT = "first_button_checked_in"
SECOND_BUTTON_CHECKED_IN_EVENT = "second_button_checked_in"
BUTTON_DOWN_EVENT = "button_down_event"
TIMEOUT_EVENT = "timeout"

# Built-in recognizer provided by the subsystem itself
TIMED_OUT_RECOGNIZER = "timed out"


# =============================================================================
# Spec value types
# =============================================================================

@dataclass(frozen=True)
class PatternStep:
    gadget_ids: tuple[str, ...]
    action: str = "down"


@dataclass(frozen=True)
class Recognizer:
    """Match recognizer over a sequence of button actions."""
    name: str
    pattern: tuple[PatternStep, ...]
    fuzzy: bool = False
    anchor: str = "end"


@dataclass(frozen=True)
class NamedEvent:
    """Event reported when all of `meets` have matched."""
    name: str
    meets: tuple[str, ...]
    reports: str = "matches"
    should_end_window: bool = True
    maximum_invocations: int | None = None


@dataclass(frozen=True)
class TriggerSpec:
    recognizers: tuple[Recognizer, ...]
    events: tuple[NamedEvent, ...]


_TIMEOUT = NamedEvent(
    name=TIMEOUT_EVENT,
    meets=(TIMED_OUT_RECOGNIZER,),
    reports="history",
    should_end_window=True,
)


# =============================================================================
# Roll call
# =============================================================================

ROLL_CALL_PROXIES: tuple[str, ...] = (FIRST_BUTTON_PROXY, SECOND_BUTTON_PROXY)

ROLL_CALL_TRIGGERS = TriggerSpec(
    recognizers=(
        Recognizer(
            name="roll_call_first_button_recognizer",
            pattern=(PatternStep((FIRST_BUTTON_PROXY,)),),
        ),
        # Fuzzy so both presses may arrive in either one or two reports
        Recognizer(
            name="roll_call_second_button_recognizer",
            pattern=(
                PatternStep((FIRST_BUTTON_PROXY,)),
                PatternStep((SECOND_BUTTON_PROXY,)),
            ),
            fuzzy=True,
        ),
    ),
    events=(
        NamedEvent(
            name=FIRST_BUTTON_CHECKED_IN_EVENT,
            meets=("roll_call_first_button_recognizer",),
            should_end_window=False,
            maximum_invocations=1,
        ),
        NamedEvent(
            name=SECOND_BUTTON_CHECKED_IN_EVENT,
            meets=("roll_call_second_button_recognizer",),
            should_end_window=True,
            maximum_invocations=1,
        ),
        _TIMEOUT,
    ),
)


# =============================================================================
# Round
# =============================================================================

def round_triggers(play_device_id: str) -> TriggerSpec:
    """Watch for a single press-down on the play button."""
    return TriggerSpec(
        recognizers=(
            Recognizer(
                name="button_down_recognizer",
                pattern=(PatternStep((play_device_id,)),),
            ),
        ),
        events=(
            NamedEvent(
                name=BUTTON_DOWN_EVENT,
                meets=("button_down_recognizer",),
                should_end_window=True,
            ),
            _TIMEOUT,
        ),
    )
