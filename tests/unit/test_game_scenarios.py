# pylint: disable=missing-module-docstring,missing-function-docstring
import random

from game.reducer import reduce
from game.state_dataclass import SessionState
from game.outcome import TurnOutcome
from game.enums.mode import Mode
from game.events import (
    EventType,
    ButtonPressed,
    ColorChoice,
    Event,
    FirstCheckIn,
    SecondCheckIn,
    SessionStarted,
    Timeout,
)
from settings import GameSettings


PALETTE = GameSettings(
    color_shades={"red": ("crimson", "scarlet", "ruby")},
)


class FirstShade(random.Random):
    """Deterministic draw: always index 0 ("crimson")."""

    def randrange(self, *args, **kwargs):  # type: ignore[override]
        return 0


# ---------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------

def play(*events: Event) -> tuple[SessionState, list[TurnOutcome]]:
    rng = FirstShade()
    state = SessionState()
    outcomes: list[TurnOutcome] = []
    for event in events:
        state, outcome = reduce(state, event, rng=rng, settings=PALETTE)
        outcomes.append(outcome)
    return state, outcomes


def launch() -> SessionStarted:
    return SessionStarted(event_type=EventType.SESSION_STARTED, ts_ms=1, request_id="r1")


def first(device_id: str) -> FirstCheckIn:
    return FirstCheckIn(
        event_type=EventType.FIRST_CHECK_IN,
        ts_ms=2,
        request_id="r2",
        originating_request_id="r1",
        device_id=device_id,
    )


def second(device_id: str, other: str | None = None) -> SecondCheckIn:
    return SecondCheckIn(
        event_type=EventType.SECOND_CHECK_IN,
        ts_ms=3,
        request_id="r3",
        originating_request_id="r1",
        device_id=device_id,
        second_device_id=other,
    )


def color(name: str) -> ColorChoice:
    return ColorChoice(event_type=EventType.COLOR_CHOICE, ts_ms=4, request_id="r4", color=name)


def press(device_id: str, reported: str) -> ButtonPressed:
    return ButtonPressed(
        event_type=EventType.BUTTON_PRESSED,
        ts_ms=5,
        request_id="r5",
        originating_request_id="r4",
        device_id=device_id,
        reported_color=reported,
    )


def expired(origin: str) -> Timeout:
    return Timeout(
        event_type=EventType.TIMEOUT,
        ts_ms=6,
        request_id="r6",
        originating_request_id=origin,
    )


# ---------------------------------------------------------------------
# Full rounds
# ---------------------------------------------------------------------

def test_full_round_win():
    state, outcomes = play(
        launch(), first("A"), second("B"), color("red"), press("B", "crimson")
    )

    assert state.device_ids == ("Device ID listings", "A", "B")
    assert state.reference_color_shade == "crimson"
    assert "Colors Match! Great job." in outcomes[-1].speech[0]
    assert state.mode is Mode.EXIT_CONFIRM
    assert state.expecting_end_confirmation is True


def test_full_round_lose():
    state, outcomes = play(
        launch(), first("A"), second("B"), color("red"), press("B", "scarlet")
    )

    assert "the colors don't match" in outcomes[-1].speech[0]
    assert state.mode is Mode.EXIT_CONFIRM
    assert state.expecting_end_confirmation is True


def test_full_round_timeout():
    state, outcomes = play(
        launch(), first("A"), second("B"), color("red"), expired("r4")
    )

    assert outcomes[-1].speech == ("Time is up. Would you like to play again?",)
    assert state.mode is Mode.EXIT_CONFIRM


def test_roll_call_timeout_without_devices():
    state, outcomes = play(launch(), expired("r1"))

    assert "Would you like more time to press the buttons?" in outcomes[-1].speech
    assert outcomes[-1].open_microphone is True
    assert state.expecting_end_confirmation is True
    assert state.mode is Mode.ROLL_CALL
    assert state.button_count == 0


def test_both_buttons_in_one_report():
    state, _ = play(launch(), second("A", "B"), color("red"), press("B", "CRIMSON"))

    assert state.device_ids == ("Device ID listings", "A", "B")
    assert state.mode is Mode.EXIT_CONFIRM


# ---------------------------------------------------------------------
# Recovery & idempotence
# ---------------------------------------------------------------------

def test_invalid_color_then_valid_color():
    state, outcomes = play(launch(), first("A"), second("B"), color("purple"))

    assert state.mode is Mode.PLAY
    assert state.color_choice is None
    assert outcomes[-1].reprompt

    state, _ = reduce(state, color("red"), rng=FirstShade(), settings=PALETTE)
    assert state.reference_color_shade == "crimson"


def test_duplicate_first_check_in_after_roll_call_changes_nothing():
    state, _ = play(launch(), first("A"), second("B"))

    new_state, outcome = reduce(state, first("C"), rng=FirstShade(), settings=PALETTE)

    assert new_state == state
    assert new_state.device_ids == ("Device ID listings", "A", "B")
    assert outcome.directives == ()


def test_slots_are_never_reassigned_within_a_session():
    state, _ = play(launch(), first("A"), second("B"), color("red"))

    for late in (first("X"), second("Y", "Z")):
        state, _ = reduce(state, late, rng=FirstShade(), settings=PALETTE)

    assert state.device_ids == ("Device ID listings", "A", "B")
    assert state.button_count == 2


def test_named_palette_shade_can_be_won():
    named = GameSettings(color_shades={"green": ("dark green",)})
    rng = FirstShade()
    state = SessionState()
    outcome = None
    for event in (launch(), first("A"), second("B"), color("green")):
        state, outcome = reduce(state, event, rng=rng, settings=named)

    assert outcome is not None
    reference = outcome.directives[1]
    shown = reference.pattern[0].sequence[0].color
    assert reference.targets == ("A",)
    assert shown == "006400"

    state, outcome = reduce(state, press("B", shown), rng=rng, settings=named)

    assert "Colors Match! Great job." in outcome.speech[0]
    assert state.mode is Mode.EXIT_CONFIRM
