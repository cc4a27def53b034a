# pylint: disable=missing-module-docstring,missing-function-docstring
import random

import pytest

from game import gameplay
from game.animations import make_rolling_animation, solid
from game.commands import (
    ArmTimedWindow,
    SetIdlePattern,
    SetPressDownPattern,
    SetReleasePattern,
)
from game.enums.mode import Mode
from game.enums.phase import Phase
from game.events import ButtonPressed, ColorChoice, EventType, Timeout
from game.recognizers import BUTTON_DOWN_EVENT, TIMEOUT_EVENT
from game.state_dataclass import SessionState
from settings import ROLLING_STEP_MS, ROUND_WINDOW_MS, GameSettings


PALETTE = GameSettings(
    color_shades={
        "red": ("crimson", "scarlet", "ruby", "cherry"),
        "blue": ("navy", "azure"),
    },
    waiting_audio="<wait/>",
    winning_audio="<win/>",
    losing_audio="<lose/>",
)


class FixedRandom(random.Random):
    """Always draws the given index."""

    def __init__(self, index: int) -> None:
        super().__init__(0)
        self._index = index

    def randrange(self, *args, **kwargs):  # type: ignore[override]
        return self._index


# ---------------------------------------------------------------------
# Event helpers
# ---------------------------------------------------------------------

def color_choice(color: str | None) -> ColorChoice:
    return ColorChoice(
        event_type=EventType.COLOR_CHOICE, ts_ms=5, request_id="req_color", color=color
    )


def pressed(color: str, device_id: str = "B") -> ButtonPressed:
    return ButtonPressed(
        event_type=EventType.BUTTON_PRESSED,
        ts_ms=6,
        request_id="req_press",
        originating_request_id="req_color",
        device_id=device_id,
        reported_color=color,
    )


def expired() -> Timeout:
    return Timeout(
        event_type=EventType.TIMEOUT,
        ts_ms=7,
        request_id="req_timeout",
        originating_request_id="req_color",
    )


def play_state(**overrides) -> SessionState:
    fields = {
        "mode": Mode.PLAY,
        "device_ids": ("Device ID listings", "A", "B"),
        "button_count": 2,
        "roll_call_complete": True,
        "current_handler_id": "req_launch",
    }
    fields.update(overrides)
    return SessionState(**fields)


def armed_state(shade: str = "crimson") -> SessionState:
    return play_state(
        color_choice="red",
        reference_color_shade=shade,
        current_handler_id="req_color",
    )


# ---------------------------------------------------------------------
# Color choice: invalid
# ---------------------------------------------------------------------

@pytest.mark.parametrize("color", ["purple", "", None])
def test_unknown_color_reprompts_without_state_change(color):
    state = play_state()

    new_state, outcome = gameplay.handle_color_choice(
        state, color_choice(color), random.Random(0), PALETTE
    )

    assert new_state == state
    assert new_state.color_choice is None
    assert new_state.reference_color_shade is None
    assert new_state.phase is Phase.AWAITING_COLOR
    assert outcome.reprompt == ("What color was that? Please pick a valid color!",)
    assert outcome.speech[0].startswith("Sorry, I didn't get that.")
    assert outcome.directives == ()
    assert outcome.open_microphone is True


# ---------------------------------------------------------------------
# Color choice: valid
# ---------------------------------------------------------------------

@pytest.mark.parametrize("seed", range(20))
def test_reference_shade_is_always_from_the_chosen_color(seed):
    new_state, _ = gameplay.handle_color_choice(
        play_state(), color_choice("red"), random.Random(seed), PALETTE
    )

    assert new_state.color_choice == "red"
    assert new_state.reference_color_shade in PALETTE.color_shades["red"]


def test_color_match_ignores_spoken_case():
    new_state, _ = gameplay.handle_color_choice(
        play_state(), color_choice("Blue"), FixedRandom(1), PALETTE
    )

    assert new_state.color_choice == "blue"
    assert new_state.reference_color_shade == "azure"


def test_valid_color_arms_round_window_on_play_button():
    new_state, outcome = gameplay.handle_color_choice(
        play_state(), color_choice("red"), FixedRandom(0), PALETTE
    )

    arm = outcome.directives[0]
    assert isinstance(arm, ArmTimedWindow)
    assert arm.window_ms == ROUND_WINDOW_MS == 20_000
    assert arm.proxies == ()
    assert arm.trigger_spec.recognizers[0].pattern[0].gadget_ids == ("B",)
    assert [e.name for e in arm.trigger_spec.events] == [BUTTON_DOWN_EVENT, TIMEOUT_EVENT]

    assert new_state.current_handler_id == "req_color"
    assert new_state.phase is Phase.AWAITING_PRESS
    assert new_state.mode is Mode.PLAY
    assert outcome.open_microphone is False


def test_valid_color_lights_both_buttons():
    _, outcome = gameplay.handle_color_choice(
        play_state(), color_choice("red"), FixedRandom(0), PALETTE
    )

    _, reference, rolling, down, up = outcome.directives

    assert isinstance(reference, SetIdlePattern)
    assert reference.targets == ("A",)
    assert reference.pattern == solid(1, "crimson", ROUND_WINDOW_MS)

    assert isinstance(rolling, SetIdlePattern)
    assert rolling.targets == ("B",)
    assert rolling.pattern == make_rolling_animation(
        PALETTE.color_shades["red"], ROLLING_STEP_MS
    )

    assert isinstance(down, SetPressDownPattern)
    assert down.targets == ("B",)
    assert isinstance(up, SetReleasePattern)
    assert up.targets == ("A", "B")


def test_valid_color_speech():
    _, outcome = gameplay.handle_color_choice(
        play_state(), color_choice("red"), FixedRandom(0), PALETTE
    )

    assert outcome.speech[0] == "Ok. red it is. "
    assert outcome.speech[-1] == "<wait/>"


# ---------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------

def test_matching_press_wins():
    new_state, outcome = gameplay.handle_button_pressed(armed_state(), pressed("crimson"), PALETTE)

    assert outcome.speech[0].startswith("<win/>Colors Match!")
    assert new_state.mode is Mode.EXIT_CONFIRM
    assert new_state.expecting_end_confirmation is True
    assert outcome.open_microphone is True
    assert outcome.logs[0].event["decision"] == "round_won"


@pytest.mark.parametrize("reported", ["CRIMSON", "Crimson", "cRiMsOn"])
def test_scoring_is_case_insensitive(reported):
    _, exact = gameplay.handle_button_pressed(armed_state(), pressed("crimson"), PALETTE)
    _, other_case = gameplay.handle_button_pressed(armed_state(), pressed(reported), PALETTE)

    assert other_case.speech == exact.speech
    assert other_case.directives == exact.directives


def test_mismatching_press_loses():
    new_state, outcome = gameplay.handle_button_pressed(armed_state(), pressed("scarlet"), PALETTE)

    assert outcome.speech[0].startswith("<lose/>Close, but the colors don't match.")
    assert new_state.mode is Mode.EXIT_CONFIRM
    assert new_state.expecting_end_confirmation is True
    assert outcome.logs[0].event["decision"] == "round_lost"


def test_result_resets_press_feedback_on_both_buttons():
    _, outcome = gameplay.handle_button_pressed(armed_state(), pressed("scarlet"), PALETTE)

    idle, down, up = outcome.directives
    assert isinstance(idle, SetIdlePattern)
    assert isinstance(down, SetPressDownPattern)
    assert isinstance(up, SetReleasePattern)
    assert idle.targets == down.targets == up.targets == ("A", "B")


def test_is_match_without_reference_is_false():
    assert gameplay.is_match(None, "crimson") is False


# ---------------------------------------------------------------------
# Round timeout
# ---------------------------------------------------------------------

def test_round_timeout_offers_replay():
    new_state, outcome = gameplay.handle_round_timeout(armed_state(), expired(), PALETTE)

    assert outcome.speech == ("Time is up. Would you like to play again?",)
    assert outcome.reprompt == (gameplay.PLAY_AGAIN_REPROMPT,)
    assert new_state.mode is Mode.EXIT_CONFIRM
    assert new_state.expecting_end_confirmation is True
    assert outcome.open_microphone is True

    fade = outcome.directives[0]
    assert isinstance(fade, SetIdlePattern)
    assert fade.pattern[0].sequence[0].color == "CRIMSON"


@pytest.mark.parametrize(
    ("reference", "reported"),
    [("dark green", "006400"), ("Red", "ff0000"), ("ff0000", "RED")],
)
def test_named_shade_matches_the_hex_the_button_shows(reference, reported):
    assert gameplay.is_match(reference, reported) is True


def test_named_shade_does_not_match_another_color():
    assert gameplay.is_match("dark green", "00FF00") is False
