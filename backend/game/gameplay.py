"""
Game controller.

Sets up a round for the chosen color and scores the player's press.

AWAITING_COLOR -> AWAITING_PRESS -> (mode EXIT_CONFIRM)

Rules:
- Pure: (state, event) -> (new_state, outcome); no I/O.
- Randomness comes only from the injected random source.
- An unknown color is recovered locally with a reprompt.
"""

from __future__ import annotations

import random
from dataclasses import replace

from game import animations
from game.commands import (
    ArmTimedWindow,
    SetIdlePattern,
    SetPressDownPattern,
    SetReleasePattern,
)
from game.decision_log import log_decision, log_state_changed
from game.enums.mode import Mode
from game.events import ButtonPressed, ColorChoice, Timeout
from game.lighting import default_press_patterns
from game.outcome import OutcomeBuilder, TurnOutcome
from game.recognizers import round_triggers
from game.shades import pick_random_shade
from game.state_dataclass import SessionState
from settings import (
    DEFAULT_GAME_SETTINGS,
    PRESS_FLASH_MS,
    REFERENCE_HOLD_MS,
    RESULT_PULSE_CYCLES,
    ROLLING_STEP_MS,
    ROUND_FADE_OUT_MS,
    ROUND_WINDOW_MS,
    GameSettings,
)

Result = tuple[SessionState, TurnOutcome]

PLAY_AGAIN_REPROMPT = "Say Yes to keep playing, or No to exit"


# =============================================================================
# Round setup
# =============================================================================

def handle_color_choice(
    state: SessionState,
    event: ColorChoice,
    rng: random.Random,
    settings: GameSettings = DEFAULT_GAME_SETTINGS,
) -> Result:
    """Pick a target shade for the color and arm the press window."""
    out = OutcomeBuilder()
    shades = settings.shades_for(event.color)

    if not shades:
        out.reprompt_with("What color was that? Please pick a valid color!")
        out.say("Sorry, I didn't get that. " + out.reprompt[0])
        out.log(log_decision(state, event, "reprompt_color", {"color": event.color}))
        out.open_microphone = True
        return state, out.build()

    color = event.color.strip().lower() if event.color else ""
    shade = pick_random_shade(shades, rng)
    reference_id = state.reference_device_id or ""
    play_id = state.play_device_id or ""

    new_state = replace(
        state,
        color_choice=color,
        reference_color_shade=shade,
        current_handler_id=event.request_id,
    )

    out.emit(
        ArmTimedWindow(
            window_ms=ROUND_WINDOW_MS,
            trigger_spec=round_triggers(play_id),
        ),
        SetIdlePattern(
            targets=(reference_id,),
            pattern=animations.solid(1, shade, REFERENCE_HOLD_MS),
        ),
        SetIdlePattern(
            targets=(play_id,),
            pattern=animations.make_rolling_animation(shades, ROLLING_STEP_MS),
        ),
        # Press and release briefly flash the target shade
        SetPressDownPattern(
            targets=(play_id,),
            pattern=animations.solid(1, shade, PRESS_FLASH_MS),
        ),
        SetReleasePattern(
            targets=(reference_id, play_id),
            pattern=animations.solid(1, shade, PRESS_FLASH_MS),
        ),
    )
    out.say(
        f"Ok. {color} it is. ",
        "Try to press your button when the color matches my button. ",
        settings.waiting_audio,
    )
    out.log(
        log_decision(
            new_state,
            event,
            "arm_round_window",
            {"color": color, "shade": shade, "window_ms": ROUND_WINDOW_MS},
        ),
        log_state_changed(state, new_state, event, "color_choice"),
    )
    out.open_microphone = False
    return new_state, out.build()


# =============================================================================
# Scoring
# =============================================================================

def is_match(reference_shade: str | None, reported_color: str) -> bool:
    """
    Case-insensitive shade comparison.

    Both sides are compared as the buttons display them, so a friendly
    palette name ("dark green") matches the hex a button reports.
    """
    if reference_shade is None:
        return False
    return animations.resolve_color(reference_shade) == animations.resolve_color(reported_color)


def handle_button_pressed(
    state: SessionState,
    event: ButtonPressed,
    settings: GameSettings = DEFAULT_GAME_SETTINGS,
) -> Result:
    """Score the press against the reference shade and end the round."""
    out = OutcomeBuilder()
    player_won = is_match(state.reference_color_shade, event.reported_color)

    if player_won:
        out.say(
            settings.winning_audio
            + "Colors Match! Great job. Would you like to play again?"
        )
        result_pattern = animations.pulse(RESULT_PULSE_CYCLES, "light blue", "dark green")
    else:
        out.say(
            settings.losing_audio
            + "Close, but the colors don't match. Would you like to try again?"
        )
        result_pattern = animations.pulse(RESULT_PULSE_CYCLES, "orange", "red")
    out.reprompt_with(PLAY_AGAIN_REPROMPT)

    new_state = _end_round(state)

    bound = state.bound_device_ids
    out.emit(
        SetIdlePattern(targets=bound, pattern=result_pattern),
        *default_press_patterns(settings, bound),
    )
    out.log(
        log_decision(
            new_state,
            event,
            "round_won" if player_won else "round_lost",
            {
                "device_id": event.device_id,
                "reported_color": event.reported_color,
                "reference_color_shade": state.reference_color_shade,
            },
        ),
        log_state_changed(state, new_state, event, "button_pressed"),
    )
    out.open_microphone = True
    return new_state, out.build()


def handle_round_timeout(
    state: SessionState,
    event: Timeout,
    settings: GameSettings = DEFAULT_GAME_SETTINGS,
) -> Result:
    """No press arrived within the round window."""
    out = OutcomeBuilder()
    out.say("Time is up. Would you like to play again?")
    out.reprompt_with(PLAY_AGAIN_REPROMPT)

    new_state = _end_round(state)

    bound = state.bound_device_ids
    out.emit(
        SetIdlePattern(
            targets=bound,
            pattern=animations.fade_out(
                1, state.reference_color_shade or "white", ROUND_FADE_OUT_MS
            ),
        ),
        *default_press_patterns(settings, bound),
    )
    out.log(
        log_decision(new_state, event, "round_timeout"),
        log_state_changed(state, new_state, event, "round_timeout"),
    )
    out.open_microphone = True
    return new_state, out.build()


def _end_round(state: SessionState) -> SessionState:
    return replace(
        state,
        expecting_end_confirmation=True,
        mode=Mode.EXIT_CONFIRM,
    )
