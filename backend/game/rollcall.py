"""
Roll call controller.

Binds two anonymous buttons to the reference and play roles.

WAITING_FIRST_DEVICE -> WAITING_SECOND_DEVICE -> (mode PLAY)

Rules:
- Pure: (state, event) -> (new_state, outcome); no I/O.
- Slots 1 and 2 are assigned at most once per roll call.
- Stale or unresolvable check-ins are ignored, never raised.
"""

from __future__ import annotations

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
from game.events import Event, FirstCheckIn, SecondCheckIn, Timeout
from game.lighting import default_press_patterns, spoken_list
from game.outcome import OutcomeBuilder, TurnOutcome
from game.recognizers import ROLL_CALL_PROXIES, ROLL_CALL_TRIGGERS
from game.state_dataclass import SessionState
from settings import (
    CHECK_IN_DOWN_MS,
    CHECK_IN_IDLE_MS,
    CHECK_IN_UP_MS,
    DEFAULT_GAME_SETTINGS,
    DEVICE_ID_PLACEHOLDER,
    MAX_BUTTONS,
    ROLL_CALL_COMPLETE_FADE_IN_MS,
    ROLL_CALL_TIMEOUT_FADE_MS,
    ROLL_CALL_WINDOW_MS,
    GameSettings,
)

Result = tuple[SessionState, TurnOutcome]


# =============================================================================
# Session start
# =============================================================================

def new_session(
    state: SessionState,
    event: Event,
    settings: GameSettings = DEFAULT_GAME_SETTINGS,
) -> Result:
    """Reset to defaults, explain the game, and open the discovery window."""
    fresh = SessionState()

    out = OutcomeBuilder()
    out.say(
        "Welcome to Quick Colors!",
        "We need two buttons for this game.",
        "You'll pick a color and I'll use the ",
        "first button to display a shade of your color.",
        "Using the second button, you'll have to try ",
        "to match the color I'm showing on mine.",
        "Are you ready?",
        "To get started, assign a button to me, by pressing it now. ",
        settings.waiting_audio,
    )
    out.log(log_decision(fresh, event, "new_session"))
    if state != fresh:
        out.log(log_state_changed(state, fresh, event, "new_session"))

    return start_roll_call(fresh, event, ROLL_CALL_WINDOW_MS, out)


def start_roll_call(
    state: SessionState,
    event: Event,
    window_ms: int,
    out: OutcomeBuilder | None = None,
) -> Result:
    """
    Arm the discovery window over the two button proxies.

    The microphone stays closed: the next input is a button, not speech.
    """
    out = out or OutcomeBuilder()

    new_state = replace(
        state,
        mode=Mode.ROLL_CALL,
        device_ids=(DEVICE_ID_PLACEHOLDER,),
        button_count=0,
        roll_call_complete=False,
        expecting_end_confirmation=False,
        current_handler_id=event.request_id,
    )

    out.emit(
        ArmTimedWindow(
            window_ms=window_ms,
            trigger_spec=ROLL_CALL_TRIGGERS,
            proxies=ROLL_CALL_PROXIES,
        ),
        SetPressDownPattern(
            targets=(),
            pattern=animations.solid(1, "green", CHECK_IN_DOWN_MS),
        ),
        SetReleasePattern(
            targets=(),
            pattern=animations.solid(1, "white", CHECK_IN_UP_MS),
        ),
    )
    out.log(
        log_decision(
            new_state,
            event,
            "arm_roll_call_window",
            {"window_ms": window_ms, "proxies": list(ROLL_CALL_PROXIES)},
        )
    )
    out.open_microphone = False
    return new_state, out.build()


# =============================================================================
# Check-ins
# =============================================================================

def handle_first_check_in(
    state: SessionState,
    event: FirstCheckIn,
    settings: GameSettings = DEFAULT_GAME_SETTINGS,
) -> Result:
    """Bind the first button to the reference slot."""
    out = OutcomeBuilder()

    # A late duplicate can arrive after the second check-in was handled
    if state.button_count != 0:
        out.log(
            log_decision(
                state,
                event,
                "ignore",
                {"reason": "first_check_in_after_binding", "device_id": event.device_id},
            )
        )
        return state, out.build()

    return _bind_reference(state, event, event.device_id, out, settings)


def _bind_reference(
    state: SessionState,
    event: Event,
    device_id: str,
    out: OutcomeBuilder,
    settings: GameSettings,
) -> Result:
    new_state = replace(
        state,
        device_ids=(DEVICE_ID_PLACEHOLDER, device_id),
        button_count=1,
    )

    out.say(
        "Thanks! I'll use this button. Now, add one more for yourself.",
        settings.waiting_audio,
    )
    out.emit(
        SetIdlePattern(
            targets=(device_id,),
            pattern=animations.solid(1, "green", CHECK_IN_IDLE_MS),
        )
    )
    out.log(
        log_decision(new_state, event, "bind_reference_button", {"device_id": device_id}),
        log_state_changed(state, new_state, event, "first_check_in"),
    )
    return new_state, out.build()


def handle_second_check_in(
    state: SessionState,
    event: SecondCheckIn,
    settings: GameSettings = DEFAULT_GAME_SETTINGS,
) -> Result:
    """
    Bind the play button and finish roll call.

    button_count == 0: both buttons arrived in one report.
    button_count == 1: bind the first reported id that is not known yet.
    """
    out = OutcomeBuilder()
    reported = tuple(
        device_id
        for device_id in (event.device_id, event.second_device_id)
        if device_id is not None
    )

    if state.button_count >= MAX_BUTTONS:
        out.log(log_decision(state, event, "ignore", {"reason": "roll_call_complete"}))
        return state, out.build()

    if state.button_count == 0:
        if len(reported) < MAX_BUTTONS or reported[0] == reported[1]:
            # Only one distinct button in the report: treat it as the first
            out.log(
                log_decision(state, event, "second_check_in_single_device", {"reported": list(reported)})
            )
            return _bind_reference(state, event, event.device_id, out, settings)

        device_ids = (DEVICE_ID_PLACEHOLDER, reported[0], reported[1])
        out.say(
            "We both have buttons.",
            "<break time='1s'/>",
            "Awesome. Let's start the game!",
        )
    else:
        unknown = [device_id for device_id in reported if device_id not in state.device_ids]
        if not unknown:
            out.log(
                log_decision(
                    state,
                    event,
                    "ignore",
                    {"reason": "no_new_device", "reported": list(reported)},
                )
            )
            return state, out.build()

        device_ids = state.device_ids[:2] + (unknown[0],)
        out.say(
            "I see your button too.",
            "<break time='1s'/>",
            "Let's start the game!",
        )

    new_state = replace(
        state,
        device_ids=device_ids,
        button_count=MAX_BUTTONS,
        roll_call_complete=True,
        mode=Mode.PLAY,
    )

    colors = spoken_list(settings.color_names)
    out.say(f"Choose a color: {colors}.")
    out.reprompt_with(f"Please pick a color: {colors}")

    bound = new_state.bound_device_ids
    out.emit(
        SetIdlePattern(
            targets=bound,
            pattern=animations.fade_in(1, "green", ROLL_CALL_COMPLETE_FADE_IN_MS),
        ),
        # Press feedback stays neutral until a color is chosen
        *default_press_patterns(settings),
    )
    out.log(
        log_decision(new_state, event, "bind_play_button", {"device_ids": list(bound)}),
        log_state_changed(state, new_state, event, "roll_call_complete"),
    )
    out.open_microphone = True
    return new_state, out.build()


# =============================================================================
# Timeout
# =============================================================================

def handle_timeout(
    state: SessionState,
    event: Timeout,
    settings: GameSettings = DEFAULT_GAME_SETTINGS,
) -> Result:
    """Discovery window elapsed before two buttons checked in."""
    out = OutcomeBuilder()

    new_state = replace(state, expecting_end_confirmation=True)

    out.say(
        "For this skill we need two buttons.",
        "Would you like more time to press the buttons?",
    )
    out.reprompt_with("Say yes to go back and add buttons, or no to exit now.")

    bound = state.bound_device_ids
    out.emit(
        SetIdlePattern(
            targets=bound,
            pattern=animations.fade("black", ROLL_CALL_TIMEOUT_FADE_MS),
        ),
        *default_press_patterns(settings, bound),
    )
    out.log(
        log_decision(new_state, event, "roll_call_timeout", {"button_count": state.button_count})
    )
    out.open_microphone = True
    return new_state, out.build()
