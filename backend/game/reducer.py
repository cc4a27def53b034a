"""
Pure turn reducer.

(state, event) -> (new_state, outcome)

Rules:
- Pure: no side effects, no IO, no clocks.
- Deterministic: output depends only on inputs (randomness is injected).
- Total: every (mode, event) pair is handled or explicitly ignored (logged).
"""

from __future__ import annotations

import random

from game import gameplay, rollcall
from game.decision_log import log_decision
from game.enums.mode import Mode
from game.enums.phase import Phase
from game.events import (
    ButtonPressed,
    ColorChoice,
    Event,
    FirstCheckIn,
    RecognizerEvent,
    SecondCheckIn,
    SessionStarted,
    Timeout,
)
from game.outcome import OutcomeBuilder, TurnOutcome
from game.state_dataclass import SessionState
from settings import DEFAULT_GAME_SETTINGS, GameSettings


# =============================================================================
# Small helpers
# =============================================================================

def _ignore(
    state: SessionState, event: Event, reason: str
) -> tuple[SessionState, TurnOutcome]:
    out = OutcomeBuilder()
    out.log(log_decision(state, event, "ignore", {"reason": reason}))
    return state, out.build()


def _with_stale_check(
    state: SessionState,
    event: Event,
    result: tuple[SessionState, TurnOutcome],
) -> tuple[SessionState, TurnOutcome]:
    """
    Flag recognizer events reported from a window other than the latest.

    The event is still processed; only the log records the mismatch.
    """
    if not isinstance(event, RecognizerEvent):
        return result
    if event.originating_request_id is None:
        return result
    if event.originating_request_id == state.current_handler_id:
        return result

    new_state, outcome = result
    stale = log_decision(
        state,
        event,
        "stale_handler_id",
        {
            "originating_request_id": event.originating_request_id,
            "current_handler_id": state.current_handler_id,
        },
    )
    return new_state, TurnOutcome(
        speech=outcome.speech,
        reprompt=outcome.reprompt,
        directives=outcome.directives,
        open_microphone=outcome.open_microphone,
        logs=(stale,) + outcome.logs,
    )


# =============================================================================
# Reducer entrypoint
# =============================================================================

def reduce(
    state: SessionState,
    event: Event,
    *,
    rng: random.Random,
    settings: GameSettings = DEFAULT_GAME_SETTINGS,
) -> tuple[SessionState, TurnOutcome]:
    """
    Pure reducer for the game session state machine.

    Given the current session state and a single event, returns:
    - the next state
    - the outcome to hand to the response layer
    """
    if isinstance(event, SessionStarted):
        return rollcall.new_session(state, event, settings)

    return _with_stale_check(state, event, _dispatch(state, event, rng, settings))


def _dispatch(
    state: SessionState,
    event: Event,
    rng: random.Random,
    settings: GameSettings,
) -> tuple[SessionState, TurnOutcome]:
    # ------------------------------------------------------------------
    # ROLL_CALL
    # ------------------------------------------------------------------
    if state.mode is Mode.ROLL_CALL:
        if isinstance(event, FirstCheckIn):
            return rollcall.handle_first_check_in(state, event, settings)
        if isinstance(event, SecondCheckIn):
            return rollcall.handle_second_check_in(state, event, settings)
        if isinstance(event, Timeout):
            return rollcall.handle_timeout(state, event, settings)
        return _ignore(state, event, "not_in_play_mode")

    # ------------------------------------------------------------------
    # PLAY
    # ------------------------------------------------------------------
    if state.mode is Mode.PLAY:
        if isinstance(event, ColorChoice):
            return gameplay.handle_color_choice(state, event, rng, settings)
        if isinstance(event, FirstCheckIn):
            # Late duplicate from the roll-call window
            return rollcall.handle_first_check_in(state, event, settings)
        if state.phase is not Phase.AWAITING_PRESS:
            return _ignore(state, event, "no_round_armed")
        if isinstance(event, ButtonPressed):
            return gameplay.handle_button_pressed(state, event, settings)
        if isinstance(event, Timeout):
            return gameplay.handle_round_timeout(state, event, settings)
        return _ignore(state, event, "unexpected_in_round")

    # ------------------------------------------------------------------
    # EXIT_CONFIRM: yes/no is resolved outside the turn engine
    # ------------------------------------------------------------------
    return _ignore(state, event, "awaiting_end_confirmation")
