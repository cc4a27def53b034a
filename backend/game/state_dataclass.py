"""
Authoritative per-conversation session state.

Rules:
- This dataclass is a pure data model.
- It contains ALL state the controllers may ever need.
- No behavior beyond read-only views over its own fields.
- Controllers never mutate it; they return a replaced copy.
"""
from __future__ import annotations

from dataclasses import dataclass

from game.enums.mode import Mode
from game.enums.phase import Phase
from settings import DEVICE_ID_PLACEHOLDER, PLAY_SLOT, REFERENCE_SLOT


@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of one conversation's game state."""

    # ------------------------------------------------------------------
    # Control state
    # ------------------------------------------------------------------
    mode: Mode = Mode.ROLL_CALL

    # ------------------------------------------------------------------
    # Roll call
    # ------------------------------------------------------------------
    # Slot 0 is the placeholder, slot 1 the reference button,
    # slot 2 the play button.
    device_ids: tuple[str, ...] = (DEVICE_ID_PLACEHOLDER,)
    button_count: int = 0
    roll_call_complete: bool = False

    # ------------------------------------------------------------------
    # Round
    # ------------------------------------------------------------------
    color_choice: str | None = None
    reference_color_shade: str | None = None

    # ------------------------------------------------------------------
    # Recognizer correlation
    # ------------------------------------------------------------------
    current_handler_id: str | None = None

    # ------------------------------------------------------------------
    # Follow-up
    # ------------------------------------------------------------------
    expecting_end_confirmation: bool = False

    @property
    def phase(self) -> Phase:
        """Derived sub-state; never persisted."""
        if self.mode is Mode.ROLL_CALL:
            if self.button_count == 0:
                return Phase.WAITING_FIRST_DEVICE
            return Phase.WAITING_SECOND_DEVICE
        if self.mode is Mode.PLAY:
            if self.reference_color_shade is None:
                return Phase.AWAITING_COLOR
            return Phase.AWAITING_PRESS
        return Phase.ROUND_OVER

    @property
    def reference_device_id(self) -> str | None:
        if len(self.device_ids) > REFERENCE_SLOT:
            return self.device_ids[REFERENCE_SLOT]
        return None

    @property
    def play_device_id(self) -> str | None:
        if len(self.device_ids) > PLAY_SLOT:
            return self.device_ids[PLAY_SLOT]
        return None

    @property
    def bound_device_ids(self) -> tuple[str, ...]:
        """Real device ids, placeholder excluded."""
        return self.device_ids[REFERENCE_SLOT:]
