"""
Session mode enumeration.

Rules:
- This enum defines ONLY the persisted top-level modes.
- No behavior, no helper methods, no side effects.
- Transitions are defined exclusively in the controllers.
"""

from __future__ import annotations

from enum import Enum


class Mode(str, Enum):
    """
    Persisted top-level mode of a game session.

    ROLL_CALL:
        Discovering and binding the two buttons.

    PLAY:
        Both buttons bound; rounds are set up and scored.

    EXIT_CONFIRM:
        A round concluded; waiting for a yes/no that is resolved
        outside the turn engine.
    """

    ROLL_CALL = "ROLL_CALL_MODE"
    PLAY = "PLAY_MODE"
    EXIT_CONFIRM = "EXIT_MODE"
