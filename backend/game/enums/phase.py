"""
Derived phase enumeration.

Phases are orthogonal to modes:
- Mode answers:  "Which controller owns the session?"
- Phase answers: "What is that controller waiting for?"

Phases are never persisted; the reducer derives them from SessionState.
"""

from __future__ import annotations

from enum import Enum


class Phase(str, Enum):
    """Sub-state of the controller that owns the current mode."""

    WAITING_FIRST_DEVICE = "WAITING_FIRST_DEVICE"
    WAITING_SECOND_DEVICE = "WAITING_SECOND_DEVICE"
    AWAITING_COLOR = "AWAITING_COLOR"
    AWAITING_PRESS = "AWAITING_PRESS"
    ROUND_OVER = "ROUND_OVER"
