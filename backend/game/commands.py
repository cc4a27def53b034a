"""
Device command definitions emitted by the controllers.

Rules:
- Commands are declarative requests for side effects on the buttons.
- Commands are emitted by the controllers and executed by the host.
- No behavior, no I/O, no clocks.
Invariant:
    - All concrete Command subclasses MUST be frozen dataclasses.
    - An empty `targets` tuple addresses every connected button.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from game.animations import Pattern
from game.recognizers import TriggerSpec


# =============================================================================
# Directive Type Enumeration
# =============================================================================

class DirectiveType(str, Enum):
    """
    Canonical command types emitted by the controllers.

    These are stable discriminants used for logging and encoding.
    """

    ARM_TIMED_WINDOW = "ARM_TIMED_WINDOW"
    SET_IDLE_PATTERN = "SET_IDLE_PATTERN"
    SET_PRESS_DOWN_PATTERN = "SET_PRESS_DOWN_PATTERN"
    SET_RELEASE_PATTERN = "SET_RELEASE_PATTERN"

    # Observability
    LOG_EVENT = "LOG_EVENT"


# =============================================================================
# Base Command
# =============================================================================

class Command:
    """
    Base command type.

    directive_type is an explicit discriminant and must never be inferred
    from Python type identity.
    """

    directive_type: DirectiveType


# =============================================================================
# Recognizer Commands
# =============================================================================

@dataclass(frozen=True)
class ArmTimedWindow(Command):
    """
    Request detection of the named conditions within window_ms.

    Arming a window implicitly supersedes any window armed earlier.
    proxies is non-empty only while the device ids are still unknown.
    """
    window_ms: int
    trigger_spec: TriggerSpec
    proxies: tuple[str, ...] = ()
    directive_type: DirectiveType = DirectiveType.ARM_TIMED_WINDOW


# =============================================================================
# Light Commands
# =============================================================================

@dataclass(frozen=True)
class SetIdlePattern(Command):
    """Pattern shown while a button is untouched."""
    targets: tuple[str, ...]
    pattern: Pattern
    directive_type: DirectiveType = DirectiveType.SET_IDLE_PATTERN


@dataclass(frozen=True)
class SetPressDownPattern(Command):
    """Pattern played when a button is pressed down."""
    targets: tuple[str, ...]
    pattern: Pattern
    directive_type: DirectiveType = DirectiveType.SET_PRESS_DOWN_PATTERN


@dataclass(frozen=True)
class SetReleasePattern(Command):
    """Pattern played when a button is released."""
    targets: tuple[str, ...]
    pattern: Pattern
    directive_type: DirectiveType = DirectiveType.SET_RELEASE_PATTERN


# =============================================================================
# Observability Commands
# =============================================================================

@dataclass(frozen=True)
class LogEvent(Command):
    """Request to emit a structured observability event."""
    event: dict[str, Any]
    directive_type: DirectiveType = DirectiveType.LOG_EVENT
