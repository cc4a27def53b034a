"""
Outbound response encoding.

Turns a TurnOutcome into the JSON-ready dict returned to the host.
LogEvent commands are never encoded; the gateway executes them.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Mapping

from game.animations import Pattern
from game.commands import (
    ArmTimedWindow,
    Command,
    LogEvent,
    SetIdlePattern,
    SetPressDownPattern,
    SetReleasePattern,
)
from game.outcome import TurnOutcome


def encode_pattern(pattern: Pattern) -> list[dict[str, Any]]:
    return [
        {
            "repeat": animation.repeat,
            "targetLights": list(animation.target_lights),
            "sequence": [
                {
                    "durationMs": step.duration_ms,
                    "color": step.color,
                    "blend": step.blend,
                }
                for step in animation.sequence
            ],
        }
        for animation in pattern
    ]


def encode_directive(command: Command) -> dict[str, Any]:
    """
    Encode one device command.

    Raises:
        TypeError for commands that are not device commands.
    """
    if isinstance(command, ArmTimedWindow):
        return {
            "type": command.directive_type.value,
            "windowMs": command.window_ms,
            "proxies": list(command.proxies),
            "triggers": asdict(command.trigger_spec),
        }
    if isinstance(command, (SetIdlePattern, SetPressDownPattern, SetReleasePattern)):
        return {
            "type": command.directive_type.value,
            "targetGadgets": list(command.targets),
            "animations": encode_pattern(command.pattern),
        }
    raise TypeError(f"not a device command: {type(command).__name__}")


def _join_speech(fragments: tuple[str, ...]) -> str:
    # Fragments may carry their own trailing space
    return " ".join(f.strip() for f in fragments if f.strip())


def encode_outcome(
    outcome: TurnOutcome,
    attributes: Mapping[str, Any],
) -> dict[str, Any]:
    return {
        "speech": _join_speech(outcome.speech),
        "reprompt": _join_speech(outcome.reprompt) or None,
        "directives": [
            encode_directive(d) for d in outcome.directives if not isinstance(d, LogEvent)
        ],
        "open_microphone": outcome.open_microphone,
        "session_attributes": dict(attributes),
    }
