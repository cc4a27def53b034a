"""
Button light pattern builders.

Responsibilities:
- Define the immutable light pattern value types
- Build the stock animations (solid, fade, fade-in, fade-out, pulse)
- Build the rolling preview shown on the play button

Non-responsibilities:
- No wire encoding (see protocol.responses)
- No targeting: callers attach patterns to devices via commands
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from settings import (
    DEFAULT_LIGHT_TARGETS,
    NAMED_COLORS,
    ROLLING_MIN_DURATION_MS,
)


# =============================================================================
# Pattern value types
# =============================================================================

@dataclass(frozen=True)
class LightStep:
    """One step of a light sequence."""
    duration_ms: int
    color: str
    blend: bool = False


@dataclass(frozen=True)
class LightAnimation:
    """A sequence of steps played `repeat` times on the given lights."""
    repeat: int
    sequence: tuple[LightStep, ...]
    target_lights: tuple[str, ...] = DEFAULT_LIGHT_TARGETS


Pattern = tuple[LightAnimation, ...]


def resolve_color(color: str) -> str:
    """Map a friendly color name to hex; hex values pass through uppercased."""
    named = NAMED_COLORS.get(color.lower())
    if named is not None:
        return named
    return color.upper()


# =============================================================================
# Stock animations
# =============================================================================

def solid(cycles: int, color: str, duration_ms: int) -> Pattern:
    return (
        LightAnimation(
            repeat=cycles,
            sequence=(LightStep(duration_ms, resolve_color(color), False),),
        ),
    )


def fade(color: str, duration_ms: int) -> Pattern:
    return (
        LightAnimation(
            repeat=1,
            sequence=(LightStep(duration_ms, resolve_color(color), True),),
        ),
    )


def fade_in(cycles: int, color: str, duration_ms: int) -> Pattern:
    return (
        LightAnimation(
            repeat=cycles,
            sequence=(
                LightStep(1, NAMED_COLORS["black"], True),
                LightStep(duration_ms, resolve_color(color), True),
            ),
        ),
    )


def fade_out(cycles: int, color: str, duration_ms: int) -> Pattern:
    return (
        LightAnimation(
            repeat=cycles,
            sequence=(
                LightStep(1, resolve_color(color), True),
                LightStep(duration_ms, NAMED_COLORS["black"], True),
            ),
        ),
    )


def pulse(cycles: int, start_color: str, end_color: str) -> Pattern:
    return (
        LightAnimation(
            repeat=cycles,
            sequence=(
                LightStep(500, resolve_color(start_color), True),
                LightStep(1000, resolve_color(end_color), True),
            ),
        ),
    )


# =============================================================================
# Rolling preview
# =============================================================================

def rolling_sequence(shades: Sequence[str], step_ms: int) -> tuple[LightStep, ...]:
    """
    Ping-pong through the shades: forward over all of them, then back
    over all but the first and last, so the cycle loops without
    repeating an end shade.
    """
    forward = [LightStep(step_ms, resolve_color(s), False) for s in shades]
    backward = [
        LightStep(step_ms, resolve_color(s), False)
        for s in reversed(shades[1:-1])
    ]
    return tuple(forward + backward)


def rolling_repeats(sequence_len: int, step_ms: int) -> int:
    """Smallest repeat count whose playback exceeds ROLLING_MIN_DURATION_MS."""
    cycle_ms = sequence_len * step_ms
    if cycle_ms <= 0:
        raise ValueError(f"cycle duration must be positive, got {cycle_ms}")
    return ROLLING_MIN_DURATION_MS // cycle_ms + 1


def make_rolling_animation(shades: Sequence[str], step_ms: int) -> Pattern:
    """
    Build the preview pattern for the play button.

    Deterministic: the same shades and step always give the same pattern.
    """
    sequence = rolling_sequence(shades, step_ms)
    return (
        LightAnimation(
            repeat=rolling_repeats(len(sequence), step_ms),
            sequence=sequence,
        ),
    )


def pattern_duration_ms(pattern: Pattern) -> int:
    """Nominal playback duration of a pattern."""
    return sum(
        animation.repeat * sum(step.duration_ms for step in animation.sequence)
        for animation in pattern
    )
