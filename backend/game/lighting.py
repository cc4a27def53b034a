"""Command bundles shared by both controllers."""

from __future__ import annotations

from game import animations
from game.commands import Command, SetPressDownPattern, SetReleasePattern
from settings import GameSettings


def default_press_patterns(
    settings: GameSettings,
    targets: tuple[str, ...] = (),
) -> tuple[Command, ...]:
    """Restore the stock press-down / release feedback on `targets`."""
    return (
        SetPressDownPattern(
            targets=targets,
            pattern=animations.fade_out(
                1, settings.default_down_color, settings.default_down_ms
            ),
        ),
        SetReleasePattern(
            targets=targets,
            pattern=animations.solid(
                1, settings.default_up_color, settings.default_up_ms
            ),
        ),
    )


def spoken_list(words: tuple[str, ...]) -> str:
    """'red, blue, or green' style enumeration for prompts."""
    if not words:
        return ""
    if len(words) == 1:
        return words[0]
    if len(words) == 2:
        return f"{words[0]} or {words[1]}"
    return ", ".join(words[:-1]) + f", or {words[-1]}"
