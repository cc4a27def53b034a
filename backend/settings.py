"""
SETTINGS-AS-CONSTANTS
---------------------
Single source of truth for all behavioral constants of the game.

Rules:
- If changing a value changes game behavior, it belongs here.
- No magic numbers elsewhere in the codebase.
- Other modules MUST import from this file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final, Mapping, Tuple

# =============================================================================
# Timed recognizer windows
# =============================================================================

ROLL_CALL_WINDOW_MS: Final[int] = 50_000
ROUND_WINDOW_MS: Final[int] = 20_000

# Roll-call proxies: the real button ids are unknown until they check in
FIRST_BUTTON_PROXY: Final[str] = "first_button"
SECOND_BUTTON_PROXY: Final[str] = "second_button"

# =============================================================================
# Device slots
# =============================================================================

# Slot 0 is never a real device; slot 1 = reference button, slot 2 = play button
DEVICE_ID_PLACEHOLDER: Final[str] = "Device ID listings"
REFERENCE_SLOT: Final[int] = 1
PLAY_SLOT: Final[int] = 2
MAX_BUTTONS: Final[int] = 2

# =============================================================================
# Light patterns
# =============================================================================

ROLLING_MIN_DURATION_MS: Final[int] = 20_000
ROLLING_STEP_MS: Final[int] = 1_000

REFERENCE_HOLD_MS: Final[int] = ROUND_WINDOW_MS
PRESS_FLASH_MS: Final[int] = 10
ROUND_FADE_OUT_MS: Final[int] = 2_000
RESULT_PULSE_CYCLES: Final[int] = 3

CHECK_IN_IDLE_MS: Final[int] = 8_000
CHECK_IN_DOWN_MS: Final[int] = 1_000
CHECK_IN_UP_MS: Final[int] = 4_000
ROLL_CALL_COMPLETE_FADE_IN_MS: Final[int] = 5_000
ROLL_CALL_TIMEOUT_FADE_MS: Final[int] = 1_000

DEFAULT_LIGHT_TARGETS: Final[Tuple[str, ...]] = ("1",)

# Friendly names used by the built-in animations; palette shades are raw hex
NAMED_COLORS: Final[Mapping[str, str]] = {
    "black": "000000",
    "white": "FFFFFF",
    "red": "FF0000",
    "orange": "FFA500",
    "green": "00FF00",
    "dark green": "006400",
    "blue": "0000FF",
    "light blue": "ADD8E6",
}

# =============================================================================
# Palette
# =============================================================================

DEFAULT_COLOR_SHADES: Final[Mapping[str, Tuple[str, ...]]] = {
    "red": ("FF0000", "DC143C", "B22222", "8B0000", "FF4500"),
    "green": ("00FF00", "32CD32", "228B22", "006400", "7CFC00"),
    "blue": ("0000FF", "1E90FF", "4169E1", "00008B", "00BFFF"),
}

# =============================================================================
# Audio cues
# =============================================================================

WAITING_AUDIO: Final[str] = (
    "<audio src='https://s3.amazonaws.com/ask-soundlibrary/foley/"
    "amzn_sfx_rhythmic_ticking_30s_01.mp3'/>"
)
WINNING_AUDIO: Final[str] = (
    "<audio src='https://s3.amazonaws.com/ask-soundlibrary/ui/gameshow/"
    "amzn_ui_sfx_gameshow_positive_response_01.mp3'/>"
)
LOSING_AUDIO: Final[str] = (
    "<audio src='https://s3.amazonaws.com/ask-soundlibrary/ui/gameshow/"
    "amzn_ui_sfx_gameshow_negative_response_01.mp3'/>"
)

# =============================================================================
# Convenience Bundles
# =============================================================================

@dataclass(frozen=True)
class GameSettings:
    """
    Immutable bundle of everything the controllers consume from outside.

    color_shades:
        color name -> ordered, non-empty tuple of shades
    default_down_color / default_up_color:
        press patterns restored whenever a phase ends
    """

    color_shades: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_COLOR_SHADES)
    )
    default_down_color: str = "blue"
    default_down_ms: int = 200
    default_up_color: str = "black"
    default_up_ms: int = 100
    waiting_audio: str = WAITING_AUDIO
    winning_audio: str = WINNING_AUDIO
    losing_audio: str = LOSING_AUDIO

    def shades_for(self, color: str | None) -> Tuple[str, ...] | None:
        """Return the configured shades for a spoken color, or None."""
        if not color:
            return None
        return self.color_shades.get(color.strip().lower())

    @property
    def color_names(self) -> Tuple[str, ...]:
        return tuple(self.color_shades)


DEFAULT_GAME_SETTINGS: Final[GameSettings] = GameSettings()
