"""
Application configuration.

Responsibilities:
- Read environment variables
- Load the optional palette override file
- Provide a typed, immutable config object

Non-responsibilities:
- No game logic
- No behavioral constants (see settings.py)
- No runtime mutation
"""

from __future__ import annotations

import json
import os
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from settings import DEFAULT_COLOR_SHADES, GameSettings


class ConfigError(ValueError):
    """Raised when the environment or palette file is unusable."""


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable application configuration.

    Constructed once at process startup and passed down to the gateway.
    """

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    env: str
    log_level: str

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    enable_json_logs: bool

    # ------------------------------------------------------------------
    # Game
    # ------------------------------------------------------------------

    palette_file: str | None
    random_seed: int | None

    # ------------------------------------------------------------------
    # Server
    # ------------------------------------------------------------------

    host: str
    port: int

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @staticmethod
    def load_from_env() -> AppConfig:
        """
        Load configuration from environment variables.

        Raises:
            ConfigError if a numeric variable is malformed.
        """
        return AppConfig(
            env=os.environ.get("ENV", "dev"),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            enable_json_logs=os.environ.get("ENABLE_JSON_LOGS", "1") == "1",
            palette_file=os.environ.get("PALETTE_FILE") or None,
            random_seed=_optional_int("RANDOM_SEED"),
            host=os.environ.get("HOST", "0.0.0.0"),
            port=_optional_int("PORT") or 8000,
        )

    # ------------------------------------------------------------------
    # Derived objects
    # ------------------------------------------------------------------

    def game_settings(self) -> GameSettings:
        """Build GameSettings, applying the palette override if configured."""
        if self.palette_file is None:
            return GameSettings(color_shades=dict(DEFAULT_COLOR_SHADES))
        return GameSettings(color_shades=load_palette(Path(self.palette_file)))

    def make_rng(self) -> random.Random:
        """Seeded when RANDOM_SEED is set, so shade draws are reproducible."""
        return random.Random(self.random_seed)


def _optional_int(name: str) -> int | None:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


def load_palette(path: Path) -> dict[str, tuple[str, ...]]:
    """
    Read a palette JSON file: {"red": ["FF0000", ...], ...}.

    Color names are lowercased; every color needs at least one shade.
    """
    try:
        raw: Any = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"cannot read palette file {path}: {e}") from e

    if not isinstance(raw, dict) or not raw:
        raise ConfigError("palette must be a non-empty JSON object")

    palette: dict[str, tuple[str, ...]] = {}
    for color, shades in raw.items():
        if (
            not isinstance(shades, list)
            or not shades
            or not all(isinstance(s, str) and s for s in shades)
        ):
            raise ConfigError(f"color {color!r} needs a non-empty list of shade strings")
        palette[str(color).strip().lower()] = tuple(shades)
    return palette
