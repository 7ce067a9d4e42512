from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)


@dataclass
class GameplaySettings:
    tile_size: int = 32
    speed: float = 130.0  # pixels per second
    move_interval: float = 0.09  # seconds between accepted move presses
    start_level: int = 0


@dataclass
class WindowSettings:
    title: str = "Key Maze"
    vsync: bool = True


@dataclass
class InputSettings:
    mapping: Dict[str, Iterable[str]] = field(default_factory=dict)


# KM_* environment variables -> (section, field, caster)
_ENV_OVERRIDES: Dict[str, tuple[str, str, Callable[[str], Any]]] = {
    "KM_TILE_SIZE": ("gameplay", "tile_size", int),
    "KM_SPEED": ("gameplay", "speed", float),
    "KM_MOVE_INTERVAL": ("gameplay", "move_interval", float),
    "KM_START_LEVEL": ("gameplay", "start_level", int),
}


@dataclass
class Settings:
    """Runtime settings for gameplay tuning, the window and key bindings.

    Values are layered (lowest to highest precedence): the packaged
    ``keymaze/config/default_settings.yaml``, an optional user YAML file, then
    ``KM_*`` environment variables.
    """

    gameplay: GameplaySettings = field(default_factory=GameplaySettings)
    window: WindowSettings = field(default_factory=WindowSettings)
    input: InputSettings = field(default_factory=InputSettings)

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @staticmethod
    def _env_overlay(env: Mapping[str, str]) -> dict:
        out: Dict[str, Dict[str, Any]] = {}
        for env_key, (section, name, caster) in _ENV_OVERRIDES.items():
            raw = env.get(env_key)
            if raw is None or raw == "":
                continue
            try:
                out.setdefault(section, {})[name] = caster(raw)
            except ValueError as exc:
                logger.error("Invalid env for %s=%r: %s", env_key, raw, exc)
        return out

    @classmethod
    def _from_dict(cls, data: dict) -> "Settings":
        gameplay = GameplaySettings(**data.get("gameplay", {}))
        window = WindowSettings(**data.get("window", {}))
        input_ = InputSettings(mapping=data.get("input", {}).get("mapping", {}))
        return Settings(gameplay=gameplay, window=window, input=input_)

    @classmethod
    def load(cls, user_path: Optional[Path] = None, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Load settings from built-in defaults, an optional user file and the environment."""
        try:
            with resources.files("keymaze.config").joinpath("default_settings.yaml").open("r", encoding="utf-8") as f:
                default_data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Default settings not found; falling back to dataclass defaults.")
            default_data = dataclasses.asdict(Settings())

        user_data = {}
        if user_path is not None:
            if user_path.exists():
                user_data = cls._load_yaml(user_path)
                logger.info("Loaded user settings from %s", user_path)
            else:
                logger.warning("User settings file not found: %s", user_path)

        merged = cls._deep_merge(default_data, user_data)
        merged = cls._deep_merge(merged, cls._env_overlay(os.environ if env is None else env))
        settings = cls._from_dict(merged)
        settings.validate()
        logger.debug("Settings merged: %s", settings)
        return settings

    def validate(self) -> None:
        """Reset out-of-range values to their defaults."""
        defaults = GameplaySettings()
        g = self.gameplay
        if g.tile_size <= 0:
            logger.warning("Invalid tile_size %s; resetting to %s", g.tile_size, defaults.tile_size)
            g.tile_size = defaults.tile_size
        if g.speed <= 0:
            logger.warning("Invalid speed %s; resetting to %s", g.speed, defaults.speed)
            g.speed = defaults.speed
        if g.move_interval < 0:
            logger.warning("Invalid move_interval %s; resetting to %s", g.move_interval, defaults.move_interval)
            g.move_interval = defaults.move_interval
        if g.start_level < 0:
            logger.warning("Invalid start_level %s; resetting to %s", g.start_level, defaults.start_level)
            g.start_level = defaults.start_level


__all__ = ["GameplaySettings", "InputSettings", "Settings", "WindowSettings"]
