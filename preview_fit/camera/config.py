"""Typed configuration for preview planning."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from preview_fit.core.preferences import (
    ScopedPreferences,
    get_pref_bool,
    get_pref_int,
    get_pref_path,
    get_pref_str,
)
from preview_fit.defaults import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_SKIP_FRONT_FACING,
    LOG_LEVEL_NAMES,
    MAX_PREVIEW_HEIGHT,
    MAX_PREVIEW_WIDTH,
)
from preview_fit.errors import ConfigError
from preview_fit.geometry.types import Resolution, require_positive

_BOOL_WORDS = {
    "true": True,
    "1": True,
    "yes": True,
    "on": True,
    "false": False,
    "0": False,
    "no": False,
    "off": False,
}


@dataclass(slots=True)
class PreviewConfig:
    max_preview_width: int = MAX_PREVIEW_WIDTH
    max_preview_height: int = MAX_PREVIEW_HEIGHT
    skip_front_facing: bool = DEFAULT_SKIP_FRONT_FACING
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[Path] = None

    @property
    def max_preview(self) -> Resolution:
        return Resolution(self.max_preview_width, self.max_preview_height)

    @classmethod
    def from_preferences(cls, prefs: ScopedPreferences, args: Any = None) -> "PreviewConfig":
        """Build from preferences; non-None ``args`` attributes win."""

        config = cls(
            max_preview_width=get_pref_int(prefs, "max_preview_width", MAX_PREVIEW_WIDTH),
            max_preview_height=get_pref_int(prefs, "max_preview_height", MAX_PREVIEW_HEIGHT),
            skip_front_facing=get_pref_bool(prefs, "skip_front_facing", DEFAULT_SKIP_FRONT_FACING),
            log_level=get_pref_str(prefs, "log_level", DEFAULT_LOG_LEVEL),
            log_file=get_pref_path(prefs, "log_file", None),
        )
        if args is not None:
            for name in ("log_level", "log_file"):
                value = getattr(args, name, None)
                if value is not None:
                    setattr(config, name, value)
            max_preview = getattr(args, "max_preview", None)
            if max_preview is not None:
                config.max_preview_width = max_preview.width
                config.max_preview_height = max_preview.height
        require_positive("max_preview_width", config.max_preview_width)
        require_positive("max_preview_height", config.max_preview_height)
        return config

    @classmethod
    def validate_updates(cls, updates: Dict[str, str]) -> Dict[str, Any]:
        """Check raw ``key -> text`` settings and return them typed.

        Raises ConfigError for unknown keys and values that would not load.
        """

        known = {item.name for item in fields(cls)}
        typed: Dict[str, Any] = {}
        for key, raw in updates.items():
            if key not in known:
                raise ConfigError(f"Unknown preview setting {key!r}; expected one of {sorted(known)}")
            text = str(raw).strip()
            if key in ("max_preview_width", "max_preview_height"):
                try:
                    typed[key] = int(text)
                except ValueError as exc:
                    raise ConfigError(f"{key} must be an integer, got {text!r}") from exc
                if typed[key] <= 0:
                    raise ConfigError(f"{key} must be positive, got {typed[key]}")
            elif key == "skip_front_facing":
                if text.lower() not in _BOOL_WORDS:
                    raise ConfigError(f"{key} must be true or false, got {text!r}")
                typed[key] = _BOOL_WORDS[text.lower()]
            elif key == "log_level":
                if text.lower() not in LOG_LEVEL_NAMES:
                    raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVEL_NAMES)}, got {text!r}")
                typed[key] = text.lower()
            else:
                if not text:
                    raise ConfigError(f"{key} must not be empty")
                typed[key] = text
        return typed

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["log_file"] = str(self.log_file) if self.log_file else None
        return data


__all__ = ["PreviewConfig"]
