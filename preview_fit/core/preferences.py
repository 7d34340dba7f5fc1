"""Preference wrappers and typed coercion helpers on top of ConfigManager."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from .config_manager import ConfigManager, get_config_manager
from .logging_utils import get_module_logger

logger = get_module_logger(__name__)

_TRUTHY = {"true", "1", "yes", "on"}


class Preferences:
    """Cached view of one config file."""

    def __init__(
        self,
        config_path: Path,
        *,
        config_manager: Optional[ConfigManager] = None,
        initial_data: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._config_path = Path(config_path)
        self._manager = config_manager or get_config_manager()
        self._cache: Dict[str, Any] = {}
        if initial_data is not None:
            self._cache = dict(initial_data)
        else:
            self.reload()

    @property
    def config_path(self) -> Path:
        return self._config_path

    def snapshot(self) -> Dict[str, Any]:
        return dict(self._cache)

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self._cache.get(key, default)

    def reload(self) -> Dict[str, Any]:
        self._cache = self._manager.read_config(self._config_path)
        return self.snapshot()

    async def reload_async(self) -> Dict[str, Any]:
        self._cache = await self._manager.read_config_async(self._config_path)
        return self.snapshot()

    @classmethod
    async def load_async(
        cls,
        config_path: Path,
        *,
        config_manager: Optional[ConfigManager] = None,
    ) -> "Preferences":
        """Build preferences without blocking the running event loop."""

        prefs = cls(config_path, config_manager=config_manager, initial_data={})
        await prefs.reload_async()
        return prefs

    def scope(self, prefix: str, *, separator: str = ".") -> "ScopedPreferences":
        """Return a scoped view that automatically prefixes keys."""

        return ScopedPreferences(self, prefix, separator=separator)

    async def write_async(self, updates: Dict[str, Any]) -> bool:
        if not updates:
            return True
        success = await self._manager.write_config_async(self._config_path, updates)
        if success:
            for key, value in updates.items():
                self._cache[key] = ConfigManager._stringify_value(value)
        else:
            logger.warning("Could not persist %d preference(s) to %s", len(updates), self._config_path)
        return success


class ScopedPreferences:
    """Wrapper around Preferences that automatically prefixes keys."""

    def __init__(self, base: Preferences, prefix: str, *, separator: str = ".") -> None:
        self._base = base
        self._separator = separator
        self._prefix = prefix.strip().rstrip(separator)

    def _qualify(self, key: str) -> str:
        if not self._prefix:
            return key
        return f"{self._prefix}{self._separator}{key}"

    def snapshot(self) -> Dict[str, Any]:
        base_snapshot = self._base.snapshot()
        if not self._prefix:
            return base_snapshot
        prefix = f"{self._prefix}{self._separator}"
        return {key[len(prefix):]: value for key, value in base_snapshot.items() if key.startswith(prefix)}

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self._base.get(self._qualify(key), default)

    async def write_async(self, updates: Dict[str, Any]) -> bool:
        return await self._base.write_async({self._qualify(key): value for key, value in updates.items()})


# ---------------------------------------------------------------------------
# Type coercion helpers for from_preferences() implementations


def get_pref_str(prefs: ScopedPreferences, key: str, default: str) -> str:
    val = prefs.get(key)
    return str(val) if val is not None else default


def get_pref_int(prefs: ScopedPreferences, key: str, default: int) -> int:
    val = prefs.get(key)
    if val is None:
        return default
    try:
        return int(val)
    except (ValueError, TypeError):
        logger.warning("Invalid int for %s: %r, using %d", key, val, default)
        return default


def get_pref_bool(prefs: ScopedPreferences, key: str, default: bool) -> bool:
    val = prefs.get(key)
    if val is None:
        return default
    if isinstance(val, bool):
        return val
    return str(val).strip().lower() in _TRUTHY


def get_pref_path(prefs: ScopedPreferences, key: str, default: Optional[Path]) -> Optional[Path]:
    val = prefs.get(key)
    if val is None:
        return default
    text = str(val).strip()
    return Path(text).expanduser() if text else default


__all__ = [
    "Preferences",
    "ScopedPreferences",
    "get_pref_str",
    "get_pref_int",
    "get_pref_bool",
    "get_pref_path",
]
