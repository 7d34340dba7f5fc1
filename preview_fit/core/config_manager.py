"""Reads and writes ``key = value`` config files with per-user overrides."""

from __future__ import annotations

import asyncio
import errno
import hashlib
import re
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import aiofiles

from .logging_utils import get_module_logger
from .paths import PROJECT_ROOT, USER_CONFIG_OVERRIDES_DIR

logger = get_module_logger("ConfigManager")


class ConfigManager:

    def __init__(self, overrides_dir: Optional[Path] = None) -> None:
        self.lock = asyncio.Lock()
        self._overrides_dir = Path(overrides_dir) if overrides_dir else USER_CONFIG_OVERRIDES_DIR
        self._project_root = PROJECT_ROOT.resolve()

    # ------------------------------------------------------------------
    # Internal helpers

    @staticmethod
    def _stringify_value(value: Any) -> str:
        if isinstance(value, bool):
            return str(value).lower()
        return str(value)

    @staticmethod
    def parse_config_lines(lines: Iterable[str]) -> Dict[str, str]:
        config: Dict[str, str] = {}

        for raw_line in lines:
            line = raw_line.strip()
            if not line or line.startswith('#') or '=' not in line:
                continue

            key, value = line.split('=', 1)
            key = key.strip()
            value = value.strip()

            if '#' in value:
                value = value.split('#')[0].strip()

            if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
                value = value[1:-1]

            config[key] = value

        return config

    def resolve_override_path(self, config_path: Path) -> Path:
        try:
            rel_path = config_path.resolve().relative_to(self._project_root)
        except ValueError:
            digest = hashlib.sha1(str(config_path).encode('utf-8')).hexdigest()[:10]
            safe_name = re.sub(r'[^a-zA-Z0-9._-]+', '_', config_path.stem or 'config')
            rel_path = Path('external') / f"{safe_name}_{digest}{config_path.suffix or '.txt'}"
        return self._overrides_dir / rel_path

    def _load_override(self, config_path: Path) -> Dict[str, str]:
        override_path = self.resolve_override_path(config_path)
        if not override_path.exists():
            return {}

        try:
            with open(override_path, 'r', encoding='utf-8') as fh:
                return self.parse_config_lines(fh)
        except OSError as exc:
            logger.warning("Failed to read override config %s: %s", override_path, exc)
            return {}

    def _write_override(self, config_path: Path, updates: Dict[str, Any]) -> bool:
        override_path = self.resolve_override_path(config_path)
        try:
            existing = self._load_override(config_path)
            for key, value in updates.items():
                existing[key] = self._stringify_value(value)

            override_path.parent.mkdir(parents=True, exist_ok=True)
            with open(override_path, 'w', encoding='utf-8') as fh:
                for key in sorted(existing):
                    fh.write(f"{key} = {existing[key]}\n")

            logger.debug("Stored config overrides in %s", override_path)
            return True
        except OSError as exc:
            logger.error("Failed to write config override %s: %s", override_path, exc)
            return False

    def _clear_override(self, config_path: Path) -> None:
        self.resolve_override_path(config_path).unlink(missing_ok=True)

    def _merge_updates(self, lines: list[str], updates: Dict[str, Any]) -> list[str]:
        updated_keys = set()
        merged = list(lines)

        for i, line in enumerate(merged):
            stripped = line.strip()
            if not stripped or stripped.startswith('#') or '=' not in stripped:
                continue
            key = stripped.split('=')[0].strip()
            if key in updates:
                indent = len(line) - len(line.lstrip())
                merged[i] = ' ' * indent + f"{key} = {self._stringify_value(updates[key])}\n"
                updated_keys.add(key)

        if merged and not merged[-1].endswith('\n'):
            merged[-1] += '\n'
        for key, value in updates.items():
            if key not in updated_keys:
                merged.append(f"{key} = {self._stringify_value(value)}\n")
                logger.debug("Added new config key: %s", key)
        return merged

    # ------------------------------------------------------------------
    # Reading

    def read_config(self, config_path: Path) -> Dict[str, str]:
        config: Dict[str, str] = {}
        config_path = Path(config_path)

        if config_path.exists():
            try:
                with open(config_path, 'r', encoding='utf-8') as fh:
                    config = self.parse_config_lines(fh)
            except OSError as exc:
                logger.error("Failed to read config %s: %s", config_path, exc)

        config.update(self._load_override(config_path))
        return config

    async def read_config_async(self, config_path: Path) -> Dict[str, str]:
        """Async version for use inside an event loop."""
        config: Dict[str, str] = {}
        config_path = Path(config_path)

        if await asyncio.to_thread(config_path.exists):
            try:
                async with aiofiles.open(config_path, 'r', encoding='utf-8') as fh:
                    lines = await fh.readlines()
                config = self.parse_config_lines(lines)
            except OSError as exc:
                logger.error("Failed to read config %s: %s", config_path, exc)

        overrides = await asyncio.to_thread(self._load_override, config_path)
        config.update(overrides)
        return config

    # ------------------------------------------------------------------
    # Writing

    def write_config(self, config_path: Path, updates: Dict[str, Any]) -> bool:
        """Rewrite ``updates`` into ``config_path``, or into the user override
        file when the shipped config is read-only."""
        config_path = Path(config_path)
        if not updates:
            return True
        if not config_path.exists():
            logger.error("Config file not found: %s", config_path)
            return False

        try:
            with open(config_path, 'r', encoding='utf-8') as fh:
                lines = fh.readlines()
            merged = self._merge_updates(lines, updates)
            with open(config_path, 'w', encoding='utf-8') as fh:
                fh.writelines(merged)
        except OSError as exc:
            if isinstance(exc, PermissionError) or exc.errno in (errno.EACCES, errno.EROFS):
                logger.warning(
                    "Config %s is not writable (%s). Falling back to override file",
                    config_path,
                    exc,
                )
                return self._write_override(config_path, updates)
            logger.error("Failed to write config %s: %s", config_path, exc, exc_info=True)
            return False

        self._clear_override(config_path)
        return True

    async def write_config_async(self, config_path: Path, updates: Dict[str, Any]) -> bool:
        async with self.lock:
            return await asyncio.to_thread(self.write_config, config_path, updates)


_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


__all__ = ["ConfigManager", "get_config_manager"]
