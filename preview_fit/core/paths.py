"""Centralized path constants for preview-fit."""

from __future__ import annotations

import os
from pathlib import Path

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
PROJECT_ROOT = PACKAGE_ROOT.parent

# Shipped defaults
CONFIG_PATH = PACKAGE_ROOT / "config.txt"

# User-specific state (allows running from read-only install directories)
_USER_STATE_ENV = os.environ.get("PREVIEW_FIT_STATE_DIR")
USER_STATE_DIR = Path(_USER_STATE_ENV).expanduser() if _USER_STATE_ENV else (Path.home() / ".preview_fit")
USER_CONFIG_OVERRIDES_DIR = USER_STATE_DIR / "config_overrides"


__all__ = [
    "PACKAGE_ROOT",
    "PROJECT_ROOT",
    "CONFIG_PATH",
    "USER_STATE_DIR",
    "USER_CONFIG_OVERRIDES_DIR",
]
