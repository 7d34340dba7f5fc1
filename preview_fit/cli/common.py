from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any

from preview_fit.core.config_manager import get_config_manager
from preview_fit.core.logging_config import configure_logging
from preview_fit.core.paths import CONFIG_PATH
from preview_fit.core.preferences import Preferences
from preview_fit.camera.config import PreviewConfig
from preview_fit.defaults import PREFERENCE_SCOPE
from preview_fit.errors import PreviewGeometryError
from preview_fit.geometry.types import DisplayRotation, Resolution


LOG_LEVELS: dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def add_common_cli_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-level",
        choices=sorted(LOG_LEVELS.keys()),
        default=None,
        help="Logging verbosity (default: from config, else info)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Optional path to write logs to in addition to stderr",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=CONFIG_PATH,
        help="key = value configuration file (default: the shipped config.txt)",
    )


def parse_resolution(value: str) -> Resolution:
    try:
        return Resolution.parse(value)
    except PreviewGeometryError as exc:
        raise argparse.ArgumentTypeError(f"Expected WIDTHxHEIGHT, e.g. 1920x1080 (got {value!r})") from exc


def parse_resolution_list(value: str) -> list[Resolution]:
    return [parse_resolution(item) for item in value.split(",") if item.strip()]


def parse_rotation(value: str) -> DisplayRotation:
    try:
        return DisplayRotation.coerce(int(value))
    except (ValueError, PreviewGeometryError) as exc:
        raise argparse.ArgumentTypeError(f"Rotation must be 0, 90, 180 or 270 (got {value!r})") from exc


def parse_setting(value: str) -> tuple[str, str]:
    key, sep, raw = value.partition("=")
    key = key.strip()
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, e.g. max_preview_width=1280 (got {value!r})")
    if key.startswith(f"{PREFERENCE_SCOPE}."):
        key = key[len(PREFERENCE_SCOPE) + 1:]
    return key, raw.strip()


def load_preview_config(args: Any) -> PreviewConfig:
    prefs = Preferences(args.config, config_manager=get_config_manager())
    return PreviewConfig.from_preferences(prefs.scope(PREFERENCE_SCOPE), args)


def setup_logging(config: PreviewConfig) -> None:
    configure_logging(
        LOG_LEVELS.get(str(config.log_level).lower(), logging.INFO),
        config.log_file,
        quiet_loggers=("PIL",),
    )


__all__ = [
    "LOG_LEVELS",
    "add_common_cli_arguments",
    "load_preview_config",
    "parse_resolution",
    "parse_resolution_list",
    "parse_rotation",
    "parse_setting",
    "setup_logging",
]
