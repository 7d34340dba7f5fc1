"""Command-line entry point: ``python -m preview_fit <command>``."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from preview_fit.camera.config import PreviewConfig
from preview_fit.camera.descriptors import CameraDescriptor
from preview_fit.camera.planner import plan_preview
from preview_fit.cli.common import (
    add_common_cli_arguments,
    load_preview_config,
    parse_resolution,
    parse_resolution_list,
    parse_rotation,
    parse_setting,
    setup_logging,
)
from preview_fit.core.config_manager import get_config_manager
from preview_fit.core.logging_utils import get_module_logger
from preview_fit.core.preferences import Preferences
from preview_fit.defaults import PREFERENCE_SCOPE
from preview_fit.errors import ConfigError, PreviewFitError, PreviewInputError
from preview_fit.geometry.size_selector import select_preview_size
from preview_fit.geometry.transform import compute_transform
from preview_fit.media.frames import load_upright_image, save_image

logger = get_module_logger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_GEOMETRY_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="preview_fit",
        description="Camera preview geometry: size selection, view transforms and image orientation",
    )
    add_common_cli_arguments(parser)
    commands = parser.add_subparsers(dest="command", required=True)

    size = commands.add_parser("size", help="Choose a preview size from supported sizes")
    size.add_argument("--choices", type=parse_resolution_list, required=True, help="Comma separated WxH list")
    size.add_argument("--target", type=parse_resolution, required=True, help="View size in sensor coordinates")
    size.add_argument("--aspect", type=parse_resolution, required=True, help="Reference size for the aspect ratio")
    size.add_argument(
        "--max",
        dest="max_preview",
        type=parse_resolution,
        default=None,
        help="Upper bound (default: preview.max_preview_width/height from config)",
    )

    transform = commands.add_parser("transform", help="Compute the view transform for a preview")
    transform.add_argument("--viewport", type=parse_resolution, required=True)
    transform.add_argument("--preview", type=parse_resolution, required=True)
    transform.add_argument("--rotation", type=parse_rotation, default=parse_rotation("0"), help="0, 90, 180 or 270")

    plan = commands.add_parser("plan", help="Plan a preview from a JSON list of camera descriptions")
    plan.add_argument("--cameras", type=Path, required=True, help="JSON file: list of camera descriptions")
    plan.add_argument("--view", type=parse_resolution, required=True, help="Preview view size")
    plan.add_argument("--display", type=parse_resolution, required=True, help="Display size")
    plan.add_argument("--rotation", type=parse_rotation, default=parse_rotation("0"), help="0, 90, 180 or 270")
    plan.add_argument("--max", dest="max_preview", type=parse_resolution, default=None)
    orientation = plan.add_mutually_exclusive_group()
    orientation.add_argument("--landscape", dest="landscape", action="store_true", default=None)
    orientation.add_argument("--portrait", dest="landscape", action="store_false")

    orient = commands.add_parser("orient", help="Rewrite a still image upright using its EXIF orientation")
    orient.add_argument("--input", type=Path, required=True)
    orient.add_argument("--output", type=Path, required=True)

    settings = commands.add_parser("config", help="Show or change the preview settings in the config file")
    actions = settings.add_subparsers(dest="config_action", required=True)
    actions.add_parser("show", help="Print stored and effective settings")
    change = actions.add_parser("set", help="Store KEY=VALUE settings, e.g. max_preview_width=1280")
    change.add_argument("settings", nargs="+", type=parse_setting, metavar="KEY=VALUE")

    return parser


def _load_cameras(path: Path) -> list[CameraDescriptor]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        raw = raw.get("cameras", [])
    if not isinstance(raw, list):
        raise PreviewInputError(f"{path}: expected a list of camera descriptions")
    return [CameraDescriptor.from_dict(entry) for entry in raw]


async def _run_config(args: argparse.Namespace) -> dict[str, Any]:
    prefs = await Preferences.load_async(args.config, config_manager=get_config_manager())
    scoped = prefs.scope(PREFERENCE_SCOPE)

    if args.config_action == "set":
        updates = PreviewConfig.validate_updates(dict(args.settings))
        if not await scoped.write_async(updates):
            raise ConfigError(f"Could not store settings in {args.config}")
        logger.info("Stored %s in %s", ", ".join(sorted(updates)), args.config)

    return {
        "config": str(args.config),
        "stored": scoped.snapshot(),
        "effective": PreviewConfig.from_preferences(scoped).to_dict(),
    }


def _run(args: argparse.Namespace, config: PreviewConfig) -> dict[str, Any]:
    if args.command == "config":
        return asyncio.run(_run_config(args))

    if args.command == "size":
        selection = select_preview_size(
            args.choices,
            args.target.width,
            args.target.height,
            config.max_preview_width,
            config.max_preview_height,
            args.aspect,
        )
        return {"size": str(selection.size), "selection": selection.kind.value, "matching": selection.matching}

    if args.command == "transform":
        return compute_transform(
            args.viewport.width,
            args.viewport.height,
            args.preview.width,
            args.preview.height,
            args.rotation,
        ).to_dict()

    if args.command == "plan":
        return plan_preview(
            _load_cameras(args.cameras),
            args.view,
            args.display,
            args.rotation,
            config=config,
            landscape=args.landscape,
        ).to_dict()

    upright = load_upright_image(args.input)
    written = save_image(upright, args.output)
    return {"output": str(written), "size": f"{upright.shape[1]}x{upright.shape[0]}"}


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        config = load_preview_config(args)
    except PreviewFitError as exc:
        parser.error(f"invalid configuration: {exc}")
    setup_logging(config)

    try:
        result = _run(args, config)
    except (OSError, json.JSONDecodeError, PreviewInputError) as exc:
        logger.error("Could not read input: %s", exc)
        return EXIT_INPUT_ERROR
    except PreviewFitError as exc:
        logger.error("%s", exc)
        return EXIT_GEOMETRY_ERROR

    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return EXIT_OK


__all__ = ["build_parser", "main"]
