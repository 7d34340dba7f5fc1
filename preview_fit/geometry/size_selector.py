"""Preview resolution selection.

Pushing too large a preview through the camera pipeline can exceed the bus
bandwidth, so the selector prefers the smallest supported size that still
covers the view, bounded by a maximum and locked to the still-capture aspect
ratio.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

from preview_fit.core.logging_utils import LoggerLike, ensure_structured_logger
from preview_fit.errors import EmptyCandidateSetError
from preview_fit.geometry.types import Resolution, compare_by_area, parse_resolutions, require_positive


class SelectionKind(Enum):
    """How a preview size was chosen."""

    COVERING = "covering"  # smallest size that covers the view
    BEST_EFFORT = "best_effort"  # largest size that does not
    FALLBACK = "fallback"  # nothing matched; first choice returned


@dataclass(slots=True, frozen=True)
class SizeSelection:
    size: Resolution
    kind: SelectionKind
    matching: int = 0

    @property
    def is_fallback(self) -> bool:
        return self.kind is SelectionKind.FALLBACK


def largest_by_area(sizes: Iterable[Any]) -> Resolution:
    """Return the largest size (first wins on ties), e.g. for still capture."""

    candidates = parse_resolutions(sizes)
    if not candidates:
        raise EmptyCandidateSetError("No sizes to choose from")
    return max(candidates, key=compare_by_area)


def select_preview_size(
    choices: Iterable[Any],
    target_width: int,
    target_height: int,
    max_width: int,
    max_height: int,
    aspect_ratio: Any,
    *,
    logger: LoggerLike = None,
) -> SizeSelection:
    """Choose a preview size and report how it was chosen.

    Of the ``choices`` no larger than ``max_width`` x ``max_height`` whose
    aspect ratio matches ``aspect_ratio``, pick the smallest one that is at
    least ``target_width`` x ``target_height``. If none is that big, pick the
    largest of them. If no choice matches at all, fall back to the first
    choice and log a warning.

    ``target_*`` and ``max_*`` are expected in sensor coordinates, i.e.
    already swapped by the caller when the sensor is rotated relative to the
    display.
    """

    log = ensure_structured_logger(logger, fallback_name=__name__)
    candidates = parse_resolutions(choices)
    if not candidates:
        raise EmptyCandidateSetError("Cannot choose a preview size from an empty set of choices")
    target_width = require_positive("target_width", target_width)
    target_height = require_positive("target_height", target_height)
    max_width = require_positive("max_width", max_width)
    max_height = require_positive("max_height", max_height)
    ratio = Resolution.parse(aspect_ratio)

    big_enough: list[Resolution] = []
    not_big_enough: list[Resolution] = []
    for option in candidates:
        if not (option.fits_within(max_width, max_height) and option.matches_aspect(ratio)):
            continue
        if option.covers(target_width, target_height):
            big_enough.append(option)
        else:
            not_big_enough.append(option)

    matching = len(big_enough) + len(not_big_enough)
    if big_enough:
        selection = SizeSelection(min(big_enough, key=compare_by_area), SelectionKind.COVERING, matching)
    elif not_big_enough:
        selection = SizeSelection(max(not_big_enough, key=compare_by_area), SelectionKind.BEST_EFFORT, matching)
    else:
        log.warning(
            "Couldn't find any suitable preview size among %d choices (max %dx%d, aspect %s); using %s",
            len(candidates),
            max_width,
            max_height,
            ratio,
            candidates[0],
        )
        return SizeSelection(candidates[0], SelectionKind.FALLBACK, 0)

    log.debug(
        "Preview size %s (%s) for target %dx%d from %d matching choices",
        selection.size,
        selection.kind.value,
        target_width,
        target_height,
        matching,
    )
    return selection


def choose_optimal_size(
    choices: Iterable[Any],
    target_width: int,
    target_height: int,
    max_width: int,
    max_height: int,
    aspect_ratio: Any,
    *,
    logger: LoggerLike = None,
) -> Resolution:
    """Return only the size picked by :func:`select_preview_size`."""

    return select_preview_size(
        choices,
        target_width,
        target_height,
        max_width,
        max_height,
        aspect_ratio,
        logger=logger,
    ).size


__all__ = [
    "SelectionKind",
    "SizeSelection",
    "choose_optimal_size",
    "largest_by_area",
    "select_preview_size",
]
