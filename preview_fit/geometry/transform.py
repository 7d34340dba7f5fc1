"""Maps the preview buffer onto the view with rotation compensation."""

from __future__ import annotations

from typing import Any

from preview_fit.core.logging_utils import LoggerLike, ensure_structured_logger
from preview_fit.geometry.types import AffineTransform, DisplayRotation, Rect, require_positive


def counter_rotation_degrees(rotation: DisplayRotation) -> int:
    """Rotation applied to the buffer for a quarter-turned display.

    -90 for ROTATION_90 and +90 for ROTATION_270 (clockwise positive).
    """

    return 90 * (int(rotation) - 2)


def compute_transform(
    viewport_width: int,
    viewport_height: int,
    preview_width: int,
    preview_height: int,
    rotation: Any,
    *,
    logger: LoggerLike = None,
) -> AffineTransform:
    """Return the transform to apply to a view showing the preview buffer.

    At 90/270 the buffer is stored with its axes swapped relative to the
    view: the view rect is stretched onto a ``preview_height x preview_width``
    rect centered on the view, scaled uniformly about the center by
    ``max(viewport_height / preview_height, viewport_width / preview_width)``
    and counter-rotated. The scale fills the view, so mismatched aspect
    ratios crop instead of letterboxing. 180 is a half turn about the
    center and 0 is the identity.
    """

    log = ensure_structured_logger(logger, fallback_name=__name__)
    viewport_width = require_positive("viewport_width", viewport_width)
    viewport_height = require_positive("viewport_height", viewport_height)
    preview_width = require_positive("preview_width", preview_width)
    preview_height = require_positive("preview_height", preview_height)
    rotation = DisplayRotation.coerce(rotation)

    view_rect = Rect(0.0, 0.0, float(viewport_width), float(viewport_height))
    center_x, center_y = view_rect.center

    if rotation.is_quarter_turn:
        buffer_rect = Rect(0.0, 0.0, float(preview_height), float(preview_width)).centered_on(center_x, center_y)
        scale = max(viewport_height / preview_height, viewport_width / preview_width)
        transform = (
            AffineTransform.rect_to_rect(view_rect, buffer_rect)
            .then(AffineTransform.scaling(scale, scale, center_x, center_y))
            .then(AffineTransform.rotation(counter_rotation_degrees(rotation), center_x, center_y))
        )
    elif rotation is DisplayRotation.ROTATION_180:
        transform = AffineTransform.rotation(180, center_x, center_y)
    else:
        transform = AffineTransform.identity()

    log.debug(
        "Transform for view %dx%d, preview %dx%d at %d deg: rotate %.1f",
        viewport_width,
        viewport_height,
        preview_width,
        preview_height,
        rotation.degrees,
        transform.rotation_degrees,
    )
    return transform


__all__ = ["compute_transform", "counter_rotation_degrees"]
