"""Sensor/display orientation helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from preview_fit.defaults import MAX_PREVIEW_SIZE
from preview_fit.geometry.types import (
    AffineTransform,
    DisplayRotation,
    Resolution,
    validate_sensor_orientation,
)


def dimensions_swapped(display_rotation: Any, sensor_orientation: int) -> bool:
    """True when the sensor's axes are transposed relative to the display."""

    rotation = DisplayRotation.coerce(display_rotation)
    sensor = validate_sensor_orientation(sensor_orientation)
    if rotation.is_quarter_turn:
        return sensor in (0, 180)
    return sensor in (90, 270)


@dataclass(slots=True, frozen=True)
class PreviewRequest:
    """View and display bounds expressed in sensor coordinates."""

    target: Resolution
    max_size: Resolution
    swapped: bool


def rotated_preview_request(
    view_size: Any,
    display_size: Any,
    display_rotation: Any,
    sensor_orientation: int,
    *,
    max_preview: Any = MAX_PREVIEW_SIZE,
) -> PreviewRequest:
    view = Resolution.parse(view_size)
    display = Resolution.parse(display_size)
    ceiling = Resolution.parse(max_preview)
    swapped = dimensions_swapped(display_rotation, sensor_orientation)
    if swapped:
        view = view.transposed()
        display = display.transposed()
    max_size = Resolution(min(display.width, ceiling.width), min(display.height, ceiling.height))
    return PreviewRequest(target=view, max_size=max_size, swapped=swapped)


def view_aspect_ratio(preview_size: Any, landscape: bool) -> Resolution:
    """Aspect ratio the preview view should be fitted to."""

    size = Resolution.parse(preview_size)
    return size if landscape else size.transposed()


def fit_to_aspect(available: Any, aspect: Any) -> Resolution:
    """Largest size inside ``available`` with the ``aspect`` ratio."""

    bounds = Resolution.parse(available)
    ratio = Resolution.parse(aspect)
    if bounds.width < bounds.height * ratio.width // ratio.height:
        return Resolution(bounds.width, max(1, bounds.width * ratio.height // ratio.width))
    return Resolution(max(1, bounds.height * ratio.width // ratio.height), bounds.height)


class ImageOrientation(IntEnum):
    """How stored pixels relate to the upright image; values are EXIF tags."""

    UP = 1
    UP_MIRRORED = 2
    DOWN = 3
    DOWN_MIRRORED = 4
    LEFT_MIRRORED = 5
    RIGHT = 6
    RIGHT_MIRRORED = 7
    LEFT = 8

    @property
    def swaps_axes(self) -> bool:
        return self.value >= ImageOrientation.LEFT_MIRRORED

    @classmethod
    def from_exif(cls, value: Any) -> "ImageOrientation":
        """Unknown or missing tags read as UP."""

        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return cls.UP


def upright_size(orientation: ImageOrientation, width: int, height: int) -> Resolution:
    size = Resolution(width, height)
    return size.transposed() if ImageOrientation(orientation).swaps_axes else size


def orientation_transform(orientation: ImageOrientation, width: int, height: int) -> AffineTransform:
    """Map stored pixel coordinates of a ``width x height`` image to upright ones."""

    size = Resolution(width, height)
    w, h = float(size.width), float(size.height)
    orientation = ImageOrientation(orientation)
    if orientation is ImageOrientation.UP_MIRRORED:
        return AffineTransform(a=-1.0, tx=w)
    if orientation is ImageOrientation.DOWN:
        return AffineTransform(a=-1.0, d=-1.0, tx=w, ty=h)
    if orientation is ImageOrientation.DOWN_MIRRORED:
        return AffineTransform(d=-1.0, ty=h)
    if orientation is ImageOrientation.LEFT_MIRRORED:
        return AffineTransform(a=0.0, b=1.0, c=1.0, d=0.0)
    if orientation is ImageOrientation.RIGHT:
        return AffineTransform(a=0.0, b=-1.0, c=1.0, d=0.0, tx=h)
    if orientation is ImageOrientation.RIGHT_MIRRORED:
        return AffineTransform(a=0.0, b=-1.0, c=-1.0, d=0.0, tx=h, ty=w)
    if orientation is ImageOrientation.LEFT:
        return AffineTransform(a=0.0, b=1.0, c=-1.0, d=0.0, ty=w)
    return AffineTransform.identity()


__all__ = [
    "ImageOrientation",
    "PreviewRequest",
    "dimensions_swapped",
    "fit_to_aspect",
    "orientation_transform",
    "rotated_preview_request",
    "upright_size",
    "view_aspect_ratio",
]
