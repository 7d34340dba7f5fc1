"""Pixel-level helpers: upright still images and transformed preview frames."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from preview_fit.core.logging_utils import get_module_logger
from preview_fit.errors import InvalidImageError
from preview_fit.geometry.orientation import ImageOrientation
from preview_fit.geometry.types import AffineTransform, Resolution

logger = get_module_logger(__name__)

EXIF_ORIENTATION_TAG = 0x0112


def _require_frame(frame: Any) -> np.ndarray:
    if not isinstance(frame, np.ndarray) or frame.ndim not in (2, 3) or frame.size == 0:
        raise InvalidImageError(f"Expected a non-empty HxW or HxWxC array, got {getattr(frame, 'shape', type(frame))}")
    return frame


def normalize_orientation(frame: np.ndarray, orientation: Any) -> np.ndarray:
    """Return a copy of ``frame`` rotated/flipped so that it reads upright."""

    frame = _require_frame(frame)
    try:
        orientation = ImageOrientation(orientation)
    except ValueError as exc:
        raise InvalidImageError(f"Unknown image orientation: {orientation!r}") from exc
    if orientation is ImageOrientation.UP:
        return frame.copy()
    if orientation is ImageOrientation.UP_MIRRORED:
        return cv2.flip(frame, 1)
    if orientation is ImageOrientation.DOWN:
        return cv2.rotate(frame, cv2.ROTATE_180)
    if orientation is ImageOrientation.DOWN_MIRRORED:
        return cv2.flip(frame, 0)
    if orientation is ImageOrientation.LEFT_MIRRORED:
        return cv2.transpose(frame)
    if orientation is ImageOrientation.RIGHT:
        return cv2.rotate(frame, cv2.ROTATE_90_CLOCKWISE)
    if orientation is ImageOrientation.RIGHT_MIRRORED:
        return cv2.flip(cv2.transpose(frame), -1)
    return cv2.rotate(frame, cv2.ROTATE_90_COUNTERCLOCKWISE)


def load_upright_image(path: Union[str, Path]) -> np.ndarray:
    """Read an image as an RGB array with its EXIF orientation applied."""

    try:
        with Image.open(path) as image:
            orientation = ImageOrientation.from_exif(image.getexif().get(EXIF_ORIENTATION_TAG))
            pixels = np.asarray(image.convert("RGB"))
    except (OSError, UnidentifiedImageError) as exc:
        raise InvalidImageError(f"Could not read image {path}: {exc}") from exc

    logger.debug("Loaded %s (%dx%d) orientation=%s", path, pixels.shape[1], pixels.shape[0], orientation.name)
    return normalize_orientation(pixels, orientation)


def save_image(frame: np.ndarray, path: Union[str, Path]) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    try:
        Image.fromarray(_require_frame(frame)).save(target)
    except (OSError, ValueError) as exc:
        raise InvalidImageError(f"Could not write image {target}: {exc}") from exc
    return target


def render_preview(frame: np.ndarray, viewport: Any, transform: AffineTransform) -> np.ndarray:
    """Composite ``frame`` into a view the way a texture view does.

    The buffer is first stretched to the view size, then ``transform`` is
    applied in view coordinates. Areas the transform leaves uncovered are
    black.
    """

    frame = _require_frame(frame)
    view = Resolution.parse(viewport)
    stretched = cv2.resize(frame, view.as_tuple(), interpolation=cv2.INTER_LINEAR)
    # OpenCV addresses pixel centers at integers; the transform works on pixel edges.
    pixel_space = (
        AffineTransform.translation(0.5, 0.5)
        .then(transform)
        .then(AffineTransform.translation(-0.5, -0.5))
    )
    return cv2.warpAffine(
        stretched,
        pixel_space.to_cv2(),
        view.as_tuple(),
        flags=cv2.INTER_LINEAR,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=0,
    )


__all__ = [
    "EXIF_ORIENTATION_TAG",
    "load_upright_image",
    "normalize_orientation",
    "render_preview",
    "save_image",
]
