"""Pure geometry: preview size selection, view transforms and orientation."""

from .orientation import (
    ImageOrientation,
    PreviewRequest,
    dimensions_swapped,
    fit_to_aspect,
    orientation_transform,
    rotated_preview_request,
    upright_size,
    view_aspect_ratio,
)
from .size_selector import SelectionKind, SizeSelection, choose_optimal_size, largest_by_area, select_preview_size
from .transform import compute_transform, counter_rotation_degrees
from .types import AffineTransform, DisplayRotation, Rect, Resolution, compare_by_area

__all__ = [
    "AffineTransform",
    "DisplayRotation",
    "ImageOrientation",
    "PreviewRequest",
    "Rect",
    "Resolution",
    "SelectionKind",
    "SizeSelection",
    "choose_optimal_size",
    "compare_by_area",
    "compute_transform",
    "counter_rotation_degrees",
    "dimensions_swapped",
    "fit_to_aspect",
    "largest_by_area",
    "orientation_transform",
    "rotated_preview_request",
    "select_preview_size",
    "upright_size",
    "view_aspect_ratio",
]
