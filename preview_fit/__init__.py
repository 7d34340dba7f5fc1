"""Camera preview geometry: preview size selection and view transforms."""

from __future__ import annotations

from importlib import metadata

from .errors import (
    EmptyCandidateSetError,
    InvalidDimensionsError,
    InvalidRotationError,
    PreviewFitError,
    PreviewGeometryError,
)
from .geometry import (
    AffineTransform,
    DisplayRotation,
    Resolution,
    SelectionKind,
    SizeSelection,
    choose_optimal_size,
    compute_transform,
    select_preview_size,
)

try:
    __version__ = metadata.version("preview-fit")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev
    __version__ = "0.0.0"


__all__ = [
    "__version__",
    "AffineTransform",
    "DisplayRotation",
    "EmptyCandidateSetError",
    "InvalidDimensionsError",
    "InvalidRotationError",
    "PreviewFitError",
    "PreviewGeometryError",
    "Resolution",
    "SelectionKind",
    "SizeSelection",
    "choose_optimal_size",
    "compute_transform",
    "select_preview_size",
]
