"""Camera selection and preview planning."""

from .config import PreviewConfig
from .descriptors import CameraDescriptor, LensFacing
from .planner import PreviewPlan, plan_preview, select_camera

__all__ = [
    "CameraDescriptor",
    "LensFacing",
    "PreviewConfig",
    "PreviewPlan",
    "plan_preview",
    "select_camera",
]
