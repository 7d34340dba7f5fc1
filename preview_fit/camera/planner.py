"""Turns camera descriptions and view geometry into a preview plan.

This is the pure half of opening a camera preview: pick the camera, the
still-capture size, the preview size and the transform for the view. The
platform layer owns the device, the capture session and the surface.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from preview_fit.camera.config import PreviewConfig
from preview_fit.camera.descriptors import CameraDescriptor
from preview_fit.core.logging_utils import LoggerLike, ensure_structured_logger
from preview_fit.errors import CameraSelectionError
from preview_fit.geometry.orientation import PreviewRequest, rotated_preview_request, view_aspect_ratio
from preview_fit.geometry.size_selector import SelectionKind, largest_by_area, select_preview_size
from preview_fit.geometry.transform import compute_transform
from preview_fit.geometry.types import AffineTransform, DisplayRotation, Resolution


@dataclass(slots=True, frozen=True)
class PreviewPlan:
    camera_id: str
    preview_size: Resolution
    still_size: Resolution
    view_aspect: Resolution
    request: PreviewRequest
    selection: SelectionKind
    rotation: DisplayRotation
    transform: AffineTransform

    def to_dict(self) -> dict[str, Any]:
        return {
            "camera_id": self.camera_id,
            "preview_size": str(self.preview_size),
            "still_size": str(self.still_size),
            "view_aspect": str(self.view_aspect),
            "target": str(self.request.target),
            "max_size": str(self.request.max_size),
            "swapped": self.request.swapped,
            "selection": self.selection.value,
            "rotation_degrees": self.rotation.degrees,
            "transform": self.transform.to_dict(),
        }


def select_camera(cameras: Iterable[CameraDescriptor], *, skip_front_facing: bool = True) -> CameraDescriptor:
    """Return the first usable camera in platform order."""

    seen = 0
    for camera in cameras:
        seen += 1
        if skip_front_facing and camera.is_front_facing:
            continue
        if not camera.preview_sizes:
            continue
        return camera
    raise CameraSelectionError(f"No usable camera among {seen} described")


def plan_preview(
    cameras: Iterable[CameraDescriptor],
    view_size: Any,
    display_size: Any,
    display_rotation: Any,
    *,
    config: Optional[PreviewConfig] = None,
    landscape: Optional[bool] = None,
    logger: LoggerLike = None,
) -> PreviewPlan:
    """Plan the preview for a view of ``view_size`` on a display of ``display_size``.

    ``landscape`` defaults to the display being wider than it is tall.
    """

    log = ensure_structured_logger(logger, fallback_name=__name__)
    config = config or PreviewConfig()
    view = Resolution.parse(view_size)
    display = Resolution.parse(display_size)
    rotation = DisplayRotation.coerce(display_rotation)

    camera = select_camera(cameras, skip_front_facing=config.skip_front_facing)
    still_size = largest_by_area(camera.still_sizes or camera.preview_sizes)
    request = rotated_preview_request(
        view,
        display,
        rotation,
        camera.sensor_orientation,
        max_preview=config.max_preview,
    )
    selection = select_preview_size(
        camera.preview_sizes,
        request.target.width,
        request.target.height,
        request.max_size.width,
        request.max_size.height,
        still_size,
        logger=log,
    )
    if landscape is None:
        landscape = display.width > display.height

    plan = PreviewPlan(
        camera_id=camera.camera_id,
        preview_size=selection.size,
        still_size=still_size,
        view_aspect=view_aspect_ratio(selection.size, landscape),
        request=request,
        selection=selection.kind,
        rotation=rotation,
        transform=compute_transform(
            view.width,
            view.height,
            selection.size.width,
            selection.size.height,
            rotation,
            logger=log,
        ),
    )
    log.info(
        "Camera %s: preview %s, still %s, view %s at %d deg",
        plan.camera_id,
        plan.preview_size,
        plan.still_size,
        view,
        rotation.degrees,
    )
    return plan


__all__ = ["PreviewPlan", "plan_preview", "select_camera"]
