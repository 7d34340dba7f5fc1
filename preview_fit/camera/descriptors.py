"""Camera descriptors handed in by the platform layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple

from preview_fit.errors import PreviewGeometryError
from preview_fit.geometry.types import Resolution, parse_resolutions, validate_sensor_orientation


class LensFacing(Enum):
    FRONT = "front"
    BACK = "back"
    EXTERNAL = "external"

    @classmethod
    def parse(cls, raw: Any) -> "LensFacing":
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError as exc:
            raise PreviewGeometryError(f"Unknown lens facing: {raw!r}") from exc


@dataclass(slots=True, frozen=True)
class CameraDescriptor:
    """What the platform reports about one camera."""

    camera_id: str
    lens_facing: LensFacing
    sensor_orientation: int
    preview_sizes: Tuple[Resolution, ...]
    still_sizes: Tuple[Resolution, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "lens_facing", LensFacing.parse(self.lens_facing))
        object.__setattr__(self, "sensor_orientation", validate_sensor_orientation(self.sensor_orientation))
        object.__setattr__(self, "preview_sizes", tuple(parse_resolutions(self.preview_sizes)))
        object.__setattr__(self, "still_sizes", tuple(parse_resolutions(self.still_sizes)))

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "CameraDescriptor":
        if not isinstance(raw, dict):
            raise PreviewGeometryError(f"Camera description must be an object, got {raw!r}")
        try:
            return cls(
                camera_id=str(raw["id"]),
                lens_facing=raw.get("facing", LensFacing.BACK.value),
                sensor_orientation=raw.get("sensor_orientation", 90),
                preview_sizes=raw["preview_sizes"],
                still_sizes=raw.get("still_sizes", ()),
            )
        except KeyError as exc:
            raise PreviewGeometryError(f"Camera description is missing {exc.args[0]!r}") from exc

    @property
    def is_front_facing(self) -> bool:
        return self.lens_facing is LensFacing.FRONT


__all__ = ["CameraDescriptor", "LensFacing"]
