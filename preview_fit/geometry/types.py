"""Value types shared by the geometry helpers."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Iterable, Tuple

import numpy as np

from preview_fit.errors import InvalidDimensionsError, InvalidRotationError, PreviewGeometryError

# Exact (cos, sin) for quarter turns so 90/180/270 rotations carry no rounding noise.
_QUARTER_TURNS = {0: (1.0, 0.0), 90: (0.0, 1.0), 180: (-1.0, 0.0), 270: (0.0, -1.0)}

SENSOR_ORIENTATIONS = (0, 90, 180, 270)


def require_positive(name: str, value: Any) -> int:
    """Return ``value`` as an int, raising if it is not a positive integer."""

    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidDimensionsError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidDimensionsError(f"{name} must be positive, got {value}")
    return int(value)


@dataclass(slots=True, frozen=True)
class Resolution:
    """Width x height of a camera output or view, in pixels."""

    width: int
    height: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "width", require_positive("width", self.width))
        object.__setattr__(self, "height", require_positive("height", self.height))

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"

    @classmethod
    def parse(cls, raw: Any) -> "Resolution":
        """Accept a Resolution, a ``(w, h)`` pair or a ``"WxH"`` string."""

        if isinstance(raw, Resolution):
            return raw
        if isinstance(raw, (list, tuple)) and len(raw) == 2:
            return cls(raw[0], raw[1])
        if isinstance(raw, str) and "x" in raw.lower():
            w, h = raw.lower().split("x", 1)
            try:
                return cls(int(w.strip()), int(h.strip()))
            except ValueError as exc:
                raise InvalidDimensionsError(f"Invalid size: {raw!r}") from exc
        raise InvalidDimensionsError(f"Invalid size: {raw!r}")

    @property
    def area(self) -> int:
        return self.width * self.height

    def as_tuple(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def transposed(self) -> "Resolution":
        return Resolution(self.height, self.width)

    def covers(self, width: int, height: int) -> bool:
        return self.width >= width and self.height >= height

    def fits_within(self, max_width: int, max_height: int) -> bool:
        return self.width <= max_width and self.height <= max_height

    def matches_aspect(self, ratio: "Resolution") -> bool:
        """Integer aspect test: ``height == width * ratio.height // ratio.width``."""

        return self.height == self.width * ratio.height // ratio.width


def compare_by_area(size: Resolution) -> int:
    """Sort key ordering resolutions by pixel count."""

    return size.area


def parse_resolutions(raw: Iterable[Any]) -> list[Resolution]:
    if isinstance(raw, str):
        raise InvalidDimensionsError(f"Expected a list of sizes, got {raw!r}")
    try:
        items = list(raw)
    except TypeError as exc:
        raise InvalidDimensionsError(f"Expected a list of sizes, got {raw!r}") from exc
    return [Resolution.parse(item) for item in items]


class DisplayRotation(IntEnum):
    """Display rotation ordinal, matching the platform's Surface.ROTATION_* codes."""

    ROTATION_0 = 0
    ROTATION_90 = 1
    ROTATION_180 = 2
    ROTATION_270 = 3

    @property
    def degrees(self) -> int:
        return int(self.value) * 90

    @property
    def is_quarter_turn(self) -> bool:
        return self in (DisplayRotation.ROTATION_90, DisplayRotation.ROTATION_270)

    @classmethod
    def coerce(cls, value: Any) -> "DisplayRotation":
        """Accept an enum member, an ordinal 0..3 or degrees 0/90/180/270."""

        if isinstance(value, cls):
            return value
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidRotationError(f"Display rotation is invalid: {value!r}")
        value = int(value)
        if 0 <= value <= 3:
            return cls(value)
        if value in (90, 180, 270):
            return cls(value // 90)
        raise InvalidRotationError(f"Display rotation is invalid: {value}")


def validate_sensor_orientation(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or int(value) not in SENSOR_ORIENTATIONS:
        raise InvalidRotationError(f"Sensor orientation must be one of {SENSOR_ORIENTATIONS}, got {value!r}")
    return int(value)


@dataclass(slots=True, frozen=True)
class Rect:
    left: float
    top: float
    width: float
    height: float

    @property
    def center(self) -> Tuple[float, float]:
        return (self.left + self.width / 2.0, self.top + self.height / 2.0)

    def centered_on(self, cx: float, cy: float) -> "Rect":
        return Rect(cx - self.width / 2.0, cy - self.height / 2.0, self.width, self.height)


@dataclass(slots=True, frozen=True)
class AffineTransform:
    """Affine map on y-down screen coordinates.

    ``x' = a*x + b*y + tx`` and ``y' = c*x + d*y + ty``. Positive rotation
    angles turn clockwise on screen. ``then`` post-concatenates, so
    ``t.then(u)`` applies ``t`` first and ``u`` second.
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    # ------------------------------------------------------------------
    # Constructors

    @classmethod
    def identity(cls) -> "AffineTransform":
        return cls()

    @classmethod
    def translation(cls, dx: float, dy: float) -> "AffineTransform":
        return cls(tx=float(dx), ty=float(dy))

    @classmethod
    def scaling(cls, sx: float, sy: float, px: float = 0.0, py: float = 0.0) -> "AffineTransform":
        return cls(a=float(sx), d=float(sy), tx=px - sx * px, ty=py - sy * py)

    @classmethod
    def rotation(cls, degrees: float, px: float = 0.0, py: float = 0.0) -> "AffineTransform":
        normalized = degrees % 360
        if normalized in _QUARTER_TURNS:
            cos, sin = _QUARTER_TURNS[normalized]
        else:
            radians = math.radians(degrees)
            cos, sin = math.cos(radians), math.sin(radians)
        return cls(
            a=cos,
            b=-sin,
            c=sin,
            d=cos,
            tx=px - cos * px + sin * py,
            ty=py - sin * px - cos * py,
        )

    @classmethod
    def rect_to_rect(cls, src: Rect, dst: Rect) -> "AffineTransform":
        """Stretch ``src`` onto ``dst`` with independent x/y factors (FILL)."""

        sx = dst.width / src.width
        sy = dst.height / src.height
        return cls(a=sx, d=sy, tx=dst.left - src.left * sx, ty=dst.top - src.top * sy)

    @classmethod
    def from_matrix(cls, matrix: Any) -> "AffineTransform":
        m = np.asarray(matrix, dtype=np.float64)
        if m.shape not in ((3, 3), (2, 3)):
            raise PreviewGeometryError(f"Expected a 2x3 or 3x3 matrix, got shape {m.shape}")
        return cls(
            a=float(m[0, 0]),
            b=float(m[0, 1]),
            c=float(m[1, 0]),
            d=float(m[1, 1]),
            tx=float(m[0, 2]),
            ty=float(m[1, 2]),
        )

    # ------------------------------------------------------------------
    # Composition

    @property
    def matrix(self) -> np.ndarray:
        return np.array(
            [[self.a, self.b, self.tx], [self.c, self.d, self.ty], [0.0, 0.0, 1.0]],
            dtype=np.float64,
        )

    def to_cv2(self) -> np.ndarray:
        """2x3 matrix in the layout ``cv2.warpAffine`` expects."""

        return self.matrix[:2, :]

    def then(self, other: "AffineTransform") -> "AffineTransform":
        return AffineTransform.from_matrix(other.matrix @ self.matrix)

    def inverse(self) -> "AffineTransform":
        det = self.a * self.d - self.b * self.c
        if abs(det) < 1e-12:
            raise PreviewGeometryError("Transform is not invertible")
        return AffineTransform.from_matrix(np.linalg.inv(self.matrix))

    # ------------------------------------------------------------------
    # Application

    def map_point(self, x: float, y: float) -> Tuple[float, float]:
        return (self.a * x + self.b * y + self.tx, self.c * x + self.d * y + self.ty)

    def map_points(self, points: Any) -> np.ndarray:
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        return pts @ self.matrix[:2, :2].T + np.array([self.tx, self.ty])

    # ------------------------------------------------------------------
    # Decomposition

    @property
    def scale_factors(self) -> Tuple[float, float]:
        return (math.hypot(self.a, self.c), math.hypot(self.b, self.d))

    @property
    def rotation_degrees(self) -> float:
        angle = math.degrees(math.atan2(self.c, self.a))
        return 180.0 if angle == -180.0 else angle

    @property
    def translation_offset(self) -> Tuple[float, float]:
        return (self.tx, self.ty)

    def almost_equal(self, other: "AffineTransform", tol: float = 1e-6) -> bool:
        return bool(np.allclose(self.matrix, other.matrix, atol=tol, rtol=0.0))

    def is_identity(self, tol: float = 1e-9) -> bool:
        return self.almost_equal(AffineTransform.identity(), tol)

    def to_dict(self) -> dict[str, Any]:
        return {
            "matrix": self.matrix.tolist(),
            "scale": list(self.scale_factors),
            "rotation_degrees": self.rotation_degrees,
            "translation": list(self.translation_offset),
        }


__all__ = [
    "AffineTransform",
    "DisplayRotation",
    "Rect",
    "Resolution",
    "SENSOR_ORIENTATIONS",
    "compare_by_area",
    "parse_resolutions",
    "require_positive",
    "validate_sensor_orientation",
]
