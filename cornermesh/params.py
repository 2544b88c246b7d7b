# cornermesh/params.py
from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Dict, Mapping, NamedTuple, Optional, Tuple, Union

Vec2 = Tuple[float, float]


# ---------------
# Input parameters
# ---------------

@dataclass(frozen=True)
class BoxSpec:
    """Outer size of the prism. `height` is the extrusion (y) axis."""

    width: float
    height: float
    depth: float

    @property
    def half(self) -> Tuple[float, float, float]:
        return (self.width / 2, self.height / 2, self.depth / 2)


@dataclass(frozen=True)
class CornerSpec:
    radius: float = 0.0
    segments: int = 0

    @property
    def rounded(self) -> bool:
        return self.radius > 0


class Corner(enum.Enum):
    """
    The four vertical edges of the footprint.

    Each member carries (quadrant, x sign, z sign). The arc of quadrant q
    runs from q * 90deg to (q + 1) * 90deg in the (x, z) plane. "Near" is
    the -z edge, "far" the +z edge.
    """

    FAR_RIGHT = (0, 1, 1)
    FAR_LEFT = (1, -1, 1)
    NEAR_LEFT = (2, -1, -1)
    NEAR_RIGHT = (3, 1, -1)

    def __init__(self, quadrant: int, sx: int, sz: int) -> None:
        self.quadrant = quadrant
        self.sx = sx
        self.sz = sz

    @property
    def start_angle(self) -> float:
        return self.quadrant * math.pi / 2

    @property
    def start_direction(self) -> Vec2:
        return _QUADRANT_DIRECTIONS[self.quadrant]

    @property
    def end_direction(self) -> Vec2:
        return _QUADRANT_DIRECTIONS[(self.quadrant + 1) % 4]

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")

    @classmethod
    def parse(cls, name: Union[str, "Corner"]) -> "Corner":
        if isinstance(name, Corner):
            return name
        key = str(name).strip().upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown corner: {name!r}") from None


# exact unit vectors at 0, 90, 180, 270 degrees
_QUADRANT_DIRECTIONS: Tuple[Vec2, ...] = ((1.0, 0.0), (0.0, 1.0), (-1.0, 0.0), (0.0, -1.0))

CornerMap = Dict[Corner, CornerSpec]


def corners_from(mapping: Optional[Mapping[Union[str, Corner], CornerSpec]] = None) -> CornerMap:
    """Normalise a (possibly partial) mapping to all four corners; missing ones are sharp."""
    out: CornerMap = {c: CornerSpec() for c in Corner}
    for key, spec in (mapping or {}).items():
        out[Corner.parse(key)] = spec
    return out


class FaceGroup(enum.IntEnum):
    LATERAL = 0  # x = -w/2 and x = +w/2
    CAP = 1      # y = +h/2 and y = -h/2
    WALL = 2     # z = -d/2 and z = +d/2, plus the curved corner strips


class GroupRange(NamedTuple):
    start: int
    count: int
    group: FaceGroup


# ----------
# Validation
# ----------

class ViolationKind(enum.Enum):
    NON_POSITIVE_DIMENSION = "non_positive_dimension"
    NEGATIVE_RADIUS = "negative_radius"
    NON_FINITE_RADIUS = "non_finite_radius"
    MISSING_SEGMENTS = "missing_segments"
    RADIUS_EXCEEDS_SPAN = "radius_exceeds_span"


@dataclass(frozen=True)
class Violation:
    kind: ViolationKind
    message: str
    corner: Optional[Corner] = None


class InvalidSpecError(ValueError):
    def __init__(self, violations: Tuple[Violation, ...]) -> None:
        self.violations = violations
        super().__init__("; ".join(v.message for v in violations))


@dataclass(frozen=True)
class SpecCheck:
    box: BoxSpec
    corners: CornerMap
    violations: Tuple[Violation, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.violations

    def raise_for_violations(self) -> "SpecCheck":
        if self.violations:
            raise InvalidSpecError(self.violations)
        return self


def validate_spec(box: BoxSpec, corners: Mapping[Union[str, Corner], CornerSpec]) -> SpecCheck:
    """
    Check the geometric preconditions of the builder.

    The builder itself never validates; a violation here means the mesh
    would come out gapped or self-intersecting.
    """
    corners = corners_from(corners)
    found = []
    for name in ("width", "height", "depth"):
        value = getattr(box, name)
        if not math.isfinite(value) or value <= 0:
            found.append(Violation(ViolationKind.NON_POSITIVE_DIMENSION,
                                   f"{name} must be > 0 (got {value})"))

    span = min(box.width, box.depth) / 2
    for corner, spec in corners.items():
        if not math.isfinite(spec.radius):
            found.append(Violation(ViolationKind.NON_FINITE_RADIUS,
                                   f"{corner.label}: radius must be finite (got {spec.radius})", corner))
            continue
        if spec.radius < 0:
            found.append(Violation(ViolationKind.NEGATIVE_RADIUS,
                                   f"{corner.label}: radius must be >= 0 (got {spec.radius})", corner))
            continue
        if not spec.rounded:
            continue
        if spec.segments < 1:
            found.append(Violation(ViolationKind.MISSING_SEGMENTS,
                                   f"{corner.label}: segments must be >= 1 (got {spec.segments})", corner))
        if span > 0 and spec.radius > span:
            found.append(Violation(ViolationKind.RADIUS_EXCEEDS_SPAN,
                                   f"{corner.label}: radius {spec.radius} exceeds half footprint span {span}",
                                   corner))
    return SpecCheck(box, corners, tuple(found))
