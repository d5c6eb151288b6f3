"""Points, rays, segments and lines with their membership predicates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence, Tuple, Union

import numpy as np

from .config import abs_tol
from .errors import DegenerateInputError
from .vector import Dir, NonzeroVec, Proj, Vec


@dataclass(frozen=True)
class Point:
    """Point of the affine plane; differences of points are :class:`Vec`."""

    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def __sub__(self, other: "Point") -> Vec:
        return Vec(self.x - other.x, self.y - other.y)

    def __add__(self, vec: Vec) -> "Point":
        return Point(self.x + vec.x, self.y + vec.y)

    def is_close(self, other: "Point") -> bool:
        return (self - other).norm() <= abs_tol()

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    def as_tuple(self) -> Tuple[float, float]:
        return self.x, self.y


PointLike = Union[Point, Sequence[float], np.ndarray]


def as_point(value: PointLike) -> Point:
    if isinstance(value, Point):
        return value
    arr = np.asarray(value, dtype=float)
    if arr.shape != (2,):
        raise ValueError(f"point must have exactly two coordinates, got shape {arr.shape}")
    return Point(float(arr[0]), float(arr[1]))


def distance(a: PointLike, b: PointLike) -> float:
    return (as_point(b) - as_point(a)).norm()


def _is_multiple(v: Vec, direction: Vec) -> Tuple[bool, float]:
    """Check ``v == t * direction`` and return ``t`` (``direction`` is nonzero)."""

    denom = direction.norm_sq()
    t = v.dot(direction) / denom
    off_line = abs(v.cross(direction)) / direction.norm()
    return off_line <= abs_tol(), t


@dataclass(frozen=True)
class Ray:
    """One-sided infinite ray starting at ``source``."""

    source: Point
    direction: Dir

    def point_at(self, t: float) -> Point:
        return self.source + self.direction.unit_vec() * t

    def contains(self, p: PointLike) -> bool:
        """``p - source == t * direction`` for some ``t >= 0``."""
        p = as_point(p)
        on_line, t = _is_multiple(p - self.source, self.direction.unit_vec())
        return on_line and t >= -abs_tol()

    def interior(self, p: PointLike) -> bool:
        p = as_point(p)
        return self.contains(p) and not p.is_close(self.source)

    def reverse(self) -> "Ray":
        return Ray(self.source, -self.direction)

    def to_dir(self) -> Dir:
        return self.direction

    def to_proj(self) -> Proj:
        return self.direction.to_proj()

    def to_line(self) -> "Line":
        return Line(self.source, self.to_proj())


@dataclass(frozen=True)
class Segment:
    """Segment from ``source`` to ``target``; may be degenerate."""

    source: Point
    target: Point

    def to_vec(self) -> Vec:
        return self.target - self.source

    @property
    def is_nd(self) -> bool:
        return not self.to_vec().is_zero()

    def length(self) -> float:
        return self.to_vec().norm()

    def midpoint(self) -> Point:
        return self.source + self.to_vec() * 0.5

    def _parameter(self, p: Point) -> Tuple[bool, float]:
        return _is_multiple(p - self.source, self.to_vec())

    def contains(self, p: PointLike) -> bool:
        """``p - source == t * (target - source)`` for some ``t`` in ``[0, 1]``."""
        p = as_point(p)
        if not self.is_nd:
            return p.is_close(self.source)
        on_line, t = self._parameter(p)
        if not on_line:
            return False
        slack = abs_tol() / self.length()
        return -slack <= t <= 1.0 + slack

    def interior(self, p: PointLike) -> bool:
        p = as_point(p)
        if not self.is_nd:
            return False
        return self.contains(p) and not p.is_close(self.source) and not p.is_close(self.target)

    def reverse(self) -> "Segment":
        return type(self)(self.target, self.source)


@dataclass(frozen=True)
class NondegenerateSegment(Segment):
    """Segment whose endpoints were checked to be distinct."""

    def __post_init__(self) -> None:
        if (self.target - self.source).is_zero():
            raise DegenerateInputError(
                f"segment endpoints coincide at ({self.source.x:g}, {self.source.y:g})"
            )

    def to_nonzero_vec(self) -> NonzeroVec:
        return NonzeroVec(self.to_vec())

    def to_dir(self) -> Dir:
        return Dir.from_vec(self.to_vec())

    def to_proj(self) -> Proj:
        return self.to_dir().to_proj()

    def to_ray(self) -> Ray:
        return Ray(self.source, self.to_dir())

    def to_line(self) -> "Line":
        return Line(self.source, self.to_proj())

    def extension(self) -> Ray:
        """Ray from ``target`` continuing away from ``source``."""
        return self.reverse().to_ray().reverse()

    def point_beyond_target(self) -> Point:
        """A point in the interior of :meth:`extension`."""
        return self.target + self.to_vec()

    def interior_point(self) -> Point:
        return self.midpoint()

    def split(self, p: PointLike) -> Tuple["NondegenerateSegment", "NondegenerateSegment"]:
        p = as_point(p)
        if not self.interior(p):
            raise DegenerateInputError("split point must lie in the interior of the segment")
        return NondegenerateSegment(self.source, p), NondegenerateSegment(p, self.target)


@dataclass(frozen=True, eq=False)
class Line:
    """Undirected line through ``anchor`` with direction ``proj``.

    Two lines are equal when they share ``proj`` and pass through the same
    points, whichever anchors they were built from.
    """

    anchor: Point
    proj: Proj

    __hash__ = None  # type: ignore[assignment]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self.proj == other.proj and self.contains(other.anchor)

    @classmethod
    def through(cls, a: PointLike, b: PointLike) -> "Line":
        return mk_nondegenerate_segment(a, b).to_line()

    def to_proj(self) -> Proj:
        return self.proj

    def contains(self, p: PointLike) -> bool:
        on_line, _ = _is_multiple(as_point(p) - self.anchor, self.proj.to_dir().unit_vec())
        return on_line


def mk_ray(source: PointLike, through: PointLike) -> Ray:
    """Ray from ``source`` passing through ``through``."""

    source, through = as_point(source), as_point(through)
    if (through - source).is_zero():
        raise DegenerateInputError("a ray needs a through-point distinct from its source")
    return Ray(source, Dir.from_vec(through - source))


def mk_segment(a: PointLike, b: PointLike) -> Segment:
    return Segment(as_point(a), as_point(b))


def mk_nondegenerate_segment(a: PointLike, b: PointLike) -> NondegenerateSegment:
    return NondegenerateSegment(as_point(a), as_point(b))


def lies_on(p: PointLike, obj: Any) -> bool:
    return obj.contains(p)


def lies_int(p: PointLike, obj: Any) -> bool:
    if isinstance(obj, Line):
        return obj.contains(p)
    return obj.interior(p)


def length(seg: Segment) -> float:
    return seg.length()


def midpoint(seg: Segment) -> Point:
    return seg.midpoint()


__all__ = [
    "Point",
    "PointLike",
    "as_point",
    "distance",
    "Ray",
    "Segment",
    "NondegenerateSegment",
    "Line",
    "mk_ray",
    "mk_segment",
    "mk_nondegenerate_segment",
    "lies_on",
    "lies_int",
    "length",
    "midpoint",
]
