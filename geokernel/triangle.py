"""Triangles, their edges, orientation and vertex angles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence, Tuple

from .angles import Angle, mk_angle
from .config import abs_tol
from .errors import DegenerateInputError
from .incidence import NondegenerateSegment, Point, PointLike, Segment, as_point
from .relations import perp_foot
from .vector import AngValue

Orientation = Literal["ccw", "cw", "collinear"]


def signed_area(a: Point, b: Point, c: Point) -> float:
    return 0.5 * (b - a).cross(c - a)


def orientation_of(a: PointLike, b: PointLike, c: PointLike) -> Orientation:
    a, b, c = as_point(a), as_point(b), as_point(c)
    doubled = 2.0 * signed_area(a, b, c)
    scale = max((b - a).norm(), (c - a).norm(), (c - b).norm())
    if scale <= abs_tol() or abs(doubled) <= abs_tol() * scale:
        return "collinear"
    return "ccw" if doubled > 0.0 else "cw"


def are_collinear(a: PointLike, b: PointLike, c: PointLike) -> bool:
    return orientation_of(a, b, c) == "collinear"


@dataclass(frozen=True)
class Triangle:
    """Ordered triple of points; ``edge_k`` is the side opposite ``p_k``."""

    p1: Point
    p2: Point
    p3: Point

    @classmethod
    def of(cls, p1: PointLike, p2: PointLike, p3: PointLike) -> "Triangle":
        return cls(as_point(p1), as_point(p2), as_point(p3))

    @property
    def vertices(self) -> Tuple[Point, Point, Point]:
        return self.p1, self.p2, self.p3

    @property
    def edge_1(self) -> Segment:
        return Segment(self.p2, self.p3)

    @property
    def edge_2(self) -> Segment:
        return Segment(self.p3, self.p1)

    @property
    def edge_3(self) -> Segment:
        return Segment(self.p1, self.p2)

    def side_lengths(self) -> Tuple[float, float, float]:
        return self.edge_1.length(), self.edge_2.length(), self.edge_3.length()

    def signed_area(self) -> float:
        return signed_area(self.p1, self.p2, self.p3)

    def orientation(self) -> Orientation:
        return orientation_of(self.p1, self.p2, self.p3)

    @property
    def is_nd(self) -> bool:
        return self.orientation() != "collinear"

    def relabel(self, order: Sequence[int]) -> "Triangle":
        """Triangle with vertices taken in ``order`` (a permutation of ``(1, 2, 3)``)."""

        if sorted(order) != [1, 2, 3]:
            raise ValueError(f"order must be a permutation of (1, 2, 3), got {tuple(order)}")
        pts = self.vertices
        return type(self)(*(pts[i - 1] for i in order))


@dataclass(frozen=True)
class NondegenerateTriangle(Triangle):
    """Triangle whose vertices were checked to be non-collinear.

    ``angle_k`` is measured at ``p_k`` from the ray towards the next vertex to
    the ray towards the previous one, so all three values are positive for a
    counter-clockwise triangle and negative for a clockwise one.
    """

    def __post_init__(self) -> None:
        if self.orientation() == "collinear":
            raise DegenerateInputError(
                f"triangle vertices are collinear: {self.p1.as_tuple()}, "
                f"{self.p2.as_tuple()}, {self.p3.as_tuple()}"
            )

    @property
    def edge_nd_1(self) -> NondegenerateSegment:
        return NondegenerateSegment(self.p2, self.p3)

    @property
    def edge_nd_2(self) -> NondegenerateSegment:
        return NondegenerateSegment(self.p3, self.p1)

    @property
    def edge_nd_3(self) -> NondegenerateSegment:
        return NondegenerateSegment(self.p1, self.p2)

    @property
    def angle_1(self) -> Angle:
        return mk_angle(self.p2, self.p1, self.p3)

    @property
    def angle_2(self) -> Angle:
        return mk_angle(self.p3, self.p2, self.p1)

    @property
    def angle_3(self) -> Angle:
        return mk_angle(self.p1, self.p3, self.p2)

    def angle_values(self) -> Tuple[AngValue, AngValue, AngValue]:
        return self.angle_1.value, self.angle_2.value, self.angle_3.value

    def reflected(self) -> "NondegenerateTriangle":
        """Mirror image across the line ``p1 p2``: same labels, opposite orientation."""

        foot = perp_foot(self.p3, self.edge_nd_3.to_line())
        mirrored = foot + (foot - self.p3)
        return NondegenerateTriangle(self.p1, self.p2, mirrored)


def mk_triangle(p1: PointLike, p2: PointLike, p3: PointLike) -> Triangle:
    return Triangle.of(p1, p2, p3)


def mk_nondegenerate_triangle(p1: PointLike, p2: PointLike, p3: PointLike) -> NondegenerateTriangle:
    return NondegenerateTriangle.of(p1, p2, p3)


__all__ = [
    "Orientation",
    "signed_area",
    "orientation_of",
    "are_collinear",
    "Triangle",
    "NondegenerateTriangle",
    "mk_triangle",
    "mk_nondegenerate_triangle",
]
