"""Quadrilaterals and the convexity gate.

A quadrilateral ``p1 p2 p3 p4`` is convex when its diagonals ``p1 p3`` and
``p2 p4`` cross at a point interior to both, i.e. ``p2`` and ``p4`` lie
strictly on opposite sides of line ``p1 p3`` and ``p1``, ``p3`` lie strictly on
opposite sides of line ``p2 p4``.  :meth:`Quadrilateral.classify` turns that
test into a tagged value, either a :class:`ConvexQuadrilateral` or a
:class:`NonConvexQuadrilateral` carrying the reason, so that callers always
handle both branches.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Tuple, Union

from .angles import Angle, mk_angle
from .errors import DegenerateInputError, NotConvexError
from .incidence import NondegenerateSegment, Point, PointLike, Segment, as_point
from .relations import line_intersection
from .triangle import NondegenerateTriangle, Orientation, orientation_of

logger = logging.getLogger(__name__)

NonConvexReason = Literal["degenerate", "crossed", "concave"]


def _strictly_opposite(a: Point, b: Point, p: Point, q: Point) -> bool:
    """``p`` and ``q`` strictly on opposite sides of line ``a b``."""

    side_p = orientation_of(a, b, p)
    side_q = orientation_of(a, b, q)
    return "collinear" not in (side_p, side_q) and side_p != side_q


def _segments_cross(a: Point, b: Point, c: Point, d: Point) -> bool:
    return _strictly_opposite(a, b, c, d) and _strictly_opposite(c, d, a, b)


@dataclass(frozen=True)
class Quadrilateral:
    """Ordered four points; no invariant."""

    p1: Point
    p2: Point
    p3: Point
    p4: Point

    @classmethod
    def of(cls, p1: PointLike, p2: PointLike, p3: PointLike, p4: PointLike) -> "Quadrilateral":
        return cls(as_point(p1), as_point(p2), as_point(p3), as_point(p4))

    @property
    def vertices(self) -> Tuple[Point, Point, Point, Point]:
        return self.p1, self.p2, self.p3, self.p4

    @property
    def edge_12(self) -> Segment:
        return Segment(self.p1, self.p2)

    @property
    def edge_23(self) -> Segment:
        return Segment(self.p2, self.p3)

    @property
    def edge_34(self) -> Segment:
        return Segment(self.p3, self.p4)

    @property
    def edge_41(self) -> Segment:
        return Segment(self.p4, self.p1)

    @property
    def diag_13(self) -> Segment:
        return Segment(self.p1, self.p3)

    @property
    def diag_24(self) -> Segment:
        return Segment(self.p2, self.p4)

    def shifted(self) -> "Quadrilateral":
        """Same quadrilateral labelled from ``p2``: ``p2 p3 p4 p1``."""
        return Quadrilateral(self.p2, self.p3, self.p4, self.p1)

    def is_convex(self) -> bool:
        return _strictly_opposite(self.p1, self.p3, self.p2, self.p4) and _strictly_opposite(
            self.p2, self.p4, self.p1, self.p3
        )

    def classify(self) -> Union["ConvexQuadrilateral", "NonConvexQuadrilateral"]:
        if self.is_convex():
            return ConvexQuadrilateral(*self.vertices)
        reason = self._non_convex_reason()
        logger.debug("Quadrilateral %s classified as non-convex (%s)", self.vertices, reason)
        return NonConvexQuadrilateral(self, reason)

    def _non_convex_reason(self) -> NonConvexReason:
        pts = self.vertices
        for k in range(4):
            if orientation_of(pts[k], pts[(k + 1) % 4], pts[(k + 2) % 4]) == "collinear":
                return "degenerate"
        if _segments_cross(self.p1, self.p2, self.p3, self.p4) or _segments_cross(
            self.p2, self.p3, self.p4, self.p1
        ):
            return "crossed"
        return "concave"

    def vertex_angle(self, k: int) -> Angle:
        """Angle at ``p_k`` from the ray to the next vertex to the ray to the previous one."""

        if k not in (1, 2, 3, 4):
            raise ValueError(f"vertex index must be 1..4, got {k}")
        pts = self.vertices
        here, nxt, prev = pts[k - 1], pts[k % 4], pts[(k - 2) % 4]
        if here.is_close(nxt) or here.is_close(prev):
            raise DegenerateInputError(f"vertex p{k} coincides with a neighbour, its angle is undefined")
        return mk_angle(nxt, here, prev)

    def diagonal_intersection(self) -> Point:
        shape = self.classify()
        if isinstance(shape, NonConvexQuadrilateral):
            raise NotConvexError(
                f"diagonals of a {shape.reason} quadrilateral do not cross internally",
                reason=shape.reason,
            )
        return shape.diagonal_intersection()


@dataclass(frozen=True)
class NonConvexQuadrilateral:
    """Non-convex branch of :meth:`Quadrilateral.classify`."""

    quadrilateral: Quadrilateral
    reason: NonConvexReason


@dataclass(frozen=True)
class ConvexQuadrilateral(Quadrilateral):
    """Quadrilateral validated to be convex; edges and diagonals are nondegenerate."""

    def __post_init__(self) -> None:
        if not Quadrilateral.is_convex(self):
            raise NotConvexError(
                "quadrilateral is not convex", reason=Quadrilateral._non_convex_reason(self)
            )

    def is_convex(self) -> bool:
        return True

    def classify(self) -> "ConvexQuadrilateral":
        return self

    def shifted(self) -> "ConvexQuadrilateral":
        return ConvexQuadrilateral(self.p2, self.p3, self.p4, self.p1)

    @property
    def orientation(self) -> Orientation:
        return orientation_of(self.p1, self.p2, self.p3)

    @property
    def edge_nd_12(self) -> NondegenerateSegment:
        return NondegenerateSegment(self.p1, self.p2)

    @property
    def edge_nd_23(self) -> NondegenerateSegment:
        return NondegenerateSegment(self.p2, self.p3)

    @property
    def edge_nd_34(self) -> NondegenerateSegment:
        return NondegenerateSegment(self.p3, self.p4)

    @property
    def edge_nd_41(self) -> NondegenerateSegment:
        return NondegenerateSegment(self.p4, self.p1)

    @property
    def diag_nd_13(self) -> NondegenerateSegment:
        return NondegenerateSegment(self.p1, self.p3)

    @property
    def diag_nd_24(self) -> NondegenerateSegment:
        return NondegenerateSegment(self.p2, self.p4)

    @property
    def angle_1(self) -> Angle:
        return self.vertex_angle(1)

    @property
    def angle_2(self) -> Angle:
        return self.vertex_angle(2)

    @property
    def angle_3(self) -> Angle:
        return self.vertex_angle(3)

    @property
    def angle_4(self) -> Angle:
        return self.vertex_angle(4)

    def triangle_123(self) -> NondegenerateTriangle:
        return NondegenerateTriangle(self.p1, self.p2, self.p3)

    def triangle_341(self) -> NondegenerateTriangle:
        return NondegenerateTriangle(self.p3, self.p4, self.p1)

    def diagonal_intersection(self) -> Point:
        return line_intersection(self.diag_nd_13.to_line(), self.diag_nd_24.to_line())


def mk_quadrilateral(p1: PointLike, p2: PointLike, p3: PointLike, p4: PointLike) -> Quadrilateral:
    return Quadrilateral.of(p1, p2, p3, p4)


def mk_convex_quadrilateral(p1: PointLike, p2: PointLike, p3: PointLike, p4: PointLike) -> ConvexQuadrilateral:
    return ConvexQuadrilateral.of(p1, p2, p3, p4)


def is_convex(q: Quadrilateral) -> bool:
    return q.is_convex()


__all__ = [
    "NonConvexReason",
    "Quadrilateral",
    "NonConvexQuadrilateral",
    "ConvexQuadrilateral",
    "mk_quadrilateral",
    "mk_convex_quadrilateral",
    "is_convex",
]
