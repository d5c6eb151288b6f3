"""Parallelism and perpendicularity lifted to every entity with a ``to_proj``."""

from __future__ import annotations

import logging
from typing import Any

from .errors import DegenerateInputError, ParallelLinesError
from .incidence import Line, NondegenerateSegment, Point, PointLike, as_point
from .vector import Alignment, Proj, alignment, to_dir, to_proj

logger = logging.getLogger(__name__)


def parallel(a: Any, b: Any) -> bool:
    return to_proj(a) == to_proj(b)


def perpendicular(a: Any, b: Any) -> bool:
    return to_proj(a) == to_proj(b).perp()


def orientation_split(a: Any, b: Any) -> Alignment:
    """``"same"`` or ``"reversed"`` for two parallel directed entities (rays, segments, dirs)."""

    branch = alignment(to_dir(a), to_dir(b))
    logger.debug("Parallel pair split into the %s branch", branch)
    return branch


def perp_line(p: PointLike, line: Line) -> Line:
    """Line through ``p`` perpendicular to ``line``."""
    return Line(as_point(p), line.to_proj().perp())


def line_intersection(l1: Line, l2: Line) -> Point:
    if parallel(l1, l2):
        raise ParallelLinesError("parallel lines have no single intersection point")
    d1 = l1.proj.to_dir().unit_vec()
    d2 = l2.proj.to_dir().unit_vec()
    offset = l2.anchor - l1.anchor
    t = offset.cross(d2) / d1.cross(d2)
    return l1.anchor + d1 * t


def perp_foot(p: PointLike, line: Line) -> Point:
    """Intersection of ``line`` with the perpendicular through ``p``."""

    p = as_point(p)
    d = line.proj.to_dir().unit_vec()
    return line.anchor + d * (p - line.anchor).dot(d)


def dist_to_line(p: PointLike, line: Line) -> float:
    """Length of the segment from ``p`` to its foot; zero iff ``p`` is on ``line``."""

    p = as_point(p)
    return (perp_foot(p, line) - p).norm()


def perp_segment(p: PointLike, line: Line) -> NondegenerateSegment:
    """Segment from ``p`` to its foot on ``line``; requires ``p`` off the line."""

    p = as_point(p)
    if line.contains(p):
        raise DegenerateInputError("point lies on the line, the perpendicular segment is degenerate")
    return NondegenerateSegment(p, perp_foot(p, line))


def same_proj(*entities: Any) -> bool:
    """All ``entities`` pairwise parallel."""

    if not entities:
        return True
    first: Proj = to_proj(entities[0])
    return all(to_proj(other) == first for other in entities[1:])


__all__ = [
    "parallel",
    "perpendicular",
    "orientation_split",
    "perp_line",
    "line_intersection",
    "perp_foot",
    "dist_to_line",
    "perp_segment",
    "same_proj",
]
