"""Exception taxonomy for the geometry kernel."""

from __future__ import annotations


class GeometryError(ValueError):
    """Base class for rejected geometric inputs."""


class DegenerateInputError(GeometryError):
    """Raised when a nondegeneracy precondition fails.

    Zero vectors, coincident points and collinear triples all end up here.
    """


class OrientationMismatchError(GeometryError):
    """Raised when congruence is requested between triangles of opposite turning sense."""

    def __init__(self, message: str, *, first: str, second: str):
        super().__init__(message)
        self.first = first
        self.second = second


class NotConvexError(GeometryError):
    """Raised when a convexity-requiring query meets a non-convex quadrilateral."""

    def __init__(self, message: str, reason: str = "non-convex"):
        super().__init__(message)
        self.reason = reason


class NotParallelError(GeometryError):
    """Raised when an orientation split is requested for non-parallel directions."""


class NotParallelogramError(GeometryError):
    """Raised when a convex quadrilateral fails the parallel-sides test."""


class ParallelLinesError(GeometryError):
    """Raised when intersecting two parallel lines."""


__all__ = [
    "GeometryError",
    "DegenerateInputError",
    "OrientationMismatchError",
    "NotConvexError",
    "NotParallelError",
    "NotParallelogramError",
    "ParallelLinesError",
]
