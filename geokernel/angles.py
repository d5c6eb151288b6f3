"""Oriented angles between two rays sharing a vertex."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import DegenerateInputError
from .incidence import Point, PointLike, Ray, mk_ray
from .vector import AngValue


@dataclass(frozen=True)
class Angle:
    """Angle swept from ``start`` to ``end``; both rays leave the same vertex."""

    start: Ray
    end: Ray

    def __post_init__(self) -> None:
        if not self.start.source.is_close(self.end.source):
            raise DegenerateInputError("angle rays must share their source")

    @property
    def vertex(self) -> Point:
        return self.start.source

    @property
    def value(self) -> AngValue:
        return AngValue.from_dirs(self.start.direction, self.end.direction)

    def reverse(self) -> "Angle":
        return Angle(self.end, self.start)


def mk_angle(a: PointLike, o: PointLike, b: PointLike) -> Angle:
    """Angle at ``o`` from ray ``o -> a`` to ray ``o -> b``."""

    return Angle(mk_ray(o, a), mk_ray(o, b))


def angle_value(a: PointLike, o: PointLike, b: PointLike) -> AngValue:
    return mk_angle(a, o, b).value


__all__ = ["Angle", "mk_angle", "angle_value"]
