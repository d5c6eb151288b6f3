"""Vector and direction algebra.

The kernel works with four flavours of "direction-like" values:

``Vec``
    a free vector in the plane, no invariant.
``NonzeroVec``
    a ``Vec`` that was checked to be nonzero when it was built.
``Dir``
    a unit vector, i.e. a point of the circle group.  Multiplication composes
    rotations and ``-d`` is the antipodal direction.
``Proj``
    a direction modulo sign, the direction of an undirected line.
``AngValue``
    a signed angle, a real number modulo ``2π`` kept in ``(-π, π]``.

The quotient types (``Dir``, ``Proj``, ``AngValue``) are reduced to a canonical
representative once, at construction, and compare with the active
:func:`geokernel.config.angle_tol`.  They are deliberately unhashable since a
tolerant equality cannot be made consistent with a hash.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, ClassVar, Literal, Union

import numpy as np

from .config import abs_tol, angle_tol
from .errors import DegenerateInputError, NotParallelError

Alignment = Literal["same", "reversed"]

_TWO_PI = 2.0 * math.pi


@dataclass(frozen=True)
class Vec:
    """Free vector in the plane."""

    x: float
    y: float

    zero: ClassVar["Vec"]

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def __add__(self, other: "Vec") -> "Vec":
        return Vec(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec") -> "Vec":
        return Vec(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Vec":
        return Vec(-self.x, -self.y)

    def __mul__(self, scalar: float) -> "Vec":
        return Vec(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> "Vec":
        return self * scalar

    def __truediv__(self, scalar: float) -> "Vec":
        return Vec(self.x / scalar, self.y / scalar)

    def dot(self, other: "Vec") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Vec") -> float:
        """Determinant ``det(self, other)``; positive when ``other`` turns counter-clockwise."""
        return self.x * other.y - self.y * other.x

    def norm_sq(self) -> float:
        return self.dot(self)

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def is_zero(self) -> bool:
        return self.norm() <= abs_tol()

    def is_close(self, other: "Vec") -> bool:
        return (self - other).norm() <= abs_tol()

    def rotate(self, angle: Union["Dir", "AngValue", float]) -> "Vec":
        d = angle if isinstance(angle, Dir) else Dir.from_angle(angle)
        return Vec(self.x * d.x - self.y * d.y, self.x * d.y + self.y * d.x)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)


Vec.zero = Vec(0.0, 0.0)


@dataclass(frozen=True)
class NonzeroVec:
    """A vector validated to be nonzero under the active tolerance."""

    vec: Vec

    def __post_init__(self) -> None:
        if self.vec.is_zero():
            raise DegenerateInputError(f"expected a nonzero vector, got {self.vec!r}")

    @classmethod
    def of(cls, x: float, y: float) -> "NonzeroVec":
        return cls(Vec(x, y))

    def norm(self) -> float:
        return self.vec.norm()

    def __neg__(self) -> "NonzeroVec":
        return NonzeroVec(-self.vec)

    def to_dir(self) -> "Dir":
        return Dir.from_vec(self.vec)

    def to_proj(self) -> "Proj":
        return Proj.from_dir(self.to_dir())


@dataclass(frozen=True, eq=False)
class Dir:
    """Unit direction; build it through :meth:`from_vec` or :meth:`from_angle`."""

    x: float
    y: float

    ONE: ClassVar["Dir"]
    I: ClassVar["Dir"]

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        n = math.hypot(self.x, self.y)
        if n <= abs_tol():
            raise DegenerateInputError(f"cannot normalize the zero vector ({self.x!r}, {self.y!r})")
        object.__setattr__(self, "x", float(self.x) / n)
        object.__setattr__(self, "y", float(self.y) / n)

    @classmethod
    def from_vec(cls, vec: Union[Vec, NonzeroVec]) -> "Dir":
        if isinstance(vec, NonzeroVec):
            vec = vec.vec
        return cls(vec.x, vec.y)

    @classmethod
    def from_angle(cls, angle: Union["AngValue", float]) -> "Dir":
        theta = angle.value if isinstance(angle, AngValue) else float(angle)
        return cls(math.cos(theta), math.sin(theta))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dir):
            return NotImplemented
        return math.hypot(self.x - other.x, self.y - other.y) <= angle_tol()

    def __mul__(self, other: "Dir") -> "Dir":
        return Dir(self.x * other.x - self.y * other.y, self.x * other.y + self.y * other.x)

    def __neg__(self) -> "Dir":
        return Dir(-self.x, -self.y)

    def neg(self) -> "Dir":
        return -self

    def inv(self) -> "Dir":
        return Dir(self.x, -self.y)

    def rotate(self, angle: Union["AngValue", float]) -> "Dir":
        return self * Dir.from_angle(angle)

    def unit_vec(self) -> Vec:
        return Vec(self.x, self.y)

    def to_ang_value(self) -> "AngValue":
        return AngValue(math.atan2(self.y, self.x))

    def to_proj(self) -> "Proj":
        return Proj.from_dir(self)

    def __repr__(self) -> str:
        return f"Dir({self.x:.12g}, {self.y:.12g})"


Dir.ONE = Dir(1.0, 0.0)
Dir.I = Dir(0.0, 1.0)


@dataclass(frozen=True, eq=False)
class Proj:
    """Direction modulo sign, stored by its representative with angle in ``[0, π)``."""

    representative: Dir

    __hash__ = None  # type: ignore[assignment]

    @classmethod
    def from_dir(cls, d: Dir) -> "Proj":
        if d.y < 0.0 or (d.y == 0.0 and d.x < 0.0):
            d = -d
        return cls(d)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Proj):
            return NotImplemented
        a, b = self.representative, other.representative
        return abs(a.x * b.y - a.y * b.x) <= angle_tol()

    def perp(self) -> "Proj":
        return Proj.from_dir(self.representative * Dir.I)

    def rotate(self, d: Dir) -> "Proj":
        return Proj.from_dir(self.representative * d)

    def to_dir(self) -> Dir:
        return self.representative

    def angle(self) -> float:
        """Angle of the canonical representative, in ``[0, π)``."""
        theta = math.atan2(self.representative.y, self.representative.x)
        return 0.0 if theta >= math.pi else theta

    def __repr__(self) -> str:
        return f"Proj({self.angle():.12g} rad)"


def _normalize_angle(value: float) -> float:
    r = math.remainder(value, _TWO_PI)
    if r <= -math.pi:
        r += _TWO_PI
    return r


@dataclass(frozen=True, eq=False)
class AngValue:
    """Signed angle modulo ``2π``; ``value`` is always in ``(-π, π]``."""

    value: float

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _normalize_angle(float(self.value)))

    @classmethod
    def from_dirs(cls, start: Dir, end: Dir) -> "AngValue":
        """Angle turning ``start`` onto ``end``."""
        return (end * start.inv()).to_ang_value()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (int, float)):
            other = AngValue(other)
        if not isinstance(other, AngValue):
            return NotImplemented
        return abs(math.remainder(self.value - other.value, _TWO_PI)) <= angle_tol()

    def __add__(self, other: "AngValue") -> "AngValue":
        return AngValue(self.value + other.value)

    def __sub__(self, other: "AngValue") -> "AngValue":
        return AngValue(self.value - other.value)

    def __neg__(self) -> "AngValue":
        return AngValue(-self.value)

    def to_real(self) -> float:
        return self.value

    def to_dir(self) -> Dir:
        return Dir.from_angle(self.value)

    @property
    def is_pos(self) -> bool:
        tol = angle_tol()
        return tol < self.value < math.pi - tol

    @property
    def is_neg(self) -> bool:
        tol = angle_tol()
        return -math.pi + tol < self.value < -tol

    @property
    def is_nd(self) -> bool:
        """Neither a zero nor a straight angle."""
        return self.is_pos or self.is_neg

    def __repr__(self) -> str:
        return f"AngValue({self.value:.12g})"


def to_dir(value: Any) -> Dir:
    if isinstance(value, Dir):
        return value
    if isinstance(value, (NonzeroVec, Vec)):
        return Dir.from_vec(value)
    return value.to_dir()


def to_proj(value: Any) -> Proj:
    """Projective direction of a ``Dir``, ``NonzeroVec`` or any entity with ``to_proj()``."""

    if isinstance(value, Proj):
        return value
    if isinstance(value, Dir):
        return Proj.from_dir(value)
    if isinstance(value, (NonzeroVec, Vec)):
        return Proj.from_dir(Dir.from_vec(value))
    return value.to_proj()


def neg(d: Dir) -> Dir:
    return -d


def perp(p: Proj) -> Proj:
    return p.perp()


def to_ang_value(value: Union[float, Dir, AngValue]) -> AngValue:
    if isinstance(value, AngValue):
        return value
    if isinstance(value, Dir):
        return value.to_ang_value()
    return AngValue(value)


def to_real(value: AngValue) -> float:
    return value.to_real()


def alignment(d1: Any, d2: Any) -> Alignment:
    """Split ``to_proj(d1) == to_proj(d2)`` into its two branches.

    Returns ``"same"`` when ``d1 == d2`` and ``"reversed"`` when ``d1 == -d2``.
    """

    first, second = to_dir(d1), to_dir(d2)
    if Proj.from_dir(first) != Proj.from_dir(second):
        raise NotParallelError(f"{first!r} and {second!r} do not share a projective direction")
    return "same" if first.unit_vec().dot(second.unit_vec()) > 0.0 else "reversed"


__all__ = [
    "Alignment",
    "Vec",
    "NonzeroVec",
    "Dir",
    "Proj",
    "AngValue",
    "to_dir",
    "to_proj",
    "neg",
    "perp",
    "to_ang_value",
    "to_real",
    "alignment",
]
