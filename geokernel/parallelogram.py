"""Parallelogram predicates, criteria and their derivations.

Two predicates are provided:

``is_parallelogram``
    the vector equation ``p2 - p1 == p3 - p4``; defined for any four points,
    including fully degenerate ones.
``is_parallelogram_nd``
    the quadrilateral is convex and both pairs of opposite sides are parallel.

On a convex quadrilateral each of the following criteria is equivalent to
``is_parallelogram_nd``: both pairs of opposite sides equal, one pair parallel
and equal, both pairs of opposite angles equal, diagonals sharing a midpoint.
The ``derive_from_*`` functions execute the corresponding argument on concrete
points.  Every derivation splits on :meth:`Quadrilateral.classify`:

* non-convex branch: the hypothesis pushes the configuration into parallel
  diagonals (crossed quadrilaterals) or onto a single line, so no
  nondegenerate parallelogram can be concluded;
* convex branch: congruence of the two triangles cut off by one diagonal
  (SSS, SAS or ASA) transports a direction across the diagonal and yields the
  missing parallel pair.

The convexity gate is what separates a parallelogram from a crossed
quadrilateral with the same side lengths, so neither branch may be skipped.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Tuple, Union

from .config import abs_tol
from .congruence import CongruenceResult, anti_congruent_sss, congruent_asa, congruent_sas, congruent_sss
from .errors import DegenerateInputError, NotParallelogramError
from .incidence import NondegenerateSegment, Point, PointLike
from .logging_utils import apply_debug_logging
from .quadrilateral import ConvexQuadrilateral, NonConvexQuadrilateral, Quadrilateral
from .relations import parallel
from .triangle import NondegenerateTriangle, are_collinear
from .vector import AngValue, Dir, alignment

logger = logging.getLogger(__name__)

CriterionName = Literal[
    "parallel_sides",
    "equal_sides",
    "parallel_and_equal",
    "opposite_angles",
    "diagonal_midpoints",
]
DerivationStatus = Literal["parallelogram", "not_convex", "hypothesis_failed"]
Branch = Literal["convex", "non_convex"]

QuadLike = Union[Quadrilateral, PointLike]

_STRAIGHT = AngValue(math.pi)


def _as_quadrilateral(q: QuadLike, rest: Tuple[PointLike, ...]) -> Quadrilateral:
    if isinstance(q, Quadrilateral):
        if rest:
            raise TypeError("pass either a quadrilateral or four points, not both")
        return q
    if len(rest) != 3:
        raise TypeError(f"expected four points, got {1 + len(rest)}")
    return Quadrilateral.of(q, *rest)


def _lengths_close(a: float, b: float) -> bool:
    return math.isclose(a, b, rel_tol=0.0, abs_tol=abs_tol())


def _both_nd_parallel(a: Point, b: Point, c: Point, d: Point) -> bool:
    """Segments ``a b`` and ``c d`` are nondegenerate and parallel."""

    if a.is_close(b) or c.is_close(d):
        return False
    return parallel(NondegenerateSegment(a, b), NondegenerateSegment(c, d))


def _dir(a: Point, b: Point) -> Dir:
    return Dir.from_vec(b - a)


def _start_from(end: Dir, value: AngValue) -> Dir:
    """Start direction of an angle of ``value`` whose end direction is ``end``."""
    return end * value.to_dir().inv()


def _end_from(start: Dir, value: AngValue) -> Dir:
    return start * value.to_dir()


# ---------------------------------------------------------------------------
# Predicates


def is_parallelogram(q: QuadLike, *rest: PointLike) -> bool:
    quad = _as_quadrilateral(q, rest)
    return (quad.p2 - quad.p1).is_close(quad.p3 - quad.p4)


def opposite_sides_parallel(q: QuadLike, *rest: PointLike) -> bool:
    quad = _as_quadrilateral(q, rest)
    return _both_nd_parallel(quad.p1, quad.p2, quad.p3, quad.p4) and _both_nd_parallel(
        quad.p1, quad.p4, quad.p2, quad.p3
    )


def is_parallelogram_nd(q: QuadLike, *rest: PointLike) -> bool:
    quad = _as_quadrilateral(q, rest)
    return quad.is_convex() and opposite_sides_parallel(quad)


def opposite_sides_equal(q: QuadLike, *rest: PointLike) -> bool:
    quad = _as_quadrilateral(q, rest)
    return _lengths_close(quad.edge_12.length(), quad.edge_34.length()) and _lengths_close(
        quad.edge_23.length(), quad.edge_41.length()
    )


def one_pair_parallel_and_equal(q: QuadLike, *rest: PointLike, pair: Optional[int] = None) -> bool:
    """``p1p2 ∥ p3p4`` with equal lengths (``pair=1``), the same for ``p2p3``/``p4p1`` (``pair=2``), or either."""

    quad = _as_quadrilateral(q, rest)
    if pair is None:
        return one_pair_parallel_and_equal(quad, pair=1) or one_pair_parallel_and_equal(quad, pair=2)
    if pair == 2:
        quad = quad.shifted()
    elif pair != 1:
        raise ValueError(f"pair must be 1 or 2, got {pair}")
    return _both_nd_parallel(quad.p1, quad.p2, quad.p3, quad.p4) and _lengths_close(
        quad.edge_12.length(), quad.edge_34.length()
    )


def opposite_angles_equal(q: QuadLike, *rest: PointLike) -> bool:
    """Signed vertex angles agree at ``p1``/``p3`` and at ``p2``/``p4``.

    False when a vertex coincides with a neighbour, since its angle is undefined.
    """

    quad = _as_quadrilateral(q, rest)
    pts = quad.vertices
    if any(pts[k].is_close(pts[(k + 1) % 4]) for k in range(4)):
        return False
    return (
        quad.vertex_angle(1).value == quad.vertex_angle(3).value
        and quad.vertex_angle(2).value == quad.vertex_angle(4).value
    )


def diagonals_share_midpoint(q: QuadLike, *rest: PointLike) -> bool:
    quad = _as_quadrilateral(q, rest)
    return quad.diag_13.midpoint().is_close(quad.diag_24.midpoint())


def parallelogram_law_residual(q: QuadLike, *rest: PointLike) -> float:
    """``2|p1p2|² + 2|p2p3|² - |p1p3|² - |p2p4|²``; zero for every ``is_parallelogram`` input."""

    quad = _as_quadrilateral(q, rest)
    sides = 2.0 * quad.edge_12.to_vec().norm_sq() + 2.0 * quad.edge_23.to_vec().norm_sq()
    diagonals = quad.diag_13.to_vec().norm_sq() + quad.diag_24.to_vec().norm_sq()
    return sides - diagonals


def satisfies_parallelogram_law(q: QuadLike, *rest: PointLike) -> bool:
    quad = _as_quadrilateral(q, rest)
    scale = max(1.0, quad.diag_13.to_vec().norm_sq() + quad.diag_24.to_vec().norm_sq())
    return abs(parallelogram_law_residual(quad)) <= abs_tol() * scale


# ---------------------------------------------------------------------------
# Derivations


@dataclass
class ParallelogramDerivation:
    """Record of one criterion-to-parallelogram argument executed on concrete points."""

    criterion: CriterionName
    status: DerivationStatus
    branch: Optional[Branch] = None
    witnesses: List[CongruenceResult] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)

    @property
    def holds(self) -> bool:
        return self.status == "parallelogram"


def _diagonals_parallel(quad: Quadrilateral) -> bool:
    return _both_nd_parallel(quad.p1, quad.p3, quad.p2, quad.p4)


def _all_collinear(quad: Quadrilateral) -> bool:
    pts = quad.vertices
    return all(are_collinear(pts[k], pts[(k + 1) % 4], pts[(k + 2) % 4]) for k in range(4))


def _non_convex(criterion: CriterionName, shape: NonConvexQuadrilateral, notes: List[str]) -> ParallelogramDerivation:
    quad = shape.quadrilateral
    notes.append(f"quadrilateral is {shape.reason}")
    if _diagonals_parallel(quad):
        notes.append("diagonals p1p3 and p2p4 are parallel, so they cannot cross internally")
    elif shape.reason == "degenerate":
        notes.append("three consecutive vertices are collinear")
    logger.debug("%s: non-convex branch (%s)", criterion, shape.reason)
    return ParallelogramDerivation(criterion, "not_convex", "non_convex", notes=notes)


def _parallel_from_alignment(first: Dir, second: Dir, expected: str, label: str, notes: List[str]) -> bool:
    branch = alignment(first, second)
    notes.append(f"{label}: {branch} orientation")
    return branch == expected


def _asa_certificate(cq: ConvexQuadrilateral) -> CongruenceResult:
    """ASA over diagonal ``p1 p3`` for a convex quadrilateral with both pairs parallel.

    Triangles ``(p1, p3, p2)`` and ``(p3, p1, p4)`` share ``p1 p3`` and have
    equal alternate angles at both of its ends.
    """

    return congruent_asa(
        NondegenerateTriangle(cq.p1, cq.p3, cq.p2),
        NondegenerateTriangle(cq.p3, cq.p1, cq.p4),
    )


def derive_from_parallel_sides(q: QuadLike, *rest: PointLike) -> ParallelogramDerivation:
    """Both pairs parallel on a convex quadrilateral give ``p2 - p1 == p3 - p4``."""

    quad = _as_quadrilateral(q, rest)
    notes: List[str] = []
    if not opposite_sides_parallel(quad):
        return ParallelogramDerivation("parallel_sides", "hypothesis_failed", notes=["opposite sides not parallel"])
    shape = quad.classify()
    if isinstance(shape, NonConvexQuadrilateral):
        return _non_convex("parallel_sides", shape, notes)

    ok = _parallel_from_alignment(
        _dir(shape.p1, shape.p2), _dir(shape.p3, shape.p4), "reversed", "p1p2 vs p3p4", notes
    ) and _parallel_from_alignment(
        _dir(shape.p1, shape.p4), _dir(shape.p3, shape.p2), "reversed", "p1p4 vs p3p2", notes
    )
    if not ok:
        # A same-orientation pair would make the diagonals parallel.
        return ParallelogramDerivation("parallel_sides", "not_convex", "convex", notes=notes)
    certificate = _asa_certificate(shape)
    if not certificate.congruent:
        notes.append(certificate.reason)
        return ParallelogramDerivation("parallel_sides", "hypothesis_failed", "convex", [certificate], notes)
    notes.append("ASA over p1p3 gives |p1p2| = |p3p4| and |p2p3| = |p4p1|")
    status: DerivationStatus = "parallelogram" if is_parallelogram(shape) else "hypothesis_failed"
    return ParallelogramDerivation("parallel_sides", status, "convex", [certificate], notes)


def derive_from_opposite_sides_equal(q: QuadLike, *rest: PointLike) -> ParallelogramDerivation:
    quad = _as_quadrilateral(q, rest)
    notes: List[str] = []
    if not opposite_sides_equal(quad):
        return ParallelogramDerivation("equal_sides", "hypothesis_failed", notes=["opposite sides differ in length"])
    shape = quad.classify()
    if isinstance(shape, NonConvexQuadrilateral):
        if shape.reason == "crossed" and not are_collinear(quad.p1, quad.p2, quad.p3) and not are_collinear(
            quad.p3, quad.p4, quad.p1
        ):
            # Equal sides with opposite turning sense: the mirrored SSS case.
            mirrored = anti_congruent_sss(
                NondegenerateTriangle(quad.p1, quad.p2, quad.p3),
                NondegenerateTriangle(quad.p3, quad.p4, quad.p1),
            )
            result = _non_convex("equal_sides", shape, notes)
            result.witnesses.append(mirrored)
            return result
        return _non_convex("equal_sides", shape, notes)

    first, second = shape.triangle_123(), shape.triangle_341()
    result = congruent_sss(first, second)
    if not result.congruent:
        notes.append(result.reason)
        return ParallelogramDerivation("equal_sides", "hypothesis_failed", "convex", [result], notes)
    witness = result.witness
    theta = witness.angles[0][0]
    phi = witness.angles[2][0]
    dir_34 = _start_from(_dir(shape.p3, shape.p1), theta)
    dir_14 = _end_from(_dir(shape.p1, shape.p3), phi)
    ok = _parallel_from_alignment(
        _dir(shape.p1, shape.p2), dir_34, "reversed", "p1p2 vs transported p3p4", notes
    ) and _parallel_from_alignment(dir_14, _dir(shape.p2, shape.p3), "same", "transported p1p4 vs p2p3", notes)
    status: DerivationStatus = "parallelogram" if ok else "not_convex"
    return ParallelogramDerivation("equal_sides", status, "convex", [result], notes)


def derive_from_parallel_and_equal(
    q: QuadLike, *rest: PointLike, pair: Optional[int] = None
) -> ParallelogramDerivation:
    """One pair of opposite sides parallel and equal; ``pair`` picks which (default: the first that holds)."""

    quad = _as_quadrilateral(q, rest)
    notes: List[str] = []
    if pair is None:
        pair = 1 if one_pair_parallel_and_equal(quad, pair=1) else 2
    if not one_pair_parallel_and_equal(quad, pair=pair):
        return ParallelogramDerivation(
            "parallel_and_equal", "hypothesis_failed", notes=[f"pair {pair} not parallel and equal"]
        )
    shape = quad.classify()
    if isinstance(shape, NonConvexQuadrilateral):
        return _non_convex("parallel_and_equal", shape, notes)

    work = shape.shifted() if pair == 2 else shape
    notes.append(f"working on pair {pair}")
    if alignment(_dir(work.p1, work.p2), _dir(work.p3, work.p4)) == "same":
        notes.append("p1p2 and p3p4 point the same way, the diagonals would be parallel")
        return ParallelogramDerivation("parallel_and_equal", "not_convex", "convex", notes=notes)

    result = congruent_sas(work.triangle_123(), work.triangle_341())
    if not result.congruent:
        notes.append(result.reason)
        return ParallelogramDerivation("parallel_and_equal", "hypothesis_failed", "convex", [result], notes)
    phi = result.witness.angles[2][0]
    dir_14 = _end_from(_dir(work.p1, work.p3), phi)
    ok = _parallel_from_alignment(dir_14, _dir(work.p2, work.p3), "same", "transported p1p4 vs p2p3", notes)
    status: DerivationStatus = "parallelogram" if ok else "not_convex"
    return ParallelogramDerivation("parallel_and_equal", status, "convex", [result], notes)


def derive_from_opposite_angles(q: QuadLike, *rest: PointLike) -> ParallelogramDerivation:
    """Equal opposite angles force adjacent angles to sum to ``π`` on a convex quadrilateral."""

    quad = _as_quadrilateral(q, rest)
    notes: List[str] = []
    if not opposite_angles_equal(quad):
        return ParallelogramDerivation("opposite_angles", "hypothesis_failed", notes=["opposite angles differ or are undefined"])
    shape = quad.classify()
    if isinstance(shape, NonConvexQuadrilateral):
        return _non_convex("opposite_angles", shape, notes)

    a1, a2, a3 = shape.angle_1.value, shape.angle_2.value, shape.angle_3.value
    # The four angles sum to 0 mod 2π, so each adjacent sum is 0 or π.
    for label, total in (("a1 + a2", a1 + a2), ("a2 + a3", a2 + a3)):
        if total != _STRAIGHT:
            notes.append(f"{label} = 0, only possible for a crossed quadrilateral")
            return ParallelogramDerivation("opposite_angles", "not_convex", "convex", notes=notes)
        notes.append(f"{label} = pi")
    dir_23 = _start_from(-_dir(shape.p1, shape.p2), a2)
    dir_34 = _start_from(-_dir(shape.p2, shape.p3), a3)
    ok = _parallel_from_alignment(_dir(shape.p1, shape.p4), dir_23, "same", "p1p4 vs derived p2p3", notes)
    ok = ok and _parallel_from_alignment(_dir(shape.p2, shape.p1), dir_34, "same", "p2p1 vs derived p3p4", notes)
    if not ok:
        return ParallelogramDerivation("opposite_angles", "not_convex", "convex", notes=notes)
    certificate = _asa_certificate(shape)
    status: DerivationStatus = "parallelogram" if certificate.congruent else "hypothesis_failed"
    return ParallelogramDerivation("opposite_angles", status, "convex", [certificate], notes)


def derive_from_diagonal_midpoints(q: QuadLike, *rest: PointLike) -> ParallelogramDerivation:
    """Shared diagonal midpoint ``m``: SAS on ``(m, p1, p2)``/``(m, p3, p4)`` and ``(m, p2, p3)``/``(m, p4, p1)``."""

    quad = _as_quadrilateral(q, rest)
    notes: List[str] = []
    if not diagonals_share_midpoint(quad):
        return ParallelogramDerivation("diagonal_midpoints", "hypothesis_failed", notes=["diagonal midpoints differ"])
    shape = quad.classify()
    if isinstance(shape, NonConvexQuadrilateral):
        if _all_collinear(quad):
            notes.append("all four vertices lie on one line, so the shared midpoint cannot force convexity")
        return _non_convex("diagonal_midpoints", shape, notes)

    m = shape.diag_13.midpoint()
    witnesses: List[CongruenceResult] = []
    pairs = (
        (shape.p1, shape.p2, shape.p3, shape.p4, "p1p2 vs p3p4"),
        (shape.p2, shape.p3, shape.p4, shape.p1, "p2p3 vs p4p1"),
    )
    for a, b, c, d, label in pairs:
        result = congruent_sas(NondegenerateTriangle(m, a, b), NondegenerateTriangle(m, c, d))
        witnesses.append(result)
        if not result.congruent:
            notes.append(result.reason)
            return ParallelogramDerivation("diagonal_midpoints", "hypothesis_failed", "convex", witnesses, notes)
        psi = result.witness.angles[1][0]
        derived = _start_from(_dir(c, m), psi)
        if not _parallel_from_alignment(_dir(a, b), derived, "reversed", label, notes):
            return ParallelogramDerivation("diagonal_midpoints", "not_convex", "convex", witnesses, notes)
    return ParallelogramDerivation("diagonal_midpoints", "parallelogram", "convex", witnesses, notes)


def derive_parallelogram(criterion: CriterionName, q: QuadLike, *rest: PointLike) -> ParallelogramDerivation:
    derivations = {
        "parallel_sides": derive_from_parallel_sides,
        "equal_sides": derive_from_opposite_sides_equal,
        "parallel_and_equal": derive_from_parallel_and_equal,
        "opposite_angles": derive_from_opposite_angles,
        "diagonal_midpoints": derive_from_diagonal_midpoints,
    }
    try:
        derive = derivations[criterion]
    except KeyError as exc:
        raise ValueError(f"unknown parallelogram criterion {criterion!r}") from exc
    return derive(q, *rest)


# ---------------------------------------------------------------------------
# Validated parallelogram


@dataclass(frozen=True)
class Parallelogram(ConvexQuadrilateral):
    """Convex quadrilateral with both pairs of opposite sides parallel."""

    def __post_init__(self) -> None:
        super().__post_init__()
        if not opposite_sides_parallel(self):
            raise NotParallelogramError("opposite sides of the convex quadrilateral are not parallel")

    @classmethod
    def from_quadrilateral(cls, q: Quadrilateral) -> "Parallelogram":
        return cls(q.p1, q.p2, q.p3, q.p4)

    def shifted(self) -> "Parallelogram":
        return Parallelogram(self.p2, self.p3, self.p4, self.p1)

    def adjacent_vertices_distinct(self) -> bool:
        pts = self.vertices
        return all(not pts[k].is_close(pts[(k + 1) % 4]) for k in range(4))

    def center(self) -> Point:
        return self.diagonal_intersection()

    def diagonals_bisect(self) -> bool:
        center = self.center()
        return center.is_close(self.diag_13.midpoint()) and center.is_close(self.diag_24.midpoint())

    def satisfies_parallelogram_law(self) -> bool:
        return satisfies_parallelogram_law(self)


def nd_of_parallelogram(q: QuadLike, *rest: PointLike) -> Parallelogram:
    """Upgrade ``is_parallelogram`` plus non-collinear ``p1 p2 p3`` to the validated form."""

    quad = _as_quadrilateral(q, rest)
    if not is_parallelogram(quad):
        raise NotParallelogramError("p2 - p1 differs from p3 - p4")
    if are_collinear(quad.p1, quad.p2, quad.p3):
        raise DegenerateInputError("p1, p2, p3 are collinear, the parallelogram is flat")
    return Parallelogram(*quad.vertices)


__all__ = [
    "CriterionName",
    "DerivationStatus",
    "ParallelogramDerivation",
    "Parallelogram",
    "is_parallelogram",
    "is_parallelogram_nd",
    "opposite_sides_parallel",
    "opposite_sides_equal",
    "one_pair_parallel_and_equal",
    "opposite_angles_equal",
    "diagonals_share_midpoint",
    "parallelogram_law_residual",
    "satisfies_parallelogram_law",
    "derive_from_parallel_sides",
    "derive_from_opposite_sides_equal",
    "derive_from_parallel_and_equal",
    "derive_from_opposite_angles",
    "derive_from_diagonal_midpoints",
    "derive_parallelogram",
    "nd_of_parallelogram",
]


apply_debug_logging(globals(), logger=logger)
