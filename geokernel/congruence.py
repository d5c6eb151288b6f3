"""Triangle congruence criteria with signed angles.

Congruence here is orientation-aware: two triangles are congruent when the
corresponding side lengths agree *and* the corresponding angle values agree as
signed :class:`~geokernel.vector.AngValue`.  A triangle and its mirror image
have equal side lengths but negated angles, so every criterion first checks
that both triangles turn the same way and raises
:class:`~geokernel.errors.OrientationMismatchError` otherwise.  Mirrored pairs
are handled by :func:`anti_congruent_sss`, which reflects the second triangle
explicitly before applying SSS.

Each criterion returns a :class:`CongruenceResult`.  A failed hypothesis (the
sides simply differ) is an ordinary ``"rejected"`` result, not an exception.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Tuple

from .config import abs_tol
from .errors import OrientationMismatchError
from .logging_utils import apply_debug_logging
from .triangle import NondegenerateTriangle, Triangle
from .vector import Alignment, AngValue

logger = logging.getLogger(__name__)

Criterion = Literal["SSS", "SAS", "ASA"]


@dataclass(frozen=True)
class CongruenceWitness:
    """Three side equalities and three angle equalities between ``first`` and ``second``."""

    criterion: Criterion
    first: NondegenerateTriangle
    second: NondegenerateTriangle
    sides: Tuple[Tuple[float, float], Tuple[float, float], Tuple[float, float]]
    angles: Tuple[Tuple[AngValue, AngValue], Tuple[AngValue, AngValue], Tuple[AngValue, AngValue]]
    mirrored: bool = False

    def sides_equal(self) -> bool:
        return all(_lengths_close(a, b) for a, b in self.sides)

    def angles_equal(self) -> bool:
        if self.mirrored:
            return all(a == -b for a, b in self.angles)
        return all(a == b for a, b in self.angles)

    def holds(self) -> bool:
        return self.sides_equal() and self.angles_equal()


@dataclass
class CongruenceResult:
    status: Literal["congruent", "rejected"]
    criterion: Criterion
    witness: Optional[CongruenceWitness] = None
    reason: str = ""
    notes: List[str] = field(default_factory=list)

    @property
    def congruent(self) -> bool:
        return self.status == "congruent"


def _lengths_close(a: float, b: float) -> bool:
    return math.isclose(a, b, rel_tol=0.0, abs_tol=abs_tol())


def _as_nd(tri: Triangle) -> NondegenerateTriangle:
    if isinstance(tri, NondegenerateTriangle):
        return tri
    return NondegenerateTriangle(tri.p1, tri.p2, tri.p3)


def orientation_match(t1: Triangle, t2: Triangle) -> Alignment:
    """``"same"`` when both triangles turn the same way, ``"reversed"`` otherwise."""

    first, second = _as_nd(t1), _as_nd(t2)
    return "same" if first.orientation() == second.orientation() else "reversed"


def _require_same_orientation(first: NondegenerateTriangle, second: NondegenerateTriangle, criterion: str) -> None:
    o1, o2 = first.orientation(), second.orientation()
    if o1 != o2:
        raise OrientationMismatchError(
            f"{criterion} needs triangles of the same orientation, got {o1} and {o2}; "
            "reflect one of them first",
            first=o1,
            second=o2,
        )


def _witness(
    criterion: Criterion, first: NondegenerateTriangle, second: NondegenerateTriangle, mirrored: bool = False
) -> CongruenceWitness:
    s1, s2 = first.side_lengths(), second.side_lengths()
    a1, a2 = first.angle_values(), second.angle_values()
    return CongruenceWitness(
        criterion=criterion,
        first=first,
        second=second,
        sides=((s1[0], s2[0]), (s1[1], s2[1]), (s1[2], s2[2])),
        angles=((a1[0], a2[0]), (a1[1], a2[1]), (a1[2], a2[2])),
        mirrored=mirrored,
    )


def _conclude(criterion: Criterion, first: NondegenerateTriangle, second: NondegenerateTriangle) -> CongruenceResult:
    witness = _witness(criterion, first, second)
    if not witness.holds():
        # Hypotheses held but the conclusion drifted outside the tolerance.
        return CongruenceResult(
            "rejected", criterion, witness, reason="conclusion not within tolerance"
        )
    return CongruenceResult("congruent", criterion, witness)


def congruent_sss(t1: Triangle, t2: Triangle) -> CongruenceResult:
    """Side-side-side: equal ``edge_1..3`` imply equal signed ``angle_1..3``."""

    first, second = _as_nd(t1), _as_nd(t2)
    _require_same_orientation(first, second, "SSS")
    s1, s2 = first.side_lengths(), second.side_lengths()
    differing = [f"edge_{k + 1}" for k in range(3) if not _lengths_close(s1[k], s2[k])]
    if differing:
        return CongruenceResult("rejected", "SSS", reason="side lengths differ: " + ", ".join(differing))
    return _conclude("SSS", first, second)


def congruent_sas(t1: Triangle, t2: Triangle) -> CongruenceResult:
    """Side-angle-side at ``p1``: ``edge_3``, ``angle_1`` and ``edge_2``."""

    first, second = _as_nd(t1), _as_nd(t2)
    _require_same_orientation(first, second, "SAS")
    failed = []
    if not _lengths_close(first.edge_3.length(), second.edge_3.length()):
        failed.append("edge_3")
    if first.angle_1.value != second.angle_1.value:
        failed.append("angle_1")
    if not _lengths_close(first.edge_2.length(), second.edge_2.length()):
        failed.append("edge_2")
    if failed:
        return CongruenceResult("rejected", "SAS", reason="hypotheses fail: " + ", ".join(failed))
    return _conclude("SAS", first, second)


def congruent_asa(t1: Triangle, t2: Triangle) -> CongruenceResult:
    """Angle-side-angle along ``edge_3``: ``angle_1``, ``edge_3`` and ``angle_2``."""

    first, second = _as_nd(t1), _as_nd(t2)
    _require_same_orientation(first, second, "ASA")
    failed = []
    if first.angle_1.value != second.angle_1.value:
        failed.append("angle_1")
    if not _lengths_close(first.edge_3.length(), second.edge_3.length()):
        failed.append("edge_3")
    if first.angle_2.value != second.angle_2.value:
        failed.append("angle_2")
    if failed:
        return CongruenceResult("rejected", "ASA", reason="hypotheses fail: " + ", ".join(failed))
    return _conclude("ASA", first, second)


def anti_congruent_sss(t1: Triangle, t2: Triangle) -> CongruenceResult:
    """SSS for mirror-image triangles.

    ``t2`` is reflected explicitly and SSS is applied to ``t1`` and the
    reflection.  The returned witness compares ``t1`` with the original ``t2``
    and is flagged ``mirrored``: its angle pairs are negatives of each other.
    """

    first, second = _as_nd(t1), _as_nd(t2)
    if first.orientation() == second.orientation():
        raise OrientationMismatchError(
            "anti-congruence needs triangles of opposite orientation",
            first=first.orientation(),
            second=second.orientation(),
        )
    result = congruent_sss(first, second.reflected())
    if not result.congruent:
        return result
    witness = _witness("SSS", first, second, mirrored=True)
    if not witness.holds():
        return CongruenceResult("rejected", "SSS", witness, reason="conclusion not within tolerance")
    return CongruenceResult("congruent", "SSS", witness, notes=["second triangle reflected across edge_3"])


__all__ = [
    "Criterion",
    "CongruenceWitness",
    "CongruenceResult",
    "orientation_match",
    "congruent_sss",
    "congruent_sas",
    "congruent_asa",
    "anti_congruent_sss",
]


apply_debug_logging(globals(), logger=logger)
