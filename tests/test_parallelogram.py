import math

import pytest

from geokernel import (
    DegenerateInputError,
    NotConvexError,
    NotParallelogramError,
    Parallelogram,
    Point,
    derive_parallelogram,
    diagonals_share_midpoint,
    is_parallelogram,
    is_parallelogram_nd,
    kernel_tolerance,
    mk_quadrilateral,
    nd_of_parallelogram,
    one_pair_parallel_and_equal,
    opposite_angles_equal,
    opposite_sides_equal,
    opposite_sides_parallel,
    parallelogram_law_residual,
    satisfies_parallelogram_law,
)
from geokernel.parallelogram import (
    derive_from_diagonal_midpoints,
    derive_from_opposite_angles,
    derive_from_opposite_sides_equal,
    derive_from_parallel_and_equal,
    derive_from_parallel_sides,
)

ABCD = ((0.0, 0.0), (2.0, 0.0), (3.0, 1.0), (1.0, 1.0))
ANTIPARALLELOGRAM = ((0.0, 0.0), (3.0, 2.0), (4.0, 0.0), (1.0, 2.0))
CROSSED_PARALLEL_PAIR = ((0.0, 0.0), (2.0, 0.0), (3.0, 1.0), (5.0, 1.0))
COLLINEAR = ((0.0, 0.0), (1.0, 0.0), (3.0, 0.0), (2.0, 0.0))

CONVEX_SAMPLES = {
    "parallelogram": (ABCD, True),
    "rectangle": (((0.0, 0.0), (3.0, 0.0), (3.0, 2.0), (0.0, 2.0)), True),
    "rhombus": (((0.0, 0.0), (3.0, 0.0), (4.8, 2.4), (1.8, 2.4)), True),
    "clockwise": (((0.0, 0.0), (1.0, 1.0), (3.0, 1.0), (2.0, 0.0)), True),
    "kite": (((0.0, 0.0), (1.0, -1.0), (3.0, 0.0), (1.0, 1.0)), False),
    "isosceles_trapezoid": (((0.0, 0.0), (4.0, 0.0), (3.0, 2.0), (1.0, 2.0)), False),
    "generic": (((0.0, 0.0), (4.0, 0.0), (5.0, 3.0), (1.0, 2.0)), False),
}

CRITERIA = ["parallel_sides", "equal_sides", "parallel_and_equal", "opposite_angles", "diagonal_midpoints"]


def test_vector_predicate_on_a_parallelogram():
    assert is_parallelogram(*ABCD)
    assert is_parallelogram(mk_quadrilateral(*ABCD))
    assert is_parallelogram_nd(*ABCD)


def test_predicates_accept_either_a_quadrilateral_or_four_points():
    with pytest.raises(TypeError):
        is_parallelogram(mk_quadrilateral(*ABCD), (0.0, 0.0))
    with pytest.raises(TypeError):
        is_parallelogram((0.0, 0.0), (1.0, 0.0))


@pytest.mark.parametrize("name", sorted(CONVEX_SAMPLES))
def test_criteria_agree_on_convex_quadrilaterals(name):
    points, expected = CONVEX_SAMPLES[name]
    quad = mk_quadrilateral(*points)

    assert quad.is_convex()
    assert is_parallelogram_nd(quad) is expected
    assert is_parallelogram(quad) is expected
    assert opposite_sides_parallel(quad) is expected
    assert opposite_sides_equal(quad) is expected
    assert one_pair_parallel_and_equal(quad) is expected
    assert opposite_angles_equal(quad) is expected
    assert diagonals_share_midpoint(quad) is expected


@pytest.mark.parametrize("criterion", CRITERIA)
@pytest.mark.parametrize("name", sorted(CONVEX_SAMPLES))
def test_derivations_on_convex_quadrilaterals(criterion, name):
    points, expected = CONVEX_SAMPLES[name]
    derivation = derive_parallelogram(criterion, *points)

    assert derivation.criterion == criterion
    assert derivation.holds is expected
    if expected:
        assert derivation.branch == "convex"
        assert all(w.congruent for w in derivation.witnesses)
    else:
        assert derivation.status == "hypothesis_failed"


def test_kite_has_one_pair_of_equal_opposite_angles():
    kite = mk_quadrilateral(*CONVEX_SAMPLES["kite"][0])

    assert kite.vertex_angle(2).value == kite.vertex_angle(4).value
    assert kite.vertex_angle(1).value != kite.vertex_angle(3).value


def test_equal_sides_on_a_crossed_quadrilateral():
    quad = mk_quadrilateral(*ANTIPARALLELOGRAM)

    assert opposite_sides_equal(quad)
    assert not is_parallelogram(quad)
    assert not is_parallelogram_nd(quad)

    derivation = derive_from_opposite_sides_equal(quad)
    assert derivation.status == "not_convex"
    assert derivation.branch == "non_convex"
    assert "quadrilateral is crossed" in derivation.notes
    assert any("diagonals" in note for note in derivation.notes)
    (mirrored,) = derivation.witnesses
    assert mirrored.congruent
    assert mirrored.witness.mirrored


def test_parallel_and_equal_on_a_crossed_quadrilateral():
    quad = mk_quadrilateral(*CROSSED_PARALLEL_PAIR)

    assert one_pair_parallel_and_equal(quad, pair=1)
    assert not one_pair_parallel_and_equal(quad, pair=2)
    assert not is_parallelogram_nd(quad)

    derivation = derive_from_parallel_and_equal(quad)
    assert derivation.status == "not_convex"
    assert any("parallel" in note for note in derivation.notes)


def test_parallel_and_equal_pair_selection():
    shifted = mk_quadrilateral(*ABCD).shifted()

    assert derive_from_parallel_and_equal(shifted, pair=2).holds
    assert any("pair 2" in note for note in derive_from_parallel_and_equal(shifted, pair=2).notes)
    with pytest.raises(ValueError):
        one_pair_parallel_and_equal(shifted, pair=3)


def test_collinear_points_satisfy_the_vector_predicate_only():
    quad = mk_quadrilateral(*COLLINEAR)

    assert is_parallelogram(quad)
    assert not is_parallelogram_nd(quad)
    assert opposite_angles_equal(quad)
    assert diagonals_share_midpoint(quad)
    assert quad.classify().reason == "degenerate"

    for derive in (
        derive_from_parallel_sides,
        derive_from_opposite_sides_equal,
        derive_from_opposite_angles,
        derive_from_diagonal_midpoints,
    ):
        derivation = derive(quad)
        assert derivation.status == "not_convex"
        assert derivation.branch == "non_convex"


def test_shared_midpoint_note_only_for_collinear_vertices():
    collinear = derive_from_diagonal_midpoints(*COLLINEAR)
    assert collinear.notes[0].startswith("all four vertices lie on one line")

    # Under a loose tolerance p1 p2 p3 counts as collinear but p2 p3 p4 does not.
    with kernel_tolerance(abs_tol=0.1):
        flat = derive_from_diagonal_midpoints((0.0, 0.0), (10.0, 0.0), (11.0, 0.105), (1.0, 0.105))
    assert flat.status == "not_convex"
    assert "quadrilateral is degenerate" in flat.notes
    assert not any(note.startswith("all four vertices") for note in flat.notes)


COINCIDENT_NEIGHBOURS = ((0.0, 0.0), (0.0, 0.0), (1.0, 0.0), (0.0, 1.0))


@pytest.mark.parametrize(
    "predicate",
    [
        opposite_sides_parallel,
        opposite_sides_equal,
        one_pair_parallel_and_equal,
        opposite_angles_equal,
        diagonals_share_midpoint,
    ],
)
def test_criteria_are_false_when_a_vertex_repeats(predicate):
    assert predicate(*COINCIDENT_NEIGHBOURS) is False


def test_opposite_angles_with_coincident_vertices():
    derivation = derive_from_opposite_angles(*COINCIDENT_NEIGHBOURS)

    assert derivation.status == "hypothesis_failed"
    assert derivation.notes == ["opposite angles differ or are undefined"]


def test_unknown_criterion():
    with pytest.raises(ValueError):
        derive_parallelogram("three_sides", *ABCD)


@pytest.mark.parametrize("points", [ABCD, COLLINEAR, CONVEX_SAMPLES["rhombus"][0]])
def test_parallelogram_law(points):
    assert satisfies_parallelogram_law(*points)
    assert math.isclose(parallelogram_law_residual(*points), 0.0, abs_tol=1e-9)


def test_parallelogram_law_fails_off_parallelograms():
    assert not satisfies_parallelogram_law(*CONVEX_SAMPLES["generic"][0])


def test_validated_parallelogram():
    para = Parallelogram.from_quadrilateral(mk_quadrilateral(*ABCD))

    assert para.center().is_close(Point(1.5, 0.5))
    assert para.diagonals_bisect()
    assert para.satisfies_parallelogram_law()
    assert para.adjacent_vertices_distinct()
    assert isinstance(para.shifted(), Parallelogram)


def test_validated_parallelogram_rejects_other_shapes():
    with pytest.raises(NotParallelogramError):
        Parallelogram.of(*CONVEX_SAMPLES["isosceles_trapezoid"][0])
    with pytest.raises(NotConvexError):
        Parallelogram.of(*ANTIPARALLELOGRAM)


def test_nd_of_parallelogram():
    assert isinstance(nd_of_parallelogram(*ABCD), Parallelogram)
    with pytest.raises(DegenerateInputError):
        nd_of_parallelogram(*COLLINEAR)
    with pytest.raises(NotParallelogramError):
        nd_of_parallelogram(*CONVEX_SAMPLES["generic"][0])
