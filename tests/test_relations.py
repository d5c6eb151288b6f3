import itertools
import math

import numpy as np
import pytest

from geokernel import (
    DegenerateInputError,
    Line,
    ParallelLinesError,
    Point,
    dist_to_line,
    line_intersection,
    mk_nondegenerate_segment,
    mk_ray,
    orientation_split,
    parallel,
    perp_foot,
    perp_line,
    perpendicular,
)
from geokernel.relations import perp_segment, same_proj


def _segments(*pairs):
    return [mk_nondegenerate_segment(a, b) for a, b in pairs]


PARALLEL_FAMILY = _segments(
    ((0.0, 0.0), (1.0, 1.0)),
    ((5.0, 0.0), (3.0, -2.0)),
    ((-1.0, 4.0), (2.0, 7.0)),
    ((10.0, 10.0), (10.5, 10.5)),
)


def test_parallel_is_an_equivalence_relation():
    for a in PARALLEL_FAMILY:
        assert parallel(a, a)
    for a, b in itertools.permutations(PARALLEL_FAMILY, 2):
        assert parallel(a, b) and parallel(b, a)
    for a, b, c in itertools.permutations(PARALLEL_FAMILY, 3):
        assert parallel(a, b) and parallel(b, c) and parallel(a, c)
    assert same_proj(*PARALLEL_FAMILY)


def test_parallel_ignores_orientation_and_entity_kind():
    seg = mk_nondegenerate_segment((0.0, 0.0), (2.0, 1.0))

    assert parallel(seg, seg.reverse())
    assert parallel(seg, seg.to_ray().reverse())
    assert parallel(seg.to_line(), mk_ray((7.0, 7.0), (9.0, 8.0)))
    assert not parallel(seg, mk_nondegenerate_segment((0.0, 0.0), (1.0, 1.0)))


def test_perpendicular_properties():
    a = mk_nondegenerate_segment((0.0, 0.0), (2.0, 1.0))
    b = mk_nondegenerate_segment((0.0, 0.0), (-1.0, 2.0))
    c = mk_nondegenerate_segment((3.0, 3.0), (7.0, 5.0))
    a_twin = mk_nondegenerate_segment((1.0, -1.0), (5.0, 1.0))

    assert not perpendicular(a, a)
    assert perpendicular(a, b) and perpendicular(b, a)
    assert perpendicular(b, c)
    assert parallel(a, c)
    assert parallel(a, a_twin) and perpendicular(a_twin, b)
    assert not parallel(a, b)


def test_orientation_split_on_directed_entities():
    seg = mk_nondegenerate_segment((0.0, 0.0), (2.0, 1.0))
    same = mk_nondegenerate_segment((5.0, 5.0), (9.0, 7.0))

    assert orientation_split(seg, same) == "same"
    assert orientation_split(seg, same.reverse()) == "reversed"


def test_perp_foot_and_distance():
    line = Line.through((-1.0, 0.0), (4.0, 0.0))

    foot = perp_foot((0.0, 3.0), line)
    assert foot.is_close(Point(0.0, 0.0))
    assert math.isclose(dist_to_line((0.0, 3.0), line), 3.0)
    assert dist_to_line((2.5, 0.0), line) == 0.0
    assert perpendicular(perp_line((0.0, 3.0), line), line)


def test_distance_to_line_is_a_lower_bound():
    line = Line.through((0.0, 1.0), (3.0, 2.0))
    p = Point(1.0, 4.0)
    bound = dist_to_line(p, line)
    foot = perp_foot(p, line)

    assert line.contains(foot)
    for t in np.linspace(-10.0, 10.0, 41):
        on_line = Point(3.0 * t, 1.0 + t)
        assert (on_line - p).norm() >= bound - 1e-12


def test_perp_segment_needs_point_off_the_line():
    line = Line.through((0.0, 0.0), (1.0, 0.0))

    seg = perp_segment((2.0, 5.0), line)
    assert seg.target.is_close(Point(2.0, 0.0))
    with pytest.raises(DegenerateInputError):
        perp_segment((2.0, 0.0), line)


def test_line_intersection():
    x_axis = Line.through((0.0, 0.0), (1.0, 0.0))
    diagonal = Line.through((0.0, 1.0), (1.0, 2.0))

    assert line_intersection(x_axis, diagonal).is_close(Point(-1.0, 0.0))
    with pytest.raises(ParallelLinesError):
        line_intersection(x_axis, Line.through((0.0, 3.0), (5.0, 3.0)))
