from .config import KernelConfig, get_kernel_config, set_kernel_config, kernel_tolerance
from .errors import (
    GeometryError,
    DegenerateInputError,
    OrientationMismatchError,
    NotConvexError,
    NotParallelError,
    NotParallelogramError,
    ParallelLinesError,
)
from .vector import Vec, NonzeroVec, Dir, Proj, AngValue, to_dir, to_proj, neg, perp, to_ang_value, to_real, alignment
from .incidence import (
    Point,
    Ray,
    Segment,
    NondegenerateSegment,
    Line,
    as_point,
    distance,
    mk_ray,
    mk_segment,
    mk_nondegenerate_segment,
    lies_on,
    lies_int,
    length,
    midpoint,
)
from .angles import Angle, mk_angle, angle_value
from .relations import (
    parallel,
    perpendicular,
    orientation_split,
    perp_line,
    perp_foot,
    dist_to_line,
    line_intersection,
)
from .triangle import Triangle, NondegenerateTriangle, mk_triangle, mk_nondegenerate_triangle, are_collinear
from .congruence import (
    CongruenceResult,
    CongruenceWitness,
    orientation_match,
    congruent_sss,
    congruent_sas,
    congruent_asa,
    anti_congruent_sss,
)
from .quadrilateral import (
    Quadrilateral,
    ConvexQuadrilateral,
    NonConvexQuadrilateral,
    mk_quadrilateral,
    mk_convex_quadrilateral,
    is_convex,
)
from .parallelogram import (
    Parallelogram,
    ParallelogramDerivation,
    is_parallelogram,
    is_parallelogram_nd,
    opposite_sides_parallel,
    opposite_sides_equal,
    one_pair_parallel_and_equal,
    opposite_angles_equal,
    diagonals_share_midpoint,
    parallelogram_law_residual,
    satisfies_parallelogram_law,
    derive_parallelogram,
    nd_of_parallelogram,
)
from .batch import BatchClassification, classify_quadrilaterals

__all__ = [
    'KernelConfig',
    'get_kernel_config',
    'set_kernel_config',
    'kernel_tolerance',
    'GeometryError',
    'DegenerateInputError',
    'OrientationMismatchError',
    'NotConvexError',
    'NotParallelError',
    'NotParallelogramError',
    'ParallelLinesError',
    'Vec',
    'NonzeroVec',
    'Dir',
    'Proj',
    'AngValue',
    'to_dir',
    'to_proj',
    'neg',
    'perp',
    'to_ang_value',
    'to_real',
    'alignment',
    'Point',
    'Ray',
    'Segment',
    'NondegenerateSegment',
    'Line',
    'as_point',
    'distance',
    'mk_ray',
    'mk_segment',
    'mk_nondegenerate_segment',
    'lies_on',
    'lies_int',
    'length',
    'midpoint',
    'Angle',
    'mk_angle',
    'angle_value',
    'parallel',
    'perpendicular',
    'orientation_split',
    'perp_line',
    'perp_foot',
    'dist_to_line',
    'line_intersection',
    'Triangle',
    'NondegenerateTriangle',
    'mk_triangle',
    'mk_nondegenerate_triangle',
    'are_collinear',
    'CongruenceResult',
    'CongruenceWitness',
    'orientation_match',
    'congruent_sss',
    'congruent_sas',
    'congruent_asa',
    'anti_congruent_sss',
    'Quadrilateral',
    'ConvexQuadrilateral',
    'NonConvexQuadrilateral',
    'mk_quadrilateral',
    'mk_convex_quadrilateral',
    'is_convex',
    'Parallelogram',
    'ParallelogramDerivation',
    'is_parallelogram',
    'is_parallelogram_nd',
    'opposite_sides_parallel',
    'opposite_sides_equal',
    'one_pair_parallel_and_equal',
    'opposite_angles_equal',
    'diagonals_share_midpoint',
    'parallelogram_law_residual',
    'satisfies_parallelogram_law',
    'derive_parallelogram',
    'nd_of_parallelogram',
    'BatchClassification',
    'classify_quadrilaterals',
]
