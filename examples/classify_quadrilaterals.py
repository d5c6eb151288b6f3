"""Example: classify a few quadrilaterals and run each parallelogram criterion."""

import logging

import numpy as np

from geokernel import classify_quadrilaterals, derive_parallelogram, mk_quadrilateral

SHAPES = {
    "parallelogram": [(0.0, 0.0), (2.0, 0.0), (3.0, 1.0), (1.0, 1.0)],
    "antiparallelogram": [(0.0, 0.0), (3.0, 2.0), (4.0, 0.0), (1.0, 2.0)],
    "trapezoid": [(0.0, 0.0), (4.0, 0.0), (3.0, 2.0), (1.0, 2.0)],
    "flat": [(0.0, 0.0), (1.0, 0.0), (3.0, 0.0), (2.0, 0.0)],
}

CRITERIA = ("parallel_sides", "equal_sides", "parallel_and_equal", "opposite_angles", "diagonal_midpoints")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    batch = classify_quadrilaterals(np.array(list(SHAPES.values())))
    print("Batch summary:", batch.summary())

    for name, points in SHAPES.items():
        shape = mk_quadrilateral(*points).classify()
        label = getattr(shape, "reason", "convex")
        print(f"{name}: {label}")
        for criterion in CRITERIA:
            derivation = derive_parallelogram(criterion, *points)
            print(f"  {criterion:<20} {derivation.status}")
            for note in derivation.notes:
                print(f"    - {note}")


if __name__ == "__main__":
    main()
