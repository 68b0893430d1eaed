#!/usr/bin/env python3
"""
Curve geometry command line tool.

Measures a quadratic or cubic Bézier curve given as control points, and
reports points and tangent directions at distances along it.

    curve-geometry 1,1,1 3,1,1 3,3,1 3,3,3 --tolerance 1e-4 --distance 1.0
"""
__version__ = "1.0"

import argparse
import logging
from typing import List, Optional

from geometry.constants import DEFAULT_ARC_LENGTH_TOLERANCE
from geometry.curves.along import arc_length, sample_along
from geometry.curves.cubic_spline import CubicSpline2d, CubicSpline3d
from geometry.curves.quadratic_spline import QuadraticSpline2d, QuadraticSpline3d
from geometry.primitives.point import Point2d, Point3d

logger = logging.getLogger(__name__)

SPLINE_TYPES = {
    (3, 2): QuadraticSpline2d,
    (3, 3): QuadraticSpline3d,
    (4, 2): CubicSpline2d,
    (4, 3): CubicSpline3d,
}


def parse_point(text: str):
    """Parse 'x,y' or 'x,y,z' into a point."""
    try:
        coordinates = [float(part) for part in text.split(",")]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid point: {text}")
    if len(coordinates) == 2:
        return Point2d.from_components(coordinates)
    if len(coordinates) == 3:
        return Point3d.from_components(coordinates)
    raise argparse.ArgumentTypeError(f"A point needs 2 or 3 coordinates, got {len(coordinates)}: {text}")


def build_spline(points: List):
    """Create the spline type matching the number and dimension of control points."""
    dimensions = {len(p.components) for p in points}
    if len(dimensions) != 1:
        raise ValueError("All control points must have the same dimension")
    key = (len(points), dimensions.pop())
    if key not in SPLINE_TYPES:
        raise ValueError(f"Expected 3 or 4 control points, got {len(points)}")
    return SPLINE_TYPES[key].from_control_points(points)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("points", nargs="+", type=parse_point,
                        help="Control points as comma-separated coordinates")
    parser.add_argument("--tolerance", type=float, default=DEFAULT_ARC_LENGTH_TOLERANCE,
                        help="Maximum arc length error")
    parser.add_argument("--distance", type=float, action="append", default=[],
                        help="Distance along the curve to sample (repeatable)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main function to run the command line tool."""
    args = create_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    try:
        spline = build_spline(args.points)
        parameterization = spline.arc_length_parameterized(args.tolerance)
    except ValueError as e:
        logger.error(f"Cannot measure curve: {str(e)}")
        return 1

    print(f"Arc length: {arc_length(parameterization):.6f}")
    for distance in args.distance:
        result = sample_along(parameterization, distance)
        if result is None:
            print(f"{distance}: out of range (or curve is a single point)")
        else:
            point, direction = result
            print(f"{distance}: point {point}, direction {direction.format_as_tuple()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
