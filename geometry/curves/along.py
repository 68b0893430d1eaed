# geometry/curves/along.py
"""Queries that locate points and tangents by distance along a curve."""
from typing import Optional, Tuple
from geometry.curves.arc_length import ArcLengthParameterization, arc_length_to_parameter_value
from geometry.curves.nondegenerate import DEGENERATE, Direction, Point, tangent_direction


def arc_length(parameterization: ArcLengthParameterization) -> float:
    """Get the total arc length of a parameterized curve."""
    return parameterization.total


def point_along(parameterization: ArcLengthParameterization, distance: float) -> Optional[Point]:
    """Get the point at a given distance along the curve, or None if out of range."""
    t = arc_length_to_parameter_value(parameterization, distance)
    if t is None:
        return None
    return parameterization.curve.point_on(t)


def tangent_direction_along(parameterization: ArcLengthParameterization,
                            distance: float) -> Optional[Direction]:
    """
    Get the tangent direction at a given distance along the curve.

    Returns None if the distance is out of range or the curve is a single point.
    """
    if parameterization.classification.kind == DEGENERATE:
        return None
    t = arc_length_to_parameter_value(parameterization, distance)
    if t is None:
        return None
    return tangent_direction(parameterization.classification, t)


def sample_along(parameterization: ArcLengthParameterization,
                 distance: float) -> Optional[Tuple[Point, Direction]]:
    """Get the point and tangent direction at a given distance along the curve."""
    if parameterization.classification.kind == DEGENERATE:
        return None
    t = arc_length_to_parameter_value(parameterization, distance)
    if t is None:
        return None
    return parameterization.curve.point_on(t), tangent_direction(parameterization.classification, t)


def midpoint(parameterization: ArcLengthParameterization) -> Point:
    """Get the point halfway along the curve by arc length."""
    t = arc_length_to_parameter_value(parameterization, parameterization.total / 2)
    return parameterization.curve.point_on(t)
