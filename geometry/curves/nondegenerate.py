# geometry/curves/nondegenerate.py
"""
Classification of curves by which derivative gives a reliable tangent, and
tangent resolution built on that classification.

A curve's tangent is normally the direction of its first derivative, but the
first derivative can vanish at isolated points (cusps, or control points that
coincide with an endpoint). Classifying the curve once up front records the
lowest-order derivative that is nonzero as a constant fallback, which lets
tangent_direction() answer in constant time at every parameter value.
"""
from typing import Literal, Tuple, Union
from pydantic import Field
import logging
from geometry.curves.evaluation import CurveEvaluation
from geometry.primitives.parameter_value import ParameterValue
from geometry.primitives.point import Point2d, Point3d
from geometry.primitives.vector import Direction2d, Direction3d
from utils.base_model import ImmutableModel

logger = logging.getLogger(__name__)

FIRST_DERIVATIVE_CONSTANT = "first_derivative_constant"
SECOND_DERIVATIVE_CONSTANT = "second_derivative_constant"
THIRD_DERIVATIVE_CONSTANT = "third_derivative_constant"
DEGENERATE = "degenerate"

Direction = Union[Direction2d, Direction3d]
Point = Union[Point2d, Point3d]


class FirstDerivativeConstant(ImmutableModel):
    """The curve is a straight line traversed at constant velocity; its tangent never changes."""
    kind: Literal["first_derivative_constant"] = FIRST_DERIVATIVE_CONSTANT
    curve: CurveEvaluation = Field(description="The classified curve")
    direction: Direction = Field(description="Direction of the constant first derivative")


class SecondDerivativeConstant(ImmutableModel):
    """The curve is (effectively) quadratic; its second derivative is a nonzero constant."""
    kind: Literal["second_derivative_constant"] = SECOND_DERIVATIVE_CONSTANT
    curve: CurveEvaluation = Field(description="The classified curve")
    direction: Direction = Field(description="Direction of the constant second derivative")


class ThirdDerivativeConstant(ImmutableModel):
    """The curve is cubic; its third derivative is a nonzero constant."""
    kind: Literal["third_derivative_constant"] = THIRD_DERIVATIVE_CONSTANT
    curve: CurveEvaluation = Field(description="The classified curve")
    direction: Direction = Field(description="Direction of the constant third derivative")


class DegenerateCurve(ImmutableModel):
    """Every derivative of the curve is zero: it is a single point and has no tangent."""
    kind: Literal["degenerate"] = DEGENERATE
    point: Point = Field(description="The point the curve collapses to")


Nondegenerate = Union[FirstDerivativeConstant, SecondDerivativeConstant, ThirdDerivativeConstant]
Classification = Union[FirstDerivativeConstant, SecondDerivativeConstant, ThirdDerivativeConstant, DegenerateCurve]


def classify(curve: CurveEvaluation) -> Classification:
    """
    Find the lowest-order derivative that is not identically zero.

    The check runs from the third derivative down: if the third derivative is
    zero, the second derivative is constant and can be sampled anywhere, and if
    that is zero too, the first derivative is constant. All zero tests are exact.

    Returns:
        One of the three nondegenerate variants, or DegenerateCurve carrying the
        curve's start point when every derivative vanishes.
    """
    third_direction = curve.third_derivative().direction()
    if third_direction is not None:
        return ThirdDerivativeConstant(curve=curve, direction=third_direction)

    second_direction = curve.second_derivative(0.0).direction()
    if second_direction is not None:
        return SecondDerivativeConstant(curve=curve, direction=second_direction)

    first_direction = curve.first_derivative(0.0).direction()
    if first_direction is not None:
        return FirstDerivativeConstant(curve=curve, direction=first_direction)

    logger.debug(f"Curve collapses to the single point {curve.start_point}")
    return DegenerateCurve(point=curve.start_point)


def _incoming(direction: Direction, t: ParameterValue) -> Direction:
    # At a zero of the first derivative the tangent flips; at the end of the
    # curve only the incoming side exists.
    if t.value == 1.0:
        return direction.reverse()
    return direction


def tangent_direction(nondegenerate: Nondegenerate, t: Union[ParameterValue, float]) -> Direction:
    """
    Get the tangent direction of a classified curve at a parameter value.

    Where the first derivative is nonzero its direction is returned. Where it
    vanishes, the next nonzero derivative is used instead, reversed at t=1 so
    that the reported tangent points along the curve rather than off its end.

    Args:
        nondegenerate: A classification produced by classify()
        t: Parameter value in [0, 1]

    Raises:
        ValueError: If t is outside [0, 1], or nondegenerate is a DegenerateCurve
    """
    t = ParameterValue.of(t)
    kind = nondegenerate.kind

    if kind == FIRST_DERIVATIVE_CONSTANT:
        return nondegenerate.direction
    if kind == DEGENERATE:
        raise ValueError("A degenerate curve has no tangent direction")

    curve = nondegenerate.curve
    first_direction = curve.first_derivative(t).direction()
    if first_direction is not None:
        return first_direction

    if kind == SECOND_DERIVATIVE_CONSTANT:
        return _incoming(nondegenerate.direction, t)

    second_direction = curve.second_derivative(t).direction()
    if second_direction is not None:
        return _incoming(second_direction, t)
    return nondegenerate.direction


def sample(nondegenerate: Nondegenerate, t: Union[ParameterValue, float]) -> Tuple[Point, Direction]:
    """Get both the point and the tangent direction at a parameter value."""
    t = ParameterValue.of(t)
    return nondegenerate.curve.point_on(t), tangent_direction(nondegenerate, t)
