# geometry/curves/arc_length.py
"""
Arc length parameterization of curves.

A curve's parameter t does not advance uniformly with distance along the
curve. build() tabulates cumulative arc length at evenly spaced parameter
values, choosing the spacing from a bound on the curve's second derivative so
that linear interpolation inside the table stays within the requested
tolerance. The table then answers queries in both directions:

- parameter_value_to_arc_length(): how far along the curve is parameter t?
- arc_length_to_parameter_value(): which parameter is a given distance along?
"""
from bisect import bisect_left, bisect_right
from typing import Optional, Tuple, Union
from pydantic import Field, field_validator, model_validator
import logging
import math
from geometry.constants import (
    ARC_LENGTH_SLACK,
    GAUSS_LEGENDRE_NODES,
    GAUSS_LEGENDRE_WEIGHTS,
    MAX_INVERSE_ITERATIONS,
)
from geometry.curves.evaluation import CurveEvaluation, SpeedProfile
from geometry.curves.nondegenerate import Classification, classify
from geometry.primitives.parameter_value import ParameterValue
from utils.base_model import ImmutableModel

logger = logging.getLogger(__name__)


def _validate_tolerance(tolerance: float) -> float:
    if not (math.isfinite(tolerance) and tolerance > 0):
        raise ValueError(f"Arc length tolerance must be positive and finite, got {tolerance}")
    return tolerance


def num_approximation_segments(tolerance: float, max_second_derivative_magnitude: float) -> int:
    """
    Get the number of equal parameter subintervals needed for a given tolerance.

    Over a subinterval of width h, a curve deviates from linear behaviour by at
    most B * h**2 / 8, where B bounds the magnitude of its second derivative.
    The smallest N = 1/h keeping that below the tolerance is returned, and
    never less than one.

    Args:
        tolerance: Maximum allowed error, in curve length units
        max_second_derivative_magnitude: Conservative bound B on |C''(t)| over [0, 1]

    Raises:
        ValueError: If the tolerance is not positive and finite
    """
    _validate_tolerance(tolerance)
    if max_second_derivative_magnitude <= 0:
        return 1
    return max(1, math.ceil(math.sqrt(max_second_derivative_magnitude / (8.0 * tolerance))))


def integrate_speed(speed: SpeedProfile, start: float, end: float) -> float:
    """Integrate speed over [start, end] with three-point Gauss-Legendre quadrature."""
    width = end - start
    return width * sum(
        weight * speed(start + node * width)
        for node, weight in zip(GAUSS_LEGENDRE_NODES, GAUSS_LEGENDRE_WEIGHTS)
    )


class ArcLengthParameterization(ImmutableModel):
    """
    A table of cumulative arc length against parameter value for one curve.

    Entry i pairs parameter_values[i] with arc_lengths[i], the length of the
    curve from t=0 up to that parameter. Both columns are nondecreasing, the
    first entry is (0, 0) and the last is (1, total).
    """
    curve: CurveEvaluation = Field(description="The parameterized curve")
    tolerance: float = Field(description="Maximum error the table was built for")
    parameter_values: Tuple[float, ...] = Field(description="Parameter column of the table")
    arc_lengths: Tuple[float, ...] = Field(description="Cumulative arc length column of the table")
    speed_profile: SpeedProfile = Field(description="Speed of the curve, used to refine inverse queries")
    classification: Classification = Field(description="Tangent classification of the curve")

    @field_validator("tolerance")
    @classmethod
    def validate_tolerance(cls, value: float) -> float:
        """Validate that the tolerance is positive and finite."""
        return _validate_tolerance(value)

    @model_validator(mode="after")
    def validate_table(self) -> "ArcLengthParameterization":
        """Validate that the table covers [0, 1] and is monotonic in both columns."""
        if len(self.parameter_values) != len(self.arc_lengths):
            raise ValueError(
                f"Table columns differ in length: {len(self.parameter_values)} parameter values, "
                f"{len(self.arc_lengths)} arc lengths"
            )
        if len(self.parameter_values) < 2:
            raise ValueError("Table needs at least two entries")
        if self.parameter_values[0] != 0.0 or self.parameter_values[-1] != 1.0:
            raise ValueError("Table parameter values must run from exactly 0 to exactly 1")
        if self.arc_lengths[0] != 0.0:
            raise ValueError(f"Table arc lengths must start at 0, got {self.arc_lengths[0]}")
        for column_name, column in (("parameter values", self.parameter_values),
                                    ("arc lengths", self.arc_lengths)):
            for i in range(1, len(column)):
                if column[i] < column[i - 1]:
                    raise ValueError(f"Table {column_name} decrease at entry {i}")
        return self

    @property
    def total(self) -> float:
        """Get the total arc length of the curve."""
        return self.arc_lengths[-1]

    @property
    def segment_count(self) -> int:
        return len(self.parameter_values) - 1

    def _bracket_for_parameter(self, t: float) -> int:
        index = bisect_right(self.parameter_values, t) - 1
        return min(max(index, 0), self.segment_count - 1)


def build(curve: CurveEvaluation, tolerance: float) -> ArcLengthParameterization:
    """
    Build an arc length parameterization of a curve.

    Args:
        curve: Any curve implementing the evaluation contract
        tolerance: Maximum allowed error in arc length, in curve length units

    Returns:
        The immutable ArcLengthParameterization

    Raises:
        ValueError: If the tolerance is not positive and finite
    """
    bound = curve.max_second_derivative_magnitude()
    segments = num_approximation_segments(tolerance, bound)
    logger.debug(
        f"Building arc length table with {segments} segments "
        f"(tolerance={tolerance}, second derivative bound={bound})"
    )

    speed = curve.speed_profile()
    parameter_values = [i / segments for i in range(segments + 1)]
    increments = [
        integrate_speed(speed, start, end)
        for start, end in zip(parameter_values, parameter_values[1:])
    ]

    arc_lengths = [0.0]
    for increment in increments:
        arc_lengths.append(arc_lengths[-1] + increment)

    return ArcLengthParameterization(
        curve=curve,
        tolerance=tolerance,
        parameter_values=tuple(parameter_values),
        arc_lengths=tuple(arc_lengths),
        speed_profile=speed,
        classification=classify(curve),
    )


def parameter_value_to_arc_length(parameterization: ArcLengthParameterization,
                                  t: Union[ParameterValue, float]) -> float:
    """
    Get the arc length from the start of the curve to parameter value t.

    The result interpolates linearly inside the table bracket containing t,
    which makes it nondecreasing in t.

    Raises:
        ValueError: If t is outside [0, 1]
    """
    t = ParameterValue.of(t).value
    index = parameterization._bracket_for_parameter(t)
    t0 = parameterization.parameter_values[index]
    t1 = parameterization.parameter_values[index + 1]
    s0 = parameterization.arc_lengths[index]
    s1 = parameterization.arc_lengths[index + 1]
    if t >= t1:
        return s1
    return s0 + (t - t0) / (t1 - t0) * (s1 - s0)


def arc_length_to_parameter_value(parameterization: ArcLengthParameterization,
                                  distance: float) -> Optional[ParameterValue]:
    """
    Find the parameter value at a given distance along the curve.

    The table bracket containing the distance is found by binary search and
    inverted by linear interpolation, then refined by Newton's method against
    the curve's true speed. A step that would leave the bracket, or that
    starts where the speed is zero, is replaced by bisection, so the refined
    value never leaves its bracket even next to a cusp.

    Returns:
        The parameter value, or None if the distance is outside [0, total]
    """
    total = parameterization.total
    slack = ARC_LENGTH_SLACK * max(total, 1.0)
    if not math.isfinite(distance) or distance < -slack or distance > total + slack:
        return None
    distance = min(max(distance, 0.0), total)

    arc_lengths = parameterization.arc_lengths
    index = bisect_left(arc_lengths, distance)
    if index == 0:
        return ParameterValue.zero()

    lower = index - 1
    t0 = parameterization.parameter_values[lower]
    t1 = parameterization.parameter_values[index]
    s0 = arc_lengths[lower]
    s1 = arc_lengths[index]
    t = t0 + (distance - s0) / (s1 - s0) * (t1 - t0)

    # The residual is negative at t0 and nonnegative at t1, so [low, high]
    # always holds a root.
    speed_profile = parameterization.speed_profile
    low, high = t0, t1
    for _ in range(MAX_INVERSE_ITERATIONS):
        residual = s0 + integrate_speed(speed_profile, t0, t) - distance
        if abs(residual) <= slack:
            break
        if residual > 0.0:
            high = t
        else:
            low = t
        speed = speed_profile(t)
        step = t - residual / speed if speed > 0.0 else None
        if step is None or not low < step < high:
            step = 0.5 * (low + high)
        if step == t:
            break
        t = step
    return ParameterValue.clamped(t)
