# geometry/curves/evaluation.py
"""
The evaluation contract every curve type offers to the shared curve machinery.

Classification, tangent resolution and arc length parameterization only ever
talk to curves through the methods listed on CurveEvaluation, so any curve
type that implements them gets those features for free.
"""
from typing import Protocol, Sequence, Tuple, Union, runtime_checkable
from pydantic import Field, field_validator
import math
from geometry.primitives.parameter_value import ParameterValue
from geometry.primitives.point import Point2d, Point3d
from geometry.primitives.vector import Vector2d, Vector3d
from utils.base_model import ImmutableModel


class SpeedProfile(ImmutableModel):
    """
    The speed |C'(t)| of a Bézier curve as a callable.

    The hodograph (derivative curve) control vectors are computed once from the
    control points and stored as plain component tuples, so evaluating the
    speed at many parameter values does no per-call model construction.
    """
    control_vectors: Tuple[Tuple[float, ...], ...] = Field(
        description="Control vectors of the derivative curve"
    )

    @field_validator("control_vectors")
    @classmethod
    def validate_control_vectors(cls, value: Tuple[Tuple[float, ...], ...]) -> Tuple[Tuple[float, ...], ...]:
        """Validate that there is at least one vector and all share a dimension."""
        if not value:
            raise ValueError("Speed profile needs at least one control vector")
        if len({len(v) for v in value}) != 1:
            raise ValueError("Speed profile control vectors must all have the same dimension")
        return value

    @classmethod
    def from_vectors(cls, vectors: Sequence) -> "SpeedProfile":
        return cls(control_vectors=tuple(v.components for v in vectors))

    def __call__(self, t: float) -> float:
        t = float(t)
        level = [list(v) for v in self.control_vectors]
        while len(level) > 1:
            level = [
                [a + t * (b - a) for a, b in zip(first, second)]
                for first, second in zip(level, level[1:])
            ]
        return math.hypot(*level[0])


@runtime_checkable
class CurveEvaluation(Protocol):
    """
    What a curve must provide to be classified and arc length parameterized.

    Parameter values may be given as floats or ParameterValue instances.
    """

    @property
    def start_point(self) -> Union[Point2d, Point3d]:
        ...

    def point_on(self, t: Union[ParameterValue, float]) -> Union[Point2d, Point3d]:
        ...

    def first_derivative(self, t: Union[ParameterValue, float]) -> Union[Vector2d, Vector3d]:
        ...

    def second_derivative(self, t: Union[ParameterValue, float]) -> Union[Vector2d, Vector3d]:
        ...

    def third_derivative(self) -> Union[Vector2d, Vector3d]:
        """The third derivative, constant for curves of degree three or less."""
        ...

    def max_second_derivative_magnitude(self) -> float:
        """A conservative bound on |C''(t)| over [0, 1], derived from control points."""
        ...

    def speed_profile(self) -> SpeedProfile:
        ...
