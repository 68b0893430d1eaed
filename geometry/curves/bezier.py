# geometry/curves/bezier.py
from typing import ClassVar, List, Sequence, Tuple, Union
from geometry.constants import DEFAULT_ARC_LENGTH_TOLERANCE
from geometry.curves.arc_length import ArcLengthParameterization, build
from geometry.curves.evaluation import SpeedProfile
from geometry.curves.nondegenerate import Classification, Point, classify
from geometry.primitives.bounding_box import BoundingBox2d, BoundingBox3d
from geometry.primitives.parameter_value import ParameterValue
from geometry.primitives.vector import Vector2d, Vector3d
from utils.base_model import ImmutableModel

Vector = Union[Vector2d, Vector3d]
BoundingBox = Union[BoundingBox2d, BoundingBox3d]


def _differences(items: Sequence) -> List:
    return [b - a for a, b in zip(items, items[1:])]


def _de_casteljau(items: Sequence, interpolate_from, t: float) -> List[List]:
    """Run de Casteljau's algorithm, returning every level from the inputs down to one item."""
    levels = [list(items)]
    while len(levels[-1]) > 1:
        level = levels[-1]
        levels.append([interpolate_from(a, b, t) for a, b in zip(level, level[1:])])
    return levels


class BezierSpline(ImmutableModel):
    """
    Base class for Bézier curves of any degree, in 2D or 3D.

    Subclasses declare one point field per control point, in order, and set the
    point, vector and bounding box types for their dimension. Everything else
    (evaluation, derivatives, subdivision, transformation) is expressed here in
    terms of the control point sequence, by repeated linear interpolation.

    Parameter values are validated to lie in [0, 1]; evaluating outside that
    range raises ValueError rather than extrapolating.
    """
    point_type: ClassVar[type]
    vector_type: ClassVar[type]
    bounding_box_type: ClassVar[type]

    @classmethod
    def from_control_points(cls, points: Sequence[Point]) -> "BezierSpline":
        """Construct from a sequence of control points, first to last."""
        names = tuple(cls.model_fields)
        if len(points) != len(names):
            raise ValueError(f"{cls.__name__} needs {len(names)} control points, got {len(points)}")
        return cls(**dict(zip(names, points)))

    @property
    def control_points(self) -> Tuple[Point, ...]:
        return tuple(getattr(self, name) for name in type(self).model_fields)

    @property
    def degree(self) -> int:
        return len(type(self).model_fields) - 1

    @property
    def start_point(self) -> Point:
        return self.control_points[0]

    @property
    def end_point(self) -> Point:
        return self.control_points[-1]

    def point_on(self, t: Union[ParameterValue, float]) -> Point:
        """Evaluate the curve at parameter value t."""
        t = ParameterValue.of(t)
        return _de_casteljau(self.control_points, self.point_type.interpolate_from, float(t))[-1][0]

    def _derivative_control_vectors(self, order: int) -> List[Vector]:
        """
        Control vectors of the order-th derivative curve.

        These are the order-th forward differences of the control points, scaled
        by n! / (n - order)!. Differentiating past the degree gives no vectors.
        """
        points = self.control_points
        vectors = [a.vector_to(b) for a, b in zip(points, points[1:])]
        factor = float(self.degree)
        for k in range(1, order):
            vectors = _differences(vectors)
            factor *= self.degree - k
        return [v.scale_by(factor) for v in vectors]

    def _derivative(self, order: int, t: ParameterValue) -> Vector:
        if order > self.degree:
            return self.vector_type.zero()
        vectors = self._derivative_control_vectors(order)
        return _de_casteljau(vectors, self.vector_type.interpolate_from, float(t))[-1][0]

    def first_derivative(self, t: Union[ParameterValue, float]) -> Vector:
        """Get the first derivative vector at parameter value t."""
        return self._derivative(1, ParameterValue.of(t))

    def second_derivative(self, t: Union[ParameterValue, float]) -> Vector:
        """Get the second derivative vector at parameter value t."""
        return self._derivative(2, ParameterValue.of(t))

    def third_derivative(self) -> Vector:
        """Get the third derivative vector, constant for curves of degree three or less."""
        return self._derivative(3, ParameterValue.zero())

    @property
    def start_derivative(self) -> Vector:
        return self.first_derivative(ParameterValue.zero())

    @property
    def end_derivative(self) -> Vector:
        return self.first_derivative(ParameterValue.one())

    def max_second_derivative_magnitude(self) -> float:
        """
        Get an upper bound on |C''(t)| over [0, 1].

        The second derivative is itself a Bézier curve, so it lies within the
        convex hull of its control vectors and is bounded by the longest one.
        """
        if self.degree < 2:
            return 0.0
        return max(v.length for v in self._derivative_control_vectors(2))

    def speed_profile(self) -> SpeedProfile:
        return SpeedProfile.from_vectors(self._derivative_control_vectors(1))

    def split_at(self, t: Union[ParameterValue, float]) -> Tuple["BezierSpline", "BezierSpline"]:
        """
        Split the curve into two curves at parameter value t.

        The first covers [0, t] and the second [t, 1]; both are reparameterized
        to [0, 1] and meet exactly at point_on(t).
        """
        t = ParameterValue.of(t)
        levels = _de_casteljau(self.control_points, self.point_type.interpolate_from, float(t))
        first = self.from_control_points([level[0] for level in levels])
        second = self.from_control_points([level[-1] for level in reversed(levels)])
        return first, second

    def bisect(self) -> Tuple["BezierSpline", "BezierSpline"]:
        """Split the curve in half at t = 0.5."""
        return self.split_at(ParameterValue.half())

    def with_control_points(self, points: Sequence[Point]) -> "BezierSpline":
        """Create a curve of the same type with different control points."""
        return self.from_control_points(points)

    def reverse(self) -> "BezierSpline":
        """Get the same curve traversed from end to start."""
        return self.from_control_points(self.control_points[::-1])

    def translate_by(self, displacement: Vector) -> "BezierSpline":
        """Move every control point by a vector."""
        return self.from_control_points([p.translate_by(displacement) for p in self.control_points])

    def scale_about(self, center: Point, factor: float) -> "BezierSpline":
        """Scale the curve about a center point."""
        return self.from_control_points([p.scale_about(center, factor) for p in self.control_points])

    def bounding_box(self) -> BoundingBox:
        """Get a box containing the curve (the hull of its control points)."""
        return self.bounding_box_type.hull(self.control_points)

    def nondegenerate(self) -> Classification:
        """Classify the curve for tangent resolution."""
        return classify(self)

    def arc_length_parameterized(self, tolerance: float = DEFAULT_ARC_LENGTH_TOLERANCE) -> ArcLengthParameterization:
        """Build an arc length parameterization of the curve to the given tolerance."""
        return build(self, tolerance)

    def __str__(self) -> str:
        return f"{type(self).__name__}({', '.join(str(p) for p in self.control_points)})"
