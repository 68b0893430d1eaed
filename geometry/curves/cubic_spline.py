# geometry/curves/cubic_spline.py
from typing import ClassVar
from pydantic import Field
from geometry.curves.bezier import BezierSpline, Vector
from geometry.curves.nondegenerate import Point
from geometry.primitives.bounding_box import BoundingBox2d, BoundingBox3d
from geometry.primitives.point import Point2d, Point3d
from geometry.primitives.vector import Vector2d, Vector3d


class CubicSpline(BezierSpline):
    """Constructors shared by the 2D and 3D cubic Bézier curves."""

    @classmethod
    def from_endpoints(cls, start_point: Point, start_derivative: Vector,
                       end_point: Point, end_derivative: Vector) -> "CubicSpline":
        """
        Construct a cubic from its endpoints and the first derivatives there.

        Args:
            start_point: Point at t=0
            start_derivative: First derivative vector at t=0
            end_point: Point at t=1
            end_derivative: First derivative vector at t=1
        """
        return cls.from_control_points([
            start_point,
            start_point.translate_by(start_derivative.scale_by(1.0 / 3.0)),
            end_point.translate_by(end_derivative.scale_by(-1.0 / 3.0)),
            end_point,
        ])

    @classmethod
    def from_quadratic_spline(cls, quadratic: BezierSpline) -> "CubicSpline":
        """Convert a quadratic curve into the identical cubic by degree elevation."""
        first, second, third = quadratic.control_points
        return cls.from_control_points([
            first,
            cls.point_type.interpolate_from(first, second, 2.0 / 3.0),
            cls.point_type.interpolate_from(third, second, 2.0 / 3.0),
            third,
        ])


class CubicSpline2d(CubicSpline):
    """A cubic Bézier curve in the plane."""
    point_type: ClassVar[type] = Point2d
    vector_type: ClassVar[type] = Vector2d
    bounding_box_type: ClassVar[type] = BoundingBox2d

    first_control_point: Point2d = Field(description="Start point of the curve")
    second_control_point: Point2d = Field(description="Control point setting the start tangent")
    third_control_point: Point2d = Field(description="Control point setting the end tangent")
    fourth_control_point: Point2d = Field(description="End point of the curve")


class CubicSpline3d(CubicSpline):
    """
    A cubic Bézier curve in space.

    Example:
        spline = CubicSpline3d.from_control_points([
            Point3d(x=1, y=1, z=1), Point3d(x=3, y=1, z=1),
            Point3d(x=3, y=3, z=1), Point3d(x=3, y=3, z=3),
        ])
        parameterized = spline.arc_length_parameterized(tolerance=1e-4)
    """
    point_type: ClassVar[type] = Point3d
    vector_type: ClassVar[type] = Vector3d
    bounding_box_type: ClassVar[type] = BoundingBox3d

    first_control_point: Point3d = Field(description="Start point of the curve")
    second_control_point: Point3d = Field(description="Control point setting the start tangent")
    third_control_point: Point3d = Field(description="Control point setting the end tangent")
    fourth_control_point: Point3d = Field(description="End point of the curve")
