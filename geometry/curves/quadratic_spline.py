# geometry/curves/quadratic_spline.py
from typing import ClassVar
from pydantic import Field
from geometry.curves.bezier import BezierSpline
from geometry.primitives.bounding_box import BoundingBox2d, BoundingBox3d
from geometry.primitives.point import Point2d, Point3d
from geometry.primitives.vector import Vector2d, Vector3d


class QuadraticSpline2d(BezierSpline):
    """
    A quadratic Bézier curve in the plane.

    The curve starts at the first control point heading towards the second,
    and ends at the third arriving from the direction of the second.
    """
    point_type: ClassVar[type] = Point2d
    vector_type: ClassVar[type] = Vector2d
    bounding_box_type: ClassVar[type] = BoundingBox2d

    first_control_point: Point2d = Field(description="Start point of the curve")
    second_control_point: Point2d = Field(description="Interior control point")
    third_control_point: Point2d = Field(description="End point of the curve")


class QuadraticSpline3d(BezierSpline):
    """A quadratic Bézier curve in space."""
    point_type: ClassVar[type] = Point3d
    vector_type: ClassVar[type] = Vector3d
    bounding_box_type: ClassVar[type] = BoundingBox3d

    first_control_point: Point3d = Field(description="Start point of the curve")
    second_control_point: Point3d = Field(description="Interior control point")
    third_control_point: Point3d = Field(description="End point of the curve")
