# geometry/primitives/point.py
from pydantic import Field, field_validator
import math
from geometry.constants import EPSILON
from geometry.primitives.vector import Vector2d, Vector3d, _Components, interpolate
from utils.base_model import ImmutableModel


class _PointOps(_Components):
    """
    Position arithmetic shared by Point2d and Point3d.

    Points are positions, not displacements: subtracting two points yields a
    vector, and a point is moved by translating it by a vector.
    """

    @classmethod
    def origin(cls):
        return cls.from_components((0.0,) * len(cls.model_fields))

    @classmethod
    def interpolate_from(cls, first, second, t: float):
        """
        Interpolate linearly between two points.

        t=0 gives the first point, t=1 the second; values outside [0, 1] extrapolate.
        """
        return cls.from_components(
            tuple(interpolate(a, b, t) for a, b in zip(first.components, second.components))
        )

    def distance_from(self, other) -> float:
        """Calculate the Euclidean distance to another point."""
        return self.vector_to(other).length

    def is_close_to(self, other, tolerance: float = None) -> bool:
        """
        Check if this point is close to another point within the specified tolerance.

        Args:
            other: The point to compare with
            tolerance: Maximum distance between points to be considered equal.
                      If None, uses the default EPSILON value.

        Returns:
            True if points are within the tolerance distance of each other
        """
        if tolerance is None:
            tolerance = EPSILON
        return self.distance_from(other) <= tolerance

    def translate_by(self, displacement):
        """Move the point by a vector."""
        return self.from_components(
            tuple(a + d for a, d in zip(self.components, displacement.components))
        )

    def midpoint(self, other):
        """Calculate the midpoint between this point and another point."""
        return self.interpolate_from(self, other, 0.5)

    def scale_about(self, center, factor: float):
        """Scale the point's distance from a center point by a factor."""
        return self.from_components(
            tuple(c + factor * (a - c) for a, c in zip(self.components, center.components))
        )

    def __str__(self) -> str:
        """String representation of the point."""
        return self.format_as_tuple()


class Point2d(_PointOps, ImmutableModel):
    """
    Represents a 2D point in Cartesian coordinates.

    This class provides basic point operations needed for geometric calculations,
    with appropriate handling of floating-point precision.
    """
    x: float = Field(description="X coordinate")
    y: float = Field(description="Y coordinate")

    @field_validator("x", "y")
    @classmethod
    def validate_coordinates(cls, value: float) -> float:
        """Validate that coordinates are finite numbers."""
        if not math.isfinite(value):
            raise ValueError(f"Coordinate must be a finite number, got {value}")
        return value

    def vector_to(self, other: "Point2d") -> Vector2d:
        """Get the displacement vector from this point to another."""
        return Vector2d(x=other.x - self.x, y=other.y - self.y)


class Point3d(_PointOps, ImmutableModel):
    """Represents a 3D point in Cartesian coordinates."""
    x: float = Field(description="X coordinate")
    y: float = Field(description="Y coordinate")
    z: float = Field(description="Z coordinate")

    @field_validator("x", "y", "z")
    @classmethod
    def validate_coordinates(cls, value: float) -> float:
        """Validate that coordinates are finite numbers."""
        if not math.isfinite(value):
            raise ValueError(f"Coordinate must be a finite number, got {value}")
        return value

    def vector_to(self, other: "Point3d") -> Vector3d:
        """Get the displacement vector from this point to another."""
        return Vector3d(x=other.x - self.x, y=other.y - self.y, z=other.z - self.z)
