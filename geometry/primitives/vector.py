# geometry/primitives/vector.py
from typing import Optional, Sequence, Tuple
from pydantic import Field, field_validator, model_validator
import math
from geometry.constants import DIRECTION_TOLERANCE, EPSILON
from utils.base_model import ImmutableModel


def interpolate(a: float, b: float, t: float) -> float:
    """Interpolate between two values; exact at both t=0 and t=1."""
    if t <= 0.5:
        return a + t * (b - a)
    return b + (1.0 - t) * (a - b)


class _Components:
    """Helpers shared by every model whose fields are its Cartesian components."""

    @property
    def components(self) -> Tuple[float, ...]:
        """Get the components as a tuple, in field order."""
        return tuple(getattr(self, name) for name in type(self).model_fields)

    @classmethod
    def from_components(cls, components: Sequence[float]):
        """Construct from a sequence of components (x, y) or (x, y, z)."""
        names = tuple(cls.model_fields)
        if len(components) != len(names):
            raise ValueError(
                f"{cls.__name__} needs {len(names)} components, got {len(components)}"
            )
        return cls(**dict(zip(names, (float(c) for c in components))))

    def format_as_tuple(self) -> str:
        """Format the components as a tuple string."""
        return "(" + ", ".join(str(c) for c in self.components) + ")"

    def __str__(self) -> str:
        return f"{type(self).__name__}{self.format_as_tuple()}"


class _DirectionOps(_Components):
    """Operations shared by Direction2d and Direction3d."""

    def _check_unit_length(self):
        length = math.sqrt(sum(c * c for c in self.components))
        if abs(length - 1.0) > DIRECTION_TOLERANCE:
            raise ValueError(f"Direction must have unit length, got length {length}")
        return self

    def reverse(self):
        """Get the opposite direction."""
        return self.from_components(tuple(-c for c in self.components))

    def component_in(self, other) -> float:
        """Get the component of this direction in another (the cosine of the angle between them)."""
        return sum(a * b for a, b in zip(self.components, other.components))

    def angle_from(self, other) -> float:
        """Get the unsigned angle in radians between this direction and another, in [0, π]."""
        dot = max(-1.0, min(1.0, self.component_in(other)))
        return math.acos(dot)

    def equal_within(self, other, angle: float) -> bool:
        """Check if two directions differ by no more than the given angle (radians)."""
        return self.angle_from(other) <= angle


class _VectorOps(_Components):
    """Component-wise arithmetic shared by Vector2d and Vector3d."""

    @classmethod
    def zero(cls):
        """Get the zero vector."""
        return cls.from_components((0.0,) * len(cls.model_fields))

    @classmethod
    def interpolate_from(cls, first, second, t: float):
        """Interpolate linearly between two vectors; t=0 gives first, t=1 gives second."""
        return cls.from_components(
            tuple(interpolate(a, b, t) for a, b in zip(first.components, second.components))
        )

    def __add__(self, other):
        return self.from_components(tuple(a + b for a, b in zip(self.components, other.components)))

    def __sub__(self, other):
        return self.from_components(tuple(a - b for a, b in zip(self.components, other.components)))

    def __neg__(self):
        return self.from_components(tuple(-a for a in self.components))

    def scale_by(self, factor: float):
        """Scale the vector by a factor."""
        return self.from_components(tuple(a * factor for a in self.components))

    def dot(self, other) -> float:
        """Calculate the dot product with another vector."""
        return sum(a * b for a, b in zip(self.components, other.components))

    @property
    def squared_length(self) -> float:
        return self.dot(self)

    @property
    def length(self) -> float:
        """Get the length (magnitude) of the vector."""
        largest = max(abs(c) for c in self.components)
        if largest == 0.0:
            return 0.0
        return largest * math.sqrt(sum((c / largest) ** 2 for c in self.components))

    def is_zero(self) -> bool:
        """Check if every component is exactly zero."""
        return all(c == 0.0 for c in self.components)

    def is_close_to(self, other, tolerance: float = None) -> bool:
        """Check if this vector is within the tolerance of another."""
        if tolerance is None:
            tolerance = EPSILON
        return (self - other).length <= tolerance

    def _direction_as(self, direction_cls):
        """
        Normalize into the given direction class, or return None for the zero vector.

        Components are first scaled by the largest magnitude so that very large
        or very small vectors neither overflow nor underflow when normalized.
        """
        largest = max(abs(c) for c in self.components)
        if largest == 0.0:
            return None
        scaled = tuple(c / largest for c in self.components)
        scaled_length = math.sqrt(sum(c * c for c in scaled))
        return direction_cls.from_components(tuple(c / scaled_length for c in scaled))

    def normalize(self):
        """Get a unit vector in the same direction, or the zero vector if this is zero."""
        direction = self.direction()
        if direction is None:
            return self.zero()
        return direction.to_vector()


class Direction2d(_DirectionOps, ImmutableModel):
    """A unit direction in the plane."""
    x: float = Field(description="X component")
    y: float = Field(description="Y component")

    @field_validator("x", "y")
    @classmethod
    def validate_components(cls, value: float) -> float:
        """Validate that components are finite numbers."""
        if not math.isfinite(value):
            raise ValueError(f"Component must be a finite number, got {value}")
        return value

    @model_validator(mode="after")
    def validate_unit_length(self) -> "Direction2d":
        """Validate that the direction has unit length."""
        return self._check_unit_length()

    @classmethod
    def x_axis(cls) -> "Direction2d":
        return cls(x=1.0, y=0.0)

    @classmethod
    def y_axis(cls) -> "Direction2d":
        return cls(x=0.0, y=1.0)

    @classmethod
    def from_angle(cls, angle: float) -> "Direction2d":
        """Construct from a counterclockwise angle (radians) measured from the positive x-axis."""
        return cls(x=math.cos(angle), y=math.sin(angle))

    def to_angle(self) -> float:
        """Get the counterclockwise angle from the positive x-axis, in (-π, π]."""
        return math.atan2(self.y, self.x)

    def perpendicular_to(self) -> "Direction2d":
        """Get the direction rotated 90 degrees counterclockwise."""
        return Direction2d(x=-self.y, y=self.x)

    def to_vector(self) -> "Vector2d":
        """Convert to a unit vector."""
        return Vector2d(x=self.x, y=self.y)


class Direction3d(_DirectionOps, ImmutableModel):
    """A unit direction in space."""
    x: float = Field(description="X component")
    y: float = Field(description="Y component")
    z: float = Field(description="Z component")

    @field_validator("x", "y", "z")
    @classmethod
    def validate_components(cls, value: float) -> float:
        """Validate that components are finite numbers."""
        if not math.isfinite(value):
            raise ValueError(f"Component must be a finite number, got {value}")
        return value

    @model_validator(mode="after")
    def validate_unit_length(self) -> "Direction3d":
        """Validate that the direction has unit length."""
        return self._check_unit_length()

    @classmethod
    def x_axis(cls) -> "Direction3d":
        return cls(x=1.0, y=0.0, z=0.0)

    @classmethod
    def y_axis(cls) -> "Direction3d":
        return cls(x=0.0, y=1.0, z=0.0)

    @classmethod
    def z_axis(cls) -> "Direction3d":
        return cls(x=0.0, y=0.0, z=1.0)

    def to_vector(self) -> "Vector3d":
        """Convert to a unit vector."""
        return Vector3d(x=self.x, y=self.y, z=self.z)


class Vector2d(_VectorOps, ImmutableModel):
    """A displacement in the plane."""
    x: float = Field(description="X component")
    y: float = Field(description="Y component")

    @field_validator("x", "y")
    @classmethod
    def validate_components(cls, value: float) -> float:
        """Validate that components are finite numbers."""
        if not math.isfinite(value):
            raise ValueError(f"Component must be a finite number, got {value}")
        return value

    def direction(self) -> Optional[Direction2d]:
        """Get the direction of the vector, or None if it is exactly zero."""
        return self._direction_as(Direction2d)

    def cross(self, other: "Vector2d") -> float:
        """Calculate the scalar (z-component) cross product with another vector."""
        return self.x * other.y - self.y * other.x

    def perpendicular_to(self) -> "Vector2d":
        """Get the vector rotated 90 degrees counterclockwise."""
        return Vector2d(x=-self.y, y=self.x)


class Vector3d(_VectorOps, ImmutableModel):
    """A displacement in space."""
    x: float = Field(description="X component")
    y: float = Field(description="Y component")
    z: float = Field(description="Z component")

    @field_validator("x", "y", "z")
    @classmethod
    def validate_components(cls, value: float) -> float:
        """Validate that components are finite numbers."""
        if not math.isfinite(value):
            raise ValueError(f"Component must be a finite number, got {value}")
        return value

    def direction(self) -> Optional[Direction3d]:
        """Get the direction of the vector, or None if it is exactly zero."""
        return self._direction_as(Direction3d)

    def cross(self, other: "Vector3d") -> "Vector3d":
        """Calculate the cross product with another vector."""
        return Vector3d(
            x=self.y * other.z - self.z * other.y,
            y=self.z * other.x - self.x * other.z,
            z=self.x * other.y - self.y * other.x,
        )
