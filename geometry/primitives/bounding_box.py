# geometry/primitives/bounding_box.py
from typing import Sequence, Tuple
from pydantic import Field, field_validator, model_validator
import math
from geometry.primitives.point import Point2d, Point3d
from utils.base_model import ImmutableModel


def _extrema_of(points: Sequence) -> Tuple[Tuple[float, ...], Tuple[float, ...]]:
    if not points:
        raise ValueError("Cannot build a bounding box from an empty set of points")
    columns = list(zip(*(p.components for p in points)))
    return tuple(min(c) for c in columns), tuple(max(c) for c in columns)


class _BoundingBoxOps:
    """Operations shared by BoundingBox2d and BoundingBox3d."""

    def _check_ordered(self):
        for axis in self._axes():
            low = getattr(self, f"min_{axis}")
            high = getattr(self, f"max_{axis}")
            if low > high:
                raise ValueError(f"min_{axis} ({low}) must not exceed max_{axis} ({high})")
        return self

    @classmethod
    def _axes(cls) -> Tuple[str, ...]:
        return tuple(name[4:] for name in cls.model_fields if name.startswith("min_"))

    @classmethod
    def from_extrema(cls, minima: Sequence[float], maxima: Sequence[float]):
        """Build a box from per-axis minima and maxima, in any order."""
        values = {}
        for axis, a, b in zip(cls._axes(), minima, maxima):
            values[f"min_{axis}"] = min(a, b)
            values[f"max_{axis}"] = max(a, b)
        return cls(**values)

    @property
    def minima(self) -> Tuple[float, ...]:
        return tuple(getattr(self, f"min_{axis}") for axis in self._axes())

    @property
    def maxima(self) -> Tuple[float, ...]:
        return tuple(getattr(self, f"max_{axis}") for axis in self._axes())

    @property
    def dimensions(self) -> Tuple[float, ...]:
        """Get the extent of the box along each axis."""
        return tuple(high - low for low, high in zip(self.minima, self.maxima))

    def contains(self, point) -> bool:
        """Check if a point lies inside or on the boundary of the box."""
        return all(
            low <= c <= high for c, low, high in zip(point.components, self.minima, self.maxima)
        )

    def union(self, other):
        """Get the smallest box containing both this box and another."""
        return self.from_extrema(
            tuple(min(a, b) for a, b in zip(self.minima, other.minima)),
            tuple(max(a, b) for a, b in zip(self.maxima, other.maxima)),
        )

    def intersects(self, other) -> bool:
        """Check if two boxes touch or overlap."""
        return all(
            a_low <= b_high and b_low <= a_high
            for a_low, a_high, b_low, b_high in zip(self.minima, self.maxima, other.minima, other.maxima)
        )


class BoundingBox2d(_BoundingBoxOps, ImmutableModel):
    """An axis-aligned box in the plane."""
    min_x: float = Field(description="Minimum X coordinate")
    max_x: float = Field(description="Maximum X coordinate")
    min_y: float = Field(description="Minimum Y coordinate")
    max_y: float = Field(description="Maximum Y coordinate")

    @field_validator("min_x", "max_x", "min_y", "max_y")
    @classmethod
    def validate_coordinates(cls, value: float) -> float:
        """Validate that extrema are finite numbers."""
        if not math.isfinite(value):
            raise ValueError(f"Extrema must be finite numbers, got {value}")
        return value

    @model_validator(mode="after")
    def validate_ordering(self) -> "BoundingBox2d":
        """Validate that every minimum is no greater than its maximum."""
        return self._check_ordered()

    @classmethod
    def hull(cls, points: Sequence[Point2d]) -> "BoundingBox2d":
        """Get the smallest box containing all the given points."""
        return cls.from_extrema(*_extrema_of(points))

    @property
    def center_point(self) -> Point2d:
        return Point2d(x=(self.min_x + self.max_x) / 2, y=(self.min_y + self.max_y) / 2)


class BoundingBox3d(_BoundingBoxOps, ImmutableModel):
    """An axis-aligned box in space."""
    min_x: float = Field(description="Minimum X coordinate")
    max_x: float = Field(description="Maximum X coordinate")
    min_y: float = Field(description="Minimum Y coordinate")
    max_y: float = Field(description="Maximum Y coordinate")
    min_z: float = Field(description="Minimum Z coordinate")
    max_z: float = Field(description="Maximum Z coordinate")

    @field_validator("min_x", "max_x", "min_y", "max_y", "min_z", "max_z")
    @classmethod
    def validate_coordinates(cls, value: float) -> float:
        """Validate that extrema are finite numbers."""
        if not math.isfinite(value):
            raise ValueError(f"Extrema must be finite numbers, got {value}")
        return value

    @model_validator(mode="after")
    def validate_ordering(self) -> "BoundingBox3d":
        """Validate that every minimum is no greater than its maximum."""
        return self._check_ordered()

    @classmethod
    def hull(cls, points: Sequence[Point3d]) -> "BoundingBox3d":
        """Get the smallest box containing all the given points."""
        return cls.from_extrema(*_extrema_of(points))

    @property
    def center_point(self) -> Point3d:
        return Point3d(
            x=(self.min_x + self.max_x) / 2,
            y=(self.min_y + self.max_y) / 2,
            z=(self.min_z + self.max_z) / 2,
        )
