# geometry/primitives/parameter_value.py
from typing import List, Optional, Union
from pydantic import Field, field_validator
import math
from utils.base_model import ImmutableModel


class ParameterValue(ImmutableModel):
    """
    A curve parameter value, guaranteed to lie in the closed range [0, 1].

    Parameter values index positions along a curve from its start (0) to its
    end (1). They can be compared and interpolated, but two parameter values
    cannot be added or subtracted: the result would not be a parameter value.
    """
    value: float = Field(description="Parameter value in the range [0, 1]")

    @field_validator("value")
    @classmethod
    def validate_value(cls, value: float) -> float:
        """Validate that the value is finite and within [0, 1]."""
        if not math.isfinite(value):
            raise ValueError(f"Parameter value must be a finite number, got {value}")
        if value < 0.0 or value > 1.0:
            raise ValueError(f"Parameter value must be in the range [0, 1], got {value}")
        return value

    @classmethod
    def zero(cls) -> "ParameterValue":
        return cls(value=0.0)

    @classmethod
    def half(cls) -> "ParameterValue":
        return cls(value=0.5)

    @classmethod
    def one(cls) -> "ParameterValue":
        return cls(value=1.0)

    @classmethod
    def of(cls, t: Union["ParameterValue", float]) -> "ParameterValue":
        """Accept either a ParameterValue or a plain float, validating the latter."""
        if isinstance(t, ParameterValue):
            return t
        return cls(value=float(t))

    @classmethod
    def clamped(cls, value: float) -> "ParameterValue":
        """Construct a parameter value, clamping the input to [0, 1]."""
        if math.isnan(value):
            raise ValueError("Cannot clamp NaN to a parameter value")
        return cls(value=max(0.0, min(1.0, value)))

    @classmethod
    def checked(cls, value: float) -> Optional["ParameterValue"]:
        """Construct a parameter value, or return None if the input is out of range."""
        if math.isfinite(value) and 0.0 <= value <= 1.0:
            return cls(value=value)
        return None

    @classmethod
    def steps(cls, n: int) -> List["ParameterValue"]:
        """
        Get n + 1 evenly spaced values from 0 to 1 inclusive.

        steps(2) gives [0, 0.5, 1]; steps(0) gives an empty list.
        """
        if n <= 0:
            return []
        return [cls(value=i / n) for i in range(n + 1)]

    @classmethod
    def leading(cls, n: int) -> List["ParameterValue"]:
        """Get n evenly spaced values including 0 but excluding 1."""
        if n <= 0:
            return []
        return [cls(value=i / n) for i in range(n)]

    @classmethod
    def trailing(cls, n: int) -> List["ParameterValue"]:
        """Get n evenly spaced values excluding 0 but including 1."""
        if n <= 0:
            return []
        return [cls(value=i / n) for i in range(1, n + 1)]

    @classmethod
    def midpoints(cls, n: int) -> List["ParameterValue"]:
        """Get the midpoints of n evenly sized subintervals of [0, 1]."""
        if n <= 0:
            return []
        return [cls(value=(i + 0.5) / n) for i in range(n)]

    @classmethod
    def interpolate_from(cls, first: "ParameterValue", second: "ParameterValue",
                         fraction: float) -> "ParameterValue":
        """
        Interpolate between two parameter values.

        A fraction of 0 gives the first value and 1 gives the second. Fractions
        outside [0, 1] extrapolate, and the result is clamped to the valid range.
        """
        return cls.clamped(first.value + fraction * (second.value - first.value))

    @classmethod
    def midpoint(cls, first: "ParameterValue", second: "ParameterValue") -> "ParameterValue":
        """Get the parameter value halfway between two others."""
        return cls.interpolate_from(first, second, 0.5)

    def one_minus(self) -> "ParameterValue":
        """Get 1 - t, the matching parameter value on the reversed curve."""
        return ParameterValue(value=1.0 - self.value)

    def __float__(self) -> float:
        return self.value

    def __lt__(self, other: Union["ParameterValue", float]) -> bool:
        return self.value < float(other)

    def __le__(self, other: Union["ParameterValue", float]) -> bool:
        return self.value <= float(other)

    def __gt__(self, other: Union["ParameterValue", float]) -> bool:
        return self.value > float(other)

    def __ge__(self, other: Union["ParameterValue", float]) -> bool:
        return self.value >= float(other)

    def __str__(self) -> str:
        return f"ParameterValue({self.value})"
