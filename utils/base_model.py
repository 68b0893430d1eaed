# utils/base_model.py
from typing import TypeVar, Any, cast
from pydantic import BaseModel, ConfigDict

T = TypeVar('T', bound=BaseModel)


class ImmutableModel(BaseModel):
    """
    Base class for all geometric value objects.

    Every point, vector, curve and derived table inherits from this class so that:
    - Immutability: instances are frozen after creation and hashable by value
    - Strictness: unknown fields are rejected instead of silently ignored
    - Copyability: modified copies are produced via with_changes(), never by mutation
    """
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    def with_changes(self, **changes: Any) -> T:
        """
        Create a new instance with specified changes.

        Nested models are passed through as instances so that subclasses
        (e.g. a 3D point stored in a field typed as a union) keep their type.

        Args:
            **changes: Keyword arguments with field values to change

        Returns:
            New, fully validated instance with updated values

        Raises:
            ValueError: If an invalid field name is provided or validation fails
        """
        current_data = {name: getattr(self, name) for name in type(self).model_fields}

        for key, value in changes.items():
            if key not in current_data:
                raise ValueError(f"Invalid field: {key}")
            current_data[key] = value

        return cast(T, self.__class__(**current_data))
