"""User domain entity."""

from typing import Any

from pydantic import Field

from src.crud_demo.entities.core._base import Entity


class User(Entity):
    """User entity representing a person in the system.

    This is the domain model handed out by the repository. Validation here
    mirrors the column constraints: ``name`` and ``phone`` are required,
    ``age`` is optional.
    """

    name: str = Field(max_length=255, description="User's name")
    age: int | None = Field(default=None, description="User's age in years")
    phone: int = Field(description="User's phone number, unique per user")

    def __eq__(self, other: Any) -> bool:
        """Compare users by business attributes, ignoring timestamps."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.age == other.age
            and self.phone == other.phone
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((self.id, self.name, self.age, self.phone))
