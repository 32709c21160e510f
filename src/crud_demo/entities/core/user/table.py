"""User database table model."""

import sqlalchemy as sa
from sqlmodel import Field

from src.crud_demo.entities.core._base import EntityTable


class UserTable(EntityTable, table=True):
    """Database persistence model for users.

    This represents how the User entity is stored in the database.
    It's separate from the domain entity to maintain clean architecture
    while keeping related code together.
    """

    __tablename__ = "Users"

    name: str = Field(max_length=255, nullable=False)
    age: int | None = Field(default=None, nullable=True)
    phone: int = Field(sa_type=sa.BigInteger, nullable=False, unique=True)
