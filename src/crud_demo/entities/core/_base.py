from datetime import UTC, datetime

import sqlalchemy as sa
from pydantic import AwareDatetime, BaseModel
from pydantic import Field as PydanticField
from sqlalchemy.types import TypeDecorator
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(UTC)


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetime stored as naive UTC.

    Naive values are rejected on the way in; values read back always carry
    ``UTC``, whatever the backend returns.
    """

    impl = sa.DateTime
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError(f"Naive datetime {value!r} is not allowed; attach a timezone")
        return value.astimezone(UTC).replace(tzinfo=None)

    def process_result_value(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class Entity(BaseModel):
    """Base entity class; the identifier is assigned by the database on insert."""

    id: int | None = PydanticField(
        default=None, description="Database-generated identifier"
    )

    created_at: AwareDatetime = PydanticField(default_factory=utcnow)
    updated_at: AwareDatetime = PydanticField(default_factory=utcnow)


class EntityTable(SQLModel, table=False):
    """Base table with an autoincrement integer key and audit timestamps."""

    id: int | None = Field(
        default=None,
        primary_key=True,
        description="Database-generated identifier",
    )

    created_at: datetime = Field(
        default_factory=utcnow, sa_type=UTCDateTime, nullable=False
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_type=UTCDateTime,
        nullable=False,
        sa_column_kwargs={
            # Applied to ORM flushes and to bulk UPDATE statements alike
            "onupdate": utcnow,
        },
    )
