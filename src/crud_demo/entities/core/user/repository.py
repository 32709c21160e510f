"""User data-access layer."""

from collections.abc import Mapping, Sequence
from typing import Any

import sqlalchemy as sa
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import Session, func, select

from src.crud_demo.entities.core.user.entity import User
from src.crud_demo.entities.core.user.table import UserTable

Predicate = ColumnElement[bool]


class UserRepository:
    """Data-access layer for users.

    Predicates are SQLAlchemy boolean expressions built from ``UserTable``
    columns (``UserTable.age > 20``) so filtering always happens in the
    database. Writes are flushed, not committed; the caller's session scope
    owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @staticmethod
    def _column(field: str) -> sa.Column:
        columns = UserTable.__table__.columns
        if field not in columns:
            raise ValueError(
                f"Unknown user field '{field}'; expected one of {sorted(columns.keys())}"
            )
        return columns[field]

    def create(self, user: User) -> User:
        """Insert ``user`` and return it with its generated id and timestamps."""
        row = UserTable(**user.model_dump(exclude_none=True))
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return User.model_validate(row, from_attributes=True)

    def get(self, user_id: int) -> User | None:
        row = self._session.get(UserTable, user_id)
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def get_by_name(self, name: str) -> User | None:
        statement = select(UserTable).where(UserTable.name == name)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def find_all(self, *criteria: Predicate) -> list[User]:
        """Return every user matching all ``criteria``, ordered by id."""
        statement = select(UserTable).where(*criteria).order_by(UserTable.id)
        rows = self._session.exec(statement).all()
        return [User.model_validate(row, from_attributes=True) for row in rows]

    def project(self, fields: Sequence[str], *criteria: Predicate) -> list[dict[str, Any]]:
        """Return only ``fields`` of each matching user, as plain dicts."""
        if not fields:
            raise ValueError("At least one field must be selected")
        columns = [self._column(field) for field in fields]

        statement = sa.select(*columns).where(*criteria).order_by(UserTable.id)
        result = self._session.exec(statement)
        return [dict(row) for row in result.mappings().all()]

    def count(self, *criteria: Predicate) -> int:
        statement = select(func.count()).select_from(UserTable).where(*criteria)
        return self._session.exec(statement).one()

    def update(self, values: Mapping[str, Any], *criteria: Predicate) -> int:
        """Set ``values`` on every user matching ``criteria``.

        Returns:
            int: Number of rows the database reports as affected.

        Raises:
            ValueError: If no predicate is given, or a field is unknown or the key.
        """
        if not criteria:
            raise ValueError("update requires at least one predicate")
        if not values:
            raise ValueError("update requires at least one value")
        for field in values:
            if self._column(field).primary_key:
                raise ValueError(f"Field '{field}' cannot be updated")

        statement = sa.update(UserTable).where(*criteria).values(**values)
        result = self._session.exec(statement)
        # onupdate columns are not synchronized into loaded rows
        self._session.expire_all()
        return result.rowcount

    def delete(self, *criteria: Predicate) -> int:
        """Delete every user matching ``criteria`` and return how many went."""
        if not criteria:
            raise ValueError("delete requires at least one predicate")

        statement = sa.delete(UserTable).where(*criteria)
        result = self._session.exec(statement)
        return result.rowcount
