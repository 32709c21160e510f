"""Schema management for the demo tables."""

import sqlalchemy as sa
from loguru import logger
from sqlalchemy import Engine
from sqlmodel import SQLModel

from src.crud_demo.entities.core.user import UserTable


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    @property
    def tables(self) -> list:
        return [UserTable.__table__]

    def tables_exist(self) -> bool:
        """Whether every demo table is present. Never creates anything."""
        inspector = sa.inspect(self._engine)
        return all(inspector.has_table(table.name) for table in self.tables)

    def reset_fixture(self) -> None:
        """Drop and recreate the demo tables, destroying every stored row.

        This is the demo bootstrap step, not a migration; nothing on the
        normal startup path calls it.
        """
        names = ", ".join(table.name for table in self.tables)
        logger.warning("Resetting demo tables: {}", names)
        SQLModel.metadata.drop_all(self._engine, tables=self.tables)
        SQLModel.metadata.create_all(self._engine, tables=self.tables)
        logger.info("Recreated demo tables: {}", names)
