"""Sequential create/read/update/delete walkthrough."""

from typing import Any

from loguru import logger
from pydantic import BaseModel, Field

from src.crud_demo.core.exceptions import DatabaseConnectionError
from src.crud_demo.core.services.database import DbManageService, DbSessionService, connect
from src.crud_demo.demo.seed import MIN_AGE, NEW_PHONE, TARGET_NAME, seed_users
from src.crud_demo.entities.core.user import User, UserRepository, UserTable
from src.crud_demo.runtime.config.config_data import ConfigData, DemoConfig


class DemoReport(BaseModel):
    """What each step of a demo run produced."""

    connected: bool = False
    created: list[User] = Field(default_factory=list)
    all_users: list[User] = Field(default_factory=list)
    names: list[dict[str, Any]] = Field(default_factory=list)
    filtered_names: list[str] = Field(default_factory=list)
    updated_count: int = 0
    deleted_count: int = 0
    remaining: list[User] = Field(default_factory=list)


class DemoRunner:
    """Runs the demo steps in order against one database service.

    Only the connection check is guarded. Whether a failed check stops the
    run is governed by ``DemoConfig.abort_on_connection_failure``; by default
    the run continues and the first real query fails loudly instead.
    """

    def __init__(self, db: DbSessionService, config: DemoConfig | None = None):
        self._db = db
        self._config = config or DemoConfig()
        self._manage = DbManageService(db.engine)

    def check_connection(self) -> bool:
        try:
            self._db.authenticate()
        except Exception as e:
            logger.error("Unable to connect with database: {}", e)
            if self._config.abort_on_connection_failure:
                raise DatabaseConnectionError(f"Unable to connect with database: {e}") from e
            return False
        logger.info("Connection established")
        return True

    def reset_storage(self) -> None:
        self._manage.reset_fixture()

    def insert(self, user: User) -> User:
        with self._db.session_scope() as session:
            return UserRepository(session).create(user)

    def query_all(self) -> list[User]:
        with self._db.session_scope() as session:
            return UserRepository(session).find_all()

    def query_projected(self, fields: list[str]) -> list[dict[str, Any]]:
        with self._db.session_scope() as session:
            return UserRepository(session).project(fields)

    def query_filtered(self, *criteria) -> list[User]:
        with self._db.session_scope() as session:
            return UserRepository(session).find_all(*criteria)

    def update(self, values: dict[str, Any], *criteria) -> int:
        with self._db.session_scope() as session:
            return UserRepository(session).update(values, *criteria)

    def delete(self, *criteria) -> int:
        with self._db.session_scope() as session:
            return UserRepository(session).delete(*criteria)

    def run(self) -> DemoReport:
        report = DemoReport()
        report.connected = self.check_connection()

        self.reset_storage()

        report.created = [self.insert(user) for user in seed_users()]
        for user in report.created:
            logger.info("Created user: {}", user)

        report.all_users = self.query_all()
        logger.info("All users: {}", report.all_users)

        report.names = self.query_projected(["name"])
        logger.info("Names: {}", report.names)

        filtered = self.query_filtered(UserTable.age > MIN_AGE)
        report.filtered_names = [user.name for user in filtered]
        logger.info("Where condition result: {}", ", ".join(report.filtered_names))

        report.updated_count = self.update({"phone": NEW_PHONE}, UserTable.name == TARGET_NAME)
        logger.info("Updated users: {}", report.updated_count)

        report.deleted_count = self.delete(UserTable.name == TARGET_NAME)
        logger.info("Deleted users: {}", report.deleted_count)

        report.remaining = self.query_all()
        return report


def run_demo(config: ConfigData, engine=None) -> DemoReport:
    """Connect, run every demo step, and always release the connection."""
    with connect(config.database, engine=engine) as db:
        return DemoRunner(db, config.demo).run()
