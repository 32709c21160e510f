"""Database engine and session factory used by the demo."""

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import Engine, StaticPool, text
from sqlalchemy.engine import make_url
from sqlmodel import Session, create_engine

from src.crud_demo.runtime.config.config_data import DatabaseConfig


class DbSessionService:
    """Owns one engine and hands out sessions bound to it.

    Use :func:`connect` rather than constructing this directly so the
    engine is always disposed.
    """

    def __init__(self, config: DatabaseConfig | None = None, engine: Engine | None = None):
        if engine is None:
            if config is None:
                raise ValueError("Either a database config or an engine is required")
            engine = self._create_engine(config)
        self._engine = engine
        self._closed = False

    @staticmethod
    def _create_engine(config: DatabaseConfig) -> Engine:
        url = make_url(config.connection_string)
        logger.info(
            "Initializing database engine for {}://{}/{}",
            url.drivername,
            url.host or "",
            url.database or "",
        )

        engine_kwargs = {
            "connect_args": DbSessionService._get_connect_args(url.get_backend_name()),
        }

        if url.get_backend_name() == "sqlite":
            if url.database in (None, "", ":memory:"):
                # Keep a single in-memory database alive across sessions
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_pre_ping"] = True

        return create_engine(url, **engine_kwargs)

    @staticmethod
    def _get_connect_args(backend: str) -> dict:
        """Get database-specific connection arguments."""
        connect_args = {}

        if backend == "mysql":
            connect_args.update({"connect_timeout": 10, "charset": "utf8mb4"})
        elif backend == "sqlite":
            connect_args.update({"check_same_thread": False})

        return connect_args

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def closed(self) -> bool:
        return self._closed

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(self._engine, expire_on_commit=False)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Commit on success, roll back and re-raise on failure, always close."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(
                "Database transaction failed: {}: {}", type(e).__name__, e
            )
            raise
        finally:
            db.close()

    def authenticate(self) -> None:
        """Round-trip a trivial query; raises if the database is unreachable."""
        with self._engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            self.authenticate()
            return True
        except Exception as e:
            logger.error(
                "Database health check failed: {}: {}", type(e).__name__, e
            )
            return False

    def close(self) -> None:
        """Dispose the engine and every pooled connection."""
        if self._closed:
            return
        self._engine.dispose()
        self._closed = True
        logger.info("Database connection closed")


@contextmanager
def connect(config: DatabaseConfig | None = None, engine: Engine | None = None) -> Iterator[DbSessionService]:
    """Scoped acquisition of the database: the engine is disposed on every exit path."""
    service = DbSessionService(config=config, engine=engine)
    try:
        yield service
    finally:
        service.close()
