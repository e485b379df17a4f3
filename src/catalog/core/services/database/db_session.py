"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import Engine, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from src.catalog.core.errors import CatalogError, InternalError
from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import get_config

SERIALIZABLE = "SERIALIZABLE"


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """Turn on FK enforcement (and with it ON DELETE CASCADE) for every SQLite connection."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class DbSessionService:
    def __init__(self, engine: Engine | None = None):
        """Initialize the shared database engine and session factory.

        An already configured engine can be passed in, which is how tests bind
        the service to an in-memory database.
        """
        if engine is None:
            engine = self._create_engine(get_config())
        self._engine = engine

        if self._engine.dialect.name == "sqlite":
            enable_sqlite_foreign_keys(self._engine)

    def _create_engine(self, main_config: ConfigData) -> Engine:
        db_config = main_config.database
        logger.info("Configuring database engine for environment: {}", main_config.app.environment)

        engine_kwargs = {
            "echo": False,
            "echo_pool": False,
            "pool_pre_ping": True,
            "connect_args": self._get_connect_args(main_config),
        }

        if db_config.is_sqlite:
            if ":memory:" in db_config.url or db_config.url.rstrip("/") == "sqlite:":
                engine_kwargs["poolclass"] = StaticPool
            if main_config.app.environment == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider PostgreSQL for better performance and reliability."
                )
        else:
            engine_kwargs.update(
                {
                    "pool_size": db_config.pool_size,
                    "max_overflow": db_config.max_overflow,
                    "pool_timeout": db_config.pool_timeout,
                    "pool_recycle": db_config.pool_recycle,
                }
            )

        engine = create_engine(db_config.connection_string, **engine_kwargs)
        if main_config.app.environment == "production":
            logger.info(
                "Database engine initialized",
                pool_size=db_config.pool_size,
                max_overflow=db_config.max_overflow,
                pool_timeout=db_config.pool_timeout,
                pool_recycle=db_config.pool_recycle,
            )
        return engine

    def _get_connect_args(self, config: ConfigData) -> dict:
        """Get database-specific connection arguments."""
        if config.database.is_sqlite:
            return {
                "check_same_thread": False,  # sessions are used from FastAPI's thread pool
                "timeout": 20,  # lock timeout
            }
        if "postgresql" in config.database.url:
            return {
                "application_name": f"{config.app.environment}_catalog",
                "connect_timeout": 30,
            }
        return {}

    @property
    def engine(self) -> Engine:
        return self._engine

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,
            autoflush=True,
        )

    @contextmanager
    def transaction(self, isolation_level: str | None = None) -> Iterator[Session]:
        """Run a unit of work in one transaction and yield its session.

        The yielded session is the transaction handle: every repository used
        inside the block must be built from it. The block commits on success;
        any exception rolls back everything written so far. Store failures are
        re-raised as ``InternalError``.
        """
        db = self.get_session()
        try:
            if isolation_level:
                db.connection(execution_options={"isolation_level": isolation_level})
            yield db
            db.commit()
        except CatalogError as e:
            db.rollback()
            logger.info(
                "Transaction rolled back: {} ({})",
                e.message,
                e.kind.value,
            )
            raise
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                "Database transaction failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise InternalError("database operation failed") from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except SQLAlchemyError as e:
            logger.error(
                "Database health check failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False

    def get_pool_status(self) -> dict:
        """Get current connection pool status for monitoring."""
        pool = self._engine.pool
        return {
            "size": getattr(pool, "size", lambda: 0)(),
            "checked_in": getattr(pool, "checkedin", lambda: 0)(),
            "checked_out": getattr(pool, "checkedout", lambda: 0)(),
            "overflow": getattr(pool, "overflow", lambda: 0)(),
        }
