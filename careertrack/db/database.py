from contextlib import contextmanager

from loguru import logger
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from careertrack.db.tables import metadata


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY clauses unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create the SQLAlchemy engine.

    PostgreSQL gets a connection pool:
    pool_size=5: maintain 5 connections ready
    max_overflow=10: allow 10 extra connections under load

    SQLite (used by tests) shares one connection across threads so an
    in-memory database survives between sessions, and has foreign key
    enforcement switched on.
    """
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=echo,
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(database_url, pool_size=5, max_overflow=10, pool_pre_ping=True, echo=echo)


class Database:
    """
    Owns the engine and session factory.

    Built once by the application factory and handed to each repository;
    nothing in the package reaches for a module-level connection.
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.engine = build_engine(database_url, echo=echo)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @contextmanager
    def session(self):
        """
        Context manager for database sessions. Everything executed inside
        the block is one transaction.

        Usage:
            with database.session() as db:
                db.execute(select(users))
        """
        session = self.session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_tables(self) -> None:
        metadata.create_all(self.engine)

    def ping(self) -> bool:
        """
        Test if the database is reachable.
        Returns True if connection successful, False otherwise.
        """
        try:
            with self.session() as db:
                return db.execute(text("SELECT 1")).scalar() == 1
        except Exception as e:
            logger.warning("Database connection failed: {}", e)
            return False

    def execute_raw_sql(self, sql: str, params: dict = None) -> list:
        """
        Execute raw SQL and return results as list of dicts.
        Used for aggregate queries that span several tables.
        """
        with self.session() as db:
            result = db.execute(text(sql), params or {})
            columns = result.keys()
            return [dict(zip(columns, row)) for row in result.fetchall()]

    def dispose(self) -> None:
        self.engine.dispose()
