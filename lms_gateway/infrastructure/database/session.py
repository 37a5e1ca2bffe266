"""Database session management with connection pooling"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from lms_gateway.config import settings


def build_engine(database_url: str) -> Engine:
    """Create an engine; SQLite gets foreign key enforcement, servers get a pool"""
    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, connect_args={"check_same_thread": False})
        event.listen(engine, "connect", enable_sqlite_foreign_keys)
        return engine

    # Recycle after 1 hour to avoid stale connections
    return create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=10,
        max_overflow=10,
        pool_recycle=3600,
    )


def enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores FOREIGN KEY clauses (and ON DELETE CASCADE) unless asked per connection"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Dependency injection for database sessions"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
