"""
Database connection (PostgreSQL or SQLite)
"""
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from .config import get_settings

settings = get_settings()


def _begin_immediate(db_engine):
    """
    SQLite has no row locks, so every transaction takes the database write
    lock when it starts. Concurrent booking inserts then run one at a time.
    """
    @event.listens_for(db_engine, "connect")
    def disable_driver_begin(dbapi_connection, connection_record):
        # The sqlite3 driver would otherwise issue its own deferred BEGIN
        dbapi_connection.isolation_level = None

    @event.listens_for(db_engine, "begin")
    def begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_engine(database_url: str, echo: bool = False, sqlite_timeout: float = 5.0):
    """Engine for the given URL with per-backend connection options"""
    if database_url.startswith("sqlite"):
        # SQLite - local development and tests
        db_engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False, "timeout": sqlite_timeout},
            echo=echo
        )
        _begin_immediate(db_engine)
        return db_engine
    # PostgreSQL - production
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        echo=echo
    )


engine = create_db_engine(settings.DATABASE_URL, echo=settings.DEBUG)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for the models
Base = declarative_base()


def get_db():
    """
    Dependency yielding a database session
    Usage:
        @router.get("/items")
        def read_items(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Create every table defined by the models
    """
    from . import models  # noqa: F401  registers the tables on Base.metadata

    Base.metadata.create_all(bind=engine)
