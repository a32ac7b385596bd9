# backend/mathnotes/database.py
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .utils.logging import db_logger

Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """Create an engine for the blob table. In-memory SQLite shares one connection"""
    db_logger.info(f"Connecting to database: {database_url}")

    kwargs = {"echo": False}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url:
            kwargs["poolclass"] = StaticPool

    return create_engine(database_url, **kwargs)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create tables if needed and return a session factory bound to the engine"""
    # Registers the blob table on Base.metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
