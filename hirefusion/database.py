from __future__ import annotations
import logging
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from .config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Build the process-wide engine (and its pool) on first use."""
    database_url = settings.DATABASE_URL
    if not database_url:
        raise RuntimeError("DATABASE_URL is not defined in the environment or .env")

    connect_args = {}
    url = make_url(database_url)
    if url.drivername.startswith("sqlite"):
        connect_args = {"check_same_thread": False}

    engine = create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)
    logger.info("Database engine created for %s", url.render_as_string(hide_password=True))
    return engine


@lru_cache(maxsize=1)
def get_sessionmaker() -> sessionmaker:
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, future=True)


def init_db() -> None:
    # models must be imported so their tables are registered on Base.metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def dispose_engine() -> None:
    if get_engine.cache_info().currsize:
        get_engine().dispose()
        logger.info("Database engine disposed")


def get_db():
    db = get_sessionmaker()()
    try:
        yield db
    finally:
        db.close()
