"""
Database Connection Manager.

This module handles the low-level details of connecting to the database
(PostgreSQL in production, SQLite for local runs). It exposes the SQLModel
engine used by the database-backed repositories.
"""

from sqlalchemy.engine import Engine
from sqlmodel import create_engine, SQLModel
from ...config import settings


def make_engine(url: str) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        # FastAPI may touch the connection from a worker thread
        connect_args["check_same_thread"] = False
    # echo=False in production to avoid leaking incident logs
    return create_engine(url, echo=False, connect_args=connect_args)


engine = make_engine(settings.DATABASE_URL)


def init_db(bind: Engine = engine):
    """
    Idempotent initialization.
    Creates tables if they do not exist.
    """
    # Register the table models on SQLModel.metadata before creating
    from . import tables  # noqa: F401

    SQLModel.metadata.create_all(bind)
