"""
SQLAlchemy base and engine construction for the local guest store
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """Create an engine; SQLite connections are shared across threads."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args)
