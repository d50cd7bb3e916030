"""
Database configuration and session management.
"""

from typing import Optional
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import NullPool

from app.config import settings


def build_engine(database_url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """
    Create a SQLAlchemy engine.
    SQLite connections are shared with the threadpool FastAPI runs sync code in.
    """
    url = database_url or settings.database_url
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(
        url,
        poolclass=NullPool,
        echo=settings.database_echo if echo is None else echo,
        connect_args=connect_args,
    )


# Create SQLAlchemy engine
engine = build_engine()

# Create SessionLocal class
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)

# Create declarative base
Base = declarative_base()

