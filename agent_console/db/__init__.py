"""Database package — async SQLAlchemy engine, override table, repository, and store."""
from .engine import build_engine
from .base import Base

__all__ = ["build_engine", "Base"]
