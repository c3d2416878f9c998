"""Database package: declarative base and engine wrapper."""

from .base import Base
from .session import Database

__all__ = ["Base", "Database"]
