from .base import Base
from .connection import Database

__all__ = ["Base", "Database"]
