"""
Database module for ProjectHub backend
"""

from .connection import get_async_session, init_database, reset_database

__all__ = ["get_async_session", "init_database", "reset_database"]
