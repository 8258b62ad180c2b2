"""
ProjectHub Backend
GraphQL API for projects and their challenges
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
