"""
Database models package.

Exports all SQLAlchemy models for use across the application.
"""

from .base import Base
from .question import LeetCodeQuestion
from .submission import LeetCodeSubmission

__all__ = [
    "Base",
    "LeetCodeQuestion",
    "LeetCodeSubmission",
]
