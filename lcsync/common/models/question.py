"""
Question model for storing LeetCode problem descriptions.
"""

from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .submission import LeetCodeSubmission


class LeetCodeQuestion(Base):
    """
    LeetCode problem, one row per slug.

    The description is the raw HTML content returned by LeetCode and is
    replaced whenever the slug is observed again.
    """

    __tablename__ = "leetcode_questions"

    slug: Mapped[str] = mapped_column(
        String(255),
        primary_key=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    submissions: Mapped[list["LeetCodeSubmission"]] = relationship(
        "LeetCodeSubmission",
        back_populates="question"
    )

    def __repr__(self) -> str:
        return f"<LeetCodeQuestion(slug={self.slug})>"
