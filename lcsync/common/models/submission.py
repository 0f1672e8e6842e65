"""
Submission model for storing accepted LeetCode submissions.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .question import LeetCodeQuestion


class LeetCodeSubmission(Base):
    """
    Accepted submission with its source code.

    submission_id is LeetCode's identifier and is unique; inserting the
    same submission twice is rejected by the database.
    """

    __tablename__ = "leetcode_submissions"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True
    )
    submission_id: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        index=True
    )
    question_slug: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("leetcode_questions.slug", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False
    )
    language: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False)
    code: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    question: Mapped["LeetCodeQuestion"] = relationship(
        "LeetCodeQuestion",
        back_populates="submissions"
    )

    def __repr__(self) -> str:
        return (
            f"<LeetCodeSubmission(submission_id={self.submission_id}, "
            f"question_slug={self.question_slug})>"
        )
