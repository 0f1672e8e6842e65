"""
Pydantic schemas for LeetCode payloads and persisted records.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# statusCode values returned by submissionDetails
STATUS_LABELS = {
    10: "Accepted",
    11: "Wrong Answer",
    12: "Memory Limit Exceeded",
    13: "Output Limit Exceeded",
    14: "Time Limit Exceeded",
    15: "Runtime Error",
    16: "Internal Error",
    20: "Compile Error",
}


class RecentSubmission(BaseModel):
    """Entry of recentAcSubmissionList."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="LeetCode submission identifier")
    title: str = Field(..., description="Problem display title")
    title_slug: str = Field(
        ...,
        alias="titleSlug",
        description="URL-safe problem identifier"
    )
    timestamp: int = Field(
        ...,
        description="Acceptance time in epoch seconds"
    )

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("timestamp")
    @classmethod
    def _timestamp_in_range(cls, value: int) -> int:
        try:
            datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"timestamp {value} out of range: {e}") from e
        return value

    @property
    def submitted_at(self) -> datetime:
        """Acceptance time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)


class SubmissionLanguage(BaseModel):
    name: str = ""
    verbose_name: str = Field(default="", alias="verboseName")


class SubmissionDetail(BaseModel):
    """Subset of submissionDetails the job stores."""

    model_config = ConfigDict(populate_by_name=True)

    code: str = Field(..., description="Submitted source code")
    status_code: Optional[int] = Field(default=None, alias="statusCode")
    lang: Optional[SubmissionLanguage] = None

    @property
    def language(self) -> str:
        if not self.lang:
            return ""
        return self.lang.verbose_name or self.lang.name

    @property
    def status(self) -> str:
        if self.status_code is None:
            return ""
        return STATUS_LABELS.get(self.status_code, str(self.status_code))


class QuestionContent(BaseModel):
    """Problem description as returned by question(titleSlug)."""

    content: str = Field(..., description="Problem statement HTML")


class SubmissionRecord(BaseModel):
    """Everything persisted for a single accepted submission."""

    submission_id: str
    question_slug: str
    title: str
    submitted_at: datetime
    language: str
    status: str
    code: str
    description: str

    @classmethod
    def build(
        cls,
        submission: RecentSubmission,
        detail: SubmissionDetail,
        question: QuestionContent
    ) -> "SubmissionRecord":
        return cls(
            submission_id=submission.id,
            question_slug=submission.title_slug,
            title=submission.title,
            submitted_at=submission.submitted_at,
            language=detail.language,
            status=detail.status,
            code=detail.code,
            description=question.content,
        )
