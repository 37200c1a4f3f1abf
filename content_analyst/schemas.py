# content_analyst/schemas.py
from enum import Enum
from pydantic import BaseModel, field_validator
from typing import Optional


class AnalysisStatus(str, Enum):
    PENDING = "pending"
    ANALYZING = "analyzing"
    COMPLETED = "completed"
    FAILED = "failed"


# analysis_status values a row may hold when the orchestrator picks it up
OPEN_STATUSES = [AnalysisStatus.PENDING.value, AnalysisStatus.ANALYZING.value]


class ProjectStatus(str, Enum):
    NEW = "new"
    IN_REVIEW = "in-review"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"
    ON_HOLD = "on-hold"


class SubmitIdeaRequest(BaseModel):
    title: str
    description: Optional[str] = None
    raw_content: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title cannot be empty")
        return v


class AnalyzeRequest(BaseModel):
    idea_id: int


class ProjectStatusUpdate(BaseModel):
    project_status: ProjectStatus
