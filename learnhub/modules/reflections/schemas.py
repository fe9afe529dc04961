from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from learnhub.modules.progress.schemas import ProgressResponse

MIN_REFLECTION_LENGTH = 20


class ReviewDecision(str, Enum):
    APPROVED = "approved"
    REJECTED = "rejected"


class ReflectionCreate(BaseModel):
    content: str = Field(..., min_length=MIN_REFLECTION_LENGTH)


class ReflectionResponse(BaseModel):
    id: str
    lesson_id: str
    learner_id: str
    learner_name: str
    content: str
    submitted_at: Optional[datetime] = None
    reviewed: bool = False

    class Config:
        from_attributes = True


class ReflectionSubmission(BaseModel):
    reflection: ReflectionResponse
    progress: ProgressResponse


class ReflectionReviewRequest(BaseModel):
    decision: ReviewDecision
