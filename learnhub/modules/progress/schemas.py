from enum import Enum
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ReflectionStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ProgressResponse(BaseModel):
    id: str
    lesson_id: str
    learner_id: str
    reflection_id: str
    reflection_status: ReflectionStatus
    points: int = 0
    reviewed_by: str = ""
    reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PointsTotalResponse(BaseModel):
    learner_id: str
    total_points: int


class LeaderboardEntry(BaseModel):
    learner_id: str
    total_points: int
    reflections: int
