from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class MoveDirection(str, Enum):
    UP = "up"
    DOWN = "down"


class LessonCreate(BaseModel):
    title: str = Field(..., min_length=3)
    content: Optional[str] = Field(None, min_length=20)
    content_uri: Optional[str] = None
    requires_reflection: bool = False
    estimated_duration: int = Field(..., ge=1)  # minutes


class LessonUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=3)
    content: Optional[str] = Field(None, min_length=20)
    content_uri: Optional[str] = None
    requires_reflection: Optional[bool] = None
    estimated_duration: Optional[int] = Field(None, ge=1)


class LessonMoveRequest(BaseModel):
    direction: MoveDirection


class LessonResponse(BaseModel):
    id: str
    workshop_id: str
    title: str
    content: Optional[str] = None
    content_uri: Optional[str] = None
    requires_reflection: bool = False
    order: int
    estimated_duration: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
