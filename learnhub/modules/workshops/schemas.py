from enum import Enum
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from datetime import datetime


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class WorkshopSchedule(BaseModel):
    start_date: datetime
    end_date: Optional[datetime] = None
    is_open: bool = True

    @model_validator(mode="after")
    def end_after_start(self):
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


def _clean_skills(skills: Optional[List[str]]) -> Optional[List[str]]:
    """Strip, drop blanks and de-duplicate while keeping the given order."""
    if skills is None:
        return None
    cleaned = []
    for skill in skills:
        skill = skill.strip()
        if skill and skill not in cleaned:
            cleaned.append(skill)
    return cleaned


class WorkshopCreate(BaseModel):
    title: str = Field(..., min_length=5)
    description: str = Field(..., min_length=20)
    schedule: WorkshopSchedule
    skills_addressed: List[str] = []
    difficulty: Difficulty = Difficulty.BEGINNER

    @field_validator("skills_addressed")
    @classmethod
    def clean_skills(cls, v):
        return _clean_skills(v)


class WorkshopUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=5)
    description: Optional[str] = Field(None, min_length=20)
    schedule: Optional[WorkshopSchedule] = None
    skills_addressed: Optional[List[str]] = None
    difficulty: Optional[Difficulty] = None

    @field_validator("skills_addressed")
    @classmethod
    def clean_skills(cls, v):
        return _clean_skills(v)


class WorkshopResponse(BaseModel):
    id: str
    title: str
    description: str
    creator_id: str
    schedule: WorkshopSchedule
    skills_addressed: List[str] = []
    difficulty: Difficulty
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
