from enum import Enum
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class UserRole(str, Enum):
    JOB_SEEKER = "job_seeker"
    RECRUITER = "recruiter"


class UserProfile(BaseModel):
    id: str
    name: str
    email: str
    role: UserRole
    plan_type: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    def has_role(self, role: UserRole) -> bool:
        return self.role == role
