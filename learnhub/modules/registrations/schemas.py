from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class RegistrationResponse(BaseModel):
    id: str
    workshop_id: str
    learner_id: str
    learner_name: str
    registered_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RegistrationResult(BaseModel):
    id: str
    already_registered: bool
