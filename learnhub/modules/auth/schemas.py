from pydantic import BaseModel
from typing import List
from learnhub.modules.users.schemas import UserProfile


class CurrentUserResponse(UserProfile):
    permissions: List[str] = []
