from learnhub.database import tables
from learnhub.database.document_store import DocumentStore
from learnhub.modules.users.schemas import UserProfile
from typing import Optional


class UserService:
    def __init__(self, store: DocumentStore):
        self.store = store

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """Profile record joined to an identity-provider uid; None when absent."""
        record = self.store.get(tables.USERS, user_id)
        if not record:
            return None
        return UserProfile(**record)
