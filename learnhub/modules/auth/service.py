import hashlib
import time
import logging
from supabase import Client
from fastapi import HTTPException
from typing import Dict

from learnhub.core.exceptions import DocumentStoreError, StoreFailure
from learnhub.database.document_store import DocumentStore
from learnhub.modules.users.schemas import UserProfile
from learnhub.modules.users.service import UserService

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def clear_auth_cache():
    _AUTH_USER_CACHE.clear()


class AuthService:
    def __init__(self, supabase: Client, store: DocumentStore):
        self.supabase = supabase
        self.users = UserService(store)

    def _resolve_uid(self, token: str) -> str:
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            logger.error(f"Error resolving auth token: {e}")
            raise HTTPException(status_code=401, detail="Authentication failed")
        if not user_response or not user_response.user:
            raise HTTPException(status_code=401, detail="Invalid or expired token")
        return user_response.user.id

    def get_current_user(self, token: str) -> UserProfile:
        """Resolve a bearer token to the caller's profile. Uses short TTL cache to reduce auth API calls."""
        cache_key = hashlib.sha256(token.encode()).hexdigest()
        now = time.monotonic()
        if cache_key in _AUTH_USER_CACHE:
            profile, expiry = _AUTH_USER_CACHE[cache_key]
            if now < expiry:
                return profile
            del _AUTH_USER_CACHE[cache_key]

        uid = self._resolve_uid(token)
        try:
            profile = self.users.get_profile(uid)
        except DocumentStoreError as e:
            logger.error(f"Error fetching profile for {uid}: {e}")
            raise StoreFailure("load user profile") from e
        if profile is None:
            logger.warning(f"No user profile found for uid {uid}")
            raise HTTPException(status_code=401, detail="No user profile found")

        if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
            _AUTH_USER_CACHE[cache_key] = (profile, now + _AUTH_CACHE_TTL_SEC)
        return profile
