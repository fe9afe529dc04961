"""
Core dependencies for route protection and permission checking
"""

from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from supabase import Client

from learnhub.config.permissions_config import get_role_permissions
from learnhub.core.exceptions import PermissionDenied
from learnhub.database.document_store import DocumentStore, get_document_store
from learnhub.database.supabase_client import get_supabase
from learnhub.modules.auth.service import AuthService
from learnhub.modules.registrations.service import RegistrationService
from learnhub.modules.users.schemas import UserProfile, UserRole
from typing import List
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    store: DocumentStore = Depends(get_document_store)
) -> AuthService:
    return AuthService(supabase, store)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> UserProfile:
    """Resolve the bearer token to the caller's profile (uid + role)"""
    return auth_service.get_current_user(credentials.credentials)


def get_user_permissions(user: UserProfile) -> List[str]:
    return get_role_permissions(user.role.value)


def require_permission(required_permission: str):
    """Factory function to create permission check dependency"""
    def check_permission(user: UserProfile = Depends(get_current_user)) -> UserProfile:
        """Dependency to check if the caller's role grants the required permission"""
        if required_permission not in get_user_permissions(user):
            logger.info(f"User {user.id} ({user.role.value}) denied {required_permission}")
            raise PermissionDenied(f"Insufficient permissions. Required: {required_permission}")
        return user
    return check_permission


def check_workshop_owner(workshop, user: UserProfile):
    """Allow only the recruiter who created the workshop"""
    if workshop.creator_id != user.id:
        raise PermissionDenied("You must be the creator of this workshop to perform this action")
    return user


def check_workshop_access(workshop, user: UserProfile, store: DocumentStore) -> UserProfile:
    """Recruiters must own the workshop; learners must be registered for it"""
    if user.has_role(UserRole.RECRUITER):
        return check_workshop_owner(workshop, user)
    if not RegistrationService(store).is_registered(workshop.id, user.id):
        raise PermissionDenied("You must register for this workshop before viewing its content")
    return user
