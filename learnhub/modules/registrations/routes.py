from fastapi import APIRouter, Depends
from learnhub.core.dependencies import require_permission
from learnhub.database.document_store import DocumentStore, get_document_store
from learnhub.modules.registrations.schemas import RegistrationResponse
from learnhub.modules.registrations.service import RegistrationService
from learnhub.modules.users.schemas import UserProfile
from typing import List

router = APIRouter(prefix="/registrations", tags=["registrations"])


def get_registration_service(store: DocumentStore = Depends(get_document_store)) -> RegistrationService:
    return RegistrationService(store)


@router.get("/mine", response_model=List[RegistrationResponse])
async def list_my_registrations(
    user: UserProfile = Depends(require_permission("registrations:read")),
    service: RegistrationService = Depends(get_registration_service)
):
    """Workshops the calling learner is registered for, newest first"""
    return service.list_registrations_by_learner(user.id)
