from fastapi import APIRouter, Depends, Response, status
from learnhub.core.dependencies import require_permission, check_workshop_owner, check_workshop_access
from learnhub.database.document_store import DocumentStore, get_document_store
from learnhub.modules.lessons.schemas import LessonCreate, LessonResponse
from learnhub.modules.lessons.service import LessonService
from learnhub.modules.registrations.schemas import RegistrationResponse, RegistrationResult
from learnhub.modules.registrations.service import RegistrationService
from learnhub.modules.users.schemas import UserProfile
from learnhub.modules.workshops.schemas import WorkshopCreate, WorkshopUpdate, WorkshopResponse
from learnhub.modules.workshops.service import WorkshopService
from typing import List
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workshops", tags=["workshops"])


def get_workshop_service(store: DocumentStore = Depends(get_document_store)) -> WorkshopService:
    return WorkshopService(store)


def get_lesson_service(store: DocumentStore = Depends(get_document_store)) -> LessonService:
    return LessonService(store)


def get_registration_service(store: DocumentStore = Depends(get_document_store)) -> RegistrationService:
    return RegistrationService(store)


@router.post("", response_model=WorkshopResponse, status_code=201)
async def create_workshop(
    workshop_data: WorkshopCreate,
    user: UserProfile = Depends(require_permission("workshops:create")),
    service: WorkshopService = Depends(get_workshop_service)
):
    """Create a new workshop owned by the calling recruiter"""
    return service.create_workshop(workshop_data, user.id)


@router.get("", response_model=List[WorkshopResponse])
async def list_open_workshops(
    user: UserProfile = Depends(require_permission("workshops:read")),
    service: WorkshopService = Depends(get_workshop_service)
):
    """Workshops open for registration, newest first"""
    return service.list_open_workshops()


@router.get("/mine", response_model=List[WorkshopResponse])
async def list_my_workshops(
    user: UserProfile = Depends(require_permission("workshops:create")),
    service: WorkshopService = Depends(get_workshop_service)
):
    """Workshops created by the calling recruiter"""
    return service.list_workshops_by_creator(user.id)


@router.get("/{workshop_id}", response_model=WorkshopResponse)
async def get_workshop(
    workshop_id: str,
    user: UserProfile = Depends(require_permission("workshops:read")),
    service: WorkshopService = Depends(get_workshop_service)
):
    return service.get_workshop_by_id(workshop_id)


@router.put("/{workshop_id}", response_model=WorkshopResponse)
async def update_workshop(
    workshop_id: str,
    workshop_data: WorkshopUpdate,
    user: UserProfile = Depends(require_permission("workshops:update")),
    service: WorkshopService = Depends(get_workshop_service)
):
    """Update workshop (creator only)"""
    check_workshop_owner(service.get_workshop_by_id(workshop_id), user)
    return service.update_workshop(workshop_id, workshop_data)


@router.delete("/{workshop_id}", status_code=204)
async def delete_workshop(
    workshop_id: str,
    user: UserProfile = Depends(require_permission("workshops:delete")),
    service: WorkshopService = Depends(get_workshop_service)
):
    """Delete workshop with its lessons, reflections, progress and registrations (creator only)"""
    check_workshop_owner(service.get_workshop_by_id(workshop_id), user)
    service.delete_workshop(workshop_id)
    return None


@router.get("/{workshop_id}/lessons", response_model=List[LessonResponse])
async def list_workshop_lessons(
    workshop_id: str,
    user: UserProfile = Depends(require_permission("lessons:read")),
    workshop_service: WorkshopService = Depends(get_workshop_service),
    lesson_service: LessonService = Depends(get_lesson_service),
    store: DocumentStore = Depends(get_document_store)
):
    """Lessons in order; learners must be registered, recruiters must own the workshop"""
    check_workshop_access(workshop_service.get_workshop_by_id(workshop_id), user, store)
    return lesson_service.list_lessons_by_workshop(workshop_id)


@router.post("/{workshop_id}/lessons", response_model=LessonResponse, status_code=201)
async def create_lesson(
    workshop_id: str,
    lesson_data: LessonCreate,
    user: UserProfile = Depends(require_permission("lessons:create")),
    workshop_service: WorkshopService = Depends(get_workshop_service),
    lesson_service: LessonService = Depends(get_lesson_service)
):
    """Append a lesson to the workshop (creator only)"""
    check_workshop_owner(workshop_service.get_workshop_by_id(workshop_id), user)
    return lesson_service.create_lesson(workshop_id, lesson_data)


@router.post("/{workshop_id}/register", response_model=RegistrationResult, status_code=201)
async def register_for_workshop(
    workshop_id: str,
    response: Response,
    user: UserProfile = Depends(require_permission("registrations:create")),
    service: RegistrationService = Depends(get_registration_service)
):
    """Register the calling learner; repeating the call returns the same registration"""
    result = service.register_for_workshop(workshop_id, user.id, user.name)
    if result.already_registered:
        response.status_code = status.HTTP_200_OK
    return result


@router.get("/{workshop_id}/registrations", response_model=List[RegistrationResponse])
async def list_workshop_registrations(
    workshop_id: str,
    user: UserProfile = Depends(require_permission("registrations:list")),
    workshop_service: WorkshopService = Depends(get_workshop_service),
    service: RegistrationService = Depends(get_registration_service)
):
    """Learners registered for a workshop (creator only)"""
    check_workshop_owner(workshop_service.get_workshop_by_id(workshop_id), user)
    return service.list_registrations_by_workshop(workshop_id)
