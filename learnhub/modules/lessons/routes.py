from fastapi import APIRouter, Depends
from learnhub.core.dependencies import require_permission, check_workshop_owner, check_workshop_access
from learnhub.database.document_store import DocumentStore, get_document_store
from learnhub.modules.lessons.schemas import LessonUpdate, LessonResponse, LessonMoveRequest
from learnhub.modules.lessons.service import LessonService
from learnhub.modules.reflections.schemas import ReflectionCreate, ReflectionResponse, ReflectionSubmission
from learnhub.modules.reflections.service import ReflectionService
from learnhub.modules.users.schemas import UserProfile
from learnhub.modules.workshops.service import WorkshopService
from typing import List

router = APIRouter(prefix="/lessons", tags=["lessons"])


def get_lesson_service(store: DocumentStore = Depends(get_document_store)) -> LessonService:
    return LessonService(store)


def get_reflection_service(store: DocumentStore = Depends(get_document_store)) -> ReflectionService:
    return ReflectionService(store)


def _owned_lesson(lesson_id: str, user: UserProfile, store: DocumentStore) -> LessonResponse:
    lesson = LessonService(store).get_lesson_by_id(lesson_id)
    check_workshop_owner(WorkshopService(store).get_workshop_by_id(lesson.workshop_id), user)
    return lesson


@router.get("/{lesson_id}", response_model=LessonResponse)
async def get_lesson(
    lesson_id: str,
    user: UserProfile = Depends(require_permission("lessons:read")),
    service: LessonService = Depends(get_lesson_service),
    store: DocumentStore = Depends(get_document_store)
):
    """Get lesson (registered learners or the workshop creator)"""
    lesson = service.get_lesson_by_id(lesson_id)
    check_workshop_access(WorkshopService(store).get_workshop_by_id(lesson.workshop_id), user, store)
    return lesson


@router.put("/{lesson_id}", response_model=LessonResponse)
async def update_lesson(
    lesson_id: str,
    lesson_data: LessonUpdate,
    user: UserProfile = Depends(require_permission("lessons:update")),
    service: LessonService = Depends(get_lesson_service),
    store: DocumentStore = Depends(get_document_store)
):
    _owned_lesson(lesson_id, user, store)
    return service.update_lesson(lesson_id, lesson_data)


@router.delete("/{lesson_id}", status_code=204)
async def delete_lesson(
    lesson_id: str,
    user: UserProfile = Depends(require_permission("lessons:delete")),
    service: LessonService = Depends(get_lesson_service),
    store: DocumentStore = Depends(get_document_store)
):
    """Delete lesson with its reflections and progress; remaining lessons are renumbered"""
    _owned_lesson(lesson_id, user, store)
    service.delete_lesson(lesson_id)
    return None


@router.post("/{lesson_id}/move", response_model=List[LessonResponse])
async def move_lesson(
    lesson_id: str,
    move_request: LessonMoveRequest,
    user: UserProfile = Depends(require_permission("lessons:reorder")),
    service: LessonService = Depends(get_lesson_service),
    store: DocumentStore = Depends(get_document_store)
):
    """Move a lesson one step up or down; returns the workshop's lessons in their new order"""
    _owned_lesson(lesson_id, user, store)
    return service.move_lesson(lesson_id, move_request.direction)


@router.post("/{lesson_id}/reflections", response_model=ReflectionSubmission, status_code=201)
async def submit_reflection(
    lesson_id: str,
    reflection_data: ReflectionCreate,
    user: UserProfile = Depends(require_permission("reflections:submit")),
    lesson_service: LessonService = Depends(get_lesson_service),
    service: ReflectionService = Depends(get_reflection_service),
    store: DocumentStore = Depends(get_document_store)
):
    """Submit a reflection for a lesson of a workshop the learner is registered for"""
    lesson = lesson_service.get_lesson_by_id(lesson_id)
    check_workshop_access(WorkshopService(store).get_workshop_by_id(lesson.workshop_id), user, store)
    return service.submit_reflection(lesson_id, user.id, reflection_data.content, user.name)


@router.get("/{lesson_id}/reflections", response_model=List[ReflectionResponse])
async def list_lesson_reflections(
    lesson_id: str,
    user: UserProfile = Depends(require_permission("reflections:review")),
    service: ReflectionService = Depends(get_reflection_service),
    store: DocumentStore = Depends(get_document_store)
):
    """Reflections submitted for a lesson, newest first (workshop creator only)"""
    _owned_lesson(lesson_id, user, store)
    return service.list_reflections_by_lesson(lesson_id)
