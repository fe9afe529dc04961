from fastapi import APIRouter, Depends
from learnhub.core.dependencies import require_permission, check_workshop_owner
from learnhub.database.document_store import DocumentStore, get_document_store
from learnhub.modules.lessons.service import LessonService
from learnhub.modules.progress.schemas import ProgressResponse
from learnhub.modules.reflections.schemas import ReflectionResponse, ReflectionReviewRequest
from learnhub.modules.reflections.service import ReflectionService
from learnhub.modules.users.schemas import UserProfile
from learnhub.modules.workshops.service import WorkshopService
from typing import List

router = APIRouter(prefix="/reflections", tags=["reflections"])


def get_reflection_service(store: DocumentStore = Depends(get_document_store)) -> ReflectionService:
    return ReflectionService(store)


@router.get("/mine", response_model=List[ReflectionResponse])
async def list_my_reflections(
    user: UserProfile = Depends(require_permission("reflections:submit")),
    service: ReflectionService = Depends(get_reflection_service)
):
    """Reflections submitted by the calling learner, newest first"""
    return service.list_reflections_by_learner(user.id)


@router.post("/{reflection_id}/review", response_model=ProgressResponse)
async def review_reflection(
    reflection_id: str,
    review: ReflectionReviewRequest,
    user: UserProfile = Depends(require_permission("reflections:review")),
    service: ReflectionService = Depends(get_reflection_service),
    store: DocumentStore = Depends(get_document_store)
):
    """Approve (+50 points) or reject (-30 points) a reflection (workshop creator only)"""
    reflection = service.get_reflection_by_id(reflection_id)
    lesson = LessonService(store).get_lesson_by_id(reflection.lesson_id)
    check_workshop_owner(WorkshopService(store).get_workshop_by_id(lesson.workshop_id), user)
    return service.review_reflection(reflection_id, review.decision, user.id)
