from fastapi import APIRouter, Depends, Query
from learnhub.core.dependencies import require_permission
from learnhub.database.document_store import DocumentStore, get_document_store
from learnhub.modules.progress.schemas import ProgressResponse, PointsTotalResponse, LeaderboardEntry
from learnhub.modules.progress.service import ProgressService
from learnhub.modules.users.schemas import UserProfile
from typing import List

router = APIRouter(prefix="/progress", tags=["progress"])


def get_progress_service(store: DocumentStore = Depends(get_document_store)) -> ProgressService:
    return ProgressService(store)


@router.get("/mine", response_model=List[ProgressResponse])
async def list_my_progress(
    user: UserProfile = Depends(require_permission("progress:read")),
    service: ProgressService = Depends(get_progress_service)
):
    return service.list_progress_by_learner(user.id)


@router.get("/mine/points", response_model=PointsTotalResponse)
async def get_my_points(
    user: UserProfile = Depends(require_permission("progress:read")),
    service: ProgressService = Depends(get_progress_service)
):
    """Total points over all of the learner's progress records"""
    return PointsTotalResponse(learner_id=user.id, total_points=service.get_total_points(user.id))


@router.get("/leaderboard", response_model=List[LeaderboardEntry])
async def get_leaderboard(
    limit: int = Query(10, ge=1, le=100),
    user: UserProfile = Depends(require_permission("progress:leaderboard")),
    service: ProgressService = Depends(get_progress_service)
):
    return service.get_leaderboard(limit)
