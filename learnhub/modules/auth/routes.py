from fastapi import APIRouter, Depends
from learnhub.core.dependencies import get_current_user, get_user_permissions
from learnhub.modules.auth.schemas import CurrentUserResponse
from learnhub.modules.users.schemas import UserProfile

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=CurrentUserResponse)
async def get_me(current_user: UserProfile = Depends(get_current_user)):
    """Get current authenticated user and their permissions (for frontend UI)."""
    return CurrentUserResponse(
        **current_user.model_dump(),
        permissions=get_user_permissions(current_user)
    )
