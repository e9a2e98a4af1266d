from fastapi import APIRouter, Depends

from resume_scanner.core.exceptions import NotFoundError
from resume_scanner.models.user import User
from resume_scanner.routers.auth_deps import get_current_user
from resume_scanner.schemas.auth import UserResponse
from resume_scanner.storage import CandidateStore, get_store

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    store: CandidateStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    user = store.get_user_by_id(user_id)
    if not user:
        raise NotFoundError("User")
    return user
