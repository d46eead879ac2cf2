from fastapi import APIRouter

from models import User, UserPublic
from dependencies import CurrentUserDep

router = APIRouter()


@router.get("/me", response_model=UserPublic)
async def get_users_me(current_user: CurrentUserDep) -> User:
    """Get current user's profile information"""
    return current_user
