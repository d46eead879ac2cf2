from fastapi import APIRouter

from models import ControllerResponse
from dependencies import ControllerDep, render

router = APIRouter()


@router.get("/{comment_id}", response_model=ControllerResponse)
async def get_comment(comment_id: int, controller: ControllerDep, user_id: int | None = None):
    """Get a comment with its author's name, optionally restricted to one author"""
    return render(controller.get_comment(comment_id, user_id))
