from typing import Annotated
from fastapi import APIRouter, Depends, Query
import logging

from models import PostCreate, PostUpdate, ControllerResponse
from dependencies import ControllerDep, CurrentUserDep, rate_limiter, render
from core.config import get_settings

router = APIRouter()
settings = get_settings()
logger = logging.getLogger(__name__)

PostLimiter = Depends(rate_limiter("posts", settings.POSTS_PER_MINUTE))
VoteLimiter = Depends(rate_limiter("votes", settings.VOTES_PER_MINUTE))


@router.get("", response_model=ControllerResponse)
async def list_posts(
    controller: ControllerDep,
    limit: Annotated[int, Query(ge=0)] = settings.DEFAULT_PAGE_SIZE,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """List posts for the dashboard, newest first"""
    return render(controller.list_posts(limit, offset))


@router.post("", response_model=ControllerResponse, dependencies=[PostLimiter])
@router.post("/", response_model=ControllerResponse, include_in_schema=False, dependencies=[PostLimiter])
async def create_post(
    post: PostCreate,
    controller: ControllerDep,
    current_user: CurrentUserDep,
):
    """Create a new post owned by the current user"""
    result = controller.create_post(
        current_user.id,
        title=post.title,
        body=post.body,
        location=post.location,
        capacity=post.capacity,
        file=post.file,
        tags=post.tags,
    )
    if result.status == 200:
        logger.info(f"User {current_user.username} created post {result.data.result.id}")
    return render(result)


@router.get("/{post_id}", response_model=ControllerResponse)
async def get_post(post_id: int, controller: ControllerDep):
    """Get a specific post by ID"""
    return render(controller.get_post(post_id))


@router.patch("/{post_id}", response_model=ControllerResponse)
async def update_post(
    post_id: int,
    post: PostUpdate,
    controller: ControllerDep,
    current_user: CurrentUserDep,
):
    """Update the supplied fields of a post owned by the current user"""
    return render(controller.update_post(
        current_user.id,
        post_id,
        title=post.title,
        body=post.body,
        location=post.location,
        capacity=post.capacity,
        file=post.file,
        tags=post.tags,
    ))


@router.delete("/{post_id}", status_code=204, response_model=None)
async def delete_post(
    post_id: int,
    controller: ControllerDep,
    current_user: CurrentUserDep,
):
    """Delete a post owned by the current user"""
    return render(controller.delete_post(current_user.id, post_id))


@router.post("/{post_id}/upvote", status_code=204, response_model=None, dependencies=[VoteLimiter])
async def upvote_post(post_id: int, controller: ControllerDep, current_user: CurrentUserDep):
    """Add one to the post's feedback score"""
    return render(controller.upvote(post_id))


@router.post("/{post_id}/downvote", status_code=204, response_model=None, dependencies=[VoteLimiter])
async def downvote_post(post_id: int, controller: ControllerDep, current_user: CurrentUserDep):
    """Report the post, taking one off its feedback score"""
    return render(controller.downvote(post_id))


@router.get("/{post_id}/comments", response_model=ControllerResponse)
async def get_post_comments(
    post_id: int,
    controller: ControllerDep,
    limit: Annotated[int, Query(ge=0)] = settings.DEFAULT_PAGE_SIZE,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """List the comments on a post, newest first"""
    return render(controller.get_comments(post_id, limit, offset))
