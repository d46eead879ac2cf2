import logging

from fastapi import status
from prometheus_client import Counter
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, func, select

from core.config import get_settings
from models import (
    Comment, CommentListItem, CommentPublic, ControllerResponse, ResponseData,
    Post, PostPublic
)

settings = get_settings()
logger = logging.getLogger(__name__)

post_votes_total = Counter(
    "post_votes_total",
    "Votes applied to posts",
    ["direction"]
)


class CommentController:
    """Post and comment operations mapped to HTTP shaped results.

    Each method runs one or two ORM operations on the session the controller
    was built with and reports the outcome as a ``ControllerResponse`` rather
    than raising, so routers only have to render it. Owner checks compare the
    acting user's id with the stored ``user_id`` and nothing else.
    """

    def __init__(self, session: Session):
        self.session = session

    def _page_size(self, limit: int) -> int:
        return max(0, min(limit, settings.MAX_PAGE_SIZE))

    def _post_not_found(self, post_id: int) -> ControllerResponse:
        return ControllerResponse(
            status=status.HTTP_404_NOT_FOUND,
            data=ResponseData(message=f"Post {post_id} could not be found"),
        )

    def get_comments(self, post_id: int, limit: int, offset: int) -> ControllerResponse:
        """Get a page of the comments on a post, newest first.

        ``limit`` is capped at the maximum page size. ``count`` holds the
        total number of comments on the post, not the size of the page.
        """
        post = self.session.get(Post, post_id)
        if not post:
            return self._post_not_found(post_id)

        statement = (
            select(Comment)
            .where(Comment.post_id == post_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .offset(offset)
            .limit(self._page_size(limit))
        )
        comments = self.session.exec(statement).all()
        count = self.session.exec(
            select(func.count()).select_from(Comment).where(Comment.post_id == post_id)
        ).one()

        return ControllerResponse(
            status=status.HTTP_200_OK,
            data=ResponseData(
                result=[CommentListItem.model_validate(comment) for comment in comments],
                count=count,
            ),
        )

    def get_comment(self, comment_id: int, user_id: int | None = None) -> ControllerResponse:
        """Get a single comment with its author's name.

        When ``user_id`` is given the comment must also belong to that user.
        """
        statement = select(Comment).where(Comment.id == comment_id)
        if user_id is not None:
            statement = statement.where(Comment.user_id == user_id)
        comment = self.session.exec(statement).first()

        if not comment:
            return ControllerResponse(
                status=status.HTTP_404_NOT_FOUND,
                data=ResponseData(message=f"Comment {comment_id} could not be found"),
            )
        return ControllerResponse(
            status=status.HTTP_200_OK,
            data=ResponseData(result=CommentPublic.model_validate(comment)),
        )

    def get_post(self, post_id: int) -> ControllerResponse:
        post = self.session.get(Post, post_id)
        if not post:
            return self._post_not_found(post_id)
        return ControllerResponse(
            status=status.HTTP_200_OK,
            data=ResponseData(result=PostPublic.model_validate(post)),
        )

    def list_posts(self, limit: int, offset: int) -> ControllerResponse:
        """Get a page of posts for the dashboard, newest first"""
        statement = (
            select(Post)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(offset)
            .limit(self._page_size(limit))
        )
        posts = self.session.exec(statement).all()
        count = self.session.exec(select(func.count()).select_from(Post)).one()

        return ControllerResponse(
            status=status.HTTP_200_OK,
            data=ResponseData(
                result=[PostPublic.model_validate(post) for post in posts],
                count=count,
            ),
        )

    def delete_post(self, user_id: int, post_id: int) -> ControllerResponse:
        post = self.session.get(Post, post_id)

        if not post:
            return ControllerResponse(
                status=status.HTTP_404_NOT_FOUND,
                data=ResponseData(message=f"Post {post_id} could not be deleted."),
            )
        elif post.user_id != user_id:
            return ControllerResponse(
                status=status.HTTP_401_UNAUTHORIZED,
                data=ResponseData(message="Unauthorized to delete the post."),
            )

        self.session.delete(post)
        self.session.commit()
        return ControllerResponse(status=status.HTTP_204_NO_CONTENT)

    def _vote(self, post_id: int, amount: int) -> ControllerResponse:
        """Add ``amount`` (1 or -1) to the post's feedback score.

        Any authenticated caller may vote, any number of times.
        """
        if amount not in (1, -1):
            raise ValueError(f"Vote amount must be 1 or -1, got {amount}")

        post = self.session.get(Post, post_id)
        if not post:
            return self._post_not_found(post_id)

        try:
            post.feedback_score += amount
            self.session.add(post)
            self.session.commit()
            self.session.refresh(post)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Could not change vote for: {post_id}: {str(e)}")
            action = "upvote" if amount == 1 else "report"
            return ControllerResponse(
                status=status.HTTP_400_BAD_REQUEST,
                data=ResponseData(message=f"Could not {action} post: {post_id}"),
            )

        post_votes_total.labels(direction="up" if amount == 1 else "down").inc()
        return ControllerResponse(
            status=status.HTTP_204_NO_CONTENT,
            data=ResponseData(result=PostPublic.model_validate(post)),
        )

    def upvote(self, post_id: int) -> ControllerResponse:
        return self._vote(post_id, 1)

    def downvote(self, post_id: int) -> ControllerResponse:
        return self._vote(post_id, -1)

    def create_post(
        self,
        user_id: int,
        title: str | None = None,
        body: str | None = None,
        location: str | None = None,
        capacity: int | None = None,
        file: str | None = None,
        tags: str | None = None,
    ) -> ControllerResponse:
        if not title or not body or not location or capacity is None:
            return ControllerResponse(
                status=status.HTTP_400_BAD_REQUEST,
                data=ResponseData(message="Missing fields."),
            )

        post = Post(
            title=title,
            body=body,
            location=location,
            capacity=capacity,
            file=file or None,
            tags=tags or None,
            user_id=user_id,
        )
        try:
            self.session.add(post)
            self.session.commit()
            self.session.refresh(post)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Could not create post for user {user_id}: {str(e)}")
            return ControllerResponse(
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
                data=ResponseData(message="Could not create the new post"),
            )

        return ControllerResponse(
            status=status.HTTP_200_OK,
            data=ResponseData(result=PostPublic.model_validate(post)),
        )

    def update_post(
        self,
        current_user_id: int,
        post_id: int,
        title: str | None = None,
        body: str | None = None,
        location: str | None = None,
        capacity: int | None = None,
        file: str | None = None,
        tags: str | None = None,
    ) -> ControllerResponse:
        """Merge the supplied fields over the stored post.

        A field left as ``None`` or an empty string keeps its stored value.
        """
        post = self.session.get(Post, post_id)

        if post and post.user_id == current_user_id:
            try:
                post.title = title or post.title
                post.body = body or post.body
                post.location = location or post.location
                post.capacity = capacity if capacity is not None else post.capacity
                post.file = file or post.file
                post.tags = tags or post.tags
                self.session.add(post)
                self.session.commit()
                self.session.refresh(post)
                return ControllerResponse(
                    status=status.HTTP_200_OK,
                    data=ResponseData(result=PostPublic.model_validate(post)),
                )
            except SQLAlchemyError as e:
                self.session.rollback()
                logger.error(f"Could not update post {post_id}: {str(e)}")
                return ControllerResponse(
                    status=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    data=ResponseData(message="Could not update the post."),
                )
        elif post:
            return ControllerResponse(
                status=status.HTTP_401_UNAUTHORIZED,
                data=ResponseData(message="Not authorized to edit this post."),
            )
        return ControllerResponse(
            status=status.HTTP_404_NOT_FOUND,
            data=ResponseData(message="Could not find post."),
        )
