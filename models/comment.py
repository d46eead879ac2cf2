from sqlmodel import Field, SQLModel, Relationship
from datetime import datetime, timezone
from typing import TYPE_CHECKING
from .post import PostSummary
from .user import UserName

if TYPE_CHECKING:
    from .post import Post
    from .user import User


class CommentBase(SQLModel):
    body: str


class Comment(CommentBase, table=True):
    id: int | None = Field(default=None, primary_key=True)
    post_id: int = Field(foreign_key="post.id", index=True, ondelete="CASCADE")
    user_id: int = Field(foreign_key="user.id", index=True, ondelete="CASCADE")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)

    post: "Post" = Relationship(back_populates="comments")
    user: "User" = Relationship(back_populates="comments")


class CommentListItem(CommentBase):
    id: int
    post: PostSummary


class CommentPublic(CommentBase):
    id: int
    post_id: int
    user_id: int
    created_at: datetime
    user: UserName
