from sqlmodel import Field, SQLModel, Relationship
from pydantic import field_validator
from datetime import datetime, timezone
from typing import List, Optional, TYPE_CHECKING
from .user import UserName

if TYPE_CHECKING:
    from .user import User
    from .comment import Comment


class PostBase(SQLModel):
    title: str
    body: str
    location: str
    capacity: int
    file: str | None = Field(default=None)  # thumbnail url
    tags: str | None = Field(default=None)  # comma separated


class Post(PostBase, table=True):
    id: int | None = Field(default=None, primary_key=True)
    user_id: int | None = Field(default=None, foreign_key="user.id", index=True, ondelete="CASCADE")
    feedback_score: int = Field(default=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)

    # Relationships
    user: "User" = Relationship(back_populates="posts")
    comments: List["Comment"] = Relationship(
        back_populates="post",
        sa_relationship_kwargs={"cascade": "all, delete"}
    )


class PostPublic(PostBase):
    id: int
    user_id: int
    feedback_score: int
    created_at: datetime
    user: Optional[UserName] = None


class PostSummary(SQLModel):
    """Post fields shown next to a comment in a listing"""
    id: int
    title: str
    body: str
    created_at: datetime


class PostCreate(SQLModel):
    # Every field is optional here so a missing one is reported as
    # "Missing fields." with a 400 instead of a schema error.
    title: str | None = None
    body: str | None = None
    location: str | None = None
    capacity: int | None = None
    file: str | None = None
    tags: str | None = None

    @field_validator("capacity", mode="before")
    @classmethod
    def blank_capacity_is_missing(cls, value):
        # The client form sends capacity as text, "" when left empty
        if isinstance(value, str) and not value.strip():
            return None
        return value


class PostUpdate(PostCreate):
    pass
