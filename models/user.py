from sqlmodel import Field, SQLModel, Relationship
from datetime import datetime, timezone
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .post import Post
    from .comment import Comment


class UserBase(SQLModel):
    username: str = Field(index=True, unique=True)
    email: str = Field(index=True)
    first_name: str | None = Field(default=None)
    last_name: str | None = Field(default=None)


class User(UserBase, table=True):
    id: int | None = Field(default=None, primary_key=True)
    password: str
    disabled: bool | None = Field(default=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    posts: List["Post"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"cascade": "all, delete"}
    )
    comments: List["Comment"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"cascade": "all, delete"}
    )


class UserName(SQLModel):
    """Name fields embedded in posts and comments"""
    first_name: str | None = None
    last_name: str | None = None
    username: str


class UserPublic(UserBase):
    id: int
    created_at: datetime


class UserCreate(UserBase):
    password: str
