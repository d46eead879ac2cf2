from .user import User, UserCreate, UserPublic, UserName
from .post import Post, PostCreate, PostUpdate, PostPublic, PostSummary
from .comment import Comment, CommentListItem, CommentPublic
from .response import BasicResponse, ControllerResponse, ResponseData
from .auth import TokenData

__all__ = [
    "User", "UserCreate", "UserPublic", "UserName",
    "Post", "PostCreate", "PostUpdate", "PostPublic", "PostSummary",
    "Comment", "CommentListItem", "CommentPublic",
    "BasicResponse", "ControllerResponse", "ResponseData",
    "TokenData",
]
