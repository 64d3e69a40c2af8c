"""Data models for SocialNet."""

from .enums import (
    RecordFormat,
    MainMenuChoice,
    DashboardChoice,
)
from .errors import (
    SocialNetworkError,
    ValidationError,
    DuplicateUsername,
    InvalidCredentials,
    InvalidSelection,
    UserNotFound,
    SelfRequest,
    AlreadyFriends,
    CorruptFile,
)
from .user import User
from .post import Post, Comment

__all__ = [
    # Enums
    "RecordFormat",
    "MainMenuChoice",
    "DashboardChoice",
    # Errors
    "SocialNetworkError",
    "ValidationError",
    "DuplicateUsername",
    "InvalidCredentials",
    "InvalidSelection",
    "UserNotFound",
    "SelfRequest",
    "AlreadyFriends",
    "CorruptFile",
    # User
    "User",
    # Post
    "Post",
    "Comment",
]
