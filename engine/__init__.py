"""Social graph engine module."""

from .session import Session
from .integrity import IntegrityReport, build_friendship_graph, check_integrity
from .social_graph import SocialGraph, NO_POSTS_MESSAGE

__all__ = [
    "Session",
    "IntegrityReport",
    "build_friendship_graph",
    "check_integrity",
    "SocialGraph",
    "NO_POSTS_MESSAGE",
]
