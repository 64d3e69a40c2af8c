"""Enumerations for SocialNet."""

from enum import Enum, IntEnum


class RecordFormat(str, Enum):
    """How text fields are written to the flat record files."""

    ESCAPED = "escaped"
    PLAIN = "plain"

    def __str__(self) -> str:
        return self.value


class MainMenuChoice(IntEnum):
    """Options of the logged-out menu."""

    SIGNUP = 1
    LOGIN = 2
    EXIT = 3

    @property
    def label(self) -> str:
        return self.name.title()


class DashboardChoice(IntEnum):
    """Options of the logged-in dashboard."""

    CREATE_POST = 1
    VIEW_POSTS = 2
    ADD_COMMENT = 3
    SEND_FRIEND_REQUEST = 4
    HANDLE_FRIEND_REQUESTS = 5
    VIEW_FRIENDS = 6
    LOGOUT = 7

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()
