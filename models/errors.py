"""Error classes for SocialNet.

Every failure a social graph operation can report derives from
SocialNetworkError so the console shell can recover from all of them
with a single handler.
"""


class SocialNetworkError(Exception):
    """Base exception for social network operations."""

    pass


class ValidationError(SocialNetworkError):
    """Raised when input fails validation before any state is touched."""

    pass


class DuplicateUsername(ValidationError):
    """Raised when signing up with a username that is already taken."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username already taken: {username}")


class InvalidCredentials(SocialNetworkError):
    """Raised when no user matches the given username and password."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Invalid credentials for {username}")


class InvalidSelection(SocialNetworkError):
    """Raised when a 1-based list index is out of range."""

    def __init__(self, index: int, count: int, what: str = "item"):
        self.index = index
        self.count = count
        super().__init__(f"Invalid {what} number {index} (expected 1..{count})")


class UserNotFound(SocialNetworkError):
    """Raised when a username does not exist."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"User not found: {username}")


class SelfRequest(SocialNetworkError):
    """Raised when a user sends a friend request to themselves."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"{username} cannot send a friend request to themselves")


class AlreadyFriends(SocialNetworkError):
    """Raised when sending a friend request to an existing friend."""

    def __init__(self, username: str, other: str):
        self.username = username
        self.other = other
        super().__init__(f"{username} is already friends with {other}")


class CorruptFile(SocialNetworkError):
    """Raised when a persisted record file cannot be decoded.

    Attributes:
        source: File name or label of the data being decoded
        line_number: 1-based line where decoding failed
        reason: What was wrong
        hint: Optional suggestion for getting the file to load
    """

    def __init__(self, source: str, line_number: int, reason: str, hint: str | None = None):
        self.source = source
        self.line_number = line_number
        self.reason = reason
        self.hint = hint
        super().__init__(f"{source} line {line_number}: {reason}")
