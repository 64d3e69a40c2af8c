"""User account model."""

from dataclasses import dataclass, field
from typing import Iterable

from .errors import InvalidSelection, UserNotFound, ValidationError


@dataclass
class User:
    """Represents an account in the social network.

    Attributes:
        username: Unique account name
        password: Plaintext password
        friends: Confirmed friends in the order they were added, no duplicates
        friend_requests: Usernames with a pending inbound request, no duplicates
    """

    username: str
    password: str
    friends: list[str] = field(default_factory=list)
    friend_requests: list[str] = field(default_factory=list)

    @classmethod
    def create(cls, username: str, password: str) -> "User":
        """Create a new account after validating the credentials.

        Uniqueness of the username is checked by the caller.

        Args:
            username: Non-empty name without whitespace
            password: Non-empty password

        Returns:
            New User with no friends or requests

        Raises:
            ValidationError: If the username or password is unusable
        """
        if not username or any(ch.isspace() for ch in username):
            raise ValidationError("Username must be a single non-empty word")
        if not password:
            raise ValidationError("Password must not be empty")
        return cls(username=username, password=password)

    @property
    def friend_count(self) -> int:
        """Get number of friends."""
        return len(self.friends)

    def authenticate(self, password: str) -> bool:
        """Check a password against the stored one."""
        return self.password == password

    def is_friend_with(self, username: str) -> bool:
        """Check if a user is a friend."""
        return username in self.friends

    def add_friend(self, username: str) -> bool:
        """Add a friend unless already present.

        Returns:
            True if the friend was added
        """
        if username in self.friends:
            return False
        self.friends.append(username)
        return True

    def receive_request(self, from_username: str) -> bool:
        """Queue an inbound friend request, ignoring repeats.

        Returns:
            True if the request was queued
        """
        if from_username in self.friend_requests:
            return False
        self.friend_requests.append(from_username)
        return True

    def accept_request(self, index: int, all_users: Iterable["User"]) -> str:
        """Accept a pending friend request.

        Both users get each other as friends and the request leaves the
        queue. Nothing changes if validation fails.

        Args:
            index: 1-based position in friend_requests
            all_users: Every user in the graph, used to find the requester

        Returns:
            Username of the accepted requester

        Raises:
            InvalidSelection: If index is out of range
            UserNotFound: If the requester no longer exists
        """
        if not 1 <= index <= len(self.friend_requests):
            raise InvalidSelection(index, len(self.friend_requests), "request")

        requester_name = self.friend_requests[index - 1]
        requester = next((u for u in all_users if u.username == requester_name), None)
        if requester is None:
            raise UserNotFound(requester_name)

        self.add_friend(requester_name)
        requester.add_friend(self.username)
        del self.friend_requests[index - 1]
        return requester_name

    def list_friends(self) -> tuple[str, ...]:
        """Get friends in insertion order."""
        return tuple(self.friends)

    def list_requests(self) -> tuple[str, ...]:
        """Get pending request senders in arrival order."""
        return tuple(self.friend_requests)
