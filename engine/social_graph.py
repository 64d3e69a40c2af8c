"""In-memory social graph: accounts, friendships, posts and comments."""

from typing import Any

from loguru import logger

from models import (
    AlreadyFriends,
    Comment,
    DuplicateUsername,
    InvalidCredentials,
    InvalidSelection,
    Post,
    SelfRequest,
    User,
    UserNotFound,
)
from data.logger import ActivityLogger, LogEventType
from data.state_manager import StateManager
from .integrity import IntegrityReport, check_integrity
from .session import Session

NO_POSTS_MESSAGE = "No posts available."


class SocialGraph:
    """Orchestrates every operation on users and posts.

    Users are kept in signup order and keyed by their unique username.
    Posts are kept in creation order and addressed by 1-based position.
    All operations validate before mutating, so a raised error leaves the
    graph unchanged.
    """

    def __init__(
        self,
        users: list[User] | None = None,
        posts: list[Post] | None = None,
        activity_log: ActivityLogger | None = None,
    ):
        """Initialize social graph.

        Args:
            users: Existing users, in order
            posts: Existing posts, in order
            activity_log: Optional audit log for graph events
        """
        self.users: list[User] = users if users is not None else []
        self.posts: list[Post] = posts if posts is not None else []
        self.activity_log = activity_log

    def _record(self, event_type: LogEventType, data: dict[str, Any] | None = None) -> None:
        if self.activity_log is not None:
            self.activity_log.log(event_type, data)

    # Lookups

    def find_user(self, username: str) -> User | None:
        """Get a user by exact username, or None."""
        for user in self.users:
            if user.username == username:
                return user
        return None

    def get_user(self, username: str) -> User:
        """Get a user by exact username.

        Raises:
            UserNotFound: If no such user exists
        """
        user = self.find_user(username)
        if user is None:
            raise UserNotFound(username)
        return user

    def _resolve(self, session: Session) -> User:
        return self.get_user(session.username)

    def get_post(self, post_index: int) -> Post:
        """Get a post by 1-based index.

        Raises:
            InvalidSelection: If the index is out of range
        """
        if not 1 <= post_index <= len(self.posts):
            raise InvalidSelection(post_index, len(self.posts), "post")
        return self.posts[post_index - 1]

    # Accounts

    def signup(self, username: str, password: str) -> User:
        """Create a new account.

        Args:
            username: Desired username (case-sensitive)
            password: Plaintext password

        Returns:
            The new User

        Raises:
            DuplicateUsername: If the username is taken
            ValidationError: If the credentials are unusable
        """
        if self.find_user(username) is not None:
            raise DuplicateUsername(username)

        user = User.create(username, password)
        self.users.append(user)
        logger.debug(f"Signed up {username}")
        self._record(LogEventType.USER_SIGNUP, {"username": username})
        return user

    def login(self, username: str, password: str) -> Session:
        """Authenticate and open a session.

        Raises:
            InvalidCredentials: If username and password do not match an account
        """
        user = self.find_user(username)
        if user is None or not user.authenticate(password):
            logger.debug(f"Failed login for {username}")
            self._record(LogEventType.LOGIN_FAILED, {"username": username})
            raise InvalidCredentials(username)

        logger.debug(f"{username} logged in")
        self._record(LogEventType.LOGIN, {"username": username})
        return Session(username=user.username)

    def logout(self, session: Session) -> None:
        """End a session."""
        logger.debug(f"{session.username} logged out")
        self._record(LogEventType.LOGOUT, {"username": session.username})

    # Content

    def create_post(self, session: Session, content: str) -> Post:
        """Publish a post as the session's user."""
        author = self._resolve(session)
        post = Post.create(author.username, content)
        self.posts.append(post)

        if self.activity_log is not None:
            self.activity_log.log_post_created(author.username, len(self.posts), content)
        return post

    def add_comment(self, session: Session, post_index: int, content: str) -> Comment:
        """Comment on a post as the session's user.

        Args:
            session: Active session
            post_index: 1-based post number as displayed
            content: Comment text

        Returns:
            The new Comment

        Raises:
            InvalidSelection: If post_index is out of range
        """
        author = self._resolve(session)
        post = self.get_post(post_index)
        comment = post.add_comment(author.username, content)

        if self.activity_log is not None:
            self.activity_log.log_comment_added(author.username, post_index, post.comment_count)
        return comment

    def view_posts(self) -> list[str]:
        """Render every post with its comments, in creation order."""
        return [post.render(i) for i, post in enumerate(self.posts, start=1)]

    def render_feed(self) -> str:
        """Render all posts as one block, or a notice when there are none."""
        if not self.posts:
            return NO_POSTS_MESSAGE
        return "\n".join(self.view_posts())

    # Friendships

    def send_friend_request(self, session: Session, target_username: str) -> None:
        """Send a friend request from the session's user.

        Raises:
            SelfRequest: If target is the sender
            UserNotFound: If target does not exist
            AlreadyFriends: If the two users are already friends
        """
        sender = self._resolve(session)
        if target_username == sender.username:
            raise SelfRequest(sender.username)

        target = self.get_user(target_username)
        if sender.is_friend_with(target_username):
            raise AlreadyFriends(sender.username, target_username)

        if target.receive_request(sender.username):
            self._record(
                LogEventType.FRIEND_REQUEST_SENT,
                {"from": sender.username, "to": target_username},
            )
        else:
            logger.debug(f"{sender.username} already has a pending request to {target_username}")

    def list_friend_requests(self, session: Session) -> tuple[str, ...]:
        """Get pending inbound requests of the session's user."""
        return self._resolve(session).list_requests()

    def accept_friend_request(self, session: Session, index: int) -> str:
        """Accept the index-th pending request of the session's user.

        Returns:
            Username of the new friend

        Raises:
            InvalidSelection: If index is out of range
            UserNotFound: If the requester no longer exists
        """
        user = self._resolve(session)
        requester = user.accept_request(index, self.users)
        self._record(
            LogEventType.FRIEND_REQUEST_ACCEPTED,
            {"user": user.username, "requester": requester},
        )
        return requester

    def list_friends(self, session: Session) -> tuple[str, ...]:
        """Get friends of the session's user."""
        return self._resolve(session).list_friends()

    # Persistence

    def check_integrity(self) -> IntegrityReport:
        """Report friendship data that breaks symmetry or references missing users."""
        return check_integrity(self.users)

    @classmethod
    def load(
        cls,
        store: StateManager,
        activity_log: ActivityLogger | None = None,
        verify: bool = True,
    ) -> "SocialGraph":
        """Load a graph from persisted state.

        Args:
            store: State manager owning the record files
            activity_log: Optional audit log for graph events
            verify: Log integrity problems as warnings

        Returns:
            Loaded SocialGraph

        Raises:
            CorruptFile: If a record file cannot be decoded
        """
        users, posts = store.read()
        graph = cls(users, posts, activity_log=activity_log)
        summary = graph.get_statistics()
        logger.debug(f"Graph statistics after load: {summary}")

        if verify:
            report = graph.check_integrity()
            for problem in report.describe():
                logger.warning(f"Integrity: {problem}")
            if not report.is_clean:
                summary["integrity"] = report.to_dict()

        if activity_log is not None:
            activity_log.log_state(LogEventType.STATE_LOADED, summary)
        return graph

    def save(self, store: StateManager) -> None:
        """Write the whole graph through a state manager."""
        store.write(self.users, self.posts)
        if self.activity_log is not None:
            self.activity_log.log_state(LogEventType.STATE_SAVED, self.get_statistics())

    def get_statistics(self) -> dict[str, Any]:
        """Get summary counts of the graph."""
        return {
            "users": len(self.users),
            "posts": len(self.posts),
            "comments": sum(p.comment_count for p in self.posts),
            "friendships": sum(u.friend_count for u in self.users) // 2,
            "pending_requests": sum(len(u.friend_requests) for u in self.users),
        }
