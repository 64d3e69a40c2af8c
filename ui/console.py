"""Interactive text menus driving the social graph."""

from enum import IntEnum
from typing import Callable

from loguru import logger

from models import (
    AlreadyFriends,
    DuplicateUsername,
    InvalidCredentials,
    InvalidSelection,
    SelfRequest,
    SocialNetworkError,
    UserNotFound,
    ValidationError,
)
from models.enums import DashboardChoice, MainMenuChoice
from .state import SessionState


class _EndOfInput(Exception):
    """Input stream closed."""


class ConsoleShell:
    """Text menu loop: main menu while logged out, dashboard while logged in."""

    def __init__(
        self,
        state: SessionState,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        save_on_exit: bool = True,
    ):
        """Initialize shell.

        Args:
            state: Session state wrapping the graph and its store
            input_fn: Reads one line after showing a prompt
            output_fn: Writes one message
            save_on_exit: Save the graph when leaving the main menu
        """
        self.state = state
        self.graph = state.graph
        self._input = input_fn
        self._output = output_fn
        self.save_on_exit = save_on_exit

    def _say(self, message: str) -> None:
        self._output(message)

    def _ask(self, prompt: str) -> str:
        try:
            return self._input(prompt)
        except EOFError as e:
            raise _EndOfInput() from e

    def _ask_int(self, prompt: str) -> int | None:
        try:
            return int(self._ask(prompt).strip())
        except ValueError:
            return None

    def _ask_choice(self, menu: type[IntEnum]) -> IntEnum | None:
        value = self._ask_int("Your choice: ")
        try:
            return menu(value)
        except ValueError:
            return None

    def _show_menu(self, title: str, menu: type[IntEnum]) -> None:
        self._say(f"\n{title}")
        for option in menu:
            self._say(f"{option.value}. {option.label}")

    def _report_save_error(self, error: Exception) -> None:
        logger.error(f"Save failed: {error}")
        self._say(f"Could not save data: {error}")

    def _persist(self) -> None:
        try:
            self.state.persist()
        except (SocialNetworkError, OSError) as e:
            self._report_save_error(e)

    def run(self) -> int:
        """Run the main menu until Exit or end of input.

        Returns:
            Process exit code
        """
        try:
            self._main_loop()
        except _EndOfInput:
            logger.debug("Input closed, exiting")
            if self.state.is_logged_in():
                self._logout()
            self._say("Goodbye!")

        if self.save_on_exit:
            self._persist()
        return 0

    def _main_loop(self) -> None:
        while True:
            self._show_menu("Welcome to Social Network", MainMenuChoice)
            choice = self._ask_choice(MainMenuChoice)

            if choice == MainMenuChoice.SIGNUP:
                self.signup()
            elif choice == MainMenuChoice.LOGIN:
                if self.login():
                    self.dashboard()
            elif choice == MainMenuChoice.EXIT:
                self._say("Goodbye!")
                return
            else:
                self._say("Invalid choice!")

    def signup(self) -> None:
        username = self._ask("Signup - Enter username: ").strip()
        password = self._ask("Enter password: ").strip()
        try:
            self.graph.signup(username, password)
        except DuplicateUsername:
            self._say("Username already taken!")
            return
        except ValidationError as e:
            self._say(str(e))
            return
        self._say("Signup successful!")

    def login(self) -> bool:
        username = self._ask("Login - Enter username: ").strip()
        password = self._ask("Enter password: ").strip()
        try:
            self.state.login(username, password)
        except InvalidCredentials:
            self._say("Invalid credentials!")
            return False
        self._say(f"Welcome, {username}!")
        return True

    def dashboard(self) -> None:
        """Dashboard loop for the logged-in user; returns after logout."""
        handlers = {
            DashboardChoice.CREATE_POST: self.create_post,
            DashboardChoice.VIEW_POSTS: self.view_posts,
            DashboardChoice.ADD_COMMENT: self.add_comment,
            DashboardChoice.SEND_FRIEND_REQUEST: self.send_friend_request,
            DashboardChoice.HANDLE_FRIEND_REQUESTS: self.handle_friend_requests,
            DashboardChoice.VIEW_FRIENDS: self.view_friends,
        }

        while self.state.is_logged_in():
            self._show_menu("Dashboard:", DashboardChoice)
            choice = self._ask_choice(DashboardChoice)

            if choice == DashboardChoice.LOGOUT:
                self._say("Logging out...")
                self._logout()
            elif choice in handlers:
                handlers[choice]()
            else:
                self._say("Invalid choice!")

    def _logout(self) -> None:
        try:
            self.state.logout()
        except (SocialNetworkError, OSError) as e:
            self._report_save_error(e)

    def create_post(self) -> None:
        content = self._ask("Enter your post content: ")
        self.graph.create_post(self.state.require_session(), content)
        self._say("Post created.")

    def view_posts(self) -> None:
        self._say(self.graph.render_feed())

    def add_comment(self) -> None:
        if not self.graph.posts:
            self._say("No posts available.")
            return

        post_index = self._ask_int("Enter post number to comment on: ")
        try:
            self.graph.get_post(post_index if post_index is not None else 0)
        except InvalidSelection:
            self._say("Invalid post number!")
            return

        content = self._ask("Enter your comment: ")
        self.graph.add_comment(self.state.require_session(), post_index, content)
        self._say("Comment added.")

    def send_friend_request(self) -> None:
        target = self._ask("Enter username to send request: ").strip()
        try:
            self.graph.send_friend_request(self.state.require_session(), target)
        except SelfRequest:
            self._say("Cannot send request to yourself.")
        except AlreadyFriends:
            self._say("Already friends.")
        except UserNotFound:
            self._say("User not found.")
        else:
            self._say("Request sent.")

    def handle_friend_requests(self) -> None:
        session = self.state.require_session()
        requests = self.graph.list_friend_requests(session)
        if not requests:
            self._say("No friend requests.")
            return

        self._say("Friend Requests:")
        for i, name in enumerate(requests, start=1):
            self._say(f"{i}. {name}")

        index = self._ask_int("Enter request number to accept (0 to cancel): ")
        try:
            friend = self.graph.accept_friend_request(session, index if index is not None else 0)
        except InvalidSelection:
            self._say("Cancelled or invalid choice.")
            return
        except UserNotFound as e:
            self._say(f"User not found: {e.username}")
            return
        self._say(f"You are now friends with {friend}!")

    def view_friends(self) -> None:
        friends = self.graph.list_friends(self.state.require_session())
        if not friends:
            self._say("You have no friends yet.")
            return

        self._say("Your Friends:")
        for name in friends:
            self._say(f"- {name}")
