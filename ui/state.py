"""Session state management for the console shell."""

from dataclasses import dataclass

from data.state_manager import StateManager
from engine import Session, SocialGraph


@dataclass
class SessionState:
    """Tracks the logged-out / logged-in state of one console run.

    The login session lives only here; it is never persisted.
    """

    graph: SocialGraph
    store: StateManager | None = None
    session: Session | None = None

    def is_logged_in(self) -> bool:
        """Check if a user is logged in."""
        return self.session is not None

    def require_session(self) -> Session:
        """Get the active session.

        Raises:
            RuntimeError: If nobody is logged in
        """
        if self.session is None:
            raise RuntimeError("No active session - call login() first")
        return self.session

    def login(self, username: str, password: str) -> Session:
        """Log in and remember the session.

        Raises:
            RuntimeError: If a session is already active
            InvalidCredentials: If the credentials do not match
        """
        if self.session is not None:
            raise RuntimeError(f"{self.session.username} is already logged in")
        self.session = self.graph.login(username, password)
        return self.session

    def logout(self) -> None:
        """End the session and save the graph."""
        session = self.require_session()
        self.graph.logout(session)
        self.session = None
        self.persist()

    def persist(self) -> None:
        """Save the graph if a store is attached."""
        if self.store is not None:
            self.graph.save(self.store)
