"""Authenticated session handle."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Session:
    """Handle returned by a successful login.

    Only the username is held; the User record is looked up again on every
    operation so the handle never points at a stale object.

    Attributes:
        username: Logged-in account
    """

    username: str
