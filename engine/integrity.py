"""Consistency checks over the friendship graph."""

from dataclasses import dataclass, field
from typing import Any, Iterable

import networkx as nx

from models import User


@dataclass
class IntegrityReport:
    """Problems found in loaded friendship data.

    Attributes:
        asymmetric_friendships: (user, friend) pairs where friend does not list user
        unknown_friends: (user, friend) pairs naming a missing account
        unknown_requesters: (user, sender) pairs for requests from missing accounts
        requests_from_friends: (user, sender) pairs where sender is already a friend
    """

    asymmetric_friendships: list[tuple[str, str]] = field(default_factory=list)
    unknown_friends: list[tuple[str, str]] = field(default_factory=list)
    unknown_requesters: list[tuple[str, str]] = field(default_factory=list)
    requests_from_friends: list[tuple[str, str]] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not (
            self.asymmetric_friendships
            or self.unknown_friends
            or self.unknown_requesters
            or self.requests_from_friends
        )

    def describe(self) -> list[str]:
        """Human-readable lines, one per problem."""
        lines = []
        for user, friend in self.asymmetric_friendships:
            lines.append(f"{user} lists {friend} as a friend but not the other way round")
        for user, friend in self.unknown_friends:
            lines.append(f"{user} lists unknown user {friend} as a friend")
        for user, sender in self.unknown_requesters:
            lines.append(f"{user} has a pending request from unknown user {sender}")
        for user, sender in self.requests_from_friends:
            lines.append(f"{user} has a pending request from existing friend {sender}")
        return lines

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "asymmetric_friendships": [list(p) for p in self.asymmetric_friendships],
            "unknown_friends": [list(p) for p in self.unknown_friends],
            "unknown_requesters": [list(p) for p in self.unknown_requesters],
            "requests_from_friends": [list(p) for p in self.requests_from_friends],
        }


def build_friendship_graph(users: Iterable[User]) -> nx.DiGraph:
    """Build a directed graph of friendship claims.

    Every user is a node; an edge u -> v means u lists v as a friend.
    Nodes for names that have no account get ``known=False``.

    Args:
        users: Users to include

    Returns:
        Directed claims graph
    """
    graph = nx.DiGraph()
    users = list(users)
    for user in users:
        graph.add_node(user.username, known=True, pending=len(user.friend_requests))

    for user in users:
        for friend in user.friends:
            if friend not in graph:
                graph.add_node(friend, known=False, pending=0)
            graph.add_edge(user.username, friend)

    return graph


def check_integrity(users: Iterable[User]) -> IntegrityReport:
    """Find friendship data that violates the symmetry invariant.

    Args:
        users: Every user in the graph

    Returns:
        IntegrityReport (empty when data is consistent)
    """
    users = list(users)
    claims = build_friendship_graph(users)
    report = IntegrityReport()

    for u, v in claims.edges():
        if not claims.nodes[v]["known"]:
            report.unknown_friends.append((u, v))
        elif not claims.has_edge(v, u):
            report.asymmetric_friendships.append((u, v))

    for user in users:
        for sender in user.friend_requests:
            if sender not in claims or not claims.nodes[sender]["known"]:
                report.unknown_requesters.append((user.username, sender))
            elif claims.has_edge(user.username, sender):
                report.requests_from_friends.append((user.username, sender))

    return report
