"""Pytest configuration and fixtures."""

import pytest

from config.schemas import StorageConfig
from data import StateManager
from engine import SocialGraph
from models import Post, User


@pytest.fixture
def graph():
    """Empty social graph."""
    return SocialGraph()


@pytest.fixture
def alice_bob(graph):
    """Graph with alice and bob signed up."""
    graph.signup("alice", "p1")
    graph.signup("bob", "p2")
    return graph


@pytest.fixture
def sample_users():
    """Users with friendships and pending requests."""
    alice = User("alice", "p1", friends=["bob"], friend_requests=["carol"])
    bob = User("bob", "p2", friends=["alice"])
    carol = User("carol", "p3")
    return [alice, bob, carol]


@pytest.fixture
def sample_posts():
    """Posts with and without comments."""
    first = Post("alice", "hello")
    first.add_comment("bob", "hi")
    first.add_comment("carol", "welcome!")
    second = Post("bob", "")
    return [first, second]


@pytest.fixture
def storage_config(tmp_path):
    """Storage configuration pointing at a temporary directory."""
    return StorageConfig(data_dir=str(tmp_path))


@pytest.fixture
def store(storage_config):
    """State manager over a temporary directory."""
    return StateManager(storage_config)
