"""Tests for whole-graph load and save."""

import pytest

from config.schemas import StorageConfig
from data import StateManager
from models import CorruptFile, Post, ValidationError
from models.enums import RecordFormat


class TestStateManager:
    """Tests for StateManager class."""

    def test_paths(self, tmp_path):
        """Test record files live under the data directory."""
        manager = StateManager(StorageConfig(data_dir=str(tmp_path), users_file="u.txt"))

        assert manager.users_path == tmp_path / "u.txt"
        assert manager.posts_path == tmp_path / "posts.txt"

    def test_read_missing(self, store):
        """Test missing files read as empty collections."""
        assert store.read() == ([], [])

    def test_write_then_read(self, store, sample_users, sample_posts):
        """Test a full save/load round trip."""
        store.write(sample_users, sample_posts)

        users, posts = store.read()

        assert users == sample_users
        assert posts == sample_posts

    def test_write_replaces_previous_contents(self, store, sample_users, sample_posts):
        """Test every save rewrites the whole collection."""
        store.write(sample_users, sample_posts)
        store.write(sample_users[:1], [])

        users, posts = store.read()

        assert [u.username for u in users] == ["alice"]
        assert posts == []
        assert store.posts_path.read_text() == ""

    def test_no_temp_files_left(self, store, sample_users, sample_posts):
        """Test atomic writes clean up after themselves."""
        store.write(sample_users, sample_posts)

        names = sorted(p.name for p in store.data_dir.iterdir())
        assert names == ["posts.txt", "users.txt"]

    def test_non_atomic_write(self, tmp_path, sample_users, sample_posts):
        """Test direct writes produce the same files."""
        manager = StateManager(StorageConfig(data_dir=str(tmp_path), atomic_writes=False))
        manager.write(sample_users, sample_posts)

        assert manager.read() == (sample_users, sample_posts)

    def test_creates_data_dir(self, tmp_path, sample_users):
        """Test saving into a directory that does not exist yet."""
        manager = StateManager(StorageConfig(data_dir=str(tmp_path / "nested" / "dir")))
        manager.write(sample_users, [])

        assert manager.users_path.exists()

    def test_corrupt_file(self, store):
        """Test a garbled users file raises CorruptFile naming the file."""
        store.users_path.write_text("alice\np1\nlots\n")

        with pytest.raises(CorruptFile) as exc_info:
            store.read()

        assert exc_info.value.source == str(store.users_path)
        assert exc_info.value.line_number == 3

    def test_plain_format_rejects_before_writing(self, tmp_path, sample_users, sample_posts):
        """Test an unrepresentable field leaves existing files untouched."""
        manager = StateManager(
            StorageConfig(data_dir=str(tmp_path), record_format=RecordFormat.PLAIN)
        )
        manager.write(sample_users, sample_posts)
        before = manager.users_path.read_text()

        with pytest.raises(ValidationError):
            manager.write(sample_users, [Post("alice", "two\nlines")])

        assert manager.users_path.read_text() == before
        assert manager.read()[1] == sample_posts

    def test_windows_line_endings(self, store):
        """Test files with CRLF line endings load."""
        store.users_path.write_bytes(b"alice\r\np1\r\n0\r\n0\r\n")

        users, _ = store.read()

        assert users[0].username == "alice"
        assert users[0].password == "p1"

    def test_invalid_encoding(self, store):
        """Test undecodable bytes raise CorruptFile at the offending line."""
        store.users_path.write_bytes(b"alice\np\xff1\n0\n0\n")

        with pytest.raises(CorruptFile) as exc_info:
            store.read()

        err = exc_info.value
        assert err.source == str(store.users_path)
        assert err.line_number == 2
        assert "invalid utf-8 data" in err.reason
