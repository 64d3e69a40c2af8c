"""Loading and saving the whole social graph as flat record files.

State is read once at startup and rewritten in full at session
boundaries. There is no incremental write and no locking because one
process owns the files at a time.
"""

from pathlib import Path
import os
import tempfile

from loguru import logger

from config.schemas import StorageConfig
from models import CorruptFile, Post, User
from .codec import PersistenceCodec


class StateManager:
    """Owns the users and posts files for one data directory."""

    def __init__(
        self,
        config: StorageConfig | None = None,
        codec: PersistenceCodec | None = None,
    ):
        """Initialize state manager.

        Args:
            config: Storage configuration (defaults to the working directory)
            codec: Record codec, derived from config.record_format if omitted
        """
        self.config = config or StorageConfig()
        self.codec = codec or PersistenceCodec.for_format(self.config.record_format)
        self.data_dir = Path(self.config.data_dir)

    @property
    def users_path(self) -> Path:
        return self.data_dir / self.config.users_file

    @property
    def posts_path(self) -> Path:
        return self.data_dir / self.config.posts_file

    def _read_text(self, path: Path) -> str | None:
        """Read a record file with universal newlines.

        Raises:
            CorruptFile: If the bytes are not valid in the configured encoding
        """
        if not path.exists():
            logger.debug(f"No record file at {path}, starting empty")
            return None

        raw = path.read_bytes()
        try:
            text = raw.decode(self.config.encoding)
        except UnicodeDecodeError as e:
            line_number = raw[:e.start].count(b"\n") + 1
            raise CorruptFile(
                str(path), line_number, f"invalid {self.config.encoding} data: {e.reason}"
            ) from e
        return text.replace("\r\n", "\n").replace("\r", "\n")

    def read(self) -> tuple[list[User], list[Post]]:
        """Load all users and posts.

        Missing files are treated as empty collections.

        Returns:
            Tuple of (users, posts) in file order

        Raises:
            CorruptFile: If either file cannot be decoded
        """
        users: list[User] = []
        posts: list[Post] = []

        text = self._read_text(self.users_path)
        if text is not None:
            users = self.codec.decode_users(text, source=str(self.users_path))

        text = self._read_text(self.posts_path)
        if text is not None:
            posts = self.codec.decode_posts(text, source=str(self.posts_path))

        logger.info(f"Loaded {len(users)} users and {len(posts)} posts from {self.data_dir}")
        return users, posts

    def write(self, users: list[User], posts: list[Post]) -> None:
        """Rewrite both record files.

        Both payloads are encoded before anything touches the disk, so an
        unrepresentable field leaves the existing files untouched.

        Args:
            users: Every user in the graph
            posts: Every post in the graph

        Raises:
            ValidationError: If a field cannot be represented in the record format
        """
        users_text = self.codec.encode_users(users)
        posts_text = self.codec.encode_posts(posts)

        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._write_text(self.users_path, users_text)
        self._write_text(self.posts_path, posts_text)

        logger.info(f"Saved {len(users)} users and {len(posts)} posts to {self.data_dir}")

    def _write_text(self, path: Path, text: str) -> None:
        if not self.config.atomic_writes:
            with open(path, "w", encoding=self.config.encoding, newline="\n") as f:
                f.write(text)
            return

        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding=self.config.encoding, newline="\n") as f:
                f.write(text)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
