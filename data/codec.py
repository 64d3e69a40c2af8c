"""Flat-file record codec for users and posts.

Both files are sequences of line-oriented records:

- users: username, password, friend count, friends, request count, requests
- posts: author, content, comment count, then author/content per comment

Counts are ASCII decimal integers on their own line. Text fields go
through a FieldEncoding so that the escaped format can carry line
breaks while the plain format stays byte-compatible with legacy files.
"""

from typing import Iterable, Protocol

from loguru import logger

from models import Comment, CorruptFile, Post, User, ValidationError
from models.enums import RecordFormat

ESCAPE_HINT = (
    "files written without escaping load with storage.record_format set to plain"
)


class FieldEncoding(Protocol):
    """Protocol for single-line text field encoding."""

    def encode(self, value: str) -> str: ...
    def decode(self, line: str) -> str: ...


class EscapedFieldEncoding:
    """Backslash escaping of backslash, newline and carriage return."""

    _ESCAPES = {"\\": "\\\\", "\n": "\\n", "\r": "\\r"}
    _UNESCAPES = {"\\": "\\", "n": "\n", "r": "\r"}

    def encode(self, value: str) -> str:
        """Escape a field so it fits on one line."""
        return "".join(self._ESCAPES.get(ch, ch) for ch in value)

    def decode(self, line: str) -> str:
        """Reverse encode().

        Raises:
            ValueError: On an unknown or unterminated escape sequence
        """
        if "\\" not in line:
            return line

        out = []
        i = 0
        while i < len(line):
            ch = line[i]
            if ch != "\\":
                out.append(ch)
                i += 1
                continue
            if i + 1 >= len(line):
                raise ValueError("unterminated escape sequence at end of field")
            code = line[i + 1]
            if code not in self._UNESCAPES:
                raise ValueError(f"unknown escape sequence '\\{code}'")
            out.append(self._UNESCAPES[code])
            i += 2
        return "".join(out)


class PlainFieldEncoding:
    """Verbatim fields, byte-compatible with legacy record files."""

    def encode(self, value: str) -> str:
        """Return the field unchanged, rejecting line breaks."""
        if "\n" in value or "\r" in value:
            raise ValidationError(
                "Field contains a line break, which the plain record format cannot store"
            )
        return value

    def decode(self, line: str) -> str:
        return line


class _LineReader:
    """Sequential line cursor that reports failures as CorruptFile."""

    def __init__(self, text: str, source: str, encoding: FieldEncoding):
        lines = text.split("\n")
        # The final newline terminates the last record rather than starting a field
        if lines and lines[-1] == "":
            lines.pop()
        self._lines = lines
        self._pos = 0
        self.source = source
        self.encoding = encoding

    @property
    def line_number(self) -> int:
        """1-based number of the most recently read line."""
        return self._pos

    def at_end(self) -> bool:
        return self._pos >= len(self._lines)

    def error(
        self, reason: str, line_number: int | None = None, hint: str | None = None
    ) -> CorruptFile:
        return CorruptFile(self.source, line_number or max(1, self._pos), reason, hint)

    def _next_raw(self, what: str) -> str:
        if self.at_end():
            raise self.error(f"unexpected end of file, expected {what}", self._pos + 1)
        line = self._lines[self._pos]
        self._pos += 1
        return line

    def next_field(self, what: str) -> str:
        """Read and decode one text field."""
        raw = self._next_raw(what)
        try:
            return self.encoding.decode(raw)
        except ValueError as e:
            hint = None
            if isinstance(self.encoding, EscapedFieldEncoding):
                hint = ESCAPE_HINT
            raise self.error(f"bad {what}: {e}", hint=hint) from e

    def next_count(self, what: str) -> int:
        """Read a non-negative decimal count."""
        raw = self._next_raw(f"{what} count")
        if not (raw.isascii() and raw.isdigit()):
            raise self.error(f"expected {what} count, got {raw!r}")
        return int(raw)


class PersistenceCodec:
    """Serializes users and posts to and from the flat record formats."""

    def __init__(self, encoding: FieldEncoding | None = None):
        """Initialize codec.

        Args:
            encoding: Field encoding, escaped by default
        """
        self.encoding: FieldEncoding = encoding or EscapedFieldEncoding()

    @classmethod
    def for_format(cls, record_format: RecordFormat | str) -> "PersistenceCodec":
        """Create a codec for a configured record format."""
        if RecordFormat(record_format) == RecordFormat.PLAIN:
            return cls(PlainFieldEncoding())
        return cls(EscapedFieldEncoding())

    @staticmethod
    def _join(lines: list[str]) -> str:
        return "".join(f"{line}\n" for line in lines)

    def encode_users(self, users: Iterable[User]) -> str:
        """Encode users into the users file format.

        Raises:
            ValidationError: If a field cannot be represented
        """
        enc = self.encoding.encode
        lines: list[str] = []
        for user in users:
            lines.append(enc(user.username))
            lines.append(enc(user.password))
            lines.append(str(len(user.friends)))
            lines.extend(enc(name) for name in user.friends)
            lines.append(str(len(user.friend_requests)))
            lines.extend(enc(name) for name in user.friend_requests)
        return self._join(lines)

    def decode_users(self, text: str, source: str = "users") -> list[User]:
        """Decode the users file format.

        Args:
            text: Whole file contents
            source: Label used in error messages

        Returns:
            Users in file order

        Raises:
            CorruptFile: If the data is truncated or malformed
        """
        reader = _LineReader(text, source, self.encoding)
        users: list[User] = []
        seen: set[str] = set()

        while not reader.at_end():
            username = reader.next_field("username")
            record_line = reader.line_number
            if not username:
                raise reader.error("empty username", record_line)
            if username in seen:
                raise reader.error(f"duplicate username {username!r}", record_line)
            seen.add(username)

            user = User(username=username, password=reader.next_field("password"))

            for _ in range(reader.next_count("friend")):
                friend = reader.next_field("friend name")
                if not user.add_friend(friend):
                    logger.debug(f"Collapsed duplicate friend {friend!r} of {username!r}")

            for _ in range(reader.next_count("request")):
                user.receive_request(reader.next_field("request sender"))

            users.append(user)

        return users

    def encode_posts(self, posts: Iterable[Post]) -> str:
        """Encode posts into the posts file format.

        Raises:
            ValidationError: If a field cannot be represented
        """
        enc = self.encoding.encode
        lines: list[str] = []
        for post in posts:
            lines.append(enc(post.author))
            lines.append(enc(post.content))
            lines.append(str(len(post.comments)))
            for comment in post.comments:
                lines.append(enc(comment.author))
                lines.append(enc(comment.content))
        return self._join(lines)

    def decode_posts(self, text: str, source: str = "posts") -> list[Post]:
        """Decode the posts file format.

        Args:
            text: Whole file contents
            source: Label used in error messages

        Returns:
            Posts in file order

        Raises:
            CorruptFile: If the data is truncated or malformed
        """
        reader = _LineReader(text, source, self.encoding)
        posts: list[Post] = []

        while not reader.at_end():
            post = Post(
                author=reader.next_field("post author"),
                content=reader.next_field("post content"),
            )
            for _ in range(reader.next_count("comment")):
                post.comments.append(Comment(
                    author=reader.next_field("comment author"),
                    content=reader.next_field("comment content"),
                ))
            posts.append(post)

        return posts
