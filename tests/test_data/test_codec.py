"""Tests for the flat record codec."""

import pytest

from data.codec import EscapedFieldEncoding, PersistenceCodec, PlainFieldEncoding
from models import Comment, CorruptFile, Post, User, ValidationError
from models.enums import RecordFormat


@pytest.fixture
def codec():
    """Default (escaped) codec."""
    return PersistenceCodec()


@pytest.fixture
def plain_codec():
    """Legacy byte-compatible codec."""
    return PersistenceCodec.for_format(RecordFormat.PLAIN)


class TestUsersFormat:
    """Tests for the users record layout."""

    def test_encode_layout(self, codec, sample_users):
        """Test the exact line layout of user records."""
        text = codec.encode_users(sample_users)

        assert text == (
            "alice\np1\n1\nbob\n1\ncarol\n"
            "bob\np2\n1\nalice\n0\n"
            "carol\np3\n0\n0\n"
        )

    def test_empty(self, codec):
        """Test no users encode to an empty file and back."""
        assert codec.encode_users([]) == ""
        assert codec.decode_users("") == []

    def test_round_trip(self, codec, sample_users):
        """Test decode(encode(users)) preserves order and content."""
        assert codec.decode_users(codec.encode_users(sample_users)) == sample_users

    def test_reads_legacy_file(self, plain_codec):
        """Test a legacy file with duplicate friends loads."""
        legacy = "alice\np1\n2\nbob\nbob\n0\nbob\np2\n1\nalice\n1\ncarol\n"

        users = plain_codec.decode_users(legacy)

        assert [u.username for u in users] == ["alice", "bob"]
        assert users[0].friends == ["bob"]
        assert users[1].friend_requests == ["carol"]

    def test_missing_final_newline(self, codec):
        """Test the last line may lack its terminator."""
        users = codec.decode_users("alice\np1\n0\n0")

        assert users == [User("alice", "p1")]

    def test_truncated_record(self, codec):
        """Test a cut-off record names the missing field and line."""
        with pytest.raises(CorruptFile) as exc_info:
            codec.decode_users("alice\np1\n2\nbob\n", source="users.txt")

        err = exc_info.value
        assert err.source == "users.txt"
        assert err.line_number == 5
        assert "friend name" in err.reason

    @pytest.mark.parametrize("count", ["abc", "-1", "1.5", "", " 1"])
    def test_bad_count(self, codec, count):
        """Test counts must be plain non-negative integers."""
        with pytest.raises(CorruptFile) as exc_info:
            codec.decode_users(f"alice\np1\n{count}\n0\n")

        assert exc_info.value.line_number == 3

    def test_duplicate_username(self, codec):
        """Test the same username twice is corrupt."""
        text = "alice\np1\n0\n0\nalice\np2\n0\n0\n"

        with pytest.raises(CorruptFile) as exc_info:
            codec.decode_users(text)

        assert exc_info.value.line_number == 5

    def test_empty_username(self, codec):
        """Test a blank record start is corrupt."""
        with pytest.raises(CorruptFile):
            codec.decode_users("alice\np1\n0\n0\n\n")


class TestPostsFormat:
    """Tests for the posts record layout."""

    def test_encode_layout(self, codec, sample_posts):
        """Test the exact line layout of post records."""
        text = codec.encode_posts(sample_posts)

        assert text == (
            "alice\nhello\n2\nbob\nhi\ncarol\nwelcome!\n"
            "bob\n\n0\n"
        )

    def test_round_trip(self, codec, sample_posts):
        """Test decode(encode(posts)) preserves comments and order."""
        assert codec.decode_posts(codec.encode_posts(sample_posts)) == sample_posts

    def test_empty_last_field(self, codec):
        """Test an empty final comment survives the trailing newline."""
        posts = [Post("alice", "hello", comments=[Comment("bob", "")])]

        assert codec.decode_posts(codec.encode_posts(posts)) == posts

    def test_truncated_comments(self, codec):
        """Test a comment count larger than the data is corrupt."""
        with pytest.raises(CorruptFile) as exc_info:
            codec.decode_posts("alice\nhello\n2\nbob\nhi\n")

        assert "comment author" in exc_info.value.reason


class TestEscaping:
    """Tests for field encodings."""

    @pytest.mark.parametrize("value", [
        "line 1\nline 2",
        "back\\slash",
        "literal \\n not a newline",
        "carriage\rreturn",
        "trailing backslash\\",
        "",
    ])
    def test_escaped_round_trip(self, value):
        """Test awkward content survives escaping."""
        encoding = EscapedFieldEncoding()
        encoded = encoding.encode(value)

        assert "\n" not in encoded
        assert "\r" not in encoded
        assert encoding.decode(encoded) == value

    def test_multiline_post_round_trip(self, codec):
        """Test posts and comments may contain newlines."""
        post = Post("alice", "dear diary\nsecond line")
        post.add_comment("bob", "a\\b\nc")

        assert codec.decode_posts(codec.encode_posts([post])) == [post]

    @pytest.mark.parametrize("line", ["bad\\x", "dangling\\"])
    def test_bad_escape(self, codec, line):
        """Test invalid escape sequences are reported as corruption."""
        with pytest.raises(CorruptFile) as exc_info:
            codec.decode_posts(f"alice\n{line}\n0\n")

        assert exc_info.value.line_number == 2
        assert "record_format" in exc_info.value.hint

    def test_plain_rejects_newlines(self, plain_codec):
        """Test the legacy format refuses content it cannot store."""
        with pytest.raises(ValidationError):
            plain_codec.encode_posts([Post("alice", "two\nlines")])

    def test_plain_keeps_backslashes(self):
        """Test plain fields are written verbatim."""
        encoding = PlainFieldEncoding()

        assert encoding.encode("a\\n") == "a\\n"
        assert encoding.decode("a\\n") == "a\\n"


USER_SHAPES = {
    "single_bare": [User("alice", "p1")],
    "many_links": [
        User(
            "hub",
            "pw",
            friends=[f"friend{i}" for i in range(12)],
            friend_requests=[f"fan{i}" for i in range(7)],
        ),
        User("friend0", "x", friends=["hub"]),
    ],
    "empty_fields": [
        User("alice", "", friends=[""], friend_requests=[""]),
        User("bob", "", friend_requests=["", "carol"]),
    ],
    "awkward_text": [
        User("alice", "C:\\pw\nline two", friends=["b\\ob"]),
        User("b\\ob", "\r", friend_requests=["alice"]),
    ],
}

POST_SHAPES = {
    "no_comments": [Post("alice", "a"), Post("bob", "b"), Post("carol", "c")],
    "many_comments": [
        Post("alice", "busy", comments=[Comment(f"user{i}", f"reply {i}") for i in range(15)]),
        Post("bob", "quiet"),
    ],
    "empty_fields": [
        Post("", ""),
        Post("alice", "", comments=[Comment("", ""), Comment("bob", "")]),
        Post("", "x", comments=[Comment("", "y")]),
    ],
    "awkward_text": [
        Post("alice", "two\nlines\\", comments=[Comment("bob", "\\n literal"), Comment("c", "\r\n")]),
    ],
}

PLAIN_SAFE = ["single_bare", "many_links", "empty_fields"]


class TestRoundTripShapes:
    """decode(encode(x)) == x across varied collection shapes."""

    @pytest.mark.parametrize("shape", sorted(USER_SHAPES))
    def test_users_escaped(self, codec, shape):
        users = USER_SHAPES[shape]

        assert codec.decode_users(codec.encode_users(users)) == users

    @pytest.mark.parametrize("shape", sorted(POST_SHAPES))
    def test_posts_escaped(self, codec, shape):
        posts = POST_SHAPES[shape]

        assert codec.decode_posts(codec.encode_posts(posts)) == posts

    @pytest.mark.parametrize("shape", PLAIN_SAFE)
    def test_plain(self, plain_codec, shape):
        """Test shapes without line breaks also survive the plain format."""
        users = USER_SHAPES[shape]
        posts = POST_SHAPES.get(shape, POST_SHAPES["no_comments"])

        assert plain_codec.decode_users(plain_codec.encode_users(users)) == users
        assert plain_codec.decode_posts(plain_codec.encode_posts(posts)) == posts
