"""Post and comment models."""

from dataclasses import dataclass, field

from .errors import ValidationError


@dataclass(frozen=True)
class Comment:
    """A comment attached to a post.

    Attributes:
        author: Username of the commenter
        content: Comment text
    """

    author: str
    content: str

    def render(self) -> str:
        """Format the comment as it appears under a post."""
        return f"     - {self.author}: {self.content}"


@dataclass
class Post:
    """Represents a post in the social network.

    Posts have no stable identifier; they are addressed by their 1-based
    position in the graph's post list.

    Attributes:
        author: Username of the creator (not checked against existing users)
        content: Post text, may be empty or span several lines
        comments: Comments in the order they were added
    """

    author: str
    content: str
    comments: list[Comment] = field(default_factory=list)

    @classmethod
    def create(cls, author: str, content: str) -> "Post":
        """Create a new post without comments.

        Args:
            author: Username of the creator
            content: Post text

        Returns:
            New Post

        Raises:
            ValidationError: If author or content is None
        """
        if author is None or content is None:
            raise ValidationError("Post author and content are required")
        return cls(author=author, content=content)

    @property
    def comment_count(self) -> int:
        """Number of comments on the post."""
        return len(self.comments)

    def add_comment(self, author: str, content: str) -> Comment:
        """Append a comment.

        Args:
            author: Username of the commenter
            content: Comment text

        Returns:
            The appended Comment
        """
        if author is None or content is None:
            raise ValidationError("Comment author and content are required")
        comment = Comment(author=author, content=content)
        self.comments.append(comment)
        return comment

    def render(self, display_index: int) -> str:
        """Format the post with its comments.

        Args:
            display_index: 1-based number shown in front of the post

        Returns:
            Multi-line text block
        """
        lines = [f"{display_index}. {self.author}: {self.content}"]
        if self.comments:
            lines.append("   Comments:")
            lines.extend(comment.render() for comment in self.comments)
        return "\n".join(lines)
