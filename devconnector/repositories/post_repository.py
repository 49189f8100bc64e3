"""Post feed repository: posts, likes and comments."""

from devconnector.models import Comment, Like, Post, User
from devconnector.models.base import utcnow

from .base import BaseRepository


class PostRepository(BaseRepository[Post]):
    """
    Repository for Post operations.

    Likes and comments are treated as part of the post document: every change
    to them also bumps the post's version so concurrent edits are detected.
    """

    model = Post

    def list_recent(self) -> list[Post]:
        """All posts, newest first."""
        return self.session.query(Post).order_by(Post.created_at.desc(), Post.id.desc()).all()

    def create_post(self, author: User, text: str) -> Post:
        """Create a post, copying the author's current name and avatar."""
        post = Post(
            user_id=author.id,
            name=author.name,
            avatar=author.avatar,
            text=text,
        )
        self.session.add(post)
        self.session.flush()
        return post

    def _touch(self, post: Post) -> None:
        post.updated_at = utcnow()

    # Likes

    def find_like(self, post: Post, user_id: int) -> Like | None:
        for like in post.likes:
            if like.user_id == user_id:
                return like
        return None

    def add_like(self, post: Post, user_id: int) -> Like:
        """Prepend a like for the user."""
        like = Like(user_id=user_id)
        post.likes.insert(0, like)
        self._touch(post)
        self.session.flush()
        return like

    def remove_like(self, post: Post, like: Like) -> None:
        post.likes.remove(like)
        self._touch(post)
        self.session.flush()

    # Comments

    def find_comment(self, post: Post, comment_id: int) -> Comment | None:
        for comment in post.comments:
            if comment.id == comment_id:
                return comment
        return None

    def add_comment(self, post: Post, author: User, text: str) -> Comment:
        """Prepend a comment, copying the author's current name and avatar."""
        comment = Comment(
            user_id=author.id,
            name=author.name,
            avatar=author.avatar,
            text=text,
        )
        post.comments.insert(0, comment)
        self._touch(post)
        self.session.flush()
        return comment

    def remove_comment(self, post: Post, comment: Comment) -> None:
        post.comments.remove(comment)
        self._touch(post)
        self.session.flush()
