"""
Post service - bridges the post endpoints with the repositories.

Every function takes the request's database session and the authenticated
user, commits on success and raises a domain exception on failure.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from devconnector.exceptions import ConflictError, NotAuthorizedError, NotFoundError
from devconnector.logging import get_logger
from devconnector.models import Comment, Like, Post, User
from devconnector.repositories import PostRepository

from ..validation import parse_id

logger = get_logger("api.post_service")

POST_NOT_FOUND = "Post not found"


def create_post(db: Session, user: User, text: str) -> Post:
    """Create a post authored by the user."""
    post = PostRepository(db).create_post(user, text)
    db.commit()
    logger.info("post_created", post_id=post.id, user_id=user.id)
    return post


def list_posts(db: Session) -> list[Post]:
    """All posts, newest first."""
    return PostRepository(db).list_recent()


def get_post(db: Session, post_id: int | str) -> Post:
    """Fetch a post or raise NotFoundError, also for ids that cannot exist."""
    pid = parse_id(post_id)
    post = PostRepository(db).get_by_id(pid) if pid is not None else None
    if post is None:
        raise NotFoundError(POST_NOT_FOUND)
    return post


def delete_post(db: Session, user: User, post_id: int | str) -> None:
    """Delete a post with its likes and comments. Only the author may do this."""
    post = get_post(db, post_id)
    if post.user_id != user.id:
        logger.warning("post_delete_denied", post_id=post_id, user_id=user.id)
        raise NotAuthorizedError()

    db.delete(post)
    db.commit()
    logger.info("post_deleted", post_id=post_id, user_id=user.id)


def like_post(db: Session, user: User, post_id: int | str) -> list[Like]:
    """Add the user's like. Liking twice is rejected."""
    repo = PostRepository(db)
    user_id = user.id
    post = get_post(db, post_id)
    if repo.find_like(post, user_id) is not None:
        raise ConflictError("Post already liked")

    try:
        repo.add_like(post, user_id)
        db.commit()
    except (IntegrityError, StaleDataError):
        # Someone else changed the post first; if it was this user's like, say so
        db.rollback()
        post = get_post(db, post_id)
        if repo.find_like(post, user_id) is not None:
            raise ConflictError("Post already liked") from None
        raise

    logger.info("post_liked", post_id=post_id, user_id=user_id)
    return list(post.likes)


def unlike_post(db: Session, user: User, post_id: int | str) -> list[Like]:
    """Remove the user's like. Unliking a post that is not liked is rejected."""
    repo = PostRepository(db)
    post = get_post(db, post_id)
    like = repo.find_like(post, user.id)
    if like is None:
        raise ConflictError("Post has not yet been liked")

    repo.remove_like(post, like)
    db.commit()
    logger.info("post_unliked", post_id=post_id, user_id=user.id)
    return list(post.likes)


def add_comment(db: Session, user: User, post_id: int | str, text: str) -> list[Comment]:
    """Prepend a comment by the user."""
    repo = PostRepository(db)
    post = get_post(db, post_id)
    comment = repo.add_comment(post, user, text)
    db.commit()
    logger.info("comment_added", post_id=post_id, comment_id=comment.id, user_id=user.id)
    return list(post.comments)


def delete_comment(db: Session, user: User, post_id: int | str, comment_id: int | str) -> list[Comment]:
    """
    Delete the comment identified by comment_id.

    Only the comment's author may delete it. Removal targets the comment
    with this id, never another comment by the same author.
    """
    repo = PostRepository(db)
    post = get_post(db, post_id)
    cid = parse_id(comment_id)
    comment = repo.find_comment(post, cid) if cid is not None else None
    if comment is None:
        raise NotFoundError("Comment does not exist")
    if comment.user_id != user.id:
        logger.warning(
            "comment_delete_denied", post_id=post_id, comment_id=comment_id, user_id=user.id
        )
        raise NotAuthorizedError()

    repo.remove_comment(post, comment)
    db.commit()
    logger.info("comment_deleted", post_id=post_id, comment_id=comment_id, user_id=user.id)
    return list(post.comments)
