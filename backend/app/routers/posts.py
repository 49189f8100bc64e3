"""
Post feed endpoints: posts, likes and comments.

All routes require an authenticated user.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from devconnector.db import get_db
from devconnector.models import Comment, Like, Post, User

from ..auth.dependencies import get_current_user
from ..schemas import CommentResponse, LikeResponse, MessageResponse, PostResponse, TextRequest
from ..services import post_service
from ..validation import check_not_empty

router = APIRouter(prefix="/posts", tags=["posts"])

TEXT_RULES = {"text": "Text is required"}


def _like_to_response(like: Like) -> LikeResponse:
    return LikeResponse(id=like.id, user=like.user_id)


def _comment_to_response(comment: Comment) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        user=comment.user_id,
        text=comment.text,
        name=comment.name,
        avatar=comment.avatar,
        created_at=comment.created_at,
    )


def _post_to_response(post: Post) -> PostResponse:
    """Convert Post to response."""
    return PostResponse(
        id=post.id,
        user=post.user_id,
        text=post.text,
        name=post.name,
        avatar=post.avatar,
        likes=[_like_to_response(like) for like in post.likes],
        comments=[_comment_to_response(comment) for comment in post.comments],
        created_at=post.created_at,
    )


@router.post("", response_model=PostResponse)
def create_post(
    payload: TextRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create a post."""
    check_not_empty(payload, TEXT_RULES)
    post = post_service.create_post(db, current_user, payload.text)
    return _post_to_response(post)


@router.get("", response_model=list[PostResponse])
def list_posts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """All posts, newest first."""
    return [_post_to_response(post) for post in post_service.list_posts(db)]


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _post_to_response(post_service.get_post(db, post_id))


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete a post. Only its author may do this."""
    post_service.delete_post(db, current_user, post_id)
    return MessageResponse(msg="Post removed")


@router.put("/like/{post_id}", response_model=list[LikeResponse])
def like_post(
    post_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Like a post. Returns the updated likes, newest first."""
    likes = post_service.like_post(db, current_user, post_id)
    return [_like_to_response(like) for like in likes]


@router.put("/unlike/{post_id}", response_model=list[LikeResponse])
def unlike_post(
    post_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    likes = post_service.unlike_post(db, current_user, post_id)
    return [_like_to_response(like) for like in likes]


@router.post("/comment/{post_id}", response_model=list[CommentResponse])
def add_comment(
    post_id: str,
    payload: TextRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Comment on a post. Returns the updated comments, newest first."""
    check_not_empty(payload, TEXT_RULES)
    comments = post_service.add_comment(db, current_user, post_id, payload.text)
    return [_comment_to_response(comment) for comment in comments]


@router.delete("/comment/{post_id}/{comment_id}", response_model=list[CommentResponse])
def delete_comment(
    post_id: str,
    comment_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    comments = post_service.delete_comment(db, current_user, post_id, comment_id)
    return [_comment_to_response(comment) for comment in comments]
