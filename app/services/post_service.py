# app/services/post_service.py

"""
Post create / update / delete and single-media handling.

Every public operation returns an ``Envelope`` instead of raising: failures
roll the session back and come out as an error envelope (404 for missing
posts or groups, 500 for everything else).
"""

import logging
import traceback
from datetime import datetime
from typing import Any, Mapping

from sqlalchemy.orm import Session, selectinload
from sqlalchemy.orm.attributes import set_committed_value

from app.config import settings
from app.core.exceptions import NotFoundError, PostNotFoundError, GroupNotFoundError
from app.models.comment import Comment
from app.models.group import Group
from app.models.group_attachment import GroupAttachment
from app.models.group_post import GroupPost
from app.models.post import Post, POST_MORPH_TYPE, PUBLISHED, DRAFT
from app.schemas.envelope_schema import Envelope
from app.schemas.post_schema import PostOut, PostListItem
from app.storage import save_to_storage, delete_file

logger = logging.getLogger(__name__)

ERROR_TEXT = "Something went wrong, Please contact support!"

# Files replaced or detached during a transaction; removed from storage
# only once the transaction commits.
STALE_MEDIA_KEY = "stale_media_urls"
# Files uploaded during a transaction; removed again if it rolls back.
NEW_MEDIA_KEY = "new_media_urls"


# --------------------------------------------------
# ENVELOPES
# --------------------------------------------------

def _success(messages: str, data: Any) -> Envelope:
    return Envelope(status="success", status_code=200, messages=messages, data=data)


def _error(db: Session, exc: Exception) -> Envelope:
    db.rollback()
    db.info.pop(STALE_MEDIA_KEY, None)
    for url in db.info.pop(NEW_MEDIA_KEY, []):
        delete_file(url)

    frames = traceback.extract_tb(exc.__traceback__)
    line = frames[-1].lineno if frames else 0
    status_code = exc.status_code if isinstance(exc, NotFoundError) else 500

    if status_code == 500:
        logger.error("Post operation failed", exc_info=exc)
    else:
        logger.info("Post operation rejected: %s", exc)

    return Envelope(
        status="error",
        status_code=status_code,
        messages=f"{line}{ERROR_TEXT}{exc}",
        data=None,
    )


# --------------------------------------------------
# HELPERS
# --------------------------------------------------

def prepare_data(data: Mapping, update: bool = True, current_user=None) -> dict:
    """Maps the form field bag onto Post columns."""
    prepared = {
        "title": data["postTitle"],
        "body": data["postBody"],
        "type": PUBLISHED if data.get("postStatus") == "on" else DRAFT,
    }
    if not update:
        prepared["user_id"] = current_user.id
    return prepared


def _has_file(value) -> bool:
    # Browsers send an empty part for an untouched file input
    return value is not None and bool(getattr(value, "filename", None))


def _wants_media_removed(data: Mapping) -> bool:
    return str(data.get("postMediaRemove", "")).strip() == "1"


def _purge_stale_media(db: Session):
    db.info.pop(NEW_MEDIA_KEY, None)
    for url in db.info.pop(STALE_MEDIA_KEY, []):
        delete_file(url)


def serialize_post(post: Post) -> PostOut:
    return PostOut.model_validate(post)


def serialize_post_item(post: Post) -> PostListItem:
    item = PostListItem.model_validate(post)
    item.comment_count = len(post.all_comments)
    item.like_count = len(post.likes)
    return item


# --------------------------------------------------
# QUERIES
# --------------------------------------------------

def get_post(db: Session, post_id, include_deleted: bool = False) -> Post | None:
    """
    Loads a post with its media freshly resolved, even when the post is
    already in the session.
    """
    query = (
        db.query(Post)
        .options(selectinload(Post.media))
        .populate_existing()
        .filter(Post.id == post_id)
    )
    if not include_deleted:
        query = query.filter(Post.deleted_at.is_(None))
    return query.first()


def list_group_posts(db: Session, group_id, limit: int = 10, offset: int = 0) -> list[Post]:
    return (
        db.query(Post)
        .join(GroupPost, GroupPost.post_id == Post.id)
        .options(
            selectinload(Post.media),
            selectinload(Post.all_comments),
            selectinload(Post.likes),
        )
        .filter(
            GroupPost.group_id == group_id,
            Post.deleted_at.is_(None),
        )
        .order_by(Post.created_at.desc(), Post.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


# --------------------------------------------------
# MEDIA
# --------------------------------------------------

def attach_media(db: Session, file, post: Post) -> GroupAttachment:
    """
    Uploads the file and points the post's single attachment at it,
    overwriting the URL of an existing attachment in place.
    """
    url = save_to_storage(file, settings.COMPANY_UNIQUE_ID)
    db.info.setdefault(NEW_MEDIA_KEY, []).append(url)

    attachment = (
        db.query(GroupAttachment)
        .filter(
            GroupAttachment.attachment_id == post.id,
            GroupAttachment.attachment_type == POST_MORPH_TYPE,
        )
        .first()
    )

    if attachment:
        if attachment.attachment_url != url:
            db.info.setdefault(STALE_MEDIA_KEY, []).append(attachment.attachment_url)
        attachment.attachment_url = url
    else:
        attachment = GroupAttachment(
            attachment_id=post.id,
            attachment_type=POST_MORPH_TYPE,
            attachment_url=url,
        )
        db.add(attachment)

    db.flush()
    set_committed_value(post, "media", attachment)
    return attachment


def detach_media(db: Session, post: Post) -> int:
    """Deletes the post's attachment record(s). Returns the number removed."""
    attachments = (
        db.query(GroupAttachment)
        .filter(
            GroupAttachment.attachment_id == post.id,
            GroupAttachment.attachment_type == POST_MORPH_TYPE,
        )
        .all()
    )

    stale = db.info.setdefault(STALE_MEDIA_KEY, [])
    for attachment in attachments:
        stale.append(attachment.attachment_url)
        db.delete(attachment)

    set_committed_value(post, "media", None)
    db.flush()
    return len(attachments)


# --------------------------------------------------
# PUBLIC OPERATIONS
# --------------------------------------------------

def add_post(db: Session, data: Mapping, current_user) -> Envelope:
    try:
        post = Post(**prepare_data(data, update=False, current_user=current_user))
        db.add(post)
        db.flush()

        if _has_file(data.get("postMedia")):
            attach_media(db, data["postMedia"], post)

        group = Group.find(db, data.get("group_id"))
        if group is None:
            raise GroupNotFoundError(data.get("group_id"))
        group.attach_post(post.id)

        db.commit()
        _purge_stale_media(db)

        logger.info("Post %s created by user %s in group %s", post.id, post.user_id, group.id)
        return _success("Record created successfully!", serialize_post(post))
    except Exception as e:
        return _error(db, e)


def update_post(db: Session, data: Mapping, post_id) -> Envelope:
    try:
        post = get_post(db, post_id)
        if post is None:
            raise PostNotFoundError(post_id)

        for field, value in prepare_data(data, update=True).items():
            setattr(post, field, value)

        if _wants_media_removed(data):
            detach_media(db, post)
        if _has_file(data.get("postMedia")):
            attach_media(db, data["postMedia"], post)

        db.commit()
        _purge_stale_media(db)

        logger.info("Post %s updated", post.id)
        return _success("Record updated successfully!", serialize_post(post))
    except Exception as e:
        return _error(db, e)


def recursive_delete(db: Session, post_id) -> Envelope:
    """
    Removes the media, hard-deletes every comment (replies included) and
    soft-deletes the post, all in one transaction.
    """
    try:
        post = get_post(db, post_id)
        if post is None:
            raise PostNotFoundError(post_id)

        media = detach_media(db, post)
        comments = (
            db.query(Comment)
            .filter(Comment.post_id == post.id)
            .delete(synchronize_session=False)
        )
        post.deleted_at = datetime.utcnow()

        db.commit()
        _purge_stale_media(db)

        logger.info(
            "Post %s deleted (%s media, %s comments)", post_id, media, comments
        )
        return _success("Record deleted successfully!", True)
    except Exception as e:
        return _error(db, e)


def find_post(db: Session, post_id) -> Envelope:
    try:
        post = get_post(db, post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        return _success("Record found successfully!", serialize_post(post))
    except Exception as e:
        return _error(db, e)
