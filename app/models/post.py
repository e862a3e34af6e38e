# app/models/post.py

import os
import uuid
from datetime import datetime
from urllib.parse import urlparse

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship, validates

from app.database import Base
from app.models.comment import Comment  # noqa: F401
from app.models.group_attachment import GroupAttachment  # noqa: F401
from app.models.like import Like  # noqa: F401
from app.models.report import Report  # noqa: F401


# Polymorphic type stored on likes, reports and attachments owned by a post
POST_MORPH_TYPE = "post"

PUBLISHED = 1
DRAFT = 0


def new_unique_id() -> str:
    """32 hex chars from a random seed. Not a security token."""
    return uuid.uuid4().hex


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    unique_id = Column(
        String(32),
        unique=True,
        index=True,
        nullable=False,
        default=new_unique_id,
    )

    title = Column(String, nullable=False)
    body = Column(Text, nullable=True)
    type = Column(Integer, nullable=False, default=DRAFT)  # 1 published / 0 draft
    extra_info = Column(Text, nullable=True)

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    deleted_at = Column(DateTime, nullable=True, index=True)

    # -------------------------
    # RELATIONSHIPS
    # -------------------------

    owner = relationship("User", back_populates="posts")

    comments = relationship(
        "Comment",
        primaryjoin="and_(Comment.post_id == Post.id, Comment.parent_id.is_(None))",
        order_by="Comment.created_at",
        viewonly=True,
    )

    all_comments = relationship(
        "Comment",
        primaryjoin="Comment.post_id == Post.id",
        order_by="Comment.created_at",
        viewonly=True,
    )

    likes = relationship(
        "Like",
        primaryjoin=(
            "and_(foreign(Like.likeable_id) == Post.id, "
            "Like.likeable_type == 'post')"
        ),
        viewonly=True,
    )

    reports = relationship(
        "Report",
        primaryjoin=(
            "and_(foreign(Report.reportable_id) == Post.id, "
            "Report.reportable_type == 'post')"
        ),
        viewonly=True,
    )

    media = relationship(
        "GroupAttachment",
        primaryjoin=(
            "and_(foreign(GroupAttachment.attachment_id) == Post.id, "
            "GroupAttachment.attachment_type == 'post')"
        ),
        uselist=False,                  # single media item
        viewonly=True,
    )

    def __init__(self, **kwargs):
        # Always generated here, never taken from the caller
        if "unique_id" in kwargs:
            raise ValueError("unique_id is assigned automatically")
        kwargs["unique_id"] = new_unique_id()
        super().__init__(**kwargs)

    @validates("unique_id")
    def _validate_unique_id(self, key, value):
        if self.unique_id is not None and value != self.unique_id:
            raise ValueError("unique_id cannot be changed once assigned")
        return value

    # -------------------------
    # DERIVED ATTRIBUTES
    # -------------------------

    @property
    def attachment_url(self):
        if self.media is None:
            return None
        return self.media.attachment_url

    @property
    def attachment_type(self):
        """File extension of the attached media, without the dot."""
        if self.media is None:
            return None
        path = urlparse(self.media.attachment_url).path
        return os.path.splitext(path)[1].lstrip(".")

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
