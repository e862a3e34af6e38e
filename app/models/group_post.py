# app/models/group_post.py

from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime

from app.database import Base


class GroupPost(Base):
    __tablename__ = "group_posts"
    __table_args__ = (UniqueConstraint("group_id", "post_id"),)

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False, index=True)
    post_id = Column(Integer, ForeignKey("posts.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    group = relationship("Group", back_populates="post_links")
    post = relationship("Post")
