# app/models/group_attachment.py

from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from datetime import datetime

from app.database import Base


class GroupAttachment(Base):
    """
    One uploaded file. Owned polymorphically through
    (attachment_id, attachment_type), e.g. (12, "post").
    """
    __tablename__ = "group_attachments"
    # one attachment per owning record
    __table_args__ = (UniqueConstraint("attachment_id", "attachment_type"),)

    id = Column(Integer, primary_key=True, index=True)

    attachment_id = Column(Integer, nullable=True, index=True)
    attachment_type = Column(String, nullable=True)

    attachment_url = Column(String, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
