# app/models/like.py

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from datetime import datetime

from app.database import Base


class Like(Base):
    """
    Polymorphic like: (likeable_id, likeable_type) points at any
    likeable record, e.g. ("post", 12).
    """
    __tablename__ = "likes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    likeable_id = Column(Integer, nullable=False, index=True)
    likeable_type = Column(String, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
