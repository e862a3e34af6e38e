# app/models/group.py

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship, object_session
from datetime import datetime

from app.database import Base
from app.models.group_post import GroupPost


class Group(Base):
    __tablename__ = "groups"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    post_links = relationship(
        "GroupPost",
        back_populates="group",
        cascade="all, delete-orphan",
    )

    @classmethod
    def find(cls, db, group_id):
        if group_id is None or group_id == "":
            return None
        return db.get(cls, int(group_id))

    def attach_post(self, post_id: int) -> GroupPost:
        """
        Registers a post with this group. Attaching the same post twice
        returns the existing link.
        """
        db = object_session(self)
        if db is not None:
            link = (
                db.query(GroupPost)
                .filter(GroupPost.group_id == self.id, GroupPost.post_id == post_id)
                .first()
            )
            if link:
                return link

            link = GroupPost(group_id=self.id, post_id=post_id)
            db.add(link)
            db.flush()
            return link

        link = GroupPost(post_id=post_id)
        self.post_links.append(link)
        return link
