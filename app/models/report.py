# app/models/report.py

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from datetime import datetime

from app.database import Base


class Report(Base):
    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    reportable_id = Column(Integer, nullable=False, index=True)
    reportable_type = Column(String, nullable=False)

    reason = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
