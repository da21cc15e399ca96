"""
Course model: catalog entry. Seeded once, read-only for the API.
course_id is the public numeric id; id is the internal storage key.
"""
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import JSON, Column, DateTime, Float, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB

from app.db.base import Base


class Course(Base):
    __tablename__ = "courses"

    id = Column(String, primary_key=True, default=lambda: str(uuid4()))
    course_id = Column(Integer, unique=True, nullable=False, index=True)
    slug = Column(String, unique=True, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Integer, nullable=False)  # major currency units
    original_price = Column(Integer, nullable=True)
    level = Column(String, nullable=True)  # beginner | intermediate | advanced
    duration = Column(String, nullable=True)  # "8 weeks"
    lessons = Column(Integer, nullable=False, default=0)
    projects = Column(Integer, nullable=False, default=0)
    rating = Column(Float, nullable=True)
    students = Column(Integer, nullable=False, default=0)
    thumbnail = Column(String, nullable=True)
    intro_video_url = Column(String, nullable=True)
    # [{"title": ..., "lessons": [{"title": ..., "duration": ..., "videoUrl": ...}]}]
    modules = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False, default=list)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
