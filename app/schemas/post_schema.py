# app/schemas/post_schema.py

from pydantic import BaseModel, field_serializer
from typing import Optional
from datetime import datetime

from app.utils.urls import absolute_media_url


class PostOut(BaseModel):
    id: int
    unique_id: str
    title: str
    body: Optional[str] = None
    type: int
    extra_info: Optional[str] = None
    user_id: int

    attachment_url: Optional[str] = None
    attachment_type: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @field_serializer("attachment_url")
    def absolutise_url(self, v):
        return absolute_media_url(v)

    model_config = {"from_attributes": True}


class PostListItem(PostOut):
    comment_count: int = 0
    like_count: int = 0
