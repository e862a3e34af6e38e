# app/routers/group_router.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.auth import get_current_user
from app.models.group import Group
from app.schemas.post_schema import PostListItem
from app.services import post_service

router = APIRouter(prefix="/groups", tags=["Group Posts"])


# --------------------------------------------------
# LIST POSTS
# --------------------------------------------------

@router.get("/{group_id}/posts", response_model=list[PostListItem])
def list_group_posts(
    group_id: int,
    limit: int = 10,
    offset: int = 0,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    if Group.find(db, group_id) is None:
        raise HTTPException(404, "Group not found")

    posts = post_service.list_group_posts(db, group_id, limit=limit, offset=offset)
    return [post_service.serialize_post_item(p) for p in posts]
