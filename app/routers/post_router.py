# app/routers/post_router.py

from fastapi import APIRouter, Depends, Form, UploadFile, File
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.database import get_db
from app.auth import get_current_user
from app.schemas.envelope_schema import Envelope
from app.services import post_service

router = APIRouter(prefix="/posts", tags=["Posts"])


def envelope_response(envelope: Envelope) -> JSONResponse:
    return JSONResponse(
        status_code=envelope.status_code,
        content=envelope.model_dump(mode="json"),
    )


# --------------------------------------------------
# CREATE POST
# --------------------------------------------------

@router.post("")
def create_post(
    postTitle: str = Form(...),
    postBody: str = Form(...),
    group_id: int = Form(...),
    postStatus: str | None = Form(None),
    postMedia: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    data = {
        "postTitle": postTitle,
        "postBody": postBody,
        "postStatus": postStatus,
        "postMedia": postMedia,
        "group_id": group_id,
    }
    return envelope_response(post_service.add_post(db, data, current_user))


# --------------------------------------------------
# GET POST
# --------------------------------------------------

@router.get("/{post_id}")
def get_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return envelope_response(post_service.find_post(db, post_id))


# --------------------------------------------------
# EDIT POST
# --------------------------------------------------

@router.put("/{post_id}")
def edit_post(
    post_id: int,
    postTitle: str = Form(...),
    postBody: str = Form(...),
    postStatus: str | None = Form(None),
    postMediaRemove: int | None = Form(None),
    postMedia: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    data = {
        "postTitle": postTitle,
        "postBody": postBody,
        "postStatus": postStatus,
        "postMediaRemove": postMediaRemove,
        "postMedia": postMedia,
    }
    return envelope_response(post_service.update_post(db, data, post_id))


# --------------------------------------------------
# DELETE POST
# --------------------------------------------------

@router.delete("/{post_id}")
def delete_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return envelope_response(post_service.recursive_delete(db, post_id))
