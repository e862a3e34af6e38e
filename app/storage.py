import logging
import os
import shutil
import uuid
from pathlib import Path

from fastapi import UploadFile
from app.config import settings

logger = logging.getLogger(__name__)

# Supabase client, only when it is the configured backend
if settings.STORAGE_BACKEND == "supabase":
    from app.supabase_client import supabase


MAX_IMAGE_SIZE = 5 * 1024 * 1024
MAX_VIDEO_SIZE = 50 * 1024 * 1024


def validate_file_size(file: UploadFile):
    file.file.seek(0, os.SEEK_END)
    size = file.file.tell()
    file.file.seek(0)

    if file.content_type and file.content_type.startswith("image/"):
        if size > MAX_IMAGE_SIZE:
            return False, "Image too large (max 5MB)."

    if file.content_type and file.content_type.startswith("video/"):
        if size > MAX_VIDEO_SIZE:
            return False, "Video too large (max 50MB)."

    return True, None


def extract_storage_key(url_or_path: str) -> str:
    """
    Converts Supabase public URL → storage key.
    """

    if not url_or_path:
        return ""

    if url_or_path.startswith("http"):
        marker = f"/storage/v1/object/public/{settings.SUPABASE_BUCKET}/"
        if marker in url_or_path:
            return url_or_path.split(marker)[1].split("?")[0]

    return url_or_path.strip("/")


def save_file(folder: str, file: UploadFile, filename: str | None = None) -> str:
    folder = folder.strip("/")

    if not filename:
        filename = f"{uuid.uuid4()}_{file.filename}"

    # local folder, served under /media
    if settings.STORAGE_BACKEND == "local":
        folder_path = Path(settings.LOCAL_MEDIA_PATH) / folder
        folder_path.mkdir(parents=True, exist_ok=True)

        file_path = folder_path / filename

        file.file.seek(0)
        with open(file_path, "wb") as buffer:
            shutil.copyfileobj(file.file, buffer)

        rel = file_path.relative_to(settings.LOCAL_MEDIA_PATH)
        return f"/media/{rel}".replace("\\", "/")

    # Supabase bucket, public URL
    elif settings.STORAGE_BACKEND == "supabase":
        storage_key = f"{folder}/{filename}"

        file.file.seek(0)
        contents = file.file.read()

        if not contents:
            raise RuntimeError("File is empty – nothing to upload")

        res = supabase.storage.from_(settings.SUPABASE_BUCKET).upload(
            storage_key,
            contents,
            {
                "content-type": file.content_type or "application/octet-stream",
                "upsert": "true",
            },
        )

        if not res:
            raise RuntimeError("Supabase upload failed (no response)")

        logger.info("Supabase upload OK: %s", storage_key)

        return supabase.storage.from_(settings.SUPABASE_BUCKET).get_public_url(
            storage_key
        )

    else:
        raise ValueError("Invalid STORAGE_BACKEND")


def save_to_storage(file: UploadFile, scope_key: str) -> str:
    """
    Uploads a post attachment under the given scope (company) key and
    returns its URL.
    """
    ok, err = validate_file_size(file)
    if not ok:
        raise ValueError(err)

    ext = os.path.splitext(file.filename or "")[1].lower()
    filename = f"post_{uuid.uuid4().hex}{ext}"
    folder = f"companies/{scope_key}/posts"

    return save_file(folder, file, filename)


def delete_file(path: str):
    if not path:
        return

    if settings.STORAGE_BACKEND == "local":
        rel = path.lstrip("/")
        if rel.startswith("media/"):
            rel = rel[len("media/"):]
        fs_path = Path(settings.LOCAL_MEDIA_PATH) / rel
        if fs_path.exists():
            try:
                os.remove(fs_path)
            except OSError as e:
                logger.warning("Local delete failed for %s: %s", fs_path, e)

    elif settings.STORAGE_BACKEND == "supabase":
        key = extract_storage_key(path)
        try:
            supabase.storage.from_(settings.SUPABASE_BUCKET).remove([key])
            logger.info("Supabase delete OK: %s", key)
        except Exception as e:
            logger.warning("Supabase delete failed for %s: %s", key, e)
