from app.config import settings


def absolute_media_url(path: str | None) -> str | None:
    """Prefixes locally stored media paths with the public base URL."""
    if not path:
        return None

    # Supabase public URLs are absolute already
    if path.startswith(("http://", "https://")):
        return path

    return f"{settings.BASE_URL.rstrip('/')}/{path.lstrip('/')}"
