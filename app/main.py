import logging
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.database import Base, engine
from app.config import settings
from app.core.logging_config import setup_logging

# Import models so SQLAlchemy registers tables
from app.models import (  # noqa: F401
    user,
    group,
    group_post,
    post,
    comment,
    like,
    report,
    group_attachment,
)

# Routers
from app.routers import (
    auth_router,
    post_router,
    group_router,
)

setup_logging()
logger = logging.getLogger(__name__)

# -----------------------
# CREATE APP
# -----------------------
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Backend API for group posts and their media.",
    version="1.0.0",
)
logger.info("Database URL: %s", settings.DATABASE_URL)

# -----------------------
# CORS
# -----------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],   # allow all during development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -----------------------
# DATABASE TABLES
# -----------------------
Base.metadata.create_all(bind=engine)

# -----------------------
# STATIC MEDIA FILES
# -----------------------
os.makedirs(settings.LOCAL_MEDIA_PATH, exist_ok=True)
app.mount("/media", StaticFiles(directory=settings.LOCAL_MEDIA_PATH), name="media")

# -----------------------
# ROUTES
# -----------------------
app.include_router(auth_router.router)
app.include_router(post_router.router)
app.include_router(group_router.router)


# -----------------------
# HEALTH CHECK
# -----------------------
@app.get("/")
def root():
    return {"message": "Groups API is running!"}
