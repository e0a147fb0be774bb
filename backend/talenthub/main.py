import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from talenthub.core.config import settings
from talenthub.db.base import Base
from talenthub.db.session import engine

# Import all models so SQLAlchemy can discover them for table creation
from talenthub.models import UserAccount, AdminRecord, Talent, Employer, Swipe  # noqa: F401

# Import API router
from talenthub.api.api import api_router
from talenthub.services.session_store import session_store
from talenthub.services.swipe_feed import feed_sessions

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables and start the session store."""
    Base.metadata.create_all(bind=engine)
    session_store.init()
    yield
    session_store.dispose()
    feed_sessions.clear()


app = FastAPI(
    title=settings.APP_NAME,
    description="Two-sided talent and employer matching",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS Middleware - allowlist from env (comma-separated)
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in settings.BACKEND_CORS_ORIGINS.split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint."""
    return {"message": f"Welcome to {settings.APP_NAME} API"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Include API router with /api/v1 prefix
app.include_router(api_router, prefix="/api/v1")

# Uploaded video pitches
os.makedirs(settings.MEDIA_ROOT, exist_ok=True)
app.mount(settings.MEDIA_URL, StaticFiles(directory=settings.MEDIA_ROOT), name="media")
