"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from blog_api.api import posts, users
from blog_api.config import get_settings
from blog_api.database import init_db
from blog_api.errors import register_exception_handlers

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    init_db()
    logger.info(f"Database ready, serving uploads from {settings.upload_dir}")
    yield


app = FastAPI(
    title="Blog API",
    description="Authors, posts, avatars and post thumbnails",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Uploaded avatars and thumbnails, addressed by stored filename
Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")

# Register routers
app.include_router(users.router)
app.include_router(posts.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}


def run() -> None:
    """Serve the app with uvicorn on the configured port."""
    import uvicorn

    uvicorn.run("blog_api.main:app", host="0.0.0.0", port=settings.port)  # noqa: S104


if __name__ == "__main__":
    run()
