# @TASK S0-T0.3 - FastAPI app entrypoint

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from journal.config import get_settings
from journal.database import engine

settings = get_settings()
logging.getLogger("journal").setLevel(settings.LOG_LEVEL.upper())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown events."""
    # Startup: create all database tables if they don't exist
    from journal.database import Base
    from journal import models  # noqa: F401 - Import models to register them with Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield
    # Shutdown: dispose the async engine connection pool
    await engine.dispose()


app = FastAPI(
    title="Journal Search",
    description="Cross-entity search over journal collections, items and tags",
    version="0.1.0",
    lifespan=lifespan,
)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Router includes ---
from journal.api.search import router as search_router  # noqa: E402
from journal.api.tags import router as tags_router  # noqa: E402

app.include_router(search_router, prefix="/api")
app.include_router(tags_router, prefix="/api")


@app.get("/api/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint.

    Returns a simple status response to verify the API is running.
    """
    return {"status": "ok"}
