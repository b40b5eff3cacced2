"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rift_sim.config import settings
from rift_sim.api.routes.matches import router as matches_router
from rift_sim.repositories.roster_repository import RosterRepository, default_knowledge_dir


def get_knowledge_dir() -> Path:
    """Knowledge directory from settings, or the repo's knowledge/ folder."""
    if settings.knowledge_dir:
        knowledge_dir = Path(settings.knowledge_dir)
        if knowledge_dir.is_absolute():
            return knowledge_dir
        # Relative path - resolve from repo root
        return default_knowledge_dir().parent / knowledge_dir
    return default_knowledge_dir()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Startup: load reference data once; simulations only read it
    if not hasattr(app.state, "repository"):
        app.state.repository = RosterRepository(get_knowledge_dir())
    yield


app = FastAPI(
    title="Rift Sim",
    description="LoL esports match simulator - drafts, games and fearless series",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "rift-sim"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Rift Sim API",
        "version": "0.1.0",
        "docs": "/docs",
    }


app.include_router(matches_router)
