"""Taskboard FastAPI application."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard.api.admin import router as admin_router
from taskboard.api.auth import router as auth_router
from taskboard.api.boards import router as boards_router
from taskboard.api.health import router as health_router
from taskboard.api.tasks import router as tasks_router
from taskboard.config import settings
from taskboard.errors import register_exception_handlers

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Taskboard - Multi-tenant Kanban API",
    description="Companies, boards with custom workflow sections, tasks and their activity trail",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health_router, prefix="/api", tags=["Health"])
app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
app.include_router(boards_router, prefix="/api/boards", tags=["Boards"])
app.include_router(tasks_router, prefix="/api/tasks", tags=["Tasks"])
app.include_router(admin_router, prefix="/api/admin", tags=["Admin"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"service": "taskboard", "version": "0.1.0", "docs": "/docs"}
