from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from pydantic import BaseModel

from app.config import get_assistant_settings
from knowledge.static_store import get_knowledge_store


class HealthResponse(BaseModel):
    status: str
    kpis: int
    tools: int
    members_indexed: int


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = get_assistant_settings().log_level
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Build the knowledge store and compile the assistant graph before serving."""
    from agent.assistant import get_assistant

    get_assistant()
    logging.getLogger(__name__).info(
        "Assistant ready with %d tools", len(get_knowledge_store().list_tools())
    )
    yield


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _configure_logging()
    settings = get_assistant_settings()

    application = FastAPI(
        title=settings.api_title,
        version="1.0.0",
        lifespan=_lifespan,
    )

    from app.api.routers import (
        bookmarks_router,
        chat_router,
        knowledge_router,
        members_router,
    )

    application.include_router(chat_router)
    application.include_router(knowledge_router)
    application.include_router(members_router)
    application.include_router(bookmarks_router)

    @application.get("/health", response_model=HealthResponse)
    def healthcheck() -> HealthResponse:
        store = get_knowledge_store()
        return HealthResponse(
            status="ok",
            kpis=len(store.list_kpis()),
            tools=len(store.list_tools()),
            members_indexed=len(store.search_members_by_name("")),
        )

    return application


app = create_app()
