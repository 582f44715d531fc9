"""Application entrypoint and FastAPI factory."""
from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from alembic import command
from alembic.config import Config
from strawberry.fastapi import GraphQLRouter

from bulk_transfer.api.errors import register_exception_handlers
from bulk_transfer.api.router import router as api_router
from bulk_transfer.core.database import ENGINE, create_database_schema
from bulk_transfer.core.logging import configure_logging
from bulk_transfer.core.settings import ALEMBIC_INI, Settings, get_settings
from bulk_transfer.graphql.context import context_getter
from bulk_transfer.graphql.schema import schema

logger = logging.getLogger(__name__)

SQLITE_PREFIXES = ("sqlite+aiosqlite:///", "sqlite:///")
CORS_METHODS = ["GET", "PUT", "POST", "DELETE"]


async def _run_migrations() -> None:
    """Execute Alembic migrations; fallback to metadata create_all on failure."""

    config = Config(str(ALEMBIC_INI))
    try:
        await asyncio.to_thread(command.upgrade, config, "head")
    except Exception:
        logger.warning("Alembic upgrade failed, creating schema from metadata", exc_info=True)
        await create_database_schema()


def _ensure_sqlite_directory(settings: Settings) -> None:
    """If using SQLite file storage, ensure parent directory exists."""

    url = settings.database_url
    if not url.startswith("sqlite") or ":memory:" in url:
        return
    database_path = url
    for prefix in SQLITE_PREFIXES:
        database_path = database_path.removeprefix(prefix)
    db_file = Path(database_path).expanduser().resolve()
    db_file.parent.mkdir(parents=True, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan, ensuring shared resources are initialized/closed."""

    settings = get_settings()
    _ensure_sqlite_directory(settings)
    await _run_migrations()
    app.state.settings = settings
    logger.info("Service started", extra={"environment": settings.environment})
    try:
        yield
    finally:
        await ENGINE.dispose()


def create_app() -> FastAPI:
    """Application factory used by ASGI servers."""

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json, settings.service_name)
    graphql_app = GraphQLRouter(schema, path="/graphql", context_getter=context_getter)

    application = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=CORS_METHODS,
        allow_headers=["Content-Type"],
    )
    register_exception_handlers(application)

    application.include_router(api_router)
    application.include_router(graphql_app, prefix="")

    return application


app = create_app()


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run("bulk_transfer.main:app", host="0.0.0.0", port=8000, reload=True)
