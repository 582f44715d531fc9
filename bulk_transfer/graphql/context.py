"""GraphQL context utilities."""
from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from strawberry.fastapi import BaseContext

from bulk_transfer.core.database import get_session_factory


@dataclass(slots=True)
class GraphQLContext(BaseContext):
    """GraphQL-specific request context holding the store session factory."""

    session_factory: async_sessionmaker[AsyncSession]


def context_getter(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> GraphQLContext:
    """FastAPI-compatible context getter for Strawberry GraphQL router."""

    return GraphQLContext(session_factory=session_factory)
