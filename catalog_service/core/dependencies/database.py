"""Database dependencies for FastAPI route handlers.

`get_db_session()` ties a session to the HTTP request; use it with
`Depends(get_db_session)`. Scripts and background code open sessions with
`catalog_service.infra.database.get_async_session()` instead. Both use the
same session factory.

Routers own the transaction boundary: they commit after a successful
command, and anything left uncommitted is rolled back when the session closes.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from catalog_service.infra.database import get_async_session


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency for database session.

    Example:
        @router.get("/resources")
        async def list_resources(session: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with get_async_session() as session:
        yield session
