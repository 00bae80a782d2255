"""
Social API: Database Session Management
=======================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine without connection pooling and provides a
       session dependency that binds the session to the configured schema,
       commits on success, rolls back on error and always closes.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Connection Strategy:
    poolclass=NullPool: every session opens its own connection and the
    connection is closed when the session closes. One request, one
    connection, nothing shared between requests.

Schema Resolution:
    Models are declared without a schema. When a session procures its
    connection the `schema_translate_map` execution option rewrites the
    unqualified table names to `settings.db_schema` (e.g. social.posts).
"""

import logging
from typing import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool
from sqlalchemy.schema import CreateSchema

from social_api.config import settings
from social_api.exceptions import DatabaseError

logger = logging.getLogger(__name__)


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(
    settings.database_url,
    poolclass=NullPool,
    # Echo SQL queries in DEBUG mode for development visibility
    echo=settings.log_level == "DEBUG",
)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: rows read during the request stay readable after
# the commit in get_db_session
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Models register with the shared metadata, which `init_models()` uses to
    create missing tables.
    """
    pass


def schema_execution_options() -> dict:
    """Execution options that point unqualified tables at the configured schema."""
    schema = settings.schema_name
    if schema is None:
        return {}
    return {"schema_translate_map": {None: schema}}


async def resolve_schema(session: AsyncSession) -> None:
    """
    Procure the session's connection bound to the configured schema.

    Execution options passed to `AsyncSession.connection()` only take effect
    when the connection is first procured, so this must run before the
    handler issues any statement.
    """
    options = schema_execution_options()
    if options:
        await session.connection(execution_options=options)


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Binds its connection to the configured schema
        3. Yields it to the route handler
        4. After the handler returns: commits the transaction; a failed commit
           raises DatabaseError
        5. On error: rolls back and re-raises for the exception handlers
        6. Always: closes the session; a failure to close is only logged

    Example usage in a route:
        @router.get("/posts.get")
        async def list_posts(db: AsyncSession = Depends(get_db_session, scope="function")):
            return await post_service.list_posts(db)
    """
    session = async_session_factory()
    try:
        await resolve_schema(session)
        yield session
        try:
            await session.commit()
        except SQLAlchemyError as e:
            logger.error("Commit failed: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save changes. Please try again.",
                context={"error_type": type(e).__name__},
            )
    except Exception:
        await session.rollback()
        raise
    finally:
        try:
            await session.close()
        except Exception:
            logger.exception("Failed to close database session")


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_models(bind: AsyncEngine = engine) -> None:
    """
    Create the configured schema and any missing tables.

    When:  At startup if DB_CREATE_TABLES is set, and by the test suite.
    How:   CREATE SCHEMA IF NOT EXISTS (when a schema is configured), then
           metadata.create_all() under the same schema translation.
    """
    # Register models with Base.metadata
    from social_api.models.post import Post  # noqa: F401

    options = schema_execution_options()
    async with bind.begin() as conn:
        if settings.schema_name is not None:
            await conn.execute(CreateSchema(settings.schema_name, if_not_exists=True))
        conn = await conn.execution_options(**options)
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured (schema=%s)", settings.schema_name or "<default>")


async def dispose_engine() -> None:
    """Closes the engine during application shutdown."""
    await engine.dispose()
