"""Async Postgres connection management for the interaction memory.

Uses SQLAlchemy's async engine with SQLModel sessions. The engine is created
lazily from DATABASE_URL so importing this module never touches the network.
"""
import os
import ssl
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional
from urllib.parse import urlparse, parse_qs, urlencode, urlunparse

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, AsyncEngine, async_sessionmaker

logger = logging.getLogger(__name__)

# asyncpg rejects these libpq-style query parameters
_UNSUPPORTED_QUERY_PARAMS = ("sslmode", "channel_binding", "options")
_SSL_MODES = ("require", "verify-ca", "verify-full")

_engine: Optional[AsyncEngine] = None
_session_maker: Optional[async_sessionmaker] = None


def normalize_database_url(database_url: str) -> tuple[str, dict]:
    """Convert a libpq-style Postgres URL into an asyncpg URL.

    Args:
        database_url: URL as handed out by the hosting provider, e.g.
            postgresql://user:pw@host/db?sslmode=require

    Returns:
        Tuple of (postgresql+asyncpg URL, connect_args dict).
    """
    parsed = urlparse(database_url)
    query_params = parse_qs(parsed.query)

    sslmode = query_params.get("sslmode", [""])[0]
    kept_params = {
        k: v for k, v in query_params.items() if k not in _UNSUPPORTED_QUERY_PARAMS
    }

    clean_url = urlunparse((
        "postgresql+asyncpg",
        parsed.netloc,
        parsed.path,
        parsed.params,
        urlencode(kept_params, doseq=True) if kept_params else "",
        parsed.fragment,
    ))

    connect_args = {}
    if sslmode in _SSL_MODES:
        ssl_context = ssl.create_default_context()
        ssl_context.check_hostname = False
        ssl_context.verify_mode = ssl.CERT_NONE
        connect_args["ssl"] = ssl_context

    return clean_url, connect_args


def get_engine() -> AsyncEngine:
    """Get or create the shared async engine.

    Raises:
        ValueError: If DATABASE_URL is not set.
    """
    global _engine

    if _engine is None:
        database_url = os.getenv("DATABASE_URL")
        if not database_url:
            raise ValueError("DATABASE_URL environment variable is not set")

        url, connect_args = normalize_database_url(database_url)
        _engine = create_async_engine(
            url,
            pool_pre_ping=True,
            pool_size=5,
            max_overflow=10,
            pool_recycle=300,
            connect_args=connect_args,
        )
        logger.info(f"Database engine created: host={urlparse(url).hostname}")

    return _engine


def get_session_maker() -> async_sessionmaker:
    global _session_maker

    if _session_maker is None:
        _session_maker = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False
        )

    return _session_maker


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Async context manager yielding a session; rolls back on error.

    Usage:
        async with get_async_session() as session:
            result = await session.execute(query)
    """
    session_maker = get_session_maker()
    async with session_maker() as session:
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.error(f"Database session error: {e}", exc_info=True)
            raise


async def close_engine() -> None:
    """Dispose the engine. Call on shutdown."""
    global _engine, _session_maker

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_maker = None
        logger.info("Database engine closed")
