from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from roi_simulator.config import Settings
from roi_simulator.models import Base

logger = logging.getLogger(__name__)


engine: Engine | None = None
_session_factory: sessionmaker | None = None


class _SessionWrapper:
    """Callable proxy returning sessions from the current factory."""

    def __call__(self, *args: Any, **kwargs: Any):
        if _session_factory is None:
            raise RuntimeError("Database not initialized")
        return _session_factory(*args, **kwargs)


SessionLocal = _SessionWrapper()


def init_db(cfg: Settings) -> None:
    """Create engine and session factory using SQLAlchemy's ``create_engine``."""
    global engine, _session_factory

    engine = create_engine(cfg.database_url, future=True, **_engine_options(cfg))
    _session_factory = sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )

    if cfg.db_create_all:
        Base.metadata.create_all(engine)
    logger.info("Database initialized (%s)", engine.dialect.name)


def _engine_options(cfg: Settings) -> dict[str, Any]:
    if cfg.database_url.startswith("sqlite"):
        # sessions are used from worker threads via asyncio.to_thread
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": cfg.db_pool_size,
        "max_overflow": 0,
        "pool_recycle": 30,
        "pool_pre_ping": True,
    }
