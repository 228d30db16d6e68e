"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from intentswap import __version__
from intentswap.agent import SwapAgent
from intentswap.agent.store import SessionStore
from intentswap.config import Settings, get_settings
from intentswap.storage import SqlSessionStore, close_db, get_session_factory, init_db

logger = logging.getLogger(__name__)


async def build_store(settings: Settings) -> Optional[SessionStore]:
    """SQL store when configured; None means the agent's in-memory default."""
    if settings.session_store != "database":
        return None
    await init_db(settings.database_url)
    logger.info("Database initialized for session storage")
    return SqlSessionStore(get_session_factory(), settings.session_pool_max)


def create_app(agent: Optional[SwapAgent] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        agent: Pre-built agent (tests); built from settings on startup otherwise
    """
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if agent is None:
            store = await build_store(settings)
            app.state.agent = SwapAgent.from_settings(settings, store=store)
        yield
        if settings.session_store == "database":
            await close_db()

    app = FastAPI(
        title="IntentSwap API",
        description="Conversational cross-chain swaps over NEAR Intents",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    if agent is not None:
        app.state.agent = agent

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from intentswap.api.routes import agent as agent_routes
    from intentswap.api.routes import health

    app.include_router(health.router, tags=["Health"])
    app.include_router(agent_routes.router, tags=["Agent"])

    return app
