"""
FastAPI application - REST adapter for the tool-using agent.

Usage:
    python run_api.py

Or directly:
    uvicorn toolloop.adapters.rest.app:create_app --factory --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from toolloop import __version__
from toolloop.adapters.rest.routers import agent as agent_router
from toolloop.adapters.rest.routers import tools as tools_router
from toolloop.agent.executor import AgentExecutor
from toolloop.factory import AgentFactory
from toolloop.infrastructure.config import SERVER_PROFILE, Settings

logger = logging.getLogger(__name__)


def create_app(
    agent: Optional[AgentExecutor] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the API. Without an agent, one is created at startup from settings."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "agent", None) is None:
            config = settings or Settings.from_env()
            logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO))
            app.state.agent = AgentFactory(config).create_agent(SERVER_PROFILE)
            logger.info("Agent created for REST API")
        yield

    app = FastAPI(
        title="Tool-using Agent",
        version=__version__,
        description="ReAct-style agent that answers questions by calling local tools.",
        lifespan=lifespan,
    )
    app.state.agent = agent

    # CORS: permissive for development; tighten allowed_origins in production
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(agent_router.router)
    app.include_router(tools_router.router)

    @app.get("/health", tags=["health"])
    async def health(request: Request):
        current = getattr(request.app.state, "agent", None)
        return {
            "status": "ok",
            "version": __version__,
            "agent_ready": current is not None and current.is_ready(),
        }

    return app
