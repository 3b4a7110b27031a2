"""
Shared FastAPI dependencies.

- get_agent(): returns the AgentExecutor stored on app.state at startup.
"""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from toolloop.agent.executor import AgentExecutor


def get_agent(request: Request) -> AgentExecutor:
    agent = getattr(request.app.state, "agent", None)
    if agent is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Agent not initialized.",
        )
    return agent
