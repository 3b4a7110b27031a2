"""Pydantic models for REST API request/response validation."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


# --- Agent ---

class AgentRunBody(BaseModel):
    input: str = Field(..., min_length=1)


class AgentResponseOut(BaseModel):
    content: str
    success: bool
    rounds: int
    tools_used: list[str] = []
    error: Optional[str] = None


class MessageOut(BaseModel):
    id: str
    role: str
    content: str
    timestamp: float


class SessionOut(BaseModel):
    session_id: Optional[str]
    message_count: int
    tool_calls: int
    duration: float
    messages: list[MessageOut] = []


# --- Tools ---

class ToolOut(BaseModel):
    name: str
    description: str
    category: Optional[str] = None
    version: str
    parameters: dict[str, Any]
