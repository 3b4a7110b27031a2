"""Agent endpoints: run a turn, reset, inspect the session."""

from fastapi import APIRouter, Depends

from toolloop.adapters.rest.dependencies import get_agent
from toolloop.adapters.rest.schemas import AgentResponseOut, AgentRunBody, MessageOut, SessionOut
from toolloop.agent.executor import AgentExecutor

router = APIRouter(prefix="/agent", tags=["agent"])


@router.post("/run", response_model=AgentResponseOut)
async def run_agent(
    body: AgentRunBody,
    agent: AgentExecutor = Depends(get_agent),
):
    response = await agent.process(body.input)
    return AgentResponseOut(
        content=response.content,
        success=response.success,
        rounds=response.rounds,
        tools_used=list(response.tools_used),
        error=response.error,
    )


@router.post("/reset")
async def reset_agent(agent: AgentExecutor = Depends(get_agent)):
    await agent.areset()
    return {"status": "reset"}


@router.get("/session", response_model=SessionOut)
async def get_session(agent: AgentExecutor = Depends(get_agent)):
    info = agent.session_info()
    snapshot = agent.get_session()
    messages = snapshot.messages if snapshot is not None else ()
    return SessionOut(
        **info,
        messages=[
            MessageOut(id=m.id, role=m.role.value, content=m.content, timestamp=m.timestamp)
            for m in messages
        ],
    )
