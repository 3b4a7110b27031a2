"""Tool catalogue endpoint."""

from fastapi import APIRouter, Depends

from toolloop.adapters.rest.dependencies import get_agent
from toolloop.adapters.rest.schemas import ToolOut
from toolloop.agent.executor import AgentExecutor

router = APIRouter(tags=["tools"])


@router.get("/tools", response_model=list[ToolOut])
async def list_tools(agent: AgentExecutor = Depends(get_agent)):
    return [
        ToolOut(
            name=tool.name,
            description=tool.description,
            category=tool.category,
            version=tool.version,
            parameters=tool.parameters.to_json_schema(),
        )
        for tool in agent.tools.all()
    ]
