"""
agent - Conversational agent orchestration layer.

Contains tools, memory, prompts, directive parsing and the executor that
runs the model + tool loop. Depends on domain/ only. Never imports from
infrastructure/.
"""

from toolloop.agent.executor import AgentExecutor
from toolloop.agent.memory import ConversationMemory
from toolloop.agent.tools import BaseTool, ToolRegistry

__all__ = ["AgentExecutor", "BaseTool", "ConversationMemory", "ToolRegistry"]
