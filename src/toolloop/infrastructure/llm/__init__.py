"""
infrastructure.llm - Chat model construction and the LangChain gateway.
"""

from toolloop.infrastructure.llm.gateway import LangChainGateway
from toolloop.infrastructure.llm.llm_builder import build_llm

__all__ = ["LangChainGateway", "build_llm"]
