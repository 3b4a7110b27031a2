"""
toolloop - A tool-using conversational agent.

Layers:
    domain/          value objects, results, exceptions, ports
    agent/           memory, directive parsing, prompts, executor, tools
    infrastructure/  settings and the LangChain model gateway
    adapters/        CLI (Typer) and REST (FastAPI)
    factory.py       composition root
"""

__version__ = "0.1.0"
