"""
adapters.cli.main - CLI adapter for the tool-using agent.

Mirrors toolloop.adapters.rest but for terminal use. Uses the same
AgentFactory and AgentExecutor as the REST API, with the smaller
CLI_PROFILE limits.

Commands
--------
  chat       Interactive chat session (/reset, /session, /tools, exit)
  ask        One-shot question
  tools      List the registered tools

Usage
-----
  toolloop ask "What is sqrt(2) * 10?"
  toolloop chat
"""

from __future__ import annotations

import asyncio
import logging

import typer
from rich import box
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from toolloop import __version__
from toolloop.agent.executor import AgentExecutor
from toolloop.domain.exceptions import ConfigurationError
from toolloop.domain.models import AgentResponse
from toolloop.factory import AgentFactory
from toolloop.infrastructure.config import CLI_PROFILE, Settings

console = Console()
app = typer.Typer(
    help="Tool-using agent CLI",
    add_completion=False,
    no_args_is_help=True,
)

EXIT_WORDS = ("exit", "quit", "q", "bye")


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _load_settings() -> Settings:
    try:
        settings = Settings.from_env()
    except ConfigurationError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(code=1)
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return settings


def _make_agent() -> AgentExecutor:
    """Build an agent with the CLI profile, or exit with a readable error."""
    factory = AgentFactory(_load_settings())
    try:
        return factory.create_agent(CLI_PROFILE)
    except ConfigurationError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(code=1)


def _print_response(response: AgentResponse) -> None:
    border = "green" if response.success else "yellow"
    console.print()
    console.print(Panel(Markdown(response.content or "_(no answer)_"), title="Agent", border_style=border))

    details = f"rounds: {response.rounds}"
    if response.tools_used:
        details += f" | tools: {', '.join(response.tools_used)}"
    console.print(f"[dim]{details}[/dim]")
    if response.error:
        console.print(f"[bold red]Error:[/bold red] {response.error}")


def _print_tools(agent_tools) -> None:
    table = Table(title="Available tools", box=box.SIMPLE_HEAVY)
    table.add_column("Name", style="bold cyan")
    table.add_column("Category")
    table.add_column("Description")
    for tool in agent_tools.all():
        table.add_row(tool.name, tool.category or "-", tool.description)
    console.print(table)


def _print_session(agent: AgentExecutor) -> None:
    info = agent.session_info()
    console.print(Panel(
        f"Session: [bold]{info['session_id']}[/bold]\n"
        f"Messages: {info['message_count']}\n"
        f"Tool calls: {info['tool_calls']}\n"
        f"Duration: {info['duration'] / 60:.1f} min",
        title="Session",
        border_style="blue",
    ))


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"toolloop v{__version__}")
        raise typer.Exit()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command()
def ask(
    question: str = typer.Argument(..., help="The question to ask the agent."),
) -> None:
    """Ask a one-shot question."""
    agent = _make_agent()

    async def _run() -> AgentResponse:
        with console.status("[bold cyan]Thinking…", spinner="dots"):
            return await agent.process(question)

    response = asyncio.run(_run())
    _print_response(response)
    if not response.success:
        raise typer.Exit(code=1)


@app.command()
def chat() -> None:
    """Start an interactive chat session."""
    agent = _make_agent()

    console.print(Panel(
        "[bold]Tool-using agent[/bold]\n"
        f"Up to {agent.config.max_rounds} reasoning rounds per question.\n"
        "Commands: [bold]/reset[/bold], [bold]/session[/bold], [bold]/tools[/bold]; "
        "[bold]exit[/bold] / [bold]quit[/bold] to stop.",
        border_style="cyan",
    ))

    async def _run() -> None:
        while True:
            try:
                user_input = Prompt.ask("\n[bold cyan]You[/bold cyan]").strip()
            except (KeyboardInterrupt, EOFError):
                console.print("\n[dim]Goodbye![/dim]")
                break

            if not user_input:
                continue
            if user_input.lower() in EXIT_WORDS:
                console.print("[dim]Goodbye![/dim]")
                break
            if user_input == "/reset":
                await agent.areset()
                console.print("[green]Session reset.[/green]")
                continue
            if user_input == "/session":
                _print_session(agent)
                continue
            if user_input == "/tools":
                _print_tools(agent.tools)
                continue

            with console.status("[bold cyan]Thinking…", spinner="dots"):
                response = await agent.process(user_input)
            _print_response(response)

    asyncio.run(_run())


@app.command()
def tools() -> None:
    """List the registered tools (no model connection needed)."""
    factory = AgentFactory(_load_settings())
    _print_tools(factory.create_tool_registry())


# ---------------------------------------------------------------------------
# Global version option
# ---------------------------------------------------------------------------

@app.callback()
def _callback(
    version: bool = typer.Option(
        False, "--version", "-v",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Tool-using agent CLI"""


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
