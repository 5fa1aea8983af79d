"""Equation Solver CLI - Main entry point.

This module provides the command-line interface for Equation Solver.
"""

import asyncio
import logging
from typing import Optional

import click

from equation_solver import __version__


def _configure_logging(level: str) -> None:
    """Route log records through rich."""
    from rich.logging import RichHandler

    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="equation-solver")
def cli() -> None:
    """Equation Solver - solve equations with an AI math tutor."""


@cli.command()
@click.option("--host", type=str, default=None, help="Listen address (default: HOST or 0.0.0.0)")
@click.option("--port", type=int, default=None, help="Listen port (default: PORT or 3000)")
@click.option("--reload", is_flag=True, help="Reload on code changes (development)")
@click.option("--log-level", type=str, default=None, help="Log level (default: LOG_LEVEL or INFO)")
def serve(
    host: Optional[str],
    port: Optional[int],
    reload: bool,
    log_level: Optional[str],
) -> None:
    """Run the HTTP server."""
    import uvicorn
    from rich.console import Console

    from equation_solver.core.config import get_settings

    settings = get_settings()
    level = log_level or settings.log_level
    _configure_logging(level)

    console = Console()
    console.print(
        f"[bold cyan]Equation Solver[/bold cyan] v{__version__} "
        f"listening on port [green]{port or settings.port}[/green]"
    )

    uvicorn.run(
        "equation_solver.api.app:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=level.lower(),
        log_config=None,
    )


@cli.command()
@click.argument("equation")
@click.option("-v", "--verbose", is_flag=True, help="Show stream events as they arrive")
@click.pass_context
def solve(ctx: click.Context, equation: str, verbose: bool) -> None:
    """Solve EQUATION once and print the assistant's answer."""
    from rich.console import Console
    from rich.panel import Panel

    from equation_solver.core.config import get_settings

    settings = get_settings()
    _configure_logging("DEBUG" if verbose else settings.log_level)

    console = Console()
    try:
        with console.status("[cyan]Solving...[/cyan]"):
            answer = asyncio.run(_solve_once(equation))
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        ctx.exit(1)

    console.print(Panel(answer, title=equation, border_style="cyan"))


async def _solve_once(equation: str) -> str:
    """Run a single solve and release the client afterwards."""
    from equation_solver.api.services.solver import EquationSolver

    solver = EquationSolver()
    try:
        return await solver.solve(equation)
    finally:
        await solver.aclose()


@cli.command()
def version() -> None:
    """Show version information."""
    from rich.console import Console
    from rich.panel import Panel

    console = Console()

    info = f"""[bold cyan]Equation Solver[/bold cyan] v{__version__}

Solves equations with an AI math tutor assistant."""

    console.print(Panel(info, border_style="cyan"))


if __name__ == "__main__":
    cli()
