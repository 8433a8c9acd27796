"""CLI entry point for agentdeck"""

import logging

import typer
from rich.console import Console
from rich.table import Table
from rich import box
from rich.markup import escape

from agentdeck.core.completion import NO_SELECTION, PathCompleter
from agentdeck.core.config import Config, load_config
from agentdeck.core.errors import AgentDeckError
from agentdeck.core.git import validate_repo
from agentdeck.core.logger import setup_logging

app = typer.Typer(
    name="agentdeck",
    help="Run many coding agents side by side",
    add_completion=True,
)
repos_app = typer.Typer(help="Manage configured repositories")
app.add_typer(repos_app, name="repos")

console = Console()
logger = logging.getLogger(__name__)


def _load_config_or_exit() -> Config:
    try:
        return load_config()
    except AgentDeckError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", help="Write DEBUG logs to /tmp/agentdeck-debug.log"),
):
    """Run many coding agents side by side"""
    level = "DEBUG"
    if not debug:
        try:
            level = load_config().log_level
        except AgentDeckError:
            # Reported by the command that actually needs the config
            level = "INFO"
    setup_logging(level)


@app.command()
def dash():
    """Launch interactive TUI dashboard"""
    from agentdeck.tui import run_dashboard
    run_dashboard(_load_config_or_exit())


@app.command()
def complete(
    path: str = typer.Argument(..., help="Partial path, as typed into a path field"),
    presses: int = typer.Option(1, "--presses", "-n", min=1, help="Number of Tab presses to simulate"),
):
    """Show what Tab completion does for a partial path"""
    completer = PathCompleter()
    results = []
    text = path

    for _ in range(presses):
        result, ok = completer.complete(text)
        if not ok:
            break
        results.append(result)
        # Feed the result back like a text field would, keeping the
        # candidate set while cycling
        text = completer.prefix if completer.get_index() != NO_SELECTION else result

    if not results:
        console.print(f"[yellow]No completions for[/yellow] {escape(path)}")
        raise typer.Exit(code=1)

    for press, result in enumerate(results, start=1):
        console.print(f"[dim]Tab {press}:[/dim] [cyan]{escape(result)}[/cyan]", soft_wrap=True)

    completions = completer.get_completions()
    if len(completions) > 1:
        index = completer.get_index()
        table = Table(show_header=True, header_style="bold magenta", box=box.ROUNDED)
        table.add_column("", width=1)
        table.add_column("Candidate", style="white")

        for i, candidate in enumerate(completions):
            marker = "▶" if i == index else ""
            table.add_row(marker, candidate)

        console.print(table)
        if index == NO_SELECTION:
            console.print("[dim]Press Tab again to cycle through candidates[/dim]")


@repos_app.command("list")
def repos_list():
    """List configured repositories"""
    config = _load_config_or_exit()
    repos = config.get_repos()

    if not repos:
        console.print("[dim]No repositories configured[/dim]")
        console.print("\nAdd one with: [cyan]agentdeck repos add <path>[/cyan]")
        return

    table = Table(show_header=True, header_style="bold magenta", box=box.ROUNDED)
    table.add_column("#", style="dim")
    table.add_column("Path", style="cyan")
    for i, repo in enumerate(repos, start=1):
        table.add_row(str(i), repo)
    console.print(table)


@repos_app.command("add")
def repos_add(
    path: str = typer.Argument(..., help="Path to a git repository (~ allowed)"),
):
    """Add a repository"""
    config = _load_config_or_exit()

    try:
        resolved = validate_repo(path)
    except AgentDeckError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    if not config.add_repo(str(resolved)):
        console.print(f"[yellow]Repository already added:[/yellow] {resolved}")
        raise typer.Exit(code=1)

    try:
        config.save()
    except AgentDeckError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    logger.info("Added repository %s", resolved)
    console.print(f"✓ Added [cyan]{resolved}[/cyan]")


@repos_app.command("remove")
def repos_remove(
    path: str = typer.Argument(..., help="Repository path as listed by `repos list`"),
):
    """Remove a repository"""
    config = _load_config_or_exit()

    if not config.remove_repo(path):
        console.print(f"[yellow]Not a configured repository:[/yellow] {path}")
        raise typer.Exit(code=1)

    try:
        config.save()
    except AgentDeckError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    logger.info("Removed repository %s", path)
    console.print(f"✓ Removed [cyan]{path}[/cyan]")


if __name__ == "__main__":
    app()
