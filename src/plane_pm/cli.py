"""Main CLI for Plane PM."""

from pathlib import Path
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import configure_logging
from .errors import PlaneError, format_error
from .output import format_response, render_cli
from .projects import REGISTRY
from .resolver import resolve_ticket
from .services import (
    get_client,
    resolve_context_info,
    list_issues as svc_list_issues,
    get_issue as svc_get_issue,
    list_comments as svc_list_comments,
    list_links as svc_list_links,
)

app = typer.Typer(
    name="plane-pm",
    help="Plane PM - Plane issue management by ticket ID",
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Plane PM - Plane issue management by ticket ID."""
    configure_logging(verbose=verbose)


def _run(
    operation: Callable[[], dict],
    output_format: str,
    text_renderer: Optional[Callable[[dict], str]] = None,
) -> None:
    """Run an operation and print its result, exiting 1 on Plane errors."""
    try:
        result = operation()
    except PlaneError as e:
        console.print(format_error(e), style="red", markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(1)
    response = format_response(result, output_format, text_renderer)
    console.print(render_cli(response), markup=False, highlight=False, soft_wrap=True)


# ============================================================================
# Context Commands
# ============================================================================


@app.command("context")
def show_context(
    path: Optional[Path] = typer.Option(None, "--path", "-p", help="Path to check context for"),
    output_format: str = typer.Option("text", "--format", "-f", help="Output format (json|text)"),
):
    """Show the Plane connection settings detected for a directory."""
    def render(info: dict) -> str:
        lines = [
            f"Config source: {info['config_source']}",
            f"Config path: {info['config_path'] or '-'}",
            f"Base URL: {info['base_url']}",
            f"Workspace: {info['workspace']}",
            f"API key ({info['api_key_env']}): "
            + ("configured" if info["api_key_configured"] else "NOT SET"),
        ]
        return "\n".join(lines)

    _run(lambda: resolve_context_info(path or Path.cwd()), output_format, render)


@app.command("projects")
def show_projects():
    """List known projects and their workflow states."""
    table = Table(title="Plane projects")
    table.add_column("Code", style="cyan")
    table.add_column("Name")
    table.add_column("States")
    for project in REGISTRY:
        table.add_row(project.code, project.name, ", ".join(project.state_names()))
    console.print(table)


@app.command("serve")
def serve():
    """Run the MCP server over stdio."""
    from .mcp_server import mcp

    mcp.run(transport="stdio")


# ============================================================================
# Ticket Commands
# ============================================================================


@app.command("resolve")
def resolve(
    ticket_id: str = typer.Argument(..., help="Ticket ID (e.g., SBS-123)"),
    path: Optional[Path] = typer.Option(None, "--path", help="Path for context detection"),
    output_format: str = typer.Option("json", "--format", "-f", help="Output format (json|text)"),
):
    """Resolve a ticket ID to its Plane project and issue UUIDs."""
    def operation() -> dict:
        resolved = resolve_ticket(ticket_id, get_client(path))
        return {
            "ticket_id": ticket_id,
            "project": resolved.project,
            "project_id": resolved.project_id,
            "issue_id": resolved.issue_id,
        }

    _run(operation, output_format)


@app.command("list")
def list_issues(
    project: str = typer.Argument(..., help="Project code (e.g., SBS)"),
    state: Optional[str] = typer.Option(None, "-s", "--state", help="Filter by state name (e.g., 'In Progress')"),
    priority: Optional[str] = typer.Option(None, "-p", "--priority", help="Filter by priority (none|low|medium|high|urgent)"),
    limit: int = typer.Option(50, "--limit", help="Maximum issues to return"),
    path: Optional[Path] = typer.Option(None, "--path", help="Path for context detection"),
    output_format: str = typer.Option("json", "--format", "-f", help="Output format (json|text)"),
):
    """List issues in a project."""
    _run(
        lambda: svc_list_issues(
            project.upper(),
            state=state,
            priority=priority,
            limit=limit,
            client=get_client(path),
        ),
        output_format,
    )


@app.command("show")
def show_issue(
    ticket_id: str = typer.Argument(..., help="Ticket ID (e.g., SBS-123)"),
    path: Optional[Path] = typer.Option(None, "--path", help="Path for context detection"),
    output_format: str = typer.Option("json", "--format", "-f", help="Output format (json|text)"),
):
    """Show full issue details."""
    _run(lambda: svc_get_issue(ticket_id, client=get_client(path)), output_format)


@app.command("comments")
def show_comments(
    ticket_id: str = typer.Argument(..., help="Ticket ID (e.g., SBS-123)"),
    path: Optional[Path] = typer.Option(None, "--path", help="Path for context detection"),
    output_format: str = typer.Option("json", "--format", "-f", help="Output format (json|text)"),
):
    """List comments on an issue."""
    _run(lambda: svc_list_comments(ticket_id, client=get_client(path)), output_format)


@app.command("links")
def show_links(
    ticket_id: str = typer.Argument(..., help="Ticket ID (e.g., SBS-123)"),
    path: Optional[Path] = typer.Option(None, "--path", help="Path for context detection"),
    output_format: str = typer.Option("json", "--format", "-f", help="Output format (json|text)"),
):
    """List external links attached to an issue."""
    _run(lambda: svc_list_links(ticket_id, client=get_client(path)), output_format)


if __name__ == "__main__":
    app()
