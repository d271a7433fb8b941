"""MCP Server for Plane PM - Plane issue management.

This MCP server exposes Plane issues, comments and external links to AI
assistants. Issues are addressed by display ticket IDs (e.g. SBS-123) and
workflow states by name (e.g. "In Progress"); both are translated to Plane
UUIDs before any API call.
"""

import json
import logging
import os
from typing import Annotated, Any, Callable, Literal, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, TextContent
from pydantic import AnyUrl, Field

from .config import configure_logging
from .errors import PlaneError, format_error
from .plane_client import PlaneClient
from .services import (
    UNSET,
    get_client,
    list_issues as svc_list_issues,
    get_issue as svc_get_issue,
    create_issue as svc_create_issue,
    update_issue as svc_update_issue,
    delete_issue as svc_delete_issue,
    list_comments as svc_list_comments,
    add_comment as svc_add_comment,
    list_links as svc_list_links,
    add_link as svc_add_link,
)

logger = logging.getLogger(__name__)

# Kept in sync with plane_pm.projects.PROJECTS
ProjectCode = Literal["SBS", "OMNI", "MOB", "MWP", "DE", "QUELL"]
Priority = Literal["none", "low", "medium", "high", "urgent"]

TicketIdArg = Annotated[
    str, Field(description="Ticket ID in display format (e.g., SBS-123, MOB-45)")
]
ProjectArg = Annotated[
    ProjectCode, Field(description="Project identifier (SBS, OMNI, MOB, MWP, DE, QUELL)")
]

# Create the MCP server
mcp = FastMCP(
    "plane-pm",
    instructions="""Plane PM - Plane issue management

## Ticket IDs
Issues are addressed by display ticket IDs: `<PROJECT>-<NUMBER>`, e.g. `SBS-123`.
Projects: SBS, OMNI, MOB, MWP, DE, QUELL.

## States
Pass workflow state NAMES ("Todo", "In Progress", "Done"), never UUIDs.
Each project has its own workflow; an invalid name returns the valid ones.

## Quick Reference

| Goal | Tool |
|------|------|
| Browse a project | `plane_list_issues(project, state=None, priority=None)` |
| Read a ticket | `plane_get_issue("SBS-123")` |
| Create a ticket | `plane_create_issue(project, name, ...)` |
| Move a ticket | `plane_update_issue("SBS-123", state="In Progress")` |
| Discuss | `plane_list_comments` / `plane_add_comment` (HTML) |
| External refs | `plane_list_links` / `plane_add_link` |
""",
)


def _get_client() -> PlaneClient:
    """Get a Plane client for the server's working directory."""
    return get_client()


def _text_result(text: str, **kwargs: Any) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], **kwargs)


def _call(operation: Callable[..., dict], *args: Any, **kwargs: Any) -> CallToolResult:
    """Run a service operation and wrap its outcome as a tool result.

    A Plane error becomes an error result whose only content is the
    rendered message, so the host sees exactly ``format_error`` text.
    Argument validation failures never get here; FastMCP reports them.
    """
    try:
        result = operation(*args, client=_get_client(), **kwargs)
    except PlaneError as e:
        logger.info("%s failed: %s", operation.__name__, e)
        return _text_result(format_error(e), isError=True)
    return _text_result(json.dumps(result, indent=2, default=str), structuredContent=result)


def _date_arg(value: Optional[str]) -> Optional[str]:
    """Map an update date argument: omitted keeps, empty string clears."""
    if value is None:
        return UNSET
    return value or None


@mcp.tool()
def plane_list_issues(
    project: ProjectArg,
    state: Annotated[
        Optional[str], Field(description='Filter by state name (e.g., "In Progress", "Todo")')
    ] = None,
    priority: Annotated[Optional[Priority], Field(description="Filter by priority")] = None,
    limit: Annotated[int, Field(ge=1, description="Maximum number of issues to return")] = 50,
) -> CallToolResult:
    """List issues in a Plane project with optional filters for state and priority.

    Returns issues with display ticket IDs (e.g., SBS-123) and state names.
    """
    return _call(svc_list_issues, project, state=state, priority=priority, limit=limit)


@mcp.tool()
def plane_get_issue(ticket_id: TicketIdArg) -> CallToolResult:
    """Get a single issue by its ticket ID (e.g., SBS-123, MOB-45).

    Returns full issue details.
    """
    return _call(svc_get_issue, ticket_id)


@mcp.tool()
def plane_create_issue(
    project: ProjectArg,
    name: Annotated[str, Field(min_length=1, description="Issue title")],
    description_html: Annotated[Optional[str], Field(description="HTML description")] = None,
    priority: Annotated[Priority, Field(description="Priority level")] = "none",
    state: Annotated[Optional[str], Field(description='State name (defaults to "Todo")')] = None,
    assignees: Annotated[Optional[list[str]], Field(description="User UUIDs")] = None,
    labels: Annotated[Optional[list[str]], Field(description="Label UUIDs")] = None,
    start_date: Annotated[Optional[str], Field(description="Start date (YYYY-MM-DD)")] = None,
    target_date: Annotated[Optional[str], Field(description="Due date (YYYY-MM-DD)")] = None,
    parent: Annotated[Optional[str], Field(description="Parent issue UUID for sub-issues")] = None,
) -> CallToolResult:
    """Create a new issue in a Plane project.

    Accepts state names (e.g., "In Progress") instead of UUIDs.
    """
    return _call(
        svc_create_issue,
        project,
        name,
        description_html=description_html,
        priority=priority,
        state=state,
        assignees=assignees,
        labels=labels,
        start_date=start_date,
        target_date=target_date,
        parent=parent,
    )


@mcp.tool()
def plane_update_issue(
    ticket_id: TicketIdArg,
    name: Annotated[Optional[str], Field(description="New issue title")] = None,
    description_html: Annotated[Optional[str], Field(description="New HTML description")] = None,
    priority: Annotated[Optional[Priority], Field(description="New priority")] = None,
    state: Annotated[
        Optional[str], Field(description='New state name (e.g., "In Progress", "Done")')
    ] = None,
    assignees: Annotated[Optional[list[str]], Field(description="New assignees array")] = None,
    labels: Annotated[Optional[list[str]], Field(description="New labels array")] = None,
    start_date: Annotated[
        Optional[str], Field(description="New start date; empty string clears it")
    ] = None,
    target_date: Annotated[
        Optional[str], Field(description="New due date; empty string clears it")
    ] = None,
) -> CallToolResult:
    """Update an existing issue.

    Can change state, priority, title, description, etc. Accepts state names.
    Only the fields that are given are changed.
    """
    def keep(value: Any) -> Any:
        return UNSET if value is None else value

    return _call(
        svc_update_issue,
        ticket_id,
        name=keep(name),
        description_html=keep(description_html),
        priority=keep(priority),
        state=keep(state),
        assignees=keep(assignees),
        labels=keep(labels),
        start_date=_date_arg(start_date),
        target_date=_date_arg(target_date),
    )


@mcp.tool()
def plane_delete_issue(ticket_id: TicketIdArg) -> CallToolResult:
    """Delete an issue by its ticket ID."""
    return _call(svc_delete_issue, ticket_id)


@mcp.tool()
def plane_list_comments(ticket_id: TicketIdArg) -> CallToolResult:
    """List all comments on an issue."""
    return _call(svc_list_comments, ticket_id)


@mcp.tool()
def plane_add_comment(
    ticket_id: TicketIdArg,
    comment_html: Annotated[
        str, Field(min_length=1, description="Comment content in HTML format")
    ],
) -> CallToolResult:
    """Add a comment to an issue. Comment should be in HTML format."""
    return _call(svc_add_comment, ticket_id, comment_html)


@mcp.tool()
def plane_list_links(ticket_id: TicketIdArg) -> CallToolResult:
    """List external links attached to an issue (e.g., Monday.com associations)."""
    return _call(svc_list_links, ticket_id)


@mcp.tool()
def plane_add_link(
    ticket_id: TicketIdArg,
    title: Annotated[
        str, Field(min_length=1, description='Link title (e.g., "Monday: Website Dev #12345")')
    ],
    url: Annotated[AnyUrl, Field(description="External URL")],
) -> CallToolResult:
    """Add an external link to an issue.

    Useful for associating Monday.com tickets.
    """
    return _call(svc_add_link, ticket_id, title, str(url))


def main():
    """Run the MCP server."""
    configure_logging(verbose=bool(os.environ.get("PLANE_PM_DEBUG")))
    logger.info("Plane MCP server running on stdio")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
