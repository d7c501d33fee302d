"""Write tools: card mutations (3 tools)."""

from __future__ import annotations

from trelli_cli import CliError
from trelli_cli.mcp_server._core import (
    _call,
    _contract_error,
    _finalize_tool_result,
    _record_payload,
    _validate_text,
)


def create_card(
    name: str,
    list_id: str | None = None,
    list_name: str | None = None,
    board: str | None = None,
    desc: str | None = None,
    due: str | None = None,
    labels: str | None = None,
    members: str | None = None,
) -> dict:
    """Create a card in a list given by id or by name.

    Args:
        name: Card title.
        desc: Card description.
        due: ISO-8601 due date/time.
        labels: Comma-separated label ids.
        members: Comma-separated member ids.
    """
    try:
        name = _validate_text(name, "name")
        if desc is not None:
            desc = _validate_text(desc, "desc")
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    result = _call(
        "create_card",
        name,
        list_id=list_id,
        list_name=list_name,
        board=board,
        desc=desc,
        due=due,
        labels=labels,
        members=members,
    )
    return _finalize_tool_result(_record_payload(result, "card"))


def move_card(
    card_id: str,
    list_id: str | None = None,
    list_name: str | None = None,
    board: str | None = None,
) -> dict:
    """Move a card to another list given by id or by name."""
    result = _call("move_card", card_id, list_id=list_id, list_name=list_name, board=board)
    return _finalize_tool_result(_record_payload(result, "card"))


def archive_card(card_id: str) -> dict:
    """Archive (close) a card."""
    return _finalize_tool_result(_record_payload(_call("archive_card", card_id), "card"))


def register(mcp):
    """Register all write tools with the FastMCP instance."""
    mcp.tool()(create_card)
    mcp.tool()(move_card)
    mcp.tool()(archive_card)
