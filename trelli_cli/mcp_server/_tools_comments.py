"""Comment and checklist tools (6 tools)."""

from __future__ import annotations

from typing import Literal

from trelli_cli import CliError
from trelli_cli.mcp_server._core import (
    _call,
    _contract_error,
    _finalize_tool_result,
    _list_payload,
    _record_payload,
    _validate_text,
)


def list_comments(card_id: str, limit: int = 100) -> dict:
    """List comments on a card (author, date, text)."""
    return _finalize_tool_result(
        _list_payload(_call("list_comments", card_id, limit=limit), "comments")
    )


def add_comment(card_id: str, text: str) -> dict:
    """Add a comment to a card."""
    try:
        text = _validate_text(text, "text")
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    return _finalize_tool_result(_record_payload(_call("add_comment", card_id, text), "comment"))


def list_checklists(card_id: str) -> dict:
    """List checklists on a card, each with all of its items."""
    return _finalize_tool_result(
        _list_payload(_call("list_checklists", card_id), "checklists")
    )


def create_checklist(card_id: str, name: str) -> dict:
    """Create an empty checklist on a card."""
    try:
        name = _validate_text(name, "name")
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    result = _call("create_checklist", card_id, name)
    return _finalize_tool_result(_record_payload(result, "checklist"))


def add_checklist_item(checklist_id: str, name: str, checked: bool = False) -> dict:
    """Append an item to a checklist; checked=True creates it already complete."""
    try:
        name = _validate_text(name, "name")
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    result = _call("add_checklist_item", checklist_id, name, checked=checked)
    return _finalize_tool_result(_record_payload(result, "item"))


def set_checklist_item(
    card_id: str, item_id: str, state: Literal["complete", "incomplete"]
) -> dict:
    """Mark a checklist item complete or incomplete."""
    result = _call("set_checklist_item", card_id, item_id, state)
    return _finalize_tool_result(_record_payload(result, "item"))


def register(mcp):
    """Register all comment and checklist tools with the FastMCP instance."""
    mcp.tool()(list_comments)
    mcp.tool()(add_comment)
    mcp.tool()(list_checklists)
    mcp.tool()(create_checklist)
    mcp.tool()(add_checklist_item)
    mcp.tool()(set_checklist_item)
