"""Read tools: boards, lists, cards, list-name resolution (5 tools)."""

from __future__ import annotations

from trelli_cli.mcp_server._core import (
    _call,
    _finalize_tool_result,
    _list_payload,
    _record_payload,
)


def list_boards(name_filter: str | None = None) -> dict:
    """List boards visible to you, sorted by name.

    Args:
        name_filter: Case-insensitive substring filter on board name.
    """
    return _finalize_tool_result(
        _list_payload(_call("list_boards", name_filter=name_filter), "boards")
    )


def list_lists(board: str | None = None) -> dict:
    """List the lists of a board in board order. Defaults to the configured board."""
    return _finalize_tool_result(_list_payload(_call("list_lists", board=board), "lists"))


def resolve_list(list_name: str, board: str | None = None) -> dict:
    """Resolve a list name to its id on a board.

    An exact case-insensitive match wins; otherwise a single partial
    (substring) match is used. Ambiguous names return an error listing
    the candidate ids.
    """
    return _finalize_tool_result(
        _record_payload(_call("resolve_list_id", board=board, list_name=list_name), "list_id")
    )


def list_cards(
    list_id: str | None = None,
    list_name: str | None = None,
    board: str | None = None,
    limit: int = 100,
) -> dict:
    """List cards in a list, given by id or by name (resolved on the board)."""
    result = _call("list_cards", list_id=list_id, list_name=list_name, board=board, limit=limit)
    return _finalize_tool_result(_list_payload(result, "cards"))


def get_card(card_id: str) -> dict:
    """Get one card (id, name, desc, list id, due, closed, urls)."""
    return _finalize_tool_result(_record_payload(_call("get_card", card_id), "card"))


def register(mcp):
    """Register all read tools with the FastMCP instance."""
    mcp.tool()(list_boards)
    mcp.tool()(list_lists)
    mcp.tool()(resolve_list)
    mcp.tool()(list_cards)
    mcp.tool()(get_card)
