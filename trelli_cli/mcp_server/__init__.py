"""MCP server exposing TrelliClient methods as tools.

Package structure:
  __init__.py        — FastMCP init, register() calls, re-exports
  __main__.py        — ``python -m trelli_cli.mcp_server`` entry point
  _core.py           — Client caching, _call dispatcher, response contract
  _tools_read.py     — 5 board/list/card read tools
  _tools_write.py    — 3 card mutation tools
  _tools_comments.py — 6 comment and checklist tools

Run: python -m trelli_cli.mcp_server
Requires: python -m pip install .[mcp]
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from trelli_cli.mcp_server import _tools_comments, _tools_read, _tools_write

mcp = FastMCP(
    "trello",
    instructions=(
        "Trello board, list, card, comment and checklist tools. "
        "Lists can be addressed by id or by name; a name is resolved on the "
        "board (default: TRELLO_BOARD_ID). If a name is ambiguous the error "
        "lists candidate ids: retry with list_id. "
        "Mutations are never retried automatically; check the result before "
        "calling again to avoid duplicate cards or comments."
    ),
)

for _mod in [_tools_read, _tools_write, _tools_comments]:
    _mod.register(mcp)

# ---------------------------------------------------------------------------
# Re-exports (tests import via mcp_mod.xxx)
# ---------------------------------------------------------------------------

from trelli_cli.mcp_server._core import (  # noqa: E402, F401
    _call,
    _contract_error,
    _finalize_tool_result,
    _get_client,
    _validate_text,
)
from trelli_cli.mcp_server._tools_comments import (  # noqa: E402, F401
    add_checklist_item,
    add_comment,
    create_checklist,
    list_checklists,
    list_comments,
    set_checklist_item,
)
from trelli_cli.mcp_server._tools_read import (  # noqa: E402, F401
    get_card,
    list_boards,
    list_cards,
    list_lists,
    resolve_list,
)
from trelli_cli.mcp_server._tools_write import (  # noqa: E402, F401
    archive_card,
    create_card,
    move_card,
)


def main():
    """Run the MCP server (stdio transport)."""
    mcp.run()
