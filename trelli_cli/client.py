"""
TrelliClient — public Python API for managing Trello boards, lists and cards.

Single entry point for programmatic use, the CLI command layer and the
MCP server. Methods return records from trelli_cli.models and raise
CliError subclasses on failure.
"""

from __future__ import annotations

from trelli_cli import config
from trelli_cli.api import TrelloTransport, path_segment
from trelli_cli.exceptions import ConfigurationError
from trelli_cli.models import Board, Card, Checklist, ChecklistItem, CommentAction, TrelloList
from trelli_cli.resolver import fetch_board_lists, resolve_target

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _require(value, parameter, operation):
    """Return *value* stripped, or raise ConfigurationError naming the parameter."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise ConfigurationError(
            f"[ERROR] {operation} requires --{parameter}.", parameter=parameter
        )
    return cleaned


def _positive_limit(limit):
    if not isinstance(limit, int) or isinstance(limit, bool) or limit <= 0:
        raise ConfigurationError(
            f"[ERROR] limit must be a positive integer, got {limit!r}.", parameter="limit"
        )
    return str(limit)


def _filter_boards(boards, name_filter):
    needle = (name_filter or "").strip().lower()
    if not needle:
        return list(boards)
    return [b for b in boards if needle in b.name.lower()]


# ---------------------------------------------------------------------------
# TrelliClient
# ---------------------------------------------------------------------------


class TrelliClient:
    """Public API surface for Trello boards, lists, cards, comments and checklists.

    All optional arguments are keyword-only. Every operation makes at most
    two sequential requests: an optional list-name resolution and the
    action itself.
    """

    def __init__(self, cfg: config.Config, *, transport: TrelloTransport | None = None):
        """Initialize the client.

        Args:
            cfg: Settings built by config.load_config().
            transport: Pre-built transport (tests); built from *cfg* otherwise,
                which raises ConfigurationError when credentials are missing.
        """
        self.config = cfg
        self.transport = transport if transport is not None else TrelloTransport.from_config(cfg)

    # -------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------

    def _board(self, board):
        cleaned = (board or "").strip()
        return cleaned or self.config.board_id

    def resolve_list_id(
        self,
        *,
        board: str | None = None,
        list_id: str | None = None,
        list_name: str | None = None,
    ) -> str:
        """Return *list_id* if given, else resolve *list_name* on the board."""
        return resolve_target(self.transport, self._board(board), list_id, list_name)

    # -------------------------------------------------------------------
    # Boards and lists
    # -------------------------------------------------------------------

    def list_boards(self, *, name_filter: str | None = None) -> list[Board]:
        """List boards visible to the authenticated member, sorted by name.

        Args:
            name_filter: Case-insensitive substring filter on board name.
        """
        boards = self.transport.invoke(
            "GET",
            "/1/members/me/boards",
            query=dict(Board.FIELDS),
            out=Board,
            many=True,
        )
        result = _filter_boards(boards or [], name_filter)
        result.sort(key=lambda b: b.name)
        return result

    def list_lists(self, *, board: str | None = None) -> list[TrelloList]:
        """List all lists on a board in board order (by position)."""
        board_id = self._board(board)
        if not board_id:
            raise ConfigurationError(
                "[ERROR] Missing --board and no default board configured.", parameter="board"
            )
        lists = fetch_board_lists(self.transport, board_id)
        return sorted(lists, key=lambda lst: lst.pos)

    # -------------------------------------------------------------------
    # Cards
    # -------------------------------------------------------------------

    def list_cards(
        self,
        *,
        list_id: str | None = None,
        list_name: str | None = None,
        board: str | None = None,
        limit: int = config.DEFAULT_CARD_LIMIT,
    ) -> list[Card]:
        """List cards in a list given by id or by name."""
        query = dict(Card.FIELDS)
        query["limit"] = _positive_limit(limit)
        resolved = self.resolve_list_id(board=board, list_id=list_id, list_name=list_name)
        cards = self.transport.invoke(
            "GET",
            f"/1/lists/{path_segment(resolved)}/cards",
            query=query,
            out=Card,
            many=True,
        )
        return cards or []

    def get_card(self, card_id: str) -> Card | None:
        """Get one card by id."""
        card_id = _require(card_id, "card", "cards show")
        return self.transport.invoke(
            "GET",
            f"/1/cards/{path_segment(card_id)}",
            query=dict(Card.FIELDS),
            out=Card,
        )

    def create_card(
        self,
        name: str,
        *,
        list_id: str | None = None,
        list_name: str | None = None,
        board: str | None = None,
        desc: str | None = None,
        due: str | None = None,
        labels: str | None = None,
        members: str | None = None,
    ) -> Card | None:
        """Create a card in a list given by id or by name.

        Args:
            name: Card title (required).
            desc: Description; sent only when not blank.
            due: ISO-8601 due date/time; sent only when not blank.
            labels: Comma-separated label ids.
            members: Comma-separated member ids.
        """
        if not (name or "").strip():
            raise ConfigurationError("[ERROR] cards create requires --name.", parameter="name")
        resolved = self.resolve_list_id(board=board, list_id=list_id, list_name=list_name)
        form = {"idList": resolved, "name": name}
        optional = (("desc", desc), ("due", due), ("idLabels", labels), ("idMembers", members))
        for key, value in optional:
            if value is not None and value.strip():
                form[key] = value
        return self.transport.invoke("POST", "/1/cards", form=form, out=Card)

    def move_card(
        self,
        card_id: str,
        *,
        list_id: str | None = None,
        list_name: str | None = None,
        board: str | None = None,
    ) -> Card | None:
        """Move a card to another list given by id or by name."""
        card_id = _require(card_id, "card", "cards move")
        resolved = self.resolve_list_id(board=board, list_id=list_id, list_name=list_name)
        return self.transport.invoke(
            "PUT",
            f"/1/cards/{path_segment(card_id)}",
            form={"idList": resolved},
            out=Card,
        )

    def archive_card(self, card_id: str) -> Card | None:
        """Archive (close) a card. Reversible from the Trello UI."""
        card_id = _require(card_id, "card", "cards archive")
        return self.transport.invoke(
            "PUT",
            f"/1/cards/{path_segment(card_id)}",
            form={"closed": "true"},
            out=Card,
        )

    # -------------------------------------------------------------------
    # Comments
    # -------------------------------------------------------------------

    def list_comments(
        self, card_id: str, *, limit: int = config.DEFAULT_COMMENT_LIMIT
    ) -> list[CommentAction]:
        """List comments on a card, newest first (API order)."""
        card_id = _require(card_id, "card", "comments list")
        query = dict(CommentAction.FIELDS)
        query["limit"] = _positive_limit(limit)
        actions = self.transport.invoke(
            "GET",
            f"/1/cards/{path_segment(card_id)}/actions",
            query=query,
            out=CommentAction,
            many=True,
        )
        return actions or []

    def add_comment(self, card_id: str, text: str) -> CommentAction | None:
        """Add a comment to a card."""
        card_id = _require(card_id, "card", "comments add")
        if not (text or "").strip():
            raise ConfigurationError("[ERROR] comments add requires --text.", parameter="text")
        return self.transport.invoke(
            "POST",
            f"/1/cards/{path_segment(card_id)}/actions/comments",
            form={"text": text},
            out=CommentAction,
        )

    # -------------------------------------------------------------------
    # Checklists
    # -------------------------------------------------------------------

    def list_checklists(self, card_id: str) -> list[Checklist]:
        """List checklists on a card with all their items."""
        card_id = _require(card_id, "card", "checklists list")
        checklists = self.transport.invoke(
            "GET",
            f"/1/cards/{path_segment(card_id)}/checklists",
            query=dict(Checklist.FIELDS),
            out=Checklist,
            many=True,
        )
        return checklists or []

    def create_checklist(self, card_id: str, name: str) -> Checklist | None:
        """Create an empty checklist on a card."""
        card_id = _require(card_id, "card", "checklists create")
        if not (name or "").strip():
            raise ConfigurationError("[ERROR] checklists create requires --name.", parameter="name")
        return self.transport.invoke(
            "POST",
            f"/1/cards/{path_segment(card_id)}/checklists",
            form={"name": name},
            out=Checklist,
        )

    def add_checklist_item(
        self, checklist_id: str, name: str, *, checked: bool = False
    ) -> ChecklistItem | None:
        """Append an item to a checklist, optionally already checked."""
        checklist_id = _require(checklist_id, "checklist", "checklists add-item")
        if not (name or "").strip():
            raise ConfigurationError(
                "[ERROR] checklists add-item requires --name.", parameter="name"
            )
        form = {"name": name}
        if checked:
            form["checked"] = "true"
        return self.transport.invoke(
            "POST",
            f"/1/checklists/{path_segment(checklist_id)}/checkItems",
            form=form,
            out=ChecklistItem,
        )

    def set_checklist_item(self, card_id: str, item_id: str, state: str) -> ChecklistItem | None:
        """Mark a checklist item complete or incomplete."""
        card_id = _require(card_id, "card", "checklists set-item")
        item_id = _require(item_id, "item", "checklists set-item")
        state = (state or "").strip().lower()
        if not state:
            raise ConfigurationError(
                "[ERROR] checklists set-item requires --state.", parameter="state"
            )
        if state not in config.VALID_CHECK_ITEM_STATES:
            raise ConfigurationError(
                f"[ERROR] Invalid state '{state}'. "
                f"Use: {', '.join(sorted(config.VALID_CHECK_ITEM_STATES))}",
                parameter="state",
            )
        return self.transport.invoke(
            "PUT",
            f"/1/cards/{path_segment(card_id)}/checkItem/{path_segment(item_id)}",
            form={"state": state},
            out=ChecklistItem,
        )
