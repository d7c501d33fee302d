"""
List name resolution for trelli-cli.

Turns a human-readable list name into exactly one list id on a board:
exact (case-insensitive) matches beat partial (substring) matches, and
more than one match in the deciding tier is an error, never a guess.
"""

from trelli_cli.api import path_segment
from trelli_cli.exceptions import AmbiguousMatchError, ConfigurationError, NotFoundError
from trelli_cli.models import TrelloList

EXACT = "exact"
PARTIAL = "partial"


def fetch_board_lists(transport, board_id):
    """Fetch every list on a board (one call, field-selected)."""
    lists = transport.invoke(
        "GET",
        f"/1/boards/{path_segment(board_id)}/lists",
        query=dict(TrelloList.FIELDS),
        out=TrelloList,
        many=True,
    )
    return lists or []


def partition_matches(candidates, name):
    """Split candidates into (exact, partial) matches for *name*.

    The query is trimmed; candidate names are compared as-is, lowercased.
    A candidate counted as exact is never also counted as partial.
    """
    target = name.strip().lower()
    exact = []
    partial = []
    for candidate in candidates:
        candidate_name = candidate.name.lower()
        if candidate_name == target:
            exact.append(candidate)
        elif target in candidate_name:
            partial.append(candidate)
    return exact, partial


def pick_match(candidates, name, board_id):
    """Return the id of the single deciding match, or raise.

    A single exact match wins regardless of how many partial matches
    exist; partial matches are only consulted when there is no exact one.
    """
    exact, partial = partition_matches(candidates, name)
    if len(exact) == 1:
        return exact[0].id
    if len(exact) > 1:
        raise AmbiguousMatchError(name, board_id, EXACT, [(c.id, c.name) for c in exact])
    if len(partial) == 1:
        return partial[0].id
    if len(partial) > 1:
        raise AmbiguousMatchError(name, board_id, PARTIAL, [(c.id, c.name) for c in partial])
    raise NotFoundError(name, board_id, available=[c.name for c in candidates])


def resolve_by_name(transport, board_id, raw_name):
    """Resolve a list name on a board to its id."""
    name = (raw_name or "").strip()
    board_id = (board_id or "").strip()
    if not name:
        raise ConfigurationError(
            "[ERROR] Missing list target: provide a list id or a list name.",
            parameter="list_name",
        )
    if not board_id:
        raise ConfigurationError(
            f"[ERROR] A board id is required to resolve list name '{name}'.",
            parameter="board",
        )
    lists = fetch_board_lists(transport, board_id)
    return pick_match(lists, name, board_id)


def resolve_target(transport, board_id, explicit_id, raw_name):
    """Prefer an explicit list id (no network call); otherwise resolve by name."""
    explicit_id = (explicit_id or "").strip()
    if explicit_id:
        return explicit_id
    return resolve_by_name(transport, board_id, raw_name)
