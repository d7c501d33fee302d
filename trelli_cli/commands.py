"""
Command implementations for trelli-cli.
Each cmd_*() function receives an argparse.Namespace and handles one CLI command.

Business logic lives in client.py (TrelliClient). These thin wrappers
handle argparse → keyword args, format selection, and formatter dispatch.
"""

from trelli_cli.client import TrelliClient
from trelli_cli.formatters import (
    format_boards_table,
    format_cards_table,
    format_checklist_items_table,
    format_checklists_table,
    format_comments_table,
    format_lists_table,
    output,
)


def _client(ns):
    """Build the client for one command; raises ConfigurationError without credentials."""
    return TrelliClient(ns.config)


# ---------------------------------------------------------------------------
# Boards and lists
# ---------------------------------------------------------------------------


def cmd_boards_list(ns):
    boards = _client(ns).list_boards(name_filter=ns.filter)
    output(boards, format_boards_table, ns.format)


def cmd_lists_list(ns):
    output(_client(ns).list_lists(), format_lists_table, ns.format)


# ---------------------------------------------------------------------------
# Cards
# ---------------------------------------------------------------------------


def cmd_cards_list(ns):
    cards = _client(ns).list_cards(list_id=ns.list, list_name=ns.list_name, limit=ns.limit)
    output(cards, format_cards_table, ns.format)


def cmd_cards_show(ns):
    output(_client(ns).get_card(ns.card), format_cards_table, ns.format)


def cmd_cards_create(ns):
    card = _client(ns).create_card(
        ns.name,
        list_id=ns.list,
        list_name=ns.list_name,
        desc=ns.desc,
        due=ns.due,
        labels=ns.labels,
        members=ns.members,
    )
    output(card, format_cards_table, ns.format)


def cmd_cards_move(ns):
    card = _client(ns).move_card(ns.card, list_id=ns.list, list_name=ns.list_name)
    output(card, format_cards_table, ns.format)


def cmd_cards_archive(ns):
    output(_client(ns).archive_card(ns.card), format_cards_table, ns.format)


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


def cmd_comments_list(ns):
    comments = _client(ns).list_comments(ns.card, limit=ns.limit)
    output(comments, format_comments_table, ns.format)


def cmd_comments_add(ns):
    output(_client(ns).add_comment(ns.card, ns.text), format_comments_table, ns.format)


# ---------------------------------------------------------------------------
# Checklists
# ---------------------------------------------------------------------------


def cmd_checklists_list(ns):
    output(_client(ns).list_checklists(ns.card), format_checklists_table, ns.format)


def cmd_checklists_create(ns):
    checklist = _client(ns).create_checklist(ns.card, ns.name)
    output(checklist, format_checklists_table, ns.format)


def cmd_checklists_add_item(ns):
    item = _client(ns).add_checklist_item(ns.checklist, ns.name, checked=ns.checked)
    output(item, format_checklist_items_table, ns.format)


def cmd_checklists_set_item(ns):
    item = _client(ns).set_checklist_item(ns.card, ns.item, ns.state)
    output(item, format_checklist_items_table, ns.format)
