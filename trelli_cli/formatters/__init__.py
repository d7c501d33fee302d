"""Output formatting package for trelli-cli.

Re-exports all public names so consumers can do:
    from trelli_cli.formatters import format_cards_table
"""

from trelli_cli.formatters._core import output, pretty_print
from trelli_cli.formatters._entities import (
    format_boards_table,
    format_cards_table,
    format_checklist_items_table,
    format_checklists_table,
    format_comments_table,
    format_lists_table,
)
from trelli_cli.formatters._table import (
    _CONTROL_RE,
    _sanitize_str,
    _table,
    _trunc,
)

__all__ = [
    "_CONTROL_RE",
    "_sanitize_str",
    "_table",
    "_trunc",
    "format_boards_table",
    "format_cards_table",
    "format_checklist_items_table",
    "format_checklists_table",
    "format_comments_table",
    "format_lists_table",
    "output",
    "pretty_print",
]
