"""
trelli-cli — CLI tool for managing Trello boards, lists, cards, comments and checklists
"""

import argparse
import json
import sys

from trelli_cli import config
from trelli_cli.commands import (
    cmd_boards_list,
    cmd_cards_archive,
    cmd_cards_create,
    cmd_cards_list,
    cmd_cards_move,
    cmd_cards_show,
    cmd_checklists_add_item,
    cmd_checklists_create,
    cmd_checklists_list,
    cmd_checklists_set_item,
    cmd_comments_add,
    cmd_comments_list,
    cmd_lists_list,
)
from trelli_cli.exceptions import CliError
from trelli_cli.formatters import _sanitize_str

HELP_TEXT = """\
Usage: trelli [global flags] <command> <subcommand> [options]
       trelli help [command]
       trelli version

Global flags:
  --key <key>             Trello API key (default: TRELLO_API_KEY)
  --token <token>         Trello token (default: TRELLO_TOKEN)
  --board <id>            Board id or shortLink (default: TRELLO_BOARD_ID or XobnRsYv)
  --json                  Output raw JSON instead of a table
  --format table|json     Same as above, explicit form
  --verbose, -v           Log HTTP requests to stderr (credentials masked)
  --version               Show version number
  --help, -h              Show help

Commands:
  boards list             - List boards visible to you
    --filter <text>         Case-insensitive substring filter on board name
  lists list              - List the lists of a board (board order)
  cards list              - List cards in a list
    --list <id>             List id
    --list-name <name>      List name, resolved on the board
    --limit <n>             Max cards to return (default: 100)
  cards show --card <id>  - Show one card
  cards create            - Create a card
    --list <id> | --list-name <name>
    --name <title>          Card title (required)
    --desc <text>           Description
    --due <iso8601>         Due date/time, e.g. 2026-02-14T18:00:00Z
    --labels <id1,id2>      Label ids
    --members <id1,id2>     Member ids
  cards move --card <id>  - Move a card (--list <id> | --list-name <name>)
  cards archive --card <id> - Archive a card
  comments list --card <id> [--limit <n>]  - List comments on a card
  comments add --card <id> --text <text>   - Comment on a card
  checklists list --card <id>              - List checklists with items
  checklists create --card <id> --name <n> - Create a checklist
  checklists add-item --checklist <id> --name <n> [--checked]
  checklists set-item --card <id> --item <id> --state complete|incomplete

List names: an exact (case-insensitive) name match wins; otherwise a single
partial match is used. Ambiguous names fail and list the candidate ids.
"""

COMMAND_HELP = {
    "boards": """\
Usage:
  trelli boards list [--filter <name-substring>]

List boards visible to the authenticated user, sorted by name.
""",
    "lists": """\
Usage:
  trelli lists list [--board <boardIdOrShortLink>]

List all lists of a board in board order. Defaults to --board or TRELLO_BOARD_ID.
""",
    "cards": """\
Usage:
  trelli cards list (--list <listId> | --list-name <name>) [--board <id>] [--limit <n>]
  trelli cards show --card <cardId>
  trelli cards create (--list <listId> | --list-name <name>) --name <title>
                      [--desc <text>] [--due <iso8601>] [--labels <ids>] [--members <ids>]
  trelli cards move --card <cardId> (--list <listId> | --list-name <name>)
  trelli cards archive --card <cardId>

--list-name is resolved on the board given by --board (or the default board).
""",
    "comments": """\
Usage:
  trelli comments list --card <cardId> [--limit <n>]
  trelli comments add --card <cardId> --text <comment>
""",
    "checklists": """\
Usage:
  trelli checklists list --card <cardId>
  trelli checklists create --card <cardId> --name <checklistName>
  trelli checklists add-item --checklist <checklistId> --name <itemName> [--checked]
  trelli checklists set-item --card <cardId> --item <itemId> --state <complete|incomplete>
""",
}


# ---------------------------------------------------------------------------
# Global flag extraction (before argparse, so flags work after the subcommand)
# ---------------------------------------------------------------------------

_VALUE_FLAGS = {"--key": "key", "--token": "token", "--board": "board"}


def _extract_global_flags(argv):
    """Extract global flags from argv regardless of position.

    Returns (format_str, overrides, verbose, remaining_argv) where
    overrides maps key/token/board to flag values.
    Handles --version directly.
    """
    fmt = "table"
    verbose = False
    overrides = {"key": None, "token": None, "board": None}
    remaining = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--version":
            print(f"trelli {config.VERSION}")
            sys.exit(0)
        elif arg == "--json":
            fmt = "json"
        elif arg in ("--verbose", "-v"):
            verbose = True
        elif arg == "--format" and i + 1 < len(argv):
            fmt = argv[i + 1]
            if fmt not in config.VALID_FORMATS:
                raise CliError(f"[ERROR] Invalid format '{fmt}'. Use: json, table")
            i += 1
        elif arg in _VALUE_FLAGS:
            if i + 1 >= len(argv):
                raise CliError(f"[ERROR] {arg} requires a value.")
            overrides[_VALUE_FLAGS[arg]] = argv[i + 1]
            i += 1
        elif "=" in arg and arg.split("=", 1)[0] in _VALUE_FLAGS:
            flag, value = arg.split("=", 1)
            overrides[_VALUE_FLAGS[flag]] = value
        else:
            remaining.append(arg)
        i += 1
    return fmt, overrides, verbose, remaining


def _help_topic(argv):
    """Return the help topic ('' for root help) when argv only asks for help, else None."""
    if not argv:
        return ""
    first = argv[0].strip().lower()
    if first == "help":
        return argv[1] if len(argv) > 1 else ""
    if first in ("-h", "--help"):
        return ""
    if any(a in ("-h", "--help") for a in argv):
        return argv[0]
    if len(argv) == 1 and argv[0] in COMMAND_HELP:
        return argv[0]
    return None


def print_help(topic=""):
    print(COMMAND_HELP.get(topic, HELP_TEXT), end="")


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


class _SubcommandParser(argparse.ArgumentParser):
    """Subparser that raises CliError instead of printing full help text."""

    def error(self, message):
        raise CliError(f"[ERROR] {message}")


def _positive_int(value):
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be a positive integer") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return parsed


def _add_list_target(p):
    p.add_argument("--list")
    p.add_argument("--list-name", dest="list_name")


def build_parser():
    parser = _SubcommandParser(prog="trelli", add_help=False)
    sub = parser.add_subparsers(dest="command", parser_class=_SubcommandParser)
    sub.required = True

    # --- boards ---
    actions = sub.add_parser("boards", add_help=False).add_subparsers(dest="action")
    actions.required = True
    p = actions.add_parser("list", add_help=False)
    p.add_argument("--filter")
    p.set_defaults(func=cmd_boards_list)

    # --- lists ---
    actions = sub.add_parser("lists", add_help=False).add_subparsers(dest="action")
    actions.required = True
    actions.add_parser("list", add_help=False).set_defaults(func=cmd_lists_list)

    # --- cards ---
    actions = sub.add_parser("cards", add_help=False).add_subparsers(dest="action")
    actions.required = True
    p = actions.add_parser("list", add_help=False)
    _add_list_target(p)
    p.add_argument("--limit", type=_positive_int, default=config.DEFAULT_CARD_LIMIT)
    p.set_defaults(func=cmd_cards_list)

    p = actions.add_parser("show", add_help=False)
    p.add_argument("--card")
    p.set_defaults(func=cmd_cards_show)

    p = actions.add_parser("create", add_help=False)
    _add_list_target(p)
    p.add_argument("--name")
    p.add_argument("--desc")
    p.add_argument("--due")
    p.add_argument("--labels")
    p.add_argument("--members")
    p.set_defaults(func=cmd_cards_create)

    p = actions.add_parser("move", add_help=False)
    p.add_argument("--card")
    _add_list_target(p)
    p.set_defaults(func=cmd_cards_move)

    p = actions.add_parser("archive", add_help=False)
    p.add_argument("--card")
    p.set_defaults(func=cmd_cards_archive)

    # --- comments ---
    actions = sub.add_parser("comments", add_help=False).add_subparsers(dest="action")
    actions.required = True
    p = actions.add_parser("list", add_help=False)
    p.add_argument("--card")
    p.add_argument("--limit", type=_positive_int, default=config.DEFAULT_COMMENT_LIMIT)
    p.set_defaults(func=cmd_comments_list)

    p = actions.add_parser("add", add_help=False)
    p.add_argument("--card")
    p.add_argument("--text")
    p.set_defaults(func=cmd_comments_add)

    # --- checklists ---
    actions = sub.add_parser("checklists", add_help=False).add_subparsers(dest="action")
    actions.required = True
    p = actions.add_parser("list", add_help=False)
    p.add_argument("--card")
    p.set_defaults(func=cmd_checklists_list)

    p = actions.add_parser("create", add_help=False)
    p.add_argument("--card")
    p.add_argument("--name")
    p.set_defaults(func=cmd_checklists_create)

    p = actions.add_parser("add-item", add_help=False)
    p.add_argument("--checklist")
    p.add_argument("--name")
    p.add_argument("--checked", action="store_true")
    p.set_defaults(func=cmd_checklists_add_item)

    p = actions.add_parser("set-item", add_help=False)
    p.add_argument("--card")
    p.add_argument("--item")
    p.add_argument("--state")
    p.set_defaults(func=cmd_checklists_set_item)

    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------


def _emit_cli_error(err, fmt):
    msg = _sanitize_str(str(err))
    if fmt == "json":
        payload = {
            "ok": False,
            "schema_version": config.CONTRACT_SCHEMA_VERSION,
            "error": {
                "type": getattr(err, "error_type", "error"),
                "message": msg,
                "exit_code": getattr(err, "exit_code", 1),
            },
        }
        status = getattr(err, "status", None)
        if status is not None:
            payload["error"]["status"] = status
        print(json.dumps(payload, ensure_ascii=False), file=sys.stderr)
        return
    print(msg, file=sys.stderr)


def main(argv=None):
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    if argv is None:
        argv = sys.argv[1:]

    fmt = "table"
    try:
        fmt, overrides, verbose, remaining_argv = _extract_global_flags(argv)

        if remaining_argv and remaining_argv[0] == "version":
            print(f"trelli {config.VERSION}")
            sys.exit(0)

        topic = _help_topic(remaining_argv)
        if topic is not None:
            print_help(topic)
            sys.exit(0)

        ns = build_parser().parse_args(remaining_argv)
        ns.format = fmt
        ns.config = config.load_config(verbose=verbose, **overrides)
        ns.func(ns)
    except CliError as e:
        _emit_cli_error(e, fmt)
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
