"""trelli-cli — CLI tool for managing Trello boards, lists, cards, comments and checklists."""

from trelli_cli.api import Credentials, TrelloTransport
from trelli_cli.client import TrelliClient
from trelli_cli.config import VERSION, Config, load_config
from trelli_cli.exceptions import (
    AmbiguousMatchError,
    CliError,
    ConfigurationError,
    DecodeError,
    NotFoundError,
    RemoteError,
    TransportError,
)
from trelli_cli.models import Board, Card, Checklist, ChecklistItem, CommentAction, TrelloList
from trelli_cli.resolver import resolve_by_name, resolve_target

__all__ = [
    "VERSION",
    "AmbiguousMatchError",
    "Board",
    "Card",
    "Checklist",
    "ChecklistItem",
    "CliError",
    "CommentAction",
    "Config",
    "ConfigurationError",
    "Credentials",
    "DecodeError",
    "NotFoundError",
    "RemoteError",
    "TransportError",
    "TrelliClient",
    "TrelloList",
    "TrelloTransport",
    "load_config",
    "resolve_by_name",
    "resolve_target",
]
