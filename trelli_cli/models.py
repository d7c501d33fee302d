"""
Typed records for Trello API resources.

Each record is a flat, frozen value decoded from one JSON object and
declares the field-selection parameters sent when fetching it, so the
API never returns more than the record uses.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, is_dataclass
from typing import Any, ClassVar

from trelli_cli.exceptions import DecodeError

_JSON_TYPE_NAMES = {str: "string", bool: "boolean", float: "number", dict: "object", list: "array"}


def _field(data: dict, key: str, kind: type, default: Any) -> Any:
    """Read one JSON field, enforcing its JSON type. Missing/null gives *default*."""
    value = data.get(key)
    if value is None:
        return default
    if kind is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif isinstance(value, kind):
        return value
    raise DecodeError(
        f"[ERROR] Unexpected response shape: field '{key}' should be a "
        f"{_JSON_TYPE_NAMES[kind]}, got {type(value).__name__}."
    )


def _require_object(value: Any, record: str) -> dict:
    if isinstance(value, dict):
        return value
    raise DecodeError(
        f"[ERROR] Unexpected response shape for {record}: "
        f"expected JSON object, got {type(value).__name__}."
    )


def to_jsonable(value: Any) -> Any:
    """Convert records (or lists of records) into plain JSON-ready data."""
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


@dataclass(frozen=True)
class Board:
    FIELDS: ClassVar[dict[str, str]] = {"fields": "id,name,url,closed"}

    id: str
    name: str = ""
    url: str = ""
    closed: bool = False

    @classmethod
    def from_value(cls, value: Any) -> Board:
        data = _require_object(value, "board")
        return cls(
            id=_field(data, "id", str, ""),
            name=_field(data, "name", str, ""),
            url=_field(data, "url", str, ""),
            closed=_field(data, "closed", bool, False),
        )


@dataclass(frozen=True)
class TrelloList:
    FIELDS: ClassVar[dict[str, str]] = {"fields": "id,name,closed,pos"}

    id: str
    name: str = ""
    closed: bool = False
    pos: float = 0.0

    @classmethod
    def from_value(cls, value: Any) -> TrelloList:
        data = _require_object(value, "list")
        return cls(
            id=_field(data, "id", str, ""),
            name=_field(data, "name", str, ""),
            closed=_field(data, "closed", bool, False),
            pos=_field(data, "pos", float, 0.0),
        )


@dataclass(frozen=True)
class Card:
    FIELDS: ClassVar[dict[str, str]] = {"fields": "id,name,desc,idList,shortUrl,url,due,closed"}

    id: str
    name: str = ""
    desc: str = ""
    id_list: str = ""
    short_url: str = ""
    url: str = ""
    due: str = ""
    closed: bool = False

    @property
    def link(self) -> str:
        """Short link when present, else the full URL."""
        return self.short_url if self.short_url.strip() else self.url

    @classmethod
    def from_value(cls, value: Any) -> Card:
        data = _require_object(value, "card")
        return cls(
            id=_field(data, "id", str, ""),
            name=_field(data, "name", str, ""),
            desc=_field(data, "desc", str, ""),
            id_list=_field(data, "idList", str, ""),
            short_url=_field(data, "shortUrl", str, ""),
            url=_field(data, "url", str, ""),
            due=_field(data, "due", str, ""),
            closed=_field(data, "closed", bool, False),
        )


@dataclass(frozen=True)
class CommentAction:
    """A commentCard action; data.text and memberCreator are flattened."""

    FIELDS: ClassVar[dict[str, str]] = {
        "filter": "commentCard",
        "fields": "data,date,type",
        "memberCreator_fields": "username,fullName",
    }

    id: str
    type: str = ""
    date: str = ""
    text: str = ""
    author_username: str = ""
    author_full_name: str = ""

    @property
    def author(self) -> str:
        if self.author_full_name.strip():
            return self.author_full_name.strip()
        return self.author_username.strip()

    @classmethod
    def from_value(cls, value: Any) -> CommentAction:
        data = _require_object(value, "comment")
        payload = _field(data, "data", dict, {})
        creator = _field(data, "memberCreator", dict, {})
        return cls(
            id=_field(data, "id", str, ""),
            type=_field(data, "type", str, ""),
            date=_field(data, "date", str, ""),
            text=_field(payload, "text", str, ""),
            author_username=_field(creator, "username", str, ""),
            author_full_name=_field(creator, "fullName", str, ""),
        )


@dataclass(frozen=True)
class ChecklistItem:
    FIELDS: ClassVar[dict[str, str]] = {"checkItem_fields": "name,state,pos"}

    id: str
    name: str = ""
    state: str = ""
    pos: float = 0.0

    @classmethod
    def from_value(cls, value: Any) -> ChecklistItem:
        data = _require_object(value, "checklist item")
        return cls(
            id=_field(data, "id", str, ""),
            name=_field(data, "name", str, ""),
            state=_field(data, "state", str, ""),
            pos=_field(data, "pos", float, 0.0),
        )


@dataclass(frozen=True)
class Checklist:
    FIELDS: ClassVar[dict[str, str]] = {
        "fields": "id,name",
        "checkItems": "all",
        **ChecklistItem.FIELDS,
    }

    id: str
    name: str = ""
    check_items: tuple[ChecklistItem, ...] = ()

    @classmethod
    def from_value(cls, value: Any) -> Checklist:
        data = _require_object(value, "checklist")
        items = _field(data, "checkItems", list, [])
        return cls(
            id=_field(data, "id", str, ""),
            name=_field(data, "name", str, ""),
            check_items=tuple(ChecklistItem.from_value(item) for item in items),
        )
