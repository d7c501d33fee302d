"""Core helpers: client caching, _call dispatcher, response contract, input validation."""

from __future__ import annotations

from trelli_cli import CliError, ConfigurationError, TrelliClient
from trelli_cli.config import CONTRACT_SCHEMA_VERSION, load_config
from trelli_cli.formatters import _CONTROL_RE
from trelli_cli.models import to_jsonable

_client: TrelliClient | None = None
_response_mode: str | None = None

# Trello rejects names, descriptions and comments longer than this.
_MAX_TEXT_LENGTH = 16_384

# Missing credentials are reported as "setup"; other bad arguments keep their own type.
_CREDENTIAL_PARAMETERS = {"key", "token"}


def _get_client() -> TrelliClient:
    """Return a cached TrelliClient, creating one on first use."""
    global _client, _response_mode
    if _client is None:
        cfg = load_config()
        _client = TrelliClient(cfg)
        _response_mode = cfg.mcp_response_mode
    return _client


def _contract_error(message: str, error_type: str = "error") -> dict:
    """Return a stable MCP error envelope with legacy compatibility fields."""
    return {
        "ok": False,
        "schema_version": CONTRACT_SCHEMA_VERSION,
        "type": error_type,  # legacy
        "error": message,  # legacy
        "error_detail": {
            "type": error_type,
            "message": message,
        },
    }


def _ensure_contract_dict(payload: dict) -> dict:
    """Add stable contract metadata to dict responses."""
    out = dict(payload)
    out.setdefault("schema_version", CONTRACT_SCHEMA_VERSION)
    if out.get("ok") is False:
        return out
    out.setdefault("ok", True)
    return out


def _finalize_tool_result(result):
    """Finalize tool response based on configured MCP response mode.

    Modes:
        - legacy (default): dicts gain contract metadata (ok/schema_version).
        - envelope: always return {"ok", "schema_version", "data"} for success.
    """
    normalized = _ensure_contract_dict(result)
    if normalized.get("ok") is False or _response_mode != "envelope":
        return normalized
    data = dict(normalized)
    data.pop("ok", None)
    data.pop("schema_version", None)
    return {"ok": True, "schema_version": CONTRACT_SCHEMA_VERSION, "data": data}


_ALLOWED_METHODS = {
    "list_boards",
    "list_lists",
    "resolve_list_id",
    "list_cards",
    "get_card",
    "create_card",
    "move_card",
    "archive_card",
    "list_comments",
    "add_comment",
    "list_checklists",
    "create_checklist",
    "add_checklist_item",
    "set_checklist_item",
}


def _validate_text(text: str, field: str) -> str:
    """Strip control characters and enforce the Trello length limit."""
    if not isinstance(text, str):
        raise CliError(f"[ERROR] {field} must be a string")
    cleaned = _CONTROL_RE.sub("", text)
    if len(cleaned) > _MAX_TEXT_LENGTH:
        raise CliError(f"[ERROR] {field} exceeds maximum length of {_MAX_TEXT_LENGTH} characters")
    return cleaned


def _call(method_name: str, *args, **kwargs) -> dict:
    """Call a TrelliClient method; records become plain data, errors become dicts."""
    if method_name not in _ALLOWED_METHODS:
        return _contract_error(f"Unknown method: {method_name}", "error")
    try:
        client = _get_client()
        result = getattr(client, method_name)(*args, **kwargs)
    except ConfigurationError as e:
        error_type = "setup" if e.parameter in _CREDENTIAL_PARAMETERS else e.error_type
        return _contract_error(str(e), error_type)
    except CliError as e:
        return _contract_error(str(e), e.error_type)
    except Exception as e:
        return _contract_error(f"Unexpected error: {e}", "error")
    return {"result": to_jsonable(result)}


def _list_payload(call_result: dict, key: str) -> dict:
    """Reshape a list result into {key: [...], count: n}."""
    if call_result.get("ok") is False:
        return call_result
    rows = call_result["result"] or []
    return {key: rows, "count": len(rows)}


def _record_payload(call_result: dict, key: str) -> dict:
    if call_result.get("ok") is False:
        return call_result
    return {key: call_result["result"]}
