"""
HTTP request layer and security helpers for trelli-cli.

TrelloTransport.invoke() is the single way the CLI talks to the API:
it injects credentials, builds the URL and form body, runs exactly one
request and maps every outcome onto the exceptions module.
"""

import hashlib
import http.client
import json
import re
import sys
import time
import urllib.error
import urllib.parse
import urllib.request
import uuid
from dataclasses import dataclass, field

from trelli_cli import config
from trelli_cli.exceptions import (
    ConfigurationError,
    DecodeError,
    HTTPError,
    RemoteError,
    TransportError,
)

_SENSITIVE_QUERY_KEYS = frozenset({"key", "token"})


# ---------------------------------------------------------------------------
# Security helpers
# ---------------------------------------------------------------------------


def _safe_json_parse(text, context="input"):
    """Parse JSON, raising DecodeError with a friendly message on failure."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(
            f"[ERROR] Invalid JSON in {context}: {e.msg} at position {e.pos}", cause=e
        ) from e


def _sanitize_url_for_log(url):
    """Mask credential query params in URLs before logging."""
    parsed = urllib.parse.urlsplit(url)
    if not parsed.query:
        return url
    pairs = urllib.parse.parse_qsl(parsed.query, keep_blank_values=True)
    masked = []
    for key, value in pairs:
        if key.lower() in _SENSITIVE_QUERY_KEYS:
            masked.append((key, "***"))
        else:
            masked.append((key, value))
    safe_query = urllib.parse.urlencode(masked, doseq=True)
    return urllib.parse.urlunsplit(
        (parsed.scheme, parsed.netloc, parsed.path, safe_query, parsed.fragment)
    )


def _is_sampled_request(request_id, rate):
    """Decide if a request should be logged based on sample rate."""
    if rate <= 0:
        return False
    if rate >= 1:
        return True
    if not request_id:
        return False
    digest = hashlib.sha256(request_id.encode("utf-8")).digest()
    bucket = int.from_bytes(digest[:4], "big") / 4294967295.0
    return bucket < rate


def _log_http_event(**fields):
    """Emit one structured HTTP log line to stderr."""
    print("[HTTP] " + json.dumps(fields, ensure_ascii=False, sort_keys=True), file=sys.stderr)


# ---------------------------------------------------------------------------
# URL and error-body helpers
# ---------------------------------------------------------------------------


def join_url(base_url, path):
    """Join *path* onto *base_url* with exactly one separator between segments."""
    clean_path = re.sub(r"/{2,}", "/", "/" + (path or "").lstrip("/"))
    return base_url.rstrip("/") + clean_path


def path_segment(value):
    """Percent-escape an id so it stays a single path segment."""
    return urllib.parse.quote(value, safe="")


def _extract_error_message(status, body):
    """Pick the error message: JSON 'message', JSON 'error', raw body, generic."""
    text = (body or "").strip()
    if text:
        try:
            envelope = json.loads(text)
        except (json.JSONDecodeError, ValueError):
            envelope = None
        if isinstance(envelope, dict):
            for key in ("message", "error"):
                value = envelope.get(key)
                if isinstance(value, str) and value:
                    return value
        return text
    return f"HTTP {status}"


# ---------------------------------------------------------------------------
# HTTP request layer
# ---------------------------------------------------------------------------


def _http_request(
    url,
    data=None,
    headers=None,
    method="GET",
    timeout=config.DEFAULT_HTTP_TIMEOUT_SECONDS,
    max_bytes=config.DEFAULT_HTTP_MAX_RESPONSE_BYTES,
    log_enabled=False,
    sample_rate=1.0,
):
    """Make one HTTP request and return the raw response body as text.

    Raises HTTPError for non-2xx responses (caller maps it) and
    TransportError for network faults and timeouts. Never retries.
    """
    request_id = (headers or {}).get("X-Request-Id")
    safe_url = _sanitize_url_for_log(url)
    sampled = log_enabled and _is_sampled_request(request_id, sample_rate)
    start = time.perf_counter()
    req = urllib.request.Request(url, data=data, headers=headers or {}, method=method)
    if sampled:
        _log_http_event(
            phase="request",
            method=method,
            url=safe_url,
            request_id=request_id,
            timeout_seconds=timeout,
            has_body=data is not None,
        )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            raw = resp.read(max_bytes + 1)
            if len(raw) > max_bytes:
                raise TransportError(
                    f"[ERROR] Response too large from Trello API (>{max_bytes} bytes)."
                )
            if sampled:
                _log_http_event(
                    phase="response",
                    method=method,
                    url=safe_url,
                    status=getattr(resp, "status", 200),
                    bytes=len(raw),
                    latency_ms=round((time.perf_counter() - start) * 1000, 2),
                    request_id=request_id,
                )
            return raw.decode("utf-8", errors="replace")
    except urllib.error.HTTPError as e:
        try:
            error_body = e.read(max_bytes).decode("utf-8", errors="replace") if e.fp else ""
        except (TimeoutError, OSError) as read_err:
            timed_out = isinstance(read_err, TimeoutError)
            if sampled:
                _log_http_event(
                    phase="network_error",
                    method=method,
                    url=safe_url,
                    status=e.code,
                    error="timeout" if timed_out else f"{type(read_err).__name__}: {read_err}",
                    request_id=request_id,
                )
            raise TransportError(
                f"[ERROR] Failed reading error response (HTTP {e.code}): {read_err}",
                cause=read_err,
                timed_out=timed_out,
            ) from read_err
        if sampled:
            _log_http_event(
                phase="response",
                method=method,
                url=safe_url,
                status=e.code,
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
                request_id=request_id,
            )
        raise HTTPError(e.code, e.reason, error_body, headers=e.headers) from e
    except TimeoutError as e:
        if sampled:
            _log_http_event(
                phase="network_error",
                method=method,
                url=safe_url,
                error="timeout",
                request_id=request_id,
            )
        raise TransportError(
            f"[ERROR] Request timed out after {timeout} seconds. Is the Trello API reachable?",
            cause=e,
            timed_out=True,
        ) from e
    except urllib.error.URLError as e:
        timed_out = isinstance(e.reason, TimeoutError)
        if sampled:
            _log_http_event(
                phase="network_error",
                method=method,
                url=safe_url,
                error="timeout" if timed_out else f"url_error: {e.reason}",
                request_id=request_id,
            )
        if timed_out:
            raise TransportError(
                f"[ERROR] Request timed out after {timeout} seconds. "
                "Is the Trello API reachable?",
                cause=e,
                timed_out=True,
            ) from e
        raise TransportError(f"[ERROR] Connection failed: {e.reason}", cause=e) from e
    except (http.client.HTTPException, OSError) as e:
        if sampled:
            _log_http_event(
                phase="network_error",
                method=method,
                url=safe_url,
                error=f"{type(e).__name__}: {e}",
                request_id=request_id,
            )
        raise TransportError(f"[ERROR] Connection failed: {e}", cause=e) from e


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Credentials:
    """API key/token pair. Never printed: excluded from repr."""

    key: str = field(repr=False)
    token: str = field(repr=False)

    def __post_init__(self):
        if not (self.key or "").strip():
            raise ConfigurationError(config.MISSING_CREDENTIALS_MESSAGE, parameter="key")
        if not (self.token or "").strip():
            raise ConfigurationError(config.MISSING_CREDENTIALS_MESSAGE, parameter="token")


class TrelloTransport:
    """Authenticated, single-shot request executor for the Trello REST API."""

    def __init__(
        self,
        credentials,
        *,
        base_url=config.BASE_URL,
        timeout=config.DEFAULT_HTTP_TIMEOUT_SECONDS,
        max_response_bytes=config.DEFAULT_HTTP_MAX_RESPONSE_BYTES,
        log_enabled=False,
        log_sample_rate=1.0,
    ):
        self._credentials = credentials
        self.base_url = base_url
        self.timeout = timeout
        self.max_response_bytes = max_response_bytes
        self.log_enabled = log_enabled
        self.log_sample_rate = log_sample_rate

    @classmethod
    def from_config(cls, cfg):
        """Build a transport from a Config, validating credentials first."""
        cfg.require_credentials()
        return cls(
            Credentials(cfg.api_key, cfg.token),
            timeout=cfg.timeout_seconds,
            max_response_bytes=cfg.max_response_bytes,
            log_enabled=cfg.http_log,
            log_sample_rate=cfg.http_log_sample_rate,
        )

    def build_url(self, path, query=None):
        """Full request URL. Credentials are applied last so callers cannot override them."""
        params = dict(query or {})
        params["key"] = self._credentials.key
        params["token"] = self._credentials.token
        encoded = urllib.parse.urlencode(sorted(params.items()))
        return f"{join_url(self.base_url, path)}?{encoded}"

    def invoke(self, method, path, query=None, form=None, out=None, many=False):
        """Run one request and decode the response.

        Args:
            method: GET, POST or PUT.
            path: API path such as ``/1/cards``; joined onto the base URL.
            query: str->str query parameters (credentials are always added).
            form: str->str form fields, sent url-encoded on non-GET calls only.
            out: record class from trelli_cli.models to decode into, or None
                when no response body is expected.
            many: True when the response is a JSON array of *out* records.

        Returns:
            None, one record, or a list of records.
        """
        method = (method or "").upper()
        if method not in config.VALID_METHODS:
            raise ConfigurationError(
                f"[ERROR] Unsupported HTTP method '{method}'. "
                f"Use: {', '.join(sorted(config.VALID_METHODS))}",
                parameter="method",
            )
        url = self.build_url(path, query)
        headers = {
            "Accept": "application/json",
            "X-Request-Id": str(uuid.uuid4()),
        }
        body = None
        if method != "GET" and form is not None:
            body = urllib.parse.urlencode(list(form.items())).encode("utf-8")
            headers["Content-Type"] = "application/x-www-form-urlencoded"

        try:
            text = _http_request(
                url,
                body,
                headers,
                method,
                timeout=self.timeout,
                max_bytes=self.max_response_bytes,
                log_enabled=self.log_enabled,
                sample_rate=self.log_sample_rate,
            )
        except HTTPError as e:
            raise RemoteError(e.code, _extract_error_message(e.code, e.body)) from e

        if out is None:
            return None
        return self._decode(text, out, many)

    @staticmethod
    def _decode(text, out, many):
        if not text.strip():
            return None
        parsed = _safe_json_parse(text, "Trello API response")
        if many:
            if not isinstance(parsed, list):
                raise DecodeError(
                    "[ERROR] Unexpected response shape: expected JSON array, "
                    f"got {type(parsed).__name__}."
                )
            return [out.from_value(item) for item in parsed]
        return out.from_value(parsed)
