"""
trelli-cli exception hierarchy.

All custom exceptions live here to avoid circular imports.
Every error the CLI can surface is a CliError subclass carrying
structured fields, so callers branch on type instead of message text.
"""


class CliError(Exception):
    """Exit code 1 — validation, not-found, network, parse errors."""

    exit_code = 1
    error_type = "error"


class ConfigurationError(CliError):
    """Exit code 2 — missing credentials or a required id/name.

    Always raised before any network access.
    """

    exit_code = 2
    error_type = "configuration"

    def __init__(self, message, parameter=None):
        super().__init__(message)
        self.parameter = parameter


class TransportError(CliError):
    """DNS failure, refused/reset connection, timeout or oversized response."""

    error_type = "transport"

    def __init__(self, message, cause=None, timed_out=False):
        super().__init__(message)
        self.cause = cause
        self.timed_out = timed_out


class RemoteError(CliError):
    """The API answered with a non-2xx status."""

    error_type = "remote"

    def __init__(self, status, message):
        super().__init__(f"[ERROR] Trello API error ({status}): {message}")
        self.status = status
        self.message = message


class DecodeError(CliError):
    """Response body present but not valid JSON for the expected shape."""

    error_type = "decode"

    def __init__(self, message, cause=None):
        super().__init__(message)
        self.cause = cause


class NotFoundError(CliError):
    """No candidate in the scope matches the requested name."""

    error_type = "not_found"

    def __init__(self, query, scope, available=()):
        self.query = query
        self.scope = scope
        self.available = list(available)
        hint = f" Available: {', '.join(self.available)}" if self.available else ""
        super().__init__(f"[ERROR] List name '{query}' not found on board '{scope}'.{hint}")


class AmbiguousMatchError(CliError):
    """More than one candidate matches in the deciding tier (exact or partial)."""

    error_type = "ambiguous"

    def __init__(self, query, scope, tier, candidates):
        self.query = query
        self.scope = scope
        self.tier = tier
        self.candidates = list(candidates)
        self.count = len(self.candidates)
        listing = ", ".join(f"{name} ({cid})" for cid, name in self.candidates)
        super().__init__(
            f"[ERROR] List name '{query}' is ambiguous on board '{scope}' "
            f"({self.count} {tier} matches): {listing}\n"
            "[ERROR] Pass the list id instead of its name."
        )


class HTTPError(Exception):
    """Raised by _http_request for HTTP errors that callers want to handle."""

    def __init__(self, code, reason, body, headers=None):
        self.code = code
        self.reason = reason
        self.body = body
        self.headers = headers or {}
