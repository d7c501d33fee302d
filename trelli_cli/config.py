"""
trelli-cli shared configuration and constants.
Standalone module — imports nothing from other project files except exceptions.

Settings are read from the project .env file, overlaid by the process
environment, overlaid by command-line flags, and frozen into a Config
value built once per process.
"""

import os
from dataclasses import dataclass, field

from trelli_cli.exceptions import CliError, ConfigurationError

# ---------------------------------------------------------------------------
# .env path and helpers
# ---------------------------------------------------------------------------

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
_PROJECT_ROOT = os.path.dirname(_PACKAGE_DIR)

ENV_PATH = os.path.join(_PROJECT_ROOT, ".env")

KNOWN_ENV_KEYS = (
    "TRELLO_API_KEY",
    "TRELLO_TOKEN",
    "TRELLO_BOARD_ID",
    "TRELLI_HTTP_TIMEOUT_SECONDS",
    "TRELLI_HTTP_MAX_RESPONSE_BYTES",
    "TRELLI_HTTP_LOG",
    "TRELLI_HTTP_LOG_SAMPLE_RATE",
    "TRELLI_MCP_RESPONSE_MODE",
)


def load_env():
    """Read KEY=VALUE pairs from .env, then overlay known keys from os.environ."""
    env = {}
    if os.path.exists(ENV_PATH):
        with open(ENV_PATH) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, val = line.split("=", 1)
                    env[key.strip()] = val.strip()
    for key in KNOWN_ENV_KEYS:
        if key in os.environ:
            env[key] = os.environ[key].strip()
    return env


def _env_bool(env, key, default=False):
    """Parse common boolean env formats."""
    raw = env.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(env, key, default):
    """Parse integer env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(env, key, default):
    """Parse float env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VERSION = "0.3.0"
CONTRACT_SCHEMA_VERSION = "1.0"

BASE_URL = "https://api.trello.com"
DEFAULT_BOARD_ID = "XobnRsYv"

DEFAULT_HTTP_TIMEOUT_SECONDS = 20
DEFAULT_HTTP_MAX_RESPONSE_BYTES = 5_000_000
DEFAULT_CARD_LIMIT = 100
DEFAULT_COMMENT_LIMIT = 100

VALID_METHODS = {"GET", "POST", "PUT"}
VALID_CHECK_ITEM_STATES = {"complete", "incomplete"}
VALID_FORMATS = {"table", "json"}
VALID_MCP_RESPONSE_MODES = {"legacy", "envelope"}

MISSING_CREDENTIALS_MESSAGE = (
    "[SETUP_NEEDED] Missing credentials: set TRELLO_API_KEY and TRELLO_TOKEN "
    "(in .env or the environment) or pass --key/--token."
)


# ---------------------------------------------------------------------------
# Config value
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Config:
    """Process-wide settings, built once and passed explicitly."""

    api_key: str = field(repr=False)
    token: str = field(repr=False)
    board_id: str = DEFAULT_BOARD_ID
    timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    max_response_bytes: int = DEFAULT_HTTP_MAX_RESPONSE_BYTES
    http_log: bool = False
    http_log_sample_rate: float = 1.0
    mcp_response_mode: str = "legacy"

    def require_credentials(self):
        """Raise ConfigurationError unless both key and token are set."""
        if not self.api_key:
            raise ConfigurationError(MISSING_CREDENTIALS_MESSAGE, parameter="key")
        if not self.token:
            raise ConfigurationError(MISSING_CREDENTIALS_MESSAGE, parameter="token")


def _pick(flag_value, env, key):
    if flag_value is not None and flag_value.strip():
        return flag_value.strip()
    return (env.get(key) or "").strip()


def load_config(*, key=None, token=None, board=None, verbose=False, env=None):
    """Build the Config: flag value > environment > .env > default.

    Credentials are not validated here so that help/version paths work
    without them; the transport validates them before any request.
    """
    if env is None:
        env = load_env()
    board_id = _pick(board, env, "TRELLO_BOARD_ID") or DEFAULT_BOARD_ID
    mode = (env.get("TRELLI_MCP_RESPONSE_MODE") or "legacy").strip().lower()
    if mode not in VALID_MCP_RESPONSE_MODES:
        raise CliError(
            f"[ERROR] Invalid TRELLI_MCP_RESPONSE_MODE '{mode}'. "
            f"Use: {', '.join(sorted(VALID_MCP_RESPONSE_MODES))}"
        )
    timeout = _env_float(env, "TRELLI_HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS)
    max_bytes = _env_int(env, "TRELLI_HTTP_MAX_RESPONSE_BYTES", DEFAULT_HTTP_MAX_RESPONSE_BYTES)
    sample_rate = _env_float(env, "TRELLI_HTTP_LOG_SAMPLE_RATE", 1.0)
    return Config(
        api_key=_pick(key, env, "TRELLO_API_KEY"),
        token=_pick(token, env, "TRELLO_TOKEN"),
        board_id=board_id,
        timeout_seconds=max(1, timeout),
        max_response_bytes=max(1, max_bytes),
        http_log=verbose or _env_bool(env, "TRELLI_HTTP_LOG", False),
        http_log_sample_rate=min(1.0, max(0.0, sample_rate)),
        mcp_response_mode=mode,
    )
