"""Low-level table rendering helpers (stdlib only)."""

import re

_CONTROL_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]|[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def _trunc(s, maxlen):
    """Truncate string with ellipsis indicator."""
    if not s:
        return ""
    return s[: maxlen - 1] + "…" if len(s) > maxlen else s


def _sanitize_str(s):
    """Strip ANSI escape sequences and control chars from table output.
    Newlines and tabs inside a cell are flattened to spaces."""
    if not s:
        return s
    return _CONTROL_RE.sub("", str(s)).replace("\n", " ").replace("\t", " ")


def _cell(val):
    if isinstance(val, bool):
        return "true" if val else "false"
    if val is None:
        return ""
    return _sanitize_str(val) if isinstance(val, str) else str(val)


def _table(columns, rows, footer=None):
    """Build a column-aligned table string.

    columns: list of header names.
    rows: list of tuples matching columns; the last column is not padded.
    footer: optional footer line.
    """
    cells = [[_cell(v) for v in row] for row in rows]
    widths = [len(name) for name in columns]
    for row in cells:
        for i, val in enumerate(row):
            widths[i] = max(widths[i], len(val))

    def _line(values):
        padded = [
            val if i == len(values) - 1 else f"{val:<{widths[i]}}" for i, val in enumerate(values)
        ]
        return "  ".join(padded).rstrip()

    lines = [_line(list(columns))]
    lines.extend(_line(row) for row in cells)
    if footer:
        lines.append(f"\n{footer}")
    return "\n".join(lines)
