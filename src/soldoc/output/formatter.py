"""Text and JSON formatting, plus the helpers templates call while rendering."""

from __future__ import annotations

import dataclasses
import json as _json
import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any

# Envelope schema versioning (semver: major.minor.patch)
ENVELOPE_SCHEMA_VERSION = "1.0.0"
ENVELOPE_SCHEMA_NAME = "soldoc-envelope-v1"

_NEWLINES_RE = re.compile(r"\n+")

KIND_ABBREV = {
    "Function": "fn",
    "Event": "event",
    "Error": "error",
    "Modifier": "mod",
    "Variable": "var",
    "Contract": "contract",
}


def abbrev_kind(kind: str) -> str:
    return KIND_ABBREV.get(kind, kind)


# ── Template helpers ─────────────────────────────────────────────────


def h(sublevel: Any = 1, hlevel: int | None = None) -> str:
    """Markdown heading marker.

    *hlevel* is the base level of the enclosing document (default 1) and
    *sublevel* nests below it; a non-integer sublevel counts as 1.

    Examples::

        h()        -> "#"
        h(2)       -> "##"
        h(1, 3)    -> "###"
    """
    if isinstance(sublevel, int) and not isinstance(sublevel, bool):
        sublevel = max(1, sublevel)
    else:
        sublevel = 1
    return "#" * ((hlevel or 1) + sublevel - 1)


def trim(text: Any) -> str | None:
    if isinstance(text, str):
        return text.strip()
    return None


def join_lines(text: Any) -> str | None:
    if isinstance(text, str):
        return _NEWLINES_RE.sub(" ", text)
    return None


# ── Plain-text layout ────────────────────────────────────────────────


def section(title: str, lines: list[str], budget: int = 0) -> str:
    out = [title]
    if budget and len(lines) > budget:
        out.extend(lines[:budget])
        out.append(f"  (+{len(lines) - budget} more)")
    else:
        out.extend(lines)
    return "\n".join(out)


def format_signature(sig: str | None, max_len: int = 80) -> str:
    if not sig:
        return ""
    sig = sig.strip()
    if len(sig) > max_len:
        return sig[: max_len - 3] + "..."
    return sig


def format_table(headers: list[str], rows: list[list[str]], budget: int = 0) -> str:
    if not rows:
        return "(none)"
    widths = [len(col) for col in headers]
    num_cols = len(widths)
    for row in rows:
        for i, cell in enumerate(row):
            if i < num_cols:
                widths[i] = max(widths[i], len(str(cell)))
    lines = []
    header_line = "  ".join(col.ljust(widths[i]) for i, col in enumerate(headers))
    lines.append(header_line.rstrip())
    lines.append("  ".join("-" * w for w in widths))
    display_rows = rows
    if budget and len(rows) > budget:
        display_rows = rows[:budget]
    for row in display_rows:
        line = "  ".join(str(cell).ljust(widths[i]) for i, cell in enumerate(row))
        lines.append(line.rstrip())
    if budget and len(rows) > budget:
        lines.append(f"(+{len(rows) - budget} more)")
    return "\n".join(lines)


# ── JSON ─────────────────────────────────────────────────────────────


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, Enum):
        return value.value
    return str(value)


def to_json(data) -> str:
    """Serialize data to a JSON string with deterministic key ordering.

    Dataclasses (NatSpec records, parameter views, nodes) are expanded to
    dicts; anything else unknown falls back to ``str``.
    """
    return _json.dumps(data, indent=2, default=_json_default, sort_keys=True)


def json_envelope(command: str, summary: dict | None = None, **payload) -> dict:
    """Wrap command output in a self-describing envelope.

    Non-deterministic metadata (``timestamp``) is placed in a ``_meta``
    sub-dict so the content keys stay identical across invocations::

        {
            "schema":  "soldoc-envelope-v1",
            "command": "outline",
            "version": "<current>",
            "summary": { ... },
            "_meta":   {"timestamp": "2026-02-12T14:30:00Z"},
            ...payload
        }
    """
    ts = datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
    out: dict = {
        "schema": ENVELOPE_SCHEMA_NAME,
        "schema_version": ENVELOPE_SCHEMA_VERSION,
        "command": command,
        "version": _get_version(),
        "summary": summary or {},
    }
    out.update(payload)
    out["_meta"] = {"timestamp": ts}
    return out


def _get_version() -> str:
    from soldoc import __version__

    return __version__
