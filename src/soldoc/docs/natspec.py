"""NatSpec doc-comment parsing.

A comment is split into tag blocks: a block starts on a line beginning with
``@tag `` and runs until the next such line.  Text before the first tag
belongs to ``@notice``.  Unknown or malformed tags are dropped, never fatal.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from soldoc.solidity.nodes import FunctionDefinition, Node

log = logging.getLogger(__name__)

_TAG = r"(?:\w+|custom:[a-z][a-z-]*)"
_BLOCK_RE = re.compile(rf"^(?:@({_TAG}) )?((?:(?!^@{_TAG} )[\s\S])*)", re.MULTILINE)
# solc keeps each line's indentation after stripping the comment markers
_LEADING_WS_RE = re.compile(r"^[^\S\n]+", re.MULTILINE)
_PARAM_RE = re.compile(r"(\w+) ([\s\S]*)")
_RETURN_RE = re.compile(r"(\w+)( ([\s\S]*))?")


@dataclass
class NatSpec:
    title: str | None = None
    author: str | None = None
    summary: str | None = None
    detail: str | None = None
    params: dict[str, str] = field(default_factory=dict)
    returns: dict[str, str] = field(default_factory=dict)
    custom: dict[str, str] = field(default_factory=dict)
    inheritdoc: str | None = None


def _append(existing: str | None, fragment: str) -> str | None:
    fragment = fragment.strip()
    if not fragment:
        return existing
    if existing is None:
        return fragment
    return f"{existing}\n{fragment}"


def _iter_blocks(text: str) -> Iterator[tuple[str, str]]:
    pos = 0
    while pos < len(text):
        m = _BLOCK_RE.match(text, pos)
        if m is None or m.end() == pos:
            break
        yield m.group(1) or "notice", m.group(2)
        pos = m.end()


def parse_docstring(text: str | None, return_names: Sequence[str] = ()) -> NatSpec:
    """Parse raw comment *text* into a :class:`NatSpec` record.

    *return_names* lists the declaration's return parameter names in order
    (``""`` for unnamed slots); ``@return`` blocks are matched against it
    positionally.
    """
    record = NatSpec()
    if not text:
        return record

    text = _LEADING_WS_RE.sub("", text)
    return_slot = 0

    for tag, content in _iter_blocks(text):
        if tag == "notice":
            record.summary = _append(record.summary, content)
        elif tag == "dev":
            record.detail = _append(record.detail, content)
        elif tag == "title":
            record.title = content.strip()
        elif tag == "author":
            record.author = content.strip()
        elif tag == "inheritdoc":
            record.inheritdoc = content.strip()
        elif tag == "param":
            m = _PARAM_RE.match(content)
            if m is None:
                log.debug("Ignoring @param without description: %r", content)
                continue
            record.params.setdefault(m.group(1), m.group(2).strip())
        elif tag == "return":
            slot = return_slot
            return_slot += 1
            if slot >= len(return_names):
                log.debug("Ignoring @return #%d: declaration has %d return value(s)", slot + 1, len(return_names))
                continue
            name = return_names[slot]
            if not name:
                record.returns[str(slot)] = content.strip()
                continue
            m = _RETURN_RE.match(content)
            if m is None or m.group(1) != name:
                log.debug("Ignoring @return #%d: expected it to start with %r", slot + 1, name)
                continue
            record.returns[name] = (m.group(3) or "").strip()
        elif tag.startswith("custom:"):
            key = tag[len("custom:"):]
            record.custom[key] = _append(record.custom.get(key), content) or ""
        else:
            log.debug("Ignoring unknown NatSpec tag @%s", tag)

    return record


def parse_natspec(node: Node) -> NatSpec:
    """Parse the doc comment attached to *node* (empty record when absent)."""
    return_names: Sequence[str] = ()
    if isinstance(node, FunctionDefinition):
        return_names = [p.name for p in node.return_parameters.parameters]
    return parse_docstring(getattr(node, "documentation", None), return_names)
