"""Descendant search over a node tree."""

from __future__ import annotations

from typing import Callable, Iterator, TypeVar, overload

from soldoc.solidity.nodes import Node

N = TypeVar("N", bound=Node)


@overload
def find_all(kind: type[N], node: Node, prune: Callable[[Node], bool] | None = None) -> Iterator[N]: ...


@overload
def find_all(kind: str, node: Node, prune: Callable[[Node], bool] | None = None) -> Iterator[Node]: ...


def find_all(kind, node, prune=None):
    """Yield every descendant of *node* matching *kind*, in source order.

    *kind* is either a node class or a compiler ``nodeType`` string.  The
    root itself is never yielded.  When *prune* returns True for a node, that
    node is still tested but its subtree is not entered.
    """
    if isinstance(kind, str):
        matches = lambda n: n.node_type == kind  # noqa: E731
    else:
        matches = lambda n: type(n) is kind  # noqa: E731

    stack = list(reversed(list(node.children())))
    while stack:
        current = stack.pop()
        if matches(current):
            yield current
        if prune is not None and prune(current):
            continue
        stack.extend(reversed(list(current.children())))
