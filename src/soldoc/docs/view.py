"""Renderable projections of decorated records.

Decorated records still carry raw subtrees (``nodes``, ``body``, parameter
lists...).  The views built here keep only values a template can print
directly and expand member collections into views of their own.
"""

from __future__ import annotations

from typing import Any

from soldoc.docs.accessors import COLLECTION_KEYS, decorate, signature
from soldoc.solidity.nodes import ContractDefinition, Node


def _renderable(value: Any) -> bool:
    if isinstance(value, Node):
        return False
    if isinstance(value, (list, tuple)):
        return not any(isinstance(item, Node) for item in value)
    return True


def member_view(node: Node) -> dict[str, Any]:
    """Scalar fields and derived properties of a single declaration."""
    record = decorate(node)
    return {
        key: value
        for key, value in record.items()
        if key not in COLLECTION_KEYS and _renderable(value)
    }


def contract_view(contract: ContractDefinition) -> dict[str, Any]:
    """A contract's own properties plus views of every member declaration."""
    record = decorate(contract)
    view = {key: value for key, value in record.items() if _renderable(value)}
    for key in COLLECTION_KEYS:
        view[key] = [member_view(member) for member in record[key]]
    view["public_external_functions"] = [signature(f) for f in record["public_external_functions"]]
    view["public_variables"] = [v.name for v in record["public_variables"]]
    return view
