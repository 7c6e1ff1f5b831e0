"""Derived documentation properties of declaration nodes.

``ACCESSORS`` maps each property name to a function ``node -> value | None``.
Every accessor accepts any node; for node kinds it does not describe it
returns ``None``.  :func:`decorate` applies the whole table to a node and
merges the results over the node's own fields, producing the record handed
to templates.
"""

from __future__ import annotations

import re
from dataclasses import fields
from typing import Any, Callable

from soldoc.docs.natspec import NatSpec, parse_natspec
from soldoc.docs.params import Param, merge_params
from soldoc.exit_codes import InvariantViolation
from soldoc.solidity.nodes import (
    ContractDefinition,
    ErrorDefinition,
    EventDefinition,
    FunctionDefinition,
    FunctionKind,
    ModifierDefinition,
    Mutability,
    Node,
    StateMutability,
    VariableDeclaration,
    Visibility,
)
from soldoc.solidity.walk import find_all

_LABEL_SUFFIX_RE = re.compile(r"(Definition|Declaration)$")
_CAMEL_RE = re.compile(r"(\w)([A-Z])")

# Function kinds that have no ordinary name in source
_UNNAMED_KINDS = frozenset({FunctionKind.CONSTRUCTOR, FunctionKind.FALLBACK, FunctionKind.RECEIVE})
_PUBLIC_FUNCTION_VISIBILITY = frozenset({Visibility.PUBLIC, Visibility.EXTERNAL})
_TEST_MARKERS = ("Test", "Mock")


def type_label(node: Node) -> str:
    label = _LABEL_SUFFIX_RE.sub("", node.node_type)
    return _CAMEL_RE.sub(r"\1 \2", label)


def natspec(node: Node) -> NatSpec:
    return parse_natspec(node)


def name(node: Node) -> str | None:
    if isinstance(node, FunctionDefinition) and node.kind in _UNNAMED_KINDS:
        return node.kind.value
    return getattr(node, "name", None)


def visibility(node: Node) -> str | None:
    if isinstance(node, (FunctionDefinition, VariableDeclaration)) and node.visibility is not None:
        return node.visibility.value
    return None


def type_name(node: Node) -> str | None:
    """Bare name of an elementary type, else the resolved type string."""
    if not isinstance(node, VariableDeclaration) or node.type_name is None:
        return None
    if node.type_name.is_elementary:
        return node.type_name.name
    return node.type_name.type_string


def state_mutability(node: Node) -> str | None:
    """Declared mutability, suppressed when it is the default."""
    if isinstance(node, FunctionDefinition):
        value, default = node.state_mutability, StateMutability.NONPAYABLE
    elif isinstance(node, VariableDeclaration):
        value, default = node.mutability, Mutability.MUTABLE
    else:
        return None
    if value is None or value == default:
        return None
    return value.value


def virtual(node: Node) -> str | None:
    if isinstance(node, FunctionDefinition) and node.virtual:
        return "virtual"
    return None


def with_modifiers(node: Node) -> str | None:
    if isinstance(node, FunctionDefinition) and node.modifiers:
        return ", ".join(m.modifier_name for m in node.modifiers)
    return None


def signature(node: Node) -> str | None:
    """``name(type1,type2,...)`` for functions and events."""
    if not isinstance(node, (FunctionDefinition, EventDefinition)):
        return None
    types = []
    for p in node.parameters.parameters:
        type_string = p.type_name.type_string if p.type_name is not None else None
        if type_string is None:
            raise InvariantViolation(f"Parameter {p.name!r} of {name(node)!r} (node {node.id}) has no resolved type")
        types.append(type_string)
    return f"{name(node)}({','.join(types)})"


def params(node: Node) -> list[Param] | None:
    if isinstance(node, (FunctionDefinition, EventDefinition)):
        return merge_params(node.parameters, natspec(node).params)
    return None


def returns(node: Node) -> list[Param] | None:
    if isinstance(node, FunctionDefinition):
        return merge_params(node.return_parameters, natspec(node).returns, positional=True)
    return None


def functions(node: Node) -> list[FunctionDefinition]:
    return list(find_all(FunctionDefinition, node))


def events(node: Node) -> list[EventDefinition]:
    return list(find_all(EventDefinition, node))


def modifiers(node: Node) -> list[ModifierDefinition]:
    return list(find_all(ModifierDefinition, node))


def errors(node: Node) -> list[ErrorDefinition]:
    return list(find_all(ErrorDefinition, node))


def variables(node: Node) -> list[VariableDeclaration]:
    """State variables only; locals and parameters are skipped."""
    return [v for v in find_all(VariableDeclaration, node) if v.state_variable]


def public_external_functions(node: Node) -> list[FunctionDefinition]:
    return [f for f in find_all(FunctionDefinition, node) if f.visibility in _PUBLIC_FUNCTION_VISIBILITY]


def public_variables(node: Node) -> list[VariableDeclaration]:
    return [v for v in variables(node) if v.visibility is Visibility.PUBLIC]


def has_public_members(node: Node) -> bool:
    if any(v.state_variable and v.visibility is Visibility.PUBLIC for v in find_all(VariableDeclaration, node)):
        return True
    if any(True for _ in find_all(EventDefinition, node)):
        return True
    return any(f.visibility in _PUBLIC_FUNCTION_VISIBILITY for f in find_all(FunctionDefinition, node))


def not_test(node: Node) -> bool:
    """False for contracts named like test scaffolding (``Test*``, ``*Mock``...)."""
    if not isinstance(node, ContractDefinition):
        return True
    return not any(node.name.startswith(m) or node.name.endswith(m) for m in _TEST_MARKERS)


ACCESSORS: dict[str, Callable[[Node], Any]] = {
    "type": type_label,
    "natspec": natspec,
    "name": name,
    "visibility": visibility,
    "type_name": type_name,
    "state_mutability": state_mutability,
    "virtual": virtual,
    "with_modifiers": with_modifiers,
    "signature": signature,
    "params": params,
    "returns": returns,
    "functions": functions,
    "events": events,
    "modifiers": modifiers,
    "errors": errors,
    "variables": variables,
    "public_external_functions": public_external_functions,
    "public_variables": public_variables,
    "has_public_members": has_public_members,
    "not_test": not_test,
}

COLLECTION_KEYS = ("functions", "events", "modifiers", "errors", "variables")


def node_fields(node: Node) -> dict[str, Any]:
    """The node's own fields as a fresh dict, led by its ``node_type``."""
    record: dict[str, Any] = {"node_type": node.node_type}
    for f in fields(node):
        record[f.name] = getattr(node, f.name)
    return record


def decorate(node: Node) -> dict[str, Any]:
    """Merge every accessor's result over the node's fields (accessors win)."""
    return {**node_fields(node), **{key: fn(node) for key, fn in ACCESSORS.items()}}
