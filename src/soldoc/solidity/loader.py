"""Build node trees from solc JSON ASTs.

Accepted documents:

* a single ``SourceUnit`` AST object, or a list of them
* solc standard-JSON output: ``{"sources": {path: {"ast": {...}}}}``
* Hardhat build-info files: ``{"output": {"sources": {...}}}``

Only declaration-level structure is modelled; anything else becomes a
:class:`GenericNode` that keeps its children.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from soldoc.exit_codes import AstLoadError
from soldoc.solidity.nodes import (
    ContractDefinition,
    ContractKind,
    ErrorDefinition,
    EventDefinition,
    FunctionDefinition,
    FunctionKind,
    GenericNode,
    ModifierDefinition,
    ModifierInvocation,
    Mutability,
    Node,
    ParameterList,
    SourceUnit,
    StateMutability,
    TypeName,
    VariableDeclaration,
    Visibility,
)

log = logging.getLogger(__name__)

_TYPE_NAME_KINDS = frozenset(
    {
        "ElementaryTypeName",
        "UserDefinedTypeName",
        "Mapping",
        "ArrayTypeName",
        "FunctionTypeName",
    }
)


def _base(data: dict) -> dict:
    return {"id": data.get("id", 0), "src": data.get("src", "")}


def _enum(enum_cls: type[Enum], value: Any):
    if value is None or value == "":
        return None
    try:
        return enum_cls(value)
    except ValueError:
        raise AstLoadError(f"Unknown {enum_cls.__name__} value {value!r}") from None


def _documentation(data: dict) -> str | None:
    doc = data.get("documentation")
    if doc is None:
        return None
    if isinstance(doc, str):
        return doc
    return doc.get("text")


def _type_string(data: dict | None) -> str | None:
    if not data:
        return None
    return (data.get("typeDescriptions") or {}).get("typeString")


def _optional(data: dict | None) -> Node | None:
    return load_node(data) if data else None


def _nodes(items: list | None) -> tuple[Node, ...]:
    return tuple(load_node(item) for item in items or ())


def _parameter_list(data: dict | None) -> ParameterList:
    if not data:
        return ParameterList()
    return ParameterList(
        **_base(data),
        parameters=tuple(_variable(p) for p in data.get("parameters", ())),
    )


def _type_name(data: dict) -> TypeName:
    name = data.get("name")
    if name is None and data.get("pathNode"):
        name = data["pathNode"].get("name")
    return TypeName(
        **_base(data),
        kind=data["nodeType"],
        name=name,
        type_string=_type_string(data),
    )


def _variable(data: dict) -> VariableDeclaration:
    type_name = data.get("typeName")
    mutability = data.get("mutability")
    if mutability is None and data.get("constant"):
        mutability = "constant"
    return VariableDeclaration(
        **_base(data),
        name=data.get("name", ""),
        type_name=_type_name(type_name) if type_name else None,
        type_string=_type_string(data),
        visibility=_enum(Visibility, data.get("visibility")),
        mutability=_enum(Mutability, mutability),
        state_variable=bool(data.get("stateVariable")),
        constant=bool(data.get("constant")),
        indexed=bool(data.get("indexed")),
        documentation=_documentation(data),
    )


def _function(data: dict) -> FunctionDefinition:
    kind = data.get("kind")
    if kind is None:
        kind = "constructor" if data.get("isConstructor") else "function"
    return FunctionDefinition(
        **_base(data),
        name=data.get("name", ""),
        kind=_enum(FunctionKind, kind),
        visibility=_enum(Visibility, data.get("visibility")),
        state_mutability=_enum(StateMutability, data.get("stateMutability")),
        virtual=bool(data.get("virtual")),
        parameters=_parameter_list(data.get("parameters")),
        modifiers=tuple(_modifier_invocation(m) for m in data.get("modifiers", ())),
        return_parameters=_parameter_list(data.get("returnParameters")),
        body=_optional(data.get("body")),
        documentation=_documentation(data),
    )


def _modifier_invocation(data: dict) -> ModifierInvocation:
    modifier_name = data.get("modifierName") or {}
    return ModifierInvocation(**_base(data), modifier_name=modifier_name.get("name", ""))


def _modifier(data: dict) -> ModifierDefinition:
    return ModifierDefinition(
        **_base(data),
        name=data.get("name", ""),
        visibility=_enum(Visibility, data.get("visibility")),
        virtual=bool(data.get("virtual")),
        parameters=_parameter_list(data.get("parameters")),
        body=_optional(data.get("body")),
        documentation=_documentation(data),
    )


def _event(data: dict) -> EventDefinition:
    return EventDefinition(
        **_base(data),
        name=data.get("name", ""),
        parameters=_parameter_list(data.get("parameters")),
        anonymous=bool(data.get("anonymous")),
        documentation=_documentation(data),
    )


def _error(data: dict) -> ErrorDefinition:
    return ErrorDefinition(
        **_base(data),
        name=data.get("name", ""),
        parameters=_parameter_list(data.get("parameters")),
        documentation=_documentation(data),
    )


def _base_contract_name(data: dict) -> str:
    base_name = data.get("baseName") or {}
    return base_name.get("name") or base_name.get("namePath", "")


def _contract(data: dict) -> ContractDefinition:
    return ContractDefinition(
        **_base(data),
        name=data.get("name", ""),
        contract_kind=_enum(ContractKind, data.get("contractKind", "contract")),
        abstract=bool(data.get("abstract")),
        base_contracts=tuple(_base_contract_name(b) for b in data.get("baseContracts", ())),
        nodes=_nodes(data.get("nodes")),
        documentation=_documentation(data),
    )


def _source_unit(data: dict) -> SourceUnit:
    return SourceUnit(
        **_base(data),
        absolute_path=data.get("absolutePath", ""),
        nodes=_nodes(data.get("nodes")),
    )


def _generic(data: dict) -> GenericNode:
    children = []
    for value in data.values():
        if isinstance(value, dict) and "nodeType" in value:
            children.append(load_node(value))
        elif isinstance(value, list):
            children.extend(load_node(v) for v in value if isinstance(v, dict) and "nodeType" in v)
    return GenericNode(**_base(data), kind=data["nodeType"], nodes=tuple(children))


_BUILDERS: dict[str, Callable[[dict], Node]] = {
    "SourceUnit": _source_unit,
    "ContractDefinition": _contract,
    "FunctionDefinition": _function,
    "ModifierDefinition": _modifier,
    "EventDefinition": _event,
    "ErrorDefinition": _error,
    "VariableDeclaration": _variable,
    "ParameterList": _parameter_list,
    "ModifierInvocation": _modifier_invocation,
}


def load_node(data: dict) -> Node:
    """Convert one compiler AST object (and its subtree) into a node."""
    if not isinstance(data, dict) or "nodeType" not in data:
        raise AstLoadError(f"Expected an AST node object, got {type(data).__name__}")
    node_type = data["nodeType"]
    builder = _BUILDERS.get(node_type)
    if builder is not None:
        return builder(data)
    if node_type in _TYPE_NAME_KINDS:
        return _type_name(data)
    log.debug("Keeping %s node %s as generic", node_type, data.get("id"))
    return _generic(data)


def load_document(document: Any) -> list[SourceUnit]:
    """Extract every ``SourceUnit`` from a compiler output document."""
    if isinstance(document, list):
        units = [load_node(item) for item in document]
    elif isinstance(document, dict) and "nodeType" in document:
        units = [load_node(document)]
    elif isinstance(document, dict) and isinstance(document.get("output"), dict):
        return load_document(document["output"])
    elif isinstance(document, dict) and isinstance(document.get("sources"), dict):
        units = []
        for path, source in document["sources"].items():
            ast = source.get("ast") if isinstance(source, dict) else None
            if ast is None:
                log.debug("Source %s carries no AST", path)
                continue
            units.append(load_node(ast))
    else:
        raise AstLoadError("Unrecognised AST document: expected a SourceUnit, a list, or compiler output")

    for unit in units:
        if not isinstance(unit, SourceUnit):
            raise AstLoadError(f"Expected SourceUnit at document root, got {unit.node_type}")
    log.info("Loaded %d source unit(s)", len(units))
    return units


def load_ast_file(path: str | Path) -> list[SourceUnit]:
    """Read a JSON file and return its source units."""
    path = Path(path)
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise AstLoadError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise AstLoadError(f"Invalid JSON in {path}: {exc}") from exc
    return load_document(document)
