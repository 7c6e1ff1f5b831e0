"""Declaration nodes of a Solidity compiler AST.

Each compiler ``nodeType`` the documentation layer cares about has its own
frozen dataclass; everything else is kept as a :class:`GenericNode` so that
declarations nested under statements or unmodelled constructs are still
reachable by a tree walk.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import ClassVar, Iterator


class Visibility(str, Enum):
    PUBLIC = "public"
    EXTERNAL = "external"
    INTERNAL = "internal"
    PRIVATE = "private"


class StateMutability(str, Enum):
    PURE = "pure"
    VIEW = "view"
    NONPAYABLE = "nonpayable"
    PAYABLE = "payable"


class Mutability(str, Enum):
    MUTABLE = "mutable"
    IMMUTABLE = "immutable"
    CONSTANT = "constant"


class FunctionKind(str, Enum):
    FUNCTION = "function"
    CONSTRUCTOR = "constructor"
    FALLBACK = "fallback"
    RECEIVE = "receive"
    FREE_FUNCTION = "freeFunction"


class ContractKind(str, Enum):
    CONTRACT = "contract"
    INTERFACE = "interface"
    LIBRARY = "library"


@dataclass(frozen=True)
class Node:
    """Common base: compiler id and ``start:length:file`` source location."""

    NODE_TYPE: ClassVar[str] = ""

    id: int = 0
    src: str = ""

    @property
    def node_type(self) -> str:
        return self.NODE_TYPE

    def children(self) -> Iterator[Node]:
        """Yield direct child nodes in source order (field declaration order)."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Node):
                yield value
            elif isinstance(value, tuple):
                for item in value:
                    if isinstance(item, Node):
                        yield item


@dataclass(frozen=True)
class GenericNode(Node):
    """Any construct without a dedicated class (statements, structs, pragmas...)."""

    kind: str = ""
    nodes: tuple[Node, ...] = ()

    @property
    def node_type(self) -> str:
        return self.kind


@dataclass(frozen=True)
class TypeName(Node):
    kind: str = "ElementaryTypeName"
    name: str | None = None
    type_string: str | None = None

    @property
    def node_type(self) -> str:
        return self.kind

    @property
    def is_elementary(self) -> bool:
        return self.kind == "ElementaryTypeName"


@dataclass(frozen=True)
class VariableDeclaration(Node):
    NODE_TYPE: ClassVar[str] = "VariableDeclaration"

    name: str = ""
    type_name: TypeName | None = None
    type_string: str | None = None
    visibility: Visibility | None = None
    mutability: Mutability | None = None
    state_variable: bool = False
    constant: bool = False
    indexed: bool = False
    documentation: str | None = None


@dataclass(frozen=True)
class ParameterList(Node):
    NODE_TYPE: ClassVar[str] = "ParameterList"

    parameters: tuple[VariableDeclaration, ...] = ()


@dataclass(frozen=True)
class ModifierInvocation(Node):
    NODE_TYPE: ClassVar[str] = "ModifierInvocation"

    modifier_name: str = ""


@dataclass(frozen=True)
class FunctionDefinition(Node):
    NODE_TYPE: ClassVar[str] = "FunctionDefinition"

    name: str = ""
    kind: FunctionKind = FunctionKind.FUNCTION
    visibility: Visibility | None = None
    state_mutability: StateMutability | None = None
    virtual: bool = False
    parameters: ParameterList = field(default_factory=ParameterList)
    modifiers: tuple[ModifierInvocation, ...] = ()
    return_parameters: ParameterList = field(default_factory=ParameterList)
    body: Node | None = None
    documentation: str | None = None


@dataclass(frozen=True)
class ModifierDefinition(Node):
    NODE_TYPE: ClassVar[str] = "ModifierDefinition"

    name: str = ""
    visibility: Visibility | None = None
    virtual: bool = False
    parameters: ParameterList = field(default_factory=ParameterList)
    body: Node | None = None
    documentation: str | None = None


@dataclass(frozen=True)
class EventDefinition(Node):
    NODE_TYPE: ClassVar[str] = "EventDefinition"

    name: str = ""
    parameters: ParameterList = field(default_factory=ParameterList)
    anonymous: bool = False
    documentation: str | None = None


@dataclass(frozen=True)
class ErrorDefinition(Node):
    NODE_TYPE: ClassVar[str] = "ErrorDefinition"

    name: str = ""
    parameters: ParameterList = field(default_factory=ParameterList)
    documentation: str | None = None


@dataclass(frozen=True)
class ContractDefinition(Node):
    NODE_TYPE: ClassVar[str] = "ContractDefinition"

    name: str = ""
    contract_kind: ContractKind = ContractKind.CONTRACT
    abstract: bool = False
    base_contracts: tuple[str, ...] = ()
    nodes: tuple[Node, ...] = ()
    documentation: str | None = None


@dataclass(frozen=True)
class SourceUnit(Node):
    NODE_TYPE: ClassVar[str] = "SourceUnit"

    absolute_path: str = ""
    nodes: tuple[Node, ...] = ()
