"""Join formal parameter lists with their NatSpec descriptions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from soldoc.exit_codes import InvariantViolation
from soldoc.solidity.nodes import ParameterList


@dataclass(frozen=True)
class Param:
    name: str
    type: str
    natspec: str | None = None


def merge_params(
    parameters: ParameterList,
    descriptions: Mapping[str, str],
    *,
    positional: bool = False,
) -> list[Param]:
    """Build the parameter view for *parameters*, in declaration order.

    Each parameter is looked up by exact name in *descriptions*.  With
    *positional*, unnamed parameters are looked up by their slot index
    instead, as a string (used for return values).
    """
    view = []
    for index, p in enumerate(parameters.parameters):
        if p.type_string is None:
            raise InvariantViolation(f"Parameter {p.name or index!r} (node {p.id}) has no resolved type")
        key = str(index) if positional and not p.name else p.name
        view.append(Param(name=p.name, type=p.type_string, natspec=descriptions.get(key)))
    return view
