"""Shared helpers for commands: loading an AST and picking contracts."""

from __future__ import annotations

import logging
from pathlib import Path

from soldoc.config import is_excluded
from soldoc.docs.accessors import not_test
from soldoc.exit_codes import ContractNotFoundError
from soldoc.solidity.loader import load_ast_file
from soldoc.solidity.nodes import ContractDefinition, SourceUnit
from soldoc.solidity.walk import find_all

log = logging.getLogger(__name__)


def select_contracts(
    units: list[SourceUnit],
    contract_name: str | None = None,
    include_tests: bool = False,
    exclude: list[str] | None = None,
) -> list[ContractDefinition]:
    """Contracts to document, in source order.

    An explicit *contract_name* bypasses the test and exclude filters and
    raises :class:`ContractNotFoundError` when nothing matches.
    """
    contracts = [c for unit in units for c in find_all(ContractDefinition, unit)]
    if contract_name is not None:
        selected = [c for c in contracts if c.name == contract_name]
        if not selected:
            raise ContractNotFoundError(contract_name)
        return selected

    selected = []
    for contract in contracts:
        if not include_tests and not not_test(contract):
            log.debug("Skipping test contract %s", contract.name)
            continue
        if exclude and is_excluded(contract.name, exclude):
            log.debug("Skipping excluded contract %s", contract.name)
            continue
        selected.append(contract)
    return selected


def load_contracts(
    ast_file: Path,
    contract_name: str | None,
    include_tests: bool,
    exclude: list[str],
) -> tuple[list[SourceUnit], list[ContractDefinition]]:
    units = load_ast_file(ast_file)
    return units, select_contracts(units, contract_name, include_tests, exclude)
