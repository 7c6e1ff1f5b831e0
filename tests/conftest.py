"""Shared test fixtures and helpers for soldoc tests.

Provides:
- Node builders: param(), var(), fn(), event(), error(), modifier(), contract()
- solc JSON builders and a sample ``token_ast`` document
- CliRunner fixtures: cli_runner, invoke_cli()
- JSON validation helpers: parse_json_output(), assert_json_envelope()
"""

from __future__ import annotations

import json
import logging
import os

import pytest
from click.testing import CliRunner

from soldoc.solidity.nodes import (
    ContractDefinition,
    ContractKind,
    ErrorDefinition,
    EventDefinition,
    FunctionDefinition,
    FunctionKind,
    ModifierDefinition,
    ModifierInvocation,
    Mutability,
    ParameterList,
    StateMutability,
    TypeName,
    VariableDeclaration,
    Visibility,
)

# ===========================================================================
# Node builders
# ===========================================================================


def param(name, type_string, *, elementary=True, type_name_string=None, id=0):
    """A parameter declaration whose type is fully resolved."""
    kind = "ElementaryTypeName" if elementary else "UserDefinedTypeName"
    bare = type_string.split(" ")[0]
    return VariableDeclaration(
        id=id,
        name=name,
        type_name=TypeName(kind=kind, name=bare, type_string=type_name_string or bare),
        type_string=type_string,
    )


def params(*items):
    return ParameterList(parameters=tuple(items))


def var(name, type_string="uint256", *, visibility=Visibility.INTERNAL, mutability=Mutability.MUTABLE,
        state=True, type_name=None, documentation=None):
    if type_name is None:
        type_name = TypeName(kind="ElementaryTypeName", name=type_string, type_string=type_string)
    return VariableDeclaration(
        name=name,
        type_name=type_name,
        type_string=type_string,
        visibility=visibility,
        mutability=mutability,
        state_variable=state,
        documentation=documentation,
    )


def fn(name, *args, returns=(), kind=FunctionKind.FUNCTION, visibility=Visibility.PUBLIC,
       mutability=StateMutability.NONPAYABLE, virtual=False, modifiers=(), body=None, documentation=None):
    return FunctionDefinition(
        name=name,
        kind=kind,
        visibility=visibility,
        state_mutability=mutability,
        virtual=virtual,
        parameters=params(*args),
        modifiers=tuple(ModifierInvocation(modifier_name=m) for m in modifiers),
        return_parameters=params(*returns),
        body=body,
        documentation=documentation,
    )


def event(name, *args, documentation=None):
    return EventDefinition(name=name, parameters=params(*args), documentation=documentation)


def error(name, *args):
    return ErrorDefinition(name=name, parameters=params(*args))


def modifier(name, *args):
    return ModifierDefinition(name=name, parameters=params(*args))


def contract(name, *members, kind=ContractKind.CONTRACT, documentation=None):
    return ContractDefinition(name=name, contract_kind=kind, nodes=tuple(members), documentation=documentation)


# ===========================================================================
# solc JSON builders
# ===========================================================================

_next_id = iter(range(1, 10_000))


def _id():
    return next(_next_id)


def elementary_json(name, type_string=None):
    return {
        "id": _id(),
        "nodeType": "ElementaryTypeName",
        "name": name,
        "typeDescriptions": {"typeString": type_string or name},
    }


def var_json(name, type_name, *, type_string=None, visibility="internal", mutability="mutable",
             state=False, indexed=False, documentation=None):
    data = {
        "id": _id(),
        "nodeType": "VariableDeclaration",
        "name": name,
        "typeName": type_name,
        "typeDescriptions": {"typeString": type_string or type_name["typeDescriptions"]["typeString"]},
        "visibility": visibility,
        "mutability": mutability,
        "stateVariable": state,
        "constant": mutability == "constant",
        "indexed": indexed,
    }
    if documentation is not None:
        data["documentation"] = {"nodeType": "StructuredDocumentation", "text": documentation}
    return data


def params_json(*items):
    return {"id": _id(), "nodeType": "ParameterList", "parameters": list(items)}


def fn_json(name, *, kind="function", visibility="public", mutability="nonpayable", virtual=False,
            parameters=(), returns=(), modifiers=(), body=None, documentation=None):
    data = {
        "id": _id(),
        "nodeType": "FunctionDefinition",
        "name": name,
        "kind": kind,
        "visibility": visibility,
        "stateMutability": mutability,
        "virtual": virtual,
        "parameters": params_json(*parameters),
        "returnParameters": params_json(*returns),
        "modifiers": [
            {"id": _id(), "nodeType": "ModifierInvocation", "modifierName": {"nodeType": "IdentifierPath", "name": m}}
            for m in modifiers
        ],
        "body": body,
    }
    if documentation is not None:
        data["documentation"] = {"nodeType": "StructuredDocumentation", "text": documentation}
    return data


def contract_json(name, nodes, *, kind="contract", documentation=None):
    data = {
        "id": _id(),
        "nodeType": "ContractDefinition",
        "name": name,
        "contractKind": kind,
        "abstract": False,
        "baseContracts": [],
        "nodes": nodes,
    }
    if documentation is not None:
        data["documentation"] = {"nodeType": "StructuredDocumentation", "text": documentation}
    return data


def build_token_ast():
    """A solc SourceUnit AST with a token, a mock, and a library."""
    address = lambda: elementary_json("address")  # noqa: E731
    uint = lambda: elementary_json("uint256")  # noqa: E731

    transfer_body = {
        "id": _id(),
        "nodeType": "Block",
        "statements": [
            {
                "id": _id(),
                "nodeType": "VariableDeclarationStatement",
                "declarations": [var_json("fee", uint())],
            }
        ],
    }
    mapping = {
        "id": _id(),
        "nodeType": "Mapping",
        "keyType": address(),
        "valueType": uint(),
        "typeDescriptions": {"typeString": "mapping(address => uint256)"},
    }

    token = contract_json(
        "Token",
        [
            var_json("totalSupply", uint(), visibility="public", state=True,
                     documentation=" @notice Total tokens in circulation."),
            var_json("owner", address(), visibility="private", mutability="immutable", state=True),
            var_json("balances", mapping, visibility="internal", state=True),
            {
                "id": _id(),
                "nodeType": "EventDefinition",
                "name": "Transfer",
                "anonymous": False,
                "parameters": params_json(
                    var_json("from", address(), indexed=True),
                    var_json("to", address(), indexed=True),
                    var_json("value", uint()),
                ),
                "documentation": {"nodeType": "StructuredDocumentation", "text": " @notice Emitted on transfers."},
            },
            {
                "id": _id(),
                "nodeType": "ErrorDefinition",
                "name": "InsufficientBalance",
                "parameters": params_json(var_json("available", uint()), var_json("required", uint())),
            },
            {
                "id": _id(),
                "nodeType": "ModifierDefinition",
                "name": "onlyOwner",
                "visibility": "internal",
                "virtual": False,
                "parameters": params_json(),
                "body": {"id": _id(), "nodeType": "Block", "statements": []},
            },
            fn_json("", kind="constructor"),
            fn_json(
                "transfer",
                visibility="external",
                virtual=True,
                parameters=(var_json("to", address()), var_json("amount", uint())),
                returns=(var_json("", elementary_json("bool")),),
                modifiers=("onlyOwner",),
                body=transfer_body,
                documentation=(
                    " @notice Move tokens.\n"
                    " @param to Recipient.\n"
                    " @param amount How much.\n"
                    " @return Whether it worked."
                ),
            ),
            fn_json(
                "balanceOf",
                mutability="view",
                parameters=(var_json("account", address()),),
                returns=(var_json("balance", uint()),),
                documentation=" @return balance Current balance of `account`.",
            ),
            fn_json("_mint", visibility="internal", parameters=(var_json("amount", uint()),)),
        ],
        documentation=" @title Token\n @notice A simple token.\n @dev Only for docs.",
    )

    mock = contract_json("MockToken", [fn_json("mint", parameters=(var_json("amount", uint()),))])

    library = contract_json(
        "SafeMath",
        [
            fn_json(
                "add",
                visibility="internal",
                mutability="pure",
                parameters=(var_json("a", uint()), var_json("b", uint())),
                returns=(var_json("", uint()),),
            )
        ],
        kind="library",
    )

    return {
        "id": _id(),
        "nodeType": "SourceUnit",
        "absolutePath": "contracts/Token.sol",
        "nodes": [
            {"id": _id(), "nodeType": "PragmaDirective", "literals": ["solidity", "^", "0.8", ".20"]},
            token,
            mock,
            library,
        ],
    }


@pytest.fixture
def token_ast():
    return build_token_ast()


@pytest.fixture
def ast_file(tmp_path, token_ast):
    """The sample AST wrapped as solc standard-JSON output, on disk."""
    path = tmp_path / "output.json"
    document = {"sources": {"contracts/Token.sol": {"id": 0, "ast": token_ast}}}
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


# ===========================================================================
# CLI helpers
# ===========================================================================


@pytest.fixture(autouse=True)
def _reset_soldoc_logger():
    """Drop the stderr handler the CLI installs so later tests see clean logging."""
    yield
    logger = logging.getLogger("soldoc")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def cli_runner():
    """Provide a Click CliRunner for in-process CLI testing."""
    return CliRunner()


def invoke_cli(runner, args, cwd=None, json_mode=False):
    """Invoke the soldoc CLI via CliRunner.

    Args:
        runner: CliRunner instance
        args: list of CLI arguments (e.g. ["outline", "ast.json"])
        cwd: directory to run in
        json_mode: if True, prepend --json flag
    Returns:
        click.testing.Result
    """
    from soldoc.cli import cli

    full_args = []
    if json_mode:
        full_args.append("--json")
    full_args.extend(args)

    old_cwd = os.getcwd()
    try:
        if cwd:
            os.chdir(str(cwd))
        result = runner.invoke(cli, full_args, catch_exceptions=False)
    finally:
        os.chdir(old_cwd)

    return result


def parse_json_output(result, command=None):
    """Parse JSON from a CliRunner result, failing with context on errors."""
    assert result.exit_code == 0, f"Command {command or '?'} failed (exit {result.exit_code}):\n{result.output}"
    try:
        return json.loads(result.output)
    except json.JSONDecodeError as e:
        pytest.fail(f"Invalid JSON from {command or '?'}: {e}\nOutput was:\n{result.output[:500]}")


def assert_json_envelope(data, command=None):
    """Validate that a parsed JSON dict follows the soldoc envelope contract."""
    assert isinstance(data, dict), f"Expected dict, got {type(data)}"
    for key in ("schema", "command", "version", "summary", "_meta"):
        assert key in data, f"Missing {key!r} key in envelope"
    assert "timestamp" in data["_meta"]
    if command:
        assert data["command"] == command, f"Expected command={command}, got {data['command']}"
    assert isinstance(data["summary"], dict)
    assert "verdict" in data["summary"]
