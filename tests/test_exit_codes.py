"""Tests for standardized CLI exit codes.

Validates that:
- Exit code constants have correct values
- Custom exceptions carry the right exit codes
- An unreadable AST produces exit code 3
- An unknown --contract produces exit code 4
"""

from __future__ import annotations

import click
import pytest

from soldoc.exit_codes import (
    DESCRIPTIONS,
    EXIT_AST_INVALID,
    EXIT_ERROR,
    EXIT_NOT_FOUND,
    EXIT_SUCCESS,
    EXIT_USAGE,
    AstLoadError,
    ContractNotFoundError,
    InvariantViolation,
    SoldocError,
)
from tests.conftest import invoke_cli

# ===========================================================================
# Test exit code constants
# ===========================================================================


class TestExitCodeConstants:
    """Verify exit code integer values match the documented scheme."""

    def test_values(self):
        assert EXIT_SUCCESS == 0
        assert EXIT_ERROR == 1
        assert EXIT_USAGE == 2
        assert EXIT_AST_INVALID == 3
        assert EXIT_NOT_FOUND == 4

    def test_every_code_described(self):
        for code in (EXIT_SUCCESS, EXIT_ERROR, EXIT_USAGE, EXIT_AST_INVALID, EXIT_NOT_FOUND):
            assert DESCRIPTIONS[code]


# ===========================================================================
# Test exceptions
# ===========================================================================


class TestExceptions:
    def test_soldoc_error_is_click_exception(self):
        err = SoldocError("boom")
        assert isinstance(err, click.ClickException)
        assert err.exit_code == EXIT_ERROR
        assert err.format_message() == "boom"

    def test_ast_load_error(self):
        err = AstLoadError()
        assert err.exit_code == EXIT_AST_INVALID
        assert "AST" in err.format_message()

    def test_contract_not_found(self):
        err = ContractNotFoundError("Vault")
        assert err.exit_code == EXIT_NOT_FOUND
        assert err.name == "Vault"
        assert "'Vault'" in err.format_message()

    def test_invariant_violation_is_not_user_facing(self):
        assert not issubclass(InvariantViolation, click.ClickException)
        with pytest.raises(RuntimeError):
            raise InvariantViolation("missing type")


# ===========================================================================
# Test exit codes through the CLI
# ===========================================================================


class TestCliExitCodes:
    @pytest.fixture(autouse=True)
    def _project(self, tmp_path, monkeypatch):
        (tmp_path / ".git").mkdir()
        monkeypatch.delenv("SOLDOC_HLEVEL", raising=False)

    def test_missing_ast_file(self, cli_runner, tmp_path):
        result = invoke_cli(cli_runner, ["outline", "missing.json"], cwd=tmp_path)
        assert result.exit_code == EXIT_AST_INVALID

    def test_not_an_ast(self, cli_runner, tmp_path):
        (tmp_path / "package.json").write_text('{"name": "pkg"}', encoding="utf-8")
        result = invoke_cli(cli_runner, ["decorate", "package.json"], cwd=tmp_path)
        assert result.exit_code == EXIT_AST_INVALID

    def test_unknown_contract(self, cli_runner, tmp_path, ast_file):
        result = invoke_cli(cli_runner, ["outline", str(ast_file), "--contract", "Vault"], cwd=tmp_path)
        assert result.exit_code == EXIT_NOT_FOUND
        assert "Vault" in result.output

    def test_usage_error(self, cli_runner, tmp_path):
        result = invoke_cli(cli_runner, ["outline"], cwd=tmp_path)
        assert result.exit_code == EXIT_USAGE

    def test_success(self, cli_runner, tmp_path, ast_file):
        result = invoke_cli(cli_runner, ["outline", str(ast_file)], cwd=tmp_path)
        assert result.exit_code == EXIT_SUCCESS
