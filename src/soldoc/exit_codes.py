"""Standardized CLI exit codes and error types for soldoc.

Exit code scheme:

    0  SUCCESS        -- command completed
    1  GENERAL_ERROR  -- unexpected failure, crash, unhandled exception
    2  USAGE_ERROR    -- invalid arguments, bad flags, unknown command (Click default)
    3  AST_INVALID    -- AST file unreadable or not a compiler AST document
    4  NOT_FOUND      -- a requested contract does not exist in the AST

``InvariantViolation`` is not a ``SoldocError``; it propagates as a crash
(exit 1) with a traceback.
"""

from __future__ import annotations

import click

# ---------------------------------------------------------------------------
# Exit code constants
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_ERROR: int = 1
EXIT_USAGE: int = 2
EXIT_AST_INVALID: int = 3
EXIT_NOT_FOUND: int = 4

DESCRIPTIONS: dict[int, str] = {
    EXIT_SUCCESS: "success",
    EXIT_ERROR: "unexpected error",
    EXIT_USAGE: "invalid usage (bad arguments or flags)",
    EXIT_AST_INVALID: "AST file unreadable or not a compiler AST",
    EXIT_NOT_FOUND: "requested contract not found",
}

# ---------------------------------------------------------------------------
# Custom exceptions (caught by Click and turned into exit codes)
# ---------------------------------------------------------------------------


class SoldocError(click.ClickException):
    """Base class for soldoc user-facing errors with exit codes."""

    def __init__(self, message: str, exit_code: int = EXIT_ERROR):
        super().__init__(message)
        self.exit_code = exit_code

    def format_message(self) -> str:
        return self.message


class AstLoadError(SoldocError):
    """Raised when an AST document cannot be read or recognised."""

    def __init__(self, message: str = "Not a compiler AST document."):
        super().__init__(message, EXIT_AST_INVALID)


class ContractNotFoundError(SoldocError):
    """Raised when ``--contract`` names a contract absent from the AST."""

    def __init__(self, name: str):
        super().__init__(f"No contract named {name!r} in the AST.", EXIT_NOT_FOUND)
        self.name = name


class InvariantViolation(RuntimeError):
    """A value the compiler guarantees (e.g. a resolved type string) is missing."""
