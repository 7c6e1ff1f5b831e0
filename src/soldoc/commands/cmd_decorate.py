"""Emit the renderable view-model of each documented contract as JSON."""

from __future__ import annotations

from pathlib import Path

import click

from soldoc.commands.resolve import load_contracts
from soldoc.config import load_config
from soldoc.docs.view import contract_view
from soldoc.output.formatter import json_envelope, to_json


@click.command("decorate")
@click.argument("ast_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--contract", "contract_name", default=None, help="Only this contract (test filters are skipped).")
@click.option(
    "--include-tests/--exclude-tests",
    default=None,
    help="Also document Test*/Mock* contracts (default from config).",
)
def decorate_cmd(ast_file, contract_name, include_tests):
    """Decorate contracts from a solc JSON AST for template rendering.

    AST_FILE may be a SourceUnit AST, solc standard-JSON output, or a
    Hardhat build-info file.  Output is always JSON.
    """
    cfg = load_config()
    if include_tests is None:
        include_tests = cfg["include_tests"]

    units, contracts = load_contracts(ast_file, contract_name, include_tests, cfg["exclude"])
    views = [contract_view(c) for c in contracts]

    summary = {
        "verdict": f"{len(views)} contract(s) decorated",
        "source_units": len(units),
        "contracts": len(views),
        "hlevel": cfg["hlevel"],
    }
    click.echo(to_json(json_envelope("decorate", summary=summary, contracts=views)))
