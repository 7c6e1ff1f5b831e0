"""Outline the public API of each documented contract."""

from __future__ import annotations

from pathlib import Path

import click

from soldoc.commands.resolve import load_contracts
from soldoc.config import load_config
from soldoc.docs.accessors import decorate
from soldoc.output.formatter import (
    abbrev_kind,
    format_signature,
    format_table,
    h,
    join_lines,
    json_envelope,
    section,
    to_json,
    trim,
)


def _member_row(member) -> dict:
    record = decorate(member)
    if record["signature"] is not None:
        label = record["signature"]
    else:
        label = " ".join(part for part in (record["type_name"], record["name"]) if part)
    return {
        "kind": abbrev_kind(record["type"]),
        "name": record["name"],
        "label": label,
        "visibility": record["visibility"] or "",
        "mutability": record["state_mutability"] or "",
        "modifiers": record["with_modifiers"] or "",
        "summary": join_lines(trim(record["natspec"].summary)) or "",
    }


def _outline(contract) -> dict:
    record = decorate(contract)
    natspec = record["natspec"]
    members = []
    if record["has_public_members"]:
        for member in record["public_variables"] + record["events"] + record["public_external_functions"]:
            members.append(_member_row(member))
    return {
        "name": record["name"],
        "type": record["type"],
        "title": natspec.title,
        "summary": join_lines(trim(natspec.summary)),
        "has_public_members": record["has_public_members"],
        "members": members,
    }


def _render_text(outlines: list[dict], hlevel: int) -> str:
    blocks = []
    for item in outlines:
        lines = [f"{h(1, hlevel)} {item['name']}", ""]
        if item["title"]:
            lines.append(item["title"])
        if item["summary"]:
            lines.append(item["summary"])
        if not item["has_public_members"]:
            lines.append("(no public members)")
            blocks.append("\n".join(lines))
            continue
        rows = [
            [m["kind"], format_signature(m["label"]), m["visibility"], m["mutability"], m["modifiers"]]
            for m in item["members"]
        ]
        table = format_table(["kind", "member", "visibility", "mutability", "modifiers"], rows)
        lines.append(section(f"{h(2, hlevel)} Public API", ["", table]))
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


@click.command("outline")
@click.argument("ast_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--contract", "contract_name", default=None, help="Only this contract (test filters are skipped).")
@click.option(
    "--include-tests/--exclude-tests",
    default=None,
    help="Also outline Test*/Mock* contracts (default from config).",
)
@click.option("--hlevel", type=click.IntRange(min=1), default=None, help="Base heading level (default from config).")
@click.pass_context
def outline(ctx, ast_file, contract_name, include_tests, hlevel):
    """Show the public API (state variables, events, functions) per contract."""
    json_mode = ctx.obj.get("json") if ctx.obj else False
    cfg = load_config()
    if include_tests is None:
        include_tests = cfg["include_tests"]
    if hlevel is None:
        hlevel = cfg["hlevel"]

    _, contracts = load_contracts(ast_file, contract_name, include_tests, cfg["exclude"])
    outlines = [_outline(c) for c in contracts]

    if json_mode:
        public = sum(1 for o in outlines if o["has_public_members"])
        summary = {
            "verdict": f"{len(outlines)} contract(s), {public} with public members",
            "contracts": len(outlines),
            "with_public_members": public,
        }
        click.echo(to_json(json_envelope("outline", summary=summary, contracts=outlines)))
        return

    if not outlines:
        click.echo("No contracts to document.")
        return
    click.echo(_render_text(outlines, hlevel))
