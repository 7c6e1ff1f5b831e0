"""Manage per-project soldoc configuration (.soldoc/config.json)."""

from __future__ import annotations

import click

from soldoc.config import (
    _load_project_config,
    find_project_root,
    get_config_path,
    load_config,
    write_project_config,
)
from soldoc.output.formatter import json_envelope, to_json


def _emit_saved(json_mode: bool, verdict: str, config_path, **values) -> None:
    if json_mode:
        click.echo(
            to_json(
                json_envelope(
                    "config",
                    summary={"verdict": verdict},
                    config_path=str(config_path),
                    **values,
                )
            )
        )
        return
    for key, value in values.items():
        click.echo(f"Saved {key} = {value!r}")
    click.echo(f"Config written to {config_path}")


@click.command("config")
@click.option("--hlevel", type=click.IntRange(min=1), default=None, help="Set the base heading level.")
@click.option(
    "--include-tests/--exclude-tests",
    default=None,
    help="Document Test*/Mock* contracts by default (or not).",
)
@click.option(
    "--exclude",
    "exclude_pattern",
    default=None,
    help="Add a contract-name glob to the exclude list.",
)
@click.option(
    "--remove-exclude",
    "remove_pattern",
    default=None,
    help="Remove a contract-name glob from the exclude list.",
)
@click.option("--show", is_flag=True, help="Print current configuration.")
@click.pass_context
def config(ctx, hlevel, include_tests, exclude_pattern, remove_pattern, show):
    """Manage per-project soldoc configuration (.soldoc/config.json).

    \b
      soldoc config --hlevel 2
      soldoc config --include-tests
      soldoc config --exclude "I*"
      soldoc config --remove-exclude "I*"

    The ``SOLDOC_HLEVEL`` environment variable overrides the saved
    heading level.
    """
    json_mode = ctx.obj.get("json") if ctx.obj else False
    root = find_project_root()
    current = _load_project_config(root)

    updates = {}
    if hlevel is not None:
        updates["hlevel"] = hlevel
    if include_tests is not None:
        updates["include_tests"] = include_tests
    if updates:
        config_path = write_project_config(updates, root)
        _emit_saved(json_mode, "saved", config_path, **updates)
        return

    if exclude_pattern is not None:
        existing_excludes = current.get("exclude", [])
        if not isinstance(existing_excludes, list):
            existing_excludes = []
        if exclude_pattern not in existing_excludes:
            existing_excludes.append(exclude_pattern)
        config_path = write_project_config({"exclude": existing_excludes}, root)
        _emit_saved(json_mode, "exclude-added", config_path, exclude=existing_excludes)
        return

    if remove_pattern is not None:
        existing_excludes = current.get("exclude", [])
        if not isinstance(existing_excludes, list):
            existing_excludes = []
        if remove_pattern not in existing_excludes:
            if json_mode:
                click.echo(
                    to_json(
                        json_envelope(
                            "config",
                            summary={"verdict": "not-found", "pattern": remove_pattern},
                            exclude=existing_excludes,
                        )
                    )
                )
                return
            click.echo(f"Pattern {remove_pattern!r} not found in exclude list.")
            if existing_excludes:
                click.echo(f"Current excludes: {existing_excludes}")
            return
        existing_excludes.remove(remove_pattern)
        config_path = write_project_config({"exclude": existing_excludes}, root)
        _emit_saved(json_mode, "exclude-removed", config_path, exclude=existing_excludes)
        return

    # --show, or no option at all
    effective = load_config(root)
    config_path = get_config_path(root)
    if json_mode:
        click.echo(
            to_json(
                json_envelope(
                    "config",
                    summary={"verdict": "ok", "config_exists": config_path.exists()},
                    config_path=str(config_path),
                    config=effective,
                )
            )
        )
        return
    click.echo(f"Config file: {config_path}{'' if config_path.exists() else ' (not created)'}")
    for key, value in effective.items():
        click.echo(f"  {key} = {value!r}")
