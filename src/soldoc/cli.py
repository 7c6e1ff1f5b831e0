"""Click CLI entry point with lazy-loaded subcommands."""

import logging
import sys

import click

# Lazy-loading command group: imports command modules only when invoked.
_COMMANDS = {
    "decorate": ("soldoc.commands.cmd_decorate", "decorate_cmd"),
    "outline":  ("soldoc.commands.cmd_outline",  "outline"),
    "config":   ("soldoc.commands.cmd_config",   "config"),
}

# Command categories for organized --help display
_CATEGORIES = {
    "Documentation": ["decorate", "outline"],
    "Setup": ["config"],
}


class LazyGroup(click.Group):
    """A Click group that lazy-loads command modules on first access."""

    def list_commands(self, ctx):
        return sorted(_COMMANDS.keys())

    def get_command(self, ctx, cmd_name):
        if cmd_name not in _COMMANDS:
            return None
        module_path, attr_name = _COMMANDS[cmd_name]
        import importlib
        mod = importlib.import_module(module_path)
        return getattr(mod, attr_name)

    def format_help(self, ctx, formatter):
        """Categorized help display instead of flat alphabetical list."""
        self.format_usage(ctx, formatter)
        formatter.write("\n")
        if self.help:
            formatter.write(self.help + "\n\n")

        for cat_name, cmds in _CATEGORIES.items():
            formatter.write(f"  {cat_name}:\n")
            for cmd_name in cmds:
                cmd = self.get_command(ctx, cmd_name)
                if cmd is None:
                    continue
                help_text = cmd.get_short_help_str(limit=60)
                formatter.write(f"    {cmd_name:20s} {help_text}\n")
            formatter.write("\n")

        formatter.write("  Run `soldoc <command> --help` for details on any command.\n")


def _configure_logging(verbose: bool) -> None:
    """Route soldoc's module loggers to stderr (DEBUG with -v, else WARNING)."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger = logging.getLogger("soldoc")
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group(cls=LazyGroup)
@click.version_option(package_name="soldoc")
@click.option('--json', 'json_mode', is_flag=True, help='Output in JSON format')
@click.option('-v', '--verbose', is_flag=True, help='Log debug details to stderr')
@click.pass_context
def cli(ctx, json_mode, verbose):
    """soldoc: documentation view-models for Solidity ASTs."""
    ctx.ensure_object(dict)
    ctx.obj['json'] = json_mode
    ctx.obj['verbose'] = verbose
    _configure_logging(verbose)
