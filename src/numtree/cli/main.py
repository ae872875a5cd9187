"""numtree CLI entry point."""

import click

from numtree.config import Settings
from numtree.log import configure_logging


@click.group()
@click.option(
    "--log-level",
    default=None,
    help="Logging level (DEBUG, INFO, WARNING, ...). Overrides NUMTREE_LOG_LEVEL.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """numtree: parse, evaluate and reduce arithmetic expressions."""
    try:
        settings = Settings.from_env()
        configure_logging(log_level or settings.log_level)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    ctx.obj = settings


# Register subcommands
from numtree.cli.expr_cmd import EXPRESSION_COMMANDS  # noqa: E402

for command in EXPRESSION_COMMANDS:
    cli.add_command(command)
