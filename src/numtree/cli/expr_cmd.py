"""Expression CLI commands: eval, render, depth, level, steps, tokens, tree."""

import json

import click
import yaml

from numtree.config import Settings
from numtree.expressions import (
    Lexer,
    Node,
    ParseError,
    TokenType,
    evaluate,
    format_number,
    get_depth,
    get_level,
    parse,
    render,
    steps,
    to_dict,
)


def _parse_or_exit(expression: str) -> Node:
    """Parse expression with the current settings, exiting with status 1 on failure."""
    ctx = click.get_current_context()
    settings = ctx.find_object(Settings) or Settings()
    try:
        return parse(expression, max_depth=settings.max_depth)
    except ParseError as e:
        click.echo(click.style(f"Invalid expression: {e}", fg="red"), err=True)
        raise SystemExit(1)


@click.command("eval")
@click.argument("expression")
def eval_cmd(expression: str):
    """Print the value of EXPRESSION."""
    click.echo(format_number(evaluate(_parse_or_exit(expression))))


@click.command("render")
@click.argument("expression")
def render_cmd(expression: str):
    """Print EXPRESSION in canonical form."""
    click.echo(render(_parse_or_exit(expression)))


@click.command("depth")
@click.argument("expression")
def depth_cmd(expression: str):
    """Print how many operation levels EXPRESSION has."""
    click.echo(get_depth(_parse_or_exit(expression)))


@click.command("level")
@click.argument("expression")
@click.argument("level", type=click.IntRange(min=0))
def level_cmd(expression: str, level: int):
    """Print each subexpression LEVEL steps below the root, one per line."""
    for node in get_level(_parse_or_exit(expression), level):
        click.echo(render(node))


@click.command("steps")
@click.argument("expression")
def steps_cmd(expression: str):
    """Reduce EXPRESSION one level at a time down to its value."""
    for i, step in enumerate(steps(_parse_or_exit(expression))):
        prefix = "  " if i == 0 else "= "
        click.echo(f"{prefix}{step}")


@click.command("tokens")
@click.argument("expression")
def tokens_cmd(expression: str):
    """Print the tokens of EXPRESSION, one per line."""
    for token in Lexer(expression):
        if token.type == TokenType.EOF:
            break
        click.echo(f"{token.type.name} {token.lexeme}")


@click.command("tree")
@click.argument("expression")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["yaml", "json"]),
    default="yaml",
    show_default=True,
    help="Serialization format.",
)
def tree_cmd(expression: str, output_format: str):
    """Print the expression tree of EXPRESSION."""
    data = to_dict(_parse_or_exit(expression))
    if output_format == "json":
        click.echo(json.dumps(data, indent=2))
    else:
        click.echo(yaml.safe_dump(data, sort_keys=False).rstrip())


EXPRESSION_COMMANDS = [
    eval_cmd,
    render_cmd,
    depth_cmd,
    level_cmd,
    steps_cmd,
    tokens_cmd,
    tree_cmd,
]
