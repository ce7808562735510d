"""ocat CLI main entry point with global options."""

import sys

import click
from pydantic import ValidationError

from ..context import OCContext
from ..registry import Registry


@click.group()
@click.option(
    "--max-fds",
    type=click.IntRange(min=1),
    default=None,
    help="Highest descriptor count to accept (overrides $OPEN_COMPRESSED_MAX_FDS)",
)
@click.pass_context
def cli(ctx, max_fds):
    """ocat - read plain and compressed files through one interface."""
    ctx.ensure_object(OCContext)

    registry = Registry(max_descriptors=max_fds)
    try:
        registry.init()
    except ValidationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    ctx.obj.registry = registry
    # Waits for any decompressor still running once the command is done
    ctx.call_on_close(registry.finish)


# Register commands at module level so tests can import cli with commands attached
from .commands.cat import cat
from .commands.head import head
from .commands.peek import peek
from .commands.which import which

cli.add_command(cat)
cli.add_command(head)
cli.add_command(peek)
cli.add_command(which)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
