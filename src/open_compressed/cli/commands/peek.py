"""Peek command - show upcoming bytes without consuming them."""

import sys

import click

from ...context import pass_context
from ...errors import OpenCompressedError
from ...reader import BUFFER_SIZE, peek as peek_bytes


@click.command()
@click.argument("source", required=False, default="-")
@click.option(
    "-c",
    "--bytes",
    "size",
    type=click.IntRange(min=0, max=BUFFER_SIZE),
    default=64,
    help="Number of bytes to show",
)
@click.option("--hex", "as_hex", is_flag=True, help="Print bytes as hex")
@pass_context
def peek(ctx, source, size, as_hex):
    """Show the first bytes of SOURCE after decompression.

    Examples:
        ocat peek -c 4 --hex archive.tar.gz   # Check the tar magic
    """
    registry = ctx.registry
    try:
        with registry.opened(source) as fd:
            data = peek_bytes(registry, fd, size)
    except OpenCompressedError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_hex:
        click.echo(data.hex(" "))
    else:
        out = sys.stdout.buffer
        out.write(data)
        out.flush()
