"""Head command - output the first N lines."""

import sys

import click

from ...context import pass_context
from ...errors import OpenCompressedError
from ...reader import read_line

LINE_CAPACITY = 1 << 20


@click.command()
@click.argument("source", required=False, default="-")
@click.option(
    "-n",
    "--lines",
    "n",
    type=int,
    default=10,
    help="Number of lines to output",
)
@pass_context
def head(ctx, source, n):
    """Output the first N lines of SOURCE (default: stdin).

    Lines longer than 1 MiB are split.

    Examples:
        ocat head server.log.gz           # First 10 lines
        ocat head -n 3 dump.sql.xz        # First 3 lines
    """
    if n < 0:
        click.echo("Error: --lines must be >= 0", err=True)
        sys.exit(1)

    registry = ctx.registry
    out = sys.stdout.buffer
    try:
        with registry.opened(source) as fd:
            for _ in range(n):
                line = read_line(registry, fd, LINE_CAPACITY)
                if not line:
                    break
                out.write(line)
        out.flush()
    except OpenCompressedError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
