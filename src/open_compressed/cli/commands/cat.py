"""Cat command - write decompressed files to stdout."""

import sys

import click

from ...context import pass_context
from ...errors import OpenCompressedError
from ...reader import BUFFER_SIZE, read_exact


@click.command()
@click.argument("files", nargs=-1)
@pass_context
def cat(ctx, files):
    """Write FILES to stdout, decompressing as needed.

    Reads standard input when no FILES are given or FILE is '-'.

    Examples:
        ocat cat access.log.gz            # gzip -d -c access.log.gz
        ocat cat trace.xz                 # finds trace.xz.gz if trace.xz is missing
        ocat cat part1.bz2 part2.txt      # concatenated output
    """
    registry = ctx.registry
    out = sys.stdout.buffer
    try:
        for name in files or ("-",):
            with registry.opened(name) as fd:
                while True:
                    chunk = read_exact(registry, fd, BUFFER_SIZE)
                    if not chunk:
                        break
                    out.write(chunk)
        out.flush()
    except OpenCompressedError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
