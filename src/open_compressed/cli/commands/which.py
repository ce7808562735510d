"""Which command - show the file a name resolves to."""

import sys

import click

from ...errors import OpenCompressedError
from ...suffix import resolve


@click.command()
@click.argument("name")
def which(name):
    """Print the file NAME resolves to and its compression suffix.

    Output is tab separated; the suffix is '-' for plain files.
    """
    try:
        path, suffix = resolve(name)
    except OpenCompressedError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"{path}\t{suffix or '-'}")
