"""CLI context for passing the registry between commands."""

from typing import Optional

import click

from .registry import Registry


class OCContext:
    def __init__(self):
        self.registry: Optional[Registry] = None


pass_context = click.make_pass_decorator(OCContext, ensure=True)
