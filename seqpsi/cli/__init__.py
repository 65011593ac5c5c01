"""
Command-line interface for seqpsi.

This module provides the main entry point for the seqpsi CLI.
"""

import importlib
import logging
import pkgutil
from pathlib import Path

import click

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


# Create the main Click group
@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="seqpsi")
@click.option("-v", "--verbose", count=True, help="Log progress (-v info, -vv debug)")
@click.pass_context
def cli(ctx: click.Context, verbose: int) -> None:
    """Psi dissimilarity between multivariate sequences."""
    ctx.ensure_object(dict)
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT)
    ctx.obj["verbose"] = verbose


def register_commands() -> None:
    """Discover and register all command modules."""
    commands_pkg = Path(__file__).parent / "commands"

    for _, module_name, _ in pkgutil.iter_modules([str(commands_pkg)]):
        module = importlib.import_module(f"seqpsi.cli.commands.{module_name}")

        # Look for register_*_commands functions and call them
        for name, func in module.__dict__.items():
            if name.startswith("register_") and name.endswith("_commands"):
                func(cli)


register_commands()


def main() -> None:
    """Main entry point for the CLI."""
    cli(obj={})
