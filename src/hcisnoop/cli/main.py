"""hcisnoop command line entry point."""
import logging

import click

from .dump import dump
from .info import info


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.version_option(package_name="hcisnoop")
def cli(verbose: bool):
    """Inspect btsnoop HCI log files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


cli.add_command(info)
cli.add_command(dump)


if __name__ == "__main__":
    cli()
