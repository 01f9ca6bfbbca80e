"""CLI command for log summaries."""
import json

import click

from ..snoop_loader.btsnoop_reader import BtsnoopReader
from ..snoop_loader.exceptions import SnoopError


@click.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def info(filepath: str):
    """
    Print header and record statistics of a btsnoop log.

    Example:
      hcisnoop info btsnoop_hci.log
    """
    try:
        with BtsnoopReader(filepath) as reader:
            for _ in reader:
                pass
            session = reader.get_session_info()
    except (SnoopError, OSError) as e:
        raise click.ClickException(str(e))

    session['time_range'] = list(session['time_range'])
    click.echo(json.dumps(session, sort_keys=True, separators=(",", ":")))
