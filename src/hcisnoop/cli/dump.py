"""CLI command for decoding records."""
import json
from typing import Optional

import click

from ..hci.decoder import HciDecoder
from ..snoop_loader.btsnoop_reader import BtsnoopReader
from ..snoop_loader.exceptions import SnoopError
from ..snoop_loader.options import DecodeOptions


@click.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.option("--limit", "limit", type=int, default=0, show_default=True,
              help="Max records to dump (0 = no limit)")
@click.option("--strict", "strict", is_flag=True,
              help="Reject records and commands whose lengths disagree")
@click.option("--trim-params", "trim_params", is_flag=True,
              help="Bound command parameters to the declared length")
@click.option("--output", "output", type=click.Path(dir_okay=False),
              help="Write JSON output to file")
def dump(filepath: str,
         limit: int,
         strict: bool,
         trim_params: bool,
         output: Optional[str]):
    """
    Decode a btsnoop log to JSON.

    Example:
      hcisnoop dump btsnoop_hci.log --limit 20 --output records.json
    """
    options = DecodeOptions(validate_lengths=strict, trim_parameters=trim_params)

    records = []
    try:
        with BtsnoopReader(filepath, options=options) as reader:
            decoder = HciDecoder(reader.header.link_type, options)
            for decoded in decoder.decode_stream(reader):
                records.append(decoded.to_dict())
                if limit > 0 and len(records) >= limit:
                    break
            header = reader.header.to_dict()
    except (SnoopError, OSError) as e:
        raise click.ClickException(str(e))

    payload = json.dumps({"header": header, "records": records},
                         separators=(",", ":"), ensure_ascii=True)
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(payload)
    else:
        click.echo(payload)
