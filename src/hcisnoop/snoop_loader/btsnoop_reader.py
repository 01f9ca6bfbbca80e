"""
btsnoop file format reader.

Reference: RFC 1761 (snoop) as adapted for Bluetooth HCI logs.

File structure:
- 16-byte file header (big-endian)
  - 8-byte identification pattern "btsnoop\\0"
  - 4-byte version
  - 4-byte datalink type
- Repeated packet records:
  - 24-byte record description (big-endian)
  - Packet data (included_length bytes, no padding)

Capture tools often stop mid-record, so running out of bytes while reading a
record ends the log cleanly. Running out while reading the header does not.
"""

import io
import logging
import os
import struct
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Dict, Any, Optional, Tuple, Union

from .record_source import IRecordSource
from .exceptions import MalformedHeaderError, RecordLengthError, SnoopTruncatedError
from .options import DecodeOptions, DEFAULT_OPTIONS
from ..models.record import (
    IDENTIFICATION_PATTERN,
    Header,
    LinkType,
    Log,
    Record,
    RecordDescription,
    RecordFlags,
)

logger = logging.getLogger(__name__)

HEADER_LENGTH = 16
HEADER_FORMAT = '>8sII'

DESCRIPTION_LENGTH = 24
# original_length, included_length, flags, cumulative_drops, timestamp
DESCRIPTION_FORMAT = '>IIIIq'


@dataclass(frozen=True)
class EndOfSource:
    """
    Result of parse_record when the source runs out mid-record.

    This is a normal outcome for the record loop, not an error.
    """
    what: str
    needed: int
    available: int

    def to_error(self) -> SnoopTruncatedError:
        return SnoopTruncatedError(self.what, self.needed, self.available)


RecordResult = Union[Record, EndOfSource]


def _read_exact(source: BinaryIO, size: int) -> bytes:
    """Read up to `size` bytes, retrying short reads until EOF."""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = source.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def parse_header(source: BinaryIO) -> Header:
    """
    Read and validate the 16-byte btsnoop file header.

    Raises:
        SnoopTruncatedError: fewer than 16 bytes available (even zero)
        MalformedHeaderError: identification pattern mismatch
    """
    header_data = _read_exact(source, HEADER_LENGTH)
    if len(header_data) < HEADER_LENGTH:
        raise SnoopTruncatedError("file header", HEADER_LENGTH, len(header_data))

    magic, version, datalink_code = struct.unpack(HEADER_FORMAT, header_data)
    if magic != IDENTIFICATION_PATTERN:
        raise MalformedHeaderError(magic)

    # Version is stored as-is, only version 1 is known in the wild
    header = Header(version=version, link_type=LinkType.from_code(datalink_code))
    logger.debug("btsnoop header: version=%d link_type=%s", version, header.link_type)
    return header


def parse_record(source: BinaryIO,
                 options: Optional[DecodeOptions] = None) -> RecordResult:
    """
    Read one record (description block + data) from the source.

    Returns:
        Record on success, EndOfSource if the source runs out at any point.

    Raises:
        RecordLengthError: included_length > original_length (strict only)
        OSError: anything the underlying source raises
    """
    options = options or DEFAULT_OPTIONS

    description_data = _read_exact(source, DESCRIPTION_LENGTH)
    if len(description_data) < DESCRIPTION_LENGTH:
        return EndOfSource("record description", DESCRIPTION_LENGTH, len(description_data))

    original_length, included_length, flags, drops, timestamp = \
        struct.unpack(DESCRIPTION_FORMAT, description_data)

    if options.validate_lengths and included_length > original_length:
        raise RecordLengthError(
            f"Record included_length {included_length} exceeds "
            f"original_length {original_length}"
        )

    data = _read_exact(source, included_length)
    if len(data) < included_length:
        return EndOfSource("record data", included_length, len(data))

    description = RecordDescription(
        original_length=original_length,
        included_length=included_length,
        flags=RecordFlags.from_raw(flags),
        cumulative_drops=drops,
        timestamp=timestamp,
    )
    return Record(description=description, data=data)


def iter_records(source: BinaryIO,
                 options: Optional[DecodeOptions] = None) -> Iterator[Record]:
    """Yield records until the source is exhausted."""
    count = 0
    while True:
        result = parse_record(source, options)
        if isinstance(result, EndOfSource):
            if result.available:
                logger.debug(
                    "Ignoring %d trailing bytes of partial %s after %d records",
                    result.available, result.what, count,
                )
            break
        count += 1
        yield result


def parse_log(source: BinaryIO, options: Optional[DecodeOptions] = None) -> Log:
    """
    Parse a complete btsnoop log from a binary source.

    The header must be complete. Records are read until the source runs out;
    a partial trailing record is dropped silently. Any other error aborts
    the whole parse.
    """
    header = parse_header(source)
    records = tuple(iter_records(source, options))
    return Log(header=header, records=records)


def parse_bytes(data: bytes, options: Optional[DecodeOptions] = None) -> Log:
    """Parse a btsnoop log held in memory."""
    return parse_log(io.BytesIO(data), options)


def load_log(filepath: str, options: Optional[DecodeOptions] = None) -> Log:
    """Parse a btsnoop log file from disk."""
    with open(filepath, 'rb') as f:
        return parse_log(f, options)


class BtsnoopReader(IRecordSource):
    """
    Reads btsnoop log files record by record.

    Example:
        with BtsnoopReader("btsnoop_hci.log") as reader:
            for record in reader:
                process(record)
    """

    def __init__(self, filepath: str, options: Optional[DecodeOptions] = None):
        """
        Initialize btsnoop reader.

        Args:
            filepath: Path to btsnoop log file
            options: Decoder strictness, permissive by default
        """
        self.filepath = filepath
        self.options = options or DEFAULT_OPTIONS

        self.file_handle: Optional[BinaryIO] = None
        self.header: Optional[Header] = None

        self._record_count: int = 0
        self._time_range: Optional[Tuple[int, int]] = None
        self._file_size: int = 0
        self._exhausted: bool = False

    def open(self):
        """Open the file and validate the header."""
        if not os.path.exists(self.filepath):
            raise FileNotFoundError(f"btsnoop file not found: {self.filepath}")

        self.close()
        self._file_size = os.path.getsize(self.filepath)
        self.file_handle = open(self.filepath, 'rb')
        self._record_count = 0
        self._time_range = None
        self._exhausted = False

        try:
            self.header = parse_header(self.file_handle)
        except Exception:
            self.close()
            raise

    def __iter__(self) -> Iterator[Record]:
        """
        Yield records in file order.

        The file is consumed as it is read; a second iteration yields
        nothing. Reopen the reader to parse again.
        """
        if self.file_handle is None:
            raise RuntimeError("btsnoop file not opened. Call open() or use 'with' statement.")
        if self._exhausted:
            return

        for record in iter_records(self.file_handle, self.options):
            self._record_count += 1

            ts = record.timestamp_us
            if self._time_range is None:
                self._time_range = (ts, ts)
            else:
                start, end = self._time_range
                self._time_range = (min(start, ts), max(end, ts))

            yield record

        self._exhausted = True

    def close(self):
        """Close the file handle. Safe to call multiple times."""
        if self.file_handle is not None:
            self.file_handle.close()
            self.file_handle = None

    def get_session_info(self) -> Dict[str, Any]:
        """Return log metadata gathered so far."""
        link_type = self.header.link_type if self.header is not None else None
        return {
            'record_count': self._record_count,
            'time_range': self._time_range if self._time_range is not None else (0, 0),
            'file_size': self._file_size,
            'format': 'btsnoop',
            'version': self.header.version if self.header is not None else None,
            'link_type': link_type.kind.value if link_type is not None else None,
            'link_type_code': link_type.code if link_type is not None else None,
        }
