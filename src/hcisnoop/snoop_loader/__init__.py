"""
btsnoop log file loading.
"""

from .record_source import IRecordSource
from .btsnoop_reader import (
    BtsnoopReader,
    EndOfSource,
    parse_header,
    parse_record,
    iter_records,
    parse_log,
    parse_bytes,
    load_log,
)
from .options import DecodeOptions
from .exceptions import (
    SnoopError,
    SnoopFormatError,
    MalformedHeaderError,
    SnoopTruncatedError,
    RecordLengthError,
    HciDecodeError,
    InvalidPacketTypeError,
    ShortCommandBufferError,
    CommandLengthError,
)

__all__ = [
    'IRecordSource',
    'BtsnoopReader',
    'EndOfSource',
    'parse_header',
    'parse_record',
    'iter_records',
    'parse_log',
    'parse_bytes',
    'load_log',
    'DecodeOptions',
    'SnoopError',
    'SnoopFormatError',
    'MalformedHeaderError',
    'SnoopTruncatedError',
    'RecordLengthError',
    'HciDecodeError',
    'InvalidPacketTypeError',
    'ShortCommandBufferError',
    'CommandLengthError',
]
