"""
hcisnoop - btsnoop HCI log decoding.
"""

from .models import Log, Record, Header, LinkType, LinkTypeKind
from .snoop_loader import (
    BtsnoopReader,
    DecodeOptions,
    SnoopError,
    parse_log,
    parse_bytes,
    load_log,
)
from .hci import HciDecoder, decode_uart_frame, decode_command, decode_opcode

__version__ = "0.1.0"

__all__ = [
    'Log',
    'Record',
    'Header',
    'LinkType',
    'LinkTypeKind',
    'BtsnoopReader',
    'DecodeOptions',
    'SnoopError',
    'parse_log',
    'parse_bytes',
    'load_log',
    'HciDecoder',
    'decode_uart_frame',
    'decode_command',
    'decode_opcode',
]
