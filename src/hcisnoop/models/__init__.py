"""
btsnoop and HCI data models.
"""

from .record import (
    IDENTIFICATION_PATTERN,
    BTSNOOP_EPOCH_DELTA_US,
    LinkTypeKind,
    LinkType,
    Direction,
    PacketClass,
    RecordFlags,
    Header,
    RecordDescription,
    Record,
    Log,
)
from .hci import (
    HciPacketType,
    Opcode,
    HciCommand,
    CommandFrame,
    UninterpretedFrame,
    UnhandledFrame,
    SubProtocolFrame,
    DecodedRecord,
)

__all__ = [
    'IDENTIFICATION_PATTERN',
    'BTSNOOP_EPOCH_DELTA_US',
    'LinkTypeKind',
    'LinkType',
    'Direction',
    'PacketClass',
    'RecordFlags',
    'Header',
    'RecordDescription',
    'Record',
    'Log',
    'HciPacketType',
    'Opcode',
    'HciCommand',
    'CommandFrame',
    'UninterpretedFrame',
    'UnhandledFrame',
    'SubProtocolFrame',
    'DecodedRecord',
]
