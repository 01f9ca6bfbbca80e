# Record data model
"""
btsnoop container data models.

THESE MODELS ARE IMMUTABLE - a Log is built by one linear pass over the
source and is read-only afterwards. All transformations create new objects.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum, IntEnum
from typing import Optional, Tuple, Dict, Any
import json

# "btsnoop" followed by one null octet
IDENTIFICATION_PATTERN = b"btsnoop\x00"
IDENTIFICATION_NAME = "btsnoop"

# Microseconds from midnight, January 1st, 0 AD to the Unix epoch
BTSNOOP_EPOCH_DELTA_US = 0x00DCDDB30F2F8000

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class LinkTypeKind(Enum):
    RESERVED = "reserved"
    UNENCAPSULATED_HCI = "unencapsulated_hci"
    UART = "uart"
    BCSP = "bcsp"
    THREE_WIRE = "three_wire"
    UNASSIGNED = "unassigned"


# Named datalink codes
DATALINK_UNENCAPSULATED_HCI = 1001
DATALINK_UART = 1002
DATALINK_BCSP = 1003
DATALINK_THREE_WIRE = 1004

_NAMED_LINK_TYPES = {
    DATALINK_UNENCAPSULATED_HCI: LinkTypeKind.UNENCAPSULATED_HCI,
    DATALINK_UART: LinkTypeKind.UART,
    DATALINK_BCSP: LinkTypeKind.BCSP,
    DATALINK_THREE_WIRE: LinkTypeKind.THREE_WIRE,
}


@dataclass(frozen=True)
class LinkType:
    """
    Interpreted datalink code from the file header.

    The raw code is always kept, so Reserved and Unassigned values can be
    reported verbatim.
    """
    kind: LinkTypeKind
    code: int

    @classmethod
    def from_code(cls, code: int) -> 'LinkType':
        """Map a raw u32 datalink code to a LinkType (total, never fails)."""
        if code <= 1000:
            return cls(LinkTypeKind.RESERVED, code)
        kind = _NAMED_LINK_TYPES.get(code)
        if kind is None:
            return cls(LinkTypeKind.UNASSIGNED, code)
        return cls(kind, code)

    @property
    def is_uart(self) -> bool:
        return self.kind is LinkTypeKind.UART

    def __str__(self) -> str:
        return f"{self.kind.value}({self.code})"


class Direction(IntEnum):
    SENT = 0
    RECEIVED = 1


class PacketClass(IntEnum):
    DATA = 0
    COMMAND_OR_EVENT = 1


@dataclass(frozen=True)
class RecordFlags:
    """
    Bit-packed record attributes.

    Only bits 0 and 1 are defined; bits 2-31 are reserved and kept in `raw`.
    """
    direction: Direction
    """Bit 0: 0 = sent (host to controller), 1 = received."""

    packet_class: PacketClass
    """Bit 1: 0 = data, 1 = command or event."""

    raw: int
    """The full 32-bit flags value as read from the file."""

    @classmethod
    def from_raw(cls, value: int) -> 'RecordFlags':
        return cls(
            direction=Direction(value & 1),
            packet_class=PacketClass((value >> 1) & 1),
            raw=value,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> 'RecordFlags':
        """Decode a 4-byte big-endian flags field."""
        return cls.from_raw(int.from_bytes(data, "big"))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'direction': self.direction.name.lower(),
            'packet_class': self.packet_class.name.lower(),
            'raw': self.raw,
        }


@dataclass(frozen=True)
class Header:
    """btsnoop file header (16 bytes, big-endian)."""
    version: int
    link_type: LinkType

    @property
    def identification(self) -> str:
        """Name of the identification pattern, always 'btsnoop'."""
        return IDENTIFICATION_NAME

    def to_dict(self) -> Dict[str, Any]:
        return {
            'identification': self.identification,
            'version': self.version,
            'link_type': self.link_type.kind.value,
            'link_type_code': self.link_type.code,
        }


@dataclass(frozen=True)
class RecordDescription:
    """
    Fixed 24-byte record description block.

    included_length is expected to be <= original_length but that is only
    checked when DecodeOptions.validate_lengths is set.
    """
    original_length: int
    """Length of the packet as originally transmitted."""

    included_length: int
    """Number of data bytes stored in the log for this record."""

    flags: RecordFlags

    cumulative_drops: int
    """Packets dropped by the capture since the first record."""

    timestamp: int
    """Signed microseconds since midnight, January 1st, 0 AD."""

    @property
    def unix_timestamp_us(self) -> int:
        """Timestamp rebased to microseconds since 1970-01-01."""
        return self.timestamp - BTSNOOP_EPOCH_DELTA_US

    @property
    def captured_at(self) -> Optional[datetime]:
        """UTC datetime of the record, None if outside datetime's range."""
        try:
            return _UNIX_EPOCH + timedelta(microseconds=self.unix_timestamp_us)
        except OverflowError:
            return None

    def to_dict(self) -> Dict[str, Any]:
        ts = self.captured_at
        return {
            'original_length': self.original_length,
            'included_length': self.included_length,
            'flags': self.flags.to_dict(),
            'cumulative_drops': self.cumulative_drops,
            'timestamp': self.timestamp,
            'unix_timestamp_us': self.unix_timestamp_us,
            'captured_at': ts.isoformat() if ts is not None else None,
        }


@dataclass(frozen=True)
class Record:
    """
    One capture entry: description plus the raw data bytes.

    `data` is owned by the record. HCI decoders hand out memoryviews into it
    rather than copies.
    """
    description: RecordDescription
    data: bytes

    # COMPUTED PROPERTIES
    @property
    def direction(self) -> Direction:
        return self.description.flags.direction

    @property
    def packet_class(self) -> PacketClass:
        return self.description.flags.packet_class

    @property
    def timestamp_us(self) -> int:
        return self.description.timestamp

    @property
    def is_truncated(self) -> bool:
        """True if fewer bytes were logged than originally transmitted."""
        return self.description.included_length < self.description.original_length

    def to_dict(self) -> Dict[str, Any]:
        return {
            'description': self.description.to_dict(),
            'data': self.data.hex(),
        }


@dataclass(frozen=True)
class Log:
    """Top-level parsed artifact: header plus records in file order."""
    header: Header
    records: Tuple[Record, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Ensure records is a tuple (immutable)
        if not isinstance(self.records, tuple):
            object.__setattr__(self, 'records', tuple(self.records))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    @property
    def time_range(self) -> Tuple[int, int]:
        """(earliest, latest) record timestamp, (0, 0) for an empty log."""
        if not self.records:
            return (0, 0)
        stamps = [r.timestamp_us for r in self.records]
        return (min(stamps), max(stamps))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'header': self.header.to_dict(),
            'records': [r.to_dict() for r in self.records],
        }

    def to_json(self) -> str:
        """Serialize to JSON with deterministic ordering."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=True)
