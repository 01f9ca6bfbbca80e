# HCI frame models
"""
HCI frame models.

Reference: Bluetooth Core Specification 5.4, Vol 4, Part E, 5.4 (HCI data
formats). All HCI values are little-endian unless noted otherwise.

Command packet layout:
- Opcode (16 bits): OCF in the low 10 bits, OGF in the high 6 bits
- Parameter total length (8 bits)
- Parameters (parameter total length octets)
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Union, Dict, Any

from .record import Record

# OGF 0x3F is reserved for vendor-specific debug commands
OGF_VENDOR_SPECIFIC = 0x3F


class HciPacketType(IntEnum):
    """UART (H4) packet indicator, the first byte of each frame."""
    COMMAND = 0x01
    ACL = 0x02
    SCO = 0x03
    EVENT = 0x04
    ISO = 0x05


@dataclass(frozen=True)
class Opcode:
    """
    16-bit HCI command opcode.

    OGF range (6 bits): 0x00 to 0x3F
    OCF range (10 bits): 0x0000 to 0x03FF
    """
    value: int

    @property
    def ocf(self) -> int:
        """Opcode Command Field (low 10 bits)."""
        return self.value & 0x3FF

    @property
    def ogf(self) -> int:
        """Opcode Group Field (high 6 bits)."""
        return self.value >> 10

    @property
    def is_vendor_specific(self) -> bool:
        return self.ogf == OGF_VENDOR_SPECIFIC

    def __repr__(self) -> str:
        return f"Opcode(ogf: 0x{self.ogf:X}, ocf: 0x{self.ocf:X})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'value': self.value,
            'ogf': self.ogf,
            'ocf': self.ocf,
        }


@dataclass(frozen=True)
class HciCommand:
    """
    Decoded HCI command packet (without the UART packet indicator).

    `params` is a read-only view into the record's data buffer starting at
    offset 3 of the command. It runs to the end of the buffer unless the
    decoder was asked to trim it, so it may be longer or shorter than
    params_len. Use `bounded_params` for a view limited to params_len.
    """
    opcode: Opcode

    params_len: int
    """Total length of all parameters in octets, as declared in the packet."""

    params: memoryview

    @property
    def bounded_params(self) -> memoryview:
        return self.params[:self.params_len]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'opcode': self.opcode.to_dict(),
            'params_len': self.params_len,
            'params': self.params.hex(),
        }


@dataclass(frozen=True)
class CommandFrame:
    """UART frame carrying an HCI command."""
    command: HciCommand

    @property
    def packet_type(self) -> HciPacketType:
        return HciPacketType.COMMAND

    def to_dict(self) -> Dict[str, Any]:
        return {
            'frame': 'command',
            'packet_type': int(self.packet_type),
            'command': self.command.to_dict(),
        }


@dataclass(frozen=True)
class UninterpretedFrame:
    """
    UART frame of a recognised type whose payload is not decoded yet.

    ACL, SCO, Event and ISO frames land here with the payload following the
    packet indicator, so a later decoder can pick them up unchanged.
    """
    packet_type: HciPacketType
    payload: memoryview

    def to_dict(self) -> Dict[str, Any]:
        return {
            'frame': self.packet_type.name.lower(),
            'packet_type': int(self.packet_type),
            'payload': self.payload.hex(),
        }


@dataclass(frozen=True)
class UnhandledFrame:
    """Record data that carries no frame to decode."""
    reason: str = "empty"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'frame': 'unhandled',
            'reason': self.reason,
        }


SubProtocolFrame = Union[CommandFrame, UninterpretedFrame, UnhandledFrame]


@dataclass(frozen=True)
class DecodedRecord:
    """
    Record after HCI decoding.

    Exactly one of `frame` and `error` is set. A decode error leaves the
    record itself intact, so the raw bytes stay available.
    """
    record: Record
    """Reference to the original record - NEVER modify"""

    frame: Optional[SubProtocolFrame] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        decoded = self.frame.to_dict() if self.frame is not None else {'error': self.error}
        return {
            **self.record.to_dict(),
            'hci': decoded,
        }
