"""
Pure HCI frame decoding logic.

This module is deterministic and does not copy payloads:
- Frames and commands hold memoryviews into the record data
- Only the UART (H4) packet indicator and the command header are parsed
- ACL/SCO/Event/ISO payloads are passed through uninterpreted
"""
from __future__ import annotations

import struct
from typing import Optional, Union

from ..models.hci import (
    CommandFrame,
    HciCommand,
    HciPacketType,
    Opcode,
    SubProtocolFrame,
    UnhandledFrame,
    UninterpretedFrame,
)
from ..models.record import LinkType, Record
from ..snoop_loader.exceptions import (
    CommandLengthError,
    InvalidPacketTypeError,
    ShortCommandBufferError,
)
from ..snoop_loader.options import DecodeOptions, DEFAULT_OPTIONS

Buffer = Union[bytes, bytearray, memoryview]

# Opcode (2) + parameter total length (1)
COMMAND_HEADER_LENGTH = 3
PARAMS_START_BYTE = COMMAND_HEADER_LENGTH


def decode_opcode(value: int) -> Opcode:
    """Split a raw 16-bit opcode into OGF/OCF. Never fails."""
    return Opcode(value & 0xFFFF)


def decode_command(buffer: Buffer, options: Optional[DecodeOptions] = None) -> HciCommand:
    """
    Decode an HCI command packet (the bytes after the packet indicator).

    The parameter view covers everything from offset 3 to the end of the
    buffer. params_len is reported as declared and only enforced when
    options ask for it.

    Raises:
        ShortCommandBufferError: fewer than 3 bytes
        CommandLengthError: fewer parameter bytes than declared (strict only)
    """
    options = options or DEFAULT_OPTIONS
    view = memoryview(buffer).toreadonly()
    if len(view) < COMMAND_HEADER_LENGTH:
        raise ShortCommandBufferError(len(view))

    raw_opcode, params_len = struct.unpack_from('<HB', view, 0)
    params = view[PARAMS_START_BYTE:]

    if options.validate_lengths and len(params) < params_len:
        raise CommandLengthError(
            f"HCI command declares {params_len} parameter bytes, "
            f"buffer holds {len(params)}"
        )
    if options.trim_parameters:
        params = params[:params_len]

    return HciCommand(
        opcode=decode_opcode(raw_opcode),
        params_len=params_len,
        params=params,
    )


def decode_uart_frame(data: Buffer, options: Optional[DecodeOptions] = None) -> SubProtocolFrame:
    """
    Decode one UART (H4) framed HCI packet.

    Raises:
        InvalidPacketTypeError: first byte is not a defined packet type
        HciDecodeError: command payload could not be decoded
    """
    view = memoryview(data).toreadonly()
    if len(view) == 0:
        return UnhandledFrame("empty")

    indicator = view[0]
    try:
        packet_type = HciPacketType(indicator)
    except ValueError:
        raise InvalidPacketTypeError(indicator) from None

    payload = view[1:]
    if packet_type is HciPacketType.COMMAND:
        return CommandFrame(decode_command(payload, options))
    return UninterpretedFrame(packet_type=packet_type, payload=payload)


def decode_record(record: Record,
                  link_type: LinkType,
                  options: Optional[DecodeOptions] = None) -> SubProtocolFrame:
    """Decode a record's data according to the log's link type."""
    if not link_type.is_uart:
        return UnhandledFrame(f"link type {link_type} has no decoder")
    return decode_uart_frame(record.data, options)
