# Custom exceptions

"""
Custom exceptions for btsnoop log decoding.
"""

class SnoopError(Exception):
    """Base exception for all btsnoop-related errors."""
    pass

class SnoopFormatError(SnoopError):
    """Raised when the btsnoop container format is invalid or corrupt."""
    pass

class MalformedHeaderError(SnoopFormatError):
    """Raised when the file header does not carry the btsnoop magic."""

    def __init__(self, magic: bytes):
        super().__init__(
            f"Invalid btsnoop identification pattern: {magic.hex(' ')} "
            f"(expected 62 74 73 6e 6f 6f 70 00)"
        )
        self.magic = magic

class SnoopTruncatedError(SnoopFormatError):
    """Raised when the source ends before a fixed-size field or data block."""

    def __init__(self, what: str, needed: int, available: int):
        super().__init__(
            f"Truncated {what}: needed {needed} bytes, only {available} available"
        )
        self.what = what
        self.needed = needed
        self.available = available

class RecordLengthError(SnoopFormatError):
    """Raised in strict mode when included_length exceeds original_length."""
    pass

class HciDecodeError(SnoopError):
    """Base exception for HCI payload decoding errors."""
    pass

class InvalidPacketTypeError(HciDecodeError):
    """Raised when a UART frame starts with an undefined packet type byte."""

    def __init__(self, packet_type: int):
        super().__init__(f"Invalid HCI packet type: 0x{packet_type:02x}")
        self.packet_type = packet_type

class ShortCommandBufferError(HciDecodeError):
    """Raised when a command buffer cannot hold opcode and parameter length."""

    def __init__(self, length: int):
        super().__init__(
            f"HCI command buffer too short: {length} bytes (need at least 3)"
        )
        self.length = length

class CommandLengthError(HciDecodeError):
    """Raised in strict mode when fewer parameter bytes exist than declared."""
    pass
