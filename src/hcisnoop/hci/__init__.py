"""
HCI frame decoding.
"""

from .packet_decoder import decode_opcode, decode_command, decode_uart_frame, decode_record
from .decoder import HciDecoder

__all__ = [
    'decode_opcode',
    'decode_command',
    'decode_uart_frame',
    'decode_record',
    'HciDecoder',
]
