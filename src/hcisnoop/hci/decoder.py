"""
Decoder integration layer.

Connects parsed btsnoop records to HCI frame models. Unlike the functions in
packet_decoder, HciDecoder is best-effort: a record that fails to decode is
returned with its error attached instead of aborting the stream.
"""
from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional

from ..models.hci import DecodedRecord, SubProtocolFrame
from ..models.record import LinkType, Log, Record
from ..snoop_loader.exceptions import HciDecodeError
from ..snoop_loader.options import DecodeOptions, DEFAULT_OPTIONS
from .packet_decoder import decode_record

logger = logging.getLogger(__name__)


class HciDecoder:
    """Thin wrapper for decoding records of one log."""

    def __init__(self, link_type: LinkType, options: Optional[DecodeOptions] = None):
        self.link_type = link_type
        self.options = options or DEFAULT_OPTIONS

    @classmethod
    def for_log(cls, log: Log, options: Optional[DecodeOptions] = None) -> 'HciDecoder':
        return cls(log.header.link_type, options)

    def decode_frame(self, record: Record) -> SubProtocolFrame:
        """Decode one record, raising HciDecodeError on failure."""
        return decode_record(record, self.link_type, self.options)

    def decode(self, record: Record) -> DecodedRecord:
        try:
            frame = self.decode_frame(record)
        except HciDecodeError as e:
            logger.debug("HCI decode failed: %s", e)
            return DecodedRecord(record=record, error=str(e))
        return DecodedRecord(record=record, frame=frame)

    def decode_stream(self, records: Iterable[Record]) -> Iterator[DecodedRecord]:
        for record in records:
            yield self.decode(record)
