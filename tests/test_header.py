import io

import pytest

from hcisnoop.models.record import LinkTypeKind, LinkType
from hcisnoop.snoop_loader import (
    MalformedHeaderError,
    SnoopTruncatedError,
    parse_header,
)


def test_header_round_trips_version_and_link_type(snoop_header):
    header = parse_header(io.BytesIO(snoop_header(version=7, link_type=1002)))
    assert header.version == 7
    assert header.link_type == LinkType(LinkTypeKind.UART, 1002)
    assert header.identification == "btsnoop"


def test_header_consumes_exactly_sixteen_bytes(snoop_header):
    source = io.BytesIO(snoop_header() + b"\xff\xee")
    parse_header(source)
    assert source.read() == b"\xff\xee"


@pytest.mark.parametrize("magic", [
    b"btsnoop\x01",
    b"BTSNOOP\x00",
    b"\x00" * 8,
    b"snoop\x00\x00\x00",
])
def test_bad_magic_is_malformed_header(snoop_header, magic):
    with pytest.raises(MalformedHeaderError) as exc:
        parse_header(io.BytesIO(snoop_header(magic=magic)))
    assert exc.value.magic == magic


@pytest.mark.parametrize("length", [0, 3, 8, 15])
def test_short_header_is_truncated(snoop_header, length):
    with pytest.raises(SnoopTruncatedError) as exc:
        parse_header(io.BytesIO(snoop_header()[:length]))
    assert exc.value.needed == 16
    assert exc.value.available == length


@pytest.mark.parametrize("code,kind", [
    (0, LinkTypeKind.RESERVED),
    (1000, LinkTypeKind.RESERVED),
    (1001, LinkTypeKind.UNENCAPSULATED_HCI),
    (1002, LinkTypeKind.UART),
    (1003, LinkTypeKind.BCSP),
    (1004, LinkTypeKind.THREE_WIRE),
    (1005, LinkTypeKind.UNASSIGNED),
    (0xFFFFFFFF, LinkTypeKind.UNASSIGNED),
])
def test_link_type_mapping(code, kind):
    link_type = LinkType.from_code(code)
    assert link_type.kind is kind
    assert link_type.code == code


def test_only_uart_link_type_is_uart():
    assert LinkType.from_code(1002).is_uart
    assert not LinkType.from_code(1001).is_uart
    assert not LinkType.from_code(5).is_uart
