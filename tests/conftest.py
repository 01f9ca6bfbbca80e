# Ensure src/ is importable even if pytest is invoked without installing.
from __future__ import annotations

import struct
import sys
from pathlib import Path

import pytest

SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
p = str(SRC_ROOT)
if p not in sys.path:
    sys.path.insert(0, p)

MAGIC = b"btsnoop\x00"
# 2023-01-01T00:00:00Z in btsnoop microseconds
BASE_TS = 0x00DCDDB30F2F8000 + 1_672_531_200_000_000


def build_header(version: int = 1, link_type: int = 1002, magic: bytes = MAGIC) -> bytes:
    return magic + struct.pack(">II", version, link_type)


def build_record(data: bytes = b"", *, flags: int = 0, drops: int = 0,
                 timestamp: int = BASE_TS, original_length=None,
                 included_length=None) -> bytes:
    incl = len(data) if included_length is None else included_length
    orig = incl if original_length is None else original_length
    return struct.pack(">IIIIq", orig, incl, flags, drops, timestamp) + data


@pytest.fixture
def snoop_header():
    return build_header


@pytest.fixture
def snoop_record():
    return build_record


@pytest.fixture
def sample_log_bytes() -> bytes:
    """UART log: Reset command, Command Complete event, then an ACL fragment."""
    return (
        build_header()
        + build_record(b"\x01\x03\x0c\x00", flags=0b10)
        + build_record(b"\x04\x0e\x04\x01\x03\x0c\x00", flags=0b11, timestamp=BASE_TS + 1500)
        + build_record(b"\x02\x40\x00\x01\x00\xaa", flags=0b01, timestamp=BASE_TS + 3000)
    )


@pytest.fixture
def sample_log_file(tmp_path: Path, sample_log_bytes: bytes) -> Path:
    path = tmp_path / "btsnoop_hci.log"
    path.write_bytes(sample_log_bytes)
    return path
