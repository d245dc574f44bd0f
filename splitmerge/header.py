# ==================================================
# splitmerge/header.py
# ==================================================
import struct
from typing import BinaryIO, NamedTuple

from .const  import *
from .errors import MalformedHeader

_HDR = struct.Struct(HEADER_FMT)


class SegmentHeader(NamedTuple):
    format_version: int
    segment_number: int      # 1-based (!)
    file_size:      int
    fingerprint:    bytes

    @classmethod
    def for_segment(cls, index: int, file_size: int, fingerprint: bytes) -> "SegmentHeader":
        """Header for the 0-based segment file `index` of a series."""
        return cls(FORMAT_VERSION, index + 1, file_size, fingerprint)


# ------------------------------------------------------------------
def encode(header: SegmentHeader) -> bytes:
    """Little-endian, zero-padded to HEADER_SIZE whatever the host order is."""
    if len(header.fingerprint) != FINGERPRINT_SIZE:
        raise ValueError(f"fingerprint must be {FINGERPRINT_SIZE} bytes")
    raw = _HDR.pack(header.format_version, header.segment_number,
                    header.file_size, header.fingerprint)
    return raw.ljust(HEADER_SIZE, b"\0")


def decode(block: bytes, path="<memory>") -> SegmentHeader:
    # reserved bytes are not inspected
    if len(block) < HEADER_SIZE:
        raise MalformedHeader(path, f"not enough data in {path}: invalid segment header"
                                    f" ({len(block)} of {HEADER_SIZE} bytes)")
    return SegmentHeader(*_HDR.unpack_from(block, 0))


def read_header(stream: BinaryIO, path) -> SegmentHeader:
    """Consume exactly one header from an open segment file."""
    block = stream.read(HEADER_SIZE)
    return decode(block, path)
