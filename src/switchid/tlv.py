"""Bounds-checked TLV iteration shared by the FDP and LLDP decoders.

Both protocols carry a flat stream of type-length-value records after a
fixed frame offset. They differ only in how the header is packed:

  - FDP:  2-byte type, 2-byte length; length covers header + value.
  - LLDP: 2-byte word, top 7 bits type, low 9 bits length; length covers
          the value only.

A header layout is a function ``(data, offset) -> (type, declared_length,
header_size, value_size) | None``. The cursor owns the bounds checks so
neither decoder ever slices past the end of the frame.
"""

from __future__ import annotations

import struct
from collections.abc import Callable, Iterator
from dataclasses import dataclass

HeaderLayout = Callable[[bytes, int], tuple[int, int, int, int] | None]


@dataclass(frozen=True)
class TLVRecord:
    """A single TLV as found in a captured frame.

    Attributes:
        type: Protocol-specific type code.
        length: Declared length exactly as it appeared on the wire.
        value: Bytes of the value region.
        text: Human-readable rendering of the value for diagnostics.
    """

    type: int
    length: int
    value: bytes = b""
    text: str = ""


def fdp_header(data: bytes, offset: int) -> tuple[int, int, int, int] | None:
    """Read an FDP TLV header (length includes the 4-byte header).

    Returns None if the header is incomplete or the length is too small
    to cover its own header.
    """
    if offset + 4 > len(data):
        return None
    tlv_type, length = struct.unpack_from(">HH", data, offset)
    if length < 4:
        return None
    return tlv_type, length, 4, length - 4


def lldp_header(data: bytes, offset: int) -> tuple[int, int, int, int] | None:
    """Read an LLDP TLV header (7-bit type, 9-bit value length)."""
    if offset + 2 > len(data):
        return None
    (word,) = struct.unpack_from(">H", data, offset)
    tlv_type = word >> 9
    length = word & 0x01FF
    return tlv_type, length, 2, length


class TLVCursor:
    """Iterate the TLVs of a frame starting at a fixed offset.

    Iteration stops at the end of the buffer, at a header that cannot be
    read, or at a TLV whose declared span would run past the buffer. In
    the last two cases ``truncated`` is set and the offending TLV is not
    yielded. After iteration ``offset`` points just past the last TLV
    that was yielded.
    """

    def __init__(self, data: bytes, offset: int, header: HeaderLayout) -> None:
        self.data = data
        self.offset = offset
        self.truncated = False
        self._header = header

    def __iter__(self) -> Iterator[TLVRecord]:
        data = self.data
        while self.offset < len(data):
            parsed = self._header(data, self.offset)
            if parsed is None:
                self.truncated = True
                return
            tlv_type, length, header_size, value_size = parsed
            start = self.offset + header_size
            end = start + value_size
            if end > len(data):
                self.truncated = True
                return
            self.offset = end
            yield TLVRecord(type=tlv_type, length=length, value=data[start:end])


def hex_bytes(data: bytes, sep: str = ":") -> str:
    """Format bytes as uppercase two-digit hex joined by ``sep``."""
    return sep.join(f"{b:02X}" for b in data)


def strip_alpha(text: str) -> str:
    """Remove every alphabetic character, e.g. "GigabitEthernet0/1" -> "0/1"."""
    return "".join(c for c in text if not c.isalpha())


def decode_text(value: bytes) -> str | None:
    """Decode a UTF-8 TLV value, returning None if it is not valid UTF-8."""
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError:
        return None


def read_u16(value: bytes, offset: int) -> int | None:
    """Read a big-endian u16 at ``offset``, or None if the value is too short."""
    if offset < 0 or offset + 2 > len(value):
        return None
    return struct.unpack_from(">H", value, offset)[0]
