"""Tests for the shared TLV cursor and value helpers."""

import struct

from switchid.tlv import (
    TLVCursor,
    TLVRecord,
    decode_text,
    fdp_header,
    hex_bytes,
    lldp_header,
    read_u16,
    strip_alpha,
)


class TestFdpHeader:
    def test_length_includes_header(self):
        data = struct.pack(">HH", 0x0001, 7) + b"SW1"
        assert fdp_header(data, 0) == (0x0001, 7, 4, 3)

    def test_incomplete_header(self):
        assert fdp_header(b"\x00\x01\x00", 0) is None

    def test_length_shorter_than_header(self):
        """A length below 4 could never advance the cursor."""
        assert fdp_header(struct.pack(">HH", 0x0001, 0), 0) is None
        assert fdp_header(struct.pack(">HH", 0x0001, 3), 0) is None

    def test_empty_value(self):
        assert fdp_header(struct.pack(">HH", 0x0004, 4), 0) == (0x0004, 4, 4, 0)


class TestLldpHeader:
    def test_bit_packing(self):
        # type 1, length 7 -> 0000001 000000111
        assert lldp_header(b"\x02\x07", 0) == (1, 7, 2, 7)

    def test_org_specific(self):
        # type 127, length 6 -> 0xFE06
        assert lldp_header(b"\xfe\x06", 0) == (127, 6, 2, 6)

    def test_ninth_length_bit(self):
        """The top bit of the length lives in the type byte."""
        word = (6 << 9) | 300
        assert lldp_header(struct.pack(">H", word), 0) == (6, 300, 2, 300)

    def test_incomplete_header(self):
        assert lldp_header(b"\x02", 0) is None


class TestTLVCursor:
    def test_fdp_advances_to_end(self):
        data = b"\xff" * 26
        data += struct.pack(">HH", 1, 7) + b"SW1"
        data += struct.pack(">HH", 3, 8) + b"1/10"
        cursor = TLVCursor(data, 26, fdp_header)
        records = list(cursor)
        assert [r.type for r in records] == [1, 3]
        assert [r.value for r in records] == [b"SW1", b"1/10"]
        assert cursor.offset == len(data)
        assert cursor.truncated is False

    def test_lldp_advances_to_end(self):
        data = b"\xff" * 14 + b"\x0a\x03abc" + b"\x00\x00"
        cursor = TLVCursor(data, 14, lldp_header)
        records = list(cursor)
        assert records == [
            TLVRecord(type=5, length=3, value=b"abc"),
            TLVRecord(type=0, length=0, value=b""),
        ]
        assert cursor.offset == len(data)
        assert cursor.truncated is False

    def test_overrun_not_emitted(self):
        """A TLV whose value runs past the buffer is never yielded."""
        data = b"\x0a\x03abc" + b"\x0c\x10short"
        cursor = TLVCursor(data, 0, lldp_header)
        records = list(cursor)
        assert len(records) == 1
        assert cursor.truncated is True
        assert cursor.offset == 5

    def test_exact_fit_is_emitted(self):
        data = struct.pack(">HH", 1, 8) + b"ABCD"
        records = list(TLVCursor(data, 0, fdp_header))
        assert records[0].value == b"ABCD"

    def test_zero_length_fdp_stops(self):
        data = struct.pack(">HH", 1, 0) + b"\x00" * 8
        cursor = TLVCursor(data, 0, fdp_header)
        assert list(cursor) == []
        assert cursor.truncated is True

    def test_trailing_partial_header(self):
        """A lone byte after the last TLV marks the frame truncated."""
        data = struct.pack(">HH", 1, 5) + b"A" + b"\x00"
        cursor = TLVCursor(data, 0, fdp_header)
        assert len(list(cursor)) == 1
        assert cursor.truncated is True

    def test_offset_past_buffer(self):
        cursor = TLVCursor(b"\x01\x02", 26, fdp_header)
        assert list(cursor) == []
        assert cursor.truncated is False


class TestHelpers:
    def test_hex_bytes(self):
        assert hex_bytes(b"\x00\x1b\xff") == "00:1B:FF"
        assert hex_bytes(b"\x00\x14", ", ") == "00, 14"
        assert hex_bytes(b"") == ""

    def test_strip_alpha(self):
        assert strip_alpha("GigabitEthernet0/1") == "0/1"
        assert strip_alpha("ethernet1/1/4") == "1/1/4"
        assert strip_alpha("Gi0/1") == "0/1"
        assert strip_alpha("Port 12") == " 12"

    def test_decode_text(self):
        assert decode_text(b"core-sw1") == "core-sw1"
        assert decode_text(b"\xff\xfe") is None

    def test_read_u16(self):
        assert read_u16(b"\x00\x10\x00\x14", 0) == 16
        assert read_u16(b"\x00\x10\x00\x14", 2) == 20
        assert read_u16(b"\x00\x10\x00", 2) is None
        assert read_u16(b"", 0) is None
