"""FDP (Foundry Discovery Protocol) frame decoding.

FDP frames are sent to 01:E0:52:CC:CC:CC. After the 14-byte Ethernet
header, an 8-byte LLC/SNAP header and a 4-byte FDP header (version, TTL,
checksum), the frame is a stream of TLVs starting at byte 26:

    +--------+--------+----------------------+
    | type   | length | value                |
    | 2 (BE) | 2 (BE) | length - 4 bytes     |
    +--------+--------+----------------------+

The length field counts the whole TLV including its own header.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import IntEnum

from switchid.tlv import (
    TLVCursor,
    TLVRecord,
    decode_text,
    fdp_header,
    hex_bytes,
    read_u16,
    strip_alpha,
)
from switchid.types import Protocol, SwitchIdentity

FDP_TLV_OFFSET = 26


class FDPType(IntEnum):
    """FDP TLV type codes."""

    DEVICE_ID = 0x0001
    NET = 0x0002
    INTERFACE = 0x0003
    CAPABILITIES = 0x0004
    VERSION = 0x0005
    PLATFORM = 0x0006
    VLAN = 0x0102
    TAG_INFO = 0x0108


def tlv_type_name(code: int) -> str:
    """Display name for an FDP TLV type code."""
    try:
        return FDPType(code).name
    except ValueError:
        return f"UNKNOWN_0x{code:04X}"


@dataclass
class FDPPDU:
    """One decoded FDP frame.

    Attributes:
        frame: The captured frame the PDU was decoded from.
        valid: True once a Device-ID TLV has been decoded.
        switch_name: Device-ID text.
        switch_ip: Last four bytes of the Net TLV, dotted-quad.
        switch_port: Interface text with letters removed.
        switch_vlan_d: Native VLAN.
        switch_vlan_v: Voice VLAN.
        truncated: True if a TLV ran past the end of the frame.
        tlvs: Every TLV seen, in frame order.
    """

    frame: bytes
    valid: bool = False
    switch_name: str = ""
    switch_ip: str = ""
    switch_port: str = ""
    switch_vlan_d: str = ""
    switch_vlan_v: str = ""
    truncated: bool = False
    tlvs: list[TLVRecord] = field(default_factory=list)

    @classmethod
    def decode(cls, frame: bytes) -> FDPPDU:
        """Decode every TLV in an FDP frame.

        Never raises on malformed input: a TLV that cannot be interpreted
        leaves its field untouched, and a truncated TLV ends the scan.
        The returned PDU may have ``valid`` False.
        """
        pdu = cls(frame=frame)
        cursor = TLVCursor(frame, FDP_TLV_OFFSET, fdp_header)
        for tlv in cursor:
            text = pdu._apply(tlv)
            pdu.tlvs.append(dataclasses.replace(tlv, text=text))
        pdu.truncated = cursor.truncated
        return pdu

    def _apply(self, tlv: TLVRecord) -> str:
        """Project one TLV onto the PDU fields and return its display text."""
        value = tlv.value

        if tlv.type == FDPType.DEVICE_ID:
            name = decode_text(value)
            if name is None:
                return hex_bytes(value)
            self.switch_name = name
            self.valid = True
            return name

        if tlv.type == FDPType.NET:
            # The IPv4 address is always the last four bytes.
            if len(value) < 4:
                return hex_bytes(value)
            self.switch_ip = ".".join(str(b) for b in value[-4:])
            return self.switch_ip

        if tlv.type == FDPType.INTERFACE:
            port = decode_text(value)
            if port is None:
                return hex_bytes(value)
            self.switch_port = strip_alpha(port)
            return port

        if tlv.type in (FDPType.VERSION, FDPType.PLATFORM):
            text = decode_text(value)
            return hex_bytes(value) if text is None else text

        if tlv.type == FDPType.VLAN:
            vlan = read_u16(value, 0)
            if vlan is None:
                return hex_bytes(value)
            if not self.switch_vlan_d and vlan != 0:
                self.switch_vlan_d = str(vlan)
            return str(vlan)

        if tlv.type == FDPType.TAG_INFO:
            # Native VLAN at bytes 2-3, voice VLAN at bytes 7-8.
            vlan_d = read_u16(value, 2)
            vlan_v = read_u16(value, 7)
            if vlan_d is None or vlan_v is None:
                return hex_bytes(value)
            self.switch_vlan_d = str(vlan_d)
            self.switch_vlan_v = str(vlan_v)
            return f"{vlan_d},{vlan_v}"

        return hex_bytes(value)

    def identity(self) -> SwitchIdentity:
        """Normalized identity record for this PDU."""
        return SwitchIdentity(
            name=self.switch_name,
            address=self.switch_ip,
            port=self.switch_port,
            vlan_data=self.switch_vlan_d,
            vlan_voice=self.switch_vlan_v,
            protocol=Protocol.FDP,
        )

    def describe(self) -> str:
        """Multi-line diagnostic dump of the decoded frame."""
        lines = [
            f"Switch: {self.switch_name} ({self.switch_ip})",
            f"Port:   {self.switch_port}",
            f"Data:   {self.switch_vlan_d}",
            f"Voice:  {self.switch_vlan_v}",
            f"Bytes:  {hex_bytes(self.frame, ' ')}",
        ]
        if self.truncated:
            lines.append("Note:   frame truncated inside a TLV")
        return "\n".join(lines)


def decode_fdp(frame: bytes) -> FDPPDU | None:
    """Decode an FDP frame, returning None unless it carried a Device-ID."""
    pdu = FDPPDU.decode(frame)
    return pdu if pdu.valid else None


def identify_fdp(frame: bytes) -> SwitchIdentity | None:
    """Decode an FDP frame straight to a switch identity."""
    pdu = decode_fdp(frame)
    return None if pdu is None else pdu.identity()
