"""LLDP (IEEE 802.1AB) frame decoding.

LLDP frames are sent to 01:80:C2:00:00:0E and carry no header of their
own: the TLV stream starts right after the 14-byte Ethernet header. Each
TLV header is one big-endian 16-bit word:

    +---------+----------+----------------------+
    | type    | length   | value                |
    | 7 bits  | 9 bits   | length bytes         |
    +---------+----------+----------------------+

The length counts the value only. The native VLAN is carried in the
IEEE 802.1 organizationally specific TLV (OUI 00:80:C2, subtype 1,
Port VLAN ID).
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import IntEnum

from switchid.tlv import (
    TLVCursor,
    TLVRecord,
    decode_text,
    hex_bytes,
    lldp_header,
    read_u16,
    strip_alpha,
)
from switchid.types import Protocol, SwitchIdentity

LLDP_TLV_OFFSET = 14
IEEE_802_1_OUI = b"\x00\x80\xc2"
PORT_VLAN_TLV_LENGTH = 6
PLACEHOLDER = "Reserved or Custom TLV"


class LLDPType(IntEnum):
    """LLDP TLV type codes."""

    END_OF_LLDPDU = 0
    CHASSIS_ID = 1
    PORT_ID = 2
    TIME_TO_LIVE = 3
    PORT_DESCRIPTION = 4
    SYSTEM_NAME = 5
    SYSTEM_DESCRIPTION = 6
    SYSTEM_CAPABILITIES = 7
    MANAGEMENT_ADDRESS = 8
    ORGANIZATIONALLY_SPECIFIC = 127


def tlv_type_name(code: int) -> str:
    """Display name for an LLDP TLV type code."""
    try:
        return LLDPType(code).name
    except ValueError:
        return PLACEHOLDER


def _is_listed(code: int) -> bool:
    """TLV types shown in the diagnostic TLV listing."""
    return code == LLDPType.ORGANIZATIONALLY_SPECIFIC or 0 < code <= LLDPType.MANAGEMENT_ADDRESS


@dataclass
class LLDPPDU:
    """One decoded LLDP frame.

    Attributes:
        frame: The captured frame the PDU was decoded from.
        valid: True once an IEEE 802.1 Port VLAN ID TLV has been decoded.
        destination_mac: Frame destination (the LLDP multicast address).
        source_mac: Frame source (the switch port MAC).
        chassis_id: Chassis ID value as hex (subtype byte skipped).
        port_id: Port ID value as hex (subtype byte skipped).
        ttl: Time-to-live in seconds, if present.
        port_description: Port Description text with letters removed.
        system_description: System Name text. Downstream readers know
            the switch name under this label.
        vlan: Port VLAN ID as a decimal string.
        truncated: True if a TLV ran past the end of the frame.
        tlvs: Every TLV seen, in frame order.
    """

    frame: bytes
    valid: bool = False
    destination_mac: str = ""
    source_mac: str = ""
    chassis_id: str = ""
    port_id: str = ""
    ttl: int | None = None
    port_description: str = ""
    system_description: str = ""
    vlan: str = ""
    truncated: bool = False
    tlvs: list[TLVRecord] = field(default_factory=list)

    @classmethod
    def decode(cls, frame: bytes) -> LLDPPDU:
        """Decode every TLV in an LLDP frame.

        Never raises on malformed input. End-of-LLDPDU markers are
        recorded but do not end the scan; Ethernet padding after the
        last TLV reads as further end markers.
        """
        pdu = cls(
            frame=frame,
            destination_mac=hex_bytes(frame[0:6]),
            source_mac=hex_bytes(frame[6:12]),
        )
        cursor = TLVCursor(frame, LLDP_TLV_OFFSET, lldp_header)
        for tlv in cursor:
            text = pdu._apply(tlv)
            pdu.tlvs.append(dataclasses.replace(tlv, text=text))
        pdu.truncated = cursor.truncated
        return pdu

    def _apply(self, tlv: TLVRecord) -> str:
        """Project one TLV onto the PDU fields and return its display text."""
        value = tlv.value

        if tlv.type == LLDPType.END_OF_LLDPDU:
            return "End of PDU"

        if tlv.type == LLDPType.CHASSIS_ID:
            self.chassis_id = hex_bytes(value[1:])
            return self.chassis_id

        if tlv.type == LLDPType.PORT_ID:
            self.port_id = hex_bytes(value[1:])
            return self.port_id

        if tlv.type == LLDPType.TIME_TO_LIVE:
            ttl = read_u16(value, 0)
            if ttl is None:
                return hex_bytes(value, ", ")
            self.ttl = ttl
            return str(ttl)

        if tlv.type == LLDPType.PORT_DESCRIPTION:
            text = decode_text(value)
            if text is None:
                return hex_bytes(value, ", ")
            self.port_description = strip_alpha(text)
            return self.port_description

        if tlv.type == LLDPType.SYSTEM_NAME:
            text = decode_text(value)
            if text is None:
                return hex_bytes(value, ", ")
            self.system_description = text
            return text

        if tlv.type == LLDPType.SYSTEM_DESCRIPTION:
            text = decode_text(value)
            return hex_bytes(value, ", ") if text is None else text

        if tlv.type in (LLDPType.SYSTEM_CAPABILITIES, LLDPType.MANAGEMENT_ADDRESS):
            return hex_bytes(value, ", ")

        if tlv.type == LLDPType.ORGANIZATIONALLY_SPECIFIC:
            if value[:3] != IEEE_802_1_OUI or tlv.length != PORT_VLAN_TLV_LENGTH:
                return PLACEHOLDER
            # OUI (3) + subtype (1) + VLAN ID (2)
            vlan = read_u16(value, 4)
            if vlan is None:
                return PLACEHOLDER
            self.vlan = str(vlan)
            self.valid = True
            return self.vlan

        return PLACEHOLDER

    def identity(self) -> SwitchIdentity:
        """Normalized identity record for this PDU."""
        return SwitchIdentity(
            name=self.system_description,
            port=self.port_description,
            vlan_data=self.vlan,
            protocol=Protocol.LLDP,
        )

    def describe(self) -> str:
        """Multi-line diagnostic dump of the decoded frame and its TLVs."""
        lines = [
            f"Hex:    {hex_bytes(self.frame, ' ')}",
            f"Switch: {self.system_description} {self.chassis_id}",
            f"Port:   {self.port_description} {self.port_id}",
            f"Vlan:   {self.vlan}",
            "",
        ]
        for tlv in self.tlvs:
            if _is_listed(tlv.type):
                lines.append(f"{tlv_type_name(tlv.type)}: {tlv.text} ({tlv.length} bytes)")
        if self.truncated:
            lines.append("Value length error: frame truncated inside a TLV")
        return "\n".join(lines)


def decode_lldp(frame: bytes) -> LLDPPDU | None:
    """Decode an LLDP frame, returning None unless it carried a Port VLAN ID."""
    pdu = LLDPPDU.decode(frame)
    return pdu if pdu.valid else None


def identify_lldp(frame: bytes) -> SwitchIdentity | None:
    """Decode an LLDP frame straight to a switch identity."""
    pdu = decode_lldp(frame)
    return None if pdu is None else pdu.identity()
