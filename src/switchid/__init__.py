"""FDP and LLDP decoding for switch identity discovery.

Decodes the vendor Foundry Discovery Protocol and the IEEE Link Layer
Discovery Protocol from raw Ethernet frames and normalizes the result
into a SwitchIdentity (switch name, management address, port, VLANs).

Decoding is pure and never raises on malformed frames. This package has
no external dependencies beyond the Python standard library.

Quick start:
    from switchid import identify_frame

    identity = identify_frame(frame_bytes)
    if identity is not None:
        print(identity.switch_display, identity.port, identity.vlan_display)
"""

from switchid.capture import (
    CaptureError,
    FrameCapture,
    Interface,
    list_interfaces,
    wired_interfaces,
)
from switchid.classifier import classify, decode_frame, identify_frame
from switchid.fdp import FDPPDU, FDPType, decode_fdp, identify_fdp
from switchid.lldp import LLDPPDU, LLDPType, decode_lldp, identify_lldp
from switchid.tlv import TLVCursor, TLVRecord
from switchid.types import Protocol, SwitchIdentity

__all__ = [
    "CaptureError",
    "FDPPDU",
    "FDPType",
    "FrameCapture",
    "Interface",
    "LLDPPDU",
    "LLDPType",
    "Protocol",
    "SwitchIdentity",
    "TLVCursor",
    "TLVRecord",
    "classify",
    "decode_fdp",
    "decode_frame",
    "decode_lldp",
    "identify_fdp",
    "identify_frame",
    "identify_lldp",
    "list_interfaces",
    "wired_interfaces",
]
