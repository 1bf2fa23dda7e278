"""Pick a decoder for a captured Ethernet frame by its destination MAC."""

from __future__ import annotations

from switchid.fdp import FDPPDU, decode_fdp
from switchid.lldp import LLDPPDU, decode_lldp
from switchid.types import Protocol, SwitchIdentity

_DECODERS = {
    Protocol.FDP: decode_fdp,
    Protocol.LLDP: decode_lldp,
}


def classify(frame: bytes) -> Protocol | None:
    """Return the discovery protocol a frame is addressed to, if any."""
    destination = bytes(frame[0:6])
    for protocol in Protocol:
        if destination == protocol.value:
            return protocol
    return None


def decode_frame(
    frame: bytes,
    protocols: frozenset[Protocol] | None = None,
) -> FDPPDU | LLDPPDU | None:
    """Decode a frame with the decoder its destination MAC selects.

    Args:
        frame: Raw Ethernet frame, destination MAC at offset 0.
        protocols: Only accept these protocols (default: all).

    Returns:
        The decoded PDU if the frame is a discovery frame that carried
        identity information, otherwise None.
    """
    protocol = classify(frame)
    if protocol is None:
        return None
    if protocols is not None and protocol not in protocols:
        return None
    return _DECODERS[protocol](frame)


def identify_frame(
    frame: bytes,
    protocols: frozenset[Protocol] | None = None,
) -> SwitchIdentity | None:
    """Decode a frame straight to a switch identity."""
    pdu = decode_frame(frame, protocols)
    return None if pdu is None else pdu.identity()
