"""Switch identity record produced by the FDP and LLDP decoders.

The identity is protocol independent: whichever decoder heard the switch,
the caller gets the same frozen record and the same display rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Protocol(Enum):
    """Discovery protocols, keyed by their destination multicast MAC."""

    FDP = bytes.fromhex("01E052CCCCCC")
    LLDP = bytes.fromhex("0180C200000E")

    @property
    def multicast_mac(self) -> str:
        """Destination MAC as colon-separated hex."""
        return ":".join(f"{b:02x}" for b in self.value)


@dataclass(frozen=True)
class SwitchIdentity:
    """Normalized identity of the switch a port is patched into.

    Attributes:
        name: Switch name (FDP Device-ID, LLDP System-Name).
        address: Management IPv4 address in dotted-quad form, or "".
        port: Switch port with alphabetic characters removed, e.g. "0/1".
        vlan_data: Native (untagged) VLAN as a decimal string, or "".
        vlan_voice: Voice VLAN as a decimal string, or "".
        protocol: Protocol the identity was decoded from.
    """

    name: str = ""
    address: str = ""
    port: str = ""
    vlan_data: str = ""
    vlan_voice: str = ""
    protocol: Protocol | None = None

    @property
    def switch_display(self) -> str:
        """Name followed by the bracketed address, or whichever is present."""
        parts = []
        if self.name:
            parts.append(self.name)
        if self.address:
            parts.append(f"({self.address})")
        return " ".join(parts)

    @property
    def vlan_display(self) -> str:
        """Data and voice VLANs joined by a comma when both are present."""
        return ",".join(v for v in (self.vlan_data, self.vlan_voice) if v)

    def entries(self) -> list[tuple[str, str]]:
        """Ordered key/value pairs handed to the store."""
        return [
            ("Switch", self.switch_display),
            ("Port", self.port),
            ("Vlan", self.vlan_display),
        ]
