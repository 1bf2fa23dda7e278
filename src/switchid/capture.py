"""Raw Ethernet capture for FDP and LLDP frames.

Discovery frames are link-local multicasts, so they are read from an
AF_PACKET raw socket bound to one interface with the interface put in
promiscuous mode. This needs root or CAP_NET_RAW on Linux.

Usage:
    for iface in wired_interfaces(list_interfaces()):
        with FrameCapture(iface.name) as capture:
            capture.listen(30.0, handle_frame)
"""

from __future__ import annotations

import socket
import struct
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

ETH_P_ALL = 0x0003
SOL_PACKET = 263
PACKET_ADD_MEMBERSHIP = 1
PACKET_MR_PROMISC = 1

SYSFS_NET = Path("/sys/class/net")

# Interfaces whose name or description contains one of these are skipped.
DEFAULT_EXCLUDE_KEYWORDS: tuple[str, ...] = (
    "hyper",
    "virtual",
    "loop",
    "wi-fi",
    "wifi",
    "wireless",
    "bluetooth",
)


class CaptureError(Exception):
    """A capture channel could not be opened or stopped working."""


@dataclass(frozen=True)
class Interface:
    """A network interface as described by sysfs.

    Attributes:
        name: Kernel interface name (e.g. "eth0", "enp0s31f6").
        description: Interface alias (``ifalias``), often empty.
        virtual: True if there is no backing device (loopback, bridges,
            veth, tun/tap, ...).
        wireless: True for 802.11 interfaces.
        operstate: Kernel operational state ("up", "down", "unknown", ...).
    """

    name: str
    description: str = ""
    virtual: bool = False
    wireless: bool = False
    operstate: str = "unknown"


def _read_attr(path: Path) -> str:
    try:
        return path.read_text().strip()
    except OSError:
        return ""


def list_interfaces(sysfs_root: Path = SYSFS_NET) -> list[Interface]:
    """Enumerate network interfaces from sysfs, sorted by name."""
    interfaces = []
    for iface_dir in sorted(sysfs_root.iterdir()):
        interfaces.append(
            Interface(
                name=iface_dir.name,
                description=_read_attr(iface_dir / "ifalias"),
                virtual=not (iface_dir / "device").exists(),
                wireless=(
                    (iface_dir / "wireless").exists()
                    or (iface_dir / "phy80211").exists()
                ),
                operstate=_read_attr(iface_dir / "operstate") or "unknown",
            )
        )
    return interfaces


def wired_interfaces(
    interfaces: Iterable[Interface],
    exclude_keywords: Iterable[str] = DEFAULT_EXCLUDE_KEYWORDS,
    include: Iterable[str] = (),
) -> list[Interface]:
    """Filter down to physical, wired interfaces that have a link.

    Args:
        interfaces: Candidates, typically from list_interfaces().
        exclude_keywords: Case-insensitive substrings of the name or
            description that disqualify an interface.
        include: If non-empty, only these interface names are kept.
    """
    keywords = [k.lower() for k in exclude_keywords]
    allowed = set(include)
    wired = []
    for iface in interfaces:
        if allowed and iface.name not in allowed:
            continue
        if iface.virtual or iface.wireless or iface.operstate == "down":
            continue
        label = f"{iface.name} {iface.description}".lower()
        if any(k in label for k in keywords):
            continue
        wired.append(iface)
    return wired


class FrameCapture:
    """Receive raw Ethernet frames from one interface.

    Args:
        interface: Interface name to bind to.
        promiscuous: Put the interface in promiscuous mode for the life
            of the socket so multicast discovery frames are delivered.

    Raises:
        CaptureError: From listen() if the socket cannot be created,
            bound, or configured (usually missing privileges).
    """

    RECV_SIZE = 65535

    def __init__(self, interface: str, promiscuous: bool = True) -> None:
        self._interface = interface
        self._promiscuous = promiscuous
        self._sock: socket.socket | None = None

    @property
    def interface(self) -> str:
        return self._interface

    def _get_socket(self) -> socket.socket:
        """Create or return the cached raw socket."""
        if self._sock is None:
            try:
                sock = socket.socket(
                    socket.AF_PACKET, socket.SOCK_RAW, socket.htons(ETH_P_ALL),
                )
            except OSError as e:
                raise CaptureError(f"Unable to create channel: {e}") from e
            try:
                sock.bind((self._interface, 0))
                if self._promiscuous:
                    mreq = struct.pack(
                        "iHH8s",
                        socket.if_nametoindex(self._interface),
                        PACKET_MR_PROMISC,
                        0,
                        b"",
                    )
                    sock.setsockopt(SOL_PACKET, PACKET_ADD_MEMBERSHIP, mreq)
            except OSError as e:
                sock.close()
                raise CaptureError(
                    f"Unable to create channel on {self._interface!r}: {e}"
                ) from e
            self._sock = sock
        return self._sock

    def listen(
        self,
        duration: float,
        handler: Callable[[bytes], bool],
        on_error: Callable[[OSError], None] | None = None,
    ) -> bool:
        """Feed received frames to ``handler`` for up to ``duration`` seconds.

        The handler returns True to stop listening early.

        Args:
            duration: Seconds to listen for.
            handler: Called with each frame's raw bytes.
            on_error: Called with receive errors, after which listening
                continues. Without it a receive error raises CaptureError.

        Returns:
            True if the handler stopped the loop, False on timeout.
        """
        sock = self._get_socket()
        deadline = time.monotonic() + duration
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            sock.settimeout(min(remaining, 1.0))
            try:
                frame = sock.recv(self.RECV_SIZE)
            except socket.timeout:
                continue
            except OSError as e:
                if on_error is None:
                    raise CaptureError(f"Unable to receive packet: {e}") from e
                on_error(e)
                continue
            if handler(frame):
                return True

    def close(self) -> None:
        """Close the raw socket."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> FrameCapture:
        return self

    def __exit__(self, *_exc) -> None:
        self.close()
