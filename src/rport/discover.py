"""Two-phase switch discovery: listen for FDP, fall back to LLDP.

FDP is tried first because it reports both the data and the voice VLAN.
If no FDP frame carrying a device ID is heard on any wired interface,
LLDP is tried. The first identity heard is dumped, persisted to the
store and the run ends.

The FDP/LLDP decoding itself lives in the standalone `switchid` package.
This module is the bridge between that package, the capture sockets and
the persistent store.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from rport.config import RportConfig, StoreConfig
from rport.exit_codes import ExitCode
from rport.store import (
    StoreError,
    StoreOpenError,
    StoreReadError,
    read_values,
    write_values,
)
from switchid import (
    FDPPDU,
    LLDPPDU,
    CaptureError,
    FrameCapture,
    Interface,
    Protocol,
    SwitchIdentity,
    decode_frame,
    list_interfaces,
    wired_interfaces,
)
from switchid.capture import SYSFS_NET

CaptureFactory = Callable[[str], FrameCapture]

# Order in which stored values are shown.
DISPLAY_KEYS = ("LastWrite", "Switch", "Port", "Vlan")


def exit_code_for(error: StoreError) -> ExitCode:
    """Map a store failure to the process exit code."""
    if isinstance(error, StoreOpenError):
        return ExitCode.STORE_OPEN_FAILURE
    if isinstance(error, StoreReadError):
        return ExitCode.STORE_READ_FAILURE
    return ExitCode.STORE_WRITE_FAILURE


def format_values(values: dict[str, str]) -> str:
    """Render stored values as aligned "Key: value" lines."""
    keys = [k for k in DISPLAY_KEYS if k in values]
    keys += sorted(k for k in values if k not in DISPLAY_KEYS)
    width = max((len(k) for k in keys), default=0) + 1
    return "\n".join(f"  {k + ':':<{width}} {values[k]}" for k in keys)


def _report_recv_error(error: OSError) -> None:
    print(f"Error - Unable to receive packet: {error}", file=sys.stderr)


def listen_wired(
    interfaces: Iterable[Interface],
    duration: float,
    handler: Callable[[bytes], bool],
    capture_factory: CaptureFactory = FrameCapture,
) -> str | None:
    """Listen on each interface in turn until the handler reports success.

    Returns:
        Name of the interface the handler succeeded on, or None.

    Raises:
        CaptureError: If a capture channel cannot be opened.
    """
    for iface in interfaces:
        print(f'Listening on "{iface.name}" for {duration:g}s', file=sys.stderr)
        with capture_factory(iface.name) as capture:
            stopped = capture.listen(duration, handler, on_error=_report_recv_error)
        if stopped:
            return iface.name
        print(f'Finished listening on "{iface.name}"', file=sys.stderr)
    return None


def discover_pdu(
    interfaces: Sequence[Interface],
    config: RportConfig,
    capture_factory: CaptureFactory = FrameCapture,
) -> FDPPDU | LLDPPDU | None:
    """Run the FDP phase then the LLDP phase; return the first valid PDU."""
    phases = (
        (Protocol.FDP, config.listen.fdp_seconds),
        (Protocol.LLDP, config.listen.lldp_seconds),
    )
    found: list[FDPPDU | LLDPPDU] = []

    for protocol, seconds in phases:
        wanted = frozenset({protocol})

        def handle(frame: bytes) -> bool:
            pdu = decode_frame(frame, wanted)
            if pdu is None:
                return False
            found.append(pdu)
            return True

        print(f"Trying {protocol.name} ({protocol.multicast_mac})", file=sys.stderr)
        if listen_wired(interfaces, seconds, handle, capture_factory) is not None:
            return found[0]
    return None


def persist_identity(identity: SwitchIdentity, store: StoreConfig) -> dict[str, str]:
    """Write the identity's entries to the store, echoing each one."""
    print(f'Writing values at "{store.key}" in {store.path}')
    values = write_values(store.path, identity.entries(), key=store.key)
    for name, value in identity.entries():
        print(f"  {name + ':':<7} {value}")
    return values


def show_stored(store: StoreConfig) -> None:
    """Print any values already in the store."""
    try:
        values = read_values(store.path, store.key)
    except StoreError as e:
        print(f"Warning: {e}", file=sys.stderr)
        return
    if values:
        print("Existing values")
        print(format_values(values))
        print()


def run_discovery(
    config: RportConfig,
    capture_factory: CaptureFactory = FrameCapture,
    sysfs_root: Path = SYSFS_NET,
) -> ExitCode:
    """Discover the switch identity and persist it.

    Returns:
        SUCCESS when an identity was heard and written, otherwise the
        exit code for the failure.
    """
    show_stored(config.store)

    interfaces = wired_interfaces(
        list_interfaces(sysfs_root),
        exclude_keywords=config.interfaces.exclude_keywords,
        include=config.interfaces.include,
    )
    if not interfaces:
        print("No wired interfaces to listen on.", file=sys.stderr)
        return ExitCode.NO_IDENTITY

    try:
        pdu = discover_pdu(interfaces, config, capture_factory)
    except CaptureError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(
            "  Raw capture needs root or CAP_NET_RAW:\n"
            "  sudo setcap cap_net_raw+ep $(which python3)",
            file=sys.stderr,
        )
        return ExitCode.UNABLE_TO_CREATE_CHANNEL

    if pdu is None:
        print("No FDP or LLDP switch identity heard.", file=sys.stderr)
        return ExitCode.NO_IDENTITY

    print(pdu.describe())
    print()

    try:
        persist_identity(pdu.identity(), config.store)
    except StoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return exit_code_for(e)
    return ExitCode.SUCCESS
