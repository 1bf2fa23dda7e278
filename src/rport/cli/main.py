"""CLI entry point for rport.

Subcommands:
    listen      Listen for FDP, then LLDP, and store the switch identity.
    show        Show the values currently in the store.
    interfaces  List the interfaces that would be listened on.
    decode      Decode a saved frame (raw bytes or hex text) offline.
"""

from __future__ import annotations

import argparse
import string
import sys
from pathlib import Path

from rport.exit_codes import ExitCode

_HEX_TEXT_CHARS = frozenset(string.hexdigits + string.whitespace + ":-")


def _load_config(args: argparse.Namespace):
    """Load config, handling errors."""
    from rport.config import load_config

    config_path = getattr(args, "config", None)
    try:
        return load_config(config_path)
    except FileNotFoundError:
        print(f"Error: config file not found: {config_path}", file=sys.stderr)
        sys.exit(1)


def read_frame(path: Path) -> bytes:
    """Read a saved frame.

    Files that contain only hex digits, whitespace, ':' and '-' are
    treated as a hex dump (e.g. "01 80 c2 00 00 0e ..."); anything else
    is taken as the raw frame bytes.

    Raises:
        ValueError: If a hex dump has an odd number of hex digits.
    """
    data = path.read_bytes()
    try:
        text = data.decode("ascii")
    except UnicodeDecodeError:
        return data
    if text.strip() and set(text) <= _HEX_TEXT_CHARS:
        digits = "".join(c for c in text if c in string.hexdigits)
        if len(digits) % 2:
            raise ValueError(
                f"malformed hex dump: odd number of hex digits ({len(digits)})"
            )
        return bytes.fromhex(digits)
    return data


# ---------------------------------------------------------------------------
# Subcommand: listen
# ---------------------------------------------------------------------------

def cmd_listen(args: argparse.Namespace) -> int:
    """Listen for FDP/LLDP and persist the identity."""
    config = _load_config(args)

    from rport.discover import run_discovery

    if args.fdp_seconds is not None:
        config.listen.fdp_seconds = args.fdp_seconds
    if args.lldp_seconds is not None:
        config.listen.lldp_seconds = args.lldp_seconds
    if args.interface:
        config.interfaces.include = args.interface

    return int(run_discovery(config))


# ---------------------------------------------------------------------------
# Subcommand: show
# ---------------------------------------------------------------------------

def cmd_show(args: argparse.Namespace) -> int:
    """Show the values currently stored."""
    config = _load_config(args)

    from rport.discover import exit_code_for, format_values
    from rport.store import StoreError, read_values

    try:
        values = read_values(config.store.path, config.store.key)
    except StoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return int(exit_code_for(e))

    print(f"Store: {config.store.path} [{config.store.key}]")
    if not values:
        print("  (no values)")
        return int(ExitCode.SUCCESS)
    print(format_values(values))
    return int(ExitCode.SUCCESS)


# ---------------------------------------------------------------------------
# Subcommand: interfaces
# ---------------------------------------------------------------------------

def cmd_interfaces(args: argparse.Namespace) -> int:
    """List interfaces and whether they would be listened on."""
    config = _load_config(args)

    from switchid import list_interfaces, wired_interfaces

    interfaces = list_interfaces()
    wired = {
        iface.name
        for iface in wired_interfaces(
            interfaces,
            exclude_keywords=config.interfaces.exclude_keywords,
            include=config.interfaces.include,
        )
    }

    print("Interfaces:")
    for iface in interfaces:
        status = "listen" if iface.name in wired else "skip"
        kind = "virtual" if iface.virtual else "wireless" if iface.wireless else "wired"
        desc = f" {iface.description!r}" if iface.description else ""
        print(f"  {iface.name:<16} {status:<6} {kind:<8} {iface.operstate}{desc}")

    print(f"\n{len(wired)} of {len(interfaces)} interface(s) would be listened on.")
    return int(ExitCode.SUCCESS)


# ---------------------------------------------------------------------------
# Subcommand: decode
# ---------------------------------------------------------------------------

def cmd_decode(args: argparse.Namespace) -> int:
    """Decode a saved frame and print the result."""
    from switchid import classify, decode_frame

    try:
        frame = read_frame(Path(args.file))
    except OSError as e:
        print(f"Error: cannot read frame: {e}", file=sys.stderr)
        return int(ExitCode.DECODE_FAILURE)
    except ValueError as e:
        print(f"Error: {args.file}: {e}", file=sys.stderr)
        return int(ExitCode.DECODE_FAILURE)

    protocol = classify(frame)
    if protocol is None:
        print(f"Not an FDP or LLDP frame ({len(frame)} bytes).", file=sys.stderr)
        return int(ExitCode.DECODE_FAILURE)

    pdu = decode_frame(frame)
    if pdu is None:
        print(f"{protocol.name} frame carried no switch identity.", file=sys.stderr)
        return int(ExitCode.DECODE_FAILURE)

    print(f"Protocol: {protocol.name}")
    print(pdu.describe())
    print()
    for name, value in pdu.identity().entries():
        print(f"{name + ':':<7} {value}")
    return int(ExitCode.SUCCESS)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="rport",
        description="Record the switch, port and VLAN this machine is patched into.",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to rport.toml (default: ./rport.toml if present)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # listen
    listen_parser = subparsers.add_parser(
        "listen", help="Listen for FDP/LLDP and store the switch identity",
    )
    listen_parser.add_argument(
        "-i", "--interface", action="append",
        help="Only listen on this interface (repeatable)",
    )
    listen_parser.add_argument(
        "--fdp-seconds", type=float,
        help="Seconds to listen for FDP per interface",
    )
    listen_parser.add_argument(
        "--lldp-seconds", type=float,
        help="Seconds to listen for LLDP per interface",
    )

    # show
    subparsers.add_parser("show", help="Show stored values")

    # interfaces
    subparsers.add_parser("interfaces", help="List candidate interfaces")

    # decode
    decode_parser = subparsers.add_parser("decode", help="Decode a saved frame")
    decode_parser.add_argument("file", help="Frame file (raw bytes or hex text)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "listen": cmd_listen,
        "show": cmd_show,
        "interfaces": cmd_interfaces,
        "decode": cmd_decode,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
