"""rport: record which switch, port and VLAN a machine is patched into."""

__version__ = "0.1.0"
