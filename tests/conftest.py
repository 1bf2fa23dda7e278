"""Shared test fixtures: FDP/LLDP frame builders and a fake sysfs tree."""

import struct

import pytest

ETH_SOURCE = bytes.fromhex("00e052aabbcc")

# 802.3 length + LLC/SNAP (AA AA 03, OUI 00:E0:52, PID 0x2000) + FDP
# version/TTL/checksum: 14 + 8 + 4 = 26 bytes before the first TLV.
FDP_HEADER = (
    bytes.fromhex("01e052cccccc")
    + ETH_SOURCE
    + struct.pack(">H", 0)
    + bytes.fromhex("aaaa0300e0522000")
    + bytes.fromhex("01b40000")
)

LLDP_HEADER = bytes.fromhex("0180c200000e") + ETH_SOURCE + bytes.fromhex("88cc")


def _fdp_tlv(tlv_type: int, value: bytes) -> bytes:
    return struct.pack(">HH", tlv_type, len(value) + 4) + value


def _fdp_frame(*tlvs: bytes) -> bytes:
    return FDP_HEADER + b"".join(tlvs)


def _lldp_tlv(tlv_type: int, value: bytes) -> bytes:
    return struct.pack(">H", (tlv_type << 9) | len(value)) + value


def _lldp_frame(*tlvs: bytes) -> bytes:
    return LLDP_HEADER + b"".join(tlvs)


def _lldp_vlan_tlv(vlan_id: int, oui: bytes = b"\x00\x80\xc2") -> bytes:
    # OUI + subtype 1 (Port VLAN ID) + VLAN ID
    return _lldp_tlv(127, oui + b"\x01" + struct.pack(">H", vlan_id))


@pytest.fixture
def fdp_tlv():
    """Build one FDP TLV: fdp_tlv(type, value)."""
    return _fdp_tlv


@pytest.fixture
def fdp_frame():
    """Build an FDP frame from encoded TLVs."""
    return _fdp_frame


@pytest.fixture
def lldp_tlv():
    """Build one LLDP TLV: lldp_tlv(type, value)."""
    return _lldp_tlv


@pytest.fixture
def lldp_frame():
    """Build an LLDP frame from encoded TLVs."""
    return _lldp_frame


@pytest.fixture
def lldp_vlan_tlv():
    """Build an IEEE 802.1 Port VLAN ID TLV: lldp_vlan_tlv(vlan, oui=...)."""
    return _lldp_vlan_tlv


@pytest.fixture
def sample_fdp_frame():
    """FDP frame for SW1 at 10.0.0.1, port 1/1, data VLAN 16, voice 20."""
    return _fdp_frame(
        _fdp_tlv(0x0001, b"SW1"),
        _fdp_tlv(0x0002, b"\x00\x00\x00\x01\x01\xcc\x00\x04\x0a\x00\x00\x01"),
        _fdp_tlv(0x0003, b"GigabitEthernet1/1"),
        _fdp_tlv(0x0108, b"\x00\x01\x00\x10\x00\x02\x00\x00\x14"),
    )


@pytest.fixture
def sample_lldp_frame():
    """LLDP frame for core-sw2, port Gi0/1, VLAN 16."""
    return _lldp_frame(
        _lldp_tlv(1, b"\x04" + bytes.fromhex("001122334455")),
        _lldp_tlv(2, b"\x03" + bytes.fromhex("001122334401")),
        _lldp_tlv(3, struct.pack(">H", 120)),
        _lldp_tlv(4, b"Gi0/1"),
        _lldp_tlv(5, b"core-sw2"),
        _lldp_vlan_tlv(16),
        _lldp_tlv(0, b""),
    )


@pytest.fixture
def sysfs(tmp_path):
    """Fake /sys/class/net with one usable wired interface (eth0).

    Also contains: lo (no device), wlan0 (wireless), docker0 (virtual),
    eth1 (alias "Hyper-V Virtual Ethernet"), eth2 (link down).
    """
    root = tmp_path / "sys" / "class" / "net"

    def add(name, device=True, wireless=False, operstate="up", alias=""):
        iface = root / name
        iface.mkdir(parents=True)
        if device:
            (iface / "device").mkdir()
        if wireless:
            (iface / "wireless").mkdir()
        (iface / "operstate").write_text(operstate + "\n")
        (iface / "ifalias").write_text(alias + "\n")

    add("eth0")
    add("lo", device=False, operstate="unknown")
    add("wlan0", wireless=True)
    add("docker0", device=False)
    add("eth1", alias="Hyper-V Virtual Ethernet")
    add("eth2", operstate="down")
    return root
