"""Load rport configuration from rport.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from rport.store import DEFAULT_KEY
from switchid.capture import DEFAULT_EXCLUDE_KEYWORDS

DEFAULT_CONFIG_PATH = Path("rport.toml")


@dataclass
class ListenConfig:
    """How long to listen on each interface for each protocol.

    FDP is tried first because it carries the voice VLAN as well; switches
    typically send FDP every 60 seconds and LLDP every 30.
    """

    fdp_seconds: float = 62.0
    lldp_seconds: float = 32.0


@dataclass
class InterfaceConfig:
    """Which interfaces to listen on."""

    include: list[str] = field(default_factory=list)
    exclude_keywords: list[str] = field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_KEYWORDS),
    )


@dataclass
class StoreConfig:
    """Where the discovered identity is persisted."""

    path: Path = field(default_factory=lambda: Path("rport.json"))
    key: str = DEFAULT_KEY


@dataclass
class RportConfig:
    """Full configuration loaded from rport.toml."""

    listen: ListenConfig = field(default_factory=ListenConfig)
    interfaces: InterfaceConfig = field(default_factory=InterfaceConfig)
    store: StoreConfig = field(default_factory=StoreConfig)


def _build_listen(data: dict) -> ListenConfig:
    """Build listen durations from parsed TOML data."""
    section = data.get("listen", {})
    defaults = ListenConfig()
    return ListenConfig(
        fdp_seconds=float(section.get("fdp_seconds", defaults.fdp_seconds)),
        lldp_seconds=float(section.get("lldp_seconds", defaults.lldp_seconds)),
    )


def _build_interfaces(data: dict) -> InterfaceConfig:
    section = data.get("interfaces", {})
    if not section:
        return InterfaceConfig()
    return InterfaceConfig(
        include=list(section.get("include", [])),
        exclude_keywords=list(
            section.get("exclude_keywords", DEFAULT_EXCLUDE_KEYWORDS)
        ),
    )


def _build_store(data: dict) -> StoreConfig:
    """Build store settings from parsed TOML data."""
    section = data.get("store", {})
    return StoreConfig(
        path=Path(section.get("path", "rport.json")),
        key=section.get("key", DEFAULT_KEY),
    )


def load_config(config_path: Path | str | None = None) -> RportConfig:
    """Load configuration from a TOML file.

    If config_path is None, rport.toml in the current directory is used
    when it exists; otherwise the built-in defaults apply. An explicit
    path that does not exist raises FileNotFoundError.
    """
    if config_path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return RportConfig()
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = Path(config_path)

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    return RportConfig(
        listen=_build_listen(data),
        interfaces=_build_interfaces(data),
        store=_build_store(data),
    )
