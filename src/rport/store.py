"""Persistent store for the discovered switch identity.

Values live in a JSON document on disk, grouped under a configuration
key (by default ``SOFTWARE\\rport``):

    {
      "SOFTWARE\\rport": {
        "Switch": "core-sw1 (10.0.0.1)",
        "Port": "1/1/4",
        "Vlan": "16,20",
        "LastWrite": "2026-10-18T09:30:00"
      }
    }

Other keys in the document are left untouched.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

DEFAULT_KEY = "SOFTWARE\\rport"
LAST_WRITE = "LastWrite"


class StoreError(Exception):
    """Base class for store failures."""


class StoreOpenError(StoreError):
    """The store could not be opened or created."""


class StoreReadError(StoreError):
    """The store exists but its contents are unreadable."""


class StoreWriteError(StoreError):
    """Values could not be written to the store."""


def load_store(path: Path) -> dict[str, dict[str, str]]:
    """Load the whole store document, or {} if it does not exist yet.

    Raises:
        StoreOpenError: If the file exists but cannot be opened.
        StoreReadError: If the file is not a JSON object.
    """
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            data = json.load(f)
    except OSError as e:
        raise StoreOpenError(f"Failure opening store {str(path)!r}: {e}") from e
    except json.JSONDecodeError as e:
        raise StoreReadError(f"Failure reading store {str(path)!r}: {e}") from e
    if not isinstance(data, dict):
        raise StoreReadError(f"Failure reading store {str(path)!r}: not a JSON object")
    return data


def _section(data: dict, path: Path, key: str) -> dict[str, str]:
    section = data.get(key, {})
    if not isinstance(section, dict):
        raise StoreReadError(f"Failure reading store {str(path)!r}: {key!r} is not an object")
    return dict(section)


def read_values(path: Path, key: str = DEFAULT_KEY) -> dict[str, str]:
    """Return the values stored under ``key`` (empty if none)."""
    return _section(load_store(path), path, key)


def write_values(
    path: Path,
    entries: Iterable[tuple[str, str]],
    key: str = DEFAULT_KEY,
    now: datetime | None = None,
) -> dict[str, str]:
    """Write key/value pairs under ``key``, stamping ``LastWrite``.

    Existing values under the key that are not in ``entries`` are kept.

    Returns:
        The values now stored under ``key``.

    Raises:
        StoreOpenError: If the store or its directory cannot be created.
        StoreReadError: If an existing store is corrupt.
        StoreWriteError: If writing the file fails.
    """
    data = load_store(path)
    section = _section(data, path, key)
    for name, value in entries:
        section[name] = value
    section[LAST_WRITE] = (now or datetime.now()).isoformat(timespec="seconds")
    data[key] = section

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StoreOpenError(f"Failure creating/opening path {str(path)!r}: {e}") from e
    try:
        with open(path, "w") as f:
            json.dump(data, f, indent="  ")
            f.write("\n")
    except OSError as e:
        raise StoreWriteError(f"Failure writing to store {str(path)!r}: {e}") from e
    return section
