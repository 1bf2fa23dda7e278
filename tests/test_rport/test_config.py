"""Tests for rport.toml loading."""

import textwrap
from pathlib import Path

import pytest

from rport.config import RportConfig, load_config
from switchid.capture import DEFAULT_EXCLUDE_KEYWORDS


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = load_config()
        assert config == RportConfig()
        assert config.listen.fdp_seconds == 62.0
        assert config.listen.lldp_seconds == 32.0
        assert config.interfaces.include == []
        assert config.interfaces.exclude_keywords == list(DEFAULT_EXCLUDE_KEYWORDS)
        assert config.store.path == Path("rport.json")
        assert config.store.key == "SOFTWARE\\rport"

    def test_default_file_in_cwd(self, tmp_path, monkeypatch):
        """rport.toml in the working directory is picked up."""
        (tmp_path / "rport.toml").write_text("[listen]\nfdp_seconds = 5\n")
        monkeypatch.chdir(tmp_path)
        config = load_config()
        assert config.listen.fdp_seconds == 5.0
        assert config.listen.lldp_seconds == 32.0

    def test_full_file(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text(textwrap.dedent("""\
            [listen]
            fdp_seconds = 10
            lldp_seconds = 4.5

            [interfaces]
            include = ["eth0"]
            exclude_keywords = ["docker"]

            [store]
            path = "/var/lib/rport/rport.json"
            key = 'SOFTWARE\\site'
        """))
        config = load_config(path)
        assert config.listen.fdp_seconds == 10.0
        assert config.listen.lldp_seconds == 4.5
        assert config.interfaces.include == ["eth0"]
        assert config.interfaces.exclude_keywords == ["docker"]
        assert config.store.path == Path("/var/lib/rport/rport.json")
        assert config.store.key == "SOFTWARE\\site"

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")
