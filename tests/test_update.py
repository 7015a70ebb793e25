"""Tests for self-update: manifest selection and binary replacement."""

from __future__ import annotations

import stat

import pytest

from drycc_cli import update
from drycc_cli.errors import DryccError

MANIFEST = """
https://drycc-mirrors.drycc.cc/drycc/workflow-cli/releases/download/v1.2.0/drycc-v1.2.0-darwin-arm64
https://drycc-mirrors.drycc.cc/drycc/workflow-cli/releases/download/v1.2.0/drycc-v1.2.0-linux-amd64
https://drycc-mirrors.drycc.cc/drycc/workflow-cli/releases/download/v1.2.0/drycc-v1.2.0-linux-arm64
"""


class TestSelectRelease:
    """The manifest line for this platform carries the version."""

    def test_match(self):
        version, url = update.select_release(MANIFEST, "-linux-amd64")
        assert version == "v1.2.0"
        assert url.endswith("drycc-v1.2.0-linux-amd64")

    def test_no_match(self):
        with pytest.raises(DryccError) as exc:
            update.select_release(MANIFEST, "-windows-386")
        assert str(exc.value) == "unable to obtain version: windows-386"

    def test_platform_suffix_shape(self):
        suffix = update.platform_suffix()
        assert suffix.startswith("-")
        assert suffix.count("-") >= 2

    def test_manifest_url_override(self, monkeypatch):
        monkeypatch.setenv("DRYCC_UPDATE_URL", "http://mirror/cli.txt")
        assert update.manifest_url() == "http://mirror/cli.txt"

    def test_manifest_url_default(self, monkeypatch):
        monkeypatch.delenv("DRYCC_UPDATE_URL", raising=False)
        assert update.manifest_url() == update.MANIFEST_URL


class TestReplaceBinary:
    """The new binary is renamed over the old one, keeping its mode."""

    def test_replaces_contents(self, tmp_path):
        target = tmp_path / "drycc"
        target.write_bytes(b"old")
        target.chmod(0o751)
        update.replace_binary([b"new ", b"binary"], target)
        assert target.read_bytes() == b"new binary"
        assert stat.S_IMODE(target.stat().st_mode) == 0o751
        assert not (tmp_path / ".drycc.new").exists()

    def test_new_target_is_executable(self, tmp_path):
        target = tmp_path / "drycc"
        update.replace_binary([b"x"], target)
        assert stat.S_IMODE(target.stat().st_mode) == 0o755
