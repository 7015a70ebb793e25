"""Tests for version, update and shortcuts commands."""

from __future__ import annotations

from pathlib import Path

import pytest

from drycc_cli import API_VERSION, __version__
from drycc_cli import update as updater
from drycc_cli.shortcuts import SHORTCUTS, expand

from conftest import output

FETCHED = "Get the latest version of workflow cli... done\n"


class TestVersion:
    def test_plain(self, cmdr, controller):
        cmdr.version()
        assert output(cmdr) == f"{__version__}\n"
        assert controller.requests == []

    def test_all(self, cmdr, controller):
        controller.on("GET", "/v2/", None)
        cmdr.version(all_info=True)
        lines = output(cmdr).splitlines()
        assert lines[0] == f"Workflow CLI Version:            {__version__}"
        assert lines[1] == f"Workflow CLI API Version:        {API_VERSION}"
        assert lines[2] == f"Workflow Controller API Version: {API_VERSION}"


class TestUpdate:
    """update swaps the running binary for the release matching this platform."""

    @pytest.fixture
    def release(self, monkeypatch):
        def use(version):
            manifest = f"https://example.com/drycc-{version}-linux-amd64\n"
            monkeypatch.setattr(updater, "fetch_manifest", lambda url: manifest)
            monkeypatch.setattr(updater, "platform_suffix", lambda: "-linux-amd64")

        return use

    def test_already_latest(self, cmdr, release):
        release(f"v{__version__}")
        cmdr.update()
        assert output(cmdr) == FETCHED + "You are already running the most recent version.\n"

    def test_dry_run(self, cmdr, release):
        release("v9.9.9")
        cmdr.update(dry_run=True)
        assert output(cmdr) == FETCHED + f"Update workflow cli from {__version__} to v9.9.9... skip\n"

    def test_replaces_binary(self, cmdr, release, monkeypatch):
        release("v9.9.9")
        replaced = []
        monkeypatch.setattr(updater, "download", lambda url: [url.encode()])
        monkeypatch.setattr(updater, "current_executable", lambda: Path("/usr/local/bin/drycc"))
        cmdr.replacer = lambda chunks, target: replaced.append((list(chunks), target))
        cmdr.update()
        assert replaced == [([b"https://example.com/drycc-v9.9.9-linux-amd64"], Path("/usr/local/bin/drycc"))]
        assert output(cmdr) == FETCHED + f"Update workflow cli from {__version__} to v9.9.9... done\n"


class TestShortcuts:
    def test_list_sorted(self, cmdr):
        cmdr.shortcuts_list()
        lines = output(cmdr).splitlines()
        assert lines == [f"{k} -> {SHORTCUTS[k]}" for k in sorted(SHORTCUTS)]
        assert "login -> auth:login" in lines

    def test_expand(self):
        assert expand("info") == "apps:info"
        assert expand("apps:list") == "apps:list"
