"""version, update and shortcuts commands."""

from __future__ import annotations

from .. import API_VERSION, __version__
from .. import update as updater
from ..shortcuts import SHORTCUTS
from ._base import BaseCommand


class MiscMixin(BaseCommand):

    replacer = staticmethod(updater.replace_binary)

    def version(self, all_info: bool = False) -> None:
        if not all_info:
            self.writeln(__version__)
            return
        self.writeln(f"Workflow CLI Version:            {__version__}")
        self.writeln(f"Workflow CLI API Version:        {API_VERSION}")
        c = self.client()
        c.healthcheck()
        self.writeln(f"Workflow Controller API Version: {c.api_version}")

    def update(self, dry_run: bool = False) -> None:
        """Replace the running binary with the newest release for this platform."""
        self.write("Get the latest version of workflow cli... ")
        with self.progress():
            manifest = updater.fetch_manifest(updater.manifest_url())
        self.writeln("done")
        latest, url = updater.select_release(manifest, updater.platform_suffix())
        if latest.lstrip("v") == __version__:
            self.writeln("You are already running the most recent version.")
            return
        self.write(f"Update workflow cli from {__version__} to {latest}... ")
        if dry_run:
            self.writeln("skip")
            return
        with self.progress():
            self.replacer(updater.download(url), updater.current_executable())
        self.writeln("done")

    def shortcuts_list(self) -> None:
        for key in sorted(SHORTCUTS):
            self.writeln(f"{key} -> {SHORTCUTS[key]}")
