"""builds and releases commands."""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

import yaml

from ..controller import builds as builds_api
from ..controller import releases as releases_api
from ..errors import CancelledError, DryccError, ValidationError
from ..parsers import parse_procfile, parse_version
from ..table import limit_count
from ..utils import format_time
from ._base import BaseCommand

PROCFILE = "Procfile"
DRYCCFILE = "drycc.yaml"


def _read_local(path: str) -> Optional[str]:
    if not os.path.isfile(path):
        return None
    with open(path, encoding="utf-8") as fh:
        return fh.read()


def _parse_dryccfile(content: str) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as exc:
        raise ValidationError(f"could not parse {DRYCCFILE}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValidationError(f"{DRYCCFILE} must be a mapping")
    return data


class BuildsMixin(BaseCommand):

    def builds_list(self, app_id: Optional[str] = None, limit: Optional[int] = None) -> None:
        c, app_id = self.load_app(app_id)
        builds, count = builds_api.list_builds(c, app_id, limit)
        self.write(f"=== {app_id} Builds{limit_count(len(builds), count)}")
        for build in builds:
            self.writeln(f"{build.uuid} {format_time(build.created)}")

    def builds_info(self, app_id: Optional[str] = None) -> None:
        c, app_id = self.load_app(app_id)
        build = builds_api.latest(c, app_id)
        if build is None:
            raise DryccError(f"no build found in {app_id} app")
        self.print_kv(
            [
                ("App", build.app),
                ("Sha", build.sha),
                ("UUID", build.uuid),
                ("Owner", build.owner),
                ("Image", build.image),
                ("Stack", build.stack),
                ("Created", format_time(build.created)),
                ("Updated", format_time(build.updated)),
            ]
        )

    def builds_create(
        self,
        app_id: Optional[str],
        image: str,
        stack: str = "container",
        procfile: str = "",
        dryccfile: str = "",
        confirm: str = "",
    ) -> None:
        """Create a build from ``image``.

        The Procfile and drycc.yaml come from the flag values when given,
        otherwise from ``./Procfile`` and ``./drycc.yaml`` if present.
        """
        c, app_id = self.load_app(app_id)
        procfile = procfile or _read_local(PROCFILE) or ""
        dryccfile = dryccfile or _read_local(DRYCCFILE) or ""
        procfile_map = parse_procfile(procfile) if procfile else {}
        dryccfile_map = _parse_dryccfile(dryccfile) if dryccfile else {}

        previous = builds_api.latest(c, app_id)
        dropped = previous is not None and (
            (previous.procfile and not procfile_map) or (previous.dryccfile and not dryccfile_map)
        )
        if dropped and confirm != "yes":
            confirm = self.confirm_prompt(
                " !    WARNING: Potentially Build Create Action\n"
                " !    The Procfile or drycc file is empty, not last time\n"
                " !    To proceed, type \"yes\" !\n\n> "
            )
            if confirm != "yes":
                raise CancelledError("cancel the build create action")

        self.write("Creating build... ")
        with self.progress():
            builds_api.new(c, app_id, image, stack, procfile_map, dryccfile_map)
        self.writeln("done")

    # -- releases -----------------------------------------------------------

    def releases_list(self, app_id: Optional[str] = None, limit: Optional[int] = None) -> None:
        c, app_id = self.load_app(app_id)
        releases, count = releases_api.list_releases(c, app_id, limit)
        self.write(f"=== {app_id} Releases{limit_count(len(releases), count)}")
        for release in releases:
            self.writeln(f"v{release.version}\t{format_time(release.created)}\t{release.summary}")

    def releases_info(self, app_id: Optional[str] = None, version: str = "") -> None:
        c, app_id = self.load_app(app_id)
        if version:
            number = parse_version(version)
        else:
            latest, _ = releases_api.list_releases(c, app_id, limit=1)
            if not latest:
                raise DryccError(f"no release found in {app_id} app")
            number = latest[0].version
        release = releases_api.get(c, app_id, number)

        self.writeln(f"=== {app_id} Release v{number}")
        pairs = []
        if release.build:
            pairs.append(("build", release.build))
        pairs += [
            ("config", release.config),
            ("owner", release.owner),
            ("created", format_time(release.created)),
            ("state", release.state),
            ("summary", release.summary),
            ("updated", format_time(release.updated)),
            ("uuid", release.uuid),
        ]
        self.print_kv(pairs)

    def releases_deploy(self, app_id: Optional[str] = None, ptypes: Optional[List[str]] = None, force: bool = False) -> None:
        c, app_id = self.load_app(app_id)
        self.write("Deploying ptypes... ")
        with self.progress():
            releases_api.deploy(c, app_id, list(ptypes or []), force)
        self.writeln("done")

    def releases_rollback(
        self, app_id: Optional[str] = None, version: str = "", ptypes: Optional[List[str]] = None
    ) -> None:
        c, app_id = self.load_app(app_id)
        number = parse_version(version) if version else None
        if number is None:
            self.write("Rolling back one release... ")
        else:
            self.write(f"Rolling back to v{number}... ")
        with self.progress():
            new_version = releases_api.rollback(c, app_id, number, list(ptypes or []))
        self.writeln(f"done, v{new_version}")
