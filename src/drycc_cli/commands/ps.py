"""ps (pods) and pts (process types) commands."""

from __future__ import annotations

import time
from typing import Any, Dict, List, Mapping, Optional

from ..controller import ps as ps_api
from ..errors import CancelledError, NotFoundError
from ..parsers import parse_scales
from ..table import PADDING, render_table
from ..utils import drink_of_choice, format_time
from ._base import BaseCommand
from .config import format_probe

RESTART_WARNING = (
    " !    WARNING: Potentially Restart Action\n"
    " !    This command will restart all processes of the application ptype\n"
    " !    To proceed, type \"yes\" !\n\n> "
)


class PsMixin(BaseCommand):

    def ps_list(self, app_id: Optional[str] = None, limit: Optional[int] = None) -> None:
        c, app_id = self.load_app(app_id)
        pods, _ = ps_api.list_pods(c, app_id, limit)
        by_type: Dict[str, List[Any]] = {}
        for pod in pods:
            by_type.setdefault(pod.type, []).append(pod)

        self.writeln(f"=== {app_id} Processes")
        for ptype in sorted(by_type):
            self.writeln(f"--- {ptype}:")
            for pod in sorted(by_type[ptype], key=lambda p: p.name):
                self.writeln(f"{pod.name} {pod.state} ({pod.release})")

    def ps_describe(self, app_id: Optional[str], pod: str) -> None:
        c, app_id = self.load_app(app_id)
        states = ps_api.describe_pod(c, app_id, pod)
        self._render_containers(states)
        self._render_events(ps_api.list_events(c, app_id, pod=pod))

    def ps_exec(self, app_id: Optional[str], pod: str, command: List[str], tty: bool = False) -> None:
        """Run ``command`` in ``pod`` and print what it wrote."""
        c, app_id = self.load_app(app_id)
        result = ps_api.exec_pod(c, app_id, pod, command, tty=tty)
        output = result.get("output", "") if isinstance(result, dict) else str(result)
        if output:
            self.write(output)

    # -- pts ----------------------------------------------------------------

    def pts_list(self, app_id: Optional[str] = None, limit: Optional[int] = None) -> None:
        c, app_id = self.load_app(app_id)
        ptypes, _ = ps_api.list_ptypes(c, app_id, limit)
        if not ptypes:
            self.writeln(f"No processes found in {app_id} app.")
            return
        rows = [
            [pt.name, pt.release, pt.ready, pt.up_to_date, pt.available, format_time(pt.started)]
            for pt in sorted(ptypes, key=lambda p: p.name)
        ]
        self.print_table(["NAME", "RELEASE", "READY", "UP-TO-DATE", "AVAILABLE", "STARTED"], rows)

    def pts_describe(self, app_id: Optional[str], ptype: str) -> None:
        c, app_id = self.load_app(app_id)
        self._render_containers(ps_api.describe_ptype(c, app_id, ptype))
        self._render_events(ps_api.list_events(c, app_id, ptype=ptype))

    def pts_scale(self, app_id: Optional[str], targets: List[str]) -> None:
        c, app_id = self.load_app(app_id)
        counts = parse_scales(targets)
        self.writeln(f"Scaling process types... but first, {drink_of_choice()}!")
        start = time.time()
        try:
            with self.progress():
                ps_api.scale(c, app_id, counts)
        except NotFoundError as exc:
            raise NotFoundError(
                f"Could not find process type {','.join(counts)} in app {app_id}", body=exc.body
            ) from exc
        self.writeln(f"done in {self.elapsed(start)}s")

    def pts_restart(self, app_id: Optional[str] = None, ptypes: Optional[List[str]] = None, confirm: str = "") -> None:
        c, app_id = self.load_app(app_id)
        ptypes = list(ptypes or [])
        if not ptypes and confirm != "yes":
            if self.confirm_prompt(RESTART_WARNING) != "yes":
                raise CancelledError("cancel the restart action")

        self.writeln(f"Restarting process types... but first, {drink_of_choice()}!")
        start = time.time()
        try:
            with self.progress():
                ps_api.restart(c, app_id, ptypes)
        except NotFoundError as exc:
            raise NotFoundError(
                f"Could not find process type {','.join(ptypes)} in app {app_id}", body=exc.body
            ) from exc
        self.writeln(f"done in {self.elapsed(start)}s")

    def pts_start(self, app_id: Optional[str], ptypes: List[str]) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Starting {','.join(ptypes)} on {app_id}... ")
        with self.progress():
            ps_api.start(c, app_id, ptypes)
        self.writeln("done")

    def pts_stop(self, app_id: Optional[str], ptypes: List[str]) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Stopping {','.join(ptypes)} on {app_id}... ")
        with self.progress():
            ps_api.stop(c, app_id, ptypes)
        self.writeln("done")

    def pts_clean(self, app_id: Optional[str], ptypes: List[str]) -> None:
        c, app_id = self.load_app(app_id)
        self.writeln(f"Cleaning process types... but first, {drink_of_choice()}!")
        start = time.time()
        with self.progress():
            ps_api.clean(c, app_id, ptypes)
        self.writeln(f"done in {self.elapsed(start)}s")

    # -- rendering ----------------------------------------------------------

    def _render_containers(self, states: List[Mapping[str, Any]]) -> None:
        lines = []
        for state in states:
            lines.append(("Container", state.get("container")))
            lines.append(("Image", state.get("image")))
            for label, key in (("Command", "command"), ("Args", "args")):
                if state.get(key):
                    lines.append((label, None))
                    lines.extend(("", f"- {item}") for item in state[key])
            if state.get("limits"):
                lines.append(("Limits", None))
                lines.extend(("", f"{name} {value}") for name, value in sorted(state["limits"].items()))
            if state.get("volumeMounts"):
                lines.append(("Mounts", None))
                lines.extend(("", f"{m.get('mountPath')} from {m.get('name')}") for m in state["volumeMounts"])
            for label, key in (("Startup", "startupProbe"), ("Liveness", "livenessProbe"), ("Readiness", "readinessProbe")):
                probe = format_probe("", "", state.get(key) or {}).strip()
                if probe:
                    lines.append((label, probe))
        if not lines:
            return
        column = max(len(key) for key, _ in lines) + 1 + PADDING
        for key, value in lines:
            label = f"{key}:" if key else ""
            if value is None:
                self.writeln(label)
            else:
                self.writeln(f"{label.ljust(column)}{value}".rstrip())

    def _render_events(self, events: List[Any]) -> None:
        if not events:
            return
        self.writeln("Events:")
        rows = [[f"  {ev.reason}", ev.message, format_time(ev.created)] for ev in events]
        self.write(render_table(["  REASON", "MESSAGE", "CREATED"], rows))
