"""config, healthchecks, limits, timeouts, registry and tags commands.

All of these read and write the app's config resource; the controller
merges partial bodies, and a ``None`` value removes the key.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Mapping, Optional

from ..client import Client
from ..controller import appsettings as settings_api
from ..controller import config as config_api
from ..controller import limits as limits_api
from ..controller.models import LimitPlan
from ..errors import CancelledError, DryccError, ValidationError
from ..parsers import (
    parse_headers,
    parse_key_values,
    parse_limits,
    parse_pairs,
    parse_ssh_private_key,
    parse_timeouts,
)
from ..table import sort_keys
from ..utils import format_time
from ._base import BaseCommand

logger = logging.getLogger(__name__)

HEALTHCHECK_DEPRECATION = (
    "Hey there! We've noticed that you're using 'drycc config:set HEALTHCHECK_URL'\n"
    "to set up healthchecks. This functionality has been deprecated. In the future, please use\n"
    "'drycc healthchecks' to set up application health checks. Thanks!"
)
CONFIG_WARNING = (
    " !    WARNING: Potentially Config Action\n"
    " !    This command will deploy all processes of the application\n"
    " !    To proceed, type \"yes\" !\n\n> "
)
TAG_EXAMPLE = "rack=1 evironment=production"

PROBE_KINDS = {
    "startup": "startupProbe",
    "liveness": "livenessProbe",
    "readiness": "readinessProbe",
}
PROBE_TYPES = ("httpGet", "exec", "tcpSocket")


def probe_kind(kind: str) -> str:
    """``liveness`` or ``livenessProbe`` -> ``livenessProbe``."""
    if kind in PROBE_KINDS.values():
        return kind
    if kind in PROBE_KINDS:
        return PROBE_KINDS[kind]
    raise ValidationError(f"unknown healthcheck type: {kind}", kind)


def format_probe(ptype: str, kind: str, probe: Mapping[str, Any]) -> str:
    """One-line summary of a container probe, or ``""`` when it has no handler."""
    params = (
        f"delay={probe.get('initialDelaySeconds', 0)}s timeout={probe.get('timeoutSeconds', 0)}s "
        f"period={probe.get('periodSeconds', 0)}s #success={probe.get('successThreshold', 0)} "
        f"#failure={probe.get('failureThreshold', 0)}"
    )
    if probe.get("exec"):
        command = " ".join(str(c) for c in probe["exec"].get("command", []))
        return f"{kind} {ptype} exec [{command}] {params}"
    if probe.get("tcpSocket"):
        return f"{kind} {ptype} tcp-socket port={probe['tcpSocket'].get('port')} {params}"
    if probe.get("httpGet"):
        http = probe["httpGet"]
        headers = " ".join(f"{h.get('name')}:{h.get('value')}" for h in http.get("httpHeaders") or [])
        return (
            f"{kind} {ptype} http-get headers=[{headers}] path={http.get('path', '/')} "
            f"port={http.get('port', 0)} {params}"
        )
    return ""


def build_probe(
    probe_type: str,
    args: List[str],
    path: str = "/",
    headers: Optional[List[str]] = None,
    initial_delay: int = 0,
    timeout: int = 1,
    period: int = 10,
    success_threshold: int = 1,
    failure_threshold: int = 3,
) -> Dict[str, Any]:
    """Container probe body for ``healthchecks:set``.

    ``args`` holds the port for ``httpGet``/``tcpSocket`` and the command
    for ``exec``.
    """
    probe: Dict[str, Any] = {
        "initialDelaySeconds": initial_delay,
        "timeoutSeconds": timeout,
        "periodSeconds": period,
        "successThreshold": success_threshold,
        "failureThreshold": failure_threshold,
    }
    if probe_type == "exec":
        if not args:
            raise ValidationError("exec probes need a command")
        probe["exec"] = {"command": list(args)}
        return probe
    if probe_type not in PROBE_TYPES:
        raise ValidationError(f"unknown probe type: {probe_type}", probe_type)
    if len(args) != 1 or not (args[0].isascii() and args[0].isdigit()):
        raise ValidationError(f"{probe_type} probes need a single port number", " ".join(args))
    port = int(args[0])
    if probe_type == "tcpSocket":
        probe["tcpSocket"] = {"port": port}
    else:
        probe["httpGet"] = {"path": path, "port": port, "httpHeaders": parse_headers(headers or [])}
    return probe


def format_env(values: Mapping[str, Any]) -> str:
    return "".join(f"{key}={values[key]}\n" for key in sort_keys(values))


def _gpu(features: Mapping[str, Any]) -> str:
    gpu = features.get("gpu") or {}
    if not isinstance(gpu, dict):
        return str(gpu)
    memory = gpu.get("memory") or {}
    size = memory.get("size", "") if isinstance(memory, dict) else memory
    return f"{gpu.get('name', '')} {size}".strip()


class ConfigMixin(BaseCommand):

    def _confirm_config(self, c: Client, app_id: str, ptype: str, confirm: str, from_tty: bool = False) -> None:
        """Ask before an app-wide change that will redeploy every process."""
        if ptype or confirm == "yes":
            return
        autodeploy = settings_api.get(c, app_id).autodeploy
        if autodeploy is False:
            return
        if from_tty:
            self.write(CONFIG_WARNING)
            answer = _read_tty()
        else:
            answer = self.confirm_prompt(CONFIG_WARNING)
        if answer != "yes":
            raise CancelledError("cancel the config action")

    def config_list(self, app_id: Optional[str] = None, ptype: str = "") -> None:
        c, app_id = self.load_app(app_id)
        self._render_config(config_api.get(c, app_id).model_dump(), ptype)

    def _render_config(self, config: Mapping[str, Any], ptype: str = "") -> None:
        rows = []
        values = config.get("values") or {}
        for key in sort_keys(values):
            rows.append(["N/A", key, values[key]])
        typed = config.get("typed_values") or {}
        for name in sort_keys(typed):
            if ptype and ptype != name:
                continue
            for key in sort_keys(typed[name] or {}):
                rows.append([name, key, typed[name][key]])
        self.print_table(["PTYPE", "NAME", "VALUE"], rows)

    def _set_config(self, c: Client, app_id: str, ptype: str, values: Dict[str, Any]) -> None:
        body = {"typed_values": {ptype: values}} if ptype else {"values": values}
        with self.progress():
            result = config_api.set_config(c, app_id, body)
        release = result.values.get("WORKFLOW_RELEASE")
        self.write(f"done, {release}\n\n" if release else "done\n\n")
        self._render_config(result.model_dump(), ptype)

    def config_set(self, app_id: Optional[str], items: List[str], ptype: str = "", confirm: str = "") -> None:
        c, app_id = self.load_app(app_id)
        self._confirm_config(c, app_id, ptype, confirm)
        values: Dict[str, Any] = dict(parse_key_values(items))
        if "SSH_KEY" in values:
            values["SSH_KEY"] = parse_ssh_private_key(values["SSH_KEY"])
        if any("HEALTHCHECK_" in key for key in values):
            self.writeln(HEALTHCHECK_DEPRECATION)
        self.write("Creating config... ")
        self._set_config(c, app_id, ptype, values)

    def config_unset(self, app_id: Optional[str], keys: List[str], ptype: str = "", confirm: str = "") -> None:
        c, app_id = self.load_app(app_id)
        self._confirm_config(c, app_id, ptype, confirm)
        self.write("Removing config... ")
        self._set_config(c, app_id, ptype, {key: None for key in keys})

    def config_pull(
        self,
        app_id: Optional[str] = None,
        ptype: str = "",
        filename: str = ".env",
        interactive: bool = False,
        overwrite: bool = False,
    ) -> None:
        """Write the app's env to ``filename``; print it instead when stdout is piped."""
        c, app_id = self.load_app(app_id)
        config = config_api.get(c, app_id)
        values: Dict[str, Any] = dict(config.typed_values.get(ptype) or {}) if ptype else dict(config.values)

        if not _isatty(self.w_out):
            self.write(format_env(values))
            return
        if not overwrite and os.path.exists(filename):
            raise DryccError(f"{filename} already exists, pass -o to overwrite")

        if interactive:
            with open(filename, encoding="utf-8") as fh:
                local: Dict[str, Any] = dict(parse_key_values(line for line in fh.read().splitlines() if line))
            for key, value in values.items():
                if key not in local:
                    local[key] = value
                elif str(local[key]) != str(value):
                    answer = self.confirm_prompt(f"{key}: overwrite {local[key]} with {value}? (y/N) ")
                    if answer.lower() == "y":
                        local[key] = value
            values = local

        with open(filename, "w", encoding="utf-8") as fh:
            fh.write(format_env(values))

    def config_push(
        self, app_id: Optional[str] = None, ptype: str = "", filename: str = ".env", confirm: str = ""
    ) -> None:
        """Send ``KEY=value`` lines from piped stdin, else from ``filename``."""
        c, app_id = self.load_app(app_id)
        if not _isatty(self.w_in):
            self._confirm_config(c, app_id, ptype, confirm, from_tty=True)
            contents = self.w_in.read()
        else:
            self._confirm_config(c, app_id, ptype, confirm)
            with open(filename, encoding="utf-8") as fh:
                contents = fh.read()
        lines = [line.strip("\r") for line in contents.split("\n")]
        self.config_set(app_id, [line for line in lines if line], ptype=ptype, confirm="yes")

    # -- healthchecks -------------------------------------------------------

    def healthchecks_list(self, app_id: Optional[str] = None, ptype: str = "") -> None:
        c, app_id = self.load_app(app_id)
        self._render_healthchecks(config_api.get(c, app_id).model_dump(by_alias=True), ptype)

    def _render_healthchecks(self, config: Mapping[str, Any], ptype: str = "") -> None:
        checks = config.get("healthcheck") or {}
        ptypes = [ptype] if ptype else sort_keys(checks)
        probes = []
        for name in ptypes:
            for kind in PROBE_KINDS.values():
                probe = (checks.get(name) or {}).get(kind)
                line = format_probe(name, kind, probe) if probe else ""
                if line:
                    probes.append(line)
        if not probes:
            self.writeln("No health checks configured.")
            return
        self.print_kv(
            [
                ("App", config.get("app")),
                ("UUID", config.get("uuid")),
                ("Owner", config.get("owner")),
                ("Created", format_time(config.get("created"))),
                ("Updated", format_time(config.get("updated"))),
                ("Healthchecks", None),
            ]
        )
        for line in probes:
            self.writeln(f"    {line}")

    def healthchecks_set(self, app_id: Optional[str], kind: str, probe: Dict[str, Any], ptype: str = "web") -> None:
        c, app_id = self.load_app(app_id)
        kind = probe_kind(kind)
        self.write(f"Applying {kind} healthcheck... ")
        with self.progress():
            result = config_api.set_config(c, app_id, {"healthcheck": {ptype: {kind: probe}}})
        self.write("done\n\n")
        self._render_healthchecks(result.model_dump(by_alias=True), ptype)

    def healthchecks_unset(self, app_id: Optional[str], kinds: List[str], ptype: str = "web") -> None:
        c, app_id = self.load_app(app_id)
        removals = {probe_kind(kind): None for kind in kinds}
        self.write("Removing healthchecks... ")
        with self.progress():
            result = config_api.set_config(c, app_id, {"healthcheck": {ptype: removals}})
        self.write("done\n\n")
        self._render_healthchecks(result.model_dump(by_alias=True), ptype)

    # -- limits -------------------------------------------------------------

    def limits_list(self, app_id: Optional[str] = None) -> None:
        c, app_id = self.load_app(app_id)
        self._render_limits(c, app_id, config_api.get(c, app_id).limits)

    def _render_limits(self, c: Client, app_id: str, limits: Mapping[str, Any]) -> None:
        if not limits:
            self.writeln(f"No limits found in {app_id} app.")
            return
        plans: Dict[str, LimitPlan] = {}
        rows = []
        for ptype in sort_keys(limits):
            plan_id = str(limits[ptype])
            if plan_id not in plans:
                plans[plan_id] = limits_api.get_plan(c, plan_id)
            plan = plans[plan_id]
            spec_features = plan.spec.features if plan.spec else {}
            gpu = _gpu(spec_features)
            count = plan.features.get("gpu")
            features = f"{gpu} * {count}" if gpu and count else gpu
            rows.append([ptype, plan_id, plan.cpu, f"{plan.memory} GiB", features])
        self.print_table(["PTYPE", "PLAN", "VCPUS", "MEMORY", "FEATURES"], rows)

    def limits_set(self, app_id: Optional[str], items: List[str]) -> None:
        c, app_id = self.load_app(app_id)
        limits = parse_limits(items)
        self.write("Applying limits... ")
        with self.progress():
            result = config_api.set_config(c, app_id, {"limits": limits})
        self.write("done\n\n")
        self._render_limits(c, app_id, result.limits)

    def limits_unset(self, app_id: Optional[str], ptypes: List[str]) -> None:
        c, app_id = self.load_app(app_id)
        self.write("Applying limits... ")
        with self.progress():
            result = config_api.set_config(c, app_id, {"limits": {p: None for p in ptypes}})
        self.write("done\n\n")
        self._render_limits(c, app_id, result.limits)

    def limits_specs(self, keywords: str = "", limit: Optional[int] = None) -> None:
        c = self.client()
        specs, count = limits_api.specs(c, keywords, limit)
        if count == 0:
            self.writeln("Could not find any limit spec.")
            return
        rows = [
            [
                spec.id,
                spec.cpu.get("name"),
                spec.cpu.get("clock"),
                spec.cpu.get("boost"),
                spec.cpu.get("cores"),
                spec.cpu.get("threads"),
                spec.features.get("network"),
                _gpu(spec.features),
            ]
            for spec in specs
        ]
        self.print_table(["ID", "CPU", "CLOCK", "BOOST", "CORES", "THREADS", "NETWORK", "FEATURES"], rows)

    def limits_plans(self, spec_id: str = "", cpu: int = 0, memory: int = 0, limit: Optional[int] = None) -> None:
        c = self.client()
        plans, count = limits_api.plans(c, spec_id, cpu, memory, limit)
        if count == 0:
            self.writeln("Could not find any limit plan.")
            return
        rows = []
        for plan in plans:
            spec = plan.spec
            rows.append(
                [
                    plan.id,
                    spec.id if spec else "",
                    spec.cpu.get("name") if spec else "",
                    plan.cpu,
                    f"{plan.memory} GiB",
                    _gpu(spec.features) if spec else "",
                ]
            )
        self.print_table(["ID", "SPEC", "CPU", "VCPUS", "MEMORY", "FEATURES"], rows)

    # -- timeouts -----------------------------------------------------------

    def timeouts_list(self, app_id: Optional[str] = None) -> None:
        c, app_id = self.load_app(app_id)
        self._render_timeouts(config_api.get(c, app_id).timeouts)

    def _render_timeouts(self, timeouts: Mapping[str, Any]) -> None:
        if not timeouts:
            self.writeln("Default (30 sec) or controlled by drycc controller.")
            return
        self.print_table(["PTYPE", "TIMEOUT"], [[key, timeouts[key]] for key in sort_keys(timeouts)])

    def timeouts_set(self, app_id: Optional[str], items: List[str]) -> None:
        c, app_id = self.load_app(app_id)
        timeouts = parse_timeouts(items)
        self.write("Applying timeouts... ")
        with self.progress():
            result = config_api.set_config(c, app_id, {"termination_grace_period": timeouts})
        self.write("done\n\n")
        self._render_timeouts(result.timeouts)

    def timeouts_unset(self, app_id: Optional[str], ptypes: List[str]) -> None:
        c, app_id = self.load_app(app_id)
        self.write("Applying timeouts... ")
        with self.progress():
            result = config_api.set_config(c, app_id, {"termination_grace_period": {p: None for p in ptypes}})
        self.write("done\n\n")
        self._render_timeouts(result.timeouts)

    # -- registry -----------------------------------------------------------

    def registry_list(self, app_id: Optional[str] = None, ptype: str = "") -> None:
        c, app_id = self.load_app(app_id)
        self._render_registry(app_id, config_api.get(c, app_id).registry, ptype)

    def _render_registry(self, app_id: str, registry: Mapping[str, Any], ptype: str = "") -> None:
        if not registry:
            self.writeln(f"No registrys found in {app_id} app.")
            return
        rows = []
        for name in [ptype] if ptype else sort_keys(registry):
            creds = registry.get(name) or {}
            if creds.get("username") is not None:
                rows.append([name, creds.get("username"), creds.get("password")])
        self.print_table(["PTYPE", "USERNAME", "PASSWORD"], rows)

    def registry_set(self, app_id: Optional[str], username: str, password: str, ptype: str = "web") -> None:
        c, app_id = self.load_app(app_id)
        self.write("Applying registry information... ")
        with self.progress():
            result = config_api.set_config(
                c, app_id, {"registry": {ptype: {"username": username, "password": password}}}
            )
        self.write("done\n\n")
        self._render_registry(app_id, result.registry, ptype)

    def registry_unset(self, app_id: Optional[str] = None, ptype: str = "web") -> None:
        c, app_id = self.load_app(app_id)
        self.write("Applying registry information... ")
        with self.progress():
            config_api.set_config(c, app_id, {"registry": {ptype: {"username": None, "password": None}}})
        self.write("done\n\n")

    # -- tags ---------------------------------------------------------------

    def tags_list(self, app_id: Optional[str] = None, ptype: str = "") -> None:
        c, app_id = self.load_app(app_id)
        self._render_tags(app_id, config_api.get(c, app_id).tags, ptype)

    def _render_tags(self, app_id: str, tags: Mapping[str, Any], ptype: str = "") -> None:
        if not tags:
            self.writeln(f"No tags found in {app_id} app.")
            return
        rows = []
        for name in [ptype] if ptype else sort_keys(tags):
            values = tags.get(name) or {}
            for key in sort_keys(values):
                rows.append([name, key, values[key]])
        self.print_table(["PTYPE", "KEY", "VALUE"], rows)

    def tags_set(self, app_id: Optional[str], items: List[str], ptype: str = "web") -> None:
        c, app_id = self.load_app(app_id)
        tags = parse_pairs(items, TAG_EXAMPLE)
        self.write("Applying tags... ")
        with self.progress():
            result = config_api.set_config(c, app_id, {"tags": {ptype: tags}})
        self.write("done\n\n")
        self._render_tags(app_id, result.tags, ptype)

    def tags_unset(self, app_id: Optional[str], keys: List[str], ptype: str = "web") -> None:
        c, app_id = self.load_app(app_id)
        self.write("Applying tags... ")
        with self.progress():
            result = config_api.set_config(c, app_id, {"tags": {ptype: {key: None for key in keys}}})
        self.write("done\n\n")
        self._render_tags(app_id, result.tags, ptype)


def _isatty(stream: Any) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def _read_tty() -> str:
    """Read a confirmation from the terminal while stdin carries data."""
    try:
        with open("/dev/tty", encoding="utf-8") as tty:
            return tty.readline().strip()
    except OSError as exc:
        logger.debug("No terminal for confirmation: %s", exc)
        return ""
