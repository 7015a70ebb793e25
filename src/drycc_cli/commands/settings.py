"""Per-app settings: labels, toggles, autoscale, canaries and TLS."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..controller import appsettings as settings_api
from ..controller.models import AppSettings
from ..parsers import parse_pairs
from ..table import Section, sort_keys
from ..utils import format_time
from ._base import BaseCommand

LABEL_EXAMPLE = "git_repo=https://github.com/drycc/workflow team=frontend"

# field on AppSettings -> (display name, info text when on, info text when off)
TOGGLES = {
    "autodeploy": ("autodeploy", "Autodeploy is enabled.", "Autodeploy is disabled."),
    "autorollback": ("autorollback", "Autorollback is enabled.", "Autorollback is disabled."),
    "routable": ("routing", "Routing is enabled.", "Routing is disabled."),
    "maintenance": ("maintenance mode", "Maintenance mode is on.", "Maintenance mode is off."),
}


def _enabled(app_settings: AppSettings, field: str) -> bool:
    value = getattr(app_settings, field)
    # unset toggles count as enabled, except maintenance which defaults off
    if value is None:
        return field != "maintenance"
    return bool(value)


class SettingsMixin(BaseCommand):

    # -- labels -------------------------------------------------------------

    def labels_list(self, app_id: Optional[str] = None) -> None:
        c, app_id = self.load_app(app_id)
        app_settings = settings_api.get(c, app_id)
        if not app_settings.label:
            self.writeln(f"No labels found in {app_id} app.")
            return
        rows = [[app_settings.owner, key, app_settings.label[key]] for key in sort_keys(app_settings.label)]
        self.print_table(["OWNER", "KEY", "VALUE"], rows)

    def labels_set(self, app_id: Optional[str], items: List[str]) -> None:
        c, app_id = self.load_app(app_id)
        labels = parse_pairs(items, LABEL_EXAMPLE)
        self.write(f"Applying labels on {app_id}... ")
        with self.progress():
            settings_api.set_settings(c, app_id, {"label": labels})
        self.writeln("done")

    def labels_unset(self, app_id: Optional[str], keys: List[str]) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Removing labels on {app_id}... ")
        with self.progress():
            settings_api.set_settings(c, app_id, {"label": {key: None for key in keys}})
        self.writeln("done")

    # -- toggles ------------------------------------------------------------

    def toggle_info(self, app_id: Optional[str], field: str) -> None:
        """Print whether ``field`` (one of ``TOGGLES``) is on for the app."""
        c, app_id = self.load_app(app_id)
        _, on_text, off_text = TOGGLES[field]
        self.writeln(on_text if _enabled(settings_api.get(c, app_id), field) else off_text)

    def toggle_set(self, app_id: Optional[str], field: str, enabled: bool) -> None:
        c, app_id = self.load_app(app_id)
        name = TOGGLES[field][0]
        verb = "Enabling" if enabled else "Disabling"
        self.write(f"{verb} {name} for {app_id}... ")
        with self.progress():
            settings_api.set_settings(c, app_id, {field: enabled})
        self.writeln("done")

    # -- autoscale ----------------------------------------------------------

    def autoscale_list(self, app_id: Optional[str] = None) -> None:
        c, app_id = self.load_app(app_id)
        rules = {k: v for k, v in settings_api.get(c, app_id).autoscale.items() if v is not None}
        if not rules:
            self.writeln("No autoscale rules found.")
            return
        rows = [[ptype, rule.cpu_percent, rule.min, rule.max] for ptype, rule in sorted(rules.items())]
        self.print_table(["PTYPE", "PERCENT", "MIN", "MAX"], rows)

    def autoscale_set(
        self, app_id: Optional[str], ptype: str, minimum: int, maximum: int, cpu_percent: int
    ) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Applying autoscale settings for process type {ptype} on {app_id}... ")
        rule = {"min": minimum, "max": maximum, "cpu_percent": cpu_percent}
        with self.progress():
            settings_api.set_settings(c, app_id, {"autoscale": {ptype: rule}})
        self.writeln("done")

    def autoscale_unset(self, app_id: Optional[str], ptype: str) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Removing autoscale for process type {ptype} on {app_id}... ")
        with self.progress():
            settings_api.set_settings(c, app_id, {"autoscale": {ptype: None}})
        self.writeln("done")

    # -- canary -------------------------------------------------------------

    def canary_info(self, app_id: Optional[str] = None) -> None:
        c, app_id = self.load_app(app_id)
        app_settings = settings_api.get(c, app_id)
        if not app_settings.canaries:
            self.writeln(f"No canaries found in {app_id} app.")
            return
        created, updated = format_time(app_settings.created), format_time(app_settings.updated)
        rows = [[app_settings.owner, ptype, created, updated] for ptype in app_settings.canaries]
        self.print_table(["OWNER", "PTYPE", "CREATED", "UPDATED"], rows)

    def canary_create(self, app_id: Optional[str], ptypes: List[str]) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Applying canary settings for process type {','.join(ptypes)} on {app_id}... ")
        with self.progress():
            settings_api.set_settings(c, app_id, {"canaries": list(ptypes)})
        self.writeln("done")

    def canary_remove(self, app_id: Optional[str], ptypes: List[str]) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Removing canary for process type {','.join(ptypes)} on {app_id}... ")
        with self.progress():
            settings_api.canary_remove(c, app_id, list(ptypes))
        self.writeln("done")

    def canary_release(self, app_id: Optional[str] = None) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Release canary for {app_id}... ")
        with self.progress():
            settings_api.canary_release(c, app_id)
        self.writeln("done")

    def canary_rollback(self, app_id: Optional[str] = None) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Rollback canary for {app_id}... ")
        with self.progress():
            settings_api.canary_rollback(c, app_id)
        self.writeln("done")

    # -- tls ----------------------------------------------------------------

    def tls_info(self, app_id: Optional[str] = None) -> None:
        c, app_id = self.load_app(app_id)
        tls = settings_api.tls_info(c, app_id)
        view = Section()
        view.add("UUID", tls.uuid).add("Owner", tls.owner)
        view.add("CertsAuto", str(bool(tls.certs_auto_enabled)).lower())
        view.add("HTTPSEnforced", str(bool(tls.https_enforced)).lower())
        view.add("Issuer")
        if tls.issuer:
            view.add("Email", tls.issuer.get("email"), level=1)
            view.add("Server", tls.issuer.get("server"), level=1)
        view.add("Events")
        for event in tls.events:
            for label in ("name", "kind", "time", "type", "status", "message"):
                view.add(label.capitalize(), event.get(label), level=1)
            view.blank()
        self.write(view.render())

    def _tls_update(self, app_id: Optional[str], message: str, changes: Dict[str, Any]) -> None:
        c, app_id = self.load_app(app_id)
        self.write(message.format(app=app_id))
        with self.progress():
            settings_api.tls_set(c, app_id, changes)
        self.writeln("done")

    def tls_force(self, app_id: Optional[str], enabled: bool) -> None:
        verb = "Enabling" if enabled else "Disabling"
        self._tls_update(app_id, verb + " https-only requests for {app}... ", {"https_enforced": enabled})

    def tls_auto(self, app_id: Optional[str], enabled: bool) -> None:
        verb = "Enabling" if enabled else "Disabling"
        self._tls_update(app_id, verb + " certs-auto requests for {app}... ", {"certs_auto_enabled": enabled})

    def tls_auto_issuer(
        self, app_id: Optional[str], email: str, server: str, key_id: str = "", key_secret: str = ""
    ) -> None:
        issuer = {"email": email, "server": server, "key_id": key_id, "key_secret": key_secret}
        self._tls_update(app_id, "Adding issuer requests for {app}... ", {"issuer": issuer})
