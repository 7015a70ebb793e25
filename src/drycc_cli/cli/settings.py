"""labels, toggles, autoscale, canary and tls commands."""

from __future__ import annotations

import click

from ._common import app_option

# command group -> (settings field, help text)
TOGGLE_GROUPS = {
    "autodeploy": ("autodeploy", "Manage automatic deploys of new builds."),
    "autorollback": ("autorollback", "Manage automatic rollback of failed deploys."),
    "maintenance": ("maintenance", "Manage maintenance mode of an app."),
    "routing": ("routable", "Manage routability of an app."),
}


def _register_toggle(main: click.Group, name: str, field: str, doc: str) -> None:

    @main.group(name, help=doc)
    def group():
        pass

    @group.command("info")
    @app_option
    @click.pass_obj
    def info(cmdr, app_id):
        """Show whether the setting is on."""
        cmdr.toggle_info(app_id, field)

    @group.command("enable")
    @app_option
    @click.pass_obj
    def enable(cmdr, app_id):
        """Turn the setting on."""
        cmdr.toggle_set(app_id, field, True)

    @group.command("disable")
    @app_option
    @click.pass_obj
    def disable(cmdr, app_id):
        """Turn the setting off."""
        cmdr.toggle_set(app_id, field, False)


def register_settings_commands(main: click.Group) -> None:
    """Register the per-app settings groups."""

    @main.group()
    def labels():
        """Manage labels of an app."""

    @labels.command("list")
    @app_option
    @click.pass_obj
    def labels_list(cmdr, app_id):
        """List labels."""
        cmdr.labels_list(app_id)

    @labels.command("set")
    @click.argument("items", nargs=-1, required=True)
    @app_option
    @click.pass_obj
    def labels_set(cmdr, items, app_id):
        """Set labels, key=value."""
        cmdr.labels_set(app_id, list(items))

    @labels.command("unset")
    @click.argument("keys", nargs=-1, required=True)
    @app_option
    @click.pass_obj
    def labels_unset(cmdr, keys, app_id):
        """Remove labels."""
        cmdr.labels_unset(app_id, list(keys))

    for name, (field, doc) in TOGGLE_GROUPS.items():
        _register_toggle(main, name, field, doc)

    @main.group()
    def autoscale():
        """Manage autoscale rules of process types."""

    @autoscale.command("list")
    @app_option
    @click.pass_obj
    def autoscale_list(cmdr, app_id):
        """List autoscale rules."""
        cmdr.autoscale_list(app_id)

    @autoscale.command("set")
    @click.argument("ptype")
    @app_option
    @click.option("--min", "minimum", type=int, required=True, help="Minimum replicas to keep around.")
    @click.option("--max", "maximum", type=int, required=True, help="Maximum replicas to scale up to.")
    @click.option("--cpu-percent", type=int, required=True, help="Target CPU utilization percentage.")
    @click.pass_obj
    def autoscale_set(cmdr, ptype, app_id, minimum, maximum, cpu_percent):
        """Set the autoscale rule of a process type."""
        cmdr.autoscale_set(app_id, ptype, minimum, maximum, cpu_percent)

    @autoscale.command("unset")
    @click.argument("ptype")
    @app_option
    @click.pass_obj
    def autoscale_unset(cmdr, ptype, app_id):
        """Remove the autoscale rule of a process type."""
        cmdr.autoscale_unset(app_id, ptype)

    @main.group()
    def canary():
        """Manage canary releases."""

    @canary.command("info")
    @app_option
    @click.pass_obj
    def canary_info(cmdr, app_id):
        """List process types under canary."""
        cmdr.canary_info(app_id)

    @canary.command("create")
    @click.argument("ptypes", nargs=-1, required=True)
    @app_option
    @click.pass_obj
    def canary_create(cmdr, ptypes, app_id):
        """Put process types under canary."""
        cmdr.canary_create(app_id, list(ptypes))

    @canary.command("remove")
    @click.argument("ptypes", nargs=-1, required=True)
    @app_option
    @click.pass_obj
    def canary_remove(cmdr, ptypes, app_id):
        """Take process types out of canary."""
        cmdr.canary_remove(app_id, list(ptypes))

    @canary.command("release")
    @app_option
    @click.pass_obj
    def canary_release(cmdr, app_id):
        """Promote the canary release."""
        cmdr.canary_release(app_id)

    @canary.command("rollback")
    @app_option
    @click.pass_obj
    def canary_rollback(cmdr, app_id):
        """Roll back the canary release."""
        cmdr.canary_rollback(app_id)

    @main.group()
    def tls():
        """Manage TLS settings of an app."""

    @tls.command("info")
    @app_option
    @click.pass_obj
    def tls_info(cmdr, app_id):
        """Show TLS settings."""
        cmdr.tls_info(app_id)

    @tls.group("force")
    def tls_force():
        """Enforce https-only requests."""

    @tls.group("auto")
    def tls_auto():
        """Issue certificates automatically."""

    @tls_force.command("enable")
    @app_option
    @click.pass_obj
    def tls_force_enable(cmdr, app_id):
        """Redirect plain http requests to https."""
        cmdr.tls_force(app_id, True)

    @tls_force.command("disable")
    @app_option
    @click.pass_obj
    def tls_force_disable(cmdr, app_id):
        """Accept plain http requests."""
        cmdr.tls_force(app_id, False)

    @tls_auto.command("enable")
    @app_option
    @click.pass_obj
    def tls_auto_enable(cmdr, app_id):
        """Issue certificates for app domains automatically."""
        cmdr.tls_auto(app_id, True)

    @tls_auto.command("disable")
    @app_option
    @click.pass_obj
    def tls_auto_disable(cmdr, app_id):
        """Stop issuing certificates automatically."""
        cmdr.tls_auto(app_id, False)

    @tls_auto.command("issuer")
    @app_option
    @click.option("--email", required=True, help="ACME account email.")
    @click.option("--server", required=True, help="ACME server URL.")
    @click.option("--key-id", default="", help="CA key ID.")
    @click.option("--key-secret", default="", help="CA key secret.")
    @click.pass_obj
    def tls_auto_issuer(cmdr, app_id, email, server, key_id, key_secret):
        """Set the ACME issuer used for automatic certificates."""
        cmdr.tls_auto_issuer(app_id, email, server, key_id, key_secret)
