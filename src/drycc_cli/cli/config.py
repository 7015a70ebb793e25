"""config, healthchecks, limits, timeouts, registry and tags commands."""

from __future__ import annotations

import click

from ..commands.config import build_probe
from ._common import app_option, confirm_option, limit_option, ptype_option


def register_config_commands(main: click.Group) -> None:
    """Register the config family groups."""

    @main.group()
    def config():
        """Manage environment variables that define app config."""

    @config.command("list")
    @app_option
    @ptype_option
    @click.pass_obj
    def config_list(cmdr, app_id, ptype):
        """List environment variables for an app."""
        cmdr.config_list(app_id, ptype)

    @config.command("set")
    @click.argument("items", nargs=-1, required=True)
    @app_option
    @ptype_option
    @confirm_option
    @click.pass_obj
    def config_set(cmdr, items, app_id, ptype, confirm):
        """Set environment variables, KEY=value."""
        cmdr.config_set(app_id, list(items), ptype, confirm)

    @config.command("unset")
    @click.argument("keys", nargs=-1, required=True)
    @app_option
    @ptype_option
    @confirm_option
    @click.pass_obj
    def config_unset(cmdr, keys, app_id, ptype, confirm):
        """Unset environment variables."""
        cmdr.config_unset(app_id, list(keys), ptype, confirm)

    @config.command("pull")
    @app_option
    @ptype_option
    @click.option("-o", "--output", "filename", default=".env", help="Write to this file.")
    @click.option("-i", "--interactive", is_flag=True, help="Prompt for each conflicting value.")
    @click.option("--overwrite", is_flag=True, help="Replace values already in the file.")
    @click.pass_obj
    def config_pull(cmdr, app_id, ptype, filename, interactive, overwrite):
        """Extract environment variables to a .env file."""
        cmdr.config_pull(app_id, ptype, filename, interactive, overwrite)

    @config.command("push")
    @app_option
    @ptype_option
    @click.option("-p", "--path", "filename", default=".env", help="Read from this file.")
    @confirm_option
    @click.pass_obj
    def config_push(cmdr, app_id, ptype, filename, confirm):
        """Set environment variables from a .env file or stdin."""
        cmdr.config_push(app_id, ptype, filename, confirm)

    @main.group()
    def healthchecks():
        """Manage container health probes."""

    @healthchecks.command("list")
    @app_option
    @ptype_option
    @click.pass_obj
    def healthchecks_list(cmdr, app_id, ptype):
        """List configured health checks."""
        cmdr.healthchecks_list(app_id, ptype)

    @healthchecks.command("set")
    @click.argument("kind")
    @click.argument("probe_type", type=click.Choice(["httpGet", "exec", "tcpSocket"]))
    @click.argument("args", nargs=-1, type=click.UNPROCESSED)
    @app_option
    @click.option("--ptype", default="web", help="The process type.")
    @click.option("--path", default="/", help="Path for httpGet probes.")
    @click.option("-H", "--headers", multiple=True, help="HTTP header for httpGet probes, 'Name: value'.")
    @click.option("--initial-delay", type=int, default=0, help="Seconds before the first probe.")
    @click.option("--timeout", type=int, default=1, help="Seconds before a probe times out.")
    @click.option("--period", type=int, default=10, help="Seconds between probes.")
    @click.option("--success-threshold", type=int, default=1, help="Successes before healthy.")
    @click.option("--failure-threshold", type=int, default=3, help="Failures before unhealthy.")
    @click.pass_obj
    def healthchecks_set(
        cmdr, kind, probe_type, args, app_id, ptype, path, headers, initial_delay, timeout,
        period, success_threshold, failure_threshold,
    ):
        """Set a startup, liveness or readiness probe."""
        probe = build_probe(
            probe_type, list(args), path, list(headers), initial_delay, timeout,
            period, success_threshold, failure_threshold,
        )
        cmdr.healthchecks_set(app_id, kind, probe, ptype)

    @healthchecks.command("unset")
    @click.argument("kinds", nargs=-1, required=True)
    @app_option
    @click.option("--ptype", default="web", help="The process type.")
    @click.pass_obj
    def healthchecks_unset(cmdr, kinds, app_id, ptype):
        """Remove health checks."""
        cmdr.healthchecks_unset(app_id, list(kinds), ptype)

    @main.group()
    def limits():
        """Manage resource plans of process types."""

    @limits.command("list")
    @app_option
    @click.pass_obj
    def limits_list(cmdr, app_id):
        """List the plans of each process type."""
        cmdr.limits_list(app_id)

    @limits.command("set")
    @click.argument("items", nargs=-1, required=True)
    @app_option
    @click.pass_obj
    def limits_set(cmdr, items, app_id):
        """Set plans, ptype=plan-id."""
        cmdr.limits_set(app_id, list(items))

    @limits.command("unset")
    @click.argument("ptypes", nargs=-1, required=True)
    @app_option
    @click.pass_obj
    def limits_unset(cmdr, ptypes, app_id):
        """Reset plans to the default."""
        cmdr.limits_unset(app_id, list(ptypes))

    @limits.command("specs")
    @click.option("-k", "--keywords", default="", help="Filter specs by keywords.")
    @limit_option
    @click.pass_obj
    def limits_specs(cmdr, keywords, limit):
        """List the available hardware specs."""
        cmdr.limits_specs(keywords, limit)

    @limits.command("plans")
    @click.option("--spec", "spec_id", default="", help="Filter by spec id.")
    @click.option("--cpu", type=int, default=0, help="Filter by vCPU count.")
    @click.option("--memory", type=int, default=0, help="Filter by memory in GiB.")
    @limit_option
    @click.pass_obj
    def limits_plans(cmdr, spec_id, cpu, memory, limit):
        """List the available plans."""
        cmdr.limits_plans(spec_id, cpu, memory, limit)

    @main.group()
    def timeouts():
        """Manage termination grace periods of process types."""

    @timeouts.command("list")
    @app_option
    @click.pass_obj
    def timeouts_list(cmdr, app_id):
        """List termination grace periods."""
        cmdr.timeouts_list(app_id)

    @timeouts.command("set")
    @click.argument("items", nargs=-1, required=True)
    @app_option
    @click.pass_obj
    def timeouts_set(cmdr, items, app_id):
        """Set grace periods, ptype=seconds."""
        cmdr.timeouts_set(app_id, list(items))

    @timeouts.command("unset")
    @click.argument("ptypes", nargs=-1, required=True)
    @app_option
    @click.pass_obj
    def timeouts_unset(cmdr, ptypes, app_id):
        """Reset grace periods to the default."""
        cmdr.timeouts_unset(app_id, list(ptypes))

    @main.group()
    def registry():
        """Manage private registry credentials."""

    @registry.command("list")
    @app_option
    @ptype_option
    @click.pass_obj
    def registry_list(cmdr, app_id, ptype):
        """List registry credentials."""
        cmdr.registry_list(app_id, ptype)

    @registry.command("set")
    @click.argument("username")
    @click.argument("password")
    @app_option
    @click.option("--ptype", default="web", help="The process type.")
    @click.pass_obj
    def registry_set(cmdr, username, password, app_id, ptype):
        """Set registry credentials for a process type."""
        cmdr.registry_set(app_id, username, password, ptype)

    @registry.command("unset")
    @app_option
    @click.option("--ptype", default="web", help="The process type.")
    @click.pass_obj
    def registry_unset(cmdr, app_id, ptype):
        """Remove registry credentials for a process type."""
        cmdr.registry_unset(app_id, ptype)

    @main.group()
    def tags():
        """Manage node selector tags."""

    @tags.command("list")
    @app_option
    @ptype_option
    @click.pass_obj
    def tags_list(cmdr, app_id, ptype):
        """List tags."""
        cmdr.tags_list(app_id, ptype)

    @tags.command("set")
    @click.argument("items", nargs=-1, required=True)
    @app_option
    @click.option("--ptype", default="web", help="The process type.")
    @click.pass_obj
    def tags_set(cmdr, items, app_id, ptype):
        """Set tags, key=value."""
        cmdr.tags_set(app_id, list(items), ptype)

    @tags.command("unset")
    @click.argument("keys", nargs=-1, required=True)
    @app_option
    @click.option("--ptype", default="web", help="The process type.")
    @click.pass_obj
    def tags_unset(cmdr, keys, app_id, ptype):
        """Remove tags."""
        cmdr.tags_unset(app_id, list(keys), ptype)
