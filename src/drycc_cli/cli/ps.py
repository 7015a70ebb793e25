"""ps and pts commands."""

from __future__ import annotations

import click

from ._common import app_option, confirm_option, limit_option


def _register_lifecycle(group: click.Group) -> None:
    """scale, restart, start and stop, shared by ``ps`` and ``pts``."""

    @group.command("scale")
    @click.argument("targets", nargs=-1, required=True)
    @app_option
    @click.pass_obj
    def scale(cmdr, targets, app_id):
        """Set replica counts, type=num."""
        cmdr.pts_scale(app_id, list(targets))

    @group.command("restart")
    @click.argument("ptypes", nargs=-1)
    @app_option
    @confirm_option
    @click.pass_obj
    def restart(cmdr, ptypes, app_id, confirm):
        """Restart process types, all of them when none is given."""
        cmdr.pts_restart(app_id, list(ptypes), confirm)

    @group.command("start")
    @click.argument("ptypes", nargs=-1, required=True)
    @app_option
    @click.pass_obj
    def start(cmdr, ptypes, app_id):
        """Start stopped process types."""
        cmdr.pts_start(app_id, list(ptypes))

    @group.command("stop")
    @click.argument("ptypes", nargs=-1, required=True)
    @app_option
    @click.pass_obj
    def stop(cmdr, ptypes, app_id):
        """Stop process types."""
        cmdr.pts_stop(app_id, list(ptypes))


def register_ps_commands(main: click.Group) -> None:
    """Register the ps and pts groups."""

    @main.group()
    def ps():
        """Manage processes inside an app container."""

    @ps.command("list")
    @app_option
    @limit_option
    @click.pass_obj
    def ps_list(cmdr, app_id, limit):
        """List application processes."""
        cmdr.ps_list(app_id, limit)

    @ps.command("describe")
    @click.argument("pod")
    @app_option
    @click.pass_obj
    def ps_describe(cmdr, pod, app_id):
        """Describe a process."""
        cmdr.ps_describe(app_id, pod)

    @ps.command("exec", context_settings={"ignore_unknown_options": True})
    @app_option
    @click.option("-t", "--tty", is_flag=True, help="Allocate a TTY.")
    @click.argument("pod")
    @click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
    @click.pass_obj
    def ps_exec(cmdr, app_id, tty, pod, command):
        """Run a command in a running process."""
        cmdr.ps_exec(app_id, pod, list(command), tty)

    _register_lifecycle(ps)

    @main.group()
    def pts():
        """Manage process types of an app."""

    @pts.command("list")
    @app_option
    @limit_option
    @click.pass_obj
    def pts_list(cmdr, app_id, limit):
        """List process types."""
        cmdr.pts_list(app_id, limit)

    @pts.command("describe")
    @click.argument("ptype")
    @app_option
    @click.pass_obj
    def pts_describe(cmdr, ptype, app_id):
        """Describe a process type."""
        cmdr.pts_describe(app_id, ptype)

    @pts.command("clean")
    @click.argument("ptypes", nargs=-1, required=True)
    @app_option
    @click.pass_obj
    def pts_clean(cmdr, ptypes, app_id):
        """Remove process types no longer in the Procfile."""
        cmdr.pts_clean(app_id, list(ptypes))

    _register_lifecycle(pts)
