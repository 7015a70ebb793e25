"""apps and git commands."""

from __future__ import annotations

import click

from ..git import DEFAULT_REMOTE
from ._common import PASSTHROUGH, app_option, limit_option


def register_apps_commands(main: click.Group) -> None:
    """Register the apps and git command groups."""

    @main.group()
    def apps():
        """Manage applications used to provide services."""

    @apps.command("create")
    @click.argument("app_id", required=False, default="")
    @click.option("-r", "--remote", default=DEFAULT_REMOTE, help="Name of remote to create.")
    @click.option("--no-remote", is_flag=True, help="Do not create a git remote.")
    @click.pass_obj
    def apps_create(cmdr, app_id, remote, no_remote):
        """Create a new application."""
        cmdr.apps_create(app_id, remote, no_remote)

    @apps.command("list")
    @limit_option
    @click.pass_obj
    def apps_list(cmdr, limit):
        """List accessible applications."""
        cmdr.apps_list(limit)

    @apps.command("info")
    @app_option
    @click.pass_obj
    def apps_info(cmdr, app_id):
        """View info about an application."""
        cmdr.apps_info(app_id)

    @apps.command("open")
    @app_option
    @click.pass_obj
    def apps_open(cmdr, app_id):
        """Open the application in a browser."""
        cmdr.apps_open(app_id)

    @apps.command("logs")
    @app_option
    @click.option("-n", "--lines", type=int, default=300, help="The number of lines to display.")
    @click.option("-f", "--follow", is_flag=True, help="Stream new log lines as they arrive.")
    @click.option("--timeout", type=int, default=300, help="Seconds to keep following.")
    @click.pass_obj
    def apps_logs(cmdr, app_id, lines, follow, timeout):
        """View aggregated application logs."""
        cmdr.apps_logs(app_id, lines, follow, timeout)

    @apps.command("run", context_settings=PASSTHROUGH)
    @app_option
    @click.option("-m", "--mount", "mounts", multiple=True, help="Volume mount, VOLUME:/path.")
    @click.option("--timeout", type=int, default=3600, help="Seconds before the command is killed.")
    @click.option("--expires", type=int, default=3600, help="Seconds to keep the finished job.")
    @click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
    @click.pass_obj
    def apps_run(cmdr, app_id, mounts, timeout, expires, command):
        """Run a command in an ephemeral app container."""
        cmdr.apps_run(app_id, " ".join(command), list(mounts), timeout, expires)

    @apps.command("destroy")
    @app_option
    @click.option("--confirm", default="", help="Skip the prompt for the application name.")
    @click.pass_obj
    def apps_destroy(cmdr, app_id, confirm):
        """Destroy an application."""
        cmdr.apps_destroy(app_id, confirm)

    @apps.command("transfer")
    @click.argument("username")
    @app_option
    @click.pass_obj
    def apps_transfer(cmdr, username, app_id):
        """Transfer app ownership to another user."""
        cmdr.apps_transfer(app_id, username)

    @main.group()
    def git():
        """Manage git remotes for applications."""

    @git.command("remote")
    @app_option
    @click.option("-r", "--remote", default=DEFAULT_REMOTE, help="Name of remote to create.")
    @click.option("-f", "--force", is_flag=True, help="Overwrite a remote pointing elsewhere.")
    @click.pass_obj
    def git_remote(cmdr, app_id, remote, force):
        """Add a git remote for an app."""
        cmdr.git_remote(app_id, remote, force)

    @git.command("remove")
    @app_option
    @click.pass_obj
    def git_remove(cmdr, app_id):
        """Remove the git remotes for an app."""
        cmdr.git_remove(app_id)
