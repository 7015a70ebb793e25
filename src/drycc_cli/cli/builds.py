"""builds and releases commands."""

from __future__ import annotations

import click

from ._common import app_option, confirm_option, limit_option


def register_builds_commands(main: click.Group) -> None:
    """Register the builds and releases groups."""

    @main.group()
    def builds():
        """Manage application builds."""

    @builds.command("list")
    @app_option
    @limit_option
    @click.pass_obj
    def builds_list(cmdr, app_id, limit):
        """List application builds."""
        cmdr.builds_list(app_id, limit)

    @builds.command("info")
    @app_option
    @click.pass_obj
    def builds_info(cmdr, app_id):
        """Show the latest build."""
        cmdr.builds_info(app_id)

    @builds.command("create")
    @click.argument("image")
    @app_option
    @click.option("--stack", default="container", help="The build stack.")
    @click.option("--procfile", default="", help="Procfile content; defaults to ./Procfile.")
    @click.option("--dryccfile", default="", help="drycc.yaml content; defaults to ./drycc.yaml.")
    @confirm_option
    @click.pass_obj
    def builds_create(cmdr, image, app_id, stack, procfile, dryccfile, confirm):
        """Create a build from an existing container image."""
        cmdr.builds_create(app_id, image, stack, procfile, dryccfile, confirm)

    @main.group()
    def releases():
        """Manage application releases."""

    @releases.command("list")
    @app_option
    @limit_option
    @click.pass_obj
    def releases_list(cmdr, app_id, limit):
        """List application releases."""
        cmdr.releases_list(app_id, limit)

    @releases.command("info")
    @click.argument("version", required=False, default="")
    @app_option
    @click.pass_obj
    def releases_info(cmdr, version, app_id):
        """View a release, the latest one by default."""
        cmdr.releases_info(app_id, version)

    @releases.command("deploy")
    @click.argument("ptypes", nargs=-1)
    @app_option
    @click.option("-f", "--force", is_flag=True, help="Redeploy even when nothing changed.")
    @click.pass_obj
    def releases_deploy(cmdr, ptypes, app_id, force):
        """Deploy the latest release to the given process types."""
        cmdr.releases_deploy(app_id, list(ptypes), force)

    @releases.command("rollback")
    @click.argument("version", required=False, default="")
    @app_option
    @click.option("--ptype", "ptypes", multiple=True, help="Only roll back these process types.")
    @click.pass_obj
    def releases_rollback(cmdr, version, app_id, ptypes):
        """Roll back to a previous release."""
        cmdr.releases_rollback(app_id, version, list(ptypes))
