"""volumes and resources commands."""

from __future__ import annotations

import click

from ..commands.volumes import volume_parameters
from ._common import app_option, confirm_option, limit_option


def register_volumes_commands(main: click.Group) -> None:
    """Register the volumes and resources groups."""

    @main.group()
    def volumes():
        """Manage volumes of an app."""

    @volumes.command("create")
    @click.argument("name")
    @click.argument("size")
    @app_option
    @click.option("-t", "--type", "vtype", default="", help="The volume type: csi (default), nfs or oss.")
    @click.option("--nfs-server", default="", help="Hostname or address of the nfs server.")
    @click.option("--nfs-path", default="", help="Path exported by the nfs server.")
    @click.option("--oss-server", default="", help="Endpoint of the object storage service.")
    @click.option("--oss-bucket", default="", help="Bucket name in object storage.")
    @click.option("--oss-access-key", default="", help="Access key id.")
    @click.option("--oss-secret-key", default="", help="Secret access key.")
    @click.option("--oss-path-style", is_flag=True, help="Force a path-style endpoint.")
    @click.pass_obj
    def volumes_create(
        cmdr, name, size, app_id, vtype, nfs_server, nfs_path, oss_server, oss_bucket,
        oss_access_key, oss_secret_key, oss_path_style,
    ):
        """Create a volume, size like 2G."""
        parameters = volume_parameters(
            vtype, nfs_server, nfs_path, oss_server, oss_bucket, oss_access_key, oss_secret_key, oss_path_style
        )
        cmdr.volumes_create(app_id, name, size, vtype, parameters)

    @volumes.command("expand")
    @click.argument("name")
    @click.argument("size")
    @app_option
    @click.pass_obj
    def volumes_expand(cmdr, name, size, app_id):
        """Grow a volume."""
        cmdr.volumes_expand(app_id, name, size)

    @volumes.command("list")
    @app_option
    @limit_option
    @click.pass_obj
    def volumes_list(cmdr, app_id, limit):
        """List volumes."""
        cmdr.volumes_list(app_id, limit)

    @volumes.command("info")
    @click.argument("name")
    @app_option
    @click.pass_obj
    def volumes_info(cmdr, name, app_id):
        """Show volume details."""
        cmdr.volumes_info(app_id, name)

    @volumes.command("delete")
    @click.argument("name")
    @app_option
    @click.pass_obj
    def volumes_delete(cmdr, name, app_id):
        """Delete a volume."""
        cmdr.volumes_delete(app_id, name)

    @volumes.command("mount")
    @click.argument("name")
    @click.argument("items", nargs=-1, required=True)
    @app_option
    @click.pass_obj
    def volumes_mount(cmdr, name, items, app_id):
        """Mount a volume, ptype=/path."""
        cmdr.volumes_mount(app_id, name, list(items))

    @volumes.command("unmount")
    @click.argument("name")
    @click.argument("ptypes", nargs=-1, required=True)
    @app_option
    @click.pass_obj
    def volumes_unmount(cmdr, name, ptypes, app_id):
        """Unmount a volume from process types."""
        cmdr.volumes_unmount(app_id, name, list(ptypes))

    @volumes.command("client", context_settings={"ignore_unknown_options": True})
    @click.argument("verb", type=click.Choice(["ls", "cp", "rm"]))
    @click.argument("args", nargs=-1, required=True, type=click.UNPROCESSED)
    @app_option
    @click.pass_obj
    def volumes_client(cmdr, verb, args, app_id):
        """Manage volume files, e.g. ls vol://myvolume/tmp."""
        cmdr.volumes_client(app_id, verb, list(args))

    @main.group()
    def resources():
        """Manage backing resources of an app."""

    @resources.command("services")
    @limit_option
    @click.pass_obj
    def resources_services(cmdr, limit):
        """List the resource services."""
        cmdr.resources_services(limit)

    @resources.command("plans")
    @click.argument("service")
    @limit_option
    @click.pass_obj
    def resources_plans(cmdr, service, limit):
        """List the plans of a service."""
        cmdr.resources_plans(service, limit)

    @resources.command("create")
    @click.argument("plan")
    @click.argument("name")
    @click.argument("params", nargs=-1)
    @app_option
    @click.option("--values", default="", type=click.Path(), help="YAML file of raw values.")
    @click.pass_obj
    def resources_create(cmdr, plan, name, params, app_id, values):
        """Create a resource from service:plan."""
        cmdr.resources_create(app_id, plan, name, list(params), values)

    @resources.command("list")
    @app_option
    @limit_option
    @click.pass_obj
    def resources_list(cmdr, app_id, limit):
        """List resources."""
        cmdr.resources_list(app_id, limit)

    @resources.command("describe")
    @click.argument("name")
    @app_option
    @click.pass_obj
    def resources_describe(cmdr, name, app_id):
        """Show resource details."""
        cmdr.resources_describe(app_id, name)

    @resources.command("update")
    @click.argument("name")
    @click.argument("params", nargs=-1)
    @app_option
    @click.option("--plan", default="", help="Move to this service:plan.")
    @click.option("--values", default="", type=click.Path(), help="YAML file of raw values.")
    @click.pass_obj
    def resources_update(cmdr, name, params, app_id, plan, values):
        """Change the plan or options of a resource."""
        cmdr.resources_update(app_id, name, plan, list(params), values)

    @resources.command("destroy")
    @click.argument("name")
    @app_option
    @confirm_option
    @click.pass_obj
    def resources_destroy(cmdr, name, app_id, confirm):
        """Destroy a resource."""
        cmdr.resources_destroy(app_id, name, confirm)

    @resources.command("bind")
    @click.argument("name")
    @app_option
    @click.pass_obj
    def resources_bind(cmdr, name, app_id):
        """Bind a resource to the app."""
        cmdr.resources_bind(app_id, name)

    @resources.command("unbind")
    @click.argument("name")
    @app_option
    @click.pass_obj
    def resources_unbind(cmdr, name, app_id):
        """Unbind a resource from the app."""
        cmdr.resources_unbind(app_id, name)
