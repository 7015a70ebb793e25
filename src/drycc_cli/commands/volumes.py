"""volumes and resources commands."""

from __future__ import annotations

import base64
import logging
import os
import shutil
import subprocess
from typing import Any, Dict, List, Optional

import yaml

from ..controller import resources as resources_api
from ..controller import volumes as volumes_api
from ..errors import CancelledError, DryccError, ValidationError
from ..parsers import check_volume_size, parse_params, parse_volume_paths
from ..table import Section, sort_keys
from ..utils import format_time
from ._base import BaseCommand

logger = logging.getLogger(__name__)

VOLUMES_CLIENT = "drycc-volumes-client"
CLIENT_VERBS = ("ls", "cp", "rm")
RESTART_NOTICE = "The pods should be restart, please check the pods up or not.\n"


def run_volumes_client(args: List[str], env: Dict[str, str]) -> int:
    """Run the external volume file helper; returns its exit status."""
    path = shutil.which(VOLUMES_CLIENT)
    if path is None:
        raise DryccError(f"{VOLUMES_CLIENT} is not installed or not on PATH")
    logger.debug("%s %s", path, " ".join(args))
    return subprocess.run([path] + args, env=env, check=False).returncode


def volume_parameters(
    vtype: str,
    nfs_server: str = "",
    nfs_path: str = "",
    oss_server: str = "",
    oss_bucket: str = "",
    oss_access_key: str = "",
    oss_secret_key: str = "",
    oss_path_style: bool = False,
) -> Dict[str, Any]:
    """Backend parameters for ``volumes:create --type``."""
    if vtype == "nfs":
        if not (nfs_server and nfs_path):
            raise ValidationError("--nfs-server and --nfs-path are required for nfs volumes")
        return {"nfs": {"server": nfs_server, "path": nfs_path}}
    if vtype == "oss":
        if not (oss_server and oss_bucket and oss_access_key and oss_secret_key):
            raise ValidationError(
                "--oss-server, --oss-bucket, --oss-access-key and --oss-secret-key are required for oss volumes"
            )
        return {
            "oss": {
                "server": oss_server,
                "bucket": oss_bucket,
                "access_key": oss_access_key,
                "secret_key": oss_secret_key,
                "path_style": oss_path_style,
            }
        }
    return {}


def _dump(value: Dict[str, Any]) -> str:
    return yaml.safe_dump(value, default_flow_style=False, sort_keys=True).rstrip("\n") if value else ""


def _resource_options(values: str, params: List[str]) -> Dict[str, Any]:
    options: Dict[str, Any] = {}
    if values:
        with open(values, encoding="utf-8") as fh:
            raw = fh.read()
        if not raw:
            raise ValidationError(f"{values} is empty", values)
        try:
            yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ValidationError(f"could not parse {values}: {exc}", values) from exc
        options["rawValues"] = base64.b64encode(raw.encode("utf-8")).decode("ascii")
    options.update(parse_params(params))
    return options


class VolumesMixin(BaseCommand):

    volumes_runner = staticmethod(run_volumes_client)

    # -- volumes ------------------------------------------------------------

    def volumes_create(
        self,
        app_id: Optional[str],
        name: str,
        size: str,
        vtype: str = "",
        parameters: Optional[Dict[str, Any]] = None,
    ) -> None:
        c, app_id = self.load_app(app_id)
        check_volume_size(size)
        self.write(f"Creating {name} to {app_id}... ")
        with self.progress():
            volumes_api.create(c, app_id, name, size, vtype, parameters)
        self.writeln("done")

    def volumes_expand(self, app_id: Optional[str], name: str, size: str) -> None:
        c, app_id = self.load_app(app_id)
        check_volume_size(size)
        self.write(f"Expand {name} to {app_id}... ")
        with self.progress():
            volumes_api.expand(c, app_id, name, size)
        self.writeln("done")

    def volumes_list(self, app_id: Optional[str] = None, limit: Optional[int] = None) -> None:
        c, app_id = self.load_app(app_id)
        volumes, count = volumes_api.list_volumes(c, app_id, limit)
        if count == 0:
            self.writeln("Could not find any volume.")
            return
        rows = []
        for vol in volumes:
            if not vol.path:
                rows.append([vol.name, vol.owner, vol.type, "", "", vol.size])
            for ptype in sort_keys(vol.path):
                rows.append([vol.name, vol.owner, vol.type, ptype, vol.path[ptype], vol.size])
        self.print_table(["NAME", "OWNER", "TYPE", "PTYPE", "PATH", "SIZE"], rows)

    def volumes_info(self, app_id: Optional[str], name: str) -> None:
        c, app_id = self.load_app(app_id)
        vol = volumes_api.get(c, app_id, name)
        view = Section()
        view.add("UUID", vol.uuid).add("Name", vol.name).add("Owner", vol.owner).add("Type", vol.type)
        view.add("Size", vol.size)
        for label, block in (("Path", vol.path), ("Parameters", vol.parameters)):
            view.add(label)
            for line in _dump(block).splitlines():
                view.add("", line, level=1)
        view.add("Created", format_time(vol.created)).add("Updated", format_time(vol.updated))
        self.write(view.render())

    def volumes_delete(self, app_id: Optional[str], name: str) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Deleting {name} from {app_id}... ")
        with self.progress():
            volumes_api.delete(c, app_id, name)
        self.writeln("done")

    def volumes_mount(self, app_id: Optional[str], name: str, items: List[str]) -> None:
        c, app_id = self.load_app(app_id)
        paths = parse_volume_paths(items)
        self.write("Mounting volume... ")
        with self.progress():
            volumes_api.mount(c, app_id, name, dict(paths))
        self.writeln("done")
        self.write(RESTART_NOTICE)

    def volumes_unmount(self, app_id: Optional[str], name: str, ptypes: List[str]) -> None:
        c, app_id = self.load_app(app_id)
        self.write("Unmounting volume... ")
        with self.progress():
            volumes_api.mount(c, app_id, name, {ptype: None for ptype in ptypes})
        self.writeln("done")
        self.write(RESTART_NOTICE)

    def volumes_client(self, app_id: Optional[str], verb: str, args: List[str]) -> None:
        """Hand ``ls``/``cp``/``rm`` to the external volume file helper."""
        if verb not in CLIENT_VERBS:
            raise ValidationError(f"unknown command {verb}", verb)
        profile = self.load_profile()
        _, app_id = self.load_app(app_id)
        env = dict(os.environ)
        env.update(
            {
                "DRYCC_CONTROLLER": profile.controller,
                "DRYCC_TOKEN": profile.token,
                "DRYCC_APP": app_id,
                "DRYCC_SSL_VERIFY": "true" if profile.ssl_verify else "false",
            }
        )
        status = self.volumes_runner([verb] + list(args), env)
        if status != 0:
            raise DryccError(f"{VOLUMES_CLIENT} {verb} exited with status {status}")

    # -- resources ----------------------------------------------------------

    def resources_services(self, limit: Optional[int] = None) -> None:
        c = self.client()
        services, count = resources_api.services(c, limit)
        if count == 0:
            self.writeln("Could not find any services")
            return
        self.print_table(
            ["ID", "NAME", "UPDATEABLE"], [[s.id, s.name, str(s.updateable).lower()] for s in services]
        )

    def resources_plans(self, service: str, limit: Optional[int] = None) -> None:
        c = self.client()
        plans, count = resources_api.plans(c, service, limit)
        if count == 0:
            self.writeln(f"Could not find any plans in {service} service.")
            return
        self.print_table(["ID", "NAME", "DESCRIPTION"], [[p.id, p.name, p.description] for p in plans])

    def resources_create(
        self, app_id: Optional[str], plan: str, name: str, params: Optional[List[str]] = None, values: str = ""
    ) -> None:
        """Provision ``plan`` (``service:plan``) as ``name``."""
        c, app_id = self.load_app(app_id)
        if ":" not in plan:
            raise ValidationError(f"{plan} does not match the pattern 'service:plan', ex: redis:standard-128", plan)
        options = _resource_options(values, list(params or []))
        self.write(f"Creating {name} to {app_id}... ")
        with self.progress():
            resources_api.create(c, app_id, name, plan, options)
        self.writeln("done")

    def resources_list(self, app_id: Optional[str] = None, limit: Optional[int] = None) -> None:
        c, app_id = self.load_app(app_id)
        resources, count = resources_api.list_resources(c, app_id, limit)
        if count == 0:
            self.writeln(f"No resources found in {app_id} app.")
            return
        rows = [[r.uuid, r.name, r.owner, r.plan, format_time(r.updated)] for r in resources]
        self.print_table(["UUID", "NAME", "OWNER", "PLAN", "UPDATED"], rows)

    def resources_describe(self, app_id: Optional[str], name: str) -> None:
        c, app_id = self.load_app(app_id)
        res = resources_api.get(c, app_id, name)
        view = Section()
        view.add("App", app_id).add("UUID", res.uuid).add("Name", res.name).add("Plan", res.plan)
        view.add("Owner", res.owner).add("Status", res.status).add("Binding", res.binding)
        for label, block in (("Data", res.data), ("Options", res.options)):
            view.add(label)
            for key in sort_keys(block):
                view.add(key, block[key], level=1)
        view.add("Message", res.message)
        view.add("Created", format_time(res.created)).add("Updated", format_time(res.updated))
        self.write(view.render())

    def resources_update(
        self, app_id: Optional[str], name: str, plan: str = "", params: Optional[List[str]] = None, values: str = ""
    ) -> None:
        c, app_id = self.load_app(app_id)
        options = _resource_options(values, list(params or []))
        self.write(f"Updating {name} to {app_id}... ")
        with self.progress():
            resources_api.update(c, app_id, name, plan, options)
        self.writeln("done")

    def resources_destroy(self, app_id: Optional[str], name: str, confirm: str = "") -> None:
        c, app_id = self.load_app(app_id)
        if not confirm:
            confirm = self.confirm_prompt(
                " !    WARNING: Potentially Destructive Action\n"
                f" !    This command will destroy the resource: {name}\n"
                f" !    To proceed, type \"{name}\" or re-run this command with --confirm={name}\n\n> "
            )
        if confirm != name:
            raise CancelledError(f"resource {name} does not match confirm {confirm}, aborting")
        self.writeln(f"Destroying {name}...")
        with self.progress():
            resources_api.delete(c, app_id, name)
        self.writeln("done")

    def resources_bind(self, app_id: Optional[str], name: str) -> None:
        c, app_id = self.load_app(app_id)
        self.write("Binding resource... ")
        with self.progress():
            resources_api.bind(c, app_id, name)
        self.writeln("done")

    def resources_unbind(self, app_id: Optional[str], name: str) -> None:
        c, app_id = self.load_app(app_id)
        self.write("Unbinding resource... ")
        with self.progress():
            resources_api.unbind(c, app_id, name)
        self.writeln("done")
