"""apps:* and git:* commands."""

from __future__ import annotations

import time
from typing import List, Optional

from .. import git
from ..client import Client
from ..controller import apps as apps_api
from ..controller import appsettings as settings_api
from ..controller import domains as domains_api
from ..controller import ps as ps_api
from ..errors import CancelledError, DryccError, GitError
from ..parsers import parse_mounts
from ..table import Section, limit_count, sort_keys
from ..utils import format_time, print_log
from ._base import BaseCommand

REMOTE_CREATED = "Git remote {remote} successfully created for app {app}.\n"
REMOTES_REMOVED = "Git remotes for app {app} removed.\n"
NO_DOMAIN = "no domain assigned to {app}"


def expand_url(host: str, domain: str) -> str:
    """A bare subdomain takes the place of the controller's first host label."""
    if "." in domain:
        return domain
    parts = host.split(".")
    parts[0] = domain
    return ".".join(parts)


class AppsMixin(BaseCommand):

    def apps_create(self, app_id: str = "", remote: str = git.DEFAULT_REMOTE, no_remote: bool = False) -> None:
        c = self.client()
        self.write("Creating Application... ")
        with self.progress():
            app = apps_api.new(c, app_id)
        self.writeln(f"done, created {app.id}")

        if no_remote:
            self.writeln(
                f"If you want to add a git remote for this app later, use `drycc git:remote -a {app.id}`"
            )
            return
        try:
            git.create_remote(c.host, remote, app.id, self.git_runner)
        except GitError as exc:
            if f"remote {remote} already exists" in str(exc):
                raise GitError(
                    f"A git remote with the name {remote} already exists. To overwrite this remote run:\n"
                    f"drycc git:remote --force --remote {remote} --app {app.id}"
                ) from exc
            raise
        self.write(REMOTE_CREATED.format(remote=remote, app=app.id))

    def apps_list(self, limit: Optional[int] = None) -> None:
        c = self.client()
        apps, count = apps_api.list_apps(c, limit)
        if count == 0:
            self.writeln("No apps found.")
            return
        self.write(f"=== Apps{limit_count(len(apps), count)}")
        for app in apps:
            self.writeln(app.id)

    def app_url(self, c: Client, app_id: str) -> str:
        """First domain of the app, expanded against the controller host."""
        domains, _ = domains_api.list_domains(c, app_id, limit=1)
        if not domains:
            return ""
        return expand_url(c.host, domains[0].domain)

    def apps_info(self, app_id: Optional[str] = None) -> None:
        c, app_id = self.load_app(app_id)
        app = apps_api.get(c, app_id)
        url = self.app_url(c, app_id)

        view = Section()
        view.add("App", app.id).add("URL", url).add("UUID", app.uuid).add("Owner", app.owner)
        view.add("Created", format_time(app.created)).add("Updated", format_time(app.updated))

        pods, _ = ps_api.list_pods(c, app_id)
        if pods:
            view.add("Processes")
            for index, pod in enumerate(pods):
                view.add("Name", pod.name, level=1).add("Release", pod.release, level=1)
                view.add("State", pod.state, level=1).add("Type", pod.type, level=1)
                view.add("Started", format_time(pod.started), level=1)
                if index + 1 < len(pods):
                    view.blank()
        else:
            view.add("Processes", "")

        domains, _ = domains_api.list_domains(c, app_id)
        if domains:
            view.add("Domains")
            for index, domain in enumerate(domains):
                view.add("Domain", domain.domain, level=1)
                view.add("Created", format_time(domain.created), level=1)
                view.add("Updated", format_time(domain.updated), level=1)
                if index + 1 < len(domains):
                    view.blank()
        else:
            view.add("Domains", "")

        app_settings = settings_api.get(c, app_id)
        if app_settings.label:
            view.add("Labels")
            keys = sort_keys(app_settings.label)
            for index, key in enumerate(keys):
                view.add("Key", key, level=1).add("Value", app_settings.label[key], level=1)
                if index + 1 < len(keys):
                    view.blank()
        else:
            view.add("Labels", "")
        self.write(view.render())

    def apps_open(self, app_id: Optional[str] = None) -> None:
        c, app_id = self.load_app(app_id)
        url = self.app_url(c, app_id)
        if not url:
            raise DryccError(NO_DOMAIN.format(app=app_id))
        if not url.startswith(("http://", "https://")):
            url = f"http://{url}"
        self.browser(url)

    def apps_logs(
        self, app_id: Optional[str] = None, lines: int = 300, follow: bool = False, timeout: int = 300
    ) -> None:
        """Print log lines; ``--follow`` stops after ``timeout`` seconds once the current line lands."""
        c, app_id = self.load_app(app_id)
        deadline = time.monotonic() + timeout if follow and timeout > 0 else None
        for line in apps_api.logs(c, app_id, lines=lines, follow=follow, timeout=timeout):
            print_log(self.w_out, line.rstrip("\n"))
            if deadline is not None and time.monotonic() >= deadline:
                break

    def apps_run(
        self,
        app_id: Optional[str],
        command: str,
        mounts: Optional[List[str]] = None,
        timeout: int = 3600,
        expires: int = 3600,
    ) -> None:
        c, app_id = self.load_app(app_id)
        volumes = parse_mounts(mounts or [])
        self.writeln(f"Running '{command}'...")
        result = apps_api.run(c, app_id, command, volumes, timeout=timeout, expires=expires)
        output = result.get("output") if isinstance(result, dict) else None
        if output:
            self.write(output if output.endswith("\n") else f"{output}\n")

    def apps_destroy(self, app_id: Optional[str] = None, confirm: str = "") -> None:
        c = self.client()
        from_git = False
        if not app_id:
            app_id = git.detect_app_name(c.host, self.git_runner)
            from_git = True

        if not confirm:
            confirm = self.confirm_prompt(
                " !    WARNING: Potentially Destructive Action\n"
                f" !    This command will destroy the application: {app_id}\n"
                f" !    To proceed, type \"{app_id}\" or re-run this command with --confirm={app_id}\n\n> "
            )
        if confirm != app_id:
            raise CancelledError(f"app {app_id} does not match confirm {confirm}, aborting")

        start = time.time()
        self.writeln(f"Destroying {app_id}...")
        with self.progress():
            apps_api.delete(c, app_id)
        self.writeln(f"done in {self.elapsed(start)}s")

        if from_git:
            self.git_remove(app_id)

    def apps_transfer(self, app_id: Optional[str], username: str) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Transferring {app_id} to {username}... ")
        with self.progress():
            apps_api.transfer(c, app_id, username)
        self.writeln("done")

    # -- git ----------------------------------------------------------------

    def git_remote(self, app_id: Optional[str] = None, remote: str = git.DEFAULT_REMOTE, force: bool = False) -> None:
        c, app_id = self.load_app(app_id)
        expected = git.repository_url(c.host, app_id)
        try:
            current = git.remote_url(remote, self.git_runner)
        except git.RemoteNotFoundError:
            git.create_remote(c.host, remote, app_id, self.git_runner)
            self.write(REMOTE_CREATED.format(remote=remote, app=app_id))
            return

        if current == expected:
            self.writeln(f"Remote {remote} already exists and is correctly configured for app {app_id}.")
            return
        if not force:
            raise GitError(
                f"Remote {remote} already exists, please run 'drycc git:remote -f' to overwrite\n"
                f"Existing remote URL: {current}\n"
                f"When forced, will overwrite with: {expected}"
            )
        self.writeln(f"Deleting git remote {remote}.")
        git.delete_remote(remote, self.git_runner)
        git.create_remote(c.host, remote, app_id, self.git_runner)
        self.write(REMOTE_CREATED.format(remote=remote, app=app_id))

    def git_remove(self, app_id: Optional[str] = None) -> None:
        c, app_id = self.load_app(app_id)
        git.delete_app_remotes(c.host, app_id, self.git_runner)
        self.write(REMOTES_REMOVED.format(app=app_id))
