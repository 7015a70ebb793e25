"""auth, tokens, users, keys and perms commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from urllib.parse import parse_qs, urlparse

from .. import settings
from ..client import Client
from ..controller import auth as auth_api
from ..controller import keys as keys_api
from ..controller import perms as perms_api
from ..errors import CancelledError, DryccError, ValidationError
from ..parsers import read_pub_key
from ..settings import Profile
from ..table import limit_count
from ..utils import format_time
from ._base import BaseCommand

logger = logging.getLogger(__name__)

LOGIN_POLLS = 120
POLL_INTERVAL = 5


def _grant_key(url: str) -> str:
    keys = parse_qs(urlparse(url).query).get("key")
    if not keys:
        raise DryccError(f"no login key in {url}")
    return keys[0]


class AuthMixin(BaseCommand):

    def _acquire_token(self, c: Client, username: str = "", password: str = "", alias: str = "") -> Dict[str, str]:
        """Run the login grant and poll until the controller issues a token.

        Without credentials the grant URL is opened in a browser and
        polled up to ``LOGIN_POLLS`` times, ``POLL_INTERVAL`` seconds apart.
        """
        key = auth_api.login(c, username, password)
        if not (username and password):
            self.writeln(f"Opening browser to {key}")
            self.write("Waiting for login... ")
            try:
                self.browser(key)
            except OSError:
                self.write("Cannot open browser, please visit the website in yourself")
            key = _grant_key(key)

        token: Dict[str, str] = {}
        with self.progress():
            for _ in range(LOGIN_POLLS):
                try:
                    token = auth_api.token(c, key, alias)
                except DryccError as exc:
                    logger.debug("Token not issued yet: %s", exc)
                    token = {}
                if token.get("token") and token.get("username"):
                    break
                self.sleep(POLL_INTERVAL)
        if not token.get("token") or token.get("token") == "fail":
            raise DryccError("logged fail")
        return token

    def auth_login(self, controller: str, username: str = "", password: str = "", ssl_verify: bool = True) -> None:
        if not controller.startswith(("http://", "https://")):
            controller = f"http://{controller}"
        c = self.new_client(controller, ssl_verify=ssl_verify)
        c.healthcheck()

        token = self._acquire_token(c, username, password)
        profile = Profile(
            username=token["username"],
            ssl_verify=ssl_verify,
            controller=controller,
            token=token["token"],
        )
        path = self.save_profile(profile)
        self.writeln(f"Logged in as {profile.username}")
        self.writeln(f"Configuration file written to {path}")

    def auth_logout(self) -> None:
        settings.delete(self.config_file)
        self.writeln("Logged out")

    def auth_whoami(self, all_info: bool = False) -> None:
        profile = self.load_profile()
        if not all_info:
            self.writeln(f"You are {profile.username} at {profile.controller}")
            return
        user = auth_api.whoami(self.client(profile))
        self.print_kv(
            [
                ("ID", user.id),
                ("Username", user.username),
                ("Email", user.email),
                ("First Name", user.first_name),
                ("Last Name", user.last_name),
                ("Last Login", format_time(user.last_login)),
                ("Is Superuser", user.is_superuser),
                ("Is Staff", user.is_staff),
                ("Is Active", user.is_active),
                ("Date Joined", format_time(user.date_joined)),
            ]
        )

    # -- tokens -------------------------------------------------------------

    def tokens_list(self, limit: Optional[int] = None) -> None:
        c = self.client()
        tokens, _ = auth_api.list_tokens(c, limit)
        rows = [
            [t.uuid, t.owner, t.alias, t.key, format_time(t.created), format_time(t.updated)]
            for t in tokens
        ]
        self.print_table(["UUID", "OWNER", "ALIAS", "KEY", "CREATED", "UPDATED"], rows)

    def tokens_add(self, username: str = "", password: str = "", alias: str = "", confirm: str = "") -> None:
        c = self.client()
        if not confirm:
            confirm = self.confirm_prompt(
                " !    WARNING: Make sure to copy your token now.\n"
                " !    You won't be able to see it again, please confirm whether to continue.\n"
                " !    To proceed, type \"yes\" !\n\n> "
            )
        if confirm != "yes":
            raise CancelledError(f"cancel the creation of {username}'s token, aborting")
        token = self._acquire_token(c, username, password, alias)
        self.print_table(["USERNAME", "TOKEN"], [[token["username"], token["token"]]])

    def tokens_remove(self, token_id: str, confirm: str = "") -> None:
        c = self.client()
        if not confirm:
            confirm = self.confirm_prompt(
                " !    WARNING: You cannot undo this action.\n"
                " !    Any using this token will no longer be able to access the Controller API.\n"
                " !    To proceed, type \"yes\" !\n\n> "
            )
        if confirm != "yes":
            self.writeln("skip")
            return
        self.write(f"Removing token {token_id}... ")
        with self.progress():
            auth_api.delete_token(c, token_id)
        self.writeln("done")

    # -- users --------------------------------------------------------------

    def users_list(self, limit: Optional[int] = None) -> None:
        c = self.client()
        users, count = auth_api.list_users(c, limit)
        self.write(f"=== Users{limit_count(len(users), count)}")
        for user in users:
            self.writeln(user.username)

    def users_enable(self, username: str) -> None:
        c = self.client()
        self.write(f"Enabling user {username}... ")
        with self.progress():
            auth_api.enable_user(c, username)
        self.writeln("done")

    def users_disable(self, username: str) -> None:
        c = self.client()
        self.write(f"Disabling user {username}... ")
        with self.progress():
            auth_api.disable_user(c, username)
        self.writeln("done")

    # -- keys ---------------------------------------------------------------

    def keys_list(self, limit: Optional[int] = None) -> None:
        c = self.client()
        keys, count = keys_api.list_keys(c, limit)
        if count == 0:
            self.writeln("No any key found.")
            return
        rows = [[k.id, k.owner, f"{k.public[:16]}...{k.public[-10:]}"] for k in keys]
        self.print_table(["ID", "OWNER", "KEY"], rows)

    def keys_add(self, filename: str = "", ssh_dir: Optional[Path] = None) -> None:
        c = self.client()
        if filename:
            key_id, public = read_pub_key(filename)
        else:
            filename, key_id, public = self._choose_key(ssh_dir or Path.home() / ".ssh")

        self.write(f"Uploading {Path(filename).name} to drycc...")
        keys_api.new(c, key_id, public)
        self.writeln(" done")

    def _choose_key(self, folder: Path) -> Tuple[str, str, str]:
        candidates: List[Tuple[str, str, str]] = []
        for path in sorted(folder.glob("*.pub")):
            try:
                key_id, public = read_pub_key(str(path))
            except ValidationError as exc:
                self.writeln(str(exc))
                continue
            candidates.append((str(path), key_id, public))

        self.writeln("Found the following SSH public keys:")
        for index, (path, key_id, _) in enumerate(candidates, start=1):
            self.writeln(f"{index}) {Path(path).name} {key_id}")
        self.writeln("0) Enter path to pubfile (or use keys:add <key_path>)")
        selected = self.confirm_prompt("Which would you like to use with Drycc? ")
        try:
            number = int(selected)
        except ValueError:
            raise ValidationError(f"{selected} is not a valid integer", selected) from None
        if number < 0 or number > len(candidates):
            raise ValidationError(f"{number} is not a valid option", selected)
        if number == 0:
            filename = self.confirm_prompt("Enter the path to the pubkey file: ")
            key_id, public = read_pub_key(filename)
            return filename, key_id, public
        return candidates[number - 1]

    def keys_remove(self, key_id: str) -> None:
        c = self.client()
        self.write(f"Removing {key_id} SSH Key...")
        keys_api.delete(c, key_id)
        self.writeln(" done")

    # -- perms --------------------------------------------------------------

    def perms_list(self, app_id: Optional[str] = None, admin: bool = False, limit: Optional[int] = None) -> None:
        if admin:
            c = self.client()
            users, count = perms_api.list_admins(c, limit)
            self.write(f"=== Administrators{limit_count(len(users), count)}")
            for user in users:
                self.writeln(user.username)
            return
        c, app_id = self.load_app(app_id)
        perms, _ = perms_api.list_perms(c, app_id, limit)
        rows = [[p.username, ",".join(p.permissions)] for p in perms]
        self.print_table(["USERNAME", "PERMISSIONS"], rows)

    def perms_create(self, app_id: Optional[str], username: str, permissions: str = "", admin: bool = False) -> None:
        if admin:
            c = self.client()
            self.write(f"Adding {username} to system administrators... ")
            with self.progress():
                perms_api.new_admin(c, username)
        else:
            c, app_id = self.load_app(app_id)
            self.write(f"Adding user {username} as a collaborator for {app_id}... ")
            with self.progress():
                perms_api.new(c, app_id, username, permissions)
        self.writeln("done")

    def perms_update(self, app_id: Optional[str], username: str, permissions: str) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Updating user {username} as a collaborator for {app_id}... ")
        with self.progress():
            perms_api.update(c, app_id, username, permissions)
        self.writeln("done")

    def perms_delete(self, app_id: Optional[str], username: str, admin: bool = False) -> None:
        if admin:
            c = self.client()
            self.write(f"Removing {username} from system administrators... ")
            with self.progress():
                perms_api.delete_admin(c, username)
        else:
            c, app_id = self.load_app(app_id)
            self.write("Removing user permission... ")
            with self.progress():
                perms_api.delete(c, app_id, username)
        self.writeln("done")
