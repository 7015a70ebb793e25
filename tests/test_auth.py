"""Tests for auth, tokens, users, keys and perms commands."""

from __future__ import annotations

import json

import pytest

from drycc_cli.errors import CancelledError, DryccError, NoSessionError, ValidationError

from conftest import CONTROLLER, output


class TestLogin:
    """auth:login writes a profile once the controller issues a token."""

    def test_password_login(self, cmdr, controller, profile_path):
        profile_path.unlink()
        controller.on("GET", "/v2/", None)
        controller.on("POST", "/v2/auth/login/", {"key": "k1"})
        controller.on("GET", "/v2/auth/token/k1/", {"token": "t0k3n", "username": "alice"})
        cmdr.auth_login("drycc.example.com", "alice", "secret", ssl_verify=False)

        assert controller.requests[1].body == {"username": "alice", "password": "secret"}
        saved = json.loads(profile_path.read_text())
        assert saved["controller"] == CONTROLLER
        assert saved["token"] == "t0k3n"
        assert saved["ssl_verify"] is False
        assert output(cmdr) == f"Logged in as alice\nConfiguration file written to {profile_path}\n"

    def test_browser_login_polls(self, cmdr, controller, opened):
        grant = f"{CONTROLLER}/v2/login/?key=k2"
        polls = []

        def token(record):
            polls.append(record)
            if len(polls) < 3:
                return {}
            return {"token": "t", "username": "bob"}

        controller.on("GET", "/v2/", None)
        controller.on("POST", "/v2/auth/login/", {"url": grant})
        controller.on("GET", "/v2/auth/token/k2/", token)
        cmdr.auth_login(CONTROLLER)

        assert opened == [grant]
        assert len(polls) == 3
        text = output(cmdr)
        assert f"Opening browser to {grant}\n" in text
        assert "Waiting for login... " in text
        assert "Logged in as bob\n" in text

    def test_login_never_granted(self, cmdr, controller):
        controller.on("GET", "/v2/", None)
        controller.on("POST", "/v2/auth/login/", {"key": "k3"})
        controller.on("GET", "/v2/auth/token/k3/", {"token": "fail", "username": "x"})
        with pytest.raises(DryccError) as exc:
            cmdr.auth_login(CONTROLLER, "x", "y")
        assert str(exc.value) == "logged fail"

    def test_unreachable_controller(self, cmdr, controller):
        controller.on("GET", "/v2/", (503, "down"))
        with pytest.raises(DryccError):
            cmdr.auth_login(CONTROLLER, "x", "y")
        assert len(controller.requests) == 1


class TestSession:
    """logout and whoami."""

    def test_logout(self, cmdr, profile_path):
        cmdr.auth_logout()
        assert not profile_path.exists()
        assert output(cmdr) == "Logged out\n"

    def test_whoami(self, cmdr):
        cmdr.auth_whoami()
        assert output(cmdr) == f"You are alice at {CONTROLLER}\n"

    def test_whoami_all(self, cmdr, controller):
        controller.on(
            "GET", "/v2/auth/whoami/", {"id": 7, "username": "alice", "email": "a@example.com", "is_superuser": True}
        )
        cmdr.auth_whoami(all_info=True)
        lines = output(cmdr).splitlines()
        assert lines[0].split() == ["ID:", "7"]
        assert lines[2].split() == ["Email:", "a@example.com"]
        assert lines[6].split() == ["Is", "Superuser:", "True"]

    def test_whoami_logged_out(self, cmdr, profile_path):
        profile_path.unlink()
        with pytest.raises(NoSessionError):
            cmdr.auth_whoami()


class TestTokens:
    """tokens:list, tokens:add and tokens:remove."""

    def test_list(self, cmdr, controller):
        controller.on(
            "GET",
            "/v2/tokens/",
            {"count": 1, "results": [{"uuid": "u1", "owner": "alice", "alias": "ci", "key": "ab12"}]},
        )
        cmdr.tokens_list()
        lines = output(cmdr).splitlines()
        assert lines[0].split() == ["UUID", "OWNER", "ALIAS", "KEY", "CREATED", "UPDATED"]
        assert lines[1].split()[:4] == ["u1", "alice", "ci", "ab12"]

    def test_add(self, cmdr, controller):
        controller.on("POST", "/v2/auth/login/", {"key": "k9"})
        controller.on("GET", "/v2/auth/token/k9/", {"token": "secret", "username": "alice"})
        cmdr.tokens_add("alice", "pw", alias="ci", confirm="yes")
        assert controller.last("GET").query == {"alias": ["ci"]}
        assert output(cmdr).splitlines()[1].split() == ["alice", "secret"]

    def test_add_declined(self, make_cmdr, controller):
        cmdr = make_cmdr(stdin="no\n")
        with pytest.raises(CancelledError):
            cmdr.tokens_add("alice", "pw")

    def test_remove(self, cmdr, controller):
        controller.on("DELETE", "/v2/tokens/u1/", (204, None))
        cmdr.tokens_remove("u1", confirm="yes")
        assert output(cmdr) == "Removing token u1... done\n"

    def test_remove_skipped(self, make_cmdr, controller):
        cmdr = make_cmdr(stdin="n\n")
        cmdr.tokens_remove("u1")
        assert output(cmdr).endswith("skip\n")
        assert controller.requests == []


class TestUsers:
    def test_list(self, cmdr, controller):
        controller.on("GET", "/v2/users/", {"count": 2, "results": [{"username": "alice"}, {"username": "bob"}]})
        cmdr.users_list()
        assert output(cmdr) == "=== Users\nalice\nbob\n"

    def test_enable_disable(self, cmdr, controller):
        controller.on("PATCH", "/v2/users/bob/enable/", None)
        controller.on("PATCH", "/v2/users/bob/disable/", None)
        cmdr.users_enable("bob")
        cmdr.users_disable("bob")
        assert [r.path for r in controller.requests] == ["/v2/users/bob/enable/", "/v2/users/bob/disable/"]
        assert output(cmdr) == "Enabling user bob... done\nDisabling user bob... done\n"


class TestKeys:
    """SSH key management."""

    def test_list_empty(self, cmdr, controller):
        controller.on("GET", "/v2/keys/", {"count": 0, "results": []})
        cmdr.keys_list()
        assert output(cmdr) == "No any key found.\n"

    def test_list_abbreviates_key(self, cmdr, controller):
        public = "ssh-rsa AAAAB3NzaC1yc2EAAAADAQABAAABAQC0123456789 me@host"
        controller.on("GET", "/v2/keys/", {"count": 1, "results": [{"id": "me@host", "owner": "alice", "public": public}]})
        cmdr.keys_list()
        row = output(cmdr).splitlines()[1]
        assert row.startswith("me@host")
        assert row.endswith(f"{public[:16]}...{public[-10:]}")

    def test_add_file(self, cmdr, controller, tmp_path):
        key = tmp_path / "id_rsa.pub"
        key.write_text("ssh-rsa AAAAB3Nza me@host")
        controller.on("POST", "/v2/keys/", (201, {"id": "me@host"}))
        cmdr.keys_add(str(key))
        assert controller.last().body == {"id": "me@host", "public": "ssh-rsa AAAAB3Nza me@host"}
        assert output(cmdr) == "Uploading id_rsa.pub to drycc... done\n"

    def test_add_interactive(self, make_cmdr, controller, tmp_path):
        (tmp_path / "a.pub").write_text("ssh-rsa AAAA1 first")
        (tmp_path / "b.pub").write_text("ssh-rsa AAAA2 second")
        cmdr = make_cmdr(stdin="2\n")
        controller.on("POST", "/v2/keys/", (201, {"id": "second"}))
        cmdr.keys_add(ssh_dir=tmp_path)
        assert "1) a.pub first\n2) b.pub second\n" in output(cmdr)
        assert controller.last().body["id"] == "second"

    def test_add_interactive_out_of_range(self, make_cmdr, controller, tmp_path):
        (tmp_path / "a.pub").write_text("ssh-rsa AAAA1 first")
        cmdr = make_cmdr(stdin="5\n")
        with pytest.raises(ValidationError) as exc:
            cmdr.keys_add(ssh_dir=tmp_path)
        assert str(exc.value) == "5 is not a valid option"

    def test_remove(self, cmdr, controller):
        controller.on("DELETE", "/v2/keys/me@host", (204, None))
        cmdr.keys_remove("me@host")
        assert output(cmdr) == "Removing me@host SSH Key... done\n"


class TestPerms:
    """Collaborators and administrators."""

    def test_list(self, cmdr, controller):
        controller.on(
            "GET",
            "/v2/apps/demo/perms/",
            {"count": 1, "results": [{"username": "bob", "permissions": ["view", "change"]}]},
        )
        cmdr.perms_list("demo")
        assert output(cmdr).splitlines()[1].split() == ["bob", "view,change"]

    def test_list_admins(self, cmdr, controller):
        controller.on("GET", "/v2/admin/perms/", {"count": 1, "results": [{"username": "root"}]})
        cmdr.perms_list(admin=True)
        assert output(cmdr) == "=== Administrators\nroot\n"

    def test_create(self, cmdr, controller):
        controller.on("POST", "/v2/apps/demo/perms/", (201, None))
        cmdr.perms_create("demo", "bob", "view")
        assert controller.last().body == {"username": "bob", "permissions": "view"}
        assert output(cmdr) == "Adding user bob as a collaborator for demo... done\n"

    def test_create_admin(self, cmdr, controller):
        controller.on("POST", "/v2/admin/perms/", (201, None))
        cmdr.perms_create(None, "bob", admin=True)
        assert output(cmdr) == "Adding bob to system administrators... done\n"

    def test_update(self, cmdr, controller):
        controller.on("PUT", "/v2/apps/demo/perms/bob/", None)
        cmdr.perms_update("demo", "bob", "view,change")
        assert controller.last().body == {"username": "bob", "permissions": "view,change"}

    def test_delete(self, cmdr, controller):
        controller.on("DELETE", "/v2/apps/demo/perms/bob/", (204, None))
        cmdr.perms_delete("demo", "bob")
        assert output(cmdr) == "Removing user permission... done\n"
