"""Tests for builds and releases commands."""

from __future__ import annotations

import pytest

from drycc_cli.errors import CancelledError, DryccError, ValidationError

from conftest import output

BUILDS = "/v2/apps/demo/builds/"
RELEASES = "/v2/apps/demo/releases/"


def _page(*items, count=None):
    return {"count": len(items) if count is None else count, "results": list(items)}


class TestBuilds:
    """builds:list, builds:info and builds:create."""

    def test_list(self, cmdr, controller):
        controller.on("GET", BUILDS, _page({"uuid": "b-1", "created": "2024-03-01T10:00:00Z"}))
        cmdr.builds_list("demo")
        assert output(cmdr) == "=== demo Builds\nb-1 2024-03-01T10:00:00UTC\n"

    def test_info(self, cmdr, controller):
        controller.on("GET", BUILDS, _page({"app": "demo", "uuid": "b-1", "image": "nginx:1", "stack": "container"}))
        cmdr.builds_info("demo")
        lines = output(cmdr).splitlines()
        assert lines[0].split() == ["App:", "demo"]
        assert lines[4].split() == ["Image:", "nginx:1"]
        assert controller.last().query["limit"] == ["1"]

    def test_info_without_builds(self, cmdr, controller):
        controller.on("GET", BUILDS, _page())
        with pytest.raises(DryccError) as exc:
            cmdr.builds_info("demo")
        assert str(exc.value) == "no build found in demo app"

    def test_create_reads_local_files(self, cmdr, controller, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "Procfile").write_text("web: gunicorn app\n")
        (tmp_path / "drycc.yaml").write_text("build:\n  docker: Dockerfile\n")
        controller.on("GET", BUILDS, _page())
        controller.on("POST", BUILDS, (201, {"uuid": "b-2"}))
        cmdr.builds_create("demo", "registry/demo:v2")
        assert controller.last("POST").body == {
            "image": "registry/demo:v2",
            "stack": "container",
            "procfile": {"web": "gunicorn app"},
            "dryccfile": {"build": {"docker": "Dockerfile"}},
        }
        assert output(cmdr) == "Creating build... done\n"

    def test_flag_values_win(self, cmdr, controller, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "Procfile").write_text("web: old\n")
        controller.on("GET", BUILDS, _page())
        controller.on("POST", BUILDS, (201, {"uuid": "b-2"}))
        cmdr.builds_create("demo", "img", procfile="worker: celery")
        assert controller.last("POST").body["procfile"] == {"worker": "celery"}

    def test_dropping_procfile_needs_confirmation(self, make_cmdr, controller, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        cmdr = make_cmdr(stdin="no\n")
        controller.on("GET", BUILDS, _page({"uuid": "b-1", "procfile": {"web": "run"}}))
        with pytest.raises(CancelledError):
            cmdr.builds_create("demo", "img")
        assert "The Procfile or drycc file is empty" in output(cmdr)
        assert not [r for r in controller.requests if r.method == "POST"]

    def test_dropping_procfile_confirmed(self, cmdr, controller, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        controller.on("GET", BUILDS, _page({"uuid": "b-1", "procfile": {"web": "run"}}))
        controller.on("POST", BUILDS, (201, {"uuid": "b-2"}))
        cmdr.builds_create("demo", "img", confirm="yes")
        assert controller.last("POST").body == {"image": "img", "stack": "container"}

    def test_bad_procfile(self, cmdr, controller, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ValidationError):
            cmdr.builds_create("demo", "img", procfile="- web")


class TestReleases:
    """releases:list, releases:info, releases:deploy and releases:rollback."""

    def test_list(self, cmdr, controller):
        controller.on(
            "GET",
            RELEASES,
            _page(
                {"version": 2, "created": "2024-03-02T00:00:00Z", "summary": "alice deployed nginx"},
                {"version": 1, "created": "2024-03-01T00:00:00Z", "summary": "alice created initial release"},
                count=5,
            ),
        )
        cmdr.releases_list("demo")
        assert output(cmdr) == (
            "=== demo Releases (2 of 5)\n"
            "v2\t2024-03-02T00:00:00UTC\talice deployed nginx\n"
            "v1\t2024-03-01T00:00:00UTC\talice created initial release\n"
        )

    def test_info_explicit_version(self, cmdr, controller):
        controller.on("GET", f"{RELEASES}v3/", {"version": 3, "build": "b-1", "config": "c-1", "owner": "alice"})
        cmdr.releases_info("demo", "v3")
        lines = output(cmdr).splitlines()
        assert lines[0] == "=== demo Release v3"
        assert lines[1].split() == ["build:", "b-1"]
        assert lines[2].split() == ["config:", "c-1"]

    def test_info_latest(self, cmdr, controller):
        controller.on("GET", RELEASES, _page({"version": 7}))
        controller.on("GET", f"{RELEASES}v7/", {"version": 7})
        cmdr.releases_info("demo")
        assert output(cmdr).startswith("=== demo Release v7\n")
        assert "build:" not in output(cmdr)

    def test_info_bad_version(self, cmdr, controller):
        with pytest.raises(ValidationError):
            cmdr.releases_info("demo", "latest")

    def test_deploy(self, cmdr, controller):
        controller.on("POST", f"{RELEASES}deploy/", None)
        cmdr.releases_deploy("demo", ["web", "worker"], force=True)
        assert controller.last().body == {"force": True, "ptypes": "web,worker"}
        assert output(cmdr) == "Deploying ptypes... done\n"

    def test_rollback_previous(self, cmdr, controller):
        controller.on("POST", f"{RELEASES}rollback/", {"version": 5})
        cmdr.releases_rollback("demo")
        assert controller.last().body == {}
        assert output(cmdr) == "Rolling back one release... done, v5\n"

    def test_rollback_to_version(self, cmdr, controller):
        controller.on("POST", f"{RELEASES}rollback/", {"version": 5})
        cmdr.releases_rollback("demo", "v3", ["web"])
        assert controller.last().body == {"version": 3, "ptypes": "web"}
        assert output(cmdr) == "Rolling back to v3... done, v5\n"
