"""Tests for labels, toggles, autoscale, canary and tls commands."""

from __future__ import annotations

import pytest

from drycc_cli.errors import ValidationError

from conftest import output

SETTINGS = "/v2/apps/demo/settings/"


class TestLabels:
    def test_list_sorted(self, cmdr, controller):
        controller.on("GET", SETTINGS, {"owner": "alice", "label": {"team": "web", "env": "prod"}})
        cmdr.labels_list("demo")
        rows = [line.split() for line in output(cmdr).splitlines()]
        assert rows == [["OWNER", "KEY", "VALUE"], ["alice", "env", "prod"], ["alice", "team", "web"]]

    def test_list_empty(self, cmdr, controller):
        controller.on("GET", SETTINGS, {"owner": "alice", "label": {}})
        cmdr.labels_list("demo")
        assert output(cmdr) == "No labels found in demo app.\n"

    def test_set(self, cmdr, controller):
        controller.on("POST", SETTINGS, (201, {}))
        cmdr.labels_set("demo", ["team=web", "env=prod"])
        assert controller.last().body == {"label": {"team": "web", "env": "prod"}}
        assert output(cmdr) == "Applying labels on demo... done\n"

    def test_set_invalid(self, cmdr, controller):
        with pytest.raises(ValidationError) as exc:
            cmdr.labels_set("demo", ["team"])
        assert str(exc.value).startswith("team is invalid, Must be in format key=value")
        assert controller.requests == []

    def test_unset_sends_nulls(self, cmdr, controller):
        controller.on("POST", SETTINGS, (201, {}))
        cmdr.labels_unset("demo", ["team"])
        assert controller.last().body == {"label": {"team": None}}


class TestToggles:
    @pytest.mark.parametrize(
        "field, expected",
        [
            ("autodeploy", "Autodeploy is enabled.\n"),
            ("autorollback", "Autorollback is enabled.\n"),
            ("routable", "Routing is enabled.\n"),
            ("maintenance", "Maintenance mode is off.\n"),
        ],
    )
    def test_unset_defaults(self, cmdr, controller, field, expected):
        controller.on("GET", SETTINGS, {})
        cmdr.toggle_info("demo", field)
        assert output(cmdr) == expected

    def test_explicit_values(self, cmdr, controller):
        controller.on("GET", SETTINGS, {"maintenance": True, "routable": False})
        cmdr.toggle_info("demo", "maintenance")
        cmdr.toggle_info("demo", "routable")
        assert output(cmdr) == "Maintenance mode is on.\nRouting is disabled.\n"

    def test_set(self, cmdr, controller):
        controller.on("POST", SETTINGS, (201, {}))
        cmdr.toggle_set("demo", "routable", False)
        cmdr.toggle_set("demo", "maintenance", True)
        assert controller.requests[0].body == {"routable": False}
        assert controller.requests[1].body == {"maintenance": True}
        assert output(cmdr) == "Disabling routing for demo... done\nEnabling maintenance mode for demo... done\n"


class TestAutoscale:
    def test_list(self, cmdr, controller):
        controller.on(
            "GET",
            SETTINGS,
            {"autoscale": {"web": {"min": 2, "max": 5, "cpu_percent": 70}, "worker": None}},
        )
        cmdr.autoscale_list("demo")
        rows = [line.split() for line in output(cmdr).splitlines()]
        assert rows == [["PTYPE", "PERCENT", "MIN", "MAX"], ["web", "70", "2", "5"]]

    def test_list_empty(self, cmdr, controller):
        controller.on("GET", SETTINGS, {"autoscale": {}})
        cmdr.autoscale_list("demo")
        assert output(cmdr) == "No autoscale rules found.\n"

    def test_set_and_unset(self, cmdr, controller):
        controller.on("POST", SETTINGS, (201, {}))
        cmdr.autoscale_set("demo", "web", 2, 5, 70)
        cmdr.autoscale_unset("demo", "web")
        assert controller.requests[0].body == {"autoscale": {"web": {"min": 2, "max": 5, "cpu_percent": 70}}}
        assert controller.requests[1].body == {"autoscale": {"web": None}}


class TestCanary:
    def test_info(self, cmdr, controller):
        controller.on("GET", SETTINGS, {"owner": "alice", "canaries": ["web"]})
        cmdr.canary_info("demo")
        assert output(cmdr).splitlines()[1].split()[:2] == ["alice", "web"]

    def test_info_empty(self, cmdr, controller):
        controller.on("GET", SETTINGS, {"canaries": []})
        cmdr.canary_info("demo")
        assert output(cmdr) == "No canaries found in demo app.\n"

    def test_create_and_remove(self, cmdr, controller):
        controller.on("POST", SETTINGS, (201, {}))
        controller.on("DELETE", SETTINGS, (204, None))
        cmdr.canary_create("demo", ["web", "worker"])
        cmdr.canary_remove("demo", ["worker"])
        assert controller.requests[0].body == {"canaries": ["web", "worker"]}
        assert controller.requests[1].method == "DELETE"
        assert controller.requests[1].body == {"canaries": ["worker"]}

    def test_release_and_rollback(self, cmdr, controller):
        controller.on("POST", "/v2/apps/demo/canary/release/", None)
        controller.on("POST", "/v2/apps/demo/canary/rollback/", None)
        cmdr.canary_release("demo")
        cmdr.canary_rollback("demo")
        assert output(cmdr) == "Release canary for demo... done\nRollback canary for demo... done\n"


class TestTLS:
    def test_info(self, cmdr, controller):
        controller.on(
            "GET",
            "/v2/apps/demo/tls/",
            {
                "uuid": "t-1",
                "owner": "alice",
                "https_enforced": True,
                "certs_auto_enabled": False,
                "issuer": {"email": "ops@example.com", "server": "https://acme.example.com"},
                "events": [],
            },
        )
        cmdr.tls_info("demo")
        rows = [line.split() for line in output(cmdr).splitlines()]
        assert rows[0] == ["UUID:", "t-1"]
        assert rows[2] == ["CertsAuto:", "false"]
        assert rows[3] == ["HTTPSEnforced:", "true"]
        assert rows[4] == ["Issuer:"]
        assert rows[5] == ["Email:", "ops@example.com"]
        assert rows[-1] == ["Events:"]

    def test_force_and_auto(self, cmdr, controller):
        controller.on("POST", "/v2/apps/demo/tls/", (201, {}))
        cmdr.tls_force("demo", True)
        cmdr.tls_auto("demo", False)
        assert controller.requests[0].body == {"https_enforced": True}
        assert controller.requests[1].body == {"certs_auto_enabled": False}
        assert output(cmdr) == (
            "Enabling https-only requests for demo... done\n"
            "Disabling certs-auto requests for demo... done\n"
        )

    def test_issuer(self, cmdr, controller):
        controller.on("POST", "/v2/apps/demo/tls/", (201, {}))
        cmdr.tls_auto_issuer("demo", "ops@example.com", "https://acme.example.com")
        assert controller.last().body == {
            "issuer": {"email": "ops@example.com", "server": "https://acme.example.com", "key_id": "", "key_secret": ""}
        }
