"""domains, services, gateways, routes and certs commands."""

from __future__ import annotations

import json
from typing import List, Optional

import yaml

from ..controller import certs as certs_api
from ..controller import domains as domains_api
from ..controller import gateways as gateways_api
from ..errors import ValidationError
from ..parsers import parse_backend_refs, parse_ports
from ..utils import format_time
from ._base import BaseCommand


def _read_file(path: str) -> str:
    with open(path, encoding="utf-8") as fh:
        return fh.read()


class RoutingMixin(BaseCommand):

    # -- domains ------------------------------------------------------------

    def domains_list(self, app_id: Optional[str] = None, limit: Optional[int] = None) -> None:
        c, app_id = self.load_app(app_id)
        domains, count = domains_api.list_domains(c, app_id, limit)
        if count == 0:
            self.writeln(f"No domains found in {app_id} app.")
            return
        rows = [[d.domain, d.ptype, d.owner, format_time(d.created)] for d in domains]
        self.print_table(["DOMAIN", "PTYPE", "OWNER", "CREATED"], rows)

    def domains_add(self, app_id: Optional[str], domain: str, ptype: str = "web") -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Adding {domain} to {app_id}... ")
        with self.progress():
            domains_api.new_domain(c, app_id, domain, ptype)
        self.writeln("done")

    def domains_remove(self, app_id: Optional[str], domain: str) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Removing {domain} from {app_id}... ")
        with self.progress():
            domains_api.delete_domain(c, app_id, domain)
        self.writeln("done")

    # -- services -----------------------------------------------------------

    def services_list(self, app_id: Optional[str] = None) -> None:
        c, app_id = self.load_app(app_id)
        services = domains_api.list_services(c, app_id)
        if not services:
            self.writeln(f"No services found in {app_id} app.")
            return
        rows = [
            [svc.ptype, port.port, port.protocol, port.target_port, svc.domain]
            for svc in services
            for port in svc.ports
        ]
        self.print_table(["PTYPE", "PORT", "PROTOCOL", "TARGET-PORT", "DOMAIN"], rows)

    def services_add(self, app_id: Optional[str], ptype: str, ports: str, protocol: str = "TCP") -> None:
        c, app_id = self.load_app(app_id)
        port, target_port = parse_ports(ports)
        self.write(f"Adding {ptype} ({port}) to {app_id}... ")
        with self.progress():
            domains_api.new_service(c, app_id, ptype, port, protocol, target_port)
        self.writeln("done")

    def services_remove(self, app_id: Optional[str], ptype: str, port: int, protocol: str = "TCP") -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Removing {ptype} from {app_id}... ")
        with self.progress():
            domains_api.delete_service(c, app_id, ptype, protocol, port)
        self.writeln("done")

    # -- gateways -----------------------------------------------------------

    def gateways_list(self, app_id: Optional[str] = None, limit: Optional[int] = None) -> None:
        c, app_id = self.load_app(app_id)
        gateways, count = gateways_api.list_gateways(c, app_id, limit)
        if count == 0:
            self.writeln(f"No gateways found in {app_id} app.")
            return
        rows = []
        for gateway in gateways:
            addresses = ",".join(str(a.get("value", "")) for a in gateway.addresses)
            for listener in gateway.listeners:
                rows.append([gateway.name, listener.name, listener.port, listener.protocol, addresses])
        self.print_table(["NAME", "LISENTER", "PORT", "PROTOCOL", "ADDRESSES"], rows)

    def gateways_add(self, app_id: Optional[str], name: str, port: int, protocol: str) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Adding gateway {name} to {app_id}... ")
        with self.progress():
            gateways_api.new_gateway(c, app_id, name, port, protocol)
        self.writeln("done")

    def gateways_remove(self, app_id: Optional[str], name: str, port: int, protocol: str) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Removing gateway {name} to {app_id}... ")
        with self.progress():
            gateways_api.delete_gateway(c, app_id, name, port, protocol)
        self.writeln("done")

    # -- routes -------------------------------------------------------------

    def routes_list(self, app_id: Optional[str] = None, limit: Optional[int] = None) -> None:
        c, app_id = self.load_app(app_id)
        routes, count = gateways_api.list_routes(c, app_id, limit)
        if count == 0:
            self.writeln(f"No routes found in {app_id} app.")
            return
        rows = []
        for route in routes:
            gateways = [f"{ref.name}:{ref.port}" for ref in route.parent_refs]
            services = [
                f"{backend.get('name')}:{backend.get('port')}"
                for rule in route.rules
                for backend in rule.get("backendRefs") or []
                if isinstance(backend, dict)
            ]
            rows.append([route.name, route.owner, route.kind, json.dumps(gateways), json.dumps(services)])
        self.print_table(["NAME", "OWNER", "KIND", "GATEWAYS", "SERVICES"], rows)

    def routes_add(self, app_id: Optional[str], name: str, kind: str, backends: List[str]) -> None:
        c, app_id = self.load_app(app_id)
        refs = parse_backend_refs(backends)
        self.write(f"Adding route {name} to {app_id}... ")
        with self.progress():
            gateways_api.new_route(c, app_id, name, kind, refs)
        self.writeln("done")

    def routes_remove(self, app_id: Optional[str], name: str) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Removing route {name} to {app_id}... ")
        with self.progress():
            gateways_api.delete_route(c, app_id, name)
        self.writeln("done")

    def routes_attach(self, app_id: Optional[str], name: str, port: int, gateway: str) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Attaching route {name} to gateway {gateway}... ")
        with self.progress():
            gateways_api.attach(c, app_id, name, port, gateway)
        self.writeln("done")

    def routes_detach(self, app_id: Optional[str], name: str, port: int, gateway: str) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Detaching route {name} to gateway {gateway}... ")
        with self.progress():
            gateways_api.detach(c, app_id, name, port, gateway)
        self.writeln("done")

    def routes_get_rules(self, app_id: Optional[str], name: str) -> None:
        """Print the route rules as YAML."""
        c, app_id = self.load_app(app_id)
        rules = gateways_api.get_rules(c, app_id, name)
        if isinstance(rules, str):
            rules = json.loads(rules)
        self.writeln(yaml.safe_dump(rules, default_flow_style=False, sort_keys=False))

    def routes_set_rules(self, app_id: Optional[str], name: str, filename: str) -> None:
        """Read YAML rules from ``filename`` and send them as JSON."""
        c, app_id = self.load_app(app_id)
        try:
            rules = yaml.safe_load(_read_file(filename))
        except yaml.YAMLError as exc:
            raise ValidationError(f"could not parse {filename}: {exc}") from exc
        self.write("Applying rules... ")
        with self.progress():
            gateways_api.set_rules(c, app_id, name, rules)
        self.writeln("done")

    # -- certs --------------------------------------------------------------

    def certs_list(self, app_id: Optional[str] = None, limit: Optional[int] = None) -> None:
        c, app_id = self.load_app(app_id)
        certs, count = certs_api.list_certs(c, app_id, limit)
        if count == 0:
            self.writeln("No certs")
            return
        rows = [
            [cert.name, cert.common_name, format_time(cert.expires), ",".join(cert.san), ",".join(cert.domains)]
            for cert in certs
        ]
        self.print_table(["NAME", "COMMON-NAME", "EXPIRES", "SAN", "DOMAINS"], rows)

    def certs_add(self, app_id: Optional[str], name: str, cert_file: str, key_file: str) -> None:
        c, app_id = self.load_app(app_id)
        certificate = _read_file(cert_file)
        key = _read_file(key_file)
        self.write("Adding SSL endpoint... ")
        with self.progress():
            certs_api.new(c, app_id, name, certificate, key)
        self.writeln("done")

    def certs_remove(self, app_id: Optional[str], name: str) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Removing {name}... ")
        with self.progress():
            certs_api.delete(c, app_id, name)
        self.writeln("done")

    def certs_info(self, app_id: Optional[str], name: str) -> None:
        c, app_id = self.load_app(app_id)
        cert = certs_api.get(c, app_id, name)
        self.print_kv(
            [
                ("Name", cert.name),
                ("Common Name(s)", cert.common_name),
                ("Expires At", format_time(cert.expires)),
                ("Starts At", format_time(cert.starts)),
                ("Fingerprint", cert.fingerprint),
                ("Subject Alt Name", ",".join(cert.san)),
                ("Issuer", cert.issuer),
                ("Subject", cert.subject),
            ]
        )
        self.writeln()
        self.print_kv(
            [
                ("Connected Domains", ",".join(cert.domains)),
                ("Owner", cert.owner),
                ("Created", format_time(cert.created)),
                ("Updated", format_time(cert.updated)),
            ]
        )

    def certs_attach(self, app_id: Optional[str], name: str, domain: str) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Attaching certificate {name} to domain {domain}... ")
        with self.progress():
            certs_api.attach(c, app_id, name, domain)
        self.writeln("done")

    def certs_detach(self, app_id: Optional[str], name: str, domain: str) -> None:
        c, app_id = self.load_app(app_id)
        self.write(f"Detaching certificate {name} from domain {domain}... ")
        with self.progress():
            certs_api.detach(c, app_id, name, domain)
        self.writeln("done")
