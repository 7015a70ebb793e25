"""domains, services, gateways, routes and certs commands."""

from __future__ import annotations

import click

from ._common import app_option, limit_option

protocol_option = click.option("--protocol", default="TCP", help="The transport protocol.")


def register_routing_commands(main: click.Group) -> None:
    """Register the networking groups."""

    @main.group()
    def domains():
        """Manage domains of an app."""

    @domains.command("list")
    @app_option
    @limit_option
    @click.pass_obj
    def domains_list(cmdr, app_id, limit):
        """List domains."""
        cmdr.domains_list(app_id, limit)

    @domains.command("add")
    @click.argument("domain")
    @app_option
    @click.option("--ptype", default="web", help="The process type serving the domain.")
    @click.pass_obj
    def domains_add(cmdr, domain, app_id, ptype):
        """Bind a domain to an app."""
        cmdr.domains_add(app_id, domain, ptype)

    @domains.command("remove")
    @click.argument("domain")
    @app_option
    @click.pass_obj
    def domains_remove(cmdr, domain, app_id):
        """Unbind a domain."""
        cmdr.domains_remove(app_id, domain)

    @main.group()
    def services():
        """Manage services exposing process types."""

    @services.command("list")
    @app_option
    @click.pass_obj
    def services_list(cmdr, app_id):
        """List services."""
        cmdr.services_list(app_id)

    @services.command("add")
    @click.argument("ptype")
    @click.argument("ports")
    @app_option
    @protocol_option
    @click.pass_obj
    def services_add(cmdr, ptype, ports, app_id, protocol):
        """Expose a process type, port:targetPort."""
        cmdr.services_add(app_id, ptype, ports, protocol)

    @services.command("remove")
    @click.argument("ptype")
    @click.argument("port", type=int)
    @app_option
    @protocol_option
    @click.pass_obj
    def services_remove(cmdr, ptype, port, app_id, protocol):
        """Remove a service port."""
        cmdr.services_remove(app_id, ptype, port, protocol)

    @main.group()
    def gateways():
        """Manage gateways of an app."""

    @gateways.command("list")
    @app_option
    @limit_option
    @click.pass_obj
    def gateways_list(cmdr, app_id, limit):
        """List gateways."""
        cmdr.gateways_list(app_id, limit)

    @gateways.command("add")
    @click.argument("name")
    @app_option
    @click.option("--port", type=int, required=True, help="The listener port.")
    @protocol_option
    @click.pass_obj
    def gateways_add(cmdr, name, app_id, port, protocol):
        """Create a gateway listener."""
        cmdr.gateways_add(app_id, name, port, protocol)

    @gateways.command("remove")
    @click.argument("name")
    @app_option
    @click.option("--port", type=int, required=True, help="The listener port.")
    @protocol_option
    @click.pass_obj
    def gateways_remove(cmdr, name, app_id, port, protocol):
        """Remove a gateway listener."""
        cmdr.gateways_remove(app_id, name, port, protocol)

    @main.group()
    def routes():
        """Manage routes from gateways to services."""

    @routes.command("list")
    @app_option
    @limit_option
    @click.pass_obj
    def routes_list(cmdr, app_id, limit):
        """List routes."""
        cmdr.routes_list(app_id, limit)

    @routes.command("add")
    @click.argument("name")
    @click.argument("kind")
    @click.argument("backends", nargs=-1, required=True)
    @app_option
    @click.pass_obj
    def routes_add(cmdr, name, kind, backends, app_id):
        """Create a route, backends as ptype:port,weight."""
        cmdr.routes_add(app_id, name, kind, list(backends))

    @routes.command("remove")
    @click.argument("name")
    @app_option
    @click.pass_obj
    def routes_remove(cmdr, name, app_id):
        """Remove a route."""
        cmdr.routes_remove(app_id, name)

    @routes.command("attach")
    @click.argument("name")
    @app_option
    @click.option("--gateway", required=True, help="The gateway name.")
    @click.option("--port", type=int, required=True, help="The gateway listener port.")
    @click.pass_obj
    def routes_attach(cmdr, name, app_id, gateway, port):
        """Attach a route to a gateway."""
        cmdr.routes_attach(app_id, name, port, gateway)

    @routes.command("detach")
    @click.argument("name")
    @app_option
    @click.option("--gateway", required=True, help="The gateway name.")
    @click.option("--port", type=int, required=True, help="The gateway listener port.")
    @click.pass_obj
    def routes_detach(cmdr, name, app_id, gateway, port):
        """Detach a route from a gateway."""
        cmdr.routes_detach(app_id, name, port, gateway)

    @routes.group("rules")
    def rules():
        """Read and replace route rules."""

    @rules.command("get")
    @click.argument("name")
    @app_option
    @click.pass_obj
    def rules_get(cmdr, name, app_id):
        """Print the rules of a route as YAML."""
        cmdr.routes_get_rules(app_id, name)

    @rules.command("set")
    @click.argument("name")
    @app_option
    @click.option("-f", "--file", "filename", required=True, type=click.Path(), help="YAML rules file.")
    @click.pass_obj
    def rules_set(cmdr, name, app_id, filename):
        """Replace the rules of a route from a YAML file."""
        cmdr.routes_set_rules(app_id, name, filename)

    @main.group()
    def certs():
        """Manage SSL certificates."""

    @certs.command("list")
    @app_option
    @limit_option
    @click.pass_obj
    def certs_list(cmdr, app_id, limit):
        """List certificates."""
        cmdr.certs_list(app_id, limit)

    @certs.command("add")
    @click.argument("name")
    @click.argument("cert_file", type=click.Path())
    @click.argument("key_file", type=click.Path())
    @app_option
    @click.pass_obj
    def certs_add(cmdr, name, cert_file, key_file, app_id):
        """Upload a certificate and its private key."""
        cmdr.certs_add(app_id, name, cert_file, key_file)

    @certs.command("remove")
    @click.argument("name")
    @app_option
    @click.pass_obj
    def certs_remove(cmdr, name, app_id):
        """Remove a certificate."""
        cmdr.certs_remove(app_id, name)

    @certs.command("info")
    @click.argument("name")
    @app_option
    @click.pass_obj
    def certs_info(cmdr, name, app_id):
        """Show certificate details."""
        cmdr.certs_info(app_id, name)

    @certs.command("attach")
    @click.argument("name")
    @click.argument("domain")
    @app_option
    @click.pass_obj
    def certs_attach(cmdr, name, domain, app_id):
        """Attach a certificate to a domain."""
        cmdr.certs_attach(app_id, name, domain)

    @certs.command("detach")
    @click.argument("name")
    @click.argument("domain")
    @app_option
    @click.pass_obj
    def certs_detach(cmdr, name, domain, app_id):
        """Detach a certificate from a domain."""
        cmdr.certs_detach(app_id, name, domain)
