"""auth, tokens, users, keys and perms commands."""

from __future__ import annotations

import click

from ._common import app_option, confirm_option, limit_option


def register_auth_commands(main: click.Group) -> None:
    """Register the auth, tokens, users, keys and perms groups."""

    @main.group()
    def auth():
        """Manage users and authentication."""

    @auth.command("login")
    @click.argument("controller")
    @click.option("--username", default="", help="The account username.")
    @click.option("--password", default="", help="The account password.")
    @click.option("--ssl-verify/--no-ssl-verify", default=True, help="Verify the controller certificate.")
    @click.pass_obj
    def auth_login(cmdr, controller, username, password, ssl_verify):
        """Authenticate against a controller."""
        cmdr.auth_login(controller, username, password, ssl_verify)

    @auth.command("logout")
    @click.pass_obj
    def auth_logout(cmdr):
        """Clear the current user session."""
        cmdr.auth_logout()

    @auth.command("whoami")
    @click.option("--all", "all_info", is_flag=True, help="Fetch the full user record.")
    @click.pass_obj
    def auth_whoami(cmdr, all_info):
        """Display the current user."""
        cmdr.auth_whoami(all_info)

    @main.group()
    def tokens():
        """Manage API tokens."""

    @tokens.command("list")
    @limit_option
    @click.pass_obj
    def tokens_list(cmdr, limit):
        """List your tokens."""
        cmdr.tokens_list(limit)

    @tokens.command("add")
    @click.option("--username", default="", help="The account username.")
    @click.option("--password", default="", help="The account password.")
    @click.option("--alias", default="", help="A name for the token.")
    @confirm_option
    @click.pass_obj
    def tokens_add(cmdr, username, password, alias, confirm):
        """Create a new token."""
        cmdr.tokens_add(username, password, alias, confirm)

    @tokens.command("remove")
    @click.argument("token_id")
    @confirm_option
    @click.pass_obj
    def tokens_remove(cmdr, token_id, confirm):
        """Remove a token."""
        cmdr.tokens_remove(token_id, confirm)

    @main.group()
    def users():
        """Manage users (administrators only)."""

    @users.command("list")
    @limit_option
    @click.pass_obj
    def users_list(cmdr, limit):
        """List all registered users."""
        cmdr.users_list(limit)

    @users.command("enable")
    @click.argument("username")
    @click.pass_obj
    def users_enable(cmdr, username):
        """Enable a user."""
        cmdr.users_enable(username)

    @users.command("disable")
    @click.argument("username")
    @click.pass_obj
    def users_disable(cmdr, username):
        """Disable a user."""
        cmdr.users_disable(username)

    @main.group()
    def keys():
        """Manage SSH keys used for git push."""

    @keys.command("list")
    @limit_option
    @click.pass_obj
    def keys_list(cmdr, limit):
        """List SSH keys for the logged in user."""
        cmdr.keys_list(limit)

    @keys.command("add")
    @click.argument("filename", required=False, default="")
    @click.pass_obj
    def keys_add(cmdr, filename):
        """Add an SSH key, prompting for one from ~/.ssh when no file is given."""
        cmdr.keys_add(filename)

    @keys.command("remove")
    @click.argument("key_id")
    @click.pass_obj
    def keys_remove(cmdr, key_id):
        """Remove an SSH key."""
        cmdr.keys_remove(key_id)

    @main.group()
    def perms():
        """Manage permissions for applications."""

    @perms.command("list")
    @app_option
    @click.option("--admin", is_flag=True, help="List system administrators instead.")
    @limit_option
    @click.pass_obj
    def perms_list(cmdr, app_id, admin, limit):
        """List app collaborators or administrators."""
        cmdr.perms_list(app_id, admin, limit)

    @perms.command("create")
    @click.argument("username")
    @click.argument("permissions", required=False, default="")
    @app_option
    @click.option("--admin", is_flag=True, help="Grant system administrator rights.")
    @click.pass_obj
    def perms_create(cmdr, username, permissions, app_id, admin):
        """Give a user permissions on an app."""
        cmdr.perms_create(app_id, username, permissions, admin)

    @perms.command("update")
    @click.argument("username")
    @click.argument("permissions")
    @app_option
    @click.pass_obj
    def perms_update(cmdr, username, permissions, app_id):
        """Change a user's permissions on an app."""
        cmdr.perms_update(app_id, username, permissions)

    @perms.command("delete")
    @click.argument("username")
    @app_option
    @click.option("--admin", is_flag=True, help="Revoke system administrator rights.")
    @click.pass_obj
    def perms_delete(cmdr, username, app_id, admin):
        """Revoke a user's permissions."""
        cmdr.perms_delete(app_id, username, admin)
