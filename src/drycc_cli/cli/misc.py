"""version, update, shortcuts and help commands."""

from __future__ import annotations

import click


def register_misc_commands(main: click.Group) -> None:
    """Register the top-level utility commands."""

    @main.command("version")
    @click.option("--all", "all_info", is_flag=True, help="Include API versions of client and controller.")
    @click.pass_obj
    def version(cmdr, all_info):
        """Display the client version."""
        cmdr.version(all_info)

    @main.command("update")
    @click.option("-d", "--dry-run", is_flag=True, help="Only print the version that would be installed.")
    @click.pass_obj
    def update(cmdr, dry_run):
        """Upgrade the client to the latest release."""
        cmdr.update(dry_run)

    @main.group()
    def shortcuts():
        """Show valid shortcuts for commands."""

    @shortcuts.command("list")
    @click.pass_obj
    def shortcuts_list(cmdr):
        """List every shortcut and the command it expands to."""
        cmdr.shortcuts_list()

    @main.command("help")
    @click.pass_context
    def help_(ctx):
        """Show this message."""
        click.echo(ctx.parent.get_help())
