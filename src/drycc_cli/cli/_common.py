"""Shared options and consoles for every command module."""

from __future__ import annotations

import click
from rich.console import Console

err_console = Console(stderr=True, highlight=False, soft_wrap=True)

# group -> verb run when the group is given without one
DEFAULT_VERBS = {
    "autodeploy": "info",
    "autorollback": "info",
    "canary": "info",
    "maintenance": "info",
    "routing": "info",
    "tls": "info",
}

app_option = click.option(
    "-a", "--app", "app_id", default=None, help="The uniquely identifiable name for the application."
)
limit_option = click.option(
    "-l", "--limit", type=int, default=None, help="The maximum number of results to display."
)
ptype_option = click.option("--ptype", default="", help="The process type, e.g. web or worker.")
confirm_option = click.option(
    "--confirm", default="", help="Skip the prompt by passing the expected answer."
)


def default_verb(group: str) -> str:
    return DEFAULT_VERBS.get(group, "list")


# trailing command words are passed through untouched
PASSTHROUGH = {"ignore_unknown_options": True, "allow_interspersed_args": False}
