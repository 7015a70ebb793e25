"""
drycc command line.

The main Click group is defined here and every command family is
registered from its own module. ``run`` is the root entry point: it
normalises argv (help/version rewrites, shortcuts, ``--config``),
splits ``group:verb`` tokens into Click's nested form, hands unknown
commands to ``drycc-<command>`` plugins and maps errors to exit codes.

Entry point: drycc_cli.cli:cli
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, List, Optional, Sequence

import click

from .. import DEBUG_ENV, PROG_NAME
from ..args import HELP_FLAGS, extract_config_flag, parse_args
from ..commands import DryccCmd
from ..dispatch import dispatch
from ..errors import DryccError
from ._common import default_verb, err_console

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@click.group()
def main():
    """Drycc Workflow client.

    Deploy and manage applications on a Drycc Workflow controller.
    Commands take the form group:verb, e.g. apps:create or config:set.
    """


# ---------------------------------------------------------------------------
# Register all command groups/commands from modular files
# ---------------------------------------------------------------------------

from .apps import register_apps_commands  # noqa: E402
from .auth import register_auth_commands  # noqa: E402
from .builds import register_builds_commands  # noqa: E402
from .config import register_config_commands  # noqa: E402
from .misc import register_misc_commands  # noqa: E402
from .ps import register_ps_commands  # noqa: E402
from .routing import register_routing_commands  # noqa: E402
from .settings import register_settings_commands  # noqa: E402
from .volumes import register_volumes_commands  # noqa: E402

register_apps_commands(main)
register_auth_commands(main)
register_builds_commands(main)
register_config_commands(main)
register_ps_commands(main)
register_routing_commands(main)
register_settings_commands(main)
register_volumes_commands(main)
register_misc_commands(main)


def configure_logging() -> None:
    """Debug logging to stderr when ``DRYCC_DEBUG`` is set."""
    value = os.environ.get(DEBUG_ENV, "")
    if value and value.lower() not in ("0", "false"):
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, stream=sys.stderr)


def expand_command(args: List[str], command: str) -> List[str]:
    """``tls:force:enable`` -> ``tls force enable``; bare groups get their default verb."""
    head = [part for part in args[0].split(":") if part]
    args = head + args[1:]
    group = main.commands.get(command)
    if len(head) == 1 and isinstance(group, click.Group):
        if any(arg in HELP_FLAGS for arg in args[1:]):
            return args
        verb = default_verb(command)
        args.insert(1, verb if verb in group.commands else "--help")
    return args


def print_usage() -> None:
    with click.Context(main, info_name=PROG_NAME) as ctx:
        click.echo(main.get_help(ctx), err=True)


def run(argv: Optional[Sequence[str]] = None, cmdr: Any = None) -> int:
    """Run one ``drycc`` invocation and return its exit code.

    Args:
        argv: Arguments without the program name.
        cmdr: Command runner; a ``DryccCmd`` for the selected profile by default.
    """
    configure_logging()
    try:
        config, args = extract_config_flag(list(argv or []))
    except DryccError as exc:
        err_console.print(f"Error: {exc}", markup=False)
        return 1
    args, command = parse_args(args)
    if not args:
        args, command = ["help"], "help"

    if command not in main.commands:
        logger.debug("No built-in command %s, looking for a plugin", command)
        if dispatch(command, args):
            return 0
        print_usage()
        return 1

    if cmdr is None:
        cmdr = DryccCmd(config_file=config)
    elif config is not None:
        cmdr.config_file = config

    try:
        rv = main.main(expand_command(args, command), prog_name=PROG_NAME, obj=cmdr, standalone_mode=False)
    except click.exceptions.Abort:
        err_console.print("Aborted!", markup=False)
        return 1
    except click.ClickException as exc:
        exc.show()
        return 1
    except (DryccError, OSError) as exc:
        err_console.print(f"Error: {exc}", markup=False)
        return 1
    return rv if isinstance(rv, int) else 0


def cli() -> None:
    sys.exit(run(sys.argv[1:]))
