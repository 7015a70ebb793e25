"""
External subcommand dispatch.

An unknown command ``foo`` is handed to an executable named
``drycc-foo`` on PATH, replacing the current process.
"""

from __future__ import annotations

import logging
import os
import shutil
from typing import Callable, List, Optional, Sequence

from . import PROG_NAME

logger = logging.getLogger(__name__)

Execer = Callable[[str, List[str], dict], None]


def binary_name(command: str) -> str:
    return f"{PROG_NAME}-{command}"


def find_plugin(command: str) -> Optional[str]:
    """Absolute path of ``drycc-<command>`` on PATH, if any."""
    return shutil.which(binary_name(command))


def dispatch(
    command: str,
    argv: Sequence[str],
    execer: Execer = os.execvpe,
) -> bool:
    """Exec the external binary for ``command``.

    ``argv[0]`` of the form ``command:verb`` is passed on as ``verb``;
    a bare ``command`` is passed on unchanged.
    Returns False when no such binary exists; on success ``execer``
    replaces the process and never returns.
    """
    path = find_plugin(command)
    if path is None:
        return False

    args = list(argv)
    if args and args[0].startswith(f"{command}:"):
        args[0] = args[0][len(command) + 1:]

    logger.debug("Dispatching %s to %s %s", command, path, args)
    execer(path, [binary_name(command)] + args, dict(os.environ))
    return True
