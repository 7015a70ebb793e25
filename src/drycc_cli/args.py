"""Top-level argv normalisation: help/version rewrites, shortcuts, ``--config``."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .errors import ValidationError
from .shortcuts import expand

HELP_FLAGS = ("--help", "-h")
VERSION_FLAGS = ("--version", "-v")


def parse_args(argv: Sequence[str]) -> Tuple[List[str], str]:
    """Normalise argv and find the command token.

    Returns:
        tuple: ``(argv, command)`` where ``command`` is the part of the
        first element before ``:`` after shortcut expansion.
    """
    args = list(argv)
    if len(args) == 1:
        if args[0] in HELP_FLAGS:
            args = ["help"]
        elif args[0] in VERSION_FLAGS:
            args = ["version"]

    if len(args) > 1 and args[0] in ("help",) + HELP_FLAGS:
        args = args[1:] + ["--help"]

    if args:
        args[0] = expand(args[0])
        return args, args[0].split(":", 1)[0]
    return args, ""


def extract_config_flag(argv: Sequence[str]) -> Tuple[Optional[str], List[str]]:
    """Pull ``-c/--config`` and its value out of argv.

    Anything after a ``--`` separator is left alone.

    Returns:
        tuple: ``(config value or None, remaining argv)``.

    Raises:
        ValidationError: The flag is the last argument and has no value.
    """
    config: Optional[str] = None
    remaining: List[str] = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--":
            remaining.extend(argv[i:])
            break
        if arg.startswith("--config=") or arg.startswith("-c="):
            config = arg.split("=", 1)[1]
        elif arg in ("--config", "-c"):
            if i + 1 >= len(argv):
                raise ValidationError(f"option {arg} requires a value", arg)
            config = argv[i + 1]
            i += 1
        else:
            remaining.append(arg)
        i += 1
    return config, remaining
