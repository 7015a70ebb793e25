"""Plain-text table and key/value renderers for command output."""

from __future__ import annotations

from typing import IO, Any, Iterable, List, Mapping, Optional, Sequence, Tuple

NONE = "<none>"
PADDING = 4


def safe_get_string(value: Any) -> str:
    """``<none>`` for empty values, ``str(value)`` otherwise."""
    if value is None or value == "":
        return NONE
    return str(value)


def sort_keys(mapping: Mapping[str, Any]) -> List[str]:
    return sorted(mapping)


def render_table(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """Render rows under a header line.

    Every column is as wide as its widest cell plus four spaces; empty
    cells render as ``<none>``. Trailing whitespace is dropped per line.
    """
    cells: List[List[str]] = [[safe_get_string(c) for c in row] for row in rows]
    ncols = max([len(headers)] + [len(r) for r in cells]) if (headers or cells) else 0
    grid: List[List[str]] = []
    if headers:
        grid.append(list(headers) + [""] * (ncols - len(headers)))
    for row in cells:
        grid.append(row + [NONE] * (ncols - len(row)))

    widths = [0] * ncols
    for row in grid:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    lines = []
    for row in grid:
        line = "".join(cell.ljust(widths[i] + PADDING) for i, cell in enumerate(row))
        lines.append(line.rstrip() + "\n")
    return "".join(lines)


def print_table(out: IO[str], headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> None:
    out.write(render_table(headers, rows))


def render_kv(pairs: Iterable[Tuple[str, Any]], indent: str = "") -> str:
    """Render ``key:`` labels aligned on the longest key plus four spaces.

    A pair whose value is ``None`` renders as a bare section label, so
    nested blocks can follow it with a deeper ``indent``.
    """
    pairs = list(pairs)
    if not pairs:
        return ""
    column = max(len(key) for key, _ in pairs) + PADDING
    lines = []
    for key, value in pairs:
        label = f"{key}:"
        if value is None:
            lines.append(f"{indent}{label}\n")
        else:
            lines.append(f"{indent}{label.ljust(column)}{safe_get_string(value)}".rstrip() + "\n")
    return "".join(lines)


def print_kv(out: IO[str], pairs: Iterable[Tuple[str, Any]], indent: str = "") -> None:
    out.write(render_kv(pairs, indent))


def limit_count(shown: int, total: int) -> str:
    """Header suffix for paged listings: ``" (3 of 10)"`` when truncated."""
    if shown == total:
        return "\n"
    return f" ({shown} of {total})\n"


class Section:
    """Composite key/value view with nested blocks (used by ``apps:info``)."""

    def __init__(self) -> None:
        self._lines: List[Tuple[int, str, Optional[Any]]] = []

    def add(self, key: str, value: Any = None, level: int = 0) -> "Section":
        self._lines.append((level, key, value))
        return self

    def blank(self) -> "Section":
        self._lines.append((-1, "", None))
        return self

    def render(self) -> str:
        column = max((len(k) for lvl, k, _ in self._lines if lvl >= 0), default=0) + PADDING
        out = []
        for level, key, value in self._lines:
            if level < 0:
                out.append("\n")
                continue
            prefix = " " * (column * level)
            label = f"{key}:" if key else ""
            if value is None:
                out.append(f"{prefix}{label}\n")
            else:
                out.append(f"{prefix}{label.ljust(column)}{safe_get_string(value)}".rstrip() + "\n")
        return "".join(out)
