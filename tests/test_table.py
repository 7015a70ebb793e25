"""Tests for the plain-text renderers."""

from __future__ import annotations

from drycc_cli.table import NONE, Section, limit_count, render_kv, render_table, safe_get_string


class TestRenderTable:
    """Columns are padded to the widest cell plus four spaces."""

    def test_alignment(self):
        text = render_table(["NAME", "OWNER"], [["web", "alice"], ["worker-long", "bob"]])
        assert text == (
            f"{'NAME':<15}OWNER\n"
            f"{'web':<15}alice\n"
            f"{'worker-long':<15}bob\n"
        )

    def test_empty_cells(self):
        text = render_table(["A", "B"], [["x", ""], ["y", None]])
        assert text.splitlines()[1] == f"x    {NONE}"
        assert text.splitlines()[2] == f"y    {NONE}"

    def test_short_rows_padded(self):
        text = render_table(["A", "B"], [["x"]])
        assert text.splitlines()[1] == f"x    {NONE}"

    def test_no_trailing_whitespace(self):
        for line in render_table(["KEY"], [["a"], ["bb"]]).splitlines():
            assert line == line.rstrip()

    def test_numbers_stringified(self):
        assert render_table(["N"], [[3]]) == "N\n3\n"


class TestRenderKv:
    """Key/value blocks align on the longest key."""

    def test_alignment(self):
        assert render_kv([("App", "demo"), ("Owner", "alice")]) == (
            f"{'App:':<9}demo\n"
            f"{'Owner:':<9}alice\n"
        )

    def test_bare_label(self):
        assert render_kv([("Healthchecks", None)]) == "Healthchecks:\n"

    def test_empty(self):
        assert render_kv([]) == ""


class TestSection:
    """Nested views used by info commands."""

    def test_nested_blocks(self):
        view = Section()
        view.add("App", "demo").add("Processes")
        view.add("Name", "demo-web-1", level=1)
        text = view.render()
        lines = text.splitlines()
        assert lines[0] == f"{'App:':<13}demo"
        assert lines[1] == "Processes:"
        assert lines[2].startswith(" " * 13 + "Name:")

    def test_blank_line(self):
        view = Section().add("A", "1").blank().add("B", "2")
        assert view.render().splitlines()[1] == ""

    def test_empty_key_has_no_colon(self):
        text = Section().add("Path").add("", "web: /data", level=1).render()
        assert ":" not in text.splitlines()[1].split("web")[0]


class TestHelpers:
    """Small formatting helpers."""

    def test_safe_get_string(self):
        assert safe_get_string("") == NONE
        assert safe_get_string(0) == "0"

    def test_limit_count(self):
        assert limit_count(3, 3) == "\n"
        assert limit_count(3, 10) == " (3 of 10)\n"
