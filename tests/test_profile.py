"""Tests for the on-disk session profile.

Covers:
- resolving bare profile names and explicit JSON paths
- DRYCC_PROFILE selection
- save / load round trip with owner-only permissions
- missing and corrupt profile files
- response_limit normalisation
"""

from __future__ import annotations

import json
import stat
from pathlib import Path

import pytest

from drycc_cli import settings
from drycc_cli.errors import CorruptProfileError, NoSessionError
from drycc_cli.settings import Profile


def _profile(**overrides):
    data = {
        "username": "alice",
        "controller": "http://drycc.example.com",
        "token": "abc",
    }
    data.update(overrides)
    return Profile(**data)


class TestResolvePath:
    """Profile identifiers map to files."""

    def test_default_profile_lives_under_home(self, drycc_home):
        assert settings.resolve_path() == drycc_home / ".drycc" / "client.json"

    def test_bare_name(self, drycc_home):
        assert settings.resolve_path("staging") == drycc_home / ".drycc" / "staging.json"

    def test_explicit_json_path(self, drycc_home, tmp_path):
        target = tmp_path / "elsewhere" / "mine.json"
        assert settings.resolve_path(str(target)) == target

    def test_relative_path_without_suffix(self, drycc_home):
        assert settings.resolve_path("profiles/staging") == Path("profiles/staging")

    def test_json_name_without_directory(self, drycc_home):
        assert settings.resolve_path("staging.json") == Path("staging.json")

    def test_environment_selects_profile(self, drycc_home, monkeypatch):
        monkeypatch.setenv("DRYCC_PROFILE", "prod")
        assert settings.resolve_path() == drycc_home / ".drycc" / "prod.json"

    def test_explicit_name_beats_environment(self, drycc_home, monkeypatch):
        monkeypatch.setenv("DRYCC_PROFILE", "prod")
        assert settings.resolve_path("dev").name == "dev.json"


class TestSaveAndLoad:
    """Persisting a session."""

    def test_round_trip(self, drycc_home):
        path = settings.save(_profile(ssl_verify=False, response_limit=25))
        loaded = settings.load()
        assert path.exists()
        assert loaded.username == "alice"
        assert loaded.ssl_verify is False
        assert loaded.response_limit == 25

    def test_file_is_owner_only(self, drycc_home):
        path = settings.save(_profile())
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_written_as_json(self, drycc_home):
        path = settings.save(_profile())
        data = json.loads(path.read_text())
        assert data["controller"] == "http://drycc.example.com"
        assert data["token"] == "abc"

    def test_trailing_slash_dropped(self):
        assert _profile(controller="https://drycc.example.com/").controller == "https://drycc.example.com"

    def test_relative_controller_rejected(self):
        with pytest.raises(ValueError):
            _profile(controller="drycc.example.com")

    def test_host_includes_port(self):
        assert _profile(controller="http://drycc.example.com:8000").host == "drycc.example.com:8000"


class TestLoadErrors:
    """Missing and damaged files."""

    def test_missing_profile(self, drycc_home):
        with pytest.raises(NoSessionError) as exc:
            settings.load()
        assert "drycc login" in str(exc.value)

    def test_corrupt_profile(self, drycc_home):
        path = settings.resolve_path()
        path.parent.mkdir(parents=True)
        path.write_text("{not json")
        with pytest.raises(CorruptProfileError):
            settings.load()

    def test_undecodable_profile(self, drycc_home):
        path = settings.resolve_path()
        path.parent.mkdir(parents=True)
        path.write_bytes(b"\xff\xfe{not json")
        with pytest.raises(CorruptProfileError):
            settings.load()

    def test_incomplete_profile(self, drycc_home):
        path = settings.resolve_path()
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"username": "alice"}))
        with pytest.raises(CorruptProfileError):
            settings.load()


class TestResponseLimit:
    """Non-positive or missing limits fall back to the default page size."""

    @pytest.mark.parametrize("value", [0, -5, None, "many"])
    def test_fallback(self, value):
        assert _profile(response_limit=value).response_limit == 100

    def test_kept_when_positive(self):
        assert _profile(response_limit=7).response_limit == 7


class TestDelete:
    """Logging out removes the file."""

    def test_delete_removes_file(self, drycc_home):
        path = settings.save(_profile())
        settings.delete()
        assert not path.exists()

    def test_delete_missing_is_quiet(self, drycc_home):
        settings.delete()
