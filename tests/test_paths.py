from pathlib import Path

import pytest

from lounge.paths import NAME, Paths, paths


def test_linux_layout():
    result = Paths.for_user("alice", "linux")
    assert result.cache == Path("/home/alice/.cache") / NAME
    assert result.config == Path("/home/alice/.config") / NAME
    assert result.data == Path("/home/alice/.local/share") / NAME


def test_darwin_layout():
    result = Paths.for_user("alice", "darwin")
    assert result.cache == Path("/Users/alice/Library/Caches") / NAME
    assert result.data == Path("/Users/alice/Library/Application Support") / NAME
    assert result.config == Path("/Users/alice/.config") / NAME


def test_path_env_contains_nix_profile_of_user():
    result = Paths.for_user("bob", "linux")
    parts = result.path_env.split(":")
    assert parts[:2] == ["/opt/homebrew/bin", "/usr/local/bin"]
    assert parts[2] == str(Path("/home/bob/.nix-profile/bin"))


def test_unknown_system_rejected():
    with pytest.raises(ValueError):
        Paths.for_user("alice", "plan9")


def test_paths_is_cached():
    first = paths()
    assert paths() is first
    assert first.cache.name == NAME