"""Per-user locations for cache, configuration and data."""

from __future__ import annotations

import getpass
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

NAME = "loungy"

_HOME_ROOTS = {
    "darwin": Path("/Users"),
    "linux": Path("/home"),
}


@dataclass(frozen=True)
class Paths:
    """Directories and search path used by the launcher for one user."""

    path_env: str
    cache: Path
    config: Path
    data: Path

    @classmethod
    def for_user(cls, username: str, system: str = "linux") -> Paths:
        """Build the paths for ``username`` on ``system`` ("darwin" or "linux")."""
        try:
            root = _HOME_ROOTS[system]
        except KeyError:
            raise ValueError(f"unsupported system: {system!r}") from None
        user_dir = root / username
        path_env = f"/opt/homebrew/bin:/usr/local/bin:{user_dir}/.nix-profile/bin"
        if system == "darwin":
            cache = user_dir / "Library/Caches" / NAME
            data = user_dir / "Library/Application Support" / NAME
        else:
            cache = user_dir / ".cache" / NAME
            data = user_dir / ".local/share" / NAME
        return cls(
            path_env=path_env,
            cache=cache,
            config=user_dir / ".config" / NAME,
            data=data,
        )


@lru_cache(maxsize=1)
def paths() -> Paths:
    """Return the paths of the current user, computed once."""
    system = "darwin" if sys.platform == "darwin" else "linux"
    return Paths.for_user(getpass.getuser(), system)