"""Installed applications, discovered from freedesktop desktop entries."""

from __future__ import annotations

import getpass
import glob
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

_ICON_EXTENSIONS = ("png", "svg", "xpm")


@dataclass
class AppData:
    """An application the launcher can start; ``icon_path`` is None without an icon."""

    id: str
    name: str
    icon_path: Path | None
    keywords: list[str] = field(default_factory=list)
    tag: str = ""


@dataclass
class ClipboardWatcher:
    """Whether clipboard changes are currently being recorded."""

    enabled: bool = True

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False


class DesktopFileErrorKind(Enum):
    FILE_NOT_FOUND = "file not found"
    NO_DESKTOP_ENTRY = "no desktop entry"
    INVALID_FORMAT = "invalid format"
    HIDDEN_FILE = "hidden file"


class DesktopFileError(Exception):
    """A desktop entry could not be used as an application."""

    def __init__(self, kind: DesktopFileErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind


def _parse_entry(path: Path) -> dict[str, dict[str, str]]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DesktopFileError(DesktopFileErrorKind.INVALID_FORMAT) from exc
    sections: dict[str, dict[str, str]] = {}
    current: dict[str, str] | None = None
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if stripped.startswith("[") and stripped.endswith("]"):
            current = sections.setdefault(stripped[1:-1], {})
            continue
        key, sep, value = stripped.partition("=")
        if not sep or current is None:
            raise DesktopFileError(DesktopFileErrorKind.INVALID_FORMAT)
        current.setdefault(key.strip(), value.strip())
    return sections


def _default_icon_dirs(environ: Mapping[str, str] | None = None) -> list[Path]:
    env = os.environ if environ is None else environ
    home = Path.home()
    data_home = Path(env.get("XDG_DATA_HOME") or home / ".local/share")
    data_dirs = (env.get("XDG_DATA_DIRS") or "/usr/local/share:/usr/share").split(":")
    dirs = [data_home / "icons", home / ".icons"]
    dirs += [Path(d) / "icons" for d in data_dirs if d]
    dirs.append(Path("/usr/share/pixmaps"))
    return dirs


@dataclass
class ApplicationDesktopFile:
    name: str
    icon: str | None = None
    keywords: list[str] = field(default_factory=list)

    @classmethod
    def from_path(cls, path: str | Path) -> ApplicationDesktopFile:
        """Read the ``[Desktop Entry]`` section of a desktop file."""
        section = _parse_entry(Path(path)).get("Desktop Entry", {})
        name = section.get("Name")
        if name is None:
            raise DesktopFileError(DesktopFileErrorKind.NO_DESKTOP_ENTRY)
        keywords_raw = section.get("Keywords")
        keywords = keywords_raw.split(";") if keywords_raw is not None else []
        no_display = section.get("NoDisplay", "false")
        if no_display not in ("true", "false"):
            raise DesktopFileError(DesktopFileErrorKind.INVALID_FORMAT)
        if no_display == "true":
            # Hidden entries belong to system utilities that cannot be launched.
            raise DesktopFileError(DesktopFileErrorKind.HIDDEN_FILE)
        return cls(name=name, icon=section.get("Icon"), keywords=keywords)

    def resolve_icon(self, search_dirs: Iterable[str | Path] | None = None) -> Path | None:
        """Find the icon file named by the entry, or None."""
        if self.icon is None:
            return None
        candidate = Path(self.icon)
        if candidate.is_absolute():
            return candidate if candidate.is_file() else None
        dirs = _default_icon_dirs() if search_dirs is None else search_dirs
        pattern_name = glob.escape(self.icon)
        for directory in map(Path, dirs):
            if not directory.is_dir():
                continue
            for ext in _ICON_EXTENSIONS:
                matches = sorted(p for p in directory.rglob(f"{pattern_name}.{ext}") if p.is_file())
                if matches:
                    return matches[0]
        return None


def get_application_data(
    path: str | Path, search_dirs: Iterable[str | Path] | None = None
) -> AppData | None:
    """Describe the application of a desktop file, or None if it is not one."""
    path = Path(path)
    if not path.name:
        return None
    try:
        entry = ApplicationDesktopFile.from_path(path)
    except DesktopFileError:
        return None
    return AppData(
        id=path.name,
        name=entry.name,
        icon_path=entry.resolve_icon(search_dirs),
        keywords=list(entry.keywords),
        tag="Application",
    )


def get_application_folders(
    environ: Mapping[str, str] | None = None, username: str | None = None
) -> list[Path]:
    """Return the existing data directories that may hold desktop files."""
    env = os.environ if environ is None else environ
    dirs: list[Path] = []
    data_home = env.get("XDG_DATA_HOME")
    if data_home is not None:
        if Path(data_home).exists():
            dirs.append(Path(data_home))
    else:
        user = username if username is not None else getpass.getuser()
        share_dir = Path("/home") / user / ".local/share"
        if share_dir.exists():
            dirs.append(share_dir)
    data_dirs = env.get("XDG_DATA_DIRS")
    if data_dirs is not None:
        dirs.extend(Path(part) for part in data_dirs.split(":") if part and Path(part).exists())
    else:
        dirs.extend(p for p in (Path("/usr/share"), Path("/usr/local/share")) if p.exists())
    return dirs


def get_application_files(folders: Iterable[str | Path] | None = None) -> list[Path]:
    """Return every ``.desktop`` file below the given folders."""
    if folders is None:
        folders = get_application_folders()
    files: list[Path] = []
    for folder in folders:
        for root, dirnames, filenames in os.walk(folder):
            dirnames.sort()
            files.extend(
                Path(root) / name for name in sorted(filenames) if Path(name).suffix == ".desktop"
            )
    return files


def get_frontmost_application_data() -> AppData | None:
    """The frontmost application is not known on this platform."""
    return None