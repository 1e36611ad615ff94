"""Colour themes: the built-in Catppuccin flavours and user theme files."""

from __future__ import annotations

import colorsys
import logging
import tomllib
from dataclasses import dataclass, replace
from enum import Enum, StrEnum
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)


class ThemeError(ValueError):
    """A theme description could not be understood."""


COLOR_NAMES = (
    "flamingo", "pink", "mauve", "red", "maroon", "peach", "yellow", "green",
    "teal", "sky", "sapphire", "blue", "lavender", "text", "subtext1",
    "subtext0", "overlay2", "overlay1", "overlay0", "surface2", "surface1",
    "surface0", "base", "mantle", "crust",
)

_PALETTES: dict[str, tuple[str, ...]] = {
    "latte": (
        "#dd7878", "#ea76cb", "#8839ef", "#d20f39", "#e64553", "#fe640b",
        "#df8e1d", "#40a02b", "#179299", "#04a5e5", "#209fb5", "#1e66f5",
        "#7287fd", "#4c4f69", "#5c5f77", "#6c6f85", "#7c7f93", "#8c8fa1",
        "#9ca0b0", "#acb0be", "#bcc0cc", "#ccd0da", "#eff1f5", "#e6e9ef",
        "#dce0e8",
    ),
    "frappe": (
        "#eebebe", "#f4b8e4", "#ca9ee6", "#e78284", "#ea999c", "#ef9f76",
        "#e5c890", "#a6d189", "#81c8be", "#99d1db", "#85c1dc", "#8caaee",
        "#babbf1", "#c6d0f5", "#b5bfe2", "#a5adce", "#949cbb", "#838ba7",
        "#737994", "#626880", "#51576d", "#414559", "#303446", "#292c3c",
        "#232634",
    ),
    "macchiato": (
        "#f0c6c6", "#f5bde6", "#c6a0f6", "#ed8796", "#ee99a0", "#f5a97f",
        "#eed49f", "#a6da95", "#8bd5ca", "#91d7e3", "#7dc4e4", "#8aadf4",
        "#b7bdf8", "#cad3f5", "#b8c0e0", "#a5adcb", "#939ab7", "#8087a2",
        "#6e738d", "#5b6078", "#494d64", "#363a4f", "#24273a", "#1e2030",
        "#181926",
    ),
    "mocha": (
        "#f2cdcd", "#f5c2e7", "#cba6f7", "#f38ba8", "#eba0ac", "#fab387",
        "#f9e2af", "#a6e3a1", "#94e2d5", "#89dceb", "#74c7ec", "#89b4fa",
        "#b4befe", "#cdd6f4", "#bac2de", "#a6adc8", "#9399b2", "#7f849c",
        "#6c7086", "#585b70", "#45475a", "#313244", "#1e1e2e", "#181825",
        "#11111b",
    ),
}


@dataclass(frozen=True)
class Hsla:
    """A colour as hue, saturation, lightness and alpha, each in 0..1."""

    hue: float
    saturation: float
    lightness: float
    alpha: float = 1.0

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float, a: float = 1.0) -> Hsla:
        """Build from red, green and blue components in 0..1."""
        hue, lightness, saturation = colorsys.rgb_to_hls(r, g, b)
        return cls(hue, saturation, lightness, a)

    @classmethod
    def from_hex(cls, text: str) -> Hsla:
        """Parse ``#rgb``, ``#rgba``, ``#rrggbb`` or ``#rrggbbaa``."""
        digits = text.strip().removeprefix("#")
        if len(digits) in (3, 4):
            digits = "".join(ch * 2 for ch in digits)
        if len(digits) not in (6, 8):
            raise ThemeError(f"invalid colour: {text!r}")
        try:
            channels = [int(digits[i:i + 2], 16) / 255.0 for i in range(0, len(digits), 2)]
        except ValueError:
            raise ThemeError(f"invalid colour: {text!r}") from None
        return cls.from_rgb(*channels)

    def to_rgb(self) -> tuple[float, float, float, float]:
        r, g, b = colorsys.hls_to_rgb(self.hue, self.lightness, self.saturation)
        return r, g, b, self.alpha

    def fade_out(self, factor: float) -> Hsla:
        """Return the colour with its alpha reduced by ``factor`` (clamped to 0..1)."""
        factor = min(max(factor, 0.0), 1.0)
        return replace(self, alpha=self.alpha * (1.0 - factor))


class BackgroundKind(StrEnum):
    BLURRED = "blurred"
    TRANSPARENT = "transparent"
    OPAQUE = "opaque"


@dataclass(frozen=True)
class WindowBackground:
    """How the launcher window background is drawn."""

    kind: BackgroundKind = BackgroundKind.OPAQUE
    level: float = 1.0

    def opacity(self) -> float:
        return 1.0 if self.kind is BackgroundKind.OPAQUE else self.level

    @classmethod
    def from_dict(cls, data: Any) -> WindowBackground:
        if not isinstance(data, dict):
            raise ThemeError("window_background must be a table")
        try:
            kind = BackgroundKind(data.get("type"))
        except ValueError:
            raise ThemeError(f"unknown window background: {data.get('type')!r}") from None
        if kind is BackgroundKind.OPAQUE:
            return cls(kind)
        level = data.get("opacity")
        if isinstance(level, bool) or not isinstance(level, (int, float)):
            raise ThemeError(f"{kind} background needs a numeric opacity")
        return cls(kind, float(level))


class Appearance(Enum):
    LIGHT = "light"
    VIBRANT_LIGHT = "vibrant_light"
    DARK = "dark"
    VIBRANT_DARK = "vibrant_dark"

    @property
    def is_dark(self) -> bool:
        return self in (Appearance.DARK, Appearance.VIBRANT_DARK)


@dataclass(frozen=True)
class ThemeSettings:
    """Names of the themes used for light and dark appearance."""

    light: str = "Catppuccin Latte"
    dark: str = "Catppuccin Mocha"

    @classmethod
    def from_dict(cls, data: Any) -> ThemeSettings:
        if not isinstance(data, dict):
            raise ValueError("theme settings must be a mapping")
        light, dark = data.get("light"), data.get("dark")
        if not isinstance(light, str) or not isinstance(dark, str):
            raise ValueError("theme settings need string 'light' and 'dark'")
        return cls(light, dark)


def _parse_color(field: str, value: Any) -> Hsla:
    if isinstance(value, str):
        return Hsla.from_hex(value)
    if isinstance(value, dict):
        try:
            return Hsla(
                float(value["h"]), float(value["s"]), float(value["l"]), float(value["a"])
            )
        except (KeyError, TypeError, ValueError):
            raise ThemeError(f"invalid colour for {field}") from None
    raise ThemeError(f"invalid colour for {field}")


@dataclass(frozen=True)
class Theme:
    name: str
    font_sans: str
    font_mono: str
    window_background: WindowBackground | None
    flamingo: Hsla
    pink: Hsla
    mauve: Hsla
    red: Hsla
    maroon: Hsla
    peach: Hsla
    yellow: Hsla
    green: Hsla
    teal: Hsla
    sky: Hsla
    sapphire: Hsla
    blue: Hsla
    lavender: Hsla
    text: Hsla
    subtext1: Hsla
    subtext0: Hsla
    overlay2: Hsla
    overlay1: Hsla
    overlay0: Hsla
    surface2: Hsla
    surface1: Hsla
    surface0: Hsla
    base: Hsla
    mantle: Hsla
    crust: Hsla

    @classmethod
    def from_flavor(cls, flavor: str) -> Theme:
        """Build the theme of a Catppuccin flavour such as ``"mocha"``."""
        key = flavor.lower()
        try:
            palette = _PALETTES[key]
        except KeyError:
            raise ValueError(f"unknown flavor: {flavor!r}") from None
        colors = {name: Hsla.from_hex(value) for name, value in zip(COLOR_NAMES, palette)}
        return cls(
            name=f"Catppuccin {key[:1].upper()}{key[1:]}",
            font_sans="Inter",
            font_mono="JetBrains Mono",
            window_background=WindowBackground(BackgroundKind.BLURRED, 0.9),
            **colors,
        )

    @classmethod
    def from_toml(cls, text: str) -> Theme:
        """Parse a theme file."""
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ThemeError(str(exc)) from exc
        strings = {}
        for field in ("name", "font_sans", "font_mono"):
            value = data.get(field)
            if not isinstance(value, str):
                raise ThemeError(f"missing or invalid field: {field}")
            strings[field] = value
        colors = {}
        for field in COLOR_NAMES:
            if field not in data:
                raise ThemeError(f"missing field: {field}")
            colors[field] = _parse_color(field, data[field])
        background = data.get("window_background")
        return cls(
            window_background=None if background is None else WindowBackground.from_dict(background),
            **strings,
            **colors,
        )


def builtin_themes() -> list[Theme]:
    """Return the Catppuccin flavours, lightest first."""
    return [Theme.from_flavor(name) for name in _PALETTES]


def _user_themes(directory: Path) -> list[Theme]:
    try:
        entries = sorted(directory.iterdir())
    except OSError as exc:
        log.error("Failed to read themes: %s", exc)
        return []
    themes = []
    for entry in entries:
        try:
            themes.append(Theme.from_toml(entry.read_text(encoding="utf-8")))
        except (OSError, UnicodeDecodeError) as exc:
            log.error("Failed to read theme: %s", exc)
        except ThemeError as exc:
            log.error("Failed to parse theme: %s", exc)
    return themes


def list_themes(config_dir: str | Path | None = None) -> list[Theme]:
    """Return the built-in themes followed by those in ``config_dir/themes``."""
    if config_dir is None:
        from lounge.paths import paths

        config_dir = paths().config
    return builtin_themes() + _user_themes(Path(config_dir) / "themes")


def _stored_settings() -> ThemeSettings:
    from lounge.db import db

    try:
        return ThemeSettings.from_dict(db().get("theme"))
    except ValueError:
        return ThemeSettings()


def select_theme(
    appearance: Appearance,
    settings: ThemeSettings | None = None,
    themes: list[Theme] | None = None,
) -> Theme:
    """Pick the configured theme for ``appearance``, or the first one available."""
    if settings is None:
        settings = _stored_settings()
    if themes is None:
        themes = list_themes()
    name = settings.dark if appearance.is_dark else settings.light
    for theme in themes:
        if theme.name == name:
            return theme
    log.error("Theme not found: %s", name)
    return themes[0]