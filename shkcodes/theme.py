"""Theme override for shkcodes.

The external theme ships a complete theme object (colors, fonts, sizes,
spacing). The site only customizes a few color tokens: a brand accent for
both color modes and a darker dark-mode background. Everything else is
inherited from the base theme through a deep merge.

Key names:
- BASE_THEME: Default theme of the minimal-blog theme package.
- THEME_OVERRIDE: The site's color overrides.
- build_theme: Deep-merge overrides onto a base theme.
- load_theme: Build the theme with an optional project theme.yaml on top.
- color_mode_palette: Resolve the flat palette of one color mode.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .merge import deep_merge

THEME_FILENAME = "theme.yaml"
DEFAULT_MODE = "default"


class ThemeError(Exception):
    """Error loading or resolving the theme.

    Attributes:
        source_path: Path to the theme file involved, if any.
        message: Human-readable error message.
        original_error: The original exception that was caught, if any.
    """

    def __init__(
        self,
        source_path: Path | None,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}" if source_path else message)


BASE_THEME: dict[str, Any] = {
    "initialColorMode": "light",
    "useCustomProperties": True,
    "colors": {
        "text": "#2d3748",
        "primary": "#6b46c1",
        "secondary": "#5f6c80",
        "toggleIcon": "#2d3748",
        "background": "#fff",
        "heading": "#000",
        "divide": "#cbd5e0",
        "modes": {
            "dark": {
                "text": "#cbd5e0",
                "primary": "#9f7aea",
                "secondary": "#7f8ea3",
                "toggleIcon": "#cbd5e0",
                "background": "#1A202C",
                "heading": "#fff",
                "divide": "#2d3748",
                "muted": "#2d3748",
            },
        },
    },
    "fonts": {
        "body": (
            '-apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, '
            '"Helvetica Neue", Arial, "Noto Sans", sans-serif'
        ),
        "heading": "inherit",
        "monospace": 'Menlo, Monaco, Consolas, "Liberation Mono", "Courier New", monospace',
    },
    "fontSizes": ["0.875rem", "1rem", "1.25rem", "1.5rem", "1.875rem", "2.25rem", "3rem"],
    "space": [0, "0.25rem", "0.5rem", "1rem", "2rem", "4rem", "8rem"],
    "breakpoints": ["400px", "600px", "900px", "1200px", "1600px"],
    "layout": {
        "container": {
            "padding": [3, 4],
            "maxWidth": "1024px",
        },
    },
}

THEME_OVERRIDE: dict[str, Any] = {
    "colors": {
        "initialColorMode": "light",
        "primary": "#FF5370",
        "secondary": "#FF5370",
        "modes": {
            "dark": {
                "primary": "#FF5370",
                "secondary": "#40F4AD",
                "background": "#191919",
            },
        },
    },
}


def build_theme(
    *overrides: Mapping[str, Any],
    base: Mapping[str, Any] = BASE_THEME,
) -> dict[str, Any]:
    """Merge theme overrides onto a base theme.

    Without explicit overrides the site's THEME_OVERRIDE is applied. The
    base and the overrides are left untouched.

    Args:
        *overrides: Partial themes applied left to right.
        base: Complete base theme.

    Returns:
        The merged theme.
    """
    if not overrides:
        overrides = (THEME_OVERRIDE,)
    return deep_merge({}, base, *overrides)


def load_theme(project_root: Path) -> dict[str, Any]:
    """Build the site theme, applying theme.yaml from the project root.

    The file, when present, is merged after THEME_OVERRIDE, so it can
    adjust single tokens without restating the site's palette.

    Raises:
        ThemeError: If theme.yaml cannot be parsed or is not a mapping.
    """
    theme_path = project_root / THEME_FILENAME
    if not theme_path.exists():
        return build_theme()
    with open(theme_path, encoding="utf-8") as f:
        try:
            loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ThemeError(theme_path, f"Invalid YAML: {exc}", exc) from exc
    if not isinstance(loaded, dict):
        raise ThemeError(theme_path, "Expected a mapping at the top level")
    return build_theme(THEME_OVERRIDE, loaded)


def color_modes(theme: Mapping[str, Any]) -> list[str]:
    """List the color modes a theme defines, the default mode first."""
    colors = theme.get("colors") or {}
    modes = colors.get("modes") or {}
    default = initial_color_mode(theme)
    return [default] + [name for name in modes if name != default]


def initial_color_mode(theme: Mapping[str, Any]) -> str:
    # theme-ui reads it from the root; the override nests it under colors
    colors = theme.get("colors") or {}
    return str(colors.get("initialColorMode") or theme.get("initialColorMode") or DEFAULT_MODE)


def color_mode_palette(theme: Mapping[str, Any], mode: str | None = None) -> dict[str, Any]:
    """Resolve the flat color palette for one color mode.

    The root colors describe the initial mode. Any other mode overlays its
    entry in ``colors.modes`` onto the root colors.

    Args:
        theme: A complete theme, usually the result of build_theme.
        mode: Mode name; None or the initial mode name selects root colors.

    Returns:
        Mapping of color token to value, without the ``modes`` table.

    Raises:
        ThemeError: If the mode is not defined by the theme.
    """
    colors = dict(theme.get("colors") or {})
    modes = colors.pop("modes", None) or {}
    colors.pop("initialColorMode", None)
    if mode is None or mode in (DEFAULT_MODE, initial_color_mode(theme)):
        return deep_merge(colors)
    if mode not in modes:
        known = ", ".join(color_modes(theme))
        raise ThemeError(None, f"Unknown color mode {mode!r} (available: {known})")
    return deep_merge(colors, modes[mode])
