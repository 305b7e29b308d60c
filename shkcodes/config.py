"""Site configuration descriptor for shkcodes.

This module describes the record handed to the external site generator at
build start: the site metadata and the ordered list of plugin activations.
The built-in defaults describe the shkcodes blog; a project may override any
part of them with a site.yaml file at its root.

Key names:
- SiteConfig: The full descriptor (site metadata plus plugins).
- PluginDescriptor: One plugin activation with its options.
- load_config: Loads site.yaml merged over the built-in defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from .merge import deep_merge

CONFIG_FILENAME = "site.yaml"
THEME_PLUGIN = "@lekoarts/gatsby-theme-minimal-blog"
OFFLINE_PLUGIN = "gatsby-plugin-offline"
DEFAULT_FORMAT_STRING = "DD.MM.YYYY"


class ConfigError(Exception):
    """Error loading the site configuration, with file context.

    Attributes:
        source_path: Path to the configuration file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught, if any.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


DEFAULT_CONFIG: dict[str, Any] = {
    "siteMetadata": {
        "siteTitle": "shkcodes",
        "siteTitleAlt": "shkcodes",
        "siteHeadline": "Home of shkcodes",
        "siteUrl": "https://minimal-blog.lekoarts.de",
        "siteDescription": "home of shkcodes",
        "siteLanguage": "en",
        "siteImage": "/bg1.jpg",
        "author": "@shkcodes",
    },
    "plugins": [
        {
            "resolve": THEME_PLUGIN,
            "options": {
                "formatString": "DD-MM-YYYY",
                "navigation": [
                    {"title": "Blog", "slug": "/blog"},
                    {"title": "About", "slug": "/about"},
                ],
                "externalLinks": [
                    {"name": "Twitter", "url": "https://twitter.com/SHKM9"},
                    {"name": "Github", "url": "https://github.com/shkcodes"},
                ],
            },
        },
        OFFLINE_PLUGIN,
    ],
}


@dataclass(frozen=True)
class SiteMetadata:
    """Site-wide metadata used for titles, SEO and absolute URLs.

    Attributes:
        site_title: Default title of the page.
        site_title_alt: Alternate title, e.g. for JSON-LD.
        site_headline: Headline shown on the home page.
        site_url: Base URL used to generate absolute URLs for og:image etc.
        site_description: Description used for SEO.
        site_language: Language tag of the site.
        site_image: Path of the default social image.
        author: Author handle.
    """

    site_title: str = ""
    site_title_alt: str = ""
    site_headline: str = ""
    site_url: str = ""
    site_description: str = ""
    site_language: str = ""
    site_image: str = ""
    author: str = ""

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> SiteMetadata:
        values = {}
        for item in fields(cls):
            key = _camel_case(item.name)
            if key in payload and payload[key] is not None:
                values[item.name] = str(payload[key])
        return cls(**values)

    def to_dict(self) -> dict[str, str]:
        return {_camel_case(item.name): getattr(self, item.name) for item in fields(self)}


@dataclass(frozen=True)
class NavigationEntry:
    """Internal navigation link shown in the site header."""

    title: str
    slug: str


@dataclass(frozen=True)
class ExternalLink:
    """External profile link shown in the site header."""

    name: str
    url: str


@dataclass(frozen=True)
class PluginDescriptor:
    """A plugin activation: the plugin name plus its options.

    Attributes:
        resolve: Name of the plugin package.
        options: Options passed to the plugin, as declared. Stored as a
            read-only copy: mappings become proxies and lists become tuples.
    """

    resolve: str
    options: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "options", _freeze(self.options))

    @property
    def format_string(self) -> str:
        return str(self.options.get("formatString") or DEFAULT_FORMAT_STRING)

    @property
    def navigation(self) -> list[NavigationEntry]:
        return [
            NavigationEntry(title=str(entry["title"]), slug=str(entry["slug"]))
            for entry in self.options.get("navigation") or []
        ]

    @property
    def external_links(self) -> list[ExternalLink]:
        return [
            ExternalLink(name=str(entry["name"]), url=str(entry["url"]))
            for entry in self.options.get("externalLinks") or []
        ]

    @classmethod
    def from_value(cls, value: Any) -> PluginDescriptor:
        """Build a descriptor from a plugin name or a {resolve, options} mapping.

        Raises:
            ValueError: If the value is neither form.
        """
        if isinstance(value, str):
            return cls(resolve=value)
        if isinstance(value, Mapping) and isinstance(value.get("resolve"), str):
            options = value.get("options") or {}
            if not isinstance(options, Mapping):
                raise ValueError(f"Options of plugin {value['resolve']!r} must be a mapping")
            return cls(resolve=value["resolve"], options=options)
        raise ValueError(f"Invalid plugin entry: {value!r}")

    def to_value(self) -> str | dict[str, Any]:
        if not self.options:
            return self.resolve
        return {"resolve": self.resolve, "options": _thaw(self.options)}


@dataclass(frozen=True)
class SiteConfig:
    """The configuration descriptor consumed by the site generator.

    Attributes:
        site_metadata: Site-wide metadata.
        plugins: Plugin activations, in the order the generator applies them.
    """

    site_metadata: SiteMetadata
    plugins: tuple[PluginDescriptor, ...] = ()

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> SiteConfig:
        """Build the descriptor from the siteMetadata/plugins surface.

        Raises:
            ValueError: If siteMetadata is not a mapping, plugins is not a
                list, or a plugin entry is malformed.
        """
        metadata = payload.get("siteMetadata") or {}
        if not isinstance(metadata, Mapping):
            raise ValueError("siteMetadata must be a mapping")
        plugins = payload.get("plugins") or []
        if not isinstance(plugins, list):
            raise ValueError("plugins must be a list")
        return cls(
            site_metadata=SiteMetadata.from_dict(metadata),
            plugins=tuple(PluginDescriptor.from_value(entry) for entry in plugins),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "siteMetadata": self.site_metadata.to_dict(),
            "plugins": [plugin.to_value() for plugin in self.plugins],
        }

    def plugin(self, name: str) -> PluginDescriptor | None:
        """Return the first plugin activated under ``name``, if any."""
        for plugin in self.plugins:
            if plugin.resolve == name:
                return plugin
        return None

    @property
    def theme_options(self) -> PluginDescriptor:
        """Descriptor of the theme plugin, or an empty one when it is not active."""
        return self.plugin(THEME_PLUGIN) or PluginDescriptor(resolve=THEME_PLUGIN)


def load_config(project_root: Path) -> SiteConfig:
    """Load the site configuration from site.yaml.

    The file is deep-merged over the built-in defaults, so it only needs to
    name the fields it changes. A plugins list replaces the default list.

    Args:
        project_root: Root directory of the project.

    Returns:
        The resolved SiteConfig.

    Raises:
        ConfigError: If site.yaml cannot be parsed or has an invalid shape.
    """
    config_path = project_root / CONFIG_FILENAME
    loaded: Any = {}
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(config_path, f"Invalid YAML: {exc}", exc) from exc
        if not isinstance(loaded, dict):
            raise ConfigError(config_path, "Expected a mapping at the top level")
    try:
        return SiteConfig.from_dict(deep_merge(DEFAULT_CONFIG, loaded))
    except ValueError as exc:
        raise ConfigError(config_path, str(exc), exc) from exc


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value
