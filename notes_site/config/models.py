"""Typed dataclasses describing the notes site manifest."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path


class ConfigurationError(ValueError):
    """Raised when the site manifest is invalid or incomplete."""


class UnresolvedReferenceError(ConfigurationError):
    """Raised when navigation entries point at documents that do not exist.

    Attributes
    ----------
    references : list[tuple[str, str]]
        ``(label, path)`` pairs for every navigation leaf that failed to
        resolve, in manifest order.
    """

    def __init__(self, references: list[tuple[str, str]]) -> None:
        self.references = list(references)
        listing = ", ".join(f"'{label}' -> '{path}'" for label, path in references)
        noun = "entry references" if len(references) == 1 else "entries reference"
        super().__init__(f"Navigation {noun} missing documents: {listing}")


@dc.dataclass(slots=True)
class PaletteConfig:
    """Primary and accent colours applied to the packaged theme."""

    primary: str = "indigo"
    accent: str = "indigo"


@dc.dataclass(slots=True)
class ThemeConfig:
    """Visual settings honoured by the packaged theme."""

    name: str = "material"
    palette: PaletteConfig = dc.field(default_factory=PaletteConfig)
    pygments_style: str = "monokai"


@dc.dataclass(slots=True)
class MarkdownConfig:
    """Markdown extensions requested by the manifest."""

    extensions: list[str] = dc.field(default_factory=list)
    extension_configs: dict[str, dict[str, object]] = dc.field(default_factory=dict)


@dc.dataclass(slots=True)
class NavNode:
    """A single entry of the navigation tree.

    Attributes
    ----------
    label : str or None
        Display label. ``None`` for bare document entries until the document
        title is known.
    path : str or None
        Document path relative to ``docs_dir`` for document leaves.
    url : str or None
        Absolute URL for external link leaves.
    children : list[NavNode]
        Child entries for groups.
    """

    label: str | None
    path: str | None = None
    url: str | None = None
    children: list[NavNode] = dc.field(default_factory=list)

    @property
    def is_group(self) -> bool:
        """Return ``True`` when the node holds children instead of a target."""
        return self.path is None and self.url is None


@dc.dataclass(slots=True)
class SiteConfig:
    """A fully resolved manifest."""

    site_name: str
    config_path: Path
    docs_dir: Path
    site_dir: Path
    nav: list[NavNode] | None = None
    site_description: str = ""
    copyright: str = ""
    use_directory_urls: bool = True
    theme: ThemeConfig = dc.field(default_factory=ThemeConfig)
    markdown: MarkdownConfig = dc.field(default_factory=MarkdownConfig)
    extra_javascript: list[str] = dc.field(default_factory=list)
    extra_css: list[str] = dc.field(default_factory=list)


__all__ = [
    "ConfigurationError",
    "MarkdownConfig",
    "NavNode",
    "PaletteConfig",
    "SiteConfig",
    "ThemeConfig",
    "UnresolvedReferenceError",
]
