"""Load and validate the notes site manifest.

This subpackage parses an ``mkdocs.yml``-style manifest, resolves the docs and
output directories relative to the manifest, and produces typed dataclasses
(:class:`SiteConfig`, :class:`NavNode`, :class:`ThemeConfig`, etc.) that the
site generator consumes. The primary entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from notes_site.config import load_site_config
>>> site = load_site_config(Path("mkdocs.yml"))  # doctest: +SKIP
>>> [node.label for node in site.nav]  # doctest: +SKIP
['Home', 'Artificial Intelligence', 'Java', 'Git', 'Interviews']
"""

from .loader import load_site_config
from .models import (
    ConfigurationError,
    MarkdownConfig,
    NavNode,
    PaletteConfig,
    SiteConfig,
    ThemeConfig,
    UnresolvedReferenceError,
)

__all__ = [
    "ConfigurationError",
    "MarkdownConfig",
    "NavNode",
    "PaletteConfig",
    "SiteConfig",
    "ThemeConfig",
    "UnresolvedReferenceError",
    "load_site_config",
]
