"""Utilities for rendering, linking, and generating the notes site."""

from .link_rewriter import RelativeLinkExtension
from .models import PageModel
from .renderer import HtmlContentRenderer, RenderedMarkdown
from .site_generator import SiteGenerator

__all__ = [
    "HtmlContentRenderer",
    "PageModel",
    "RelativeLinkExtension",
    "RenderedMarkdown",
    "SiteGenerator",
]
