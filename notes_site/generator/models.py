"""Shared dataclasses used by the site generation pipeline."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(slots=True)
class PageModel:
    """Structured data passed to the page template.

    Attributes
    ----------
    title : str
        Document title (first heading of the note).
    src_path : str
        Source path relative to ``docs_dir``.
    dest_path : str
        Output file relative to ``site_dir``.
    content_html : str
        Rendered Markdown body.
    toc_items : list[dict[str, object]]
        Table-of-contents entries with ``label``, ``anchor`` and ``level``.
    breadcrumbs : list[str]
        Navigation group labels leading to the page.
    previous_page : dict[str, str] or None
        ``label``/``href`` of the preceding page in reading order.
    next_page : dict[str, str] or None
        ``label``/``href`` of the following page in reading order.
    """

    title: str
    src_path: str
    dest_path: str
    content_html: str
    toc_items: list[dict[str, object]]
    breadcrumbs: list[str]
    previous_page: dict[str, str] | None = None
    next_page: dict[str, str] | None = None


__all__ = ["PageModel"]
