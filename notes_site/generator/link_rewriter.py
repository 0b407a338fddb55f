"""Helpers for rewriting relative markdown links to rendered page URLs."""

from __future__ import annotations

import logging
import posixpath
import typing as typ
from urllib.parse import quote, unquote, urlsplit

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from notes_site.documents import MARKDOWN_SUFFIXES
from notes_site.urls import normalize_doc_path, relative_href

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

logger = logging.getLogger(__name__)

LINK_ATTRIBUTES = {"a": "href", "img": "src"}


class RelativeLinkExtension(Extension):
    """Rewrite links between notes so they work in the rendered site.

    Insert this extension into a ``markdown.Markdown`` instance to ensure that
    links written against the source tree (``../fundamentals/c02.md#locks``,
    ``img/diagram.png``) point at the rendered page or copied asset relative
    to the page currently being rendered.
    """

    def __init__(
        self, src_path: str, dest_path: str, page_urls: cabc.Mapping[str, str]
    ) -> None:
        super().__init__()
        self.src_path = src_path
        self.dest_path = dest_path
        self.page_urls = page_urls

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the relative-link treeprocessor on the Markdown instance."""
        processor = RelativeLinkTreeprocessor(
            md, self.src_path, self.dest_path, self.page_urls
        )
        md.treeprocessors.register(processor, "notes_relative_links", 15)


class RelativeLinkTreeprocessor(Treeprocessor):
    """Rewrite document and asset references in the parsed markdown tree."""

    def __init__(
        self,
        md: Markdown,
        src_path: str,
        dest_path: str,
        page_urls: cabc.Mapping[str, str],
    ) -> None:
        super().__init__(md)
        self.src_path = src_path
        self.dest_path = dest_path
        self.page_urls = page_urls

    def run(self, root: Element) -> Element:
        """Rewrite relative anchors and images in the parsed markdown tree."""
        for element in root.iter():
            attribute = LINK_ATTRIBUTES.get(element.tag)
            if attribute is None:
                continue
            rewritten = self._rewrite(element.get(attribute))
            if rewritten is not None:
                element.set(attribute, rewritten)
        return root

    def _rewrite(self, target: str | None) -> str | None:
        """Return the page-relative form of ``target``, or None to leave it alone."""
        if not target:
            return None

        lower = target.lower()
        invalid = lower.startswith(
            ("http://", "https://", "mailto:", "tel:", "data:", "javascript:")
        )
        if target.startswith(("#", "//")) or "://" in target:
            invalid = True

        parsed = None
        if not invalid:
            parsed = urlsplit(target)
            invalid = bool(
                parsed.scheme
                or parsed.netloc
                or not parsed.path
                or parsed.path.startswith("/")
            )
        if invalid or parsed is None:
            return None

        joined = normalize_doc_path(
            posixpath.join(posixpath.dirname(self.src_path), unquote(parsed.path))
        )
        if joined is None:
            logger.warning(
                "Document '%s' links to '%s', which is outside the docs directory.",
                self.src_path,
                target,
            )
            return None

        if posixpath.splitext(joined)[1].lower() in MARKDOWN_SUFFIXES:
            page_url = self.page_urls.get(joined)
            if page_url is None:
                logger.warning(
                    "Document '%s' links to '%s', which is not among the documents.",
                    self.src_path,
                    target,
                )
                return None
            url = quote(relative_href(self.dest_path, page_url))
        else:
            url = quote(relative_href(self.dest_path, joined))

        if parsed.query:
            url = f"{url}?{parsed.query}"
        if parsed.fragment:
            url = f"{url}#{parsed.fragment}"
        return url


__all__ = ["RelativeLinkExtension", "RelativeLinkTreeprocessor"]
