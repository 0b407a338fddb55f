"""Discover the Markdown documents and static files under ``docs_dir``."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .config import ConfigurationError
from .markdown_parser import (
    extract_images,
    extract_title,
    strip_front_matter,
    title_from_filename,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

MARKDOWN_SUFFIXES = frozenset({".md", ".markdown"})


@dc.dataclass(frozen=True, slots=True)
class Document:
    """A single Markdown note.

    Attributes
    ----------
    path : str
        POSIX path relative to ``docs_dir``; unique within a site.
    title : str
        Text of the first heading, or a title built from the file name.
    markdown : str
        Document body with any front matter removed.
    images : tuple[str, ...]
        Image references embedded in the body, in order of appearance.
    """

    path: str
    title: str
    markdown: str
    images: tuple[str, ...] = ()


@dc.dataclass(slots=True)
class ContentTree:
    """Documents keyed by path plus the static files that accompany them."""

    documents: dict[str, Document]
    static_files: list[str]

    def get(self, path: str) -> Document | None:
        """Return the document stored at ``path``, if any."""
        return self.documents.get(path)


def load_document(path: str, text: str) -> Document:
    """Build a Document from its docs-relative ``path`` and raw ``text``."""
    body = strip_front_matter(text)
    return Document(
        path=path,
        title=extract_title(body) or title_from_filename(path),
        markdown=body,
        images=tuple(extract_images(body)),
    )


def discover_content(docs_dir: Path) -> ContentTree:
    """Walk ``docs_dir`` and load every document in sorted path order.

    Hidden files and directories (names starting with ``.``) are skipped.
    Everything that is not Markdown is reported as a static file to copy.

    Raises
    ------
    ConfigurationError
        If ``docs_dir`` is not a directory.
    """
    if not docs_dir.is_dir():
        msg = f"Documentation directory '{docs_dir}' does not exist."
        raise ConfigurationError(msg)

    documents: dict[str, Document] = {}
    static_files: list[str] = []
    for entry in sorted(docs_dir.rglob("*")):
        relative = entry.relative_to(docs_dir)
        if any(part.startswith(".") for part in relative.parts) or not entry.is_file():
            continue
        rel_path = relative.as_posix()
        if entry.suffix.lower() in MARKDOWN_SUFFIXES:
            text = entry.read_text(encoding="utf-8")
            documents[rel_path] = load_document(rel_path, text)
        else:
            static_files.append(rel_path)
    return ContentTree(documents=documents, static_files=static_files)


__all__ = [
    "MARKDOWN_SUFFIXES",
    "ContentTree",
    "Document",
    "discover_content",
    "load_document",
]
