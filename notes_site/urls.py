"""Map document paths onto output files and page-relative hrefs.

All paths here are POSIX strings relative to either ``docs_dir`` (sources) or
``site_dir`` (outputs), so the generated site is browsable from any prefix,
including ``file://``.

Examples
--------
>>> page_destination("git/useful-commands/stash.md", use_directory_urls=True)
'git/useful-commands/stash/index.html'
>>> page_url("index.md", use_directory_urls=True)
''
>>> relative_href("git/useful-commands/stash/index.html", "")
'../../../'
>>> relative_href("java/concurrency.html", "git/stash.html")
'../git/stash.html'
"""

from __future__ import annotations

import posixpath

INDEX_STEMS = frozenset({"index", "README", "readme"})


def normalize_doc_path(path: str) -> str | None:
    """Normalise a docs-relative path, returning ``None`` when it escapes the root."""
    if not path or path.startswith("/"):
        return None
    normalized = posixpath.normpath(path)
    if normalized in {".", ".."} or normalized.startswith("../"):
        return None
    return normalized


def page_destination(src_path: str, *, use_directory_urls: bool) -> str:
    """Return the output file written for the document at ``src_path``."""
    stem, _suffix = posixpath.splitext(src_path)
    if not use_directory_urls:
        return f"{stem}.html"
    parent, name = posixpath.split(stem)
    if name in INDEX_STEMS:
        return posixpath.join(parent, "index.html")
    return f"{stem}/index.html"


def page_url(src_path: str, *, use_directory_urls: bool) -> str:
    """Return the site-root-relative URL of the page rendered from ``src_path``.

    Directory URLs end with ``/``; the site root is the empty string.
    """
    dest = page_destination(src_path, use_directory_urls=use_directory_urls)
    if not use_directory_urls:
        return dest
    parent = posixpath.dirname(dest)
    return f"{parent}/" if parent else ""


def relative_href(from_dest: str, target: str) -> str:
    """Return an href to ``target`` from the page written at ``from_dest``.

    Parameters
    ----------
    from_dest : str
        Output file of the linking page, relative to ``site_dir``.
    target : str
        Site-root-relative URL of a page or asset; directory URLs end with
        ``/`` and the site root is ``""``.
    """
    base = posixpath.dirname(from_dest) or "."
    is_directory = target == "" or target.endswith("/")
    rel = posixpath.relpath(target or ".", base)
    if is_directory:
        return "./" if rel == "." else f"{rel}/"
    return rel


__all__ = [
    "INDEX_STEMS",
    "normalize_doc_path",
    "page_destination",
    "page_url",
    "relative_href",
]
