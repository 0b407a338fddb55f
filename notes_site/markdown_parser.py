r"""Inspect Markdown notes for the metadata the site generator needs.

This module derives a document title from its first heading and lists the
images it embeds, ignoring anything inside fenced code blocks so that code
samples (``# comment`` lines in shell snippets, for example) never masquerade
as headings.

Example
-------
>>> from notes_site.markdown_parser import extract_title
>>> extract_title("# Git stash\n\nSave work in progress.")
'Git stash'
>>> extract_title("Java concurrency\n================\n")
'Java concurrency'
"""

from __future__ import annotations

import re

ATX_HEADING_PATTERN = re.compile(r"^ {0,3}#{1,6}[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$")
FRONT_MATTER_PATTERN = re.compile(r"\A---[ \t]*\n.*?\n(?:---|\.\.\.)[ \t]*(?:\n|\Z)", re.DOTALL)
SETEXT_UNDERLINE_PATTERN = re.compile(r"^ {0,3}(=+|-+)[ \t]*$")
FENCE_PATTERN = re.compile(r"^[ \t]*(`{3,}|~{3,})")
IMAGE_PATTERN = re.compile(r"!\[[^\]]*\]\(\s*<?([^)\s>]+)>?(?:\s+[\"'][^)]*[\"'])?\s*\)")
HTML_IMAGE_PATTERN = re.compile(r"<img\b[^>]*\bsrc=[\"']([^\"']+)[\"']", re.IGNORECASE)
EMPHASIS_PATTERN = re.compile(r"(\*\*|__|\*|`)(.+?)\1")


def _clean_heading(text: str) -> str:
    """Return a cleaned heading, removing escapes, emphasis and whitespace."""
    unescaped = text.replace("\\", "")
    return EMPHASIS_PATTERN.sub(r"\2", unescaped).strip()


def strip_front_matter(markdown_text: str) -> str:
    """Drop a leading ``---`` delimited YAML front matter block, if present."""
    return FRONT_MATTER_PATTERN.sub("", markdown_text, count=1)


def _prose_lines(markdown_text: str) -> list[str]:
    """Return the lines of ``markdown_text`` with front matter and fences blanked."""
    lines: list[str] = []
    fence: str | None = None
    for line in strip_front_matter(markdown_text).splitlines():
        match = FENCE_PATTERN.match(line)
        if fence is None and match:
            fence = match.group(1)
            lines.append("")
            continue
        if fence is not None:
            closing = match.group(1) if match else ""
            if closing[:1] == fence[0] and len(closing) >= len(fence):
                fence = None
            lines.append("")
            continue
        lines.append(line)
    return lines


def extract_title(markdown_text: str) -> str | None:
    """Return the text of the first ATX or setext heading, if any.

    Parameters
    ----------
    markdown_text : str
        Raw Markdown source of a document.

    Returns
    -------
    str or None
        The cleaned heading text, or ``None`` when the document has no
        heading outside fenced code blocks.
    """
    lines = _prose_lines(markdown_text)
    for idx, line in enumerate(lines):
        atx = ATX_HEADING_PATTERN.match(line)
        if atx:
            heading = _clean_heading(atx.group(1))
            if heading:
                return heading
            continue
        if not line.strip() or idx + 1 >= len(lines):
            continue
        if SETEXT_UNDERLINE_PATTERN.match(lines[idx + 1]) and not line.startswith(
            ("    ", "\t", "-", "*", ">")
        ):
            heading = _clean_heading(line)
            if heading:
                return heading
    return None


def extract_images(markdown_text: str) -> list[str]:
    """Return image references embedded in the document, in order of appearance."""
    prose = "\n".join(_prose_lines(markdown_text))
    matches = [
        (match.start(), match.group(1)) for match in IMAGE_PATTERN.finditer(prose)
    ]
    matches.extend(
        (match.start(), match.group(1)) for match in HTML_IMAGE_PATTERN.finditer(prose)
    )
    return [target for _position, target in sorted(matches)]


def title_from_filename(path: str) -> str:
    """Build a readable title from a document path such as ``c02-thread-safety.md``."""
    stem = path.rsplit("/", 1)[-1].rsplit(".", 1)[0]
    words = re.sub(r"[-_]+", " ", stem).strip()
    return words[:1].upper() + words[1:] if words else path


__all__ = [
    "extract_images",
    "extract_title",
    "strip_front_matter",
    "title_from_filename",
]
