"""Shared fixtures for notes_site tests.

The ``notes_project`` fixture lays out a small knowledge base in a temporary
directory: a handful of Markdown notes mirroring the real notes tree (machine
learning with math, Java concurrency with code, Git commands), one PNG image,
and an ``mkdocs.yml`` manifest whose ``nav`` can be swapped per test through
``write_manifest``.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

NOTES: dict[str, str] = {
    "index.md": "# My learning notes\n\nStart with [the stash guide](git/useful-commands/stash.md).\n",
    "artificial-intelligence/machine-learning/introduction/intro.md": (
        "# Machine learning\n\n"
        "## Definition\n\n"
        "A program learns from experience $E$ when $P(T) \\to 1$.\n\n"
        "$$\n\\hat{y} = \\theta^T x\n$$\n\n"
        "![Learning curve](img/curve.png)\n\n"
        "### Hypothesis\n\n"
        "See the [supervised notes](supervised-learning.md#regression)[^1].\n\n"
        "[^1]: Andrew Ng, lecture 1.\n"
    ),
    "artificial-intelligence/machine-learning/introduction/supervised-learning.md": (
        "Supervised learning\n===================\n\n## Regression\n\nPredict a value.\n"
    ),
    "java/concurrency/introduction/c01-intro.md": (
        "# Introduction\n\n"
        "```java\n"
        "public class Counter {\n"
        "    private int count;\n"
        "}\n"
        "```\n\n"
        "Back to [thread safety](../fundamentals/c02-thread-safety.md).\n"
    ),
    "java/concurrency/fundamentals/c02-thread-safety.md": (
        "```bash\n# not a heading\n```\n\n# Thread safety\n\nRace conditions.\n"
    ),
    "git/useful-commands/stash.md": (
        "# Git stash\n\n"
        "## Save work in progress\n\n"
        "```bash\ngit stash push -m \"wip\"\n```\n"
    ),
}

IMAGES: dict[str, bytes] = {
    "artificial-intelligence/machine-learning/introduction/img/curve.png": (
        b"\x89PNG\r\n\x1a\n fixture"
    ),
}

DEFAULT_NAV = """
nav:
  - "Home": "index.md"
  - "Artificial Intelligence":
      - "Machine Learning":
        - "Intro": "artificial-intelligence/machine-learning/introduction/intro.md"
        - "Supervised Learning": "artificial-intelligence/machine-learning/introduction/supervised-learning.md"
  - "Java":
    - "Concurrency":
      - "Introduction": "java/concurrency/introduction/c01-intro.md"
      - "Thread safety": "java/concurrency/fundamentals/c02-thread-safety.md"
  - "Git":
    - "Useful commands":
      - "Stash": "git/useful-commands/stash.md"
"""

MANIFEST_HEADER = """
site_name: My learning notes

markdown_extensions:
  - footnotes
  - codehilite
  - pymdownx.arithmatex

extra_javascript:
  - https://cdnjs.cloudflare.com/ajax/libs/mathjax/2.7.0/MathJax.js?config=TeX-MML-AM_CHTML

theme:
  name: material
  palette:
    primary: "blue"
    accent: "blue"
"""


def write_manifest(root: Path, nav: str | None = DEFAULT_NAV, extra: str = "") -> Path:
    """Write ``mkdocs.yml`` under ``root`` with the given ``nav`` block."""
    manifest = root / "mkdocs.yml"
    body = MANIFEST_HEADER.strip() + "\n" + extra
    if nav is not None:
        body += "\n" + nav.strip() + "\n"
    manifest.write_text(body, encoding="utf-8")
    return manifest


@pytest.fixture
def notes_project(tmp_path: Path) -> Path:
    """Create a notes tree plus manifest and return the project root."""
    docs = tmp_path / "docs"
    for rel_path, text in NOTES.items():
        target = docs / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    for rel_path, payload in IMAGES.items():
        target = docs / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(payload)
    write_manifest(tmp_path)
    return tmp_path


@pytest.fixture
def manifest_writer(notes_project: Path) -> typ.Callable[..., Path]:
    """Return a helper that rewrites the project's manifest."""

    def _write(nav: str | None = DEFAULT_NAV, extra: str = "") -> Path:
        return write_manifest(notes_project, nav, extra)

    return _write
