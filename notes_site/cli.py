"""Cyclopts CLI entrypoint for building the notes site.

The ``notes`` console script defined here reads an ``mkdocs.yml``-style
manifest, checks that every navigation entry points at an existing note, and
renders the Markdown tree into a static site. Typical usage involves running
``notes check`` while editing the manifest and ``notes build`` locally or in
CI to regenerate the site.

Examples
--------
Build the site described by ``mkdocs.yml`` in the current directory:

>>> from notes_site.cli import main
>>> main(["build"])  # doctest: +SKIP
0

Build into a custom directory without clearing previous output:

>>> main(["build", "--site-dir", "dist", "--dirty"])  # doctest: +SKIP
0
"""

from __future__ import annotations

import logging
import os
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_CONFIG_FILE
from .config import ConfigurationError, UnresolvedReferenceError, load_site_config
from .generator import SiteGenerator
from .navigation import iter_document_leaves

DEFAULT_CONFIG = Path(DEFAULT_CONFIG_FILE)

app = App(name="notes", config=cyclopts.config.Env("NOTES_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Render the manifest and Markdown notes into a static site.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to the site manifest", env_var="NOTES_CONFIG")
    ] = DEFAULT_CONFIG,
    site_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="NOTES_SITE_DIR"),
    ] = None,
    dirty: typ.Annotated[
        bool, Parameter(help="Keep files left over from previous builds")
    ] = False,
) -> None:
    """Build the site described by ``config``.

    Parameters
    ----------
    config : Path, optional
        Path to the ``mkdocs.yml`` manifest (overridable via ``NOTES_CONFIG``).
    site_dir : Path or None, optional
        Output directory overriding the manifest's ``site_dir``.
    dirty : bool, optional
        When ``True`` the previous output is not removed before writing.

    Returns
    -------
    None
        Writes the site and prints each rendered page.

    Raises
    ------
    UnresolvedReferenceError
        If a navigation entry references a missing document; nothing is
        written in that case.
    ConfigurationError
        If the manifest itself is invalid.
    """
    site_config = load_site_config(config, site_dir=site_dir)
    written = SiteGenerator(site_config, clean=not dirty).run()
    for path in written:
        if path.suffix == ".html":
            print(f"wrote {_format_path(path)}")
    print(f"built {_format_path(site_config.site_dir)} ({len(written)} files)")


@app.command(help="Verify that every navigation entry resolves to a document.")
def check(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to the site manifest", env_var="NOTES_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Resolve the manifest without writing any output.

    Raises
    ------
    UnresolvedReferenceError
        If a navigation entry references a missing document.
    """
    site_config = load_site_config(config)
    content, nav = SiteGenerator(site_config).resolve()
    leaves = sum(1 for _leaf in iter_document_leaves(nav))
    print(f"ok: {len(content.documents)} documents, {leaves} navigation entries")


def _configure_logging() -> None:
    """Send library log records to stderr at ``NOTES_LOG_LEVEL`` (default WARNING)."""
    level = os.getenv("NOTES_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def main(argv: list[str] | None = None) -> int:
    """Invoke the Cyclopts application that powers the ``notes`` console command.

    Parameters
    ----------
    argv : list[str] or None, optional
        Arguments to parse; ``None`` reads ``sys.argv``.

    Returns
    -------
    int
        ``0`` on success, ``1`` when the manifest is invalid or references
        missing documents.

    Examples
    --------
    >>> main(["check", "--config", "mkdocs.yml"])  # doctest: +SKIP
    0
    """
    _configure_logging()
    try:
        app(argv)
    except UnresolvedReferenceError as exc:
        print(f"error: {exc}", file=sys.stderr)
        for label, path in exc.references:
            print(f"  {label}: {path}", file=sys.stderr)
        return 1
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    sys.exit(main())
