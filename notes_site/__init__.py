"""Build a static site from a tree of Markdown study notes.

This package exposes the CLI entry points used by ``notes build`` and
``notes check`` to validate an ``mkdocs.yml``-style navigation manifest and
render the notes it references.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the app and returns an exit code.

Examples
--------
>>> from notes_site import main
>>> main(["build"])  # doctest: +SKIP
0
>>> from notes_site import app
>>> callable(app)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
