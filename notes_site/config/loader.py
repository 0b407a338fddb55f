"""Load the site manifest YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .helpers import (
    DEFAULT_DOCS_DIR,
    DEFAULT_SITE_DIR,
    _build_markdown_config,
    _build_nav,
    _build_theme_config,
    _optional_bool,
    _optional_str,
    _string_list,
)
from .models import ConfigurationError, SiteConfig


def load_site_config(path: Path, *, site_dir: Path | None = None) -> SiteConfig:
    """Load the YAML manifest describing the notes site.

    Parameters
    ----------
    path : Path
        Filesystem path to the manifest (for example, ``mkdocs.yml``).
    site_dir : Path, optional
        Override for the output directory; defaults to the manifest's
        ``site_dir`` resolved against the manifest's directory.

    Returns
    -------
    SiteConfig
        Parsed manifest with absolute ``docs_dir``/``site_dir`` paths, theme,
        markdown extensions and the declared navigation tree (``None`` when
        the manifest omits ``nav``).

    Raises
    ------
    ConfigurationError
        If the file is missing or unparsable, the top level is not a mapping,
        ``site_name`` is absent, any section is malformed, or the docs/site
        directories overlap.

    Examples
    --------
    >>> from pathlib import Path
    >>> from notes_site.config import load_site_config
    >>> config = load_site_config(Path("mkdocs.yml"))  # doctest: +SKIP
    >>> config.site_name  # doctest: +SKIP
    'My learning notes'
    """
    if not path.is_file():
        msg = f"Configuration file '{path}' not found."
        raise ConfigurationError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except YAMLError as exc:
        msg = f"Configuration file '{path}' is not valid YAML: {exc}"
        raise ConfigurationError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ConfigurationError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    site_name = _optional_str(raw.get("site_name"))
    if not site_name:
        msg = f"Configuration file '{path}' must define 'site_name'."
        raise ConfigurationError(msg)

    base_dir = path.resolve().parent
    docs_dir = (base_dir / str(raw.get("docs_dir") or DEFAULT_DOCS_DIR)).resolve()
    if site_dir is None:
        site_dir = base_dir / str(raw.get("site_dir") or DEFAULT_SITE_DIR)
    site_dir = site_dir.resolve()
    _validate_directories(docs_dir, site_dir)

    nav_raw = raw.get("nav")
    return SiteConfig(
        site_name=site_name,
        config_path=path,
        docs_dir=docs_dir,
        site_dir=site_dir,
        nav=_build_nav(nav_raw) if nav_raw is not None else None,
        site_description=_optional_str(raw.get("site_description")) or "",
        copyright=_optional_str(raw.get("copyright")) or "",
        use_directory_urls=_optional_bool(
            raw.get("use_directory_urls"), key="use_directory_urls", default=True
        ),
        theme=_build_theme_config(raw.get("theme")),
        markdown=_build_markdown_config(raw.get("markdown_extensions")),
        extra_javascript=_string_list(
            raw.get("extra_javascript"), key="extra_javascript"
        ),
        extra_css=_string_list(raw.get("extra_css"), key="extra_css"),
    )


def _validate_directories(docs_dir: Path, site_dir: Path) -> None:
    """Ensure ``docs_dir`` exists and does not overlap with ``site_dir``."""
    if not docs_dir.is_dir():
        msg = f"Documentation directory '{docs_dir}' does not exist."
        raise ConfigurationError(msg)
    if site_dir == docs_dir:
        msg = "'site_dir' must not be the same directory as 'docs_dir'."
        raise ConfigurationError(msg)
    if site_dir in docs_dir.parents:
        msg = f"'docs_dir' ({docs_dir}) must not be inside 'site_dir' ({site_dir})."
        raise ConfigurationError(msg)
    if docs_dir in site_dir.parents:
        msg = f"'site_dir' ({site_dir}) must not be inside 'docs_dir' ({docs_dir})."
        raise ConfigurationError(msg)


__all__ = ["load_site_config"]
