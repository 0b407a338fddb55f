"""Utility helpers shared by the manifest loader."""

from __future__ import annotations

from urllib.parse import urlsplit

from .models import (
    ConfigurationError,
    MarkdownConfig,
    NavNode,
    PaletteConfig,
    ThemeConfig,
)

DEFAULT_DOCS_DIR = "docs"
DEFAULT_SITE_DIR = "site"


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_bool(value: object | None, *, key: str, default: bool) -> bool:
    """Return ``value`` when it is a YAML boolean, ``default`` when unset."""
    if value is None:
        return default
    if not isinstance(value, bool):
        msg = f"'{key}' must be true or false, not {value!r}."
        raise ConfigurationError(msg)
    return value


def _string_list(value: object | None, *, key: str) -> list[str]:
    """Normalize a list of strings, rejecting anything else."""
    if value is None:
        return []
    if not isinstance(value, list):
        msg = f"'{key}' must be a list of strings."
        raise ConfigurationError(msg)
    normalized: list[str] = []
    for entry in value:
        text = _optional_str(entry)
        if text:
            normalized.append(text)
    return normalized


def _is_external(target: str) -> bool:
    """Return True when ``target`` is an absolute URL rather than a docs path."""
    parts = urlsplit(target)
    return bool(parts.scheme and parts.netloc) or target.startswith("//")


def _build_theme_config(payload: object | None) -> ThemeConfig:
    """Build a ThemeConfig from the ``theme`` value (a name or a mapping)."""
    base = ThemeConfig()
    match payload:
        case None:
            return base
        case str() as name:
            return ThemeConfig(name=name.strip() or base.name)
        case dict():
            pass
        case _:
            msg = "'theme' must be a theme name or a mapping."
            raise ConfigurationError(msg)

    palette_raw = payload.get("palette") or {}
    if not isinstance(palette_raw, dict):
        msg = "'theme.palette' must be a mapping."
        raise ConfigurationError(msg)
    palette = PaletteConfig(
        primary=_optional_str(palette_raw.get("primary")) or base.palette.primary,
        accent=_optional_str(palette_raw.get("accent")) or base.palette.accent,
    )
    return ThemeConfig(
        name=_optional_str(payload.get("name")) or base.name,
        palette=palette,
        pygments_style=_optional_str(payload.get("pygments_style"))
        or base.pygments_style,
    )


def _build_markdown_config(payload: object | None) -> MarkdownConfig:
    """Parse ``markdown_extensions`` entries into names and per-extension configs.

    Entries are either bare extension names or single-key mappings of the form
    ``{name: {option: value}}``; a plain mapping of names to configs is also
    accepted.
    """
    config = MarkdownConfig()
    if payload is None:
        return config
    if isinstance(payload, dict):
        entries: list[object] = [{key: value} for key, value in payload.items()]
    elif isinstance(payload, list):
        entries = list(payload)
    else:
        msg = "'markdown_extensions' must be a list."
        raise ConfigurationError(msg)

    for entry in entries:
        match entry:
            case str() as name:
                options: object = None
            case dict() if len(entry) == 1:
                name, options = next(iter(entry.items()))
            case _:
                msg = f"Invalid markdown extension entry: {entry!r}"
                raise ConfigurationError(msg)
        name = str(name).strip()
        if not name:
            msg = "Markdown extension names must not be empty."
            raise ConfigurationError(msg)
        if options is not None and not isinstance(options, dict):
            msg = f"Options for markdown extension '{name}' must be a mapping."
            raise ConfigurationError(msg)
        if name not in config.extensions:
            config.extensions.append(name)
        if options:
            config.extension_configs[name] = dict(options)
    return config


def _build_nav(payload: object) -> list[NavNode]:
    """Convert the raw ``nav`` value into an ordered tree of NavNode entries."""
    match payload:
        case list():
            return [_build_nav_entry(entry) for entry in payload]
        case dict():
            return [_build_nav_item(label, value) for label, value in payload.items()]
        case _:
            msg = "'nav' must be a list or a mapping."
            raise ConfigurationError(msg)


def _build_nav_entry(entry: object) -> NavNode:
    """Build a NavNode from one list item of the ``nav`` sequence."""
    match entry:
        case str() as target:
            return _build_leaf(None, target)
        case dict() if len(entry) == 1:
            label, value = next(iter(entry.items()))
            return _build_nav_item(label, value)
        case _:
            msg = f"Invalid navigation entry: {entry!r}"
            raise ConfigurationError(msg)


def _build_nav_item(label: object, value: object) -> NavNode:
    """Build a leaf or group node for ``label: value``."""
    text = _optional_str(label)
    if text is None:
        msg = "Navigation labels must not be empty."
        raise ConfigurationError(msg)
    match value:
        case str() as target:
            return _build_leaf(text, target)
        case list() | dict():
            return NavNode(label=text, children=_build_nav(value))
        case _:
            msg = f"Navigation entry '{text}' must map to a path, URL or group."
            raise ConfigurationError(msg)


def _build_leaf(label: str | None, target: str) -> NavNode:
    """Return a document or external leaf for ``target``."""
    cleaned = target.strip()
    if not cleaned:
        msg = f"Navigation entry '{label}' has an empty target."
        raise ConfigurationError(msg)
    if _is_external(cleaned):
        return NavNode(label=label or cleaned, url=cleaned)
    return NavNode(label=label, path=cleaned)


__all__ = [
    "DEFAULT_DOCS_DIR",
    "DEFAULT_SITE_DIR",
    "_build_markdown_config",
    "_build_nav",
    "_build_theme_config",
    "_is_external",
    "_optional_bool",
    "_optional_str",
    "_string_list",
]
