"""Resolve the navigation manifest against the discovered documents.

The navigation tree comes straight from the manifest and is never reordered
or deduplicated: the sidebar mirrors it entry for entry. Resolution checks
every document leaf before anything is written, so a build either fails fast
with :class:`~notes_site.config.UnresolvedReferenceError` or has a complete
tree to render.

Example
-------
>>> from notes_site.config import NavNode
>>> from notes_site.documents import ContentTree, load_document
>>> content = ContentTree(
...     documents={"git/stash.md": load_document("git/stash.md", "# Git stash")},
...     static_files=[],
... )
>>> nav = resolve_nav([NavNode("Git", children=[NavNode("Stash", "git/stash.md")])], content)
>>> [leaf.path for leaf in iter_document_leaves(nav)]
['git/stash.md']
"""

from __future__ import annotations

import dataclasses as dc
import posixpath
import re
import typing as typ

from .config import NavNode, UnresolvedReferenceError
from .urls import INDEX_STEMS, normalize_doc_path

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .documents import ContentTree


def resolve_nav(nodes: list[NavNode], content: ContentTree) -> list[NavNode]:
    """Return a copy of ``nodes`` with every document leaf validated.

    Leaf paths are normalised (``./a.md`` becomes ``a.md``) and bare entries
    receive the document title as their label.

    Raises
    ------
    UnresolvedReferenceError
        Listing every leaf whose path does not name an existing document.
    """
    missing: list[tuple[str, str]] = []
    resolved = _resolve_nodes(nodes, content, missing)
    if missing:
        raise UnresolvedReferenceError(missing)
    return resolved


def _resolve_nodes(
    nodes: list[NavNode], content: ContentTree, missing: list[tuple[str, str]]
) -> list[NavNode]:
    resolved: list[NavNode] = []
    for node in nodes:
        if node.is_group:
            children = _resolve_nodes(node.children, content, missing)
            resolved.append(dc.replace(node, children=children))
            continue
        if node.path is None:
            resolved.append(node)
            continue
        normalized = normalize_doc_path(node.path)
        document = content.get(normalized) if normalized else None
        if document is None:
            missing.append((node.label or node.path, node.path))
            resolved.append(node)
            continue
        resolved.append(
            dc.replace(node, label=node.label or document.title, path=normalized)
        )
    return resolved


def default_nav(content: ContentTree) -> list[NavNode]:
    """Derive a navigation tree from the docs layout when none is declared.

    Index pages come first in each directory, followed by the remaining
    documents and sub-directories in alphabetical order.
    """
    root: dict[str, typ.Any] = {}
    for path in content.documents:
        cursor = root
        *dirs, _name = path.split("/")
        for directory in dirs:
            cursor = cursor.setdefault(f"{directory}/", {})
        cursor[path] = None
    return _tree_to_nodes(root, content)


def _tree_to_nodes(tree: dict[str, typ.Any], content: ContentTree) -> list[NavNode]:
    def _sort_key(key: str) -> tuple[int, str]:
        stem = posixpath.splitext(posixpath.basename(key.rstrip("/")))[0]
        is_index = not key.endswith("/") and stem in INDEX_STEMS
        return (0 if is_index else 1, key.rstrip("/").rsplit("/", 1)[-1].lower())

    nodes: list[NavNode] = []
    for key in sorted(tree, key=_sort_key):
        value = tree[key]
        if value is None:
            document = content.documents[key]
            nodes.append(NavNode(label=document.title, path=key))
        else:
            nodes.append(
                NavNode(
                    label=_directory_label(key.rstrip("/")),
                    children=_tree_to_nodes(value, content),
                )
            )
    return nodes


def _directory_label(name: str) -> str:
    """Turn ``useful-commands`` into ``Useful commands``."""
    words = re.sub(r"[-_]+", " ", name).strip()
    return words[:1].upper() + words[1:] if words else name


def iter_document_leaves(nodes: list[NavNode]) -> cabc.Iterator[NavNode]:
    """Yield document leaves depth-first in manifest order, duplicates included."""
    for node in nodes:
        if node.is_group:
            yield from iter_document_leaves(node.children)
        elif node.path is not None:
            yield node


def reading_order(nodes: list[NavNode]) -> list[str]:
    """Return document paths in navigation order, keeping first occurrences only."""
    seen: set[str] = set()
    order: list[str] = []
    for leaf in iter_document_leaves(nodes):
        if leaf.path is not None and leaf.path not in seen:
            seen.add(leaf.path)
            order.append(leaf.path)
    return order


def find_trail(nodes: list[NavNode], path: str) -> list[str] | None:
    """Return the group labels leading to the first leaf for ``path``.

    Returns ``None`` when ``path`` does not appear in the tree; a leaf at the
    top level yields an empty trail.
    """
    for node in nodes:
        if node.is_group:
            trail = find_trail(node.children, path)
            if trail is not None:
                return [node.label or "", *trail]
        elif node.path == path:
            return []
    return None


__all__ = [
    "default_nav",
    "find_trail",
    "iter_document_leaves",
    "reading_order",
    "resolve_nav",
]
