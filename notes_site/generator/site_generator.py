"""High-level orchestration for building the notes site.

This module coordinates manifest resolution, Markdown rendering and template
output. It exposes :class:`SiteGenerator`, which consumes a
:class:`~notes_site.config.SiteConfig`, validates every navigation entry
against the documents under ``docs_dir``, then renders one themed HTML page
per document together with the shared stylesheet and any static files.

Nothing is written until the whole navigation tree resolves, and the previous
output is replaced wholesale, so a build either fails before touching
``site_dir`` or leaves a complete, reproducible site behind.

Example
-------
>>> from pathlib import Path
>>> from notes_site.config import load_site_config
>>> from notes_site.generator import SiteGenerator
>>> config = load_site_config(Path("mkdocs.yml"))  # doctest: +SKIP
>>> SiteGenerator(config).run()  # doctest: +SKIP
[PosixPath('site/index.html'), ...]
"""

from __future__ import annotations

import logging
import posixpath
import shutil
import typing as typ
from pathlib import Path
from urllib.parse import quote, unquote, urlsplit

from jinja2 import Environment, FileSystemLoader, select_autoescape

from notes_site._constants import PALETTE_COLOURS, STYLESHEET_PATH
from notes_site.config import ConfigurationError
from notes_site.config.helpers import _is_external
from notes_site.documents import ContentTree, Document, discover_content
from notes_site.generator.link_rewriter import RelativeLinkExtension
from notes_site.generator.models import PageModel
from notes_site.generator.renderer import HtmlContentRenderer
from notes_site.navigation import (
    default_nav,
    find_trail,
    iter_document_leaves,
    reading_order,
    resolve_nav,
)
from notes_site.urls import (
    INDEX_STEMS,
    normalize_doc_path,
    page_destination,
    page_url,
    relative_href,
)

if typ.TYPE_CHECKING:
    from notes_site.config import NavNode, SiteConfig

logger = logging.getLogger(__name__)


class SiteGenerator:
    """Resolve the manifest and emit a themed HTML page per document."""

    def __init__(
        self,
        site_config: SiteConfig,
        *,
        templates_dir: Path | None = None,
        clean: bool = True,
    ) -> None:
        """Initialize the generator with configuration and template context.

        Parameters
        ----------
        site_config : SiteConfig
            Parsed manifest describing directories, theme, extensions and nav.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package templates.
        clean : bool, optional
            Remove the previous ``site_dir`` before writing (default ``True``).
        """
        self.config = site_config
        self.clean = clean
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.renderer = HtmlContentRenderer(
            site_config.theme.pygments_style, markdown_config=site_config.markdown
        )
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "html.jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.template = self.env.get_template("page.html.jinja")
        self.stylesheet_template = self.env.get_template("site.css.jinja")
        self._page_urls: dict[str, str] = {}
        self._home_url = ""

    def resolve(self) -> tuple[ContentTree, list[NavNode]]:
        """Discover the documents and resolve the navigation tree against them.

        Returns
        -------
        tuple[ContentTree, list[NavNode]]
            The documents found under ``docs_dir`` and the validated nav tree
            (derived from the docs layout when the manifest declares none).

        Raises
        ------
        UnresolvedReferenceError
            If any navigation leaf names a document that does not exist.
        ConfigurationError
            If two documents would be written to the same output file.
        """
        content = discover_content(self.config.docs_dir)
        self._drop_shadowed_pages(content)
        nav = self.config.nav if self.config.nav is not None else default_nav(content)
        return content, resolve_nav(nav, content)

    def run(self) -> list[Path]:
        """Build the whole site into ``site_dir``.

        Returns
        -------
        list[Path]
            Written files: every page in document order, then the stylesheet,
            then the copied static files.

        Raises
        ------
        UnresolvedReferenceError
            Raised before any output is produced when a navigation entry
            references a missing document.
        """
        content, nav = self.resolve()
        self._report_unlisted(content, nav)

        use_directory_urls = self.config.use_directory_urls
        self._page_urls = {
            path: page_url(path, use_directory_urls=use_directory_urls)
            for path in content.documents
        }
        order = reading_order(nav)
        home = next(iter(order), None)
        if "index.md" in content.documents:
            home = "index.md"
        self._home_url = self._page_urls[home] if home else ""

        site_dir = self._prepare_site_dir()
        written: list[Path] = []
        for document in content.documents.values():
            self._check_images(document, content)
            dest = page_destination(
                document.path, use_directory_urls=use_directory_urls
            )
            page = self._build_page_model(document, dest, nav, order, content)
            html = self.template.render(**self._page_context(page, nav))
            written.append(self._write(site_dir / dest, html))

        stylesheet = self.stylesheet_template.render(
            palette=self.config.theme.palette,
            palette_colours=PALETTE_COLOURS,
            pygments_css=self.renderer.stylesheet,
        )
        written.append(self._write(site_dir / STYLESHEET_PATH, stylesheet))

        for rel_path in content.static_files:
            target = site_dir / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(self.config.docs_dir / rel_path, target)
            written.append(target)
        return written

    def _drop_shadowed_pages(self, content: ContentTree) -> None:
        """Keep one document per output file.

        ``index.md`` wins over a ``README.md`` in the same directory, which is
        dropped with a warning. Any other pair of documents rendering to the
        same file is a configuration error.

        Raises
        ------
        ConfigurationError
            If two documents other than an index/README pair share an output.
        """
        by_dest: dict[str, list[str]] = {}
        for path in content.documents:
            dest = page_destination(
                path, use_directory_urls=self.config.use_directory_urls
            )
            by_dest.setdefault(dest, []).append(path)
        for dest, paths in by_dest.items():
            if len(paths) < 2:
                continue
            stems = [posixpath.splitext(posixpath.basename(path))[0] for path in paths]
            if stems.count("index") != 1 or not all(
                stem in INDEX_STEMS for stem in stems
            ):
                listing = ", ".join(f"'{path}'" for path in paths)
                msg = f"Documents {listing} would all be written to '{dest}'."
                raise ConfigurationError(msg)
            for path, stem in zip(paths, stems, strict=True):
                if stem == "index":
                    continue
                logger.warning(
                    "Excluding '%s' from the site because '%s' is written to "
                    "the same page '%s'.",
                    path,
                    paths[stems.index("index")],
                    dest,
                )
                del content.documents[path]

    def _prepare_site_dir(self) -> Path:
        """Return ``site_dir``, emptied first when cleaning is enabled."""
        site_dir = self.config.site_dir
        if self.clean and site_dir.exists():
            shutil.rmtree(site_dir)
        site_dir.mkdir(parents=True, exist_ok=True)
        return site_dir

    @staticmethod
    def _write(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    @staticmethod
    def _report_unlisted(content: ContentTree, nav: list[NavNode]) -> None:
        """Log documents that are rendered but not reachable from the nav."""
        listed = {leaf.path for leaf in iter_document_leaves(nav)}
        unlisted = [path for path in content.documents if path not in listed]
        if unlisted:
            logger.info(
                "The following pages exist in the docs directory but are not "
                "included in the nav: %s",
                ", ".join(unlisted),
            )

    @staticmethod
    def _check_images(document: Document, content: ContentTree) -> None:
        """Warn about local images that do not exist under ``docs_dir``."""
        static = set(content.static_files)
        base_dir = posixpath.dirname(document.path)
        for image in document.images:
            if _is_external(image) or image.startswith(("data:", "/")):
                continue
            local = unquote(urlsplit(image).path)
            target = normalize_doc_path(posixpath.join(base_dir, local))
            if target is None or target not in static:
                logger.warning(
                    "Document '%s' embeds image '%s', which is not found in the "
                    "docs directory.",
                    document.path,
                    image,
                )

    def _build_page_model(
        self,
        document: Document,
        dest: str,
        nav: list[NavNode],
        order: list[str],
        content: ContentTree,
    ) -> PageModel:
        """Render ``document`` and collect its navigation context."""
        link_extension = RelativeLinkExtension(document.path, dest, self._page_urls)
        rendered = self.renderer.render(
            document.markdown, link_extension=link_extension
        )
        previous_page = next_page = None
        if document.path in order:
            position = order.index(document.path)
            if position > 0:
                previous_page = self._page_link(order[position - 1], dest, content)
            if position + 1 < len(order):
                next_page = self._page_link(order[position + 1], dest, content)
        return PageModel(
            title=document.title,
            src_path=document.path,
            dest_path=dest,
            content_html=rendered.html,
            toc_items=rendered.toc_items,
            breadcrumbs=find_trail(nav, document.path) or [],
            previous_page=previous_page,
            next_page=next_page,
        )

    def _page_link(self, path: str, dest: str, content: ContentTree) -> dict[str, str]:
        return {
            "label": content.documents[path].title,
            "href": quote(relative_href(dest, self._page_urls[path])),
        }

    def _page_context(self, page: PageModel, nav: list[NavNode]) -> dict[str, typ.Any]:
        """Assemble the template context for ``page``."""
        return {
            "site": self.config,
            "page": page,
            "html_title": f"{page.title} - {self.config.site_name}",
            "nav_entries": self._build_nav_entries(nav, page.src_path, page.dest_path),
            "home_href": quote(relative_href(page.dest_path, self._home_url)),
            "stylesheet_href": relative_href(page.dest_path, STYLESHEET_PATH),
            "extra_css": [
                self._asset_href(url, page.dest_path) for url in self.config.extra_css
            ],
            "extra_javascript": [
                self._asset_href(url, page.dest_path)
                for url in self.config.extra_javascript
            ],
        }

    @staticmethod
    def _asset_href(url: str, dest: str) -> str:
        """Return ``url`` unchanged when external, otherwise relative to ``dest``."""
        if _is_external(url) or url.startswith(("/", "data:")):
            return url
        normalized = normalize_doc_path(url)
        return relative_href(dest, normalized) if normalized else url

    def _build_nav_entries(
        self, nodes: list[NavNode], current: str, dest: str
    ) -> list[dict[str, typ.Any]]:
        """Build sidebar entries mirroring the nav tree for the page at ``dest``."""
        entries: list[dict[str, typ.Any]] = []
        for node in nodes:
            if node.is_group:
                children = self._build_nav_entries(node.children, current, dest)
                entries.append(
                    {
                        "label": node.label,
                        "href": None,
                        "is_group": True,
                        "is_active": False,
                        "is_open": any(
                            child["is_active"] or child["is_open"] for child in children
                        ),
                        "is_external": False,
                        "children": children,
                    }
                )
                continue
            if node.url is not None:
                href, is_active, is_external = node.url, False, True
            else:
                path = typ.cast("str", node.path)
                href = quote(relative_href(dest, self._page_urls[path]))
                is_active, is_external = path == current, False
            entries.append(
                {
                    "label": node.label,
                    "href": href,
                    "is_group": False,
                    "is_active": is_active,
                    "is_open": False,
                    "is_external": is_external,
                    "children": [],
                }
            )
        return entries


__all__ = ["SiteGenerator"]
