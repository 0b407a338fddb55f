"""Utilities for rendering markdown and syntax-highlighted code snippets."""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown.extensions import Extension

    from notes_site.config import MarkdownConfig
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
LANGUAGE_PREFIX = "language-"
CODEHILITE_BLOCK_PATTERN = re.compile(
    r'<div class="codehilite">'
    r'(?P<body>(?:(?!<div class="codehilite">).)*?)'
    r'<code class="language-(?P<lang>[^"]*)">',
    re.DOTALL,
)
BASE_EXTENSIONS = ("toc", "fenced_code", "codehilite", "tables", "sane_lists")
TOC_LEVELS = (2, 3)


class LanguageTaggedFormatter(HtmlFormatter):
    """Pygments formatter that records the block language on ``<code>``.

    Markdown's codehilite passes ``lang_str`` (``language-java``) to formatter
    classes, for fenced and indented blocks alike.
    """

    def __init__(self, lang_str: str = "", **options: typ.Any) -> None:
        super().__init__(**options)
        self.lang_str = lang_str or f"{LANGUAGE_PREFIX}text"

    def _wrap_code(self, source: typ.Any) -> typ.Any:
        yield 0, f'<code class="{escape(self.lang_str, quote=True)}">'
        yield from source
        yield 0, "</code>"


@dc.dataclass(slots=True)
class RenderedMarkdown:
    """HTML produced for one document plus its table of contents.

    Attributes
    ----------
    html : str
        Rendered body.
    toc_items : list[dict[str, object]]
        Second- and third-level headings with ``label`` (already escaped
        HTML), ``anchor`` and ``level`` keys, in document order.
    """

    html: str
    toc_items: list[dict[str, object]]


class HtmlContentRenderer:
    """Render markdown and code snippets with consistent styling."""

    def __init__(
        self,
        pygments_style: str = "monokai",
        markdown_config: MarkdownConfig | None = None,
    ) -> None:
        """Initialize a renderer with a pygments style and manifest extensions.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        markdown_config : MarkdownConfig, optional
            Extensions (and their options) requested by the manifest, added
            after the built-in ``toc``, ``fenced_code``, ``codehilite``,
            ``tables`` and ``sane_lists`` extensions.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")
        self.extensions: list[str] = list(BASE_EXTENSIONS)
        self.extension_configs: dict[str, dict[str, object]] = {
            "codehilite": {
                "linenums": False,
                "guess_lang": False,
                "css_class": "codehilite",
                "pygments_style": pygments_style,
                "pygments_formatter": LanguageTaggedFormatter,
                "lang_prefix": LANGUAGE_PREFIX,
            }
        }
        if markdown_config is not None:
            for name in markdown_config.extensions:
                if name not in self.extensions:
                    self.extensions.append(name)
            for name, options in markdown_config.extension_configs.items():
                self.extension_configs.setdefault(name, {}).update(options)

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def render(
        self, text: str, *, link_extension: Extension | None = None
    ) -> RenderedMarkdown:
        """Render markdown into HTML using the configured extensions.

        A fresh ``Markdown`` instance is used per call so footnote and heading
        ids never leak between documents.
        """
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return RenderedMarkdown(html="", toc_items=[])
        extensions: list[Extension | str] = list(self.extensions)
        if link_extension is not None:
            extensions.append(link_extension)
        md = Markdown(extensions=extensions, extension_configs=self.extension_configs)
        html = md.convert(normalized)
        toc_tokens = getattr(md, "toc_tokens", [])
        return RenderedMarkdown(
            html=self._annotate_codehilite(html),
            toc_items=list(_flatten_toc(toc_tokens)),
        )

    @staticmethod
    def _annotate_codehilite(html: str) -> str:
        """Copy each highlighted block's language onto its wrapping ``<div>``."""

        def _repl(match: re.Match[str]) -> str:
            lang = match.group("lang")
            return (
                f'<div class="codehilite" data-language="{lang}">'
                f'{match.group("body")}<code class="language-{lang}">'
            )

        return CODEHILITE_BLOCK_PATTERN.sub(_repl, html)

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


def _flatten_toc(
    tokens: cabc.Iterable[dict[str, typ.Any]],
) -> cabc.Iterator[dict[str, object]]:
    """Yield h2/h3 entries from python-markdown's nested ``toc_tokens``."""
    for token in tokens:
        level = int(token.get("level", 0))
        if level in TOC_LEVELS:
            yield {"label": token["name"], "anchor": token["id"], "level": level}
        yield from _flatten_toc(token.get("children", []))


__all__ = [
    "BASE_EXTENSIONS",
    "HtmlContentRenderer",
    "LanguageTaggedFormatter",
    "RenderedMarkdown",
]
