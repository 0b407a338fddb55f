"""Integration tests for ``SiteGenerator`` against the sample notes project."""

from __future__ import annotations

import logging
import typing as typ

import pytest
from bs4 import BeautifulSoup

from notes_site.config import (
    ConfigurationError,
    UnresolvedReferenceError,
    load_site_config,
)
from notes_site.generator import SiteGenerator

if typ.TYPE_CHECKING:
    from pathlib import Path

STASH_PAGE = "git/useful-commands/stash/index.html"
INTRO_PAGE = "artificial-intelligence/machine-learning/introduction/intro/index.html"


def _build(root: Path, **kwargs: typ.Any) -> Path:
    config = load_site_config(root / "mkdocs.yml")
    SiteGenerator(config, **kwargs).run()
    return config.site_dir


def _soup(site_dir: Path, rel_path: str) -> BeautifulSoup:
    html = (site_dir / rel_path).read_text(encoding="utf-8")
    return BeautifulSoup(html, "html.parser")


def _snapshot(site_dir: Path) -> dict[str, bytes]:
    return {
        path.relative_to(site_dir).as_posix(): path.read_bytes()
        for path in sorted(site_dir.rglob("*"))
        if path.is_file()
    }


def test_stash_page_title_and_heading(notes_project: Path) -> None:
    """The stash note renders under its directory URL with its own title."""
    soup = _soup(_build(notes_project), STASH_PAGE)
    assert soup.title is not None
    assert soup.title.get_text() == "Git stash - My learning notes"
    heading = soup.select_one("article.doc-article h1")
    assert heading is not None
    assert heading.get_text() == "Git stash"
    block = soup.select_one("div.codehilite")
    assert block is not None
    assert block.get("data-language") == "bash"


def test_stash_page_sidebar_breadcrumbs_and_pager(notes_project: Path) -> None:
    """Only the stash link is active and its ancestor groups are open."""
    soup = _soup(_build(notes_project), STASH_PAGE)
    active = soup.select(".site-nav a.nav-link.is-active")
    assert [link.get_text() for link in active] == ["Stash"]
    assert active[0]["href"] == "./"
    assert active[0].get("aria-current") == "page"
    open_groups = [
        details.select_one("summary").get_text()
        for details in soup.select(".site-nav details[open]")
    ]
    assert open_groups == ["Git", "Useful commands"]
    crumbs = [li.get_text() for li in soup.select("ol.breadcrumbs li")]
    assert crumbs == ["Git", "Useful commands"]
    previous = soup.select_one("a.pager__link--previous")
    assert previous is not None
    assert previous.get_text() == "Thread safety"
    assert previous["href"] == "../../../java/concurrency/fundamentals/c02-thread-safety/"
    assert soup.select_one("a.pager__link--next") is None
    home = soup.select_one("a.site-header__title")
    assert home is not None
    assert home["href"] == "../../../"
    toc = [a.get_text() for a in soup.select("aside.doc-toc a")]
    assert toc == ["Save work in progress"]


def test_intro_page_links_images_math_and_footnotes(notes_project: Path) -> None:
    """Relative links, images, math and footnotes survive rendering."""
    soup = _soup(_build(notes_project), INTRO_PAGE)
    article = soup.select_one("article.doc-article")
    assert article is not None
    hrefs = [a["href"] for a in article.select("a")]
    assert "../supervised-learning/#regression" in hrefs
    image = article.select_one("img")
    assert image is not None
    assert image["src"] == "../img/curve.png"
    assert article.select('script[type^="math/tex"]')
    assert article.select_one("div.footnote") is not None
    scripts = [script["src"] for script in soup.select("body > script[src]")]
    assert scripts == [
        "https://cdnjs.cloudflare.com/ajax/libs/mathjax/2.7.0/MathJax.js?config=TeX-MML-AM_CHTML"
    ]
    toc = [
        (li["class"][-1], li.get_text()) for li in soup.select("li.doc-toc__item")
    ]
    assert toc == [
        ("doc-toc__item--h2", "Definition"),
        ("doc-toc__item--h3", "Hypothesis"),
    ]


def test_index_links_to_rendered_stash_page(notes_project: Path) -> None:
    """Links in the home page target the rendered stash directory."""
    soup = _soup(_build(notes_project), "index.html")
    link = soup.select_one("article.doc-article a")
    assert link is not None
    assert link["href"] == "git/useful-commands/stash/"
    assert soup.select_one("ol.breadcrumbs") is None


def test_code_fence_comment_is_not_a_title(notes_project: Path) -> None:
    """A ``#`` line inside a fence never becomes the page title."""
    soup = _soup(
        _build(notes_project), "java/concurrency/fundamentals/c02-thread-safety/index.html"
    )
    assert soup.title is not None
    assert soup.title.get_text() == "Thread safety - My learning notes"


def test_stylesheet_and_static_files(notes_project: Path) -> None:
    """The themed stylesheet and docs assets land in site_dir."""
    site_dir = _build(notes_project)
    css = (site_dir / "assets" / "site.css").read_text(encoding="utf-8")
    assert "#2196f3" in css
    assert ".codehilite" in css
    image = site_dir / "artificial-intelligence/machine-learning/introduction/img/curve.png"
    assert image.read_bytes() == b"\x89PNG\r\n\x1a\n fixture"
    soup = _soup(site_dir, STASH_PAGE)
    stylesheet = soup.select_one('link[rel="stylesheet"]')
    assert stylesheet is not None
    assert stylesheet["href"] == "../../../assets/site.css"


def test_rebuild_is_byte_identical(notes_project: Path) -> None:
    """Two builds of unchanged inputs produce identical output trees."""
    first = _snapshot(_build(notes_project))
    second = _snapshot(_build(notes_project))
    assert first == second
    assert len([path for path in first if path.endswith(".html")]) == 6


def test_failed_build_leaves_previous_site(
    notes_project: Path, manifest_writer: typ.Callable[..., Path]
) -> None:
    """An unresolved nav entry aborts before the old output is touched."""
    site_dir = _build(notes_project)
    before = _snapshot(site_dir)
    manifest_writer(nav='nav:\n  - "Foo": "foo/bar.md"\n  - "Home": "index.md"\n')
    config = load_site_config(notes_project / "mkdocs.yml")
    with pytest.raises(UnresolvedReferenceError) as excinfo:
        SiteGenerator(config).run()
    assert excinfo.value.references == [("Foo", "foo/bar.md")]
    assert _snapshot(site_dir) == before


def test_flat_html_layout(
    notes_project: Path, manifest_writer: typ.Callable[..., Path]
) -> None:
    """Disabling directory URLs writes ``name.html`` files with matching links."""
    manifest_writer(extra="use_directory_urls: false\n")
    site_dir = _build(notes_project)
    assert (site_dir / "git/useful-commands/stash.html").is_file()
    assert not (site_dir / STASH_PAGE).exists()
    soup = _soup(site_dir, "index.html")
    link = soup.select_one("article.doc-article a")
    assert link is not None
    assert link["href"] == "git/useful-commands/stash.html"
    stash = _soup(site_dir, "git/useful-commands/stash.html")
    home = stash.select_one("a.site-header__title")
    assert home is not None
    assert home["href"] == "../../index.html"


def test_nav_derived_from_docs_when_omitted(
    notes_project: Path, manifest_writer: typ.Callable[..., Path]
) -> None:
    """Without a nav block, the sidebar mirrors the docs directory."""
    manifest_writer(nav=None)
    soup = _soup(_build(notes_project), "index.html")
    top_level = soup.select_one(".site-nav ul.nav-list--depth-0")
    assert top_level is not None
    labels = [
        item.select_one("a, summary").get_text()
        for item in top_level.find_all("li", recursive=False)
    ]
    assert labels == ["My learning notes", "Artificial intelligence", "Git", "Java"]


def test_unlisted_documents_are_rendered_and_logged(
    notes_project: Path,
    manifest_writer: typ.Callable[..., Path],
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Documents missing from the nav are still built and reported at INFO."""
    manifest_writer(nav='nav:\n  - "Home": "index.md"\n')
    with caplog.at_level(logging.INFO, logger="notes_site"):
        site_dir = _build(notes_project)
    assert (site_dir / STASH_PAGE).is_file()
    messages = [
        record.getMessage() for record in caplog.records if record.levelno == logging.INFO
    ]
    assert any("git/useful-commands/stash.md" in message for message in messages)


def test_broken_links_and_images_warn(
    notes_project: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Links to unknown notes and missing images are warnings, not failures."""
    stash = notes_project / "docs/git/useful-commands/stash.md"
    stash.write_text(
        "# Git stash\n\nSee [rebase](rebase.md).\n\n![diagram](img/missing.png)\n",
        encoding="utf-8",
    )
    with caplog.at_level(logging.WARNING, logger="notes_site"):
        site_dir = _build(notes_project)
    warnings = " ".join(
        record.getMessage()
        for record in caplog.records
        if record.levelno == logging.WARNING
    )
    assert "rebase.md" in warnings
    assert "img/missing.png" in warnings
    link = _soup(site_dir, STASH_PAGE).select_one("article.doc-article a")
    assert link is not None
    assert link["href"] == "rebase.md"


def test_dirty_build_keeps_stray_files(notes_project: Path) -> None:
    """With cleaning disabled, files from earlier builds are left alone."""
    site_dir = notes_project / "site"
    site_dir.mkdir()
    stray = site_dir / "old.html"
    stray.write_text("stale", encoding="utf-8")
    _build(notes_project, clean=False)
    assert stray.read_text(encoding="utf-8") == "stale"
    _build(notes_project)
    assert not stray.exists()


def test_index_wins_over_readme_in_same_directory(
    notes_project: Path,
    manifest_writer: typ.Callable[..., Path],
    caplog: pytest.LogCaptureFixture,
) -> None:
    """A README sharing the index page's output is excluded with a warning."""
    (notes_project / "docs/README.md").write_text("# Readme page\n", encoding="utf-8")
    manifest_writer(nav=None)
    config = load_site_config(notes_project / "mkdocs.yml")
    with caplog.at_level(logging.WARNING, logger="notes_site"):
        written = SiteGenerator(config).run()
    relative = [path.relative_to(config.site_dir).as_posix() for path in written]
    assert len(relative) == len(set(relative))
    assert relative.count("index.html") == 1
    soup = _soup(config.site_dir, "index.html")
    assert soup.title is not None
    assert soup.title.get_text() == "My learning notes - My learning notes"
    labels = [a.get_text() for a in soup.select(".site-nav a.nav-link")]
    assert "Readme page" not in labels
    assert any("README.md" in record.getMessage() for record in caplog.records)


def test_documents_sharing_an_output_file_are_rejected(
    notes_project: Path, manifest_writer: typ.Callable[..., Path]
) -> None:
    """``a/b.md`` and ``a/b/index.md`` cannot both become ``a/b/index.html``."""
    nested = notes_project / "docs/git/useful-commands/stash/index.md"
    nested.parent.mkdir()
    nested.write_text("# Stash overview\n", encoding="utf-8")
    manifest_writer(nav=None)
    config = load_site_config(notes_project / "mkdocs.yml")
    with pytest.raises(ConfigurationError, match="stash/index.html"):
        SiteGenerator(config).run()
    assert not config.site_dir.exists()


def test_percent_encoded_targets_resolve(
    notes_project: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Encoded spaces in links and images name the files on disk."""
    docs = notes_project / "docs/git/useful-commands"
    (docs / "img").mkdir()
    (docs / "img/stash flow.png").write_bytes(b"png")
    (docs / "branch notes.md").write_text("# Branch notes\n", encoding="utf-8")
    (docs / "stash.md").write_text(
        "# Git stash\n\n"
        "See [branches](branch%20notes.md).\n\n"
        "![flow](img/stash%20flow.png)\n",
        encoding="utf-8",
    )
    with caplog.at_level(logging.WARNING, logger="notes_site"):
        site_dir = _build(notes_project)
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]
    soup = _soup(site_dir, STASH_PAGE)
    link = soup.select_one("article.doc-article a")
    assert link is not None
    assert link["href"] == "../branch%20notes/"
    image = soup.select_one("article.doc-article img")
    assert image is not None
    assert image["src"] == "../img/stash%20flow.png"
    assert (site_dir / "git/useful-commands/branch notes/index.html").is_file()
