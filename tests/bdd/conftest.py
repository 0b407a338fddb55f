"""Shared pytest-bdd steps for site build scenarios.

Scenarios in this directory describe a notes project, build it with
``SiteGenerator`` and inspect the result. The build step records either the
written paths or the raised ``ConfigurationError`` in ``scenario_state`` so
``Then`` steps can assert on success and failure alike.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import when

from notes_site.config import ConfigurationError, load_site_config
from notes_site.generator import SiteGenerator


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@when("I build the site")
def when_build_site(scenario_state: dict[str, object]) -> None:
    """Load the scenario's manifest and run the generator, recording the outcome."""
    manifest = typ.cast("Path", scenario_state["manifest"])
    config = load_site_config(manifest)
    scenario_state["site_dir"] = config.site_dir
    try:
        scenario_state["written"] = SiteGenerator(config).run()
    except ConfigurationError as exc:
        scenario_state["error"] = exc
