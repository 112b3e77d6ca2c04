"""Behaviour tests for resolving extension-less documentation URLs.

The scenarios in ``features/url_resolution.feature`` request pages from the
Starlette application through ``TestClient`` and compare response bodies
with the files of the fixture build in ``tests/fixtures/site``.

Usage:
    pytest tests/bdd/test_url_resolution.py -v
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when
from starlette.testclient import TestClient

from docs_e2e.server import create_app

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "url_resolution.feature"
)
SITE_ROOT = Path(__file__).resolve().parents[1] / "fixtures" / "site"
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("a content server rooted at the fixture build")
def given_content_server(scenario_state: dict[str, object]) -> None:
    """Store a test client for the fixture build."""
    scenario_state["client"] = TestClient(create_app(SITE_ROOT))


@when(parsers.parse('I request "{path}"'))
def when_request(scenario_state: dict[str, object], path: str) -> None:
    """Issue a GET request and keep the response."""
    client = scenario_state["client"]
    assert isinstance(client, TestClient)
    scenario_state["response"] = client.get(path)


@then(parsers.parse("the response status is {status:d}"))
def then_status(scenario_state: dict[str, object], status: int) -> None:
    response = scenario_state["response"]
    assert response.status_code == status, (  # type: ignore[attr-defined]
        f"Expected HTTP {status}, got {response.status_code}"  # type: ignore[attr-defined]
    )


@then(parsers.parse('the body matches the file "{relative}"'))
def then_body_matches(scenario_state: dict[str, object], relative: str) -> None:
    """The served body is the file the rewrite rule names."""
    expected = (SITE_ROOT / relative).read_text(encoding="utf-8")
    response = scenario_state["response"]
    assert response.text == expected, (  # type: ignore[attr-defined]
        f"Body did not match {relative}"
    )
