"""Behaviour tests for tab groups synchronized through a shared group key.

The scenarios in ``features/tab_sync.feature`` load the fixture tabs page
into a :class:`~docs_e2e.widgets.PageModel`, click tabs by their label and
check the active tab of each group together with the page URL.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from docs_e2e.widgets import Click, PageModel

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "tab_sync.feature"
SITE_ROOT = Path(__file__).resolve().parents[1] / "fixtures" / "site"
BASE = "http://127.0.0.1:3000"
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _page(scenario_state: dict[str, object]) -> PageModel:
    page = scenario_state["page"]
    assert isinstance(page, PageModel)
    return page


@given(parsers.parse('the tabs page is loaded from "{path}"'))
def given_tabs_page(scenario_state: dict[str, object], path: str) -> None:
    html = (SITE_ROOT / "ru" / "syntax" / "tabs.html").read_text(encoding="utf-8")
    scenario_state["page"] = PageModel.from_html(html, f"{BASE}{path}")


@when(parsers.parse('I click the "{label}" tab of group "{group_id}"'))
def when_click_tab(scenario_state: dict[str, object], label: str, group_id: str) -> None:
    """Find the tab by its label and click its control."""
    page = _page(scenario_state)
    group = page.tabs.get(group_id)
    assert group is not None, f"No tab group {group_id!r} on the page"
    labels = [tab.label for tab in group.tabs]
    assert label in labels, f"Group {group_id!r} has tabs {labels}"
    target = page.tab_control_id(group_id, labels.index(label))
    assert target is not None
    assert page.dispatch(Click(target)), f"Clicking {label!r} changed nothing"


@then(parsers.parse('group "{group_id}" shows the "{slug}" tab'))
def then_group_shows(scenario_state: dict[str, object], group_id: str, slug: str) -> None:
    group = _page(scenario_state).tabs.get(group_id)
    assert group is not None
    assert group.active_slug == slug, f"{group_id} shows {group.active_slug!r}"
    assert group.panel_visibility().count(True) == 1


@then(parsers.parse('group "{group_id}" shows no tab'))
def then_group_shows_none(scenario_state: dict[str, object], group_id: str) -> None:
    group = _page(scenario_state).tabs.get(group_id)
    assert group is not None
    assert group.active_tab is None, f"{group_id} still shows {group.active_slug!r}"


@then(parsers.parse('the page URL contains "{fragment}"'))
def then_url_contains(scenario_state: dict[str, object], fragment: str) -> None:
    url = _page(scenario_state).snapshot().url
    assert fragment in url, f"URL {url!r} lacks {fragment!r}"
