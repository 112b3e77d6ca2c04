"""Behaviour tests for collapsible sections reached through the URL fragment.

The scenarios in ``features/cut_hash_navigation.feature`` load the fixture
cut page with a manually advanced clock so the transient highlight can be
checked before and after it expires.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from docs_e2e.widgets import Click, HashChange, PageModel

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "cut_hash_navigation.feature"
)
SITE_ROOT = Path(__file__).resolve().parents[1] / "fixtures" / "site"
BASE = "http://127.0.0.1:3000"
scenarios(FEATURE_FILE)


class SteppedClock:
    """Monotonic clock advanced by the scenario steps."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {"clock": SteppedClock()}


def _page(scenario_state: dict[str, object]) -> PageModel:
    page = scenario_state["page"]
    assert isinstance(page, PageModel)
    return page


@given(parsers.parse('the cut page is loaded from "{path}"'))
def given_cut_page(scenario_state: dict[str, object], path: str) -> None:
    html = (SITE_ROOT / "ru" / "syntax" / "cut.html").read_text(encoding="utf-8")
    clock = scenario_state["clock"]
    assert isinstance(clock, SteppedClock)
    scenario_state["page"] = PageModel.from_html(html, f"{BASE}{path}", clock=clock)


@when(parsers.parse('the fragment changes to "{fragment}"'))
def when_fragment_changes(scenario_state: dict[str, object], fragment: str) -> None:
    assert _page(scenario_state).dispatch(HashChange(fragment))


@when(parsers.parse('I click the title of section "{section_id}"'))
def when_click_title(scenario_state: dict[str, object], section_id: str) -> None:
    assert _page(scenario_state).dispatch(Click(section_id))


@when("one second has passed")
def when_second_passes(scenario_state: dict[str, object]) -> None:
    clock = scenario_state["clock"]
    assert isinstance(clock, SteppedClock)
    clock.now += 1.0


@then(parsers.parse('section "{section_id}" is expanded'))
def then_expanded(scenario_state: dict[str, object], section_id: str) -> None:
    state = _page(scenario_state).snapshot()
    assert section_id in state.expanded, f"{section_id} should be expanded"
    assert section_id in state.visible, f"{section_id} should be visible"


@then(parsers.parse('section "{section_id}" is not expanded'))
def then_not_expanded(scenario_state: dict[str, object], section_id: str) -> None:
    state = _page(scenario_state).snapshot()
    assert section_id not in state.expanded, f"{section_id} should be collapsed"


@then(parsers.parse('the title of section "{section_id}" has focus'))
def then_focused(scenario_state: dict[str, object], section_id: str) -> None:
    state = _page(scenario_state).snapshot()
    assert state.focused == section_id, f"Focus is on {state.focused!r}"
    assert state.scrolled_to == section_id


@then(parsers.parse('section "{section_id}" is highlighted'))
def then_highlighted(scenario_state: dict[str, object], section_id: str) -> None:
    assert section_id in _page(scenario_state).snapshot().highlighted


@then(parsers.parse('section "{section_id}" is not highlighted'))
def then_not_highlighted(scenario_state: dict[str, object], section_id: str) -> None:
    assert section_id not in _page(scenario_state).snapshot().highlighted
