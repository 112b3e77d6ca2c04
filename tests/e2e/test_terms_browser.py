"""Browser suite for term tooltips on ``/ru/syntax/terms``."""

from __future__ import annotations

import math

import pytest
from playwright.sync_api import Locator, Page, expect

from docs_e2e._constants import TERM_SELECTORS

pytestmark = pytest.mark.e2e

TERMS_PAGE = "/ru/syntax/terms"
MAX_TOOLTIP_DISTANCE_PX = 500


def _term(page: Page, nth: int = 0) -> Locator:
    return page.locator(TERM_SELECTORS["term"]).nth(nth)


def _tooltip(page: Page, term: Locator) -> Locator:
    described_by = term.get_attribute("aria-describedby")
    assert described_by, "Term must reference its tooltip"
    return page.locator(f'dfn[id="{described_by}"]')


@pytest.fixture
def terms_page(page: Page) -> Page:
    page.goto(TERMS_PAGE)
    return page


def test_term_is_an_accessible_button(terms_page: Page) -> None:
    term = _term(terms_page)
    expect(term).to_be_visible()
    expect(term).to_have_attribute("role", "button")
    expect(term).to_have_attribute("tabindex", "0")
    expect(term).to_have_attribute(TERM_SELECTORS["key_attr"])
    expect(term).to_have_attribute("id")


def test_click_opens_tooltip_dialog(terms_page: Page) -> None:
    term = _term(terms_page)
    tooltip = _tooltip(terms_page, term)
    expect(tooltip).not_to_be_visible()
    term.click()
    expect(tooltip).to_be_visible()
    expect(tooltip).to_have_attribute("role", "dialog")
    expect(tooltip).to_have_attribute("aria-live", "polite")
    expect(tooltip).to_have_attribute("aria-modal", "true")


def test_opening_second_term_closes_first(terms_page: Page) -> None:
    first, second = _term(terms_page, 0), _term(terms_page, 1)
    first_tooltip = _tooltip(terms_page, first)
    second_tooltip = _tooltip(terms_page, second)
    first.click()
    expect(first_tooltip).to_be_visible()
    second.click()
    expect(second_tooltip).to_be_visible()
    expect(first_tooltip).not_to_be_visible()


def test_click_outside_closes_tooltip(terms_page: Page) -> None:
    term = _term(terms_page)
    tooltip = _tooltip(terms_page, term)
    term.click()
    expect(tooltip).to_be_visible()
    terms_page.mouse.click(10, 10)
    expect(tooltip).not_to_be_visible()


def test_keyboard_opens_and_escape_closes(terms_page: Page) -> None:
    term = _term(terms_page)
    tooltip = _tooltip(terms_page, term)
    term.focus()
    terms_page.keyboard.press("Enter")
    expect(tooltip).to_be_visible()
    terms_page.keyboard.press("Escape")
    expect(tooltip).not_to_be_visible()


def test_tooltip_positioned_near_term(terms_page: Page) -> None:
    term = _term(terms_page)
    tooltip = _tooltip(terms_page, term)
    term_box = term.bounding_box()
    term.click()
    expect(tooltip).to_have_css("position", "absolute")
    assert tooltip.evaluate("el => el.style.top"), "Tooltip needs an inline top"
    assert tooltip.evaluate("el => el.style.left"), "Tooltip needs an inline left"
    tooltip_box = tooltip.bounding_box()
    assert term_box is not None
    assert tooltip_box is not None
    distance = math.hypot(tooltip_box["x"] - term_box["x"], tooltip_box["y"] - term_box["y"])
    assert distance < MAX_TOOLTIP_DISTANCE_PX, f"Tooltip {distance:.0f}px from term"
