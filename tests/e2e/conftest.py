"""Fixtures for the browser suites.

The suites drive Chromium through pytest-playwright against a real
documentation build. They run only when there is a build to test: ``PROJECT``
names a local build directory (served by :class:`ContentServer` for the
session) or ``BASE_URL`` / ``--base-url`` points at an already running site.
Otherwise every test marked ``e2e`` is skipped.
"""

from __future__ import annotations

import os
import typing as typ

import pytest

from docs_e2e.config import HarnessConfig, load_harness_config
from docs_e2e.server import ContentServer

if typ.TYPE_CHECKING:
    from playwright.sync_api import Page


def _target_configured(config: pytest.Config) -> bool:
    if config.getoption("base_url", default=None):
        return True
    return bool(os.environ.get("BASE_URL") or os.environ.get("PROJECT"))


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip browser suites when no documentation build is configured."""
    if _target_configured(config):
        return
    skip = pytest.mark.skip(reason="set PROJECT or BASE_URL to run browser suites")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(scope="session")
def harness_config() -> HarnessConfig:
    """Return the harness configuration with environment overrides."""
    return load_harness_config()


@pytest.fixture(scope="session")
def content_server(
    pytestconfig: pytest.Config, harness_config: HarnessConfig
) -> typ.Iterator[ContentServer | None]:
    """Serve ``PROJECT`` for the session unless a base URL was supplied."""
    if pytestconfig.getoption("base_url", default=None) or not (
        harness_config.uses_local_server
    ):
        yield None
        return
    server = ContentServer(
        harness_config.server.root, host=harness_config.server.host, port=0
    )
    with server:
        yield server


@pytest.fixture(scope="session")
def base_url(
    pytestconfig: pytest.Config,
    harness_config: HarnessConfig,
    content_server: ContentServer | None,
) -> str:
    """Return the site URL the suites navigate relative to."""
    option = pytestconfig.getoption("base_url", default=None)
    if option:
        return str(option)
    if content_server is not None:
        return content_server.url
    return harness_config.base_url


@pytest.fixture(scope="session")
def browser_context_args(
    browser_context_args: dict[str, typ.Any],
    harness_config: HarnessConfig,
    base_url: str,
) -> dict[str, typ.Any]:
    """Apply the configured HTTPS and base URL settings to every context."""
    return {
        **browser_context_args,
        "base_url": base_url,
        "ignore_https_errors": harness_config.browser.ignore_https_errors,
    }


@pytest.fixture(autouse=True)
def _page_timeout(page: Page, harness_config: HarnessConfig) -> None:
    page.set_default_timeout(harness_config.browser.timeout_ms)
