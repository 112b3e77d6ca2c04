"""Typed dataclasses describing the docs_e2e harness configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from docs_e2e._constants import DEFAULT_HOST, DEFAULT_PORT


class HarnessConfigError(ValueError):
    """Raised when the harness configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class ServerConfig:
    """Where the static content server reads pages from and listens."""

    root: Path = Path("build/docs")
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    build_command: str | None = None

    @property
    def url(self) -> str:
        """Return the base URL the server answers on."""
        return f"http://{self.host}:{self.port}"


@dc.dataclass(slots=True)
class BrowserConfig:
    """Browser settings handed to the Playwright pytest plugin."""

    base_url: str | None = None
    name: str = "chromium"
    headless: bool = True
    timeout_ms: int = 30000
    ignore_https_errors: bool = True


@dc.dataclass(slots=True)
class RunConfig:
    """Test-run options: where the suites live and how they are scheduled."""

    test_dir: Path = Path("tests/e2e")
    output_dir: Path = Path(".playwright/result")
    retries: int = 0
    workers: int = 4
    tracing: str = "retain-on-failure"
    junit_xml: Path | None = Path(".playwright/junit.xml")


@dc.dataclass(slots=True)
class HarnessConfig:
    """Fully resolved harness configuration."""

    server: ServerConfig = dc.field(default_factory=ServerConfig)
    browser: BrowserConfig = dc.field(default_factory=BrowserConfig)
    run: RunConfig = dc.field(default_factory=RunConfig)
    ci: bool = False

    @property
    def base_url(self) -> str:
        """Return the URL the browser suites navigate relative to."""
        return self.browser.base_url or self.server.url

    @property
    def uses_local_server(self) -> bool:
        """Return ``True`` when the suites target the bundled content server."""
        return self.browser.base_url is None

    def pytest_args(self) -> list[str]:
        """Build the pytest argument vector for the browser suites.

        Returns
        -------
        list[str]
            Arguments understood by pytest, pytest-playwright, pytest-xdist and
            pytest-rerunfailures. Scheduling flags are only emitted when they
            change the default behaviour.
        """
        args = [
            str(self.run.test_dir),
            "--browser",
            self.browser.name,
            "--base-url",
            self.base_url,
            "--output",
            str(self.run.output_dir),
            "--tracing",
            self.run.tracing,
        ]
        if not self.browser.headless:
            args.append("--headed")
        if self.run.retries > 0:
            args.extend(["--reruns", str(self.run.retries)])
        if self.run.workers > 1:
            args.extend(["-n", str(self.run.workers)])
        if self.run.junit_xml is not None:
            args.append(f"--junitxml={self.run.junit_xml}")
        return args


__all__ = [
    "BrowserConfig",
    "HarnessConfig",
    "HarnessConfigError",
    "RunConfig",
    "ServerConfig",
]
