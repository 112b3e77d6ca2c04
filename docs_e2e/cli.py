"""Cyclopts CLI entrypoint for serving and testing rendered documentation.

The ``docs-e2e`` console script serves a pre-rendered documentation build
with extension-less URLs, shows how request URLs resolve to files, provisions
the Playwright browser, and runs the browser suites against a local or remote
build. Typical usage is ``docs-e2e install`` once per machine followed by
``PROJECT=build/docs docs-e2e run`` locally or in CI.

Examples
--------
Serve a build on the default port:

>>> from docs_e2e.cli import app
>>> app(["serve", "--root", "build/docs"])  # doctest: +SKIP

Show how URLs are rewritten:

>>> app(["resolve", "/", "/ru/syntax/cut"])  # doctest: +SKIP
/ -> /index.html
/ru/syntax/cut -> /ru/syntax/cut.html
"""

from __future__ import annotations

import os
import shlex
import subprocess
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .browsers import cache_entries, ensure_browsers, playwright_cache_path
from .config import load_harness_config
from .server import ContentServer, resolve_url

app = App(name="docs-e2e", config=cyclopts.config.Env("DOCS_E2E_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Serve a documentation build with extension-less URLs.")
def serve(
    *,
    root: typ.Annotated[
        Path | None, Parameter(help="Directory holding the build", env_var="PROJECT")
    ] = None,
    host: typ.Annotated[str | None, Parameter(help="Interface to bind")] = None,
    port: typ.Annotated[
        int | None, Parameter(help="Port to listen on", env_var="PORT")
    ] = None,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to harness config", env_var="DOCS_E2E_CONFIG"),
    ] = None,
    log_level: typ.Annotated[str, Parameter(help="Uvicorn log level")] = "info",
) -> None:
    """Serve the documentation root in the foreground until interrupted.

    Parameters
    ----------
    root : Path or None, optional
        Build directory; falls back to ``PROJECT`` and then the config file.
    host : str or None, optional
        Interface to bind; defaults to the configured host.
    port : int or None, optional
        Port to listen on; falls back to ``PORT`` and then the config file.
    config : Path or None, optional
        Harness configuration file; ``config/harness.yaml`` when present.
    log_level : str, optional
        Level for uvicorn's request and lifecycle logging.
    """
    settings = load_harness_config(config).server
    server = ContentServer(
        root or settings.root,
        host=host or settings.host,
        port=settings.port if port is None else port,
        log_level=log_level,
    )
    print(f"serving {_format_path(server.root)} at {server.url}")
    server.serve()


@app.command(help="Show which file each request URL resolves to.")
def resolve(*urls: str) -> None:
    """Print ``url -> resolved`` for each URL, query and fragment preserved."""
    for url in urls:
        print(f"{url} -> {resolve_url(url)}")


@app.command(help="Install the Playwright browser unless it is cached.")
def install(
    *extra: str,
    cache_path: typ.Annotated[
        Path | None,
        Parameter(help="Playwright browser cache", env_var="PLAYWRIGHT_BROWSERS_PATH"),
    ] = None,
    browser: typ.Annotated[str, Parameter(help="Browser to provision")] = "chromium",
) -> None:
    """Provision the browser the suites run in.

    Parameters
    ----------
    *extra : str
        Extra arguments forwarded to ``playwright install``.
    cache_path : Path or None, optional
        Browser cache to inspect; defaults to the per-platform location.
    browser : str, optional
        Browser name to check for and install.

    Raises
    ------
    subprocess.CalledProcessError
        If ``playwright install`` fails.
    """
    target = cache_path or playwright_cache_path()
    print(f"playwright cache: {target}")
    for entry in cache_entries(target):
        print(entry)
    if ensure_browsers(target, name=browser, extra=extra):
        print(f"installed {browser}")
    else:
        print(f"{browser} already installed")


@app.command(help="Run the browser suites against a documentation build.")
def run(
    *pytest_args: str,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to harness config", env_var="DOCS_E2E_CONFIG"),
    ] = None,
) -> None:
    """Build (optionally), serve and test the documentation.

    Parameters
    ----------
    *pytest_args : str
        Extra arguments appended to the generated pytest command line.
    config : Path or None, optional
        Harness configuration file; ``config/harness.yaml`` when present.

    Raises
    ------
    subprocess.CalledProcessError
        If the configured build command fails.
    SystemExit
        With pytest's exit status when the suites fail.
    """
    harness = load_harness_config(config)
    if harness.server.build_command:
        print(f"building: {harness.server.build_command}")
        subprocess.run(shlex.split(harness.server.build_command), check=True)  # noqa: S603

    server: ContentServer | None = None
    if harness.uses_local_server:
        server = ContentServer(
            harness.server.root, host=harness.server.host, port=harness.server.port
        ).start()
        harness.server.port = server.port
        print(f"serving {_format_path(server.root)} at {server.url}")
    try:
        command = [sys.executable, "-m", "pytest", *harness.pytest_args(), *pytest_args]
        env = dict(os.environ, BASE_URL=harness.base_url)
        result = subprocess.run(command, check=False, env=env)  # noqa: S603
    finally:
        if server is not None:
            server.stop()
    if result.returncode:
        raise SystemExit(result.returncode)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``docs-e2e`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
