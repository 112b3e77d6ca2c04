"""Load harness configuration YAML into typed dataclasses."""

from __future__ import annotations

import os
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from docs_e2e._constants import DEFAULT_CONFIG_PATH

from .helpers import (
    _coerce_bool,
    _coerce_int,
    _coerce_port,
    _env_flag,
    _optional_str,
    _section,
)
from .models import (
    BrowserConfig,
    HarnessConfig,
    HarnessConfigError,
    RunConfig,
    ServerConfig,
)

CI_RETRIES = 2
CI_WORKERS = 1
LOCAL_RETRIES = 0
LOCAL_WORKERS = 4


def load_harness_config(
    path: Path | None = None,
    *,
    env: typ.Mapping[str, str] | None = None,
) -> HarnessConfig:
    """Load the YAML file describing how the docs are served and tested.

    Parameters
    ----------
    path : Path or None, optional
        Filesystem path to the harness configuration (for example,
        ``config/harness.yaml``). When ``None`` the default location is read
        if it exists, otherwise built-in defaults apply.
    env : Mapping[str, str] or None, optional
        Environment used for overrides; defaults to ``os.environ``. ``PROJECT``
        sets the content root, ``PORT`` the port, ``BASE_URL`` the browser
        base URL and ``CI`` switches retry/worker defaults.

    Returns
    -------
    HarnessConfig
        Parsed configuration with environment overrides applied.

    Raises
    ------
    FileNotFoundError
        If ``path`` was given explicitly and does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    HarnessConfigError
        If a section or value is malformed (for example, a non-numeric port).

    Examples
    --------
    >>> from pathlib import Path
    >>> from docs_e2e.config import load_harness_config
    >>> config = load_harness_config(Path("config/harness.yaml"), env={})
    >>> config.server.port
    3000
    """
    environ = os.environ if env is None else env
    raw = _read_yaml(path)

    ci = _env_flag(environ, "CI")
    server = _build_server_config(_section(raw, "server"), environ)
    browser = _build_browser_config(_section(raw, "browser"), environ)
    run = _build_run_config(_section(raw, "run"), ci=ci)
    return HarnessConfig(server=server, browser=browser, run=run, ci=ci)


def _read_yaml(path: Path | None) -> dict[str, typ.Any]:
    """Return the parsed YAML mapping, or an empty mapping for the defaults."""
    explicit = path is not None
    target = path if path is not None else Path(DEFAULT_CONFIG_PATH)
    if not target.exists():
        if explicit:
            msg = f"Configuration file '{target}' not found."
            raise FileNotFoundError(msg)
        return {}

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with target.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    return dict(loaded)


def _build_server_config(
    payload: typ.Mapping[str, typ.Any], env: typ.Mapping[str, str]
) -> ServerConfig:
    """Build the ServerConfig, letting ``PROJECT`` and ``PORT`` win."""
    base = ServerConfig()
    root = _optional_str(env.get("PROJECT")) or _optional_str(payload.get("root"))
    host = _optional_str(payload.get("host")) or base.host
    port_value = _optional_str(env.get("PORT")) or payload.get("port", base.port)
    return ServerConfig(
        root=Path(root) if root else base.root,
        host=host,
        port=_coerce_port(port_value),
        build_command=_optional_str(payload.get("build_command")),
    )


def _build_browser_config(
    payload: typ.Mapping[str, typ.Any], env: typ.Mapping[str, str]
) -> BrowserConfig:
    """Build the BrowserConfig, letting ``BASE_URL`` override the file."""
    base = BrowserConfig()
    base_url = _optional_str(env.get("BASE_URL")) or _optional_str(
        payload.get("base_url")
    )
    return BrowserConfig(
        base_url=base_url,
        name=_optional_str(payload.get("name")) or base.name,
        headless=_coerce_bool(payload.get("headless", base.headless), field="headless"),
        timeout_ms=_coerce_int(
            payload.get("timeout_ms", base.timeout_ms), field="timeout_ms", minimum=1
        ),
        ignore_https_errors=_coerce_bool(
            payload.get("ignore_https_errors", base.ignore_https_errors),
            field="ignore_https_errors",
        ),
    )


def _build_run_config(payload: typ.Mapping[str, typ.Any], *, ci: bool) -> RunConfig:
    """Build the RunConfig; retries and workers default by CI mode."""
    base = RunConfig()
    retries = payload.get("retries")
    workers = payload.get("workers")
    junit = payload.get("junit_xml", base.junit_xml)
    return RunConfig(
        test_dir=Path(payload.get("test_dir", base.test_dir)),
        output_dir=Path(payload.get("output_dir", base.output_dir)),
        retries=(
            _coerce_int(retries, field="retries")
            if retries is not None
            else (CI_RETRIES if ci else LOCAL_RETRIES)
        ),
        workers=(
            _coerce_int(workers, field="workers", minimum=1)
            if workers is not None
            else (CI_WORKERS if ci else LOCAL_WORKERS)
        ),
        tracing=_optional_str(payload.get("tracing")) or base.tracing,
        junit_xml=Path(junit) if junit else None,
    )


__all__ = ["HarnessConfigError", "load_harness_config"]
