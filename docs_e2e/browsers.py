"""Provision the Playwright browser used by the browser suites.

Playwright keeps downloaded browsers in a per-user cache.
:func:`ensure_browsers` runs ``playwright install`` only when no Chromium
build is present in that cache.

Examples
--------
>>> from pathlib import Path
>>> playwright_cache_path("linux", Path("/home/docs"), env={})
PosixPath('/home/docs/.cache/ms-playwright')
"""

from __future__ import annotations

import os
import subprocess
import sys
import typing as typ
from pathlib import Path

if typ.TYPE_CHECKING:
    import collections.abc as cabc

DEFAULT_BROWSER = "chromium"
CACHE_ENV_VAR = "PLAYWRIGHT_BROWSERS_PATH"

Runner = typ.Callable[..., "subprocess.CompletedProcess[typ.Any]"]


def playwright_cache_path(
    platform: str | None = None,
    home: Path | None = None,
    *,
    env: cabc.Mapping[str, str] | None = None,
) -> Path:
    """Return the directory Playwright installs browsers into.

    Parameters
    ----------
    platform : str, optional
        ``sys.platform`` style identifier; defaults to the running platform.
    home : Path, optional
        User home directory; defaults to :meth:`Path.home`.
    env : Mapping[str, str], optional
        Environment consulted for ``PLAYWRIGHT_BROWSERS_PATH``; defaults to
        ``os.environ``.

    Returns
    -------
    Path
        The configured override, or the platform default cache directory.
    """
    environ = os.environ if env is None else env
    override = environ.get(CACHE_ENV_VAR)
    if override and override != "0":
        return Path(override)
    platform = platform or sys.platform
    home = home or Path.home()
    if platform == "win32":
        return home / "AppData" / "Local" / "ms-playwright"
    if platform == "darwin":
        return home / "Library" / "Caches" / "ms-playwright"
    return home / ".cache" / "ms-playwright"


def cache_entries(cache_path: Path) -> list[str]:
    """Return the sorted entry names of ``cache_path``; unreadable means none."""
    try:
        return sorted(entry.name for entry in cache_path.iterdir())
    except OSError:
        return []


def has_browser(cache_path: Path, name: str = DEFAULT_BROWSER) -> bool:
    """Return ``True`` when a cache entry for browser ``name`` exists."""
    return any(name in entry for entry in cache_entries(cache_path))


def install_command(
    name: str = DEFAULT_BROWSER, extra: cabc.Sequence[str] = ()
) -> list[str]:
    """Return the ``playwright install`` command for browser ``name``."""
    return [sys.executable, "-m", "playwright", "install", "--with-deps", name, *extra]


def ensure_browsers(
    cache_path: Path | None = None,
    *,
    name: str = DEFAULT_BROWSER,
    extra: cabc.Sequence[str] = (),
    runner: Runner = subprocess.run,
) -> bool:
    """Install browser ``name`` unless the cache already holds it.

    Parameters
    ----------
    cache_path : Path, optional
        Playwright cache directory; defaults to :func:`playwright_cache_path`.
    name : str, optional
        Browser to check for and install.
    extra : Sequence[str], optional
        Additional arguments forwarded to ``playwright install``.
    runner : callable, optional
        ``subprocess.run`` compatible callable.

    Returns
    -------
    bool
        ``True`` when an install ran, ``False`` when the cache was current.

    Raises
    ------
    subprocess.CalledProcessError
        If ``playwright install`` fails.
    """
    cache_path = cache_path or playwright_cache_path()
    if has_browser(cache_path, name):
        return False
    runner(install_command(name, extra), check=True)
    return True


__all__ = [
    "CACHE_ENV_VAR",
    "DEFAULT_BROWSER",
    "cache_entries",
    "ensure_browsers",
    "has_browser",
    "install_command",
    "playwright_cache_path",
]
