"""Starlette application serving pre-rendered documentation pages.

The app is a static files mount behind a small ASGI middleware that applies
:func:`~docs_e2e.server.resolver.resolve_path` to every HTTP request. Only
the path is rewritten; the query string travels separately in the ASGI scope
and reaches the browser untouched, and fragments never reach the server.

Example
-------
>>> from pathlib import Path
>>> from starlette.testclient import TestClient
>>> from docs_e2e.server import create_app
>>> client = TestClient(create_app(Path("build/docs")))  # doctest: +SKIP
>>> client.get("/ru/syntax/cut").status_code  # doctest: +SKIP
200
"""

from __future__ import annotations

import os
import typing as typ
from pathlib import Path

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import Mount
from starlette.staticfiles import StaticFiles

from .resolver import resolve_path

if typ.TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send


class ExtensionlessUrlMiddleware:
    """Rewrite extension-less request paths before routing.

    ``/`` and ``/guide/`` gain ``index.html``; ``/guide/cut`` gains ``.html``;
    paths whose tail already has an extension pass through unchanged.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Forward the request with ``path`` and ``raw_path`` rewritten."""
        if scope["type"] == "http":
            path = scope["path"]
            resolved = resolve_path(path)
            if resolved != path:
                suffix = resolved[len(path) :]
                scope = dict(scope)
                scope["path"] = resolved
                raw_path = scope.get("raw_path")
                if raw_path is not None:
                    scope["raw_path"] = raw_path + suffix.encode("ascii")
        await self.app(scope, receive, send)


class ContentFiles(StaticFiles):
    """Static files mount that answers 404 while the content root is absent."""

    async def check_config(self) -> None:
        """Validate the directory only once it exists.

        The stock implementation raises when the directory is missing, which
        would turn every request into a server error. A missing root is a
        resolution failure like any missing file.
        """
        if self.directory is not None and not os.path.isdir(self.directory):
            return
        await super().check_config()


def create_app(root: Path | str) -> Starlette:
    """Build the content server application.

    Parameters
    ----------
    root : Path or str
        Directory holding the pre-rendered documentation. It does not need to
        exist yet; requests answer 404 until it does.

    Returns
    -------
    Starlette
        ASGI application with the rewrite middleware installed and the root
        mounted at ``/``. ``app.state.content_root`` records the root.
    """
    content_root = Path(root)
    app = Starlette(
        routes=[
            Mount(
                "/",
                app=ContentFiles(directory=content_root, check_dir=False),
                name="content",
            )
        ],
        middleware=[Middleware(ExtensionlessUrlMiddleware)],
    )
    app.state.content_root = content_root
    return app


__all__ = ["ContentFiles", "ExtensionlessUrlMiddleware", "create_app"]
