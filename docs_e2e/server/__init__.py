"""Static content server for pre-rendered documentation pages."""

from .app import ContentFiles, ExtensionlessUrlMiddleware, create_app
from .resolver import ResolvedRequest, resolve_path, resolve_url, split_request
from .runner import ContentServer, ServerStartError, wait_until_ready

__all__ = [
    "ContentFiles",
    "ContentServer",
    "ExtensionlessUrlMiddleware",
    "ResolvedRequest",
    "ServerStartError",
    "create_app",
    "resolve_path",
    "resolve_url",
    "split_request",
    "wait_until_ready",
]
