"""Extension-less URL resolution for the static content server.

Pre-rendered documentation links omit the ``.html`` suffix (``/ru/syntax/cut``)
and directory URLs end in ``/``. Before a request reaches the static files
mount, its path is rewritten so it names a concrete file:

* tail segment empty (``/``, ``/ru/``): append ``index.html``;
* tail without an extension (``cut``): append ``.html``;
* anything else (``logo.png``, ``search.json``): unchanged.

:func:`resolve_url` applies the same rule to a full URL by rewriting only the
path component, so query strings and fragments are preserved.

Examples
--------
>>> resolve_path("/")
'/index.html'
>>> resolve_path("/ru/syntax/cut")
'/ru/syntax/cut.html'
>>> resolve_url("http://localhost:3000/ru/syntax/tabs?tabs=platforms_macos#top")
'http://localhost:3000/ru/syntax/tabs.html?tabs=platforms_macos#top'
"""

from __future__ import annotations

import dataclasses as dc
import re
from urllib.parse import urlsplit, urlunsplit

from docs_e2e._constants import HTML_SUFFIX, INDEX_DOCUMENT

EXTENSION_PATTERN = re.compile(r"\..+?$")


@dc.dataclass(frozen=True, slots=True)
class ResolvedRequest:
    """Components of a request URL after the rewrite rule was applied."""

    path: str
    resolved_path: str
    query: str = ""
    fragment: str = ""

    @property
    def rewritten(self) -> bool:
        """Return ``True`` when the rule changed the path."""
        return self.path != self.resolved_path


def tail_segment(path: str) -> str:
    """Return the substring after the final ``/`` of ``path``."""
    return path.split("/")[-1]


def resolve_path(path: str) -> str:
    """Rewrite a request path so it names a concrete file.

    Parameters
    ----------
    path : str
        URL path without query or fragment. An empty path is treated as ``/``.

    Returns
    -------
    str
        ``path`` with ``index.html`` or ``.html`` appended when required.
    """
    if not path:
        path = "/"
    tail = tail_segment(path)
    if tail == "":
        return f"{path}{INDEX_DOCUMENT}"
    if not EXTENSION_PATTERN.search(tail):
        return f"{path}{HTML_SUFFIX}"
    return path


def split_request(url: str) -> ResolvedRequest:
    """Parse ``url`` and return its path, rewritten path, query and fragment."""
    parts = urlsplit(url)
    path = parts.path or "/"
    return ResolvedRequest(
        path=path,
        resolved_path=resolve_path(path),
        query=parts.query,
        fragment=parts.fragment,
    )


def resolve_url(url: str) -> str:
    """Apply :func:`resolve_path` to the path component of ``url`` only."""
    parts = urlsplit(url)
    return urlunsplit(parts._replace(path=resolve_path(parts.path)))


__all__ = [
    "EXTENSION_PATTERN",
    "ResolvedRequest",
    "resolve_path",
    "resolve_url",
    "split_request",
    "tail_segment",
]
