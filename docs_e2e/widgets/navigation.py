"""Table of contents highlighting and in-page navigation history.

TOC links are written relative to the page (``./cut``, ``../search/``) and
may or may not carry the ``.html`` suffix. Both the link and the current URL
go through the server's rewrite rule before comparison, so every spelling of
the same document marks the same entry active.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from urllib.parse import urljoin, urlsplit

from docs_e2e.server.resolver import resolve_path

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@dc.dataclass(frozen=True, slots=True)
class TocEntry:
    """A link in the table of contents."""

    title: str
    href: str


def document_path(url: str, base: str | None = None) -> str:
    """Return the resolved document path ``url`` points at.

    Examples
    --------
    >>> document_path("./cut", "http://127.0.0.1:3000/ru/syntax/tabs")
    '/ru/syntax/cut.html'
    >>> document_path("/ru/search/")
    '/ru/search/index.html'
    """
    absolute = urljoin(base, url) if base else url
    return resolve_path(urlsplit(absolute).path)


class TableOfContents:
    """Entries of the side navigation and the one matching the page."""

    def __init__(self, entries: cabc.Iterable[TocEntry], current_url: str) -> None:
        self.entries = list(entries)
        self.current_url = current_url

    def href_for(self, title: str) -> str | None:
        """Return the absolute URL of the entry titled ``title``."""
        for entry in self.entries:
            if entry.title == title:
                return urljoin(self.current_url, entry.href)
        return None

    def active_entry(self) -> TocEntry | None:
        """Return the entry that links to the current document."""
        current = document_path(self.current_url)
        for entry in self.entries:
            if document_path(entry.href, self.current_url) == current:
                return entry
        return None

    def is_active(self, title: str) -> bool:
        """Return ``True`` when the entry titled ``title`` is active."""
        entry = self.active_entry()
        return entry is not None and entry.title == title


class NavigationHistory:
    """Back/forward stack of visited URLs."""

    def __init__(self, start: str) -> None:
        self._entries = [start]
        self._index = 0

    @property
    def current(self) -> str:
        return self._entries[self._index]

    def push(self, url: str) -> None:
        """Visit ``url``, discarding any forward entries."""
        del self._entries[self._index + 1 :]
        self._entries.append(url)
        self._index += 1

    def back(self) -> str | None:
        """Step back and return the new URL, or ``None`` at the start."""
        if self._index == 0:
            return None
        self._index -= 1
        return self.current

    def forward(self) -> str | None:
        """Step forward and return the new URL, or ``None`` at the end."""
        if self._index + 1 >= len(self._entries):
            return None
        self._index += 1
        return self.current


__all__ = ["NavigationHistory", "TableOfContents", "TocEntry", "document_path"]
