"""Search suggest state machine with last-request-wins lookups.

Every keystroke bumps a sequence number. A lookup result carries the number
it was issued with and is applied only while that number is still the
latest, so a slow response for an old query can never overwrite the results
of the current one.

Example
-------
>>> session = SearchSession()
>>> first = session.type_text("cu")
>>> second = session.type_text("cut")
>>> session.resolve(first, [SearchResult("Stale", "/ru/search/stale.html")])
False
>>> session.resolve(second, [])
True
>>> session.state
<SearchState.EMPTY: 'empty'>
"""

from __future__ import annotations

import asyncio
import dataclasses as dc
import enum
import inspect
import time
import typing as typ

from docs_e2e._constants import SEARCH_DEBOUNCE_SECONDS

from .events import Key

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    SearchProvider = cabc.Callable[
        [str],
        "cabc.Sequence[SearchResult] | cabc.Awaitable[cabc.Sequence[SearchResult]]",
    ]


class SearchState(enum.StrEnum):
    """Visible state of the suggest popup."""

    IDLE = "idle"
    LOADING = "loading"
    RESULTS = "results"
    EMPTY = "empty"


@dc.dataclass(frozen=True, slots=True)
class SearchResult:
    """One suggestion pointing at a documentation page."""

    title: str
    url: str
    snippet: str = ""


class SearchSession:
    """Query text, lookup sequencing and the highlighted-result cursor."""

    def __init__(
        self,
        provider: SearchProvider | None = None,
        *,
        debounce_seconds: float = SEARCH_DEBOUNCE_SECONDS,
        clock: cabc.Callable[[], float] = time.monotonic,
    ) -> None:
        self.provider = provider
        self.debounce_seconds = debounce_seconds
        self.clock = clock
        self.query = ""
        self.state = SearchState.IDLE
        self.popup_open = False
        self.results: list[SearchResult] = []
        self.cursor: int | None = None
        self._seq = 0
        self._typed_at = 0.0
        self._pending = False

    @property
    def seq(self) -> int:
        """Return the sequence number of the latest query."""
        return self._seq

    @property
    def pending(self) -> bool:
        """Return ``True`` while the latest query awaits its lookup."""
        return self._pending

    @property
    def highlighted(self) -> SearchResult | None:
        """Return the result under the cursor."""
        if self.cursor is None:
            return None
        return self.results[self.cursor]

    def type_text(self, text: str) -> int:
        """Replace the query text and return the new sequence number."""
        self._seq += 1
        self.query = text
        self.results = []
        self.cursor = None
        self._typed_at = self.clock()
        if not text:
            self.state = SearchState.IDLE
            self.popup_open = False
            self._pending = False
        else:
            self.state = SearchState.LOADING
            self.popup_open = True
            self._pending = True
        return self._seq

    def resolve(self, seq: int, results: cabc.Iterable[SearchResult]) -> bool:
        """Apply lookup ``results`` if ``seq`` is still the latest query.

        Returns ``False`` for stale responses, which are discarded.
        """
        if seq != self._seq or self.state is SearchState.IDLE:
            return False
        self.results = list(results)
        self.cursor = None
        self._pending = False
        self.state = SearchState.RESULTS if self.results else SearchState.EMPTY
        return True

    def fail(self, seq: int) -> bool:
        """Record a failed lookup, shown the same way as no results."""
        return self.resolve(seq, ())

    def poll(self) -> bool:
        """Run the pending lookup once the debounce window has passed.

        Only synchronous providers are supported here; use :meth:`lookup`
        for coroutine providers. Returns ``True`` when a lookup ran.
        """
        if self.provider is None or not self._pending:
            return False
        if self.clock() - self._typed_at < self.debounce_seconds:
            return False
        seq = self._seq
        self._pending = False
        try:
            results = self.provider(self.query)
        except Exception:  # noqa: BLE001
            self.fail(seq)
            return True
        if inspect.isawaitable(results):
            if inspect.iscoroutine(results):
                results.close()
            self.fail(seq)
            msg = "poll() needs a synchronous provider; await lookup() instead."
            raise TypeError(msg)
        self.resolve(seq, results)
        return True

    async def lookup(
        self, text: str, provider: SearchProvider | None = None
    ) -> bool:
        """Type ``text``, wait out the debounce and apply the lookup.

        Parameters
        ----------
        text : str
            New query text.
        provider : callable, optional
            Returns results for a query, directly or as an awaitable. Falls
            back to the session provider.

        Returns
        -------
        bool
            ``True`` when this lookup updated the visible state; ``False``
            when a later keystroke superseded it or the query was empty.
        """
        seq = self.type_text(text)
        lookup = provider or self.provider
        if not text or lookup is None:
            return False
        await asyncio.sleep(self.debounce_seconds)
        if seq != self._seq:
            return False
        self._pending = False
        try:
            results = lookup(text)
            if inspect.isawaitable(results):
                results = await results
        except Exception:  # noqa: BLE001
            return self.fail(seq)
        return self.resolve(seq, results)

    def move_down(self) -> bool:
        """Move the cursor down, stopping at the last result."""
        if not self.popup_open or not self.results:
            return False
        if self.cursor is None:
            self.cursor = 0
            return True
        target = min(self.cursor + 1, len(self.results) - 1)
        changed = target != self.cursor
        self.cursor = target
        return changed

    def move_up(self) -> bool:
        """Move the cursor up, stopping at the first result."""
        if not self.popup_open or self.cursor is None:
            return False
        target = max(self.cursor - 1, 0)
        changed = target != self.cursor
        self.cursor = target
        return changed

    def press_key(self, key: Key) -> SearchResult | None:
        """Handle a key press in the search field.

        Returns the result to navigate to when Enter activates one.
        """
        match key:
            case Key.ARROW_DOWN:
                self.move_down()
            case Key.ARROW_UP:
                self.move_up()
            case Key.ENTER:
                if self.popup_open:
                    return self.highlighted
            case Key.ESCAPE:
                self.close()
            case _:
                pass
        return None

    def activate(self, index: int) -> SearchResult | None:
        """Return the result at ``index`` for a pointer click."""
        if not self.popup_open or not 0 <= index < len(self.results):
            return None
        self.cursor = index
        return self.results[index]

    def close(self) -> None:
        """Hide the popup and leave the query text as typed."""
        self.popup_open = False


__all__ = ["SearchResult", "SearchSession", "SearchState"]
