"""Term tooltips: at most one open per page."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .events import ACTIVATION_KEYS, Key

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@dc.dataclass(frozen=True, slots=True)
class Term:
    """A term control and the tooltip its ``aria-describedby`` names."""

    term_key: str
    element_id: str
    title: str
    tooltip_id: str
    tooltip_text: str = ""


class TermRegistry:
    """Track which term tooltip, if any, is open."""

    def __init__(self, terms: cabc.Iterable[Term] = ()) -> None:
        self._terms: dict[str, Term] = {}
        for term in terms:
            self._terms.setdefault(term.term_key, term)
        self.open_key: str | None = None

    def __iter__(self) -> cabc.Iterator[Term]:
        return iter(self._terms.values())

    def __len__(self) -> int:
        return len(self._terms)

    def get(self, term_key: str) -> Term | None:
        """Return the term registered under ``term_key``."""
        return self._terms.get(term_key)

    def by_element_id(self, element_id: str) -> Term | None:
        """Return the term whose control has ``element_id``."""
        for term in self._terms.values():
            if term.element_id == element_id:
                return term
        return None

    def tooltip_for(self, term_key: str) -> str | None:
        """Return the id of the tooltip describing ``term_key``."""
        term = self._terms.get(term_key)
        return None if term is None else term.tooltip_id

    def is_open(self, term_key: str) -> bool:
        """Return ``True`` when the tooltip of ``term_key`` is shown."""
        return self.open_key == term_key

    def open(self, term_key: str) -> bool:
        """Show the tooltip of ``term_key``, closing any other one."""
        if term_key not in self._terms:
            return False
        self.open_key = term_key
        return True

    def close(self) -> None:
        """Hide whichever tooltip is open."""
        self.open_key = None

    def click(self, term_key: str) -> bool:
        """Handle a click on a term control."""
        return self.open(term_key)

    def press_key(self, term_key: str, key: Key) -> bool:
        """Handle a key press while a term control has focus."""
        if key is Key.ESCAPE:
            self.press_escape()
            return True
        if key in ACTIVATION_KEYS:
            return self.open(term_key)
        return False

    def press_escape(self) -> None:
        self.close()

    def click_outside(self) -> None:
        self.close()


__all__ = ["Term", "TermRegistry"]
