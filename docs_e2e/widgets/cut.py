"""Collapsible section ("cut") state machine.

A cut is either collapsed (initial) or expanded. Clicking its title, or
pressing Enter/Space while the title is focused, flips that one section and
nothing else. Navigating to ``#<id>`` forces the target and all enclosing
cuts open, scrolls to it, focuses its title and highlights it until the
highlight deadline passes.

Example
-------
>>> registry = CutRegistry(
...     [
...         CollapsibleSection("outer-cut", "Outer"),
...         CollapsibleSection("inner-cut", "Inner", parent_id="outer-cut"),
...     ]
... )
>>> registry.open_from_hash("#inner-cut").section_id
'inner-cut'
>>> registry.get("outer-cut").expanded
True
"""

from __future__ import annotations

import dataclasses as dc
import enum
import time
import typing as typ
from urllib.parse import unquote

from docs_e2e._constants import HIGHLIGHT_SECONDS

from .events import ACTIVATION_KEYS, Key

if typ.TYPE_CHECKING:
    import collections.abc as cabc

Clock = typ.Callable[[], float]


class CutState(enum.StrEnum):
    """Expansion state of a collapsible section."""

    COLLAPSED = "collapsed"
    EXPANDED = "expanded"


@dc.dataclass(slots=True)
class CollapsibleSection:
    """One collapsible block identified by the id of its title control."""

    section_id: str
    title: str = ""
    parent_id: str | None = None
    expanded: bool = False
    highlighted_until: float | None = None

    @property
    def state(self) -> CutState:
        """Return the current expansion state."""
        return CutState.EXPANDED if self.expanded else CutState.COLLAPSED


class CutRegistry:
    """All collapsible sections of one page, in document order."""

    def __init__(
        self,
        sections: cabc.Iterable[CollapsibleSection] = (),
        *,
        highlight_seconds: float = HIGHLIGHT_SECONDS,
        clock: Clock = time.monotonic,
    ) -> None:
        self._sections: dict[str, CollapsibleSection] = {}
        for section in sections:
            self._sections[section.section_id] = section
        self.highlight_seconds = highlight_seconds
        self.clock = clock
        self.focused_id: str | None = None
        self.scrolled_to: str | None = None

    def __contains__(self, section_id: object) -> bool:
        return section_id in self._sections

    def __iter__(self) -> cabc.Iterator[CollapsibleSection]:
        return iter(self._sections.values())

    def __len__(self) -> int:
        return len(self._sections)

    def get(self, section_id: str) -> CollapsibleSection | None:
        """Return the section with ``section_id`` or ``None``."""
        return self._sections.get(section_id)

    def ancestors(self, section_id: str) -> list[CollapsibleSection]:
        """Return enclosing sections, innermost first."""
        chain: list[CollapsibleSection] = []
        section = self._sections.get(section_id)
        seen = {section_id}
        while section is not None and section.parent_id is not None:
            if section.parent_id in seen:
                break
            seen.add(section.parent_id)
            parent = self._sections.get(section.parent_id)
            if parent is None:
                break
            chain.append(parent)
            section = parent
        return chain

    def toggle(self, section_id: str) -> bool:
        """Flip one section; return ``False`` when it does not exist."""
        section = self._sections.get(section_id)
        if section is None:
            return False
        section.expanded = not section.expanded
        if not section.expanded:
            section.highlighted_until = None
        return True

    def press_key(self, section_id: str, key: Key) -> bool:
        """Toggle on Enter or Space; other keys leave the section alone."""
        if key not in ACTIVATION_KEYS:
            return False
        return self.toggle(section_id)

    def open_from_hash(self, fragment: str) -> CollapsibleSection | None:
        """Reveal, focus and highlight the section named by ``fragment``.

        Parameters
        ----------
        fragment : str
            URL fragment with or without the leading ``#``; percent-encoded
            ids are decoded.

        Returns
        -------
        CollapsibleSection or None
            The target section, or ``None`` when no section has that id (the
            page is left unchanged).
        """
        section_id = unquote(fragment.removeprefix("#"))
        target = self._sections.get(section_id)
        if target is None:
            return None
        for ancestor in self.ancestors(section_id):
            ancestor.expanded = True
        target.expanded = True
        target.highlighted_until = self.clock() + self.highlight_seconds
        self.focused_id = section_id
        self.scrolled_to = section_id
        return target

    def is_highlighted(self, section_id: str) -> bool:
        """Return ``True`` while the section's highlight deadline is ahead."""
        section = self._sections.get(section_id)
        if section is None or section.highlighted_until is None:
            return False
        return self.clock() < section.highlighted_until

    def is_visible(self, section_id: str) -> bool:
        """Return ``True`` when the title control is rendered visibly.

        A title is visible when every enclosing section is expanded. A
        collapsed parent hides its children without touching their own flag.
        """
        if section_id not in self._sections:
            return False
        return all(parent.expanded for parent in self.ancestors(section_id))

    def is_content_visible(self, section_id: str) -> bool:
        """Return ``True`` when the section body is visible."""
        section = self._sections.get(section_id)
        return section is not None and section.expanded and self.is_visible(section_id)

    def tab_order(self) -> list[str]:
        """Return ids of focusable title controls in document order."""
        return [sid for sid in self._sections if self.is_visible(sid)]

    def next_focus(self, current: str | None, *, reverse: bool = False) -> str | None:
        """Return the title that Tab (or Shift+Tab) moves focus to."""
        order = self.tab_order()
        if not order:
            return None
        if current not in order:
            return order[-1] if reverse else order[0]
        index = order.index(current) + (-1 if reverse else 1)
        if 0 <= index < len(order):
            return order[index]
        return None


__all__ = ["Clock", "CollapsibleSection", "CutRegistry", "CutState"]
