"""Whole-page model built from served markup.

:class:`PageModel` parses one rendered documentation page with
BeautifulSoup, builds the widget registries it contains, applies the URL
state (``tabs`` query parameters first, then the fragment) and routes typed
events to the widget owning the target element. :meth:`PageModel.snapshot`
returns a frozen :class:`PageState` that depends only on the URL and the
registries, which is what the unit and BDD suites assert against.

Example
-------
>>> html = '''
... <details class="yfm-cut">
...   <summary class="yfm-cut-title" id="basic-cut">Basic</summary>
...   <div class="yfm-cut-content">Body</div>
... </details>
... '''
>>> page = PageModel.from_html(html, "http://127.0.0.1:3000/ru/syntax/cut#basic-cut")
>>> page.snapshot().expanded
frozenset({'basic-cut'})
>>> page.snapshot().focused
'basic-cut'
"""

from __future__ import annotations

import dataclasses as dc
import enum
import time
import typing as typ
from urllib.parse import urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup

from docs_e2e._constants import (
    CUT_SELECTORS,
    DIAGRAM_SELECTORS,
    HIGHLIGHT_SECONDS,
    NAVIGATION_SELECTORS,
    SEARCH_SELECTORS,
    TAB_SELECTORS,
    TERM_SELECTORS,
)

from .cut import CollapsibleSection, CutRegistry
from .diagram import DiagramViewer
from .events import (
    ACTIVATION_KEYS,
    Click,
    ClickOutside,
    Event,
    Focus,
    HashChange,
    Key,
    KeyPress,
    TextInput,
)
from .navigation import NavigationHistory, TableOfContents, TocEntry
from .search import SearchSession, SearchState
from .tabs import Tab, TabGroup, TabRegistry, TabVariant
from .terms import Term, TermRegistry

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from bs4 import Tag

    from .search import SearchProvider

SEARCH_INPUT_ID = "search-input"
SEARCH_RESULT_PREFIX = "search-result-"


class TargetKind(enum.StrEnum):
    """Widget kinds that own addressable elements."""

    CUT = "cut"
    TAB = "tab"
    TERM = "term"
    SEARCH = "search"
    DIAGRAM = "diagram"


@dc.dataclass(frozen=True, slots=True)
class PageState:
    """Render state of a page at one instant."""

    url: str
    expanded: frozenset[str]
    visible: frozenset[str]
    highlighted: frozenset[str]
    focused: str | None
    scrolled_to: str | None
    active_tabs: dict[str, str | None]
    open_term: str | None
    search_state: SearchState | None
    search_popup_open: bool
    search_results: tuple[str, ...]
    search_cursor: int | None
    diagram_transforms: dict[str, str]
    toc_active: str | None
    navigated_to: str | None


def _classes(tag: Tag) -> list[str]:
    value = tag.get("class") or []
    return value.split() if isinstance(value, str) else list(value)


def _class_name(selector: str) -> str:
    """Return the class of a ``tag.class`` or ``.class`` selector."""
    return selector.rsplit(".", 1)[-1]


def _parse_cuts(soup: BeautifulSoup) -> list[CollapsibleSection]:
    cut_class = _class_name(CUT_SELECTORS["cut"])
    title_class = _class_name(CUT_SELECTORS["title"])
    sections: list[CollapsibleSection] = []
    for details in soup.find_all(class_=cut_class):
        summary = details.find(class_=title_class)
        if summary is None or not summary.get("id"):
            continue
        parent_id = None
        parent = details.find_parent(class_=cut_class)
        if parent is not None:
            parent_summary = parent.find(class_=title_class)
            if parent_summary is not None:
                parent_id = parent_summary.get("id")
        sections.append(
            CollapsibleSection(
                section_id=summary["id"],
                title=summary.get_text(" ", strip=True),
                parent_id=parent_id,
                expanded=details.has_attr("open"),
            )
        )
    return sections


def _owned_tabs(container: Tag) -> list[Tag]:
    """Return tab controls whose nearest tab container is ``container``."""
    container_class = _class_name(TAB_SELECTORS["container"])
    selector = f"{TAB_SELECTORS['tab']}, {TAB_SELECTORS['vertical_tab']}"
    return [
        tab
        for tab in container.select(selector)
        if tab.find_parent(class_=container_class) is container
    ]


def _parse_tabs(
    soup: BeautifulSoup,
) -> tuple[list[TabGroup], dict[str, tuple[str, int]]]:
    groups: list[TabGroup] = []
    targets: dict[str, tuple[str, int]] = {}
    for position, container in enumerate(soup.select(TAB_SELECTORS["container"])):
        group_id = container.get("id") or f"tabs-{position}"
        variant = TabVariant.parse(container.get(TAB_SELECTORS["variant_attr"]))
        controls = _owned_tabs(container)
        if not controls:
            continue
        tabs: list[Tab] = []
        active_index: int | None = None
        for index, control in enumerate(controls):
            label = control.get_text(" ", strip=True)
            slug = control.get(TAB_SELECTORS["slug_attr"]) or f"tab-{index}"
            tabs.append(Tab(label=label, slug=slug))
            if active_index is None and "active" in _classes(control):
                active_index = index
            element_id = control.get("id") or f"{group_id}-tab-{index}"
            targets[element_id] = (group_id, index)
        if active_index is None and variant is not TabVariant.RADIO:
            active_index = 0
        groups.append(
            TabGroup(
                group_id=group_id,
                tabs=tabs,
                group_key=container.get(TAB_SELECTORS["group_attr"]) or None,
                variant=variant,
                active_index=active_index,
            )
        )
    return groups, targets


def _parse_terms(soup: BeautifulSoup) -> list[Term]:
    key_attr = TERM_SELECTORS["key_attr"]
    terms: list[Term] = []
    for control in soup.select(f"{TERM_SELECTORS['term']}[{key_attr}]"):
        tooltip_id = control.get("aria-describedby")
        if not tooltip_id:
            continue
        tooltip = soup.find(id=tooltip_id)
        key = control[key_attr]
        terms.append(
            Term(
                term_key=key,
                element_id=control.get("id") or key,
                title=control.get_text(" ", strip=True),
                tooltip_id=tooltip_id,
                tooltip_text="" if tooltip is None else tooltip.get_text(" ", strip=True),
            )
        )
    return terms


def _parse_toc(soup: BeautifulSoup) -> list[TocEntry]:
    return [
        TocEntry(title=link.get_text(" ", strip=True), href=link.get("href", ""))
        for link in soup.select(NAVIGATION_SELECTORS["toc_link"])
    ]


class PageModel:
    """Widget registries of one loaded page and the event router over them."""

    def __init__(  # noqa: PLR0913
        self,
        url: str,
        *,
        cuts: CutRegistry | None = None,
        tabs: TabRegistry | None = None,
        tab_targets: dict[str, tuple[str, int]] | None = None,
        terms: TermRegistry | None = None,
        search: SearchSession | None = None,
        search_input_id: str = SEARCH_INPUT_ID,
        diagrams: cabc.Iterable[DiagramViewer] = (),
        toc: TableOfContents | None = None,
    ) -> None:
        self.url = url
        self.cuts = CutRegistry() if cuts is None else cuts
        self.tabs = TabRegistry() if tabs is None else tabs
        self.terms = TermRegistry() if terms is None else terms
        self.search = search
        self.search_input_id = search_input_id
        self.diagrams = {viewer.diagram_id: viewer for viewer in diagrams}
        self.toc = toc
        self.history = NavigationHistory(url)
        self.focused: str | None = None
        self.navigated_to: str | None = None
        self._targets: dict[str, tuple[TargetKind, typ.Any]] = {}
        for section in self.cuts:
            self._targets[section.section_id] = (TargetKind.CUT, section.section_id)
        for element_id, location in (tab_targets or {}).items():
            self._targets[element_id] = (TargetKind.TAB, location)
        for term in self.terms:
            self._targets[term.element_id] = (TargetKind.TERM, term.term_key)
        if search is not None:
            self._targets[search_input_id] = (TargetKind.SEARCH, None)
        for diagram_id in self.diagrams:
            self._targets[diagram_id] = (TargetKind.DIAGRAM, diagram_id)

    @classmethod
    def from_html(
        cls,
        html: str,
        url: str,
        *,
        clock: cabc.Callable[[], float] = time.monotonic,
        highlight_seconds: float = HIGHLIGHT_SECONDS,
        search_provider: SearchProvider | None = None,
    ) -> PageModel:
        """Build the page model for ``html`` loaded from ``url``.

        Parameters
        ----------
        html : str
            Served page markup.
        url : str
            Address the page was loaded from, including query and fragment.
        clock : callable, optional
            Monotonic clock shared by highlight and search debounce timing.
        highlight_seconds : float, optional
            How long a section reached through the fragment stays highlighted.
        search_provider : callable, optional
            Lookup used by the search session's :meth:`~SearchSession.poll`.

        Returns
        -------
        PageModel
            Model with the ``tabs`` query parameters and the fragment applied.
        """
        soup = BeautifulSoup(html, "html.parser")
        groups, tab_targets = _parse_tabs(soup)
        search = None
        search_input_id = SEARCH_INPUT_ID
        search_input = soup.select(SEARCH_SELECTORS["input"])
        if search_input:
            search = SearchSession(search_provider, clock=clock)
            search_input_id = search_input[-1].get("id") or SEARCH_INPUT_ID
        diagrams = [
            DiagramViewer(block.get("id") or f"mermaid-{index}")
            for index, block in enumerate(soup.select(DIAGRAM_SELECTORS["diagram"]))
        ]
        entries = _parse_toc(soup)
        page = cls(
            url,
            cuts=CutRegistry(
                _parse_cuts(soup), highlight_seconds=highlight_seconds, clock=clock
            ),
            tabs=TabRegistry(groups),
            tab_targets=tab_targets,
            terms=TermRegistry(_parse_terms(soup)),
            search=search,
            search_input_id=search_input_id,
            diagrams=diagrams,
            toc=TableOfContents(entries, url) if entries else None,
        )
        page.load()
        return page

    @property
    def left(self) -> bool:
        """Return ``True`` once a link or search result navigated away."""
        return self.navigated_to is not None

    def load(self) -> None:
        """Apply the URL state: ``tabs`` parameters, then the fragment."""
        parts = urlsplit(self.url)
        self.tabs.apply_query(parts.query)
        if parts.fragment:
            self._open_fragment(parts.fragment)

    def dispatch(self, event: Event) -> bool:
        """Route ``event`` to its widget and report whether state changed.

        Events for elements the page does not contain, and every event after
        the page navigated away, are ignored.
        """
        if self.left:
            return False
        match event:
            case Click(target=target):
                return self._click(target)
            case ClickOutside():
                return self._click_outside()
            case Focus(target=target):
                if target not in self._targets:
                    return False
                self.focused = target
                return True
            case KeyPress(key=key, shift=shift):
                return self._key(key, shift=shift)
            case TextInput(value=value):
                if self.search is None or self._focused_kind() is not TargetKind.SEARCH:
                    return False
                self.search.type_text(value)
                return True
            case HashChange(fragment=fragment):
                return self._hash_change(fragment)
        return False

    def dispatch_all(self, events: cabc.Iterable[Event]) -> None:
        """Dispatch ``events`` in order."""
        for event in events:
            self.dispatch(event)

    def tab_control_id(self, group_id: str, index: int) -> str | None:
        """Return the element id of tab ``index`` in group ``group_id``."""
        for element_id, (kind, data) in self._targets.items():
            if kind is TargetKind.TAB and data == (group_id, index):
                return element_id
        return None

    def zoom(self, diagram_id: str, action: str) -> bool:
        """Click a zoom menu item of ``diagram_id``."""
        viewer = self.diagrams.get(diagram_id)
        if self.left or viewer is None:
            return False
        return viewer.perform(action)

    def follow_toc(self, title: str) -> str | None:
        """Follow the table of contents link titled ``title``."""
        if self.left or self.toc is None:
            return None
        href = self.toc.href_for(title)
        if href is None:
            return None
        self._navigate(href)
        return self.navigated_to

    def snapshot(self) -> PageState:
        """Return the current render state."""
        search = self.search
        toc_entry = None if self.toc is None else self.toc.active_entry()
        return PageState(
            url=self.url,
            expanded=frozenset(s.section_id for s in self.cuts if s.expanded),
            visible=frozenset(
                s.section_id for s in self.cuts if self.cuts.is_visible(s.section_id)
            ),
            highlighted=frozenset(
                s.section_id for s in self.cuts if self.cuts.is_highlighted(s.section_id)
            ),
            focused=self.focused,
            scrolled_to=self.cuts.scrolled_to,
            active_tabs={group.group_id: group.active_slug for group in self.tabs},
            open_term=self.terms.open_key,
            search_state=None if search is None else search.state,
            search_popup_open=(
                search is not None and search.popup_open and not self.left
            ),
            search_results=()
            if search is None
            else tuple(result.url for result in search.results),
            search_cursor=None if search is None else search.cursor,
            diagram_transforms={
                diagram_id: viewer.transform
                for diagram_id, viewer in self.diagrams.items()
            },
            toc_active=None if toc_entry is None else toc_entry.title,
            navigated_to=self.navigated_to,
        )

    def _focused_kind(self) -> TargetKind | None:
        if self.focused is None or self.focused not in self._targets:
            return None
        return self._targets[self.focused][0]

    def _click(self, target: str) -> bool:
        if (
            self.search is not None
            and target.startswith(SEARCH_RESULT_PREFIX)
            and target.removeprefix(SEARCH_RESULT_PREFIX).isdigit()
        ):
            result = self.search.activate(int(target.removeprefix(SEARCH_RESULT_PREFIX)))
            if result is None:
                return False
            self._navigate(result.url)
            return True
        if target not in self._targets:
            return False
        kind, data = self._targets[target]
        if kind is not TargetKind.TERM:
            self.terms.close()
        if kind is not TargetKind.SEARCH and self.search is not None:
            self.search.close()
        self.focused = target
        match kind:
            case TargetKind.CUT:
                return self.cuts.toggle(data)
            case TargetKind.TAB:
                return self._activate_tab(*data)
            case TargetKind.TERM:
                return self.terms.click(data)
            case TargetKind.DIAGRAM:
                self.diagrams[data].click()
                return True
        return True

    def _click_outside(self) -> bool:
        had_term = self.terms.open_key is not None
        self.terms.click_outside()
        had_popup = self.search is not None and self.search.popup_open
        if self.search is not None:
            self.search.close()
        return had_term or had_popup

    def _key(self, key: Key, *, shift: bool) -> bool:
        if key is Key.TAB:
            current = self.focused if self._focused_kind() is TargetKind.CUT else None
            target = self.cuts.next_focus(current, reverse=shift)
            if target is None:
                return False
            self.focused = target
            return True
        kind = self._focused_kind()
        if key is Key.ESCAPE and kind is not TargetKind.TERM and self.terms.open_key:
            self.terms.press_escape()
            if kind is not TargetKind.SEARCH:
                return True
        if kind is None:
            return False
        data = self._targets[typ.cast("str", self.focused)][1]
        match kind:
            case TargetKind.CUT:
                return self.cuts.press_key(data, key)
            case TargetKind.TAB:
                return key in ACTIVATION_KEYS and self._activate_tab(*data)
            case TargetKind.TERM:
                return self.terms.press_key(data, key)
            case TargetKind.SEARCH:
                search = typ.cast("SearchSession", self.search)
                result = search.press_key(key)
                if result is not None:
                    self._navigate(result.url)
                return True
        return False

    def _activate_tab(self, group_id: str, index: int) -> bool:
        if not self.tabs.click(group_id, index):
            return False
        group = self.tabs.get(group_id)
        if group is not None and group.group_key is not None:
            self.url = self.tabs.sync_url(self.url)
        return True

    def _hash_change(self, fragment: str) -> bool:
        parts = urlsplit(self.url)
        self.url = urlunsplit(parts._replace(fragment=fragment.removeprefix("#")))
        self.history.push(self.url)
        return self._open_fragment(fragment)

    def _open_fragment(self, fragment: str) -> bool:
        section = self.cuts.open_from_hash(fragment)
        if section is None:
            return False
        self.focused = section.section_id
        return True

    def _navigate(self, href: str) -> None:
        self.navigated_to = urljoin(self.url, href)
        self.history.push(self.navigated_to)


__all__ = ["PageModel", "PageState", "TargetKind"]
