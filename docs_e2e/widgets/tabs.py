"""Tab group state machines and the ``tabs`` query parameter codec.

Each :class:`TabGroup` owns one active index. Groups that share a group key
stay in sync through :class:`TabRegistry`, which also carries the selection
in the page URL as ``tabs=<groupKey>_<slug>``, one parameter per key.

Example
-------
>>> tabs = [Tab("Linux", "linux"), Tab("macOS", "macos"), Tab("Windows", "windows")]
>>> registry = TabRegistry(
...     [
...         TabGroup("first", tabs, group_key="platforms"),
...         TabGroup("second", tabs, group_key="platforms"),
...     ]
... )
>>> registry.click("first", 2)
True
>>> registry.get("second").active_slug
'windows'
>>> registry.sync_url("/ru/syntax/tabs")
'/ru/syntax/tabs?tabs=platforms_windows'
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from docs_e2e._constants import TABS_QUERY_PARAM, TABS_VALUE_SEPARATOR

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class TabGroupError(ValueError):
    """Raised when a tab group is declared with inconsistent tabs."""


class TabVariant(enum.StrEnum):
    """Presentation variants; only ``radio`` changes the transitions."""

    REGULAR = "regular"
    RADIO = "radio"
    DROPDOWN = "dropdown"
    ACCORDION = "accordion"

    @classmethod
    def parse(cls, value: str | None) -> TabVariant:
        """Map a ``data-diplodoc-variant`` attribute to a variant."""
        if not value:
            return cls.REGULAR
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.REGULAR


@dc.dataclass(frozen=True, slots=True)
class Tab:
    """A tab title with its stable slug."""

    label: str
    slug: str


@dc.dataclass(slots=True)
class TabGroup:
    """One rendered tab group instance."""

    group_id: str
    tabs: list[Tab]
    group_key: str | None = None
    variant: TabVariant = TabVariant.REGULAR
    active_index: int | None = 0

    def __post_init__(self) -> None:
        self.tabs = list(self.tabs)
        if not self.tabs:
            msg = f"Tab group {self.group_id!r} has no tabs."
            raise TabGroupError(msg)
        slugs = [tab.slug for tab in self.tabs]
        if len(set(slugs)) != len(slugs):
            msg = f"Tab group {self.group_id!r} repeats a slug: {slugs}."
            raise TabGroupError(msg)
        if self.active_index is None:
            if self.variant is not TabVariant.RADIO:
                msg = f"Tab group {self.group_id!r} needs an active tab."
                raise TabGroupError(msg)
        elif not 0 <= self.active_index < len(self.tabs):
            msg = (
                f"Tab group {self.group_id!r} cannot start on tab "
                f"{self.active_index}; it has {len(self.tabs)} tabs."
            )
            raise TabGroupError(msg)

    @property
    def active_tab(self) -> Tab | None:
        """Return the active tab, or ``None`` for an unselected radio group."""
        if self.active_index is None:
            return None
        return self.tabs[self.active_index]

    @property
    def active_slug(self) -> str | None:
        """Return the slug of the active tab."""
        tab = self.active_tab
        return None if tab is None else tab.slug

    @property
    def select_label(self) -> str:
        """Return the text a dropdown shows for its current choice."""
        tab = self.active_tab
        return "" if tab is None else tab.label

    @property
    def select_filled(self) -> bool:
        """Return ``True`` once the dropdown shows a chosen tab."""
        return self.active_tab is not None

    def slugs(self) -> list[str]:
        """Return the tab slugs in order."""
        return [tab.slug for tab in self.tabs]

    def activate(self, index: int) -> bool:
        """Apply a click on tab ``index`` and report whether state changed.

        Radio groups toggle: clicking the active tab clears the selection.
        All other variants keep exactly one tab active.
        """
        if not 0 <= index < len(self.tabs):
            return False
        if index == self.active_index:
            if self.variant is TabVariant.RADIO:
                self.active_index = None
                return True
            return False
        self.active_index = index
        return True

    def select_slug(self, slug: str) -> bool:
        """Make the tab with ``slug`` active without toggling."""
        for index, tab in enumerate(self.tabs):
            if tab.slug == slug:
                self.active_index = index
                return True
        return False

    def panel_visibility(self) -> list[bool]:
        """Return which panels show content, one flag per tab."""
        return [index == self.active_index for index in range(len(self.tabs))]


def encode_tabs_value(group_key: str, slug: str) -> str:
    """Return the ``tabs`` parameter value for ``slug`` in ``group_key``."""
    return f"{group_key}{TABS_VALUE_SEPARATOR}{slug}"


def decode_tabs_value(
    value: str, known_keys: cabc.Iterable[str] = ()
) -> tuple[str, str] | None:
    """Split a ``tabs`` parameter value into ``(group_key, slug)``.

    Group keys may contain the separator themselves (``height_demo``), so the
    longest known key followed by the separator wins. Without a matching key
    the value is split on its last separator.

    Parameters
    ----------
    value : str
        Parameter value such as ``platforms_windows``.
    known_keys : Iterable[str], optional
        Group keys present on the page.

    Returns
    -------
    tuple[str, str] or None
        The key and slug, or ``None`` when the value cannot be split.

    Examples
    --------
    >>> decode_tabs_value("height_demo_short", ["height_demo"])
    ('height_demo', 'short')
    >>> decode_tabs_value("platforms_macos")
    ('platforms', 'macos')
    """
    for key in sorted(set(known_keys), key=len, reverse=True):
        prefix = f"{key}{TABS_VALUE_SEPARATOR}"
        if value.startswith(prefix) and len(value) > len(prefix):
            return key, value[len(prefix) :]
    key, sep, slug = value.rpartition(TABS_VALUE_SEPARATOR)
    if not sep or not key or not slug:
        return None
    return key, slug


class TabRegistry:
    """Every tab group of a page, synchronized by group key."""

    def __init__(self, groups: cabc.Iterable[TabGroup] = ()) -> None:
        self._groups: dict[str, TabGroup] = {}
        for group in groups:
            self._groups[group.group_id] = group
        self.selections: dict[str, str] = {}

    def __iter__(self) -> cabc.Iterator[TabGroup]:
        return iter(self._groups.values())

    def __len__(self) -> int:
        return len(self._groups)

    def get(self, group_id: str) -> TabGroup | None:
        """Return the group with ``group_id`` or ``None``."""
        return self._groups.get(group_id)

    def group_keys(self) -> list[str]:
        """Return the distinct group keys in document order."""
        keys: list[str] = []
        for group in self._groups.values():
            if group.group_key is not None and group.group_key not in keys:
                keys.append(group.group_key)
        return keys

    def groups_for_key(self, group_key: str) -> list[TabGroup]:
        """Return the groups that share ``group_key``."""
        return [g for g in self._groups.values() if g.group_key == group_key]

    def click(self, group_id: str, index: int) -> bool:
        """Activate tab ``index`` of a group and propagate its slug.

        Returns ``False`` when the group or tab does not exist or nothing
        changed. Clearing a radio group stays local to that group; the
        key's selection is dropped once no group sharing it is active.
        """
        group = self._groups.get(group_id)
        if group is None or not group.activate(index):
            return False
        slug = group.active_slug
        if group.group_key is None:
            return True
        if slug is not None:
            self._propagate(group.group_key, slug)
        elif not any(
            peer.active_slug is not None
            for peer in self.groups_for_key(group.group_key)
        ):
            self.selections.pop(group.group_key, None)
        return True

    def select(self, group_key: str, slug: str) -> bool:
        """Select ``slug`` in every group sharing ``group_key``."""
        return self._propagate(group_key, slug)

    def apply_query(self, query: str) -> dict[str, str]:
        """Pre-select groups from the ``tabs`` parameters of ``query``.

        Values naming an unknown key or slug are ignored. Returns the
        selections that took effect.
        """
        known_keys = self.group_keys()
        applied: dict[str, str] = {}
        for name, value in parse_qsl(query):
            if name != TABS_QUERY_PARAM:
                continue
            decoded = decode_tabs_value(value, known_keys)
            if decoded is None:
                continue
            group_key, slug = decoded
            if self._propagate(group_key, slug):
                applied[group_key] = slug
        return applied

    def sync_url(self, url: str) -> str:
        """Return ``url`` with its ``tabs`` parameters set to the selections.

        Other parameters keep their order and the fragment is preserved.
        ``tabs`` values for group keys this page does not have are kept.
        """
        parts = urlsplit(url)
        page_keys = self.group_keys()
        params = [
            (name, value)
            for name, value in parse_qsl(parts.query, keep_blank_values=True)
            if name != TABS_QUERY_PARAM or not self._owns_value(value, page_keys)
        ]
        params.extend(
            (TABS_QUERY_PARAM, encode_tabs_value(key, slug))
            for key, slug in self.selections.items()
        )
        return urlunsplit(parts._replace(query=urlencode(params)))

    @staticmethod
    def _owns_value(value: str, page_keys: list[str]) -> bool:
        decoded = decode_tabs_value(value, page_keys)
        return decoded is not None and decoded[0] in page_keys

    def _propagate(self, group_key: str, slug: str) -> bool:
        matched = False
        for group in self.groups_for_key(group_key):
            matched = group.select_slug(slug) or matched
        if matched:
            self.selections[group_key] = slug
        return matched


__all__ = [
    "Tab",
    "TabGroup",
    "TabGroupError",
    "TabRegistry",
    "TabVariant",
    "decode_tabs_value",
    "encode_tabs_value",
]
