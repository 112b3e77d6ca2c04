"""Typed UI events consumed by the widget state machines.

Every widget transition is driven by one of these events. The page model
routes them to the widget owning the target element, or to the focused
element for key presses.
"""

from __future__ import annotations

import dataclasses as dc
import enum


class Key(enum.StrEnum):
    """Keys with a meaning for at least one widget."""

    ENTER = "Enter"
    SPACE = " "
    ESCAPE = "Escape"
    TAB = "Tab"
    ARROW_DOWN = "ArrowDown"
    ARROW_UP = "ArrowUp"


ACTIVATION_KEYS = frozenset({Key.ENTER, Key.SPACE})


@dc.dataclass(frozen=True, slots=True)
class Click:
    """Pointer click on the element with id ``target``."""

    target: str


@dc.dataclass(frozen=True, slots=True)
class ClickOutside:
    """Pointer click on empty page space."""


@dc.dataclass(frozen=True, slots=True)
class Focus:
    """Keyboard focus moved to the element with id ``target``."""

    target: str


@dc.dataclass(frozen=True, slots=True)
class KeyPress:
    """Key pressed while the currently focused element has focus."""

    key: Key
    shift: bool = False


@dc.dataclass(frozen=True, slots=True)
class TextInput:
    """Value of the focused text field replaced by ``value``."""

    value: str


@dc.dataclass(frozen=True, slots=True)
class HashChange:
    """URL fragment changed without a full reload."""

    fragment: str


Event = Click | ClickOutside | Focus | KeyPress | TextInput | HashChange


__all__ = [
    "ACTIVATION_KEYS",
    "Click",
    "ClickOutside",
    "Event",
    "Focus",
    "HashChange",
    "Key",
    "KeyPress",
    "TextInput",
]
