"""State machines for the interactive widgets of rendered documentation."""

from .cut import CollapsibleSection, CutRegistry, CutState
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
from .navigation import NavigationHistory, TableOfContents, TocEntry, document_path
from .page import PageModel, PageState, TargetKind
from .search import SearchResult, SearchSession, SearchState
from .tabs import (
    Tab,
    TabGroup,
    TabGroupError,
    TabRegistry,
    TabVariant,
    decode_tabs_value,
    encode_tabs_value,
)
from .terms import Term, TermRegistry

__all__ = [
    "ACTIVATION_KEYS",
    "Click",
    "ClickOutside",
    "CollapsibleSection",
    "CutRegistry",
    "CutState",
    "DiagramViewer",
    "Event",
    "Focus",
    "HashChange",
    "Key",
    "KeyPress",
    "NavigationHistory",
    "PageModel",
    "PageState",
    "SearchResult",
    "SearchSession",
    "SearchState",
    "Tab",
    "TabGroup",
    "TabGroupError",
    "TabRegistry",
    "TabVariant",
    "TableOfContents",
    "TargetKind",
    "Term",
    "TermRegistry",
    "TextInput",
    "TocEntry",
    "decode_tabs_value",
    "encode_tabs_value",
]
