"""Common literal values used across docs_e2e.

Selectors, query parameter names, and timing constants live here so the
server, the widget models, and the browser suites agree on the same markup
contract without drifting. Intended for internal use within the docs_e2e
package and its tests.

Examples
--------
>>> from docs_e2e import _constants
>>> _constants.TABS_QUERY_PARAM
'tabs'
>>> _constants.CUT_SELECTORS["title"]
'.yfm-cut-title'
"""

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_CONFIG_PATH = "config/harness.yaml"

INDEX_DOCUMENT = "index.html"
HTML_SUFFIX = ".html"

HIGHLIGHT_SECONDS = 1.0
SEARCH_DEBOUNCE_SECONDS = 0.3

TABS_QUERY_PARAM = "tabs"
TABS_VALUE_SEPARATOR = "_"

CUT_SELECTORS = {
    "cut": ".yfm-cut",
    "title": ".yfm-cut-title",
    "content": ".yfm-cut-content",
    "highlight": "cut-highlight",
}

TAB_SELECTORS = {
    "container": ".yfm-tabs",
    "list": ".yfm-tab-list",
    "tab": ".yfm-tab",
    "panel": ".yfm-tab-panel",
    "vertical_tab": ".yfm-vertical-tab",
    "dropdown_select": ".yfm-tabs-dropdown-select",
    "group_attr": "data-diplodoc-group",
    "variant_attr": "data-diplodoc-variant",
    "slug_attr": "data-diplodoc-key",
}

TERM_SELECTORS = {
    "term": "i.yfm-term_title",
    "tooltip": "dfn.yfm-term_dfn",
    "key_attr": "term-key",
}

SEARCH_SELECTORS = {
    "input": ".dc-search-suggest input",
    "popup": ".dc-search-suggest__popup",
    "list": ".dc-search-suggest__list .g-list__items",
    "item": ".dc-search-suggest__list .g-list__item",
    "loader": ".dc-search-suggest__loader",
    "empty": ".dc-search-suggest__list_empty",
    "footer": ".dc-search-suggest__footer",
}

NAVIGATION_SELECTORS = {
    "toc": ".dc-toc",
    "toc_link": ".dc-toc__list-item a",
    "header": ".dc-header",
    "header_link": ".dc-header__nav-link",
    "content": ".dc-doc-page__main",
}

DIAGRAM_SELECTORS = {
    "diagram": ".mermaid",
    "svg": ".mermaid > svg",
    "controls": ".mermaid-zoom-menu-controls",
    "zoom_in": 'div[data-action="zoomin"]',
}
