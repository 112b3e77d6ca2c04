"""End-to-end harness for pre-rendered documentation sites.

This package serves a documentation build with extension-less URLs, models
the interactive widgets the pages ship (collapsible sections, tab groups,
term tooltips, search suggest, diagrams, navigation) as explicit state
machines, and runs Playwright browser suites against the served build.

Exports
-------
- ``app``: Cyclopts application with the ``serve``, ``resolve``, ``install``
  and ``run`` commands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from docs_e2e import app
>>> app.name[0]
'docs-e2e'
>>> from docs_e2e import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
