"""Load and validate the docs_e2e harness configuration.

This subpackage parses ``config/harness.yaml``, applies environment overrides
(``PROJECT``, ``PORT``, ``BASE_URL``, ``CI``) and produces typed dataclasses
(:class:`HarnessConfig`, :class:`ServerConfig`, etc.) consumed by the content
server and the ``run`` command. The primary entry point is
:func:`load_harness_config`.

Examples
--------
>>> from docs_e2e.config import load_harness_config
>>> config = load_harness_config(env={"PROJECT": "build/docs", "PORT": "4000"})
>>> config.server.url
'http://127.0.0.1:4000'
"""

from .loader import load_harness_config
from .models import (
    BrowserConfig,
    HarnessConfig,
    HarnessConfigError,
    RunConfig,
    ServerConfig,
)

__all__ = [
    "BrowserConfig",
    "HarnessConfig",
    "HarnessConfigError",
    "RunConfig",
    "ServerConfig",
    "load_harness_config",
]
