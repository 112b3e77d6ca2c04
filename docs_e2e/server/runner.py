"""Run the content server under uvicorn, in the foreground or a thread.

:class:`ContentServer` is what the ``serve`` command and the browser suites
use. In the foreground it blocks until interrupted; in the background it runs
uvicorn on a daemon thread and only returns once the server answers HTTP,
which mirrors how a test runner waits for its web server before navigating.

Example
-------
>>> from pathlib import Path
>>> from docs_e2e.server import ContentServer
>>> with ContentServer(Path("build/docs"), port=0) as server:  # doctest: +SKIP
...     print(server.url)
http://127.0.0.1:51234
"""

from __future__ import annotations

import threading
import time
from pathlib import Path

import requests
import uvicorn
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from docs_e2e._constants import DEFAULT_HOST, DEFAULT_PORT

from .app import create_app


class ServerStartError(RuntimeError):
    """Raised when the content server does not come up."""


def wait_until_ready(
    url: str,
    *,
    attempts: int = 5,
    backoff_factor: float = 0.2,
    timeout: float = 5.0,
) -> int:
    """Probe ``url`` until the server answers and return the HTTP status.

    Any status counts as ready: an empty content root still answers 404.

    Raises
    ------
    ServerStartError
        If no connection could be made after ``attempts`` retries.
    """
    session = requests.Session()
    retry = Retry(
        total=attempts,
        connect=attempts,
        backoff_factor=backoff_factor,
        allowed_methods=("GET", "HEAD"),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    try:
        response = session.get(url, timeout=timeout)
    except requests.ConnectionError as exc:
        msg = f"Content server at {url} is not answering."
        raise ServerStartError(msg) from exc
    finally:
        session.close()
    return response.status_code


class ContentServer:
    """Serve a documentation root over HTTP with extension-less URLs."""

    def __init__(
        self,
        root: Path | str,
        *,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        log_level: str = "warning",
        startup_timeout: float = 10.0,
    ) -> None:
        """Configure the server without binding any socket yet.

        Parameters
        ----------
        root : Path or str
            Directory holding the pre-rendered pages.
        host : str, optional
            Interface to bind; defaults to loopback.
        port : int, optional
            TCP port; ``0`` lets the OS choose and :attr:`port` is updated
            once the background server is bound.
        log_level : str, optional
            Uvicorn log level (``debug``, ``info``, ``warning``, ``error``).
        startup_timeout : float, optional
            Seconds :meth:`start` waits for uvicorn to report it started.
        """
        self.root = Path(root)
        self.host = host
        self.port = port
        self.log_level = log_level
        self.startup_timeout = startup_timeout
        self._server: uvicorn.Server | None = None
        self._thread: threading.Thread | None = None

    @property
    def url(self) -> str:
        """Return the base URL pages are served from."""
        return f"http://{self.host}:{self.port}"

    @property
    def running(self) -> bool:
        """Return ``True`` while the background thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def serve(self) -> None:
        """Run in the foreground until interrupted."""
        self._server = self._build_server()
        self._server.run()

    def start(self) -> ContentServer:
        """Run on a daemon thread and return once the server answers."""
        if self.running:
            return self
        server = self._build_server()
        thread = threading.Thread(target=server.run, name="docs-e2e-server", daemon=True)
        thread.start()
        deadline = time.monotonic() + self.startup_timeout
        while not server.started:
            if not thread.is_alive() or time.monotonic() > deadline:
                server.should_exit = True
                msg = f"Content server did not start on {self.host}:{self.port}."
                raise ServerStartError(msg)
            time.sleep(0.05)
        self._server = server
        self._thread = thread
        self.port = self._bound_port(server)
        wait_until_ready(self.url)
        return self

    def stop(self, timeout: float = 5.0) -> None:
        """Ask uvicorn to exit and wait for the thread."""
        if self._server is not None:
            self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout)
        self._server = None
        self._thread = None

    def __enter__(self) -> ContentServer:
        return self.start()

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def _build_server(self) -> uvicorn.Server:
        config = uvicorn.Config(
            create_app(self.root),
            host=self.host,
            port=self.port,
            log_level=self.log_level,
        )
        return uvicorn.Server(config)

    def _bound_port(self, server: uvicorn.Server) -> int:
        """Return the port the listening socket actually bound."""
        if self.port != 0:
            return self.port
        for listener in server.servers:
            for sock in listener.sockets:
                return int(sock.getsockname()[1])
        return self.port


__all__ = ["ContentServer", "ServerStartError", "wait_until_ready"]
