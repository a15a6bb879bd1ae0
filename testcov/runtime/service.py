"""Diagnostics HTTP endpoint served from inside the instrumented process."""

import json
import logging
import threading
from functools import partial
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qs, urlparse

logger = logging.getLogger(__name__)

SERVICE_LISTENING_MARKER = "Diagnostics service listening on "


class IsolateState:
    """Pause/resume handshake between the script runner and the endpoint."""

    def __init__(self):
        self.paused = threading.Event()
        self.resumed = threading.Event()
        self.coverage: list[dict] = []

    def pause(self, coverage: list[dict]) -> None:
        """Publish the final hit data and mark the script as finished."""
        self.coverage = coverage
        self.paused.set()

    def resume(self) -> None:
        self.resumed.set()


def _flag(query: dict[str, list[str]], name: str) -> bool:
    values = query.get(name)
    if not values:
        return False
    return values[-1].lower() in ("1", "true", "yes")


class DiagnosticsRequestHandler(BaseHTTPRequestHandler):
    """Serves ``/`` (status) and ``/coverage`` (hit data)."""

    def __init__(self, *args, state: IsolateState, **kwargs):
        self.state = state
        super().__init__(*args, **kwargs)

    def do_GET(self):
        url = urlparse(self.path)
        query = parse_qs(url.query)

        if url.path in ("", "/"):
            self._send_json(
                200, {"type": "Status", "paused": self.state.paused.is_set()}
            )
            return

        if url.path.rstrip("/") != "/coverage":
            self._send_json(404, {"type": "Error", "message": f"Unknown path {url.path}"})
            return

        if _flag(query, "wait_paused"):
            self.state.paused.wait()
        elif not self.state.paused.is_set():
            self._send_json(409, {"type": "Error", "message": "Script is still running"})
            return

        self._send_json(200, {"type": "CodeCoverage", "coverage": self.state.coverage})

        if _flag(query, "resume"):
            self.state.resume()

    def _send_json(self, status: int, payload: dict) -> None:
        body = json.dumps(payload).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)
        self.wfile.flush()

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


class DiagnosticsService:
    """Background HTTP server bound to the loopback interface."""

    def __init__(self, state: IsolateState, port: int = 0, host: str = "127.0.0.1"):
        handler = partial(DiagnosticsRequestHandler, state=state)
        self.server = ThreadingHTTPServer((host, port), handler)
        self.server.daemon_threads = True
        self._thread = threading.Thread(
            target=self.server.serve_forever, name="diagnostics-service", daemon=True
        )

    @property
    def uri(self) -> str:
        host, port = self.server.server_address[:2]
        return f"http://{host}:{port}/"

    def start(self) -> None:
        self._thread.start()
        logger.debug("Diagnostics service started at %s", self.uri)

    def stop(self) -> None:
        self.server.shutdown()
        self.server.server_close()
