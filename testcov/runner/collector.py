"""Talking to the instrumented runtime: command line, URI scraping, collection."""

import sys
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path
from typing import Any

import httpx

from ..runtime.service import SERVICE_LISTENING_MARKER
from .errors import ServiceUriParseError

HitMap = dict[str, dict[int, int]]

DEFAULT_PORT = 8787
COLLECTION_TIMEOUT = 15 * 60.0

DEFAULT_RUNTIME = (sys.executable, "-m", "testcov.runtime")


def build_command(
    script: str | Path, port: int, runtime: list[str] | tuple[str, ...] | None = None
) -> list[str]:
    """Command line launching ``script`` under the instrumented runtime."""
    return [
        *(runtime or DEFAULT_RUNTIME),
        "--pause-isolates-on-exit",
        "--enable-instrumentation-asserts",
        f"--enable-diagnostics-service={port}",
        str(script),
    ]


def extract_service_uri(line: str) -> str | None:
    """Extract the diagnostics URI from a line of runtime output.

    Returns:
        The URI (always ending with ``/``), or None if the line does not
        carry the listening marker.

    Raises:
        ServiceUriParseError: If the marker is present but is not followed
            by an absolute http(s) URI.
    """
    pos = line.find(SERVICE_LISTENING_MARKER)
    if pos == -1:
        return None

    rest = line[pos + len(SERVICE_LISTENING_MARKER):].split()
    if not rest:
        raise ServiceUriParseError("Diagnostics service line carries no URI", line)

    try:
        uri = httpx.URL(rest[0])
    except httpx.InvalidURL as e:
        raise ServiceUriParseError(f"Invalid diagnostics URI {rest[0]!r}: {e}", line) from e

    if uri.scheme not in ("http", "https") or not uri.host:
        raise ServiceUriParseError(f"Invalid diagnostics URI {rest[0]!r}", line)

    text = str(uri)
    return text if text.endswith("/") else text + "/"


def _request_coverage(
    service_uri: str, timeout: float, wait_paused: bool, resume: bool
) -> dict[str, Any]:
    url = httpx.URL(service_uri).join("coverage")
    response = httpx.get(
        url,
        params={
            "wait_paused": str(wait_paused).lower(),
            "resume": str(resume).lower(),
        },
        timeout=timeout,
    )
    response.raise_for_status()
    data = response.json()
    if not isinstance(data, dict) or data.get("type") != "CodeCoverage":
        raise ValueError(f"Unexpected collection response: {str(data)[:200]}")
    return data


def collect(
    service_uri: str,
    *,
    timeout: float = COLLECTION_TIMEOUT,
    wait_paused: bool = True,
    resume: bool = True,
) -> dict[str, Any]:
    """Request the full hit data from the diagnostics endpoint.

    Blocks until the runtime has finished the script when ``wait_paused`` is
    set; ``resume`` lets the runtime exit once the data has been sent.
    ``timeout`` bounds the whole request, not only each connect or read.

    Raises:
        httpx.HTTPError: On timeouts, connection errors and error statuses.
        ValueError: If the response is not a coverage payload.
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="testcov-collect")
    future = executor.submit(_request_coverage, service_uri, timeout, wait_paused, resume)
    executor.shutdown(wait=False)
    try:
        return future.result(timeout=timeout)
    except FutureTimeoutError as e:
        raise httpx.TimeoutException(
            f"No coverage data within {timeout:g} seconds"
        ) from e


def create_hitmap(coverage: list[dict[str, Any]]) -> HitMap:
    """Turn collected ``{"source", "hits"}`` entries into a HitMap.

    Counts for a line reported more than once are summed.
    """
    hitmap: HitMap = {}
    for entry in coverage:
        source = entry["source"]
        hits = entry["hits"]
        if len(hits) % 2:
            raise ValueError(f"Odd-length hit list for {source}")
        lines = hitmap.setdefault(source, {})
        for line, count in zip(hits[0::2], hits[1::2]):
            lines[int(line)] = lines.get(int(line), 0) + int(count)
    return hitmap
