"""
Input transport for the break-in detector.

Opens a log locator as a stream of text lines (without line terminators).
HTTP(S) locators are fetched with requests; anything else is treated as a
local capture file. HTTP responses are rendered with their header fields
first, then a blank line, then the body, which is the same shape as a raw
capture saved with ``curl -i``.
"""

import logging
from typing import Iterator
from urllib.parse import urlparse

import requests

logger = logging.getLogger(__name__)

CHUNK_SIZE = 512


class TransportError(RuntimeError):
    """Raised when the log stream cannot be opened or fails mid-read."""


def is_http_locator(locator: str) -> bool:
    return urlparse(locator).scheme in ("http", "https")


def open_log_stream(locator: str, timeout: int = 30) -> Iterator[str]:
    """
    Open a log locator for line-by-line reading.

    Args:
        locator: http(s) URL or local file path
        timeout: Connect/read timeout in seconds for HTTP locators

    Raises:
        TransportError: If the source cannot be opened or reading fails
    """
    if is_http_locator(locator):
        return fetch_http_lines(locator, timeout=timeout)
    return read_file_lines(locator)


def fetch_http_lines(url: str, timeout: int = 30) -> Iterator[str]:
    logger.info(f"Fetching log from {url}")
    try:
        response = requests.get(
            url,
            headers={"Connection": "close"},
            stream=True,
            timeout=timeout
        )
    except requests.RequestException as e:
        raise TransportError(f"Error fetching {url}: {e}") from e

    try:
        response.raise_for_status()
    except requests.HTTPError as e:
        response.close()
        raise TransportError(f"Error fetching {url}: {e}") from e

    return _iter_response(response, url)


def _iter_response(response, url: str) -> Iterator[str]:
    try:
        for name, value in response.headers.items():
            yield f"{name}: {value}"
        yield ""

        if response.encoding is None:
            response.encoding = "utf-8"
        # Split on "\n" across chunk boundaries; a CRLF pair may straddle two chunks
        pending = ""
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE, decode_unicode=True):
            pending += chunk
            *lines, pending = pending.split("\n")
            for line in lines:
                yield line.rstrip("\r")
        if pending:
            yield pending.rstrip("\r")
    except requests.RequestException as e:
        raise TransportError(f"Error reading {url}: {e}") from e
    finally:
        response.close()


def read_file_lines(path: str) -> Iterator[str]:
    logger.info(f"Reading log capture from {path}")
    try:
        f = open(path, "r", encoding="utf-8", errors="replace", newline="")
    except OSError as e:
        raise TransportError(f"Error opening {path}: {e}") from e

    return _iter_file(f, path)


def _iter_file(f, path: str) -> Iterator[str]:
    with f:
        try:
            for line in f:
                yield line.rstrip("\r\n")
        except OSError as e:
            raise TransportError(f"Error reading {path}: {e}") from e
