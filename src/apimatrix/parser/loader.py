"""Load OpenAPI documents from a URL, local file, or stdin.

This module handles all I/O for fetching raw OpenAPI documents and turning
them into Python dictionaries, plus the typed accessors the report builder
uses to read the top-level ``paths`` and ``info.title`` fields.

The public functions are:

* :func:`load_spec` -- Fetch (or read) and parse a document from any source.
* :func:`fetch_response` -- Retrieve a document over HTTP, with a timeout
  and retry on transient failures. :func:`fetch_spec` returns only its text.
* :func:`parse_document` -- Parse raw text (JSON, or YAML as a fallback).
* :func:`get_paths` / :func:`get_title` -- Shape-checked field access.

The HTTP client is always passed in by the caller (or created for the
duration of a single call), so tests can substitute an
:class:`httpx.MockTransport` without touching module state.
"""

from __future__ import annotations

import json
import sys
import time
from pathlib import Path
from typing import Any, Optional

import httpx
import yaml

from apimatrix.exceptions import FetchError, SpecParseError
from apimatrix.models import FetchConfig
from apimatrix.output import get_output


def load_spec(
    source: str,
    config: Optional[FetchConfig] = None,
    client: Optional[httpx.Client] = None,
) -> dict[str, Any]:
    """Load an OpenAPI document from URL, file path, or stdin ('-').

    Supports JSON and YAML formats.

    Args:
        source: A URL (http/https), file path, or '-' for stdin.
        config: Timeout/retry settings for URL sources.
        client: Optional HTTP client for URL sources.

    Returns:
        The parsed document as a dictionary.

    Raises:
        FetchError: If a URL cannot be fetched.
        SpecParseError: If the content cannot be read or parsed.
    """
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source, config=config, client=client)
    else:
        return _load_from_file(source)


def fetch_spec(
    url: str,
    config: Optional[FetchConfig] = None,
    client: Optional[httpx.Client] = None,
) -> str:
    """Fetch the raw text of a document. See :func:`fetch_response`."""
    return fetch_response(url, config=config, client=client).text


def fetch_response(
    url: str,
    config: Optional[FetchConfig] = None,
    client: Optional[httpx.Client] = None,
) -> httpx.Response:
    """Fetch a document with a blocking HTTP GET.

    Network errors and 5xx responses are retried up to ``config.max_retries``
    times with exponential delay (1 s, 2 s, ...). Any other error status
    fails immediately.

    Args:
        url: The HTTP(S) URL to fetch.
        config: Timeout/retry settings. Defaults to :class:`FetchConfig`.
        client: HTTP client to send the request with. When ``None``, a
            client is created from *config* and closed before returning.

    Returns:
        The successful response, body already read.

    Raises:
        FetchError: If the request fails after all retries or the server
            answers with an error status.
    """
    config = config or FetchConfig()
    if client is None:
        with httpx.Client(
            timeout=config.timeout,
            verify=config.verify_ssl,
            follow_redirects=True,
        ) as owned_client:
            return _get_with_retry(owned_client, url, config)
    return _get_with_retry(client, url, config)


def _get_with_retry(
    client: httpx.Client, url: str, config: FetchConfig
) -> httpx.Response:
    """Send the GET request, retrying on 5xx and network errors."""
    output = get_output()
    max_retries = config.max_retries

    for attempt in range(max_retries + 1):
        try:
            response = client.get(url, timeout=config.timeout)
        except (httpx.TimeoutException, httpx.NetworkError) as exc:
            if attempt < max_retries:
                delay = 2 ** attempt
                output.debug(
                    f"Connection error: {exc}, retrying in {delay}s "
                    f"(attempt {attempt + 1}/{max_retries})"
                )
                time.sleep(delay)
                continue
            raise FetchError(
                f"Failed to fetch spec from {url} after {max_retries + 1} attempts: {exc}"
            ) from exc
        except httpx.RequestError as exc:
            raise FetchError(f"Failed to fetch spec from {url}: {exc}") from exc

        if response.status_code >= 500 and attempt < max_retries:
            delay = 2 ** attempt
            output.debug(
                f"Server error {response.status_code}, retrying in {delay}s "
                f"(attempt {attempt + 1}/{max_retries})"
            )
            time.sleep(delay)
            continue

        if response.status_code >= 400:
            raise FetchError(f"HTTP {response.status_code} fetching spec from {url}")

        output.debug(f"Fetched {len(response.text)} characters from {url}")
        return response

    raise FetchError(f"Failed to fetch spec from {url}")  # pragma: no cover


def _load_from_url(
    url: str,
    config: Optional[FetchConfig] = None,
    client: Optional[httpx.Client] = None,
) -> dict[str, Any]:
    """Fetch a document from *url* and parse it.

    The response content type picks the parser; a JSON body is never
    retried as YAML. Without a usable content type a ``.json``/``.yaml``
    URL suffix is used instead.

    Raises:
        FetchError: If the URL cannot be fetched.
        SpecParseError: If the content cannot be parsed.
    """
    response = fetch_response(url, config=config, client=client)

    content_type = response.headers.get("content-type", "").lower()
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"
    else:
        suffix = Path(httpx.URL(url).path).suffix.lower()
        if suffix == ".json":
            hint = "json"
        elif suffix in (".yaml", ".yml"):
            hint = "yaml"

    return parse_document(response.text, hint=hint)


def _load_from_stdin() -> dict[str, Any]:
    """Read a document from stdin.

    Raises:
        SpecParseError: If stdin is empty or content cannot be parsed.
    """
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecParseError("No input received from stdin")

    return parse_document(content)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a document from a local file.

    ``.json`` files are parsed strictly as JSON, ``.yaml``/``.yml`` files as
    YAML; other extensions fall back to content-based detection.

    Raises:
        SpecParseError: If the file cannot be read or content cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecParseError(f"Spec file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read spec file {path}: {exc}") from exc

    if not content.strip():
        raise SpecParseError(f"Spec file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return parse_document(content, hint=hint)


def parse_document(content: str, hint: str = "") -> dict[str, Any]:
    """Parse raw text as JSON or YAML into a document tree.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.
    Object key order is preserved, so path and method iteration follows the
    document.

    Args:
        content: The raw string content.
        hint: Optional format hint ('json' or 'yaml').

    Returns:
        The parsed dictionary.

    Raises:
        SpecParseError: If the content cannot be parsed as either format or
            is not an object at the top level.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
        else:
            return _require_object(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        yaml_error = exc
    else:
        return _require_object(result)

    msg = "Failed to parse spec as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise SpecParseError(msg)


def _require_object(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise SpecParseError(f"Spec must be a JSON/YAML object (got {kind})")
    return result


def get_paths(document: dict[str, Any]) -> Optional[dict[str, Any]]:
    """Return the document's ``paths`` map, or ``None`` when it is absent.

    Raises:
        SpecParseError: If ``paths`` is present but not an object.
    """
    paths = document.get("paths")
    if paths is None:
        return None
    if not isinstance(paths, dict):
        raise SpecParseError(
            f"'paths' must be an object (got {type(paths).__name__})"
        )
    return paths


def get_title(document: dict[str, Any]) -> Optional[str]:
    """Return ``info.title``, or ``None`` when either level is absent.

    Raises:
        SpecParseError: If ``info`` is not an object or the title is not a string.
    """
    info = document.get("info")
    if info is None:
        return None
    if not isinstance(info, dict):
        raise SpecParseError(f"'info' must be an object (got {type(info).__name__})")
    title = info.get("title")
    if title is not None and not isinstance(title, str):
        raise SpecParseError(
            f"'info.title' must be a string (got {type(title).__name__})"
        )
    return title
