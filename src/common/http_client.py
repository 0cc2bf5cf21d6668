"""Shared HTTP helpers used by the share client and the package downloader.

Encapsulates common request/timeout error handling so callers avoid
duplicating try/except blocks. Every request carries a timeout; failures are
raised as ``TransportError`` so library callers can tell an upstream failure
apart from an empty listing or an unresolvable release. No retries here.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


class UpdateSourceError(RuntimeError):
    """Base class for failures of the remote release source."""


class TransportError(UpdateSourceError):
    """The request could not be completed (timeout, connection, HTTP status)."""


def _default_headers(headers: Optional[Dict[str, str]]) -> Dict[str, str]:
    merged = {"User-Agent": Constants.USER_AGENT, "Accept": "application/json"}
    if headers:
        merged.update(headers)
    return merged


def _request(
    method: str,
    url: str,
    *,
    context: str,
    timeout: Optional[float] = None,
    **kwargs: Any,
) -> requests.Response:
    """Issue one HTTP request, translating requests' errors into TransportError."""
    effective_timeout = timeout if timeout is not None else Constants.REQUEST_TIMEOUT
    safe_target = safe_url(url)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action=method,
                    target=safe_target,
                    context=context,
                ),
            )
        try:
            res = requests.request(method, url, timeout=effective_timeout, **kwargs)
        except requests.Timeout as exc:
            logger.error(
                "%s request timed out after %s seconds",
                context,
                effective_timeout,
            )
            raise TransportError(
                f"{context} request timed out after {effective_timeout} seconds"
            ) from exc
        except requests.RequestException as exc:  # includes ConnectionError
            logger.error("%s connection error: %s", context, exc)
            raise TransportError(f"{context} connection error: {exc}") from exc

    if is_debug_enabled(logger):
        logger.debug(
            "HTTP response",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action=method,
                outcome="success" if res.ok else "http_error",
                status_code=res.status_code,
                duration_ms=t.duration_ms(),
                target=safe_target,
                context=context,
            ),
        )
    if not res.ok:
        logger.error("%s request failed: HTTP %s", context, res.status_code)
        raise TransportError(f"HTTP {res.status_code}")
    return res


def _decode_json(res: requests.Response, *, context: str) -> Any:
    try:
        return res.json()
    except ValueError as exc:  # JSONDecodeError subclasses ValueError
        logger.error("%s returned a non-JSON body", context)
        raise TransportError(f"{context} returned invalid JSON") from exc


def get_json(
    url: str,
    *,
    context: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
) -> Any:
    """Perform a GET request and return the decoded JSON body.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "share listing").
        params: Optional query parameters.
        headers: Optional request headers, merged over the defaults.
        timeout: Seconds before the request is abandoned.

    Returns:
        The parsed JSON payload.

    Raises:
        TransportError: On timeout, connection failure, non-2xx status or
            an undecodable body.
    """
    res = _request(
        "GET",
        url,
        context=context,
        timeout=timeout,
        params=params,
        headers=_default_headers(headers),
    )
    return _decode_json(res, context=context)


def post_json(
    url: str,
    *,
    context: str,
    payload: Any,
    headers: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
) -> Any:
    """Perform a POST request with a JSON body and return the decoded reply."""
    res = _request(
        "POST",
        url,
        context=context,
        timeout=timeout,
        json=payload,
        headers=_default_headers(headers),
    )
    return _decode_json(res, context=context)


def stream_to_file(
    url: str,
    dest: Path,
    *,
    context: str,
    timeout: Optional[float] = None,
    chunk_size: Optional[int] = None,
) -> int:
    """Stream a response body into ``dest`` and return the number of bytes written."""
    res = _request(
        "GET",
        url,
        context=context,
        timeout=timeout if timeout is not None else Constants.DOWNLOAD_TIMEOUT,
        headers={"User-Agent": Constants.USER_AGENT, "Accept": "*/*"},
        stream=True,
    )
    written = 0
    try:
        with dest.open("wb") as fh:
            for chunk in res.iter_content(chunk_size=chunk_size or Constants.DOWNLOAD_CHUNK_SIZE):
                if chunk:
                    fh.write(chunk)
                    written += len(chunk)
    except requests.RequestException as exc:
        logger.error("%s download interrupted: %s", context, exc)
        raise TransportError(f"{context} download interrupted: {exc}") from exc
    finally:
        res.close()
    return written
