"""Download a resolved package into the local update cache."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, Optional
from urllib.parse import urlparse

from constants import Constants
from common.http_client import TransportError, stream_to_file
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = set('/\\:*?"<>|')


def sanitize_download_file_name(raw: str) -> str:
    """Reduce a share file name to a safe local file name."""
    fallback = Constants.DOWNLOAD_FALLBACK_NAME
    # Both separators count, whatever the host OS.
    name = (raw or "").replace("\\", "/").rsplit("/", 1)[-1]
    if name in ("", ".", ".."):
        return fallback
    cleaned = "".join("_" if ch in _UNSAFE_CHARS else ch for ch in name).strip()
    if not cleaned:
        return fallback
    return cleaned[: Constants.DOWNLOAD_NAME_MAX_CHARS]


def is_trusted_download_url(url: str, trusted_suffixes: Optional[Iterable[str]] = None) -> bool:
    """Only http(s) links on the share's CDN hosts are accepted."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    if parsed.scheme not in ("http", "https"):
        return False
    host = (parsed.hostname or "").lower()
    if not host:
        return False
    suffixes = list(trusted_suffixes) if trusted_suffixes is not None else Constants.TRUSTED_DOWNLOAD_HOST_SUFFIXES
    for suffix in suffixes:
        domain = suffix.strip().lower().lstrip(".")
        if domain and (host == domain or host.endswith("." + domain)):
            return True
    return False


def default_download_dir() -> Path:
    if Constants.DOWNLOAD_DIR:
        return Path(Constants.DOWNLOAD_DIR).expanduser()
    return Path(tempfile.gettempdir()) / Constants.DOWNLOAD_CACHE_DIRNAME


def download_package(
    url: str,
    file_name: str,
    dest_dir: Optional[Path] = None,
    timeout: Optional[float] = None,
) -> Path:
    """Stream ``url`` into ``dest_dir`` and return the final file path.

    The body is written to ``<name>.partial`` first and renamed once complete,
    so an interrupted download never leaves a truncated package behind.

    Raises:
        ValueError: The URL is not on a trusted download host.
        TransportError: The download failed.
    """
    if not is_trusted_download_url(url):
        raise ValueError(f"untrusted download URL: {safe_url(url)}")

    target_dir = Path(dest_dir) if dest_dir is not None else default_download_dir()
    target_dir.mkdir(parents=True, exist_ok=True)

    name = sanitize_download_file_name(file_name)
    final_path = target_dir / name
    temp_path = target_dir / f"{name}.partial"

    with Timer() as t:
        try:
            written = stream_to_file(url, temp_path, context="package download", timeout=timeout)
            os.replace(temp_path, final_path)
        except (TransportError, OSError):
            temp_path.unlink(missing_ok=True)
            raise

    if is_debug_enabled(logger):
        logger.debug(
            "Package downloaded",
            extra=extra_context(
                event="download",
                component="pan123",
                action="download",
                outcome="success",
                bytes=written,
                duration_ms=t.duration_ms(),
                target=safe_url(url),
            ),
        )
    logger.info("Downloaded %s (%d bytes)", final_path, written)
    return final_path
