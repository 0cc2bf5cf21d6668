"""123pan share client: folder listing and download links."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from constants import Constants
from common.http_client import UpdateSourceError, get_json, post_json
from common.logging_utils import extra_context, is_debug_enabled, redact, safe_url
from versioning.models import ShareFile

logger = logging.getLogger(__name__)

_API_HEADERS = {
    "Content-type": "application/json",
    "Pan-User-Real-IP": "",
}


class ShareApiError(UpdateSourceError):
    """The share API answered but reported a failure (``code != 0``)."""


@dataclass(frozen=True)
class ShareSource:
    """Coordinates of a public share folder."""
    share_key: str
    share_pwd: str
    api_base_url: str
    share_page_url: str = ""

    @classmethod
    def from_constants(cls) -> "ShareSource":
        return cls(
            share_key=Constants.SHARE_KEY,
            share_pwd=Constants.SHARE_PWD,
            api_base_url=Constants.SHARE_API_BASE_URL,
            share_page_url=Constants.SHARE_PAGE_URL,
        )

    @property
    def page_url(self) -> str:
        if self.share_page_url:
            return self.share_page_url
        site = Constants.SHARE_SITE_URL.rstrip("/")
        return f"{site}/s/{self.share_key}?pwd={self.share_pwd}#"

    def __repr__(self) -> str:
        return (
            f"ShareSource(share_key={self.share_key!r}, share_pwd={redact(self.share_pwd)!r}, "
            f"api_base_url={self.api_base_url!r})"
        )


def get_share_page_url(source: Optional[ShareSource] = None) -> str:
    """Return the human-facing page of the share (for "open in browser")."""
    return (source or ShareSource.from_constants()).page_url


def _check_payload(payload: Any, fallback_message: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise ShareApiError(fallback_message)
    if payload.get("code") != 0:
        message = payload.get("message") or fallback_message
        logger.warning("Share API error (code=%s): %s", payload.get("code"), message)
        raise ShareApiError(message)
    return payload


def fetch_share_files(
    source: Optional[ShareSource] = None,
    timeout: Optional[float] = None,
) -> List[ShareFile]:
    """Fetch every entry in the root of the share folder.

    Raises:
        TransportError: The listing request failed or timed out.
        ShareApiError: The share API reported an error.
    """
    source = source or ShareSource.from_constants()
    url = f"{source.api_base_url.rstrip('/')}/share/get"
    params = {
        "limit": str(Constants.SHARE_LIST_LIMIT),
        "next": "0",
        "orderBy": "file_name",
        "orderDirection": "asc",
        "ParentFileId": "0",
        "Page": "1",
        "OrderId": "",
        "SharePwd": source.share_pwd,
        "shareKey": source.share_key,
    }

    payload = _check_payload(
        get_json(url, context="share listing", params=params, headers=_API_HEADERS, timeout=timeout),
        "share listing returned an error",
    )

    data = payload.get("data") or {}
    info_list = data.get("InfoList") if isinstance(data, dict) else None
    if not isinstance(info_list, list):
        info_list = []

    files = [ShareFile.from_api(item) for item in info_list if isinstance(item, dict)]
    if is_debug_enabled(logger):
        logger.debug(
            "Share listing fetched",
            extra=extra_context(
                event="http_response",
                component="pan123",
                action="list",
                outcome="success",
                count=len(files),
                target=safe_url(url),
            ),
        )
    return files


def fetch_download_url(
    file: ShareFile,
    source: Optional[ShareSource] = None,
    timeout: Optional[float] = None,
) -> str:
    """Request a fresh, time-limited direct link for one share file.

    Raises:
        TransportError: The request failed or timed out.
        ShareApiError: The API reported an error or returned no link.
    """
    source = source or ShareSource.from_constants()
    url = f"{source.api_base_url.rstrip('/')}/v2/share/download/info"
    body = {
        "ShareKey": source.share_key,
        "FileID": file.file_id,
        "S3keyFlag": file.s3_key_flag,
        "Size": file.size,
        "Etag": file.etag,
        "OrderId": "",
    }

    payload = _check_payload(
        post_json(url, context="download link", payload=body, headers=_API_HEADERS, timeout=timeout),
        "failed to fetch download link",
    )

    data = payload.get("data") or {}
    dispatch = data.get("dispatchList") if isinstance(data, dict) else None
    path = data.get("downloadPath") if isinstance(data, dict) else None
    if not dispatch or not isinstance(dispatch, list) or not path:
        raise ShareApiError("download link response was empty")

    prefix = (dispatch[0].get("prefix") or "") if isinstance(dispatch[0], dict) else ""
    link = f"{prefix}{path}"
    if is_debug_enabled(logger):
        logger.debug(
            "Download link resolved",
            extra=extra_context(
                event="http_response",
                component="pan123",
                action="download_info",
                outcome="success",
                file_id=file.file_id,
                target=safe_url(link),
            ),
        )
    return link
