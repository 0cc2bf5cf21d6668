"""123pan public share support.

This package provides access to a public 123pan share folder:
- client.py: share listing and per-file download-url requests
- download.py: trusted-host check and streaming download of a package

Public API is preserved at registry.pan123 without shims.
"""

from .client import (  # noqa: F401
    ShareApiError,
    ShareSource,
    fetch_download_url,
    fetch_share_files,
    get_share_page_url,
)
from .download import (  # noqa: F401
    download_package,
    is_trusted_download_url,
    sanitize_download_file_name,
)

__all__ = [
    "ShareApiError",
    "ShareSource",
    "fetch_download_url",
    "fetch_share_files",
    "get_share_page_url",
    "download_package",
    "is_trusted_download_url",
    "sanitize_download_file_name",
]
