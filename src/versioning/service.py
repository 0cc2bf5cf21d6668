"""Update checks against the release share.

Glues the share client (an injectable collaborator) to the pure resolver and
reports whether the running version is behind. Upstream failures propagate
as ``UpdateSourceError``; an empty or unresolvable listing is not an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Union

import semantic_version

from common.logging_utils import extra_context, is_debug_enabled, Timer

from .models import LatestRelease, Platform, ReleaseAsset, ShareFile
from .platforms import PlatformProbe, get_runtime_platform
from .resolver import resolve_latest_release
from .semver import compare_semver, parse_semver

logger = logging.getLogger(__name__)

ListingFetcher = Callable[..., List[ShareFile]]
DownloadUrlFetcher = Callable[..., str]


def normalize_current_version(raw: str) -> str:
    """Turn user/app supplied version text into a comparable version string.

    ``"v1.2.3"`` -> ``"1.2.3"``; partial input such as ``"1.2"`` is coerced
    to ``"1.2.0"``. Build metadata is dropped (``"1.9.0+build5"`` -> ``"1.9.0"``).
    Anything that cannot be coerced is returned stripped.
    """
    value = (raw or "").strip()
    if value[:1] in ("v", "V"):
        value = value[1:]
    value = value.split("+", 1)[0].strip()
    if not value or parse_semver(value) is not None:
        return value
    try:
        coerced = semantic_version.Version.coerce(value)
    except ValueError:
        return value
    # coerce() folds extra components into build metadata (1.2.3.4 -> 1.2.3+4)
    return str(semantic_version.Version(
        major=coerced.major,
        minor=coerced.minor,
        patch=coerced.patch,
        prerelease=coerced.prerelease,
    ))


@dataclass(frozen=True)
class UpdateCheckResult:
    checked_at_utc: str
    current_version: str
    latest_version: Optional[str]
    update_available: bool
    platform: Optional[Platform]
    asset: Optional[ReleaseAsset]
    release: Optional[LatestRelease]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "checked_at_utc": self.checked_at_utc,
            "current_version": self.current_version,
            "latest_version": self.latest_version,
            "update_available": self.update_available,
            "platform": self.platform.value if self.platform else None,
            "asset": self.asset.to_dict() if self.asset else None,
            "release": self.release.to_dict() if self.release else None,
        }


class UpdateService:
    """Resolve the latest release from a share and compare it to a version."""

    def __init__(
        self,
        source: Any = None,
        timeout: Optional[float] = None,
        platform_probe: Optional[PlatformProbe] = None,
        fetch_listing: Optional[ListingFetcher] = None,
        fetch_download: Optional[DownloadUrlFetcher] = None,
    ) -> None:
        if fetch_listing is None or fetch_download is None:
            # Imported lazily so the resolver stays usable without the share client.
            from registry.pan123 import client as _client  # pylint: disable=import-outside-toplevel
            fetch_listing = fetch_listing or _client.fetch_share_files
            fetch_download = fetch_download or _client.fetch_download_url
        self.source = source
        self.timeout = timeout
        self.platform_probe = platform_probe
        self._fetch_listing = fetch_listing
        self._fetch_download = fetch_download

    def fetch_latest_release(self) -> Optional[LatestRelease]:
        """Fetch the listing and resolve it; None when nothing is resolvable."""
        with Timer() as t:
            files = self._fetch_listing(source=self.source, timeout=self.timeout)
        release = resolve_latest_release(files)
        if is_debug_enabled(logger):
            logger.debug(
                "Latest release lookup finished",
                extra=extra_context(
                    event="function_exit",
                    component="update_service",
                    action="fetch_latest_release",
                    outcome="resolved" if release else "no_release",
                    count=len(files),
                    duration_ms=t.duration_ms(),
                ),
            )
        return release

    def runtime_platform(self) -> Optional[Platform]:
        return get_runtime_platform(self.platform_probe)

    def check(self, current_version: str, platform: Optional[Platform] = None) -> UpdateCheckResult:
        """Compare ``current_version`` against the newest release on the share.

        ``platform`` defaults to the runtime platform from the probe.
        """
        checked = datetime.now(timezone.utc).isoformat()
        current = normalize_current_version(current_version)
        release = self.fetch_latest_release()
        target = platform if platform is not None else self.runtime_platform()

        if release is None:
            logger.info("No resolvable release found on the share")
            return UpdateCheckResult(
                checked_at_utc=checked,
                current_version=current,
                latest_version=None,
                update_available=False,
                platform=target,
                asset=None,
                release=None,
            )

        update_available = bool(current) and compare_semver(release.latest_version, current) > 0
        return UpdateCheckResult(
            checked_at_utc=checked,
            current_version=current,
            latest_version=release.latest_version,
            update_available=update_available,
            platform=target,
            asset=release.asset_for(target),
            release=release,
        )

    def download_url_for(self, item: Union[ReleaseAsset, ShareFile]) -> str:
        """Fetch a fresh direct link; links expire, so they are never cached."""
        file = item.file if isinstance(item, ReleaseAsset) else item
        return self._fetch_download(file, source=self.source, timeout=self.timeout)
