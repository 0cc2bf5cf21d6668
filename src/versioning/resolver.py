"""Latest-release resolution over a share listing.

Pure and synchronous: the same listing always resolves to an equal result,
and malformed names are skipped rather than reported.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, NamedTuple, Optional

from common.logging_utils import extra_context, is_debug_enabled

from .models import ALL_PLATFORMS, LatestRelease, Platform, ReleaseAsset, ShareFile
from .parser import extract_version
from .platforms import infer_platform
from .selector import select_preferred
from .semver import compare_semver

logger = logging.getLogger(__name__)


class _Candidate(NamedTuple):
    file: ShareFile
    version: str
    platform: Platform


def tag_files(files: Iterable[ShareFile]) -> List[_Candidate]:
    """Attach version and platform to every resolvable regular file."""
    tagged: List[_Candidate] = []
    for item in files:
        if not item.is_file or not isinstance(item.file_name, str) or not item.file_name:
            continue
        version = extract_version(item.file_name)
        platform = infer_platform(item.file_name)
        if not version or platform is None:
            continue
        tagged.append(_Candidate(item, version, platform))
    return tagged


def resolve_latest_release(files: Iterable[ShareFile]) -> Optional[LatestRelease]:
    """Find the highest version in ``files`` and its best asset per platform.

    Returns None when no file carries both a version and a platform.
    """
    all_files = tuple(files)
    tagged = tag_files(all_files)

    if is_debug_enabled(logger):
        logger.debug(
            "Tagged share files",
            extra=extra_context(
                event="decision",
                component="resolver",
                action="tag_files",
                outcome="empty" if not tagged else "non_empty",
                total=len(all_files),
                count=len(tagged),
            ),
        )
    if not tagged:
        return None

    latest_version = tagged[0].version
    for cand in tagged[1:]:
        if compare_semver(cand.version, latest_version) > 0:
            latest_version = cand.version

    assets: Dict[Platform, ReleaseAsset] = {}
    for platform in ALL_PLATFORMS:
        candidates = [
            ReleaseAsset(platform=platform, version=latest_version, file=c.file)
            for c in tagged
            if c.version == latest_version and c.platform is platform
        ]
        preferred = select_preferred(candidates, platform)
        if preferred is not None:
            assets[platform] = preferred

    if is_debug_enabled(logger):
        logger.debug(
            "Resolved latest release",
            extra=extra_context(
                event="decision",
                component="resolver",
                action="resolve",
                outcome="resolved",
                latest_version=latest_version,
                platforms=",".join(p.value for p in assets),
            ),
        )
    return LatestRelease(latest_version=latest_version, assets=assets, all_files=all_files)
