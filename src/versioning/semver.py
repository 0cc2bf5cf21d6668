"""Semantic version parsing and precedence comparison.

Only ``MAJOR.MINOR.PATCH[-PRERELEASE]`` is understood. Strings outside that
grammar are still ordered, by plain string comparison, so a malformed name
can never make a comparison raise.
"""

import functools
import re
from typing import List, NamedTuple, Optional

SEMVER_RE = re.compile(r'^(\d+)\.(\d+)\.(\d+)(?:-([0-9A-Za-z.-]+))?$')
_NUMERIC_RE = re.compile(r'^\d+$')


class SemVer(NamedTuple):
    major: int
    minor: int
    patch: int
    prerelease: List[str]


def parse_semver(version: str) -> Optional[SemVer]:
    """Parse ``version`` or return None when it is not a semantic version."""
    if not isinstance(version, str):
        return None
    m = SEMVER_RE.match(version.strip())
    if not m:
        return None
    pre = m.group(4)
    return SemVer(
        major=int(m.group(1)),
        minor=int(m.group(2)),
        patch=int(m.group(3)),
        prerelease=pre.split('.') if pre else [],
    )


def _sign(diff: int) -> int:
    return (diff > 0) - (diff < 0)


def _compare_prerelease(a: List[str], b: List[str]) -> int:
    """Order prerelease identifier lists; a release (empty list) ranks highest."""
    if not a and not b:
        return 0
    if not a:
        return 1
    if not b:
        return -1

    for i in range(max(len(a), len(b))):
        if i >= len(a):
            return -1
        if i >= len(b):
            return 1
        ai, bi = a[i], b[i]
        if ai == bi:
            continue
        a_num = bool(_NUMERIC_RE.match(ai))
        b_num = bool(_NUMERIC_RE.match(bi))
        if a_num and b_num:
            diff = int(ai) - int(bi)
            if diff:
                return _sign(diff)
            continue  # "01" vs "1"
        if a_num != b_num:
            return -1 if a_num else 1
        return 1 if ai > bi else -1
    return 0


def compare_semver(a: str, b: str) -> int:
    """Return -1, 0 or 1 as ``a`` sorts before, equal to, or after ``b``."""
    pa = parse_semver(a)
    pb = parse_semver(b)
    if pa is None or pb is None:
        # Best effort for malformed input: plain string order.
        if a == b:
            return 0
        return 1 if a > b else -1

    for x, y in ((pa.major, pb.major), (pa.minor, pb.minor), (pa.patch, pb.patch)):
        if x != y:
            return 1 if x > y else -1
    return _compare_prerelease(pa.prerelease, pb.prerelease)


semver_key = functools.cmp_to_key(compare_semver)
