"""Version extraction from release artifact file names.

Share file names look like ``AppName-v1.0.3-Windows-x64.msi``: the version is
followed by platform/architecture tags and the file extension. Those trailing
parts are not SemVer prerelease identifiers, so the raw ``v...`` capture is
cleaned by an ordered list of suffix rules. Each rule only fires when its
pattern matches, which leaves an already clean version untouched.
"""

import re
from typing import List, Optional, Pattern, Tuple

VERSION_IN_FILENAME_RE = re.compile(r'\bv(\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?)\b', re.IGNORECASE)

# (pattern, replacement) pairs applied in order.
SUFFIX_RULES: List[Tuple[Pattern[str], str]] = [
    # Compound extension first, otherwise ".gz" alone would never match below.
    (re.compile(r'\.tar\.gz$', re.IGNORECASE), ''),
    (re.compile(r'\.(msi|exe|zip|dmg|pkg|deb|appimage)$', re.IGNORECASE), ''),
    # Platform tag plus any architecture qualifiers, e.g. "-Windows-x64".
    (re.compile(r'-(windows|macos|linux)(?:[-._][0-9a-z]+)*$', re.IGNORECASE), ''),
]


def strip_suffixes(raw: str, rules: Optional[List[Tuple[Pattern[str], str]]] = None) -> str:
    """Apply each suffix rule to ``raw`` in order."""
    value = raw
    for pattern, replacement in rules if rules is not None else SUFFIX_RULES:
        if pattern.search(value):
            value = pattern.sub(replacement, value, count=1)
    return value


def extract_version(file_name: str) -> Optional[str]:
    """Return the semantic version embedded in ``file_name``, or None.

    >>> extract_version("App-v1.0.3-Windows-x64.msi")
    '1.0.3'
    """
    if not isinstance(file_name, str) or not file_name:
        return None
    m = VERSION_IN_FILENAME_RE.search(file_name)
    if not m or not m.group(1):
        return None
    return strip_suffixes(m.group(1))
