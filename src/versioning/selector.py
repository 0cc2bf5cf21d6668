"""Per-platform asset preference."""

from typing import Dict, List, Optional, Sequence

from .models import Platform, ReleaseAsset

# Lowest index wins.
EXTENSION_PREFERENCE: Dict[Platform, List[str]] = {
    Platform.WINDOWS: [".msi", ".exe", ".zip"],
    Platform.MACOS: [".dmg", ".zip"],
    Platform.LINUX: [".deb", ".appimage", ".tar.gz"],
}


def preference_score(file_name: str, platform: Platform) -> int:
    """Index of the first preferred extension ``file_name`` ends with.

    Names matching none of them score ``len(preference)``.
    """
    preference = EXTENSION_PREFERENCE[platform]
    lower = file_name.lower()
    for idx, ext in enumerate(preference):
        if lower.endswith(ext):
            return idx
    return len(preference)


def select_preferred(
    candidates: Sequence[ReleaseAsset], platform: Platform
) -> Optional[ReleaseAsset]:
    """Pick the preferred asset among same-platform, same-version candidates.

    ``sorted`` is stable, so equally scored candidates keep listing order.
    """
    if not candidates:
        return None
    ranked = sorted(candidates, key=lambda a: preference_score(a.file.file_name, platform))
    return ranked[0]
