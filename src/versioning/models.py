"""Data models for share listings and resolved releases."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

# Listing entry type discriminator for regular files (folders use other values).
FILE_TYPE_REGULAR = 0


class Platform(str, Enum):
    """Enum for supported desktop platforms."""
    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"

    @classmethod
    def from_value(cls, value: Optional[str]) -> Optional["Platform"]:
        """Return the member for ``value`` (case-insensitive) or None."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


# Resolution order; also the key order of LatestRelease.assets.
ALL_PLATFORMS: Tuple[Platform, ...] = (Platform.WINDOWS, Platform.MACOS, Platform.LINUX)


@dataclass(frozen=True)
class ShareFile:
    """One entry of a share folder listing."""
    file_id: int
    file_name: str
    type: int = FILE_TYPE_REGULAR
    size: int = 0
    etag: str = ""
    s3_key_flag: str = ""  # opaque storage locator, only echoed back to the API

    @property
    def is_file(self) -> bool:
        return self.type == FILE_TYPE_REGULAR

    @classmethod
    def from_api(cls, item: Mapping[str, Any]) -> "ShareFile":
        """Build from a raw listing entry (``FileId``, ``FileName``, ...)."""
        name = item.get("FileName")
        raw_type = item.get("Type")
        return cls(
            file_id=int(item.get("FileId") or 0),
            file_name=name if isinstance(name, str) else "",
            type=int(raw_type) if raw_type is not None else -1,
            size=int(item.get("Size") or 0),
            etag=str(item.get("Etag") or ""),
            s3_key_flag=str(item.get("S3KeyFlag") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_id": self.file_id,
            "file_name": self.file_name,
            "type": self.type,
            "size": self.size,
            "etag": self.etag,
        }


@dataclass(frozen=True)
class ReleaseAsset:
    """The chosen downloadable artifact for one platform at one version."""
    platform: Platform
    version: str
    file: ShareFile

    def to_dict(self) -> Dict[str, Any]:
        return {
            "platform": self.platform.value,
            "version": self.version,
            "file": self.file.to_dict(),
        }


@dataclass(frozen=True)
class LatestRelease:
    """Resolution outcome handed to the UI/CLI layer.

    ``assets`` only holds platforms that have an artifact at
    ``latest_version``; ``all_files`` is the untouched input listing.
    """
    latest_version: str
    assets: Mapping[Platform, ReleaseAsset] = field(default_factory=dict)
    all_files: Tuple[ShareFile, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "assets", MappingProxyType(dict(self.assets)))
        object.__setattr__(self, "all_files", tuple(self.all_files))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LatestRelease):
            return NotImplemented
        return (
            self.latest_version == other.latest_version
            and dict(self.assets) == dict(other.assets)
            and self.all_files == other.all_files
        )

    def __hash__(self) -> int:
        return hash((self.latest_version, tuple(self.assets.items()), self.all_files))

    def asset_for(self, platform: Optional[Platform]) -> Optional[ReleaseAsset]:
        if platform is None:
            return None
        return self.assets.get(platform)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "latest_version": self.latest_version,
            "assets": {p.value: a.to_dict() for p, a in self.assets.items()},
            "file_count": len(self.all_files),
        }
