"""Platform inference for artifacts and for the running host.

``infer_platform`` classifies a share file by extension and name hints.
The runtime side is a swappable probe: ``detect_host_platform`` for native
processes, ``detect_from_hints`` for webview/browser style hosts that only
expose navigator-like platform strings and a user agent.
"""

from __future__ import annotations

import logging
import platform as _platform
import re
from typing import Callable, Optional

from common.logging_utils import extra_context, is_debug_enabled

from .models import Platform

logger = logging.getLogger(__name__)

PlatformProbe = Callable[[], Optional[Platform]]

_UA_WINDOWS_RE = re.compile(r'(windows|win32|win64)', re.IGNORECASE)
_UA_MACOS_RE = re.compile(r'(macintosh|mac os x|macos|darwin)', re.IGNORECASE)
_UA_LINUX_RE = re.compile(r'(linux|x11)', re.IGNORECASE)
_UA_ANDROID_RE = re.compile(r'android', re.IGNORECASE)


def infer_platform(file_name: str) -> Optional[Platform]:
    """Return the platform a release file targets, or None if unrecognized."""
    if not isinstance(file_name, str):
        return None
    lower = file_name.lower()
    if lower.endswith('.msi') or 'windows' in lower:
        return Platform.WINDOWS
    if lower.endswith(('.dmg', '.pkg')) or 'macos' in lower:
        return Platform.MACOS
    if lower.endswith(('.deb', '.appimage')) or 'linux' in lower:
        return Platform.LINUX
    return None


def detect_from_hints(
    platform_hint: str = "",
    user_agent: str = "",
    ua_data_platform: str = "",
) -> Optional[Platform]:
    """Guess the host platform from navigator-style hints.

    Explicit platform hints win over the user agent, since some webviews send
    a macOS-looking UA ("like Mac OS X") on other systems.
    """
    hint = f"{(platform_hint or '').lower()} {(ua_data_platform or '').lower()}".strip()

    if 'windows' in hint or 'win32' in hint or 'win64' in hint or hint.startswith('win'):
        return Platform.WINDOWS
    if 'mac' in hint or 'darwin' in hint:
        return Platform.MACOS
    if 'linux' in hint:
        return Platform.LINUX

    ua = user_agent or ""
    if _UA_WINDOWS_RE.search(ua):
        return Platform.WINDOWS
    if _UA_MACOS_RE.search(ua):
        return Platform.MACOS
    if _UA_LINUX_RE.search(ua) and not _UA_ANDROID_RE.search(ua):
        return Platform.LINUX
    return None


def detect_host_platform() -> Optional[Platform]:
    """Map ``platform.system()`` of this interpreter onto a Platform."""
    system = _platform.system().lower()
    if system.startswith('win') or system.startswith(('cygwin', 'msys')):
        return Platform.WINDOWS
    if system == 'darwin':
        return Platform.MACOS
    if system == 'linux':
        return Platform.LINUX
    return None


def get_runtime_platform(probe: Optional[PlatformProbe] = None) -> Optional[Platform]:
    """Run the platform probe; a failing probe yields None."""
    probe = probe or detect_host_platform
    try:
        detected = probe()
    except Exception:  # pylint: disable=broad-exception-caught
        logger.debug(
            "Platform probe failed",
            exc_info=True,
            extra=extra_context(event="platform_probe", component="platforms", outcome="error"),
        )
        return None
    if is_debug_enabled(logger):
        logger.debug(
            "Runtime platform detected",
            extra=extra_context(
                event="platform_probe",
                component="platforms",
                outcome="detected" if detected else "unknown",
                platform=detected.value if detected else None,
            ),
        )
    return detected


def is_windows(probe: Optional[PlatformProbe] = None) -> bool:
    return get_runtime_platform(probe) is Platform.WINDOWS


def is_macos(probe: Optional[PlatformProbe] = None) -> bool:
    return get_runtime_platform(probe) is Platform.MACOS


def is_linux(probe: Optional[PlatformProbe] = None) -> bool:
    return get_runtime_platform(probe) is Platform.LINUX
