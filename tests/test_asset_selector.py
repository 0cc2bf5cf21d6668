"""Tests for per-platform asset preference."""

from versioning.models import Platform, ReleaseAsset, ShareFile
from versioning.selector import EXTENSION_PREFERENCE, preference_score, select_preferred


def asset(name, platform=Platform.WINDOWS, file_id=1):
    return ReleaseAsset(
        platform=platform,
        version="1.0.3",
        file=ShareFile(file_id=file_id, file_name=name),
    )


def test_msi_beats_zip():
    candidates = [asset("App-v1.0.3-Windows.zip", file_id=1), asset("App-v1.0.3-Windows.msi", file_id=2)]
    assert select_preferred(candidates, Platform.WINDOWS).file.file_id == 2


def test_dmg_beats_zip_on_macos():
    candidates = [asset("App-v1.0.3-macOS.zip", Platform.MACOS, 1), asset("App-v1.0.3.dmg", Platform.MACOS, 2)]
    assert select_preferred(candidates, Platform.MACOS).file.file_name == "App-v1.0.3.dmg"


def test_linux_order():
    candidates = [
        asset("App-v1.0.3-Linux.tar.gz", Platform.LINUX, 1),
        asset("App-v1.0.3-Linux.AppImage", Platform.LINUX, 2),
        asset("App-v1.0.3-Linux.deb", Platform.LINUX, 3),
    ]
    assert select_preferred(candidates, Platform.LINUX).file.file_id == 3


def test_ties_keep_listing_order():
    candidates = [asset("App-v1.0.3-Windows-x64.msi", file_id=7), asset("App-v1.0.3-Windows-arm64.msi", file_id=8)]
    assert select_preferred(candidates, Platform.WINDOWS).file.file_id == 7


def test_unmatched_extension_ranks_last_but_is_still_selectable():
    only = [asset("App-v1.0.3-Windows.7z")]
    assert select_preferred(only, Platform.WINDOWS) is only[0]
    assert preference_score("App-v1.0.3-Windows.7z", Platform.WINDOWS) == len(EXTENSION_PREFERENCE[Platform.WINDOWS])


def test_case_insensitive_extension():
    assert preference_score("APP-V1.0.3.MSI", Platform.WINDOWS) == 0
    assert preference_score("app-v1.0.3.APPIMAGE", Platform.LINUX) == 1


def test_empty_candidates():
    assert select_preferred([], Platform.LINUX) is None
