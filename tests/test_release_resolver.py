"""Tests for latest-release resolution over a share listing."""

import pytest

from versioning.models import Platform, ShareFile
from versioning.resolver import resolve_latest_release


def build_file(name, file_id=1, type_=0):
    return ShareFile(file_id=file_id, file_name=name, type=type_, size=0, etag="", s3_key_flag="")


def test_empty_listing():
    assert resolve_latest_release([]) is None


def test_nothing_resolvable():
    files = [build_file("readme.txt", 1), build_file("App-v1.0.0.exe", 2), build_file("App-v1.0.0-Windows.msi", 3, type_=1)]
    assert resolve_latest_release(files) is None


def test_groups_same_version_assets_by_platform():
    """Windows must not be shadowed by macOS (or anything else)."""
    files = [
        build_file("AI-Code-With-v1.0.3-Linux.deb", 1),
        build_file("AI-Code-With-v1.0.3-Windows.msi", 2),
        build_file("AI-Code-With-v1.0.3-macOS.zip", 3),
    ]
    latest = resolve_latest_release(files)

    assert latest.latest_version == "1.0.3"
    assert latest.assets[Platform.WINDOWS].file.file_name == "AI-Code-With-v1.0.3-Windows.msi"
    assert latest.assets[Platform.MACOS].file.file_name == "AI-Code-With-v1.0.3-macOS.zip"
    assert latest.assets[Platform.LINUX].file.file_name == "AI-Code-With-v1.0.3-Linux.deb"
    for platform, resolved in latest.assets.items():
        assert resolved.platform is platform
        assert resolved.version == "1.0.3"


def test_picks_highest_version_and_omits_platforms_without_it():
    files = [
        build_file("App-v1.0.3-Windows.msi", 1),
        build_file("App-v1.0.3-macOS.dmg", 2),
        build_file("App-v1.1.0-Windows.msi", 3),
        build_file("App-v1.1.0-beta.1-macOS.dmg", 4),
    ]
    latest = resolve_latest_release(files)

    assert latest.latest_version == "1.1.0"
    assert latest.assets[Platform.WINDOWS].file.file_id == 3
    assert Platform.MACOS not in latest.assets
    assert Platform.LINUX not in latest.assets
    assert latest.asset_for(Platform.MACOS) is None


def test_release_outranks_its_prerelease():
    files = [build_file("App-v2.0.0-beta.3-Linux.deb", 1), build_file("App-v2.0.0-Linux.deb", 2)]
    assert resolve_latest_release(files).latest_version == "2.0.0"


def test_prefers_installer_extension_within_platform():
    files = [
        build_file("App-v1.0.3-Windows-x64.zip", 1),
        build_file("App-v1.0.3-Windows-x64.msi", 2),
        build_file("App-v1.0.3-Windows-x64.exe", 3),
    ]
    assert resolve_latest_release(files).assets[Platform.WINDOWS].file.file_id == 2


def test_all_files_passthrough_includes_unresolvable_entries():
    files = [build_file("notes.txt", 1), build_file("folder", 2, type_=1), build_file("App-v1.0.0.deb", 3)]
    latest = resolve_latest_release(files)
    assert latest.all_files == tuple(files)


def test_idempotent():
    files = [
        build_file("App-v1.0.3-Windows.msi", 1),
        build_file("App-v1.0.4-macOS.dmg", 2),
        build_file("App-v1.0.4-Linux.AppImage", 3),
    ]
    assert resolve_latest_release(files) == resolve_latest_release(files)


def test_accepts_any_iterable():
    files = (build_file(f"App-v1.0.{i}-Linux.deb", i) for i in range(3))
    latest = resolve_latest_release(files)
    assert latest.latest_version == "1.0.2"
    assert len(latest.all_files) == 3


def test_result_is_read_only():
    latest = resolve_latest_release([build_file("App-v1.0.0.deb", 1)])
    with pytest.raises(TypeError):
        latest.assets[Platform.WINDOWS] = latest.assets[Platform.LINUX]
    assert latest.to_dict()["assets"]["linux"]["file"]["file_id"] == 1
