"""Tests for the 123pan share client."""

from unittest.mock import patch

import pytest

from common.http_client import TransportError, UpdateSourceError
from constants import Constants
from registry.pan123.client import (
    ShareApiError,
    ShareSource,
    fetch_download_url,
    fetch_share_files,
    get_share_page_url,
)
from versioning.models import ShareFile

SOURCE = ShareSource(share_key="key-1", share_pwd="pw", api_base_url="https://pan.example/b/api/")


def listing_payload(*items):
    return {"code": 0, "message": "ok", "data": {"InfoList": list(items)}}


class TestFetchShareFiles:
    """Share listing requests."""

    @patch("registry.pan123.client.get_json")
    def test_maps_entries(self, mock_get_json):
        mock_get_json.return_value = listing_payload(
            {"FileId": 11, "FileName": "App-v1.0.3-Windows.msi", "Type": 0, "Size": 42, "Etag": "e1", "S3KeyFlag": "s3-a"},
            {"FileId": 12, "FileName": "old", "Type": 1, "Size": 0, "Etag": "", "S3KeyFlag": ""},
        )

        files = fetch_share_files(SOURCE, timeout=3)

        assert files == [
            ShareFile(file_id=11, file_name="App-v1.0.3-Windows.msi", type=0, size=42, etag="e1", s3_key_flag="s3-a"),
            ShareFile(file_id=12, file_name="old", type=1, size=0, etag="", s3_key_flag=""),
        ]
        args, kwargs = mock_get_json.call_args
        assert args[0] == "https://pan.example/b/api/share/get"
        assert kwargs["params"]["shareKey"] == "key-1"
        assert kwargs["params"]["SharePwd"] == "pw"
        assert kwargs["params"]["limit"] == "100"
        assert kwargs["params"]["orderBy"] == "file_name"
        assert kwargs["headers"]["Pan-User-Real-IP"] == ""
        assert kwargs["timeout"] == 3

    @patch("registry.pan123.client.get_json")
    def test_missing_info_list_is_empty_listing(self, mock_get_json):
        mock_get_json.return_value = {"code": 0, "message": "", "data": None}
        assert fetch_share_files(SOURCE) == []

    @patch("registry.pan123.client.get_json")
    def test_api_error_code(self, mock_get_json):
        mock_get_json.return_value = {"code": 5103, "message": "share expired", "data": None}
        with pytest.raises(ShareApiError, match="share expired"):
            fetch_share_files(SOURCE)

    @patch("registry.pan123.client.get_json")
    def test_api_error_without_message(self, mock_get_json):
        mock_get_json.return_value = {"code": 1}
        with pytest.raises(UpdateSourceError, match="share listing returned an error"):
            fetch_share_files(SOURCE)

    @patch("registry.pan123.client.get_json", side_effect=TransportError("timed out"))
    def test_transport_error_propagates(self, _mock_get_json):
        with pytest.raises(TransportError):
            fetch_share_files(SOURCE)

    @patch("registry.pan123.client.get_json")
    def test_defaults_come_from_constants(self, mock_get_json):
        Constants.SHARE_KEY = "from-config"
        Constants.SHARE_API_BASE_URL = "https://cfg.example/api"
        mock_get_json.return_value = listing_payload()

        fetch_share_files()

        args, kwargs = mock_get_json.call_args
        assert args[0] == "https://cfg.example/api/share/get"
        assert kwargs["params"]["shareKey"] == "from-config"


class TestFetchDownloadUrl:
    """Download-link requests."""

    FILE = ShareFile(file_id=11, file_name="App-v1.0.3-Windows.msi", size=42, etag="e1", s3_key_flag="s3-a")

    @patch("registry.pan123.client.post_json")
    def test_joins_prefix_and_path(self, mock_post_json):
        mock_post_json.return_value = {
            "code": 0,
            "message": "ok",
            "data": {
                "dispatchList": [{"prefix": "https://cdn.cjjd19.com", "isp": "a"}, {"prefix": "https://b", "isp": "b"}],
                "downloadPath": "/dl/abc?sign=1",
                "fileId": 11,
            },
        }

        url = fetch_download_url(self.FILE, SOURCE)

        assert url == "https://cdn.cjjd19.com/dl/abc?sign=1"
        args, kwargs = mock_post_json.call_args
        assert args[0] == "https://pan.example/b/api/v2/share/download/info"
        assert kwargs["payload"] == {
            "ShareKey": "key-1",
            "FileID": 11,
            "S3keyFlag": "s3-a",
            "Size": 42,
            "Etag": "e1",
            "OrderId": "",
        }

    @patch("registry.pan123.client.post_json")
    def test_null_prefix(self, mock_post_json):
        mock_post_json.return_value = {
            "code": 0,
            "data": {"dispatchList": [{"prefix": None}], "downloadPath": "https://cdn.cjjd19.com/dl/abc"},
        }
        assert fetch_download_url(self.FILE, SOURCE) == "https://cdn.cjjd19.com/dl/abc"

    @patch("registry.pan123.client.post_json")
    def test_empty_dispatch_list(self, mock_post_json):
        mock_post_json.return_value = {"code": 0, "data": {"dispatchList": [], "downloadPath": "/x"}}
        with pytest.raises(ShareApiError, match="empty"):
            fetch_download_url(self.FILE, SOURCE)

    @patch("registry.pan123.client.post_json")
    def test_missing_download_path(self, mock_post_json):
        mock_post_json.return_value = {"code": 0, "data": {"dispatchList": [{"prefix": "https://a"}], "downloadPath": ""}}
        with pytest.raises(ShareApiError):
            fetch_download_url(self.FILE, SOURCE)

    @patch("registry.pan123.client.post_json")
    def test_api_error(self, mock_post_json):
        mock_post_json.return_value = {"code": 2, "message": "rate limited", "data": None}
        with pytest.raises(ShareApiError, match="rate limited"):
            fetch_download_url(self.FILE, SOURCE)


def test_share_page_url():
    assert get_share_page_url(ShareSource("k", "p", "https://x/api", "https://page")) == "https://page"
    Constants.SHARE_SITE_URL = "https://www.example.com"
    assert get_share_page_url(ShareSource("k", "p", "https://x/api")) == "https://www.example.com/s/k?pwd=p#"


def test_repr_hides_password():
    assert "'pw'" not in repr(SOURCE)
    assert "[REDACTED]" in repr(SOURCE)
