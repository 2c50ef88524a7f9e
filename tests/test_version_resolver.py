"""Tests for latest-release lookup and version helpers."""

import json

import pytest
import requests

from neufetch.constants import MSG_NIGHTLY_FALLBACK, NIGHTLY_VERSION
from neufetch.download import version as version_module
from neufetch.download.version import (
    VersionResolver,
    get_version_tag,
    is_update_available,
    normalize_tag,
    resolve_latest_version,
)
from neufetch.exceptions import ReleaseLookupError

pytestmark = pytest.mark.unit

BINARIES_API_URL = "https://api.github.com/repos/neutralinojs/neutralinojs/releases/latest"


class TestResolveLatestVersion:
    """resolve_latest_version never fails on network problems."""

    def test_returns_tag_without_prefix(self, mocker, mock_response):
        mock_get = mocker.patch(
            "requests.get",
            return_value=mock_response(200, json.dumps({"tag_name": "v5.2.0"})),
        )
        mock_logger = mocker.patch.object(version_module, "logger")

        assert resolve_latest_version("neutralinojs") == "5.2.0"

        assert mock_get.call_args.args[0] == BINARIES_API_URL
        assert mock_get.call_args.kwargs["headers"]["User-Agent"].startswith(
            "neufetch/"
        )
        mock_logger.info.assert_called_once_with(
            "Found the latest release tag v5.2.0 for neutralinojs..."
        )

    @pytest.mark.parametrize("status_code", [201, 203, 204, 403, 404, 500, 503])
    def test_non_200_status_falls_back_to_nightly(
        self, mocker, mock_response, status_code
    ):
        mocker.patch("requests.get", return_value=mock_response(status_code, "{}"))
        mock_logger = mocker.patch.object(version_module, "logger")

        assert resolve_latest_version("neutralinojs") == NIGHTLY_VERSION
        mock_logger.warning.assert_called_once_with(MSG_NIGHTLY_FALLBACK)

    @pytest.mark.parametrize(
        "status_code, body",
        [(203, json.dumps({"tag_name": "v9.9.9"})), (204, "")],
    )
    def test_successful_non_200_body_is_not_used(
        self, mocker, mock_response, status_code, body
    ):
        mocker.patch("requests.get", return_value=mock_response(status_code, body))

        assert resolve_latest_version("neutralinojs") == NIGHTLY_VERSION

    def test_http_500_warning_mentions_latest_version(self, mocker, mock_response):
        mocker.patch("requests.get", return_value=mock_response(500, "boom"))
        mock_logger = mocker.patch.object(version_module, "logger")

        resolve_latest_version("neutralino.js")

        message = mock_logger.warning.call_args.args[0]
        assert "Unable to fetch the latest version" in message

    @pytest.mark.parametrize(
        "error",
        [
            requests.ConnectionError("refused"),
            requests.Timeout("slow"),
            requests.exceptions.ProxyError("bad proxy"),
        ],
    )
    def test_transport_error_falls_back_to_nightly(self, mocker, error):
        mocker.patch("requests.get", side_effect=error)

        assert resolve_latest_version("neutralinojs") == NIGHTLY_VERSION

    def test_broken_response_stream_falls_back_to_nightly(self, mocker, mock_response):
        response = mock_response(200)
        type(response).text = mocker.PropertyMock(
            side_effect=requests.exceptions.ChunkedEncodingError("stream broke")
        )
        mocker.patch("requests.get", return_value=response)

        assert resolve_latest_version("neutralinojs") == NIGHTLY_VERSION

    @pytest.mark.parametrize(
        "body",
        [
            {"name": "release without tag"},
            {"tag_name": None},
            {"tag_name": "v"},
            ["not", "an", "object"],
        ],
    )
    def test_missing_tag_name_falls_back_to_nightly(
        self, mocker, mock_response, body
    ):
        mocker.patch("requests.get", return_value=mock_response(200, json.dumps(body)))
        mock_logger = mocker.patch.object(version_module, "logger")

        assert resolve_latest_version("neutralinojs") == NIGHTLY_VERSION
        mock_logger.warning.assert_called_once_with(MSG_NIGHTLY_FALLBACK)

    def test_invalid_json_body_raises(self, mocker, mock_response):
        mocker.patch("requests.get", return_value=mock_response(200, "<html>"))

        with pytest.raises(ReleaseLookupError) as exc_info:
            resolve_latest_version("neutralinojs")

        assert exc_info.value.endpoint == BINARIES_API_URL
        assert exc_info.value.status_code == 200

    def test_proxy_is_forwarded(self, mocker, mock_response):
        mock_get = mocker.patch(
            "requests.get",
            return_value=mock_response(200, json.dumps({"tag_name": "v1.0.0"})),
        )

        resolve_latest_version("neutralinojs", proxy="http://proxy.local:3128")

        assert mock_get.call_args.kwargs["proxies"] == {
            "http": "http://proxy.local:3128",
            "https": "http://proxy.local:3128",
        }


class TestVersionResolver:
    def test_client_version_is_memoized(self, mocker):
        mock_resolve = mocker.patch.object(
            version_module, "resolve_latest_version", return_value="5.2.0"
        )
        resolver = VersionResolver()

        assert resolver.latest_client_version() == "5.2.0"
        assert resolver.latest_client_version() == "5.2.0"
        mock_resolve.assert_called_once_with("neutralino.js", None)

    def test_nightly_fallback_is_memoized_too(self, mocker):
        mock_resolve = mocker.patch.object(
            version_module, "resolve_latest_version", return_value=NIGHTLY_VERSION
        )
        resolver = VersionResolver()

        resolver.latest_client_version()
        resolver.latest_client_version()

        assert resolver.cached_client_version == NIGHTLY_VERSION
        assert mock_resolve.call_count == 1

    def test_fresh_resolver_starts_without_cache(self, mocker):
        mocker.patch.object(
            version_module, "resolve_latest_version", return_value="5.2.0"
        )
        VersionResolver().latest_client_version()

        assert VersionResolver().cached_client_version is None

    def test_binary_version_is_looked_up_each_time(self, mocker):
        mock_resolve = mocker.patch.object(
            version_module, "resolve_latest_version", return_value="5.2.0"
        )
        resolver = VersionResolver(proxy="http://proxy:8080")

        resolver.latest_binary_version()
        resolver.latest_binary_version()

        assert mock_resolve.call_count == 2
        mock_resolve.assert_called_with("neutralinojs", "http://proxy:8080")


class TestVersionHelpers:
    @pytest.mark.parametrize(
        "tag, expected",
        [
            ("v5.2.0", "5.2.0"),
            ("5.2.0", "5.2.0"),
            ("release-v4.0.1", "4.0.1"),
            (" v1.0.0 ", "1.0.0"),
        ],
    )
    def test_normalize_tag(self, tag, expected):
        assert normalize_tag(tag) == expected

    def test_get_version_tag(self):
        assert get_version_tag("5.2.0") == "v5.2.0"
        assert get_version_tag(NIGHTLY_VERSION) == "nightly"

    @pytest.mark.parametrize(
        "current, latest, expected",
        [
            ("5.1.0", "5.2.0", True),
            ("5.2.0", "5.2.0", False),
            ("5.10.0", "5.9.0", False),
            ("nightly", "5.2.0", False),
            ("5.2.0", "nightly", False),
            (None, "5.2.0", False),
            ("not-a-version", "5.2.0", False),
        ],
    )
    def test_is_update_available(self, current, latest, expected):
        assert is_update_available(current, latest) is expected
