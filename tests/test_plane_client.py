"""Tests for the Plane REST client."""

import io
import json
import urllib.error

import pytest
from unittest.mock import MagicMock, patch

from plane_pm.config import PlaneContext
from plane_pm.errors import (
    AuthenticationError,
    NotFoundError,
    PlaneError,
    TransportError,
    ValidationError,
)
from plane_pm.plane_client import PlaneClient, PlaneConfig


def _response(body, status=200):
    """Build a mock urlopen() context manager."""
    response = MagicMock()
    response.status = status
    response.read.return_value = json.dumps(body).encode("utf-8") if body is not None else b""
    response.__enter__.return_value = response
    return response


def _http_error(code, body):
    raw = json.dumps(body).encode("utf-8") if body is not None else b""
    return urllib.error.HTTPError("https://plane.test", code, "error", {}, io.BytesIO(raw))


@pytest.fixture
def client():
    return PlaneClient(
        PlaneConfig(api_key="key-123", base_url="https://plane.test/api/v1", workspace="acme")
    )


class TestPlaneConfig:
    def test_from_context(self):
        context = PlaneContext(
            base_url="https://x/api/v1", workspace="ws", api_key="k", api_key_env="MY_KEY"
        )
        config = PlaneConfig.from_context(context)
        assert config.api_key == "k"
        assert config.base_url == "https://x/api/v1"
        assert config.workspace == "ws"
        assert config.api_key_env == "MY_KEY"


class TestRequest:
    """Tests for PlaneClient._request."""

    @patch("plane_pm.plane_client.urllib.request.urlopen")
    def test_builds_workspace_url_and_headers(self, mock_urlopen, client):
        mock_urlopen.return_value = _response([])

        client._request("GET", "/projects/p1/issues/")

        request = mock_urlopen.call_args[0][0]
        assert request.full_url == "https://plane.test/api/v1/workspaces/acme/projects/p1/issues/"
        assert request.get_method() == "GET"
        assert request.get_header("X-api-key") == "key-123"
        assert request.get_header("Content-type") == "application/json"
        assert request.data is None
        assert mock_urlopen.call_args[1]["timeout"] == 30.0

    @patch("plane_pm.plane_client.urllib.request.urlopen")
    def test_sends_json_body(self, mock_urlopen, client):
        mock_urlopen.return_value = _response({"id": "x"})

        result = client._request("POST", "/projects/p1/issues/", body={"name": "New"})

        request = mock_urlopen.call_args[0][0]
        assert request.get_method() == "POST"
        assert json.loads(request.data) == {"name": "New"}
        assert result == {"id": "x"}

    @patch("plane_pm.plane_client.urllib.request.urlopen")
    def test_query_params_skip_none(self, mock_urlopen, client):
        mock_urlopen.return_value = _response([])

        client._request("GET", "/projects/p1/issues/", params={"per_page": 10, "state": None})

        request = mock_urlopen.call_args[0][0]
        assert request.full_url.endswith("/projects/p1/issues/?per_page=10")

    @patch("plane_pm.plane_client.urllib.request.urlopen")
    def test_204_returns_empty_dict(self, mock_urlopen, client):
        mock_urlopen.return_value = _response(None, status=204)
        assert client._request("DELETE", "/projects/p1/issues/u1/") == {}

    @patch("plane_pm.plane_client.urllib.request.urlopen")
    def test_empty_body_returns_none(self, mock_urlopen, client):
        mock_urlopen.return_value = _response(None, status=200)
        assert client._request("DELETE", "/projects/p1/issues/u1/") is None

    @patch("plane_pm.plane_client.urllib.request.urlopen")
    def test_missing_api_key_is_auth_error(self, mock_urlopen):
        """No key means no request at all."""
        client = PlaneClient(PlaneConfig(api_key=None))

        with pytest.raises(AuthenticationError) as exc_info:
            client._request("GET", "/projects/p1/issues/")

        assert "PLANE_API_KEY" in str(exc_info.value)
        assert exc_info.value.status == 401
        assert exc_info.value.suggestions
        mock_urlopen.assert_not_called()

    @patch("plane_pm.plane_client.urllib.request.urlopen")
    @pytest.mark.parametrize("code,error_type", [
        (401, AuthenticationError),
        (404, NotFoundError),
        (422, ValidationError),
    ])
    def test_http_errors_are_classified(self, mock_urlopen, code, error_type, client):
        mock_urlopen.side_effect = _http_error(code, {"detail": "nope"})

        with pytest.raises(error_type) as exc_info:
            client._request("GET", "/projects/p1/issues/")

        assert exc_info.value.status == code
        assert exc_info.value.message == "nope"

    @patch("plane_pm.plane_client.urllib.request.urlopen")
    def test_other_http_error_keeps_status_and_body(self, mock_urlopen, client):
        mock_urlopen.side_effect = _http_error(500, {"detail": "boom"})

        with pytest.raises(PlaneError) as exc_info:
            client._request("GET", "/projects/p1/issues/")

        assert exc_info.value.status == 500
        assert exc_info.value.response == {"detail": "boom"}

    @patch("plane_pm.plane_client.urllib.request.urlopen")
    def test_http_error_with_non_json_body(self, mock_urlopen, client):
        error = urllib.error.HTTPError(
            "https://plane.test", 502, "Bad Gateway", {}, io.BytesIO(b"<html>")
        )
        mock_urlopen.side_effect = error

        with pytest.raises(PlaneError) as exc_info:
            client._request("GET", "/projects/p1/issues/")

        assert exc_info.value.status == 502
        assert exc_info.value.response is None
        assert exc_info.value.message == "Plane API error"

    @patch("plane_pm.plane_client.urllib.request.urlopen")
    def test_connection_failure_is_transport_error(self, mock_urlopen, client):
        mock_urlopen.side_effect = urllib.error.URLError("connection refused")

        with pytest.raises(TransportError, match="connection refused"):
            client._request("GET", "/projects/p1/issues/")

    @patch("plane_pm.plane_client.urllib.request.urlopen")
    def test_timeout_is_transport_error(self, mock_urlopen, client):
        mock_urlopen.side_effect = TimeoutError()

        with pytest.raises(TransportError, match="timed out"):
            client._request("GET", "/projects/p1/issues/")


class TestEndpoints:
    """Tests for endpoint helpers."""

    @pytest.fixture
    def request_mock(self, client):
        with patch.object(client, "_request", return_value={}) as mock_request:
            yield mock_request

    def test_list_issues_passes_params(self, client, request_mock):
        client.list_issues("p1", per_page=5, priority="high")
        request_mock.assert_called_once_with(
            "GET", "/projects/p1/issues/", params={"per_page": 5, "priority": "high"}
        )

    def test_update_issue_uses_patch(self, client, request_mock):
        client.update_issue("p1", "u1", {"name": "x"})
        request_mock.assert_called_once_with(
            "PATCH", "/projects/p1/issues/u1/", body={"name": "x"}
        )

    def test_delete_issue(self, client, request_mock):
        client.delete_issue("p1", "u1")
        request_mock.assert_called_once_with("DELETE", "/projects/p1/issues/u1/")

    def test_comment_endpoints(self, client, request_mock):
        client.list_comments("p1", "u1")
        client.add_comment("p1", "u1", "<p>Hi</p>")
        assert request_mock.call_args_list[0].args == ("GET", "/projects/p1/issues/u1/comments/")
        assert request_mock.call_args_list[1].kwargs == {"body": {"comment_html": "<p>Hi</p>"}}

    def test_link_endpoints(self, client, request_mock):
        client.list_links("p1", "u1")
        client.add_link("p1", "u1", "Monday", "https://monday.com/1")
        assert request_mock.call_args_list[0].args == ("GET", "/projects/p1/issues/u1/links/")
        assert request_mock.call_args_list[1].args == ("POST", "/projects/p1/issues/u1/links/")
        assert request_mock.call_args_list[1].kwargs == {
            "body": {"title": "Monday", "url": "https://monday.com/1"}
        }
