"""Plane REST API client for Plane PM."""

import json
import logging
import socket
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Any, Optional, TYPE_CHECKING

from .config import DEFAULT_API_KEY_ENV, DEFAULT_BASE_URL, DEFAULT_WORKSPACE
from .errors import AuthenticationError, TransportError, create_error

if TYPE_CHECKING:
    from .config import PlaneContext

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


@dataclass
class PlaneConfig:
    """Plane API configuration."""
    api_key: Optional[str]
    base_url: str = DEFAULT_BASE_URL
    workspace: str = DEFAULT_WORKSPACE
    api_key_env: str = DEFAULT_API_KEY_ENV

    @classmethod
    def from_context(cls, context: "PlaneContext") -> "PlaneConfig":
        """Create PlaneConfig from a PlaneContext."""
        return cls(
            api_key=context.api_key,
            base_url=context.base_url,
            workspace=context.workspace,
            api_key_env=context.api_key_env,
        )


class PlaneClient:
    """Client for the Plane REST API, scoped to one workspace."""

    def __init__(self, config: PlaneConfig, timeout: float = DEFAULT_TIMEOUT):
        self.config = config
        self.timeout = timeout

    @classmethod
    def from_context(cls, context: "PlaneContext") -> "PlaneClient":
        return cls(PlaneConfig.from_context(context))

    def _url(self, endpoint: str, params: Optional[dict] = None) -> str:
        url = f"{self.config.base_url}/workspaces/{self.config.workspace}{endpoint}"
        if params:
            query = urllib.parse.urlencode(
                {k: v for k, v in params.items() if v is not None}
            )
            if query:
                url = f"{url}?{query}"
        return url

    def _request(
        self,
        method: str,
        endpoint: str,
        body: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Any:
        """Make a JSON request to the Plane API.

        Returns the parsed response body; a 204 response yields an empty dict.
        Raises a PlaneError subclass for any non-2xx response.
        """
        if not self.config.api_key:
            raise AuthenticationError(
                f"{self.config.api_key_env} environment variable is not set",
                suggestions=[f"Set: export {self.config.api_key_env}=<your Plane API key>"],
            )

        url = self._url(endpoint, params)
        data = json.dumps(body).encode("utf-8") if body is not None else None

        req = urllib.request.Request(
            url,
            data=data,
            method=method,
            headers={
                "X-API-Key": self.config.api_key,
                "Content-Type": "application/json",
            },
        )

        logger.debug("%s %s", method, url)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                if response.status == 204:
                    return {}
                return _parse_body(response.read())
        except urllib.error.HTTPError as e:
            error_body = _parse_body(e.read())
            logger.warning("Plane API %s %s failed with status %s", method, url, e.code)
            raise create_error(e.code, error_body) from e
        except urllib.error.URLError as e:
            raise TransportError(f"Request to {url} failed: {e.reason}") from e
        except (socket.timeout, TimeoutError) as e:
            raise TransportError(f"Request to {url} timed out") from e

    # Issues

    def list_issues(self, project_id: str, **params: Any) -> Any:
        """List a project's issues. The response may be a list or a results envelope."""
        return self._request("GET", f"/projects/{project_id}/issues/", params=params)

    def get_issue(self, project_id: str, issue_id: str) -> dict:
        return self._request("GET", f"/projects/{project_id}/issues/{issue_id}/")

    def create_issue(self, project_id: str, body: dict) -> dict:
        return self._request("POST", f"/projects/{project_id}/issues/", body=body)

    def update_issue(self, project_id: str, issue_id: str, body: dict) -> dict:
        return self._request(
            "PATCH", f"/projects/{project_id}/issues/{issue_id}/", body=body
        )

    def delete_issue(self, project_id: str, issue_id: str) -> Any:
        return self._request("DELETE", f"/projects/{project_id}/issues/{issue_id}/")

    # Comments

    def list_comments(self, project_id: str, issue_id: str) -> Any:
        return self._request(
            "GET", f"/projects/{project_id}/issues/{issue_id}/comments/"
        )

    def add_comment(self, project_id: str, issue_id: str, comment_html: str) -> dict:
        return self._request(
            "POST",
            f"/projects/{project_id}/issues/{issue_id}/comments/",
            body={"comment_html": comment_html},
        )

    # Links

    def list_links(self, project_id: str, issue_id: str) -> Any:
        return self._request("GET", f"/projects/{project_id}/issues/{issue_id}/links/")

    def add_link(self, project_id: str, issue_id: str, title: str, url: str) -> dict:
        return self._request(
            "POST",
            f"/projects/{project_id}/issues/{issue_id}/links/",
            body={"title": title, "url": url},
        )


def _parse_body(raw: bytes) -> Any:
    if not raw:
        return None
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
