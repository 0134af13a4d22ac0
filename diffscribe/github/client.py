"""GitHub REST calls used by the pipeline: read the diff, patch the body, comment."""

from __future__ import annotations

from ..errors import RemoteError
from ..http import HttpRequest, HttpResponse, Transport, json_body, send
from ..logging import get_logger

DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"


class GitHubClient:
    """Authenticated access to the three pull request endpoints diffscribe touches."""

    DEFAULT_API_BASE = "https://api.github.com"
    DEFAULT_API_VERSION = "2022-11-28"

    def __init__(
        self,
        token: str,
        *,
        api_base: str | None = None,
        api_version: str | None = None,
        request_timeout: float | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._token = token
        self.api_base = (api_base or self.DEFAULT_API_BASE).rstrip("/")
        self.api_version = api_version or self.DEFAULT_API_VERSION
        self.request_timeout = request_timeout
        self._transport = transport or send
        self.logger = get_logger("github")

    def fetch_diff(self, repository: str, pr_number: str) -> str:
        """Return the unified diff of the pull request."""
        url = self._pull_url(repository, pr_number)
        response = self._request("GET", url, accept=DIFF_MEDIA_TYPE)
        self._expect(response, 200, "fetching diff")
        self.logger.debug("Fetched diff of %d characters from %s", len(response.text), url)
        return response.text

    def update_body(self, repository: str, pr_number: str, body: str) -> None:
        """Replace the pull request description with ``body``."""
        url = self._pull_url(repository, pr_number)
        response = self._request("PATCH", url, payload={"body": body})
        self._expect(response, 200, "updating PR body")

    def post_comment(self, repository: str, pr_number: str, body: str) -> None:
        """Create a new comment on the pull request's issue thread."""
        url = f"{self.api_base}/repos/{repository}/issues/{pr_number}/comments"
        response = self._request("POST", url, payload={"body": body})
        self._expect(response, 201, "posting comment")

    # ------------------------------------------------------------------
    # Helpers

    def _pull_url(self, repository: str, pr_number: str) -> str:
        return f"{self.api_base}/repos/{repository}/pulls/{pr_number}"

    def _request(
        self,
        method: str,
        url: str,
        *,
        accept: str | None = None,
        payload: dict[str, object] | None = None,
    ) -> HttpResponse:
        headers = {
            "Authorization": f"Bearer {self._token}",
            "X-GitHub-Api-Version": self.api_version,
        }
        if accept:
            headers["Accept"] = accept
        data = None
        if payload is not None:
            headers["Content-Type"] = "application/json"
            data = json_body(payload)

        self.logger.debug("%s %s", method, url)
        return self._transport(
            HttpRequest(
                method=method,
                url=url,
                headers=headers,
                body=data,
                timeout=self.request_timeout,
            )
        )

    @staticmethod
    def _expect(response: HttpResponse, status: int, action: str) -> None:
        if response.status != status:
            raise RemoteError(
                f"GitHub API returned an unexpected status when {action}",
                status_code=response.status,
                body=response.text,
            )


__all__ = ["DIFF_MEDIA_TYPE", "GitHubClient"]
