"""GitHubClient - Async access to the issues of one GitHub repository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from ticketsync.github.exceptions import GitHubError, IssueNotFoundError

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)

PER_PAGE = 100

# The search API serves at most this many results per query
SEARCH_RESULT_LIMIT = 1000


class GitHubClient:
    """Client for the GitHub REST API (Issues).

    All calls are scoped to the repository given on construction. Failures
    are raised as GitHubError and never retried.
    """

    def __init__(
        self,
        repo: str,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize GitHub client.

        Args:
            repo: GitHub repo in "owner/repo" format
            token: GitHub personal access token with repo scope
            base_url: GitHub REST API URL (for testing/enterprise)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (for testing)
        """
        self.repo = repo
        self.owner, self.repo_name = repo.split("/")
        self.token = token
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client for the REST API."""
        if self._client is None:
            headers = {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
            if self.token:
                headers["Authorization"] = f"Bearer {self.token}"
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Execute a REST request.

        Args:
            method: HTTP method
            path: Path relative to the API base URL
            params: Query parameters
            json: JSON request body

        Returns:
            Decoded JSON response

        Raises:
            IssueNotFoundError: If GitHub answers 404
            GitHubError: If the request fails
        """
        try:
            response = await self.client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            raise GitHubError(f"GitHub request {method} {path} failed: {e}") from e

        if response.status_code == 404:
            raise IssueNotFoundError(f"Not found: {method} {path}", status_code=404)
        if response.is_error:
            raise GitHubError(
                f"GitHub request {method} {path} failed: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )

        return response.json()

    def _issue_path(self, number: int) -> str:
        return f"/repos/{self.owner}/{self.repo_name}/issues/{number}"

    async def search_issues(
        self, state: str = "open", title: str | None = None
    ) -> list[dict[str, Any]]:
        """Search issues of the repository.

        Args:
            state: Issue state ("open" or "closed")
            title: Optional text that must appear in the issue title

        Returns:
            Raw issue objects, across all result pages
        """
        query = [f"repo:{self.repo}", "is:issue", f"state:{state}"]
        if title:
            query.append(f'"{title}" in:title')
        q = " ".join(query)
        logger.debug("Searching issues: %s", q)

        issues: list[dict[str, Any]] = []
        page = 1
        while True:
            data = await self._request(
                "GET",
                "/search/issues",
                params={"q": q, "per_page": PER_PAGE, "page": page},
            )
            items = data.get("items", []) if isinstance(data, dict) else []
            issues.extend(items)
            total = data.get("total_count", 0) if isinstance(data, dict) else 0
            if len(items) < PER_PAGE or page * PER_PAGE >= min(total, SEARCH_RESULT_LIMIT):
                if total > SEARCH_RESULT_LIMIT:
                    logger.warning(
                        "Search matched %d issues, only the first %d are available",
                        total,
                        SEARCH_RESULT_LIMIT,
                    )
                break
            page += 1

        logger.debug("Found %d issue(s) for query %s", len(issues), q)
        return issues

    async def get_issue(self, number: int) -> dict[str, Any]:
        """Get a single issue by number.

        Raises:
            IssueNotFoundError: If the issue doesn't exist
        """
        data: dict[str, Any] = await self._request("GET", self._issue_path(number))
        return data

    async def get_comments(self, number: int) -> list[dict[str, Any]]:
        """Get all comments of an issue, across all pages."""
        comments: list[dict[str, Any]] = []
        page = 1
        while True:
            data = await self._request(
                "GET",
                f"{self._issue_path(number)}/comments",
                params={"per_page": PER_PAGE, "page": page},
            )
            items = data if isinstance(data, list) else []
            comments.extend(items)
            if len(items) < PER_PAGE:
                break
            page += 1
        return comments

    async def create_comment(self, number: int, body: str) -> dict[str, Any]:
        """Post a comment on an issue."""
        logger.info("Commenting on issue #%s", number)
        data: dict[str, Any] = await self._request(
            "POST", f"{self._issue_path(number)}/comments", json={"body": body}
        )
        return data

    async def close_issue(self, number: int) -> dict[str, Any]:
        """Close an issue."""
        logger.info("Closing issue #%s", number)
        data: dict[str, Any] = await self._request(
            "PATCH", self._issue_path(number), json={"state": "closed"}
        )
        return data
