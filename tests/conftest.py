"""Shared pytest fixtures and configuration."""

import json
import logging
import re
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from ticketsync.logging import MANAGED_LOGGERS


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging during a test."""
    yield
    for name in MANAGED_LOGGERS:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)


def _raw_issue(
    number: int,
    title: str = "[garden-foo/myshoot] disk pressure",
    state: str = "open",
    updated_at: str = "2020-01-02T00:00:00Z",
    labels: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    return {
        "id": 1000 + number,
        "number": number,
        "title": title,
        "state": state,
        "created_at": "2020-01-01T00:00:00Z",
        "updated_at": updated_at,
        "html_url": f"https://github.com/owner/repo/issues/{number}",
        "body": f"Body of issue {number}",
        "comments": 0,
        "user": {
            "login": "octocat",
            "avatar_url": "https://avatars.example.com/octocat",
            "type": "User",
        },
        "labels": labels or [],
        "assignee": None,
    }


def _raw_comment(
    comment_id: int,
    body: str = "a comment",
    updated_at: str = "2020-01-03T00:00:00Z",
) -> dict[str, Any]:
    return {
        "id": comment_id,
        "created_at": "2020-01-03T00:00:00Z",
        "updated_at": updated_at,
        "body": body,
        "html_url": f"https://github.com/owner/repo/issues/1#issuecomment-{comment_id}",
        "user": {"login": "hubot", "avatar_url": "https://avatars.example.com/hubot"},
    }


@pytest.fixture
def raw_issue() -> Callable[..., dict[str, Any]]:
    """Factory for raw GitHub issue objects."""
    return _raw_issue


@pytest.fixture
def raw_comment() -> Callable[..., dict[str, Any]]:
    """Factory for raw GitHub issue comment objects."""
    return _raw_comment


class FakeGitHub:
    """In-memory GitHub issues API served through httpx.MockTransport."""

    def __init__(self, repo: str = "owner/repo") -> None:
        self.repo = repo
        self.issues: dict[int, dict[str, Any]] = {}
        self.comments: dict[int, list[dict[str, Any]]] = {}
        self.requests: list[httpx.Request] = []
        self.failing: set[int] = set()

    def add_issue(self, issue: dict[str, Any]) -> None:
        self.issues[issue["number"]] = issue

    def _search(self, request: httpx.Request) -> httpx.Response:
        query = request.url.params["q"]
        state = re.search(r"state:(\w+)", query).group(1)
        title = re.search(r'"(.*)" in:title', query)
        items = [
            issue
            for issue in self.issues.values()
            if issue["state"] == state and (title is None or title.group(1) in issue["title"])
        ]
        return httpx.Response(200, json={"total_count": len(items), "items": items})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == "/search/issues":
            return self._search(request)

        match = re.fullmatch(rf"/repos/{self.repo}/issues/(\d+)(/comments)?", path)
        if match is None:
            return httpx.Response(404, json={"message": "Not Found"})
        number = int(match.group(1))
        if number in self.failing:
            return httpx.Response(500, json={"message": "Server Error"})
        if number not in self.issues:
            return httpx.Response(404, json={"message": "Not Found"})

        issue = self.issues[number]
        if match.group(2):
            comments = self.comments.setdefault(number, [])
            if request.method == "POST":
                body = json.loads(request.content)["body"]
                comment = _raw_comment(len(comments) + 1, body=body)
                comments.append(comment)
                return httpx.Response(201, json=comment)
            return httpx.Response(200, json=comments)
        if request.method == "PATCH":
            issue.update(json.loads(request.content))
        return httpx.Response(200, json=issue)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_github() -> FakeGitHub:
    """In-memory GitHub for the "owner/repo" repository."""
    return FakeGitHub()
