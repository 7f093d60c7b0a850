"""Custom exceptions for the GitHub client."""


class GitHubError(Exception):
    """Base exception for GitHub API errors.

    Attributes:
        status_code: HTTP status code of the failed response, if any.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class IssueNotFoundError(GitHubError):
    """Issue with given number does not exist."""
