"""GitHub Issues client - the remote source of tickets."""

from ticketsync.github.client import GitHubClient
from ticketsync.github.exceptions import GitHubError, IssueNotFoundError

__all__ = [
    "GitHubClient",
    "GitHubError",
    "IssueNotFoundError",
]
