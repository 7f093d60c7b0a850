"""Unit tests for the ticket mapper."""

import copy

import pytest

from ticketsync.tickets import (
    Label,
    Ticket,
    map_comment,
    map_issue,
    parse_title,
    title_filter,
)


@pytest.mark.unit
class TestParseTitle:
    """Tests for parse_title."""

    def test_parses_namespace_name_and_title(self) -> None:
        """Bracketed prefix is split off."""
        assert parse_title("[garden-foo/myshoot] disk pressure") == (
            "garden-foo",
            "myshoot",
            "disk pressure",
        )

    def test_prefix_without_space(self) -> None:
        """Whitespace after the prefix is optional."""
        assert parse_title("[ns/nm]rest") == ("ns", "nm", "rest")

    def test_prefix_only(self) -> None:
        """A title consisting only of the prefix yields an empty title."""
        assert parse_title("[ns/nm]") == ("ns", "nm", "")

    @pytest.mark.parametrize(
        "title",
        [
            "disk pressure",
            "[Garden-Foo/myshoot] upper case is not a valid name",
            "[garden-foo] missing name",
            "prefix [ns/nm] not at start",
            "[ns/nm/extra] too many parts",
            "[ns/nm] trailing newline\n",
            "[ns/nm] first line\nsecond line",
        ],
    )
    def test_non_matching_title(self, title: str) -> None:
        """Titles not matching the whole prefix pattern are kept as they are."""
        assert parse_title(title) == (None, None, title)

    def test_missing_title(self) -> None:
        """A missing title yields nothing."""
        assert parse_title(None) == (None, None, None)


@pytest.mark.unit
def test_title_filter() -> None:
    """Title filter is the bracketed prefix."""
    assert title_filter("garden-foo", "myshoot") == "[garden-foo/myshoot]"


@pytest.mark.unit
class TestMapIssue:
    """Tests for map_issue."""

    def test_maps_metadata(self, raw_issue) -> None:
        """Metadata carries identity, timestamps, state and the Shoot."""
        ticket = map_issue(raw_issue(42))

        assert isinstance(ticket, Ticket)
        assert ticket.kind == "issue"
        assert ticket.metadata.number == 42
        assert ticket.metadata.id == 1042
        assert ticket.metadata.state == "open"
        assert ticket.metadata.created_at == "2020-01-01T00:00:00Z"
        assert ticket.metadata.updated_at == "2020-01-02T00:00:00Z"
        assert ticket.metadata.namespace == "garden-foo"
        assert ticket.metadata.name == "myshoot"

    def test_maps_data(self, raw_issue) -> None:
        """Data carries user, links, body and the stripped title."""
        ticket = map_issue(raw_issue(42))

        assert ticket.data.user.login == "octocat"
        assert ticket.data.user.avatar_url == "https://avatars.example.com/octocat"
        assert ticket.data.html_url == "https://github.com/owner/repo/issues/42"
        assert ticket.data.body == "Body of issue 42"
        assert ticket.data.comments == 0
        assert ticket.data.ticket_title == "disk pressure"

    def test_maps_labels(self, raw_issue) -> None:
        """Labels keep id, name and color only."""
        issue = raw_issue(
            1,
            labels=[
                {"id": 7, "name": "bug", "color": "ff0000", "default": True, "url": "x"},
            ],
        )

        ticket = map_issue(issue)

        assert ticket.data.labels == (Label(id=7, name="bug", color="ff0000"),)

    def test_title_without_prefix(self, raw_issue) -> None:
        """Unassigned tickets keep the raw title."""
        ticket = map_issue(raw_issue(1, title="general outage"))

        assert ticket.metadata.namespace is None
        assert ticket.metadata.name is None
        assert ticket.data.ticket_title == "general outage"

    def test_does_not_mutate_input(self, raw_issue) -> None:
        """Raw issue is left untouched."""
        issue = raw_issue(1, labels=[{"id": 1, "name": "bug", "color": "fff"}])
        original = copy.deepcopy(issue)

        map_issue(issue)

        assert issue == original

    def test_mapping_is_idempotent(self, raw_issue) -> None:
        """Mapping the same issue twice gives equal tickets."""
        issue = raw_issue(1)

        assert map_issue(issue) == map_issue(issue)

    @pytest.mark.parametrize("malformed", [{}, None, "not an issue", {"labels": None, "user": None}])
    def test_malformed_input_never_raises(self, malformed) -> None:
        """Malformed issues map to tickets with empty fields."""
        ticket = map_issue(malformed)

        assert ticket.metadata.number is None
        assert ticket.data.user.login is None
        assert ticket.data.labels == ()

    def test_to_dict_shape(self, raw_issue) -> None:
        """Serialized ticket has the dashboard's shape."""
        data = map_issue(raw_issue(5)).to_dict()

        assert data["kind"] == "issue"
        assert set(data["metadata"]) == {
            "id",
            "created_at",
            "updated_at",
            "number",
            "state",
            "namespace",
            "name",
        }
        assert data["data"]["ticketTitle"] == "disk pressure"
        assert data["data"]["user"] == {
            "login": "octocat",
            "avatar_url": "https://avatars.example.com/octocat",
        }


@pytest.mark.unit
class TestMapComment:
    """Tests for map_comment."""

    def test_maps_comment(self, raw_comment) -> None:
        """Comment carries its parent issue and Shoot."""
        comment = map_comment(42, "myshoot", "garden-foo", raw_comment(9))

        assert comment.kind == "comment"
        assert comment.metadata.id == 9
        assert comment.metadata.number == 42
        assert comment.metadata.name == "myshoot"
        assert comment.metadata.namespace == "garden-foo"
        assert comment.metadata.updated_at == "2020-01-03T00:00:00Z"
        assert comment.data.body == "a comment"
        assert comment.data.user.login == "hubot"
        assert comment.data.html_url.endswith("issuecomment-9")

    def test_malformed_comment(self) -> None:
        """Malformed comments never raise."""
        comment = map_comment(1, None, None, None)

        assert comment.metadata.number == 1
        assert comment.metadata.id is None
        assert comment.data.body is None
