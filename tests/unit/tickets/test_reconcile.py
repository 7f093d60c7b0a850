"""Unit tests for reconcile."""

import pytest

from ticketsync.tickets import reconcile


def _key(item: dict) -> int:
    return item["id"]


@pytest.mark.unit
class TestReconcile:
    """Tests for reconcile."""

    def test_splits_added_updated_removed(self) -> None:
        """Items are classified by key."""
        cached = [{"id": 1}, {"id": 2}, {"id": 3}]
        fetched = [{"id": 2, "v": "new"}, {"id": 4}]

        result = reconcile(cached, fetched, key=_key)

        assert result.added == [{"id": 4}]
        assert result.updated == [{"id": 2, "v": "new"}]
        assert result.removed == [{"id": 1}, {"id": 3}]
        assert result.upserts == [{"id": 4}, {"id": 2, "v": "new"}]

    def test_empty_cache(self) -> None:
        """Everything fetched is new."""
        result = reconcile([], [{"id": 1}], key=_key)

        assert result.added == [{"id": 1}]
        assert result.updated == []
        assert result.removed == []

    def test_empty_fetch_removes_everything(self) -> None:
        """Nothing fetched means everything cached is stale."""
        result = reconcile([{"id": 1}, {"id": 2}], [], key=_key)

        assert result.removed == [{"id": 1}, {"id": 2}]
        assert result.upserts == []

    def test_accepts_iterators(self) -> None:
        """Generators are consumed once."""
        result = reconcile(iter([{"id": 1}]), (x for x in [{"id": 1}]), key=_key)

        assert result.updated == [{"id": 1}]
        assert result.removed == []
