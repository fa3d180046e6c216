"""
Tests for collection_streamer — paged iteration and safe counting.
"""

import pytest
from unittest.mock import Mock, patch
import sys, os

from google.api_core.exceptions import ServiceUnavailable

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from admin_lib.collection_streamer import stream_collection, count_collection_safe


def _docs(n):
    return [Mock(id=f"d{i}") for i in range(n)]


# ── stream_collection ───────────────────────────────────────

class TestStreamCollection:

    def test_single_short_page(self, mock_db):
        page = _docs(3)
        ordered = mock_db.collection.return_value.order_by.return_value
        ordered.limit.return_value.get.return_value = page

        pages = list(stream_collection(mock_db, "products", batch_size=10))

        assert pages == [page]
        ordered.start_after.assert_not_called()

    def test_continues_after_last_doc(self, mock_db):
        first, second = _docs(2), _docs(1)
        ordered = mock_db.collection.return_value.order_by.return_value
        ordered.limit.return_value.get.return_value = first
        ordered.start_after.return_value.limit.return_value.get.return_value = second

        pages = list(stream_collection(mock_db, "products", batch_size=2))

        assert pages == [first, second]
        ordered.start_after.assert_called_once_with(first[-1])
        mock_db.collection.return_value.order_by.assert_called_with("__name__")

    def test_empty_collection(self, mock_db):
        ordered = mock_db.collection.return_value.order_by.return_value
        ordered.limit.return_value.get.return_value = []

        assert list(stream_collection(mock_db, "products")) == []


# ── count_collection_safe ───────────────────────────────────

class TestCountCollectionSafe:

    def test_uses_aggregation(self, mock_db):
        agg = Mock(value=42)
        mock_db.collection.return_value.count.return_value.get.return_value = [[agg]]

        assert count_collection_safe(mock_db, "products") == 42
        mock_db.collection.return_value.count.assert_called_once_with(alias="total")

    def test_empty_aggregation_result(self, mock_db):
        mock_db.collection.return_value.count.return_value.get.return_value = []

        assert count_collection_safe(mock_db, "products") == 0

    @patch("admin_lib.collection_streamer.stream_collection")
    def test_falls_back_to_streaming(self, mock_stream, mock_db):
        mock_db.collection.return_value.count.return_value.get.side_effect = ServiceUnavailable("down")
        mock_stream.return_value = [_docs(1000), _docs(17)]

        assert count_collection_safe(mock_db, "products") == 1017
        mock_stream.assert_called_once_with(mock_db, "products", batch_size=1000)

    def test_other_errors_propagate(self, mock_db):
        mock_db.collection.return_value.count.return_value.get.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            count_collection_safe(mock_db, "products")
