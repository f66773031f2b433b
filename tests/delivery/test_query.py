"""Tests for message filtering and pagination."""
import pytest

from src.delivery.errors import InvalidArgumentError
from src.delivery.models import DispatchRequest, MessageRecord, MessageStatus
from src.delivery.query import filter_messages, paginate, query_messages
from tests.conftest import make_service

DELIVER = 0.0
FAIL = 0.999


def _records() -> list[MessageRecord]:
    """Five delivered and three failed messages across two categories."""
    service = make_service([DELIVER] * 5 + [FAIL] * 3)
    categories = ["orders", "marketing", "orders", None, "orders", "orders", "marketing", "Orders"]
    for category in categories:
        service.send_message(DispatchRequest(
            recipients=("a@x.com",), content="Hi", channels=("sms",), category=category,
        ))
    return service.store.list_all()


class TestFilterMessages:
    def test_no_filters_keeps_everything(self) -> None:
        records = _records()
        assert filter_messages(records) == records
        assert filter_messages(records, status="", category="") == records

    def test_status_filter(self) -> None:
        result = filter_messages(_records(), status="delivered")
        assert len(result) == 5
        assert all(r.status is MessageStatus.DELIVERED for r in result)

    def test_status_enum_filter(self) -> None:
        assert len(filter_messages(_records(), status=MessageStatus.FAILED)) == 3

    def test_category_is_case_sensitive(self) -> None:
        assert len(filter_messages(_records(), category="orders")) == 4
        assert len(filter_messages(_records(), category="Orders")) == 1

    def test_filters_compose_with_and(self) -> None:
        result = filter_messages(_records(), status="failed", category="orders")
        assert len(result) == 1
        assert result[0].category == "orders"
        assert result[0].status is MessageStatus.FAILED

    def test_unknown_status_matches_nothing(self) -> None:
        assert filter_messages(_records(), status="DELIVERED") == []


class TestPaginate:
    @pytest.mark.parametrize("total", [0, 1, 7, 20])
    @pytest.mark.parametrize("size", [1, 3, 20])
    def test_page_lengths(self, total: int, size: int) -> None:
        items = list(range(total))
        for page in range(total // size + 2):
            start = page * size
            result = paginate(items, page, size)
            if start >= total:
                assert result == []
            else:
                assert len(result) == min(size, total - start)
                assert result == items[start:start + size]

    def test_pages_cover_items_once(self) -> None:
        items = list(range(10))
        pages = [paginate(items, p, 3) for p in range(4)]
        assert [i for page in pages for i in page] == items

    def test_invalid_arguments(self) -> None:
        with pytest.raises(InvalidArgumentError, match="page"):
            paginate([1], -1, 5)
        with pytest.raises(InvalidArgumentError, match="size"):
            paginate([1], 0, 0)


def test_query_delivered_first_page() -> None:
    result = query_messages(_records(), status="delivered", page=0, size=20)
    assert len(result) == 5
    assert {r.status for r in result} == {MessageStatus.DELIVERED}


def test_query_past_last_page_is_empty() -> None:
    assert query_messages(_records(), status="failed", page=1, size=3) == []
