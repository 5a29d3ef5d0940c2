from __future__ import annotations

from erp_client_sdk.exceptions import ServerError
from erp_client_sdk.models import ListEnvelope, PaginationMeta
from erp_console.fetcher import CollectionFetcher
from erp_console.query_cache import QueryCache
from erp_console.query_keys import QueryKeys

keys = QueryKeys("warehouses")


class FakeEndpoint:
    def __init__(self) -> None:
        self.calls: list[dict] = []
        self.fail_with: Exception | None = None

    def __call__(self, params: dict) -> ListEnvelope:
        self.calls.append(params)
        if self.fail_with is not None:
            raise self.fail_with
        page = params.get("page", 1)
        return ListEnvelope(
            data=[{"id": page}],
            meta=PaginationMeta(page=page, limit=20, total=21, total_pages=2),
        )


def _fetcher(clock, endpoint: FakeEndpoint) -> CollectionFetcher:
    return CollectionFetcher(
        key_factory=keys.list,
        fetch=endpoint,
        cache=QueryCache(stale_seconds=300, now=clock),
        module="warehouses",
    )


def test_fresh_cache_hit_skips_request(clock) -> None:
    endpoint = FakeEndpoint()
    fetcher = _fetcher(clock, endpoint)
    assert fetcher.load({"page": 1})
    assert fetcher.load({"page": 1})
    assert fetcher.fetch_count == 1
    assert fetcher.data == [{"id": 1}]
    assert fetcher.meta.total_pages == 2
    assert not fetcher.is_loading


def test_new_params_fetch_again(clock) -> None:
    endpoint = FakeEndpoint()
    fetcher = _fetcher(clock, endpoint)
    fetcher.load({"page": 1})
    fetcher.load({"page": 2})
    assert [call["page"] for call in endpoint.calls] == [1, 2]
    assert fetcher.data == [{"id": 2}]


def test_stale_entry_is_refetched(clock) -> None:
    endpoint = FakeEndpoint()
    fetcher = _fetcher(clock, endpoint)
    fetcher.load({"page": 1})
    clock.advance(301)
    fetcher.load({"page": 1})
    assert fetcher.fetch_count == 2


def test_reload_bypasses_cache(clock) -> None:
    endpoint = FakeEndpoint()
    fetcher = _fetcher(clock, endpoint)
    fetcher.load({"page": 1})
    fetcher.reload()
    assert fetcher.fetch_count == 2
    assert endpoint.calls[-1] == {"page": 1}


def test_error_is_kept_and_not_retried(clock) -> None:
    endpoint = FakeEndpoint()
    endpoint.fail_with = ServerError(
        code="INTERNAL_ERROR", message="database offline", details=None, trace_id="t-9", status_code=500
    )
    fetcher = _fetcher(clock, endpoint)
    assert fetcher.load({"page": 1}) is False
    assert fetcher.fetch_count == 1
    assert fetcher.data == []
    assert fetcher.error_message == "database offline"
    assert fetcher.trace_id == "t-9"
    assert len(fetcher.cache) == 0

    endpoint.fail_with = None
    assert fetcher.reload()
    assert fetcher.error is None
    assert fetcher.data == [{"id": 1}]
