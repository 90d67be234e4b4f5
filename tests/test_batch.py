"""バッチ処理ループのテスト。"""

from __future__ import annotations

import asyncio
import logging
import warnings
from typing import Any

import pytest

from bcrastat.batch import arun_batch, process_item, run_batch
from bcrastat.catalog import variable_label
from bcrastat.config import UNKNOWN_VARIABLE_LABEL
from bcrastat.errors import BcraDateParseError, BcraNodeError, BcraTransportError
from bcrastat.params import item_resolver, static_resolver
from bcrastat.types import ItemParameters, QueryRequest


class _FakeFetcher:
    def __init__(self, responses: list[Any]) -> None:
        self._responses = list(responses)
        self.queries: list[QueryRequest] = []

    def __call__(self, query: QueryRequest) -> dict[str, Any]:
        self.queries.append(query)
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def test_scenario_results_array() -> None:
    fetch = _FakeFetcher(
        [{"results": [{"fecha": "2024-01-01", "valor": 100}, {"fecha": "2024-01-02", "valor": 101}]}]
    )
    records = run_batch([{}], resolve=static_resolver(ItemParameters(id_variable=1)), fetch=fetch)

    assert len(records) == 2
    assert [r.json["valor"] for r in records] == [100, 101]
    assert all(r.json["idVariable"] == 1 for r in records)
    assert all(r.json["descripcion"] == variable_label(1) for r in records)
    assert all(r.paired_item == {"item": 0} for r in records)


def test_scenario_single_object() -> None:
    fetch = _FakeFetcher([{"fecha": "2024-01-01", "valor": 100}])
    records = run_batch([{}], resolve=static_resolver(ItemParameters(id_variable=1)), fetch=fetch)

    assert len(records) == 1
    assert records[0].json == {
        "fecha": "2024-01-01",
        "valor": 100,
        "descripcion": variable_label(1),
        "idVariable": 1,
    }


def test_scenario_continue_on_fail() -> None:
    fetch = _FakeFetcher(
        [
            {"results": [{"fecha": "2024-01-01", "valor": 100}]},
            BcraTransportError("connection reset"),
        ]
    )
    records = run_batch(
        [{}, {}],
        resolve=static_resolver(ItemParameters(id_variable=1)),
        fetch=fetch,
        continue_on_fail=True,
    )

    assert len(records) == 2
    assert records[0].paired_item == {"item": 0}
    assert records[0].json["valor"] == 100
    assert records[1].to_dict() == {"json": {"error": "connection reset"}, "pairedItem": {"item": 1}}


def test_empty_batch_yields_no_records() -> None:
    fetch = _FakeFetcher([])
    assert run_batch([], resolve=static_resolver(ItemParameters(id_variable=1)), fetch=fetch) == []
    assert fetch.queries == []


def test_empty_results_produce_no_records_but_later_items_continue() -> None:
    fetch = _FakeFetcher([{"results": []}, {"results": [{"valor": 1}]}])
    records = run_batch(
        [{}, {}],
        resolve=static_resolver(ItemParameters(id_variable=1)),
        fetch=fetch,
    )
    assert len(records) == 1
    assert records[0].paired_item == {"item": 1}


def test_unknown_variable_uses_sentinel_label(caplog: pytest.LogCaptureFixture) -> None:
    fetch = _FakeFetcher([{"results": [{"valor": 1}, {"valor": 2}]}])
    with caplog.at_level(logging.WARNING, logger="bcrastat.batch"):
        records = run_batch(
            [{}],
            resolve=static_resolver(ItemParameters(id_variable=9999)),
            fetch=fetch,
        )
    assert "9999" in caplog.text
    assert all(r.json["descripcion"] == UNKNOWN_VARIABLE_LABEL for r in records)
    assert all(r.json["idVariable"] == 9999 for r in records)


def test_date_parse_error_is_isolated_per_item() -> None:
    fetch = _FakeFetcher([{"results": [{"valor": 1}]}])
    records = run_batch(
        [{"desde": "garbage"}, {}],
        resolve=item_resolver([{"desde": "garbage"}, {}]),
        fetch=fetch,
        continue_on_fail=True,
    )

    assert records[0].paired_item == {"item": 0}
    assert "error" in records[0].json
    assert records[1].paired_item == {"item": 1}
    assert len(fetch.queries) == 1


def test_parameter_and_transport_errors_share_record_shape() -> None:
    fetch = _FakeFetcher([BcraTransportError("down")])
    items = [{"limit": "x"}, {}]
    records = run_batch(items, resolve=item_resolver(items), fetch=fetch, continue_on_fail=True)

    assert [set(r.json) for r in records] == [{"error"}, {"error"}]
    assert [r.item_index for r in records] == [0, 1]


def test_abort_wraps_error_and_keeps_partial_records() -> None:
    fetch = _FakeFetcher(
        [
            {"results": [{"valor": 1}]},
            BcraTransportError("timeout", request_url="https://example.invalid/x"),
            {"results": [{"valor": 3}]},
        ]
    )
    with pytest.raises(BcraNodeError) as exc_info:
        run_batch(
            [{}, {}, {}],
            resolve=static_resolver(ItemParameters(id_variable=1)),
            fetch=fetch,
            node_name="BCRA",
            operation="monetarias",
        )

    exc = exc_info.value
    assert exc.item_index == 1
    assert exc.node_name == "BCRA"
    assert exc.operation == "monetarias"
    assert isinstance(exc.__cause__, BcraTransportError)
    assert exc.context.request_url == "https://example.invalid/x"
    assert [r.json["valor"] for r in exc.partial_records] == [1]
    assert len(fetch.queries) == 2


def test_process_item_returns_error_as_value() -> None:
    fetch = _FakeFetcher([])
    result = process_item(0, static_resolver(ItemParameters(id_variable=1, desde="??")), fetch)

    assert not result.ok
    assert isinstance(result.error, BcraDateParseError)
    assert result.records == []


def test_query_reaches_fetcher_normalized() -> None:
    fetch = _FakeFetcher([{"results": []}])
    run_batch(
        [{}],
        resolve=static_resolver(
            ItemParameters(id_variable=4, desde="2024-03-15T10:30:00Z", hasta="", limit=0, offset=0)
        ),
        fetch=fetch,
    )
    query = fetch.queries[0]
    assert query.variable_id == 4
    assert query.start_date is not None and query.start_date.isoformat() == "2024-03-15"
    assert query.end_date is None


def test_async_batch_is_sequential_and_ordered() -> None:
    events: list[str] = []

    async def fetch(query: QueryRequest) -> dict[str, Any]:
        events.append(f"start {query.variable_id}")
        await asyncio.sleep(0)
        events.append(f"end {query.variable_id}")
        return {"results": [{"valor": query.variable_id}]}

    items = [{"idVariable": 4}, {"idVariable": 5}]

    async def run() -> list[Any]:
        return await arun_batch(items, resolve=item_resolver(items), fetch=fetch)

    records = asyncio.run(run())

    assert events == ["start 4", "end 4", "start 5", "end 5"]
    assert [(r.json["valor"], r.item_index) for r in records] == [(4, 0), (5, 1)]


def test_async_batch_continue_on_fail() -> None:
    async def fetch(query: QueryRequest) -> dict[str, Any]:
        raise BcraTransportError("unreachable")

    async def run() -> list[Any]:
        return await arun_batch(
            [{}],
            resolve=static_resolver(ItemParameters(id_variable=1)),
            fetch=fetch,
            continue_on_fail=True,
        )

    records = asyncio.run(run())
    assert records[0].to_dict() == {"json": {"error": "unreachable"}, "pairedItem": {"item": 0}}


def test_unknown_variable_is_not_an_item_failure_when_warnings_are_errors() -> None:
    fetch = _FakeFetcher([{"results": [{"valor": 1}]}])
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        records = run_batch(
            [{}],
            resolve=static_resolver(ItemParameters(id_variable=9999)),
            fetch=fetch,
            continue_on_fail=True,
        )

    assert len(records) == 1
    assert not records[0].is_error
    assert records[0].json == {
        "valor": 1,
        "descripcion": UNKNOWN_VARIABLE_LABEL,
        "idVariable": 9999,
    }
    assert records[0].paired_item == {"item": 0}
