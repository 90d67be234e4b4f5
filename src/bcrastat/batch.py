"""入力項目バッチの逐次処理。

入力項目ごとに問い合わせ条件を組み立てて1回取得し、応答を出力レコードへ
正規化する。すべてのレコードは ``pairedItem.item`` で生成元項目を指す。
項目単位の失敗は項目境界で捕捉し、呼び出し側が continue_on_fail に従って
エラーレコード化するかバッチを中断するかを決める。
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from bcrastat.catalog import is_known_variable, variable_label
from bcrastat.config import DEFAULT_NODE_NAME, DEFAULT_OPERATION
from bcrastat.errors import BcraError, BcraNodeError
from bcrastat.normalize import error_record, normalize_response
from bcrastat.params import ParameterResolver
from bcrastat.types import ItemParameters, ItemResult, OutputRecord, QueryRequest
from bcrastat.validation import build_query_request

logger = logging.getLogger(__name__)

Fetcher = Callable[[QueryRequest], Any]
AsyncFetcher = Callable[[QueryRequest], Awaitable[Any]]


def _label_for(variable_id: int) -> str:
    if not is_known_variable(variable_id):
        logger.warning(
            "idVariable %d は既知の変数カタログに含まれていません。", variable_id
        )
    return variable_label(variable_id)


def handle_item(index: int, params: ItemParameters, fetch: Fetcher) -> list[OutputRecord]:
    """1項目を処理して出力レコードを返す。失敗は例外として送出する。"""

    query = build_query_request(params)
    payload = fetch(query)
    return normalize_response(
        payload,
        variable_id=query.variable_id,
        label=_label_for(query.variable_id),
        index=index,
    )


async def ahandle_item(
    index: int,
    params: ItemParameters,
    fetch: AsyncFetcher,
) -> list[OutputRecord]:
    """1項目を非同期に処理して出力レコードを返す。"""

    query = build_query_request(params)
    payload = await fetch(query)
    return normalize_response(
        payload,
        variable_id=query.variable_id,
        label=_label_for(query.variable_id),
        index=index,
    )


def process_item(index: int, resolve: ParameterResolver, fetch: Fetcher) -> ItemResult:
    """1項目を処理し、結果を値として返す。

    パラメータ解決から応答正規化までの例外はすべて捕捉して
    ``ItemResult.error`` に格納する。
    """

    try:
        records = handle_item(index, resolve(index), fetch)
    except Exception as exc:  # noqa: BLE001
        return ItemResult(index=index, error=exc)
    return ItemResult(index=index, records=records)


async def aprocess_item(index: int, resolve: ParameterResolver, fetch: AsyncFetcher) -> ItemResult:
    """1項目を非同期に処理し、結果を値として返す。"""

    try:
        records = await ahandle_item(index, resolve(index), fetch)
    except Exception as exc:  # noqa: BLE001
        return ItemResult(index=index, error=exc)
    return ItemResult(index=index, records=records)


def _collect(
    result: ItemResult,
    output: list[OutputRecord],
    *,
    continue_on_fail: bool,
    node_name: str,
    operation: str,
) -> None:
    """項目結果を出力列へ追加する。中断時は例外を送出する。"""

    if result.error is None:
        logger.debug("item %d produced %d record(s)", result.index, len(result.records))
        output.extend(result.records)
        return

    exc = result.error
    if continue_on_fail:
        logger.warning("item %d failed, emitting error record: %s", result.index, exc)
        output.append(error_record(exc, index=result.index))
        return

    raise BcraNodeError(
        str(exc),
        node_name=node_name,
        operation=operation,
        item_index=result.index,
        partial_records=output,
        context=exc.context if isinstance(exc, BcraError) else None,
    ) from exc


def run_batch(
    items: Sequence[Any],
    *,
    resolve: ParameterResolver,
    fetch: Fetcher,
    continue_on_fail: bool = False,
    node_name: str = DEFAULT_NODE_NAME,
    operation: str = DEFAULT_OPERATION,
) -> list[OutputRecord]:
    """入力項目を先頭から順に1件ずつ処理する。

    Args:
        items: 入力項目。件数だけを使う。
        resolve: 項目位置から解決済みパラメータを返す関数。
        fetch: 問い合わせ条件からデコード済み応答を返す関数。
        continue_on_fail: 失敗項目をエラーレコードにして継続するか。
        node_name: 中断時の例外に付与するノード名。
        operation: 中断時の例外に付与する操作名。

    Returns:
        入力順を保った出力レコード列。

    Raises:
        BcraNodeError: continue_on_fail 無効時に項目が失敗した場合。
            それまでのレコードは ``partial_records`` に残る。
    """

    output: list[OutputRecord] = []
    for index in range(len(items)):
        result = process_item(index, resolve, fetch)
        _collect(
            result,
            output,
            continue_on_fail=continue_on_fail,
            node_name=node_name,
            operation=operation,
        )
    return output


async def arun_batch(
    items: Sequence[Any],
    *,
    resolve: ParameterResolver,
    fetch: AsyncFetcher,
    continue_on_fail: bool = False,
    node_name: str = DEFAULT_NODE_NAME,
    operation: str = DEFAULT_OPERATION,
) -> list[OutputRecord]:
    """``run_batch`` の非同期版。項目i+1の要求は項目iの処理完了後に送る。"""

    output: list[OutputRecord] = []
    for index in range(len(items)):
        result = await aprocess_item(index, resolve, fetch)
        _collect(
            result,
            output,
            continue_on_fail=continue_on_fail,
            node_name=node_name,
            operation=operation,
        )
    return output
