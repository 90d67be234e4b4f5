"""出力レコード列の変換。"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from bcrastat.types import OutputRecord


def records_to_host(records: Iterable[OutputRecord]) -> list[dict[str, Any]]:
    """ホスト形式（``{"json": ..., "pairedItem": ...}``）の一覧へ変換する。"""

    return [record.to_dict() for record in records]


def records_to_rows(records: Iterable[OutputRecord]) -> list[dict[str, Any]]:
    """表形式向けの平坦な行へ変換する。

    生成元項目の位置は ``pairedItem`` 列に入る。
    """

    rows: list[dict[str, Any]] = []
    for record in records:
        row = dict(record.json)
        row["pairedItem"] = record.item_index
        rows.append(row)
    return rows


def records_to_pandas(records: Iterable[OutputRecord]) -> Any:
    """pandas.DataFrameへ変換する。"""

    try:
        import pandas as pd
    except ImportError as exc:
        raise RuntimeError("pandas が必要です。pip install 'bcrastat[pandas]' を実行してください。") from exc
    return pd.DataFrame(records_to_rows(records))
