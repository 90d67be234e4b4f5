"""レスポンス正規化処理。"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from bcrastat.types import OutputRecord


def paired_item(index: int) -> dict[str, int]:
    """入力項目への参照を作る。"""

    return {"item": index}


def annotate_row(row: Mapping[str, Any], *, label: str, variable_id: int) -> dict[str, Any]:
    """行へ ``descripcion`` と ``idVariable`` を付与した辞書を返す。

    元のキーと衝突した場合は付与側が優先される。
    """

    merged = dict(row)
    merged["descripcion"] = label
    merged["idVariable"] = variable_id
    return merged


def normalize_response(
    payload: Any,
    *,
    variable_id: int,
    label: str,
    index: int,
) -> list[OutputRecord]:
    """応答を出力レコード列へ正規化する。

    ``results`` が配列なら要素ごとに1レコード（空配列なら0件）、
    それ以外は応答全体を1レコードとして扱う。応答がオブジェクトでない場合
    （トップレベル配列など）も1レコードとなり、配列は位置をキーとする
    オブジェクトへ展開する。

    Args:
        payload: デコード済み応答。
        variable_id: 変数ID。
        label: 変数の表示名。
        index: 生成元入力項目の位置。

    Returns:
        上流配列の順序を保った出力レコード。
    """

    results = payload.get("results") if isinstance(payload, Mapping) else None
    if isinstance(results, list):
        return [
            OutputRecord(
                json=annotate_row(_as_mapping(row), label=label, variable_id=variable_id),
                paired_item=paired_item(index),
            )
            for row in results
        ]
    return [
        OutputRecord(
            json=annotate_row(_spread(payload), label=label, variable_id=variable_id),
            paired_item=paired_item(index),
        )
    ]


def error_record(exc: BaseException, *, index: int) -> OutputRecord:
    """例外をエラーレコードへ変換する。"""

    return OutputRecord(json={"error": str(exc)}, paired_item=paired_item(index))


def _spread(payload: Any) -> Mapping[str, Any]:
    if isinstance(payload, Mapping):
        return payload
    if isinstance(payload, list):
        return {str(i): value for i, value in enumerate(payload)}
    return {}


def _as_mapping(row: Any) -> Mapping[str, Any]:
    """``results`` の要素をマッピングとして返す。

    スカラー要素は ``{"data": 要素}`` へ包む。スカラーを展開すると値が
    失われるため、オブジェクト展開（値を捨てて付与キーだけ残す）とは異なる。
    """

    if isinstance(row, Mapping):
        return row
    return {"data": row}
