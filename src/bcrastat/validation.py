"""入力正規化と送信前バリデーション。"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Any

from bcrastat.errors import BcraDateParseError, BcraValidationError
from bcrastat.types import ItemParameters, QueryRequest

_DATE_FORMATS = ("%Y/%m/%d", "%Y%m%d")


def normalize_variable_id(value: Any) -> int:
    """変数IDを正規化する。

    Args:
        value: 入力値。整数または整数表記の文字列。

    Returns:
        正の整数の変数ID。

    Raises:
        BcraValidationError: 未指定、整数でない、または正でない場合。
    """

    if value is None or value == "":
        raise BcraValidationError(
            "idVariable が指定されていません。",
            validation_code="missing_variable",
        )
    if isinstance(value, bool):
        raise BcraValidationError(
            "idVariable が不正です。", validation_code="invalid_variable"
        )
    if isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    else:
        try:
            number = int(str(value).strip())
        except ValueError as exc:
            raise BcraValidationError(
                "idVariable が不正です。", validation_code="invalid_variable"
            ) from exc
    if number < 1:
        raise BcraValidationError(
            "idVariable は1以上を指定してください。",
            validation_code="invalid_variable",
        )
    return number


def parse_query_date(value: str | date | None, *, param_name: str) -> date | None:
    """日付らしき入力を暦日へ変換する。

    時刻付きの値は日付部分へ切り詰める。タイムゾーン付きの値はUTCへ
    変換してから切り詰める。

    Args:
        value: 入力値。空値は未指定扱い。
        param_name: パラメータ名（エラーメッセージ用）。

    Returns:
        暦日。未指定時はNone。

    Raises:
        BcraDateParseError: 解析できない場合。
    """

    if not value:
        return None
    if isinstance(value, datetime):
        return _datetime_to_date(value)
    if isinstance(value, date):
        return value

    text = str(value).strip()
    try:
        return _datetime_to_date(datetime.fromisoformat(text))
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise BcraDateParseError(f"{param_name} の日付を解析できません: {value!r}")


def _datetime_to_date(value: datetime) -> date:
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    return value.date()


def format_query_date(value: date) -> str:
    """暦日を ``YYYY-MM-DD`` へ整形する。"""

    return value.isoformat()


def build_query_request(params: ItemParameters) -> QueryRequest:
    """解決済みパラメータから問い合わせ条件を組み立てる。"""

    return QueryRequest(
        variable_id=normalize_variable_id(params.id_variable),
        start_date=parse_query_date(params.desde, param_name="desde"),
        end_date=parse_query_date(params.hasta, param_name="hasta"),
        limit=params.limit,
        offset=params.offset,
    )


def build_query_params(query: QueryRequest) -> dict[str, Any]:
    """問い合わせ条件をクエリ文字列用の辞書へ変換する。

    ``limit`` は真値のときだけ送る（0は省略される）。
    ``offset`` は設定されていれば0でも送る。
    """

    params: dict[str, Any] = {}
    if query.start_date:
        params["desde"] = format_query_date(query.start_date)
    if query.end_date:
        params["hasta"] = format_query_date(query.end_date)
    if query.limit:
        params["limit"] = query.limit
    if query.offset is not None:
        params["offset"] = query.offset
    return params
