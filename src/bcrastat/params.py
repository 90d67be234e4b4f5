"""ノードパラメータ宣言と入力項目ごとのパラメータ解決。"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from bcrastat.catalog import variable_options
from bcrastat.config import DEFAULT_LIMIT, DEFAULT_NODE_NAME, DEFAULT_OFFSET, DEFAULT_OPERATION
from bcrastat.errors import BcraValidationError
from bcrastat.types import ItemParameters, ParameterSpec

ParameterResolver = Callable[[int], ItemParameters]

NODE_NAME = DEFAULT_NODE_NAME
OPERATION = DEFAULT_OPERATION

PARAMETERS: tuple[ParameterSpec, ...] = (
    ParameterSpec(
        name="idVariable",
        display_name="Variable",
        type="options",
        default=1,
        description="Select the statistical variable to query",
        required=True,
        options=tuple(variable_options()),
    ),
    ParameterSpec(
        name="desde",
        display_name="Start Date",
        type="dateTime",
        default="",
        description=(
            "Start date for the query (YYYY-MM-DD). If empty, returns the last 100 records."
        ),
    ),
    ParameterSpec(
        name="hasta",
        display_name="End Date",
        type="dateTime",
        default="",
        description="End date for the query (YYYY-MM-DD)",
    ),
    ParameterSpec(
        name="limit",
        display_name="Limit",
        type="number",
        default=DEFAULT_LIMIT,
        description="Max number of results to return",
        min_value=1,
    ),
    ParameterSpec(
        name="offset",
        display_name="Offset",
        type="number",
        default=DEFAULT_OFFSET,
        description="Number of results to skip",
        min_value=0,
    ),
)


def parameter_defaults() -> dict[str, Any]:
    """宣言済みパラメータの既定値を返す。"""

    return {spec.name: spec.default for spec in PARAMETERS}


def _require_int(value: Any, *, name: str) -> int:
    number = _coerce_int(value, name=name)
    if number is None:
        raise BcraValidationError(
            f"{name} が指定されていません。", validation_code=f"missing_{name}"
        )
    return number


def _coerce_int(value: Any, *, name: str) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise BcraValidationError(f"{name} が不正です。", validation_code=f"invalid_{name}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    try:
        return int(str(value).strip())
    except ValueError as exc:
        raise BcraValidationError(
            f"{name} は整数で指定してください: {value!r}",
            validation_code=f"invalid_{name}",
        ) from exc


def resolve_item_parameters(
    item: Mapping[str, Any] | None,
    defaults: Mapping[str, Any] | None = None,
) -> ItemParameters:
    """入力項目と既定値から1項目分のパラメータを解決する。

    入力項目が同名キーを持てばそれを優先し、なければノード既定値を使う。

    Args:
        item: 入力項目のJSON。
        defaults: ノードレベルの設定値。未指定キーは宣言済み既定値。

    Returns:
        解決済みパラメータ。

    Raises:
        BcraValidationError: 整数項目が不正な場合。
    """

    merged = parameter_defaults()
    if defaults:
        merged.update(defaults)
    if item:
        merged.update({key: item[key] for key in merged if key in item})

    return ItemParameters(
        id_variable=_require_int(merged["idVariable"], name="idVariable"),
        desde=merged["desde"] or "",
        hasta=merged["hasta"] or "",
        limit=_coerce_int(merged["limit"], name="limit"),
        offset=_coerce_int(merged["offset"], name="offset"),
    )


def static_resolver(params: ItemParameters) -> ParameterResolver:
    """全項目に同じパラメータを返すリゾルバ。"""

    def resolve(index: int) -> ItemParameters:
        return params

    return resolve


def item_resolver(
    items: Sequence[Mapping[str, Any] | None],
    defaults: Mapping[str, Any] | None = None,
) -> ParameterResolver:
    """入力項目ごとの値を既定値へ重ねるリゾルバ。

    解決は項目の処理時に遅延評価されるため、解決エラーはその項目の失敗になる。
    """

    def resolve(index: int) -> ItemParameters:
        return resolve_item_parameters(items[index], defaults)

    return resolve
