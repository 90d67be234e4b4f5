"""公開型と内部共通データ構造。"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Literal

from bcrastat.config import DEFAULT_LIMIT, DEFAULT_OFFSET

ParameterType = Literal["options", "dateTime", "number"]


@dataclass(slots=True)
class ItemParameters:
    """1入力項目に対して解決済みのパラメータ。

    ホストのパラメータ解決機構から切り離すための入力構造体。

    Attributes:
        id_variable: 変数ID。
        desde: 開始日（日付らしき文字列。空文字は未指定）。
        hasta: 終了日（日付らしき文字列。空文字は未指定）。
        limit: 最大件数。
        offset: 読み飛ばし件数。Noneは未設定。
    """

    id_variable: int
    desde: str | date | None = ""
    hasta: str | date | None = ""
    limit: int | None = DEFAULT_LIMIT
    offset: int | None = DEFAULT_OFFSET


@dataclass(slots=True)
class QueryRequest:
    """正規化済みの問い合わせ条件。

    Attributes:
        variable_id: 変数ID。
        start_date: 開始日。
        end_date: 終了日。
        limit: 最大件数。
        offset: 読み飛ばし件数。
    """

    variable_id: int
    start_date: date | None = None
    end_date: date | None = None
    limit: int | None = None
    offset: int | None = None


@dataclass(slots=True)
class OutputRecord:
    """ホストへ返す1レコード。

    Attributes:
        json: レコード本体。
        paired_item: 生成元入力項目への参照（``{"item": index}``）。
    """

    json: dict[str, Any]
    paired_item: dict[str, int]

    @property
    def item_index(self) -> int:
        """生成元入力項目の位置。"""

        return self.paired_item["item"]

    @property
    def is_error(self) -> bool:
        """エラーレコードか。"""

        return set(self.json) == {"error"}

    def to_dict(self) -> dict[str, Any]:
        """ホスト形式の辞書へ変換する。"""

        return {"json": dict(self.json), "pairedItem": dict(self.paired_item)}


@dataclass(slots=True)
class ItemResult:
    """1入力項目の処理結果。

    成功時は ``records``、失敗時は ``error`` を持つ。

    Attributes:
        index: 入力項目の位置。
        records: 生成レコード。
        error: 捕捉した例外。
    """

    index: int
    records: list[OutputRecord] = field(default_factory=list)
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    """ノードパラメータの宣言。

    Attributes:
        name: 内部名。
        display_name: 表示名。
        type: 入力種別。
        default: 既定値。
        description: 説明。
        required: 必須か。
        min_value: 数値の下限。
        options: 選択肢（``{value, name}``）。
    """

    name: str
    display_name: str
    type: ParameterType
    default: Any
    description: str
    required: bool = False
    min_value: int | None = None
    options: tuple[dict[str, Any], ...] = ()
