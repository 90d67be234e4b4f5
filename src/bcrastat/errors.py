"""例外定義。"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bcrastat.types import OutputRecord


@dataclass(slots=True)
class BcraErrorContext:
    """例外に付随する共通コンテキスト。

    Attributes:
        request_url: リクエストURL。
        raw_response_excerpt: レスポンス抜粋。
    """

    request_url: str | None = None
    raw_response_excerpt: str | None = None


class BcraError(Exception):
    """ライブラリ例外の基底クラス。

    Attributes:
        origin: 例外発生元。
        context: 追加コンテキスト。
    """

    def __init__(
        self,
        message: str,
        *,
        origin: str,
        context: BcraErrorContext | None = None,
    ) -> None:
        super().__init__(message)
        self.origin = origin
        self.context = context or BcraErrorContext()


class BcraValidationError(BcraError):
    """送信前バリデーションエラー。"""

    def __init__(self, message: str, *, validation_code: str) -> None:
        super().__init__(message, origin="client_validation")
        self.validation_code = validation_code


class BcraDateParseError(BcraValidationError):
    """日付解析失敗。"""

    def __init__(self, message: str) -> None:
        super().__init__(message, validation_code="invalid_date")


class BcraTransportError(BcraError):
    """HTTP通信層の例外。"""

    def __init__(self, message: str, *, request_url: str | None = None) -> None:
        super().__init__(
            message,
            origin="transport",
            context=BcraErrorContext(request_url=request_url),
        )


class BcraApiError(BcraError):
    """API応答由来の例外。"""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        request_url: str,
        raw_response_excerpt: str | None = None,
    ) -> None:
        super().__init__(
            message,
            origin="server_response",
            context=BcraErrorContext(
                request_url=request_url,
                raw_response_excerpt=raw_response_excerpt,
            ),
        )
        self.status = status
        self.message = message


class BcraBadRequestError(BcraApiError):
    """HTTP 400の例外。"""


class BcraNotFoundError(BcraApiError):
    """HTTP 404の例外。"""


class BcraServerError(BcraApiError):
    """HTTP 5xxの例外。"""


class BcraGatewayError(BcraApiError):
    """成功ステータスだがJSONオブジェクトとして解釈できない応答。"""


class BcraNodeError(BcraError):
    """バッチ全体を中断する例外。

    continue_on_fail 無効時、項目単位の例外を実行コンテキストで包んで送出する。
    元の例外は ``__cause__`` に保持される。

    Attributes:
        node_name: ノード名。
        operation: 操作名。
        item_index: 失敗した入力項目の位置。
        partial_records: 失敗前の項目から生成済みのレコード。
    """

    def __init__(
        self,
        message: str,
        *,
        node_name: str,
        operation: str,
        item_index: int,
        partial_records: list[OutputRecord] | None = None,
        context: BcraErrorContext | None = None,
    ) -> None:
        super().__init__(
            f"{node_name} ({operation}) item {item_index}: {message}",
            origin="node_execution",
            context=context,
        )
        self.node_name = node_name
        self.operation = operation
        self.item_index = item_index
        self.partial_records = list(partial_records or [])
        self.description = message
