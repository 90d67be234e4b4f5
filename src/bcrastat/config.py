"""設定値定義。"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_BASE_URL = "https://api.bcra.gob.ar/estadisticas/v4.0"
DEFAULT_USER_AGENT = "bcrastat/0.1.0"
DEFAULT_TIMEOUT = 30.0
MONETARY_ENDPOINT = "/monetarias/{id_variable}"

DEFAULT_LIMIT = 100
DEFAULT_OFFSET = 0

UNKNOWN_VARIABLE_LABEL = "Unknown Variable"
DEFAULT_NODE_NAME = "BCRA"
DEFAULT_OPERATION = "monetarias"


@dataclass(slots=True)
class ClientConfig:
    """クライアント共通設定。

    Attributes:
        base_url: APIベースURL。
        timeout: タイムアウト秒。
        user_agent: User-Agent。
        verify_tls: TLS証明書チェーンを検証するか。BCRAの証明書チェーンに
            不備があるため既定は無効。
        continue_on_fail: 項目単位の失敗をエラーレコードに変換して継続するか。
        node_name: バッチ中断時の例外に付与するノード名。
        operation: バッチ中断時の例外に付与する操作名。
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    verify_tls: bool = False
    continue_on_fail: bool = False
    node_name: str = DEFAULT_NODE_NAME
    operation: str = DEFAULT_OPERATION
