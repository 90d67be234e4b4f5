"""変数別時系列（monetarias）APIサービス。"""

from __future__ import annotations

from datetime import date
from typing import Any

import httpx

from bcrastat.config import DEFAULT_LIMIT, DEFAULT_OFFSET, MONETARY_ENDPOINT, ClientConfig
from bcrastat.services._transport import perform_async_request, perform_sync_request
from bcrastat.types import ItemParameters, QueryRequest
from bcrastat.validation import build_query_params, build_query_request


def monetary_endpoint(variable_id: int) -> str:
    """変数IDからエンドポイントパスを組み立てる。"""

    return MONETARY_ENDPOINT.format(id_variable=variable_id)


class MonetaryService:
    """同期monetarias取得サービス。"""

    def __init__(self, *, client: httpx.Client, config: ClientConfig) -> None:
        self._client = client
        self._config = config

    def fetch(self, query: QueryRequest) -> Any:
        """正規化済み条件で1回取得し、デコード済み応答を返す。"""

        payload, _ = perform_sync_request(
            client=self._client,
            endpoint=monetary_endpoint(query.variable_id),
            params=build_query_params(query),
            user_agent=self._config.user_agent,
        )
        return payload

    def get(
        self,
        variable_id: int,
        *,
        desde: str | date | None = None,
        hasta: str | date | None = None,
        limit: int | None = DEFAULT_LIMIT,
        offset: int | None = DEFAULT_OFFSET,
    ) -> Any:
        """変数の時系列を取得する。

        Args:
            variable_id: 変数ID。
            desde: 開始日。
            hasta: 終了日。
            limit: 最大件数。0またはNoneで省略。
            offset: 読み飛ばし件数。Noneで省略。

        Returns:
            デコード済み応答。形状（``results`` 配列か単一オブジェクトか）は未検査。
        """

        query = build_query_request(
            ItemParameters(
                id_variable=variable_id,
                desde=desde,
                hasta=hasta,
                limit=limit,
                offset=offset,
            )
        )
        return self.fetch(query)


class AsyncMonetaryService:
    """非同期monetarias取得サービス。"""

    def __init__(self, *, client: httpx.AsyncClient, config: ClientConfig) -> None:
        self._client = client
        self._config = config

    async def fetch(self, query: QueryRequest) -> Any:
        """正規化済み条件で1回取得し、デコード済み応答を返す。"""

        payload, _ = await perform_async_request(
            client=self._client,
            endpoint=monetary_endpoint(query.variable_id),
            params=build_query_params(query),
            user_agent=self._config.user_agent,
        )
        return payload

    async def get(
        self,
        variable_id: int,
        *,
        desde: str | date | None = None,
        hasta: str | date | None = None,
        limit: int | None = DEFAULT_LIMIT,
        offset: int | None = DEFAULT_OFFSET,
    ) -> Any:
        """変数の時系列を取得する。"""

        query = build_query_request(
            ItemParameters(
                id_variable=variable_id,
                desde=desde,
                hasta=hasta,
                limit=limit,
                offset=offset,
            )
        )
        return await self.fetch(query)
