"""公開クライアント実装。"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from bcrastat.batch import arun_batch, run_batch
from bcrastat.config import (
    DEFAULT_BASE_URL,
    DEFAULT_NODE_NAME,
    DEFAULT_OPERATION,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    ClientConfig,
)
from bcrastat.params import ParameterResolver, item_resolver
from bcrastat.services.monetary import AsyncMonetaryService, MonetaryService
from bcrastat.types import OutputRecord


def _build_client_kwargs(
    *,
    base_url: str,
    timeout: float,
    verify_tls: bool,
    proxy: str | None,
) -> dict[str, Any]:
    client_kwargs: dict[str, Any] = {
        "base_url": base_url,
        "timeout": timeout,
        "verify": verify_tls,
    }
    if proxy is not None:
        client_kwargs["proxy"] = proxy
    return client_kwargs


class BcraClient:
    """BCRA統計APIの同期クライアント。"""

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        verify_tls: bool = False,
        continue_on_fail: bool = False,
        node_name: str = DEFAULT_NODE_NAME,
        operation: str = DEFAULT_OPERATION,
        http_client: httpx.Client | None = None,
        proxy: str | None = None,
    ) -> None:
        """クライアントを初期化する。

        Args:
            timeout: HTTPタイムアウト秒。
            base_url: APIベースURL。
            user_agent: User-Agent。
            verify_tls: TLS証明書チェーンを検証するか。http_client 指定時は
                使われず、外部Client側の設定に従う（config には値だけ残る）。
            continue_on_fail: 既定の失敗時継続モード。
            node_name: バッチ中断時の例外に付与するノード名。
            operation: バッチ中断時の例外に付与する操作名。
            http_client: 外部httpx.Client。所有権は呼び出し側に残り、close しない。
            proxy: プロキシ。
        """

        if timeout <= 0:
            raise ValueError("timeout は0より大きい値を指定してください。")

        self._owns_client = http_client is None
        if http_client is None:
            self._http_client = httpx.Client(
                **_build_client_kwargs(
                    base_url=base_url,
                    timeout=timeout,
                    verify_tls=verify_tls,
                    proxy=proxy,
                )
            )
        else:
            self._http_client = http_client

        self._config = ClientConfig(
            base_url=base_url,
            timeout=timeout,
            user_agent=user_agent,
            verify_tls=verify_tls,
            continue_on_fail=continue_on_fail,
            node_name=node_name,
            operation=operation,
        )
        self.monetary = MonetaryService(client=self._http_client, config=self._config)

    @property
    def config(self) -> ClientConfig:
        """有効な設定。"""

        return self._config

    def process(
        self,
        items: Sequence[Mapping[str, Any] | None],
        *,
        defaults: Mapping[str, Any] | None = None,
        resolver: ParameterResolver | None = None,
        continue_on_fail: bool | None = None,
    ) -> list[OutputRecord]:
        """入力項目バッチを処理する。

        Args:
            items: 入力項目。
            defaults: ノードレベルのパラメータ値。
            resolver: 独自のパラメータリゾルバ。指定時は defaults を使わない。
            continue_on_fail: 失敗時継続モード。Noneならクライアント設定。

        Returns:
            出力レコード列。
        """

        return run_batch(
            items,
            resolve=resolver or item_resolver(items, defaults),
            fetch=self.monetary.fetch,
            continue_on_fail=(
                self._config.continue_on_fail if continue_on_fail is None else continue_on_fail
            ),
            node_name=self._config.node_name,
            operation=self._config.operation,
        )

    def close(self) -> None:
        """内部Clientをクローズする。"""

        if self._owns_client:
            self._http_client.close()

    def __enter__(self) -> "BcraClient":
        """コンテキスト開始。"""

        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        """コンテキスト終了。"""

        self.close()


class AsyncBcraClient:
    """BCRA統計APIの非同期クライアント。"""

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        verify_tls: bool = False,
        continue_on_fail: bool = False,
        node_name: str = DEFAULT_NODE_NAME,
        operation: str = DEFAULT_OPERATION,
        http_client: httpx.AsyncClient | None = None,
        proxy: str | None = None,
    ) -> None:
        """非同期クライアントを初期化する。

        http_client 指定時は verify_tls・timeout・proxy は使われず、
        外部Client側の設定に従う。
        """

        if timeout <= 0:
            raise ValueError("timeout は0より大きい値を指定してください。")

        self._owns_client = http_client is None
        if http_client is None:
            self._http_client = httpx.AsyncClient(
                **_build_client_kwargs(
                    base_url=base_url,
                    timeout=timeout,
                    verify_tls=verify_tls,
                    proxy=proxy,
                )
            )
        else:
            self._http_client = http_client

        self._config = ClientConfig(
            base_url=base_url,
            timeout=timeout,
            user_agent=user_agent,
            verify_tls=verify_tls,
            continue_on_fail=continue_on_fail,
            node_name=node_name,
            operation=operation,
        )
        self.monetary = AsyncMonetaryService(client=self._http_client, config=self._config)

    @property
    def config(self) -> ClientConfig:
        """有効な設定。"""

        return self._config

    async def process(
        self,
        items: Sequence[Mapping[str, Any] | None],
        *,
        defaults: Mapping[str, Any] | None = None,
        resolver: ParameterResolver | None = None,
        continue_on_fail: bool | None = None,
    ) -> list[OutputRecord]:
        """入力項目バッチを逐次処理する。"""

        return await arun_batch(
            items,
            resolve=resolver or item_resolver(items, defaults),
            fetch=self.monetary.fetch,
            continue_on_fail=(
                self._config.continue_on_fail if continue_on_fail is None else continue_on_fail
            ),
            node_name=self._config.node_name,
            operation=self._config.operation,
        )

    async def aclose(self) -> None:
        """内部Clientをクローズする。"""

        if self._owns_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "AsyncBcraClient":
        """非同期コンテキスト開始。"""

        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        """非同期コンテキスト終了。"""

        await self.aclose()
