"""サービス層向けトランスポート共通処理。"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from bcrastat.errors import (
    BcraApiError,
    BcraBadRequestError,
    BcraGatewayError,
    BcraNotFoundError,
    BcraServerError,
    BcraTransportError,
)

logger = logging.getLogger(__name__)

_EXCERPT_LENGTH = 2048


def build_request_headers(user_agent: str) -> Mapping[str, str]:
    """標準ヘッダを構築する。"""

    return {
        "Accept": "application/json",
        "Accept-Encoding": "gzip",
        "User-Agent": user_agent,
    }


def _error_message(response: httpx.Response) -> str:
    """エラー応答から表示用メッセージを取り出す。

    BCRA APIは ``{"status": 400, "errorMessages": [...]}`` 形式で返すことがある。
    """

    status = int(response.status_code)
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        messages = body.get("errorMessages")
        if isinstance(messages, list) and messages:
            return "; ".join(str(message) for message in messages)
        if isinstance(messages, str) and messages:
            return messages
    reason = response.reason_phrase or "error"
    return f"BCRA APIがHTTP {status} ({reason}) を返しました。"


def _make_api_error(response: httpx.Response, *, request_url: str) -> BcraApiError:
    status = int(response.status_code)
    if status == 400:
        klass = BcraBadRequestError
    elif status == 404:
        klass = BcraNotFoundError
    elif status >= 500:
        klass = BcraServerError
    else:
        klass = BcraApiError
    return klass(
        _error_message(response),
        status=status,
        request_url=request_url,
        raw_response_excerpt=response.text[:_EXCERPT_LENGTH],
    )


def decode_response(response: httpx.Response) -> Any:
    """レスポンスを検査してデコード済みJSONを返す。

    Args:
        response: HTTPレスポンス。

    Returns:
        デコード済みのJSON値。形状（オブジェクトか否か）は検査しない。

    Raises:
        BcraApiError: 非2xx応答の場合。
        BcraGatewayError: 本文をJSONとして解析できない場合。
    """

    request_url = str(response.request.url)
    if not response.is_success:
        raise _make_api_error(response, request_url=request_url)
    try:
        payload = json.loads(response.content)
    except ValueError as exc:
        raise BcraGatewayError(
            "APIレスポンスの本文をJSONとして解析できませんでした。"
            f" parser_error={type(exc).__name__}",
            status=int(response.status_code),
            request_url=request_url,
            raw_response_excerpt=response.text[:_EXCERPT_LENGTH],
        ) from exc
    return payload


def perform_sync_request(
    *,
    client: httpx.Client,
    endpoint: str,
    params: dict[str, Any],
    user_agent: str,
) -> tuple[Any, str]:
    """同期GET要求を1回実行する。

    Returns:
        (デコード済み応答, リクエストURL)。
    """

    headers = dict(build_request_headers(user_agent))
    logger.debug("GET %s params=%s", endpoint, params)
    try:
        response = client.get(endpoint, params=params, headers=headers)
    except httpx.HTTPError as exc:
        raise BcraTransportError(str(exc) or type(exc).__name__) from exc
    payload = decode_response(response)
    return payload, str(response.request.url)


async def perform_async_request(
    *,
    client: httpx.AsyncClient,
    endpoint: str,
    params: dict[str, Any],
    user_agent: str,
) -> tuple[Any, str]:
    """非同期GET要求を1回実行する。"""

    headers = dict(build_request_headers(user_agent))
    logger.debug("GET %s params=%s", endpoint, params)
    try:
        response = await client.get(endpoint, params=params, headers=headers)
    except httpx.HTTPError as exc:
        raise BcraTransportError(str(exc) or type(exc).__name__) from exc
    payload = decode_response(response)
    return payload, str(response.request.url)
