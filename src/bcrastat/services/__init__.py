"""サービス層モジュール。"""

from bcrastat.services.monetary import AsyncMonetaryService, MonetaryService

__all__ = [
    "AsyncMonetaryService",
    "MonetaryService",
]
