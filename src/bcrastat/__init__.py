"""bcrastat 公開API。"""

from bcrastat.batch import arun_batch, process_item, run_batch
from bcrastat.catalog import BCRA_VARIABLES, VariableCatalogEntry, variable_label
from bcrastat.client import AsyncBcraClient, BcraClient
from bcrastat.errors import (
    BcraApiError,
    BcraBadRequestError,
    BcraDateParseError,
    BcraError,
    BcraGatewayError,
    BcraNodeError,
    BcraNotFoundError,
    BcraServerError,
    BcraTransportError,
    BcraValidationError,
)
from bcrastat.params import item_resolver, resolve_item_parameters, static_resolver
from bcrastat.types import ItemParameters, ItemResult, OutputRecord, QueryRequest

__all__ = [
    "AsyncBcraClient",
    "BCRA_VARIABLES",
    "BcraApiError",
    "BcraBadRequestError",
    "BcraClient",
    "BcraDateParseError",
    "BcraError",
    "BcraGatewayError",
    "BcraNodeError",
    "BcraNotFoundError",
    "BcraServerError",
    "BcraTransportError",
    "BcraValidationError",
    "ItemParameters",
    "ItemResult",
    "OutputRecord",
    "QueryRequest",
    "VariableCatalogEntry",
    "arun_batch",
    "item_resolver",
    "process_item",
    "resolve_item_parameters",
    "run_batch",
    "static_resolver",
    "variable_label",
]
