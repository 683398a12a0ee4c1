from importlib.metadata import PackageNotFoundError, version

from poloniex_api.api import PoloniexApiClient, get_client
from poloniex_api.errors import (
    BaseError,
    ErrorResponse,
    ExchangeError,
    TransportError,
    UnauthenticatedError,
    ValidationError,
)
from poloniex_api.executors import (
    AiohttpHttpExecutor,
    HttpExecutor,
    HttpResponse,
    HttpxHttpExecutor,
    RequestConfig,
    RequestsHttpExecutor,
)
from poloniex_api.signing import serialize_params, sign_message
from poloniex_api.types import (
    Account,
    AccountRequest,
    ApiCredentials,
    ChartDataRequest,
    ChartPeriod,
    CompleteBalancesRequest,
    CurrencyPairRequest,
    CurrencyRequest,
    LendingHistoryRequest,
    LoanOfferRequest,
    LoanOrdersRequest,
    MarginOrderRequest,
    MoveOrderRequest,
    OrderBookRequest,
    OrderNumberRequest,
    OrderRequest,
    PublicTradeHistoryRequest,
    TimeRangeRequest,
    TradeHistoryRequest,
    TransferBalanceRequest,
    WithdrawRequest,
)

try:
    __version__ = version("poloniex-api")
except PackageNotFoundError:
    __version__ = "unknown"


def get_version() -> str:
    """Return the installed package version."""
    return __version__


__all__ = [
    "Account",
    "AccountRequest",
    "AiohttpHttpExecutor",
    "ApiCredentials",
    "BaseError",
    "ChartDataRequest",
    "ChartPeriod",
    "CompleteBalancesRequest",
    "CurrencyPairRequest",
    "CurrencyRequest",
    "ErrorResponse",
    "ExchangeError",
    "HttpExecutor",
    "HttpResponse",
    "HttpxHttpExecutor",
    "LendingHistoryRequest",
    "LoanOfferRequest",
    "LoanOrdersRequest",
    "MarginOrderRequest",
    "MoveOrderRequest",
    "OrderBookRequest",
    "OrderNumberRequest",
    "OrderRequest",
    "PoloniexApiClient",
    "PublicTradeHistoryRequest",
    "RequestConfig",
    "RequestsHttpExecutor",
    "TimeRangeRequest",
    "TradeHistoryRequest",
    "TransferBalanceRequest",
    "TransportError",
    "UnauthenticatedError",
    "ValidationError",
    "WithdrawRequest",
    "get_client",
    "get_version",
    "serialize_params",
    "sign_message",
]
