"""HTTP API client for the Poloniex exchange.

This module provides the PoloniexApiClient class for interacting with the
Poloniex REST API: public market data commands sent to ``GET /public`` and
signed account/trading commands sent to ``POST /tradingApi``.
"""

import logging
from types import TracebackType
from typing import Any, Mapping, Self

from poloniex_api.errors import (
    BadGateway,
    BadHttpStatus,
    BadRequest,
    ErrorResponse,
    ExchangeError,
    Forbidden,
    GatewayTimeout,
    InternalServerError,
    NotFound,
    RateLimited,
    ServiceUnavailable,
    UnauthenticatedError,
    Unauthorized,
    UnprocessableEntity,
    ValidationError,
)
from poloniex_api.executors import DEFAULT_HTTP_EXECUTOR, HttpExecutor
from poloniex_api.executors.interface import HttpResponse, RequestConfig
from poloniex_api.helpers import (
    DEFAULT_API_URL,
    DEFAULT_TIMEOUT,
    PRIVATE_PATH,
    PUBLIC_PATH,
    NonceGenerator,
    extract_error_reason,
    get_user_agent,
)
from poloniex_api.signing import serialize_params, sign_message
from poloniex_api.types import (
    AccountRequest,
    ApiCredentials,
    ChartDataRequest,
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
    ParamValue,
    PublicTradeHistoryRequest,
    RequestParams,
    TimeRangeRequest,
    TradeHistoryRequest,
    TransferBalanceRequest,
    WithdrawRequest,
    request_params,
)

log = logging.getLogger(__name__)

_STATUS_ERRORS: dict[int, type[BadHttpStatus]] = {
    400: BadRequest,
    401: Unauthorized,
    403: Forbidden,
    404: NotFound,
    422: UnprocessableEntity,
    429: RateLimited,
    500: InternalServerError,
    502: BadGateway,
    503: ServiceUnavailable,
    504: GatewayTimeout,
}


def raise_response_errors(
    response: HttpResponse, check_error_field: bool = True
) -> None:
    """Raise if the response describes a failure.

    A response fails when its status is not 2XX or, with ``check_error_field``,
    when its data is a JSON object with an ``error`` field (the trading API
    reports many rejections that way with status 200). The raised error
    carries the most specific diagnostic available, see
    ``extract_error_reason``.

    Args:
        response: The HTTP response to validate
        check_error_field: Treat a 2XX body with an ``error`` field as a failure

    Raises:
        ErrorResponse: For 2XX responses carrying an ``error`` field
        BadRequest: For 400 status codes
        Unauthorized: For 401 status codes
        Forbidden: For 403 status codes
        NotFound: For 404 status codes
        UnprocessableEntity: For 422 status codes
        RateLimited: For 429 status codes
        BadHttpStatus: For other non-2XX status codes
        InternalServerError: For 500 and unlisted 5XX status codes
        BadGateway: For 502 status codes
        ServiceUnavailable: For 503 status codes
        GatewayTimeout: For 504 status codes

    """
    data = response.data
    error_field = (
        check_error_field and isinstance(data, dict) and bool(data.get("error"))
    )
    if response.ok and not error_field:
        return

    reason = extract_error_reason(response)
    message = reason if isinstance(reason, str) else str(reason)

    if response.ok:
        raise ErrorResponse(message, reason)

    status = response.status
    error_type = _STATUS_ERRORS.get(status)
    if error_type is None:
        error_type = InternalServerError if 500 <= status < 600 else BadHttpStatus
    raise error_type(status, message, reason)


class PoloniexApiClient:
    """Poloniex API client.

    Public commands work without credentials. Private commands need an API key
    pair, given at construction or later through ``upgrade``.

    Examples:
        .. code-block:: python

            import asyncio

            from poloniex_api import ApiCredentials, OrderBookRequest, get_client

            async def main():
                async with get_client() as client:
                    book = await client.return_order_book(
                        OrderBookRequest(currencyPair="BTC_ETH", depth=10)
                    )
                    print(book.data)

                    client.upgrade(ApiCredentials("your-api-key", "your-secret"))
                    balances = await client.return_balances()
                    print(balances.data["BTC"])

            asyncio.run(main())
    """

    _credentials: ApiCredentials | None = None

    _http_executor: HttpExecutor

    sign_message = staticmethod(sign_message)

    def __init__(
        self,
        credentials: ApiCredentials | tuple[str, str] | None = None,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float | None = DEFAULT_TIMEOUT,
        headers: Mapping[str, str] | None = None,
        executor: HttpExecutor | None = None,
    ):
        """Initialize the Poloniex API client.

        Args:
            credentials: API key pair (optional, can be set later with ``upgrade``)
            api_url: Base URL of the API (default: production URL)
            timeout: Per-request timeout in seconds, None for no timeout
            headers: Extra headers sent with every request; they override the
                default User-Agent
            executor: Custom HTTP executor (optional, uses default if not provided).
                A caller-supplied executor is not closed by ``aclose``.

        """
        self.api_url = api_url
        self.timeout = timeout
        self._base_headers = {"User-Agent": get_user_agent(), **(headers or {})}
        self._nonce = NonceGenerator()
        self._owns_executor = executor is None
        self._http_executor = (
            executor if executor is not None else DEFAULT_HTTP_EXECUTOR()
        )
        if credentials is not None:
            self.upgrade(credentials)

    @classmethod
    def from_env(cls, executor: HttpExecutor | None = None) -> Self:
        """Build a client from POLONIEX_* environment variables or a .env file."""
        from poloniex_api.env_setup import setup_environment

        settings = setup_environment()
        return cls(
            settings.credentials,
            api_url=settings.api_url,
            timeout=settings.timeout,
            executor=executor,
        )

    @property
    def credentials(self) -> ApiCredentials:
        """Get the current credentials.

        Raises:
            UnauthenticatedError: If no credentials have been set

        """
        if self._credentials is None:
            raise UnauthenticatedError()
        return self._credentials

    def is_authenticated(self) -> bool:
        """Check whether API keys have been supplied."""
        return self._credentials is not None

    is_upgraded = is_authenticated

    def upgrade(self, credentials: ApiCredentials | tuple[str, str]) -> None:
        """Replace the client's credentials.

        Any previous key pair is discarded; there is no merging of keys.

        Args:
            credentials: An ApiCredentials or a (public_key, private_key) pair

        Raises:
            ValidationError: If either key is missing or not a string

        """
        self._credentials = ApiCredentials.coerce(credentials)
        log.debug("Client credentials replaced")

    async def aclose(self) -> None:
        """Close the executor if this client created it."""
        if self._owns_executor:
            await self._http_executor.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    """ Dispatch """

    async def send_public(self, params: Mapping[str, ParamValue | None]) -> HttpResponse:
        """Send a public command as ``GET /public?<params>``.

        Args:
            params: Ordered parameters including ``command``

        Returns:
            HttpResponse: The raw response

        Raises:
            ValidationError: If ``command`` is missing
            ExchangeError: If the response status is not 2XX; a 2XX body is
                returned as-is even when it carries an ``error`` field
            TransportError: If the request could not be exchanged

        """
        self.__check_command(params)
        config = RequestConfig(
            method="GET",
            base_url=self.api_url,
            path=PUBLIC_PATH,
            headers=self._base_headers,
            query=serialize_params(params),
            timeout=self.timeout,
        )
        log.debug("Sending public command %s", params["command"])
        return await self.__dispatch(config, check_error_field=False)

    async def send_private(
        self, params: Mapping[str, ParamValue | None]
    ) -> HttpResponse:
        """Send a signed command as ``POST /tradingApi``.

        A fresh nonce is appended unless ``params`` already carries one. The
        body is signed with the private key and sent with ``Key`` and ``Sign``
        headers.

        Args:
            params: Ordered parameters including ``command``

        Returns:
            HttpResponse: The raw response

        Raises:
            UnauthenticatedError: If no credentials are set; nothing is sent
            ValidationError: If ``command`` is missing
            ExchangeError: If the exchange reports an error
            TransportError: If the request could not be exchanged

        """
        credentials = self._credentials
        if credentials is None:
            raise UnauthenticatedError()
        self.__check_command(params)

        body_params: RequestParams = dict(params)
        if body_params.get("nonce") is None:
            body_params["nonce"] = self._nonce()

        headers = {
            **self._base_headers,
            "Content-Type": "application/x-www-form-urlencoded",
            "Key": credentials.public_key,
            "Sign": sign_message(body_params, credentials.private_key),
        }
        config = RequestConfig(
            method="POST",
            base_url=self.api_url,
            path=PRIVATE_PATH,
            headers=headers,
            body=serialize_params(body_params),
            timeout=self.timeout,
        )
        log.debug(
            "Sending private command %s with nonce %s",
            body_params["command"],
            body_params["nonce"],
        )
        return await self.__dispatch(config)

    """ Public commands, can be called without credentials """

    async def return_ticker(self) -> HttpResponse:
        """Get the ticker for all markets.

        Endpoint:
            GET /public?command=returnTicker

        """
        return await self.__public("returnTicker")

    async def return_24h_volume(self) -> HttpResponse:
        """Get the 24-hour volume for all markets, plus totals for primary currencies.

        Endpoint:
            GET /public?command=return24hVolume

        """
        return await self.__public("return24hVolume")

    async def return_order_book(
        self, request: OrderBookRequest | None = None
    ) -> HttpResponse:
        """Get the order book for one market, or all markets with ``"all"``.

        Args:
            request: Currency pair and optional depth (default: all pairs)

        Example:
            .. code-block:: python

                book = await client.return_order_book(OrderBookRequest("BTC_ETH"))
                print(book.data["asks"][0])

        Endpoint:
            GET /public?command=returnOrderBook

        """
        return await self.__public("returnOrderBook", request or OrderBookRequest())

    async def return_public_trade_history(
        self, request: PublicTradeHistoryRequest
    ) -> HttpResponse:
        """Get recent trades for a market, optionally within a time range.

        Endpoint:
            GET /public?command=returnTradeHistory

        """
        return await self.__public("returnTradeHistory", request)

    async def return_chart_data(self, request: ChartDataRequest) -> HttpResponse:
        """Get candlestick data for a market.

        Endpoint:
            GET /public?command=returnChartData

        """
        return await self.__public("returnChartData", request)

    async def return_currencies(self) -> HttpResponse:
        """Get information about all currencies.

        Endpoint:
            GET /public?command=returnCurrencies

        """
        return await self.__public("returnCurrencies")

    async def return_loan_orders(self, request: LoanOrdersRequest) -> HttpResponse:
        """Get the margin lending offers and demands for a currency.

        Endpoint:
            GET /public?command=returnLoanOrders

        """
        return await self.__public("returnLoanOrders", request)

    ### ===================================================== Trading API =====================================================

    ### ------------------------------------------------ Trading API - Wallet ------------------------------------------------

    async def return_balances(self) -> HttpResponse:
        """Get available exchange balances for all currencies.

        Example:
            .. code-block:: python

                balances = await client.return_balances()
                print(balances.data["BTC"])

        Endpoint:
            POST /tradingApi command=returnBalances

        """
        return await self.__private("returnBalances")

    async def return_complete_balances(
        self, request: CompleteBalancesRequest | None = None
    ) -> HttpResponse:
        """Get available, on-order and BTC-estimated balances for all currencies.

        Endpoint:
            POST /tradingApi command=returnCompleteBalances

        """
        return await self.__private("returnCompleteBalances", request)

    async def return_deposit_addresses(self) -> HttpResponse:
        """Endpoint: POST /tradingApi command=returnDepositAddresses."""
        return await self.__private("returnDepositAddresses")

    async def generate_new_address(self, request: CurrencyRequest) -> HttpResponse:
        """Generate a new deposit address for a currency.

        Endpoint:
            POST /tradingApi command=generateNewAddress

        """
        return await self.__private("generateNewAddress", request)

    async def return_deposits_withdrawals(
        self, request: TimeRangeRequest
    ) -> HttpResponse:
        """Get deposits and withdrawals within a time range.

        Endpoint:
            POST /tradingApi command=returnDepositsWithdrawals

        """
        return await self.__private("returnDepositsWithdrawals", request)

    async def withdraw(self, request: WithdrawRequest) -> HttpResponse:
        """Request a withdrawal to an external address.

        Withdrawals require the API key to have withdrawal permission enabled.

        Endpoint:
            POST /tradingApi command=withdraw

        """
        return await self.__private("withdraw", request)

    async def return_fee_info(self) -> HttpResponse:
        """Get the account's maker/taker fees and 30-day volume.

        Endpoint:
            POST /tradingApi command=returnFeeInfo

        """
        return await self.__private("returnFeeInfo")

    async def return_available_account_balances(
        self, request: AccountRequest | None = None
    ) -> HttpResponse:
        """Get balances sorted by account, optionally for one account only.

        Endpoint:
            POST /tradingApi command=returnAvailableAccountBalances

        """
        return await self.__private("returnAvailableAccountBalances", request)

    async def transfer_balance(self, request: TransferBalanceRequest) -> HttpResponse:
        """Move funds between exchange, margin and lending accounts.

        Endpoint:
            POST /tradingApi command=transferBalance

        """
        return await self.__private("transferBalance", request)

    ### ------------------------------------------------ Trading API - Orders ------------------------------------------------

    async def return_open_orders(
        self, request: CurrencyPairRequest | None = None
    ) -> HttpResponse:
        """Get open orders for one market, or all markets (default).

        Endpoint:
            POST /tradingApi command=returnOpenOrders

        """
        return await self.__private(
            "returnOpenOrders", request or CurrencyPairRequest()
        )

    async def return_trade_history(
        self, request: TradeHistoryRequest | None = None
    ) -> HttpResponse:
        """Get the account's trade history.

        Endpoint:
            POST /tradingApi command=returnTradeHistory

        """
        return await self.__private(
            "returnTradeHistory", request or TradeHistoryRequest()
        )

    async def return_order_trades(self, request: OrderNumberRequest) -> HttpResponse:
        """Get all trades involving an order.

        Endpoint:
            POST /tradingApi command=returnOrderTrades

        """
        return await self.__private("returnOrderTrades", request)

    async def return_order_status(self, request: OrderNumberRequest) -> HttpResponse:
        """Get the status of an open order.

        Endpoint:
            POST /tradingApi command=returnOrderStatus

        """
        return await self.__private("returnOrderStatus", request)

    async def buy(self, request: OrderRequest) -> HttpResponse:
        """Place a limit buy order.

        Args:
            request: Market, rate, amount and optional execution flags

        Returns:
            HttpResponse: Contains ``orderNumber`` and any immediate fills

        Raises:
            UnauthenticatedError: If no credentials are set
            ExchangeError: If the exchange rejects the order

        Endpoint:
            POST /tradingApi command=buy

        """
        return await self.__private("buy", request)

    async def sell(self, request: OrderRequest) -> HttpResponse:
        """Place a limit sell order. Same parameters as ``buy``.

        Endpoint:
            POST /tradingApi command=sell

        """
        return await self.__private("sell", request)

    async def cancel_order(self, request: OrderNumberRequest) -> HttpResponse:
        """Cancel an open order.

        Endpoint:
            POST /tradingApi command=cancelOrder

        """
        return await self.__private("cancelOrder", request)

    async def cancel_all_orders(
        self, request: CurrencyPairRequest | None = None
    ) -> HttpResponse:
        """Cancel all open orders, optionally restricted to one market.

        Endpoint:
            POST /tradingApi command=cancelAllOrders

        """
        if request is not None and request.currencyPair == "all":
            request = CurrencyPairRequest(currencyPair=None)
        return await self.__private("cancelAllOrders", request)

    async def move_order(self, request: MoveOrderRequest) -> HttpResponse:
        """Cancel an order and place a new one at a different rate.

        Endpoint:
            POST /tradingApi command=moveOrder

        """
        return await self.__private("moveOrder", request)

    ### ------------------------------------------------ Trading API - Margin ------------------------------------------------

    async def return_tradable_balances(self) -> HttpResponse:
        """Endpoint: POST /tradingApi command=returnTradableBalances."""
        return await self.__private("returnTradableBalances")

    async def return_margin_account_summary(self) -> HttpResponse:
        """Endpoint: POST /tradingApi command=returnMarginAccountSummary."""
        return await self.__private("returnMarginAccountSummary")

    async def margin_buy(self, request: MarginOrderRequest) -> HttpResponse:
        """Place a margin buy order.

        Endpoint:
            POST /tradingApi command=marginBuy

        """
        return await self.__private("marginBuy", request)

    async def margin_sell(self, request: MarginOrderRequest) -> HttpResponse:
        """Place a margin sell order.

        Endpoint:
            POST /tradingApi command=marginSell

        """
        return await self.__private("marginSell", request)

    async def get_margin_position(
        self, request: CurrencyPairRequest | None = None
    ) -> HttpResponse:
        """Get the margin position for one market, or all markets (default).

        Endpoint:
            POST /tradingApi command=getMarginPosition

        """
        return await self.__private(
            "getMarginPosition", request or CurrencyPairRequest()
        )

    async def close_margin_position(
        self, request: CurrencyPairRequest
    ) -> HttpResponse:
        """Close the margin position in a market at market price.

        Raises:
            ValidationError: If the currency pair is missing or ``"all"``

        Endpoint:
            POST /tradingApi command=closeMarginPosition

        """
        if request.currencyPair in (None, "all"):
            raise ValidationError(
                "closeMarginPosition requires a single currency pair"
            )
        return await self.__private("closeMarginPosition", request)

    ### ------------------------------------------------ Trading API - Lending ------------------------------------------------

    async def create_loan_offer(self, request: LoanOfferRequest) -> HttpResponse:
        """Endpoint: POST /tradingApi command=createLoanOffer."""
        return await self.__private("createLoanOffer", request)

    async def cancel_loan_offer(self, request: OrderNumberRequest) -> HttpResponse:
        """Endpoint: POST /tradingApi command=cancelLoanOffer."""
        return await self.__private("cancelLoanOffer", request)

    async def return_open_loan_offers(self) -> HttpResponse:
        """Endpoint: POST /tradingApi command=returnOpenLoanOffers."""
        return await self.__private("returnOpenLoanOffers")

    async def return_active_loans(self) -> HttpResponse:
        """Endpoint: POST /tradingApi command=returnActiveLoans."""
        return await self.__private("returnActiveLoans")

    async def return_lending_history(
        self, request: LendingHistoryRequest | None = None
    ) -> HttpResponse:
        """Get the history of repaid loans.

        Endpoint:
            POST /tradingApi command=returnLendingHistory

        """
        return await self.__private("returnLendingHistory", request)

    async def toggle_auto_renew(self, request: OrderNumberRequest) -> HttpResponse:
        """Toggle auto-renew on an active loan.

        Endpoint:
            POST /tradingApi command=toggleAutoRenew

        """
        return await self.__private("toggleAutoRenew", request)

    """ Private helpers """

    async def __public(self, command: str, request: Any | None = None) -> HttpResponse:
        return await self.send_public({"command": command, **request_params(request)})

    async def __private(self, command: str, request: Any | None = None) -> HttpResponse:
        return await self.send_private({"command": command, **request_params(request)})

    async def __dispatch(
        self, config: RequestConfig, check_error_field: bool = True
    ) -> HttpResponse:
        """Send a request and raise for error responses.

        Transport failures propagate unchanged.
        """
        response = await self._http_executor.send(config)
        try:
            raise_response_errors(response, check_error_field)
        except ExchangeError as e:
            log.warning(
                "%s %s failed with status %d: %s",
                config.method,
                config.path,
                response.status,
                e.message,
            )
            raise
        return response

    @staticmethod
    def __check_command(params: Mapping[str, ParamValue | None]) -> None:
        command = params.get("command")
        if not isinstance(command, str) or not command:
            raise ValidationError("params must include a non-empty 'command'")


def get_client(
    credentials: ApiCredentials | tuple[str, str] | None = None,
    *,
    api_url: str = DEFAULT_API_URL,
    timeout: float | None = DEFAULT_TIMEOUT,
    headers: Mapping[str, str] | None = None,
    executor: HttpExecutor | None = None,
) -> PoloniexApiClient:
    """Create a Poloniex client, authenticated when credentials are given.

    Args:
        credentials: Optional API key pair
        api_url: Base URL of the API
        timeout: Per-request timeout in seconds
        headers: Extra headers sent with every request
        executor: Custom HTTP executor

    Returns:
        PoloniexApiClient: A new client

    """
    return PoloniexApiClient(
        credentials,
        api_url=api_url,
        timeout=timeout,
        headers=headers,
        executor=executor,
    )
