"""Type definitions for the Poloniex API client.

This module contains type aliases, enums, credentials and the request
dataclasses accepted by the endpoint methods. Request dataclass field names
match the exchange's parameter names, and field order is the order in which
parameters are sent.
"""

import re
from dataclasses import dataclass, field, fields
from decimal import Decimal
from enum import Enum
from typing import Any, Self, TypeAlias, overload

from poloniex_api.errors import ValidationError

# ============================================================================
# TYPE ALIASES
# ============================================================================

Nonce: TypeAlias = int
OrderNumber: TypeAlias = int | str

# JSON type hierarchy
JsonObject: TypeAlias = dict[str, "JsonValue"]
JsonArray: TypeAlias = list["JsonValue"]
JsonValue: TypeAlias = None | bool | int | float | str | JsonObject | JsonArray
Json: TypeAlias = JsonObject | JsonArray

# Input types
PoloniexNumericInput: TypeAlias = Decimal | str | float | int
ParamValue: TypeAlias = str | int | float | Decimal | bool
RequestParams: TypeAlias = dict[str, ParamValue | None]


# ============================================================================
# NUMERIC CONVERSION UTILITIES
# ============================================================================

DECIMAL_PATTERN = re.compile(r"^\d+(\.\d+)?$")


def full_precision_string(n: PoloniexNumericInput) -> str:
    """Convert a numeric input to a full precision string representation."""
    if isinstance(n, bool):
        raise ValidationError(f"Invalid numeric input type {n} - {type(n)}")
    if isinstance(n, str):
        if not DECIMAL_PATTERN.match(n):
            raise ValidationError(f"Invalid numeric input {n}")
        return n
    if isinstance(n, (int, float)):
        n = Decimal(str(n))
    if not isinstance(n, Decimal):
        raise ValidationError(f"Invalid numeric input type {n} - {type(n)}")
    return format(n, "f")


@overload
def numeric_to_decimal(n: PoloniexNumericInput) -> Decimal: ...


@overload
def numeric_to_decimal(n: None) -> None: ...


def numeric_to_decimal(n: PoloniexNumericInput | None) -> Decimal | None:
    """Convert various numeric input types to Decimal, or None if input is None."""
    if n is None:
        return n
    if isinstance(n, bool):
        raise ValidationError(f"Invalid numeric input type {n} - {type(n)}")
    if isinstance(n, str):
        if not DECIMAL_PATTERN.match(n):
            raise ValidationError(f"Invalid numeric input {n}")
        return Decimal(n)
    if isinstance(n, (int, float)):
        if n < 0:
            raise ValidationError(f"Invalid numeric input {n}")
        n = Decimal(str(n))
    if not isinstance(n, Decimal):
        raise ValidationError(f"Invalid numeric input type {n} - {type(n)}")
    if not n.is_finite() or n < 0:
        raise ValidationError(f"Invalid numeric input {n}")
    return n


# ============================================================================
# ENUMS
# ============================================================================


class ChartPeriod(Enum):
    """Candlestick periods accepted by returnChartData, in seconds."""

    FIVE_MINUTES = 300
    FIFTEEN_MINUTES = 900
    THIRTY_MINUTES = 1800
    TWO_HOURS = 7200
    FOUR_HOURS = 14400
    ONE_DAY = 86400


class Account(Enum):
    """Wallet accounts used by balance and transfer commands."""

    ALL = "all"
    EXCHANGE = "exchange"
    MARGIN = "margin"
    LENDING = "lending"


# ============================================================================
# CREDENTIALS
# ============================================================================


@dataclass(frozen=True)
class ApiCredentials:
    """API key pair used to sign private requests.

    Both keys are required; a half-configured pair is rejected on construction.
    """

    public_key: str
    private_key: str = field(repr=False)

    def __post_init__(self) -> None:
        for name in ("public_key", "private_key"):
            value: Any = getattr(self, name)
            if not isinstance(value, str):
                raise ValidationError from TypeError(
                    f"Unexpected type for {name} {type(value)}"
                )
            if not value:
                raise ValidationError(f"{name} must not be empty")

    @classmethod
    def coerce(cls, credentials: "ApiCredentials | tuple[str, str]") -> Self:
        """Build credentials from an ApiCredentials or a (public, private) pair."""
        if isinstance(credentials, cls):
            return credentials
        if isinstance(credentials, tuple) and len(credentials) == 2:
            return cls(public_key=credentials[0], private_key=credentials[1])
        raise ValidationError from TypeError(
            f"Unexpected type for credentials {type(credentials)}"
        )


# ============================================================================
# REQUEST PARAMETERS
# ============================================================================


def request_params(request: Any | None) -> RequestParams:
    """Flatten a request dataclass into ordered exchange parameters.

    ``None`` fields are omitted and enums are replaced by their values.
    """
    if request is None:
        return {}
    params: RequestParams = {}
    for f in fields(request):
        value = getattr(request, f.name)
        if value is None:
            continue
        if isinstance(value, Enum):
            value = value.value
        params[f.name] = value
    return params


def check_time_range(start: int, end: int) -> None:
    """Validate a pair of UNIX timestamps with ``start <= end``."""
    for name, value in (("start", start), ("end", end)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"Invalid {name} timestamp {value!r}")
    if end < start:
        raise ValidationError(f"end ({end}) must not be before start ({start})")


# ---------------------------------------------------------------------------
# Public command requests
# ---------------------------------------------------------------------------


@dataclass
class OrderBookRequest:
    """Parameters for returnOrderBook. ``currencyPair`` may be ``"all"``."""

    currencyPair: str = "all"
    depth: int | None = None

    def __post_init__(self) -> None:
        if self.depth is not None and (
            isinstance(self.depth, bool) or not isinstance(self.depth, int)
        ):
            raise ValidationError(f"Invalid depth {self.depth!r}")
        if self.depth is not None and self.depth < 1:
            raise ValidationError("Depth must be a positive integer")


@dataclass
class PublicTradeHistoryRequest:
    """Parameters for the public returnTradeHistory command.

    ``start`` and ``end`` are UNIX timestamps in seconds.
    """

    currencyPair: str
    start: int | None = None
    end: int | None = None


@dataclass
class ChartDataRequest:
    """Parameters for returnChartData."""

    currencyPair: str
    period: ChartPeriod
    start: int
    end: int

    def __post_init__(self) -> None:
        try:
            self.period = ChartPeriod(
                self.period.value
                if isinstance(self.period, ChartPeriod)
                else self.period
            )
        except ValueError as e:
            raise ValidationError(f"Invalid chart period {self.period!r}") from e
        check_time_range(self.start, self.end)


@dataclass
class LoanOrdersRequest:
    """Parameters for returnLoanOrders."""

    currency: str


# ---------------------------------------------------------------------------
# Private command requests
# ---------------------------------------------------------------------------


@dataclass
class CurrencyRequest:
    """A request addressing a single currency, e.g. ``"BTC"``."""

    currency: str


@dataclass
class CurrencyPairRequest:
    """A request addressing a currency pair, e.g. ``"BTC_ETH"`` or ``"all"``."""

    currencyPair: str | None = "all"


@dataclass
class AccountRequest:
    """A request optionally scoped to one wallet account."""

    account: Account | None = None


@dataclass
class CompleteBalancesRequest:
    """Parameters for returnCompleteBalances.

    Only ``Account.ALL`` changes the result; other accounts are accepted by the
    exchange and ignored.
    """

    account: Account | None = None


@dataclass
class TimeRangeRequest:
    """A request bounded by UNIX timestamps in seconds."""

    start: int
    end: int

    def __post_init__(self) -> None:
        check_time_range(self.start, self.end)


@dataclass
class TradeHistoryRequest:
    """Parameters for the private returnTradeHistory command."""

    currencyPair: str = "all"
    start: int | None = None
    end: int | None = None
    limit: int | None = None


@dataclass
class LendingHistoryRequest:
    """Parameters for returnLendingHistory."""

    start: int | None = None
    end: int | None = None
    limit: int | None = None


@dataclass
class OrderNumberRequest:
    """A request addressing a single order or loan offer."""

    orderNumber: OrderNumber


@dataclass
class OrderRequest:
    """Parameters for the buy and sell commands.

    At most one of ``fillOrKill``, ``immediateOrCancel`` and ``postOnly`` may
    be set.
    """

    currencyPair: str
    rate: Decimal
    amount: Decimal
    fillOrKill: bool | None
    immediateOrCancel: bool | None
    postOnly: bool | None
    clientOrderId: int | None

    def __init__(
        self,
        currencyPair: str,
        rate: PoloniexNumericInput,
        amount: PoloniexNumericInput,
        fillOrKill: bool | None = None,
        immediateOrCancel: bool | None = None,
        postOnly: bool | None = None,
        clientOrderId: int | None = None,
    ):
        """Initialize an OrderRequest.

        Args:
            currencyPair: Market to trade, e.g. ``"BTC_ETH"``.
            rate: Limit price (converted to Decimal).
            amount: Quantity to trade (converted to Decimal).
            fillOrKill: Fill entirely or cancel.
            immediateOrCancel: Fill what is possible, cancel the rest.
            postOnly: Only place as a maker order.
            clientOrderId: Caller-chosen order identifier.

        """
        flags = [f for f in (fillOrKill, immediateOrCancel, postOnly) if f]
        if len(flags) > 1:
            raise ValidationError(
                "Only one of fillOrKill, immediateOrCancel and postOnly may be set"
            )
        self.currencyPair = currencyPair
        self.rate = numeric_to_decimal(rate)
        self.amount = numeric_to_decimal(amount)
        self.fillOrKill = fillOrKill
        self.immediateOrCancel = immediateOrCancel
        self.postOnly = postOnly
        self.clientOrderId = clientOrderId


@dataclass
class MoveOrderRequest:
    """Parameters for moveOrder (cancel and replace at a new rate)."""

    orderNumber: OrderNumber
    rate: Decimal
    amount: Decimal | None
    postOnly: bool | None
    immediateOrCancel: bool | None
    clientOrderId: int | None

    def __init__(
        self,
        orderNumber: OrderNumber,
        rate: PoloniexNumericInput,
        amount: PoloniexNumericInput | None = None,
        postOnly: bool | None = None,
        immediateOrCancel: bool | None = None,
        clientOrderId: int | None = None,
    ):
        """Initialize a MoveOrderRequest.

        Args:
            orderNumber: Order to move.
            rate: New limit price (converted to Decimal).
            amount: New quantity; keeps the original when omitted.
            postOnly: Only place as a maker order.
            immediateOrCancel: Fill what is possible, cancel the rest.
            clientOrderId: Caller-chosen identifier for the new order.

        """
        if postOnly and immediateOrCancel:
            raise ValidationError(
                "Only one of postOnly and immediateOrCancel may be set"
            )
        self.orderNumber = orderNumber
        self.rate = numeric_to_decimal(rate)
        self.amount = numeric_to_decimal(amount)
        self.postOnly = postOnly
        self.immediateOrCancel = immediateOrCancel
        self.clientOrderId = clientOrderId


@dataclass
class WithdrawRequest:
    """Withdrawal request."""

    currency: str
    amount: Decimal
    address: str
    paymentId: str | None

    def __init__(
        self,
        currency: str,
        amount: PoloniexNumericInput,
        address: str,
        paymentId: str | None = None,
    ):
        """Initialize a WithdrawRequest.

        Args:
            currency: Currency to withdraw.
            amount: Amount to withdraw (converted to Decimal).
            address: Destination address.
            paymentId: Destination tag / memo for currencies that need one.

        """
        self.currency = currency
        self.amount = numeric_to_decimal(amount)
        self.address = address
        self.paymentId = paymentId


@dataclass
class TransferBalanceRequest:
    """Move funds between wallet accounts."""

    currency: str
    amount: Decimal
    fromAccount: Account
    toAccount: Account

    def __init__(
        self,
        currency: str,
        amount: PoloniexNumericInput,
        fromAccount: Account,
        toAccount: Account,
    ):
        """Initialize a TransferBalanceRequest.

        Args:
            currency: Currency to move.
            amount: Amount to move (converted to Decimal).
            fromAccount: Source account.
            toAccount: Destination account.

        """
        if Account.ALL in (fromAccount, toAccount):
            raise ValidationError("Cannot transfer to or from Account.ALL")
        if fromAccount == toAccount:
            raise ValidationError("fromAccount and toAccount must differ")
        self.currency = currency
        self.amount = numeric_to_decimal(amount)
        self.fromAccount = fromAccount
        self.toAccount = toAccount


@dataclass
class MarginOrderRequest:
    """Parameters for marginBuy and marginSell."""

    currencyPair: str
    rate: Decimal
    amount: Decimal
    lendingRate: Decimal | None

    def __init__(
        self,
        currencyPair: str,
        rate: PoloniexNumericInput,
        amount: PoloniexNumericInput,
        lendingRate: PoloniexNumericInput | None = None,
    ):
        """Initialize a MarginOrderRequest.

        Args:
            currencyPair: Market to trade.
            rate: Limit price (converted to Decimal).
            amount: Quantity to trade (converted to Decimal).
            lendingRate: Maximum lending rate to accept.

        """
        self.currencyPair = currencyPair
        self.rate = numeric_to_decimal(rate)
        self.amount = numeric_to_decimal(amount)
        self.lendingRate = numeric_to_decimal(lendingRate)


@dataclass
class LoanOfferRequest:
    """Parameters for createLoanOffer."""

    currency: str
    amount: Decimal
    duration: int
    autoRenew: bool
    lendingRate: Decimal

    def __init__(
        self,
        currency: str,
        amount: PoloniexNumericInput,
        duration: int,
        autoRenew: bool,
        lendingRate: PoloniexNumericInput,
    ):
        """Initialize a LoanOfferRequest.

        Args:
            currency: Currency to lend.
            amount: Amount to lend (converted to Decimal).
            duration: Loan duration in days.
            autoRenew: Renew the offer when the loan is repaid.
            lendingRate: Daily lending rate (converted to Decimal).

        """
        if isinstance(duration, bool) or not isinstance(duration, int):
            raise ValidationError(f"Invalid duration {duration!r}")
        if duration < 1:
            raise ValidationError("duration must be at least one day")
        self.currency = currency
        self.amount = numeric_to_decimal(amount)
        self.duration = duration
        self.autoRenew = autoRenew
        self.lendingRate = numeric_to_decimal(lendingRate)
