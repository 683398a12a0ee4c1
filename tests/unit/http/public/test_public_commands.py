import pytest

from poloniex_api.executors.interface import HttpResponse
from poloniex_api.types import (
    ChartDataRequest,
    ChartPeriod,
    LoanOrdersRequest,
    OrderBookRequest,
    PublicTradeHistoryRequest,
)
from tests.mock_executors import MockSuccessfulOutput
from tests.unit.conftest import load_json, load_json_all_cases


def public_query(expected_query: str):
    return (
        lambda call: call.function_name == "send"
        and call.config.method == "GET"
        and call.config.path == "/public"
        and call.config.query == expected_query
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("test_data", load_json_all_cases("response.order_book"))
async def test_return_order_book(mock_public_client, test_data):
    payload, path = test_data
    client, mock_http = mock_public_client

    mock_http.stage_output(
        MockSuccessfulOutput(
            output=HttpResponse(status=200, data=payload),
            call_validation=public_query(
                "command=returnOrderBook&currencyPair=BTC_ETH&depth=10"
            ),
        )
    )

    response = await client.return_order_book(OrderBookRequest("BTC_ETH", depth=10))

    assert len(response.data["asks"]) == len(payload["asks"])
    assert len(response.data["bids"]) == len(payload["bids"])
    assert response.data["seq"] == payload["seq"]


@pytest.mark.asyncio
async def test_return_order_book_defaults_to_all(mock_public_client):
    client, mock_http = mock_public_client
    mock_http.stage_output(
        MockSuccessfulOutput(
            output=HttpResponse(status=200, data={}),
            call_validation=public_query("command=returnOrderBook&currencyPair=all"),
        )
    )

    await client.return_order_book()


@pytest.mark.asyncio
async def test_return_ticker(mock_public_client):
    client, mock_http = mock_public_client
    payload = load_json("response.ticker")
    mock_http.stage_output(
        MockSuccessfulOutput(
            output=HttpResponse(status=200, data=payload),
            call_validation=public_query("command=returnTicker"),
        )
    )

    response = await client.return_ticker()

    assert response.data["BTC_ETH"]["last"] == "0.07440000"


@pytest.mark.asyncio
async def test_return_chart_data(mock_public_client):
    client, mock_http = mock_public_client
    payload = load_json("response.chart_data")
    mock_http.stage_output(
        MockSuccessfulOutput(
            output=HttpResponse(status=200, data=payload),
            call_validation=public_query(
                "command=returnChartData&currencyPair=BTC_XMR&period=14400"
                "&start=1405699200&end=9999999999"
            ),
        )
    )

    response = await client.return_chart_data(
        ChartDataRequest(
            currencyPair="BTC_XMR",
            period=ChartPeriod.FOUR_HOURS,
            start=1405699200,
            end=9999999999,
        )
    )

    assert [candle["date"] for candle in response.data] == [1405699200, 1405713600]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, args, expected_query",
    [
        ("return_24h_volume", (), "command=return24hVolume"),
        ("return_currencies", (), "command=returnCurrencies"),
        (
            "return_loan_orders",
            (LoanOrdersRequest(currency="BTC"),),
            "command=returnLoanOrders&currency=BTC",
        ),
        (
            "return_public_trade_history",
            (PublicTradeHistoryRequest("BTC_NXT"),),
            "command=returnTradeHistory&currencyPair=BTC_NXT",
        ),
        (
            "return_public_trade_history",
            (PublicTradeHistoryRequest("BTC_NXT", start=1410158341, end=1410499372),),
            "command=returnTradeHistory&currencyPair=BTC_NXT&start=1410158341&end=1410499372",
        ),
    ],
)
async def test_public_command_queries(mock_public_client, method, args, expected_query):
    client, mock_http = mock_public_client
    mock_http.stage_output(
        MockSuccessfulOutput(
            output=HttpResponse(status=200, data={}),
            call_validation=public_query(expected_query),
        )
    )

    await getattr(client, method)(*args)
