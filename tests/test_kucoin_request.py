"""Tests for KucoinHTTPClient against a mocked aiohttp session."""

import asyncio
import base64
import hashlib
import hmac
import json

import aiohttp
import pytest

from utils.kucoin import (
    BorrowLendClient, AccountQueryType, BorrowOrderType,
    KucoinHTTPClient, KucoinAPIError, KucoinRequestError, KucoinTimeoutError,
    KucoinAuthenticationError, KucoinRateLimitError,
)

FAST = {"retry_delay": 0, "max_retries": 2, "requests_per_period": 100}


def _b64_hmac(secret: str, payload: str) -> str:
    return base64.b64encode(hmac.new(secret.encode(), payload.encode(), hashlib.sha256).digest()).decode()


@pytest.fixture
def client(mock_session):
    return KucoinHTTPClient(
        api_key="key-1",
        secret_key="secret-1",
        passphrase="pass-1",
        base_url="https://api.example.test/",
        config=FAST,
        session=mock_session,
    )


@pytest.fixture
def frozen_time(monkeypatch):
    monkeypatch.setattr("utils.kucoin.kucoin_request.time.time", lambda: 1700000000.123)
    return "1700000000123"


def test_encode_query_drops_none_and_renders_bools():
    query = KucoinHTTPClient._encode_query({"currency": "BTC", "term": None, "isIsolated": True, "currentPage": 0})

    assert query == "currency=BTC&isIsolated=true&currentPage=0"


def test_encode_body_is_compact_json_without_none():
    body = KucoinHTTPClient._encode_body({"currency": "USDT", "maxRate": None, "size": 10})

    assert body == '{"currency":"USDT","size":10}'
    assert KucoinHTTPClient._encode_body({}) == ""


def test_encode_uses_enum_values():
    assert KucoinHTTPClient._encode_query({"queryType": AccountQueryType.MARGIN_V2}) == "queryType=MARGIN_V2"
    assert KucoinHTTPClient._encode_body({"type": BorrowOrderType.FOK}) == '{"type":"FOK"}'


def test_auth_headers_sign_timestamp_method_path_and_body(client, frozen_time):
    headers = client._auth_headers("POST", "/api/v1/margin/lend", '{"currency":"BTC"}')

    assert headers["KC-API-KEY"] == "key-1"
    assert headers["KC-API-TIMESTAMP"] == frozen_time
    assert headers["KC-API-KEY-VERSION"] == "2"
    assert headers["KC-API-SIGN"] == _b64_hmac(
        "secret-1", frozen_time + "POST" + "/api/v1/margin/lend" + '{"currency":"BTC"}'
    )
    assert headers["KC-API-PASSPHRASE"] == _b64_hmac("secret-1", "pass-1")


@pytest.mark.asyncio
async def test_get_encodes_query_into_url_and_signature(client, mock_session, make_response, frozen_time):
    mock_session.responses = [make_response(200, '{"code":"200000","data":{"items":[]}}')]

    result = await client.get("/api/v1/margin/lend/active", {"currency": "BTC", "currentPage": 2, "pageSize": 50})

    assert result == {"code": "200000", "data": {"items": []}}
    kwargs = mock_session.request.call_args.kwargs
    assert kwargs["method"] == "GET"
    assert kwargs["url"] == "https://api.example.test/api/v1/margin/lend/active?currency=BTC&currentPage=2&pageSize=50"
    assert kwargs["data"] is None
    assert kwargs["headers"]["KC-API-SIGN"] == _b64_hmac(
        "secret-1", frozen_time + "GET" + "/api/v1/margin/lend/active?currency=BTC&currentPage=2&pageSize=50"
    )


@pytest.mark.asyncio
async def test_post_sends_json_body(client, mock_session, make_response, frozen_time):
    mock_session.responses = [make_response(200, '{"code":"200000","data":{"orderId":"x"}}')]

    await client.post("/api/v1/margin/borrow", {"currency": "USDT", "type": "FOK", "size": 10})

    kwargs = mock_session.request.call_args.kwargs
    assert kwargs["url"] == "https://api.example.test/api/v1/margin/borrow"
    assert json.loads(kwargs["data"]) == {"currency": "USDT", "type": "FOK", "size": 10}
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert kwargs["headers"]["KC-API-SIGN"] == _b64_hmac(
        "secret-1", frozen_time + "POST" + "/api/v1/margin/borrow" + kwargs["data"]
    )


@pytest.mark.asyncio
async def test_delete_without_params_has_bare_path(client, mock_session, make_response):
    mock_session.responses = [make_response(200, '{"code":"200000","data":null}')]

    await client.delete("/api/v1/margin/lend/abc123")

    kwargs = mock_session.request.call_args.kwargs
    assert kwargs["method"] == "DELETE"
    assert kwargs["url"] == "https://api.example.test/api/v1/margin/lend/abc123"


@pytest.mark.asyncio
async def test_api_error_code_in_200_body_is_returned(client, mock_session, make_response):
    mock_session.responses = [make_response(200, '{"code":"400100","msg":"Balance insufficient!"}')]

    result = await client.post("/api/v1/margin/repay/all", {"currency": "USDT"})

    assert result == {"code": "400100", "msg": "Balance insufficient!"}


@pytest.mark.asyncio
@pytest.mark.parametrize("status,exc_type", [
    (400, KucoinAPIError),
    (401, KucoinAuthenticationError),
    (404, KucoinAPIError),
    (429, KucoinRateLimitError),
    (500, KucoinAPIError),
])
async def test_http_errors_raise_with_payload(client, mock_session, make_response, status, exc_type):
    mock_session.responses = [make_response(status, '{"code":"411100","msg":"User is frozen"}')]

    with pytest.raises(exc_type) as exc_info:
        await client.get("/api/v2/margin/accounts")

    err = exc_info.value
    assert err.code == "411100"
    assert err.msg == "User is frozen"
    assert err.status == status
    assert err.payload == {"code": "411100", "msg": "User is frozen"}
    # API errors are not retried
    assert mock_session.request.call_count == 1


@pytest.mark.asyncio
async def test_unparseable_error_body_raises_request_error(client, mock_session, make_response):
    mock_session.responses = [make_response(502, "<html>Bad Gateway</html>")]

    with pytest.raises(KucoinRequestError):
        await client.get("/api/v1/margin/market", {"currency": "USDT"})


@pytest.mark.asyncio
async def test_unparseable_success_body_raises_request_error(client, mock_session, make_response):
    mock_session.responses = [make_response(200, "not json")]

    with pytest.raises(KucoinRequestError):
        await client.get("/api/v1/margin/market", {"currency": "USDT"})


@pytest.mark.asyncio
async def test_connection_error_is_retried(client, mock_session, make_response):
    mock_session.responses = [
        aiohttp.ClientConnectionError("reset by peer"),
        make_response(200, '{"code":"200000","data":[]}'),
    ]

    result = await client.get("/api/v1/margin/trade/last", {"currency": "USDT"})

    assert result == {"code": "200000", "data": []}
    assert mock_session.request.call_count == 2
    metrics = client.metrics.get_metrics()
    assert metrics["successful_requests"] == 1
    assert metrics["errors_by_type"] == {"connection_error": 1}


@pytest.mark.asyncio
async def test_timeouts_exhaust_retries(client, mock_session):
    mock_session.responses = [asyncio.TimeoutError() for _ in range(3)]

    with pytest.raises(KucoinTimeoutError):
        await client.get("/api/v1/margin/market", {"currency": "USDT"})

    assert mock_session.request.call_count == 3


@pytest.mark.asyncio
async def test_signed_request_without_credentials_is_rejected(mock_session):
    client = KucoinHTTPClient(config=FAST, session=mock_session)

    with pytest.raises(KucoinAuthenticationError):
        await client._request("GET", "/api/v1/margin/borrow", {"orderId": "x"}, signed=True)

    mock_session.request.assert_not_called()


@pytest.mark.asyncio
async def test_requests_unsigned_without_credentials(mock_session, make_response):
    client = KucoinHTTPClient(config=FAST, session=mock_session)
    mock_session.responses = [make_response(200, '{"code":"200000","data":[]}')]

    await client.get("/api/v1/margin/market", {"currency": "USDT"})

    headers = mock_session.request.call_args.kwargs["headers"]
    assert not any(name.startswith("KC-API-") for name in headers)


@pytest.mark.asyncio
async def test_close_leaves_external_session_open(client, mock_session):
    await client.close()

    mock_session.close.assert_not_called()


@pytest.mark.asyncio
async def test_close_closes_owned_session():
    client = KucoinHTTPClient(config=FAST)
    session = await client._get_session()

    await client.close()

    assert session.closed


@pytest.mark.asyncio
async def test_health_check(client, mock_session, make_response):
    mock_session.responses = [
        make_response(200, '{"code":"200000","data":1700000000000}'),
        make_response(503, '{"code":"503000","msg":"Service unavailable"}'),
    ]

    assert await client.health_check() is True
    assert await client.health_check() is False


@pytest.mark.asyncio
async def test_enum_query_type_reaches_url_and_signature(client, mock_session, make_response, frozen_time):
    mock_session.responses = [make_response(200, '{"code":"200000","data":{"accounts":[]}}')]
    margin = BorrowLendClient(client)

    await margin.get_margin_accounts(query_type=AccountQueryType.MARGIN_V2)

    kwargs = mock_session.request.call_args.kwargs
    assert kwargs["url"] == "https://api.example.test/api/v2/margin/accounts?queryType=MARGIN_V2"
    assert kwargs["headers"]["KC-API-SIGN"] == _b64_hmac(
        "secret-1", frozen_time + "GET" + "/api/v2/margin/accounts?queryType=MARGIN_V2"
    )


@pytest.mark.asyncio
async def test_post_timeout_is_not_resent(client, mock_session, make_response):
    mock_session.responses = [
        asyncio.TimeoutError(),
        make_response(200, '{"code":"200000","data":{"orderId":"x"}}'),
    ]
    margin = BorrowLendClient(client)

    with pytest.raises(KucoinTimeoutError):
        await margin.post_borrow_order("USDT", "FOK", 10)

    assert mock_session.request.call_count == 1


@pytest.mark.asyncio
async def test_post_connection_error_is_not_resent(client, mock_session, make_response):
    mock_session.responses = [
        aiohttp.ClientConnectionError("reset by peer"),
        make_response(200, '{"code":"200000","data":null}'),
    ]

    with pytest.raises(KucoinRequestError):
        await client.post("/api/v1/margin/repay/all", {"currency": "USDT", "sequence": "HIGHEST_RATE_FIRST", "size": 5})

    assert mock_session.request.call_count == 1


@pytest.mark.asyncio
async def test_post_retries_when_requested_explicitly(client, mock_session, make_response):
    mock_session.responses = [
        asyncio.TimeoutError(),
        make_response(200, '{"code":"200000","data":{"orderId":"x"}}'),
    ]

    result = await client._request("POST", "/api/v1/margin/borrow", {"currency": "USDT"}, retries=1)

    assert result == {"code": "200000", "data": {"orderId": "x"}}
    assert mock_session.request.call_count == 2
