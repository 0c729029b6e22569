"""
kucoin/kucoin_request.py
HTTP client for KuCoin API requests.
"""
# utils/kucoin/kucoin_request.py
import aiohttp
import asyncio
import base64
import hashlib
import hmac
import json
import logging
import platform
import time
import urllib.parse
from enum import Enum
from typing import Any, Dict, Optional

from aiolimiter import AsyncLimiter

from .kucoin_constants import API_KEY_VERSION, BASE_URL, DEFAULT_CONFIG, SERVER_TIME
from .kucoin_exceptions import (
    KucoinAPIError, KucoinRequestError, KucoinRateLimitError,
    KucoinAuthenticationError, KucoinTimeoutError
)
from .kucoin_metrics import KucoinMetrics


logger = logging.getLogger(__name__)

# Resent after timeouts and connection errors; POSTs go out once.
RETRYABLE_METHODS = ("GET", "DELETE")


class KucoinHTTPClient:
    """
    Async HTTP client for KuCoin API with signing, retry logic and error handling.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        passphrase: Optional[str] = None,
        base_url: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize HTTP client.

        Args:
            api_key: KuCoin API key
            secret_key: KuCoin API secret
            passphrase: Passphrase chosen when the API key was created
            base_url: REST base URL (optional)
            config: Configuration dictionary, merged over DEFAULT_CONFIG
            session: Existing aiohttp session (optional)
        """
        self.api_key = api_key
        self.secret_key = secret_key
        self.passphrase = passphrase
        self.base_url = (base_url or BASE_URL).rstrip("/")

        self.config = {**DEFAULT_CONFIG, **(config or {})}

        self._session_provided_externally = session is not None
        self._session = session

        self.limiter = AsyncLimiter(self.config["requests_per_period"], self.config["rate_period"])
        self.metrics = KucoinMetrics()

        logger.info(f"✅ KucoinHTTPClient initialized - Base URL: {self.base_url}")

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.secret_key and self.passphrase)

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session with connection pooling."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config["timeout"])
            connector = aiohttp.TCPConnector(
                limit=self.config.get("connector_limit", 100),
                limit_per_host=self.config.get("connector_limit_per_host", 20),
                enable_cleanup_closed=True
            )
            self._session = aiohttp.ClientSession(timeout=timeout, connector=connector)
            self._session_provided_externally = False
        return self._session

    async def close(self) -> None:
        """Close HTTP session if we own it."""
        if (self._session and
                not self._session.closed and
                not self._session_provided_externally):
            await self._session.close()
            logger.info("✅ KucoinHTTPClient session closed")

    @staticmethod
    def _encode_query(params: Optional[Dict[str, Any]]) -> str:
        """Build a query string, dropping None values."""
        if not params:
            return ""
        pairs = []
        for key, value in params.items():
            if value is None:
                continue
            if isinstance(value, bool):
                value = "true" if value else "false"
            elif isinstance(value, Enum):
                value = value.value
            pairs.append((key, value))
        return urllib.parse.urlencode(pairs)

    @staticmethod
    def _encode_body(params: Optional[Dict[str, Any]]) -> str:
        """Build a compact JSON body, dropping None values."""
        if not params:
            return ""
        body = {k: (v.value if isinstance(v, Enum) else v) for k, v in params.items() if v is not None}
        return json.dumps(body, separators=(",", ":"))

    def _sign(self, payload: str) -> str:
        """
        base64(HMAC-SHA256(secret, payload)).

        Args:
            payload: String to sign

        Returns:
            Signature string
        """
        if not self.secret_key:
            raise KucoinAuthenticationError("Secret key required for signed requests")

        digest = hmac.new(
            self.secret_key.encode('utf-8'),
            payload.encode('utf-8'),
            hashlib.sha256
        ).digest()
        return base64.b64encode(digest).decode('utf-8')

    def _auth_headers(self, method: str, request_path: str, body: str) -> Dict[str, str]:
        """
        Build KC-API-* headers for a request.

        Args:
            method: HTTP method
            request_path: Endpoint including the encoded query string
            body: Encoded JSON body ("" when there is none)

        Returns:
            Authentication headers
        """
        if not self.has_credentials:
            raise KucoinAuthenticationError("API key, secret and passphrase required for signed requests")

        timestamp = str(int(time.time() * 1000))
        return {
            'KC-API-KEY': self.api_key,
            'KC-API-SIGN': self._sign(timestamp + method + request_path + body),
            'KC-API-TIMESTAMP': timestamp,
            'KC-API-PASSPHRASE': self._sign(self.passphrase),
            'KC-API-KEY-VERSION': API_KEY_VERSION,
        }

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        signed: Optional[bool] = None,
        retries: Optional[int] = None
    ) -> Any:
        """
        Make HTTP request to KuCoin API.

        Args:
            method: HTTP method (GET, POST, DELETE)
            endpoint: API endpoint
            params: Query parameters for GET/DELETE, JSON body for POST
            signed: Whether to sign; defaults to signing when credentials exist
            retries: Number of retries; defaults to config max_retries for
                GET/DELETE and 0 for POST, so orders are never resent implicitly

        Returns:
            Parsed response body, verbatim

        Raises:
            KucoinAPIError: For API errors
            KucoinRequestError: For request errors
        """
        method = method.upper()
        if retries is None:
            retries = self.config["max_retries"] if method in RETRYABLE_METHODS else 0
        signed = self.has_credentials if signed is None else signed

        if method in ("GET", "DELETE"):
            query = self._encode_query(params)
            request_path = f"{endpoint}?{query}" if query else endpoint
            body = ""
        else:
            request_path = endpoint
            body = self._encode_body(params)

        url = f"{self.base_url}{request_path}"

        last_exception: Optional[Exception] = None
        for attempt in range(retries + 1):
            headers = {
                'Content-Type': 'application/json',
                'User-Agent': f'KucoinPythonClient/1.0 (Python {platform.python_version()})'
            }
            if signed:
                headers.update(self._auth_headers(method, request_path, body))

            try:
                async with self.limiter:
                    session = await self._get_session()
                    start_time = time.time()

                    async with session.request(
                        method=method,
                        url=url,
                        data=body or None,
                        headers=headers
                    ) as response:
                        response_time = time.time() - start_time
                        text = await response.text()

                        if response.status == 200:
                            try:
                                data = json.loads(text)
                            except ValueError:
                                self.metrics.record_request(False, response_time, "invalid_response")
                                raise KucoinRequestError(f"Invalid JSON response: {text[:200]}", status=200)
                            self.metrics.record_request(True, response_time)
                            return data

                        self._handle_error(response.status, text, response_time)

            except asyncio.TimeoutError:
                self.metrics.record_request(False, self.config["timeout"], "timeout")
                last_exception = KucoinTimeoutError(f"Request timeout after {self.config['timeout']}s")

            except aiohttp.ClientError as e:
                self.metrics.record_request(False, 0, "connection_error")
                last_exception = KucoinRequestError(f"HTTP client error: {e}")

            if attempt < retries:
                delay = self.config["retry_delay"] * (2 ** attempt)
                logger.warning(f"Retry {attempt + 1}/{retries} for {method} {endpoint} after {delay}s delay")
                await asyncio.sleep(delay)

        raise last_exception or KucoinRequestError("Unknown request error")

    def _handle_error(self, status_code: int, error_data: str, response_time: float) -> None:
        """
        Raise the exception matching a non-200 response.

        Args:
            status_code: HTTP status code
            error_data: Raw response body
            response_time: Response time in seconds
        """
        try:
            error_json = json.loads(error_data) if error_data else {}
        except ValueError:
            self.metrics.record_request(False, response_time, "invalid_response")
            raise KucoinRequestError(f"HTTP {status_code}: Invalid response: {error_data[:200]}", status=status_code)

        if not isinstance(error_json, dict):
            error_json = {"data": error_json}
        error_code = error_json.get('code')
        error_msg = error_json.get('msg', 'Unknown error')

        self.metrics.record_request(False, response_time, f"api_error_{error_code or status_code}")

        if status_code == 429:
            raise KucoinRateLimitError(error_msg, error_code, error_json, status_code)
        elif status_code == 401:
            raise KucoinAuthenticationError(error_msg, error_code, error_json, status_code)
        elif status_code >= 400:
            raise KucoinAPIError(error_msg, error_code, error_json, status_code)
        else:
            raise KucoinRequestError(f"HTTP {status_code}: {error_msg}", error_code, error_json, status_code)

    async def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Make GET request."""
        return await self._request('GET', endpoint, params)

    async def post(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Make POST request."""
        return await self._request('POST', endpoint, params)

    async def delete(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Make DELETE request."""
        return await self._request('DELETE', endpoint, params)

    async def health_check(self) -> bool:
        """Check if API is reachable."""
        try:
            await self._request('GET', SERVER_TIME, signed=False, retries=0)
            return True
        except KucoinAPIError:
            return False

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
