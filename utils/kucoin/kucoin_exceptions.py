"""KuCoin API exception classes."""

from typing import Any, Dict, Optional


class KucoinAPIError(Exception):
    """Base exception for KuCoin API errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
        status: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.msg = message
        self.code = code
        self.payload = payload or {}
        self.status = status


class KucoinRequestError(KucoinAPIError):
    """Transport level failures (connection, unreadable response)."""
    pass


class KucoinTimeoutError(KucoinRequestError):
    """Request timed out."""
    pass


class KucoinAuthenticationError(KucoinAPIError):
    """Missing or rejected credentials."""
    pass


class KucoinRateLimitError(KucoinAPIError):
    """HTTP 429 from the exchange."""
    pass
