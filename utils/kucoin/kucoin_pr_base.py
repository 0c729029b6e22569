# utils/kucoin/kucoin_pr_base.py
"""
Common base for all private domain clients.
Holds the injected transport; the transport owns signing, retry and errors.
"""
from typing import Any, Dict

from .kucoin_request import KucoinHTTPClient


class KucoinPrivateBase:
    """
    Base class for private KuCoin clients.

    Attributes:
        http: KucoinHTTPClient instance (or anything with get/post/delete coroutines)
    """

    def __init__(self, http_client: KucoinHTTPClient) -> None:
        self.http = http_client

    @staticmethod
    def _params(**kwargs: Any) -> Dict[str, Any]:
        """Wire parameters with omitted (None) values left out."""
        return {k: v for k, v in kwargs.items() if v is not None}
