# utils/kucoin/kucoin_a.py
"""
KuCoin API aggregator
--------------------------------------------------
Builds one HTTP transport and the domain clients that share it.

🔒 GÜVENLİK POLİTİKASI:
- API key'ler asla tam olarak loglanmaz
- Secret key'ler ve passphrase hiçbir zaman loglanmaz
"""

import logging
from typing import Any, Dict, Optional

from .. import config as kucoin_config
from .kucoin_request import KucoinHTTPClient
from .kucoin_pr_margin import BorrowLendClient

logger = logging.getLogger(__name__)


def _mask(value: Optional[str]) -> str:
    if not value:
        return "<none>"
    return f"{value[:4]}***" if len(value) > 8 else "***"


class KucoinAPI:
    """
    Composition root for the KuCoin REST clients.

    Either pass a ready transport (tests, shared sessions) or let the
    client build one from a KucoinConfig.
    """

    def __init__(self, config: Optional["kucoin_config.KucoinConfig"] = None, http_client: Optional[KucoinHTTPClient] = None) -> None:
        self.config = config or kucoin_config.KucoinConfig()
        if http_client is None:
            http_client = KucoinHTTPClient(
                api_key=self.config.api_key,
                secret_key=self.config.secret_key,
                passphrase=self.config.passphrase,
                base_url=self.config.BASE_URL,
                config=self.config.to_transport_config(),
            )
        self.http = http_client
        self.margin = BorrowLendClient(self.http)
        logger.info(f"✅ KucoinAPI ready - key: {_mask(self.config.api_key)}")

    @classmethod
    def create(cls, config: Optional["kucoin_config.KucoinConfig"] = None) -> "KucoinAPI":
        """Build from the given config, or from the environment when omitted."""
        if config is None:
            config = kucoin_config.get_config()
        else:
            config.validate()
        return cls(config)

    async def close(self) -> None:
        await self.http.close()

    def get_metrics(self) -> Dict[str, Any]:
        return self.http.metrics.get_metrics()

    def reset_metrics(self) -> None:
        self.http.metrics.reset()

    async def __aenter__(self) -> "KucoinAPI":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
