"""utils/config.py - KuCoin client config

KuCoin için yapılandırma sınıfı. Default değerler ile gelir,
.env dosyasındaki değerlerle override edilir.
"""

import os
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional
from dotenv import load_dotenv

from utils.kucoin.kucoin_constants import BASE_URL, SANDBOX_URL

# Environment variables'ı yükle
load_dotenv()

logger = logging.getLogger(__name__)

# Global cache instance
_CONFIG_INSTANCE: Optional["KucoinConfig"] = None


@dataclass
class KucoinConfig:
    """KuCoin REST client configuration.

    Credentials are optional (public market endpoints work without them)
    but must be given all together.
    """

    # 🔐 Credentials
    api_key: Optional[str] = None
    secret_key: Optional[str] = None
    passphrase: Optional[str] = None

    # API URLs
    BASE_URL: str = BASE_URL
    SANDBOX: bool = False

    # Connection settings
    REQUEST_TIMEOUT: int = 30
    MAX_CONNECTIONS: int = 100
    MAX_CONNECTIONS_PER_HOST: int = 20

    # Retry settings
    MAX_RETRIES: int = 3
    RETRY_DELAY: float = 1.0

    # Rate limiting
    REQUESTS_PER_PERIOD: int = 10
    RATE_PERIOD: float = 1.0

    @classmethod
    def from_env(cls) -> "KucoinConfig":
        """Environment'dan config oluşturur."""
        sandbox = os.getenv("KUCOIN_SANDBOX", "false").lower() == "true"
        return cls(
            api_key=os.getenv("KUCOIN_API_KEY") or None,
            secret_key=os.getenv("KUCOIN_API_SECRET") or None,
            passphrase=os.getenv("KUCOIN_API_PASSPHRASE") or None,
            BASE_URL=os.getenv("KUCOIN_BASE_URL", SANDBOX_URL if sandbox else BASE_URL),
            SANDBOX=sandbox,
            REQUEST_TIMEOUT=int(os.getenv("KUCOIN_REQUEST_TIMEOUT", "30")),
            MAX_RETRIES=int(os.getenv("KUCOIN_MAX_RETRIES", "3")),
            RETRY_DELAY=float(os.getenv("KUCOIN_RETRY_DELAY", "1.0")),
            REQUESTS_PER_PERIOD=int(os.getenv("KUCOIN_REQUESTS_PER_PERIOD", "10")),
            RATE_PERIOD=float(os.getenv("KUCOIN_RATE_PERIOD", "1.0")),
        )

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.secret_key and self.passphrase)

    def validate(self) -> bool:
        """Config değerlerini doğrular.

        Returns:
            bool: Config geçerli ise True
        Raises:
            ValueError: Credentials are partial or a numeric setting is not positive
        """
        given = [bool(self.api_key), bool(self.secret_key), bool(self.passphrase)]
        if any(given) and not all(given):
            raise ValueError(
                "❌ KUCOIN_API_KEY, KUCOIN_API_SECRET and KUCOIN_API_PASSPHRASE must be set together."
            )

        if self.REQUEST_TIMEOUT <= 0:
            raise ValueError("❌ REQUEST_TIMEOUT must be positive.")
        if self.MAX_RETRIES < 0:
            raise ValueError("❌ MAX_RETRIES cannot be negative.")
        if self.RETRY_DELAY < 0:
            raise ValueError("❌ RETRY_DELAY cannot be negative.")
        if self.REQUESTS_PER_PERIOD <= 0 or self.RATE_PERIOD <= 0:
            raise ValueError("❌ REQUESTS_PER_PERIOD and RATE_PERIOD must be positive.")

        if not self.has_credentials:
            logger.warning("⚠️ No KuCoin credentials configured, private endpoints will be rejected.")

        return True

    def to_transport_config(self) -> Dict[str, Any]:
        """Map onto the KucoinHTTPClient config dict."""
        return {
            "timeout": self.REQUEST_TIMEOUT,
            "max_retries": self.MAX_RETRIES,
            "retry_delay": self.RETRY_DELAY,
            "requests_per_period": self.REQUESTS_PER_PERIOD,
            "rate_period": self.RATE_PERIOD,
            "connector_limit": self.MAX_CONNECTIONS,
            "connector_limit_per_host": self.MAX_CONNECTIONS_PER_HOST,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Config'i dict olarak döndürür (debug/log amaçlı), secrets masked."""
        data = {k: getattr(self, k) for k in self.__dataclass_fields__}
        for secret in ("api_key", "secret_key", "passphrase"):
            if data[secret]:
                data[secret] = "***"
        return data


def get_config() -> KucoinConfig:
    """Global config instance'ını döndürür.

    Singleton cache mekanizması ile yalnızca ilk çağrıda yüklenir.
    """
    global _CONFIG_INSTANCE
    if _CONFIG_INSTANCE is None:
        config = KucoinConfig.from_env()
        config.validate()
        _CONFIG_INSTANCE = config
        logger.info("✅ KuCoin config yüklendi")
    return _CONFIG_INSTANCE


def reset_config() -> None:
    """Drop the cached instance (tests, credential rotation)."""
    global _CONFIG_INSTANCE
    _CONFIG_INSTANCE = None
