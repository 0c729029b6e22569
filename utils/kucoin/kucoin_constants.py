"""KuCoin API constants and enum definitions."""

from enum import Enum


class BorrowOrderType(str, Enum):
    FOK = "FOK"
    IOC = "IOC"


class RepaySequence(str, Enum):
    RECENTLY_EXPIRE_FIRST = "RECENTLY_EXPIRE_FIRST"
    HIGHEST_RATE_FIRST = "HIGHEST_RATE_FIRST"


class AccountQueryType(str, Enum):
    MARGIN = "MARGIN"
    MARGIN_V2 = "MARGIN_V2"
    ISOLATED = "ISOLATED"
    ISOLATED_V2 = "ISOLATED_V2"
    ALL = "ALL"


# API Endpoint'leri
BASE_URL = "https://api.kucoin.com"
SANDBOX_URL = "https://openapi-sandbox.kucoin.com"

API_KEY_VERSION = "2"

DEFAULT_CONFIG = {
    "timeout": 30,
    "max_retries": 3,
    "retry_delay": 1.0,
    "requests_per_period": 10,
    "rate_period": 1.0,
    "connector_limit": 100,
    "connector_limit_per_host": 20,
}

# Public Endpoints
SERVER_TIME = "/api/v1/timestamp"

# Borrow / repay (v1)
MARGIN_BORROW = "/api/v1/margin/borrow"
MARGIN_BORROW_OUTSTANDING = "/api/v1/margin/borrow/outstanding"
MARGIN_BORROW_REPAID = "/api/v1/margin/borrow/repaid"
MARGIN_REPAY_ALL = "/api/v1/margin/repay/all"
MARGIN_REPAY_SINGLE = "/api/v1/margin/repay/single"

# Lend (v1)
MARGIN_LEND = "/api/v1/margin/lend"
MARGIN_TOGGLE_AUTO_LEND = "/api/v1/margin/toggle-auto-lend"
MARGIN_LEND_ACTIVE = "/api/v1/margin/lend/active"
MARGIN_LEND_DONE = "/api/v1/margin/lend/done"
MARGIN_LEND_UNSETTLED = "/api/v1/margin/lend/trade/unsettled"
MARGIN_LEND_SETTLED = "/api/v1/margin/lend/trade/settled"
MARGIN_LEND_ASSETS = "/api/v1/margin/lend/assets"
MARGIN_MARKET = "/api/v1/margin/market"
MARGIN_TRADE_LAST = "/api/v1/margin/trade/last"

# Lend (v2)
MARGIN_LEND_V2 = "/api/v2/margin/lend"
MARGIN_LEND_CONFIG_V2 = "/api/v2/margin/lend/config"
MARGIN_LEND_MARKET_V2 = "/api/v2/margin/lend/market"
MARGIN_LEND_ORDERS_V2 = "/api/v2/margin/lend/orders"
MARGIN_LEND_TRADE_ORDERS_V2 = "/api/v2/margin/lend/trade/orders"

# Borrow / repay (v2, isolated-aware)
MARGIN_BORROW_V2 = "/api/v2/margin/borrow"
MARGIN_REPAY_ALL_V2 = "/api/v2/margin/repay/all"
MARGIN_REPAY_SINGLE_V2 = "/api/v2/margin/repay/single"

# Accounts / risk (v2)
MARGIN_ACCOUNTS_V2 = "/api/v2/margin/accounts"
ISOLATED_ACCOUNTS_V2 = "/api/v2/isolated/accounts"
MARGIN_TRANSFERABLE_V2 = "/api/v2/margin/transferable"
ISOLATED_TRANSFERABLE_V2 = "/api/v2/isolated/transferable"
MARGIN_RISK_LIMITS_V2 = "/api/v2/margin/riskLimits"
ISOLATED_RISK_LIMITS_V2 = "/api/v2/isolated/riskLimits"
