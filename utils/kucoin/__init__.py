"""utils/kucoin/__init__.py - Public exports."""

from .kucoin_a import KucoinAPI
from .kucoin_request import KucoinHTTPClient
from .kucoin_pr_base import KucoinPrivateBase
from .kucoin_pr_margin import BorrowLendClient
from .kucoin_constants import BorrowOrderType, RepaySequence, AccountQueryType
from .kucoin_exceptions import (
    KucoinAPIError, KucoinRequestError, KucoinTimeoutError,
    KucoinAuthenticationError, KucoinRateLimitError
)
from .kucoin_metrics import KucoinMetrics, RequestMetrics
from .kucoin_types import Envelope

__all__ = [
    'KucoinAPI', 'KucoinHTTPClient', 'KucoinPrivateBase', 'BorrowLendClient',
    'BorrowOrderType', 'RepaySequence', 'AccountQueryType',
    'KucoinAPIError', 'KucoinRequestError', 'KucoinTimeoutError',
    'KucoinAuthenticationError', 'KucoinRateLimitError',
    'KucoinMetrics', 'RequestMetrics',
    'Envelope',
]
