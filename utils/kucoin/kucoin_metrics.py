"""
Metrics for KuCoin API requests.
"""

import time
import statistics
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class RequestMetrics:
    """Metrics for API requests."""
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    total_response_time: float = 0
    response_times: deque = field(default_factory=lambda: deque(maxlen=1000))
    errors_by_type: Dict[str, int] = field(default_factory=dict)


class KucoinMetrics:
    """
    Request metrics owned by a single HTTP client.

    The event loop is single threaded and nothing here awaits, so no lock
    is needed around the counters.
    """

    def __init__(self) -> None:
        self.request_metrics = RequestMetrics()
        self.start_time = time.time()

    def record_request(self, success: bool, response_time: float,
                       error_type: Optional[str] = None) -> None:
        """
        Record API request metrics.

        Args:
            success: Whether the request was successful
            response_time: Response time in seconds
            error_type: Type of error if request failed
        """
        m = self.request_metrics
        m.total_requests += 1
        m.total_response_time += response_time
        m.response_times.append(response_time)

        if success:
            m.successful_requests += 1
        else:
            m.failed_requests += 1
            if error_type:
                m.errors_by_type[error_type] = m.errors_by_type.get(error_type, 0) + 1

    def get_metrics(self) -> Dict[str, Any]:
        """Get all current metrics."""
        m = self.request_metrics
        response_times = list(m.response_times)
        avg_response_time = m.total_response_time / m.total_requests if m.total_requests > 0 else 0

        return {
            "uptime_seconds": time.time() - self.start_time,
            "total_requests": m.total_requests,
            "successful_requests": m.successful_requests,
            "failed_requests": m.failed_requests,
            "success_rate": (
                m.successful_requests / m.total_requests * 100
                if m.total_requests > 0 else 100
            ),
            "average_response_time": avg_response_time,
            "min_response_time": min(response_times) if response_times else 0,
            "max_response_time": max(response_times) if response_times else 0,
            "p95_response_time": (
                statistics.quantiles(response_times, n=100)[94]
                if len(response_times) >= 5 else 0
            ),
            "errors_by_type": dict(m.errors_by_type),
        }

    def reset(self) -> None:
        """Reset all metrics."""
        self.request_metrics = RequestMetrics()
        self.start_time = time.time()
