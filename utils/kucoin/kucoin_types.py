"""
KuCoin margin borrow/lend type definitions and type hints.
"""

from typing import Any, TypedDict


class Envelope(TypedDict, total=False):
    """Response envelope returned by every REST endpoint."""
    code: str
    msg: str
    success: bool
    data: Any
