# utils/kucoin/kucoin_pr_margin.py
"""
BorrowLendClient: margin borrow, repay and lend endpoints.
Borrow/repay (/api/v1/margin/borrow*, /api/v1/margin/repay/*), lending
(/api/v1/margin/lend*, /api/v2/margin/lend*) and isolated-aware v2
borrow/repay and account queries.

Every method is a single transport call; the response envelope
({code, data} or the server's error shape) is returned as-is and transport
exceptions propagate untouched.
"""
from typing import Optional, Union

from .kucoin_pr_base import KucoinPrivateBase
from .kucoin_types import Envelope
from .kucoin_constants import (
    MARGIN_BORROW, MARGIN_BORROW_OUTSTANDING, MARGIN_BORROW_REPAID,
    MARGIN_REPAY_ALL, MARGIN_REPAY_SINGLE,
    MARGIN_LEND, MARGIN_TOGGLE_AUTO_LEND, MARGIN_LEND_ACTIVE, MARGIN_LEND_DONE,
    MARGIN_LEND_UNSETTLED, MARGIN_LEND_SETTLED, MARGIN_LEND_ASSETS,
    MARGIN_MARKET, MARGIN_TRADE_LAST,
    MARGIN_LEND_V2, MARGIN_LEND_CONFIG_V2, MARGIN_LEND_MARKET_V2,
    MARGIN_LEND_ORDERS_V2, MARGIN_LEND_TRADE_ORDERS_V2,
    MARGIN_BORROW_V2, MARGIN_REPAY_ALL_V2, MARGIN_REPAY_SINGLE_V2,
    MARGIN_ACCOUNTS_V2, ISOLATED_ACCOUNTS_V2,
    MARGIN_TRANSFERABLE_V2, ISOLATED_TRANSFERABLE_V2,
    MARGIN_RISK_LIMITS_V2, ISOLATED_RISK_LIMITS_V2,
)

Number = Union[int, float, str]


class BorrowLendClient(KucoinPrivateBase):
    """Margin borrow & lend operations."""

    # ------------------------
    # Borrow / repay (v1)
    # ------------------------
    async def post_borrow_order(
        self,
        currency: str,
        type_: str,
        size: Number,
        max_rate: Optional[Number] = None,
        term: Optional[str] = None,
    ) -> Envelope:
        """
        POST /api/v1/margin/borrow. Requires the "Trade" permission.

        Args:
            currency: Currency to borrow
            type_: FOK or IOC
            size: Total size
            max_rate: Max acceptable interest rate; any rate when omitted
            term: Comma separated terms in days, e.g. "7,14,28"; any term when omitted
        """
        params = self._params(currency=currency, type=type_, size=size, maxRate=max_rate, term=term)
        return await self.http.post(MARGIN_BORROW, params)

    async def get_borrow_order(self, order_id: str) -> Envelope:
        """GET /api/v1/margin/borrow"""
        return await self.http.get(MARGIN_BORROW, self._params(orderId=order_id))

    async def get_repay_record(self, currency: Optional[str] = None) -> Envelope:
        """GET /api/v1/margin/borrow/outstanding - outstanding loans, all currencies when omitted"""
        return await self.http.get(MARGIN_BORROW_OUTSTANDING, self._params(currency=currency))

    async def get_repayment_record(self, currency: Optional[str] = None) -> Envelope:
        """GET /api/v1/margin/borrow/repaid"""
        return await self.http.get(MARGIN_BORROW_REPAID, self._params(currency=currency))

    async def repay_all(self, currency: str, sequence: str, size: Number) -> Envelope:
        """
        POST /api/v1/margin/repay/all - one-click repayment.

        sequence is RECENTLY_EXPIRE_FIRST (nearest maturity first) or
        HIGHEST_RATE_FIRST (highest interest rate first).
        """
        params = self._params(currency=currency, sequence=sequence, size=size)
        return await self.http.post(MARGIN_REPAY_ALL, params)

    async def repay_single(self, currency: str, trade_id: str, size: Number) -> Envelope:
        """POST /api/v1/margin/repay/single"""
        params = self._params(currency=currency, tradeId=trade_id, size=size)
        return await self.http.post(MARGIN_REPAY_SINGLE, params)

    # ------------------------
    # Lend (v1)
    # ------------------------
    async def post_lend_order(self, currency: str, size: Number, daily_int_rate: Number, term: int) -> Envelope:
        """POST /api/v1/margin/lend - daily_int_rate 0.002 means 0.2%, term in days"""
        params = self._params(currency=currency, size=size, dailyIntRate=daily_int_rate, term=term)
        return await self.http.post(MARGIN_LEND, params)

    async def cancel_lend_order(self, order_id: str) -> Envelope:
        """DELETE /api/v1/margin/lend/{orderId}"""
        return await self.http.delete(f"{MARGIN_LEND}/{order_id}")

    async def set_auto_lend(
        self,
        currency: str,
        is_enable: bool,
        retain_size: Optional[Number] = None,
        daily_int_rate: Optional[Number] = None,
        term: Optional[int] = None,
    ) -> Envelope:
        """
        POST /api/v1/margin/toggle-auto-lend

        retain_size, daily_int_rate and term are required by the server when
        is_enable is True.
        """
        params = self._params(
            currency=currency,
            isEnable=is_enable,
            retainSize=retain_size,
            dailyIntRate=daily_int_rate,
            term=term,
        )
        return await self.http.post(MARGIN_TOGGLE_AUTO_LEND, params)

    async def get_active_order(
        self,
        currency: Optional[str] = None,
        current_page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Envelope:
        """GET /api/v1/margin/lend/active"""
        params = self._params(currency=currency, currentPage=current_page, pageSize=page_size)
        return await self.http.get(MARGIN_LEND_ACTIVE, params)

    async def get_lent_history(
        self,
        currency: Optional[str] = None,
        current_page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Envelope:
        """GET /api/v1/margin/lend/done"""
        params = self._params(currency=currency, currentPage=current_page, pageSize=page_size)
        return await self.http.get(MARGIN_LEND_DONE, params)

    async def get_active_lend_orders_list(
        self,
        currency: Optional[str] = None,
        current_page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Envelope:
        """GET /api/v1/margin/lend/trade/unsettled"""
        params = self._params(currency=currency, currentPage=current_page, pageSize=page_size)
        return await self.http.get(MARGIN_LEND_UNSETTLED, params)

    async def get_settled_lend_order_history(
        self,
        currency: Optional[str] = None,
        current_page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Envelope:
        """GET /api/v1/margin/lend/trade/settled"""
        params = self._params(currency=currency, currentPage=current_page, pageSize=page_size)
        return await self.http.get(MARGIN_LEND_SETTLED, params)

    async def get_account_lend_record(self, currency: Optional[str] = None) -> Envelope:
        """GET /api/v1/margin/lend/assets"""
        return await self.http.get(MARGIN_LEND_ASSETS, self._params(currency=currency))

    async def get_lending_market_data(self, currency: str, term: Optional[int] = None) -> Envelope:
        """GET /api/v1/margin/market"""
        return await self.http.get(MARGIN_MARKET, self._params(currency=currency, term=term))

    async def get_margin_fills_trade_data(self, currency: str) -> Envelope:
        """GET /api/v1/margin/trade/last - last 300 fills in the lending and borrowing market"""
        return await self.http.get(MARGIN_TRADE_LAST, self._params(currency=currency))

    # ------------------------
    # Lend (v2)
    # ------------------------
    async def get_lend_config(self, currency: Optional[str] = None) -> Envelope:
        """GET /api/v2/margin/lend/config"""
        return await self.http.get(MARGIN_LEND_CONFIG_V2, self._params(currency=currency))

    async def get_lend_markets(self, currency: Optional[str] = None, term: Optional[int] = None) -> Envelope:
        """GET /api/v2/margin/lend/market"""
        return await self.http.get(MARGIN_LEND_MARKET_V2, self._params(currency=currency, term=term))

    async def get_lend_order(
        self,
        status: Optional[str] = None,
        currency: Optional[str] = None,
        current_page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Envelope:
        """GET /api/v2/margin/lend/orders"""
        params = self._params(currency=currency, status=status, currentPage=current_page, pageSize=page_size)
        return await self.http.get(MARGIN_LEND_ORDERS_V2, params)

    async def get_single_lend_order(self, order_id: str) -> Envelope:
        """GET /api/v2/margin/lend"""
        return await self.http.get(MARGIN_LEND_V2, self._params(orderId=order_id))

    async def get_lend_records(
        self,
        status: Optional[str] = None,
        currency: Optional[str] = None,
        current_page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Envelope:
        """GET /api/v2/margin/lend/trade/orders"""
        params = self._params(currency=currency, status=status, currentPage=current_page, pageSize=page_size)
        return await self.http.get(MARGIN_LEND_TRADE_ORDERS_V2, params)

    # ------------------------
    # Borrow / repay (v2)
    # ------------------------
    async def borrow_v2(
        self,
        currency: str,
        size: Number,
        is_isolated: Optional[bool] = None,
        symbol: Optional[str] = None,
        time_in_force: Optional[str] = None,
    ) -> Envelope:
        """POST /api/v2/margin/borrow - symbol is required by the server for isolated borrowing"""
        params = self._params(
            isIsolated=is_isolated,
            symbol=symbol,
            currency=currency,
            size=size,
            timeInForce=time_in_force,
        )
        return await self.http.post(MARGIN_BORROW_V2, params)

    async def repay_all_v2(
        self,
        currency: str,
        size: Number,
        is_isolated: Optional[bool] = None,
        symbol: Optional[str] = None,
        sequence: Optional[str] = None,
    ) -> Envelope:
        """POST /api/v2/margin/repay/all"""
        params = self._params(
            isIsolated=is_isolated,
            symbol=symbol,
            currency=currency,
            size=size,
            sequence=sequence,
        )
        return await self.http.post(MARGIN_REPAY_ALL_V2, params)

    async def repay_single_v2(
        self,
        currency: str,
        trade_id: str,
        size: Number,
        is_isolated: Optional[bool] = None,
        symbol: Optional[str] = None,
    ) -> Envelope:
        """POST /api/v2/margin/repay/single"""
        params = self._params(
            isIsolated=is_isolated,
            symbol=symbol,
            currency=currency,
            tradeId=trade_id,
            size=size,
        )
        return await self.http.post(MARGIN_REPAY_SINGLE_V2, params)

    # ------------------------
    # Accounts / risk (v2)
    # ------------------------
    async def get_margin_accounts(
        self,
        quote_currency: Optional[str] = None,
        query_type: Optional[str] = None,
    ) -> Envelope:
        """GET /api/v2/margin/accounts"""
        params = self._params(quoteCurrency=quote_currency, queryType=query_type)
        return await self.http.get(MARGIN_ACCOUNTS_V2, params)

    async def get_isolated_accounts(
        self,
        symbol: Optional[str] = None,
        quote_currency: Optional[str] = None,
        query_type: Optional[str] = None,
    ) -> Envelope:
        """GET /api/v2/isolated/accounts"""
        params = self._params(symbol=symbol, quoteCurrency=quote_currency, queryType=query_type)
        return await self.http.get(ISOLATED_ACCOUNTS_V2, params)

    async def get_margin_transferable(
        self,
        currency: str,
        is_isolated: Optional[bool] = None,
        symbol: Optional[str] = None,
    ) -> Envelope:
        """GET /api/v2/margin/transferable"""
        params = self._params(currency=currency, isIsolated=is_isolated, symbol=symbol)
        return await self.http.get(MARGIN_TRANSFERABLE_V2, params)

    async def get_isolated_transferable(self, symbol: str, currency: str) -> Envelope:
        """GET /api/v2/isolated/transferable"""
        return await self.http.get(ISOLATED_TRANSFERABLE_V2, self._params(symbol=symbol, currency=currency))

    async def get_margin_risk_limits(
        self,
        is_isolated: Optional[bool] = None,
        symbol: Optional[str] = None,
        currency: Optional[str] = None,
    ) -> Envelope:
        """GET /api/v2/margin/riskLimits"""
        params = self._params(isIsolated=is_isolated, symbol=symbol, currency=currency)
        return await self.http.get(MARGIN_RISK_LIMITS_V2, params)

    async def get_isolated_risk_limits(self, symbol: Optional[str] = None) -> Envelope:
        """GET /api/v2/isolated/riskLimits"""
        return await self.http.get(ISOLATED_RISK_LIMITS_V2, self._params(symbol=symbol))
