import asyncio
import argparse
import json
import logging
from typing import Any, Optional

from dotenv import load_dotenv

from utils.config import get_config
from utils.kucoin import KucoinAPI, KucoinAPIError

# ---------------------------------------------------------------------
# Config & Logging Setup
# ---------------------------------------------------------------------
load_dotenv()

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="KuCoin margin borrow & lend queries")
    sub = parser.add_subparsers(dest="command", required=True)

    market = sub.add_parser("market", help="Lending market data (v1)")
    market.add_argument("currency")
    market.add_argument("--term", type=int)

    fills = sub.add_parser("fills", help="Last fills in the lending market")
    fills.add_argument("currency")

    lend_config = sub.add_parser("lend-config", help="Lending configuration (v2)")
    lend_config.add_argument("--currency")

    active = sub.add_parser("active", help="Active lend orders")
    active.add_argument("--currency")
    active.add_argument("--page", type=int)
    active.add_argument("--page-size", type=int)

    outstanding = sub.add_parser("outstanding", help="Outstanding borrow records")
    outstanding.add_argument("--currency")

    accounts = sub.add_parser("accounts", help="Cross margin accounts (v2)")
    accounts.add_argument("--quote-currency")
    return parser


async def run(args: argparse.Namespace) -> Optional[Any]:
    async with KucoinAPI.create(get_config()) as api:
        margin = api.margin
        if args.command == "market":
            return await margin.get_lending_market_data(args.currency, args.term)
        if args.command == "fills":
            return await margin.get_margin_fills_trade_data(args.currency)
        if args.command == "lend-config":
            return await margin.get_lend_config(args.currency)
        if args.command == "active":
            return await margin.get_active_order(args.currency, current_page=args.page, page_size=args.page_size)
        if args.command == "outstanding":
            return await margin.get_repay_record(args.currency)
        if args.command == "accounts":
            return await margin.get_margin_accounts(quote_currency=args.quote_currency)
    return None


def main() -> int:
    args = build_parser().parse_args()
    try:
        result = asyncio.run(run(args))
    except KucoinAPIError as e:
        logger.error(f"❌ {e.msg} (code={e.code}, status={e.status})")
        return 1
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
