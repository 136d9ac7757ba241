"""
Stock Panel - P&L Calculator

Aggregates recorded executions into signed daily P&L:
a SELL adds its price, a BUY subtracts it, bucketed by the local
calendar date of the execution timestamp.
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List

from stock_panel.db.models.stock import StockRecord, TradeSide
from stock_panel.db.repositories.stock import StockRepository


DATE_FORMAT = "%Y-%m-%d"


@dataclass
class DailyPnL:
    """Daily P&L record."""
    date: str
    pnl: float


def signed_amount(side: TradeSide, price: float) -> Decimal:
    """Contribution of one execution: +price for SELL, -price for BUY."""
    amount = Decimal(str(price))
    return amount if side == TradeSide.SELL else -amount


def trade_date(timestamp: datetime) -> str:
    return timestamp.strftime(DATE_FORMAT)


class PnLCalculator:
    """
    P&L Calculator

    Usage:
        calculator = PnLCalculator(StockRepository(db))
        rows = await calculator.daily_pnl()
    """

    def __init__(self, stock_repo: StockRepository):
        self.stock_repo = stock_repo

    @staticmethod
    def aggregate(records: Iterable[StockRecord]) -> List[DailyPnL]:
        """
        Group records by date and sum their signed prices.

        Only dates with at least one record appear. Output is sorted by
        date ascending.
        """
        totals: Dict[str, Decimal] = {}
        for record in records:
            day = trade_date(record.timestamp)
            totals[day] = totals.get(day, Decimal("0")) + signed_amount(record.side, record.price)

        return [DailyPnL(date=day, pnl=float(total)) for day, total in sorted(totals.items())]

    async def daily_pnl(self) -> List[DailyPnL]:
        """Daily P&L over the whole journal."""
        records = await self.stock_repo.list_all()
        return self.aggregate(records)
