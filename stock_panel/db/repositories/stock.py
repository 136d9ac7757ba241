"""
Stock Panel - Stock Record Repository
Append-only trade journal
"""
from datetime import datetime
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stock_panel.db.models.stock import StockRecord
from stock_panel.schemas.stock import StockRecordCreate


class StockRepository:
    """Repository for StockRecord operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, data: StockRecordCreate, timestamp: datetime) -> StockRecord:
        """
        Persist a trade execution.

        Args:
            data: Validated trade fields
            timestamp: Server-assigned execution time

        Returns:
            Created StockRecord
        """
        record = StockRecord(
            symbol=data.symbol,
            underlying_symbol=data.underlying_symbol,
            option_type=data.option_type.value,
            strike_price=data.strike_price,
            expiry=data.expiry,
            price=data.price,
            side=data.side,
            timestamp=timestamp,
        )
        self.session.add(record)
        await self.session.commit()
        await self.session.refresh(record)
        return record

    async def list_all(self) -> List[StockRecord]:
        """All records in insertion order."""
        result = await self.session.execute(
            select(StockRecord).order_by(StockRecord.id)
        )
        return list(result.scalars().all())
