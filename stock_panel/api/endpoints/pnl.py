"""
Stock Panel - P&L Endpoints
"""
from typing import List

from fastapi import APIRouter, Depends

from stock_panel.core.trading import PnLCalculator
from stock_panel.db.models.user import User
from stock_panel.dependencies import get_current_user, get_pnl_calculator
from stock_panel.schemas.stock import DailyPnLResponse

router = APIRouter()


@router.get(
    "",
    response_model=List[DailyPnLResponse],
    summary="Daily profit and loss",
)
async def get_daily_pnl(
    current_user: User = Depends(get_current_user),
    calculator: PnLCalculator = Depends(get_pnl_calculator),
) -> List[DailyPnLResponse]:
    """
    Signed P&L per calendar date, oldest first.

    SELL executions add their price, BUY executions subtract it.
    """
    rows = await calculator.daily_pnl()
    return [DailyPnLResponse(date=row.date, pnl=row.pnl) for row in rows]
