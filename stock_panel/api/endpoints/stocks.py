"""
Stock Panel - Trade Journal Endpoints
"""
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, status
from loguru import logger

from stock_panel.db.models.user import User
from stock_panel.db.repositories.stock import StockRepository
from stock_panel.dependencies import get_current_user, get_stock_repository
from stock_panel.schemas.stock import StockRecordCreate, StockRecordResponse

router = APIRouter()


@router.post(
    "",
    response_model=StockRecordResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a trade execution",
)
async def create_stock_record(
    record: StockRecordCreate,
    current_user: User = Depends(get_current_user),
    stock_repo: StockRepository = Depends(get_stock_repository),
) -> StockRecordResponse:
    """
    Append an execution to the journal.

    The timestamp is assigned by the server in local time.
    """
    created = await stock_repo.create(record, timestamp=datetime.now())
    logger.info(f"{current_user.username} recorded {created.side.value} {created.symbol} @ {created.price}")
    return StockRecordResponse.model_validate(created)


@router.get(
    "",
    response_model=List[StockRecordResponse],
    summary="List trade executions",
)
async def list_stock_records(
    current_user: User = Depends(get_current_user),
    stock_repo: StockRepository = Depends(get_stock_repository),
) -> List[StockRecordResponse]:
    """All executions in the order they were recorded."""
    records = await stock_repo.list_all()
    return [StockRecordResponse.model_validate(r) for r in records]
