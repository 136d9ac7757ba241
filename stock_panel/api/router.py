"""
Stock Panel - API Router
"""
from fastapi import APIRouter

from stock_panel.api.endpoints import alerts, auth, pnl, stocks
from stock_panel.schemas.user import ErrorResponse

api_router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Bad request"},
        500: {"model": ErrorResponse, "description": "Internal error"},
    }
)

# Everything except /auth sits behind the bearer token gate
PROTECTED = {401: {"model": ErrorResponse, "description": "Missing or invalid token"}}

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(stocks.router, prefix="/stocks", tags=["Stocks"], responses=PROTECTED)
api_router.include_router(pnl.router, prefix="/pnl", tags=["P&L"], responses=PROTECTED)
api_router.include_router(alerts.router, prefix="/alerts", tags=["Alerts"], responses=PROTECTED)
