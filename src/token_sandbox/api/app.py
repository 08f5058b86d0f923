"""FastAPI application for the trading sandbox dashboard."""

from datetime import datetime, timezone
from typing import Any

import pydantic
import structlog
from fastapi import Body, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from token_sandbox import __version__
from token_sandbox.errors import ValidationError
from token_sandbox.portfolio import allocation
from token_sandbox.sandbox import Sandbox

logger = structlog.get_logger("api")

# Shape check only; deliverability is not our concern
_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class WaitlistRequest(BaseModel):
    email: str = Field(pattern=_EMAIL_PATTERN)


def get_sandbox(request: Request) -> Sandbox:
    """Dependency returning the sandbox bound to this app."""
    return request.app.state.sandbox


def _price_json(point) -> dict:
    return {
        "id": point.id,
        "price": str(point.price),
        "timestamp": point.timestamp.isoformat(),
    }


def _order_json(order) -> dict:
    return {
        "id": order.id,
        "type": order.type,
        "amount": str(order.amount),
        "price": str(order.price),
        "symbol": order.symbol,
        "timestamp": order.timestamp.isoformat(),
    }


def create_app(sandbox: Sandbox) -> FastAPI:
    """Build the API around an already constructed *sandbox*."""
    app = FastAPI(
        title="Token Sandbox API",
        description="Mock token trading: synthetic prices, orders and portfolio valuation",
        version=__version__,
    )
    app.state.sandbox = sandbox

    # CORS middleware - the dashboard is served from a different origin in development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def order_validation_handler(_request: Request, exc: ValidationError):
        logger.info("order_rejected", problems=len(exc.errors))
        return JSONResponse(status_code=400, content={"message": "Invalid order data"})

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

    # ═══════════════════════════════════════════════════════════
    # Prices
    # ═══════════════════════════════════════════════════════════

    @app.get("/api/prices/latest")
    async def latest_price(sb: Sandbox = Depends(get_sandbox)):
        return _price_json(sb.get_latest_price())

    @app.get("/api/prices/history")
    async def price_history(timeframe: str = "24H", sb: Sandbox = Depends(get_sandbox)):
        """Regenerate and return the series for *timeframe* (unknown → 24H)."""
        return [_price_json(p) for p in sb.get_price_history(timeframe)]

    # ═══════════════════════════════════════════════════════════
    # Orders
    # ═══════════════════════════════════════════════════════════

    @app.post("/api/orders")
    async def create_order(
        payload: Any = Body(None),
        sb: Sandbox = Depends(get_sandbox),
    ):
        order = sb.create_order(payload)
        return _order_json(order)

    @app.get("/api/orders")
    async def list_orders(sb: Sandbox = Depends(get_sandbox)):
        return [_order_json(o) for o in sb.get_orders()]

    # ═══════════════════════════════════════════════════════════
    # Portfolio
    # ═══════════════════════════════════════════════════════════

    @app.get("/api/portfolio")
    async def portfolio(sb: Sandbox = Depends(get_sandbox)):
        summary = sb.get_portfolio()
        return {"balance": float(summary.balance), "value": float(summary.value)}

    @app.get("/api/portfolio/snapshot")
    async def portfolio_snapshot(sb: Sandbox = Depends(get_sandbox)):
        """Full valuation: positions, cost basis, unrealized P&L and allocation."""
        snap = sb.get_snapshot()
        shares = allocation(snap)
        holdings = []
        for symbol, quantity in snap.positions.items():
            holdings.append({
                "symbol": symbol,
                "quantity": float(quantity),
                "costBasis": float(snap.cost_basis[symbol]),
                "markPrice": float(snap.marks[symbol]),
                "marketValue": float(quantity * snap.marks[symbol]),
                "unrealisedPnl": float(snap.unrealized_pnl[symbol]),
                "share": float(shares.get(symbol, 0)),
            })
        return {
            "balance": float(snap.balance),
            "tokensValue": float(snap.tokens_value),
            "value": float(snap.value),
            "orderCount": snap.order_count,
            "holdings": holdings,
        }

    # ═══════════════════════════════════════════════════════════
    # Waitlist
    # ═══════════════════════════════════════════════════════════

    @app.post("/api/waitlist")
    async def join_waitlist(
        payload: Any = Body(None),
        sb: Sandbox = Depends(get_sandbox),
    ):
        try:
            req = WaitlistRequest.model_validate(payload)
        except pydantic.ValidationError:
            return JSONResponse(
                status_code=400,
                content={"success": False, "message": "Invalid email address"},
            )

        if not sb.add_to_waitlist(req.email):
            return JSONResponse(
                status_code=409,
                content={"success": False, "message": "Email already on waitlist"},
            )
        return {"success": True, "message": "Added to waitlist"}

    return app
