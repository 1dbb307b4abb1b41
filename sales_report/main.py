from contextlib import asynccontextmanager
from enum import Enum

from fastapi import FastAPI, HTTPException, Query

from sales_report import config
from sales_report.engine import build_report
from sales_report.errors import StrategyError, ValidationError
from sales_report.models import SalesData
from sales_report.observer import CollectingObserver
from sales_report.store import store
from sales_report.strategies import (
    DEFAULT_OPTIONS,
    ReportOptions,
    calculate_bonus_amount_by_profit,
)


class BonusMode(str, Enum):
    RATE = "rate"
    AMOUNT = "amount"


@asynccontextmanager
async def lifespan(app: FastAPI):
    config.configure_logging()
    # Auto-seed on startup so the service is immediately usable
    from scripts.seed_data import seed
    seed(store)
    yield


app = FastAPI(
    title=config.APP_TITLE,
    version=config.APP_VERSION,
    description="Per-seller revenue, profit, bonus and top-product report",
    lifespan=lifespan,
)


def _options(bonus_mode: BonusMode) -> ReportOptions:
    if bonus_mode == BonusMode.AMOUNT:
        return DEFAULT_OPTIONS.model_copy(update={"calculate_bonus": calculate_bonus_amount_by_profit})
    return DEFAULT_OPTIONS


def _report(data: SalesData, bonus_mode: BonusMode) -> dict:
    observer = CollectingObserver()
    try:
        report = build_report(data, _options(bonus_mode), observer)
    except ValidationError as exc:
        raise HTTPException(422, str(exc))
    except StrategyError as exc:
        raise HTTPException(500, str(exc))
    result = report.model_dump(mode="json")
    result["skipped"] = {
        "records": [str(e) for e in observer.skipped_records],
        "items": [str(e) for e in observer.skipped_items],
    }
    return result


# ── Sellers ──────────────────────────────────────────────────────────────────

@app.get("/api/v1/sellers", summary="List all sellers")
def list_sellers():
    return {"sellers": [s.model_dump(mode="json") for s in store.list_sellers()]}


@app.get("/api/v1/sellers/{seller_id}", summary="Get seller details")
def get_seller(seller_id: str):
    seller = store.get_seller(seller_id)
    if not seller:
        raise HTTPException(404, f"Seller '{seller_id}' not found")
    return seller.model_dump(mode="json")


# ── Reports ──────────────────────────────────────────────────────────────────

@app.get("/api/v1/report", summary="Seller report over the stored data")
def get_report(bonus_mode: BonusMode = Query(default=BonusMode.RATE)):
    return _report(store.snapshot(), bonus_mode)


@app.post("/api/v1/report", summary="Seller report over the posted data")
def post_report(data: SalesData, bonus_mode: BonusMode = Query(default=BonusMode.RATE)):
    return _report(data, bonus_mode)


# ── Admin ─────────────────────────────────────────────────────────────────────

@app.post("/api/v1/admin/seed", summary="Re-seed demo data")
def reseed():
    from scripts.seed_data import seed
    store.clear()
    seed(store)
    return {
        "status": "seeded",
        "sellers": len(store.sellers),
        "products": len(store.products),
        "purchase_records": len(store.purchase_records),
    }
