from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from typing import Dict, Optional
import logging
import sys
from pathlib import Path

# Add src to path for internal imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from cost_pricing import __version__
from cost_pricing.analysis.insights import (
    check_budget,
    compare_outcome_to_competitors,
    rank_by_margin,
    realized_margin,
)
from cost_pricing.analysis.costing import cost_single_product, custom_price
from cost_pricing.analysis.scenarios import compare_scenarios, what_if
from cost_pricing.config.logging import setup_logger
from cost_pricing.api.schemas import (
    CostingIn,
    InsightsRequest,
    PricingRequestIn,
    WhatIfRequest,
)
from cost_pricing.engine import PricingEngine, PricingOutcome, ValidationError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logger()
    logger.info("Cost Pricing API %s starting", __version__)
    yield


app = FastAPI(
    title="Cost Pricing API",
    description="Cost allocation and product pricing engine",
    version=__version__,
    lifespan=lifespan,
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

engine = PricingEngine()


def _ok_or_400(result):
    """Translate a ValidationError value into an HTTP 400."""
    if isinstance(result, ValidationError):
        raise HTTPException(status_code=400, detail=result.to_dict())
    return result


def _outcome_payload(outcome: PricingOutcome) -> dict:
    return {
        "aggregate": jsonable_encoder(outcome.aggregate),
        "results": jsonable_encoder(list(outcome.results)),
        "allocation": {
            "fixed_share_cp_total": outcome.allocation.fixed_share_cp_total,
            "profit_from_pct": outcome.allocation.profit_from_pct,
            "profit_needed_from_cp": outcome.allocation.profit_needed_from_cp,
            "total_units_cp": outcome.allocation.total_units_cp,
            "per_unit_profit_cp": outcome.allocation.per_unit_profit_cp,
            "per_unit_fixed_cp": outcome.allocation.per_unit_fixed_cp,
        },
        "warnings": list(outcome.warnings),
        "trace": outcome.get_trace_text(),
    }


@app.get("/")
async def root():
    return {"status": "online", "message": "Cost Pricing API Active", "version": __version__}


@app.post("/validate")
async def validate_request(req: PricingRequestIn):
    error = engine.validate(req.to_request())
    if error is not None:
        return {"valid": False, "error": error.to_dict()}
    return {"valid": True, "error": None}


@app.post("/compute")
async def compute_prices(req: PricingRequestIn):
    outcome = _ok_or_400(engine.compute(req.to_request()))
    return _outcome_payload(outcome)


@app.post("/what-if")
async def what_if_prices(req: WhatIfRequest):
    base = req.base.to_request()
    try:
        scenario = what_if(
            base,
            product_overrides=req.product_overrides_dict(),
            fixed_costs=req.fixed_costs.to_config() if req.fixed_costs else None,
            profit_target=req.profit_target.to_target() if req.profit_target else None,
        )
    except ValueError as e:
        logger.info("What-if rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    comparison = compare_scenarios(base, scenario, engine)
    base_outcome = _ok_or_400(comparison.base)
    scenario_outcome = _ok_or_400(comparison.scenario)
    return {
        "base": _outcome_payload(base_outcome),
        "scenario": _outcome_payload(scenario_outcome),
        "deltas": [
            {"metric": d.metric, "before": d.before, "after": d.after, "delta": d.delta}
            for d in comparison.deltas
        ],
    }


@app.post("/insights")
async def pricing_insights(req: InsightsRequest):
    outcome = _ok_or_400(engine.compute(req.request.to_request()))
    competitor_prices: Dict[str, float] = req.competitor_prices or {}
    budget: Optional[float] = req.client_budget

    return {
        "realized_margin": realized_margin(outcome.aggregate),
        "ranking": jsonable_encoder(rank_by_margin(outcome)),
        "competitors": [
            {**jsonable_encoder(c), "message": c.message}
            for c in compare_outcome_to_competitors(outcome, competitor_prices)
        ],
        "budget": jsonable_encoder(check_budget(budget, outcome.aggregate.overall_target_revenue))
        if budget is not None else None,
    }


@app.post("/costing")
async def single_product_costing(req: CostingIn):
    result = cost_single_product(req.to_input())

    custom = None
    if req.custom_rate is not None:
        custom = jsonable_encoder(
            _ok_or_400(custom_price(result.cost_per_unit, req.custom_rate, req.use_margin))
        )

    return {"costing": jsonable_encoder(result), "custom_price": custom}
