"""HTTP routes for the Flask API."""

from __future__ import annotations

import logging
from datetime import date
from http import HTTPStatus
from typing import Any, Dict, Optional

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from investcalc.config import Settings
from investcalc.core.cache import ResponseCache
from investcalc.core.compounding import extend_projection, project
from investcalc.core.errors import CalculatorError
from investcalc.core.market_data import legacy_sp500_series, market_series
from investcalc.core.returns import MARKET_INDICES, get_index, list_indices
from investcalc.core.transactions import clean_transactions
from investcalc.schemas.health import HealthResponse
from investcalc.schemas.market import MarketDataQuery, MarketIndexInfo
from investcalc.schemas.projection import CalculationRequest

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _settings() -> Settings:
    return current_app.config["INVESTCALC_SETTINGS"]


def _cache() -> ResponseCache:
    return current_app.extensions["response_cache"]


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


@api_bp.errorhandler(CalculatorError)
def _handle_calculator_error(exc: CalculatorError):
    logger.info("Rejected request: %s", exc.message)
    return jsonify(exc.to_dict()), HTTPStatus.BAD_REQUEST


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = HealthResponse(message="pong", indices=list(MARKET_INDICES))
    return jsonify(response.model_dump())


@api_bp.get("/market-indices")
def market_indices() -> Any:
    indices = [MarketIndexInfo.model_validate(row).model_dump() for row in list_indices()]
    return jsonify(indices)


@api_bp.get("/market-data", defaults={"index": None})
@api_bp.get("/market-data/<index>")
def market_data(index: Optional[str]) -> Any:
    """Per-year returns of one index over an optional date window."""
    index = index or _settings().default_market_index
    query = MarketDataQuery.model_validate(request.args.to_dict())
    get_index(index)

    end_date = query.endDate or date.today()
    cache_key = ("market-data", index, query.startDate, end_date)
    body = _cache().get_or_compute(
        cache_key,
        lambda: market_series(index, query.startDate, end_date).model_dump(by_alias=True),
    )
    return jsonify(body)


@api_bp.get("/sp500-data")
def sp500_data() -> Any:
    """Legacy endpoint kept for older front-end builds."""
    return jsonify(legacy_sp500_series().model_dump(by_alias=True))


@api_bp.post("/calculate-compound")
def calculate_compound() -> Any:
    """Run the monthly compounding walk for the posted transactions."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = CalculationRequest.model_validate(raw_payload)

    market_index = payload.marketIndex or _settings().default_market_index
    get_index(market_index)

    transactions = clean_transactions(payload.transactions)
    end_date = payload.endDate or date.today()

    def compute() -> Dict[str, Any]:
        result = project(
            payload.principal,
            transactions,
            payload.startDate,
            end_date,
            market_index,
        )
        body = result.model_dump()
        if payload.projectionMonths:
            body["projectionData"] = [
                point.model_dump()
                for point in extend_projection(
                    result,
                    market_index,
                    months=payload.projectionMonths,
                    monthly_contribution=payload.monthlyContribution,
                )
            ]
        return body

    cache_key = (
        "calculate-compound",
        payload.principal,
        tuple(transactions),
        payload.startDate,
        end_date,
        market_index,
        payload.projectionMonths,
        payload.monthlyContribution,
    )
    return jsonify(_cache().get_or_compute(cache_key, compute))
