"""Data contracts for the market data endpoints."""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class HistoricalDataPoint(BaseModel):
    """Return of one index for one calendar year."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    year: int
    annual_return: float = Field(..., alias="return")
    returnPercentage: str
    date: str
    index: str
    indexName: str


class MarketPeriod(BaseModel):
    model_config = ConfigDict(frozen=True)

    startDate: str
    endDate: str


class MarketDataResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: str
    indexName: str
    averageReturn: float
    historicalData: List[HistoricalDataPoint]
    lastUpdated: str
    period: MarketPeriod


class MarketIndexInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    averageReturn: float


class MarketDataQuery(BaseModel):
    """Query string of ``GET /api/market-data/<index>``."""

    model_config = ConfigDict(extra="ignore")

    startDate: Optional[date] = None
    endDate: Optional[date] = None
