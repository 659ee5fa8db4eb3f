"""Per-year return series served to the charting front end."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import List, Mapping, Optional

from investcalc.core.compounding import DateLike, format_percentage, to_calendar_date
from investcalc.core.errors import InvalidRangeError
from investcalc.core.returns import (
    BASELINE_INDEX,
    HISTORY_START_YEAR,
    MarketIndex,
    get_index,
)
from investcalc.schemas.market import HistoricalDataPoint, MarketDataResponse, MarketPeriod

LEGACY_YEARS = 5


def _point(index: MarketIndex, year: int) -> HistoricalDataPoint:
    annual_return = index.annual_return(year)
    return HistoricalDataPoint(
        year=year,
        annual_return=annual_return,
        returnPercentage=format_percentage(annual_return),
        date=f"{year}-12-31",
        index=index.id,
        indexName=index.name,
    )


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def market_series(
    market_index: str,
    start_date: Optional[DateLike] = None,
    end_date: Optional[DateLike] = None,
    today: Optional[date] = None,
    table: Optional[Mapping[str, MarketIndex]] = None,
) -> MarketDataResponse:
    """One point per calendar year of the requested window, oldest first.

    ``averageReturn`` is the mean of the generated points, not the index's
    static default return.
    """
    index = get_index(market_index, table=table)

    start = to_calendar_date(start_date) if start_date else date(HISTORY_START_YEAR, 1, 1)
    end = to_calendar_date(end_date) if end_date else (today or date.today())
    if end < start:
        raise InvalidRangeError(f"endDate {end.isoformat()} is before startDate {start.isoformat()}")

    points = [_point(index, year) for year in range(start.year, end.year + 1)]
    average = sum(point.annual_return for point in points) / len(points)

    return MarketDataResponse(
        index=index.id,
        indexName=index.name,
        averageReturn=average,
        historicalData=points,
        lastUpdated=_timestamp(),
        period=MarketPeriod(startDate=start.isoformat(), endDate=end.isoformat()),
    )


def legacy_sp500_series(table: Optional[Mapping[str, MarketIndex]] = None) -> MarketDataResponse:
    """Baseline index, last few tabulated years, with the static default as the average."""
    index = get_index(BASELINE_INDEX, table=table)
    years: List[int] = list(range(index.last_year - LEGACY_YEARS + 1, index.last_year + 1))
    return MarketDataResponse(
        index=index.id,
        indexName=index.name,
        averageReturn=index.default_return,
        historicalData=[_point(index, year) for year in years],
        lastUpdated=_timestamp(),
        period=MarketPeriod(startDate=f"{years[0]}-01-01", endDate=f"{years[-1]}-12-31"),
    )
