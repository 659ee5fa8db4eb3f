"""Month-by-month compounding of a portfolio against historical index returns."""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Iterable, List, Mapping, Optional, Union

from investcalc.core.errors import InvalidRangeError
from investcalc.core.returns import BASELINE_INDEX, MarketIndex, resolve_index
from investcalc.schemas.projection import (
    CalculationSummary,
    InvestmentPeriod,
    MonthlyDataPoint,
    ProjectedPoint,
    ProjectionResult,
    Transaction,
    YearlyDataPoint,
)

DateLike = Union[date, datetime, str]


def round_currency(value: float) -> float:
    """Round to cents, halves going up. Values too large to scale come back unchanged."""
    scaled = value * 100
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / 100


def format_percentage(rate: float) -> str:
    return f"{rate * 100:.2f}"


def to_calendar_date(value: DateLike) -> date:
    """Reduce a date, datetime or ISO string to its calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def _ratio(numerator: float, denominator: float) -> float:
    return (numerator / denominator) * 100 if denominator > 0 else 0.0


def project(
    principal: Optional[float],
    transactions: Optional[Iterable[Transaction]],
    start_date: DateLike,
    end_date: DateLike,
    market_index: str = BASELINE_INDEX,
    table: Optional[Mapping[str, MarketIndex]] = None,
    fallback_index: Optional[str] = BASELINE_INDEX,
) -> ProjectionResult:
    """
    Walk every calendar month from start_date's month to end_date's month (inclusive).

    Order of operations (per month):
      1) Look up the year's annual return (index default when the year is not tabulated)
         and divide it flatly by 12.
      2) Apply every pending transaction dated in or before this month, in date order.
         Withdrawals are clamped to the current balance.
      3) Apply the month's growth.
      4) Record the monthly snapshot, plus a yearly snapshot in December.

    ``transactions`` must already be validated; see ``core.transactions.clean_transactions``.
    """
    start = to_calendar_date(start_date)
    end = to_calendar_date(end_date)
    if end < start:
        raise InvalidRangeError(f"endDate {end.isoformat()} is before startDate {start.isoformat()}")

    index = resolve_index(market_index, table=table, fallback=fallback_index)

    # sorted() is stable, so same-day entries keep their input order
    pending = sorted(transactions or [], key=lambda txn: txn.date)

    principal = float(principal or 0.0)
    current_amount = principal
    total_contributions = principal
    total_deposits = principal
    total_withdrawals = 0.0

    monthly_data: List[MonthlyDataPoint] = []
    yearly_data: List[YearlyDataPoint] = []

    year, month = start.year, start.month
    cursor = 0

    while (year, month) <= (end.year, end.month):
        annual_return = index.annual_return(year)
        monthly_return = annual_return / 12
        annual_return_pct = format_percentage(annual_return)

        while cursor < len(pending) and (pending[cursor].date.year, pending[cursor].date.month) <= (year, month):
            txn = pending[cursor]
            if txn.type == "deposit":
                current_amount += txn.amount
                total_contributions += txn.amount
                total_deposits += txn.amount
            else:
                withdrawn = min(txn.amount, max(0.0, current_amount))
                current_amount -= withdrawn
                total_withdrawals += withdrawn
            cursor += 1

        current_amount *= 1 + monthly_return

        net_investment = total_deposits - total_withdrawals
        gains = current_amount - total_contributions
        snapshot_date = date(year, month, 1).isoformat()

        monthly_data.append(
            MonthlyDataPoint(
                month=len(monthly_data) + 1,
                year=year,
                monthOfYear=month,
                date=snapshot_date,
                amount=round_currency(current_amount),
                contributions=round_currency(total_contributions),
                netInvestment=round_currency(net_investment),
                gains=round_currency(gains),
                annualReturn=annual_return_pct,
            )
        )

        if month == 12:
            yearly_data.append(
                YearlyDataPoint(
                    year=year,
                    date=snapshot_date,
                    amount=round_currency(current_amount),
                    contributions=round_currency(total_contributions),
                    netInvestment=round_currency(net_investment),
                    gains=round_currency(gains),
                    roi=round_currency(_ratio(gains, total_contributions)),
                    annualReturn=annual_return_pct,
                )
            )

        month += 1
        if month > 12:
            month = 1
            year += 1

    final_amount = current_amount
    net_investment = total_deposits - total_withdrawals
    total_gains = final_amount - total_contributions
    net_gains = final_amount - net_investment
    net_roi = (net_gains / abs(net_investment)) * 100 if net_investment != 0 else 0.0

    window_returns = [index.annual_return(y) for y in range(start.year, end.year + 1)]
    average_return = sum(window_returns) / len(window_returns)

    summary = CalculationSummary(
        finalAmount=round_currency(final_amount),
        totalContributions=round_currency(total_contributions),
        totalGains=round_currency(total_gains),
        totalROI=round_currency(_ratio(total_gains, total_contributions)),
        totalDeposits=round_currency(total_deposits),
        totalWithdrawals=round_currency(total_withdrawals),
        netInvestment=round_currency(net_investment),
        netGains=round_currency(net_gains),
        netROI=round_currency(net_roi),
        averageAnnualReturn=format_percentage(average_return),
        investmentPeriod=InvestmentPeriod(
            startDate=start.isoformat(),
            endDate=end.isoformat(),
            totalMonths=len(monthly_data),
        ),
    )
    return ProjectionResult(summary=summary, monthlyData=monthly_data, yearlyData=yearly_data)


def extend_projection(
    result: ProjectionResult,
    market_index: str = BASELINE_INDEX,
    months: int = 0,
    monthly_contribution: float = 0.0,
    table: Optional[Mapping[str, MarketIndex]] = None,
    fallback_index: Optional[str] = BASELINE_INDEX,
) -> List[ProjectedPoint]:
    """Continue past the last December snapshot at the index's long-run average return.

    Contributions start from that snapshot's net investment, since the chart
    draws the projection as a continuation of the net-investment line.
    """
    if months <= 0 or not result.yearlyData:
        return []

    index = resolve_index(market_index, table=table, fallback=fallback_index)
    monthly_return = index.default_return / 12

    last_year = result.yearlyData[-1]
    value = last_year.amount
    contributions = last_year.netInvestment

    points: List[ProjectedPoint] = []
    for step in range(1, months + 1):
        value = value * (1 + monthly_return) + monthly_contribution
        contributions += monthly_contribution
        # step 1 is January of the year after the snapshot
        year = last_year.year + (step - 1) // 12 + 1
        month = (step - 1) % 12 + 1
        points.append(
            ProjectedPoint(
                year=year,
                monthOfYear=month,
                amount=round_currency(value),
                contributions=round_currency(contributions),
            )
        )
    return points
