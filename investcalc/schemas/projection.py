"""Data contracts for compound growth calculations."""

from __future__ import annotations

from datetime import date
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Transaction(BaseModel):
    """A dated deposit into or withdrawal from the portfolio."""

    # the UI attaches a surrogate ``id``; the engine does not need it
    model_config = ConfigDict(frozen=True, extra="ignore")

    date: date
    amount: float = Field(..., gt=0, allow_inf_nan=False)
    type: Literal["deposit", "withdrawal"]


class CalculationRequest(BaseModel):
    """Body of ``POST /api/calculate-compound``.

    ``transactions`` stays loosely typed here: each entry is validated on its
    own afterwards so a single bad row is dropped instead of failing the batch.
    """

    model_config = ConfigDict(extra="forbid")

    principal: Optional[float] = Field(None, ge=0, allow_inf_nan=False, description="Starting investment amount.")
    transactions: Optional[List[Any]] = Field(default_factory=list)
    startDate: date
    endDate: Optional[date] = Field(None, description="Defaults to today.")
    marketIndex: Optional[str] = Field(None, min_length=1)
    useHistoricalData: bool = True
    projectionMonths: int = Field(
        0,
        ge=0,
        le=600,
        description="Months to extend past the last yearly snapshot at the index's average return.",
    )
    monthlyContribution: float = Field(0.0, ge=0, allow_inf_nan=False)

    @model_validator(mode="after")
    def ensure_something_to_invest(self) -> "CalculationRequest":
        if self.principal is None and not self.transactions:
            raise ValueError("Either principal or transactions are required")
        return self


class MonthlyDataPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: int
    year: int
    monthOfYear: int
    date: str
    amount: float
    contributions: float
    netInvestment: float
    gains: float
    annualReturn: str


class YearlyDataPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    date: str
    amount: float
    contributions: float
    netInvestment: float
    gains: float
    roi: float
    annualReturn: str


class InvestmentPeriod(BaseModel):
    model_config = ConfigDict(frozen=True)

    startDate: str
    endDate: str
    totalMonths: int


class CalculationSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    finalAmount: float
    totalContributions: float
    totalGains: float
    totalROI: float
    totalDeposits: float
    totalWithdrawals: float
    netInvestment: float
    netGains: float
    netROI: float
    averageAnnualReturn: str
    investmentPeriod: InvestmentPeriod


class ProjectionResult(BaseModel):
    """Full output of one compounding walk."""

    model_config = ConfigDict(frozen=True)

    summary: CalculationSummary
    monthlyData: List[MonthlyDataPoint]
    yearlyData: List[YearlyDataPoint]


class ProjectedPoint(BaseModel):
    """One month of the forward projection drawn after the historical walk."""

    model_config = ConfigDict(frozen=True)

    year: int
    monthOfYear: int
    amount: float
    contributions: float
