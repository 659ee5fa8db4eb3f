from __future__ import annotations

from datetime import date, datetime
from math import isclose

import pytest

from investcalc.core.compounding import extend_projection, project, round_currency
from investcalc.core.errors import InvalidRangeError, UnknownIndexError
from investcalc.core.returns import MARKET_INDICES, MarketIndex
from investcalc.schemas.projection import Transaction

SP500_2020 = 0.1640


def deposit(day: str, amount: float) -> Transaction:
    return Transaction(date=date.fromisoformat(day), amount=amount, type="deposit")


def withdrawal(day: str, amount: float) -> Transaction:
    return Transaction(date=date.fromisoformat(day), amount=amount, type="withdrawal")


def flat_table(rate: float = 0.0) -> dict:
    return {"flat": MarketIndex(id="flat", name="Flat", default_return=rate, returns={})}


def test_single_deposit_grows_for_every_month_of_the_year():
    """
    A January deposit is in place before January's growth, so it compounds twelve times by December.
    """
    result = project(0, [deposit("2020-01-15", 10000)], "2020-01-01", "2020-12-31", "sp500")

    assert len(result.monthlyData) == 12
    assert [row.year for row in result.yearlyData] == [2020]

    summary = result.summary
    assert summary.totalContributions == 10000
    assert summary.totalDeposits == 10000
    assert summary.totalWithdrawals == 0

    expected = 10000 * (1 + SP500_2020 / 12) ** 12
    assert isclose(summary.finalAmount, expected, abs_tol=0.01)
    assert result.monthlyData[0].annualReturn == "16.40"
    assert isclose(result.yearlyData[0].roi, (expected - 10000) / 10000 * 100, abs_tol=0.011)


def test_withdrawal_larger_than_balance_is_clamped_to_zero():
    result = project(1000, [withdrawal("2020-02-10", 5000)], "2020-01-01", "2020-03-31", "sp500")

    january, february, march = result.monthlyData
    balance_before = 1000 * (1 + SP500_2020 / 12)

    assert isclose(january.amount, balance_before, abs_tol=0.01)
    assert february.amount == 0
    assert march.amount == 0
    assert isclose(result.summary.totalWithdrawals, balance_before, abs_tol=0.01)
    assert result.summary.totalContributions == 1000
    assert february.contributions == 1000


def test_partial_withdrawal_reduces_net_investment_but_not_contributions():
    result = project(5000, [withdrawal("2021-03-01", 1000)], "2021-01-01", "2021-06-30", "flat", table=flat_table())

    summary = result.summary
    assert summary.finalAmount == 4000
    assert summary.totalContributions == 5000
    assert summary.totalWithdrawals == 1000
    assert summary.netInvestment == 4000
    assert summary.totalGains == -1000
    assert summary.netGains == 0
    assert summary.netROI == 0


@pytest.mark.parametrize(
    "start, end, expected_yearly",
    [
        ("2021-12-05", "2021-12-20", 1),
        ("2021-06-03", "2021-06-20", 0),
        ("2021-06-15", "2021-06-15", 0),
    ],
)
def test_single_month_window(start, end, expected_yearly):
    result = project(1000, [], start, end, "sp500")

    assert len(result.monthlyData) == 1
    assert len(result.yearlyData) == expected_yearly
    assert result.summary.investmentPeriod.totalMonths == 1


def test_end_day_before_start_day_still_includes_final_month():
    result = project(1000, [], "2021-01-20", "2021-03-05", "sp500")

    assert [row.monthOfYear for row in result.monthlyData] == [1, 2, 3]


def test_unknown_index_without_fallback_raises():
    with pytest.raises(UnknownIndexError):
        project(1000, [], "2020-01-01", "2020-12-31", "bogus", fallback_index=None)


def test_unknown_index_with_missing_fallback_raises():
    with pytest.raises(UnknownIndexError):
        project(1000, [], "2020-01-01", "2020-12-31", "bogus", table=flat_table(), fallback_index="sp500")


def test_unknown_index_falls_back_to_baseline():
    fallback = project(1000, [], "2020-01-01", "2021-12-31", "bogus")
    baseline = project(1000, [], "2020-01-01", "2021-12-31", "sp500")

    assert fallback == baseline


def test_end_before_start_raises():
    with pytest.raises(InvalidRangeError):
        project(1000, [], "2021-05-01", "2021-04-30", "sp500")


def test_month_count_and_yearly_subset():
    result = project(
        2500,
        [deposit("2020-05-01", 1000), withdrawal("2021-08-20", 400)],
        "2019-11-15",
        "2022-02-01",
        "nasdaq",
    )

    assert len(result.monthlyData) == 28
    assert [row.month for row in result.monthlyData] == list(range(1, 29))
    assert [row.year for row in result.yearlyData] == [2019, 2020, 2021]

    decembers = {row.year: row for row in result.monthlyData if row.monthOfYear == 12}
    for yearly in result.yearlyData:
        monthly = decembers[yearly.year]
        assert yearly.amount == monthly.amount
        assert yearly.contributions == monthly.contributions
        assert yearly.date == monthly.date


def test_contributions_never_decrease_and_balance_never_negative():
    transactions = [
        deposit("2008-02-01", 2000),
        withdrawal("2008-06-01", 10000),
        deposit("2008-09-15", 500),
        withdrawal("2009-01-01", 300),
        withdrawal("2009-01-02", 100000),
    ]
    result = project(1000, transactions, "2008-01-01", "2009-12-31", "sp500")

    contributions = [row.contributions for row in result.monthlyData]
    assert contributions == sorted(contributions)
    assert all(row.amount >= 0 for row in result.monthlyData)
    assert result.summary.totalContributions == 3500


def test_summary_matches_last_snapshot():
    result = project(
        10000,
        [deposit("2015-03-03", 2500), withdrawal("2017-07-07", 1200)],
        "2015-01-01",
        "2018-06-30",
        "dow",
    )
    summary = result.summary
    last = result.monthlyData[-1]

    assert summary.finalAmount == last.amount
    assert isclose(summary.totalGains, summary.finalAmount - summary.totalContributions, abs_tol=0.011)
    assert isclose(summary.netInvestment, summary.totalDeposits - summary.totalWithdrawals, abs_tol=0.011)
    assert summary.investmentPeriod.startDate == "2015-01-01"
    assert summary.investmentPeriod.endDate == "2018-06-30"


def test_same_day_transactions_keep_input_order():
    withdraw_first = project(
        0,
        [withdrawal("2020-03-10", 500), deposit("2020-03-10", 1000)],
        "2020-01-01",
        "2020-03-31",
        "flat",
        table=flat_table(),
    )
    deposit_first = project(
        0,
        [deposit("2020-03-10", 1000), withdrawal("2020-03-10", 500)],
        "2020-01-01",
        "2020-03-31",
        "flat",
        table=flat_table(),
    )

    assert withdraw_first.summary.totalWithdrawals == 0
    assert withdraw_first.summary.finalAmount == 1000
    assert deposit_first.summary.totalWithdrawals == 500
    assert deposit_first.summary.finalAmount == 500


def test_unsorted_transactions_are_applied_in_date_order():
    result = project(
        0,
        [withdrawal("2020-06-01", 300), deposit("2020-02-01", 1000)],
        "2020-01-01",
        "2020-12-31",
        "flat",
        table=flat_table(),
    )

    assert result.summary.totalWithdrawals == 300
    assert result.summary.finalAmount == 700


def test_transactions_before_window_are_applied_in_first_month():
    result = project(0, [deposit("2019-06-01", 1000)], "2020-01-01", "2020-02-29", "flat", table=flat_table())

    assert result.monthlyData[0].amount == 1000
    assert result.summary.totalDeposits == 1000


def test_transactions_after_window_are_ignored():
    result = project(100, [deposit("2021-01-01", 1000)], "2020-01-01", "2020-12-31", "flat", table=flat_table())

    assert result.summary.totalDeposits == 100
    assert result.summary.finalAmount == 100


def test_untabulated_years_use_default_return():
    result = project(1000, [], "2024-01-01", "2025-12-31", "sp500")

    assert [row.annualReturn for row in result.yearlyData] == ["12.00", "10.00"]
    assert result.summary.averageAnnualReturn == "11.00"


def test_zero_principal_and_no_transactions_reports_zero_roi():
    result = project(None, None, "2020-01-01", "2020-12-31", "sp500")

    assert result.summary.finalAmount == 0
    assert result.summary.totalROI == 0
    assert result.summary.netROI == 0
    assert result.yearlyData[0].roi == 0


def test_datetime_inputs_reduce_to_calendar_dates():
    result = project(1000, [], datetime(2020, 1, 31, 23, 59), datetime(2020, 2, 1, 0, 1), "sp500")

    assert result.summary.investmentPeriod.startDate == "2020-01-31"
    assert len(result.monthlyData) == 2


def test_projection_is_deterministic():
    args = (1000, [deposit("2010-04-04", 250)], "2010-01-01", "2012-12-31", "russell2000")

    assert project(*args).model_dump() == project(*args).model_dump()


def test_round_currency_rounds_halves_up():
    assert round_currency(2.675) in (2.67, 2.68)
    assert round_currency(0.125) == 0.13
    assert round_currency(-0.125) == -0.12
    assert round_currency(10) == 10


def test_extend_projection_continues_from_last_december():
    result = project(0, [deposit("2020-01-15", 10000)], "2020-01-01", "2020-12-31", "sp500")
    last = result.yearlyData[-1]
    default_return = MARKET_INDICES["sp500"].default_return

    points = extend_projection(result, "sp500", months=13, monthly_contribution=100)

    assert len(points) == 13
    assert (points[0].year, points[0].monthOfYear) == (2021, 1)
    assert (points[11].year, points[11].monthOfYear) == (2021, 12)
    assert (points[12].year, points[12].monthOfYear) == (2022, 1)
    assert isclose(points[0].amount, last.amount * (1 + default_return / 12) + 100, abs_tol=0.01)
    assert isclose(points[-1].contributions, last.netInvestment + 1300, abs_tol=0.01)


def test_extend_projection_needs_a_december_snapshot():
    result = project(1000, [], "2020-01-01", "2020-06-30", "sp500")

    assert extend_projection(result, "sp500", months=12) == []
    full_year = project(1000, [], "2020-01-01", "2020-12-31", "sp500")
    assert extend_projection(full_year, "sp500", months=0) == []


def test_net_roi_divides_by_absolute_net_investment():
    """
    Withdrawing grown value beyond what was deposited leaves net investment negative; net ROI stays positive.
    """
    result = project(
        1000,
        [withdrawal("2021-01-10", 1100)],
        "2020-01-01",
        "2021-01-31",
        "flat",
        table=flat_table(0.12),
    )
    summary = result.summary

    assert summary.totalWithdrawals == 1100
    assert summary.netInvestment == -100
    assert summary.netGains > 0
    assert summary.netROI > 0
    assert isclose(summary.netROI, summary.netGains / abs(summary.netInvestment) * 100, abs_tol=0.02)


def test_huge_principal_does_not_overflow_rounding():
    result = project(1e307, [], "2020-01-01", "2020-01-31", "sp500")

    assert result.summary.finalAmount == pytest.approx(1e307 * (1 + SP500_2020 / 12))
    assert result.monthlyData[0].amount == result.summary.finalAmount


def test_round_currency_passes_through_values_it_cannot_scale():
    assert round_currency(1e307) == 1e307
    assert round_currency(float("inf")) == float("inf")
