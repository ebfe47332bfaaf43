"""Window function examples against the seeded SQLite database."""

from __future__ import annotations

import pytest

JANUARY_SALES = 20799.72
FEBRUARY_SALES = 22449.61


class TestRanking:
    def test_ranking(self, run):
        result = run("windows.ranking")
        assert result.row_count == 20
        assert result.column("row_num") == list(range(1, 21))
        salaries = result.column("salary")
        assert salaries == sorted(salaries, reverse=True)
        assert result.as_dicts()[0]["pct_rank"] == 0

    def test_dense_rank_has_no_gaps(self, run):
        ranks = sorted(set(run("windows.ranking").column("dense_salary_rank")))
        assert ranks == list(range(1, len(ranks) + 1))

    def test_partitioned_ranking(self, run):
        result = run("windows.partitioned_ranking")
        assert result.row_count == 20
        firsts = [r for r in result.as_dicts() if r["dept_row_num"] == 1]
        assert len(firsts) == len(set(result.column("department")))

    def test_top_n_per_group(self, run):
        result = run("windows.top_n_per_group")
        assert result.row_count == 13
        assert max(result.column("rank_in_category")) <= 3

    def test_ntile_segments(self, run):
        result = run("windows.ntile_segments")
        assert result.row_count == 10
        assert result.as_dicts()[0]["customer_segment"] == "Top 25%"
        assert set(result.column("quartile")) == {1, 2, 3, 4}


class TestAggregates:
    def test_running_totals(self, run):
        result = run("windows.running_totals")
        assert result.row_count == 10
        totals = result.column("running_total")
        assert totals[0] == pytest.approx(2599.98)
        assert totals[-1] == pytest.approx(JANUARY_SALES + FEBRUARY_SALES)
        assert totals == sorted(totals)

    def test_moving_averages(self, run):
        result = run("windows.moving_averages")
        assert result.row_count == 10
        first = result.as_dicts()[0]
        assert first["moving_avg_7day"] == pytest.approx(151.25)
        assert first["deviation_from_avg"] == pytest.approx(0)

    def test_month_over_month(self, run):
        january, february = run("windows.month_over_month").as_dicts()
        assert january["previous_month"] is None
        assert january["monthly_sales"] == pytest.approx(JANUARY_SALES)
        assert february["change"] == pytest.approx(FEBRUARY_SALES - JANUARY_SALES)

    def test_ratio_to_report(self, run):
        result = run("windows.ratio_to_report")
        assert result.row_count == 20
        assert sum(result.column("pct_of_company")) == pytest.approx(100, abs=0.2)

    def test_running_percentage(self, run):
        result = run("windows.running_percentage")
        assert result.row_count == 13
        assert result.column("cumulative_pct")[-1] == pytest.approx(100.0)

    def test_frame_variants(self, run):
        result = run("windows.frame_variants")
        assert result.row_count == 12
        first = result.as_dicts()[0]
        assert first["current_row_only"] == pytest.approx(15679.85)
        assert first["last_3_rows"] == pytest.approx(15679.85)
        assert result.column("orders_to_date") == list(range(1, 13))

    def test_median(self, run):
        for row in run("windows.median").as_dicts():
            assert row["min_salary"] <= row["median_salary"] <= row["max_salary"]

    def test_conditional_window_aggregation(self, run):
        result = run("windows.conditional_window_aggregation")
        assert result.row_count == 8
        last_of_rep_12 = [r for r in result.as_dicts() if r["employee_id"] == 12][-1]
        assert last_of_rep_12["cumulative_sales"] == pytest.approx(2599.98)
        assert last_of_rep_12["cumulative_refunds"] == pytest.approx(299.99 + 149.99)
        assert last_of_rep_12["sales_count"] == 1


    def test_multiple_windows(self, run):
        rows = run("windows.multiple_windows").as_dicts()
        assert len(rows) == 10
        assert all(r["daily_total"] == r["quantity_sold"] for r in rows)
        assert {r["monthly_total"] for r in rows[:5]} == {28}
        assert {r["monthly_total"] for r in rows[5:]} == {39}
        assert [r["weekly_rolling_sum"] for r in rows[6:]] == [47, 47, 48, 50]
        assert rows[0]["weekly_rolling_avg"] == pytest.approx(2)
        product_6 = [r["product_running_total"] for r in rows if r["product_id"] == 6]
        assert product_6 == [5, 17]


class TestOffsetsAndIslands:
    def test_first_last_value(self, run):
        rows = run("windows.first_last_value").as_dicts()
        assert len(rows) == 20
        for row in rows:
            assert row["highest_salary_in_dept"] >= row["salary"]

    def test_lead_lag(self, run):
        rows = run("windows.lead_lag").as_dicts()
        assert rows
        starts = {}
        for row in rows:
            starts.setdefault(row["product_id"], row)
        assert all(row["previous_sales"] is None for row in starts.values())

    def test_gaps_and_islands(self, run):
        result = run("windows.gaps_and_islands")
        assert result.row_count == 10
        assert set(result.column("consecutive_days")) == {1}
        islands = [r for r in result.as_dicts() if r["product_id"] == 6]
        assert [r["sequence_start"] for r in islands] == ["2024-01-08", "2024-02-25"]
