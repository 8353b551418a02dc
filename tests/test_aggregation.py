"""
Tests — aggregation routines (pure functions over transient models).

Covers:
    - percentages, half-up display rounding and partition sums
    - portfolio summary and per-strategy breakdown
    - savings multipliers
    - data-center utilisation label / bar / band
    - timeline ordering, end dates and milestones
    - assessment metrics, risk lists, recommendations and filtering
"""

import pytest

from migration_tool.models.migration import STRATEGY_KEYS
from migration_tool.services import aggregation as agg


# ═════════════════════════════════════════════════════════════════════════════
# Primitives
# ═════════════════════════════════════════════════════════════════════════════

class TestPercentages:
    def test_zero_total_yields_zero(self):
        assert agg.percentage(5, 0) == 0

    def test_round_half_up(self):
        assert agg.round_half_up(12.5) == 13
        assert agg.round_half_up(12.49) == 12
        assert agg.round_half_up(0.5) == 1

    def test_display_percentage(self):
        assert agg.display_percentage(1, 3) == 33
        assert agg.display_percentage(2, 3) == 67


class TestPartitions:
    def test_strategy_shares_sum_to_100(self, make_workload):
        workloads = [make_workload(strategy=s) for s in ("rehost", "rehost", "refactor", "retire", "retain", "retain", "retain")]
        rows = agg.strategy_breakdown(workloads)
        assert sum(r["share"] for r in rows) == pytest.approx(100)
        assert sum(r["count"] for r in rows) == 7

    def test_status_shares_sum_to_100(self, make_workload):
        workloads = [
            make_workload(status="planning"),
            make_workload(status="in-progress"),
            make_workload(status="completed"),
        ]
        dist = agg.status_distribution(workloads)
        assert sum(d["share"] for d in dist) == pytest.approx(100)
        assert [d["label"] for d in dist] == ["Planning", "In Progress", "Completed", "On Hold"]

    def test_empty_partition_is_all_zero(self):
        assert all(d["percentage"] == 0 for d in agg.risk_distribution([]))
        assert all(r["share"] == 0 for r in agg.strategy_breakdown([]))

    def test_unknown_values_are_not_counted(self, make_workload):
        counts = agg.count_by([make_workload(priority="urgent")], "priority", ("low", "medium", "high"))
        assert counts == {"low": 0, "medium": 0, "high": 0}


# ═════════════════════════════════════════════════════════════════════════════
# Portfolio totals
# ═════════════════════════════════════════════════════════════════════════════

class TestPortfolioSummary:
    def test_totals_and_means(self, make_workload):
        workloads = [
            make_workload(estimated_cost=1000, estimated_duration=10, status="completed"),
            make_workload(estimated_cost=3000, estimated_duration=30, status="in-progress"),
        ]
        summary = agg.portfolio_summary(workloads)
        assert summary["total_workloads"] == 2
        assert summary["total_cost"] == 4000
        assert summary["avg_cost_per_workload"] == summary["total_cost"] / summary["total_workloads"]
        assert summary["avg_duration_per_workload"] == 20
        assert summary["completed"] == 1
        assert summary["in_progress"] == 1

    def test_empty_portfolio(self):
        summary = agg.portfolio_summary([])
        assert summary["avg_cost_per_workload"] == 0
        assert summary["avg_duration_per_workload"] == 0
        assert summary["total_cost"] == 0

    def test_breakdown_is_in_six_rs_order(self, make_workload):
        rows = agg.strategy_breakdown([make_workload(strategy="retain")])
        assert [r["strategy"] for r in rows] == list(STRATEGY_KEYS)
        retain = rows[-1]
        assert retain["count"] == 1
        assert retain["percentage"] == 100
        assert retain["cost_saving"] == "none"

    def test_breakdown_averages(self, make_workload):
        workloads = [
            make_workload(strategy="refactor", estimated_cost=100, estimated_duration=4),
            make_workload(strategy="refactor", estimated_cost=300, estimated_duration=8),
        ]
        refactor = next(r for r in agg.strategy_breakdown(workloads) if r["strategy"] == "refactor")
        assert refactor["total_cost"] == 400
        assert refactor["avg_cost"] == 200
        assert refactor["avg_duration"] == 6


# ═════════════════════════════════════════════════════════════════════════════
# Savings
# ═════════════════════════════════════════════════════════════════════════════

class TestSavings:
    @pytest.mark.parametrize("tag, expected", [
        ("very high", 400), ("high", 300), ("medium", 200), ("none", 0), (None, 0),
    ])
    def test_multiplier_applied_to_total_cost(self, tag, expected):
        row = {"total_cost": 1000, "cost_saving": tag}
        assert agg.strategy_savings(row) == pytest.approx(expected)

    def test_potential_savings_sums_strategies(self, make_workload):
        workloads = [
            make_workload(strategy="rehost", estimated_cost=1000),      # medium → 200
            make_workload(strategy="replatform", estimated_cost=1000),  # high → 300
            make_workload(strategy="retain", estimated_cost=5000),      # none → 0
        ]
        assert agg.potential_savings(agg.strategy_breakdown(workloads)) == pytest.approx(500)


# ═════════════════════════════════════════════════════════════════════════════
# Utilisation
# ═════════════════════════════════════════════════════════════════════════════

class TestUtilization:
    def test_over_capacity_label_not_clamped_bar_clamped(self, make_data_center):
        dc = make_data_center(capacity=100, current_utilization=150)
        assert agg.utilization_label(dc) == "150.0%"
        assert agg.utilization_bar_width(dc) == 100
        assert agg.utilization_band(agg.utilization_percent(dc)) == "critical"

    def test_zero_capacity(self, make_data_center):
        dc = make_data_center(capacity=0, current_utilization=10)
        assert agg.utilization_percent(dc) == 0
        assert agg.utilization_label(dc) == "0.0%"

    @pytest.mark.parametrize("pct, band", [
        (81, "critical"), (80, "warning"), (61, "warning"), (60, "healthy"), (0, "healthy"),
    ])
    def test_bands(self, pct, band):
        assert agg.utilization_band(pct) == band

    def test_row_counts_workloads_by_name(self, make_data_center, make_workload):
        source = make_data_center(name="DB1", type="source")
        target = make_data_center(name="AWS", type="target")
        workloads = [
            make_workload(current_location="DB1", target_location="AWS"),
            make_workload(current_location="DB1", target_location=""),
        ]
        rows = agg.data_center_utilization([source, target], workloads)
        assert rows[0]["workload_count"] == 2
        assert rows[1]["workload_count"] == 1
        assert rows[0]["coordinates"] == {"x": 100.0, "y": 100.0}


# ═════════════════════════════════════════════════════════════════════════════
# Timeline
# ═════════════════════════════════════════════════════════════════════════════

class TestTimeline:
    def test_earlier_created_at_comes_first(self, make_workload):
        late = make_workload(day=10, name="late")
        early = make_workload(day=1, name="early")
        entries = agg.timeline_entries([late, early])
        assert [e["name"] for e in entries] == ["early", "late"]

    def test_end_date_adds_duration(self, make_workload):
        w = make_workload(day=0, estimated_duration=30)
        entry = agg.timeline_entries([w])[0]
        assert entry["start_date"].startswith("2024-01-01")
        assert entry["end_date"].startswith("2024-01-31")

    def test_end_date_beyond_calendar_is_omitted(self, make_workload):
        w = make_workload(day=0, estimated_duration=100_000_000)
        entry = agg.timeline_entries([w])[0]
        assert entry["start_date"].startswith("2024-01-01")
        assert entry["end_date"] is None

    def test_milestones_skip_completed_and_cap_at_five(self, make_workload):
        workloads = [make_workload(day=d, status="completed" if d == 0 else "planning") for d in range(8)]
        milestones = agg.upcoming_milestones(agg.timeline_entries(workloads))
        assert len(milestones) == 5
        assert all(m["status"] != "completed" for m in milestones)

    def test_completion_progress(self, make_workload):
        workloads = [make_workload(status="completed"), make_workload(), make_workload(), make_workload()]
        assert agg.completion_progress(workloads) == 25
        assert agg.completion_progress([]) == 0


# ═════════════════════════════════════════════════════════════════════════════
# Assessment & recommendations
# ═════════════════════════════════════════════════════════════════════════════

class TestAssessment:
    def test_metrics(self, make_workload):
        workloads = [
            make_workload(risk_level="high", complexity="high", estimated_cost=100, estimated_duration=10),
            make_workload(risk_level="low", complexity="low", estimated_cost=50, estimated_duration=20),
        ]
        m = agg.assessment_metrics(workloads)
        assert m["assessed"] == 2
        assert m["assessed_percentage"] == 100
        assert m["high_risk"] == 1
        assert m["high_complexity"] == 1
        assert m["total_cost"] == 150
        assert m["avg_duration"] == 15

    def test_quick_wins_are_low_low_and_capped(self, make_workload):
        workloads = [make_workload(risk_level="low", complexity="low") for _ in range(5)]
        workloads.append(make_workload(risk_level="low", complexity="high"))
        wins = agg.quick_wins(workloads)
        assert len(wins) == 3
        assert all(w.complexity == "low" for w in wins)

    def test_cost_optimization_counts(self, make_workload):
        workloads = [make_workload(strategy="retire"), make_workload(strategy="repurchase"),
                     make_workload(strategy="retire")]
        assert agg.cost_optimization_candidates(workloads) == {"retire": 2, "repurchase": 1}

    def test_recommendations_only_when_applicable(self, make_workload):
        recs = agg.risk_recommendations([make_workload(risk_level="low", complexity="low")])
        assert [r["kind"] for r in recs] == ["quick_wins"]
        assert recs[0]["count"] == 1

        recs = agg.risk_recommendations([make_workload(risk_level="high", complexity="high")])
        assert [r["kind"] for r in recs] == ["high_risk", "high_complexity", "quick_wins"]


class TestFilter:
    def test_search_matches_name_or_description_case_insensitive(self, make_workload):
        a = make_workload(name="Billing API")
        b = make_workload(name="CRM", description="handles billing exports")
        c = make_workload(name="Wiki")
        assert agg.filter_workloads([a, b, c], "BILLING") == [a, b]

    def test_strategy_filter(self, make_workload):
        a = make_workload(strategy="retire")
        b = make_workload(strategy="rehost")
        assert agg.filter_workloads([a, b], "", "retire") == [a]
        assert agg.filter_workloads([a, b], "", "all") == [a, b]
