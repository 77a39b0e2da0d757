import math
from datetime import datetime

from finance_analytics.analytics import BudgetAnalyzer, month_progress
from finance_analytics.analytics.budgets import BudgetAnalysis
from finance_analytics.analytics.common import round2
from finance_analytics.models.budget import Budget
from finance_analytics.models.transaction import Transaction

# June 2026 has 30 days: 20 full days passed, 10 remaining
NOW = datetime(2026, 6, 21, 12, 0, 0)


def expense(category, amount, date="2026-06-10"):
    return Transaction(category=category, amount=amount, date=date, type="expense")


def income(amount, date="2026-06-01"):
    return Transaction(category="Salary", amount=amount, date=date, type="income")


sample_transactions = [
    expense("Food", 250.0),
    expense("Food", 160.0, "2026-06-15T08:30:00.000Z"),
    expense("Housing", 1000.0),
    expense("Shopping", 120.0, "2026-05-30"),
    expense("Fun", 10.0),
    income(3000.0),
]


def test_generate_budgets_applies_category_multipliers():
    budgets = BudgetAnalyzer().generate_budgets(sample_transactions)
    by_category = {b.category: b for b in budgets}

    assert by_category["Food"].amount == 512.5  # 410 * 1.25
    assert by_category["Housing"].amount == 1050.0  # 1000 * 1.05
    assert by_category["Shopping"].amount == 168.0  # includes last month
    assert by_category["Fun"].amount == 13.0  # default 1.30
    assert "Salary" not in by_category
    assert all(b.period == "monthly" for b in budgets)


def test_generate_budgets_ids_follow_first_seen_order():
    budgets = BudgetAnalyzer().generate_budgets(sample_transactions)
    assert [(b.id, b.category) for b in budgets] == [
        (1, "Food"),
        (2, "Housing"),
        (3, "Shopping"),
        (4, "Fun"),
    ]


def test_generate_budgets_matches_multiplier_case_insensitively():
    budgets = BudgetAnalyzer().generate_budgets([expense("ENTERTAINMENT", 100.0)])
    assert budgets[0].category == "ENTERTAINMENT"
    assert budgets[0].amount == 150.0


def test_generate_budgets_skips_non_positive_and_unlabelled_spend():
    transactions = [expense("Refunds", 0.0), expense("", 40.0), expense("Gifts", -5.0)]
    assert BudgetAnalyzer().generate_budgets(transactions) == []


def test_month_progress_counts_whole_days():
    progress = month_progress(NOW)
    assert progress.days_passed == 20
    assert progress.days_remaining == 10
    assert progress.total_days == 30


def test_month_progress_floors_both_ends_to_one():
    first = month_progress(datetime(2026, 6, 1, 9, 0))
    assert first.days_passed == 1
    assert first.days_remaining == 30
    assert first.total_days == 31

    last = month_progress(datetime(2026, 6, 30, 23, 59))
    assert last.days_passed == 29
    assert last.days_remaining == 1


def test_analyze_warning_example():
    budgets = [Budget(id=1, category="food", amount=500.0)]
    transactions = [expense("food", 400.0), expense("food", 10.0, "2026-06-02T10:00:00.000Z")]

    health = BudgetAnalyzer().analyze(budgets, transactions, now=NOW)
    food = health.budget_categories[0]

    assert food.percentage_used == 82.0
    assert food.status == "warning"
    assert food.predicted_spend == 615.0
    assert food.remaining == 90.0
    assert food.days_remaining == 10
    assert health.alerts == ["food is approaching budget limit"]
    assert health.overall_status == "warning"
    assert health.health_score == 50.0


def test_analyze_counts_only_current_month_expenses():
    budgets = [Budget(category="Shopping", amount=200.0)]
    transactions = [
        expense("Shopping", 120.0, "2026-05-30"),
        expense("Shopping", 50.0, "2025-06-12"),
        expense("Shopping", 30.0, "12/06/2026"),
        expense("Shopping", 20.0),
        Transaction(category="Shopping", amount=500.0, date="2026-06-05", type="income"),
    ]

    health = BudgetAnalyzer().analyze(budgets, transactions, now=NOW)
    assert health.total_spent == 20.0
    assert health.budget_categories[0].percentage_used == 10.0
    assert health.budget_categories[0].recommendation == "💚 Well under budget - good job!"


def test_analyze_accepts_datetime_values():
    budgets = [Budget(category="Food", amount=100.0)]
    transactions = [Transaction(category="Food", amount=65.0, date=datetime(2026, 6, 3, 7, 0), type="expense")]

    analysis = BudgetAnalyzer().analyze(budgets, transactions, now=NOW).budget_categories[0]
    assert analysis.spent == 65.0
    assert analysis.recommendation == "👍 On track - maintain current spending"


def test_analyze_ignores_spend_without_budget():
    budgets = [Budget(category="Food", amount=100.0)]
    health = BudgetAnalyzer().analyze(budgets, [expense("Food", 10.0), expense("Travel", 900.0)], now=NOW)

    assert [a.category for a in health.budget_categories] == ["Food"]
    assert health.total_spent == 10.0


def test_zero_budget_reports_zero_usage():
    health = BudgetAnalyzer().analyze([Budget(category="Food", amount=0.0)], [expense("Food", 30.0)], now=NOW)
    analysis = health.budget_categories[0]

    assert analysis.percentage_used == 0.0
    assert analysis.status == "on_track"
    assert analysis.remaining == -30.0
    assert health.overall_status == "healthy"


def test_duplicate_budget_categories_last_one_wins():
    budgets = [
        Budget(id=1, category="Food", amount=100.0),
        Budget(id=2, category="Food", amount=1000.0),
    ]
    health = BudgetAnalyzer().analyze(budgets, [expense("Food", 100.0)], now=NOW)

    assert len(health.budget_categories) == 1
    assert health.budget_categories[0].budgeted == 1000.0
    assert health.budget_categories[0].percentage_used == 10.0


def test_status_never_moves_backwards_as_spend_grows():
    rank = {"on_track": 0, "warning": 1, "over_budget": 2}
    analyzer = BudgetAnalyzer()
    budgets = [Budget(category="Food", amount=100.0)]

    previous = 0
    for spent in range(0, 160, 5):
        status = analyzer.analyze(budgets, [expense("Food", float(spent))], now=NOW).budget_categories[0].status
        assert rank[status] >= previous
        previous = rank[status]
    assert previous == 2


def test_predicted_spend_scales_linearly_with_spent():
    analyzer = BudgetAnalyzer()
    budgets = [Budget(category="Food", amount=1000.0)]

    single = analyzer.analyze(budgets, [expense("Food", 40.0)], now=NOW).budget_categories[0]
    double = analyzer.analyze(budgets, [expense("Food", 80.0)], now=NOW).budget_categories[0]
    assert single.predicted_spend == 60.0
    assert double.predicted_spend == 2 * single.predicted_spend


def test_critical_overall_status_adds_crisis_recommendations():
    budgets = [Budget(category="Food", amount=100.0), Budget(category="Rent", amount=100.0)]
    transactions = [expense("Food", 120.0), expense("Rent", 75.0)]

    health = BudgetAnalyzer().analyze(budgets, transactions, now=NOW)

    assert health.overall_status == "critical"
    assert health.total_remaining == 5.0
    assert health.health_score == 37.5  # (0 + 75) / 2
    assert health.alerts == ["Food is over budget"]
    assert health.recommendations == [
        "⚠️ Budget needs attention - consider reviewing spending habits",
        "🎯 Focus on reducing spending in over-budget categories",
        "🚨 Critical: Review all expenses immediately",
        "✂️ Cut non-essential spending this month",
        "📊 Check category-specific alerts for details",
        "🎯 Focus on reducing: Food",
    ]


def test_over_budget_categories_are_named_in_scan_order():
    budgets = [Budget(category="Travel", amount=10.0), Budget(category="Food", amount=10.0)]
    health = BudgetAnalyzer().analyze(budgets, [expense("Food", 20.0), expense("Travel", 30.0)], now=NOW)
    assert health.recommendations[-1] == "🎯 Focus on reducing: Travel, Food"


def test_healthy_budgets_get_positive_recommendations():
    budgets = [Budget(category="Food", amount=1000.0)]
    health = BudgetAnalyzer().analyze(budgets, [expense("Food", 100.0)], now=NOW)

    assert health.overall_status == "healthy"
    assert health.health_score == 100.0
    assert health.alerts == []
    assert health.recommendations == [
        "🌟 Excellent budget management! Keep it up!",
        "💡 Consider increasing your savings rate",
    ]


def test_empty_analysis_is_neutral():
    health = BudgetAnalyzer().analyze([], sample_transactions, now=NOW)

    assert health.health_score == 50.0
    assert health.budget_categories == []
    assert health.total_budgeted == 0.0
    assert health.recommendations == [
        "⚠️ Budget needs attention - consider reviewing spending habits",
        "🎯 Focus on reducing spending in over-budget categories",
    ]


def test_health_score_thresholds():
    def analysis(used):
        return BudgetAnalysis("x", 100.0, used, 100.0 - used, used, "on_track", 10, used, "")

    scores = [BudgetAnalyzer.health_score([analysis(used)]) for used in (100, 95, 85, 75, 55, 10)]
    assert scores == [0, 20, 50, 75, 90, 100]
    assert BudgetAnalyzer.health_score([]) == 50


def test_to_dict_uses_wire_field_names():
    health = BudgetAnalyzer().analyze([Budget(category="Food", amount=500.0)], [expense("Food", 410.0)], now=NOW)
    data = health.to_dict()

    assert set(data) == {
        "total_budgeted",
        "total_spent",
        "total_remaining",
        "overall_status",
        "budget_categories",
        "alerts",
        "health_score",
        "recommendations",
    }
    assert data["budget_categories"][0]["percentage_used"] == 82.0


def test_round2_rounds_halves_away_from_zero_and_is_idempotent():
    assert round2(0.125) == 0.13
    assert round2(-0.125) == -0.13
    for value in (0.0, 12.34, -7.5, 615.0, 82.01):
        assert round2(round2(value)) == round2(value)


def test_empty_category_labels_never_reach_the_analysis():
    budgets = [Budget(category="", amount=100.0), Budget(category="Food", amount=100.0)]
    transactions = [expense("", 50.0, "2026-06-02"), expense("Food", 20.0)]

    health = BudgetAnalyzer().analyze(budgets, transactions, now=NOW)

    assert [a.category for a in health.budget_categories] == ["Food"]
    assert health.total_budgeted == 100.0
    assert health.total_spent == 20.0
    assert "" not in BudgetAnalyzer.current_month_spending(transactions, NOW)


def test_round2_just_below_a_half_rounds_down():
    value = math.nextafter(0.005, 0.0)
    while value * 100 >= 0.5:
        value = math.nextafter(value, 0.0)
    assert round2(value) == 0.0
    assert round2(-value) == 0.0
