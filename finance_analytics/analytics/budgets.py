from __future__ import annotations

import calendar
import logging
from collections import defaultdict
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from finance_analytics.analytics.common import parse_transaction_date, round2
from finance_analytics.models.budget import Budget
from finance_analytics.models.transaction import Transaction

logger = logging.getLogger(__name__)

# Budget = total spend x multiplier, keyed by lower-cased category
CATEGORY_MULTIPLIERS: Dict[str, float] = {
    "housing": 1.05,
    "utilities": 1.15,
    "food": 1.25,
    "transportation": 1.20,
    "entertainment": 1.50,
    "shopping": 1.40,
    "healthcare": 1.10,
    "education": 1.20,
}
DEFAULT_MULTIPLIER = 1.30

NEUTRAL_HEALTH_SCORE = 50.0


@dataclass(frozen=True)
class MonthProgress:
    days_passed: int
    days_remaining: int

    @property
    def total_days(self) -> int:
        return self.days_passed + self.days_remaining


@dataclass
class BudgetAnalysis:
    """Spending of the current month against one category budget."""

    category: str
    budgeted: float
    spent: float
    remaining: float
    percentage_used: float
    status: str  # on_track, warning, over_budget
    days_remaining: int
    predicted_spend: float
    recommendation: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class OverallBudgetHealth:
    total_budgeted: float
    total_spent: float
    total_remaining: float
    overall_status: str  # healthy, warning, critical
    budget_categories: List[BudgetAnalysis] = field(default_factory=list)
    alerts: List[str] = field(default_factory=list)
    health_score: float = NEUTRAL_HEALTH_SCORE
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def month_progress(now: Optional[datetime] = None) -> MonthProgress:
    """
    Whole days elapsed since the 1st of the month and left until the 1st of
    the next one. Both are at least 1, so the total may exceed the month.
    """
    now = now or datetime.now()
    first_day = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    days_in_month = calendar.monthrange(now.year, now.month)[1]

    days_passed = int((now - first_day).total_seconds() // 86400)
    days_remaining = days_in_month - days_passed

    return MonthProgress(days_passed=max(days_passed, 1), days_remaining=max(days_remaining, 1))


class BudgetAnalyzer:
    """
    Derives monthly budgets from spending history and scores the current
    month's spending against them.
    """

    def generate_budgets(self, transactions: Iterable[Transaction]) -> List[Budget]:
        spending: Dict[str, float] = defaultdict(float)
        for tx in transactions:
            if tx.type == "expense" and tx.category:
                spending[tx.category] += tx.amount

        budgets: List[Budget] = []
        for category, total_spent in spending.items():
            if total_spent <= 0:
                continue
            multiplier = CATEGORY_MULTIPLIERS.get(category.lower(), DEFAULT_MULTIPLIER)
            budgets.append(
                Budget(
                    id=len(budgets) + 1,
                    category=category,
                    amount=round2(total_spent * multiplier),
                    period="monthly",
                )
            )
        return budgets

    @staticmethod
    def current_month_spending(
        transactions: Iterable[Transaction],
        now: datetime,
    ) -> Dict[str, float]:
        spending: Dict[str, float] = defaultdict(float)
        for tx in transactions:
            if tx.type != "expense" or not tx.category:
                continue
            tx_date = parse_transaction_date(tx.date)
            if tx_date is None:
                logger.debug(f"Skipping transaction {tx.id!r} with unparsable date {tx.date!r}")
                continue
            if tx_date.month == now.month and tx_date.year == now.year:
                spending[tx.category] += tx.amount
        return spending

    @staticmethod
    def _classify(category: str, percentage_used: float, alerts: List[str]) -> Tuple[str, str]:
        if percentage_used >= 100:
            alerts.append(f"{category} is over budget")
            return "over_budget", "⚠️ Over budget! Reduce spending immediately"
        if percentage_used >= 80:
            alerts.append(f"{category} is approaching budget limit")
            return "warning", "🔶 Approaching budget limit - spend carefully"
        if percentage_used >= 60:
            return "on_track", "👍 On track - maintain current spending"
        return "on_track", "💚 Well under budget - good job!"

    def analyze(
        self,
        budgets: Iterable[Budget],
        transactions: Iterable[Transaction],
        now: Optional[datetime] = None,
    ) -> OverallBudgetHealth:
        now = now or datetime.now()
        transactions = list(transactions)

        # Later duplicates replace earlier ones
        budget_map: Dict[str, Budget] = {}
        for budget in budgets:
            if budget.category:
                budget_map[budget.category] = budget

        spending = self.current_month_spending(transactions, now)
        progress = month_progress(now)

        analyses: List[BudgetAnalysis] = []
        alerts: List[str] = []
        total_budgeted = 0.0
        total_spent = 0.0

        for category, budget in budget_map.items():
            spent = spending.get(category, 0.0)
            remaining = budget.amount - spent
            percentage_used = (spent / budget.amount) * 100 if budget.amount > 0 else 0.0

            status, recommendation = self._classify(category, percentage_used, alerts)

            spending_rate = spent / progress.days_passed if progress.days_passed > 0 else 0.0
            predicted_spend = spending_rate * progress.total_days

            analyses.append(
                BudgetAnalysis(
                    category=category,
                    budgeted=round2(budget.amount),
                    spent=round2(spent),
                    remaining=round2(remaining),
                    percentage_used=round2(percentage_used),
                    status=status,
                    days_remaining=progress.days_remaining,
                    predicted_spend=round2(predicted_spend),
                    recommendation=recommendation,
                )
            )
            total_budgeted += budget.amount
            total_spent += spent

        total_remaining = total_budgeted - total_spent
        overall_percentage = (total_spent / total_budgeted) * 100 if total_budgeted > 0 else 0.0

        if overall_percentage >= 90:
            overall_status = "critical"
        elif overall_percentage >= 75:
            overall_status = "warning"
        else:
            overall_status = "healthy"

        health_score = self.health_score(analyses)
        recommendations = self.recommendations(health_score, overall_status, analyses, alerts)

        return OverallBudgetHealth(
            total_budgeted=round2(total_budgeted),
            total_spent=round2(total_spent),
            total_remaining=round2(total_remaining),
            overall_status=overall_status,
            budget_categories=analyses,
            alerts=alerts,
            health_score=round2(health_score),
            recommendations=recommendations,
        )

    @staticmethod
    def health_score(analyses: List[BudgetAnalysis]) -> float:
        if not analyses:
            return NEUTRAL_HEALTH_SCORE

        total_score = 0.0
        for analysis in analyses:
            used = analysis.percentage_used
            if used >= 100:
                total_score += 0
            elif used >= 90:
                total_score += 20
            elif used >= 80:
                total_score += 50
            elif used >= 70:
                total_score += 75
            elif used >= 50:
                total_score += 90
            else:
                total_score += 100
        return total_score / len(analyses)

    @staticmethod
    def recommendations(
        health_score: float,
        overall_status: str,
        analyses: List[BudgetAnalysis],
        alerts: List[str],
    ) -> List[str]:
        recommendations: List[str] = []

        if health_score >= 80:
            recommendations.append("🌟 Excellent budget management! Keep it up!")
            recommendations.append("💡 Consider increasing your savings rate")
        elif health_score >= 60:
            recommendations.append("👍 Good budget control with room for improvement")
            recommendations.append("📊 Review categories approaching their limits")
        else:
            recommendations.append("⚠️ Budget needs attention - consider reviewing spending habits")
            recommendations.append("🎯 Focus on reducing spending in over-budget categories")

        if overall_status == "critical":
            recommendations.append("🚨 Critical: Review all expenses immediately")
            recommendations.append("✂️ Cut non-essential spending this month")

        if alerts:
            recommendations.append("📊 Check category-specific alerts for details")

        over_budget = [a.category for a in analyses if a.status == "over_budget"]
        if over_budget:
            recommendations.append(f"🎯 Focus on reducing: {', '.join(over_budget)}")

        return recommendations
