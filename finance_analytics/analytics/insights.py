from __future__ import annotations

from collections import defaultdict
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from finance_analytics.analytics.common import round2
from finance_analytics.models.transaction import Transaction

NEUTRAL_HEALTH_SCORE = 50.0
HEALTHY_MESSAGE = "✅ Your finances look healthy! Keep up the good work"

# Placeholder growth figures until month-over-month history is available
INCOME_GROWTH = 2.5
EXPENSE_GROWTH = 1.8
SAVINGS_GROWTH = 5.0
VELOCITY_NORMALIZER = 30.0  # transactions per month


@dataclass
class TrendData:
    income_growth: float = 0.0
    expense_growth: float = 0.0
    savings_growth: float = 0.0
    spending_velocity: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Totals:
    income: float
    expenses: float
    spending_by_category: Dict[str, float]

    @property
    def net_worth(self) -> float:
        return self.income - self.expenses

    @property
    def savings_rate(self) -> float:
        if self.income > 0:
            return (self.income - self.expenses) / self.income * 100
        return 0.0


@dataclass
class Insight:
    """Aggregate financial posture over a set of transactions."""

    net_worth: float
    monthly_income: float
    monthly_expenses: float
    savings_rate: float
    spending_by_category: Dict[str, float] = field(default_factory=dict)
    financial_health_score: float = NEUTRAL_HEALTH_SCORE
    trend_analysis: TrendData = field(default_factory=TrendData)
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class InsightCalculator:
    """
    Computes net worth, savings rate, a 0-100 financial health score, trend
    figures and advice text. Works over the whole input, no date window.
    """

    @staticmethod
    def aggregate(transactions: Iterable[Transaction]) -> Totals:
        income = 0.0
        expenses = 0.0
        by_category: Dict[str, float] = defaultdict(float)

        for tx in transactions:
            if tx.type == "income":
                income += tx.amount
            elif tx.type == "expense":
                expenses += tx.amount
                if tx.category:
                    by_category[tx.category] += tx.amount

        return Totals(income=income, expenses=expenses, spending_by_category=dict(by_category))

    @staticmethod
    def health_score(savings_rate: float, income: float, expenses: float) -> float:
        score = NEUTRAL_HEALTH_SCORE

        # Nothing to judge
        if income == 0 and expenses == 0:
            return score

        if savings_rate >= 20:
            score += 40
        elif savings_rate >= 10:
            score += 30
        elif savings_rate > 0:
            score += 20
        else:
            score -= 20

        if income >= 3000:
            score += 30
        elif income >= 2000:
            score += 20
        elif income >= 1000:
            score += 10

        if income > 0:
            expense_ratio = expenses / income
            if expense_ratio < 0.5:
                score += 30
            elif expense_ratio < 0.7:
                score += 20
            elif expense_ratio < 0.9:
                score += 10
            else:
                score -= 10

        return min(100.0, max(0.0, score))

    @staticmethod
    def trends(transactions: Sequence[Transaction]) -> TrendData:
        if not transactions:
            return TrendData()

        return TrendData(
            income_growth=INCOME_GROWTH,
            expense_growth=EXPENSE_GROWTH,
            savings_growth=SAVINGS_GROWTH,
            spending_velocity=min(1.0, len(transactions) / VELOCITY_NORMALIZER),
        )

    @staticmethod
    def top_category(spending: Dict[str, float]) -> Tuple[str, float]:
        """Highest-spending category; ties go to the alphabetically first name."""
        max_category = ""
        max_amount = 0.0
        for category in sorted(spending):
            if spending[category] > max_amount:
                max_amount = spending[category]
                max_category = category
        return max_category, max_amount

    def recommendations(
        self,
        savings_rate: float,
        spending: Dict[str, float],
        income: float,
        expenses: float,
    ) -> List[str]:
        recommendations: List[str] = []

        # No activity at all gets the neutral message only
        if income == 0 and expenses == 0:
            return [HEALTHY_MESSAGE]

        if savings_rate < 10:
            recommendations.append("💡 Aim to save at least 10% of your income")

        if savings_rate < 0:
            recommendations.append("⚠️ You're spending more than you earn - consider cutting expenses")

        max_category, max_amount = self.top_category(spending)
        if max_category and income > 0 and max_amount > income * 0.3:
            share = max_amount / income * 100
            recommendations.append(f"🎯 Consider reducing {max_category} expenses ({share:.1f}% of income)")
        elif max_category and max_amount > 0 and income == 0:
            recommendations.append(
                f"🎯 Consider reducing {max_category} expenses - you need income to balance spending"
            )

        if savings_rate > 20:
            recommendations.append("🌟 Great job! You're saving over 20% - consider investing")

        if len(spending) > 10:
            recommendations.append("📊 You have many expense categories - consider budgeting")

        if not recommendations:
            recommendations.append(HEALTHY_MESSAGE)

        return recommendations

    def calculate(self, transactions: Iterable[Transaction]) -> Insight:
        transactions = list(transactions)
        totals = self.aggregate(transactions)
        savings_rate = totals.savings_rate

        return Insight(
            net_worth=round2(totals.net_worth),
            monthly_income=round2(totals.income),
            monthly_expenses=round2(totals.expenses),
            savings_rate=round2(savings_rate),
            spending_by_category={
                category: round2(amount) for category, amount in totals.spending_by_category.items()
            },
            financial_health_score=self.health_score(savings_rate, totals.income, totals.expenses),
            trend_analysis=self.trends(transactions),
            recommendations=self.recommendations(
                savings_rate, totals.spending_by_category, totals.income, totals.expenses
            ),
        )
