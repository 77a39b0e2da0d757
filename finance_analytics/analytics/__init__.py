"""
finance_analytics.analytics
~~~~~~~~~~~~~~~~~~~~~~~~~~~

Pure analytics for the personal finance platform. BudgetAnalyzer derives
monthly budgets and scores current-month spending against them;
InsightCalculator summarizes the overall financial posture. Neither does
any I/O, so both can be reused by HTTP routes, background jobs or
serverless functions alike.
"""

from .budgets import BudgetAnalysis, BudgetAnalyzer, MonthProgress, OverallBudgetHealth, month_progress
from .insights import Insight, InsightCalculator, TrendData

__all__ = [
    "BudgetAnalysis",
    "BudgetAnalyzer",
    "Insight",
    "InsightCalculator",
    "MonthProgress",
    "OverallBudgetHealth",
    "TrendData",
    "month_progress",
]
