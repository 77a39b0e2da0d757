from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from finance_analytics.models.transaction import Transaction


class Budget(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int = 0
    category: str
    amount: float
    period: str = "monthly"  # monthly, weekly, daily


class BudgetAnalysisRequest(BaseModel):
    budgets: Optional[List[Budget]] = None
    transactions: Optional[List[Transaction]] = None
