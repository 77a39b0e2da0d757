"""
Insights Router
Net worth, savings rate and financial health for the authenticated user
"""
import logging
import time
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Header

from finance_analytics.analytics import InsightCalculator
from finance_analytics.core.exceptions import UnauthorizedError
from finance_analytics.routers.deps import get_auth_client, get_bearer_token, get_transaction_client
from finance_analytics.services.auth import AuthServiceClient
from finance_analytics.services.transactions import TransactionAPIClient

router = APIRouter()
logger = logging.getLogger(__name__)
insight_calculator = InsightCalculator()


@router.get("")
def calculate_insights(
    authorization: Optional[str] = Header(None),
    token: str = Depends(get_bearer_token),
    auth_client: AuthServiceClient = Depends(get_auth_client),
    client: TransactionAPIClient = Depends(get_transaction_client),
) -> Dict:
    start = time.perf_counter()

    if not token:
        raise UnauthorizedError("Bearer authorization token required", status_code=401)

    user_id = auth_client.verify(authorization)
    transactions = client.fetch(token)
    logger.info(f"Calculating insights for user {user_id} over {len(transactions)} transactions")

    insights = insight_calculator.calculate(transactions)

    return {
        "success": True,
        "data": insights.to_dict(),
        "user_id": user_id,
        "transactions_count": len(transactions),
        "computed_at": int(time.time()),
        "processing_time_ms": int((time.perf_counter() - start) * 1000),
        "function": "calculate-insights",
        "runtime": "Python",
    }
