"""
Budget Analyzer Router
Scores current-month spending against generated or supplied budgets
"""
import logging
import time
from typing import Dict

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from finance_analytics.analytics import BudgetAnalyzer
from finance_analytics.core.exceptions import UnauthorizedError
from finance_analytics.models.budget import BudgetAnalysisRequest
from finance_analytics.routers.deps import get_bearer_token, get_transaction_client
from finance_analytics.services.transactions import TransactionAPIClient

router = APIRouter()
logger = logging.getLogger(__name__)
budget_analyzer = BudgetAnalyzer()

FUNCTION_NAME = "budget-analyzer"
RUNTIME = "Python"


@router.get("")
def analyze_fetched_budgets(
    token: str = Depends(get_bearer_token),
    client: TransactionAPIClient = Depends(get_transaction_client),
) -> Dict:
    """
    Fetch the caller's transactions, derive budgets from them and analyze
    this month's spending.
    """
    if not token:
        raise UnauthorizedError("Authorization token required", status_code=401)

    transactions = client.fetch(token)
    budgets = budget_analyzer.generate_budgets(transactions)

    start = time.perf_counter()
    analysis = budget_analyzer.analyze(budgets, transactions)
    processing_time = int((time.perf_counter() - start) * 1000)
    logger.info(f"Analyzed {len(budgets)} budgets over {len(transactions)} transactions")

    return {
        "success": True,
        "data": analysis.to_dict(),
        "budgets": [b.model_dump() for b in budgets],
        "transaction_count": len(transactions),
        "computed_at": int(time.time()),
        "processing_time_ms": processing_time,
        "function": FUNCTION_NAME,
        "runtime": RUNTIME,
    }


@router.post("")
async def analyze_supplied_budgets(
    request: Request,
    token: str = Depends(get_bearer_token),
    client: TransactionAPIClient = Depends(get_transaction_client),
) -> Dict:
    """
    Analyze transactions (and optionally budgets) posted in the body. Without
    usable transactions in the body, fall back to the transaction API.
    """
    body = await request.body()
    try:
        request_data = BudgetAnalysisRequest.model_validate_json(body or b"null")
    except ValidationError:
        logger.info("Budget request body missing or invalid, fetching transactions instead")
        request_data = BudgetAnalysisRequest()

    transactions = request_data.transactions
    if transactions is None:
        if not token:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={
                    "success": False,
                    "error": "Invalid request data and no auth token provided",
                    "function": FUNCTION_NAME,
                    "runtime": RUNTIME,
                },
            )
        transactions = await run_in_threadpool(client.fetch, token)

    budgets = request_data.budgets
    if budgets is None:
        budgets = budget_analyzer.generate_budgets(transactions)

    start = time.perf_counter()
    analysis = budget_analyzer.analyze(budgets, transactions)
    processing_time = int((time.perf_counter() - start) * 1000)

    return {
        "success": True,
        "data": analysis.to_dict(),
        "budgets": [b.model_dump() for b in budgets],
        "computed_at": int(time.time()),
        "processing_time_ms": processing_time,
        "function": FUNCTION_NAME,
        "runtime": RUNTIME,
    }
