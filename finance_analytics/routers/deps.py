from typing import Optional

from fastapi import Header

from finance_analytics.core.config import settings
from finance_analytics.services.auth import AuthServiceClient
from finance_analytics.services.transactions import TransactionAPIClient


def get_bearer_token(authorization: Optional[str] = Header(None)) -> str:
    """Token from an ``Authorization: Bearer ...`` header, or an empty string."""
    if not authorization or not authorization.startswith("Bearer "):
        return ""
    return authorization[len("Bearer "):]


def get_transaction_client() -> TransactionAPIClient:
    return TransactionAPIClient(settings.TRANSACTION_API_URL, timeout=settings.TRANSACTION_TIMEOUT_SECONDS)


def get_auth_client() -> AuthServiceClient:
    return AuthServiceClient(settings.AUTH_SERVICE_URL, timeout=settings.AUTH_TIMEOUT_SECONDS)
