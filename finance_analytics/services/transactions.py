import logging
from typing import List

import requests
from pydantic import ValidationError

from finance_analytics.core.exceptions import (
    MalformedPayloadError,
    SourceUnavailableError,
    UnauthorizedError,
)
from finance_analytics.models.transaction import Transaction, TransactionAPIResponse

logger = logging.getLogger(__name__)


class TransactionAPIClient:
    """Reads a user's transactions from the remote transaction API."""

    def __init__(self, base_url: str, timeout: float = 30.0):
        self.base_url = base_url
        self.timeout = timeout

    def fetch(self, auth_token: str) -> List[Transaction]:
        headers = {"Content-Type": "application/json"}
        if auth_token:
            headers["Authorization"] = f"Bearer {auth_token}"

        try:
            response = requests.get(self.base_url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Transaction API unreachable: {str(e)}")
            raise SourceUnavailableError(f"failed to fetch transactions: {e}") from e

        if response.status_code == 401:
            raise UnauthorizedError("unauthorized - invalid or missing auth token", status_code=401)
        if response.status_code != 200:
            logger.warning(f"Transaction API returned status {response.status_code}")
            raise SourceUnavailableError(
                f"transaction API returned status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = TransactionAPIResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Could not parse transaction API response: {str(e)}")
            raise MalformedPayloadError(f"failed to parse response: {e}") from e

        if not payload.success:
            raise MalformedPayloadError(
                f"transaction API returned unsuccessful response: {payload.error or 'unknown error'}"
            )

        transactions = payload.data or []
        logger.info(f"Fetched {len(transactions)} transactions")
        return transactions
