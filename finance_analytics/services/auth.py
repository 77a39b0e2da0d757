import logging
from typing import Optional

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from finance_analytics.core.exceptions import (
    MalformedPayloadError,
    SourceUnavailableError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)


class AuthUser(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default="", alias="_id")
    email: Optional[str] = None
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")


class AuthServiceResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: bool = False
    user: Optional[AuthUser] = None
    error: Optional[str] = None


class AuthServiceClient:
    """Resolves an Authorization header to a user id via the auth service."""

    def __init__(self, base_url: str, timeout: float = 10.0):
        self.base_url = base_url
        self.timeout = timeout

    def verify(self, authorization: Optional[str]) -> str:
        if not authorization:
            raise UnauthorizedError("authorization header required", status_code=401)

        try:
            response = requests.get(
                self.base_url,
                params={"action": "verify"},
                headers={"Authorization": authorization, "Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Auth service call failed: {str(e)}")
            raise SourceUnavailableError(f"auth service call failed: {e}") from e

        try:
            payload = AuthServiceResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Could not decode auth response: {str(e)}")
            raise MalformedPayloadError(f"failed to decode auth response: {e}") from e

        if not payload.success or payload.user is None:
            logger.warning(f"Authentication rejected: {payload.error}")
            raise UnauthorizedError(f"authentication failed: {payload.error or 'unknown error'}", status_code=401)

        return payload.user.id
