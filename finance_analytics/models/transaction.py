from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Transaction(BaseModel):
    """A categorized transaction as served by the transaction API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str = Field(default="", alias="_id")
    user_id: str = Field(default="", alias="userId")
    description: str = ""
    amount: float = 0.0
    category: str = ""
    # Kept as received; the budget engine accepts two string layouts
    date: Union[str, datetime] = ""
    type: str = ""  # income, expense
    tags: Optional[List[str]] = None
    created_at: Optional[Union[str, datetime]] = Field(default=None, alias="createdAt")

    @field_validator("id", "user_id", "description", "category", "date", "type", mode="before")
    @classmethod
    def null_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("amount", mode="before")
    @classmethod
    def null_to_zero(cls, value):
        return 0.0 if value is None else value


class TransactionAPIResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: bool = False
    data: Optional[List[Transaction]] = None
    error: Optional[str] = None
