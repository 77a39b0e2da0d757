from __future__ import annotations

import math
from datetime import datetime
from typing import Optional, Union

# Accepted layouts for string transaction dates, tried in order
DATE_FORMATS = ("%Y-%m-%dT%H:%M:%S.%fZ", "%Y-%m-%d")


def round2(value: float) -> float:
    """Round to 2 decimals, halves away from zero."""
    scaled = value * 100
    whole = math.trunc(scaled)
    if abs(scaled - whole) >= 0.5:
        whole += math.copysign(1, scaled)
    return whole / 100 if whole else 0.0


def parse_transaction_date(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Return the transaction date, or None when it cannot be parsed."""
    if isinstance(value, datetime):
        return value
    if not value:
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None
