# marketdash/api/schemas.py
"""
Request bodies and query-parameter parsing for the HTTP API.
"""
from typing import List, Optional

from pydantic import BaseModel, Field

SEARCH_QUERY_MAX_LENGTH = 100
SENTIMENT_TEXT_MAX_LENGTH = 5000
MAX_NEWS_LIMIT = 100


class SentimentRequest(BaseModel):
    text: str = Field(min_length=1, max_length=SENTIMENT_TEXT_MAX_LENGTH)


class BatchSentimentRequest(BaseModel):
    texts: List[str] = Field(min_length=1)


def parse_limit(raw: Optional[str], default: int, maximum: int = MAX_NEWS_LIMIT) -> int:
    """Positive integer limit; anything unparsable or non-positive uses the default."""
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    if value <= 0:
        return default
    return min(value, maximum)


def clamp_count(raw: Optional[str], default: int, minimum: int, maximum: int) -> int:
    """Integer count clamped to [minimum, maximum]; unparsable values use the default."""
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return max(minimum, min(maximum, value))
