"""Error response envelope."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: Optional[dict[str, Any]] = None


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: ErrorDetail
    request_id: Optional[str] = None
    timestamp: datetime
