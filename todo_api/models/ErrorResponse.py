from typing import Optional
from pydantic import BaseModel


class ErrorDetail(BaseModel):
    message: str
    field: Optional[str] = None


class ErrorResponse(BaseModel):
    error: ErrorDetail
