"""
Pydantic models for the configuration service's wire format.
"""

from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Optional


# ─── /variables ───────────────────────────────────────────────────────────────

class RawVariable(BaseModel):
    key: str
    value: str


class VariablesResponse(BaseModel):
    variables: list[RawVariable] = Field(..., description="Variables in fetch order; keys may repeat")


# ─── Errors ───────────────────────────────────────────────────────────────────

class ErrorResponse(BaseModel):
    error: Optional[str] = None
    message: Optional[str] = None

    def summary(self) -> str:
        return " - ".join(part for part in (self.error, self.message) if part)
