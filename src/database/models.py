"""
Knucklebones - Database Models

Pydantic models that mirror the Supabase table schemas.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class Preference(BaseModel):
    """Mirrors the `preferences` table (one integer per key)."""

    key: str = Field(max_length=64)
    value: int = 0
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
