from pydantic import BaseModel, Field, field_validator
from datetime import datetime, timezone
from typing import Optional


# =========================
# Create
# =========================
class ExpenseCreate(BaseModel):
    amount: Optional[float] = Field(None, gt=0)
    category: Optional[str] = Field(None, max_length=100)
    note: Optional[str] = None


# =========================
# Update
# =========================
class ExpenseUpdate(BaseModel):
    amount: Optional[float] = Field(None, gt=0)
    category: Optional[str] = Field(None, max_length=100)
    note: Optional[str] = None


# =========================
# Output
# =========================
class ExpenseOut(BaseModel):
    id: int
    amount: float
    category: str
    note: Optional[str] = None
    created_at: datetime
    owner_id: int

    class Config:
        from_attributes = True

    @field_validator("created_at")
    def ensure_utc(cls, v):
        # SQLite hands back naive datetimes; stored values are always UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class ExpenseDeleted(BaseModel):
    id: int
    detail: str
