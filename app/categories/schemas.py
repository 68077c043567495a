from pydantic import BaseModel, Field
from typing import Optional


# ================= CREATE =================
class CategoryCreate(BaseModel):
    name: Optional[str] = Field(None, max_length=100)


# ================= RESPONSE =================
class CategoryOut(BaseModel):
    id: int
    name: str
    owner_id: int

    class Config:
        from_attributes = True


class CategoryDeleted(BaseModel):
    message: str
    deleted_expenses: int
