# eventops/schemas/budget.py
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict
from pydantic import BaseModel, Field


class BudgetStatus(str, Enum):
    planned = "planned"
    committed = "committed"
    paid = "paid"
    cancelled = "cancelled"


class BudgetItemBase(BaseModel):
    category: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    estimated_amount: int = Field(default=0, ge=0)
    actual_amount: Optional[int] = Field(None, ge=0)
    status: BudgetStatus = BudgetStatus.planned
    vendor_id: Optional[str] = None
    sponsor_id: Optional[str] = None
    paid_method: Optional[str] = Field(None, max_length=50)
    invoice_number: Optional[str] = Field(None, max_length=100)
    receipt_url: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None


class BudgetItemCreate(BudgetItemBase):
    pass


class BudgetItemUpdate(BaseModel):
    category: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    estimated_amount: Optional[int] = Field(None, ge=0)
    actual_amount: Optional[int] = Field(None, ge=0)
    status: Optional[BudgetStatus] = None
    vendor_id: Optional[str] = None
    sponsor_id: Optional[str] = None
    paid_method: Optional[str] = Field(None, max_length=50)
    invoice_number: Optional[str] = Field(None, max_length=100)
    receipt_url: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None


class BudgetItem(BudgetItemBase):
    id: str
    event_id: str
    paid_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CategoryTotals(BaseModel):
    estimated: int
    actual: int
    count: int


class BudgetSummary(BaseModel):
    total_estimated: int
    total_actual: int
    total_paid: int
    total_committed: int
    total_planned: int
    variance: int
    variance_percent: float
    by_category: Dict[str, CategoryTotals]
    item_count: int
    event_budget: Optional[int] = None
    remaining: Optional[int] = None


class BudgetBulkStatusUpdate(BaseModel):
    item_ids: List[str] = Field(..., min_length=1)
    status: BudgetStatus
