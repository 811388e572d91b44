# eventops/schemas/task.py
from datetime import datetime
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field


class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


class TaskStatus(str, Enum):
    todo = "todo"
    in_progress = "in_progress"
    blocked = "blocked"
    completed = "completed"


class TaskBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=50)
    priority: TaskPriority = TaskPriority.medium
    status: TaskStatus = TaskStatus.todo
    due_date: Optional[datetime] = None
    linked_vendor_id: Optional[str] = None
    linked_sponsor_id: Optional[str] = None
    linked_budget_item_id: Optional[str] = None
    notes: Optional[str] = None


class TaskCreate(TaskBase):
    pass


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=50)
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[datetime] = None
    linked_vendor_id: Optional[str] = None
    linked_sponsor_id: Optional[str] = None
    linked_budget_item_id: Optional[str] = None
    notes: Optional[str] = None
    sort_order: Optional[int] = None


class Task(TaskBase):
    id: str
    event_id: str
    sort_order: Optional[int] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class TaskSummary(BaseModel):
    total: int
    todo: int
    in_progress: int
    blocked: int
    completed: int
    overdue: int
    due_this_week: int
    urgent: int
    completion_rate: int


class TaskTemplateRequest(BaseModel):
    template: str = "conference"


class TaskReorderRequest(BaseModel):
    task_ids: List[str] = Field(..., min_length=1)
