# eventops/schemas/assistant.py
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=8000)
    conversation_id: Optional[str] = None
    event_id: Optional[str] = None


class PendingAction(BaseModel):
    """A write tool call the model proposed; runs only after confirmation."""
    tool_use_id: str
    tool_name: str
    tool_input: Dict[str, Any]
    description: str


class ToolResult(BaseModel):
    tool_name: str
    success: bool
    summary: str
    data: Optional[Any] = None
    error: Optional[str] = None


class ChatResponse(BaseModel):
    conversation_id: str
    message: str
    tool_results: List[ToolResult] = Field(default_factory=list)
    pending_actions: List[PendingAction] = Field(default_factory=list)


class ConfirmRequest(BaseModel):
    conversation_id: str
    tool_use_id: str
    approved: bool = True


class ConversationSummary(BaseModel):
    id: str
    title: Optional[str] = None
    event_id: Optional[str] = None

    model_config = {"from_attributes": True}


class Conversation(ConversationSummary):
    messages: List[Dict[str, Any]]
