# eventops/services/assistant/service.py
"""
Chat loop for the event planning assistant.

A turn sends the stored conversation plus the new user message to Claude
with the tool definitions attached. Read-only tool calls run immediately
and their results go back to the model, for a bounded number of rounds.
Tool calls that change data are answered with an "awaiting confirmation"
result and returned to the caller as pending actions; they only run
through `confirm`, using the input stored in the conversation.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import anthropic
from anthropic import Anthropic
from sqlalchemy.orm import Session

from eventops.core.config import settings
from eventops.core.errors import (
    ConflictError,
    ExternalServiceError,
    ValidationError,
    not_found,
)
from eventops.crud import crud_ai_conversation, crud_event
from eventops.models.ai_conversation import AIConversation
from eventops.schemas.assistant import ChatRequest, ChatResponse, ConfirmRequest, PendingAction, ToolResult
from eventops.schemas.token import TokenPayload
from eventops.services.assistant.handlers import execute_tool
from eventops.services.assistant.tools import get_anthropic_tools, get_tool, tool_requires_confirmation
from eventops.utils.time_utils import utcnow

logger = logging.getLogger(__name__)

AWAITING_CONFIRMATION = "Awaiting user confirmation before running this action."
DECLINED_MESSAGE = "Okay, I won't go ahead with that."

SYSTEM_PROMPT = """You are an event planning assistant for EventOps.
You help organizers plan events: creating and updating events, finding
vendors and sponsors, and building task checklists.

Guidelines:
- Ask for missing details before creating anything.
- Use the search tools before suggesting vendors or sponsors.
- Budgets and amounts in tool inputs are in US dollars.
- Actions that change data are shown to the user for confirmation first.
  When a tool result says it is awaiting confirmation, tell the user what
  will happen once they confirm; do not claim it is done.
- Keep answers short and practical.

Today's date is {today}."""

ACTION_LABELS = {
    "create_event": "Create event '{title}'",
    "update_event": "Update event {event_id}",
    "add_vendor_to_event": "Add vendor {vendor_id} to event {event_id}",
    "add_sponsor_to_event": "Add sponsor {sponsor_id} to event {event_id}",
    "create_task": "Add task '{title}' to event {event_id}",
}


def describe_action(tool_name: str, tool_input: Dict[str, Any]) -> str:
    template = ACTION_LABELS.get(tool_name)
    if template:
        try:
            return template.format(**tool_input)
        except KeyError:
            pass
    tool = get_tool(tool_name)
    return tool.description if tool else tool_name


def _block_to_dict(block: Any) -> Dict[str, Any]:
    """Convert an SDK content block into the plain dict stored in the conversation."""
    if block.type == "text":
        return {"type": "text", "text": block.text}
    if block.type == "tool_use":
        return {
            "type": "tool_use",
            "id": block.id,
            "name": block.name,
            "input": dict(block.input or {}),
        }
    return {"type": block.type}


def _append_user_content(messages: List[Dict[str, Any]], blocks: List[Dict[str, Any]]) -> None:
    # Consecutive user turns are merged so roles keep alternating
    if messages and messages[-1]["role"] == "user":
        previous = messages[-1]["content"]
        if isinstance(previous, str):
            previous = [{"type": "text", "text": previous}]
        messages[-1] = {"role": "user", "content": list(previous) + blocks}
    else:
        messages.append({"role": "user", "content": blocks})


def _find_tool_use(messages: List[Dict[str, Any]], tool_use_id: str) -> Optional[Dict[str, Any]]:
    for message in messages:
        if message.get("role") != "assistant" or isinstance(message.get("content"), str):
            continue
        for block in message["content"]:
            if block.get("type") == "tool_use" and block.get("id") == tool_use_id:
                return block
    return None


class AssistantService:
    def __init__(self, client: Anthropic, model: Optional[str] = None):
        self.client = client
        self.model = model or settings.ASSISTANT_MODEL
        self.max_rounds = settings.ASSISTANT_MAX_TOOL_ROUNDS

    def _system_prompt(self, db: Session, user: TokenPayload, event_id: Optional[str]) -> str:
        prompt = SYSTEM_PROMPT.format(today=utcnow().date().isoformat())
        if event_id:
            event = crud_event.event.get_owned(db, id=event_id, owner_id=user.sub)
            if event:
                prompt += (
                    f"\n\nThe user is working on the event '{event.title}' "
                    f"(id {event.id}, status {event.status})."
                )
        return prompt

    def _create_message(self, system: str, messages: List[Dict[str, Any]]):
        try:
            return self.client.messages.create(
                model=self.model,
                max_tokens=settings.ASSISTANT_MAX_TOKENS,
                system=system,
                tools=get_anthropic_tools(),
                messages=messages,
            )
        except anthropic.APIError as e:
            logger.error(f"Anthropic API error: {e}")
            raise ExternalServiceError(
                "The AI assistant is temporarily unavailable", service="anthropic"
            ) from e

    def _load_conversation(
        self, db: Session, user: TokenPayload, conversation_id: str
    ) -> AIConversation:
        conversation = crud_ai_conversation.ai_conversation.get_for_user(
            db, id=conversation_id, user_id=user.sub
        )
        if not conversation:
            raise not_found("Conversation")
        return conversation

    def chat(self, db: Session, user: TokenPayload, request: ChatRequest) -> ChatResponse:
        if request.conversation_id:
            conversation = self._load_conversation(db, user, request.conversation_id)
        else:
            conversation = crud_ai_conversation.ai_conversation.create(
                db, user_id=user.sub, title=request.message[:60], event_id=request.event_id
            )

        messages: List[Dict[str, Any]] = list(conversation.messages or [])
        _append_user_content(messages, [{"type": "text", "text": request.message}])
        system = self._system_prompt(db, user, request.event_id or conversation.event_id)

        replies: List[str] = []
        tool_results: List[ToolResult] = []
        pending: List[PendingAction] = []

        for _ in range(self.max_rounds):
            response = self._create_message(system, messages)
            content = [_block_to_dict(block) for block in response.content]
            messages.append({"role": "assistant", "content": content})

            replies.extend(block["text"] for block in content if block["type"] == "text" and block["text"])
            tool_uses = [block for block in content if block["type"] == "tool_use"]
            if not tool_uses:
                break

            result_blocks = []
            for tool_use in tool_uses:
                if tool_requires_confirmation(tool_use["name"]):
                    pending.append(
                        PendingAction(
                            tool_use_id=tool_use["id"],
                            tool_name=tool_use["name"],
                            tool_input=tool_use["input"],
                            description=describe_action(tool_use["name"], tool_use["input"]),
                        )
                    )
                    result_blocks.append(
                        {
                            "type": "tool_result",
                            "tool_use_id": tool_use["id"],
                            "content": AWAITING_CONFIRMATION,
                        }
                    )
                    continue

                result = execute_tool(db, user, tool_use["name"], tool_use["input"])
                tool_results.append(result)
                result_blocks.append(
                    {
                        "type": "tool_result",
                        "tool_use_id": tool_use["id"],
                        "content": json.dumps(result.model_dump(), default=str),
                        "is_error": not result.success,
                    }
                )
            messages.append({"role": "user", "content": result_blocks})
        else:
            logger.warning(
                f"Conversation {conversation.id} hit the tool round limit ({self.max_rounds})"
            )

        crud_ai_conversation.ai_conversation.save_messages(
            db, conversation=conversation, messages=messages
        )

        message = "\n\n".join(replies)
        if not message:
            message = (
                "Please confirm the proposed action(s) to continue."
                if pending
                else "I wasn't able to come up with a response. Could you rephrase?"
            )

        return ChatResponse(
            conversation_id=conversation.id,
            message=message,
            tool_results=tool_results,
            pending_actions=pending,
        )

    def confirm(self, db: Session, user: TokenPayload, request: ConfirmRequest) -> ChatResponse:
        conversation = self._load_conversation(db, user, request.conversation_id)

        if request.tool_use_id in (conversation.resolved_tool_calls or []):
            raise ConflictError("This action has already been handled")

        messages: List[Dict[str, Any]] = list(conversation.messages or [])
        tool_use = _find_tool_use(messages, request.tool_use_id)
        if not tool_use:
            raise not_found("Pending action")
        if not tool_requires_confirmation(tool_use["name"]):
            raise ValidationError("This action does not require confirmation")

        description = describe_action(tool_use["name"], tool_use["input"])
        tool_results: List[ToolResult] = []
        if request.approved:
            result = execute_tool(db, user, tool_use["name"], tool_use["input"])
            tool_results.append(result)
            reply = result.summary if result.success else f"That didn't work: {result.summary}"
            note = f"Confirmed: {description}"
        else:
            reply = DECLINED_MESSAGE
            note = f"Declined: {description}"

        _append_user_content(messages, [{"type": "text", "text": note}])
        messages.append({"role": "assistant", "content": [{"type": "text", "text": reply}]})
        crud_ai_conversation.ai_conversation.save_messages(
            db, conversation=conversation, messages=messages
        )
        crud_ai_conversation.ai_conversation.mark_resolved(
            db, conversation=conversation, tool_use_id=request.tool_use_id
        )

        return ChatResponse(
            conversation_id=conversation.id,
            message=reply,
            tool_results=tool_results,
            pending_actions=[],
        )


def get_assistant_service() -> AssistantService:
    """FastAPI dependency; the assistant is unavailable without an API key."""
    if not settings.ANTHROPIC_API_KEY:
        raise ExternalServiceError(
            "AI assistant is not configured", service="anthropic", status_code=503
        )
    return AssistantService(Anthropic(api_key=settings.ANTHROPIC_API_KEY))
