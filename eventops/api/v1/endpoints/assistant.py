# eventops/api/v1/endpoints/assistant.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from eventops.api import deps
from eventops.crud import crud_ai_conversation
from eventops.db.session import get_db
from eventops.schemas.assistant import (
    ChatRequest,
    ChatResponse,
    ConfirmRequest,
    Conversation,
    ConversationSummary,
)
from eventops.schemas.token import TokenPayload
from eventops.services.assistant import AssistantService, get_assistant_service

router = APIRouter(prefix="/assistant", tags=["Assistant"])


def _get_conversation(db: Session, conversation_id: str, user_id: str):
    conversation = crud_ai_conversation.ai_conversation.get_for_user(
        db, id=conversation_id, user_id=user_id
    )
    if not conversation:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Conversation not found")
    return conversation


@router.post("/chat", response_model=ChatResponse)
def chat(
    chat_in: ChatRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
    assistant: AssistantService = Depends(get_assistant_service),
):
    """
    Send a message to the planning assistant.

    Lookups run straight away. Anything that would create or change data
    comes back under `pending_actions` and needs a call to `/assistant/confirm`.
    """
    return assistant.chat(db, current_user, chat_in)


@router.post("/confirm", response_model=ChatResponse)
def confirm_action(
    confirm_in: ConfirmRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
    assistant: AssistantService = Depends(get_assistant_service),
):
    return assistant.confirm(db, current_user, confirm_in)


@router.get("/conversations", response_model=List[ConversationSummary])
def list_conversations(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return crud_ai_conversation.ai_conversation.list_for_user(db, user_id=current_user.sub)


@router.get("/conversations/{conversationId}", response_model=Conversation)
def get_conversation(
    conversationId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return _get_conversation(db, conversationId, current_user.sub)


@router.delete("/conversations/{conversationId}", status_code=status.HTTP_204_NO_CONTENT)
def delete_conversation(
    conversationId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    conversation = _get_conversation(db, conversationId, current_user.sub)
    crud_ai_conversation.ai_conversation.remove(db, conversation=conversation)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
