"""
Chat API endpoint - Stateless proxy to the assistant.

The caller owns the conversation and sends its history on every request;
nothing is kept server-side. The session endpoints are the stateful path.
"""

import logging
from fastapi import APIRouter, HTTPException, Depends, status

from ..core.errors import AssistantUnavailable
from ..models import ChatRequest, ChatReply, Turn
from ..services import AssistantGateway
from ..utils.dependencies import get_assistant

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatReply)
async def chat(
    request: ChatRequest,
    assistant: AssistantGateway = Depends(get_assistant)
):
    """
    Get the assistant's next reply.

    Args:
        request: Latest message, whether it opens the conversation, prior turns

    Returns:
        ChatReply with the assistant message
    """
    if not request.message.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Message is required"
        )

    if not assistant.configured:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="LLM not configured. Set LLM_API_KEY to enable the assistant."
        )

    history = [Turn(role=item.role, content=item.content) for item in request.history]

    try:
        reply = await assistant.complete(history, request.message, is_opening=request.is_first_message)
    except AssistantUnavailable as e:
        logger.error(f"Chat proxy failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e)
        )

    return ChatReply(message=reply)
