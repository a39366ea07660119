"""
Chat API Endpoint.

Drives the quiz over HTTP with the same ChatService the Telegram bot
uses. Handy for local testing and smoke checks.
"""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, field_validator

from lingobot.core.service import ChatService, get_chat_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["Chat"])


def _parse_chat_id(chat_id: str) -> Union[int, str]:
    """Numeric ids arrive as strings from paths and web clients; Telegram ids are integers."""
    try:
        return int(chat_id)
    except ValueError:
        return chat_id


class ChatRequest(BaseModel):
    """Inbound text message."""

    chat_id: Union[int, str] = Field(
        ...,
        description="Stable chat identifier",
        examples=[123456789],
    )
    message: str = Field(
        ...,
        max_length=4096,
        description="User's message text",
        examples=["/start"],
    )

    @field_validator("chat_id")
    @classmethod
    def normalize_chat_id(cls, v: Union[int, str]) -> Union[int, str]:
        """Key numeric string ids the same way the session routes do."""
        if isinstance(v, str):
            return _parse_chat_id(v)
        return v


class ChatResponse(BaseModel):
    """Reply to send back to the user."""

    chat_id: Union[int, str]
    reply: str = Field(..., description="Bot's reply text")
    keyboard: Optional[list[list[str]]] = Field(
        default=None,
        description="Reply keyboard rows, when the reply offers buttons",
    )
    state: str = Field(..., description="Conversation state after this message")
    language: str = Field(..., description="Chosen language")
    score: int = Field(..., ge=0, description="Correct answers so far")
    processing_time_ms: Optional[float] = None


class SessionResponse(BaseModel):
    """Snapshot of a chat session."""

    chat_id: Union[int, str]
    state: str
    language: str
    user_name: str
    score: int
    current_question: Optional[str] = None
    message_count: int
    created_at: str
    updated_at: str


class ErrorResponse(BaseModel):
    """Error response."""

    error: str
    detail: Optional[str] = None


@router.post(
    "",
    response_model=ChatResponse,
    status_code=status.HTTP_200_OK,
    summary="Send a chat message",
    description="Send a message to the quiz bot and get its reply.",
    responses={
        200: {"description": "Successful response"},
        422: {"model": ErrorResponse, "description": "Invalid request"},
    },
)
async def chat(
    request: ChatRequest,
    service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Process a chat message."""
    result = await service.process(request.chat_id, request.message)
    return ChatResponse(**result.to_dict())


@router.get(
    "/session/{chat_id}",
    response_model=SessionResponse,
    summary="Get session data",
    description="Retrieve the current state of a chat session.",
    responses={
        200: {"description": "Session data"},
        404: {"model": ErrorResponse, "description": "Session not found"},
    },
)
async def get_session(
    chat_id: str,
    service: ChatService = Depends(get_chat_service),
) -> SessionResponse:
    """Get session information."""
    session = service.get_session(_parse_chat_id(chat_id))

    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not found",
        )

    return SessionResponse(**session.to_dict())


@router.delete(
    "/session/{chat_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Reset a session",
    description="Reset a chat session to its initial state.",
)
async def reset_session(
    chat_id: str,
    service: ChatService = Depends(get_chat_service),
) -> None:
    """Reset session to initial state."""
    session = await service.reset_session(_parse_chat_id(chat_id))

    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not found",
        )
