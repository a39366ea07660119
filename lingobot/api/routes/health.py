"""
Health Check Endpoints

Provides health, readiness, and liveness probes for monitoring and
container orchestration.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from lingobot import __version__
from lingobot.config import settings
from lingobot.core.quiz.content import QuestionBankError
from lingobot.core.service import ChatService, get_chat_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])

# Track application start time for uptime calculation
_start_time: Optional[datetime] = None


def set_start_time() -> None:
    """Set application start time. Called once on startup."""
    global _start_time
    _start_time = datetime.now(timezone.utc)


def get_uptime_seconds() -> Optional[float]:
    """Get application uptime in seconds."""
    if _start_time is None:
        return None
    return (datetime.now(timezone.utc) - _start_time).total_seconds()


class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: datetime
    version: str
    environment: str


class ReadyResponse(BaseModel):
    """Readiness check response with component status."""
    status: str
    timestamp: datetime
    checks: dict[str, str]
    active_chats: int = 0


class LiveResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: datetime
    uptime_seconds: Optional[float] = None


@router.get(
    "",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Returns 200 if the application is running.",
)
async def health() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        environment=settings.app_env,
    )


def _service_or_none() -> Optional[ChatService]:
    """Resolve the chat service, or None when content failed to load."""
    try:
        return get_chat_service()
    except QuestionBankError as e:
        logger.error(f"Readiness check: question bank error - {e}")
        return None


@router.get(
    "/ready",
    response_model=ReadyResponse,
    summary="Readiness probe",
    description="Checks that quiz content is loaded. Returns 503 otherwise.",
    responses={
        200: {"description": "Ready to serve chats"},
        503: {"description": "Quiz content unavailable"},
    },
)
async def ready(
    service: Optional[ChatService] = Depends(_service_or_none),
) -> ReadyResponse:
    """
    Readiness probe.

    Checks:
    - Question bank loaded
    - Session store available
    """
    checks = {
        "question_bank": "ok" if service is not None else "failed",
        "session_store": "ok" if service is not None else "unavailable",
    }
    all_ok = service is not None

    response = ReadyResponse(
        status="ready" if all_ok else "not_ready",
        timestamp=datetime.now(timezone.utc),
        checks=checks,
        active_chats=len(service.store) if service is not None else 0,
    )

    if not all_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(mode="json"),
        )

    return response


@router.get(
    "/live",
    response_model=LiveResponse,
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    description="Returns 200 if the process is alive.",
)
async def live() -> LiveResponse:
    """Liveness probe. Always returns 200 if the process is running."""
    return LiveResponse(
        status="alive",
        timestamp=datetime.now(timezone.utc),
        uptime_seconds=get_uptime_seconds(),
    )
