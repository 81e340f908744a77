"""Notification and health routes"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
import structlog

from telegram_notifications.models import (
    ErrorResponse,
    HealthResponse,
    InfoResponse,
    NotificationRequest,
    SendNotificationResponse,
)
from telegram_notifications.service import EMPTY_MESSAGE, NotificationService

logger = structlog.get_logger(__name__)
router = APIRouter()

BOT_VERIFICATION_FAILED = "BOT_VERIFICATION_FAILED"

_STATUS_BY_CODE = {
    EMPTY_MESSAGE: status.HTTP_400_BAD_REQUEST,
}


def get_service(request: Request) -> NotificationService:
    """Notification service created by ``create_app``."""
    return request.app.state.service


def _error(status_code: int, error: str, code: str | None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, code=code).model_dump(exclude_none=True),
    )


@router.get("/", response_model=InfoResponse)
async def root():
    """API information and available endpoints"""
    return InfoResponse()


@router.get(
    "/health",
    response_model=HealthResponse,
    response_model_exclude_none=True,
    responses={503: {"model": ErrorResponse}},
)
async def health(service: NotificationService = Depends(get_service)):
    """Health check and bot verification"""
    logger.info("health_check_requested")
    report = await service.check_health()
    if not report.is_healthy:
        return _error(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "Bot verification failed",
            BOT_VERIFICATION_FAILED,
        )
    return HealthResponse(
        status=report.status.value,
        bot_verified=report.bot_verified,
        bot_username=report.bot_username,
    )


@router.post(
    "/send",
    response_model=SendNotificationResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
@router.post(
    "/notify",
    response_model=SendNotificationResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def send_notification(
    request: NotificationRequest,
    service: NotificationService = Depends(get_service),
):
    """Send a notification (served on both /notify and /send)"""
    result = await service.notify(request)
    if not result.success:
        return _error(
            _STATUS_BY_CODE.get(result.code, status.HTTP_502_BAD_GATEWAY),
            result.message,
            result.code,
        )
    return SendNotificationResponse(
        success=True,
        message=result.message,
        telegram_message_id=result.telegram_message_id,
    )
