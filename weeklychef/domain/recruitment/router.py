"""Recruitment router - staff application notifications"""

import logging

from fastapi import APIRouter, Depends, Request

from ...services.notification_service import NotificationDispatcher, get_notification_dispatcher
from ...shared.request_parsing import read_payload
from .schemas import RecruitmentApplication

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Recruitment"])


@router.post("/notify-recruitment")
async def notify_recruitment(
    request: Request,
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """Acknowledge a staff application to the candidate and alert the organizer"""
    payload = await read_payload(request)
    application = RecruitmentApplication.from_payload(payload)

    logger.info(f"📥 Application from {application.email} for {application.role}")
    report = await dispatcher.send_recruitment_received(application)
    logger.info(f"📨 Recruitment notifications for {application.email}: {report.details()}")
    return {"success": True}
