from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..auth import require_admin_token
from ..domain.bookings.router import get_booking_service
from ..domain.bookings.schemas import ConfirmBookingRequest
from ..domain.bookings.service import BookingService
from ..services.notification_service import NotificationDispatcher, get_notification_dispatcher

router = APIRouter(prefix="/api", tags=["Notifications"], dependencies=[Depends(require_admin_token)])


@router.post("/test-confirm-booking")
async def resend_booking_notifications(
    body: ConfirmBookingRequest,
    service: BookingService = Depends(get_booking_service),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """Re-send confirmation notifications for a booking (manual recovery)"""
    booking = service.get_booking(body.booking_id)
    report = await dispatcher.send_booking_confirmation(booking)

    if not report.all_delivered:
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": "Some notifications failed. Check server logs for details.",
                "details": report.details(),
            },
        )
    return {"success": True, "message": "All notifications sent successfully", "details": report.details()}


@router.post("/test-notification")
async def send_test_notification(
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """Send a test WhatsApp message to the organizer"""
    report = await dispatcher.send_test_message()
    result = report.results[0]
    if result.status != "sent":
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": result.error or "Organizer phone not configured"},
        )
    return {"success": True, "message": "WhatsApp sent"}
