"""Quote router - custom quote requests (10+ guests)"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ...database import get_db
from ...services.notification_service import NotificationDispatcher, get_notification_dispatcher
from ...shared.request_parsing import read_payload
from .schemas import QuoteRequestResponse
from .service import QuoteService

router = APIRouter(prefix="/api", tags=["Quotes"])


def get_quote_service(
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> QuoteService:
    """Dependency injection for QuoteService"""
    return QuoteService(db, dispatcher)


@router.post("/request-quote", response_model=QuoteRequestResponse)
async def request_quote(request: Request, service: QuoteService = Depends(get_quote_service)):
    payload = await read_payload(request)
    quote = await service.submit_quote_request(payload)
    return QuoteRequestResponse(
        success=True, id=quote.id, message="Quote request received successfully"
    )
