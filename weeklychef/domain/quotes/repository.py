"""Quote request repository"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...exceptions import PersistenceError
from ...models import QuoteRequest

logger = logging.getLogger(__name__)


class QuoteRepository:
    @staticmethod
    def create_quote_request(db: Session, **quote_data) -> QuoteRequest:
        try:
            quote = QuoteRequest(**quote_data)
            db.add(quote)
            db.commit()
            db.refresh(quote)
            return quote
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"❌ Failed to insert quote request: {e}")
            raise PersistenceError("Failed to create quote request") from e
