"""Content negotiation for public form endpoints"""

import json
import logging

from fastapi import Request

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_payload(request: Request) -> dict:
    """
    Read a JSON or form-encoded body into a plain dict.

    The booking page posts JSON; the no-JS fallback form posts
    application/x-www-form-urlencoded. Anything else is rejected.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    if content_type in ("application/json", ""):
        raw = await request.body()
        if not raw:
            raise ValidationError("Missing required fields")
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"⚠️ Invalid JSON body on {request.url.path}")
            raise ValidationError("Invalid JSON body") from None
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    raise ValidationError(f"Unsupported content type: {content_type}")
