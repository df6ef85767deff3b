import logging
from typing import Any, Optional

from authkit.app.services.context import RequestInfo
from authkit.app.services.security_events import SecurityEventSink
from authkit.domain.entities import SecurityEventType
from authkit.result import Error, Result, Return

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "INTERNAL_ERROR"


def internal_error(
    events: SecurityEventSink,
    event_type: SecurityEventType,
    request_info: Optional[RequestInfo],
    exc: Exception,
    message: str,
    user_id: Any = None,
    email: Optional[str] = None,
) -> Result[Any]:
    """
    Record an unexpected failure and hide it behind a generic error.

    The exception text goes to the event details (which are redacted by
    the sink), never to the returned message.
    """
    logger.exception(f"{event_type.value}: unexpected failure")
    events.emit(
        event_type,
        request_info,
        user_id=user_id,
        email=email,
        details={"error": f"{type(exc).__name__}: {exc}"},
    )
    return Return.err(Error(INTERNAL_ERROR, message))
