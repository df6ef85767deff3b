import logging
from typing import Any, Dict

import sentry_sdk

from authkit.app.services.security_events import MonitoringSink

SENTRY_LEVELS = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warning",
    logging.ERROR: "error",
}


class SentryMonitoringSink(MonitoringSink):
    """Forwards sanitized security events to Sentry as messages."""

    def forward(self, event: Dict[str, Any], level: int) -> None:
        with sentry_sdk.new_scope() as scope:
            scope.set_tag("security_event", event["type"])
            scope.set_context("security_event", event)
            sentry_sdk.capture_message(
                f"[SECURITY] {event['type']}", level=SENTRY_LEVELS.get(level, "info")
            )
