"""
SecurityEvent

Immutable audit record routed to the log sink, never to the database.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from ..base import utcnow
from .enums import SecurityEventType


@dataclass(frozen=True)
class SecurityEvent:
    type: SecurityEventType
    user_id: Optional[str] = None
    email: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: datetime = field(default_factory=utcnow)
