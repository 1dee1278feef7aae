"""Live activity feed over the backend message stream"""

from .feed import (
    ActivityFeed,
    ActivityItem,
    AuditLog,
    format_audit_action,
    time_ago,
    websocket_url,
)
from .stomp import StompFrame, StompParser

__all__ = [
    "ActivityFeed",
    "ActivityItem",
    "AuditLog",
    "format_audit_action",
    "time_ago",
    "websocket_url",
    "StompFrame",
    "StompParser",
]
