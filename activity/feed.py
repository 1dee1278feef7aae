"""Live activity feed built from audit-log events on the message stream"""

import asyncio
import json
import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Deque, Dict, List, Optional
from urllib.parse import urlparse

import aiohttp
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from settings import API_URL, AUDIT_TOPIC, WS_PATH, ACTIVITY_FEED_SIZE, WS_RECONNECT_DELAY
from .stomp import StompFrame, StompParser, connect_frame, disconnect_frame, subscribe_frame

logger = logging.getLogger(__name__)


class AuditLog(BaseModel):
    """Audit-log event published by the backend"""
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str
    action: str
    entity_type: str = Field(alias="entityType")
    entity_id: str = Field(alias="entityId")
    user_id: Optional[str] = Field(default=None, alias="userId")
    timestamp: datetime
    changes: Optional[Dict[str, Any]] = None


@dataclass
class ActivityItem:
    """One human-readable activity line"""
    action: str
    time: str


def format_audit_action(log: AuditLog) -> str:
    """Describe an audit event, e.g. 'Created product variant 42'"""
    action = log.action.lower()
    entity = log.entity_type.replace("_", " ").lower()

    if action == "create":
        return f"Created {entity} {log.entity_id}"
    elif action == "update":
        return f"Updated {entity} {log.entity_id}"
    elif action == "delete":
        return f"Deleted {entity} {log.entity_id}"
    return f"{log.action} {entity}"


def time_ago(moment: datetime, now: Optional[datetime] = None) -> str:
    """Coarse relative time: 'Just now', '5 min ago', '2 hours ago', '1 day ago'"""
    if now is None:
        now = datetime.now(timezone.utc) if moment.tzinfo else datetime.now()

    seconds = int((now - moment).total_seconds())
    if seconds < 60:
        return "Just now"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes} min ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours} hour{'s' if hours > 1 else ''} ago"
    days = hours // 24
    return f"{days} day{'s' if days > 1 else ''} ago"


def websocket_url(base_url: str, ws_path: str = WS_PATH) -> str:
    """Map the HTTP base URL to the websocket endpoint"""
    parsed = urlparse(base_url)
    scheme = "wss" if parsed.scheme == "https" else "ws"
    return f"{scheme}://{parsed.netloc}{parsed.path.rstrip('/')}{ws_path}"


class ActivityFeed:
    """Subscribes to the audit-log topic and keeps the newest activity lines"""

    def __init__(
        self,
        base_url: str = API_URL,
        topic: str = AUDIT_TOPIC,
        max_items: int = ACTIVITY_FEED_SIZE,
        reconnect_delay: float = WS_RECONNECT_DELAY,
        on_activity: Optional[Callable[[ActivityItem], None]] = None,
    ):
        self.url = websocket_url(base_url)
        self.host = urlparse(base_url).hostname or "localhost"
        self.topic = topic
        self.reconnect_delay = reconnect_delay
        self.on_activity = on_activity
        self.items: Deque[ActivityItem] = deque(maxlen=max_items)
        self.connected = False
        self._stopped = False
        self._ws: Optional[aiohttp.ClientWebSocketResponse] = None

    @property
    def activities(self) -> List[ActivityItem]:
        """Activity lines, newest first"""
        return list(self.items)

    def handle_message(self, body: str, now: Optional[datetime] = None) -> Optional[ActivityItem]:
        """Turn one MESSAGE body into an activity line

        Malformed bodies are logged and dropped.
        """
        try:
            log = AuditLog.model_validate(json.loads(body))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Error parsing audit log: {e}")
            return None

        item = ActivityItem(action=format_audit_action(log), time=time_ago(log.timestamp, now))
        self.items.appendleft(item)
        logger.debug(f"Activity: {item.action} ({item.time})")
        if self.on_activity is not None:
            self.on_activity(item)
        return item

    async def handle_frame(self, frame: StompFrame) -> None:
        if frame.command == "CONNECTED":
            self.connected = True
            logger.info("Message stream connected")
            await self._send(subscribe_frame(self.topic))
        elif frame.command == "MESSAGE":
            self.handle_message(frame.body)
        elif frame.command == "ERROR":
            logger.error(f"STOMP error: {frame.headers.get('message', '')} {frame.body}".strip())

    async def _send(self, frame: StompFrame) -> None:
        if self._ws is not None and not self._ws.closed:
            await self._ws.send_str(frame.encode())

    async def _listen(self, session: aiohttp.ClientSession) -> None:
        parser = StompParser()
        async with session.ws_connect(self.url) as ws:
            self._ws = ws
            await self._send(connect_frame(self.host))
            async for msg in ws:
                if msg.type == aiohttp.WSMsgType.TEXT:
                    for frame in parser.feed(msg.data):
                        await self.handle_frame(frame)
                elif msg.type in (aiohttp.WSMsgType.CLOSED, aiohttp.WSMsgType.ERROR):
                    break
        self._ws = None

    async def run(self) -> None:
        """Listen until stop(), reconnecting after connection loss"""
        self._stopped = False
        async with aiohttp.ClientSession() as session:
            while not self._stopped:
                try:
                    await self._listen(session)
                except (aiohttp.ClientError, ConnectionError) as e:
                    logger.warning(f"Message stream connection failed: {e}")
                finally:
                    if self.connected:
                        logger.info("Message stream disconnected")
                    self.connected = False

                if not self._stopped:
                    await asyncio.sleep(self.reconnect_delay)

    async def stop(self) -> None:
        self._stopped = True
        if self._ws is not None and not self._ws.closed:
            await self._send(disconnect_frame())
            await self._ws.close()
