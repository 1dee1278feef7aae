"""
Minimal STOMP 1.2 frame codec for the message stream.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, List

NULL = "\x00"
_EOL = re.compile(r"\r?\n")
_HEADER_END = re.compile(r"\r?\n\r?\n")

_ESCAPES = [("\\", "\\\\"), ("\r", "\\r"), ("\n", "\\n"), (":", "\\c")]


def _escape(value: str) -> str:
    for raw, escaped in _ESCAPES:
        value = value.replace(raw, escaped)
    return value


def _unescape(value: str) -> str:
    out = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch == "\\" and i + 1 < len(value):
            nxt = value[i + 1]
            out.append({"\\": "\\", "r": "\r", "n": "\n", "c": ":"}.get(nxt, nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


@dataclass
class StompFrame:
    """One STOMP frame."""
    command: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: str = ""

    def encode(self) -> str:
        """Serialize to wire text, NUL-terminated."""
        # CONNECT headers are sent verbatim
        escape = (lambda v: v) if self.command in ("CONNECT", "CONNECTED") else _escape
        lines = [self.command]
        lines.extend(f"{escape(key)}:{escape(str(value))}" for key, value in self.headers.items())
        return "\n".join(lines) + "\n\n" + self.body + NULL


def connect_frame(host: str, heart_beat: str = "0,0") -> StompFrame:
    return StompFrame("CONNECT", {"accept-version": "1.2,1.1,1.0", "host": host, "heart-beat": heart_beat})


def subscribe_frame(destination: str, subscription_id: str = "sub-0") -> StompFrame:
    return StompFrame("SUBSCRIBE", {"id": subscription_id, "destination": destination, "ack": "auto"})


def disconnect_frame() -> StompFrame:
    return StompFrame("DISCONNECT")


class StompParser:
    """Incremental parser for STOMP text."""

    def __init__(self) -> None:
        self._buffer = ""

    def feed(self, chunk: str) -> List[StompFrame]:
        """Consume raw text and return completed frames."""
        frames: List[StompFrame] = []
        self._buffer += chunk

        while True:
            # Bare EOLs between frames are heart-beats
            self._buffer = self._buffer.lstrip("\r\n")
            end = self._buffer.find(NULL)
            if end == -1:
                break

            raw = self._buffer[:end]
            self._buffer = self._buffer[end + 1:]
            if raw:
                frames.append(self._parse(raw))

        return frames

    @staticmethod
    def _parse(raw: str) -> StompFrame:
        parts = _HEADER_END.split(raw, maxsplit=1)
        head, body = parts[0], parts[1] if len(parts) > 1 else ""
        # The body is kept verbatim, EOL handling applies to the header block only
        lines = _EOL.split(head)
        command = lines[0].strip()
        headers: Dict[str, str] = {}
        for line in lines[1:]:
            if not line:
                continue
            key, _, value = line.partition(":")
            key = _unescape(key)
            # The first occurrence of a repeated header wins
            if key not in headers:
                headers[key] = _unescape(value)
        return StompFrame(command=command, headers=headers, body=body)
