"""
Scheduling events.

Every event is appended to a JSON-lines log and handed to subscribers
(e.g. notification delivery). Subscribers run after the change is
committed; their failures are logged and never undo the change.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from ..utils.date import format_timestamp, utc_now
from ..utils.logging import get_logger

logger = get_logger("clinic.events")

Subscriber = Callable[[str, Dict[str, Any]], Union[None, Awaitable[None]]]


def log_event(path: Union[str, Path], event: str, data: Dict[str, Any]) -> None:
    """Append an event to the log as a JSON line."""
    log_path = Path(path)
    record = {"ts": format_timestamp(utc_now()), "event": event, **data}
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with log_path.open("a", encoding="utf-8") as f:
        json.dump(record, f, ensure_ascii=False, default=str)
        f.write("\n")


class EventPublisher:
    """Fan-out of scheduling events."""

    def __init__(self, log_path: Optional[Union[str, Path]] = None):
        self.log_path = Path(log_path) if log_path else None
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    async def publish(self, event: str, data: Dict[str, Any]) -> None:
        if self.log_path is not None:
            try:
                await asyncio.to_thread(log_event, self.log_path, event, data)
            except OSError:
                logger.exception("could not write event %s to %s", event, self.log_path)

        for callback in list(self._subscribers):
            try:
                result = callback(event, data)
                if asyncio.iscoroutine(result):
                    await result
            except Exception:
                logger.exception("event subscriber failed for %s", event)
