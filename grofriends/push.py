from typing import Any, Dict, Set
import asyncio
import json
import logging

from fastapi.encoders import jsonable_encoder

from .config import EVENTS_QUEUE_SIZE
from .core import PUSH_EVENTS

logger = logging.getLogger(__name__)


def format_event(event: str, data: Any) -> str:
    return f"event: {event}\ndata: {json.dumps(jsonable_encoder(data))}\n\n"


class EventHub:
    """
    In-process fan-out of server-sent events keyed by user id.
    Best-effort: a listener whose queue is full misses the event and is
    expected to re-read the list endpoints.
    """

    def __init__(self, queue_size: int = EVENTS_QUEUE_SIZE):
        self.queue_size = queue_size
        self.connections: Dict[int, Set[asyncio.Queue]] = {}

    def connect(self, user_id: int) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        self.connections.setdefault(user_id, set()).add(queue)
        return queue

    def disconnect(self, user_id: int, queue: asyncio.Queue):
        listeners = self.connections.get(user_id)
        if listeners is None:
            return
        listeners.discard(queue)
        if not listeners:
            del self.connections[user_id]

    def _offer(self, queue: asyncio.Queue, payload: str) -> bool:
        try:
            queue.put_nowait(payload)
            return True
        except asyncio.QueueFull:
            logger.warning({'msg': 'push_dropped', 'reason': 'queue_full'})
            return False

    def send_to(self, user_id: int, event: str, data: Any) -> int:
        payload = format_event(event, data)
        delivered = sum(self._offer(q, payload) for q in list(self.connections.get(user_id, ())))
        PUSH_EVENTS.labels(event=event).inc(delivered)
        return delivered

    def broadcast(self, event: str, data: Any) -> int:
        payload = format_event(event, data)
        delivered = 0
        for listeners in list(self.connections.values()):
            delivered += sum(self._offer(q, payload) for q in list(listeners))
        PUSH_EVENTS.labels(event=event).inc(delivered)
        return delivered

    def clear(self):
        self.connections.clear()


hub = EventHub()
