"""
Order change notifications.

Callers subscribe to a key ("orders" or "restaurant:<id>"), get back a handle they
cancel when they lose interest, and are called with an OrderChangeEvent after
each committed status change. Delivery is synchronous; listeners re-run their
queries or report generation on notification.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List
import itertools
import logging
import threading
from app.models.order import OrderStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderChangeEvent:
    """A committed order status change."""
    order_id: int
    restaurant_id: int
    previous_status: OrderStatus
    status: OrderStatus
    version: int
    occurred_at: datetime = field(default_factory=datetime.utcnow)


Listener = Callable[[OrderChangeEvent], None]


class Subscription:
    """Handle returned by subscribe(); cancel() stops delivery."""

    def __init__(self, notifier: "OrderChangeNotifier", key: str, token: int) -> None:
        self.key = key
        self._notifier = notifier
        self._token = token
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        """Stop receiving events. Safe to call more than once."""
        if self._active:
            self._active = False
            self._notifier._remove(self.key, self._token)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc) -> None:
        self.cancel()


class OrderChangeNotifier:
    """Thread-safe registry of listeners keyed by order-set key."""

    def __init__(self) -> None:
        self._listeners: Dict[str, Dict[int, Listener]] = {}
        self._tokens = itertools.count(1)
        self._lock = threading.Lock()

    def subscribe(self, key: str, callback: Listener) -> Subscription:
        """Register interest in a key."""
        with self._lock:
            token = next(self._tokens)
            self._listeners.setdefault(key, {})[token] = callback
        logger.debug(f"Subscribed listener {token} to '{key}'")
        return Subscription(self, key, token)

    def publish(self, key: str, event: OrderChangeEvent) -> int:
        """
        Deliver an event to every current listener of a key.
        Returns the number of listeners notified. A failing listener is logged and
        does not stop delivery to the others.
        """
        with self._lock:
            listeners: List[Listener] = list(self._listeners.get(key, {}).values())

        delivered = 0
        for listener in listeners:
            try:
                listener(event)
                delivered += 1
            except Exception as e:
                logger.error(f"Order change listener for '{key}' failed: {e}", exc_info=True)
        return delivered

    def subscriber_count(self, key: str) -> int:
        with self._lock:
            return len(self._listeners.get(key, {}))

    def _remove(self, key: str, token: int) -> None:
        with self._lock:
            listeners = self._listeners.get(key)
            if listeners is None:
                return
            listeners.pop(token, None)
            if not listeners:
                del self._listeners[key]
        logger.debug(f"Cancelled listener {token} on '{key}'")


notifier = OrderChangeNotifier()
