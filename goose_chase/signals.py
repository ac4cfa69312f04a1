"""In-memory pub/sub signal bus with per-tick flush semantics."""
from __future__ import annotations

from typing import Any, Callable

MISSILE_ARMED = "missile_armed"
MISSILE_IMPACT = "missile_impact"
PICKUP_COLLECTED = "pickup_collected"
STAGE_STARTED = "stage_started"
STAGE_WON = "stage_won"
GOOSE_LOST = "goose_lost"
ALL_STAGES_COMPLETE = "all_stages_complete"

_Handler = Callable[[str, dict[str, Any]], None]


class SignalBus:
    """Queues signals during a tick and delivers them on ``flush``.

    A signal name is queued at most once between flushes; later publishes
    of the same name in that window are dropped along with their data.
    Two missiles striking on the same tick therefore yield a single
    ``missile_impact`` carrying the first missile's ``pos``.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[_Handler]] = {}
        self._queue: list[tuple[str, dict[str, Any]]] = []

    def subscribe(self, signal_name: str, handler: _Handler) -> None:
        self._subscribers.setdefault(signal_name, []).append(handler)

    def unsubscribe(self, signal_name: str, handler: _Handler) -> None:
        handlers = self._subscribers.get(signal_name)
        if handlers is None:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            pass

    def publish(self, signal_name: str, **data: Any) -> None:
        if any(name == signal_name for name, _ in self._queue):
            return
        self._queue.append((signal_name, data))

    def flush(self) -> None:
        snapshot = self._queue
        self._queue = []
        for signal_name, data in snapshot:
            for handler in list(self._subscribers.get(signal_name, [])):
                handler(signal_name, data)

    def clear(self) -> None:
        self._queue.clear()
