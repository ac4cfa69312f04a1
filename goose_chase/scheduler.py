"""TransitionScheduler - the single cancelable deferred stage transition."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass
class PendingTransition:
    """One-shot countdown bound to the state generation that scheduled it."""

    name: str
    remaining: int
    generation: int
    action: Callable[[], None]


class TransitionScheduler:
    """Holds at most one pending transition.

    Scheduling replaces whatever was pending. A transition whose
    generation no longer matches the live state is dropped instead of
    fired.
    """

    def __init__(self) -> None:
        self._pending: PendingTransition | None = None

    @property
    def pending(self) -> PendingTransition | None:
        return self._pending

    def schedule(
        self,
        name: str,
        delay: int,
        generation: int,
        action: Callable[[], None],
    ) -> None:
        if delay <= 0:
            raise ValueError(f"delay must be positive, got {delay}")
        if self._pending is not None:
            logger.debug(
                "Superseding pending %r (generation %d)",
                self._pending.name, self._pending.generation,
            )
        self._pending = PendingTransition(
            name=name, remaining=delay, generation=generation, action=action
        )

    def cancel(self) -> PendingTransition | None:
        pending, self._pending = self._pending, None
        return pending

    def tick(self, current_generation: int) -> bool:
        """Count down the pending transition. Returns True if it fired."""
        pending = self._pending
        if pending is None:
            return False
        if pending.generation != current_generation:
            logger.debug(
                "Dropping stale %r for generation %d (now %d)",
                pending.name, pending.generation, current_generation,
            )
            self._pending = None
            return False
        pending.remaining -= 1
        if pending.remaining > 0:
            return False
        self._pending = None
        pending.action()
        return True
