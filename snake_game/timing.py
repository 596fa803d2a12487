"""
Single-shot tick scheduling.

The host timer fires once per arming and is re-armed after each accepted
fire, so at most one tick is ever outstanding and a slow frame can never
stack up ticks. Every arming gets a new generation number; a fire carrying
an older generation (e.g. one already queued when the player restarted) is
dropped.
"""
import logging

logger = logging.getLogger(__name__)


class TickTimer:
    def __init__(self, set_timer):
        """
        `set_timer(generation, millis)` schedules one fire tagged with
        `generation` after `millis` ms, replacing any earlier schedule;
        `millis == 0` disables the timer.
        """
        self._set_timer = set_timer
        self.generation = 0
        self.pending = False
        self.interval = 0

    def arm(self, interval_ms: int):
        if interval_ms <= 0:
            raise ValueError(f"tick interval must be positive, got {interval_ms}")
        self.generation += 1
        self.pending = True
        self.interval = interval_ms
        self._set_timer(self.generation, interval_ms)

    def cancel(self):
        self.generation += 1
        self.pending = False
        self._set_timer(self.generation, 0)

    def accept(self, generation) -> bool:
        """True for the one fire belonging to the current arming."""
        if not self.pending or generation != self.generation:
            logger.debug("Dropping stale tick (generation %s, current %d)",
                         generation, self.generation)
            return False
        self.pending = False
        return True
