"""Probabilistic fault injection."""

import random


class ChaosError(RuntimeError):
    """An injected failure. Recorded on spans, never raised out of a handler."""


class FaultInjector:
    """Decides per call whether a request should resolve to a server error.

    ``error_rate`` is a percentage. It is not clamped: anything <= 0 never
    fires and anything >= 100 always fires.
    """

    def __init__(self, error_rate: int, rng: random.Random | None = None):
        self.error_rate = error_rate
        self._rng = rng or random.Random()

    def should_inject_error(self) -> bool:
        if self.error_rate <= 0:
            return False
        return self._rng.randrange(100) < self.error_rate
