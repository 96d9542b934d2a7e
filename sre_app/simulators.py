"""
Simulated work and dependency calls. Each one is a child span with an
artificial delay, so the resulting trace tree has a fixed, known shape.

Delays are ``asyncio.sleep`` so a slow request only suspends its own task.
"""

import asyncio
import random

from opentelemetry import trace
from opentelemetry.context import Context

# Simulated database round trip, milliseconds [min, max)
DB_LATENCY_MIN_MS = 20
DB_LATENCY_MAX_MS = 70


class WorkSimulator:
    def __init__(self, tracer: trace.Tracer, latency_ms: int):
        self._tracer = tracer
        self.latency_ms = latency_ms

    async def simulate_work(self, parent_context: Context | None) -> None:
        """Open a ``simulateWork`` span and wait out the configured latency."""
        with self._tracer.start_as_current_span("simulateWork", context=parent_context) as span:
            if self.latency_ms > 0:
                await asyncio.sleep(self.latency_ms / 1000)
                span.set_attribute("simulated_latency_ms", self.latency_ms)


class DependencySimulator:
    """A database call that always succeeds. Never consults the fault injector."""

    def __init__(self, tracer: trace.Tracer, rng: random.Random | None = None):
        self._tracer = tracer
        self._rng = rng or random.Random()

    async def simulate_dependency(self, parent_context: Context | None) -> Context:
        """Run the ``database_query`` span and return a context parented on it.

        The returned context still points at the (closed) dependency span, so
        anything started under it nests below the database call.
        """
        with self._tracer.start_as_current_span("database_query", context=parent_context) as span:
            delay_ms = self._rng.randrange(DB_LATENCY_MIN_MS, DB_LATENCY_MAX_MS)
            await asyncio.sleep(delay_ms / 1000)
            span.set_attribute("db.system", "postgres")
            span.set_attribute("db.statement", "SELECT * FROM cart")
            span.set_attribute("db.simulated_latency_ms", delay_ms)
        return trace.set_span_in_context(span, parent_context)
