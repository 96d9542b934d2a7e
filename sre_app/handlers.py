"""
Request handlers for the two routes.

    /          handleRoot ── simulateWork
    /checkout  handleCheckout ── database_query ── simulateWork

Each handler opens its span under the HTTP server span, runs its simulators,
asks the fault injector for the outcome and records the request in the
metrics before the span closes.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass

from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.trace import Status, StatusCode

from .faults import ChaosError, FaultInjector
from .metrics import MetricsRecorder
from .simulators import DependencySimulator, WorkSimulator

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outcome:
    status: int
    body: str


class RequestHandler(ABC):
    """Shared skeleton: handler span → ``_run`` → metrics → span closed."""

    route: str = ""
    span_name: str = ""

    def __init__(
        self,
        tracer: trace.Tracer,
        faults: FaultInjector,
        work: WorkSimulator,
        metrics: MetricsRecorder,
    ):
        self._tracer = tracer
        self._faults = faults
        self._work = work
        self._metrics = metrics

    async def handle(self, parent_context: Context | None = None) -> Outcome:
        start = time.perf_counter()
        with self._tracer.start_as_current_span(self.span_name, context=parent_context) as span:
            ctx = trace.set_span_in_context(span, parent_context)
            outcome = await self._run(span, ctx)
            duration = time.perf_counter() - start
            self._metrics.record(self.route, outcome.status, duration)
        return outcome

    @abstractmethod
    async def _run(self, span: trace.Span, ctx: Context) -> Outcome:
        """Simulate the route's work under ``ctx`` and decide the response."""

    def _inject_failure(self, span: trace.Span) -> None:
        span.set_attribute("error", True)
        span.record_exception(ChaosError("artificial chaos error"))
        span.set_status(Status(StatusCode.ERROR, "artificial chaos error"))
        log.warning("Error injected 500 on %s", self.route)


class RootHandler(RequestHandler):
    """``/``: one work span; success body echoes the trace id."""

    route = "/"
    span_name = "handleRoot"

    async def _run(self, span, ctx):
        await self._work.simulate_work(ctx)

        if self._faults.should_inject_error():
            self._inject_failure(span)
            return Outcome(500, "Chaos Monkey struck!\n")

        trace_id = trace.format_trace_id(span.get_span_context().trace_id)
        return Outcome(200, f"Hello from SRE App! TraceID: {trace_id}\n")


class CheckoutHandler(RequestHandler):
    """``/checkout``: database call first, then work nested under it."""

    route = "/checkout"
    span_name = "handleCheckout"

    def __init__(self, tracer, faults, work, metrics, dependency: DependencySimulator):
        super().__init__(tracer, faults, work, metrics)
        self._dependency = dependency

    async def _run(self, span, ctx):
        db_ctx = await self._dependency.simulate_dependency(ctx)
        await self._work.simulate_work(db_ctx)

        if self._faults.should_inject_error():
            self._inject_failure(span)
            return Outcome(500, "Checkout failed\n")

        return Outcome(200, "Checkout successful")
