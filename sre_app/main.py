"""FastAPI application: wires the chaos handlers, metrics and tracing together."""

import logging
import random
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Response
from fastapi.responses import PlainTextResponse
from opentelemetry import context as otel_context
from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.trace import TracerProvider

from . import config
from .faults import FaultInjector
from .handlers import CheckoutHandler, Outcome, RootHandler
from .metrics import MetricsRecorder
from .simulators import DependencySimulator, WorkSimulator
from .telemetry import TRACER_NAME, init_tracing

log = logging.getLogger(__name__)


def _respond(outcome: Outcome) -> PlainTextResponse:
    return PlainTextResponse(outcome.body, status_code=outcome.status)


def create_app(
    error_rate: int = config.ERROR_RATE,
    latency_ms: int = config.LATENCY_MS,
    tracer_provider: TracerProvider | None = None,
    metrics: MetricsRecorder | None = None,
    rng: random.Random | None = None,
) -> FastAPI:
    """Build the app. Everything shared between requests is created here once.

    Routes are coroutines, so every request runs as its own task on the event
    loop and simulated latency never holds a worker thread.
    """
    log.info("Config: ERROR_RATE=%d%%, LATENCY_MS=%dms", error_rate, latency_ms)
    if not 0 <= error_rate <= 100:
        log.warning("ERROR_RATE=%d is outside 0-100 and is used as-is", error_rate)

    rng = rng or random.Random()
    metrics = metrics or MetricsRecorder()
    tracer = trace.get_tracer(TRACER_NAME, tracer_provider=tracer_provider)

    faults = FaultInjector(error_rate, rng)
    work = WorkSimulator(tracer, latency_ms)
    root_handler = RootHandler(tracer, faults, work, metrics)
    checkout_handler = CheckoutHandler(tracer, faults, work, metrics, DependencySimulator(tracer, rng))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if tracer_provider is not None:
            tracer_provider.shutdown()

    app = FastAPI(title="SRE Observability App", version=config.SERVICE_VERSION, lifespan=lifespan)
    app.state.metrics = metrics

    # Server span per request; extracts the inbound traceparent
    FastAPIInstrumentor.instrument_app(
        app,
        tracer_provider=tracer_provider,
        excluded_urls="/metrics",
        exclude_spans=["receive", "send"],
    )

    # The server span is current here; handlers take it as an explicit parent
    @app.api_route("/", methods=["GET", "POST"], response_class=PlainTextResponse)
    async def root():
        return _respond(await root_handler.handle(otel_context.get_current()))

    @app.api_route("/checkout", methods=["GET", "POST"], response_class=PlainTextResponse)
    async def checkout():
        return _respond(await checkout_handler.handle(otel_context.get_current()))

    @app.get("/metrics")
    async def prometheus_metrics():
        return Response(metrics.exposition(), media_type=metrics.content_type)

    return app


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    provider = init_tracing()
    app = create_app(tracer_provider=provider)
    log.info("Starting SRE App on %s:%d", config.HOST, config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
