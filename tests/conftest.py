import random
from collections import Counter

import pytest
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from sre_app.metrics import MetricsRecorder


class FixedRandom(random.Random):
    """Random source whose ``randrange`` always returns the same value."""

    def __init__(self, value: int):
        super().__init__(0)
        self.value = value

    def randrange(self, *args, **kwargs):
        return self.value


class LifecycleRecorder(SpanProcessor):
    """Counts start and end notifications per span id."""

    def __init__(self):
        self.started = Counter()
        self.ended = Counter()

    def on_start(self, span, parent_context=None):
        self.started[span.context.span_id] += 1

    def on_end(self, span):
        self.ended[span.context.span_id] += 1


@pytest.fixture
def span_exporter():
    return InMemorySpanExporter()


@pytest.fixture
def lifecycle():
    return LifecycleRecorder()


@pytest.fixture
def tracer_provider(span_exporter, lifecycle):
    provider = TracerProvider()
    provider.add_span_processor(lifecycle)
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    yield provider
    provider.shutdown()


@pytest.fixture
def tracer(tracer_provider):
    return tracer_provider.get_tracer("tests")


@pytest.fixture
def metrics():
    return MetricsRecorder()


def spans_by_name(exporter: InMemorySpanExporter) -> dict:
    spans = exporter.get_finished_spans()
    by_name = {s.name: s for s in spans}
    assert len(by_name) == len(spans), "span names should be unique within one request"
    return by_name
