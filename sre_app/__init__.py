"""SRE observability app: synthetic latency, errors and span trees for pipeline validation."""

__version__ = "1.0.0"
