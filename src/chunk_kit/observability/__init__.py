from . import names
from .base import ChunkingLabels, MetricsHook, NoOpMetricsHook

__all__ = [
    "ChunkingLabels",
    "MetricsHook",
    "NoOpMetricsHook",
    "names",
]
