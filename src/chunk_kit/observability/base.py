from typing import Literal, Protocol, TypedDict


class ChunkingLabels(TypedDict):
    """Labels attached to every measurement; ``algorithm`` names the splitter."""

    algorithm: Literal["markdown", "character"]


class MetricsHook(Protocol):
    """Sink for parse and chunking measurements.

    Durations are in milliseconds, chunk sizes in characters.
    """

    def record_latency(
        self, name: str, value_ms: float, labels: ChunkingLabels
    ) -> None: ...

    def increment(self, name: str, value: int, labels: ChunkingLabels) -> None: ...

    def record_gauge(self, name: str, value: int, labels: ChunkingLabels) -> None: ...


class NoOpMetricsHook:
    """Default hook; drops every measurement."""

    def record_latency(
        self, name: str, value_ms: float, labels: ChunkingLabels
    ) -> None:
        pass

    def increment(self, name: str, value: int, labels: ChunkingLabels) -> None:
        pass

    def record_gauge(self, name: str, value: int, labels: ChunkingLabels) -> None:
        pass
