# src/chunk_kit/chunking/character.py

import logging
from time import monotonic

from chunk_kit.observability import names
from chunk_kit.observability.base import ChunkingLabels, MetricsHook, NoOpMetricsHook

from .config import CharacterSplitterConfig
from .models import Chunk

logger = logging.getLogger(__name__)


class CharacterSplitter:
    """
    Fixed-size character windows.

    Ignores markdown structure entirely. Consecutive windows share
    ``chunk_overlap`` characters.
    """

    def __init__(
        self,
        config: CharacterSplitterConfig = CharacterSplitterConfig(),
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.config = config
        self.metrics_hook = metrics_hook

    def split_text(self, text: str) -> list[str]:
        return [chunk.text for chunk in self.split(text)]

    def split(self, text: str) -> list[Chunk]:
        if not text.strip():
            logger.debug("Empty input, returning empty list")
            return []

        started = monotonic()
        chunk_size = self.config.chunk_size
        step = chunk_size - self.config.chunk_overlap
        text_len = len(text)

        chunks = []
        for start in range(0, text_len, step):
            end = min(start + chunk_size, text_len)
            chunks.append(Chunk.from_span(text, start, end))
            if end == text_len:
                break

        elapsed_ms = 1000 * (monotonic() - started)
        labels: ChunkingLabels = {"algorithm": "character"}
        self.metrics_hook.record_latency(names.CHUNKING_DURATION, elapsed_ms, labels)
        self.metrics_hook.increment(names.CHUNKING_CHUNKS_CREATED, len(chunks), labels)
        logger.info("Split %d characters into %d chunks", text_len, len(chunks))
        return chunks
