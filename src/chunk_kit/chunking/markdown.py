# src/chunk_kit/chunking/markdown.py

import logging
from collections.abc import Sequence
from time import monotonic

from chunk_kit.errors import ChunkingDepthError
from chunk_kit.observability import names
from chunk_kit.observability.base import ChunkingLabels, MetricsHook, NoOpMetricsHook
from chunk_kit.parsers.base import MarkdownParser
from chunk_kit.parsers.markdown_parser import RegexMarkdownParser

from .boundaries import Span, force_split
from .config import MarkdownSplitterConfig
from .models import Chunk
from .sections import Node, Section, sectionize
from .sizing import line_start, node_size

logger = logging.getLogger(__name__)

# Deepest level of the section/block tree the splitter descends into
MAX_RECURSION_DEPTH = 200


class MarkdownSplitter:
    """
    Markdown-aware recursive splitter.

    - Sibling blocks and sections are packed greedily up to ``chunk_size``
    - A unit larger than ``chunk_size`` is never merged; it is kept whole
      while it fits in ``chunk_size * max_overflow_ratio``
    - Beyond that ceiling it is split along its children, and a leaf is
      force-split regardless of structure
    - Every chunk is a contiguous slice of the input, in document order
    """

    def __init__(
        self,
        config: MarkdownSplitterConfig = MarkdownSplitterConfig(),
        parser: MarkdownParser | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.config = config
        self.parser = parser or RegexMarkdownParser()
        self.metrics_hook = metrics_hook
        logger.debug(
            "Initialized MarkdownSplitter with chunk_size=%d, max_overflow_ratio=%s, "
            "force_split=%s",
            config.chunk_size,
            config.max_overflow_ratio,
            config.force_split,
        )

    def split_text(self, text: str) -> list[str]:
        return [chunk.text for chunk in self.split(text)]

    def split(self, text: str) -> list[Chunk]:
        if not text.strip():
            logger.debug("Empty input, returning empty list")
            return []

        labels: ChunkingLabels = {"algorithm": "markdown"}
        start = monotonic()
        blocks = self.parser.parse(text)
        parse_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(
            names.MARKDOWN_PARSE_DURATION, parse_ms, labels
        )

        # The root is always packed, never kept whole on the overflow rule
        root = sectionize(blocks)
        run = _SplitRun(text, self.config)
        spans = run.split_nodes(_positioned(text, root.parts, floor=0), level=0)
        chunks = [Chunk.from_span(text, chunk_start, end) for chunk_start, end in spans]

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.CHUNKING_DURATION, elapsed_ms, labels)
        self.metrics_hook.increment(names.CHUNKING_CHUNKS_CREATED, len(chunks), labels)
        if run.forced_splits:
            self.metrics_hook.increment(
                names.CHUNKING_FORCED_SPLITS, run.forced_splits, labels
            )
        if chunks:
            self.metrics_hook.record_gauge(
                names.CHUNKING_LARGEST_CHUNK,
                max(chunk.raw_size for chunk in chunks),
                labels,
            )

        logger.info(
            "Split %d characters into %d chunks (%d forced splits)",
            len(text),
            len(chunks),
            run.forced_splits,
        )
        return chunks


class _SplitRun:
    """Working state of a single ``split`` call."""

    def __init__(self, text: str, config: MarkdownSplitterConfig) -> None:
        self.text = text
        self.chunk_size = config.chunk_size
        self.max_size = config.max_chunk_size
        self.policy = config.force_split
        self.forced_splits = 0

    def split_nodes(self, nodes: list[tuple[Node, Span]], level: int) -> list[Span]:
        if level > MAX_RECURSION_DEPTH:
            raise ChunkingDepthError(
                f"Document nesting exceeds {MAX_RECURSION_DEPTH} levels"
            )

        spans: list[Span] = []
        buffer: Span | None = None

        for node, (start, end) in nodes:
            size = end - start
            if size <= 0:
                continue

            if size <= self.chunk_size:
                if buffer is not None and end - buffer[0] <= self.chunk_size:
                    buffer = (buffer[0], end)
                    continue
                if buffer is not None:
                    spans.append(buffer)
                buffer = (start, end)
                continue

            # Oversized units never share a chunk with their siblings
            if buffer is not None:
                spans.append(buffer)
                buffer = None
            spans.extend(self._split_oversized(node, (start, end), level))

        if buffer is not None:
            spans.append(buffer)
        return spans

    def _split_oversized(self, node: Node, span: Span, level: int) -> list[Span]:
        start, end = span
        if end - start <= self.max_size:
            return [span]

        children = node.parts if isinstance(node, Section) else node.children
        if children:
            spans = self.split_nodes(
                _positioned(self.text, children, floor=start), level + 1
            )
            if spans:
                return spans

        self.forced_splits += 1
        logger.debug(
            "Force-splitting %d characters at offset %d (policy=%s)",
            end - start,
            start,
            self.policy,
        )
        return force_split(self.text, span, self.chunk_size, self.policy)


def _positioned(text: str, nodes: Sequence[Node], floor: int) -> list[tuple[Node, Span]]:
    """Pair nodes with their spans, widened back to the start of their line.

    Container prefixes (``> ``, list indentation) sit between a nested block
    and the start of its line; widening keeps them inside the chunk. Spans
    never reach back past ``floor`` or the previous sibling.
    """
    positioned: list[tuple[Node, Span]] = []
    for node in nodes:
        span = node.span
        if span is None or not node_size(node):
            logger.debug("Skipping empty or unpositioned %s", type(node).__name__)
            continue

        start = line_start(text, span[0], floor)
        positioned.append((node, (start, span[1])))
        floor = span[1]
    return positioned
