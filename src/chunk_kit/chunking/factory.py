# src/chunk_kit/chunking/factory.py

from collections.abc import Mapping
from typing import Any

from chunk_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import TextSplitter
from .config import MarkdownSplitterConfig, SplitterConfig, parse_splitter_config


def create_splitter(
    config: SplitterConfig,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> TextSplitter:
    """Create a text splitter from config.

    Args:
        config: Splitter configuration; ``algorithm`` selects the variant.
        metrics_hook: Optional metrics hook for observability.

    Returns:
        Configured TextSplitter implementation.

    Raises:
        ValueError: If the algorithm is unknown.

    Example:
        >>> config = MarkdownSplitterConfig(chunk_size=500)
        >>> splitter = create_splitter(config)
        >>> chunks = splitter.split_text("# Title\\n\\nSome text")
    """
    if config.algorithm == "markdown":
        from .markdown import MarkdownSplitter

        return MarkdownSplitter(config, metrics_hook=metrics_hook)

    if config.algorithm == "character":
        from .character import CharacterSplitter

        return CharacterSplitter(config, metrics_hook=metrics_hook)

    raise ValueError(f"Unknown splitting algorithm: {config.algorithm}")


def split_text(
    text: str,
    config: SplitterConfig | Mapping[str, Any] | None = None,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[str]:
    """Split ``text`` into chunks.

    ``config`` may be a config model or a plain mapping such as
    ``{"chunk_size": 500, "max_overflow_ratio": 1.2}``. Mappings are
    validated before any parsing happens. Defaults to the markdown splitter.
    """
    if config is None:
        config = MarkdownSplitterConfig()
    elif isinstance(config, Mapping):
        config = parse_splitter_config(config)

    return create_splitter(config, metrics_hook).split_text(text)
