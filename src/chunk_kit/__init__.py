# Chunking
from .chunking import (
    CharacterSplitter,
    CharacterSplitterConfig,
    Chunk,
    MarkdownSplitter,
    MarkdownSplitterConfig,
    Section,
    SplitterConfig,
    TextSplitter,
    create_splitter,
    flatten,
    load_splitter_config,
    parse_splitter_config,
    sectionize,
    split_text,
)

# Errors
from .errors import ChunkingDepthError, ChunkKitError, MarkdownParseError

# Observability
from .observability import ChunkingLabels, MetricsHook, NoOpMetricsHook

# Parsers
from .parsers import BlockKind, BlockNode, MarkdownParser, RegexMarkdownParser

__all__ = [
    # Chunking
    "split_text",
    "create_splitter",
    "TextSplitter",
    "MarkdownSplitter",
    "CharacterSplitter",
    "SplitterConfig",
    "MarkdownSplitterConfig",
    "CharacterSplitterConfig",
    "load_splitter_config",
    "parse_splitter_config",
    "Chunk",
    "Section",
    "sectionize",
    "flatten",
    # Errors
    "ChunkKitError",
    "MarkdownParseError",
    "ChunkingDepthError",
    # Observability
    "ChunkingLabels",
    "MetricsHook",
    "NoOpMetricsHook",
    # Parsers
    "BlockKind",
    "BlockNode",
    "MarkdownParser",
    "RegexMarkdownParser",
]
