from .base import TextSplitter
from .boundaries import ForceSplitPolicy, force_split
from .character import CharacterSplitter
from .config import (
    CharacterSplitterConfig,
    MarkdownSplitterConfig,
    SplitterConfig,
    load_splitter_config,
    parse_splitter_config,
)
from .factory import create_splitter, split_text
from .markdown import MarkdownSplitter
from .models import Chunk
from .sections import Section, flatten, sectionize
from .sizing import content_size

__all__ = [
    # Entry points
    "split_text",
    "create_splitter",
    # Protocol
    "TextSplitter",
    # Splitters
    "MarkdownSplitter",
    "CharacterSplitter",
    # Config
    "SplitterConfig",
    "MarkdownSplitterConfig",
    "CharacterSplitterConfig",
    "ForceSplitPolicy",
    "load_splitter_config",
    "parse_splitter_config",
    # Types
    "Chunk",
    "Section",
    # Helpers
    "sectionize",
    "flatten",
    "force_split",
    "content_size",
]
