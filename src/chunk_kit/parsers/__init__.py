from .base import MarkdownParser
from .markdown_parser import MAX_NESTING_DEPTH, RegexMarkdownParser
from .models import BlockKind, BlockNode

__all__ = [
    "MAX_NESTING_DEPTH",
    "BlockKind",
    "BlockNode",
    "MarkdownParser",
    "RegexMarkdownParser",
]
