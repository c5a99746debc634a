# src/chunk_kit/chunking/base.py

from typing import Protocol

from chunk_kit.observability.base import MetricsHook

from .models import Chunk


class TextSplitter(Protocol):
    """Protocol for text splitters.

    Design principles:
    - Pure: same text and config always give the same chunks
    - Ordered: chunks follow the document and never overlap unless configured to
    - Immutable: safe to share between threads once constructed
    """

    metrics_hook: MetricsHook

    def split(self, text: str) -> list[Chunk]: ...

    def split_text(self, text: str) -> list[str]: ...
