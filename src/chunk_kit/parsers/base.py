# parsers/base.py

from abc import ABC, abstractmethod

from .models import BlockNode


class MarkdownParser(ABC):
    @abstractmethod
    def parse(self, text: str) -> list[BlockNode]:
        """
        Parse markdown into its top-level blocks, in document order.

        Requirements:
        - Deterministic output for same input
        - Offsets index the original string, including its line endings
        - A parent's span contains the spans of its children
        - Failures raise MarkdownParseError; never return [] for them
        """
        raise NotImplementedError
