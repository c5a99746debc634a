# parsers/models.py

from dataclasses import dataclass
from enum import Enum


class BlockKind(str, Enum):
    """Block-level markdown constructs the parser emits."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"
    LIST_ITEM = "listItem"
    CODE = "code"
    BLOCKQUOTE = "blockquote"
    TABLE = "table"
    TABLE_ROW = "tableRow"
    THEMATIC_BREAK = "thematicBreak"
    HTML = "html"


@dataclass(frozen=True)
class BlockNode:
    """A parsed markdown block.

    ``start``/``end`` are half-open character offsets into the source text.
    Either may be ``None`` when the parser could not attach a position.
    """

    kind: BlockKind
    start: int | None
    end: int | None
    depth: int | None = None  # headings only
    children: tuple["BlockNode", ...] = ()

    @property
    def span(self) -> tuple[int, int] | None:
        """Own span, or the union of the children's spans when unknown."""
        if self.start is not None and self.end is not None:
            return self.start, self.end

        spans = [s for s in (child.span for child in self.children) if s is not None]
        if not spans:
            return None
        return spans[0][0], spans[-1][1]
