# src/chunk_kit/chunking/sections.py

"""Regroup a flat block list into heading-owned sections.

A heading of depth D owns every following block until the next heading of
depth <= D or a thematic break. Thematic breaks are never owned by a section;
they stay at the level that encloses it.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from chunk_kit.parsers.models import BlockKind, BlockNode


@dataclass(frozen=True)
class Section:
    """A heading together with its content and nested subsections.

    The implicit document root has depth 0 and no heading.
    """

    depth: int
    heading: BlockNode | None
    children: tuple["Node", ...] = ()

    @property
    def parts(self) -> tuple["Node", ...]:
        """Heading (when present) followed by the children, in document order."""
        if self.heading is None:
            return self.children
        return (self.heading, *self.children)

    @property
    def span(self) -> tuple[int, int] | None:
        """From the heading start to the end of the last child with a position."""
        spans = [s for s in (part.span for part in self.parts) if s is not None]
        if not spans:
            return None
        return spans[0][0], spans[-1][1]


Node = Union[BlockNode, Section]


def sectionize(blocks: Sequence[BlockNode]) -> Section:
    """Build the section tree for a document's top-level blocks."""
    return Section(depth=0, heading=None, children=tuple(_group(list(blocks))))


def flatten(section: Section) -> list[BlockNode]:
    """Inverse of :func:`sectionize`: the blocks in document order."""
    result: list[BlockNode] = []
    for part in section.parts:
        if isinstance(part, Section):
            result.extend(flatten(part))
        else:
            result.append(part)
    return result


def _group(blocks: list[BlockNode]) -> list[Node]:
    result: list[Node] = []
    i = 0

    while i < len(blocks):
        node = blocks[i]
        i += 1

        if node.kind is not BlockKind.HEADING:
            result.append(node)
            continue

        depth = node.depth or 1
        owned: list[BlockNode] = []
        while i < len(blocks):
            nxt = blocks[i]
            if nxt.kind is BlockKind.HEADING and (nxt.depth or 1) <= depth:
                break
            if nxt.kind is BlockKind.THEMATIC_BREAK:
                break
            owned.append(nxt)
            i += 1

        # Deeper headings among the owned blocks become nested sections
        result.append(
            Section(depth=depth, heading=node, children=tuple(_group(owned)))
        )

    return result
