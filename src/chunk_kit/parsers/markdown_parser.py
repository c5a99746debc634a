# parsers/markdown_parser.py

import logging
import re
from typing import NamedTuple

from chunk_kit.errors import MarkdownParseError

from .base import MarkdownParser
from .models import BlockKind, BlockNode

logger = logging.getLogger(__name__)

# Containers (blockquotes, list items) nested deeper than this are rejected
MAX_NESTING_DEPTH = 100

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")

_ATX_HEADING_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+|$)")
_SETEXT_UNDERLINE_RE = re.compile(r"^ {0,3}(=+|-+)[ \t]*$")
_THEMATIC_BREAK_RE = re.compile(r"^ {0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$")
_FENCE_OPEN_RE = re.compile(r"^ {0,3}(`{3,}(?!.*`)|~{3,})")
_BLOCKQUOTE_RE = re.compile(r"^ {0,3}> ?")
_LIST_ITEM_RE = re.compile(r"^( {0,3})([-*+]|\d{1,9}[.)])(?:[ \t]+|$)")
_INDENTED_CODE_RE = re.compile(r"^(?: {4}|\t)")
_HTML_BLOCK_RE = re.compile(r"^ {0,3}<(?:[A-Za-z][A-Za-z0-9-]*[\s/>]|[A-Za-z][A-Za-z0-9-]*$|/[A-Za-z]|!--)")
_TABLE_DELIMITER_RE = re.compile(
    r"^ {0,3}\|?[ \t]*:?-+:?[ \t]*(?:\|[ \t]*:?-+:?[ \t]*)*\|?[ \t]*$"
)
_CELL_SEPARATOR_RE = re.compile(r"(?<!\\)\|")


class _Line(NamedTuple):
    """One physical line, possibly with container prefixes consumed.

    Invariant: ``text == source[start:end]``.
    """

    start: int
    end: int
    text: str

    @property
    def blank(self) -> bool:
        return not self.text.strip()

    def advance(self, count: int) -> "_Line":
        count = min(count, len(self.text))
        return _Line(self.start + count, self.end, self.text[count:])


class RegexMarkdownParser(MarkdownParser):
    """
    Line-oriented block parser.

    - CommonMark block structure plus GFM pipe tables
    - Inline markup is not parsed: headings, paragraphs and table rows are leaves
    - Offsets index the original string
    """

    def parse(self, text: str) -> list[BlockNode]:
        lines = _split_lines(text)
        try:
            blocks = self._parse_lines(lines, depth=0)
        except RecursionError as exc:
            raise MarkdownParseError("Markdown is nested too deeply to parse") from exc

        logger.debug(
            "Parsed %d top-level blocks from %d lines", len(blocks), len(lines)
        )
        return blocks

    def _parse_lines(self, lines: list[_Line], depth: int) -> list[BlockNode]:
        if depth > MAX_NESTING_DEPTH:
            raise MarkdownParseError(
                f"Block nesting exceeds {MAX_NESTING_DEPTH} levels"
            )

        blocks: list[BlockNode] = []
        i = 0
        while i < len(lines):
            if lines[i].blank:
                i += 1
                continue
            node, i = self._parse_block(lines, i, depth)
            blocks.append(node)
        return blocks

    def _parse_block(
        self, lines: list[_Line], i: int, depth: int
    ) -> tuple[BlockNode, int]:
        line = lines[i]
        text = line.text

        if _FENCE_OPEN_RE.match(text):
            return self._fenced_code(lines, i)

        heading = _ATX_HEADING_RE.match(text)
        if heading:
            node = BlockNode(
                BlockKind.HEADING, line.start, line.end, depth=len(heading.group(1))
            )
            return node, i + 1

        if _THEMATIC_BREAK_RE.match(text):
            return BlockNode(BlockKind.THEMATIC_BREAK, line.start, line.end), i + 1

        if _BLOCKQUOTE_RE.match(text):
            return self._blockquote(lines, i, depth)

        if _LIST_ITEM_RE.match(text):
            return self._list(lines, i, depth)

        if _INDENTED_CODE_RE.match(text):
            return self._indented_code(lines, i)

        if _HTML_BLOCK_RE.match(text):
            return self._html(lines, i)

        if self._is_table_start(lines, i):
            return self._table(lines, i)

        return self._paragraph(lines, i)

    def _fenced_code(self, lines: list[_Line], i: int) -> tuple[BlockNode, int]:
        fence = _FENCE_OPEN_RE.match(lines[i].text).group(1)
        closing = re.compile(
            rf"^ {{0,3}}{re.escape(fence[0])}{{{len(fence)},}}[ \t]*$"
        )

        for j in range(i + 1, len(lines)):
            if closing.match(lines[j].text):
                return BlockNode(BlockKind.CODE, lines[i].start, lines[j].end), j + 1

        # Unclosed fences run to the end of the enclosing container
        last = _last_non_blank(lines, i, len(lines))
        return BlockNode(BlockKind.CODE, lines[i].start, lines[last].end), len(lines)

    def _blockquote(
        self, lines: list[_Line], i: int, depth: int
    ) -> tuple[BlockNode, int]:
        inner: list[_Line] = []
        j = i
        while j < len(lines):
            line = lines[j]
            marker = _BLOCKQUOTE_RE.match(line.text)
            if marker:
                inner.append(line.advance(marker.end()))
            elif (
                not line.blank
                and not inner[-1].blank
                and not _interrupts_paragraph(line.text)
            ):
                # lazy continuation
                inner.append(line)
            else:
                break
            j += 1

        children = tuple(self._parse_lines(inner, depth + 1))
        node = BlockNode(
            BlockKind.BLOCKQUOTE, lines[i].start, lines[j - 1].end, children=children
        )
        return node, j

    def _list(self, lines: list[_Line], i: int, depth: int) -> tuple[BlockNode, int]:
        kind = _marker_kind(_LIST_ITEM_RE.match(lines[i].text).group(2))
        items: list[BlockNode] = []

        j = i
        while j < len(lines):
            marker = _LIST_ITEM_RE.match(lines[j].text)
            if (
                marker is None
                or _marker_kind(marker.group(2)) != kind
                or _THEMATIC_BREAK_RE.match(lines[j].text)
            ):
                break

            item, j = self._list_item(lines, j, marker, depth)
            items.append(item)

            # Blank lines between items of the same kind keep the list open
            k = j
            while k < len(lines) and lines[k].blank:
                k += 1
            if k == j or k == len(lines):
                continue
            if not _LIST_ITEM_RE.match(lines[k].text):
                break
            j = k

        node = BlockNode(
            BlockKind.LIST, items[0].start, items[-1].end, children=tuple(items)
        )
        return node, j

    def _list_item(
        self, lines: list[_Line], i: int, marker: re.Match, depth: int
    ) -> tuple[BlockNode, int]:
        line = lines[i]
        if line.text[marker.end() :].strip():
            content_indent = marker.end()
        else:
            content_indent = len(marker.group(1)) + len(marker.group(2)) + 1

        inner = [line.advance(marker.end())]
        last = i
        for j in range(i + 1, len(lines)):
            nxt = lines[j]
            if nxt.blank:
                inner.append(nxt)
                continue

            if _indent(nxt.text) >= content_indent:
                inner.append(nxt.advance(content_indent))
            elif (
                not lines[j - 1].blank
                and not _interrupts_paragraph(nxt.text)
                and not _LIST_ITEM_RE.match(nxt.text)
            ):
                # lazy continuation
                inner.append(nxt.advance(_indent(nxt.text)))
            else:
                break
            last = j

        # Trailing blank lines belong to whatever follows the item
        inner = inner[: last - i + 1]
        children = tuple(self._parse_lines(inner, depth + 1))
        node = BlockNode(
            BlockKind.LIST_ITEM, line.start, lines[last].end, children=children
        )
        return node, last + 1

    def _indented_code(self, lines: list[_Line], i: int) -> tuple[BlockNode, int]:
        last = i
        j = i
        while j < len(lines) and (
            lines[j].blank or _INDENTED_CODE_RE.match(lines[j].text)
        ):
            if not lines[j].blank:
                last = j
            j += 1
        return BlockNode(BlockKind.CODE, lines[i].start, lines[last].end), last + 1

    def _html(self, lines: list[_Line], i: int) -> tuple[BlockNode, int]:
        j = i
        while j < len(lines) and not lines[j].blank:
            j += 1
        return BlockNode(BlockKind.HTML, lines[i].start, lines[j - 1].end), j

    def _is_table_start(self, lines: list[_Line], i: int) -> bool:
        if i + 1 >= len(lines):
            return False

        header, delimiter = lines[i].text, lines[i + 1].text
        if "|" not in header or not _TABLE_DELIMITER_RE.match(delimiter):
            return False
        return len(_cells(header)) == len(_cells(delimiter))

    def _table(self, lines: list[_Line], i: int) -> tuple[BlockNode, int]:
        # The delimiter row stays attached to the header row
        rows = [BlockNode(BlockKind.TABLE_ROW, lines[i].start, lines[i + 1].end)]

        j = i + 2
        while (
            j < len(lines)
            and not lines[j].blank
            and not _interrupts_paragraph(lines[j].text)
        ):
            rows.append(BlockNode(BlockKind.TABLE_ROW, lines[j].start, lines[j].end))
            j += 1

        node = BlockNode(
            BlockKind.TABLE, lines[i].start, lines[j - 1].end, children=tuple(rows)
        )
        return node, j

    def _paragraph(self, lines: list[_Line], i: int) -> tuple[BlockNode, int]:
        j = i + 1
        while j < len(lines) and not lines[j].blank:
            underline = _SETEXT_UNDERLINE_RE.match(lines[j].text)
            if underline:
                depth = 1 if underline.group(1).startswith("=") else 2
                node = BlockNode(
                    BlockKind.HEADING, lines[i].start, lines[j].end, depth=depth
                )
                return node, j + 1

            if _interrupts_paragraph(lines[j].text):
                break
            j += 1

        return BlockNode(BlockKind.PARAGRAPH, lines[i].start, lines[j - 1].end), j


def _split_lines(text: str) -> list[_Line]:
    lines: list[_Line] = []
    pos = 0
    for match in _NEWLINE_RE.finditer(text):
        lines.append(_Line(pos, match.start(), text[pos : match.start()]))
        pos = match.end()
    if pos < len(text):
        lines.append(_Line(pos, len(text), text[pos:]))
    return lines


def _last_non_blank(lines: list[_Line], lo: int, hi: int) -> int:
    for j in range(hi - 1, lo, -1):
        if not lines[j].blank:
            return j
    return lo


def _indent(text: str) -> int:
    return len(text) - len(text.lstrip(" \t"))


def _marker_kind(marker: str) -> str:
    """Bullets must share the character, ordered items the delimiter."""
    if marker[0].isdigit():
        return "ordered" + marker[-1]
    return marker


def _interrupts_paragraph(text: str) -> bool:
    if (
        _ATX_HEADING_RE.match(text)
        or _FENCE_OPEN_RE.match(text)
        or _THEMATIC_BREAK_RE.match(text)
        or _BLOCKQUOTE_RE.match(text)
    ):
        return True

    # Only non-empty items interrupt, and ordered lists only when starting at 1
    marker = _LIST_ITEM_RE.match(text)
    if marker is None or not text[marker.end() :].strip():
        return False
    bullet = marker.group(2)
    return not bullet[0].isdigit() or bullet[:-1] == "1"


def _cells(row: str) -> list[str]:
    row = row.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|") and not row.endswith("\\|"):
        row = row[:-1]
    return _CELL_SEPARATOR_RE.split(row)
