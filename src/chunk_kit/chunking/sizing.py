# src/chunk_kit/chunking/sizing.py

import re

from .sections import Node

_FENCE_LINE_RE = re.compile(r"^ {0,3}(?:`{3,}|~{3,}).*$", re.MULTILINE)
_RULE_LINE_RE = re.compile(r"^ {0,3}(?:[-*_=][ \t]*){3,}$", re.MULTILINE)
_TABLE_DELIMITER_LINE_RE = re.compile(
    r"^ {0,3}\|?[ \t]*:?-+:?[ \t]*(?:\|[ \t]*:?-+:?[ \t]*)+\|?[ \t]*$", re.MULTILINE
)
_BLOCKQUOTE_PREFIX_RE = re.compile(r"^(?: {0,3}>[ ]?)+", re.MULTILINE)
_HEADING_PREFIX_RE = re.compile(r"^ {0,3}#{1,6}(?:[ \t]+|$)", re.MULTILINE)
_HEADING_SUFFIX_RE = re.compile(r"[ \t]+#+[ \t]*$", re.MULTILINE)
_LIST_MARKER_RE = re.compile(
    r"^[ \t]*(?:[-*+]|\d{1,9}[.)])[ \t]+(?:\[[ xX]\][ \t]+)?", re.MULTILINE
)
_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
_LINK_RE = re.compile(r"\[([^\]]*)\]\([^)]*\)")
_EMPHASIS_RE = re.compile(r"(\*{1,3}|~~)(?=\S)(.+?)(?<=\S)\1")
# Underscores inside a word (snake_case) are not emphasis
_UNDERSCORE_EMPHASIS_RE = re.compile(r"(?<!\w)(_{1,3})(?=\S)(.+?)(?<=\S)\1(?!\w)")
_INLINE_CODE_RE = re.compile(r"`+")
_HTML_TAG_RE = re.compile(r"</?[A-Za-z][^>]*>|<!--.*?-->", re.DOTALL)
_TABLE_PIPE_RE = re.compile(r"(?<!\\)\|")


def node_size(node: Node) -> int:
    """Raw size of a node: the length of its source slice, syntax included.

    Nodes without any position information have unknown size and count as 0,
    which makes the splitter skip them.
    """
    span = node.span
    if span is None:
        return 0
    return max(0, span[1] - span[0])


def line_start(text: str, pos: int, floor: int = 0) -> int:
    """Offset of the first character on the line containing ``pos``.

    Never returns less than ``floor``.
    """
    newline = max(text.rfind("\n", 0, pos), text.rfind("\r", 0, pos))
    return max(newline + 1, floor)


def content_size(text: str) -> int:
    """Number of visible characters once markdown syntax is stripped.

    Line breaks and indentation are not counted. Reporting only; the
    splitting decisions use raw sizes.
    """
    stripped = _FENCE_LINE_RE.sub("", text)
    stripped = _TABLE_DELIMITER_LINE_RE.sub("", stripped)
    stripped = _RULE_LINE_RE.sub("", stripped)
    stripped = _BLOCKQUOTE_PREFIX_RE.sub("", stripped)
    stripped = _HEADING_PREFIX_RE.sub("", stripped)
    stripped = _HEADING_SUFFIX_RE.sub("", stripped)
    stripped = _LIST_MARKER_RE.sub("", stripped)
    stripped = _IMAGE_RE.sub(r"\1", stripped)
    stripped = _LINK_RE.sub(r"\1", stripped)
    stripped = _EMPHASIS_RE.sub(r"\2", stripped)
    stripped = _UNDERSCORE_EMPHASIS_RE.sub(r"\2", stripped)
    stripped = _INLINE_CODE_RE.sub("", stripped)
    stripped = _HTML_TAG_RE.sub("", stripped)
    stripped = _TABLE_PIPE_RE.sub("", stripped)
    return sum(len(line.strip()) for line in stripped.splitlines())
