# src/chunk_kit/chunking/boundaries.py

"""Force-splitting of leaves that are too large to keep whole.

Everything here works on ``(start, end)`` offsets into the source text and
ignores markdown structure. Every returned span is at most ``chunk_size``
characters long.
"""

import re
from collections.abc import Iterable, Iterator
from typing import Literal

ForceSplitPolicy = Literal["sentence", "raw"]

Span = tuple[int, int]

_LINE_RE = re.compile(r"[^\r\n]+")
_SENTENCE_END_RE = re.compile(r"(?<=[.!?])\s+")


def force_split(
    text: str,
    span: Span,
    chunk_size: int,
    policy: ForceSplitPolicy = "sentence",
) -> list[Span]:
    """Split ``text[span]`` into pieces no longer than ``chunk_size``.

    ``"sentence"`` packs whole lines, then whole sentences, as tightly as
    ``chunk_size`` allows and only slices inside a sentence that is longer
    than ``chunk_size`` on its own. ``"raw"`` always slices into fixed
    ``chunk_size`` windows.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")

    start, end = span
    if policy == "raw":
        return windows(start, end, chunk_size)
    if policy == "sentence":
        return _pack(_segments(text, start, end, chunk_size), chunk_size)
    raise ValueError(f"Unknown force-split policy: {policy}")


def windows(start: int, end: int, size: int) -> list[Span]:
    """Consecutive ``size``-long windows; the last one may be shorter."""
    return [(pos, min(pos + size, end)) for pos in range(start, end, size)]


def _segments(text: str, start: int, end: int, limit: int) -> Iterator[Span]:
    for line in _LINE_RE.finditer(text, start, end):
        content = line.group()
        if not content.strip():
            continue
        if len(content) <= limit:
            yield line.span()
            continue

        # Indentation is not sliced into pieces of its own
        content_start = line.end() - len(content.lstrip())
        sentences = _sentences(text, content_start, line.end())
        for sentence_start, sentence_end in sentences:
            if sentence_end - sentence_start <= limit:
                yield sentence_start, sentence_end
                continue
            for piece in windows(sentence_start, sentence_end, limit):
                if text[piece[0] : piece[1]].strip():
                    yield piece


def _sentences(text: str, start: int, end: int) -> Iterator[Span]:
    pos = start
    for gap in _SENTENCE_END_RE.finditer(text, start, end):
        if gap.start() > pos:
            yield pos, gap.start()
        pos = gap.end()
    if pos < end:
        yield pos, end


def _pack(segments: Iterable[Span], limit: int) -> list[Span]:
    packed: list[Span] = []
    current: Span | None = None

    for seg_start, seg_end in segments:
        if current is not None and seg_end - current[0] <= limit:
            current = (current[0], seg_end)
            continue
        if current is not None:
            packed.append(current)
        current = (seg_start, seg_end)

    if current is not None:
        packed.append(current)
    return packed
