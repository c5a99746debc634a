from dataclasses import dataclass

from .sizing import content_size


@dataclass(frozen=True)
class Chunk:
    text: str
    offset_start: int
    offset_end: int
    raw_size: int
    content_size: int

    @classmethod
    def from_span(cls, source: str, start: int, end: int) -> "Chunk":
        text = source[start:end]
        return cls(
            text=text,
            offset_start=start,
            offset_end=end,
            raw_size=len(text),
            content_size=content_size(text),
        )
