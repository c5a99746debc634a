# src/chunk_kit/errors.py

"""Exception types raised by chunk-kit.

Invalid configuration is reported by pydantic's ``ValidationError`` when a
config model is built, so it has no class here.
"""


class ChunkKitError(Exception):
    """Base class for chunk-kit failures."""


class MarkdownParseError(ChunkKitError):
    """The markdown parser could not turn the input into blocks.

    Distinct from an empty result: empty input yields ``[]`` without raising.
    """


class ChunkingDepthError(ChunkKitError):
    """The block tree is nested deeper than the splitter will recurse."""
