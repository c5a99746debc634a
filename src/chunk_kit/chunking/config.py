# src/chunk_kit/chunking/config.py

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Any, Literal, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from .boundaries import ForceSplitPolicy

logger = logging.getLogger(__name__)

Algorithm = Literal["markdown", "character"]

DEFAULT_CHUNK_SIZE = 200
DEFAULT_MAX_OVERFLOW_RATIO = 1.5


class MarkdownSplitterConfig(BaseModel):
    """Configuration for the markdown-aware recursive splitter.

    Immutable. Explicit. No magic defaults from environment.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    algorithm: Literal["markdown"] = "markdown"
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)
    # Rejected below 1.0 rather than clamped
    max_overflow_ratio: float = Field(default=DEFAULT_MAX_OVERFLOW_RATIO, ge=1.0)
    force_split: ForceSplitPolicy = "sentence"

    @property
    def max_chunk_size(self) -> float:
        """Hard ceiling above which a structural unit must be broken up."""
        return self.chunk_size * self.max_overflow_ratio


class CharacterSplitterConfig(BaseModel):
    """Configuration for fixed-size character windows."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    algorithm: Literal["character"] = "character"
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)
    chunk_overlap: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _overlap_below_chunk_size(self) -> "CharacterSplitterConfig":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be < chunk_size")
        return self


SplitterConfig = Annotated[
    Union[MarkdownSplitterConfig, CharacterSplitterConfig],
    Field(discriminator="algorithm"),
]

_splitter_config_adapter = TypeAdapter(SplitterConfig)


def parse_splitter_config(data: Mapping[str, Any]) -> SplitterConfig:
    """Validate a plain mapping into a splitter config.

    ``algorithm`` defaults to ``"markdown"`` when missing.

    Raises:
        pydantic.ValidationError: If the mapping is not a valid config.
    """
    payload = dict(data)
    payload.setdefault("algorithm", "markdown")
    return _splitter_config_adapter.validate_python(payload)


def load_splitter_config(path: str | Path) -> SplitterConfig:
    """Read a splitter config from a YAML file."""
    logger.debug("Loading splitter config from %s", path)
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, Mapping):
        raise ValueError(f"Splitter config in {path} must be a mapping")
    return parse_splitter_config(data)
