"""Configuration models for a documentation build.

A build is configured by an optional JSON file (``docsearch.config.json``
in the input directory by default). Keys follow the camelCase spelling of
the file format; Python code uses the snake_case field names.
"""

import json
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from ..embedder.providers.sentence_transformer import DEFAULT_MODEL_NAME
from ..errors import ConfigurationError

CONFIG_FILENAME = "docsearch.config.json"


class ComponentConfig(BaseModel):
    """Configuration for a single component.

    Attributes:
        type: Component type identifier (e.g., "sentence_transformer", "mock")
        params: Component-specific parameters as a dictionary
    """

    type: str
    params: dict[str, Any] = Field(default_factory=dict)


class BuildConfig(BaseModel):
    """Chunking, batching and retrieval knobs.

    Attributes:
        chunk_size: Token budget per chunk
        chunk_overlap: Tokens of trailing context carried into the next chunk
        top_k: Results retrieved per query
        batch_size: Texts embedded concurrently per batch
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    chunk_size: int = Field(default=500, ge=1)
    chunk_overlap: int = Field(default=50, ge=0)
    top_k: int = Field(default=3, ge=1)
    batch_size: int = Field(default=10, ge=1)

    @model_validator(mode="after")
    def _check_overlap(self) -> "BuildConfig":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunkOverlap must be smaller than chunkSize")
        return self


def _default_embedder() -> ComponentConfig:
    return ComponentConfig(type="sentence_transformer", params={"model_name": DEFAULT_MODEL_NAME})


class DocSearchConfig(BaseModel):
    """Top-level configuration.

    Unknown keys (site title, theme and the like) are ignored.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    title: str = "Documentation"
    build: BuildConfig = Field(default_factory=BuildConfig)
    embedder: ComponentConfig = Field(default_factory=_default_embedder)
    query_prefix: str = ""


def load_config(config_path: str | Path | None, input_dir: str | Path) -> DocSearchConfig:
    """Resolve the configuration for a build.

    Order: ``config_path`` if it exists, then ``docsearch.config.json`` in
    ``input_dir``, then defaults.

    Raises:
        ConfigurationError: If the chosen file is not valid JSON or does not
            match the configuration schema
    """
    candidates: list[Path] = []
    if config_path:
        explicit = Path(config_path)
        if explicit.exists():
            candidates.append(explicit)
        else:
            logger.warning(f"Config file not found: {explicit}, falling back")
    candidates.append(Path(input_dir) / CONFIG_FILENAME)

    for path in candidates:
        if path.exists():
            logger.info(f"Loading config from {path}")
            return _read_config(path)

    logger.debug("No config file found, using defaults")
    return DocSearchConfig()


def _read_config(path: Path) -> DocSearchConfig:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Cannot read config file {path}",
            details={"path": str(path)},
            original_error=e,
        ) from e

    try:
        return DocSearchConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid config file {path}",
            details={"path": str(path), "errors": e.error_count()},
            original_error=e,
        ) from e
