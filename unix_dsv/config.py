"""
Configuration models and YAML I/O for unix-dsv.

This module defines the Pydantic models that map 1:1 to a unix-dsv
YAML config, plus helper functions for loading, saving, and generating
a default config for a DSV file.

Key models:
- DsvConfig: Top-level config (source + dialect + table + output).
- SourceConfig: Input file path and text encoding.
- TableConfig: How parsed records become a table (header, column names,
  key columns, numeric coercion).
- OutputConfig: Output directory, format and table name.

The ``dialect`` key accepts either a full mapping (``separator``,
``escape``...) or the name of a built-in dialect (``unix``, ``pipe``,
``tab``).

Key functions:
- load_config(path) -> DsvConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.
- generate_default_config(...) -> DsvConfig: Build a config for a file.
- validate_key_columns(config, columns): Cross-check config vs table.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from unix_dsv.dialect_registry import UNIX_DSV, Dialect, get_dialect
from unix_dsv.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)


class SourceConfig(BaseModel):
    """Source file information."""

    input_path: str = Field(..., description="Path to the DSV file")
    encoding: str = Field("utf-8", description="Text encoding of the file")


class TableConfig(BaseModel):
    """How parsed records are shaped into a table."""

    header: bool = Field(
        False, description="If True, the first record holds the column names"
    )
    columns: list[str] | None = Field(
        None, description="Explicit column names (mutually exclusive with header)"
    )
    key_columns: list[str] = Field(
        default_factory=list,
        description="Columns never coerced to numbers (identifiers, paths, ...)",
    )
    parse_numbers: bool = Field(
        True, description="If True, coerce all-numeric non-key columns"
    )

    @model_validator(mode="after")
    def _check_header_or_columns(self) -> TableConfig:
        if self.header and self.columns is not None:
            raise ValueError(
                "table.header and table.columns are mutually exclusive: "
                "column names come either from the first record or from the config."
            )
        return self


class OutputConfig(BaseModel):
    """Output settings."""

    output_dir: str = Field("outputs/", description="Directory for output files")
    output_format: Literal["csv", "parquet"] = Field(
        "parquet", description="Output format"
    )
    table_name: str = Field("records", description="Output file stem")


class DsvConfig(BaseModel):
    """Top-level configuration for unix-dsv ingestion."""

    source: SourceConfig
    dialect: Dialect = Field(default_factory=lambda: UNIX_DSV)
    table: TableConfig = Field(default_factory=TableConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("dialect", mode="before")
    @classmethod
    def _resolve_dialect_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return get_dialect(value)
            except KeyError as exc:
                raise ValueError(exc.args[0]) from exc
        return value


def load_config(path: str | Path) -> DsvConfig:
    """Load and validate a YAML config into a DsvConfig model.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    logger.info("Loaded config from %s", path)
    return DsvConfig.model_validate(raw)


def save_config(config: DsvConfig, path: str | Path) -> None:
    """Serialize a DsvConfig to YAML with a header comment."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# unix-dsv configuration\n")
        f.write("# Edit this file to change the dialect, column names or output.\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)


def generate_default_config(
    input_path: str,
    dialect: Dialect = UNIX_DSV,
    output_dir: str = "outputs/",
    output_format: Literal["csv", "parquet"] = "parquet",
) -> DsvConfig:
    """Build a DsvConfig for a DSV file (used on first run).

    The output table is named after the input file's stem.
    """
    return DsvConfig(
        source=SourceConfig(input_path=input_path),
        dialect=dialect,
        output=OutputConfig(
            output_dir=output_dir,
            output_format=output_format,
            table_name=Path(input_path).stem or "records",
        ),
    )


def validate_key_columns(config: DsvConfig, columns: list[str]) -> None:
    """Check that every configured key column exists in the parsed table.

    Raises:
        ConfigValidationError: If any key column is missing.
    """
    available = [str(c) for c in columns]
    missing = [c for c in config.table.key_columns if c not in available]
    if missing:
        raise ConfigValidationError(
            f"Key columns not found in the parsed table: {missing}\n"
            f"Available columns: {available}"
        )
    logger.info(
        "Config validation passed: all %d key columns found",
        len(config.table.key_columns),
    )
