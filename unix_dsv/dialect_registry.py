"""
Dialect definitions and loader for unix-dsv.

A dialect is the pair of single characters that configure a DSV parser:
the field **separator** and the **escape** character.  The record
terminator is always the line feed and is not part of a dialect.

Built-in dialects are YAML files in ``unix_dsv/dialects/``:

- ``unix``: ``:`` separator, ``\\`` escape (``/etc/passwd`` style).
- ``pipe``: ``|`` separator, ``\\`` escape.
- ``tab``: tab separator, ``\\`` escape.

New dialects are added by dropping a YAML file into that directory
(or a directory passed to ``load_all_dialects``); no code changes.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

# Directory containing dialect YAML files (sibling package)
_DIALECTS_DIR = Path(__file__).parent / "dialects"

LINE_FEED = "\n"


class Dialect(BaseModel):
    """Separator and escape characters for a DSV parser.

    Separator and escape SHOULD be distinct and SHOULD differ from the
    line feed.  A colliding configuration is accepted, since the parser's
    precedence rules still define its behavior, but a warning is logged.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field("custom", description="Short identifier for the dialect")
    separator: str = Field(..., description="Single field separator character")
    escape: str = Field(..., description="Single escape character")
    description: str = ""

    @field_validator("separator", "escape")
    @classmethod
    def _check_single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError(
                f"must be exactly one character, got {value!r} ({len(value)} chars)"
            )
        return value

    @model_validator(mode="after")
    def _warn_on_collisions(self) -> Dialect:
        if self.separator == self.escape:
            logger.warning(
                "Dialect '%s': separator and escape are both %r",
                self.name, self.separator,
            )
        for label, char in (("separator", self.separator), ("escape", self.escape)):
            if char == LINE_FEED:
                logger.warning("Dialect '%s': %s is the line feed", self.name, label)
        return self

    def encoded(self) -> tuple[bytes, bytes]:
        """Return ``(separator, escape)`` as single bytes for binary parsing.

        Raises:
            ValueError: If either character has no single-byte (Latin-1)
                encoding.
        """
        try:
            return self.separator.encode("latin-1"), self.escape.encode("latin-1")
        except UnicodeEncodeError as exc:
            raise ValueError(
                f"Dialect '{self.name}' cannot be used in binary mode: "
                "separator and escape must be single-byte characters"
            ) from exc


def load_dialect(path: Path) -> Dialect:
    """Load a single dialect YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    raw.setdefault("name", path.stem)
    return Dialect.model_validate(raw)


# The default dialect is the built-in unix.yaml, so get_dialect("unix") == UNIX_DSV
UNIX_DSV = load_dialect(_DIALECTS_DIR / "unix.yaml")


def load_all_dialects(dialects_dir: Path | None = None) -> dict[str, Dialect]:
    """Load all dialect YAML files from a directory.

    Files that fail to load are skipped with a warning.

    Args:
        dialects_dir: Directory to scan for .yaml files. Defaults to
            the built-in dialects/ directory.

    Returns:
        Dict mapping dialect name -> Dialect, in file-name order.
    """
    dialects_dir = dialects_dir or _DIALECTS_DIR
    dialects: dict[str, Dialect] = {}
    for yaml_path in sorted(dialects_dir.glob("*.yaml")):
        try:
            dialect = load_dialect(yaml_path)
        except Exception as e:
            logger.warning("Failed to load dialect from %s: %s", yaml_path, e)
            continue
        dialects[dialect.name] = dialect
        logger.debug("Loaded dialect: %s from %s", dialect.name, yaml_path)
    logger.info("Loaded %d dialects", len(dialects))
    return dialects


def get_dialect(name: str, dialects_dir: Path | None = None) -> Dialect:
    """Look up a dialect by name.

    Raises:
        KeyError: If no dialect with that name exists.
    """
    dialects = load_all_dialects(dialects_dir)
    try:
        return dialects[name]
    except KeyError:
        raise KeyError(
            f"Unknown dialect '{name}'. Available dialects: {sorted(dialects)}"
        ) from None
