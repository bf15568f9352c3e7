from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, PositiveInt, ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError
from .types import DEFAULT_LINE_LENGTH, FormatOptions

DEFAULT_CFG_FILE = ".surfmt.yaml"

# --------------------------------------------------------------------------- #
# YAML loader
# --------------------------------------------------------------------------- #
_yaml = YAML(typ="safe")

_NEWLINES = {"lf": "\n", "crlf": "\r\n"}


class FormatterConfig(BaseModel):
    """
    Содержимое .surfmt.yaml.

    surface_line_length имеет приоритет над line_length — так можно держать
    общий line_length для других инструментов и отдельный для разметки.
    """
    model_config = ConfigDict(extra="forbid")

    line_length: Optional[PositiveInt] = None
    surface_line_length: Optional[PositiveInt] = None
    newline: Literal["lf", "crlf"] = "lf"

    def to_options(self, *, line_length: Optional[int] = None) -> FormatOptions:
        effective = line_length or self.surface_line_length or self.line_length or DEFAULT_LINE_LENGTH
        return FormatOptions(line_length=effective, newline=_NEWLINES[self.newline])


# --------------------------------------------------------------------------- #
# PUBLIC API
# --------------------------------------------------------------------------- #
def find_config(start: Path) -> Optional[Path]:
    """Ищет .surfmt.yaml в start и выше по дереву каталогов."""
    start = start.resolve()
    for directory in [start, *start.parents]:
        candidate = directory / DEFAULT_CFG_FILE
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Optional[Path]) -> FormatterConfig:
    """
    Загрузить конфиг форматтера.

    • Если файла нет — вернуть дефолты.
    • Неизвестные ключи и неверные значения → ConfigError.
    """
    if path is None or not path.exists():
        return FormatterConfig()

    try:
        with path.open(encoding="utf-8") as f:
            raw = _yaml.load(f) or {}
    except YAMLError as e:
        raise ConfigError(f"Cannot parse {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: top-level value must be a mapping")

    try:
        return FormatterConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e


__all__ = ["DEFAULT_CFG_FILE", "FormatterConfig", "find_config", "load_config"]
