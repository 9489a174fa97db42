"""Conversion options and options-file loading."""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ConversionOptions(BaseModel):
    """Switches that shape the generated collection.

    Field names are snake_case; options files and mappings may use the
    camelCase spelling (``excludeQueryParams``, ``tagFilter``, ...).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    exclude_query_params: bool = False
    exclude_optional_query_params: bool = False
    exclude_body_template: bool = False
    exclude_tests: bool = False
    tag_filter: str | None = None
    host: str | None = None
    default_security: str | None = None
    default_produces_type: str | None = None
    environment_target: str | None = None


def load_options(file_path: Path) -> dict:
    """Read an options file (YAML or JSON) into a plain mapping."""
    text = file_path.read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{file_path}: options file must contain a mapping")
    return data
