"""Application configuration: settings schema and gemsite.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field


CONFIG_FILE = "gemsite.yaml"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    include_private:   bool = Field(default=False, description="Keep `; ` lines and Private documents")
    shell:             Optional[str] = Field(default=None, description="Shell for command blocks; $SHELL when unset")
    html_template:     Optional[str] = Field(default=None, description="HTML template file; built-in when unset")
    gmi_template:      Optional[str] = Field(default=None, description="Gemini template file; built-in when unset")
    date_format:       str = Field(default="Month D, YYYY", description="Default format for template dates")
    index_date_format: str = Field(default="YYYY-MM-DD",    description="Date format for index listings")
    index_file:        str = Field(default="index", min_length=1, description="Stem of a directory's index document")
    source_suffix:     str = Field(default="", description="Only files with this suffix are sources; '' = all")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from gemsite.yaml, then GEMSITE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"GEMSITE_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
