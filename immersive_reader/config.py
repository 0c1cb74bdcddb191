"""Configuration loader for the Immersive Reader parsing core."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Immersive Reader"
    version: str = "1.0.0"


class ParsingConfig(BaseModel):
    """Format dispatch and fallback text configuration."""

    text_extensions: list[str] = Field(default_factory=lambda: [".txt"])
    archive_extensions: list[str] = Field(default_factory=lambda: [".epub"])
    unknown_author: str = "unknown"
    placeholder_chapter_title: str = "Preview"
    unsupported_message: str = "This file format is not fully supported yet."
    empty_book_message: str = "No readable chapters were found in this book."
    allow_placeholder: bool = True


class StorageConfig(BaseModel):
    """Temporary storage used while extracting archives."""

    temp_dir: str | None = None  # None means the process temporary directory
    temp_prefix: str = "immersive_reader_"


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    parsing: ParsingConfig = Field(default_factory=ParsingConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file) as f:
            yaml_data = yaml.safe_load(f) or {}

    config = AppConfig(**yaml_data)

    # Extraction root can be redirected per deployment
    temp_dir = os.getenv("READER_TEMP_DIR")
    if temp_dir:
        config.storage.temp_dir = temp_dir

    return config
