"""
Pipeline YAML parser and validator.
"""

import os
import yaml
from typing import Dict, Any, Optional, Union
from pydantic import ValidationError

from assembler.src.models.config import PipelineConfig

CONFIG_FILENAMES = [
    ".pipeline.yml",
    ".pipeline.yaml",
    "pipeline.yml",
    "pipeline.yaml",
]

class ConfigurationError(Exception):
    """Raised when pipeline configuration is invalid."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

def parse_pipeline_config(yaml_content: Union[str, bytes]) -> PipelineConfig:
    """Parse pipeline YAML configuration from string or UTF-8 bytes."""
    if isinstance(yaml_content, bytes):
        try:
            yaml_content = yaml_content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ConfigurationError(f"Pipeline configuration is not valid UTF-8: {e}")

    try:
        config = yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML: {e}")

    return parse_pipeline_dict(config)

def parse_pipeline_dict(config: Optional[Dict[str, Any]]) -> PipelineConfig:
    """Validate pipeline configuration from dict."""
    if not config:
        raise ConfigurationError("Empty pipeline configuration")

    if not isinstance(config, dict):
        raise ConfigurationError("Pipeline configuration must be a dictionary")

    try:
        return PipelineConfig.model_validate(config)
    except ValidationError as e:
        error = e.errors()[0]
        field = _format_location(error["loc"])
        raise ConfigurationError(f"Invalid '{field}': {error['msg']}", field=field)

def load_pipeline_config(path: str) -> PipelineConfig:
    """Read and validate a pipeline configuration file."""
    try:
        with open(path, "r") as f:
            content = f.read()
    except OSError as e:
        raise ConfigurationError(f"Cannot read pipeline configuration {path}: {e}")

    return parse_pipeline_config(content)

def find_pipeline_config(repo_path: str) -> Optional[PipelineConfig]:
    """
    Look for a pipeline configuration file at the repository root.
    Returns parsed config or None if not found.
    """
    for filename in CONFIG_FILENAMES:
        config_path = os.path.join(repo_path, filename)
        if os.path.exists(config_path):
            return load_pipeline_config(config_path)

    return None

def _format_location(loc) -> str:
    # ("stage", "stages", 1, "name") -> "stage.stages[1].name"
    parts = []
    for item in loc:
        if isinstance(item, int):
            parts.append(f"[{item}]")
        elif parts:
            parts.append(f".{item}")
        else:
            parts.append(str(item))
    return "".join(parts)
