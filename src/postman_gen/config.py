"""Generator settings loaded from an application YAML file."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, field_validator

DEFAULT_APP_NAME = "application"
DEFAULT_PORT = "8080"
DEFAULT_OUTPUT_PATH = Path("postman_collection.json")

APP_NAME_KEY = "app.name"
PORT_KEY = "server.port"
OUTPUT_KEY = "postman.output"


class GeneratorSettings(BaseModel):
    """Application name, runtime port and output location for the collection."""

    app_name: str = DEFAULT_APP_NAME
    port: str = DEFAULT_PORT
    output_path: Path = DEFAULT_OUTPUT_PATH

    @field_validator("port", mode="before")
    @classmethod
    def _port_as_string(cls, v: Any) -> str:
        if v is None or v == "":
            return DEFAULT_PORT
        return str(v)

    @classmethod
    def from_mapping(cls, data: dict) -> "GeneratorSettings":
        """Read settings from nested config data using dotted keys."""
        values: dict[str, Any] = {}
        for field, key in (("app_name", APP_NAME_KEY), ("port", PORT_KEY), ("output_path", OUTPUT_KEY)):
            value = get_property(data, key)
            if value is not None:
                values[field] = value
        return cls(**values)

    @classmethod
    def from_yaml(cls, file_path: Path) -> "GeneratorSettings":
        """Load settings from an application YAML file such as ``application.yml``."""
        text = file_path.read_text(encoding="utf-8")
        data = yaml.safe_load(text) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{file_path}: expected a mapping at the top level")
        return cls.from_mapping(data)


def get_property(data: dict, key: str, default: Any = None) -> Any:
    """Look up a dotted key (``server.port``) in nested config data.

    A flat key spelled with dots is honored too.
    """
    if key in data:
        return data[key]
    node: Any = data
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node
