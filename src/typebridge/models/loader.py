"""Configuration and mapping file loading utilities."""

from __future__ import annotations

import sys
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

import yaml

from typebridge.models.config import BridgeConfig


class LoaderError(Exception):
    """Error during file loading."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        """Initialize LoaderError.

        Args:
        ----
            message: Error message describing what went wrong.
            path: Optional path to the file that caused the error.

        """
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML or JSON file and return the raw dictionary.

    Args:
    ----
        path: Path to the YAML or JSON file.

    Returns:
    -------
        Parsed dictionary from the file.

    Raises:
    ------
        LoaderError: If the file cannot be loaded or parsed.

    """
    if not path.exists():
        raise LoaderError(f"File not found: {path}", path)

    if not path.is_file():
        raise LoaderError(f"Not a file: {path}", path)

    suffix = path.suffix.lower()
    if suffix not in {".yaml", ".yml", ".json"}:
        raise LoaderError(
            f"Unsupported file extension: {suffix}. Use .yaml, .yml, or .json",
            path,
        )

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LoaderError(f"YAML parsing error: {e}", path) from e
    except OSError as e:
        raise LoaderError(f"File read error: {e}", path) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise LoaderError(
            f"Expected dictionary at root level, got {type(data).__name__}",
            path,
        )

    return data


def load_config(path: Path | None = None, **overrides: Any) -> BridgeConfig:
    """Load the bridge configuration.

    Args:
    ----
        path: Optional YAML/JSON configuration file.
        **overrides: Values taking precedence over the file (None values are ignored).

    Returns:
    -------
        Validated BridgeConfig.

    Raises:
    ------
        LoaderError: If the file cannot be loaded.
        pydantic.ValidationError: If the content is invalid.

    """
    data = load_yaml_file(path) if path is not None else {}
    data.update({key: value for key, value in overrides.items() if value is not None})
    return BridgeConfig.model_validate(data)


def load_mapping(path: Path | None = None) -> ET.Element:
    """Load the model compiler's mapping file.

    Args:
    ----
        path: Path to the ``mapping.xml`` file. None or ``-`` reads stdin.

    Returns:
    -------
        Root element of the parsed document.

    Raises:
    ------
        LoaderError: If the file cannot be read or is not valid XML.

    """
    if path is None or str(path) == "-":
        try:
            return ET.fromstring(sys.stdin.buffer.read())
        except (ET.ParseError, UnicodeError) as e:
            raise LoaderError(f"<stdin> does not contain valid XML: {e}") from e

    if not path.exists():
        raise LoaderError(f"File not found: {path}", path)

    if not path.is_file():
        raise LoaderError(f"Not a file: {path}", path)

    if path.suffix.lower() != ".xml":
        raise LoaderError(f"Unsupported file extension: {path.suffix}. Use .xml", path)

    try:
        return ET.parse(path).getroot()
    except ET.ParseError as e:
        raise LoaderError(f"Does not contain valid XML: {e}", path) from e
    except OSError as e:
        raise LoaderError(f"File read error: {e}", path) from e
