"""Configuration models and file loaders.

Primary Entry Points:
    load_config(path, **overrides): Load and validate a YAML/JSON configuration
    load_mapping(path): Parse the model compiler's mapping.xml
    BridgeConfig: Settings of one bridge run
"""

from typebridge.models.config import BridgeConfig
from typebridge.models.loader import (
    LoaderError,
    load_config,
    load_mapping,
    load_yaml_file,
)

__all__ = [
    "BridgeConfig",
    "LoaderError",
    "load_config",
    "load_mapping",
    "load_yaml_file",
]
