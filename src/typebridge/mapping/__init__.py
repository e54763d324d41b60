"""Reader for the model compiler's mapping.xml type dictionary."""

from typebridge.mapping.reader import (
    PACKAGE_DELIMITER,
    MappingReader,
    attribute_to_int,
)

__all__ = ["PACKAGE_DELIMITER", "MappingReader", "attribute_to_int"]
