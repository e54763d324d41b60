"""Mapping to TRDP data-set transformation.

The transformation process:
    1. Read declarations from mapping.xml and register them in the catalog
    2. Locate the operators and require their parameter types
    3. Flatten the (required) structs into data sets

Example:
-------
    >>> from typebridge.models import load_mapping
    >>> from typebridge.transform import TypeBridge
    >>>
    >>> result = TypeBridge().run(load_mapping(Path("mapping.xml")))
    >>> print(f"Data sets: {len(result.datasets)}")
"""

from typebridge.transform.bridge import BridgeError, BridgeResult, ScanSummary, TypeBridge

__all__ = ["BridgeError", "BridgeResult", "ScanSummary", "TypeBridge"]
