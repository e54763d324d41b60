"""Type catalog and resolution engine.

Phases, run strictly in this order on one catalog:
    1. Registration of declarations (registration rules, name propagation)
    2. Reachability from the entry point's parameter types
    3. Flattening into data sets
"""

from typebridge.catalog.flatten import DatasetFlattener
from typebridge.catalog.naming import compose_name, propagate_name
from typebridge.catalog.reachability import ReachabilityResolver
from typebridge.catalog.registration import (
    register_alias,
    register_array,
    register_declaration,
    register_predefined,
    register_struct,
)
from typebridge.catalog.table import TypeCatalog

__all__ = [
    "DatasetFlattener",
    "ReachabilityResolver",
    "TypeCatalog",
    "compose_name",
    "propagate_name",
    "register_alias",
    "register_array",
    "register_declaration",
    "register_predefined",
    "register_struct",
]
