"""Intermediate Representation (IR) models for the type bridge.

The IR sits between the model compiler's type dictionary and the TRDP
data-set list:

1. Declarations mirror the dictionary records as read
2. Type entries are the catalog's tagged representation of each model id
3. Data sets are the flattened, fully resolved output
"""

from typebridge.ir.datasets import DataSet, Element
from typebridge.ir.declarations import (
    ArrayDecl,
    Declaration,
    FieldDecl,
    OperatorParameter,
    PredefinedTypeDecl,
    StructDecl,
    TypeAliasDecl,
)
from typebridge.ir.types import (
    PREDEFINED_TYPES,
    ArrayType,
    ReferenceType,
    ScalarType,
    StructRoot,
    TrdpDataType,
    TypeEntry,
    TypeKind,
)

__all__ = [
    # Declarations
    "ArrayDecl",
    "Declaration",
    "FieldDecl",
    "OperatorParameter",
    "PredefinedTypeDecl",
    "StructDecl",
    "TypeAliasDecl",
    # Entries
    "PREDEFINED_TYPES",
    "ArrayType",
    "ReferenceType",
    "ScalarType",
    "StructRoot",
    "TrdpDataType",
    "TypeEntry",
    "TypeKind",
    # Output
    "DataSet",
    "Element",
]
