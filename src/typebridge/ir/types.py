"""IR models for catalog type entries.

Every model id (mid) of the type dictionary maps to exactly one entry. The
entry kind replaces the shape-based encoding of the compiler output, where the
presence of a reference and a non-zero size told arrays, structs and aliases
apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TrdpDataType(Enum):
    """TRDP scalar data types.

    Values are the numeric type ids of the TRDP data-set description.
    """

    BOOL8 = 1
    CHAR8 = 2
    UTF16 = 3
    INT8 = 4
    INT16 = 5
    INT32 = 6
    INT64 = 7
    UINT8 = 8
    UINT16 = 9
    UINT32 = 10
    UINT64 = 11
    REAL32 = 12
    REAL64 = 13
    TIMEDATE32 = 14
    TIMEDATE48 = 15
    TIMEDATE64 = 16


# Predefined model type names (lower case) to TRDP scalars.
# "size" has no TRDP counterpart and maps to the configured fallback.
PREDEFINED_TYPES: dict[str, TrdpDataType | None] = {
    "bool": TrdpDataType.BOOL8,
    "char": TrdpDataType.CHAR8,
    "wchar": TrdpDataType.UTF16,
    "int8": TrdpDataType.INT8,
    "int16": TrdpDataType.INT16,
    "int32": TrdpDataType.INT32,
    "int64": TrdpDataType.INT64,
    "uint8": TrdpDataType.UINT8,
    "uint16": TrdpDataType.UINT16,
    "uint32": TrdpDataType.UINT32,
    "uint64": TrdpDataType.UINT64,
    "float32": TrdpDataType.REAL32,
    "float64": TrdpDataType.REAL64,
    "timedate32": TrdpDataType.TIMEDATE32,
    "timedate48": TrdpDataType.TIMEDATE48,
    "timedate64": TrdpDataType.TIMEDATE64,
    "size": None,
}

# Data-set ids are limited to 11 visible characters.
EXPORT_ID_MAX_LENGTH = 11


class TypeKind(Enum):
    """Kind of a catalog entry."""

    SCALAR = "scalar"
    ARRAY = "array"
    STRUCT = "struct"
    REFERENCE = "reference"


@dataclass(frozen=True)
class TypeEntry:
    """Common part of every catalog entry.

    Attributes
    ----------
        type_id: The model id.
        export_id: Data-set protocol identifier (scalar name or synthesized id).
        export_id_numeric: Integer form of export_id.

    """

    type_id: int
    export_id: str
    export_id_numeric: int

    kind = TypeKind.SCALAR

    @property
    def reference_of(self) -> int | None:
        """Id this entry refers to, None for scalars and struct roots."""
        return None

    @property
    def size(self) -> int:
        """Array length for arrays, field count for struct roots, else 0."""
        return 0

    @property
    def name(self) -> str | None:
        """Descriptive name, if any."""
        return None


@dataclass(frozen=True)
class ScalarType(TypeEntry):
    """A predefined scalar mapped onto a TRDP data type."""

    data_type: TrdpDataType

    kind = TypeKind.SCALAR


@dataclass(frozen=True)
class ArrayType(TypeEntry):
    """One array dimension over an element type."""

    element_ref: int
    length: int

    kind = TypeKind.ARRAY

    @property
    def reference_of(self) -> int | None:
        return self.element_ref

    @property
    def size(self) -> int:
        return self.length


@dataclass(frozen=True)
class StructRoot(TypeEntry):
    """Root of a struct; its fields follow at ids type_id+1 .. type_id+field_count."""

    field_count: int
    struct_name: str | None = None

    kind = TypeKind.STRUCT

    @property
    def size(self) -> int:
        return self.field_count

    @property
    def name(self) -> str | None:
        return self.struct_name

    @property
    def field_ids(self) -> range:
        """Ids of the fields of this struct."""
        return range(self.type_id + 1, self.type_id + 1 + self.field_count)


@dataclass(frozen=True)
class ReferenceType(TypeEntry):
    """A struct field or a type alias referring to another entry."""

    target: int
    ref_name: str | None = None

    kind = TypeKind.REFERENCE

    @property
    def reference_of(self) -> int | None:
        return self.target

    @property
    def name(self) -> str | None:
        return self.ref_name
