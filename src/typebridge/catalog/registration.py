"""Registration rules turning declarations into catalog entries."""

from __future__ import annotations

from typebridge.catalog.naming import propagate_name
from typebridge.catalog.table import TypeCatalog
from typebridge.diagnostics.errors import ErrorCodes
from typebridge.ir.declarations import (
    ArrayDecl,
    Declaration,
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
)


def _ids_in_range(catalog: TypeCatalog, path: str, ids: dict[str, int]) -> bool:
    """Check every id argument of a declaration, stopping at the first bad one."""
    for attribute, type_id in ids.items():
        if not catalog.in_range(type_id):
            catalog.report.add_error(
                ErrorCodes.E001_ID_OUT_OF_RANGE,
                f"{path}.{attribute} = {type_id} is off scope "
                f"(1..{catalog.max_type_ids - 1})",
                path,
                type_id=type_id,
                attribute=attribute,
            )
            return False
    return True


def _synthesized(catalog: TypeCatalog, type_id: int) -> tuple[str, int]:
    numeric = catalog.config.synthesized_id(type_id)
    return str(numeric), numeric


def register_predefined(catalog: TypeCatalog, decl: PredefinedTypeDecl) -> bool:
    """Register a predefined scalar.

    The name is matched case-insensitively; ``size`` degrades to the
    configured fallback scalar.

    Returns
    -------
        True if the scalar was registered.

    """
    path = f"predefType.{decl.type_id}"
    if not _ids_in_range(catalog, path, {"id": decl.type_id}):
        return False

    key = (decl.name or "").lower()
    if key not in PREDEFINED_TYPES:
        catalog.report.add_critical(
            ErrorCodes.C003_UNKNOWN_PREDEFINED_TYPE,
            f'Unknown predefined type definition ("{decl.name}")',
            path,
            type_id=decl.type_id,
            suggestion=f"Known types: {', '.join(PREDEFINED_TYPES)}",
        )
        return False

    data_type = PREDEFINED_TYPES[key] or catalog.config.size_type
    return catalog.register(
        ScalarType(
            type_id=decl.type_id,
            export_id=catalog.config.scalar_export_id(data_type),
            export_id_numeric=data_type.value,
            data_type=data_type,
        ),
        path,
    )


def register_array(catalog: TypeCatalog, decl: ArrayDecl) -> bool:
    """Register one array dimension over its base type."""
    path = f"array.{decl.type_id}"
    if not _ids_in_range(catalog, path, {"id": decl.type_id, "baseType": decl.base_type_id}):
        return False

    max_length = catalog.config.max_array_length
    if not 1 <= decl.length <= max_length:
        catalog.report.add_warning(
            ErrorCodes.W002_INVALID_ATTRIBUTE,
            f'array.size = "{decl.length}" is invalid (1..{max_length})',
            path,
            type_id=decl.type_id,
        )
        return False

    export_id, numeric = _synthesized(catalog, decl.type_id)
    return catalog.register(
        ArrayType(
            type_id=decl.type_id,
            export_id=export_id,
            export_id_numeric=numeric,
            element_ref=decl.base_type_id,
            length=decl.length,
        ),
        path,
    )


def register_struct(catalog: TypeCatalog, decl: StructDecl) -> bool:
    """Register a struct root and its fields.

    Fields must sit at the ids directly following the root, in declaration
    order. The whole declaration is rejected if any id is off scope, out of
    place or already taken, so no struct is ever registered partially.

    Returns
    -------
        True if the struct and all of its fields were registered.

    """
    path = f"struct.{decl.type_id}"
    if not _ids_in_range(catalog, path, {"id": decl.type_id}):
        return False

    for index, field_decl in enumerate(decl.fields):
        field_path = f"{path}.field.{index}"
        if not _ids_in_range(
            catalog,
            field_path,
            {"id": field_decl.type_id, "type": field_decl.field_type_id},
        ):
            return False

        expected = decl.type_id + 1 + index
        if field_decl.type_id != expected:
            catalog.report.add_error(
                ErrorCodes.E003_NON_CONTIGUOUS_FIELDS,
                f"Field '{field_decl.name}' has id {field_decl.type_id}, expected {expected}",
                field_path,
                type_id=field_decl.type_id,
                suggestion="Struct fields must follow the struct id without gaps",
            )
            return False

    for type_id in range(decl.type_id, decl.type_id + 1 + len(decl.fields)):
        if catalog.is_defined(type_id):
            catalog.report.add_critical(
                ErrorCodes.C001_REDEFINED_ID,
                f"Model id {type_id} not defined again",
                path,
                type_id=type_id,
            )
            return False

    for index, field_decl in enumerate(decl.fields):
        export_id, numeric = _synthesized(catalog, field_decl.type_id)
        catalog.register(
            ReferenceType(
                type_id=field_decl.type_id,
                export_id=export_id,
                export_id_numeric=numeric,
                target=field_decl.field_type_id,
                ref_name=field_decl.name,
            ),
            f"{path}.field.{index}",
        )

    export_id, numeric = _synthesized(catalog, decl.type_id)
    return catalog.register(
        StructRoot(
            type_id=decl.type_id,
            export_id=export_id,
            export_id_numeric=numeric,
            field_count=len(decl.fields),
        ),
        path,
    )


def register_alias(catalog: TypeCatalog, decl: TypeAliasDecl) -> bool:
    """Register a named type and pass its name on to the aliased struct.

    Returns
    -------
        True if the alias entry was registered (whether or not a name was
        propagated).

    """
    path = f"type.{decl.type_id}"
    if not _ids_in_range(catalog, path, {"id": decl.type_id, "type": decl.aliased_type_id}):
        return False

    export_id, numeric = _synthesized(catalog, decl.type_id)
    registered = catalog.register(
        ReferenceType(
            type_id=decl.type_id,
            export_id=export_id,
            export_id_numeric=numeric,
            target=decl.aliased_type_id,
            ref_name=decl.name,
        ),
        path,
    )
    if registered:
        propagate_name(
            catalog,
            decl.aliased_type_id,
            decl.name,
            decl.package_prefix(catalog.config.name_separator),
        )
    return registered


def register_declaration(catalog: TypeCatalog, decl: Declaration) -> bool:
    """Dispatch a declaration to its registration rule."""
    if isinstance(decl, PredefinedTypeDecl):
        return register_predefined(catalog, decl)
    if isinstance(decl, ArrayDecl):
        return register_array(catalog, decl)
    if isinstance(decl, StructDecl):
        return register_struct(catalog, decl)
    if isinstance(decl, TypeAliasDecl):
        return register_alias(catalog, decl)
    raise TypeError(f"Unsupported declaration: {type(decl).__name__}")
