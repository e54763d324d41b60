"""Name propagation from type aliases onto struct roots."""

from __future__ import annotations

from dataclasses import replace

from typebridge.catalog.table import TypeCatalog
from typebridge.diagnostics.errors import ErrorCodes
from typebridge.ir.types import StructRoot


def compose_name(
    prefix: str | None,
    local_name: str | None,
    separator: str = "_",
    max_length: int = 30,
) -> str | None:
    """Join a package prefix and a local name, keeping the rightmost characters.

    Data-set names are short, so over-long qualified names are cut from the
    front: the most specific part of the name survives.

    Args:
    ----
        prefix: Package prefix (None at model level).
        local_name: Name of the type.
        separator: Placed between prefix and local name.
        max_length: Maximum length of the result.

    Returns:
    -------
        The composed name, or None if neither part is given.

    Examples:
    --------
        >>> compose_name("Pkg_Sub_Sub2_Sub3", "MyVeryLongTypeName")
        'b_Sub2_Sub3_MyVeryLongTypeName'
        >>> compose_name(None, "Speed")
        'Speed'

    """
    if not prefix and not local_name:
        return None
    if prefix and local_name:
        name = f"{prefix}{separator}{local_name}"
    else:
        name = prefix or local_name or ""
    if len(name) > max_length:
        name = name[len(name) - max_length :]
    return name


def propagate_name(
    catalog: TypeCatalog,
    target_id: int,
    local_name: str | None,
    package_prefix: str | None = None,
) -> bool:
    """Name a struct root after an alias declaration.

    Only struct roots carry data-set names. The first name assigned wins;
    later attempts are reported and ignored.

    Args:
    ----
        catalog: The catalog holding the target.
        target_id: Id of the aliased type.
        local_name: Alias name.
        package_prefix: Joined package path of the alias (None at model level).

    Returns:
    -------
        True if the struct root received the name.

    """
    config = catalog.config
    path = f"type.{target_id}"
    entry = catalog.get(target_id)

    if entry is None:
        catalog.report.add_critical(
            ErrorCodes.C006_UNDEFINED_NAME_TARGET,
            f"Model id {target_id} not defined",
            path,
            type_id=target_id,
            name=local_name,
        )
        return False

    if not isinstance(entry, StructRoot):
        return False

    name = compose_name(
        package_prefix,
        local_name,
        separator=config.name_separator,
        max_length=config.max_name_length,
    )
    if entry.struct_name is not None:
        catalog.report.add_critical(
            ErrorCodes.C004_RENAME_CONFLICT,
            f'Model id {target_id} = "{entry.struct_name}" should be renamed "{name}"',
            path,
            type_id=target_id,
            suggestion="Only the first name of a data set is kept",
            existing=entry.struct_name,
            name=name,
        )
        return False

    if name is None:
        return False

    catalog.replace(replace(entry, struct_name=name))
    return True
