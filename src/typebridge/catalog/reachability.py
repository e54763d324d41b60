"""Reachability of catalog entries from an entry point's parameters."""

from __future__ import annotations

from typebridge.catalog.table import TypeCatalog
from typebridge.diagnostics.errors import ErrorCodes
from typebridge.ir.types import StructRoot


class ReachabilityResolver:
    """Mark the entries used by an operator's parameter types as required.

    Every visited id has its reference counter incremented, even when the
    visit ends in an error. Recursion stops at self-references, at any id
    already on the current chain and at the configured maximum depth.

    Usage:
        resolver = ReachabilityResolver(catalog)
        if resolver.require(param_type_id):
            ...  # the parameter maps to at least one data set
    """

    def __init__(self, catalog: TypeCatalog) -> None:
        """Initialize the resolver.

        Args:
        ----
            catalog: Fully registered catalog.

        """
        self._catalog = catalog
        self._max_depth = catalog.config.max_reference_depth

    def require(self, type_id: int) -> bool:
        """Mark an id and everything it references as required.

        Args:
        ----
            type_id: Model id to require.

        Returns:
        -------
            True if the subtree holds at least one array or struct
            (i.e. something that ends up in a data set).

        """
        return self._require(type_id, set(), 0)

    def _require(self, type_id: int, active: set[int], depth: int) -> bool:
        catalog = self._catalog
        report = catalog.report
        path = f"require.{type_id}"

        if not catalog.in_range(type_id):
            report.add_error(
                ErrorCodes.E001_ID_OUT_OF_RANGE,
                f"mid={type_id} is out of scope",
                path,
                type_id=type_id,
            )
            return False

        catalog.mark_required(type_id)
        entry = catalog.get(type_id)
        if entry is None:
            report.add_error(
                ErrorCodes.E004_UNDEFINED_TYPE,
                f"mid={type_id} is referenced but never defined",
                path,
                type_id=type_id,
            )
            return False

        if depth >= self._max_depth:
            report.add_error(
                ErrorCodes.E005_REFERENCE_TOO_DEEP,
                f"Reference chain at mid={type_id} exceeds {self._max_depth} levels",
                path,
                type_id=type_id,
            )
            return False

        contribution = entry.size
        active.add(type_id)

        target = entry.reference_of
        if target is not None:
            if target == type_id:
                report.add_critical(
                    ErrorCodes.C002_SELF_REFERENCE,
                    f"mid={type_id} is self-referencing",
                    path,
                    type_id=type_id,
                )
            elif target in active:
                report.add_critical(
                    ErrorCodes.C005_REFERENCE_CYCLE,
                    f"mid={type_id} refers back to mid={target}",
                    path,
                    type_id=type_id,
                    target=target,
                )
            else:
                contribution += self._require(target, active, depth + 1)
        elif isinstance(entry, StructRoot):
            for field_id in entry.field_ids:
                contribution += self._require(field_id, active, depth + 1)

        active.discard(type_id)
        return contribution > 0
