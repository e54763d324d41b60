"""Flatten the catalog into the ordered list of TRDP data sets."""

from __future__ import annotations

from typebridge.catalog.table import TypeCatalog
from typebridge.diagnostics.errors import ErrorCodes
from typebridge.ir.datasets import DataSet, Element
from typebridge.ir.types import ArrayType, StructRoot, TypeEntry


class DatasetFlattener:
    """Emit one data set per (required) struct root, in ascending id order.

    Each field's reference chain is followed down to a scalar or struct
    root. The first array on the chain gives the element's array size; TRDP
    has no multi-dimensional arrays, so any further array is reported and
    dropped.

    Usage:
        datasets = DatasetFlattener(catalog).flatten(required_only=True)
    """

    def __init__(self, catalog: TypeCatalog) -> None:
        """Initialize the flattener.

        Args:
        ----
            catalog: Registered catalog, after reachability when required_only is used.

        """
        self._catalog = catalog
        self._max_depth = catalog.config.max_reference_depth

    def flatten(self, required_only: bool = True) -> list[DataSet]:
        """Build the data-set list.

        Args:
        ----
            required_only: Only export struct roots that were required.

        Returns:
        -------
            Data sets in ascending model id order.

        """
        datasets: list[DataSet] = []
        fields_end = 0

        for entry in self._catalog:
            # field ids of an emitted struct are never roots themselves
            if entry.type_id <= fields_end:
                continue
            if not isinstance(entry, StructRoot):
                continue
            if required_only and self._catalog.ref_count(entry.type_id) <= 0:
                continue

            datasets.append(self._build_dataset(entry))
            fields_end = entry.type_id + entry.field_count

        return datasets

    def _build_dataset(self, root: StructRoot) -> DataSet:
        elements = tuple(self._resolve_element(root, field_id) for field_id in root.field_ids)
        return DataSet(export_id=root.export_id, name=root.name, elements=elements)

    def _resolve_element(self, root: StructRoot, field_id: int) -> Element:
        """Follow a field's reference chain to its ultimate type."""
        catalog = self._catalog
        report = catalog.report
        path = f"dataset.{root.export_id}.field.{field_id}"

        current: TypeEntry | None = catalog.get(field_id)
        if current is None:
            # registration never leaves a gap inside a struct
            raise KeyError(field_id)
        field_name = current.name

        first_array: ArrayType | None = None
        visited = {field_id}
        type_ref: str | None = None

        while current.reference_of is not None:
            target = current.reference_of

            if target in visited:
                if target == current.type_id:
                    report.add_critical(
                        ErrorCodes.C002_SELF_REFERENCE,
                        f"mid={target} is self-referencing",
                        path,
                        type_id=target,
                    )
                else:
                    report.add_critical(
                        ErrorCodes.C005_REFERENCE_CYCLE,
                        f"Reference chain of {root.name}->{field_name} loops at mid={target}",
                        path,
                        type_id=target,
                    )
                break

            if len(visited) > self._max_depth:
                report.add_error(
                    ErrorCodes.E005_REFERENCE_TOO_DEEP,
                    f"Reference chain of {root.name}->{field_name} exceeds "
                    f"{self._max_depth} levels",
                    path,
                    type_id=target,
                )
                break

            next_entry = catalog.get(target)
            if next_entry is None:
                report.add_error(
                    ErrorCodes.E004_UNDEFINED_TYPE,
                    f"Type mid={target} of {root.name}->{field_name} is not defined",
                    path,
                    type_id=target,
                )
                type_ref = str(catalog.config.synthesized_id(target))
                break

            visited.add(target)
            current = next_entry

            if isinstance(current, ArrayType):
                if first_array is None:
                    first_array = current
                else:
                    report.add_error(
                        ErrorCodes.E002_MULTI_DIMENSIONAL_ARRAY,
                        "Array of array is not mappable in TRDP. Output may be incomplete. "
                        f"Check (DS={root.export_id}) {root.name}->{field_name}"
                        f"[{first_array.length}][{current.length}]",
                        path,
                        type_id=current.type_id,
                        suggestion="Wrap the inner array in a struct",
                        dataset=root.export_id,
                        field=field_name,
                        sizes=(first_array.length, current.length),
                    )

        return Element(
            type_ref=type_ref if type_ref is not None else current.export_id,
            name=field_name,
            array_size=first_array.length if first_array is not None else None,
        )
