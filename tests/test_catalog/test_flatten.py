"""Tests for flattening the catalog into data sets."""

from __future__ import annotations

from collections.abc import Callable

import pytest
from typebridge.catalog import DatasetFlattener, ReachabilityResolver, TypeCatalog
from typebridge.ir import (
    ArrayDecl,
    DataSet,
    Declaration,
    Element,
    FieldDecl,
    PredefinedTypeDecl,
    StructDecl,
    TypeAliasDecl,
)

CatalogFactory = Callable[..., TypeCatalog]

INT32 = PredefinedTypeDecl(type_id=1, name="int32")


def single_field(type_id: int, field_type_id: int, name: str = "x") -> StructDecl:
    return StructDecl(
        type_id=type_id,
        fields=(FieldDecl(type_id=type_id + 1, name=name, field_type_id=field_type_id),),
    )


def required(catalog: TypeCatalog, *type_ids: int) -> TypeCatalog:
    resolver = ReachabilityResolver(catalog)
    for type_id in type_ids:
        resolver.require(type_id)
    return catalog


class TestFlatten:
    """Tests for data-set selection and order."""

    def test_example(self, example_catalog: TypeCatalog) -> None:
        """Should export the required struct with its scalar field."""
        datasets = DatasetFlattener(required(example_catalog, 2)).flatten(required_only=True)

        assert datasets == [
            DataSet(export_id="1002", name=None, elements=(Element(type_ref="INT32", name="x"),))
        ]
        assert example_catalog.report.is_clean

    def test_nothing_required(self, example_catalog: TypeCatalog) -> None:
        """Should export nothing before reachability."""
        assert DatasetFlattener(example_catalog).flatten(required_only=True) == []

    def test_all_includes_unreferenced_empty_struct(
        self,
        build_catalog: CatalogFactory,
        example_declarations: list[Declaration],
    ) -> None:
        """Should export every struct root when not restricted."""
        catalog = required(build_catalog(*example_declarations, StructDecl(type_id=10)), 2)
        flattener = DatasetFlattener(catalog)

        everything = flattener.flatten(required_only=False)
        only_required = flattener.flatten(required_only=True)

        assert [d.export_id for d in everything] == ["1002", "1010"]
        assert everything[1].elements == ()
        assert [d.export_id for d in only_required] == ["1002"]
        assert set(only_required) <= set(everything)

    def test_ascending_order(self, build_catalog: CatalogFactory) -> None:
        """Should emit data sets in ascending id order."""
        catalog = build_catalog(INT32, single_field(20, 1), single_field(4, 1), single_field(8, 1))
        datasets = DatasetFlattener(catalog).flatten(required_only=False)
        assert [d.export_id for d in datasets] == ["1004", "1008", "1020"]

    def test_elements_follow_field_ids(self, build_catalog: CatalogFactory) -> None:
        """Should emit one element per field in id order."""
        decl = StructDecl(
            type_id=2,
            fields=tuple(
                FieldDecl(type_id=3 + i, name=name, field_type_id=1)
                for i, name in enumerate(["a", "b", "c"])
            ),
        )
        catalog = build_catalog(INT32, decl)
        (dataset,) = DatasetFlattener(catalog).flatten(required_only=False)
        assert [e.name for e in dataset.elements] == ["a", "b", "c"]
        assert len(dataset.elements) == catalog.get(2).size  # type: ignore[union-attr]

    def test_propagated_name(self, build_catalog: CatalogFactory) -> None:
        """Should carry the alias name onto the data set."""
        catalog = build_catalog(
            INT32,
            single_field(2, 1),
            TypeAliasDecl(type_id=4, aliased_type_id=2, name="Point", package_path=("Geo",)),
        )
        (dataset,) = DatasetFlattener(required(catalog, 4)).flatten()
        assert dataset.name == "Geo_Point"

    def test_numeric_type_ids(
        self,
        build_catalog: CatalogFactory,
        example_declarations: list[Declaration],
    ) -> None:
        """Should emit TRDP numbers for scalars when configured."""
        catalog = build_catalog(*example_declarations, numeric_type_ids=True)
        (dataset,) = DatasetFlattener(catalog).flatten(required_only=False)
        assert dataset.elements[0].type_ref == "6"


class TestElements:
    """Tests for resolving field types."""

    def test_nested_struct(self, build_catalog: CatalogFactory) -> None:
        """Should reference nested structs by their data-set id."""
        catalog = build_catalog(
            INT32,
            single_field(2, 1, "x"),
            single_field(10, 2, "inner"),
        )
        datasets = DatasetFlattener(required(catalog, 10)).flatten()

        assert [d.export_id for d in datasets] == ["1002", "1010"]
        assert datasets[1].elements == (Element(type_ref="1002", name="inner"),)

    def test_array_field(self, build_catalog: CatalogFactory) -> None:
        """Should resolve an array field to its element type and length."""
        catalog = build_catalog(
            INT32,
            ArrayDecl(type_id=5, base_type_id=1, length=16),
            single_field(2, 5, "samples"),
        )
        (dataset,) = DatasetFlattener(catalog).flatten(required_only=False)
        assert dataset.elements == (Element(type_ref="INT32", name="samples", array_size=16),)

    def test_array_through_alias(self, build_catalog: CatalogFactory) -> None:
        """Should follow aliases before and after the array."""
        catalog = build_catalog(
            INT32,
            TypeAliasDecl(type_id=6, aliased_type_id=1, name="Speed"),
            ArrayDecl(type_id=5, base_type_id=6, length=3),
            TypeAliasDecl(type_id=7, aliased_type_id=5, name="Speeds"),
            single_field(2, 7),
        )
        (dataset,) = DatasetFlattener(catalog).flatten(required_only=False)
        assert dataset.elements[0] == Element(type_ref="INT32", name="x", array_size=3)

    def test_array_of_arrays(self, build_catalog: CatalogFactory) -> None:
        """Should keep the outer length and report the inner array once."""
        catalog = build_catalog(
            INT32,
            ArrayDecl(type_id=6, base_type_id=1, length=4),
            ArrayDecl(type_id=5, base_type_id=6, length=8),
            single_field(2, 5, "cells"),
            TypeAliasDecl(type_id=7, aliased_type_id=2, name="Grid"),
        )
        (dataset,) = DatasetFlattener(catalog).flatten(required_only=False)

        assert dataset.elements == (Element(type_ref="INT32", name="cells", array_size=8),)
        assert catalog.report.codes() == ["E002"]
        issue = catalog.report.issues[0]
        assert "Array of array is not mappable in TRDP" in issue.message
        assert "(DS=1002) Grid->cells[8][4]" in issue.message

    def test_undefined_type(self, build_catalog: CatalogFactory) -> None:
        """Should fall back to the synthesized id of a missing type."""
        catalog = build_catalog(single_field(2, 7))
        (dataset,) = DatasetFlattener(catalog).flatten(required_only=False)
        assert dataset.elements[0].type_ref == "1007"
        assert catalog.report.codes() == ["E004"]

    def test_self_referencing_field(self, build_catalog: CatalogFactory) -> None:
        """Should stop at a field typed as itself."""
        catalog = build_catalog(single_field(2, 3))
        (dataset,) = DatasetFlattener(catalog).flatten(required_only=False)
        assert dataset.elements[0].type_ref == "1003"
        assert catalog.report.codes() == ["C002"]

    def test_cycle(self, build_catalog: CatalogFactory) -> None:
        """Should stop at the repeated entry of a looping chain."""
        catalog = build_catalog(
            TypeAliasDecl(type_id=6, aliased_type_id=5),
            TypeAliasDecl(type_id=5, aliased_type_id=6),
            single_field(2, 5),
        )
        (dataset,) = DatasetFlattener(catalog).flatten(required_only=False)
        assert dataset.elements[0].type_ref == "1006"
        assert catalog.report.codes()[-1] == "C005"

    @pytest.mark.parametrize(("depth", "expected"), [(2, ["E005"]), (8, [])])
    def test_depth_limit(
        self, build_catalog: CatalogFactory, depth: int, expected: list[str]
    ) -> None:
        """Should stop chains longer than the configured limit."""
        catalog = build_catalog(
            INT32,
            TypeAliasDecl(type_id=7, aliased_type_id=1),
            TypeAliasDecl(type_id=6, aliased_type_id=7),
            TypeAliasDecl(type_id=5, aliased_type_id=6),
            single_field(2, 5),
            max_reference_depth=depth,
        )
        DatasetFlattener(catalog).flatten(required_only=False)
        assert catalog.report.codes() == expected
