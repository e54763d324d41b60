"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from typebridge.catalog import TypeCatalog, register_declaration
from typebridge.ir import (
    Declaration,
    FieldDecl,
    PredefinedTypeDecl,
    StructDecl,
)
from typebridge.models import BridgeConfig

# One scalar, one struct with one field, required by the root operator.
MINIMAL_MAPPING = """\
<mapping>
  <config>
    <option name="root" value="Main"/>
  </config>
  <model>
    <predefType id="1" name="int32"/>
    <struct id="2">
      <field id="3" name="x" type="1"/>
    </struct>
    <package name="Pkg">
      <operator name="Main">
        <input name="in" type="2"/>
      </operator>
    </package>
  </model>
</mapping>
"""

# Nested structs, a named alias in a package, an array field, the size type
# and one struct the root operator never uses.
FULL_MAPPING = """\
<mapping>
  <config>
    <option name="target" value="C"/>
    <option name="root" value="Train::Control::Brake"/>
  </config>
  <model>
    <predefType id="1" name="int32"/>
    <predefType id="2" name="bool"/>
    <predefType id="3" name="float32"/>
    <predefType id="4" name="size"/>
    <array id="5" baseType="3" size="8"/>
    <struct id="10">
      <field id="11" name="pressure" type="3"/>
      <field id="12" name="released" type="2"/>
    </struct>
    <struct id="20">
      <field id="21" name="command" type="30"/>
      <field id="22" name="samples" type="5"/>
      <field id="23" name="count" type="4"/>
    </struct>
    <struct id="40">
      <field id="41" name="unused" type="1"/>
    </struct>
    <type id="30" name="BrakeState" type="10"/>
    <package name="Train">
      <package name="Control">
        <type id="31" name="BrakeCmd" type="20"/>
        <operator name="Brake">
          <input name="cmd" type="31"/>
          <input name="enabled" type="2"/>
          <output name="state" type="30"/>
        </operator>
      </package>
    </package>
  </model>
</mapping>
"""

# A struct field typed as an array of arrays.
NESTED_ARRAY_MAPPING = """\
<mapping>
  <config>
    <option name="root" value="Matrix"/>
  </config>
  <model>
    <predefType id="1" name="int32"/>
    <struct id="2">
      <field id="3" name="cells" type="5"/>
    </struct>
    <array id="5" baseType="6" size="8"/>
    <array id="6" baseType="1" size="4"/>
    <type id="7" name="Grid" type="2"/>
    <operator name="Matrix">
      <output name="grid" type="7"/>
    </operator>
  </model>
</mapping>
"""


@pytest.fixture
def minimal_mapping_xml() -> str:
    """Return the minimal mapping document."""
    return MINIMAL_MAPPING


@pytest.fixture
def full_mapping_xml() -> str:
    """Return the full mapping document."""
    return FULL_MAPPING


@pytest.fixture
def nested_array_mapping_xml() -> str:
    """Return a mapping with an array of arrays."""
    return NESTED_ARRAY_MAPPING


@pytest.fixture
def full_mapping(full_mapping_xml: str) -> ET.Element:
    """Return the parsed full mapping document."""
    return ET.fromstring(full_mapping_xml)


@pytest.fixture
def mapping_file(tmp_path: Path, full_mapping_xml: str) -> Path:
    """Write the full mapping document to a file."""
    path = tmp_path / "mapping.xml"
    path.write_text(full_mapping_xml, encoding="utf-8")
    return path


@pytest.fixture
def build_catalog() -> Callable[..., TypeCatalog]:
    """Return a factory registering declarations into a fresh catalog."""

    def _build(*declarations: Declaration, **config: Any) -> TypeCatalog:
        catalog = TypeCatalog(config=BridgeConfig(**config))
        for decl in declarations:
            register_declaration(catalog, decl)
        return catalog

    return _build


@pytest.fixture
def example_declarations() -> list[Declaration]:
    """Return one int32 scalar (id 1) and one struct (id 2) with field x (id 3)."""
    return [
        PredefinedTypeDecl(type_id=1, name="int32"),
        StructDecl(type_id=2, fields=(FieldDecl(type_id=3, name="x", field_type_id=1),)),
    ]


@pytest.fixture
def example_catalog(
    build_catalog: Callable[..., TypeCatalog],
    example_declarations: list[Declaration],
) -> TypeCatalog:
    """Return a catalog holding the example declarations."""
    return build_catalog(*example_declarations)
