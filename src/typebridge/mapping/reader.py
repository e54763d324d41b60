"""Read declarations and operators from the model compiler's mapping.xml.

Layout of the relevant parts::

    <mapping>
      <config><option name="root" value="Pkg::Operator"/></config>
      <model>
        <predefType id="%id" name="int32"/>
        <array id="%id" baseType="%id" size="n"/>
        <struct id="%id"><field id="%id" name="x" type="%id"/></struct>
        <type id="%id" name="Name" type="%id"/>
        <package name="Pkg">
          <type .../>
          <package ...>...</package>
          <operator name="Operator">
            <input name="i" type="%id"/>
            <output name="o" type="%id"/>
          </operator>
        </package>
      </model>
    </mapping>

``predefType``, ``array`` and ``struct`` only appear directly below
``<model>``; ``type`` appears below ``<model>`` and inside packages.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Iterator

from typebridge.diagnostics.errors import DiagnosticReport, ErrorCodes
from typebridge.ir.declarations import (
    ArrayDecl,
    Declaration,
    FieldDecl,
    OperatorParameter,
    PredefinedTypeDecl,
    StructDecl,
    TypeAliasDecl,
)
from typebridge.models.config import BridgeConfig

PACKAGE_DELIMITER = "::"
MAX_ROOT_NAME_LENGTH = 0x1000

_INTEGER = re.compile(r"[+-]?\d+")


def attribute_to_int(
    element: ET.Element,
    attribute: str,
    minimum: int,
    maximum: int,
    report: DiagnosticReport,
) -> int | None:
    """Parse a decimal integer attribute within [minimum, maximum].

    Missing and malformed values are reported as warnings.

    Returns
    -------
        The value, or None if missing or invalid.

    """
    raw = element.get(attribute)
    path = f"{element.tag}.{attribute}"
    if not raw:
        report.add_warning(
            ErrorCodes.W001_MISSING_ATTRIBUTE,
            f"{path} not set",
            path,
        )
        return None

    text = raw.strip()
    if _INTEGER.fullmatch(text):
        value = int(text)
        if minimum <= value <= maximum:
            return value

    report.add_warning(
        ErrorCodes.W002_INVALID_ATTRIBUTE,
        f'{path} = "{raw}" is invalid',
        path,
        suggestion=f"Expected an integer in {minimum}..{maximum}",
    )
    return None


class MappingReader:
    """Walk a parsed mapping document.

    Usage:
        reader = MappingReader(load_mapping(path), report, config)
        for decl in reader.declarations():
            ...
        operator = reader.find_operator(reader.root_operator_name())
    """

    def __init__(
        self,
        document: ET.Element,
        report: DiagnosticReport | None = None,
        config: BridgeConfig | None = None,
    ) -> None:
        """Initialize the reader.

        Args:
        ----
            document: Root element of mapping.xml (``<mapping>`` or a wrapper).
            report: Report receiving attribute and lookup diagnostics.
            config: Run configuration (id bound, array length bound).

        """
        self.report = report if report is not None else DiagnosticReport()
        self.config = config or BridgeConfig()

        mapping = document if document.tag == "mapping" else document.find("mapping")
        self._mapping = mapping if mapping is not None else ET.Element("mapping")
        model = self._mapping.find("model")
        self._model = model if model is not None else ET.Element("model")

    @property
    def model(self) -> ET.Element:
        return self._model

    def _id(self, element: ET.Element, attribute: str) -> int | None:
        return attribute_to_int(
            element, attribute, 1, self.config.max_type_ids - 1, self.report
        )

    # ------------------------------------------------------------------
    # Type declarations
    # ------------------------------------------------------------------

    def declarations(self) -> Iterator[Declaration]:
        """Yield every readable declaration.

        Order: predefined types, arrays, structs and model-level named
        types, then named types of all packages (depth first).
        """
        yield from self.predefined_types()
        yield from self.arrays()
        yield from self.structs()
        yield from self.named_types(self._model, ())
        yield from self.package_types(self._model, ())

    def predefined_types(self) -> Iterator[PredefinedTypeDecl]:
        for node in self._model.findall("predefType"):
            type_id = self._id(node, "id")
            if type_id is not None:
                yield PredefinedTypeDecl(type_id=type_id, name=node.get("name"))

    def arrays(self) -> Iterator[ArrayDecl]:
        for node in self._model.findall("array"):
            type_id = self._id(node, "id")
            if type_id is None:
                continue
            base_type_id = self._id(node, "baseType")
            if base_type_id is None:
                continue
            length = attribute_to_int(
                node, "size", 1, self.config.max_array_length, self.report
            )
            if length is None:
                continue
            yield ArrayDecl(type_id=type_id, base_type_id=base_type_id, length=length)

    def structs(self) -> Iterator[StructDecl]:
        for node in self._model.findall("struct"):
            type_id = self._id(node, "id")
            if type_id is None:
                continue

            fields: list[FieldDecl] = []
            for field_node in node.findall("field"):
                field_id = self._id(field_node, "id")
                if field_id is None:
                    break
                field_type_id = self._id(field_node, "type")
                if field_type_id is None:
                    break
                fields.append(
                    FieldDecl(
                        type_id=field_id,
                        name=field_node.get("name"),
                        field_type_id=field_type_id,
                    )
                )
            else:
                yield StructDecl(type_id=type_id, fields=tuple(fields))

    def named_types(
        self,
        parent: ET.Element,
        package_path: tuple[str, ...],
    ) -> Iterator[TypeAliasDecl]:
        """Yield the ``<type>`` children of one element."""
        for node in parent.findall("type"):
            type_id = self._id(node, "id")
            if type_id is None:
                continue
            aliased_type_id = self._id(node, "type")
            if aliased_type_id is None:
                continue
            yield TypeAliasDecl(
                type_id=type_id,
                aliased_type_id=aliased_type_id,
                name=node.get("name"),
                package_path=package_path,
            )

    def package_types(
        self,
        parent: ET.Element,
        package_path: tuple[str, ...],
    ) -> Iterator[TypeAliasDecl]:
        """Yield the named types of every package below parent."""
        for package in parent.findall("package"):
            name = package.get("name")
            path = (*package_path, name) if name else package_path
            yield from self.named_types(package, path)
            yield from self.package_types(package, path)

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def root_operator_name(self) -> str | None:
        """Get the root operator configured for code generation."""
        for option in self._mapping.findall("config/option"):
            if option.get("name") != "root":
                continue
            value = option.get("value")
            if value and len(value) < MAX_ROOT_NAME_LENGTH:
                self.report.add_info(
                    ErrorCodes.I003_OPERATOR_LOCATED,
                    f"Identified root name: {value}",
                    "config.root",
                )
                return value
        return None

    def find_operator(self, operator_path: str) -> ET.Element | None:
        """Locate an operator by its (optionally package-qualified) name.

        Every component before the last names a direct child package; the
        operator itself may sit anywhere below the last package.

        Args:
        ----
            operator_path: e.g. ``"Pkg::Sub::Operator"`` or ``"Operator"``.

        Returns:
        -------
            The ``<operator>`` element, or None if missing or ambiguous.

        """
        path = f"operator.{operator_path}"
        *packages, operator_name = operator_path.split(PACKAGE_DELIMITER)

        scope: ET.Element | None = self._model
        for package_name in packages:
            scope = next(
                (p for p in scope.findall("package") if p.get("name") == package_name),
                None,
            )
            if scope is None:
                break

        matches = (
            [op for op in scope.iter("operator") if op.get("name") == operator_name]
            if scope is not None
            else []
        )

        if not matches:
            self.report.add_error(
                ErrorCodes.E006_OPERATOR_NOT_FOUND,
                f'Operator "{operator_path}" not found',
                path,
            )
            return None

        if len(matches) > 1:
            self.report.add_error(
                ErrorCodes.E007_AMBIGUOUS_OPERATOR,
                f'Encountered multiple matching operators for "{operator_path}"',
                path,
                suggestion="Add package path",
                count=len(matches),
            )
            return None

        operator = matches[0]
        self.report.add_info(
            ErrorCodes.I003_OPERATOR_LOCATED,
            f'"{"<<".join(self._trail(operator))}"',
            path,
        )
        return operator

    def _trail(self, operator: ET.Element) -> list[str]:
        """Operator name followed by its enclosing package names, innermost first."""
        parents = {child: parent for parent in self._model.iter() for child in parent}
        trail = [operator.get("name") or ""]
        node = parents.get(operator)
        while node is not None and node is not self._model:
            trail.append(node.get("name") or "")
            node = parents.get(node)
        return trail

    def operator_parameters(self, operator: ET.Element, kind: str) -> list[OperatorParameter]:
        """Get the ``input`` or ``output`` parameters of an operator."""
        return [
            OperatorParameter(
                name=node.get("name"),
                type_id=attribute_to_int(
                    node, "type", 0, self.config.max_type_ids - 1, self.report
                ),
            )
            for node in operator.findall(kind)
        ]
