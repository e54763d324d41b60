"""Main mapping-to-data-set bridge."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from typebridge.catalog.flatten import DatasetFlattener
from typebridge.catalog.reachability import ReachabilityResolver
from typebridge.catalog.registration import register_declaration
from typebridge.catalog.table import TypeCatalog
from typebridge.diagnostics.errors import DiagnosticReport, ErrorCodes
from typebridge.ir.datasets import DataSet
from typebridge.ir.declarations import (
    ArrayDecl,
    Declaration,
    OperatorParameter,
    PredefinedTypeDecl,
    StructDecl,
    TypeAliasDecl,
)
from typebridge.mapping.reader import MappingReader
from typebridge.models.config import BridgeConfig


@dataclass
class ScanSummary:
    """Number of declarations registered per kind."""

    predefined: int = 0
    arrays: int = 0
    structs: int = 0
    type_refs: int = 0

    def count(self, decl: Declaration) -> None:
        if isinstance(decl, PredefinedTypeDecl):
            self.predefined += 1
        elif isinstance(decl, ArrayDecl):
            self.arrays += 1
        elif isinstance(decl, StructDecl):
            self.structs += 1
        elif isinstance(decl, TypeAliasDecl):
            self.type_refs += 1


@dataclass
class BridgeResult:
    """Outcome of one bridge run."""

    datasets: list[DataSet]
    report: DiagnosticReport
    summary: ScanSummary = field(default_factory=ScanSummary)
    operators: list[str] = field(default_factory=list)


class BridgeError(Exception):
    """Raised when a strict run reported criticals or errors."""

    def __init__(self, result: BridgeResult) -> None:
        """Initialize with the run result.

        Args:
        ----
            result: The result containing the report.

        """
        self.result = result
        report = result.report

        parts = []
        if report.criticals:
            parts.append(f"{len(report.criticals)} critical(s)")
        if report.errors:
            parts.append(f"{len(report.errors)} error(s)")

        super().__init__(f"Type bridge failed: {', '.join(parts)}")


class TypeBridge:
    """Turn a model compiler's type dictionary into TRDP data sets.

    Runs the phases on a fresh catalog: registration of all declarations,
    reachability from the chosen operators' parameters, then flattening.

    Usage:
        bridge = TypeBridge(BridgeConfig())
        result = bridge.run(load_mapping(path), ["Pkg::Operator"])
    """

    def __init__(self, config: BridgeConfig | None = None) -> None:
        """Initialize the bridge.

        Args:
        ----
            config: Run configuration; defaults are used when omitted.

        """
        self.config = config or BridgeConfig()
        self.report = DiagnosticReport()
        self.catalog = TypeCatalog(config=self.config, report=self.report)
        self._resolver = ReachabilityResolver(self.catalog)

    def scan(self, declarations: Iterable[Declaration]) -> ScanSummary:
        """Register declarations in the given order.

        Args:
        ----
            declarations: Declaration records, as read from the dictionary.

        Returns:
        -------
            Counts of registered declarations.

        """
        summary = ScanSummary()
        for decl in declarations:
            if register_declaration(self.catalog, decl):
                summary.count(decl)

        self.report.add_info(
            ErrorCodes.I001_SCAN_SUMMARY,
            f"Found {summary.arrays} arrays, {summary.structs} structs, "
            f"{summary.type_refs} type instantiations",
            "model",
            **vars(summary),
        )
        return summary

    def require(self, type_id: int) -> bool:
        """Mark one type id as required."""
        return self._resolver.require(type_id)

    def require_parameters(
        self,
        operator_name: str,
        kind: str,
        parameters: Sequence[OperatorParameter],
    ) -> int:
        """Require the types of an operator's inputs or outputs.

        Args:
        ----
            operator_name: Operator path used in the summary message.
            kind: ``"input"`` or ``"output"``.
            parameters: The operator's parameters of that kind.

        Returns:
        -------
            Number of parameters that map onto data sets.

        """
        readable = [p for p in parameters if p.type_id is not None]
        required = sum(self.require(p.type_id) for p in readable if p.type_id is not None)

        if readable:
            message = (
                f"{operator_name} has {required:2d} DS-{kind}s out of {len(readable):2d}"
            )
            path = f"operator.{operator_name}.{kind}"
            if required > 0:
                self.report.add_info(
                    ErrorCodes.I002_OPERATOR_PARAMETERS,
                    message,
                    path,
                    required=required,
                    total=len(readable),
                )
            else:
                self.report.add_warning(
                    ErrorCodes.W003_NO_DATASET_PARAMETERS,
                    message,
                    path,
                    suggestion="Wrap scalar parameters in a struct or an array",
                )
        return required

    def require_operator(self, reader: MappingReader, operator_name: str) -> bool:
        """Resolve one operator and require its input and output types."""
        operator = reader.find_operator(operator_name)
        if operator is None:
            return False
        self.require_parameters(
            operator_name, "input", reader.operator_parameters(operator, "input")
        )
        self.require_parameters(
            operator_name, "output", reader.operator_parameters(operator, "output")
        )
        return True

    def resolve(self, reader: MappingReader, operator_names: Sequence[str] = ()) -> list[str]:
        """Require the parameters of the given operators or the configured root.

        Returns
        -------
            The operator names that were looked up.

        """
        names = list(operator_names)
        if not names:
            root_name = reader.root_operator_name()
            if root_name is None:
                self.report.add_error(
                    ErrorCodes.E008_NO_OPERATOR,
                    "Operator not defined",
                    "config.root",
                    suggestion="Name the operator on the command line",
                )
                return []
            names = [root_name]

        for name in names:
            self.require_operator(reader, name)
        return names

    def flatten(self) -> list[DataSet]:
        """Build the data-set list honouring ``config.required_only``."""
        if not self.config.required_only:
            self.report.add_info(
                ErrorCodes.I004_DUMP_ALL,
                "Dumping all known data-sets",
                "model",
            )
        return DatasetFlattener(self.catalog).flatten(self.config.required_only)

    def run(
        self,
        document: ET.Element,
        operator_names: Sequence[str] = (),
    ) -> BridgeResult:
        """Run all phases on a parsed mapping document.

        Args:
        ----
            document: Root element of mapping.xml.
            operator_names: Operators to export; the configured root when empty.

        Returns:
        -------
            BridgeResult with data sets and diagnostics.

        """
        reader = MappingReader(document, self.report, self.config)
        summary = self.scan(reader.declarations())
        operators = self.resolve(reader, operator_names)
        datasets = self.flatten()

        if not datasets:
            self.report.add_warning(
                ErrorCodes.W004_NOTHING_TO_EXPORT,
                "No data-sets to export",
                "model",
            )

        return BridgeResult(
            datasets=datasets,
            report=self.report,
            summary=summary,
            operators=operators,
        )

    def run_and_raise(
        self,
        document: ET.Element,
        operator_names: Sequence[str] = (),
        strict: bool = False,
    ) -> BridgeResult:
        """Run and raise if a strict run reported criticals or errors.

        Raises
        ------
            BridgeError: If strict and the report is not clean.

        """
        result = self.run(document, operator_names)
        if strict and not result.report.is_clean:
            raise BridgeError(result)
        return result
